from __future__ import annotations

import logging

import pytest

from multistep.form import MultiStepForm
from multistep.logging_context import (
    FormLogContext,
    bound_context,
    current_context,
    install_record_factory,
)


def test_bound_context_restores_previous_binding() -> None:
    with bound_context("checkout", "payment") as outer:
        with bound_context("checkout", None):
            assert current_context() == FormLogContext(form_id="checkout", step="-")
        assert current_context() is outer

    assert current_context() == FormLogContext()


def test_blank_identifiers_fall_back_to_placeholder() -> None:
    with bound_context("   ", "") as context:
        assert context == FormLogContext(form_id="-", step="-")


def test_install_record_factory_wraps_only_once() -> None:
    install_record_factory()
    factory = logging.getLogRecordFactory()

    install_record_factory()

    assert logging.getLogRecordFactory() is factory


def test_records_carry_bound_identifiers(caplog: pytest.LogCaptureFixture) -> None:
    install_record_factory()
    logger = logging.getLogger("test.multistep.context")
    caplog.set_level(logging.INFO, logger=logger.name)

    with bound_context("signup", "contact"):
        logger.info("inside")
    logger.info("outside")

    inside, outside = caplog.records[-2:]
    assert (inside.form_id, inside.step) == ("signup", "contact")
    assert (outside.form_id, outside.step) == ("-", "-")


def test_form_binds_its_id_and_active_step(caplog: pytest.LogCaptureFixture) -> None:
    form = MultiStepForm(form_id="survey")
    form.on_step_mount("intro", 0)
    form.on_step_mount("details", 1)
    caplog.set_level(logging.INFO, logger="multistep")

    form.go_to("details")

    record = next(r for r in caplog.records if "Navigated" in r.getMessage())
    assert record.form_id == "survey"
    assert record.step == "intro"
    assert current_context() == FormLogContext()
