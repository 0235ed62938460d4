from __future__ import annotations

import pytest

from multistep.config import MultiStepOptions
from multistep.form import MultiStepForm
from multistep.projector import humanize_key, project_view_model, resolve_label
from multistep.types import TabStyle


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("stepOne", "Step One"),
        ("step_two", "Step Two"),
        ("contact-details", "Contact Details"),
        ("review", "Review"),
        ("step3Final", "Step3 Final"),
    ],
)
def test_humanize_key(key: str, expected: str) -> None:
    assert humanize_key(key) == expected


def test_resolve_label_prefers_explicit_and_localized_labels() -> None:
    assert resolve_label("stepOne", None) == "Step One"
    assert resolve_label("stepOne", "Welcome") == "Welcome"
    assert resolve_label("stepOne", ("Willkommen", "Welcome"), lang="de") == "Willkommen"
    assert resolve_label("stepOne", ("Willkommen", "Welcome"), lang="en") == "Welcome"


def test_view_model_reflects_registry_and_navigation_state() -> None:
    form = MultiStepForm()
    form.on_step_mount("stepOne", 0)
    form.on_step_mount("stepTwo", 1, label=("Zwei", "Two"))
    form.on_step_mount("stepThree", 2)
    form.on_field_validation_changed("stepTwo", True, field="email")
    form.next()

    view = form.get_view_model(lang="de")

    assert [step.label for step in view.steps] == ["Step One", "Zwei", "Step Three"]
    first, second, third = view.steps
    assert first.is_complete is True and first.is_first is True
    assert second.is_active is True
    assert second.is_blocked is True and second.is_complete is False
    assert second.error_count == 1
    assert third.is_visited is False and third.is_last is True
    assert view.active_key == "stepTwo"
    assert view.can_go_next is False
    assert view.can_go_previous is True
    assert view.progress == pytest.approx(0.5)


def test_view_model_is_recomputed_from_current_state() -> None:
    form = MultiStepForm()
    form.on_step_mount("a", 0)
    form.on_step_mount("b", 1)
    before = form.get_view_model()

    form.on_step_unmount_conditional("b")
    after = form.get_view_model()

    assert before.keys == ("a", "b")
    assert after.keys == ("a",)
    assert after.steps[0].is_last is True
    assert after.progress == 1.0


def test_explicit_options_override_controller_snapshot() -> None:
    form = MultiStepForm()
    form.on_step_mount("a", 0)

    view = project_view_model(
        form.registry,
        form.controller,
        MultiStepOptions(tab_style=TabStyle.PROGRESS, hide_progress_labels=True),
    )

    assert view.tab_style is TabStyle.PROGRESS
    assert view.hide_progress_labels is True


def test_explicit_allow_incomplete_drives_can_go_next() -> None:
    form = MultiStepForm()
    form.on_step_mount("a", 0)
    form.on_step_mount("b", 1)
    form.on_field_validation_changed("a", True, field="name")

    lenient = project_view_model(form.registry, form.controller, MultiStepOptions(allow_incomplete=True))
    strict = project_view_model(form.registry, form.controller)

    assert lenient.allow_incomplete is True
    assert lenient.can_go_next is True
    assert strict.allow_incomplete is False
    assert strict.can_go_next is False


def test_empty_form_projects_empty_view_model() -> None:
    view = MultiStepForm().get_view_model()

    assert view.steps == ()
    assert view.active_key is None
    assert view.active_step is None
    assert view.progress == 0.0


def test_to_dict_uses_camel_case_keys() -> None:
    form = MultiStepForm({"tabStyle": "progress"})
    form.on_step_mount("a", 0)

    payload = form.get_view_model().to_dict()

    assert payload["tabStyle"] == "progress"
    assert payload["activeKey"] == "a"
    assert payload["steps"][0]["isActive"] is True
    assert payload["steps"][0]["label"] == "A"
