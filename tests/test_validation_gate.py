from __future__ import annotations

from multistep.step_registry import StepRegistry
from multistep.validation import ValidationGate


def _setup() -> tuple[StepRegistry, ValidationGate]:
    registry = StepRegistry()
    registry.register("a", 0)
    return registry, ValidationGate(registry)


def test_set_blocking_is_idempotent_and_reports_changes() -> None:
    registry, gate = _setup()

    assert gate.set_blocking("a", True) is True
    assert gate.set_blocking("a", True) is False
    assert registry.get("a").blocking is True  # type: ignore[union-attr]

    assert gate.set_blocking("a", False) is True
    assert gate.set_blocking("a", False) is False
    assert registry.get("a").blocking is False  # type: ignore[union-attr]


def test_step_blocks_while_any_field_blocks() -> None:
    registry, gate = _setup()

    gate.set_blocking("a", True, source="name")
    gate.set_blocking("a", True, source="email")
    step = registry.get("a")
    assert step is not None
    assert step.error_count == 2
    assert gate.blocking_sources("a") == ("email", "name")

    gate.set_blocking("a", False, source="name")
    assert step.blocking is True
    assert step.error_count == 1

    gate.set_blocking("a", False, source="email")
    assert step.blocking is False
    assert step.error_count == 0


def test_can_advance_from_respects_allow_incomplete() -> None:
    _, gate = _setup()
    assert gate.can_advance_from("a", allow_incomplete=False) is True

    gate.set_blocking("a", True)

    assert gate.can_advance_from("a", allow_incomplete=False) is False
    assert gate.can_advance_from("a", allow_incomplete=True) is True


def test_status_reported_before_mount_applies_on_sync() -> None:
    registry, gate = _setup()
    gate.set_blocking("later", True, source="field")

    step = registry.register("later", 1)
    assert step is not None and step.blocking is False
    gate.sync("later")

    assert step.blocking is True
    assert step.error_count == 1


def test_forget_drops_state() -> None:
    _, gate = _setup()
    gate.set_blocking("a", True)

    gate.forget("a")

    assert gate.is_blocking("a") is False
    assert gate.blocking_sources("a") == ()
