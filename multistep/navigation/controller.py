"""Active-step state machine for multi-step containers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Final

from opentelemetry import trace

from multistep.config import MultiStepOptions
from multistep.step_registry import StepRegistry
from multistep.types import NavigationPhase, Step, StepPosition
from multistep.validation import ValidationGate

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

# ``(current_key, target_key, delta)`` -> ``False`` to veto the transition
BeforeStepChange = Callable[[str, str, int], bool]

DIRECTION_NEXT: Final[str] = "next"
DIRECTION_PREVIOUS: Final[str] = "previous"
DIRECTION_GOTO: Final[str] = "goto"


class NavigationController:
    """Own the active step pointer and the transitions between steps.

    Failed transitions are silent: every navigation method returns ``False``
    and leaves the state untouched so the caller can surface a message.
    """

    def __init__(
        self,
        *,
        registry: StepRegistry,
        gate: ValidationGate,
        options: MultiStepOptions | None = None,
        before_step_change: BeforeStepChange | None = None,
    ) -> None:
        self._registry = registry
        self._gate = gate
        self._options = options or MultiStepOptions()
        self._before_step_change = before_step_change
        self._active_key: str | None = None
        self._active_position: StepPosition | None = None

    @property
    def options(self) -> MultiStepOptions:
        return self._options

    @options.setter
    def options(self, options: MultiStepOptions) -> None:
        self._options = options

    @property
    def phase(self) -> NavigationPhase:
        if self._active_key is None:
            return NavigationPhase.UNINITIALIZED
        return NavigationPhase.ACTIVE

    @property
    def active_key(self) -> str | None:
        return self._active_key

    @property
    def active_step(self) -> Step | None:
        if self._active_key is None:
            return None
        return self._registry.get(self._active_key)

    def can_go_next(self, *, allow_incomplete: bool | None = None) -> bool:
        current = self.active_step
        if current is None or self._registry.successor(current.key) is None:
            return False
        if allow_incomplete is None:
            allow_incomplete = self._options.allow_incomplete
        return self._gate.can_advance_from(current.key, allow_incomplete)

    def can_go_previous(self) -> bool:
        current = self.active_step
        return current is not None and self._registry.predecessor(current.key) is not None

    def next(self) -> bool:
        current = self.active_step
        if current is None:
            return False
        target = self._registry.successor(current.key)
        if target is None:
            logger.debug("Cannot go next: '%s' is the last step", current.key)
            return False
        if not self._gate.can_advance_from(current.key, self._options.allow_incomplete):
            self._log_blocked(current, target)
            return False
        return self._transition(current, target, direction=DIRECTION_NEXT)

    def previous(self) -> bool:
        current = self.active_step
        if current is None:
            return False
        target = self._registry.predecessor(current.key)
        if target is None:
            logger.debug("Cannot go previous: '%s' is the first step", current.key)
            return False
        return self._transition(current, target, direction=DIRECTION_PREVIOUS)

    def go_to(self, key: str) -> bool:
        """Jump to ``key``; forward jumps to unvisited steps are gated."""

        current = self.active_step
        target = self._registry.get(key)
        if current is None or target is None or not target.attached:
            logger.debug("Cannot go to '%s': step is not attached", key)
            return False
        if target.key == current.key:
            return True
        forward = target.position > current.position
        if (
            forward
            and not target.visited
            and not self._gate.can_advance_from(current.key, self._options.allow_incomplete)
        ):
            self._log_blocked(current, target)
            return False
        return self._transition(current, target, direction=DIRECTION_GOTO)

    def reconcile(self) -> str | None:
        """Re-point the active key after the registry's attached set changed."""

        if self._active_key is not None and self._registry.is_attached(self._active_key):
            self._active_position = self._registry.position(self._active_key)
            return self._active_key

        target: Step | None = None
        if self._active_key is not None and self._active_position is not None:
            target = self._registry.nearest_attached_before(self._active_position)
        if target is None:
            target = self._registry.first_attached()

        previous_key = self._active_key
        self._set_active(target)
        if previous_key is not None:
            logger.debug("Active step '%s' detached; re-targeted to %r", previous_key, self._active_key)
        return self._active_key

    def _transition(self, current: Step, target: Step, *, direction: str) -> bool:
        delta = (target.ordinal or 0) - (current.ordinal or 0)
        with tracer.start_as_current_span("multistep.navigate") as span:
            span.set_attribute("multistep.from", current.key)
            span.set_attribute("multistep.to", target.key)
            span.set_attribute("multistep.direction", direction)
            if self._before_step_change is not None and not self._before_step_change(current.key, target.key, delta):
                span.set_attribute("multistep.result", "vetoed")
                logger.info("Step change '%s' -> '%s' vetoed by hook", current.key, target.key)
                return False
            if delta > 1:
                for step in self._registry.ordered_attached():
                    if current.position < step.position < target.position:
                        step.visited = True
            self._set_active(target)
            span.set_attribute("multistep.result", "ok")
        logger.info("Navigated %s: '%s' -> '%s'", direction, current.key, target.key)
        return True

    def _set_active(self, step: Step | None) -> None:
        if step is None:
            self._active_key = None
            self._active_position = None
            return
        step.visited = True
        self._active_key = step.key
        self._active_position = step.position

    def _log_blocked(self, current: Step, target: Step) -> None:
        logger.info(
            "Navigation '%s' -> '%s' blocked by validation (%s)",
            current.key,
            target.key,
            ", ".join(self._gate.blocking_sources(current.key)) or "step",
        )


__all__ = [
    "BeforeStepChange",
    "DIRECTION_GOTO",
    "DIRECTION_NEXT",
    "DIRECTION_PREVIOUS",
    "NavigationController",
]
