"""Registry for step records, membership, and canonical order."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Iterator

from multistep.types import Step, StepLabel, StepPosition

logger = logging.getLogger(__name__)


def _validate_declared_index(declared_index: object) -> int:
    if isinstance(declared_index, bool) or not isinstance(declared_index, int) or declared_index < 0:
        raise ValueError(f"declared_index must be a non-negative integer, got {declared_index!r}")
    return declared_index


class AttachedSteps:
    """Restartable view over attached steps in ordinal order.

    Each ``iter()`` walks the registry as it is at that moment, so the view can
    be held on to across mutations.
    """

    def __init__(self, registry: StepRegistry) -> None:
        self._registry = registry

    def __iter__(self) -> Iterator[Step]:
        for step in self._registry._sorted_records():
            if step.attached:
                yield step

    def __len__(self) -> int:
        return sum(1 for step in self._registry._steps.values() if step.attached)

    def __bool__(self) -> bool:
        return any(step.attached for step in self._registry._steps.values())

    def keys(self) -> tuple[str, ...]:
        return tuple(step.key for step in self)


class StepRegistry:
    """Hold step records and keep attached ordinals dense.

    Order is ``(declared_index, sequence)``: the declared index comes from the
    host tree, the sequence from first registration and only breaks ties.
    """

    def __init__(self) -> None:
        self._steps: dict[str, Step] = {}
        self._counter = itertools.count()

    def __contains__(self, key: object) -> bool:
        return key in self._steps

    def __len__(self) -> int:
        return len(self._steps)

    def get(self, key: str) -> Step | None:
        return self._steps.get(key)

    def is_attached(self, key: str | None) -> bool:
        step = self._steps.get(key) if key is not None else None
        return step is not None and step.attached

    def position(self, key: str) -> StepPosition | None:
        step = self._steps.get(key)
        return step.position if step is not None else None

    def register(self, key: str, declared_index: int, *, label: StepLabel | None = None) -> Step | None:
        """Insert ``key`` or re-attach its detached record.

        Returns ``None`` without touching anything when ``key`` is already
        attached.
        """

        declared_index = _validate_declared_index(declared_index)
        step = self._steps.get(key)
        if step is not None and step.attached:
            logger.debug("Step '%s' already attached; ignoring registration", key)
            return None
        if step is None:
            step = Step(key=key, declared_index=declared_index, sequence=next(self._counter), label=label)
            self._steps[key] = step
            logger.debug("Registered step '%s' at declared index %d", key, declared_index)
        else:
            step.attached = True
            step.declared_index = declared_index
            if label is not None:
                step.label = label
            logger.debug("Re-attached step '%s' at declared index %d", key, declared_index)
        self._reflow()
        return step

    def detach(self, key: str) -> bool:
        """Hide ``key`` while keeping its record, position and history."""

        step = self._steps.get(key)
        if step is None or not step.attached:
            return False
        step.attached = False
        self._reflow()
        logger.debug("Detached step '%s'", key)
        return True

    def remove(self, key: str) -> Step | None:
        """Permanently delete the record for ``key``."""

        step = self._steps.pop(key, None)
        if step is None:
            return None
        step.attached = False
        step.ordinal = None
        self._reflow()
        logger.debug("Removed step '%s'", key)
        return step

    def move(self, key: str, declared_index: int) -> bool:
        """Update the declared index of ``key`` after the host tree reordered."""

        declared_index = _validate_declared_index(declared_index)
        step = self._steps.get(key)
        if step is None or step.declared_index == declared_index:
            return False
        step.declared_index = declared_index
        self._reflow()
        return True

    def apply_declared_order(self, keys: Iterable[str]) -> bool:
        """Assign declared indices from the full ordered key list of the tree."""

        changed = False
        for index, key in enumerate(keys):
            step = self._steps.get(key)
            if step is None or step.declared_index == index:
                continue
            step.declared_index = index
            changed = True
        if changed:
            self._reflow()
        return changed

    def ordered_attached(self) -> AttachedSteps:
        return AttachedSteps(self)

    def first_attached(self) -> Step | None:
        return next(iter(self.ordered_attached()), None)

    def successor(self, key: str) -> Step | None:
        step = self._steps.get(key)
        if step is None or step.ordinal is None:
            return None
        return next((s for s in self.ordered_attached() if s.ordinal == step.ordinal + 1), None)

    def predecessor(self, key: str) -> Step | None:
        step = self._steps.get(key)
        if step is None or not step.ordinal:
            return None
        return next((s for s in self.ordered_attached() if s.ordinal == step.ordinal - 1), None)

    def nearest_attached_before(self, position: StepPosition) -> Step | None:
        """Return the last attached step ordered strictly before ``position``."""

        candidate: Step | None = None
        for step in self.ordered_attached():
            if step.position >= position:
                break
            candidate = step
        return candidate

    def _sorted_records(self) -> list[Step]:
        return sorted(self._steps.values(), key=lambda step: step.position)

    def _reflow(self) -> None:
        ordinal = 0
        for step in self._sorted_records():
            if step.attached:
                step.ordinal = ordinal
                ordinal += 1
            else:
                step.ordinal = None


__all__ = ["AttachedSteps", "StepRegistry"]
