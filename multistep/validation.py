"""Per-step blocking state derived from descendant field validation."""

from __future__ import annotations

import logging

from multistep.step_registry import StepRegistry

logger = logging.getLogger(__name__)

# Source name used when the step reports its own aggregate status
STEP_SOURCE = "__step__"


class ValidationGate:
    """Track which sources block each step and decide forward navigation.

    Statuses reported before a step mounts are retained and applied once the
    step registers via :meth:`sync`.
    """

    def __init__(self, registry: StepRegistry) -> None:
        self._registry = registry
        self._sources: dict[str, set[str]] = {}

    def set_blocking(self, key: str, is_blocking: bool, *, source: str | None = None) -> bool:
        """Record ``source``'s blocking status for ``key``.

        Returns ``True`` when the step's aggregate blocking flag changed.
        """

        source_name = source or STEP_SOURCE
        was_blocking = self.is_blocking(key)
        sources = self._sources.setdefault(key, set())
        if is_blocking:
            sources.add(source_name)
        else:
            sources.discard(source_name)
        self.sync(key)
        changed = was_blocking != self.is_blocking(key)
        if changed:
            logger.debug("Step '%s' blocking=%s (sources: %s)", key, bool(sources), sorted(sources))
        return changed

    def is_blocking(self, key: str) -> bool:
        return bool(self._sources.get(key))

    def blocking_sources(self, key: str) -> tuple[str, ...]:
        return tuple(sorted(self._sources.get(key, ())))

    def can_advance_from(self, key: str, allow_incomplete: bool) -> bool:
        return allow_incomplete or not self.is_blocking(key)

    def sync(self, key: str) -> None:
        """Copy the gate's state onto the registry record for ``key``."""

        step = self._registry.get(key)
        if step is None:
            return
        sources = self._sources.get(key, ())
        step.blocking = bool(sources)
        step.error_count = len(sources)

    def forget(self, key: str) -> None:
        self._sources.pop(key, None)


__all__ = ["STEP_SOURCE", "ValidationGate"]
