"""Structural misuse diagnostics for step containers.

Misuse never blocks rendering. Each offending node is reported once, at the
time it attaches, to an injectable sink; the default sink writes to the
``multistep.diagnostics`` logger.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Protocol

CONTAINER_NODE_TYPE = "multi-step"
STEP_NODE_TYPE = "step"


class StructuralMisuse(StrEnum):
    """Kinds of structural misuse detected at attachment time."""

    STEP_OUTSIDE_CONTAINER = "step_outside_container"
    NON_STEP_CHILD = "non_step_child"


_MESSAGES: dict[StructuralMisuse, str] = {
    StructuralMisuse.STEP_OUTSIDE_CONTAINER: (
        'Invalid use of a "step" node ({node_id}). Steps must be immediate children of a "multi-step" container.'
    ),
    StructuralMisuse.NON_STEP_CHILD: (
        'Invalid node location ({node_id}). A "multi-step" container should only have "step" nodes as '
        'immediate children; wrap "{node_type}" inside a step to avoid undesired behaviour.'
    ),
}


class DiagnosticsSink(Protocol):
    """Receiver for misuse warnings."""

    def warn(self, code: StructuralMisuse, message: str, *, node_id: str) -> None: ...


class LoggingDiagnosticsSink:
    """Sink that forwards warnings to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("multistep.diagnostics")

    def warn(self, code: StructuralMisuse, message: str, *, node_id: str) -> None:
        self._logger.warning(message, extra={"misuse_code": str(code), "node_id": node_id})


class MisuseReporter:
    """Check node placement and report each offending node once."""

    def __init__(self, sink: DiagnosticsSink | None = None) -> None:
        self._sink: DiagnosticsSink = sink or LoggingDiagnosticsSink()
        self._reported: set[tuple[str, StructuralMisuse]] = set()

    def check_placement(self, node_id: str, node_type: str, parent_type: str | None) -> StructuralMisuse | None:
        """Validate a node's placement; return the misuse found, if any."""

        if node_type == STEP_NODE_TYPE and parent_type != CONTAINER_NODE_TYPE:
            code = StructuralMisuse.STEP_OUTSIDE_CONTAINER
        elif parent_type == CONTAINER_NODE_TYPE and node_type != STEP_NODE_TYPE:
            code = StructuralMisuse.NON_STEP_CHILD
        else:
            return None
        self._report(code, node_id=node_id, node_type=node_type)
        return code

    def _report(self, code: StructuralMisuse, *, node_id: str, node_type: str) -> None:
        marker = (node_id, code)
        if marker in self._reported:
            return
        self._reported.add(marker)
        self._sink.warn(code, _MESSAGES[code].format(node_id=node_id, node_type=node_type), node_id=node_id)

    def forget(self, node_id: str) -> None:
        """Allow ``node_id`` to be reported again once it is torn down."""

        self._reported = {marker for marker in self._reported if marker[0] != node_id}


__all__ = [
    "CONTAINER_NODE_TYPE",
    "DiagnosticsSink",
    "LoggingDiagnosticsSink",
    "MisuseReporter",
    "STEP_NODE_TYPE",
    "StructuralMisuse",
]
