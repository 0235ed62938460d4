"""Shared types for the multi-step navigation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


# Bilingual text pair, ``(de, en)``
LocalizedText = tuple[str, str]
StepLabel = str | LocalizedText

# Sort key used to order steps: ``(declared_index, sequence)``
StepPosition = tuple[int, int]


class TabStyle(StrEnum):
    """Enumerate the supported step indicator styles."""

    TAB = "tab"
    PROGRESS = "progress"


class NavigationPhase(StrEnum):
    """Lifecycle phase of the navigation state machine."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


@dataclass
class Step:
    """Registry record for a single step panel.

    ``declared_index`` and ``sequence`` survive conditional hiding so that a
    re-shown step lands back in its original slot. ``ordinal`` is ``None``
    while the step is detached.
    """

    key: str
    declared_index: int
    sequence: int
    label: StepLabel | None = None
    ordinal: int | None = None
    attached: bool = True
    blocking: bool = False
    error_count: int = 0
    visited: bool = False

    @property
    def position(self) -> StepPosition:
        return (self.declared_index, self.sequence)


@dataclass(frozen=True)
class StepView:
    """Display-only projection of an attached step."""

    key: str
    label: str
    ordinal: int
    is_active: bool
    is_complete: bool
    is_blocked: bool
    is_visited: bool
    error_count: int = 0
    is_first: bool = False
    is_last: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "ordinal": self.ordinal,
            "isActive": self.is_active,
            "isComplete": self.is_complete,
            "isBlocked": self.is_blocked,
            "isVisited": self.is_visited,
            "errorCount": self.error_count,
            "isFirst": self.is_first,
            "isLast": self.is_last,
        }


@dataclass(frozen=True)
class ViewModel:
    """Read-only snapshot consumed by renderers to draw tabs and buttons."""

    steps: tuple[StepView, ...]
    tab_style: TabStyle
    hide_progress_labels: bool
    allow_incomplete: bool
    active_key: str | None = None
    can_go_next: bool = False
    can_go_previous: bool = False
    progress: float = 0.0
    keys: tuple[str, ...] = field(default=(), init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", tuple(step.key for step in self.steps))

    @property
    def active_step(self) -> StepView | None:
        return next((step for step in self.steps if step.is_active), None)

    def to_dict(self) -> dict[str, Any]:
        """Return a camelCase mapping for renderers outside Python."""

        return {
            "steps": [step.to_dict() for step in self.steps],
            "tabStyle": str(self.tab_style),
            "hideProgressLabels": self.hide_progress_labels,
            "allowIncomplete": self.allow_incomplete,
            "activeKey": self.active_key,
            "canGoNext": self.can_go_next,
            "canGoPrevious": self.can_go_previous,
            "progress": self.progress,
        }


__all__ = [
    "LocalizedText",
    "NavigationPhase",
    "Step",
    "StepLabel",
    "StepPosition",
    "StepView",
    "TabStyle",
    "ViewModel",
]
