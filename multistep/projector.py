"""Derive the read-only view model renderers use for tabs and buttons."""

from __future__ import annotations

import re

from multistep.config import MultiStepOptions
from multistep.navigation.controller import NavigationController
from multistep.step_registry import StepRegistry
from multistep.types import StepLabel, StepView, ViewModel

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|[_\-\s]+")


def humanize_key(key: str) -> str:
    """Turn a step key such as ``stepOne`` or ``step_one`` into ``Step One``."""

    words = [word for word in _WORD_BOUNDARY.split(key) if word]
    if not words:
        return key
    return " ".join(word[:1].upper() + word[1:] for word in words)


def resolve_label(key: str, label: StepLabel | None, lang: str = "en") -> str:
    """Return the display label for a step in ``lang``."""

    if label is None:
        return humanize_key(key)
    if isinstance(label, tuple):
        de, en = label
        return de if lang.lower().startswith("de") else en
    return label


def project_view_model(
    registry: StepRegistry,
    controller: NavigationController,
    options: MultiStepOptions | None = None,
    *,
    lang: str = "en",
) -> ViewModel:
    """Build a :class:`ViewModel` from the current registry and navigation state.

    Nothing is cached: the result depends only on the state passed in, so it
    stays correct however often steps are hidden and re-shown.
    """

    resolved = options or controller.options
    active_key = controller.active_key
    attached = list(registry.ordered_attached())
    last_ordinal = len(attached) - 1
    views = tuple(
        StepView(
            key=step.key,
            label=resolve_label(step.key, step.label, lang),
            ordinal=step.ordinal if step.ordinal is not None else index,
            is_active=step.key == active_key,
            is_complete=step.visited and not step.blocking,
            is_blocked=step.blocking,
            is_visited=step.visited,
            error_count=step.error_count,
            is_first=index == 0,
            is_last=index == last_ordinal,
        )
        for index, step in enumerate(attached)
    )
    active_step = controller.active_step
    if active_step is not None and active_step.ordinal is not None and last_ordinal > 0:
        progress = active_step.ordinal / last_ordinal
    else:
        progress = 1.0 if active_step is not None else 0.0
    return ViewModel(
        steps=views,
        tab_style=resolved.tab_style,
        hide_progress_labels=resolved.hide_progress_labels,
        allow_incomplete=resolved.allow_incomplete,
        active_key=active_key,
        can_go_next=controller.can_go_next(allow_incomplete=resolved.allow_incomplete),
        can_go_previous=controller.can_go_previous(),
        progress=progress,
    )


__all__ = ["humanize_key", "project_view_model", "resolve_label"]
