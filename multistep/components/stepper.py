"""Step indicator rendering for multi-step forms."""

from __future__ import annotations

import html
from typing import Callable

import streamlit as st

from multistep.i18n import NAV_BLOCKED_WARNING, NAV_VETOED_WARNING, tr
from multistep.types import StepView, TabStyle, ViewModel


_STATUS_ICONS: dict[str, str] = {
    "done": "✔︎",
    "current": "➤",
    "blocked": "⚠",
    "upcoming": "•",
}


def step_status(step: StepView) -> str:
    """Classify ``step`` for display: current, blocked, done or upcoming."""

    if step.is_active:
        return "current"
    if step.is_visited and step.is_blocked:
        return "blocked"
    if step.is_complete:
        return "done"
    return "upcoming"


def _build_summary_segments(steps: tuple[StepView, ...], *, hide_labels: bool) -> list[str]:
    """Return HTML segments representing the step summary."""

    segments: list[str] = []
    for step in steps:
        status = step_status(step)
        text = f"{step.ordinal + 1}" if hide_labels else f"{step.ordinal + 1}. {step.label}"
        annotated = f"{_STATUS_ICONS[status]} {text}"
        segments.append(f"<span data-state='{status}'>{html.escape(annotated)}</span>")
    return segments


def _render_progress(view_model: ViewModel) -> None:
    active = view_model.active_step
    text = None
    if active is not None and not view_model.hide_progress_labels:
        text = f"{active.ordinal + 1}/{len(view_model.steps)} · {active.label}"
    st.progress(view_model.progress, text=text)
    segments = _build_summary_segments(view_model.steps, hide_labels=view_model.hide_progress_labels)
    arrow = "<span aria-hidden='true'>→</span>"
    st.markdown(
        f"<div class='multistep-progress' data-hide-labels='{str(view_model.hide_progress_labels).lower()}'>"
        + arrow.join(segments)
        + "</div>",
        unsafe_allow_html=True,
    )


def _render_tabs(view_model: ViewModel, on_select: Callable[[str], object] | None, form_id: str) -> str | None:
    selected: str | None = None
    columns = st.columns(len(view_model.steps))
    for column, step in zip(columns, view_model.steps):
        status = step_status(step)
        label = f"{_STATUS_ICONS[status]} {step.label}"
        if step.error_count and step.is_visited:
            label = f"{label} ({step.error_count})"
        clicked = column.button(label, key=f"multistep_{form_id}_tab_{step.key}", disabled=step.is_active)
        if clicked:
            selected = step.key
    if selected is None or on_select is None:
        return selected
    if on_select(selected) is False:
        active = view_model.active_step
        blocked = active is not None and active.is_blocked and not view_model.allow_incomplete
        st.warning(tr(*(NAV_BLOCKED_WARNING if blocked else NAV_VETOED_WARNING)))
        return None
    return selected


def render_steps(
    view_model: ViewModel,
    *,
    on_select: Callable[[str], object] | None = None,
    form_id: str = "default",
) -> str | None:
    """Render the step indicator for ``view_model``.

    ``tab`` style draws one button per attached step and forwards clicks to
    ``on_select`` (typically ``form.go_to``); ``progress`` style draws a
    progress bar plus a condensed summary. Returns the clicked step key, or
    ``None`` when nothing was clicked or ``on_select`` refused the jump; a
    refused jump shows a warning instead. ``form_id`` keeps widget keys unique
    when several forms share a page.
    """

    if not view_model.steps:
        return None
    if view_model.tab_style is TabStyle.PROGRESS:
        _render_progress(view_model)
        return None
    return _render_tabs(view_model, on_select, form_id)


__all__ = ["render_steps", "step_status"]
