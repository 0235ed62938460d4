"""Streamlit bindings: keep a form in session state and render its buttons."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, cast

import streamlit as st

from multistep.config import OptionsLayer
from multistep.form import MultiStepForm
from multistep.i18n import (
    NAV_BLOCKED_WARNING,
    NAV_NEXT_LABEL,
    NAV_PREVIOUS_LABEL,
    NAV_VETOED_WARNING,
    current_lang,
    tr,
)
from multistep.navigation.keys import FormSessionKeys
from multistep.types import LocalizedText, ViewModel


class NavigationDirection(str, Enum):
    """Direction metadata for navigation controls."""

    PREVIOUS = "previous"
    NEXT = "next"


@dataclass(frozen=True)
class NavigationButtonState:
    """Typed configuration for a single navigation button."""

    direction: NavigationDirection
    label: LocalizedText
    target_key: str
    primary: bool = False


@dataclass(frozen=True)
class NavigationState:
    """Aggregated state used to render navigation controls."""

    current_key: str
    blocked: bool = False
    previous: NavigationButtonState | None = None
    next: NavigationButtonState | None = None


def get_form(
    form_id: str,
    *,
    options: OptionsLayer = None,
    session_state: MutableMapping[str, object] | None = None,
    **form_kwargs: Any,
) -> MultiStepForm:
    """Return the form stored under ``form_id``, creating it on first use.

    Streamlit re-executes the script on every interaction, so the engine lives
    in ``st.session_state`` to keep the active step across reruns.
    """

    state = cast(MutableMapping[str, object], st.session_state if session_state is None else session_state)
    key = FormSessionKeys(form_id=form_id).form
    existing = state.get(key)
    if isinstance(existing, MultiStepForm):
        return existing
    form = MultiStepForm(options, form_id=form_id, **form_kwargs)
    state[key] = form
    return form


def build_navigation_state(view_model: ViewModel) -> NavigationState | None:
    """Derive button state from ``view_model``; ``None`` before any step mounts."""

    active = view_model.active_step
    if active is None:
        return None
    keys = view_model.keys
    index = keys.index(active.key)
    previous_button = (
        NavigationButtonState(
            direction=NavigationDirection.PREVIOUS,
            label=NAV_PREVIOUS_LABEL,
            target_key=keys[index - 1],
        )
        if index > 0
        else None
    )
    next_button = (
        NavigationButtonState(
            direction=NavigationDirection.NEXT,
            label=NAV_NEXT_LABEL,
            target_key=keys[index + 1],
            primary=True,
        )
        if index + 1 < len(keys)
        else None
    )
    return NavigationState(
        current_key=active.key,
        blocked=active.is_blocked and not view_model.allow_incomplete,
        previous=previous_button,
        next=next_button,
    )


def render_navigation(
    form: MultiStepForm,
    *,
    lang: str | None = None,
    location: Literal["top", "bottom"] = "bottom",
    rerun: bool = True,
) -> NavigationDirection | None:
    """Render previous/next buttons for ``form``.

    The next button stays clickable while the step is blocked so the click can
    explain why navigation did not happen. Returns the direction that moved the
    form, if any.
    """

    code = lang or current_lang()
    state = build_navigation_state(form.get_view_model(lang=code))
    if state is None:
        return None

    cols = st.columns(2)
    moved: NavigationDirection | None = None
    for column, button in zip(cols, (state.previous, state.next)):
        if button is None:
            column.write("")
            continue
        triggered = column.button(
            tr(*button.label, lang=code),
            key=f"multistep_{form.form_id}_{button.direction.value}_{state.current_key}_{location}",
            type="primary" if button.primary else "secondary",
        )
        if not triggered:
            continue
        if button.direction is NavigationDirection.PREVIOUS:
            succeeded = form.previous()
        else:
            succeeded = form.next()
        if succeeded:
            moved = button.direction
        else:
            warning = NAV_BLOCKED_WARNING if state.blocked else NAV_VETOED_WARNING
            st.warning(tr(*warning, lang=code))

    if moved is not None and rerun:
        st.rerun()
    return moved


def forget_form(form_id: str, *, session_state: MutableMapping[str, object] | None = None) -> None:
    """Drop the stored form, e.g. when the container unmounts for good."""

    state = cast(MutableMapping[str, object], st.session_state if session_state is None else session_state)
    state.pop(FormSessionKeys(form_id=form_id).form, None)


__all__ = [
    "NavigationButtonState",
    "NavigationDirection",
    "NavigationState",
    "build_navigation_state",
    "forget_form",
    "get_form",
    "render_navigation",
]
