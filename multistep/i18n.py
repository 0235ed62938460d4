"""Simple i18n helper utilities."""

from __future__ import annotations

from typing import Final

import streamlit as st

from multistep.types import LocalizedText

NAV_PREVIOUS_LABEL: Final[LocalizedText] = ("◀ Zurück", "◀ Back")
NAV_NEXT_LABEL: Final[LocalizedText] = ("Weiter ▶", "Next ▶")
NAV_BLOCKED_WARNING: Final[LocalizedText] = (
    "Bitte behebe die markierten Fehler, bevor du fortfährst.",
    "Please fix the highlighted errors before continuing.",
)
NAV_VETOED_WARNING: Final[LocalizedText] = (
    "Dieser Schritt kann gerade nicht verlassen werden.",
    "This step cannot be left right now.",
)


def current_lang() -> str:
    """Return the language stored in the session, defaulting to English."""

    lang = st.session_state.get("lang", "en")
    return lang if isinstance(lang, str) and lang else "en"


def tr(de: str, en: str, lang: str | None = None) -> str:
    """Return the string matching the current language.

    Args:
        de: German text.
        en: English text.
        lang: Optional language override (``"de"`` or ``"en"``).
    """

    code = lang or current_lang()
    return de if code.lower().startswith("de") else en


__all__ = [
    "NAV_BLOCKED_WARNING",
    "NAV_NEXT_LABEL",
    "NAV_PREVIOUS_LABEL",
    "NAV_VETOED_WARNING",
    "current_lang",
    "tr",
]
