from dataclasses import dataclass, field
from pathlib import Path
import sys

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from multistep.config import ENV_ALLOW_INCOMPLETE, ENV_HIDE_PROGRESS_LABELS, ENV_TAB_STYLE  # noqa: E402
from multistep.diagnostics import StructuralMisuse  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_option_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``.env`` files from leaking into option defaults."""

    for name in (ENV_TAB_STYLE, ENV_HIDE_PROGRESS_LABELS, ENV_ALLOW_INCOMPLETE):
        monkeypatch.delenv(name, raising=False)
    yield


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@dataclass
class RecordingSink:
    """Diagnostics sink that keeps every warning for assertions."""

    warnings: list[tuple[StructuralMisuse, str, str]] = field(default_factory=list)

    def warn(self, code: StructuralMisuse, message: str, *, node_id: str) -> None:
        self.warnings.append((code, message, node_id))


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
