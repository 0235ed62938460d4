"""Stamp the owning form and its active step onto log records.

:class:`~multistep.form.MultiStepForm` binds a :class:`FormLogContext` around
every notification, so records emitted by the registry, gate and controller
carry ``form_id`` and ``step`` attributes without those modules knowing which
form they serve.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s %(levelname)s [form=%(form_id)s step=%(step)s] %(name)s: %(message)s"
_PLACEHOLDER = "-"


@dataclass(frozen=True)
class FormLogContext:
    """Identifiers attached to records logged while a form is handling a call."""

    form_id: str = _PLACEHOLDER
    step: str = _PLACEHOLDER


_current: contextvars.ContextVar[FormLogContext] = contextvars.ContextVar(
    "multistep_log_context", default=FormLogContext()
)


def current_context() -> FormLogContext:
    return _current.get()


def _placeholder_if_blank(value: str | None) -> str:
    return (value or "").strip() or _PLACEHOLDER


@contextmanager
def bound_context(form_id: str | None, step: str | None = None) -> Iterator[FormLogContext]:
    """Bind ``form_id``/``step`` for the duration of the block."""

    context = FormLogContext(form_id=_placeholder_if_blank(form_id), step=_placeholder_if_blank(step))
    token = _current.set(context)
    try:
        yield context
    finally:
        _current.reset(token)


def _wrap_factory(factory: Callable[..., logging.LogRecord]) -> Callable[..., logging.LogRecord]:
    def _stamped(*args: object, **kwargs: object) -> logging.LogRecord:
        record = factory(*args, **kwargs)
        context = _current.get()
        record.form_id = context.form_id
        record.step = context.step
        return record

    _stamped.multistep_context = True  # type: ignore[attr-defined]
    return _stamped


def install_record_factory() -> None:
    """Wrap the active log record factory once; later calls are no-ops."""

    factory = logging.getLogRecordFactory()
    if getattr(factory, "multistep_context", False):
        return
    logging.setLogRecordFactory(_wrap_factory(factory))


def configure_logging(*, level: int = logging.INFO) -> None:
    """Set up root logging for apps embedding the engine (e.g. ``app.py``)."""

    install_record_factory()
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = [
    "FormLogContext",
    "LOG_FORMAT",
    "bound_context",
    "configure_logging",
    "current_context",
    "install_record_factory",
]
