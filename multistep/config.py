"""Options for multi-step containers.

Options are resolved in layers, lowest precedence first:

1. environment defaults (``MULTISTEP_TAB_STYLE``,
   ``MULTISTEP_HIDE_PROGRESS_LABELS``, ``MULTISTEP_ALLOW_INCOMPLETE``), with a
   local ``.env`` file loaded through ``python-dotenv``;
2. each layer passed to :func:`resolve_options`, typically the plugin-wide
   defaults followed by the container's own props.

Layers accept the camelCase names used by form schemas (``tabStyle``) as well
as the snake_case attribute names.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from multistep.types import TabStyle

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
_FALSY_ENV_VALUES: tuple[str, ...] = ("0", "false", "no", "off")

ENV_TAB_STYLE = "MULTISTEP_TAB_STYLE"
ENV_HIDE_PROGRESS_LABELS = "MULTISTEP_HIDE_PROGRESS_LABELS"
ENV_ALLOW_INCOMPLETE = "MULTISTEP_ALLOW_INCOMPLETE"


class MultiStepConfigError(ValueError):
    """Raised when container options cannot be validated."""


class MultiStepOptions(BaseModel):
    """Validated configuration snapshot for a multi-step container.

    Flags only accept real booleans; string props such as ``"yes"`` are
    rejected instead of coerced. Environment values are parsed to booleans
    before they get here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    tab_style: TabStyle = Field(TabStyle.TAB, alias="tabStyle")
    hide_progress_labels: StrictBool = Field(False, alias="hideProgressLabels")
    allow_incomplete: StrictBool = Field(False, alias="allowIncomplete")


_KNOWN_OPTION_NAMES: frozenset[str] = frozenset(
    name for field_name, info in MultiStepOptions.model_fields.items() for name in (field_name, info.alias) if name
)

OptionsLayer = MultiStepOptions | Mapping[str, object] | None


def _parse_env_flag(value: str | None, *, env_var: str) -> bool | None:
    """Return the boolean encoded in ``value`` or ``None`` when unset."""

    if value is None or not value.strip():
        return None
    token = value.strip().lower()
    if token in _TRUTHY_ENV_VALUES:
        return True
    if token in _FALSY_ENV_VALUES:
        return False
    logger.warning("Ignoring unrecognised boolean %s=%r", env_var, value)
    return None


def options_from_env(env: Mapping[str, str] | None = None) -> dict[str, object]:
    """Collect option defaults from environment variables."""

    source = os.environ if env is None else env
    values: dict[str, object] = {}
    tab_style = (source.get(ENV_TAB_STYLE) or "").strip().lower()
    if tab_style:
        values["tab_style"] = tab_style
    hide_labels = _parse_env_flag(source.get(ENV_HIDE_PROGRESS_LABELS), env_var=ENV_HIDE_PROGRESS_LABELS)
    if hide_labels is not None:
        values["hide_progress_labels"] = hide_labels
    allow_incomplete = _parse_env_flag(source.get(ENV_ALLOW_INCOMPLETE), env_var=ENV_ALLOW_INCOMPLETE)
    if allow_incomplete is not None:
        values["allow_incomplete"] = allow_incomplete
    return values


def _normalise_layer(layer: OptionsLayer) -> dict[str, object]:
    if layer is None:
        return {}
    if isinstance(layer, MultiStepOptions):
        return layer.model_dump(exclude_unset=True)
    values: dict[str, object] = {}
    for name, value in layer.items():
        if name not in _KNOWN_OPTION_NAMES:
            logger.warning("Ignoring unknown multi-step option '%s'", name)
            continue
        field_name = next(
            (key for key, info in MultiStepOptions.model_fields.items() if name in (key, info.alias)),
            name,
        )
        values[field_name] = value
    return values


def resolve_options(*layers: OptionsLayer, env: Mapping[str, str] | None = None) -> MultiStepOptions:
    """Merge ``layers`` over the environment defaults and validate the result."""

    merged = options_from_env(env)
    for layer in layers:
        merged.update(_normalise_layer(layer))
    try:
        return MultiStepOptions.model_validate(merged)
    except ValidationError as exc:
        raise MultiStepConfigError(f"Invalid multi-step options: {exc}") from exc


__all__ = [
    "ENV_ALLOW_INCOMPLETE",
    "ENV_HIDE_PROGRESS_LABELS",
    "ENV_TAB_STYLE",
    "MultiStepConfigError",
    "MultiStepOptions",
    "options_from_env",
    "resolve_options",
]
