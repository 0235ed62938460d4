from __future__ import annotations

import pytest
from pydantic import ValidationError

from multistep.config import (
    ENV_ALLOW_INCOMPLETE,
    ENV_HIDE_PROGRESS_LABELS,
    ENV_TAB_STYLE,
    MultiStepConfigError,
    MultiStepOptions,
    options_from_env,
    resolve_options,
)
from multistep.types import TabStyle


def test_defaults_match_documented_values() -> None:
    options = resolve_options(env={})

    assert options.tab_style is TabStyle.TAB
    assert options.hide_progress_labels is False
    assert options.allow_incomplete is False


def test_camel_case_and_snake_case_names_are_accepted() -> None:
    camel = resolve_options({"tabStyle": "progress", "hideProgressLabels": True}, env={})
    snake = resolve_options({"tab_style": "progress", "hide_progress_labels": True}, env={})

    assert camel == snake
    assert camel.tab_style is TabStyle.PROGRESS


def test_later_layers_override_earlier_ones() -> None:
    plugin_defaults = {"allowIncomplete": True, "tabStyle": "progress"}
    container_props = MultiStepOptions(tab_style=TabStyle.TAB)

    options = resolve_options(plugin_defaults, container_props, env={})

    assert options.allow_incomplete is True
    assert options.tab_style is TabStyle.TAB


def test_environment_supplies_lowest_precedence_defaults() -> None:
    env = {ENV_TAB_STYLE: "Progress", ENV_HIDE_PROGRESS_LABELS: "yes", ENV_ALLOW_INCOMPLETE: "off"}

    assert options_from_env(env) == {
        "tab_style": "progress",
        "hide_progress_labels": True,
        "allow_incomplete": False,
    }
    options = resolve_options({"hideProgressLabels": False}, env=env)
    assert options.tab_style is TabStyle.PROGRESS
    assert options.hide_progress_labels is False


def test_environment_reads_process_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_ALLOW_INCOMPLETE, "1")

    assert resolve_options().allow_incomplete is True


def test_unrecognised_env_flag_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING"):
        values = options_from_env({ENV_ALLOW_INCOMPLETE: "sometimes"})

    assert values == {}
    assert ENV_ALLOW_INCOMPLETE in caplog.text


def test_unknown_option_names_are_ignored_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING"):
        options = resolve_options({"stepIcon": "check", "allowIncomplete": True}, env={})

    assert options.allow_incomplete is True
    assert "stepIcon" in caplog.text


def test_invalid_tab_style_raises_config_error() -> None:
    with pytest.raises(MultiStepConfigError):
        resolve_options({"tabStyle": "carousel"}, env={})


@pytest.mark.parametrize("option", ["allowIncomplete", "hideProgressLabels", "allow_incomplete"])
@pytest.mark.parametrize("value", ["yes", "off", 1, "1", 0, None])
def test_non_boolean_flags_raise_config_error(option: str, value: object) -> None:
    with pytest.raises(MultiStepConfigError):
        resolve_options({option: value}, env={})


def test_options_are_frozen() -> None:
    options = MultiStepOptions()

    with pytest.raises(ValidationError):
        options.allow_incomplete = True  # type: ignore[misc]
