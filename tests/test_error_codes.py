from __future__ import annotations

from canvaslauncher.errors import CanvasLauncherError, ExitCode, user_facing_error
from canvaslauncher.logging import LOG_LEVELS, configure_logging


def test_exit_codes_are_deterministic() -> None:
    assert int(ExitCode.SUCCESS) == 0
    assert int(ExitCode.INVALID_ARGS) == 2
    assert int(ExitCode.UNSUPPORTED_ENVIRONMENT) == 8
    assert int(ExitCode.SPAWN_FAILED) == 9


def test_canvas_launcher_error_string_contains_hint() -> None:
    err = CanvasLauncherError("tmux not found", code=ExitCode.TMUX_ERROR, hint="Install tmux")
    assert "Install tmux" in str(err)


def test_canvas_launcher_error_without_hint_is_message() -> None:
    assert str(CanvasLauncherError("boom")) == "boom"


def test_user_facing_error_template() -> None:
    text = user_facing_error("Invalid canvas id", hint="Remove slashes")
    assert text.startswith("Error:")
    assert "Next step" in text


def test_logging_levels() -> None:
    logger = configure_logging("WARN")
    assert logger.level == LOG_LEVELS["WARN"]


def test_user_facing_error_forms() -> None:
    assert user_facing_error("No terminal host") == "Error: No terminal host."
    assert (
        user_facing_error("No terminal host", hint="Start tmux")
        == "Error: No terminal host. Next step: Start tmux"
    )
