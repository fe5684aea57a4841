"""XDG config loading/saving."""

from __future__ import annotations

import os
import sys
from contextlib import suppress
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

DEFAULT_CONFIG_PATH = Path("~/.config/canvaslauncher/config.toml").expanduser()
DEFAULT_RUN_SCRIPT = "run-canvas.sh"
DEFAULT_PANE_FILE = "/tmp/claude-canvas-pane-id"  # nosec B108
DEFAULT_TEMP_DIR = "/tmp"  # nosec B108
DEFAULT_SPLIT_PERCENT = 67
DEFAULT_INTERRUPT_GRACE_SECONDS = 0.15
DEFAULT_IDLE_TIMEOUT_SECONDS = 1.5
DEFAULT_IDLE_POLL_SECONDS = 0.05
DEFAULT_GUI_HOST_APP = "Ghostty"
DEFAULT_COMMAND_TIMEOUT_SECONDS = 10.0
RUN_SCRIPT_ENV = "CANVASLAUNCHER_RUN_SCRIPT"


class LauncherConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    run_script: str = DEFAULT_RUN_SCRIPT
    pane_file: str = DEFAULT_PANE_FILE
    temp_dir: str = DEFAULT_TEMP_DIR
    split_percent: int = Field(default=DEFAULT_SPLIT_PERCENT, ge=10, le=90)
    interrupt_grace_seconds: float = Field(default=DEFAULT_INTERRUPT_GRACE_SECONDS, ge=0, le=5)
    idle_timeout_seconds: float = Field(default=DEFAULT_IDLE_TIMEOUT_SECONDS, ge=0, le=30)
    idle_poll_seconds: float = Field(default=DEFAULT_IDLE_POLL_SECONDS, ge=0.01, le=1)
    gui_host_app: str = DEFAULT_GUI_HOST_APP
    command_timeout_seconds: float = Field(default=DEFAULT_COMMAND_TIMEOUT_SECONDS, ge=1, le=120)

    @field_validator("run_script", "pane_file", "temp_dir", "gui_host_app")
    @classmethod
    def _validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Value must not be blank")
        return value.strip()


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _sanitize(raw: dict[str, object]) -> LauncherConfig:
    """Copy every well-formed key onto a default config, skipping invalid ones."""
    cfg = LauncherConfig()
    for name in LauncherConfig.model_fields:
        if name not in raw:
            continue
        value = raw[name]
        # bool is an int subclass; never accept it for numeric fields.
        if isinstance(value, bool):
            continue
        try:
            setattr(cfg, name, value)
        except ValidationError:
            continue

    env_script = os.getenv(RUN_SCRIPT_ENV, "").strip()
    if env_script:
        cfg.run_script = env_script
    return cfg


def load_config(path: str | Path | None = None) -> LauncherConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return _sanitize({})
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return _sanitize({})
    if not isinstance(raw, dict):
        return _sanitize({})
    return _sanitize(raw)


def save_config(config: LauncherConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    lines = [
        f"{name} = {_toml_scalar(getattr(config, name))}" for name in LauncherConfig.model_fields
    ]
    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved
