"""Build the canvas renderer shell invocation."""

from __future__ import annotations

import logging as py_logging
import re
import shlex
from pathlib import Path

from canvaslauncher.config import DEFAULT_RUN_SCRIPT, DEFAULT_TEMP_DIR
from canvaslauncher.errors import CanvasLauncherError, ExitCode
from canvaslauncher.models import SpawnRequest

logger = py_logging.getLogger(__name__)

_INVALID_ID_PATTERN = re.compile(r"[\s/\\]")


def validate_canvas_id(canvas_id: str) -> str:
    """Reject ids that cannot safely name the per-canvas temp files."""
    value = canvas_id.strip()
    if not value or value in {".", ".."} or _INVALID_ID_PATTERN.search(value):
        raise CanvasLauncherError(
            f"Invalid canvas id: {canvas_id!r}",
            code=ExitCode.VALIDATION_ERROR,
            hint="Use an id without whitespace or path separators.",
        )
    return value


def default_socket_path(canvas_id: str) -> str:
    return f"/tmp/canvas-{canvas_id}.sock"  # nosec B108


def config_file_path(canvas_id: str, temp_dir: str | Path = DEFAULT_TEMP_DIR) -> Path:
    return Path(temp_dir) / f"canvas-config-{canvas_id}.json"


def write_config_payload(
    canvas_id: str,
    config_json: str,
    temp_dir: str | Path = DEFAULT_TEMP_DIR,
) -> Path:
    """Persist the JSON payload so the command can read it back instead of inlining it."""
    path = config_file_path(canvas_id, temp_dir)
    try:
        path.write_text(config_json, encoding="utf-8")
    except OSError as exc:
        raise CanvasLauncherError(
            f"Could not write canvas config file {path}.",
            code=ExitCode.CONFIG_ERROR,
            hint=str(exc),
        ) from exc
    logger.debug("Wrote canvas config canvas_id=%s path=%s bytes=%s", canvas_id, path, len(config_json))
    return path


def build_canvas_command(
    request: SpawnRequest,
    *,
    run_script: str = DEFAULT_RUN_SCRIPT,
    temp_dir: str | Path = DEFAULT_TEMP_DIR,
) -> str:
    parts = [
        shlex.quote(run_script),
        "show",
        shlex.quote(request.kind),
        "--id",
        shlex.quote(request.canvas_id),
    ]
    if request.config_json:
        config_path = write_config_payload(request.canvas_id, request.config_json, temp_dir)
        parts.extend(["--config", f'"$(cat {shlex.quote(str(config_path))})"'])

    socket_path = request.socket_path or default_socket_path(request.canvas_id)
    parts.extend(["--socket", shlex.quote(socket_path)])
    if request.scenario:
        parts.extend(["--scenario", shlex.quote(request.scenario)])
    return " ".join(parts)
