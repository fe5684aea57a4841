"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import json
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import load_config
from .environment import detect_terminal
from .errors import CanvasLauncherError, ExitCode, user_facing_error
from .logging import configure_logging, default_log_path
from .models import SpawnResult
from .spawn import forget_canvas_pane, spawn_canvas

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

Spawner = Callable[..., SpawnResult]


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def _json_type(value: str) -> str:
    try:
        json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"--config must be valid JSON ({exc.msg})") from exc
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="canvaslauncher")
    parser.add_argument("--config-path", type=Path, default=None)
    parser.add_argument("--log-level", type=_log_level_type, default="INFO")
    parser.add_argument("--log-file", type=Path, default=None)
    commands = parser.add_subparsers(dest="command", required=True)

    spawn = commands.add_parser("spawn", help="Show a canvas in the current terminal host")
    spawn.add_argument("kind")
    spawn.add_argument("--id", dest="canvas_id", required=True)
    payload = spawn.add_mutually_exclusive_group()
    payload.add_argument("--config", dest="config_json", type=_json_type, default=None)
    payload.add_argument("--config-file", type=Path, default=None)
    spawn.add_argument("--socket", dest="socket_path", default=None)
    spawn.add_argument("--scenario", default=None)

    commands.add_parser("detect", help="Print the detected terminal environment")
    commands.add_parser("forget", help="Clear the remembered canvas pane")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def _read_config_file(path: Path) -> str:
    try:
        text = path.expanduser().read_text(encoding="utf-8")
    except OSError as exc:
        raise CanvasLauncherError(
            f"Could not read canvas config file {path}.",
            code=ExitCode.INVALID_ARGS,
            hint=str(exc),
        ) from exc
    try:
        json.loads(text)
    except json.JSONDecodeError as exc:
        raise CanvasLauncherError(
            f"Canvas config file {path} is not valid JSON.",
            code=ExitCode.INVALID_ARGS,
            hint=exc.msg,
        ) from exc
    return text


def run_cli_flow(namespace: argparse.Namespace, *, spawner: Spawner = spawn_canvas) -> int:
    config = load_config(namespace.config_path)

    if namespace.command == "detect":
        print(json.dumps(detect_terminal().to_dict()))
        return int(ExitCode.SUCCESS)

    if namespace.command == "forget":
        forget_canvas_pane(config)
        return int(ExitCode.SUCCESS)

    config_json = namespace.config_json
    if namespace.config_file is not None:
        config_json = _read_config_file(namespace.config_file)
    result = spawner(
        namespace.kind,
        namespace.canvas_id,
        config_json,
        socket_path=namespace.socket_path,
        scenario=namespace.scenario,
        config=config,
    )
    print(json.dumps(result.to_dict()))
    return int(ExitCode.SUCCESS)


def main(
    argv: Sequence[str] | None = None,
    *,
    spawner: Spawner | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        logger.debug("Starting CLI command=%s", namespace.command)
        return run_cli_flow(namespace, spawner=spawner or spawn_canvas)
    except CanvasLauncherError as exc:
        logger.error(
            "Handled CanvasLauncherError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        print(
            user_facing_error("Unexpected runtime failure", hint=f"Inspect logs: {log_path}"),
            file=sys.stderr,
        )
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
