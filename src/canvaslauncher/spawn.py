"""Public entry point: show a canvas in the caller's terminal."""

from __future__ import annotations

import logging as py_logging
import subprocess
import time
from collections.abc import Callable, Mapping

from canvaslauncher.command import build_canvas_command, validate_canvas_id
from canvaslauncher.config import LauncherConfig
from canvaslauncher.dispatcher import PaneDispatcher
from canvaslauncher.environment import detect_terminal
from canvaslauncher.hosts.ghostty import GhosttyAdapter
from canvaslauncher.hosts.tmux import TmuxAdapter
from canvaslauncher.models import SpawnRequest, SpawnResult
from canvaslauncher.polling import PollPolicy
from canvaslauncher.process import Runner
from canvaslauncher.registry import FilePaneStore, PaneRegistry, PaneStore

logger = py_logging.getLogger(__name__)


def build_dispatcher(
    config: LauncherConfig,
    *,
    runner: Runner = subprocess.run,
    store: PaneStore | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PaneDispatcher:
    tmux = TmuxAdapter(
        runner=runner,
        split_percent=config.split_percent,
        grace_seconds=config.interrupt_grace_seconds,
        idle_policy=PollPolicy(
            timeout_seconds=config.idle_timeout_seconds,
            interval_seconds=config.idle_poll_seconds,
        ),
        command_timeout=config.command_timeout_seconds,
        sleep=sleep,
    )
    ghostty = GhosttyAdapter(
        runner=runner,
        app_name=config.gui_host_app,
        command_timeout=config.command_timeout_seconds,
    )
    registry = PaneRegistry(store or FilePaneStore(config.pane_file), tmux)
    return PaneDispatcher(ghostty=ghostty, tmux=tmux, registry=registry)


def spawn_canvas(
    kind: str,
    canvas_id: str,
    config_json: str | None = None,
    *,
    socket_path: str | None = None,
    scenario: str | None = None,
    config: LauncherConfig | None = None,
    environ: Mapping[str, str] | None = None,
    system_name: str | None = None,
    runner: Runner = subprocess.run,
    store: PaneStore | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> SpawnResult:
    """Open (or recycle) a terminal surface running the canvas renderer.

    Raises ``CanvasLauncherError`` when no supported host is detected or every
    applicable host fails.
    """
    cfg = config or LauncherConfig()
    env = detect_terminal(environ, system_name=system_name)
    logger.info("Spawning canvas kind=%s id=%s terminal=%s", kind, canvas_id, env.summary.value)

    request = SpawnRequest(
        kind=kind,
        canvas_id=validate_canvas_id(canvas_id),
        config_json=config_json,
        socket_path=socket_path,
        scenario=scenario,
    )
    dispatcher = build_dispatcher(cfg, runner=runner, store=store, sleep=sleep)
    # Fail fast before touching the temp dir when no host can run the command.
    dispatcher.plan_or_raise(env)
    command = build_canvas_command(request, run_script=cfg.run_script, temp_dir=cfg.temp_dir)
    result = dispatcher.dispatch(command, env)
    logger.info("Canvas shown method=%s id=%s", result.method.value, request.canvas_id)
    return result


def forget_canvas_pane(
    config: LauncherConfig | None = None,
    *,
    store: PaneStore | None = None,
) -> None:
    cfg = config or LauncherConfig()
    (store or FilePaneStore(cfg.pane_file)).clear()
    logger.info("Cleared canvas pane reference")
