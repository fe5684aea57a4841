"""Choose a terminal host strategy and open or recycle the canvas surface."""

from __future__ import annotations

import logging as py_logging
from dataclasses import dataclass
from typing import Union

from canvaslauncher.errors import CanvasLauncherError, ExitCode
from canvaslauncher.hosts.ghostty import GhosttyAdapter
from canvaslauncher.hosts.tmux import TmuxAdapter
from canvaslauncher.models import SpawnMethod, SpawnResult, TerminalEnvironment
from canvaslauncher.registry import PaneRegistry

logger = py_logging.getLogger(__name__)

UNSUPPORTED_MESSAGE = (
    "Canvas requires Ghostty (macOS) or tmux. Please run inside one of these environments."
)


@dataclass(frozen=True)
class GuiHostStrategy:
    adapter: GhosttyAdapter
    method: SpawnMethod = SpawnMethod.GUI_HOST

    def spawn(self, command: str) -> bool:
        return self.adapter.open_surface(command)


@dataclass(frozen=True)
class MultiplexerStrategy:
    adapter: TmuxAdapter
    registry: PaneRegistry
    method: SpawnMethod = SpawnMethod.MULTIPLEXER

    def spawn(self, command: str) -> bool:
        ref = self.registry.current()
        if ref is not None:
            if self.adapter.reuse_existing_pane(ref.pane_id, command):
                return True
            logger.info("Reuse failed; replacing canvas pane pane_id=%s", ref.pane_id)

        self.registry.clear()
        pane_id = self.adapter.create_new_pane(command)
        if pane_id is None:
            return False
        if pane_id:
            self.registry.save(pane_id)
        return True


Strategy = Union[GuiHostStrategy, MultiplexerStrategy]


class PaneDispatcher:
    def __init__(
        self,
        *,
        ghostty: GhosttyAdapter,
        tmux: TmuxAdapter,
        registry: PaneRegistry,
    ) -> None:
        self.ghostty = ghostty
        self.tmux = tmux
        self.registry = registry

    def plan_strategies(self, env: TerminalEnvironment) -> list[Strategy]:
        """Return applicable strategies in preference order; empty means unsupported."""
        strategies: list[Strategy] = []
        if env.gui_host_usable:
            strategies.append(GuiHostStrategy(self.ghostty))
        if env.in_multiplexer:
            strategies.append(MultiplexerStrategy(self.tmux, self.registry))
        return strategies

    def plan_or_raise(self, env: TerminalEnvironment) -> list[Strategy]:
        strategies = self.plan_strategies(env)
        if not strategies:
            logger.error("No supported terminal host detected summary=%s", env.summary.value)
            raise CanvasLauncherError(
                UNSUPPORTED_MESSAGE,
                code=ExitCode.UNSUPPORTED_ENVIRONMENT,
                hint="Start the command from Ghostty on macOS or inside a tmux session.",
            )
        return strategies

    def dispatch(self, command: str, env: TerminalEnvironment) -> SpawnResult:
        strategies = self.plan_or_raise(env)
        for strategy in strategies:
            logger.debug("Trying canvas strategy method=%s", strategy.method.value)
            if strategy.spawn(command):
                return SpawnResult(method=strategy.method)
            logger.warning("Canvas strategy failed method=%s", strategy.method.value)

        tried = ", ".join(strategy.method.value for strategy in strategies)
        raise CanvasLauncherError(
            f"Failed to open a canvas surface (tried: {tried}).",
            code=ExitCode.SPAWN_FAILED,
            hint="Check the terminal host is running and inspect the log file.",
        )
