"""tmux pane control for the canvas surface."""

from __future__ import annotations

import logging as py_logging
import subprocess
import time
from collections.abc import Callable
from enum import Enum

from canvaslauncher.config import (
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    DEFAULT_IDLE_POLL_SECONDS,
    DEFAULT_IDLE_TIMEOUT_SECONDS,
    DEFAULT_INTERRUPT_GRACE_SECONDS,
    DEFAULT_SPLIT_PERCENT,
)
from canvaslauncher.polling import PollPolicy, poll_until
from canvaslauncher.process import CommandResult, Runner, run_command

logger = py_logging.getLogger(__name__)

PANE_ID_FORMAT = "#{pane_id}"
PANE_COMMAND_FORMAT = "#{pane_current_command}"
IDLE_SHELLS = frozenset({"bash", "zsh", "sh", "fish", "dash", "ksh", "tcsh", "csh"})


class PaneState(str, Enum):
    IDLE = "idle"
    BUSY = "busy"
    GONE = "gone"


def build_split_command(command: str, *, percent: int = DEFAULT_SPLIT_PERCENT) -> list[str]:
    # -h splits side by side; -P -F prints the new pane id.
    return [
        "tmux",
        "split-window",
        "-h",
        "-p",
        str(percent),
        "-P",
        "-F",
        PANE_ID_FORMAT,
        command,
    ]


def build_lookup_command(pane_id: str, fmt: str = PANE_ID_FORMAT) -> list[str]:
    return ["tmux", "display-message", "-t", pane_id, "-p", fmt]


def build_interrupt_command(pane_id: str) -> list[str]:
    return ["tmux", "send-keys", "-t", pane_id, "C-c"]


def build_send_command(pane_id: str, command: str) -> list[str]:
    return ["tmux", "send-keys", "-t", pane_id, f"clear && {command}", "Enter"]


def is_idle_shell(current_command: str) -> bool:
    name = current_command.strip().lstrip("-").rsplit("/", 1)[-1]
    return name in IDLE_SHELLS


class TmuxAdapter:
    """Create and recycle tmux panes through the tmux CLI."""

    def __init__(
        self,
        *,
        runner: Runner = subprocess.run,
        split_percent: int = DEFAULT_SPLIT_PERCENT,
        grace_seconds: float = DEFAULT_INTERRUPT_GRACE_SECONDS,
        idle_policy: PollPolicy | None = None,
        command_timeout: float = DEFAULT_COMMAND_TIMEOUT_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.runner = runner
        self.split_percent = split_percent
        self.grace_seconds = grace_seconds
        self.idle_policy = idle_policy or PollPolicy(
            timeout_seconds=DEFAULT_IDLE_TIMEOUT_SECONDS,
            interval_seconds=DEFAULT_IDLE_POLL_SECONDS,
        )
        self.command_timeout = command_timeout
        self.sleep = sleep

    def _run(self, args: list[str]) -> CommandResult:
        return run_command(args, runner=self.runner, timeout=self.command_timeout)

    def lookup_pane(self, pane_id: str) -> CommandResult:
        return self._run(build_lookup_command(pane_id))

    def pane_current_command(self, pane_id: str) -> str | None:
        result = self._run(build_lookup_command(pane_id, PANE_COMMAND_FORMAT))
        if not result.ok:
            return None
        return result.output

    def create_new_pane(self, command: str) -> str | None:
        """Split the current window and return the new pane id, or None on failure."""
        result = self._run(build_split_command(command, percent=self.split_percent))
        if not result.ok:
            logger.error(
                "tmux split-window failed code=%s stderr=%s",
                result.returncode,
                result.stderr.strip()[:200],
            )
            return None
        pane_id = result.output
        logger.info("Created canvas pane pane_id=%s", pane_id or "-")
        return pane_id

    def wait_for_idle(self, pane_id: str) -> PaneState:
        """Wait until the pane's foreground command is a shell again.

        Stops early with ``GONE`` once tmux can no longer find the pane.
        """
        state = {"value": PaneState.BUSY}

        def _settled() -> bool:
            current = self.pane_current_command(pane_id)
            if current is None:
                state["value"] = PaneState.GONE
                return True
            if is_idle_shell(current):
                state["value"] = PaneState.IDLE
                return True
            return False

        poll_until(_settled, policy=self.idle_policy, sleep=self.sleep)
        return state["value"]

    def reuse_existing_pane(self, pane_id: str, command: str) -> bool:
        interrupt = self._run(build_interrupt_command(pane_id))
        if not interrupt.ok:
            logger.warning("Interrupt failed for canvas pane pane_id=%s", pane_id)
            return False

        if self.grace_seconds > 0:
            self.sleep(self.grace_seconds)
        state = self.wait_for_idle(pane_id)
        if state == PaneState.GONE:
            logger.info("Canvas pane closed after interrupt pane_id=%s", pane_id)
            return False
        if state == PaneState.BUSY:
            # Best-effort: the command is still typed into the pane.
            logger.warning(
                "Canvas pane did not return to a shell within %.2fs pane_id=%s",
                self.idle_policy.timeout_seconds,
                pane_id,
            )

        sent = self._run(build_send_command(pane_id, command))
        if not sent.ok:
            logger.warning("send-keys failed for canvas pane pane_id=%s", pane_id)
            return False
        logger.info("Reused canvas pane pane_id=%s", pane_id)
        return True
