"""External command invocation returning explicit results instead of raising."""

from __future__ import annotations

import logging as py_logging
import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

logger = py_logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]

DEFAULT_COMMAND_TIMEOUT_SECONDS = 10.0
LOG_TRUNCATE_LIMIT = 320
# Exit code used when the executable could not be started at all.
SPAWN_ERROR_RETURNCODE = 127
TIMEOUT_RETURNCODE = 124
HOST_ERROR_RETURNCODE = 1


@dataclass(frozen=True)
class CommandResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        return self.stdout.strip()


def truncate_log(value: str, limit: int = LOG_TRUNCATE_LIMIT) -> str:
    value = value.strip()
    if len(value) <= limit:
        return value
    return value[: max(0, limit - 3)] + "..."


def command_for_log(args: list[str] | tuple[str, ...]) -> str:
    """Return a shell-safe command string bounded for logging."""
    if not args:
        return ""
    return truncate_log(" ".join(shlex.quote(part) for part in args))


def run_command(
    args: list[str],
    *,
    runner: Runner = subprocess.run,
    timeout: float = DEFAULT_COMMAND_TIMEOUT_SECONDS,
) -> CommandResult:
    """Run ``args`` and capture its exit status and output.

    Launch failures, timeouts and undecodable output are folded into a failed ``CommandResult`` so
    callers can branch on ``ok`` without exception handling.
    """
    logger.debug("host-command start command=%s", command_for_log(args))
    try:
        completed = runner(
            args,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("host-command timeout seconds=%s command=%s", timeout, command_for_log(args))
        return CommandResult(tuple(args), TIMEOUT_RETURNCODE, stderr="timed out")
    except OSError as exc:
        logger.warning("host-command launch-failed command=%s error=%s", command_for_log(args), exc)
        return CommandResult(tuple(args), SPAWN_ERROR_RETURNCODE, stderr=str(exc))
    except (ValueError, subprocess.SubprocessError) as exc:
        # UnicodeDecodeError is a ValueError.
        logger.warning("host-command error command=%s error=%s", command_for_log(args), exc)
        return CommandResult(tuple(args), HOST_ERROR_RETURNCODE, stderr=str(exc))

    result = CommandResult(
        tuple(args),
        completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
    if not result.ok:
        logger.debug(
            "host-command failed code=%s command=%s stderr=%s",
            result.returncode,
            command_for_log(args),
            truncate_log(result.stderr),
        )
    return result
