"""Ghostty (macOS) surface launching via AppleScript UI automation."""

from __future__ import annotations

import logging as py_logging
import subprocess

from canvaslauncher.config import DEFAULT_COMMAND_TIMEOUT_SECONDS, DEFAULT_GUI_HOST_APP
from canvaslauncher.process import Runner, run_command

logger = py_logging.getLogger(__name__)

# AppleScript key code for Return.
_RETURN_KEY_CODE = 36


def escape_applescript(text: str) -> str:
    """Escape backslashes and double quotes for an AppleScript string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def build_split_script(command: str, *, app_name: str = DEFAULT_GUI_HOST_APP) -> str:
    app = escape_applescript(app_name)
    return f"""
tell application "{app}"
  activate
end tell
delay 0.1
tell application "System Events"
  tell process "{app}"
    keystroke "d" using {{command down}}
    delay 0.3
    keystroke "{escape_applescript(command)}"
    delay 0.05
    key code {_RETURN_KEY_CODE}
  end tell
end tell
"""


class GhosttyAdapter:
    def __init__(
        self,
        *,
        runner: Runner = subprocess.run,
        app_name: str = DEFAULT_GUI_HOST_APP,
        command_timeout: float = DEFAULT_COMMAND_TIMEOUT_SECONDS,
    ) -> None:
        self.runner = runner
        self.app_name = app_name
        self.command_timeout = command_timeout

    def open_surface(self, command: str) -> bool:
        script = build_split_script(command, app_name=self.app_name)
        result = run_command(
            ["osascript", "-e", script],
            runner=self.runner,
            timeout=self.command_timeout,
        )
        if not result.ok:
            logger.warning(
                "%s automation failed code=%s stderr=%s",
                self.app_name,
                result.returncode,
                result.stderr.strip()[:200],
            )
            return False
        logger.info("Opened canvas split in %s", self.app_name)
        return True
