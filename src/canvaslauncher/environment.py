"""Terminal host detection from environment and platform signals."""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping

from canvaslauncher.models import TerminalEnvironment, TerminalKind

MULTIPLEXER_ENV = "TMUX"
TERM_PROGRAM_ENV = "TERM_PROGRAM"
GUI_HOST_TERM_PROGRAM = "ghostty"
GUI_HOST_SYSTEM = "Darwin"


def detect_terminal(
    environ: Mapping[str, str] | None = None,
    *,
    system_name: str | None = None,
) -> TerminalEnvironment:
    """Classify the current terminal host.

    Ghostty on macOS wins over tmux when both signals are present; anything
    else is ``UNSUPPORTED``. Missing signals never raise.
    """
    env = os.environ if environ is None else environ
    system = platform.system() if system_name is None else system_name

    in_multiplexer = bool(env.get(MULTIPLEXER_ENV, ""))
    in_gui_host = env.get(TERM_PROGRAM_ENV, "") == GUI_HOST_TERM_PROGRAM
    is_supported_os = system == GUI_HOST_SYSTEM

    if in_gui_host and is_supported_os:
        summary = TerminalKind.GUI_HOST
    elif in_multiplexer:
        summary = TerminalKind.MULTIPLEXER
    else:
        summary = TerminalKind.UNSUPPORTED

    return TerminalEnvironment(
        in_multiplexer=in_multiplexer,
        in_gui_host=in_gui_host,
        is_supported_os=is_supported_os,
        summary=summary,
    )
