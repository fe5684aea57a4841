"""Show a canvas renderer in a Ghostty split or a reusable tmux pane."""

from .errors import CanvasLauncherError, ExitCode
from .models import SpawnMethod, SpawnRequest, SpawnResult, TerminalEnvironment, TerminalKind
from .spawn import spawn_canvas

__all__ = [
    "CanvasLauncherError",
    "ExitCode",
    "spawn_canvas",
    "SpawnMethod",
    "SpawnRequest",
    "SpawnResult",
    "TerminalEnvironment",
    "TerminalKind",
]
