"""Terminal host adapters."""

from .ghostty import GhosttyAdapter
from .tmux import TmuxAdapter

__all__ = ["GhosttyAdapter", "TmuxAdapter"]
