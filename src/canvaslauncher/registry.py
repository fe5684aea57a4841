"""Single-slot persistence of the current canvas tmux pane."""

from __future__ import annotations

import logging as py_logging
from pathlib import Path
from typing import Protocol

from canvaslauncher.config import DEFAULT_PANE_FILE
from canvaslauncher.hosts.tmux import TmuxAdapter
from canvaslauncher.models import PaneReference

logger = py_logging.getLogger(__name__)


class PaneStore(Protocol):
    def read(self) -> str: ...

    def write(self, value: str) -> None: ...

    def clear(self) -> None: ...


class FilePaneStore:
    """Pane id kept as the sole content of a well-known file.

    I/O errors are logged and treated as an empty store.
    """

    def __init__(self, path: str | Path = DEFAULT_PANE_FILE) -> None:
        self.path = Path(path)

    def read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError):
            logger.warning("Could not read pane file path=%s", self.path, exc_info=True)
            return ""

    def write(self, value: str) -> None:
        try:
            self.path.write_text(value, encoding="utf-8")
        except OSError:
            logger.warning("Could not write pane file path=%s", self.path, exc_info=True)

    def clear(self) -> None:
        self.write("")


class MemoryPaneStore:
    def __init__(self, value: str = "") -> None:
        self.value = value

    def read(self) -> str:
        return self.value

    def write(self, value: str) -> None:
        self.value = value

    def clear(self) -> None:
        self.value = ""


class PaneRegistry:
    def __init__(self, store: PaneStore, tmux: TmuxAdapter) -> None:
        self.store = store
        self.tmux = tmux

    def read(self) -> PaneReference | None:
        pane_id = self.store.read().strip()
        if not pane_id:
            return None
        return PaneReference(pane_id=pane_id)

    def validate(self, ref: PaneReference | None) -> bool:
        """Return True only if tmux resolves the pane and echoes back the same id.

        tmux recycles pane labels, so a successful lookup alone is not enough.
        """
        if ref is None or not ref.pane_id:
            return False
        result = self.tmux.lookup_pane(ref.pane_id)
        valid = result.ok and result.output == ref.pane_id
        if not valid:
            logger.info(
                "Stale canvas pane reference pane_id=%s code=%s echoed=%s",
                ref.pane_id,
                result.returncode,
                result.output or "-",
            )
        return valid

    def save(self, pane_id: str) -> None:
        self.store.write(pane_id)

    def clear(self) -> None:
        self.store.clear()

    def current(self) -> PaneReference | None:
        """Return the stored reference if it is still live, clearing it otherwise."""
        ref = self.read()
        if ref is None:
            return None
        if self.validate(ref):
            return ref
        self.clear()
        return None
