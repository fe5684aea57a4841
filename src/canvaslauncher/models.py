"""Canvas launch domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TerminalKind(str, Enum):
    GUI_HOST = "ghostty (macOS)"
    MULTIPLEXER = "tmux"
    UNSUPPORTED = "unsupported"


class SpawnMethod(str, Enum):
    GUI_HOST = "ghostty"
    MULTIPLEXER = "tmux"


@dataclass(frozen=True)
class TerminalEnvironment:
    in_multiplexer: bool
    in_gui_host: bool
    is_supported_os: bool
    summary: TerminalKind

    @property
    def gui_host_usable(self) -> bool:
        return self.in_gui_host and self.is_supported_os

    def to_dict(self) -> dict[str, object]:
        return {
            "in_multiplexer": self.in_multiplexer,
            "in_gui_host": self.in_gui_host,
            "is_supported_os": self.is_supported_os,
            "summary": self.summary.value,
        }


@dataclass(frozen=True)
class SpawnRequest:
    kind: str
    canvas_id: str
    config_json: str | None = None
    socket_path: str | None = None
    scenario: str | None = None


@dataclass(frozen=True)
class PaneReference:
    pane_id: str


@dataclass(frozen=True)
class SpawnResult:
    method: SpawnMethod
    pid: int | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"method": self.method.value}
        if self.pid is not None:
            payload["pid"] = self.pid
        return payload
