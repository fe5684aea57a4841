from __future__ import annotations

import subprocess
from pathlib import Path

from canvaslauncher.hosts.tmux import TmuxAdapter
from canvaslauncher.models import PaneReference
from canvaslauncher.registry import FilePaneStore, MemoryPaneStore, PaneRegistry


def _cp(returncode: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def _no_host(cmd: list[str], **_: object) -> subprocess.CompletedProcess:
    raise AssertionError(f"unexpected host call: {cmd}")


def _registry(store, runner=_no_host) -> PaneRegistry:
    return PaneRegistry(store, TmuxAdapter(runner=runner, sleep=lambda _: None))


def test_save_then_read_round_trips(tmp_path: Path) -> None:
    registry = _registry(FilePaneStore(tmp_path / "pane-id"))
    registry.save("%5")
    assert registry.read() == PaneReference(pane_id="%5")


def test_read_missing_or_blank_file_is_none(tmp_path: Path) -> None:
    path = tmp_path / "pane-id"
    registry = _registry(FilePaneStore(path))
    assert registry.read() is None
    path.write_text("  \n", encoding="utf-8")
    assert registry.read() is None


def test_read_strips_trailing_newline() -> None:
    assert _registry(MemoryPaneStore("%9\n")).read() == PaneReference(pane_id="%9")


def test_clear_is_idempotent(tmp_path: Path) -> None:
    path = tmp_path / "pane-id"
    registry = _registry(FilePaneStore(path))
    registry.save("%1")
    registry.clear()
    assert registry.read() is None
    registry.clear()
    assert registry.read() is None
    assert path.read_text(encoding="utf-8") == ""


def test_validate_empty_reference_skips_host() -> None:
    registry = _registry(MemoryPaneStore())
    assert registry.validate(None) is False
    assert registry.validate(PaneReference(pane_id="")) is False


def test_validate_requires_identical_echo() -> None:
    def runner(cmd: list[str], **_: object) -> subprocess.CompletedProcess:
        assert cmd == ["tmux", "display-message", "-t", "%2", "-p", "#{pane_id}"]
        return _cp(0, "%2\n")

    assert _registry(MemoryPaneStore(), runner).validate(PaneReference("%2")) is True


def test_validate_rejects_aliased_pane() -> None:
    def runner(cmd: list[str], **_: object) -> subprocess.CompletedProcess:
        return _cp(0, "%0\n")

    assert _registry(MemoryPaneStore(), runner).validate(PaneReference("%2")) is False


def test_validate_rejects_lookup_failure() -> None:
    def runner(cmd: list[str], **_: object) -> subprocess.CompletedProcess:
        return _cp(1, stderr="can't find pane: %2")

    assert _registry(MemoryPaneStore(), runner).validate(PaneReference("%2")) is False


def test_validate_fails_closed_when_tmux_missing() -> None:
    def runner(cmd: list[str], **_: object) -> subprocess.CompletedProcess:
        raise FileNotFoundError("tmux")

    assert _registry(MemoryPaneStore(), runner).validate(PaneReference("%2")) is False


def test_current_clears_stale_reference() -> None:
    store = MemoryPaneStore("%2")

    def runner(cmd: list[str], **_: object) -> subprocess.CompletedProcess:
        return _cp(1)

    assert _registry(store, runner).current() is None
    assert store.value == ""


def test_file_store_swallows_io_errors(tmp_path: Path) -> None:
    store = FilePaneStore(tmp_path / "missing-dir" / "pane-id")
    store.write("%1")
    assert store.read() == ""


def test_file_store_treats_directory_as_empty(tmp_path: Path) -> None:
    assert FilePaneStore(tmp_path).read() == ""


def test_validate_treats_undecodable_output_as_stale() -> None:
    seen: dict[str, object] = {}

    def runner(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess:
        seen.update(kwargs)
        raise UnicodeDecodeError("utf-8", b"\xff\xfe", 0, 1, "invalid start byte")

    registry = _registry(MemoryPaneStore("%2"), runner)
    assert registry.validate(PaneReference("%2")) is False
    assert seen["errors"] == "replace"


def test_validate_with_replaced_bytes_does_not_match() -> None:
    def runner(cmd: list[str], **_: object) -> subprocess.CompletedProcess:
        return _cp(0, b"\xff\xfe".decode("utf-8", errors="replace"))

    assert _registry(MemoryPaneStore(), runner).validate(PaneReference("%2")) is False
