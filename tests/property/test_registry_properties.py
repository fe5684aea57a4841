from __future__ import annotations

import subprocess

from hypothesis import given
from hypothesis import strategies as st

from canvaslauncher.hosts.tmux import TmuxAdapter
from canvaslauncher.models import PaneReference
from canvaslauncher.registry import MemoryPaneStore, PaneRegistry

_PANE_IDS = st.from_regex(r"%[0-9]{1,5}", fullmatch=True)


def _registry(runner) -> PaneRegistry:
    return PaneRegistry(MemoryPaneStore(), TmuxAdapter(runner=runner, sleep=lambda _: None))


@given(_PANE_IDS)
def test_save_then_read_yields_same_reference(pane_id: str) -> None:
    registry = _registry(lambda cmd, **_: subprocess.CompletedProcess(cmd, 0, "", ""))
    registry.save(pane_id)
    assert registry.read() == PaneReference(pane_id=pane_id)


@given(_PANE_IDS, _PANE_IDS)
def test_only_identical_echo_validates(pane_id: str, echoed: str) -> None:
    registry = _registry(lambda cmd, **_: subprocess.CompletedProcess(cmd, 0, echoed + "\n", ""))
    assert registry.validate(PaneReference(pane_id)) is (pane_id == echoed)
