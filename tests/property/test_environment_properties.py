from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from canvaslauncher.environment import detect_terminal
from canvaslauncher.models import TerminalKind

_TERM_PROGRAMS = st.one_of(
    st.none(), st.sampled_from(["ghostty", "Ghostty", "iTerm.app", "Apple_Terminal", ""]), st.text()
)
_TMUX = st.one_of(st.none(), st.just(""), st.text(min_size=1))
_SYSTEMS = st.one_of(st.sampled_from(["Darwin", "Linux", "Windows"]), st.text())


def _environ(term_program: str | None, tmux: str | None) -> dict[str, str]:
    environ: dict[str, str] = {}
    if term_program is not None:
        environ["TERM_PROGRAM"] = term_program
    if tmux is not None:
        environ["TMUX"] = tmux
    return environ


@given(_TERM_PROGRAMS, _TMUX, _SYSTEMS)
def test_classification_is_total_and_ordered(
    term_program: str | None, tmux: str | None, system: str
) -> None:
    env = detect_terminal(_environ(term_program, tmux), system_name=system)

    if term_program == "ghostty" and system == "Darwin":
        expected = TerminalKind.GUI_HOST
    elif tmux:
        expected = TerminalKind.MULTIPLEXER
    else:
        expected = TerminalKind.UNSUPPORTED
    assert env.summary == expected


@given(_TERM_PROGRAMS, _TMUX, _SYSTEMS)
def test_classification_is_deterministic(
    term_program: str | None, tmux: str | None, system: str
) -> None:
    environ = _environ(term_program, tmux)
    assert detect_terminal(environ, system_name=system) == detect_terminal(environ, system_name=system)
