"""Tests for the Qt-side helpers that do not need a visible window."""

import pytest

from neon_tictactoe.advisor import HintSuggestion
from neon_tictactoe.hint_worker import HintWorker
from neon_tictactoe.session import GameSession
from neon_tictactoe.ui.board_widget import cell_at


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (10, 10, 0),
        (150, 10, 1),
        (290, 10, 2),
        (150, 150, 4),
        (10, 290, 6),
        (299.9, 299.9, 8),
    ],
)
def test_cell_at_square_widget(x, y, expected) -> None:
    assert cell_at(x, y, 300, 300) == expected


def test_cell_at_ignores_letterbox_margin() -> None:
    # 500x300 widget: grid is 300 wide, centered with 100px margins
    assert cell_at(50, 150, 500, 300) is None
    assert cell_at(110, 10, 500, 300) == 0
    assert cell_at(399, 299, 500, 300) == 8


def test_cell_at_empty_widget() -> None:
    assert cell_at(0, 0, 0, 0) is None


class StubAdvisor:
    def __init__(self, suggestion):
        self.suggestion = suggestion
        self.calls = []

    def request_hint(self, board, mark):
        self.calls.append((board, mark))
        return self.suggestion


def test_hint_worker_emits_ticket_and_suggestion() -> None:
    suggestion = HintSuggestion(4, "Center control")
    advisor = StubAdvisor(suggestion)
    worker = HintWorker(advisor)
    session = GameSession()
    session.play(0)
    ticket = session.begin_hint()

    received = []
    worker.hint_ready.connect(lambda t, s: received.append((t, s)))
    worker.request_hint(ticket)

    assert advisor.calls == [(ticket.board, "O")]
    assert received == [(ticket, suggestion)]
