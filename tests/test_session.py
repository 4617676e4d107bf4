"""Tests for the tagged game/hint state machine."""

from neon_tictactoe.advisor import FALLBACK_SUGGESTION, HintSuggestion
from neon_tictactoe.game_logic import new_board
from neon_tictactoe.session import GameSession, Phase

CENTER = HintSuggestion(4, "Center control")


def _play(session, *moves):
    return [session.play(i) for i in moves]


class TestGameSession:
    def setup_method(self) -> None:
        self.session = GameSession()

    def test_starts_playing(self) -> None:
        assert self.session.phase is Phase.PLAYING
        assert self.session.hint is None
        assert self.session.board == new_board()
        assert self.session.current_player == "X"
        assert self.session.can_request_hint
        assert self.session.accepts_moves

    def test_hint_round_trip(self) -> None:
        ticket = self.session.begin_hint()
        assert ticket.board == new_board()
        assert ticket.mark == "X"
        assert self.session.phase is Phase.AWAITING_HINT
        assert not self.session.can_request_hint

        assert self.session.resolve_hint(ticket, CENTER)
        assert self.session.hint == CENTER
        assert self.session.phase is Phase.PLAYING

    def test_no_second_request_while_pending(self) -> None:
        assert self.session.begin_hint() is not None
        assert self.session.begin_hint() is None

    def test_moves_allowed_while_hint_pending(self) -> None:
        self.session.begin_hint()
        assert self.session.accepts_moves
        assert self.session.play(0) == "continue"
        assert self.session.phase is Phase.PLAYING

    def test_stale_hint_is_discarded_after_move(self) -> None:
        ticket = self.session.begin_hint()
        self.session.play(0)
        assert not self.session.resolve_hint(ticket, CENTER)
        assert self.session.hint is None
        assert self.session.phase is Phase.PLAYING

    def test_stale_hint_is_discarded_after_reset(self) -> None:
        ticket = self.session.begin_hint()
        self.session.reset()
        # same empty board as the ticket, but a different request
        assert not self.session.resolve_hint(ticket, CENTER)
        assert self.session.hint is None

    def test_old_ticket_loses_to_newer_one(self) -> None:
        first = self.session.begin_hint()
        self.session.play(0)
        second = self.session.begin_hint()
        assert second.request_id > first.request_id
        assert not self.session.resolve_hint(first, CENTER)
        assert self.session.phase is Phase.AWAITING_HINT
        assert self.session.resolve_hint(second, CENTER)

    def test_move_clears_visible_hint(self) -> None:
        ticket = self.session.begin_hint()
        self.session.resolve_hint(ticket, CENTER)
        self.session.play(4)
        assert self.session.hint is None

    def test_new_request_clears_visible_hint(self) -> None:
        ticket = self.session.begin_hint()
        self.session.resolve_hint(ticket, FALLBACK_SUGGESTION)
        assert self.session.hint is FALLBACK_SUGGESTION
        self.session.begin_hint()
        assert self.session.hint is None

    def test_win_ends_game_and_blocks_hints(self) -> None:
        assert _play(self.session, 0, 3, 1, 4, 2)[-1] == "win"
        assert self.session.phase is Phase.WON
        assert self.session.win_result.mark == "X"
        assert not self.session.accepts_moves
        assert self.session.begin_hint() is None
        assert self.session.play(8) == "invalid"

    def test_draw_ends_game(self) -> None:
        assert _play(self.session, 0, 1, 2, 4, 3, 5, 7, 6, 8)[-1] == "draw"
        assert self.session.phase is Phase.DRAWN
        assert self.session.begin_hint() is None

    def test_winning_move_while_awaiting_discards_hint(self) -> None:
        _play(self.session, 0, 3, 1, 4)
        ticket = self.session.begin_hint()
        self.session.play(2)
        assert not self.session.resolve_hint(ticket, CENTER)
        assert self.session.phase is Phase.WON

    def test_invalid_move_keeps_pending_hint(self) -> None:
        self.session.play(0)
        ticket = self.session.begin_hint()
        assert self.session.play(0) == "invalid"
        assert self.session.phase is Phase.AWAITING_HINT
        assert self.session.resolve_hint(ticket, CENTER)

    def test_reset_after_win(self) -> None:
        _play(self.session, 0, 3, 1, 4, 2)
        self.session.reset()
        assert self.session.phase is Phase.PLAYING
        assert self.session.board == new_board()
        assert self.session.current_player == "X"
