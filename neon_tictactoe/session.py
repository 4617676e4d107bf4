"""
game flow state for the window: one tagged phase instead of loose flags
"""
import enum
import itertools
import logging
from dataclasses import dataclass

from .game_logic import GameLogic

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    PLAYING = "playing"
    AWAITING_HINT = "awaiting_hint"
    WON = "won"
    DRAWN = "drawn"


TERMINAL_PHASES = (Phase.WON, Phase.DRAWN)


@dataclass(frozen=True)
class HintTicket:
    """
    one hint request and the position it was asked for
    """
    request_id: int
    board: tuple
    mark: str


class GameSession:
    """
    wraps GameLogic with the hint lifecycle
    """
    def __init__(self, logic=None):
        self.logic = logic or GameLogic()
        self._ids = itertools.count(1)
        self.reset()

    @property
    def board(self):
        return self.logic.board

    @property
    def current_player(self):
        return self.logic.current_player

    @property
    def win_result(self):
        return self.logic.win_result

    @property
    def is_over(self):
        return self.phase in TERMINAL_PHASES

    @property
    def accepts_moves(self):
        # a pending hint does not block the board
        return not self.is_over

    @property
    def can_request_hint(self):
        return self.phase is Phase.PLAYING

    def play(self, index):
        """
        apply a move for the side to move
        returns GameLogic status: 'win', 'draw', 'continue', or 'invalid'
        """
        if self.is_over:
            return "invalid"
        res = self.logic.make_move(index)
        if res == "invalid":
            return res
        # any accepted move makes the shown or pending hint meaningless
        self.hint = None
        self._pending = None
        if res == "win":
            self.phase = Phase.WON
        elif res == "draw":
            self.phase = Phase.DRAWN
        else:
            self.phase = Phase.PLAYING
        return res

    def begin_hint(self):
        """
        enter awaiting-hint, returns a ticket or None if not allowed now
        """
        if not self.can_request_hint:
            return None
        self.hint = None
        self._pending = HintTicket(next(self._ids), self.logic.board, self.logic.current_player)
        self.phase = Phase.AWAITING_HINT
        return self._pending

    def resolve_hint(self, ticket, suggestion):
        """
        accept a hint only for the pending ticket on an unchanged board
        """
        if ticket != self._pending or ticket.board != self.logic.board:
            logger.info("discarding stale hint for request %s", ticket.request_id)
            return False
        self._pending = None
        self.hint = suggestion
        self.phase = Phase.PLAYING
        return True

    def reset(self):
        """
        fresh board, x to move, no hint
        """
        self.logic.reset_game()
        self.phase = Phase.PLAYING
        self.hint = None
        self._pending = None
