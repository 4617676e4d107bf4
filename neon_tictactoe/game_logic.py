import logging
from typing import NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

BOARD_CELLS = 9
EMPTY = ''
PLAYER_X = 'X'
PLAYER_O = 'O'
MARKS = (PLAYER_X, PLAYER_O)

# rows, columns, then both diagonals; order decides which line is reported
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

Board = Tuple[str, ...]


class IllegalMove(ValueError):
    """
    move rejected: bad index, occupied cell, or game already over
    """


class WinResult(NamedTuple):
    mark: str
    line: Tuple[int, int, int]


def new_board() -> Board:
    """
    nine empty cells, row-major
    """
    return (EMPTY,) * BOARD_CELLS


def detect_winner(board: Board) -> Optional[WinResult]:
    """
    scan lines in fixed order, first full same-mark line wins
    """
    for line in WIN_LINES:
        a, b, c = line
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return WinResult(board[a], line)
    return None


def is_draw(board: Board, win_result: Optional[WinResult]) -> bool:
    """
    no winner and no empty cell left
    """
    return win_result is None and all(cell != EMPTY for cell in board)


def is_terminal(board: Board) -> bool:
    win_result = detect_winner(board)
    return win_result is not None or is_draw(board, win_result)


def empty_cells(board: Board):
    return [i for i, cell in enumerate(board) if cell == EMPTY]


def next_turn(mark: str) -> str:
    return PLAYER_O if mark == PLAYER_X else PLAYER_X


def apply_move(board: Board, index: int, mark: str) -> Board:
    """
    return a new board with `mark` at `index`

    raises IllegalMove and leaves `board` untouched when the index is out
    of range, the cell is taken, or the game is already decided.
    """
    # bool is an int subclass, keep it out
    if isinstance(index, bool) or not isinstance(index, int) \
       or not 0 <= index < BOARD_CELLS:
        raise IllegalMove(f"index {index!r} is outside 0-8")
    if mark not in MARKS:
        raise IllegalMove(f"unknown mark {mark!r}")
    if board[index] != EMPTY:
        raise IllegalMove(f"cell {index} already holds {board[index]}")
    if is_terminal(board):
        raise IllegalMove("game is already over")
    cells = list(board)
    cells[index] = mark
    return tuple(cells)


class GameLogic:
    """
    tic-tac-toe rules and state
    """
    def __init__(self):
        """
        init board and counters
        """
        self.reset_game()

    @property
    def win_result(self):
        # always derived from the board
        return detect_winner(self.board)

    @property
    def winner(self):
        result = self.win_result
        return result.mark if result else None

    @property
    def game_over(self):
        return is_terminal(self.board)

    def make_move(self, index):
        """
        place current player's mark, check result
        returns: 'win', 'draw', 'continue', or 'invalid'
        """
        player = self.current_player
        try:
            self.board = apply_move(self.board, index, player)
        except IllegalMove as exc:
            logger.debug("rejected move by %s: %s", player, exc)
            return "invalid"
        result = detect_winner(self.board)
        if result is not None:
            return "win"
        if is_draw(self.board, result):
            return "draw"
        self.current_player = next_turn(player)
        return "continue"

    def reset_game(self):
        """
        clear board, x moves first
        """
        self.board = new_board()
        self.current_player = PLAYER_X
