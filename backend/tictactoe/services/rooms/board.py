from typing import List, Optional, Sequence, Tuple

from tictactoe.models import BOARD_SIZE, DRAW

WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


def is_valid_index(index) -> bool:
    # bool is an int subclass; True/False are not cell indexes
    if isinstance(index, bool) or not isinstance(index, int):
        return False
    return 0 <= index < BOARD_SIZE


def winning_symbols(board: Sequence[Optional[str]]) -> List[str]:
    return [
        board[a] for a, b, c in WIN_LINES
        if board[a] is not None and board[a] == board[b] == board[c]
    ]


def check_winner(board: Sequence[Optional[str]]) -> Optional[str]:
    """Return the winning symbol, ``DRAW`` for a full board, or None.

    Only one cell is written per accepted move, so every completed line
    carries the same symbol.
    """
    symbols = winning_symbols(board)
    if symbols:
        assert len(set(symbols)) == 1, f"conflicting winning lines: {symbols}"
        return symbols[0]
    if all(cell is not None for cell in board):
        return DRAW
    return None
