"""
board.py - Grid representation and gravity for Connect Four

This module implements the Board class, which stores the cells of the game
grid and answers questions about columns: whether they are full and which
row a dropped piece would land in. It knows nothing about turns or winners;
see rules.py for those.
"""

from typing import Optional, Set

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (ROWS, COLS, Player, is_valid_column,
                               is_valid_position, render_board_ascii)


class Board:
    """
    The Connect Four grid.

    Cells are addressed with 1-based (row, column) pairs. The backing array
    has one permanently empty border cell on every side, so row 1 / column 1
    map to array index 1 without any offset arithmetic.
    """

    def __init__(self):
        """Initialize an empty board."""
        self.grid = np.zeros((ROWS + 2, COLS + 2), dtype=np.int8)

    def copy(self) -> 'Board':
        """
        Create a deep copy of the board.

        Returns:
            A new Board instance with the same cells
        """
        new_board = Board()
        new_board.grid = self.grid.copy()
        return new_board

    def clear(self) -> None:
        """Make every playable cell empty."""
        self.grid[1:ROWS + 1, 1:COLS + 1] = Player.EMPTY.value

    @property
    def cells(self) -> np.ndarray:
        """Read-only ROWS x COLS view of the playable region."""
        view = self.grid[1:ROWS + 1, 1:COLS + 1]
        view.flags.writeable = False
        return view

    def get_cell(self, row: int, col: int) -> Player:
        """
        Return the owner of the cell at (row, col).

        Raises:
            IndexError: If the position is outside the playable region
        """
        if not is_valid_position(row, col):
            raise IndexError(f"Cell ({row}, {col}) out of bounds")
        return Player(int(self.grid[row, col]))

    def set_cell(self, row: int, col: int, player: Player) -> None:
        """
        Set the owner of the cell at (row, col).

        Raises:
            IndexError: If the position is outside the playable region
        """
        if not is_valid_position(row, col):
            raise IndexError(f"Cell ({row}, {col}) out of bounds")
        self.grid[row, col] = player.value

    def is_column_full(self, col: int) -> bool:
        """A column is full when its top playable cell is taken."""
        if not is_valid_column(col):
            raise IndexError(f"Column {col} out of bounds")
        return self.grid[1, col] != Player.EMPTY.value

    def drop_row(self, col: int) -> Optional[int]:
        """
        Find the row a piece dropped into ``col`` would land in.

        Scans upward from the bottom row until an empty cell is found.

        Args:
            col: Column to drop into (1-based)

        Returns:
            The lowest empty row, or None if the column is full
        """
        if self.is_column_full(col):
            return None

        row = ROWS
        while self.grid[row, col] != Player.EMPTY.value:
            row -= 1
        debug.trace(f"Piece dropped in column {col} lands on row {row}", "board")
        return row

    def legal_columns(self) -> Set[int]:
        """Columns that still have room for a piece."""
        return {col for col in range(1, COLS + 1) if self.grid[1, col] == Player.EMPTY.value}

    def count_pieces(self) -> int:
        """Number of occupied playable cells."""
        return int(np.count_nonzero(self.grid[1:ROWS + 1, 1:COLS + 1]))

    def is_full(self) -> bool:
        return not self.legal_columns()

    def render(self, **kwargs) -> str:
        """
        Render the board as a string.

        Keyword arguments are passed on to ``render_board_ascii``.
        """
        return render_board_ascii(self.cells, **kwargs)

    def __str__(self) -> str:
        return self.render()


if __name__ == "__main__":
    board = Board()
    for col, player in [(4, Player.ONE), (4, Player.TWO), (3, Player.ONE)]:
        row = board.drop_row(col)
        board.set_cell(row, col, player)
    print(board)
    print(f"Legal columns: {sorted(board.legal_columns())}")
