"""
utils.py - Constants, enumerations and helpers for the Connect Four game

Rows and columns are 1-based throughout the package: row 1 is the top
playable row, row ROWS the bottom one, and columns run 1..COLS from left to
right.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
CENTER_COLUMN = COLS // 2 + 1

# Display constants
SQUARE_SIZE = 64
DROPPING_SPEED_MS = 10  # Pause between animation frames
DROP_FRAMES_PER_CELL = 5  # The falling piece moves 0.2 of a cell per frame
ANIMATION_ON = True

BOARD_WIDTH = COLS * SQUARE_SIZE + 1
BOARD_HEIGHT = (ROWS + 1) * SQUARE_SIZE + 1  # One extra row for the next piece

BACKGROUND_COLOR = (210, 240, 250)
GRID_COLOR = (128, 128, 128)

Position = Tuple[int, int]  # (row, column)


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player (the pig)
    TWO = 2    # Second player (the bird)

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def label(self) -> str:
        """Name shown to the players."""
        return PLAYER_LABELS[self]

    @property
    def color(self) -> Tuple[int, int, int]:
        return PLAYER_COLORS[self]

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


PLAYER_LABELS = {
    Player.EMPTY: "Nobody",
    Player.ONE: "Pig",
    Player.TWO: "Bird",
}

PLAYER_COLORS = {
    Player.EMPTY: BACKGROUND_COLOR,
    Player.ONE: (120, 200, 80),
    Player.TWO: (220, 40, 40),
}


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        if player == Player.ONE:
            return GameResult.PLAYER_ONE_WIN
        if player == Player.TWO:
            return GameResult.PLAYER_TWO_WIN
        raise ValueError(f"No win result for {player!r}")


class Direction(Enum):
    """The four axes a winning streak can lie on."""
    VERTICAL = auto()
    HORIZONTAL = auto()
    DIAGONAL_UP = auto()    # Bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right


# (row, col) steps scanned away from the last placed piece on each axis.
# Rows grow downward. The vertical axis is only scanned downward: a piece
# always lands on top of its column, so nothing of its colour can be above it.
AXIS_STEPS: Dict[Direction, Tuple[Tuple[int, int], ...]] = {
    Direction.VERTICAL: ((1, 0),),
    Direction.HORIZONTAL: ((0, -1), (0, 1)),
    Direction.DIAGONAL_UP: ((1, -1), (-1, 1)),
    Direction.DIAGONAL_DOWN: ((1, 1), (-1, -1)),
}


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is inside the playable region.

    Args:
        row: Row index (1-based)
        col: Column index (1-based)

    Returns:
        True if position is on the board, False otherwise
    """
    return 1 <= row <= ROWS and 1 <= col <= COLS


def is_valid_column(col: int) -> bool:
    return 1 <= col <= COLS


def column_from_pixel(pixel_x: int) -> int:
    """Map a horizontal pixel offset on the board to a (possibly invalid) column."""
    return pixel_x // SQUARE_SIZE + 1


def wrap_column(col: int) -> int:
    """Wrap a column index into 1..COLS."""
    return (col - 1) % COLS + 1


def render_board_ascii(cells: np.ndarray, highlight: Optional[List[Position]] = None,
                       cursor: Optional[int] = None, falling: Optional[Position] = None,
                       falling_player: Player = Player.EMPTY) -> str:
    """
    Render the playable region as ASCII art.

    Args:
        cells: ROWS x COLS array of player values
        highlight: Cells to mark with '*' (the winning line)
        cursor: Column to mark with 'v' above the board
        falling: (row, column) where a falling piece is drawn; row 0 is the
            indicator row above the board
        falling_player: Owner of the falling piece

    Returns:
        ASCII representation of the board
    """
    marked = set(highlight or ())
    result = []

    top = [" "] * COLS
    if cursor is not None:
        top[cursor - 1] = "v"
    if falling is not None and falling[0] == 0:
        top[falling[1] - 1] = str(falling_player)
    result.append(" " + " ".join(top) + " ")
    result.append("|" + "-" * (COLS * 2 - 1) + "|")

    for row in range(1, ROWS + 1):
        line = []
        for col in range(1, COLS + 1):
            value = Player(int(cells[row - 1, col - 1]))
            if falling is not None and falling == (row, col) and value == Player.EMPTY:
                line.append(str(falling_player))
            elif (row, col) in marked:
                line.append("*")
            else:
                line.append(str(value))
        result.append("|" + " ".join(line) + "|")

    result.append("|" + "-" * (COLS * 2 - 1) + "|")
    result.append(" " + " ".join(str(i) for i in range(1, COLS + 1)) + " ")

    return "\n".join(result)
