"""
rules.py - Turn sequencing and win/draw detection for Connect Four

This module is the pure state-transition core of the game. A GameState is
created by new_game() and every move goes through apply_move(), which
returns a new state together with a MoveResult describing what happened.
States passed in are never modified.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Set, Tuple

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import (ROWS, COLS, CONNECT_N, AXIS_STEPS,
                               GameResult, Player, Position, is_valid_column,
                               is_valid_position)


class ConnectFourError(Exception):
    """Base class for game errors."""


class IllegalMoveReason(Enum):
    GAME_OVER = "game over"
    COLUMN_FULL = "column full"


class IllegalMove(ConnectFourError):
    """A move that the rules do not allow in the current state."""

    def __init__(self, reason: IllegalMoveReason, column: Optional[int] = None):
        self.reason = reason
        self.column = column
        if column is None:
            super().__init__(f"Illegal move: {reason.value}")
        else:
            super().__init__(f"Illegal move in column {column}: {reason.value}")


class InvalidColumn(ConnectFourError, ValueError):
    """A column index outside 1..COLS."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is outside 1..{COLS}")


@dataclass
class GameState:
    """Everything the rules need to know about a game in progress."""

    board: Board = field(default_factory=Board)
    current_player: Player = Player.ONE
    move_count: int = 0
    result: GameResult = GameResult.IN_PROGRESS
    last_move: Optional[Position] = None

    def copy(self) -> 'GameState':
        return replace(self, board=self.board.copy())

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    @property
    def winner(self) -> Optional[Player]:
        return self.result.winner


@dataclass(frozen=True)
class MoveResult:
    """What a successful apply_move() did."""

    row: int
    column: int
    player: Player
    result: GameResult
    game_over: bool
    winning_line: Tuple[Position, ...] = ()

    @property
    def position(self) -> Position:
        return self.row, self.column

    @property
    def winner(self) -> Optional[Player]:
        return self.result.winner


def new_game() -> GameState:
    """Start a new game: empty grid, first player to move."""
    debug.debug("Starting new game", "rules")
    return GameState()


def legal_columns(state: GameState) -> Set[int]:
    """Columns whose top playable cell is still empty."""
    return state.board.legal_columns()


def drop_row(state: GameState, column: int) -> Optional[int]:
    """
    Row a piece dropped into ``column`` would land in.

    Returns:
        The lowest empty row, or None if the column is full

    Raises:
        InvalidColumn: If the column is outside 1..COLS
    """
    if not is_valid_column(column):
        raise InvalidColumn(column)
    return state.board.drop_row(column)


def _scan(board: Board, row: int, col: int, step: Tuple[int, int], player: Player) -> List[Position]:
    """Positions of consecutive ``player`` cells walking away from (row, col)."""
    dr, dc = step
    positions = []
    r, c = row + dr, col + dc
    while is_valid_position(r, c) and board.get_cell(r, c) == player:
        positions.append((r, c))
        r += dr
        c += dc
    return positions


def _find_streak(board: Board, row: int, col: int) -> Tuple[Optional[Player], List[Position]]:
    player = board.get_cell(row, col)
    if player == Player.EMPTY:
        raise ValueError(f"No piece at ({row}, {col}) to check for a win")

    for direction, steps in AXIS_STEPS.items():
        line = [(row, col)]
        for step in steps:
            line.extend(_scan(board, row, col, step, player))
        if len(line) >= CONNECT_N:
            debug.trace(f"{direction.name} streak of {len(line)} for {player.label}", "rules")
            return player, sorted(line)

    return None, []


def check_winner(board: Board, row: int, column: int) -> Optional[Player]:
    """
    Check whether the piece at (row, column) completed a winning streak.

    Looks down from the piece, left and right, down-left and up-right, and
    down-right and up-left. Only streaks through the given cell count.

    Args:
        board: Board the piece has already been placed on
        row: Row of the last placed piece
        column: Column of the last placed piece

    Returns:
        The winning player, or None
    """
    winner, _ = _find_streak(board, row, column)
    return winner


def winning_line(board: Board, row: int, column: int) -> List[Position]:
    """Cells of the winning streak through (row, column), sorted top to bottom."""
    _, line = _find_streak(board, row, column)
    return line


def apply_move(state: GameState, column: int) -> Tuple[GameState, MoveResult]:
    """
    Drop the current player's piece into ``column``.

    Args:
        state: State to move from; it is not modified
        column: Target column (1-based)

    Returns:
        The resulting state and a MoveResult

    Raises:
        IllegalMove: If the game is over or the column is full
        InvalidColumn: If the column is outside 1..COLS
    """
    if state.is_game_over():
        debug.debug(f"Rejected move in column {column}: game is over ({state.result.name})", "rules")
        raise IllegalMove(IllegalMoveReason.GAME_OVER, column)

    row = drop_row(state, column)
    if row is None:
        debug.debug(f"Rejected move in column {column}: column is full", "rules")
        raise IllegalMove(IllegalMoveReason.COLUMN_FULL, column)

    player = state.current_player
    new_state = state.copy()
    new_state.board.set_cell(row, column, player)
    new_state.move_count += 1
    new_state.last_move = (row, column)

    winner, line = _find_streak(new_state.board, row, column)
    if winner is not None:
        new_state.result = GameResult.win_for(winner)
        debug.info(f"{winner.label} wins with a piece at ({row}, {column})", "rules")
    elif new_state.move_count == ROWS * COLS:
        new_state.result = GameResult.DRAW
        debug.info("Board is full, the game is a draw", "rules")
    else:
        new_state.current_player = player.other()

    debug.debug(f"{player.label} played ({row}, {column}), move {new_state.move_count}", "rules")

    return new_state, MoveResult(
        row=row,
        column=column,
        player=player,
        result=new_state.result,
        game_over=new_state.is_game_over(),
        winning_line=tuple(line),
    )
