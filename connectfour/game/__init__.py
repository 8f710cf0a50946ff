"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation and the rules engine.
"""

from connectfour.game.board import Board
from connectfour.game.rules import (ConnectFourError, GameState, IllegalMove,
                                    IllegalMoveReason, InvalidColumn, MoveResult,
                                    apply_move, check_winner, drop_row,
                                    legal_columns, new_game, winning_line)

__all__ = [
    'Board',
    'ConnectFourError',
    'GameState',
    'IllegalMove',
    'IllegalMoveReason',
    'InvalidColumn',
    'MoveResult',
    'apply_move',
    'check_winner',
    'drop_row',
    'legal_columns',
    'new_game',
    'winning_line',
]
