import os
import sys

# Headless pygame for the window front-end tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest

from connectfour.debug import debug, DebugLevel
from connectfour.game.rules import apply_move, new_game


# Vertical win for the first player in column 1; the second player stacks in column 7
VERTICAL_WIN = [1, 7, 1, 7, 1, 7, 1]

# Fills the board without four in a row anywhere: columns pair up so that the
# owner pattern reads XXYYXXY along every row and alternates up every column
DRAW_SEQUENCE = (
    [1, 3, 3, 1, 1, 3, 3, 1, 1, 3, 3, 1]
    + [2, 4, 4, 2, 2, 4, 4, 2, 2, 4, 4, 2]
    + [5, 7, 7, 5, 5, 7, 7, 5, 5, 7, 7, 5]
    + [6, 6, 6, 6, 6, 6]
)


def play_moves(columns, state=None):
    """Apply a sequence of moves, starting from a new game by default."""
    state = state if state is not None else new_game()
    for column in columns:
        state, _ = apply_move(state, column)
    return state


@pytest.fixture(autouse=True)
def reset_debug():
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file='')


@pytest.fixture
def state():
    return new_game()


@pytest.fixture
def won_state():
    return play_moves(VERTICAL_WIN)
