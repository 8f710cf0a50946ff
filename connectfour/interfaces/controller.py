"""
controller.py - Input handling and drop animation for Connect Four

The InteractionController sits between a front-end and the rules engine. It
owns the cursor column and the falling-piece animation, turns input events
into moves, and asks an injected Renderer and Notifier to show the result.
Front-ends supply those two objects; the controller never draws or prints
anything itself.

Committing a move is a coroutine. Between animation frames it awaits a
pause coroutine (``asyncio.sleep`` by default), so a front-end running an
event loop stays responsive while a piece falls. The game state is only
replaced after the last frame.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum, auto
from typing import Awaitable, Callable, Optional, Protocol

from connectfour.debug import debug
from connectfour.game.rules import (GameState, IllegalMoveReason,
                                    MoveResult, apply_move, drop_row, new_game)
from connectfour.utils import (ANIMATION_ON, CENTER_COLUMN, DROPPING_SPEED_MS,
                               DROP_FRAMES_PER_CELL, SQUARE_SIZE, Player,
                               column_from_pixel, is_valid_column, wrap_column)

PauseFn = Callable[[float], Awaitable[None]]


class MoveDirection(Enum):
    LEFT = -1
    RIGHT = 1


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"


class InputKind(Enum):
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    CONFIRM = auto()
    POSITIONAL_SELECT = auto()
    NEW_GAME = auto()
    QUIT = auto()  # Handled by the front-end's loop, ignored by the controller


@dataclass(frozen=True)
class InputEvent:
    """A discrete input event. ``pixel_x`` is only set for POSITIONAL_SELECT."""

    kind: InputKind
    pixel_x: Optional[int] = None

    @classmethod
    def click(cls, pixel_x: int) -> 'InputEvent':
        return cls(InputKind.POSITIONAL_SELECT, pixel_x)


@dataclass
class CursorState:
    """The column the next piece will be dropped into."""

    selected_column: int = CENTER_COLUMN

    def move(self, direction: MoveDirection) -> int:
        self.selected_column = wrap_column(self.selected_column + direction.value)
        return self.selected_column

    def reset(self) -> None:
        self.selected_column = CENTER_COLUMN


@dataclass(frozen=True)
class DropAnimationState:
    """A piece on its way down. Row 0 is the indicator row above the board."""

    player: Player
    column: int
    target_row: int
    row_fraction: float = 0.0

    @property
    def x(self) -> int:
        return (self.column - 1) * SQUARE_SIZE

    @property
    def y(self) -> int:
        return int(self.row_fraction * SQUARE_SIZE)

    @property
    def nearest_row(self) -> int:
        return int(round(self.row_fraction))


@dataclass(frozen=True)
class RenderRequest:
    """Everything a renderer needs to draw one frame."""

    state: GameState
    cursor: CursorState
    animation: Optional[DropAnimationState] = None
    last_result: Optional[MoveResult] = None

    @property
    def show_next_piece(self) -> bool:
        return self.animation is None and not self.state.is_game_over()

    @property
    def next_player(self) -> Player:
        return self.state.current_player


class Renderer(Protocol):
    def render(self, request: RenderRequest) -> None:
        ...


class Notifier(Protocol):
    def notify(self, message: str, title: str, severity: Severity) -> None:
        ...


GAME_OVER_MESSAGE = "Please select New Game to start a new game"
COLUMN_FULL_MESSAGE = "Please select another column"
TIE_MESSAGE = "It's a tie!"


def win_message(player: Player) -> str:
    return f"{player.label} wins!"


class InteractionController:
    """
    Drives one game at a time from discrete input events.

    Only one move can be in flight. Moves and cursor changes that arrive
    while a piece is falling are dropped.
    """

    def __init__(self, renderer: Renderer, notifier: Notifier,
                 animate: bool = ANIMATION_ON,
                 frame_delay_ms: int = DROPPING_SPEED_MS,
                 frames_per_cell: int = DROP_FRAMES_PER_CELL,
                 pause: Optional[PauseFn] = None):
        """
        Args:
            renderer: Receives a RenderRequest whenever the picture changes
            notifier: Shows messages; expected to block until acknowledged
            animate: Whether dropped pieces fall visibly
            frame_delay_ms: Pause between animation frames
            frames_per_cell: Animation frames per row the piece falls
            pause: Coroutine function awaited between frames
        """
        if frames_per_cell < 1:
            raise ValueError("frames_per_cell must be at least 1")

        self.renderer = renderer
        self.notifier = notifier
        self.animate = animate
        self.frame_delay = frame_delay_ms / 1000.0
        self.frames_per_cell = frames_per_cell
        self._pause = pause or asyncio.sleep

        self.state: GameState = new_game()
        self.cursor = CursorState()
        self.animation: Optional[DropAnimationState] = None
        self.last_result: Optional[MoveResult] = None
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def render_request(self) -> RenderRequest:
        return RenderRequest(
            state=self.state,
            cursor=CursorState(self.cursor.selected_column),
            animation=self.animation,
            last_result=self.last_result,
        )

    def _render(self) -> None:
        self.renderer.render(self.render_request())

    def new_game(self) -> None:
        """Throw the current game away and start over."""
        if self._busy:
            debug.debug("New game ignored: a move is in flight", "controller")
            return
        self.state = new_game()
        self.cursor.reset()
        self.animation = None
        self.last_result = None
        debug.info("New game started", "controller")
        self._render()

    def move_cursor(self, direction: MoveDirection) -> None:
        """Move the cursor one column, wrapping around at the edges."""
        if self._busy:
            return
        column = self.cursor.move(direction)
        debug.trace(f"Cursor moved {direction.name.lower()} to column {column}", "controller")
        self._render()

    async def confirm(self) -> Optional[MoveResult]:
        """Drop the current player's piece into the selected column."""
        return await self._try_commit(self.cursor.selected_column)

    async def select_column(self, column: int) -> Optional[MoveResult]:
        """
        Drop the current player's piece into ``column`` directly.

        Out-of-range columns are ignored.
        """
        if not is_valid_column(column):
            debug.debug(f"Ignoring selection of invalid column {column}", "controller")
            return None
        return await self._try_commit(column)

    async def select_pixel(self, pixel_x: int) -> Optional[MoveResult]:
        """Drop into the column under a horizontal pixel offset on the board."""
        return await self.select_column(column_from_pixel(pixel_x))

    async def dispatch(self, event: InputEvent) -> Optional[MoveResult]:
        """Route one input event. Returns the MoveResult if a move was made."""
        if event.kind == InputKind.MOVE_LEFT:
            self.move_cursor(MoveDirection.LEFT)
        elif event.kind == InputKind.MOVE_RIGHT:
            self.move_cursor(MoveDirection.RIGHT)
        elif event.kind == InputKind.CONFIRM:
            return await self.confirm()
        elif event.kind == InputKind.POSITIONAL_SELECT:
            if event.pixel_x is None:
                debug.warning("Positional select without a position", "controller")
                return None
            return await self.select_pixel(event.pixel_x)
        elif event.kind == InputKind.NEW_GAME:
            self.new_game()
        return None

    async def _try_commit(self, column: int) -> Optional[MoveResult]:
        if self._busy:
            debug.debug(f"Move in column {column} ignored: a move is in flight", "controller")
            return None

        if self.state.is_game_over():
            self._reject(IllegalMoveReason.GAME_OVER)
            return None

        target_row = drop_row(self.state, column)
        if target_row is None:
            self._reject(IllegalMoveReason.COLUMN_FULL)
            return None

        self._busy = True
        try:
            return await self._commit(column, target_row)
        finally:
            self._busy = False
            self.animation = None

    def _reject(self, reason: IllegalMoveReason) -> None:
        debug.debug(f"Move rejected: {reason.value}", "controller")
        if reason == IllegalMoveReason.GAME_OVER:
            self.notifier.notify(GAME_OVER_MESSAGE, "Game Over", Severity.WARNING)
        else:
            self.notifier.notify(COLUMN_FULL_MESSAGE, "Column Is Full", Severity.WARNING)

    async def _commit(self, column: int, target_row: int) -> Optional[MoveResult]:
        if self.animate:
            await self._animate_drop(self.state.current_player, column, target_row)

        # Validated by _try_commit and nothing else can move while we are busy
        self.state, result = apply_move(self.state, column)
        self.last_result = result
        self.cursor.reset()

        if result.game_over:
            self._render()
            if result.winner is not None:
                self.notifier.notify(win_message(result.winner), "Game Over", Severity.INFO)
            else:
                self.notifier.notify(TIE_MESSAGE, "Game Over", Severity.INFO)

        self._render()
        return result

    async def _animate_drop(self, player: Player, column: int, target_row: int) -> None:
        """Show the piece falling from the indicator row down to ``target_row``."""
        debug.start_timer("drop_animation")
        frames = target_row * self.frames_per_cell
        try:
            for frame in range(frames):
                self.animation = DropAnimationState(
                    player=player,
                    column=column,
                    target_row=target_row,
                    row_fraction=frame / self.frames_per_cell,
                )
                self._render()
                await self._pause(self.frame_delay)
        finally:
            self.animation = None
            debug.end_timer("drop_animation", "controller")
