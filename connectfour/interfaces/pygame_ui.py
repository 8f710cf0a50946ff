"""
pygame_ui.py - pygame window front-end for Connect Four

Draws the board in a window and feeds keyboard and mouse input to the
interaction controller:

    Left / Right          move the next piece
    Down / Enter / Space  drop it
    Mouse click           drop into the clicked column
    N                     new game
    Esc or closing        quit
"""

import asyncio
from typing import Optional

import pygame

from connectfour.debug import debug
from connectfour.interfaces.controller import (InputEvent, InputKind,
                                               InteractionController,
                                               RenderRequest, Severity)
from connectfour.utils import (ROWS, COLS, SQUARE_SIZE, BOARD_WIDTH, BOARD_HEIGHT,
                               BACKGROUND_COLOR, GRID_COLOR, Player)

# Frames per second while idle
FPS = 60
CAPTION = "Connect Four"
HIGHLIGHT_COLOR = (255, 215, 0)
MESSAGE_BOX_COLOR = (255, 255, 255)
TEXT_COLOR = (20, 20, 20)
WARNING_TEXT_COLOR = (170, 30, 30)
PIECE_MARGIN = 4

KEY_BINDINGS = {
    pygame.K_LEFT: InputKind.MOVE_LEFT,
    pygame.K_RIGHT: InputKind.MOVE_RIGHT,
    pygame.K_DOWN: InputKind.CONFIRM,
    pygame.K_RETURN: InputKind.CONFIRM,
    pygame.K_SPACE: InputKind.CONFIRM,
    pygame.K_n: InputKind.NEW_GAME,
    pygame.K_ESCAPE: InputKind.QUIT,
}


def translate_event(event: pygame.event.Event) -> Optional[InputEvent]:
    """Map a pygame event to an input event, or None if it is not one."""
    if event.type == pygame.QUIT:
        return InputEvent(InputKind.QUIT)
    if event.type == pygame.KEYDOWN and event.key in KEY_BINDINGS:
        return InputEvent(KEY_BINDINGS[event.key])
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        return InputEvent.click(event.pos[0])
    return None


def draw_piece(surface: pygame.Surface, player: Player, x: int, y: int) -> None:
    """Draw a piece whose cell has its top-left corner at (x, y)."""
    center = (x + SQUARE_SIZE // 2, y + SQUARE_SIZE // 2)
    pygame.draw.circle(surface, player.color, center, SQUARE_SIZE // 2 - PIECE_MARGIN)


def draw_board(surface: pygame.Surface, request: RenderRequest) -> None:
    """Render one frame: grid, placed pieces, next piece or falling piece."""
    surface.fill(BACKGROUND_COLOR)
    cells = request.state.board.cells

    for row in range(1, ROWS + 1):
        for col in range(1, COLS + 1):
            x = (col - 1) * SQUARE_SIZE
            y = row * SQUARE_SIZE
            pygame.draw.rect(surface, GRID_COLOR, pygame.Rect(x, y, SQUARE_SIZE + 1, SQUARE_SIZE + 1), 1)

            owner = Player(int(cells[row - 1, col - 1]))
            if owner != Player.EMPTY:
                draw_piece(surface, owner, x, y)

    if request.state.winner is not None and request.last_result is not None:
        for row, col in request.last_result.winning_line:
            center = ((col - 1) * SQUARE_SIZE + SQUARE_SIZE // 2, row * SQUARE_SIZE + SQUARE_SIZE // 2)
            pygame.draw.circle(surface, HIGHLIGHT_COLOR, center, SQUARE_SIZE // 2 - PIECE_MARGIN, 3)

    if request.animation is not None:
        draw_piece(surface, request.animation.player, request.animation.x, request.animation.y)
    elif request.show_next_piece:
        draw_piece(surface, request.next_player,
                   (request.cursor.selected_column - 1) * SQUARE_SIZE, 0)


class PygameRenderer:
    """Draws render requests onto a surface, flipping the display if asked to."""

    def __init__(self, surface: pygame.Surface, flip: bool = True):
        self.surface = surface
        self.flip = flip

    def render(self, request: RenderRequest) -> None:
        draw_board(self.surface, request)
        if self.flip:
            pygame.display.flip()


class PygameNotifier:
    """Modal message box. Blocks until a key press or click."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self.quit_requested = False
        self._font: Optional[pygame.font.Font] = None

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, 30)
        return self._font

    def notify(self, message: str, title: str, severity: Severity) -> None:
        pygame.display.set_caption(f"{CAPTION} - {title}")

        font = self._get_font()
        color = WARNING_TEXT_COLOR if severity == Severity.WARNING else TEXT_COLOR
        lines = [font.render(title, True, color), font.render(message, True, TEXT_COLOR)]
        width = max(line.get_width() for line in lines) + 40
        height = sum(line.get_height() for line in lines) + 40

        box = pygame.Rect(0, 0, width, height)
        box.center = self.surface.get_rect().center
        pygame.draw.rect(self.surface, MESSAGE_BOX_COLOR, box)
        pygame.draw.rect(self.surface, GRID_COLOR, box, 2)
        y = box.top + 20
        for line in lines:
            self.surface.blit(line, (box.centerx - line.get_width() // 2, y))
            y += line.get_height()
        pygame.display.flip()

        debug.debug(f"Showing '{title}: {message}'", "pygame")
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                self.quit_requested = True
                break
            if event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN):
                break

        pygame.display.set_caption(CAPTION)


class GameRunner:
    """Owns the window and the event loop."""

    def __init__(self, animate: bool = True) -> None:
        self.animate = animate
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._notifier: Optional[PygameNotifier] = None
        self.controller: Optional[InteractionController] = None

    @property
    def running(self) -> bool:
        return self._running

    async def _pause(self, seconds: float) -> None:
        # Keep the window responsive while a piece falls
        pygame.event.pump()
        await asyncio.sleep(seconds)

    async def handle(self, event: pygame.event.Event) -> None:
        """Process a single pygame event."""
        input_event = translate_event(event)
        if input_event is None:
            return
        if input_event.kind == InputKind.QUIT:
            self._running = False
            return
        await self.controller.dispatch(input_event)
        if self._notifier.quit_requested:
            self._running = False

    async def run(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode((BOARD_WIDTH, BOARD_HEIGHT))
        pygame.display.set_caption(CAPTION)
        self._clock = pygame.time.Clock()

        self._notifier = PygameNotifier(self._screen)
        self.controller = InteractionController(
            PygameRenderer(self._screen), self._notifier,
            animate=self.animate, pause=self._pause,
        )
        self.controller.new_game()
        debug.info("Game window opened", "pygame")

        self._running = True
        try:
            while self._running:
                for event in pygame.event.get():
                    await self.handle(event)
                    if not self._running:
                        break
                self._clock.tick(FPS)
                await asyncio.sleep(0)
        finally:
            pygame.quit()
            debug.info("Game window closed", "pygame")



def main(animate: bool = True) -> None:
    """Open the game window and play until it is closed."""
    asyncio.run(GameRunner(animate=animate).run())


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
