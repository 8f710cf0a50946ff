import asyncio

import pygame
import pytest

from connectfour.interfaces.controller import (DropAnimationState, InputKind,
                                               InteractionController, RenderRequest)
from connectfour.interfaces.pygame_ui import (HIGHLIGHT_COLOR, GameRunner,
                                              PygameRenderer, draw_board,
                                              translate_event)
from connectfour.utils import (BACKGROUND_COLOR, BOARD_HEIGHT, BOARD_WIDTH,
                               ROWS, SQUARE_SIZE, Player)


class NullNotifier:
    def __init__(self):
        self.quit_requested = False
        self.messages = []

    def notify(self, message, title, severity):
        self.messages.append(message)


def cell_center(row, col):
    return (col - 1) * SQUARE_SIZE + SQUARE_SIZE // 2, row * SQUARE_SIZE + SQUARE_SIZE // 2


def rgb(surface, pos):
    return tuple(surface.get_at(pos))[:3]


@pytest.fixture
def surface():
    return pygame.Surface((BOARD_WIDTH, BOARD_HEIGHT))


@pytest.mark.parametrize("key, kind", [
    (pygame.K_LEFT, InputKind.MOVE_LEFT),
    (pygame.K_RIGHT, InputKind.MOVE_RIGHT),
    (pygame.K_DOWN, InputKind.CONFIRM),
    (pygame.K_RETURN, InputKind.CONFIRM),
    (pygame.K_SPACE, InputKind.CONFIRM),
    (pygame.K_n, InputKind.NEW_GAME),
    (pygame.K_ESCAPE, InputKind.QUIT),
])
def test_key_bindings(key, kind):
    event = translate_event(pygame.event.Event(pygame.KEYDOWN, key=key))
    assert event.kind == kind


def test_click_becomes_positional_select():
    event = translate_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(130, 20)))
    assert event.kind == InputKind.POSITIONAL_SELECT
    assert event.pixel_x == 130


def test_other_events_are_ignored():
    assert translate_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a)) is None
    assert translate_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(5, 5))) is None
    assert translate_event(pygame.event.Event(pygame.QUIT)).kind == InputKind.QUIT


def test_draws_pieces_and_next_piece(surface):
    controller = InteractionController(PygameRenderer(surface, flip=False), NullNotifier(),
                                       animate=False)
    asyncio.run(controller.select_column(1))

    assert rgb(surface, cell_center(ROWS, 1)) == Player.ONE.color
    assert rgb(surface, cell_center(ROWS, 2)) == BACKGROUND_COLOR
    # Next piece above the centre column belongs to the second player
    assert rgb(surface, cell_center(0, 4)) == Player.TWO.color
    assert rgb(surface, cell_center(0, 1)) == BACKGROUND_COLOR


def test_falling_piece_replaces_next_piece(surface):
    controller = InteractionController(PygameRenderer(surface, flip=False), NullNotifier())
    request = RenderRequest(
        state=controller.state,
        cursor=controller.cursor,
        animation=DropAnimationState(Player.ONE, column=2, target_row=ROWS, row_fraction=2.0),
    )
    draw_board(surface, request)

    assert rgb(surface, cell_center(2, 2)) == Player.ONE.color
    assert rgb(surface, cell_center(0, 4)) == BACKGROUND_COLOR


def test_winning_line_is_outlined(surface):
    controller = InteractionController(PygameRenderer(surface, flip=False), NullNotifier(),
                                       animate=False)

    async def run():
        for column in [1, 7, 1, 7, 1, 7, 1]:
            await controller.select_column(column)

    asyncio.run(run())

    assert controller.state.winner == Player.ONE
    x, y = cell_center(3, 1)
    ring = (x + SQUARE_SIZE // 2 - 5, y)
    assert rgb(surface, ring) == HIGHLIGHT_COLOR
    # No next piece once the game is over
    assert rgb(surface, cell_center(0, 4)) == BACKGROUND_COLOR


def test_runner_dispatches_and_quits(surface):
    runner = GameRunner(animate=False)
    runner._notifier = NullNotifier()
    runner.controller = InteractionController(PygameRenderer(surface, flip=False),
                                              runner._notifier, animate=False)
    runner._running = True

    async def run():
        await runner.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN))
        await runner.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))

    asyncio.run(run())

    assert runner.controller.state.move_count == 1
    assert not runner.running
