"""
cli.py - Command-line interface for Connect Four

This module provides a terminal front-end for the interaction controller and
the argument parsing used by run.py. Two commands are available:

    play    Play a two-player game in the terminal or in a pygame window
    show    Apply a list of moves and print the resulting position
"""

import argparse
import asyncio
import sys
from typing import Callable, List, Optional, TextIO

from connectfour.debug import debug, DebugLevel
from connectfour.game.rules import ConnectFourError, GameState, apply_move, new_game
from connectfour.interfaces.controller import (InputEvent, InputKind,
                                               InteractionController,
                                               RenderRequest, Severity)
from connectfour.utils import COLS, SQUARE_SIZE, GameResult, Player

CLEAR_SCREEN = "\033[H\033[J"

HELP_TEXT = (
    "Commands: a/d (or </>) move the cursor, Enter drops a piece, "
    f"1-{COLS} drops into that column, n starts a new game, q quits."
)

KEY_EVENTS = {
    "a": InputKind.MOVE_LEFT,
    "<": InputKind.MOVE_LEFT,
    "d": InputKind.MOVE_RIGHT,
    ">": InputKind.MOVE_RIGHT,
    "s": InputKind.CONFIRM,
    "n": InputKind.NEW_GAME,
    "q": InputKind.QUIT,
}


def describe_state(state: GameState) -> str:
    """One-line status for a game."""
    if state.result == GameResult.DRAW:
        return "It's a tie!"
    if state.winner is not None:
        return f"{state.winner.label} ({state.winner}) wins!"
    player = state.current_player
    return f"{player.label} ({player}) to move. Moves made: {state.move_count}"


def parse_line(line: str) -> List[InputEvent]:
    """
    Turn one line of terminal input into input events.

    An empty line confirms the selected column. Otherwise every character is
    a command; digits select a column as if it had been clicked. Unknown
    characters are skipped.

    Args:
        line: Raw text typed by the player

    Returns:
        Events in the order they were typed
    """
    text = line.strip().lower()
    if not text:
        return [InputEvent(InputKind.CONFIRM)]

    events = []
    for char in text:
        if char.isdigit():
            # Aim for the middle of the column
            events.append(InputEvent.click((int(char) - 1) * SQUARE_SIZE + SQUARE_SIZE // 2))
        elif char in KEY_EVENTS:
            events.append(InputEvent(KEY_EVENTS[char]))
        elif not char.isspace():
            debug.debug(f"Ignoring unknown command '{char}'", "cli")
    return events


class TerminalRenderer:
    """Draws render requests as ASCII art."""

    def __init__(self, out: Optional[TextIO] = None, clear_screen: bool = True):
        self.out = out or sys.stdout
        self.clear_screen = clear_screen

    def render(self, request: RenderRequest) -> None:
        state = request.state
        highlight = None
        if state.winner is not None and request.last_result is not None:
            highlight = list(request.last_result.winning_line)

        falling = None
        falling_player = Player.EMPTY
        if request.animation is not None:
            falling = (request.animation.nearest_row, request.animation.column)
            falling_player = request.animation.player

        board = state.board.render(
            highlight=highlight,
            cursor=request.cursor.selected_column if request.show_next_piece else None,
            falling=falling,
            falling_player=falling_player,
        )

        if self.clear_screen:
            self.out.write(CLEAR_SCREEN)
        self.out.write(board + "\n" + describe_state(state) + "\n")
        self.out.flush()


class TerminalNotifier:
    """Prints messages and waits for Enter before play continues."""

    def __init__(self, out: Optional[TextIO] = None,
                 input_fn: Callable[[str], str] = input, wait: bool = True):
        self.out = out or sys.stdout
        self.input_fn = input_fn
        self.wait = wait

    def notify(self, message: str, title: str, severity: Severity) -> None:
        prefix = "!" if severity == Severity.WARNING else "*"
        self.out.write(f"{prefix} {title}: {message}\n")
        self.out.flush()
        if self.wait:
            try:
                self.input_fn("Press Enter to continue...")
            except EOFError:
                pass


class TerminalGame:
    """Runs a game in the terminal until the players quit."""

    def __init__(self, animate: bool = True, input_fn: Callable[[str], str] = input,
                 out: Optional[TextIO] = None, clear_screen: bool = True):
        self.input_fn = input_fn
        self.out = out or sys.stdout
        self.controller = InteractionController(
            TerminalRenderer(self.out, clear_screen=clear_screen),
            TerminalNotifier(self.out, input_fn=input_fn),
            animate=animate,
        )

    async def run(self) -> GameState:
        """
        Play until 'q' or end of input.

        Returns:
            The state of the last game when the players quit
        """
        self.controller.new_game()
        self.out.write(HELP_TEXT + "\n")

        while True:
            try:
                line = self.input_fn("> ")
            except EOFError:
                break

            quitting = False
            for event in parse_line(line):
                if event.kind == InputKind.QUIT:
                    quitting = True
                    break
                await self.controller.dispatch(event)
            if quitting:
                break

        debug.info("Terminal game finished", "cli")
        return self.controller.state


class SimpleCLI:
    """Command-line interface for Connect Four."""

    def __init__(self, out: Optional[TextIO] = None):
        self.args = None
        self.out = out or sys.stdout

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug logging (same as --debug_level debug)')
        parser.add_argument('--debug_level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning',
                            help='Logging level (default: warning)')
        parser.add_argument('--log_file', type=str, default=None,
                            help='Also write log messages to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game')
        play_parser.add_argument('--ui', choices=['terminal', 'pygame'], default='terminal',
                                 help='Front-end to play in (default: terminal)')
        play_parser.add_argument('--no-animation', dest='animate', action='store_false',
                                 help='Place pieces without the falling animation')

        show_parser = subparsers.add_parser('show', help='Print the position after a list of moves')
        show_parser.add_argument('moves', type=str,
                                 help=f'Comma-separated columns (1-{COLS}), e.g. "4,4,3"')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

        return self.args

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command given on the command line. Returns an exit code."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'show':
            return self.show_position()

        self.out.write("Please specify a command. Use --help for options.\n")
        return 1

    def play_game(self) -> int:
        """Play an interactive game in the chosen front-end."""
        if self.args.ui == 'pygame':
            try:
                from connectfour.interfaces import pygame_ui
            except ImportError as e:
                debug.error(f"pygame front-end unavailable: {e}", "cli")
                self.out.write("The pygame front-end needs pygame: pip install pygame\n")
                return 1
            pygame_ui.main(animate=self.args.animate)
            return 0

        game = TerminalGame(animate=self.args.animate, out=self.out)
        asyncio.run(game.run())
        return 0

    def show_position(self) -> int:
        """Apply the given moves from a new game and print the position."""
        try:
            columns = [int(c) for c in self.args.moves.replace(' ', '').split(',') if c]
        except ValueError as e:
            self.out.write(f"Error parsing moves: {e}\n")
            return 1

        state = new_game()
        result = None
        for index, column in enumerate(columns, start=1):
            try:
                state, result = apply_move(state, column)
            except ConnectFourError as e:
                self.out.write(f"Move {index} (column {column}) rejected: {e}\n")
                return 1

        highlight = list(result.winning_line) if result is not None else None
        self.out.write(state.board.render(highlight=highlight) + "\n")
        self.out.write(describe_state(state) + "\n")
        if not state.is_game_over():
            legal = ", ".join(str(c) for c in sorted(state.board.legal_columns()))
            self.out.write(f"Legal columns: {legal}\n")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
