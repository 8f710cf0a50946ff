import asyncio
import io

from conftest import play_moves
from connectfour.interfaces.cli import (SimpleCLI, TerminalGame, TerminalNotifier,
                                        describe_state, parse_line)
from connectfour.interfaces.controller import InputKind, Severity
from connectfour.game.rules import new_game
from connectfour.utils import column_from_pixel


def scripted(lines):
    remaining = list(lines)

    def fake_input(_prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    fake_input.remaining = remaining
    return fake_input


def test_parse_empty_line_confirms():
    assert [e.kind for e in parse_line("")] == [InputKind.CONFIRM]
    assert [e.kind for e in parse_line("   ")] == [InputKind.CONFIRM]


def test_parse_movement_and_commands():
    kinds = [e.kind for e in parse_line("a<d> s n q")]
    assert kinds == [InputKind.MOVE_LEFT, InputKind.MOVE_LEFT, InputKind.MOVE_RIGHT,
                     InputKind.MOVE_RIGHT, InputKind.CONFIRM, InputKind.NEW_GAME,
                     InputKind.QUIT]


def test_parse_digit_is_a_click_in_that_column():
    (event,) = parse_line("3")
    assert event.kind == InputKind.POSITIONAL_SELECT
    assert column_from_pixel(event.pixel_x) == 3


def test_parse_skips_unknown_characters():
    assert [e.kind for e in parse_line("z?d")] == [InputKind.MOVE_RIGHT]


def test_describe_state():
    assert describe_state(new_game()) == "Pig (X) to move. Moves made: 0"
    assert describe_state(play_moves([1, 7, 1, 7, 1, 7, 1])) == "Pig (X) wins!"


def test_notifier_waits_for_enter():
    out = io.StringIO()
    fake_input = scripted([""])
    TerminalNotifier(out, input_fn=fake_input).notify("Please select another column",
                                                       "Column Is Full", Severity.WARNING)
    assert "! Column Is Full: Please select another column" in out.getvalue()
    assert fake_input.remaining == []


def test_terminal_game_until_win():
    out = io.StringIO()
    # Four in column 1 for the first player, then acknowledge and quit
    fake_input = scripted(["1", "7", "1", "7", "1", "7", "1", "", "q"])
    game = TerminalGame(animate=False, input_fn=fake_input, out=out, clear_screen=False)

    state = asyncio.run(game.run())

    assert state.winner is not None
    assert state.move_count == 7
    text = out.getvalue()
    assert "* Game Over: Pig wins!" in text
    assert "|* " in text  # winning line highlighted
    assert fake_input.remaining == []


def test_terminal_game_cursor_and_confirm():
    out = io.StringIO()
    fake_input = scripted(["aa", "", "dd"])
    game = TerminalGame(animate=False, input_fn=fake_input, out=out, clear_screen=False)

    state = asyncio.run(game.run())

    assert state.move_count == 1
    assert state.board.drop_row(2) == 5
    assert game.controller.cursor.selected_column == 6


def test_terminal_game_animates_falling_piece():
    out = io.StringIO()
    fake_input = scripted([""])
    game = TerminalGame(animate=True, input_fn=fake_input, out=out, clear_screen=False)
    game.controller.frame_delay = 0

    state = asyncio.run(game.run())

    assert state.move_count == 1
    # One frame per fifth of a row plus the initial and final boards
    assert out.getvalue().count("|-------------|") == 2 * (30 + 2)


def test_show_command_prints_position():
    out = io.StringIO()
    code = SimpleCLI(out=out).run(["show", "4,4,3"])
    text = out.getvalue()
    assert code == 0
    assert "Bird (O) to move. Moves made: 3" in text
    assert "Legal columns: 1, 2, 3, 4, 5, 6, 7" in text


def test_show_command_reports_win():
    out = io.StringIO()
    code = SimpleCLI(out=out).run(["show", "1,7,1,7,1,7,1"])
    assert code == 0
    assert "Pig (X) wins!" in out.getvalue()
    assert "Legal columns" not in out.getvalue()


def test_show_command_rejects_illegal_moves():
    out = io.StringIO()
    code = SimpleCLI(out=out).run(["show", "1,1,1,1,1,1,1"])
    assert code == 1
    assert "Move 7 (column 1) rejected" in out.getvalue()


def test_show_command_rejects_garbage():
    out = io.StringIO()
    assert SimpleCLI(out=out).run(["show", "a,b"]) == 1
    assert "Error parsing moves" in out.getvalue()


def test_no_command_prints_help_hint():
    out = io.StringIO()
    assert SimpleCLI(out=out).run([]) == 1
    assert "--help" in out.getvalue()
