from typer.testing import CliRunner

from valley_puzzle.cli import app
from valley_puzzle.definition import BUNDLED_PUZZLE

runner = CliRunner()

SOLVE_BUNDLED = [
    "place t3 b1",
    "place t1 b2",
    "place t2 b3",
    "place t6 b4",
    "place t9 b5",
    "place t8 b6",
    "place t5 b7",
]


def play(lines, *args, env=None):
    return runner.invoke(
        app,
        ["play", "--skip-intro", "--channel", "none", *args],
        input="\n".join(lines) + "\n",
        env=env,
    )


def test_check_bundled_puzzle():
    result = runner.invoke(app, ["check", str(BUNDLED_PUZZLE)])
    assert result.exit_code == 0
    assert "7 blanks" in result.output
    assert "10 tokens" in result.output


def test_check_rejects_bad_file(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"sentences": [], "pool": []}')
    result = runner.invoke(app, ["check", str(bad)])
    assert result.exit_code == 1
    assert "Invalid puzzle definition" in result.output


def test_play_solves_bundled_puzzle():
    result = play(["interrogate Sam", "solve", *SOLVE_BUNDLED, "submit"])
    assert result.exit_code == 0, result.output
    assert "interrogating" in result.output
    assert "Case closed!" in result.output
    assert "CASE CLOSED" in result.output


def test_play_with_drag_and_drop_gestures():
    lines = ["solve", *SOLVE_BUNDLED[:-1], "drag t5", "drop b7", "submit"]
    result = play(lines)
    assert result.exit_code == 0, result.output
    assert "CASE CLOSED" in result.output


def test_play_reports_warning_and_leaves():
    lines = ["solve", *SOLVE_BUNDLED[:-1], "place t4 b7", "submit", "quit", "quit"]
    result = play(lines)
    assert result.exit_code == 0, result.output
    assert "Almost there" in result.output
    assert "CASE CLOSED" not in result.output
    assert "The case remains open" in result.output


def test_play_submit_on_incomplete_board():
    result = play(["solve", "place t3 b1", "submit", "quit", "quit"])
    assert result.exit_code == 0, result.output
    assert "Fill every blank before submitting" in result.output


def test_play_lists_empty_blanks():
    result = play(["solve", "place t3 b1", "quit", "quit"])
    assert result.exit_code == 0, result.output
    assert "7 empty" in result.output
    assert "6 empty: b2, b3" in result.output
    assert "ready to submit" not in result.output


def test_play_rejects_bad_configuration():
    result = play([], env={"VALLEY_WARNING_MAX_MISMATCHES": "many"})
    assert result.exit_code == 1
    assert "Bad configuration" in result.output


def test_play_rejects_unknown_channel():
    result = runner.invoke(app, ["play", "--channel", "fax"], input="")
    assert result.exit_code == 1
    assert "Unknown channel" in result.output
