import io
import logging

from blockfall.__main__ import main, parse_args, run_headless
from blockfall.controller import GameStatus


def test_headless_run_prints_final_frame():
    stream = io.StringIO()
    game = run_headless(seed=3, ticks=10, stream=stream)
    output = stream.getvalue()
    assert game.state is GameStatus.ACTIVE
    assert output.count("\n") >= 20
    assert "Score: 0" in output
    assert "@" in output


def test_headless_run_until_game_over():
    stream = io.StringIO()
    game = run_headless(10, 8, seed=5, ticks=10_000, stream=stream)
    assert game.state is GameStatus.GAME_OVER
    assert "GAME OVER" in stream.getvalue()
    assert game.score > 0


def test_parse_args_defaults():
    args = parse_args([])
    assert (args.width, args.height) == (10, 20)
    assert args.seed is None
    assert not args.headless


def test_main_headless(capsys, caplog):
    with caplog.at_level(logging.INFO):
        assert main(["--headless", "--seed", "1", "--ticks", "3", "--width", "8", "--height", "10"]) == 0
    out = capsys.readouterr().out
    assert len(out.splitlines()[0]) == 8
    assert "Finished in state active" in caplog.text
