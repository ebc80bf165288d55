from __future__ import annotations

import orjson
import pytest

from reversi_alphabeta.engine.eval import DEFAULT_WEIGHTS
from reversi_alphabeta.engine.node import initial_node
from reversi_alphabeta.engine.search import AlphaBeta
from reversi_alphabeta.engine.tictactoe import TicTacToeNode
from reversi_alphabeta.logging_setup import reset_logging
from reversi_alphabeta.tools import diag, perft_cli, selfplay_cli


@pytest.fixture
def sandbox(tmp_path, monkeypatch):
    monkeypatch.setenv(diag.HOME_ENV, str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_logging()
    yield tmp_path
    reset_logging()


def test_perft_run_counts():
    assert perft_cli.run(2) == 12
    assert perft_cli.run(1, position="d3") == 3
    assert perft_cli.run(1, size=4) == 4


def test_winner_name():
    assert selfplay_cli.winner_name(3) == "Maximizing"
    assert selfplay_cli.winner_name(-1) == "Minimizing"
    assert selfplay_cli.winner_name(0) == "tie"


def test_tictactoe_selfplay_is_a_draw():
    record = selfplay_cli.play_game(TicTacToeNode.initial(), AlphaBeta(9), game="tictactoe")
    assert record.winner == "tie"
    assert record.final_score == 0
    assert len(record.moves) == 9
    assert sorted(record.moves) == list(range(9))


def test_small_reversi_selfplay_finishes():
    record = selfplay_cli.play_game(initial_node(4), AlphaBeta(2))
    assert record.moves
    assert len(record.scores) == len(record.moves)
    assert record.final_score % DEFAULT_WEIGHTS.victory == 0
    assert record.winner == selfplay_cli.winner_name(record.final_score)


def test_selfplay_main_writes_record(sandbox):
    out = sandbox / "game.json"
    selfplay_cli.main(["--game", "tictactoe", "--depth", "9", "--output", str(out)])
    data = orjson.loads(out.read_bytes())
    assert data["game"] == "tictactoe"
    assert data["winner"] == "tie"
    assert len(data["moves"]) == 18
    assert (sandbox / "home" / "config.toml").exists()


def test_selfplay_main_exits_on_bad_depth(sandbox):
    with pytest.raises(SystemExit) as exc:
        selfplay_cli.main(["--game", "reversi", "--size", "4", "--depth", "0"])
    assert exc.value.code == 1


@pytest.mark.parametrize("argv", [
    ["--depth", "1", "--position", "a1"],
    ["--depth", "1", "--size", "5"],
])
def test_perft_main_exits_on_bad_input(sandbox, argv):
    with pytest.raises(SystemExit) as exc:
        perft_cli.main(argv)
    assert exc.value.code == 1
    assert "Error running perft" in (sandbox / "reversi-alphabeta.log").read_text(encoding="utf-8")


def test_selfplay_main_exits_on_malformed_config(sandbox):
    bad = sandbox / "broken.toml"
    bad.write_text("[engine\ndepth = ", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        selfplay_cli.main(["--config", str(bad)])
    assert exc.value.code == 1


def test_diag_main_exits_when_bundle_cannot_be_written(sandbox):
    with pytest.raises(SystemExit) as exc:
        diag.main(["--bundle", str(sandbox / "missing" / "diag.zip")])
    assert exc.value.code == 1
