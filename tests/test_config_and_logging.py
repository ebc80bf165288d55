from __future__ import annotations

import logging
import sys

import orjson
import pytest

from reversi_alphabeta.engine.eval import EvalWeights
from reversi_alphabeta.engine.search import EngineConfig
from reversi_alphabeta.logging_setup import LOG_FILE_NAME, reset_logging, setup_logging
from reversi_alphabeta.tools import diag


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv(diag.HOME_ENV, str(home))
    return home


def test_defaults_match_engine_constants():
    cfg = diag.load_defaults()
    assert EngineConfig.from_dict(cfg) == EngineConfig()
    assert EvalWeights.from_dict(cfg) == EvalWeights()
    assert cfg["logging"]["level"] == "INFO"


def test_ensure_config_seeds_user_copy_once(config_home):
    assert diag.config_path() == config_home / "config.toml"
    assert diag.ensure_config() is True
    assert diag.config_path().exists()
    assert diag.ensure_config() is False
    result = diag.install_and_init()
    assert result.config_created is False


def test_load_config_reads_user_overrides(config_home):
    diag.ensure_config()
    text = diag.config_path().read_text(encoding="utf-8").replace("depth = 6", "depth = 2")
    diag.config_path().write_text(text, encoding="utf-8")
    cfg = diag.load_config()
    assert EngineConfig.from_dict(cfg).depth == 2


def test_bad_weights_in_config_are_rejected():
    with pytest.raises(ValueError):
        EvalWeights.from_dict({"eval": {"victory": 10}})


def test_log_event_emits_json_line(caplog):
    with caplog.at_level(logging.INFO, logger="event.search"):
        diag.log_event("search", "done", nodes=5, move="d3")
    records = [r for r in caplog.records if r.name == "event.search"]
    assert len(records) == 1
    payload = orjson.loads(records[0].getMessage())
    assert payload["module"] == "search"
    assert payload["event"] == "done"
    assert payload["nodes"] == 5
    assert payload["move"] == "d3"


def test_setup_logging_writes_central_log_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    reset_logging()
    try:
        stdout, stderr = sys.stdout, sys.stderr
        setup_logging(overwrite=True, level="info")
        assert sys.stdout is stdout and sys.stderr is stderr
        # second call is a no-op
        setup_logging(overwrite=True, level="debug")
        logging.getLogger("reversi_alphabeta.test").info("hello from the test")
        logging.getLogger("reversi_alphabeta.test").debug("filtered out")
        for handler in logging.getLogger().handlers:
            handler.flush()
        text = (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8")
        assert "hello from the test" in text
        assert "filtered out" not in text
    finally:
        reset_logging()


def test_diag_bundle(tmp_path, config_home, monkeypatch):
    import zipfile

    monkeypatch.chdir(tmp_path)
    bundle = tmp_path / "bundle.zip"
    diag.main(["--bundle", str(bundle)])
    with zipfile.ZipFile(bundle) as z:
        names = set(z.namelist())
    assert {"config.toml", "env.txt", "timestamp.txt"} <= names
