import json

from dungeongen import logging_utils


def test_key_value_format(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    log = logging_utils.get_logger("test_kv")
    log.info(event="dungeon_generated", seed=42, size="40x40", note="two words", skipped=None)
    captured = capsys.readouterr()
    assert captured.out == ""
    line = captured.err.strip()
    assert line.startswith("level=info ts=")
    assert "event=dungeon_generated" in line and "seed=42" in line
    assert "note=two_words" in line
    assert "skipped" not in line
    assert "logger=test_kv" in line


def test_json_format(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    logging_utils.get_logger("test_json").warn(event="no_start_goal", rooms=1)
    rec = json.loads(capsys.readouterr().err)
    assert rec["level"] == "warn"
    assert rec["event"] == "no_start_goal" and rec["rooms"] == 1
    assert isinstance(rec["ts"], int)


def test_level_filtering(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    log = logging_utils.get_logger("test_levels")
    log.debug(event="hidden")
    log.info(event="hidden")
    log.error(event="shown")
    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "level=error" in err


def test_get_logger_is_cached():
    assert logging_utils.get_logger("same") is logging_utils.get_logger("same")
