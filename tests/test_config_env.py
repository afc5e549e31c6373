from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from prosecheck.config import load_config


def test_env_debug_and_log_level(monkeypatch: Any) -> None:
    monkeypatch.setenv("PROSECHECK_DEBUG", "yes")
    monkeypatch.setenv("PROSECHECK_LOG_LEVEL", "debug")
    cfg = load_config()
    assert cfg.debug is True
    assert cfg.logging.level == "DEBUG"


def test_explicit_env_mapping_wins_over_file(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("debug: true\nlogging:\n  level: INFO\n", encoding="utf-8")
    cfg = load_config(cfg_file, env={"PROSECHECK_DEBUG": "0"})
    assert cfg.debug is False
    assert cfg.logging.level == "INFO"


def test_invalid_env_flag() -> None:
    with pytest.raises(ValueError):
        load_config(env={"PROSECHECK_DEBUG": "sometimes"})


def test_invalid_log_level() -> None:
    with pytest.raises(ValidationError):
        load_config(env={"PROSECHECK_LOG_LEVEL": "LOUD"})
