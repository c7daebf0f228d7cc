"""
Tests for settings and logging setup.
"""

import logging
from pathlib import Path

import pytest

from ..config import Settings, get_settings, reset_settings
from ..logging_config import setup_logging

pytestmark = pytest.mark.usefixtures("clean_environment")


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.log_level == "WARNING"
        assert settings.log_file is None
        assert settings.data_dir is None
        assert settings.report_top == 10
        assert settings.card_files() == []

    def test_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CARDLAB_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("CARDLAB_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("CARDLAB_REPORT_TOP", "3")
        settings = Settings.from_env()
        assert settings.log_level == "DEBUG"
        assert settings.data_dir == tmp_path
        assert settings.report_top == 3

    def test_bad_int_falls_back(self, monkeypatch):
        monkeypatch.setenv("CARDLAB_REPORT_TOP", "many")
        assert Settings.from_env().report_top == 10

    def test_card_files_sorted(self, monkeypatch, tmp_path):
        for name in ("b.json", "a.json", "notes.txt"):
            (tmp_path / name).write_text("{}", encoding="utf-8")
        monkeypatch.setenv("CARDLAB_DATA_DIR", str(tmp_path))
        assert [path.name for path in Settings.from_env().card_files()] == ["a.json", "b.json"]

    def test_missing_data_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CARDLAB_DATA_DIR", str(tmp_path / "absent"))
        assert Settings.from_env().card_files() == []

    def test_cached_until_reset(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("CARDLAB_REPORT_TOP", "5")
        assert get_settings() is first
        reset_settings()
        assert get_settings().report_top == 5

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Settings().report_top = 1


class TestSetupLogging:

    def _cardlab_handlers(self):
        return [h for h in logging.getLogger().handlers if (h.name or "").startswith("cardlab_")]

    def test_idempotent(self):
        setup_logging(level="INFO")
        setup_logging(level="DEBUG")
        handlers = self._cardlab_handlers()
        assert len(handlers) == 1
        assert handlers[0].level == logging.DEBUG

    def test_unknown_level_defaults_to_warning(self):
        setup_logging(level="CHATTY")
        assert self._cardlab_handlers()[0].level == logging.WARNING

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "cardlab.log"
        setup_logging(level="WARNING", log_file=log_file)
        logging.getLogger("cardlab.test").debug("written to file only")
        for handler in self._cardlab_handlers():
            handler.flush()
        assert "written to file only" in Path(log_file).read_text(encoding="utf-8")

    def test_environment_level(self, monkeypatch):
        monkeypatch.setenv("CARDLAB_LOG_LEVEL", "ERROR")
        setup_logging()
        assert self._cardlab_handlers()[0].level == logging.ERROR
