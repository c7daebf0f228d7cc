"""
Runtime settings.

Every setting can be overridden from the environment:
- CARDLAB_LOG_LEVEL:  DEBUG|INFO|WARNING|ERROR (default WARNING)
- CARDLAB_LOG_FILE:   write logs to this file as well
- CARDLAB_DATA_DIR:   directory searched for card files when none are given
- CARDLAB_REPORT_TOP: rows in the strongest/weakest listings of a report

Command-line flags take precedence over these values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def _get_env_int(key: str, default: int) -> int:
    value = os.environ.get(key)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            pass
    return default


def _get_env_path(key: str) -> Optional[Path]:
    value = os.environ.get(key, "").strip()
    return Path(value) if value else None


@dataclass(frozen=True)
class Settings:
    log_level: str = field(
        default_factory=lambda: os.environ.get("CARDLAB_LOG_LEVEL", "WARNING")
    )
    log_file: Optional[Path] = field(default_factory=lambda: _get_env_path("CARDLAB_LOG_FILE"))
    data_dir: Optional[Path] = field(default_factory=lambda: _get_env_path("CARDLAB_DATA_DIR"))
    report_top: int = field(default_factory=lambda: _get_env_int("CARDLAB_REPORT_TOP", 10))

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the current environment."""
        return cls()

    def card_files(self) -> list[Path]:
        """JSON files in the data directory, sorted; empty if none is configured."""
        if self.data_dir is None or not self.data_dir.is_dir():
            return []
        return sorted(self.data_dir.glob("*.json"))


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, read lazily."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings (used by tests)."""
    global _settings
    _settings = None
