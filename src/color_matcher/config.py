"""color_matcher の設定と検証。"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from color_matcher.errors import ConfigError

PROJECTS_DIR_ENV = "COLOR_MATCHER_PROJECTS_DIR"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_projects_dir() -> str:
    return str(Path.home() / ".color_matcher" / "projects")


@dataclass
class Config:
    """アプリケーション全体の設定。"""

    projects_dir: str = field(default_factory=default_projects_dir)
    recent_limit: int = 10

    # センサー読み取り
    sensor_max_retries: int = 3
    sensor_min_quality: int = 70
    sensor_retry_delay: float = 0.1
    sensor_seed: Optional[int] = None

    log_level: str = "WARNING"
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """環境変数で既定値を上書きした設定を作る。"""
        env = os.environ if environ is None else environ
        config = cls()
        projects_dir = env.get(PROJECTS_DIR_ENV, "").strip()
        if projects_dir:
            config.projects_dir = projects_dir
        return config

    @property
    def effective_log_level(self) -> int:
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level.upper())


def validate_config(config: Config) -> None:
    """設定値を検証。

    Raises:
        ConfigError: 値が範囲外の場合
    """
    if not config.projects_dir.strip():
        raise ConfigError("projects-dir cannot be empty")
    if config.recent_limit < 1:
        raise ConfigError(f"recent-limit must be at least 1, got {config.recent_limit}")
    if config.sensor_max_retries < 1:
        raise ConfigError(
            f"sensor max retries must be at least 1, got {config.sensor_max_retries}"
        )
    if not 0 <= config.sensor_min_quality <= 100:
        raise ConfigError(
            f"sensor minimum quality must be in 0-100, got {config.sensor_min_quality}"
        )
    if config.sensor_retry_delay < 0:
        raise ConfigError(
            f"sensor retry delay cannot be negative, got {config.sensor_retry_delay}"
        )
    if config.log_level.upper() not in LOG_LEVELS:
        raise ConfigError(
            f"log level must be one of {', '.join(LOG_LEVELS)}, got '{config.log_level}'"
        )
