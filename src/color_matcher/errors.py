"""color_matcher 共通の例外階層。"""

from __future__ import annotations


class ColorMatcherError(Exception):
    """color_matcher の全例外の基底クラス。"""


class InvalidColorError(ColorMatcherError, ValueError):
    """RGB / LAB / HEX の値が不正。"""


class ProjectNotFoundError(ColorMatcherError, KeyError):
    """指定IDのプロジェクトが存在しない。"""

    def __init__(self, project_id: str) -> None:
        super().__init__(project_id)
        self.project_id = project_id

    def __str__(self) -> str:
        return f"Project with ID '{self.project_id}' not found"


class DuplicateProjectError(ColorMatcherError):
    """同じIDのプロジェクトが既に存在する。"""


class ProjectFormatError(ColorMatcherError):
    """プロジェクトJSONの構造・値が不正。"""


class SensorError(ColorMatcherError):
    """センサー読み取りの失敗。"""


class SensorNotConnectedError(SensorError):
    """未接続のセンサーを操作しようとした。"""


class ConfigError(ColorMatcherError):
    """CLI引数・設定値が不正。"""
