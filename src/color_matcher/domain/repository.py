"""プロジェクト永続化のインターフェース定義。"""

from __future__ import annotations

from typing import Protocol

from color_matcher.domain.project import ColorHistoryEntry, ColorProject


class ColorRepository(Protocol):
    """プロジェクト保存先のプロトコル。

    create / update / add_color_history はタイムスタンプを更新する。
    未知IDへの update / add_color_history / export は ProjectNotFoundError。
    """

    def create_project(self, project: ColorProject) -> ColorProject: ...

    def get_project(self, project_id: str) -> ColorProject | None: ...

    def get_all_projects(self) -> list[ColorProject]:
        """更新日時の新しい順。"""
        ...

    def update_project(self, project: ColorProject) -> ColorProject: ...

    def delete_project(self, project_id: str) -> bool: ...

    def add_color_history(
        self, project_id: str, entry: ColorHistoryEntry
    ) -> ColorHistoryEntry: ...

    def get_color_history(self, project_id: str) -> list[ColorHistoryEntry]:
        """作成日時の新しい順。"""
        ...

    def clear_color_history(self, project_id: str) -> bool: ...

    def export_project_as_json(self, project_id: str) -> str: ...

    def import_project_from_json(self, text: str) -> ColorProject: ...
