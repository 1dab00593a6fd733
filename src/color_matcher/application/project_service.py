"""プロジェクト管理サービス。

現在のプロジェクト・最近使ったプロジェクト・比較履歴の操作をまとめる。
"""

from __future__ import annotations

import logging
from pathlib import Path

from color_matcher.application.session import ColorMatchSession
from color_matcher.domain.project import ColorHistoryEntry, ColorProject
from color_matcher.domain.repository import ColorRepository
from color_matcher.errors import ColorMatcherError, ProjectNotFoundError
from color_matcher.infrastructure.history_export import save_history_csv

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Untitled Project"
MANUAL_MATCH_NOTE = "Manual color match"


class ProjectService:
    """リポジトリ上のプロジェクトと編集中セッションを橋渡しする。"""

    def __init__(self, repository: ColorRepository, recent_limit: int = 10) -> None:
        self._repository = repository
        self._recent_limit = max(1, recent_limit)
        self._current: ColorProject | None = None
        self.project_name = DEFAULT_PROJECT_NAME
        self.project_description = ""

    @property
    def repository(self) -> ColorRepository:
        return self._repository

    @property
    def current_project(self) -> ColorProject | None:
        return self._current

    @property
    def recent_limit(self) -> int:
        return self._recent_limit

    @recent_limit.setter
    def recent_limit(self, value: int) -> None:
        self._recent_limit = max(1, value)

    def new_project(self, session: ColorMatchSession) -> ColorProject:
        """セッションの色で新しいプロジェクトを作成し、現在のプロジェクトにする。"""
        project = ColorProject(
            name=self.project_name,
            description=self.project_description,
            reference_color=session.reference,
            sample_color=session.sample,
        )
        self._current = self._repository.create_project(project)
        session.mark_saved()
        logger.info("Created project '%s'", project.display_name)
        return self._current

    def save(self, session: ColorMatchSession) -> ColorProject:
        """現在のプロジェクトを保存（未作成なら新規作成）。"""
        if self._current is None:
            return self.new_project(session)

        self._current.name = self.project_name
        self._current.description = self.project_description
        if session.reference is not None:
            self._current.reference_color = session.reference
        if session.sample is not None:
            self._current.sample_color = session.sample
        self._repository.update_project(self._current)
        session.mark_saved()
        return self._current

    def record_match(
        self,
        session: ColorMatchSession,
        notes: str | None = MANUAL_MATCH_NOTE,
        accepted: bool = False,
    ) -> ColorHistoryEntry | None:
        """現在の比較結果を履歴に追加。2色揃っていなければ何もしない。"""
        if not session.comparison.is_complete:
            return None
        project = self._current or self.new_project(session)
        entry = ColorHistoryEntry.from_comparison(session.reference, session.sample, notes)
        entry.is_accepted = accepted
        return self._repository.add_color_history(project.id, entry)

    def load_project(self, project: ColorProject, session: ColorMatchSession) -> None:
        """プロジェクトを現在のプロジェクトにし、色をセッションへ反映。"""
        self._current = project
        self.project_name = project.name or DEFAULT_PROJECT_NAME
        self.project_description = project.description or ""
        if project.reference_color is not None:
            session.set_reference(project.reference_color)
        if project.sample_color is not None:
            session.set_sample(project.sample_color)
        session.mark_saved()

    def open_project(self, project_id: str, session: ColorMatchSession) -> ColorProject:
        project = self._repository.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        self.load_project(project, session)
        return project

    def delete_project(self, project_id: str) -> bool:
        removed = self._repository.delete_project(project_id)
        if self._current is not None and self._current.id == project_id:
            self._current = None
            self.project_name = DEFAULT_PROJECT_NAME
            self.project_description = ""
        return removed

    def recent_projects(self) -> list[ColorProject]:
        """更新日時の新しい順に最大 recent_limit 件。"""
        return self._repository.get_all_projects()[: self._recent_limit]

    def history(self) -> list[ColorHistoryEntry]:
        if self._current is None:
            return []
        return self._repository.get_color_history(self._current.id)

    def clear_history(self) -> bool:
        if self._current is None:
            return False
        return self._repository.clear_color_history(self._current.id)

    def set_entry_accepted(self, entry_id: str, accepted: bool = True) -> ColorHistoryEntry:
        """履歴エントリの採用フラグを切り替えて保存。"""
        if self._current is None:
            raise ColorMatcherError("No project is open")
        for entry in self._current.color_history:
            if entry.id == entry_id:
                entry.is_accepted = accepted
                self._repository.update_project(self._current)
                return entry
        raise ColorMatcherError(f"History entry '{entry_id}' not found")

    def export_current(self) -> str | None:
        if self._current is None:
            return None
        return self._repository.export_project_as_json(self._current.id)

    def import_project(self, text: str, session: ColorMatchSession) -> ColorProject | None:
        """JSON を取り込み、取り込んだプロジェクトを開く。空文字列なら None。"""
        if not text.strip():
            return None
        project = self._repository.import_project_from_json(text)
        self.load_project(project, session)
        logger.info("Imported project '%s'", project.display_name)
        return project

    def export_history_csv(self, path: str | Path) -> int:
        """現在のプロジェクトの履歴を CSV に書き出す。

        Returns:
            書き出したエントリ数
        """
        entries = self.history()
        save_history_csv(entries, path)
        return len(entries)
