"""メモリ上のプロジェクトリポジトリ。"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

from color_matcher.domain.project import ColorHistoryEntry, ColorProject, new_id, utc_now
from color_matcher.errors import DuplicateProjectError, ProjectNotFoundError
from color_matcher.infrastructure.project_json import dumps_project, loads_project

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
"""現在時刻（UTC）を返す関数"""


def _require_id(project_id: str) -> None:
    if not project_id:
        raise ValueError("Project ID cannot be empty")


class InMemoryColorRepository:
    """dict ベースの ColorRepository 実装。スレッドセーフ。"""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._projects: dict[str, ColorProject] = {}
        self._lock = threading.Lock()

    def create_project(self, project: ColorProject) -> ColorProject:
        with self._lock:
            if project.id in self._projects:
                raise DuplicateProjectError(
                    f"Project with ID '{project.id}' already exists"
                )
            now = self._clock()
            project.created_at = now
            project.modified_at = now
            self._projects[project.id] = project
        logger.debug("Created project %s (%s)", project.id, project.display_name)
        return project

    def restore_project(self, project: ColorProject) -> bool:
        """保存済みプロジェクトをタイムスタンプを変えずに登録。

        Returns:
            同じIDが既にあれば False（登録しない）
        """
        with self._lock:
            if project.id in self._projects:
                return False
            self._projects[project.id] = project
            return True

    def get_project(self, project_id: str) -> ColorProject | None:
        _require_id(project_id)
        with self._lock:
            return self._projects.get(project_id)

    def get_all_projects(self) -> list[ColorProject]:
        with self._lock:
            projects = list(self._projects.values())
        return sorted(projects, key=lambda p: p.modified_at, reverse=True)

    def update_project(self, project: ColorProject) -> ColorProject:
        with self._lock:
            if project.id not in self._projects:
                raise ProjectNotFoundError(project.id)
            project.modified_at = self._clock()
            self._projects[project.id] = project
        logger.debug("Updated project %s", project.id)
        return project

    def delete_project(self, project_id: str) -> bool:
        _require_id(project_id)
        with self._lock:
            removed = self._projects.pop(project_id, None) is not None
        if removed:
            logger.debug("Deleted project %s", project_id)
        return removed

    def add_color_history(
        self, project_id: str, entry: ColorHistoryEntry
    ) -> ColorHistoryEntry:
        _require_id(project_id)
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                raise ProjectNotFoundError(project_id)
            now = self._clock()
            entry.created_at = now
            project.color_history.append(entry)
            project.modified_at = now
        return entry

    def get_color_history(self, project_id: str) -> list[ColorHistoryEntry]:
        _require_id(project_id)
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                return []
            history = list(project.color_history)
        return sorted(history, key=lambda e: e.created_at, reverse=True)

    def clear_color_history(self, project_id: str) -> bool:
        _require_id(project_id)
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                return False
            project.color_history.clear()
            project.modified_at = self._clock()
        return True

    def export_project_as_json(self, project_id: str) -> str:
        _require_id(project_id)
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                raise ProjectNotFoundError(project_id)
            return dumps_project(project)

    def import_project_from_json(self, text: str) -> ColorProject:
        """JSON からプロジェクトを取り込む。IDとタイムスタンプは振り直す。"""
        project = loads_project(text)
        project.id = new_id()
        created = self.create_project(project)
        logger.debug("Imported project %s", created.id)
        return created
