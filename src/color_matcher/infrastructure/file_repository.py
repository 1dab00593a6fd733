"""JSONファイルによるプロジェクトリポジトリ。

1プロジェクト = 1ファイル（<ID>.json）。読み込みは初回アクセス時にまとめて行い、
以降はメモリ上のリポジトリを正とし、変更のたびに該当ファイルを書き直す。
"""

from __future__ import annotations

import logging
import re
import threading
from pathlib import Path

from color_matcher.domain.project import ColorHistoryEntry, ColorProject, utc_now
from color_matcher.errors import ProjectFormatError
from color_matcher.infrastructure.memory_repository import Clock, InMemoryColorRepository
from color_matcher.infrastructure.project_json import dumps_project, loads_project

logger = logging.getLogger(__name__)

_UNSAFE_ID_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def safe_file_stem(project_id: str) -> str:
    """ファイル名に使えない文字を '_' に置換。"""
    return _UNSAFE_ID_CHARS.sub("_", project_id)


class FileColorRepository:
    """ディレクトリ配下の JSON ファイルに保存する ColorRepository 実装。"""

    def __init__(self, projects_dir: str | Path, clock: Clock = utc_now) -> None:
        if not str(projects_dir).strip():
            raise ValueError("Projects directory cannot be empty")
        self._dir = Path(projects_dir).expanduser()
        self._dir.mkdir(parents=True, exist_ok=True)
        self._memory = InMemoryColorRepository(clock)
        self._lock = threading.RLock()
        self._loaded = False

    @property
    def projects_dir(self) -> Path:
        return self._dir

    def project_path(self, project_id: str) -> Path:
        return self._dir / f"{safe_file_stem(project_id)}.json"

    def load_all_projects(self) -> int:
        """ディレクトリ内の全プロジェクトを読み込む（2回目以降は何もしない）。

        壊れたファイル・重複IDのファイルは警告を出してスキップ。

        Returns:
            今回読み込んだプロジェクト数
        """
        with self._lock:
            if self._loaded:
                return 0
            count = 0
            for path in sorted(self._dir.glob("*.json")):
                try:
                    project = loads_project(path.read_text(encoding="utf-8"))
                except (OSError, UnicodeDecodeError, ProjectFormatError) as exc:
                    logger.warning("Skipping unreadable project file %s: %s", path, exc)
                    continue
                if not self._memory.restore_project(project):
                    logger.warning(
                        "Skipping %s: duplicate project ID %s", path, project.id
                    )
                    continue
                count += 1
            self._loaded = True
            logger.debug("Loaded %d project(s) from %s", count, self._dir)
            return count

    def _save(self, project: ColorProject) -> None:
        path = self.project_path(project.id)
        tmp_path = path.with_suffix(".tmp")
        try:
            tmp_path.write_text(dumps_project(project), encoding="utf-8")
            tmp_path.replace(path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def _save_or_rollback(self, project: ColorProject) -> None:
        """保存に失敗したらメモリ上の該当プロジェクトをディスクの内容に戻して再送出。"""
        try:
            self._save(project)
        except OSError:
            self._rollback(project.id)
            raise

    def _rollback(self, project_id: str) -> None:
        self._memory.delete_project(project_id)
        path = self.project_path(project_id)
        try:
            saved = loads_project(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, UnicodeDecodeError, ProjectFormatError) as exc:
            logger.warning("Could not restore %s after a failed write: %s", path, exc)
            return
        self._memory.restore_project(saved)

    def create_project(self, project: ColorProject) -> ColorProject:
        with self._lock:
            self.load_all_projects()
            created = self._memory.create_project(project)
            self._save_or_rollback(created)
            return created

    def get_project(self, project_id: str) -> ColorProject | None:
        with self._lock:
            self.load_all_projects()
            return self._memory.get_project(project_id)

    def get_all_projects(self) -> list[ColorProject]:
        with self._lock:
            self.load_all_projects()
            return self._memory.get_all_projects()

    def update_project(self, project: ColorProject) -> ColorProject:
        with self._lock:
            self.load_all_projects()
            updated = self._memory.update_project(project)
            self._save_or_rollback(updated)
            return updated

    def delete_project(self, project_id: str) -> bool:
        with self._lock:
            self.load_all_projects()
            if self._memory.get_project(project_id) is None:
                return False
            # ファイルを消せた場合のみメモリからも消す
            self.project_path(project_id).unlink(missing_ok=True)
            return self._memory.delete_project(project_id)

    def add_color_history(
        self, project_id: str, entry: ColorHistoryEntry
    ) -> ColorHistoryEntry:
        with self._lock:
            self.load_all_projects()
            added = self._memory.add_color_history(project_id, entry)
            project = self._memory.get_project(project_id)
            if project is not None:
                self._save_or_rollback(project)
            return added

    def get_color_history(self, project_id: str) -> list[ColorHistoryEntry]:
        with self._lock:
            self.load_all_projects()
            return self._memory.get_color_history(project_id)

    def clear_color_history(self, project_id: str) -> bool:
        with self._lock:
            self.load_all_projects()
            cleared = self._memory.clear_color_history(project_id)
            project = self._memory.get_project(project_id)
            if cleared and project is not None:
                self._save_or_rollback(project)
            return cleared

    def export_project_as_json(self, project_id: str) -> str:
        with self._lock:
            self.load_all_projects()
            return self._memory.export_project_as_json(project_id)

    def import_project_from_json(self, text: str) -> ColorProject:
        with self._lock:
            self.load_all_projects()
            project = self._memory.import_project_from_json(text)
            self._save_or_rollback(project)
            return project
