"""file_repository.py のテスト。"""

import logging
from pathlib import Path

import pytest

from color_matcher.domain.color import RGB
from color_matcher.domain.project import ColorHistoryEntry, ColorProject
from color_matcher.errors import ProjectNotFoundError
from color_matcher.infrastructure.file_repository import FileColorRepository, safe_file_stem
from color_matcher.infrastructure.project_json import loads_project


class TestSafeFileStem:
    def test_uuid_is_unchanged(self) -> None:
        stem = "0b6f1c1e-8a2d-4f57-9c51-3f0c5f1e2a9b"
        assert safe_file_stem(stem) == stem

    def test_unsafe_characters(self) -> None:
        assert safe_file_stem("../etc/passwd") == "___etc_passwd"
        assert safe_file_stem("a b:c") == "a_b_c"


class TestFileColorRepository:
    def test_creates_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "projects"
        repo = FileColorRepository(target)
        assert target.is_dir()
        assert repo.projects_dir == target

    def test_empty_path(self) -> None:
        with pytest.raises(ValueError):
            FileColorRepository("  ")

    def test_create_writes_file(self, tmp_path: Path, clock) -> None:
        repo = FileColorRepository(tmp_path, clock=clock)
        project = repo.create_project(ColorProject(name="Door", reference_color=RGB(1, 2, 3)))
        path = repo.project_path(project.id)
        assert path.exists()
        assert loads_project(path.read_text(encoding="utf-8")) == project
        assert not list(tmp_path.glob("*.tmp"))

    def test_reload_from_disk(self, tmp_path: Path, clock) -> None:
        repo = FileColorRepository(tmp_path, clock=clock)
        project = repo.create_project(ColorProject(name="Door"))
        repo.add_color_history(
            project.id, ColorHistoryEntry.from_comparison(RGB(200, 10, 10), RGB(190, 20, 10))
        )

        reopened = FileColorRepository(tmp_path)
        loaded = reopened.get_project(project.id)
        assert loaded is not None
        assert loaded.name == "Door"
        assert loaded.modified_at == project.modified_at
        assert len(reopened.get_color_history(project.id)) == 1

    def test_load_all_projects_once(self, tmp_path: Path) -> None:
        FileColorRepository(tmp_path).create_project(ColorProject(name="A"))
        FileColorRepository(tmp_path).create_project(ColorProject(name="B"))

        repo = FileColorRepository(tmp_path)
        assert repo.load_all_projects() == 2
        assert repo.load_all_projects() == 0
        assert len(repo.get_all_projects()) == 2

    def test_corrupt_file_is_skipped(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        FileColorRepository(tmp_path).create_project(ColorProject(name="Good"))
        (tmp_path / "broken.json").write_text("{oops", encoding="utf-8")

        repo = FileColorRepository(tmp_path)
        with caplog.at_level(logging.WARNING):
            assert repo.load_all_projects() == 1
        assert "broken.json" in caplog.text

    def test_duplicate_id_is_skipped(self, tmp_path: Path) -> None:
        project = FileColorRepository(tmp_path).create_project(ColorProject(name="A"))
        text = (tmp_path / f"{project.id}.json").read_text(encoding="utf-8")
        (tmp_path / "copy.json").write_text(text, encoding="utf-8")

        repo = FileColorRepository(tmp_path)
        assert repo.load_all_projects() == 1

    def test_update_rewrites_file(self, tmp_path: Path, clock) -> None:
        repo = FileColorRepository(tmp_path, clock=clock)
        project = repo.create_project(ColorProject(name="Old"))
        project.name = "New"
        repo.update_project(project)
        saved = loads_project(repo.project_path(project.id).read_text(encoding="utf-8"))
        assert saved.name == "New"

    def test_update_unknown(self, tmp_path: Path) -> None:
        repo = FileColorRepository(tmp_path)
        with pytest.raises(ProjectNotFoundError):
            repo.update_project(ColorProject(id="ghost"))
        assert not repo.project_path("ghost").exists()

    def test_delete_removes_file(self, tmp_path: Path) -> None:
        repo = FileColorRepository(tmp_path)
        project = repo.create_project(ColorProject())
        path = repo.project_path(project.id)
        assert repo.delete_project(project.id)
        assert not path.exists()
        assert not repo.delete_project(project.id)

    def test_clear_history_persists(self, tmp_path: Path) -> None:
        repo = FileColorRepository(tmp_path)
        project = repo.create_project(ColorProject())
        repo.add_color_history(project.id, ColorHistoryEntry())
        assert repo.clear_color_history(project.id)
        assert FileColorRepository(tmp_path).get_color_history(project.id) == []

    def test_import_persists(self, tmp_path: Path) -> None:
        source = FileColorRepository(tmp_path / "a")
        project = source.create_project(ColorProject(name="Shared"))
        text = source.export_project_as_json(project.id)

        target = FileColorRepository(tmp_path / "b")
        imported = target.import_project_from_json(text)
        assert target.project_path(imported.id).exists()
        assert FileColorRepository(tmp_path / "b").get_project(imported.id).name == "Shared"


def _fail_write(self: Path, *args, **kwargs) -> int:
    raise OSError("disk full")


def _fail_unlink(self: Path, *args, **kwargs) -> None:
    raise OSError("permission denied")


class TestWriteFailures:
    """書き込み失敗時にメモリとディスクが食い違わないこと。"""

    def test_failed_create_leaves_nothing(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        repo = FileColorRepository(tmp_path)
        project = ColorProject(name="Door")
        with monkeypatch.context() as m:
            m.setattr(Path, "write_text", _fail_write)
            with pytest.raises(OSError):
                repo.create_project(project)

        assert repo.get_project(project.id) is None
        assert repo.get_all_projects() == []
        assert not list(tmp_path.iterdir())

    def test_create_can_be_retried(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        repo = FileColorRepository(tmp_path)
        project = ColorProject(name="Door")
        with monkeypatch.context() as m:
            m.setattr(Path, "write_text", _fail_write)
            with pytest.raises(OSError):
                repo.create_project(project)

        created = repo.create_project(project)
        assert repo.project_path(created.id).exists()
        assert FileColorRepository(tmp_path).get_project(created.id) is not None

    def test_failed_update_keeps_saved_version(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        repo = FileColorRepository(tmp_path)
        project = repo.create_project(ColorProject(name="Old"))
        edited = ColorProject(id=project.id, name="New")
        with monkeypatch.context() as m:
            m.setattr(Path, "write_text", _fail_write)
            with pytest.raises(OSError):
                repo.update_project(edited)

        assert repo.get_project(project.id).name == "Old"
        assert FileColorRepository(tmp_path).get_project(project.id).name == "Old"

    def test_failed_history_add_is_rolled_back(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        repo = FileColorRepository(tmp_path)
        project = repo.create_project(ColorProject())
        with monkeypatch.context() as m:
            m.setattr(Path, "write_text", _fail_write)
            with pytest.raises(OSError):
                repo.add_color_history(project.id, ColorHistoryEntry())

        assert repo.get_color_history(project.id) == []

    def test_failed_import_leaves_nothing(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        source = FileColorRepository(tmp_path / "a")
        text = source.export_project_as_json(
            source.create_project(ColorProject(name="Shared")).id
        )
        target = FileColorRepository(tmp_path / "b")
        with monkeypatch.context() as m:
            m.setattr(Path, "write_text", _fail_write)
            with pytest.raises(OSError):
                target.import_project_from_json(text)

        assert target.get_all_projects() == []

    def test_failed_delete_keeps_project(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        repo = FileColorRepository(tmp_path)
        project = repo.create_project(ColorProject(name="Keep"))
        with monkeypatch.context() as m:
            m.setattr(Path, "unlink", _fail_unlink)
            with pytest.raises(OSError):
                repo.delete_project(project.id)

        assert repo.get_project(project.id) is not None
        assert FileColorRepository(tmp_path).get_project(project.id) is not None
        assert repo.delete_project(project.id)
        assert FileColorRepository(tmp_path).get_project(project.id) is None
