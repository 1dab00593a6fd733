"""main_window.py のテスト。"""

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from PyQt6.QtGui import QCloseEvent  # noqa: E402

from color_matcher.config import Config  # noqa: E402
from color_matcher.presentation import main_window  # noqa: E402


class _FakeWorker:
    """isRunning/wait だけを持つワーカーの代役。"""

    def __init__(self, running: bool) -> None:
        self._running = running
        self.wait_calls = 0

    def isRunning(self) -> bool:  # noqa: N802
        return self._running

    def wait(self) -> bool:
        self.wait_calls += 1
        self._running = False
        return True


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def window(qapp, tmp_path: Path):
    win = main_window.MainWindow(Config(projects_dir=str(tmp_path)))
    yield win
    win.deleteLater()


class TestImageSampling:
    def test_busy_worker_blocks_new_request(
        self, window, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        opened: list[tuple] = []

        class _Dialog:
            @staticmethod
            def getOpenFileName(*args):  # noqa: N802
                opened.append(args)
                return "", ""

        monkeypatch.setattr(main_window, "QFileDialog", _Dialog)
        busy = _FakeWorker(running=True)
        window._image_worker = busy

        window._on_sample_image(False)
        assert opened == []
        assert window._image_worker is busy

    def test_finished_worker_allows_new_request(
        self, window, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        opened: list[tuple] = []

        class _Dialog:
            @staticmethod
            def getOpenFileName(*args):  # noqa: N802
                opened.append(args)
                return "", ""

        monkeypatch.setattr(main_window, "QFileDialog", _Dialog)
        window._image_worker = _FakeWorker(running=False)

        window._on_sample_image(True)
        assert len(opened) == 1


class TestClose:
    def test_waits_for_running_workers(self, window) -> None:
        image = _FakeWorker(running=True)
        sensor = _FakeWorker(running=True)
        window._image_worker = image
        window._sensor_worker = sensor

        window.closeEvent(QCloseEvent())
        assert image.wait_calls == 1
        assert sensor.wait_calls == 1

    def test_idle_workers_are_not_waited(self, window) -> None:
        image = _FakeWorker(running=False)
        window._image_worker = image
        window._sensor_worker = None

        window.closeEvent(QCloseEvent())
        assert image.wait_calls == 0
