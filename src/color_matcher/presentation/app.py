"""GUI アプリケーションの起動。"""

from __future__ import annotations

import sys

from PyQt6.QtWidgets import QApplication

from color_matcher.config import Config
from color_matcher.presentation.main_window import MainWindow
from color_matcher.presentation.styles import APP_STYLESHEET


def run(config: Config) -> int:
    app = QApplication(sys.argv[:1])
    app.setStyleSheet(APP_STYLESHEET)
    window = MainWindow(config)
    window.show()
    return app.exec()
