"""メインウィンドウ。"""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import Qt, QThread, pyqtSignal
from PyQt6.QtWidgets import (
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from color_matcher.application.project_service import DEFAULT_PROJECT_NAME, ProjectService
from color_matcher.application.sensor_service import SensorService
from color_matcher.application.session import ColorMatchSession
from color_matcher.config import Config
from color_matcher.domain.color import RGB
from color_matcher.domain.project import ColorHistoryEntry
from color_matcher.domain.sensor import SensorReading
from color_matcher.errors import ColorMatcherError
from color_matcher.infrastructure.file_repository import FileColorRepository
from color_matcher.infrastructure.image_io import sample_image_color
from color_matcher.infrastructure.stub_sensor import StubSensorReader
from color_matcher.presentation.color_input import ColorInputPanel
from color_matcher.presentation.lab_graph import LabGraphWidget

_IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.tiff *.webp);;All Files (*)"


class ImageSampleWorker(QThread):
    """画像の平均色をバックグラウンドで計算するワーカー。"""

    finished = pyqtSignal(object)  # RGB
    error = pyqtSignal(str)

    def __init__(self, path: str) -> None:
        super().__init__()
        self._path = path

    def run(self) -> None:
        try:
            self.finished.emit(sample_image_color(self._path))
        except (ColorMatcherError, OSError) as e:
            self.error.emit(str(e))


class SensorReadWorker(QThread):
    """品質検証付きのセンサー測定ワーカー。"""

    finished = pyqtSignal(object)  # SensorReading
    error = pyqtSignal(str)

    def __init__(self, service: SensorService) -> None:
        super().__init__()
        self._service = service

    def run(self) -> None:
        try:
            if not self._service.is_connected:
                self._service.connect()
            self.finished.emit(self._service.read_sample())
        except ColorMatcherError as e:
            self.error.emit(str(e))


class MainWindow(QMainWindow):
    """Color Matcher メインウィンドウ。"""

    def __init__(self, config: Config | None = None) -> None:
        super().__init__()
        self._config = config or Config()
        self.setWindowTitle("Color Matcher")
        self.setMinimumSize(900, 560)
        self.resize(1100, 680)

        self._session = ColorMatchSession()
        self._projects = ProjectService(
            FileColorRepository(self._config.projects_dir),
            recent_limit=self._config.recent_limit,
        )
        self._sensor = SensorService(
            StubSensorReader(seed=self._config.sensor_seed), self._config
        )
        self._image_worker: ImageSampleWorker | None = None
        self._sensor_worker: SensorReadWorker | None = None

        self._setup_ui()
        self._refresh_comparison()
        self._refresh_recent_menu()

    # --- UI構築 ---

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(6, 6, 6, 6)
        main_layout.setSpacing(4)

        # プロジェクト名・説明
        project_row = QHBoxLayout()
        project_row.addWidget(QLabel("Project:"))
        self._name_edit = QLineEdit(self._projects.project_name)
        self._name_edit.textEdited.connect(self._on_project_name_edited)
        project_row.addWidget(self._name_edit, stretch=1)
        project_row.addWidget(QLabel("Description:"))
        self._description_edit = QLineEdit()
        self._description_edit.textEdited.connect(self._on_project_description_edited)
        project_row.addWidget(self._description_edit, stretch=2)
        main_layout.addLayout(project_row)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # 左: 色入力 + 比較結果
        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)

        self._reference_panel = ColorInputPanel("Reference")
        self._reference_panel.color_edited.connect(self._on_reference_edited)
        self._reference_panel.image_requested.connect(lambda: self._on_sample_image(False))
        self._reference_panel.sensor_requested.connect(lambda: self._on_sensor_read(False))
        left_layout.addWidget(self._reference_panel)

        self._sample_panel = ColorInputPanel("Sample")
        self._sample_panel.color_edited.connect(self._on_sample_edited)
        self._sample_panel.image_requested.connect(lambda: self._on_sample_image(True))
        self._sample_panel.sensor_requested.connect(lambda: self._on_sensor_read(True))
        left_layout.addWidget(self._sample_panel)

        result_group = QGroupBox("Match")
        result_layout = QVBoxLayout(result_group)
        self._delta_e_label = QLabel()
        self._delta_e_label.setObjectName("deltaELabel")
        result_layout.addWidget(self._delta_e_label)
        self._band_label = QLabel()
        result_layout.addWidget(self._band_label)
        self._recommendation_label = QLabel()
        self._recommendation_label.setObjectName("recommendationLabel")
        self._recommendation_label.setWordWrap(True)
        result_layout.addWidget(self._recommendation_label)

        button_row = QHBoxLayout()
        swap_btn = QPushButton("⇅ Swap")
        swap_btn.setObjectName("swapBtn")
        swap_btn.setToolTip("基準色とサンプル色を入れ替え")
        swap_btn.clicked.connect(self._on_swap)
        button_row.addWidget(swap_btn)
        self._record_btn = QPushButton("Record Match")
        self._record_btn.setObjectName("recordBtn")
        self._record_btn.setToolTip("現在の比較結果を履歴に保存")
        self._record_btn.clicked.connect(self._on_record_match)
        button_row.addWidget(self._record_btn)
        result_layout.addLayout(button_row)
        left_layout.addWidget(result_group)
        left_layout.addStretch()

        # 中: a*/b* グラフ
        graph_panel = QWidget()
        graph_layout = QVBoxLayout(graph_panel)
        graph_layout.setContentsMargins(0, 0, 0, 0)
        graph_label = QLabel("a*/b* Plane")
        graph_label.setObjectName("panelLabel")
        graph_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        graph_layout.addWidget(graph_label)
        self._graph = LabGraphWidget()
        graph_layout.addWidget(self._graph)

        # 右: 履歴
        history_panel = QWidget()
        history_layout = QVBoxLayout(history_panel)
        history_layout.setContentsMargins(0, 0, 0, 0)
        history_label = QLabel("History")
        history_label.setObjectName("panelLabel")
        history_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        history_layout.addWidget(history_label)
        self._history_list = QListWidget()
        self._history_list.itemDoubleClicked.connect(self._on_history_reuse)
        history_layout.addWidget(self._history_list)
        history_buttons = QHBoxLayout()
        reuse_btn = QPushButton("Use Colors")
        reuse_btn.clicked.connect(self._on_history_reuse)
        history_buttons.addWidget(reuse_btn)
        accept_btn = QPushButton("Accept")
        accept_btn.clicked.connect(self._on_history_accept)
        history_buttons.addWidget(accept_btn)
        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self._on_history_clear)
        history_buttons.addWidget(clear_btn)
        history_layout.addLayout(history_buttons)

        splitter.addWidget(left_panel)
        splitter.addWidget(graph_panel)
        splitter.addWidget(history_panel)
        splitter.setSizes([380, 360, 320])
        main_layout.addWidget(splitter, stretch=1)

        # --- ステータスバー ---
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready: 基準色とサンプル色を入力してください")

        # --- メニューバー ---
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("File")

        new_action = file_menu.addAction("New Project")
        new_action.setShortcut("Ctrl+N")
        new_action.triggered.connect(self._on_new_project)

        save_action = file_menu.addAction("Save Project")
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self._on_save_project)

        self._recent_menu = file_menu.addMenu("Open Recent")

        delete_action = file_menu.addAction("Delete Project")
        delete_action.triggered.connect(self._on_delete_project)

        file_menu.addSeparator()
        import_action = file_menu.addAction("Import Project JSON...")
        import_action.setShortcut("Ctrl+I")
        import_action.triggered.connect(self._on_import_project)
        export_action = file_menu.addAction("Export Project JSON...")
        export_action.setShortcut("Ctrl+E")
        export_action.triggered.connect(self._on_export_project)
        csv_action = file_menu.addAction("Export History CSV...")
        csv_action.triggered.connect(self._on_export_history_csv)

        file_menu.addSeparator()
        quit_action = file_menu.addAction("Quit")
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)

        sensor_menu = menu_bar.addMenu("Sensor")
        connect_action = sensor_menu.addAction("Connect")
        connect_action.triggered.connect(self._on_sensor_connect)
        disconnect_action = sensor_menu.addAction("Disconnect")
        disconnect_action.triggered.connect(self._on_sensor_disconnect)
        calibrate_action = sensor_menu.addAction("Calibrate")
        calibrate_action.triggered.connect(self._on_sensor_calibrate)
        status_action = sensor_menu.addAction("Status...")
        status_action.triggered.connect(self._on_sensor_status)

    # --- 表示更新 ---

    def _refresh_comparison(self) -> None:
        comparison = self._session.comparison
        self._graph.set_comparison(comparison)
        if comparison.band is None:
            self._delta_e_label.setText("ΔE: -")
            self._band_label.setText("")
        else:
            self._delta_e_label.setText(f"ΔE: {comparison.delta_e:.2f}")
            self._band_label.setText(comparison.band.value)
        self._recommendation_label.setText(comparison.recommendation)
        self._record_btn.setEnabled(comparison.is_complete)
        self._update_title()

    def _refresh_colors(self) -> None:
        self._reference_panel.set_color(self._session.reference)
        self._sample_panel.set_color(self._session.sample)
        self._refresh_comparison()

    def _refresh_project_fields(self) -> None:
        self._name_edit.setText(self._projects.project_name)
        self._description_edit.setText(self._projects.project_description)
        self._update_title()

    def _refresh_history(self) -> None:
        self._history_list.clear()
        for entry in self._projects.history():
            mark = "✓ " if entry.is_accepted else ""
            text = (
                f"{mark}{entry.created_at:%Y-%m-%d %H:%M}  "
                f"{_hex(entry.reference_color)} → {_hex(entry.sample_color)}  "
                f"ΔE {entry.delta_e:.2f}"
            )
            item = QListWidgetItem(text)
            item.setToolTip(entry.tint_recommendation or "")
            item.setData(Qt.ItemDataRole.UserRole, entry)
            self._history_list.addItem(item)

    def _refresh_recent_menu(self) -> None:
        self._recent_menu.clear()
        try:
            projects = self._projects.recent_projects()
        except ColorMatcherError as e:
            self._status_bar.showMessage(f"プロジェクト一覧の読み込みに失敗: {e}")
            return
        if not projects:
            empty = self._recent_menu.addAction("(none)")
            empty.setEnabled(False)
            return
        for project in projects:
            action = self._recent_menu.addAction(project.display_name)
            action.triggered.connect(
                lambda _checked=False, pid=project.id: self._on_open_project(pid)
            )

    def _update_title(self) -> None:
        modified = "*" if self._session.is_modified else ""
        self.setWindowTitle(f"Color Matcher - {self._projects.project_name}{modified}")

    # --- 色入力 ---

    def _on_reference_edited(self, color: RGB | None) -> None:
        self._session.set_reference(color)
        self._reference_panel.set_color(self._session.reference)
        self._refresh_comparison()

    def _on_sample_edited(self, color: RGB | None) -> None:
        self._session.set_sample(color)
        self._sample_panel.set_color(self._session.sample)
        self._refresh_comparison()

    def _apply_color(self, color: RGB, as_sample: bool) -> None:
        if as_sample:
            self._session.set_sample(color)
        else:
            self._session.set_reference(color)
        self._refresh_colors()

    def _on_swap(self) -> None:
        self._session.swap()
        self._refresh_colors()

    def _on_sample_image(self, as_sample: bool) -> None:
        if self._image_worker is not None and self._image_worker.isRunning():
            return
        path, _ = QFileDialog.getOpenFileName(self, "画像を開く", "", _IMAGE_FILTER)
        if not path:
            return
        self._status_bar.showMessage(f"平均色を計算中: {Path(path).name}")
        self._image_worker = ImageSampleWorker(path)
        self._image_worker.finished.connect(
            lambda color: self._on_image_sampled(color, as_sample)
        )
        self._image_worker.error.connect(self._on_image_error)
        self._image_worker.start()

    def _on_image_sampled(self, color: RGB, as_sample: bool) -> None:
        self._apply_color(color, as_sample)
        self._status_bar.showMessage(f"画像の平均色: {color.to_hex()}")

    def _on_image_error(self, message: str) -> None:
        self._status_bar.showMessage("画像の読み込みに失敗しました")
        QMessageBox.warning(self, "エラー", f"画像の読み込みに失敗しました:\n{message}")

    # --- センサー ---

    def _set_sensor_busy(self, busy: bool) -> None:
        self._reference_panel.set_sensor_enabled(not busy)
        self._sample_panel.set_sensor_enabled(not busy)

    def _on_sensor_read(self, as_sample: bool) -> None:
        if self._sensor_worker is not None and self._sensor_worker.isRunning():
            return
        self._set_sensor_busy(True)
        self._status_bar.showMessage("センサーで測定中...")
        self._sensor_worker = SensorReadWorker(self._sensor)
        self._sensor_worker.finished.connect(
            lambda reading: self._on_sensor_done(reading, as_sample)
        )
        self._sensor_worker.error.connect(self._on_sensor_error)
        self._sensor_worker.start()

    def _on_sensor_done(self, reading: SensorReading, as_sample: bool) -> None:
        self._set_sensor_busy(False)
        self._apply_color(reading.rgb_color, as_sample)
        self._status_bar.showMessage(
            f"測定完了: {reading.rgb_color.to_hex()} (品質 {reading.quality_score})"
        )

    def _on_sensor_error(self, message: str) -> None:
        self._set_sensor_busy(False)
        self._status_bar.showMessage("測定に失敗しました")
        QMessageBox.warning(self, "センサーエラー", f"測定に失敗しました:\n{message}")

    def _on_sensor_connect(self) -> None:
        if self._sensor.connect():
            self._status_bar.showMessage(f"接続しました: {self._sensor.reader.device_name}")

    def _on_sensor_disconnect(self) -> None:
        self._sensor.disconnect()
        self._status_bar.showMessage("センサーを切断しました")

    def _on_sensor_calibrate(self) -> None:
        try:
            self._sensor.calibrate()
        except ColorMatcherError as e:
            QMessageBox.warning(self, "センサーエラー", f"キャリブレーションに失敗しました:\n{e}")
            return
        self._status_bar.showMessage("キャリブレーション完了")

    def _on_sensor_status(self) -> None:
        QMessageBox.information(self, "Sensor Status", self._sensor.status())

    # --- プロジェクト ---

    def _on_project_name_edited(self, text: str) -> None:
        self._projects.project_name = text
        self._update_title()

    def _on_project_description_edited(self, text: str) -> None:
        self._projects.project_description = text

    def _run_project_action(self, action, failure: str) -> bool:
        try:
            action()
        except ColorMatcherError as e:
            QMessageBox.warning(self, "プロジェクトエラー", f"{failure}:\n{e}")
            return False
        except OSError as e:
            QMessageBox.warning(self, "保存エラー", f"{failure}:\n{e}")
            return False
        return True

    def _on_new_project(self) -> None:
        name, ok = QInputDialog.getText(self, "New Project", "プロジェクト名:")
        if not ok:
            return
        self._projects.project_name = name.strip() or DEFAULT_PROJECT_NAME
        self._projects.project_description = ""
        if self._run_project_action(
            lambda: self._projects.new_project(self._session), "作成に失敗しました"
        ):
            self._refresh_project_fields()
            self._refresh_history()
            self._refresh_recent_menu()
            self._status_bar.showMessage(f"プロジェクトを作成しました: {self._projects.project_name}")

    def _on_save_project(self) -> None:
        if self._run_project_action(
            lambda: self._projects.save(self._session), "保存に失敗しました"
        ):
            self._refresh_recent_menu()
            self._update_title()
            self._status_bar.showMessage("プロジェクトを保存しました")

    def _on_open_project(self, project_id: str) -> None:
        if self._run_project_action(
            lambda: self._projects.open_project(project_id, self._session),
            "読み込みに失敗しました",
        ):
            self._refresh_project_fields()
            self._refresh_colors()
            self._refresh_history()

    def _on_delete_project(self) -> None:
        project = self._projects.current_project
        if project is None:
            return
        answer = QMessageBox.question(
            self, "Delete Project", f"「{project.display_name}」を削除しますか？"
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        if self._run_project_action(
            lambda: self._projects.delete_project(project.id), "削除に失敗しました"
        ):
            self._refresh_project_fields()
            self._refresh_history()
            self._refresh_recent_menu()

    def _on_import_project(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "プロジェクトを読み込む", "", "JSON (*.json);;All Files (*)"
        )
        if not path:
            return
        if self._run_project_action(
            lambda: self._projects.import_project(
                Path(path).read_text(encoding="utf-8"), self._session
            ),
            "インポートに失敗しました",
        ):
            self._refresh_project_fields()
            self._refresh_colors()
            self._refresh_history()
            self._refresh_recent_menu()

    def _on_export_project(self) -> None:
        if self._projects.current_project is None:
            self._status_bar.showMessage("エクスポートするプロジェクトがありません")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "プロジェクトを書き出す", f"{self._projects.project_name}.json",
            "JSON (*.json)",
        )
        if not path:
            return

        def export() -> None:
            text = self._projects.export_current()
            if text is not None:
                Path(path).write_text(text, encoding="utf-8")

        if self._run_project_action(export, "エクスポートに失敗しました"):
            self._status_bar.showMessage(f"書き出しました: {path}")

    def _on_export_history_csv(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "履歴を書き出す", "history.csv", "CSV (*.csv)"
        )
        if not path:
            return
        if self._run_project_action(
            lambda: self._projects.export_history_csv(path), "CSV出力に失敗しました"
        ):
            self._status_bar.showMessage(f"履歴を書き出しました: {path}")

    # --- 履歴 ---

    def _on_record_match(self) -> None:
        try:
            entry = self._projects.record_match(self._session)
        except (ColorMatcherError, OSError) as e:
            QMessageBox.warning(self, "保存エラー", f"履歴の保存に失敗しました:\n{e}")
            return
        if entry is None:
            return
        self._refresh_history()
        self._refresh_recent_menu()
        self._update_title()
        self._status_bar.showMessage(f"履歴に追加しました (ΔE {entry.delta_e:.2f})")

    def _selected_entry(self) -> ColorHistoryEntry | None:
        item = self._history_list.currentItem()
        if item is None:
            return None
        return item.data(Qt.ItemDataRole.UserRole)

    def _on_history_reuse(self, *_args: object) -> None:
        entry = self._selected_entry()
        if entry is None:
            return
        self._session.apply_history_entry(entry)
        self._refresh_colors()

    def _on_history_accept(self) -> None:
        entry = self._selected_entry()
        if entry is None:
            return
        if self._run_project_action(
            lambda: self._projects.set_entry_accepted(entry.id, not entry.is_accepted),
            "更新に失敗しました",
        ):
            self._refresh_history()

    def _on_history_clear(self) -> None:
        if self._projects.current_project is None:
            return
        answer = QMessageBox.question(self, "Clear History", "履歴をすべて削除しますか？")
        if answer != QMessageBox.StandardButton.Yes:
            return
        if self._run_project_action(self._projects.clear_history, "削除に失敗しました"):
            self._refresh_history()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        # 実行中のワーカーが破棄済みのウィンドウへ通知しないよう終了を待つ
        for worker in (self._image_worker, self._sensor_worker):
            if worker is not None and worker.isRunning():
                worker.wait()
        self._sensor.disconnect()
        super().closeEvent(event)


def _hex(color: RGB | None) -> str:
    return color.to_hex() if color is not None else "-"
