"""色入力パネル（HEX / R,G,B / 色見本）。

表示は set_color で1つの RGB 値から HEX 欄と RGB 欄の両方に書き込む。
ユーザー入力は color_edited で通知し、値の保持はセッション側が行う。
"""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QFrame,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from color_matcher.domain.color import RGB
from color_matcher.domain.conversion import rgb_to_lab
from color_matcher.errors import InvalidColorError


class ColorInputPanel(QGroupBox):
    """基準色またはサンプル色の入力グループ。"""

    color_edited = pyqtSignal(object)  # RGB | None
    image_requested = pyqtSignal()
    sensor_requested = pyqtSignal()

    def __init__(self, title: str, parent: QWidget | None = None) -> None:
        super().__init__(title, parent)

        layout = QVBoxLayout(self)
        layout.setSpacing(4)

        # HEX + 色見本
        hex_row = QHBoxLayout()
        hex_row.addWidget(QLabel("Hex:"))
        self._hex_edit = QLineEdit()
        self._hex_edit.setPlaceholderText("#RRGGBB")
        self._hex_edit.setMaxLength(7)
        self._hex_edit.setToolTip("#付き / なしの6桁16進数")
        self._hex_edit.textEdited.connect(self._on_hex_edited)
        hex_row.addWidget(self._hex_edit)

        self._swatch = QFrame()
        self._swatch.setObjectName("colorSwatch")
        self._swatch.setFixedSize(48, 28)
        hex_row.addWidget(self._swatch)
        layout.addLayout(hex_row)

        # R, G, B
        rgb_row = QHBoxLayout()
        self._spins: list[QSpinBox] = []
        for name in ("R", "G", "B"):
            rgb_row.addWidget(QLabel(f"{name}:"))
            spin = QSpinBox()
            spin.setRange(0, 255)
            spin.setFixedWidth(70)
            spin.valueChanged.connect(self._on_spin_changed)
            rgb_row.addWidget(spin)
            self._spins.append(spin)
        rgb_row.addStretch()
        layout.addLayout(rgb_row)

        self._lab_label = QLabel("LAB: -")
        layout.addWidget(self._lab_label)

        # 取り込みボタン
        button_row = QHBoxLayout()
        image_btn = QPushButton("From Image...")
        image_btn.setToolTip("画像ファイルの平均色を読み込み")
        image_btn.clicked.connect(self.image_requested.emit)
        button_row.addWidget(image_btn)

        self._sensor_btn = QPushButton("From Sensor")
        self._sensor_btn.setObjectName("sensorBtn")
        self._sensor_btn.setToolTip("カラーセンサーで測定")
        self._sensor_btn.clicked.connect(self.sensor_requested.emit)
        button_row.addWidget(self._sensor_btn)
        button_row.addStretch()
        layout.addLayout(button_row)

        self.set_color(None)

    def set_sensor_enabled(self, enabled: bool) -> None:
        self._sensor_btn.setEnabled(enabled)

    def set_color(self, color: RGB | None) -> None:
        """HEX 欄・RGB 欄・色見本をまとめて更新（シグナルは出さない）。"""
        widgets = [self._hex_edit, *self._spins]
        for widget in widgets:
            widget.blockSignals(True)
        self._hex_edit.setText(color.to_hex() if color is not None else "")
        for spin, value in zip(self._spins, color.to_tuple() if color else (0, 0, 0)):
            spin.setValue(value)
        for widget in widgets:
            widget.blockSignals(False)
        self._set_hex_invalid(False)
        self._update_preview(color)

    def _update_preview(self, color: RGB | None) -> None:
        if color is None:
            self._swatch.setStyleSheet("background-color: transparent;")
            self._lab_label.setText("LAB: -")
            return
        self._swatch.setStyleSheet(f"background-color: {color.to_hex()};")
        self._lab_label.setText(str(rgb_to_lab(color)))

    def _set_hex_invalid(self, invalid: bool) -> None:
        self._hex_edit.setProperty("invalid", invalid)
        self._hex_edit.style().unpolish(self._hex_edit)
        self._hex_edit.style().polish(self._hex_edit)

    def _on_hex_edited(self, text: str) -> None:
        if not text.strip():
            self._set_hex_invalid(False)
            self.color_edited.emit(None)
            return
        try:
            color = RGB.from_hex(text)
        except InvalidColorError:
            # 入力途中は確定しない
            self._set_hex_invalid(True)
            return
        self._set_hex_invalid(False)
        self.color_edited.emit(color)

    def _on_spin_changed(self, _value: int) -> None:
        r, g, b = (spin.value() for spin in self._spins)
        self.color_edited.emit(RGB(r, g, b))
