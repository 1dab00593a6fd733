"""a*/b* 平面グラフウィジェット。

基準色を円、サンプルを四角で描き、2点を破線で結ぶ。
右上(+a, +b)が赤〜黄、左下(-a, -b)が緑〜青。
"""

from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPen
from PyQt6.QtWidgets import QSizePolicy, QWidget

from color_matcher.domain.color import LAB
from color_matcher.domain.comparison import ColorComparison
from color_matcher.presentation import styles

SCALE = 0.8
"""1 LAB 単位あたりのピクセル数"""

AXIS_EXTENT = 128
TICK_STEP = 32
MARKER_SIZE = 12


class LabGraphWidget(QWidget):
    """ColorComparison を a*/b* 平面に描画する。"""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._comparison = ColorComparison()
        size = int(2 * (AXIS_EXTENT * SCALE + 40))
        self.setMinimumSize(size, size)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    @property
    def comparison(self) -> ColorComparison:
        return self._comparison

    def set_comparison(self, comparison: ColorComparison) -> None:
        self._comparison = comparison
        self.update()

    def _to_point(self, lab: LAB) -> QPointF:
        center = QPointF(self.width() / 2, self.height() / 2)
        return QPointF(center.x() + lab.a * SCALE, center.y() - lab.b * SCALE)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(styles.GRAPH_BACKGROUND))

        self._draw_axes(painter)
        comparison = self._comparison
        if comparison.reference is not None and comparison.sample is not None:
            pen = QPen(QColor(styles.GRAPH_CONNECTOR), 1.5, Qt.PenStyle.DashLine)
            painter.setPen(pen)
            painter.drawLine(
                self._to_point(comparison.reference), self._to_point(comparison.sample)
            )
        if comparison.reference is not None:
            self._draw_marker(painter, comparison.reference, "Reference", circle=True)
        if comparison.sample is not None:
            self._draw_marker(painter, comparison.sample, "Sample", circle=False)
        self._draw_legend(painter)
        painter.end()

    def _draw_axes(self, painter: QPainter) -> None:
        cx, cy = self.width() / 2, self.height() / 2
        extent = AXIS_EXTENT * SCALE

        painter.setPen(QPen(QColor(styles.GRAPH_AXIS), 1))
        painter.drawLine(QPointF(cx - extent, cy), QPointF(cx + extent, cy))
        painter.drawLine(QPointF(cx, cy - extent), QPointF(cx, cy + extent))

        painter.setPen(QPen(QColor(styles.GRAPH_TICK), 1))
        for value in range(-AXIS_EXTENT, AXIS_EXTENT + 1, TICK_STEP):
            offset = value * SCALE
            painter.drawLine(QPointF(cx + offset, cy - 3), QPointF(cx + offset, cy + 3))
            painter.drawLine(QPointF(cx - 3, cy - offset), QPointF(cx + 3, cy - offset))

        painter.setFont(QFont(painter.font().family(), 8))
        painter.drawText(QPointF(cx + extent - 30, cy - 8), "+a red")
        painter.drawText(QPointF(cx - extent, cy - 8), "-a green")
        painter.drawText(QPointF(cx + 6, cy - extent + 10), "+b yellow")
        painter.drawText(QPointF(cx + 6, cy + extent), "-b blue")

    def _draw_marker(self, painter: QPainter, lab: LAB, label: str, circle: bool) -> None:
        point = self._to_point(lab)
        half = MARKER_SIZE / 2
        rect = QRectF(point.x() - half, point.y() - half, MARKER_SIZE, MARKER_SIZE)
        color = QColor(styles.GRAPH_REFERENCE if circle else styles.GRAPH_SAMPLE)
        painter.setPen(QPen(QColor("white"), 2))
        painter.setBrush(QBrush(color))
        if circle:
            painter.drawEllipse(rect)
        else:
            painter.drawRect(rect)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.setPen(QPen(color.darker(130), 1))
        painter.drawText(QPointF(point.x() + half + 2, point.y() - half), label)

    def _draw_legend(self, painter: QPainter) -> None:
        comparison = self._comparison
        painter.setPen(QPen(QColor(styles.GRAPH_CONNECTOR), 1))
        painter.setFont(QFont(painter.font().family(), 9))
        lines = [f"ΔE: {comparison.delta_e:.2f}", comparison.recommendation]
        if comparison.band is not None:
            lines.insert(1, comparison.band.value)
        for i, text in enumerate(lines):
            painter.drawText(QPointF(8, 16 + i * 14), text)
