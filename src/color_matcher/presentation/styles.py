"""QSS テーマ定義。

ライトテーマ。アクセントカラー #4a90d9 (青)、履歴記録は緑、センサーは紫。
"""

# --- カラーパレット ---
_ACCENT = "#4a90d9"
_ACCENT_HOVER = "#3a7bc8"
_ACCENT_PRESSED = "#2e6ab3"

_GREEN = "#5cb85c"
_GREEN_HOVER = "#4cae4c"
_GREEN_PRESSED = "#449d44"

_PURPLE = "#9b59b6"
_PURPLE_HOVER = "#8e44ad"
_PURPLE_PRESSED = "#7d3c98"

_BG_LIGHT = "#f5f5f5"
_BORDER = "#ddd"
_BORDER_INPUT = "#bbb"
_BORDER_GROUP = "#ccc"
_TEXT = "#333"
_TEXT_MUTED = "#555"
_DISABLED_BG = "#e8e8e8"
_DISABLED_TEXT = "#aaa"

# グラフ描画色
GRAPH_BACKGROUND = "#ffffff"
GRAPH_AXIS = "#999999"
GRAPH_TICK = "#777777"
GRAPH_REFERENCE = "#32cd32"
GRAPH_SAMPLE = "#ff8c00"
GRAPH_CONNECTOR = "#666666"

APP_STYLESHEET = f"""
/* ===================== 全体ベース ===================== */
QMainWindow {{
    background-color: #f0f0f0;
}}

/* ===================== メニューバー ===================== */
QMenuBar {{
    background-color: #fafafa;
    border-bottom: 1px solid {_BORDER};
    padding: 2px 0;
}}
QMenuBar::item {{
    padding: 4px 10px;
    border-radius: 3px;
}}
QMenuBar::item:selected, QMenu::item:selected {{
    background-color: {_ACCENT};
    color: white;
}}
QMenu {{
    background-color: white;
    border: 1px solid {_BORDER};
    padding: 4px 0;
}}
QMenu::item {{
    padding: 5px 28px 5px 20px;
}}

/* ===================== ステータスバー ===================== */
QStatusBar {{
    background-color: #fafafa;
    border-top: 1px solid {_BORDER};
    color: {_TEXT_MUTED};
    font-size: 12px;
    padding: 2px 8px;
}}

/* ===================== 色見本・グラフ ===================== */
QFrame#colorSwatch {{
    border: 1px solid {_BORDER_GROUP};
    border-radius: 3px;
}}
LabGraphWidget {{
    border: 1px solid {_BORDER};
}}

/* ===================== パネルラベル ===================== */
QLabel#panelLabel {{
    font-weight: bold;
    font-size: 12px;
    color: {_TEXT_MUTED};
    padding: 2px 0;
}}
QLabel#deltaELabel {{
    font-size: 20px;
    font-weight: bold;
    color: {_TEXT};
}}
QLabel#recommendationLabel {{
    font-size: 14px;
    color: {_ACCENT_PRESSED};
}}
QLabel {{
    color: {_TEXT};
}}

/* ===================== QGroupBox ===================== */
QGroupBox {{
    border: 1px solid {_BORDER_GROUP};
    border-radius: 4px;
    margin-top: 10px;
    padding: 8px 6px 4px 6px;
    font-weight: bold;
    color: #444;
}}
QGroupBox::title {{
    subcontrol-origin: margin;
    subcontrol-position: top left;
    padding: 0 6px;
    left: 8px;
    color: #444;
}}

/* ===================== 入力欄 ===================== */
QLineEdit, QSpinBox {{
    border: 1px solid {_BORDER_INPUT};
    border-radius: 3px;
    padding: 3px 4px;
    background-color: white;
    min-height: 20px;
}}
QLineEdit:focus, QSpinBox:focus {{
    border-color: {_ACCENT};
}}
QLineEdit[invalid="true"] {{
    border-color: #d9534f;
    background-color: #fdf0f0;
}}

/* ===================== 履歴リスト ===================== */
QListWidget {{
    border: 1px solid {_BORDER};
    background-color: {_BG_LIGHT};
}}
QListWidget::item:selected {{
    background-color: {_ACCENT};
    color: white;
}}

/* ===================== QPushButton 共通ベース ===================== */
QPushButton {{
    border: 1px solid {_BORDER_INPUT};
    border-radius: 4px;
    padding: 5px 12px;
    background-color: #fafafa;
    color: {_TEXT};
    min-height: 20px;
}}
QPushButton:hover {{
    background-color: #e8e8e8;
    border-color: #999;
}}
QPushButton:pressed {{
    background-color: #d8d8d8;
}}
QPushButton:disabled {{
    background-color: {_DISABLED_BG};
    color: {_DISABLED_TEXT};
    border-color: #ccc;
}}

/* --- Record Match ボタン (緑) --- */
QPushButton#recordBtn {{
    background-color: {_GREEN};
    border-color: {_GREEN_HOVER};
    color: white;
    font-weight: bold;
}}
QPushButton#recordBtn:hover {{
    background-color: {_GREEN_HOVER};
}}
QPushButton#recordBtn:pressed {{
    background-color: {_GREEN_PRESSED};
}}

/* --- Sensor ボタン (紫) --- */
QPushButton#sensorBtn {{
    background-color: {_PURPLE};
    border-color: {_PURPLE_HOVER};
    color: white;
}}
QPushButton#sensorBtn:hover {{
    background-color: {_PURPLE_HOVER};
}}
QPushButton#sensorBtn:pressed {{
    background-color: {_PURPLE_PRESSED};
}}

/* --- Swap ボタン (青) --- */
QPushButton#swapBtn {{
    background-color: {_ACCENT};
    border-color: {_ACCENT_HOVER};
    color: white;
}}
QPushButton#swapBtn:hover {{
    background-color: {_ACCENT_HOVER};
}}
QPushButton#swapBtn:pressed {{
    background-color: {_ACCENT_PRESSED};
}}
"""
