"""比較履歴の CSV エクスポート。"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable

from color_matcher.domain.color import RGB
from color_matcher.domain.project import ColorHistoryEntry

CSV_HEADER = ("Date", "Reference", "Sample", "DeltaE", "Recommendation", "Accepted", "Notes")


def _hex_or_empty(color: RGB | None) -> str:
    return color.to_hex() if color is not None else ""


def history_to_csv(entries: Iterable[ColorHistoryEntry]) -> str:
    """履歴エントリを CSV 文字列に変換（ヘッダー行付き）。"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for entry in entries:
        writer.writerow((
            entry.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            _hex_or_empty(entry.reference_color),
            _hex_or_empty(entry.sample_color),
            f"{entry.delta_e:.2f}",
            entry.tint_recommendation or "",
            "Yes" if entry.is_accepted else "No",
            entry.notes or "",
        ))
    return buffer.getvalue()


def save_history_csv(entries: Iterable[ColorHistoryEntry], path: str | Path) -> None:
    Path(path).write_text(history_to_csv(entries), encoding="utf-8")
