"""カラーマッチング・プロジェクトと履歴エントリのモデル。"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from color_matcher.domain.color import RGB
from color_matcher.domain.comparison import ColorComparison


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class ColorHistoryEntry:
    """1回分の比較結果。"""

    reference_color: RGB | None = None
    sample_color: RGB | None = None
    delta_e: float = 0.0
    tint_recommendation: str | None = None
    is_accepted: bool = False
    notes: str | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_comparison(
        cls,
        reference: RGB | None,
        sample: RGB | None,
        notes: str | None = None,
    ) -> ColorHistoryEntry:
        """基準色とサンプルから ΔE と推奨文を計算してエントリを作る。"""
        comparison = ColorComparison.from_rgb(reference, sample)
        return cls(
            reference_color=reference,
            sample_color=sample,
            delta_e=comparison.delta_e,
            tint_recommendation=comparison.recommendation,
            notes=notes,
        )


@dataclass
class ColorProject:
    """名前付きのマッチング作業単位。履歴とメタデータを持つ。"""

    name: str | None = None
    description: str | None = None
    reference_color: RGB | None = None
    sample_color: RGB | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    modified_at: datetime = field(default_factory=utc_now)
    color_history: list[ColorHistoryEntry] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or "Untitled Project"
