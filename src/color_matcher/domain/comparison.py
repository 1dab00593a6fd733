"""基準色とサンプル色の比較結果モデル。"""

from __future__ import annotations

from dataclasses import dataclass

from color_matcher.domain.color import LAB, RGB, DeltaEBand, classify_delta_e
from color_matcher.domain.color import delta_e as cie76_delta_e
from color_matcher.domain.conversion import rgb_to_lab
from color_matcher.domain.tint import tint_recommendation


@dataclass(frozen=True)
class ColorComparison:
    """a*/b* 平面グラフと比較パネルが表示する内容。

    どちらかの色が未入力でも生成でき、その場合 ΔE は 0.0 になる。
    """

    reference: LAB | None = None
    sample: LAB | None = None

    @classmethod
    def from_rgb(cls, reference: RGB | None, sample: RGB | None) -> ColorComparison:
        return cls(
            rgb_to_lab(reference) if reference is not None else None,
            rgb_to_lab(sample) if sample is not None else None,
        )

    @property
    def is_complete(self) -> bool:
        return self.reference is not None and self.sample is not None

    @property
    def delta_e(self) -> float:
        if self.reference is None or self.sample is None:
            return 0.0
        return cie76_delta_e(self.reference, self.sample)

    @property
    def band(self) -> DeltaEBand | None:
        if not self.is_complete:
            return None
        return classify_delta_e(self.delta_e)

    @property
    def recommendation(self) -> str:
        return tint_recommendation(self.reference, self.sample)
