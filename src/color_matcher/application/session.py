"""基準色・サンプル色の編集状態。

HEX表示とRGB表示はどちらも保持している1つの RGB 値から導出する。
入力欄ごとに値を持って相互に同期させることはしない。
"""

from __future__ import annotations

from color_matcher.domain.color import RGB
from color_matcher.domain.comparison import ColorComparison
from color_matcher.domain.project import ColorHistoryEntry

ColorInput = RGB | str | None
"""RGB、HEX文字列、または未入力 (None / 空文字列)"""


def parse_color_input(value: ColorInput) -> RGB | None:
    """入力値を RGB に正規化。不正なHEXは InvalidColorError。"""
    if value is None or isinstance(value, RGB):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        return RGB.from_hex(value)
    raise TypeError(f"Unsupported color input: {value!r}")


class ColorMatchSession:
    """比較中の2色と変更フラグを持つ。"""

    def __init__(self, reference: ColorInput = None, sample: ColorInput = None) -> None:
        self._reference = parse_color_input(reference)
        self._sample = parse_color_input(sample)
        self._modified = False

    @property
    def reference(self) -> RGB | None:
        return self._reference

    @property
    def sample(self) -> RGB | None:
        return self._sample

    @property
    def reference_hex(self) -> str:
        return self._reference.to_hex() if self._reference is not None else ""

    @property
    def sample_hex(self) -> str:
        return self._sample.to_hex() if self._sample is not None else ""

    @property
    def is_modified(self) -> bool:
        return self._modified

    def mark_saved(self) -> None:
        self._modified = False

    def set_reference(self, value: ColorInput) -> RGB | None:
        color = parse_color_input(value)
        if color != self._reference:
            self._reference = color
            self._modified = True
        return color

    def set_sample(self, value: ColorInput) -> RGB | None:
        color = parse_color_input(value)
        if color != self._sample:
            self._sample = color
            self._modified = True
        return color

    def swap(self) -> None:
        """基準色とサンプル色を入れ替える。"""
        reference, sample = self._reference, self._sample
        self.set_reference(sample)
        self.set_sample(reference)

    def clear(self) -> None:
        self.set_reference(None)
        self.set_sample(None)

    def apply_history_entry(self, entry: ColorHistoryEntry) -> None:
        """履歴エントリの色を再利用する。記録のない側は変更しない。"""
        if entry.reference_color is not None:
            self.set_reference(entry.reference_color)
        if entry.sample_color is not None:
            self.set_sample(entry.sample_color)

    @property
    def comparison(self) -> ColorComparison:
        return ColorComparison.from_rgb(self._reference, self._sample)
