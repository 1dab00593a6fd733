"""色の値型（RGB / CIE L*a*b*）と CIE76 色差。

Pure Pythonで実装（外部ライブラリ依存なし）。
"""

from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass
from enum import Enum

from color_matcher.errors import InvalidColorError

_HEX_PATTERN = re.compile(r"#?([0-9a-fA-F]{6})")


def clamp_channel(value: float) -> int:
    """実数値を 0-255 にクランプして最近接整数に丸める（偶数丸め）。

    NaN は 0 として扱う。
    """
    if math.isnan(value):
        return 0
    return int(round(max(0.0, min(255.0, value))))


@dataclass(frozen=True)
class RGB:
    """RGB色空間の色。各チャンネル 0-255 の整数。

    範囲外・非整数の値は生成時に InvalidColorError。
    """

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidColorError(
                    f"RGB channel {name} must be an integer, got {value!r}"
                )
            if not 0 <= value <= 255:
                raise InvalidColorError(
                    f"RGB channel {name} must be in 0-255, got {value}"
                )
            # numpy 整数などを素の int に揃える
            object.__setattr__(self, name, int(value))

    @classmethod
    def clamped(cls, r: float, g: float, b: float) -> RGB:
        """任意の実数値からクランプ済みのRGBを生成。"""
        return cls(clamp_channel(r), clamp_channel(g), clamp_channel(b))

    @classmethod
    def from_hex(cls, text: str) -> RGB:
        """"#RRGGBB" / "RRGGBB" 形式の文字列をパース。"""
        if not isinstance(text, str):
            raise InvalidColorError(f"Hex color must be a string, got {text!r}")
        match = _HEX_PATTERN.fullmatch(text.strip())
        if match is None:
            raise InvalidColorError(f"Invalid hex color: {text!r}")
        digits = match.group(1)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    def to_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_normalized(self) -> tuple[float, float, float]:
        """各チャンネルを 0.0-1.0 に正規化。"""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def __str__(self) -> str:
        return f"RGB({self.r}, {self.g}, {self.b})"


@dataclass(frozen=True)
class LAB:
    """CIE L*a*b* 色空間の色。

    L はクランプしない（逆変換時のみRGB側でクランプ）。
    NaN / 無限大は生成時に InvalidColorError。
    """

    l: float  # noqa: E741
    a: float
    b: float

    def __post_init__(self) -> None:
        for name in ("l", "a", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidColorError(
                    f"LAB component {name} must be a real number, got {value!r}"
                )
            if not math.isfinite(value):
                raise InvalidColorError(
                    f"LAB component {name} must be finite, got {value}"
                )
            object.__setattr__(self, name, float(value))

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.l, self.a, self.b)

    def __str__(self) -> str:
        return f"LAB(L:{self.l:.2f}, a:{self.a:.2f}, b:{self.b:.2f})"


# --- 色差計算（CIE76） ---


def delta_e(lab1: LAB, lab2: LAB) -> float:
    """CIE76色差（LAB空間のユークリッド距離）を計算。

    math.hypot を使うため、極小の差がアンダーフローで 0 になることはない。
    """
    return math.hypot(lab1.l - lab2.l, lab1.a - lab2.a, lab1.b - lab2.b)


class DeltaEBand(Enum):
    """ΔE の知覚的な目安。"""

    IMPERCEPTIBLE = "Imperceptible"
    BARELY_PERCEPTIBLE = "Barely perceptible"
    NOTICEABLE = "Noticeable"
    SIGNIFICANT = "Significant"
    OBVIOUS = "Obvious mismatch"


def classify_delta_e(value: float) -> DeltaEBand:
    """ΔE 値を知覚バンドに分類。

    <1 / ≤2 / ≤5 / ≤10 / >10 の5段階。
    """
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Delta E must be a finite non-negative number, got {value}")
    if value < 1.0:
        return DeltaEBand.IMPERCEPTIBLE
    if value <= 2.0:
        return DeltaEBand.BARELY_PERCEPTIBLE
    if value <= 5.0:
        return DeltaEBand.NOTICEABLE
    if value <= 10.0:
        return DeltaEBand.SIGNIFICANT
    return DeltaEBand.OBVIOUS


# --- 名前付き色 ---

NAMED_COLORS: tuple[tuple[str, RGB], ...] = (
    ("Black", RGB(0, 0, 0)),
    ("White", RGB(255, 255, 255)),
    ("Red", RGB(255, 0, 0)),
    ("Lime", RGB(0, 255, 0)),
    ("Blue", RGB(0, 0, 255)),
    ("Yellow", RGB(255, 255, 0)),
    ("Cyan", RGB(0, 255, 255)),
    ("Magenta", RGB(255, 0, 255)),
    ("Gray", RGB(128, 128, 128)),
    ("Orange", RGB(255, 165, 0)),
)


def nearest_named_color(color: RGB) -> tuple[str, RGB]:
    """RGB二乗距離で最も近い名前付き色を返す（同距離なら先勝ち）。"""
    best = NAMED_COLORS[0]
    best_dist = _rgb_distance_sq(color, best[1])
    for name, candidate in NAMED_COLORS[1:]:
        dist = _rgb_distance_sq(color, candidate)
        if dist < best_dist:
            best = (name, candidate)
            best_dist = dist
    return best


def _rgb_distance_sq(c1: RGB, c2: RGB) -> int:
    return (c1.r - c2.r) ** 2 + (c1.g - c2.g) ** 2 + (c1.b - c2.b) ** 2
