"""a*/b* 象限に基づくティント調整の推奨。

サンプルを基準色に近づけるために足すべき色を返す。
明度 L は使わない（ティントで調整できないため）。
"""

from __future__ import annotations

from enum import Enum

from color_matcher.domain.color import LAB

MATCH_TOLERANCE = 0.5
"""|Δa|, |Δb| がともにこれ未満なら一致とみなす"""

HINT_THRESHOLD = 5.0
"""軸ごとにヒントを出す差の閾値"""

NEED_BOTH_COLORS = "Enter both colors"
VERY_CLOSE = "Colors are very close"
FINE_ADJUSTMENTS = "Fine adjustments needed"


class TintHint(Enum):
    ADD_RED = "Add Red"
    ADD_GREEN = "Add Green"
    ADD_YELLOW = "Add Yellow"
    ADD_BLUE = "Add Blue"


def tint_hints(reference: LAB, sample: LAB) -> list[TintHint]:
    """a軸 → b軸 の順でヒントを列挙。"""
    d_a = reference.a - sample.a
    d_b = reference.b - sample.b

    hints: list[TintHint] = []
    if d_a > HINT_THRESHOLD:
        hints.append(TintHint.ADD_RED)
    elif d_a < -HINT_THRESHOLD:
        hints.append(TintHint.ADD_GREEN)
    if d_b > HINT_THRESHOLD:
        hints.append(TintHint.ADD_YELLOW)
    elif d_b < -HINT_THRESHOLD:
        hints.append(TintHint.ADD_BLUE)
    return hints


def tint_recommendation(reference: LAB | None, sample: LAB | None) -> str:
    """基準色とサンプルからティント調整の推奨文を生成。

    Args:
        reference: 基準色（未入力なら None）
        sample: サンプル色（未入力なら None）

    Returns:
        "Add Red, Add Yellow" のようなカンマ区切りの推奨文
    """
    if reference is None or sample is None:
        return NEED_BOTH_COLORS

    d_a = reference.a - sample.a
    d_b = reference.b - sample.b
    if abs(d_a) < MATCH_TOLERANCE and abs(d_b) < MATCH_TOLERANCE:
        return VERY_CLOSE

    hints = tint_hints(reference, sample)
    if not hints:
        return FINE_ADJUSTMENTS
    return ", ".join(hint.value for hint in hints)
