"""color.py のテスト。"""

import math

import numpy as np
import pytest

from color_matcher.domain.color import (
    LAB,
    NAMED_COLORS,
    RGB,
    DeltaEBand,
    classify_delta_e,
    clamp_channel,
    delta_e,
    nearest_named_color,
)
from color_matcher.errors import ColorMatcherError, InvalidColorError


class TestRGB:
    def test_to_tuple(self) -> None:
        assert RGB(10, 20, 30).to_tuple() == (10, 20, 30)

    def test_to_normalized(self) -> None:
        assert RGB(255, 0, 51).to_normalized() == (1.0, 0.0, 0.2)

    def test_to_hex_is_upper_case(self) -> None:
        assert RGB(255, 128, 0).to_hex() == "#FF8000"
        assert RGB(0, 0, 0).to_hex() == "#000000"

    def test_str(self) -> None:
        assert str(RGB(1, 2, 3)) == "RGB(1, 2, 3)"

    @pytest.mark.parametrize("channels", [(256, 0, 0), (0, -1, 0), (0, 0, 1000)])
    def test_out_of_range_rejected(self, channels: tuple[int, int, int]) -> None:
        with pytest.raises(InvalidColorError):
            RGB(*channels)

    def test_invalid_color_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            RGB(300, 0, 0)
        assert issubclass(InvalidColorError, ColorMatcherError)

    def test_non_integer_rejected(self) -> None:
        with pytest.raises(InvalidColorError):
            RGB(1.5, 0, 0)  # type: ignore[arg-type]
        with pytest.raises(InvalidColorError):
            RGB("10", 0, 0)  # type: ignore[arg-type]
        with pytest.raises(InvalidColorError):
            RGB(True, 0, 0)

    def test_numpy_integers_become_int(self) -> None:
        color = RGB(np.uint8(200), np.int64(10), 0)
        assert color == RGB(200, 10, 0)
        assert type(color.r) is int
        assert type(color.g) is int

    def test_boundaries_accepted(self) -> None:
        assert RGB(0, 255, 0).to_tuple() == (0, 255, 0)

    def test_frozen(self) -> None:
        color = RGB(1, 2, 3)
        with pytest.raises(AttributeError):
            color.r = 5  # type: ignore[misc]


class TestFromHex:
    def test_with_hash(self) -> None:
        assert RGB.from_hex("#ff8000") == RGB(255, 128, 0)

    def test_without_hash(self) -> None:
        assert RGB.from_hex("FF8000") == RGB(255, 128, 0)

    def test_surrounding_whitespace(self) -> None:
        assert RGB.from_hex("  #00ff7f ") == RGB(0, 255, 127)

    @pytest.mark.parametrize(
        "text", ["", "#", "#fff", "#12345", "#1234567", "gg0000", "##123456", "12 456"]
    )
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidColorError):
            RGB.from_hex(text)

    def test_non_string(self) -> None:
        with pytest.raises(InvalidColorError):
            RGB.from_hex(0xFF8000)  # type: ignore[arg-type]

    def test_hex_round_trip(self) -> None:
        color = RGB(18, 52, 86)
        assert RGB.from_hex(color.to_hex()) == color


class TestClamped:
    def test_clamps_out_of_range(self) -> None:
        assert RGB.clamped(-5.0, 300.2, 254.6) == RGB(0, 255, 255)

    def test_rounds_half_to_even(self) -> None:
        assert RGB.clamped(0.5, 1.5, 2.5) == RGB(0, 2, 2)

    def test_nan_becomes_zero(self) -> None:
        assert clamp_channel(float("nan")) == 0

    def test_infinities(self) -> None:
        assert clamp_channel(float("inf")) == 255
        assert clamp_channel(float("-inf")) == 0


class TestLAB:
    def test_to_tuple(self) -> None:
        assert LAB(50, 10, -10).to_tuple() == (50.0, 10.0, -10.0)

    def test_lightness_not_clamped(self) -> None:
        assert LAB(120.0, 0.0, 0.0).l == 120.0
        assert LAB(-5.0, 0.0, 0.0).l == -5.0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value: float) -> None:
        with pytest.raises(InvalidColorError):
            LAB(value, 0.0, 0.0)
        with pytest.raises(InvalidColorError):
            LAB(0.0, value, 0.0)
        with pytest.raises(InvalidColorError):
            LAB(0.0, 0.0, value)

    def test_non_number_rejected(self) -> None:
        with pytest.raises(InvalidColorError):
            LAB("50", 0.0, 0.0)  # type: ignore[arg-type]

    def test_str(self) -> None:
        assert str(LAB(53.2346, 80.09, 67.2)) == "LAB(L:53.23, a:80.09, b:67.20)"


class TestDeltaE:
    def test_same_color_distance_is_zero(self) -> None:
        lab = LAB(53.2, 80.1, 64.2)
        assert delta_e(lab, lab) == 0.0

    def test_euclidean(self) -> None:
        assert delta_e(LAB(0, 0, 0), LAB(3, 4, 12)) == pytest.approx(13.0)

    def test_symmetry(self) -> None:
        pairs = [
            (LAB(50, 10, -20), LAB(60, -5, 30)),
            (LAB(0.1, 0.2, 0.3), LAB(99.9, -127.5, 127.0)),
            (LAB(33.3, 1e-7, -1e-7), LAB(33.3, 0.0, 0.0)),
        ]
        for p, q in pairs:
            assert delta_e(p, q) == delta_e(q, p)

    def test_non_negative(self) -> None:
        rng = np.random.default_rng(7)
        for _ in range(100):
            p = LAB(*rng.uniform(-150, 150, size=3))
            q = LAB(*rng.uniform(-150, 150, size=3))
            assert delta_e(p, q) >= 0.0

    def test_tiny_difference_is_not_zero(self) -> None:
        assert delta_e(LAB(1e-200, 0.0, 0.0), LAB(0.0, 0.0, 0.0)) > 0.0

    def test_large_difference_is_finite(self) -> None:
        assert math.isfinite(delta_e(LAB(1e200, 0, 0), LAB(-1e200, 0, 0)))


class TestClassifyDeltaE:
    @pytest.mark.parametrize(
        ("value", "band"),
        [
            (0.0, DeltaEBand.IMPERCEPTIBLE),
            (0.99, DeltaEBand.IMPERCEPTIBLE),
            (1.0, DeltaEBand.BARELY_PERCEPTIBLE),
            (2.0, DeltaEBand.BARELY_PERCEPTIBLE),
            (2.01, DeltaEBand.NOTICEABLE),
            (5.0, DeltaEBand.NOTICEABLE),
            (7.5, DeltaEBand.SIGNIFICANT),
            (10.0, DeltaEBand.SIGNIFICANT),
            (10.01, DeltaEBand.OBVIOUS),
            (250.0, DeltaEBand.OBVIOUS),
        ],
    )
    def test_bands(self, value: float, band: DeltaEBand) -> None:
        assert classify_delta_e(value) is band

    @pytest.mark.parametrize("value", [-0.1, float("nan"), float("inf")])
    def test_invalid(self, value: float) -> None:
        with pytest.raises(ValueError):
            classify_delta_e(value)


class TestNearestNamedColor:
    def test_palette_has_10_colors(self) -> None:
        assert len(NAMED_COLORS) == 10

    def test_exact_match(self) -> None:
        for name, color in NAMED_COLORS:
            assert nearest_named_color(color) == (name, color)

    def test_near_orange(self) -> None:
        name, color = nearest_named_color(RGB(250, 160, 10))
        assert name == "Orange"
        assert color == RGB(255, 165, 0)

    def test_near_gray(self) -> None:
        assert nearest_named_color(RGB(120, 130, 125))[0] == "Gray"

    def test_dark_is_black(self) -> None:
        assert nearest_named_color(RGB(20, 10, 30))[0] == "Black"
