"""sRGB ⇔ CIE L*a*b* 変換（D65光源）。

Pure Pythonで実装（外部ライブラリ依存なし）。
係数・閾値は既存データとの互換のため固定値。
"""

from __future__ import annotations

from color_matcher.domain.color import LAB, RGB, clamp_channel

# D65 白色点
D65_WHITE: tuple[float, float, float] = (0.95047, 1.00000, 1.08883)

SRGB_LINEAR_THRESHOLD = 0.04045
SRGB_GAMMA_THRESHOLD = 0.0031308

# リニアRGB → XYZ
_RGB_TO_XYZ = (
    (0.4124, 0.3576, 0.1805),
    (0.2126, 0.7152, 0.0722),
    (0.0193, 0.1192, 0.9505),
)

# XYZ → リニアRGB（上の行列に対応する逆係数）
_XYZ_TO_RGB = (
    (3.2406, -1.5372, -0.4986),
    (-0.9689, 1.8758, 0.0415),
    (0.0557, -0.2040, 1.0570),
)

_DELTA = 6.0 / 29.0
_DELTA_SQ = _DELTA * _DELTA


# --- ガンマ補正 ---


def srgb_to_linear(v: float) -> float:
    """sRGB値(0-1)をリニアRGBに変換。"""
    if v <= SRGB_LINEAR_THRESHOLD:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def linear_to_srgb(v: float) -> float:
    """リニアRGB値をsRGB(0-1)に変換。範囲外の値もそのまま計算する。"""
    if v <= SRGB_GAMMA_THRESHOLD:
        return v * 12.92
    return 1.055 * v ** (1.0 / 2.4) - 0.055


# --- LAB 圧伸関数 ---


def lab_f(t: float) -> float:
    """LAB変換の補助関数。閾値は (6/29)^2。"""
    if t > _DELTA_SQ:
        return t ** (1.0 / 3.0)
    return t / (3.0 * _DELTA_SQ) + 4.0 / 29.0


def lab_f_inverse(t: float) -> float:
    """lab_f の逆関数。閾値は 6/29。"""
    if t > _DELTA:
        # ** はオーバーフローで例外になるため乗算で inf に飽和させる
        return t * t * t
    return 3.0 * _DELTA * _DELTA * (t - 4.0 / 29.0)


# --- 変換 ---


def rgb_to_lab(color: RGB) -> LAB:
    """RGB色をCIE L*a*b*に変換。D65光源基準。"""
    r_lin = srgb_to_linear(color.r / 255.0)
    g_lin = srgb_to_linear(color.g / 255.0)
    b_lin = srgb_to_linear(color.b / 255.0)

    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = _RGB_TO_XYZ
    x = r_lin * m00 + g_lin * m01 + b_lin * m02
    y = r_lin * m10 + g_lin * m11 + b_lin * m12
    z = r_lin * m20 + g_lin * m21 + b_lin * m22

    xn, yn, zn = D65_WHITE
    fx = lab_f(x / xn)
    fy = lab_f(y / yn)
    fz = lab_f(z / zn)

    return LAB(116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))


def lab_to_rgb(lab: LAB) -> RGB:
    """CIE L*a*b*をRGBに逆変換。

    ガマット外の値は各チャンネル 0-255 にクランプする（例外は出さない）。
    """
    fy = (lab.l + 16.0) / 116.0
    fx = lab.a / 500.0 + fy
    fz = fy - lab.b / 200.0

    xn, yn, zn = D65_WHITE
    x = lab_f_inverse(fx) * xn
    y = lab_f_inverse(fy) * yn
    z = lab_f_inverse(fz) * zn

    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = _XYZ_TO_RGB
    r = x * m00 + y * m01 + z * m02
    g = x * m10 + y * m11 + z * m12
    b = x * m20 + y * m21 + z * m22

    return RGB(
        clamp_channel(linear_to_srgb(r) * 255.0),
        clamp_channel(linear_to_srgb(g) * 255.0),
        clamp_channel(linear_to_srgb(b) * 255.0),
    )
