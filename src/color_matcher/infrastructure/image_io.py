"""画像の読み込み（Pillow ベース）と平均色の抽出。

写真や塗装サンプルのスキャン画像から比較用の1色を取り出す。
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image

from color_matcher.domain.color import RGB
from color_matcher.errors import InvalidColorError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SAMPLES = 20000


def load_image(path: str | Path) -> npt.NDArray[np.uint8]:
    """画像ファイルを読み込み、RGB配列として返す。

    Args:
        path: 画像ファイルパス (JPEG, PNG等)

    Returns:
        (H, W, 3) の uint8 配列 (RGB)
    """
    with Image.open(path) as img:
        img = img.convert("RGB")
        return np.array(img, dtype=np.uint8)


def sampling_step(width: int, height: int, max_samples: int = DEFAULT_MAX_SAMPLES) -> int:
    """縦横共通の間引き幅。画素数がおよそ max_samples になるようにする。"""
    return max(1, int(math.sqrt(width * height / max_samples)))


def average_color(
    array: npt.NDArray[np.uint8],
    max_samples: int = DEFAULT_MAX_SAMPLES,
) -> RGB:
    """画像配列の平均色を計算（大きな画像は間引いてサンプリング）。

    Args:
        array: (H, W, 3) の uint8 配列
        max_samples: サンプリングする画素数の目安

    Returns:
        各チャンネルを切り捨て平均した RGB
    """
    if array.ndim != 3 or array.shape[2] != 3:
        raise InvalidColorError(f"Expected an (H, W, 3) image, got shape {array.shape}")
    height, width = array.shape[:2]
    if height == 0 or width == 0:
        raise InvalidColorError("Cannot average an empty image")
    if max_samples <= 0:
        raise ValueError(f"max_samples must be positive, got {max_samples}")

    step = sampling_step(width, height, max_samples)
    sampled = array[::step, ::step].reshape(-1, 3)
    totals = sampled.sum(axis=0, dtype=np.int64)
    count = sampled.shape[0]
    logger.debug("Averaging %dx%d image with step %d (%d pixels)", width, height, step, count)

    r, g, b = (int(v) for v in totals // count)
    return RGB(r, g, b)


def sample_image_color(path: str | Path, max_samples: int = DEFAULT_MAX_SAMPLES) -> RGB:
    """画像ファイルの平均色を返す。"""
    return average_color(load_image(path), max_samples)
