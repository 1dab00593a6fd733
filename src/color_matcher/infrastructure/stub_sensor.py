"""ハードウェアなしで動くカラーセンサーのスタブ。

塗料によくある色の傾向を持つランダム色と品質スコアを返す。
"""

from __future__ import annotations

import logging

import numpy as np

from color_matcher.domain.color import RGB
from color_matcher.domain.conversion import rgb_to_lab
from color_matcher.domain.project import utc_now
from color_matcher.domain.sensor import SensorReading
from color_matcher.errors import SensorNotConnectedError
from color_matcher.infrastructure.memory_repository import Clock

logger = logging.getLogger(__name__)

GOOD_QUALITY_PROBABILITY = 0.8


class StubSensorReader:
    """NIX Mini 3 を模したスタブ実装。"""

    def __init__(self, seed: int | None = None, clock: Clock = utc_now) -> None:
        self._rng = np.random.default_rng(seed)
        self._clock = clock
        self._connected = False
        self._reading_count = 0
        self._history: list[SensorReading] = []
        self._override: RGB | None = None

    @property
    def device_name(self) -> str:
        return "NIX Mini 3 (Stub)"

    @property
    def device_id(self) -> str:
        return "STUB-000001"

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def reading_history(self) -> tuple[SensorReading, ...]:
        return tuple(self._history)

    def set_next_reading_override(self, color: RGB) -> None:
        """次の read_color が返す色を固定する（1回限り）。"""
        if not isinstance(color, RGB):
            raise TypeError(f"Override color must be an RGB, got {color!r}")
        self._override = color

    def connect(self) -> bool:
        self._connected = True
        self._reading_count = 0
        self._history.clear()
        logger.info("Connected to %s (%s)", self.device_name, self.device_id)
        return True

    def disconnect(self) -> None:
        if self._connected:
            logger.info("Disconnected from %s", self.device_name)
        self._connected = False

    def close(self) -> None:
        self.disconnect()

    def __enter__(self) -> StubSensorReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _require_connection(self) -> None:
        if not self._connected:
            raise SensorNotConnectedError("Sensor is not connected. Call connect() first.")

    def read_color(self) -> SensorReading:
        self._require_connection()

        if self._override is not None:
            color = self._override
            self._override = None
        else:
            color = self._generate_realistic_color()

        self._reading_count += 1
        reading = SensorReading(
            rgb_color=color,
            lab_color=rgb_to_lab(color),
            timestamp=self._clock(),
            device_id=self.device_id,
            quality_score=self._generate_quality_score(),
            metadata=f"Reading #{self._reading_count}",
        )
        self._history.append(reading)
        logger.debug("Stub reading %s quality=%s", color, reading.quality_score)
        return reading

    def calibrate(self) -> bool:
        self._require_connection()
        logger.info("Calibrated %s", self.device_name)
        return True

    def get_status(self) -> str:
        if not self._connected:
            return "Disconnected"
        return (
            f"Connected: {self.device_name}\n"
            f"Device ID: {self.device_id}\n"
            f"Readings taken: {self._reading_count}\n"
            "Battery: 85% (simulated)\n"
            "Last calibration: Today at 10:30 AM (simulated)"
        )

    def _generate_realistic_color(self) -> RGB:
        """よくある塗料色の周辺に集まるランダム色を生成。"""
        rng = self._rng
        pattern = rng.integers(0, 5)
        if pattern == 0:  # 赤系
            r, g, b = rng.integers(180, 255), rng.integers(0, 100), rng.integers(0, 100)
        elif pattern == 1:  # 緑系
            r, g, b = rng.integers(0, 100), rng.integers(100, 255), rng.integers(0, 100)
        elif pattern == 2:  # 青系
            r, g, b = rng.integers(0, 100), rng.integers(0, 100), rng.integers(180, 255)
        elif pattern == 3:  # グレー
            gray = int(rng.integers(50, 200))
            r = gray
            g = gray + int(rng.integers(-10, 10))
            b = gray + int(rng.integers(-10, 10))
        else:
            r, g, b = rng.integers(0, 256, size=3)
        return RGB(int(r), int(g), int(b))

    def _generate_quality_score(self) -> int:
        if self._rng.random() < GOOD_QUALITY_PROBABILITY:
            return int(self._rng.integers(75, 101))
        return int(self._rng.integers(50, 75))
