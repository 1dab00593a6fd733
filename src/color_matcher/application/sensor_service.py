"""センサー読み取りサービス。

品質スコアが閾値に届くまで再測定する。
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from color_matcher.config import Config
from color_matcher.domain.sensor import SensorReader, SensorReading
from color_matcher.errors import SensorError, SensorNotConnectedError

logger = logging.getLogger(__name__)


def read_with_validation(
    reader: SensorReader,
    max_retries: int = 3,
    minimum_quality: int = 70,
    retry_delay: float = 0.1,
    sleep: Callable[[float], None] = time.sleep,
) -> SensorReading:
    """品質スコアが minimum_quality 以上の読み取りを返す。

    max_retries 回試しても届かなければ、それまでで最も品質の高い読み取りを返す。

    Args:
        reader: 接続済みのセンサー
        max_retries: 最大測定回数 (1以上)
        minimum_quality: 合格とする品質スコア (0-100)
        retry_delay: 再測定までの待ち時間 [秒]
        sleep: 待機関数（テストで差し替え可能）

    Raises:
        SensorNotConnectedError: センサーが未接続
        SensorError: 1回も読み取りに成功しなかった
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")
    if not reader.is_connected:
        raise SensorNotConnectedError(f"{reader.device_name} is not connected")

    best: SensorReading | None = None
    last_error: SensorError | None = None
    for attempt in range(1, max_retries + 1):
        try:
            reading = reader.read_color()
        except SensorNotConnectedError:
            raise
        except SensorError as exc:
            logger.warning("Sensor read failed (attempt %d/%d): %s", attempt, max_retries, exc)
            last_error = exc
        else:
            if reading.meets_quality(minimum_quality):
                return reading
            logger.debug(
                "Reading quality %s below %d (attempt %d/%d)",
                reading.quality_score, minimum_quality, attempt, max_retries,
            )
            if best is None or (reading.quality_score or 0) > (best.quality_score or 0):
                best = reading

        if attempt < max_retries:
            sleep(retry_delay)

    if best is None:
        raise SensorError(
            f"Failed to obtain a sensor reading after {max_retries} attempt(s)"
        ) from last_error
    logger.info("Returning best reading below quality threshold: %s", best.quality_score)
    return best


class SensorService:
    """GUI / CLI から使うセンサー操作の窓口。"""

    def __init__(self, reader: SensorReader, config: Config | None = None) -> None:
        self._reader = reader
        self._config = config or Config()

    @property
    def reader(self) -> SensorReader:
        return self._reader

    @property
    def is_connected(self) -> bool:
        return self._reader.is_connected

    def connect(self) -> bool:
        connected = self._reader.connect()
        if not connected:
            logger.warning("Could not connect to %s", self._reader.device_name)
        return connected

    def disconnect(self) -> None:
        self._reader.disconnect()

    def calibrate(self) -> bool:
        return self._reader.calibrate()

    def status(self) -> str:
        return self._reader.get_status()

    def read_sample(self) -> SensorReading:
        """設定の再試行回数・品質閾値で1色を測定。"""
        return read_with_validation(
            self._reader,
            max_retries=self._config.sensor_max_retries,
            minimum_quality=self._config.sensor_min_quality,
            retry_delay=self._config.sensor_retry_delay,
        )
