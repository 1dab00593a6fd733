"""カラーセンサーの読み取り値とリーダーのProtocol。

センサー本体（SDK / スタブ）は infrastructure 層で実装する。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from color_matcher.domain.color import LAB, RGB
from color_matcher.domain.project import utc_now


@dataclass(frozen=True)
class SensorReading:
    """センサーの1回分の測定結果。quality_score は 0-100。"""

    rgb_color: RGB
    lab_color: LAB | None = None
    timestamp: datetime = field(default_factory=utc_now)
    device_id: str | None = None
    quality_score: int | None = None
    metadata: str | None = None

    def meets_quality(self, minimum_quality: int) -> bool:
        """品質スコアが閾値以上か。スコアを持たない読み取りは合格扱い。"""
        return self.quality_score is None or self.quality_score >= minimum_quality


class SensorReader(Protocol):
    """カラーセンサーのProtocol。

    未接続で read_color / calibrate を呼ぶと SensorNotConnectedError。
    """

    @property
    def device_name(self) -> str: ...

    @property
    def device_id(self) -> str | None: ...

    @property
    def is_connected(self) -> bool: ...

    def connect(self) -> bool: ...

    def disconnect(self) -> None: ...

    def read_color(self) -> SensorReading: ...

    def calibrate(self) -> bool: ...

    def get_status(self) -> str: ...
