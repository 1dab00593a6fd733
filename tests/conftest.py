"""テスト共通フィクスチャ。"""

from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    """呼ぶたびに一定間隔で進む時計。"""

    def __init__(
        self,
        start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self._now = start
        self._step = step

    def __call__(self) -> datetime:
        now = self._now
        self._now += self._step
        return now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
