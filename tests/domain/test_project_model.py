"""project.py / sensor.py のモデルのテスト。"""

from datetime import timezone

import pytest

from color_matcher.domain.color import RGB
from color_matcher.domain.project import ColorHistoryEntry, ColorProject
from color_matcher.domain.sensor import SensorReading


class TestColorHistoryEntry:
    def test_defaults(self) -> None:
        entry = ColorHistoryEntry()
        assert entry.reference_color is None
        assert entry.delta_e == 0.0
        assert entry.is_accepted is False
        assert entry.created_at.tzinfo is timezone.utc

    def test_ids_are_unique(self) -> None:
        assert ColorHistoryEntry().id != ColorHistoryEntry().id

    def test_from_comparison(self) -> None:
        entry = ColorHistoryEntry.from_comparison(
            RGB(0, 0, 0), RGB(255, 255, 255), notes="check"
        )
        assert entry.reference_color == RGB(0, 0, 0)
        assert entry.sample_color == RGB(255, 255, 255)
        assert entry.delta_e == pytest.approx(100.0, abs=0.01)
        assert entry.tint_recommendation == "Colors are very close"
        assert entry.notes == "check"
        assert entry.is_accepted is False

    def test_from_comparison_incomplete(self) -> None:
        entry = ColorHistoryEntry.from_comparison(RGB(10, 20, 30), None)
        assert entry.delta_e == 0.0
        assert entry.tint_recommendation == "Enter both colors"


class TestColorProject:
    def test_defaults(self) -> None:
        project = ColorProject()
        assert project.color_history == []
        assert project.metadata == {}
        assert project.id

    def test_history_lists_are_independent(self) -> None:
        p1 = ColorProject()
        p2 = ColorProject()
        p1.color_history.append(ColorHistoryEntry())
        assert p2.color_history == []

    def test_display_name(self) -> None:
        assert ColorProject(name="Kitchen").display_name == "Kitchen"
        assert ColorProject().display_name == "Untitled Project"
        assert ColorProject(name="").display_name == "Untitled Project"


class TestSensorReading:
    def test_meets_quality(self) -> None:
        reading = SensorReading(RGB(1, 2, 3), quality_score=70)
        assert reading.meets_quality(70)
        assert not reading.meets_quality(71)

    def test_missing_score_passes(self) -> None:
        assert SensorReading(RGB(1, 2, 3)).meets_quality(100)

    def test_defaults(self) -> None:
        reading = SensorReading(RGB(1, 2, 3))
        assert reading.lab_color is None
        assert reading.device_id is None
        assert reading.timestamp.tzinfo is timezone.utc
