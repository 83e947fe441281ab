"""Tests für die Konfliktprüfung und die Beispieldaten."""

from config.defaults import default_catalog, default_schedule_config
from analysis.conflict_check import ScheduleValidator, entries_overlap
from data.mock_data import MockDataGenerator
from models.room import RoomStatus
from models.schedule_entry import EntryStatus, ScheduleEntry
from models.week_set import WeekSet


def _entry(entry_id: str, **overrides) -> ScheduleEntry:
    values = dict(
        id=entry_id,
        course_id="course_001",
        class_id="class_003",
        teacher_id="teacher_001",
        day_of_week=2,
        start="08:00",
        end="09:40",
        room="A102",
        weeks=WeekSet([1, 2, 3]),
    )
    values.update(overrides)
    return ScheduleEntry(**values)


def _constraints(report) -> list[str]:
    return [v.constraint for v in report.violations]


class TestEntriesOverlap:
    def test_overlap(self):
        assert entries_overlap(_entry("a"), _entry("b", start="08:55", end="09:40"))

    def test_touching_times_do_not_overlap(self):
        assert not entries_overlap(_entry("a", end="08:45"), _entry("b", start="08:45", end="09:30"))

    def test_other_day(self):
        assert not entries_overlap(_entry("a"), _entry("b", day_of_week=3))

    def test_disjoint_weeks(self):
        assert not entries_overlap(_entry("a"), _entry("b", weeks=WeekSet([4, 5])))


class TestScheduleValidator:
    def test_clean_schedule(self):
        report = ScheduleValidator(default_catalog()).validate([_entry("a")])
        assert report.is_valid
        assert report.violations == []

    def test_room_class_teacher_double_booking(self):
        entries = [_entry("a"), _entry("b", start="08:55")]
        report = ScheduleValidator(default_catalog()).validate(entries)
        assert not report.is_valid
        assert set(_constraints(report)) == {
            "room_double_booking", "class_double_booking", "teacher_double_booking",
        }
        assert all(v.severity == "error" for v in report.errors)

    def test_only_room_conflict(self):
        entries = [_entry("a"), _entry("b", class_id="class_002", teacher_id="teacher_002")]
        report = ScheduleValidator(default_catalog()).validate(entries)
        assert _constraints(report) == ["room_double_booking"]
        assert "Woche(n) 1-3" in report.errors[0].description

    def test_cancelled_entries_ignored(self):
        entries = [_entry("a"), _entry("b", status=EntryStatus.CANCELLED)]
        report = ScheduleValidator(default_catalog()).validate(entries)
        assert report.is_valid

    def test_unplaceable_and_unknown_room_are_warnings(self):
        report = ScheduleValidator(default_catalog()).validate(
            [_entry("a", start="07:30", room="Z999")]
        )
        assert report.is_valid
        assert set(_constraints(report)) == {"no_matching_time_slot", "unknown_room"}

    def test_capacity_and_maintenance(self):
        catalog = default_catalog()
        catalog.classrooms[1].status = RoomStatus.MAINTENANCE
        entries = [_entry("a", class_id="class_001", room="B201"), _entry("b", day_of_week=4)]
        report = ScheduleValidator(catalog).validate(entries)
        assert set(_constraints(report)) == {"room_capacity", "room_maintenance"}
        assert len(report.warnings) == 2


class TestMockData:
    def test_fixed_entries(self):
        entries = MockDataGenerator(default_schedule_config()).generate()
        assert [e.id for e in entries] == [
            "schedule_001", "schedule_002", "schedule_003", "schedule_004",
        ]
        assert all(e.weeks == WeekSet.range(1, 16) for e in entries)

    def test_fixed_entries_conflict_free(self):
        entries = MockDataGenerator(default_schedule_config()).generate()
        report = ScheduleValidator(default_catalog()).validate(entries)
        assert report.is_valid
        assert {v.constraint for v in report.warnings} == {"room_capacity"}

    def test_short_semester_clamps_weeks(self):
        config = default_schedule_config()
        config.semester.length = 8
        entries = MockDataGenerator(config).generate()
        assert entries[0].weeks.last == 8

    def test_category_counts(self):
        """Theorie zählt auch Einträge ohne Kategorie."""
        entries = MockDataGenerator(default_schedule_config()).generate()
        assert MockDataGenerator.category_counts(entries) == {
            "theory": 2, "lab": 1, "computer": 1,
        }

    def test_extra_entries_reproducible(self):
        config = default_schedule_config()
        a = MockDataGenerator(config, seed=7).generate(extra=5)
        b = MockDataGenerator(config, seed=7).generate(extra=5)
        assert len(a) == 9
        assert a == b
        assert len({e.id for e in a}) == 9
