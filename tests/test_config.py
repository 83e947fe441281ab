"""Tests für das Konfigurationssystem und die Stammdaten-Modelle."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import (
    default_catalog,
    default_classes,
    default_classrooms,
    default_courses,
    default_schedule_config,
    default_time_slots,
)
from config.manager import ConfigManager
from config.schema import (
    CatalogConfig,
    CollisionPolicy,
    GridConfig,
    ScheduleConfig,
    SemesterConfig,
    ViewMode,
)
from models.room import Classroom, RoomType
from models.timeslot import TimeSlot


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_time_slots(self):
        """Zehn Blöcke, aufsteigende Ordnungszahl."""
        slots = default_time_slots()
        assert len(slots) == 10
        assert [s.ordinal for s in slots] == list(range(1, 11))
        assert (slots[0].start, slots[0].end) == ("08:00", "08:45")
        assert slots[2].start == "10:00"

    def test_default_catalog(self):
        assert len(default_classrooms()) == 3
        assert len(default_classes()) == 3
        assert len(default_courses()) == 3
        catalog = default_catalog()
        assert catalog.get_room("B201").room_type == RoomType.LAB
        assert catalog.get_class("class_001").student_count == 45
        assert catalog.get_course("course_003").name == "Programmieren in C"
        assert catalog.get_slot("4").start == "10:55"
        assert catalog.get_room("Z999") is None

    def test_default_schedule_config(self):
        config = default_schedule_config()
        assert config.semester.length == 20
        assert config.grid.collision_policy == CollisionPolicy.REJECT
        assert config.grid.default_view == ViewMode.WEEK
        assert config.grid.day_names[0] == "Mo"


# ─── VALIDIERUNG ──────────────────────────────────────────────────────────────

class TestPydanticValidation:
    def test_time_slot_bad_format(self):
        with pytest.raises(ValidationError):
            TimeSlot(id="1", label="1. Block", start="8:00", end="08:45", ordinal=1)

    def test_time_slot_start_after_end(self):
        with pytest.raises(ValidationError):
            TimeSlot(id="1", label="1. Block", start="09:00", end="08:45", ordinal=1)

    def test_semester_length_bounds(self):
        with pytest.raises(ValidationError):
            SemesterConfig(length=0)
        with pytest.raises(ValidationError):
            SemesterConfig(length=31)

    def test_duplicate_slot_ids(self):
        slots = default_time_slots()
        slots[1] = slots[1].model_copy(update={"id": "1"})
        with pytest.raises(ValidationError):
            CatalogConfig(time_slots=slots)

    def test_duplicate_ordinals(self):
        slots = default_time_slots()
        slots[1] = slots[1].model_copy(update={"ordinal": 1})
        with pytest.raises(ValidationError):
            CatalogConfig(time_slots=slots)

    def test_duplicate_room_names(self):
        room = Classroom(id="r1", name="A101", building="A", capacity=10)
        with pytest.raises(ValidationError):
            CatalogConfig(time_slots=default_time_slots(), classrooms=[room, room])

    def test_day_names_need_seven(self):
        with pytest.raises(ValidationError):
            GridConfig(day_names=["Mo", "Di"])

    def test_ordered_slots(self):
        slots = list(reversed(default_time_slots()))
        catalog = CatalogConfig(time_slots=slots)
        assert [s.ordinal for s in catalog.ordered_slots] == list(range(1, 11))


# ─── MANAGER ──────────────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Gespeicherte Config lässt sich identisch wieder laden."""
        mgr = ConfigManager(tmp_path / "kursplan.yaml")
        config = default_schedule_config()
        config.grid.collision_policy = CollisionPolicy.LAST_WINS
        mgr.save(config)
        loaded = mgr.load()
        assert loaded == config

    def test_saved_yaml_has_comments(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "kursplan.yaml")
        path = mgr.save(default_schedule_config())
        text = path.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "─── Stammdaten ───" in text

    def test_first_run_check(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "kursplan.yaml")
        assert mgr.first_run_check() is True
        mgr.save(default_schedule_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "kaputt.yaml"
        path.write_text("semester:\n  length: 99\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigManager(path).load()

    def test_schedule_config_requires_catalog(self):
        with pytest.raises(ValidationError):
            ScheduleConfig()
