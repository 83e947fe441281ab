"""Tests für Anlegen, Ändern und Löschen von Einträgen (Reducer)."""

import pytest
from pydantic import ValidationError

from config.defaults import default_schedule_config
from models.schedule_entry import EntryStatus, ScheduleDraft, ScheduleEntry, SchedulePatch
from models.week_set import WeekSet
from scheduling.entries import (
    CreateEntry,
    DeleteEntry,
    EntryContext,
    UpdateEntry,
    apply_action,
    create_entry,
    delete_entry,
    next_entry_id,
    update_entry,
    validate_draft,
)
from scheduling.weeks import select_odd


def _context() -> EntryContext:
    return EntryContext.from_config(default_schedule_config())


def _draft(**overrides) -> ScheduleDraft:
    values = dict(
        course_id="course_001",
        class_id="class_001",
        day_of_week=2,
        start="10:00",
        end="10:45",
        room="A101",
        weeks=WeekSet([1, 2, 3]),
    )
    values.update(overrides)
    return ScheduleDraft(**values)


def _entry(entry_id: str = "schedule_001", **overrides) -> ScheduleEntry:
    values = dict(
        id=entry_id,
        course_id="course_001",
        class_id="class_001",
        teacher_id="teacher_001",
        day_of_week=1,
        start="08:00",
        end="08:45",
        room="A101",
        weeks=WeekSet.range(1, 16),
    )
    values.update(overrides)
    return ScheduleEntry(**values)


# ─── MODELL ───────────────────────────────────────────────────────────────────

class TestScheduleEntryModel:
    def test_active_entry_requires_weeks(self):
        with pytest.raises(ValidationError):
            _entry(weeks=WeekSet())

    def test_cancelled_entry_may_have_no_weeks(self):
        e = _entry(weeks=WeekSet(), status=EntryStatus.CANCELLED)
        assert not e.weeks

    def test_start_before_end(self):
        with pytest.raises(ValidationError):
            _entry(start="09:00", end="08:00")

    def test_invalid_time_format(self):
        with pytest.raises(ValidationError):
            _entry(start="8:00")

    def test_day_of_week_range(self):
        with pytest.raises(ValidationError):
            _entry(day_of_week=0)
        with pytest.raises(ValidationError):
            _entry(day_of_week=8)

    def test_weeks_from_list_and_serialized_as_list(self):
        e = _entry(weeks=[3, 1, 2])
        assert isinstance(e.weeks, WeekSet)
        assert e.model_dump()["weeks"] == [1, 2, 3]

    def test_weeks_string_rejected(self):
        with pytest.raises(ValidationError):
            _entry(weeks="1,2")

    def test_json_roundtrip(self):
        e = _entry(category="Labor")
        assert ScheduleEntry.model_validate_json(e.model_dump_json()) == e


# ─── ANLEGEN ──────────────────────────────────────────────────────────────────

class TestCreateEntry:
    def test_create_success(self):
        """Gültiger Entwurf → aktiver Eintrag mit neuer ID."""
        change = create_entry([], _draft(), _context())
        assert change.ok
        assert len(change.entries) == 1
        e = change.entry
        assert e is change.entries[0]
        assert e.id == "schedule_001"
        assert e.status == EntryStatus.ACTIVE
        assert e.teacher_id == "teacher_001"
        assert e.semester == "2024 Frühjahr"

    def test_empty_weeks_rejected(self):
        """Leere Wochenmenge: Fehler unter 'weeks', nichts wird angelegt."""
        existing = [_entry()]
        change = create_entry(existing, _draft(weeks=WeekSet()), _context())
        assert not change.ok
        assert "weeks" in change.errors
        assert change.entries == existing
        assert change.entry is None

    def test_missing_fields_reported_per_field(self):
        change = create_entry([], ScheduleDraft(), _context())
        assert set(change.errors) >= {"course_id", "class_id", "start", "end", "room", "weeks"}
        assert change.errors["course_id"] == "Bitte einen Kurs auswählen"

    def test_end_before_start(self):
        change = create_entry([], _draft(start="11:00", end="10:00"), _context())
        assert change.errors == {"end": "Ende muss nach dem Beginn liegen"}

    def test_invalid_time(self):
        change = create_entry([], _draft(start="25:00"), _context())
        assert "start" in change.errors

    def test_weeks_beyond_semester(self):
        change = create_entry([], _draft(weeks=WeekSet([1, 21])), _context())
        assert change.errors["weeks"] == "Wochen müssen zwischen 1 und 20 liegen"

    def test_day_out_of_range(self):
        change = create_entry([], _draft(day_of_week=9), _context())
        assert "day_of_week" in change.errors

    def test_time_slot_fills_start_end(self):
        """time_slot_id übernimmt Beginn und Ende aus dem Zeitraster."""
        change = create_entry([], _draft(start="", end="", time_slot_id="3"), _context())
        assert change.ok
        assert (change.entry.start, change.entry.end) == ("10:00", "10:45")

    def test_unknown_time_slot(self):
        change = create_entry([], _draft(time_slot_id="99"), _context())
        assert "time_slot_id" in change.errors
        assert change.entries == []

    def test_explicit_teacher_kept(self):
        change = create_entry([], _draft(teacher_id="teacher_042"), _context())
        assert change.entry.teacher_id == "teacher_042"

    def test_ids_unique(self):
        entries: list[ScheduleEntry] = []
        for _ in range(5):
            entries = create_entry(entries, _draft(), _context()).entries
        ids = [e.id for e in entries]
        assert len(set(ids)) == 5

    def test_input_not_mutated(self):
        existing = [_entry()]
        snapshot = list(existing)
        change = create_entry(existing, _draft(), _context())
        assert existing == snapshot
        assert change.entries is not existing
        assert len(change.entries) == 2

    def test_validate_draft_restricted_fields(self):
        errors = validate_draft(ScheduleDraft(course_id="c"), _context(), {"course_id", "class_id"})
        assert errors == {"class_id": "Bitte eine Klasse auswählen"}


class TestNextEntryId:
    def test_empty(self):
        assert next_entry_id([]) == "schedule_001"

    def test_after_max(self):
        entries = [_entry("schedule_004"), _entry("schedule_002")]
        assert next_entry_id(entries) == "schedule_005"

    def test_ignores_foreign_ids(self):
        assert next_entry_id([_entry("import-7")]) == "schedule_001"


# ─── ÄNDERN ───────────────────────────────────────────────────────────────────

class TestUpdateEntry:
    def test_update_room(self):
        entries = [_entry(), _entry("schedule_002")]
        change = update_entry(entries, "schedule_001", SchedulePatch(room="B201"), _context())
        assert change.ok
        assert change.entries[0].room == "B201"
        assert change.entries[1] is entries[1]
        assert entries[0].room == "A101"

    def test_update_unknown_id(self):
        change = update_entry([_entry()], "schedule_999", SchedulePatch(room="B201"))
        assert change.errors == {"id": "Eintrag 'schedule_999' nicht gefunden"}

    def test_update_empty_weeks_rejected(self):
        entries = [_entry()]
        change = update_entry(entries, "schedule_001", SchedulePatch(weeks=WeekSet()))
        assert "weeks" in change.errors
        assert change.entries == entries

    def test_cancel_then_clear_weeks(self):
        """Abgesagte Einträge dürfen leere Wochen haben."""
        change = update_entry(
            [_entry()], "schedule_001",
            SchedulePatch(status=EntryStatus.CANCELLED, weeks=WeekSet()),
        )
        assert change.ok
        assert change.entry.status == EntryStatus.CANCELLED

    def test_reactivate_requires_weeks(self):
        cancelled = _entry(weeks=WeekSet(), status=EntryStatus.CANCELLED)
        change = update_entry([cancelled], "schedule_001", SchedulePatch(status=EntryStatus.ACTIVE))
        assert "weeks" in change.errors

    def test_update_time_order_checked_against_existing(self):
        change = update_entry([_entry()], "schedule_001", SchedulePatch(start="09:00"))
        assert change.errors == {"end": "Ende muss nach dem Beginn liegen"}

    def test_update_weeks_beyond_semester(self):
        entries = [_entry()]
        change = update_entry(entries, "schedule_001", SchedulePatch(weeks=WeekSet([1, 21])), _context())
        assert change.errors == {"weeks": "Wochen müssen zwischen 1 und 20 liegen"}
        assert change.entries == entries

    def test_empty_category_cleared_like_create(self):
        """Leere Kategorie wird wie beim Anlegen zu None."""
        entries = [_entry(category="Labor")]
        change = update_entry(entries, "schedule_001", SchedulePatch(category=""))
        assert change.ok
        assert change.entry.category is None
        assert create_entry([], _draft(category=""), _context()).entry.category is None

    def test_room_stripped_like_create(self):
        change = update_entry([_entry()], "schedule_001", SchedulePatch(room="  B201 "))
        assert change.entry.room == "B201"

    def test_none_means_unchanged(self):
        change = update_entry([_entry()], "schedule_001", SchedulePatch(room=None, category="Labor"))
        assert change.ok
        assert change.entry.room == "A101"
        assert change.entry.category == "Labor"


# ─── LÖSCHEN & REDUCER ────────────────────────────────────────────────────────

class TestDeleteAndReducer:
    def test_delete(self):
        entries = [_entry(), _entry("schedule_002")]
        change = delete_entry(entries, "schedule_001")
        assert [e.id for e in change.entries] == ["schedule_002"]
        assert change.entry.id == "schedule_001"
        assert len(entries) == 2

    def test_delete_unknown_is_noop(self):
        entries = [_entry()]
        change = delete_entry(entries, "schedule_404")
        assert change.ok
        assert change.entries == entries
        assert change.entry is None

    def test_apply_action_dispatch(self):
        ctx = _context()
        entries = apply_action([], CreateEntry(draft=_draft()), ctx).entries
        entries = apply_action(entries, UpdateEntry(entry_id="schedule_001",
                                                    patch=SchedulePatch(weeks=select_odd(20))), ctx).entries
        assert entries[0].weeks == select_odd(20)
        entries = apply_action(entries, DeleteEntry(entry_id="schedule_001"), ctx).entries
        assert entries == []

    def test_apply_action_unknown_raises(self):
        with pytest.raises(TypeError):
            apply_action([], "create")
