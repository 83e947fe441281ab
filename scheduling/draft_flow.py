"""Zustandsautomat für das schrittweise Anlegen eines Eintrags.

Zustände:
  select_course → select_time → select_weeks → confirm → done
Jeder Schritt vorwärts ist an die Validierung der Felder dieses Schritts
gebunden. cancel() ist aus jedem offenen Zustand möglich.
"""

import logging
from enum import Enum
from typing import Optional

from models.schedule_entry import ScheduleDraft, ScheduleEntry
from scheduling import weeks as week_selector
from scheduling.entries import EntryContext, ScheduleChange, create_entry, validate_draft

logger = logging.getLogger(__name__)


class DraftState(str, Enum):
    SELECT_COURSE = "select_course"
    SELECT_TIME = "select_time"
    SELECT_WEEKS = "select_weeks"
    CONFIRM = "confirm"
    DONE = "done"
    CANCELLED = "cancelled"


_ORDER = [
    DraftState.SELECT_COURSE,
    DraftState.SELECT_TIME,
    DraftState.SELECT_WEEKS,
    DraftState.CONFIRM,
]

# Felder, die beim Verlassen eines Zustands gültig sein müssen
STEP_FIELDS: dict[DraftState, set[str]] = {
    DraftState.SELECT_COURSE: {"course_id", "class_id"},
    DraftState.SELECT_TIME: {"day_of_week", "start", "end", "room"},
    DraftState.SELECT_WEEKS: {"weeks"},
}

# Felder, die in einem Zustand bearbeitet werden dürfen
EDITABLE: dict[DraftState, set[str]] = {
    DraftState.SELECT_COURSE: {"course_id", "class_id", "teacher_id"},
    DraftState.SELECT_TIME: {"day_of_week", "time_slot_id", "start", "end", "room"},
    DraftState.SELECT_WEEKS: {"weeks", "category"},
}


class FlowError(Exception):
    """Aktion ist im aktuellen Zustand nicht erlaubt."""


class DraftFlow:
    """Führt einen ScheduleDraft durch die Eingabeschritte.

    Verwendung:
        flow = DraftFlow(EntryContext.from_config(config))
        flow.update(course_id="course_001", class_id="class_001")
        flow.advance()
        ...
        change = flow.submit(entries)
    """

    def __init__(self, context: EntryContext, draft: Optional[ScheduleDraft] = None) -> None:
        self.context = context
        self.draft = draft or ScheduleDraft()
        self.state = DraftState.SELECT_COURSE
        self.errors: dict[str, str] = {}
        self.created: Optional[ScheduleEntry] = None

    @property
    def is_open(self) -> bool:
        return self.state not in (DraftState.DONE, DraftState.CANCELLED)

    def _require(self, *states: DraftState) -> None:
        if self.state not in states:
            raise FlowError(
                f"Im Zustand '{self.state.value}' nicht möglich "
                f"(erwartet: {', '.join(s.value for s in states)})"
            )

    # ─── Bearbeiten ───

    def update(self, **fields) -> None:
        """Setzt Felder des Entwurfs, sofern sie im aktuellen Schritt editierbar sind."""
        self._require(*STEP_FIELDS)
        not_allowed = set(fields) - EDITABLE[self.state]
        if not_allowed:
            raise FlowError(
                f"Felder {sorted(not_allowed)} sind im Schritt '{self.state.value}' nicht editierbar"
            )
        self.draft = self.draft.model_validate({**dict(self.draft), **fields})
        for name in fields:
            self.errors.pop(name, None)

    def apply_pattern(self, pattern: week_selector.WeekPattern | str) -> None:
        self._require(DraftState.SELECT_WEEKS)
        weeks = week_selector.select_weeks(pattern, self.context.semester_length)
        self.update(weeks=weeks)

    def toggle_week(self, week: int) -> None:
        self._require(DraftState.SELECT_WEEKS)
        weeks = week_selector.toggle(self.draft.weeks, week, self.context.semester_length)
        self.update(weeks=weeks)

    def clear_weeks(self) -> None:
        self._require(DraftState.SELECT_WEEKS)
        self.update(weeks=week_selector.clear())

    # ─── Übergänge ───

    def advance(self) -> bool:
        """Nächster Schritt, falls die Felder des aktuellen Schritts gültig sind."""
        self._require(*STEP_FIELDS)
        self.errors = validate_draft(self.draft, self.context, STEP_FIELDS[self.state])
        if self.errors:
            return False
        self.state = _ORDER[_ORDER.index(self.state) + 1]
        return True

    def back(self) -> None:
        self._require(*_ORDER[1:])
        self.state = _ORDER[_ORDER.index(self.state) - 1]
        self.errors = {}

    def cancel(self) -> None:
        self._require(*_ORDER)
        self.state = DraftState.CANCELLED
        logger.debug("Eingabe abgebrochen")

    def submit(self, entries: list[ScheduleEntry]) -> ScheduleChange:
        """Legt den Eintrag an. Bei Fehlern bleibt der Automat in confirm."""
        self._require(DraftState.CONFIRM)
        change = create_entry(entries, self.draft, self.context)
        self.errors = change.errors
        if change.ok:
            self.created = change.entry
            self.state = DraftState.DONE
        return change
