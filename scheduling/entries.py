"""Anlegen, Ändern und Löschen von Stundenplan-Einträgen als reine Reducer.

Jede Operation bekommt die aktuelle Eintragsliste und liefert eine neue
Liste in einem ScheduleChange zurück; die Eingabeliste wird nie verändert.
Validierungsfehler werden als Feld → Meldung zurückgegeben, nicht geworfen.
"""

import logging
import re
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from config.schema import ScheduleConfig
from models.schedule_entry import EntryStatus, ScheduleDraft, ScheduleEntry, SchedulePatch
from models.timeslot import TimeSlot, is_hhmm
from models.week_set import WeekSet

logger = logging.getLogger(__name__)

ID_PREFIX = "schedule_"
_ID_PATTERN = re.compile(rf"^{ID_PREFIX}(\d+)$")

# Meldungen für fehlende Pflichtfelder
REQUIRED_MESSAGES: dict[str, str] = {
    "course_id": "Bitte einen Kurs auswählen",
    "class_id": "Bitte eine Klasse auswählen",
    "start": "Bitte eine Beginnzeit auswählen",
    "end": "Bitte eine Endzeit auswählen",
    "room": "Bitte einen Raum auswählen",
    "weeks": "Bitte Unterrichtswochen auswählen",
}


class EntryContext(BaseModel):
    """Umgebung für neue Einträge: Lehrkraft, Semester, Zeitraster."""

    teacher_id: str = "teacher_001"
    semester: str = ""
    semester_length: int = 20
    time_slots: list[TimeSlot] = []

    @classmethod
    def from_config(cls, config: ScheduleConfig) -> "EntryContext":
        return cls(
            teacher_id=config.default_teacher_id,
            semester=config.semester.name,
            semester_length=config.semester.length,
            time_slots=config.catalog.time_slots,
        )


# ─── Aktionen ─────────────────────────────────────────────────────────────────

class CreateEntry(BaseModel):
    kind: Literal["create"] = "create"
    draft: ScheduleDraft


class UpdateEntry(BaseModel):
    kind: Literal["update"] = "update"
    entry_id: str
    patch: SchedulePatch


class DeleteEntry(BaseModel):
    kind: Literal["delete"] = "delete"
    entry_id: str


ScheduleAction = Union[CreateEntry, UpdateEntry, DeleteEntry]


class ScheduleChange(BaseModel):
    """Ergebnis einer Aktion.

    entries ist immer die (ggf. unveränderte) neue Liste. entry ist der
    angelegte, geänderte bzw. gelöschte Eintrag; bei Fehlern None.
    """

    entries: list[ScheduleEntry]
    entry: Optional[ScheduleEntry] = None
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


# ─── Validierung ──────────────────────────────────────────────────────────────

def _validate_fields(values: dict, fields: set[str], semester_length: int) -> dict[str, str]:
    """Prüft die genannten Felder in values. Gibt Feld → Meldung zurück."""
    errors: dict[str, str] = {}

    for name in ("course_id", "class_id", "room"):
        if name in fields and not (values.get(name) or "").strip():
            errors[name] = REQUIRED_MESSAGES[name]

    if "day_of_week" in fields:
        day = values.get("day_of_week")
        if not isinstance(day, int) or not 1 <= day <= 7:
            errors["day_of_week"] = "Wochentag muss zwischen 1 (Mo) und 7 (So) liegen"

    for name in ("start", "end"):
        if name not in fields:
            continue
        value = values.get(name) or ""
        if not value:
            errors[name] = REQUIRED_MESSAGES[name]
        elif not is_hhmm(value):
            errors[name] = f"Ungültige Uhrzeit '{value}' (erwartet HH:MM)"

    if {"start", "end"} & fields and "start" not in errors and "end" not in errors:
        if values["start"] >= values["end"]:
            errors["end"] = "Ende muss nach dem Beginn liegen"

    if "weeks" in fields:
        weeks: WeekSet = values.get("weeks") or WeekSet()
        status = values.get("status", EntryStatus.ACTIVE)
        if not weeks and status == EntryStatus.ACTIVE:
            errors["weeks"] = REQUIRED_MESSAGES["weeks"]
        elif not weeks.within(semester_length):
            errors["weeks"] = f"Wochen müssen zwischen 1 und {semester_length} liegen"

    return errors


def resolve_draft(draft: ScheduleDraft, context: EntryContext) -> tuple[ScheduleDraft, dict[str, str]]:
    """Übernimmt start/end aus dem gewählten Block, falls time_slot_id gesetzt ist."""
    if not draft.time_slot_id:
        return draft, {}
    slot = next((s for s in context.time_slots if s.id == draft.time_slot_id), None)
    if slot is None:
        return draft, {"time_slot_id": f"Unbekannter Block '{draft.time_slot_id}'"}
    return draft.model_copy(update={"start": slot.start, "end": slot.end}), {}


def validate_draft(
    draft: ScheduleDraft,
    context: EntryContext,
    fields: Optional[set[str]] = None,
) -> dict[str, str]:
    """Feldvalidierung eines Entwurfs; fields schränkt auf einzelne Felder ein."""
    checked = set(REQUIRED_MESSAGES) | {"day_of_week"} if fields is None else set(fields)
    resolved, errors = resolve_draft(draft, context)
    if errors:
        if not {"start", "end", "time_slot_id"} & checked:
            errors = {}
        checked -= {"start", "end"}
    errors.update(_validate_fields(dict(resolved), checked, context.semester_length))
    return errors


def next_entry_id(entries: list[ScheduleEntry]) -> str:
    """Nächste freie ID der Form schedule_NNN (kollidiert nie mit vorhandenen)."""
    taken = {e.id for e in entries}
    numbers = [int(m.group(1)) for e in entries if (m := _ID_PATTERN.match(e.id))]
    n = max(numbers, default=0) + 1
    while f"{ID_PREFIX}{n:03d}" in taken:
        n += 1
    return f"{ID_PREFIX}{n:03d}"


# ─── Operationen ──────────────────────────────────────────────────────────────

def create_entry(
    entries: list[ScheduleEntry],
    draft: ScheduleDraft,
    context: Optional[EntryContext] = None,
) -> ScheduleChange:
    """Legt einen neuen aktiven Eintrag an. Bei Fehlern bleibt die Liste unverändert."""
    context = context or EntryContext()
    errors = validate_draft(draft, context)
    if errors:
        logger.debug(f"Eintrag nicht angelegt: {errors}")
        return ScheduleChange(entries=list(entries), errors=errors)

    resolved, _ = resolve_draft(draft, context)
    entry = ScheduleEntry(
        id=next_entry_id(entries),
        course_id=resolved.course_id.strip(),
        class_id=resolved.class_id.strip(),
        teacher_id=resolved.teacher_id or context.teacher_id,
        day_of_week=resolved.day_of_week,
        start=resolved.start,
        end=resolved.end,
        room=resolved.room.strip(),
        weeks=resolved.weeks,
        semester=context.semester,
        status=EntryStatus.ACTIVE,
        category=resolved.category or None,
    )
    logger.info(
        f"Eintrag {entry.id} angelegt: Tag {entry.day_of_week}, "
        f"{entry.start}-{entry.end}, Raum {entry.room}, {len(entry.weeks)} Wochen"
    )
    return ScheduleChange(entries=[*entries, entry], entry=entry)


def update_entry(
    entries: list[ScheduleEntry],
    entry_id: str,
    patch: SchedulePatch,
    context: Optional[EntryContext] = None,
) -> ScheduleChange:
    """Übernimmt die gesetzten Felder des Patches; geprüft werden nur berührte Felder."""
    context = context or EntryContext()
    current = next((e for e in entries if e.id == entry_id), None)
    if current is None:
        return ScheduleChange(
            entries=list(entries),
            errors={"id": f"Eintrag '{entry_id}' nicht gefunden"},
        )

    changes = patch.touched()
    # wie create_entry: Raum ohne Leerzeichen, leere Kategorie = keine
    if "room" in changes:
        changes["room"] = changes["room"].strip()
    if "category" in changes:
        changes["category"] = changes["category"] or None
    merged = {**dict(current), **changes}
    checked = set(changes)
    # Statuswechsel auf aktiv erfordert wieder eine nicht-leere Wochenmenge
    if changes.get("status") == EntryStatus.ACTIVE:
        checked.add("weeks")
    errors = _validate_fields(merged, checked, context.semester_length)
    if errors:
        return ScheduleChange(entries=list(entries), errors=errors)

    updated = current.model_copy(update=changes)
    logger.info(f"Eintrag {entry_id} geändert: {sorted(changes)}")
    return ScheduleChange(
        entries=[updated if e.id == entry_id else e for e in entries],
        entry=updated,
    )


def delete_entry(entries: list[ScheduleEntry], entry_id: str) -> ScheduleChange:
    """Entfernt den Eintrag endgültig. Unbekannte IDs lassen die Liste unverändert."""
    removed = next((e for e in entries if e.id == entry_id), None)
    if removed is None:
        logger.debug(f"Löschen: Eintrag {entry_id} nicht vorhanden")
        return ScheduleChange(entries=list(entries))
    logger.info(f"Eintrag {entry_id} gelöscht")
    return ScheduleChange(entries=[e for e in entries if e.id != entry_id], entry=removed)


def apply_action(
    entries: list[ScheduleEntry],
    action: ScheduleAction,
    context: Optional[EntryContext] = None,
) -> ScheduleChange:
    """Reducer: (Einträge, Aktion) → ScheduleChange."""
    if isinstance(action, CreateEntry):
        return create_entry(entries, action.draft, context)
    if isinstance(action, UpdateEntry):
        return update_entry(entries, action.entry_id, action.patch, context)
    if isinstance(action, DeleteEntry):
        return delete_entry(entries, action.entry_id)
    raise TypeError(f"Unbekannte Aktion: {action!r}")
