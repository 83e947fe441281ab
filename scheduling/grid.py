"""Wochenraster: projiziert Einträge auf eine Matrix Block × Wochentag.

Zeilen = Blöcke des Zeitrasters (nach Ordnungszahl), Spalten = Mo..So.
Jede Zelle enthält höchstens einen Eintrag. Der Aufbau ist rein: gleiche
Eingaben ergeben immer dasselbe Raster.

Ablauf von build_grid():
  1. Kandidaten wählen (Wochenansicht: nur Einträge, die in der Woche liegen;
     Semesteransicht: alle Einträge)
  2. Zeile über Beginnzeit == TimeSlot.start bestimmen (kein Treffer → Eintrag
     wird übersprungen, kein Fehler)
  3. Spalte = day_of_week - 1
  4. Zelle belegen; ist sie schon aktiv belegt, entscheidet die CollisionPolicy
     (abgesagte Einträge weichen ohne Konflikt)
"""

import logging
from typing import Iterator, Literal, Optional, Union

from pydantic import BaseModel, Field

from config.schema import CollisionPolicy, ViewMode
from models.schedule_entry import EntryStatus, ScheduleEntry
from models.timeslot import TimeSlot

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


class ScheduleGrid(BaseModel):
    """Fertiges Raster. cells[row][column] ist ein Eintrag oder None."""

    time_slots: list[TimeSlot]
    cells: list[list[Optional[ScheduleEntry]]]
    view_mode: ViewMode = ViewMode.WEEK
    week: Optional[int] = None
    skipped: list[str] = []   # IDs ohne passenden Block

    def __getitem__(self, row: int) -> list[Optional[ScheduleEntry]]:
        return self.cells[row]

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.cells), DAYS_PER_WEEK

    def cell(self, row: int, column: int) -> Optional[ScheduleEntry]:
        return self.cells[row][column]

    def placed_entries(self) -> Iterator[tuple[int, int, ScheduleEntry]]:
        """(row, column, entry) für alle belegten Zellen, zeilenweise."""
        for r, row in enumerate(self.cells):
            for c, entry in enumerate(row):
                if entry is not None:
                    yield r, c, entry

    def is_empty(self) -> bool:
        return next(self.placed_entries(), None) is None


class GridConflict(BaseModel):
    """Zwei Einträge beanspruchen dieselbe Zelle."""

    kind: Literal["conflict"] = "conflict"
    existing: ScheduleEntry
    incoming: ScheduleEntry
    row: int
    column: int

    @property
    def ok(self) -> bool:
        return False

    def describe(self, time_slots: Optional[list[TimeSlot]] = None) -> str:
        where = f"Zeile {self.row + 1}"
        if time_slots and self.row < len(time_slots):
            where = time_slots[self.row].label
        return (
            f"Tag {self.column + 1}, {where}: {self.incoming.id} kollidiert mit "
            f"{self.existing.id} (Raum {self.existing.room}/{self.incoming.room})"
        )


class GridOk(BaseModel):
    """Raster erfolgreich aufgebaut. overwritten ist nur bei LAST_WINS gefüllt."""

    kind: Literal["ok"] = "ok"
    grid: ScheduleGrid
    overwritten: list[GridConflict] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True


GridResult = Union[GridOk, GridConflict]


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def empty_cells(rows: int) -> list[list[Optional[ScheduleEntry]]]:
    return [[None] * DAYS_PER_WEEK for _ in range(rows)]


def select_candidates(
    entries: list[ScheduleEntry],
    view_mode: ViewMode,
    week: Optional[int] = None,
) -> list[ScheduleEntry]:
    """Wochenansicht: Einträge, deren Wochen `week` enthalten. Semester: alle."""
    if view_mode == ViewMode.SEMESTER:
        return list(entries)
    if week is None:
        raise ValueError("Wochenansicht benötigt eine Woche")
    return [e for e in entries if e.is_active_in_week(week)]


def find_row(time_slots: list[TimeSlot], start: str) -> Optional[int]:
    """Zeilenindex des Blocks mit passender Beginnzeit (oder None)."""
    return next((i for i, s in enumerate(time_slots) if s.start == start), None)


def place_entry(
    cells: list[list[Optional[ScheduleEntry]]],
    entry: ScheduleEntry,
    row: int,
    column: int,
) -> Optional[GridConflict]:
    """Belegt eine Zelle, falls frei. Sonst wird der Konflikt zurückgegeben, ohne zu schreiben.

    Abgesagte Einträge belegen nichts: ein späterer Eintrag ersetzt sie, und
    ein abgesagter Eintrag verdrängt keinen vorhandenen. Beides ist kein Konflikt.
    """
    existing = cells[row][column]
    if existing is None or existing.status == EntryStatus.CANCELLED:
        cells[row][column] = entry
        return None
    if entry.status == EntryStatus.CANCELLED:
        return None
    return GridConflict(existing=existing, incoming=entry, row=row, column=column)


# ─── Aufbau ───────────────────────────────────────────────────────────────────

def build_grid(
    entries: list[ScheduleEntry],
    time_slots: list[TimeSlot],
    week: Optional[int] = None,
    view_mode: ViewMode = ViewMode.WEEK,
    policy: CollisionPolicy = CollisionPolicy.REJECT,
) -> GridResult:
    """Baut das Raster len(time_slots) × 7 für die gewählte Woche bzw. das Semester.

    REJECT: der erste Konflikt wird als GridConflict zurückgegeben.
    LAST_WINS: der spätere Eintrag überschreibt; jede Überschreibung steht in
    GridOk.overwritten.
    """
    slots = sorted(time_slots, key=lambda s: s.ordinal)
    cells = empty_cells(len(slots))
    overwritten: list[GridConflict] = []
    skipped: list[str] = []

    candidates = select_candidates(entries, view_mode, week)
    logger.debug(
        f"Raster ({view_mode.value}, Woche {week}): "
        f"{len(candidates)} von {len(entries)} Einträgen"
    )

    for entry in candidates:
        row = find_row(slots, entry.start)
        if row is None:
            logger.warning(f"Eintrag {entry.id}: kein Block beginnt um {entry.start} – übersprungen")
            skipped.append(entry.id)
            continue

        conflict = place_entry(cells, entry, row, entry.column)
        if conflict is None:
            continue
        if policy == CollisionPolicy.REJECT:
            logger.warning(f"Rasterkonflikt: {conflict.describe(slots)}")
            return conflict
        logger.warning(f"Rasterkonflikt (überschrieben): {conflict.describe(slots)}")
        overwritten.append(conflict)
        cells[row][entry.column] = entry

    grid = ScheduleGrid(
        time_slots=slots,
        cells=cells,
        view_mode=view_mode,
        week=week if view_mode == ViewMode.WEEK else None,
        skipped=skipped,
    )
    return GridOk(grid=grid, overwritten=overwritten)
