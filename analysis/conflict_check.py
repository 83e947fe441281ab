"""Konfliktprüfung für Stundenplan-Einträge.

Meldet Doppelbelegungen (Raum, Klasse, Lehrkraft) zwischen Einträgen, die
am selben Wochentag liegen, sich zeitlich überschneiden und mindestens eine
gemeinsame Woche haben. Die Prüfung löst nichts auf, sie berichtet nur.
"""

from itertools import combinations
from typing import Literal

from pydantic import BaseModel

from config.schema import CatalogConfig
from models.room import RoomStatus
from models.schedule_entry import EntryStatus, ScheduleEntry
from scheduling.grid import find_row
from scheduling.weeks import format_weeks


class ValidationViolation(BaseModel):
    """Ein einzelner Befund."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "room_double_booking"
    description: str
    entity: str          # Raumname / class_id / teacher_id / entry_id


class ValidationReport(BaseModel):
    """Ergebnis der Konfliktprüfung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    @property
    def errors(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "error"]

    @property
    def warnings(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "warning"]

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ KONFLIKTFREI[/bold green]"
            if self.is_valid
            else "[bold red]✗ KONFLIKTE GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(self.errors)} | Warnungen: {len(self.warnings)}"]
        console.print(Panel("\n".join(lines), title="Konfliktprüfung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Befunde.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Prüfung", width=24)
        table.add_column("Betrifft", width=14)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


def entries_overlap(a: ScheduleEntry, b: ScheduleEntry) -> bool:
    """Gleicher Tag, überlappende Uhrzeit, mindestens eine gemeinsame Woche."""
    if a.day_of_week != b.day_of_week:
        return False
    if not (a.start < b.end and b.start < a.end):
        return False
    return not a.weeks.isdisjoint(b.weeks)


class ScheduleValidator:
    """Prüft eine Eintragsliste gegen sich selbst und gegen die Stammdaten."""

    def __init__(self, catalog: CatalogConfig) -> None:
        self.catalog = catalog

    def validate(self, entries: list[ScheduleEntry]) -> ValidationReport:
        """Führt alle Prüfungen durch und gibt einen ValidationReport zurück."""
        # Abgesagte Einträge belegen nichts
        live = [e for e in entries if e.status != EntryStatus.CANCELLED]
        violations: list[ValidationViolation] = []

        violations.extend(self._check_double_booking(live))
        violations.extend(self._check_unplaceable(entries))
        violations.extend(self._check_rooms(live))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_double_booking(
        self, entries: list[ScheduleEntry]
    ) -> list[ValidationViolation]:
        """Raum, Klasse und Lehrkraft dürfen nicht gleichzeitig doppelt belegt sein."""
        violations: list[ValidationViolation] = []
        checks = [
            ("room_double_booking", "room", "Raum"),
            ("class_double_booking", "class_id", "Klasse"),
            ("teacher_double_booking", "teacher_id", "Lehrkraft"),
        ]
        for a, b in combinations(entries, 2):
            if not entries_overlap(a, b):
                continue
            shared = format_weeks(a.weeks & b.weeks)
            for constraint, attr, label in checks:
                value = getattr(a, attr)
                if value != getattr(b, attr):
                    continue
                violations.append(ValidationViolation(
                    severity="error",
                    constraint=constraint,
                    entity=value,
                    description=(
                        f"{label} {value}: {a.id} und {b.id} am Tag {a.day_of_week} "
                        f"({a.start}-{a.end} / {b.start}-{b.end}) in Woche(n) {shared}."
                    ),
                ))
        return violations

    def _check_unplaceable(
        self, entries: list[ScheduleEntry]
    ) -> list[ValidationViolation]:
        """Einträge ohne passenden Block erscheinen nicht im Raster."""
        violations: list[ValidationViolation] = []
        for e in entries:
            if find_row(self.catalog.time_slots, e.start) is None:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="no_matching_time_slot",
                    entity=e.id,
                    description=f"Kein Block beginnt um {e.start}; Eintrag fehlt im Raster.",
                ))
        return violations

    def _check_rooms(
        self, entries: list[ScheduleEntry]
    ) -> list[ValidationViolation]:
        """Raum bekannt, nicht in Wartung und groß genug für die Klasse."""
        violations: list[ValidationViolation] = []
        for e in entries:
            room = self.catalog.get_room(e.room)
            if room is None:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="unknown_room",
                    entity=e.room,
                    description=f"{e.id}: Raum '{e.room}' ist nicht in den Stammdaten.",
                ))
                continue
            if room.status == RoomStatus.MAINTENANCE:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="room_maintenance",
                    entity=room.name,
                    description=f"{e.id}: Raum {room.name} ist in Wartung.",
                ))
            cls = self.catalog.get_class(e.class_id)
            if cls and room.capacity and cls.student_count > room.capacity:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="room_capacity",
                    entity=room.name,
                    description=(
                        f"{e.id}: {cls.name} hat {cls.student_count} Personen, "
                        f"Raum {room.name} nur {room.capacity} Plätze."
                    ),
                ))
        return violations
