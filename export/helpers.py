"""Gemeinsame Hilfsfunktionen für Terminal- und Excel-Ausgabe."""

from datetime import date
from typing import Optional

from config.defaults import CATEGORY_LABELS, STATUS_LABELS, category_kind
from config.schema import CatalogConfig, ScheduleConfig, ViewMode
from models.schedule_entry import ScheduleEntry
from scheduling.grid import ScheduleGrid

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "theory":    "DBEAFE",
    "lab":       "DCFCE7",
    "computer":  "F3E8FF",
    "free":      "F5F5F5",
    "header":    "4472C4",
    "active":    "22C55E",
    "cancelled": "EF4444",
    "completed": "6B7280",
}

# Rich-Stile für dieselben Kategorien
RICH_STYLES: dict[str, str] = {
    "theory": "blue",
    "lab": "green",
    "computer": "magenta",
    "active": "green",
    "cancelled": "red",
    "completed": "bright_black",
}


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


# ─── Kategorie & Status ───────────────────────────────────────────────────────

def entry_color(entry: Optional[ScheduleEntry]) -> str:
    if entry is None:
        return COLORS["free"]
    return COLORS[category_kind(entry.category)]


def status_label(entry: ScheduleEntry) -> str:
    return STATUS_LABELS.get(entry.status.value, entry.status.value)


def status_color(entry: ScheduleEntry) -> str:
    """Statusfarbe (aktiv/abgesagt/abgeschlossen) für Markierung und Rahmen."""
    return COLORS[entry.status.value]


# ─── Zelleninhalt-Formatierung ────────────────────────────────────────────────

def format_entry(entry: ScheduleEntry, catalog: CatalogConfig) -> str:
    """Formatiert einen Eintrag als Zelleninhalt: Kurs, Klasse, Raum, Kategorie.

    Unbekannte Kurse/Klassen werden mit ihrer ID angezeigt.
    """
    course = catalog.get_course(entry.course_id)
    cls = catalog.get_class(entry.class_id)
    lines = [
        course.name if course else entry.course_id,
        cls.name if cls else entry.class_id,
        entry.room,
    ]
    if entry.category:
        lines.append(entry.category)
    if entry.status.value != "active":
        lines.append(f"[{status_label(entry)}]")
    return "\n".join(lines)


# ─── Raster-Beschriftung ──────────────────────────────────────────────────────

def grid_headers(config: ScheduleConfig) -> list[str]:
    return ["Block", "Zeit"] + list(config.grid.day_names)


def view_title(grid: ScheduleGrid, config: ScheduleConfig) -> str:
    """z.B. "2024 Frühjahr – Woche 5 von 20" oder "… – gesamtes Semester"."""
    semester = config.semester
    if grid.view_mode == ViewMode.SEMESTER:
        return f"{semester.name} – gesamtes Semester"
    return f"{semester.name} – Woche {grid.week} von {semester.length}"


def legend_items() -> list[tuple[str, str]]:
    """(Farbschlüssel, Beschriftung) für Kategorien und Status."""
    items = [(kind, label) for kind, label in CATEGORY_LABELS.items()]
    items += [(status, label) for status, label in STATUS_LABELS.items()]
    return items
