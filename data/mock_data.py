"""Beispieldaten für die Kursplanung.

Liefert vier feste Einträge (Wochen 1-16) für die Standard-Stammdaten und
optional weitere, per Seed reproduzierbare Zufallseinträge. Zufallseinträge
entstehen über create_entry() und dürfen sich im Raster überschneiden –
genau dafür sind sie da (Konfliktprüfung, Kollisionsverhalten).
"""

import random
from typing import Optional

from config.defaults import CATEGORY_LABELS, category_kind
from config.schema import ScheduleConfig
from models.schedule_entry import ScheduleDraft, ScheduleEntry
from models.week_set import WeekSet
from scheduling.entries import EntryContext, create_entry
from scheduling.weeks import WeekPattern, select_weeks

_CATEGORIES = ["Theorie", "Labor", "Rechnerübung", None]


class MockDataGenerator:
    """Erzeugt Beispiel-Einträge passend zu einer ScheduleConfig."""

    def __init__(self, config: ScheduleConfig, seed: Optional[int] = None) -> None:
        self.config = config
        self.rng = random.Random(seed)

    def _fixed_entries(self) -> list[ScheduleEntry]:
        semester = self.config.semester.name
        teacher = self.config.default_teacher_id
        weeks = WeekSet.range(1, min(16, self.config.semester.length))
        rows = [
            # id, Kurs, Klasse, Tag, Beginn, Ende, Raum, Kategorie
            ("schedule_001", "course_001", "class_001", 1, "08:00", "09:40", "A101", "Theorie"),
            ("schedule_002", "course_001", "class_001", 3, "14:00", "15:40", "B201", "Labor"),
            ("schedule_003", "course_003", "class_002", 2, "10:00", "11:40", "A102", None),
            ("schedule_004", "course_003", "class_002", 4, "14:00", "15:40", "B201", "Rechnerübung"),
        ]
        return [
            ScheduleEntry(
                id=entry_id, course_id=course, class_id=cls, teacher_id=teacher,
                day_of_week=day, start=start, end=end, room=room, weeks=weeks,
                semester=semester, category=category,
            )
            for entry_id, course, cls, day, start, end, room, category in rows
        ]

    def generate(self, extra: int = 0) -> list[ScheduleEntry]:
        """Feste Beispiel-Einträge plus `extra` Zufallseinträge."""
        entries = self._fixed_entries()
        catalog = self.config.catalog
        if extra <= 0 or not (catalog.courses and catalog.classes and catalog.classrooms):
            return entries

        context = EntryContext.from_config(self.config)
        # Zufallseinträge nur Mo-Fr
        for _ in range(extra):
            pattern = self.rng.choice(list(WeekPattern))
            draft = ScheduleDraft(
                course_id=self.rng.choice(catalog.courses).id,
                class_id=self.rng.choice(catalog.classes).id,
                day_of_week=self.rng.randint(1, 5),
                time_slot_id=self.rng.choice(catalog.time_slots).id,
                room=self.rng.choice(catalog.classrooms).name,
                weeks=select_weeks(pattern, self.config.semester.length),
                category=self.rng.choice(_CATEGORIES),
            )
            change = create_entry(entries, draft, context)
            if change.ok:
                entries = change.entries
        return entries

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    @staticmethod
    def category_counts(entries: list[ScheduleEntry]) -> dict[str, int]:
        """Anzahl Einträge je Darstellungsart (theory/lab/computer)."""
        counts = {kind: 0 for kind in CATEGORY_LABELS}
        for e in entries:
            counts[category_kind(e.category)] += 1
        return counts

    def print_summary(self, entries: list[ScheduleEntry]) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        catalog = self.config.catalog
        console = Console()
        table = Table(title="Beispieldaten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")

        table.add_row("Blöcke", str(len(catalog.time_slots)))
        table.add_row("Räume", str(len(catalog.classrooms)))
        table.add_row("Klassen", str(len(catalog.classes)))
        table.add_row("Kurse", str(len(catalog.courses)))
        table.add_row("Einträge", str(len(entries)))
        for kind, count in self.category_counts(entries).items():
            table.add_row(f"  davon {CATEGORY_LABELS[kind]}", str(count))

        console.print(table)
