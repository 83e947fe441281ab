"""Interaktiver Setup-Wizard für die Ersteinrichtung der Kursplanung.

Führt den Nutzer Schritt für Schritt durch Semester, Zeitraster und Raster-Optionen.
Nutzt rich für schöne Konsolenausgabe.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich import box

from config.schema import (
    CatalogConfig,
    CollisionPolicy,
    GridConfig,
    ScheduleConfig,
    SemesterConfig,
    ViewMode,
)
from config.defaults import default_catalog
from models.timeslot import TimeSlot

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _info(text: str) -> None:
    console.print(f"[dim]{text}[/dim]")


def _success(text: str) -> None:
    console.print(f"[green]✓[/green] {text}")


def _show_time_slots_table(slots: list[TimeSlot]) -> None:
    """Zeigt das Zeitraster als rich-Tabelle an."""
    table = Table(title="Zeitraster", box=box.ROUNDED)
    table.add_column("Nr.", style="bold", width=5)
    table.add_column("Bezeichnung")
    table.add_column("Beginn", width=8)
    table.add_column("Ende", width=8)
    for slot in sorted(slots, key=lambda s: s.ordinal):
        table.add_row(str(slot.ordinal), slot.label, slot.start, slot.end)
    console.print(table)


def _show_rooms_table(catalog: CatalogConfig) -> None:
    """Zeigt die Räume als Tabelle an."""
    table = Table(title="Räume", box=box.ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("Gebäude")
    table.add_column("Typ")
    table.add_column("Plätze")
    for r in catalog.classrooms:
        table.add_row(r.name, r.building, r.room_type.value, str(r.capacity))
    console.print(table)


# ─── SCHRITT 1: Semester ───

def _wizard_semester() -> tuple[str, SemesterConfig]:
    _header("Schritt 1 — Semester")
    _info("Bitte geben Sie die Semesterdaten ein.")

    institution = Prompt.ask("Name der Einrichtung", default="Muster-Hochschule")
    name = Prompt.ask("Bezeichnung des Semesters", default="2024 Frühjahr")
    year = Prompt.ask("Studienjahr", default="2023-2024")
    while True:
        length = IntPrompt.ask("Anzahl Semesterwochen", default=20)
        if 1 <= length <= 30:
            break
        console.print("[yellow]Bitte einen Wert zwischen 1 und 30 eingeben.[/yellow]")
    return institution, SemesterConfig(name=name, academic_year=year, length=length)


# ─── SCHRITT 2: Stammdaten ───

def _wizard_catalog() -> CatalogConfig:
    _header("Schritt 2 — Zeitraster & Räume")
    catalog = default_catalog()
    _show_time_slots_table(catalog.time_slots)
    _show_rooms_table(catalog)
    _info("Weitere Blöcke, Räume und Klassen können direkt in der YAML-Datei ergänzt werden.")
    _success("Standard-Stammdaten übernommen.")
    return catalog


# ─── SCHRITT 3: Wochenraster ───

def _wizard_grid() -> GridConfig:
    _header("Schritt 3 — Wochenraster")
    _info("Was soll passieren, wenn zwei Einträge dieselbe Zelle belegen?")
    console.print("  [1] Konflikt melden (empfohlen)  [2] Späterer Eintrag überschreibt")
    choice = Prompt.ask("Auswahl", choices=["1", "2"], default="1")
    policy = CollisionPolicy.REJECT if choice == "1" else CollisionPolicy.LAST_WINS
    view = Prompt.ask("Standardansicht", choices=[v.value for v in ViewMode], default="week")
    return GridConfig(collision_policy=policy, default_view=ViewMode(view))


def run_wizard() -> Optional[ScheduleConfig]:
    """Startet den vollständigen Setup-Wizard. Gibt None bei Abbruch zurück."""
    console.print(Panel(
        "[bold]Willkommen bei Kursplan![/bold]\n\n"
        "Der Wizard legt Semester, Zeitraster und Raster-Optionen an.",
        border_style="cyan",
    ))

    institution, semester = _wizard_semester()
    catalog = _wizard_catalog()
    grid = _wizard_grid()

    config = ScheduleConfig(
        institution=institution,
        semester=semester,
        catalog=catalog,
        grid=grid,
    )

    _header("Zusammenfassung")
    console.print(
        f"{config.institution} | {semester.name} ({semester.academic_year}) | "
        f"{semester.length} Wochen | {len(catalog.time_slots)} Blöcke | "
        f"Kollisionen: {grid.collision_policy.value}"
    )
    if not Confirm.ask("Konfiguration speichern?", default=True):
        console.print("[yellow]Abgebrochen.[/yellow]")
        return None
    return config
