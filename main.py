"""Kursplan — Haupt-CLI.

Verwendung:
  python main.py setup                    Ersteinrichtung (Wizard)
  python main.py setup --defaults         Standard-Konfiguration ohne Rückfragen
  python main.py config show              Konfiguration anzeigen
  python main.py weeks odd                Stapelauswahl von Wochen anzeigen
  python main.py show --week 5            Wochenraster der Beispieldaten
  python main.py show --semester          Raster über das gesamte Semester
  python main.py check                    Konfliktprüfung
  python main.py add                      Eintrag interaktiv anlegen
  python main.py export -w 1 -w 2         Raster als Excel exportieren
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

console = Console()


def _load_config_or_abort():
    """Lädt die Konfiguration oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    if mgr.first_run_check():
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]python main.py setup[/bold] aus."
        )
        sys.exit(1)
    try:
        return mgr, mgr.load()
    except ValueError as e:
        console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{e}")
        sys.exit(1)


def _load_entries(config, extra: int, seed: int):
    from data.mock_data import MockDataGenerator
    return MockDataGenerator(config, seed=seed).generate(extra=extra)


def _default_view(config) -> tuple[Optional[int], bool]:
    """(Woche, Semesteransicht) gemäß grid.default_view, wenn nichts angegeben ist."""
    from config.schema import ViewMode
    if config.grid.default_view == ViewMode.SEMESTER:
        return None, True
    return 1, False


def _check_week(config, week: int) -> None:
    if not 1 <= week <= config.semester.length:
        console.print(
            f"[red]Woche {week} liegt außerhalb des Semesters "
            f"(1..{config.semester.length}).[/red]"
        )
        sys.exit(1)


def _build_or_abort(entries, config, week: Optional[int], semester: bool, policy: Optional[str] = None):
    """Baut das Raster; bei Kollision (Policy reject) Abbruch mit Meldung."""
    from config.schema import CollisionPolicy, ViewMode
    from scheduling.grid import GridConflict, build_grid

    view = ViewMode.SEMESTER if semester else ViewMode.WEEK
    result = build_grid(
        entries,
        config.catalog.time_slots,
        week=week,
        view_mode=view,
        policy=CollisionPolicy(policy) if policy else config.grid.collision_policy,
    )
    if isinstance(result, GridConflict):
        console.print(
            "[red bold]Rasterkonflikt:[/red bold] "
            f"{result.describe(config.catalog.ordered_slots)}\n"
            "[dim]Mit --policy last_wins wird der spätere Eintrag angezeigt.[/dim]"
        )
        sys.exit(1)
    for conflict in result.overwritten:
        console.print(
            f"[yellow]⚠  überschrieben:[/yellow] {conflict.describe(config.catalog.ordered_slots)}"
        )
    if result.grid.skipped:
        console.print(
            f"[yellow]⚠  ohne passenden Block:[/yellow] {', '.join(result.grid.skipped)}"
        )
    return result.grid


# Gemeinsame Optionen für Beispieldaten
_extra_option = click.option("--extra", default=0, show_default=True,
                             help="Zusätzliche Zufallseinträge zu den Beispieldaten.")
_seed_option = click.option("--seed", default=42, show_default=True,
                            help="Zufalls-Seed für reproduzierbare Beispieldaten.")


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.option("--defaults", "use_defaults", is_flag=True, default=False,
              help="Standard-Konfiguration ohne Rückfragen schreiben.")
def cmd_setup(use_defaults: bool):
    """Ersteinrichtung: Konfiguration anlegen."""
    from config.manager import ConfigManager
    from config.defaults import default_schedule_config

    mgr = ConfigManager()
    if not mgr.first_run_check() and not use_defaults:
        console.print("[yellow]Eine Konfiguration existiert bereits.[/yellow]")
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    if use_defaults:
        config = default_schedule_config()
    else:
        from config.wizard import run_wizard
        config = run_wizard()
    if config is not None:
        mgr.save(config)
        console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
        console.print("Führen Sie jetzt [bold]python main.py show --week 1[/bold] aus.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    from config.wizard import _show_rooms_table, _show_time_slots_table

    mgr, config = _load_config_or_abort()
    sem = config.semester
    console.print(Panel(
        f"[bold]{config.institution}[/bold]  |  {sem.name} ({sem.academic_year})  |  "
        f"{sem.length} Wochen",
        title="Kursplan-Konfiguration",
        border_style="cyan",
    ))
    _show_time_slots_table(config.catalog.time_slots)
    _show_rooms_table(config.catalog)
    console.print(
        f"\n[bold]Klassen:[/bold] {len(config.catalog.classes)} | "
        f"[bold]Kurse:[/bold] {len(config.catalog.courses)} | "
        f"[bold]Kollisionen:[/bold] {config.grid.collision_policy.value}"
    )


# ─── WEEKS ────────────────────────────────────────────────────────────────────

@click.command("weeks")
@click.argument("pattern", type=click.Choice(["all", "odd", "even", "first-half", "second-half"]))
@click.option("--length", "-n", type=click.IntRange(min=0), default=None,
              help="Semesterlänge (Standard: aus Konfiguration bzw. 20).")
def cmd_weeks(pattern: str, length: Optional[int]):
    """Zeigt die Wochen einer Stapelauswahl (z.B. odd, first-half)."""
    from config.manager import ConfigManager
    from scheduling.weeks import describe_weeks, select_weeks

    if length is None:
        mgr = ConfigManager()
        if mgr.first_run_check():
            length = 20
        else:
            try:
                length = mgr.load().semester.length
            except ValueError as e:
                console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{e}")
                sys.exit(1)
    weeks = select_weeks(pattern, length)
    console.print(f"[bold]{pattern}[/bold] (n={length}): {describe_weeks(weeks, length)}")
    console.print(" ".join(str(w) for w in weeks) or "—")


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.option("--week", "-w", type=int, default=None,
              help="Anzuzeigende Semesterwoche (Standard: grid.default_view bzw. Woche 1).")
@click.option("--semester", is_flag=True, default=False,
              help="Alle Einträge unabhängig von der Woche anzeigen.")
@click.option("--class-id", default=None, help="Nur Einträge dieser Klasse.")
@click.option("--policy", type=click.Choice(["reject", "last_wins"]), default=None,
              help="Kollisionsverhalten (Standard: aus Konfiguration).")
@_extra_option
@_seed_option
def cmd_show(week: Optional[int], semester: bool, class_id: Optional[str], policy: Optional[str],
             extra: int, seed: int):
    """Zeigt das Wochenraster der Beispieldaten."""
    from export.tui_renderer import render_grid_table

    mgr, config = _load_config_or_abort()
    if week is None and not semester:
        week, semester = _default_view(config)
    if not semester:
        _check_week(config, week)
    entries = _load_entries(config, extra, seed)
    if class_id:
        entries = [e for e in entries if e.class_id == class_id]

    grid = _build_or_abort(entries, config, None if semester else week, semester, policy)
    console.print(render_grid_table(grid, config))


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@_extra_option
@_seed_option
def cmd_check(extra: int, seed: int):
    """Prüft die Beispieldaten auf Doppelbelegungen."""
    from analysis.conflict_check import ScheduleValidator
    from data.mock_data import MockDataGenerator

    mgr, config = _load_config_or_abort()
    generator = MockDataGenerator(config, seed=seed)
    entries = generator.generate(extra=extra)
    generator.print_summary(entries)
    report = ScheduleValidator(config.catalog).validate(entries)
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


# ─── ADD ──────────────────────────────────────────────────────────────────────

def _prompt_step(flow, cfg) -> None:
    """Fragt die Felder des aktuellen Schritts ab."""
    from rich.prompt import IntPrompt, Prompt
    from scheduling.draft_flow import DraftState
    from scheduling.weeks import WeekPattern, format_weeks, parse_weeks

    if flow.state == DraftState.SELECT_COURSE:
        for c in cfg.catalog.courses:
            console.print(f"  [bold]{c.id}[/bold]  {c.name}")
        course_id = Prompt.ask("Kurs", default=flow.draft.course_id or None)
        for c in cfg.catalog.classes:
            console.print(f"  [bold]{c.id}[/bold]  {c.name} ({c.student_count} Pers.)")
        class_id = Prompt.ask("Klasse", default=flow.draft.class_id or None)
        flow.update(course_id=course_id or "", class_id=class_id or "")
    elif flow.state == DraftState.SELECT_TIME:
        day = IntPrompt.ask("Wochentag (1=Mo .. 7=So)", default=flow.draft.day_of_week)
        for s in cfg.catalog.ordered_slots:
            console.print(f"  [bold]{s.id}[/bold]  {s}")
        slot_id = Prompt.ask("Block", default=flow.draft.time_slot_id)
        rooms = [r.name for r in cfg.catalog.classrooms]
        room = Prompt.ask("Raum", choices=rooms or None, default=flow.draft.room or None)
        flow.update(day_of_week=day, time_slot_id=slot_id, room=room or "")
    elif flow.state == DraftState.SELECT_WEEKS:
        patterns = [p.value for p in WeekPattern]
        choice = Prompt.ask(
            "Wochen: Muster oder Einzelwochen (z.B. 1,3,5-8)",
            default="all",
        )
        if choice in patterns:
            flow.apply_pattern(choice)
        else:
            flow.update(weeks=parse_weeks(choice, flow.context.semester_length))
        console.print(f"  gewählt: {format_weeks(flow.draft.weeks)}")
        category = Prompt.ask("Kategorie (z.B. Theorie, Labor)", default="")
        flow.update(category=category or None)


@click.command("add")
@_seed_option
def cmd_add(seed: int):
    """Legt interaktiv einen Eintrag an und zeigt das Ergebnis im Raster.

    Die Beispieldaten werden nicht gespeichert.
    """
    from rich.prompt import Confirm
    from scheduling.draft_flow import DraftFlow, DraftState
    from scheduling.entries import EntryContext
    from scheduling.weeks import describe_weeks
    from export.tui_renderer import render_grid_table

    mgr, config = _load_config_or_abort()
    entries = _load_entries(config, 0, seed)
    flow = DraftFlow(EntryContext.from_config(config))

    while flow.is_open:
        if flow.state == DraftState.CONFIRM:
            d = flow.draft
            console.print(Panel(
                f"Kurs {d.course_id} | Klasse {d.class_id} | Tag {d.day_of_week} | "
                f"Block {d.time_slot_id} | Raum {d.room}\n"
                f"Wochen: {describe_weeks(d.weeks, config.semester.length)}",
                title="Zusammenfassung", border_style="cyan",
            ))
            if not Confirm.ask("Eintrag anlegen?", default=True):
                flow.cancel()
                break
            change = flow.submit(entries)
            if not change.ok:
                for field, msg in change.errors.items():
                    console.print(f"[red]• {field}: {msg}[/red]")
                flow.back()
                continue
            entries = change.entries
            break

        _prompt_step(flow, config)
        if not flow.advance():
            for field, msg in flow.errors.items():
                console.print(f"[red]• {field}: {msg}[/red]")

    if flow.state != DraftState.DONE:
        console.print("[yellow]Abgebrochen.[/yellow]")
        return

    created = flow.created
    console.print(f"[green]✓[/green] Eintrag {created.id} angelegt (nicht gespeichert).")
    grid = _build_or_abort(entries, config, created.weeks.first, False, "last_wins")
    console.print(render_grid_table(grid, config))


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.option("--week", "-w", "weeks", type=int, multiple=True,
              help="Woche(n) für je ein Rasterblatt (mehrfach angebbar).")
@click.option("--semester", is_flag=True, default=False,
              help="Zusätzlich ein Blatt mit dem gesamten Semester.")
@click.option("--output", "-o", default="output/kursplan.xlsx", show_default=True,
              help="Ausgabepfad der Excel-Datei.")
@click.option("--policy", type=click.Choice(["reject", "last_wins"]), default=None,
              help="Kollisionsverhalten (Standard: aus Konfiguration).")
@_extra_option
@_seed_option
def cmd_export(weeks: tuple[int, ...], semester: bool, output: str, policy: Optional[str],
               extra: int, seed: int):
    """Exportiert Wochenraster und Eintragsliste als Excel-Datei."""
    from export.excel_export import ExcelExporter

    mgr, config = _load_config_or_abort()
    entries = _load_entries(config, extra, seed)
    selected = sorted(set(weeks))
    if not selected and not semester:
        week, semester = _default_view(config)
        selected = [] if week is None else [week]
    for w in selected:
        _check_week(config, w)

    grids = [_build_or_abort(entries, config, w, False, policy) for w in selected]
    if semester:
        grids.append(_build_or_abort(entries, config, None, True, policy))

    path = ExcelExporter(config, entries).export(grids, Path(output))
    console.print(f"[green]✓[/green] Excel gespeichert: {path} ({len(grids)} Raster)")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliche Log-Ausgabe.")
def cli(verbose: bool):
    """Kursplan: wiederkehrende Wochenplanung für Kurse und Labore.

    Starten Sie mit: python main.py setup
    """
    if verbose:
        from rich.logging import RichHandler
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_weeks)
cli.add_command(cmd_show)
cli.add_command(cmd_check)
cli.add_command(cmd_add)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()
