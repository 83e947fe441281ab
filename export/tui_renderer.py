"""Renderer für die Terminal-Anzeige des Wochenrasters (rich).

Wird von den CLI-Befehlen show und add verwendet.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from rich.table import Table
    from scheduling.grid import ScheduleGrid
    from config.schema import ScheduleConfig
    from models.schedule_entry import ScheduleEntry

STATUS_MARKER = "●"


def render_grid_rows(
    grid: "ScheduleGrid",
    config: "ScheduleConfig",
) -> list[list[str]]:
    """Gibt Tabellenzeilen für das Raster zurück.

    Jede Zeile: [block_label, time_label, Mo, Di, Mi, Do, Fr, Sa, So]
    Freie Zellen werden als '—' dargestellt.
    """
    from export.helpers import format_entry

    rows: list[list[str]] = []
    for slot, cells in zip(grid.time_slots, grid.cells):
        row = [slot.label, f"{slot.start}–{slot.end}"]
        for entry in cells:
            row.append("—" if entry is None else format_entry(entry, config.catalog))
        rows.append(row)
    return rows


def cell_markup(entry: Optional["ScheduleEntry"], text: str) -> str:
    """Rich-Markup einer Zelle: Statuspunkt in Statusfarbe, Text in Kategoriefarbe."""
    from rich.markup import escape
    from export.helpers import RICH_STYLES, category_kind

    if entry is None:
        return f"[dim]{text}[/dim]"
    status = RICH_STYLES[entry.status.value]
    style = RICH_STYLES[category_kind(entry.category)]
    return f"[{status}]{STATUS_MARKER}[/{status}] [{style}]{escape(text)}[/{style}]"


def render_grid_table(
    grid: "ScheduleGrid",
    config: "ScheduleConfig",
) -> "Table":
    """Baut eine rich-Tabelle; Zellen werden nach Kategorie eingefärbt."""
    from rich.table import Table
    from rich import box
    from export.helpers import grid_headers, view_title

    table = Table(title=view_title(grid, config), box=box.ROUNDED, show_lines=True)
    for i, header in enumerate(grid_headers(config)):
        table.add_column(header, style="bold" if i == 0 else None, no_wrap=i < 2)

    for cells, row in zip(grid.cells, render_grid_rows(grid, config)):
        styled = row[:2]
        for entry, text in zip(cells, row[2:]):
            styled.append(cell_markup(entry, text))
        table.add_row(*styled)
    return table
