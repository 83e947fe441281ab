"""Excel-Export für Wochenraster und Eintragsliste (openpyxl)."""

from pathlib import Path

from config.defaults import CATEGORY_LABELS
from config.schema import ScheduleConfig
from models.schedule_entry import ScheduleEntry
from scheduling.grid import ScheduleGrid
from scheduling.weeks import describe_weeks

from export.helpers import (
    COLORS, entry_color, format_entry, grid_headers, legend_items,
    status_color, status_label, today_str, view_title,
)


class ExcelExporter:
    """Schreibt fertige Raster (je ein Blatt) plus eine Eintragsübersicht."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_BLOCK_W = 10
    COL_ZEIT_W  = 13
    COL_DAY_W   = 22

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_ENTRY_H  = 60

    def __init__(self, config: ScheduleConfig, entries: list[ScheduleEntry]):
        self.config  = config
        self.catalog = config.catalog
        self.entries = entries

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, grids: list[ScheduleGrid], output_path: Path) -> Path:
        """Erstellt die Excel-Datei: ein Blatt pro Raster, dann "Einträge"."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        for grid in grids:
            self._sheet_grid(wb, grid)
        self._sheet_entries(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _status_border(self, hex_color: str):
        """Dünner Rahmen, links dick in der Statusfarbe."""
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        mark = Side(border_style="thick", color=hex_color)
        return Border(left=mark, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str], row: int = 1) -> None:
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    # ─── Blätter ──────────────────────────────────────────────────────────────

    @staticmethod
    def sheet_name(grid: ScheduleGrid) -> str:
        return "Semester" if grid.week is None else f"Woche {grid.week}"

    def _sheet_grid(self, wb, grid: ScheduleGrid) -> None:
        """Raster: Block | Zeit | Mo..So, darunter Legende und Fußzeile."""
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(self.sheet_name(grid))
        ws.column_dimensions["A"].width = self.COL_BLOCK_W
        ws.column_dimensions["B"].width = self.COL_ZEIT_W
        for col in range(3, 10):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

        self._write_header_row(ws, grid_headers(self.config))
        border = self._thin_border()

        excel_row = 2
        for slot, cells in zip(grid.time_slots, grid.cells):
            c = ws.cell(row=excel_row, column=1, value=slot.label)
            c.font = Font(bold=True, size=9)
            c.alignment = self._center_align(wrap=False)
            c.border = border
            c = ws.cell(row=excel_row, column=2, value=f"{slot.start}–{slot.end}")
            c.font = Font(size=8)
            c.alignment = self._center_align(wrap=False)
            c.border = border

            for day, entry in enumerate(cells):
                content = format_entry(entry, self.catalog) if entry else ""
                c = ws.cell(row=excel_row, column=day + 3, value=content)
                c.fill = self._fill(entry_color(entry))
                c.alignment = self._center_align()
                c.border = self._status_border(status_color(entry)) if entry else border
                c.font = Font(size=8)
            ws.row_dimensions[excel_row].height = self.ROW_ENTRY_H
            excel_row += 1

        excel_row = self._write_legend(ws, excel_row + 1)
        footer = f"{view_title(grid, self.config)} | Stand: {today_str()}"
        ws.cell(row=excel_row + 1, column=1, value=footer).font = Font(italic=True, size=8)

    def _write_legend(self, ws, start_row: int) -> int:
        """Schreibt Farblegende; gibt nächste freie Zeile zurück."""
        from openpyxl.styles import Font
        ws.cell(row=start_row, column=1, value="Legende").font = Font(bold=True, size=9)
        row = start_row + 1
        for key, label in legend_items():
            ws.cell(row=row, column=1).fill = self._fill(COLORS[key])
            ws.cell(row=row, column=2, value=label).font = Font(size=8)
            row += 1
        return row

    def _sheet_entries(self, wb) -> None:
        """Alle Einträge als Liste, sortiert nach Tag und Beginn."""
        ws = wb.create_sheet("Einträge")
        headers = ["ID", "Kurs", "Klasse", "Tag", "Beginn", "Ende",
                   "Raum", "Wochen", "Kategorie", "Status"]
        self._write_header_row(ws, headers)
        day_names = self.config.grid.day_names
        n = self.config.semester.length

        ordered = sorted(self.entries, key=lambda e: (e.day_of_week, e.start, e.id))
        for row, e in enumerate(ordered, 2):
            course = self.catalog.get_course(e.course_id)
            cls = self.catalog.get_class(e.class_id)
            values = [
                e.id,
                course.name if course else e.course_id,
                cls.name if cls else e.class_id,
                day_names[e.column],
                e.start,
                e.end,
                e.room,
                describe_weeks(e.weeks, n),
                e.category or CATEGORY_LABELS["theory"],
                status_label(e),
            ]
            for col, value in enumerate(values, 1):
                ws.cell(row=row, column=col, value=value)

        for col, width in zip("ABCDEFGHIJ", [14, 30, 24, 6, 8, 8, 8, 34, 16, 14]):
            ws.column_dimensions[col].width = width
