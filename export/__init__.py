"""Export-Modul: Terminal (rich) und Excel (openpyxl) für das Wochenraster."""

from export.excel_export import ExcelExporter
from export.tui_renderer import cell_markup, render_grid_rows, render_grid_table

__all__ = ["ExcelExporter", "cell_markup", "render_grid_rows", "render_grid_table"]
