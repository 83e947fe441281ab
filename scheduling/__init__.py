"""Kern der Kursplanung: Wochenauswahl, Einträge, Wochenraster."""

from .weeks import (
    WeekPattern,
    clear,
    select_all,
    select_even,
    select_first_half,
    select_odd,
    select_second_half,
    select_weeks,
    toggle,
)
from .entries import (
    CreateEntry,
    DeleteEntry,
    EntryContext,
    ScheduleChange,
    UpdateEntry,
    apply_action,
    create_entry,
    delete_entry,
    update_entry,
)
from .grid import GridConflict, GridOk, ScheduleGrid, build_grid
from .draft_flow import DraftFlow, DraftState, FlowError

__all__ = [
    "WeekPattern",
    "clear",
    "select_all",
    "select_even",
    "select_first_half",
    "select_odd",
    "select_second_half",
    "select_weeks",
    "toggle",
    "CreateEntry",
    "DeleteEntry",
    "EntryContext",
    "ScheduleChange",
    "UpdateEntry",
    "apply_action",
    "create_entry",
    "delete_entry",
    "update_entry",
    "GridConflict",
    "GridOk",
    "ScheduleGrid",
    "build_grid",
    "DraftFlow",
    "DraftState",
    "FlowError",
]
