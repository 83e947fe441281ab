"""Datenmodell für einen festen Tagesabschnitt (Unterrichtsblock) im Wochenraster."""

import re

from pydantic import BaseModel, field_validator, model_validator

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def check_hhmm(value: str) -> str:
    """Prüft eine Uhrzeit im Format "HH:MM" und gibt sie unverändert zurück."""
    if not _HHMM.match(value):
        raise ValueError(f"Ungültige Uhrzeit '{value}' (erwartet HH:MM)")
    return value


def is_hhmm(value: str) -> bool:
    return bool(value) and bool(_HHMM.match(value))


class TimeSlot(BaseModel):
    """Ein fester Unterrichtsblock, gültig für alle Wochentage.

    Zeiten sind lokale Wanduhr-Zeiten ("HH:MM"). Da sie immer zweistellig
    sind, reicht ein String-Vergleich für die Reihenfolge.
    """

    id: str          # "1".."10"
    label: str       # "1. Block"
    start: str       # "08:00"
    end: str         # "08:45"
    ordinal: int     # Zeilenposition im Raster

    @field_validator("start", "end")
    @classmethod
    def _check_time(cls, v: str) -> str:
        return check_hhmm(v)

    @model_validator(mode="after")
    def _check_order(self):
        if self.start >= self.end:
            raise ValueError(
                f"Block {self.id}: Beginn ({self.start}) muss vor Ende ({self.end}) liegen"
            )
        return self

    def __str__(self) -> str:
        return f"{self.label} ({self.start}–{self.end})"
