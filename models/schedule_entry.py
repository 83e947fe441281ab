"""Datenmodell für einen wiederkehrenden Stundenplan-Eintrag (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from models.timeslot import check_hhmm
from models.week_set import WeekSet


class EntryStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ScheduleEntry(BaseModel):
    """Eine wiederkehrende Platzierung: Wochentag + Block + Raum + Wochen.

    Gültige Einträge entstehen über scheduling.entries.create_entry(); direkt
    konstruierte Instanzen werden trotzdem auf die Grundregeln geprüft.
    """

    id: str
    course_id: str
    class_id: str
    teacher_id: str
    day_of_week: int = Field(ge=1, le=7)   # 1=Mo .. 7=So
    start: str                              # "HH:MM"
    end: str                                # "HH:MM"
    room: str                               # Classroom.name
    weeks: WeekSet
    semester: str = ""
    status: EntryStatus = EntryStatus.ACTIVE
    category: Optional[str] = None          # "Theorie", "Labor", ...

    @field_validator("start", "end")
    @classmethod
    def _check_time(cls, v: str) -> str:
        return check_hhmm(v)

    @model_validator(mode="after")
    def _check_invariants(self):
        if self.start >= self.end:
            raise ValueError(f"Eintrag {self.id}: Beginn muss vor Ende liegen")
        if self.status == EntryStatus.ACTIVE and not self.weeks:
            raise ValueError(f"Eintrag {self.id}: aktiver Eintrag ohne Wochen")
        return self

    @property
    def column(self) -> int:
        """Spaltenindex im Wochenraster (0=Mo .. 6=So)."""
        return self.day_of_week - 1

    def is_active_in_week(self, week: int) -> bool:
        return week in self.weeks


class ScheduleDraft(BaseModel):
    """Eingabe für das Anlegen eines Eintrags. Felder dürfen noch leer sein.

    Ist time_slot_id gesetzt, werden start/end aus dem Zeitraster übernommen.
    """

    course_id: str = ""
    class_id: str = ""
    day_of_week: int = 1
    time_slot_id: Optional[str] = None
    start: str = ""
    end: str = ""
    room: str = ""
    weeks: WeekSet = Field(default_factory=WeekSet)
    category: Optional[str] = None
    teacher_id: Optional[str] = None


class SchedulePatch(BaseModel):
    """Änderbare Felder eines bestehenden Eintrags. None = unverändert."""

    day_of_week: Optional[int] = None
    start: Optional[str] = None
    end: Optional[str] = None
    room: Optional[str] = None
    weeks: Optional[WeekSet] = None
    status: Optional[EntryStatus] = None
    category: Optional[str] = None

    def touched(self) -> dict:
        """Nur die tatsächlich gesetzten Felder."""
        return {k: getattr(self, k) for k in self.model_fields_set if getattr(self, k) is not None}
