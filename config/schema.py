from pydantic import BaseModel, Field, model_validator
from enum import Enum

from models.timeslot import TimeSlot
from models.room import Classroom
from models.school_class import ClassInfo
from models.course import Course


class CollisionPolicy(str, Enum):
    """Verhalten, wenn zwei Einträge dieselbe Rasterzelle belegen."""
    REJECT = "reject"          # Aufbau abbrechen, GridConflict zurückgeben
    LAST_WINS = "last_wins"    # Späterer Eintrag überschreibt (wird protokolliert)


class ViewMode(str, Enum):
    WEEK = "week"
    SEMESTER = "semester"


# ─── SEMESTER ───

class SemesterConfig(BaseModel):
    """Stammdaten des Semesters."""
    # Anzeigename, z.B. "2024 Frühjahr"
    name: str = Field("2024 Frühjahr", description="Bezeichnung des Semesters")
    # Studienjahr, z.B. "2023-2024"
    academic_year: str = Field("2023-2024", description="Studienjahr")
    # Anzahl Semesterwochen (Wochen 1..length)
    length: int = Field(20, ge=1, le=30,
        description="Anzahl Semesterwochen")


# ─── KATALOGE ───

class CatalogConfig(BaseModel):
    """Von außen gelieferte Stammdaten-Listen (nur lesend genutzt)."""
    # Feste Tagesblöcke, gültig für alle Wochentage
    time_slots: list[TimeSlot] = Field(
        description="Tagesblöcke mit Uhrzeiten")
    # Verfügbare Räume
    classrooms: list[Classroom] = Field(default_factory=list,
        description="Räume")
    # Klassen / Studiengruppen
    classes: list[ClassInfo] = Field(default_factory=list,
        description="Klassen")
    # Planbare Kurse
    courses: list[Course] = Field(default_factory=list,
        description="Kurse")

    @model_validator(mode='after')
    def validate_catalog(self):
        """Prüfe eindeutige Block-IDs, eindeutige Ordnungszahlen und Raumnamen."""
        ids = [s.id for s in self.time_slots]
        if len(ids) != len(set(ids)):
            raise ValueError("Block-IDs im Zeitraster sind nicht eindeutig")
        ordinals = [s.ordinal for s in self.time_slots]
        if len(ordinals) != len(set(ordinals)):
            raise ValueError("Ordnungszahlen im Zeitraster sind nicht eindeutig")
        names = [r.name for r in self.classrooms]
        if len(names) != len(set(names)):
            raise ValueError("Raumnamen sind nicht eindeutig")
        return self

    @property
    def ordered_slots(self) -> list[TimeSlot]:
        """Zeitraster nach Ordnungszahl sortiert."""
        return sorted(self.time_slots, key=lambda s: s.ordinal)

    def get_slot(self, slot_id: str) -> TimeSlot | None:
        return next((s for s in self.time_slots if s.id == slot_id), None)

    def get_course(self, course_id: str) -> Course | None:
        return next((c for c in self.courses if c.id == course_id), None)

    def get_class(self, class_id: str) -> ClassInfo | None:
        return next((c for c in self.classes if c.id == class_id), None)

    def get_room(self, name: str) -> Classroom | None:
        return next((r for r in self.classrooms if r.name == name), None)


# ─── RASTER ───

class GridConfig(BaseModel):
    """Darstellung und Kollisionsverhalten des Wochenrasters."""
    # Namen der sieben Wochentage (Spalten 0..6)
    day_names: list[str] = Field(
        default=["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"],
        min_length=7, max_length=7,
        description="Namen der Wochentage")
    # Umgang mit doppelt belegten Zellen
    collision_policy: CollisionPolicy = Field(CollisionPolicy.REJECT,
        description="reject = Konflikt melden, last_wins = überschreiben")
    # Ansicht beim Start
    default_view: ViewMode = Field(ViewMode.WEEK,
        description="Standardansicht (week/semester)")


# ─── GESAMT-CONFIG ───

class ScheduleConfig(BaseModel):
    """Gesamtkonfiguration der Kursplanung."""
    # Name der Einrichtung
    institution: str = Field("Muster-Hochschule",
        description="Name der Einrichtung")
    # Lehrkraft, der neue Einträge zugeordnet werden
    default_teacher_id: str = Field("teacher_001",
        description="Lehrkraft für neue Einträge")
    # Semester-Stammdaten
    semester: SemesterConfig = Field(default_factory=SemesterConfig)
    # Zeitraster, Räume, Klassen, Kurse
    catalog: CatalogConfig
    # Raster-Darstellung
    grid: GridConfig = Field(default_factory=GridConfig)
