from typing import Optional

from config.schema import (
    CatalogConfig,
    GridConfig,
    ScheduleConfig,
    SemesterConfig,
)
from models.timeslot import TimeSlot
from models.room import Classroom, RoomType
from models.school_class import ClassInfo
from models.course import Course


# Schlüsselwörter in der Kategorie → Darstellungsart (Farbe, Legende)
CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "lab": ("labor", "experiment", "praktikum"),
    "computer": ("rechner", "computer", "pc-"),
}

CATEGORY_LABELS: dict[str, str] = {
    "theory": "Theorie",
    "lab": "Labor",
    "computer": "Rechnerübung",
}

STATUS_LABELS: dict[str, str] = {
    "active": "aktiv",
    "cancelled": "abgesagt",
    "completed": "abgeschlossen",
}


def category_kind(category: Optional[str]) -> str:
    """Ordnet eine freie Kategorie-Bezeichnung einer Darstellungsart zu.

    "Labor", "Praktikum" → lab; "Rechnerübung" → computer; sonst theory.
    """
    text = (category or "").lower()
    for kind, keywords in CATEGORY_KEYWORDS.items():
        if any(k in text for k in keywords):
            return kind
    return "theory"


def default_time_slots() -> list[TimeSlot]:
    """Standard-Tagesraster mit zehn Blöcken à 45 Minuten.

    Vormittag   08:00 - 11:40  (Blöcke 1-4)
    Nachmittag  14:00 - 17:40  (Blöcke 5-8)
    Abend       19:00 - 20:40  (Blöcke 9-10)
    """
    times = [
        ("08:00", "08:45"), ("08:55", "09:40"),
        ("10:00", "10:45"), ("10:55", "11:40"),
        ("14:00", "14:45"), ("14:55", "15:40"),
        ("16:00", "16:45"), ("16:55", "17:40"),
        ("19:00", "19:45"), ("19:55", "20:40"),
    ]
    return [
        TimeSlot(id=str(i), label=f"{i}. Block", start=start, end=end, ordinal=i)
        for i, (start, end) in enumerate(times, 1)
    ]


def default_classrooms() -> list[Classroom]:
    return [
        Classroom(id="room_001", name="A101", building="Gebäude A", floor=1,
                  capacity=60, equipment=["Beamer", "Audio", "Klima"],
                  room_type=RoomType.LECTURE),
        Classroom(id="room_002", name="A102", building="Gebäude A", floor=1,
                  capacity=80, equipment=["Beamer", "Audio", "Klima", "Aufzeichnung"],
                  room_type=RoomType.LECTURE),
        Classroom(id="room_003", name="B201", building="Gebäude B", floor=2,
                  capacity=40, equipment=["PCs", "Beamer", "Laborplätze"],
                  room_type=RoomType.LAB),
    ]


def default_classes() -> list[ClassInfo]:
    return [
        ClassInfo(id="class_001", name="Informatik 2023-1", department="Fakultät Informatik",
                  grade="2023", student_count=45, major="Informatik"),
        ClassInfo(id="class_002", name="Informatik 2023-2", department="Fakultät Informatik",
                  grade="2023", student_count=42, major="Informatik"),
        ClassInfo(id="class_003", name="Elektrotechnik 2023-1", department="Fakultät Elektrotechnik",
                  grade="2023", student_count=38, major="Elektrotechnik"),
    ]


def default_courses() -> list[Course]:
    return [
        Course(id="course_001", name="STM32 Embedded-Grundlagen"),
        Course(id="course_002", name="ARM-Architektur und Programmierung"),
        Course(id="course_003", name="Programmieren in C"),
    ]


def default_catalog() -> CatalogConfig:
    return CatalogConfig(
        time_slots=default_time_slots(),
        classrooms=default_classrooms(),
        classes=default_classes(),
        courses=default_courses(),
    )


def default_schedule_config() -> ScheduleConfig:
    """Vollständige Standard-Konfiguration (20-Wochen-Semester)."""
    return ScheduleConfig(
        semester=SemesterConfig(),
        catalog=default_catalog(),
        grid=GridConfig(),
    )
