"""Datenmodell für eine Studiengruppe/Klasse (Pydantic v2)."""

from pydantic import BaseModel, Field


class ClassInfo(BaseModel):
    """Repräsentiert eine Klasse (z.B. "Informatik 2023-1")."""

    id: str                 # "class_001"
    name: str
    department: str = ""
    grade: str = ""         # Jahrgang, z.B. "2023"
    student_count: int = Field(0, ge=0)
    major: str = ""
