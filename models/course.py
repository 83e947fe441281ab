"""Datenmodell für einen Kurs (Pydantic v2)."""

from pydantic import BaseModel


class Course(BaseModel):
    """Ein planbarer Kurs. Inhalte (Lernziele, Material) liegen außerhalb des Kerns."""

    id: str     # "course_001"
    name: str
