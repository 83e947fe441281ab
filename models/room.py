"""Datenmodell für einen Raum (Pydantic v2)."""

from enum import Enum

from pydantic import BaseModel, Field


class RoomType(str, Enum):
    LECTURE = "lecture"
    LAB = "lab"
    SEMINAR = "seminar"
    COMPUTER = "computer"


class RoomStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class Classroom(BaseModel):
    """Repräsentiert einen Unterrichtsraum. Einträge verweisen über `name` darauf."""

    id: str                          # "room_001"
    name: str                        # "A101"
    building: str                    # "Gebäude A"
    floor: int = 1
    capacity: int = Field(0, ge=0)
    equipment: list[str] = []
    room_type: RoomType = RoomType.LECTURE
    status: RoomStatus = RoomStatus.AVAILABLE
