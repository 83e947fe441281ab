from models.timeslot import TimeSlot
from models.week_set import WeekSet
from models.room import Classroom, RoomStatus, RoomType
from models.school_class import ClassInfo
from models.course import Course
from models.schedule_entry import EntryStatus, ScheduleDraft, ScheduleEntry, SchedulePatch

__all__ = [
    "TimeSlot",
    "WeekSet",
    "Classroom",
    "RoomStatus",
    "RoomType",
    "ClassInfo",
    "Course",
    "EntryStatus",
    "ScheduleDraft",
    "ScheduleEntry",
    "SchedulePatch",
]
