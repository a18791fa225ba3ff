from .lesson import (
    AdminLesson,
    CalendarDay,
    Lesson,
    LessonBatchCreate,
    LessonCreate,
    LessonPackage,
    LessonUpdate,
    OccupiedSlot,
    SlotOutcome,
)
from .repair import AdminRepairRequest, RepairRequest, RepairRequestCreate, RepairStatusUpdate
from .user import AuthResponse, LoginRequest, Owner, ProfileUpdate, RegisterRequest, User
