from .user import Account, AuthProvider
from .lesson import Lesson, LessonStatus, OCCUPYING_STATUSES
from .repair_request import RepairRequest, RepairStatus, DeliveryMethod
from .audit_log import AuditLog, ActorType
