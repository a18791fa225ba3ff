from . import (
    auth,
    lessons,
    repairs,
    users,
    misc,
)

__all__ = [
    "auth",
    "lessons",
    "repairs",
    "users",
    "misc",
]
