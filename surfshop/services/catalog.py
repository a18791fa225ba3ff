"""Read-only lesson package catalog."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.errors import ValidationError


@dataclass(frozen=True, slots=True)
class LessonPackage:
    id: int
    title: str
    level: str
    duration: str
    description: str
    price: float
    hours: float
    goals: tuple[str, ...] = field(default_factory=tuple)
    highlights: tuple[str, ...] = field(default_factory=tuple)


LESSON_PACKAGES: tuple[LessonPackage, ...] = (
    LessonPackage(
        id=1,
        title="Novice to Beginner",
        level="Starter Package",
        duration="1 Hour Session",
        description="Perfect for first-timers ready to catch their first wave",
        price=75,
        hours=1,
        goals=(
            "Ocean safety and surf etiquette basics",
            "Proper paddling technique",
            "Understanding wave selection",
            "Pop-up fundamentals on the board",
            "Standing up and riding your first waves",
            "Basic balance and positioning",
        ),
        highlights=(
            "Our foam board (optional to bring your own board)",
            "Beach safety orientation",
            "1-on-1 personalized instruction",
            "Photos of your session",
        ),
    ),
)


def list_packages() -> list[LessonPackage]:
    return list(LESSON_PACKAGES)


def get_package(package_id: int) -> LessonPackage | None:
    return next((package for package in LESSON_PACKAGES if package.id == package_id), None)


def resolve_terms(
    package_id: int, price: float | None = None, hours: float | None = None
) -> tuple[float, float]:
    """Return the catalog price and hours for ``package_id``.

    Client-supplied values are accepted only when they match the catalog.
    """
    package = get_package(package_id)
    if package is None:
        raise ValidationError("Unknown lesson package")
    if price is not None and float(price) != float(package.price):
        raise ValidationError("Price does not match the selected package")
    if hours is not None and float(hours) != float(package.hours):
        raise ValidationError("Hours do not match the selected package")
    return package.price, package.hours
