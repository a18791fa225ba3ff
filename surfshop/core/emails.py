from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from .errors import ValidationError

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(value: str | None) -> str:
    """Validate with pydantic's ``EmailStr`` and return the lowercase address."""
    try:
        email = _email_adapter.validate_python((value or "").strip())
    except SchemaValidationError as exc:
        raise ValidationError("Invalid email") from exc
    return email.lower()
