from __future__ import annotations

import re
from datetime import date
from typing import Any


class ValidationError(Exception):
    """Raised when a command is rejected; nothing has been mutated."""


def require_text(value: Any, label: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValidationError(f"{label} is required")
    return text


def parse_int(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{label} must be a whole number") from exc


LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_leading_int(value: Any, label: str) -> int:
    """Read the leading whole number, dropping any fraction or trailing text."""

    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a whole number")
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except (OverflowError, ValueError) as exc:
            raise ValidationError(f"{label} must be a whole number") from exc
    match = LEADING_INT.match(str(value))
    if match is None:
        raise ValidationError(f"{label} must be a whole number")
    return int(match.group(1))


def parse_deadline(value: Any) -> date:
    if isinstance(value, date):
        return value
    text = require_text(value, "deadline")
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError("deadline must be a date in YYYY-MM-DD format") from exc


def validate_worker_fields(name: Any, role: Any) -> tuple[str, str]:
    if not str(name or "").strip() or not str(role or "").strip():
        raise ValidationError("Worker name and role are required")
    return str(name).strip(), str(role).strip()


def validate_project_fields(name: Any, deadline: Any, sq_ft: Any) -> tuple[str, date, int]:
    """Validate the add-project form.

    Square footage is cut to its leading whole number (``"600.5"`` is 600) and
    must then be positive.
    """

    message = "Please fill in all fields correctly (Name, Deadline, positive SqFt)"
    if not str(name or "").strip() or deadline in (None, "") or sq_ft in (None, ""):
        raise ValidationError(message)
    try:
        area = parse_leading_int(sq_ft, "sqFt")
    except ValidationError as exc:
        raise ValidationError(message) from exc
    if area <= 0:
        raise ValidationError(message)
    return str(name).strip(), parse_deadline(deadline), area


def validate_quantity(value: Any) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("quantity is required")
    quantity = parse_int(value, "quantity")
    if quantity < 0:
        raise ValidationError("quantity cannot be negative")
    return quantity
