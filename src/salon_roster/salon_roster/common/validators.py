from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name}: значение не задано")
    return value.strip()


def require_employee_id(value: object) -> int:
    if isinstance(value, bool):
        raise ValidationError("Некорректный сотрудник")
    try:
        employee_id = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError("Некорректный сотрудник") from None
    if employee_id <= 0:
        raise ValidationError("Некорректный сотрудник")
    return employee_id
