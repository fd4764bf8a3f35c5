from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_lecture_slots(slots: Iterable[int], max_slot: int) -> list[int]:
    """Validate selected lecture slots.

    Returns the distinct slots in ascending order.
    """

    picked = set()
    for s in slots:
        # bools and fractional floats are not slot numbers
        if isinstance(s, bool) or (isinstance(s, float) and not s.is_integer()):
            raise ValidationError(f"Lecture slots must be integers: {s!r}")
        try:
            picked.add(int(s))
        except (TypeError, ValueError):
            raise ValidationError(f"Lecture slots must be integers: {s!r}") from None
    distinct = sorted(picked)

    if not distinct:
        raise ValidationError("Select at least one lecture slot")

    bad = [s for s in distinct if s < 1 or s > max_slot]
    if bad:
        raise ValidationError(f"Lecture slot out of range 1..{max_slot}: {bad}")
    return distinct
