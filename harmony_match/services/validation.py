from datetime import date
from typing import Any, Dict, Optional, Tuple

from ..config import settings


class InvalidYear(ValueError):
    """A birth year that is missing, non-numeric, too early or in the future."""

    def __init__(self, message: str, side: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.side = side


class InvalidYearPair(ValueError):
    """One or both partner years failed; `errors` maps side -> message."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{side}: {msg}" for side, msg in errors.items()))
        self.errors = errors


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        value = value.strip()
        # isdigit() also accepts superscripts like "²", which int() rejects
        if value.lstrip("-").isdecimal():
            return int(value)
    return None


def validate_birth_year(value: Any, side: Optional[str] = None, today: Optional[date] = None) -> int:
    """
    Birth year check, done before the engine is called:
    - missing / non-numeric -> "Please enter a valid year"
    - below MIN_BIRTH_YEAR  -> "Year must be 1920 or later"
    - after current year    -> "Year cannot be in the future"
    """
    year = _as_int(value)
    if not year:
        raise InvalidYear("Please enter a valid year", side)

    min_year = settings.MIN_BIRTH_YEAR
    max_year = (today or date.today()).year

    if year < min_year:
        raise InvalidYear(f"Year must be {min_year} or later", side)
    if year > max_year:
        raise InvalidYear("Year cannot be in the future", side)

    return year


def validate_pair(year1: Any, year2: Any, today: Optional[date] = None) -> Tuple[int, int]:
    """Validates both sides independently so every failing side is reported at once."""
    errors: Dict[str, str] = {}
    years: Dict[str, int] = {}

    for side, value in (("year1", year1), ("year2", year2)):
        try:
            years[side] = validate_birth_year(value, side, today)
        except InvalidYear as exc:
            errors[side] = exc.message

    if errors:
        raise InvalidYearPair(errors)
    return years["year1"], years["year2"]
