"""DateRange value object: inclusive span of ISO calendar dates."""
from datetime import date, datetime
from typing import Union

from mealplan.utilities.constants import DATE_FORMAT

DateLike = Union[str, date]


def to_iso_date(value: DateLike) -> str:
    """Return a zero-padded YYYY-MM-DD string, validating string input."""
    if isinstance(value, datetime):
        return value.date().strftime(DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    if not isinstance(value, str):
        raise ValueError(f"Invalid date: {value!r}")
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date().strftime(DATE_FORMAT)
    except ValueError:
        raise ValueError(f"Invalid ISO date (expected YYYY-MM-DD): {value!r}") from None


class DateRange:
    def __init__(self, start: DateLike, end: DateLike):
        self.start = to_iso_date(start)
        self.end = to_iso_date(end)
        if self.start > self.end:
            raise ValueError(f"Start date {self.start} must be before or equal to end date {self.end}")

    def contains(self, day: str) -> bool:
        # Zero-padded ISO dates sort lexicographically
        return self.start <= day <= self.end

    def __eq__(self, other) -> bool:
        if not isinstance(other, DateRange):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __hash__(self) -> int:
        return hash((self.start, self.end))

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return DateRange(d.get("start", ""), d.get("end", ""))

    def to_dict(self):
        return {"start": self.start, "end": self.end}
