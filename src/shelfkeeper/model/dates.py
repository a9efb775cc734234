# ABOUTME: Partial purchase dates: a year, optionally with month and day.
# ABOUTME: Parses and formats "2023", "May 2023" and "5 May 2023".

from dataclasses import dataclass
from datetime import date, datetime

# (strptime format, human-readable name) keyed by the number of words in the text.
_FORMATS = {
    1: ("%Y", "year"),
    2: ("%B %Y", "month year"),
    3: ("%d %B %Y", "day month year"),
}


class DateParseError(ValueError):
    """Raised when purchase date text matches none of the accepted forms."""

    def __init__(self, text: str, form: str, reason: str = "") -> None:
        self.text = text
        self.form = form
        message = f"Cannot parse {form} date {text!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


@dataclass(frozen=True)
class PurchaseDate:
    """When a book was bought, to whatever precision is known.

    A day is only meaningful with a month, and a month only with a year.
    Instances compare by value.
    """

    year: int
    month: int | None = None
    day: int | None = None

    def __post_init__(self) -> None:
        if self.day is not None and self.month is None:
            raise ValueError("A purchase date with a day must also have a month")
        if self.month is not None:
            # Raises ValueError for impossible months and days.
            date(self.year, self.month, self.day or 1)

    @classmethod
    def parse(cls, text: str) -> "PurchaseDate":
        """Parse "YYYY", "Month YYYY" or "D Month YYYY".

        Raises:
            DateParseError: If the text is empty or not in one of the forms.
        """
        words = text.split()
        if len(words) not in _FORMATS:
            raise DateParseError(text, "unknown")

        fmt, form = _FORMATS[len(words)]
        try:
            parsed = datetime.strptime(" ".join(words), fmt)
        except ValueError as exc:
            raise DateParseError(text, form, str(exc)) from exc

        if len(words) == 1:
            return cls(parsed.year)
        if len(words) == 2:
            return cls(parsed.year, parsed.month)
        return cls(parsed.year, parsed.month, parsed.day)

    def __str__(self) -> str:
        if self.month is None:
            return str(self.year)
        month_name = date(self.year, self.month, 1).strftime("%B")
        if self.day is None:
            return f"{month_name} {self.year}"
        return f"{self.day} {month_name} {self.year}"
