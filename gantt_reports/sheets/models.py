# gantt_reports/sheets/models.py
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional

DATE_FORMAT = "%d/%m/%y"
# Google Sheets serial day 0
SERIAL_EPOCH = date(1899, 12, 30)
_TEXT_DATE_FORMATS = ("%d/%m/%y", "%d/%m/%Y", "%Y-%m-%d")


class GridError(ValueError):
    """Raised when the schedule grid holds content that cannot be interpreted"""

    pass


class CellKind(Enum):
    """Types of content a grid cell can hold"""

    EMPTY = "EMPTY"
    TEXT = "TEXT"
    DATE = "DATE"


@dataclass(frozen=True)
class Cell:
    """A single grid value tagged with its kind"""

    kind: CellKind
    text: str = ""
    day: Optional[date] = None

    @classmethod
    def empty(cls) -> "Cell":
        return cls(CellKind.EMPTY)

    @classmethod
    def of_text(cls, text: str) -> "Cell":
        return cls(CellKind.TEXT, text=text)

    @classmethod
    def of_date(cls, value: date) -> "Cell":
        return cls(CellKind.DATE, day=value)

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY


@dataclass
class GridRow:
    """One categorized schedule row: column A, column B and the date cells"""

    category: str
    sub_category: str
    cells: list[Cell] = field(default_factory=list)


@dataclass
class Grid:
    """The activity grid: a date per column and the categorized rows below it"""

    dates: list[Optional[date]]
    rows: list[GridRow]

    def date_at(self, column: int) -> date:
        """Return the date of a column, failing if its header was not a date"""
        value = self.dates[column] if column < len(self.dates) else None
        if value is None:
            raise GridError(f"Column {column} holds entries but has no valid date header")
        return value


@dataclass
class OutputTable:
    """A fully built report that replaces the contents of one sheet"""

    sheet_name: str
    header: list[str]
    rows: list[list[Any]] = field(default_factory=list)

    @property
    def values(self) -> list[list[Any]]:
        return [self.header] + self.rows


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def cell_text(value: Any) -> str:
    """Render a raw sheet value as text, dropping the float tail of whole numbers"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_header_date(value: Any) -> Optional[date]:
    """Convert a header value (serial number, date or date text) to a date

    Returns None for blank headers. Raises GridError for anything else that
    cannot be read as a date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return SERIAL_EPOCH + timedelta(days=int(value))
    text = str(value).strip()
    if not text:
        return None
    for fmt in _TEXT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise GridError(f"Malformed date header: {value!r}")


def to_cell(value: Any) -> Cell:
    """Wrap a raw data-area value in a Cell"""
    if value is None or value == "":
        return Cell.empty()
    if isinstance(value, datetime):
        return Cell.of_date(value.date())
    if isinstance(value, date):
        return Cell.of_date(value)
    return Cell.of_text(cell_text(value))
