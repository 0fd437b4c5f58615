import logging
from dataclasses import dataclass, field
from datetime import date

from ..sheets.models import CellKind, Grid, format_date
from .indexer import resolve_identifier

logger = logging.getLogger(__name__)


@dataclass
class DateTransition:
    """Who joins and who leaves on one distinct date"""

    date: date
    start_names: list[str] = field(default_factory=list)
    end_names: list[str] = field(default_factory=list)

    def as_row(self) -> list[str]:
        return [format_date(self.date), ", ".join(self.start_names), ", ".join(self.end_names)]


def render_name(name: str, id_map: dict[str, str]) -> str:
    return f"{name} ({resolve_identifier(id_map, name)})"


def distinct_dates(grid: Grid) -> list[date]:
    """Dates of all columns holding at least one entry, sorted chronologically"""
    found = set()
    for row in grid.rows:
        for column, cell in enumerate(row.cells):
            if not cell.is_empty:
                found.add(grid.date_at(column))
    return sorted(found)


def names_by_date(grid: Grid, id_map: dict[str, str]) -> dict[date, list[str]]:
    """Rendered "name (id)" strings per date, unique and in first-seen order"""
    occupants: dict[date, dict[str, None]] = {}
    for column in range(len(grid.dates)):
        for row in grid.rows:
            cell = row.cells[column] if column < len(row.cells) else None
            if cell is None or cell.kind is not CellKind.TEXT:
                continue
            on_date = occupants.setdefault(grid.date_at(column), {})
            on_date[render_name(cell.text, id_map)] = None
    return {day: list(names) for day, names in occupants.items()}


def _difference(names: list[str], others: list[str]) -> list[str]:
    excluded = set(others)
    return [name for name in names if name not in excluded]


def track_transitions(grid: Grid, id_map: dict[str, str]) -> list[DateTransition]:
    """Compare each distinct date with its neighbours in sorted order"""
    dates = distinct_dates(grid)
    occupants = names_by_date(grid, id_map)

    transitions = []
    for i, day in enumerate(dates):
        current = occupants.get(day, [])
        previous = occupants.get(dates[i - 1], []) if i > 0 else []
        following = occupants.get(dates[i + 1], []) if i < len(dates) - 1 else []
        transitions.append(
            DateTransition(
                date=day,
                start_names=_difference(current, previous),
                end_names=_difference(current, following),
            )
        )

    logger.info(f"Computed transitions for {len(transitions)} distinct dates")
    return transitions
