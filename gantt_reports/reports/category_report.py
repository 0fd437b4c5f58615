import logging
from datetime import date
from typing import Iterable, Optional

from ..sheets.models import CellKind, Grid, GridRow, format_date
from .indexer import resolve_identifier

logger = logging.getLogger(__name__)

DEFAULT_TRACKED_CATEGORIES = ("קו", "מפלג")
SUB_CATEGORY_COLUMNS = 3
REPORT_HEADER_COLUMNS = [
    "Sub-category 1",
    "Sub-category 2",
    "Sub-category 3",
    "Name",
    "ID",
]


def report_header(today: date) -> list[str]:
    return [format_date(today)] + REPORT_HEADER_COLUMNS


def split_sub_category(text: str) -> list[str]:
    """Split on single spaces into exactly three columns"""
    tokens = text.split(" ")[:SUB_CATEGORY_COLUMNS]
    return tokens + [""] * (SUB_CATEGORY_COLUMNS - len(tokens))


def find_date_column(grid: Grid, day: date) -> Optional[int]:
    for column, value in enumerate(grid.dates):
        if value == day:
            return column
    return None


def names_in_cell(row: GridRow, column: Optional[int]) -> list[str]:
    """The comma-separated names a row holds in a column, trimmed"""
    if column is None or column >= len(row.cells):
        return []
    cell = row.cells[column]
    if cell.kind is not CellKind.TEXT:
        return []
    return [name.strip() for name in cell.text.split(",")]


def build_category_rows(
    grid: Grid,
    id_map: dict[str, str],
    today: date,
    tracked_categories: Iterable[str] = DEFAULT_TRACKED_CATEGORIES,
    repeat_category_columns: bool = False,
) -> list[list[str]]:
    """Rows of today's occupants for the tracked categories

    Each tracked grid row yields one output row per name found in today's
    column. The category and sub-category columns are filled on the first of
    those rows only, unless ``repeat_category_columns`` is set. A tracked row
    with nobody scheduled today yields no rows.
    """
    tracked = set(tracked_categories)
    today_column = find_date_column(grid, today)
    if today_column is None:
        logger.warning(f"No grid column for today ({format_date(today)})")

    rows = []
    for row in grid.rows:
        if row.category not in tracked:
            continue

        labels = [row.category] + split_sub_category(row.sub_category)
        names = names_in_cell(row, today_column)
        for i, name in enumerate(names):
            prefix = labels if i == 0 or repeat_category_columns else [""] * len(labels)
            rows.append(prefix + [name, resolve_identifier(id_map, name)])

    logger.info(f"Built {len(rows)} rows for categories: {', '.join(sorted(tracked))}")
    return rows
