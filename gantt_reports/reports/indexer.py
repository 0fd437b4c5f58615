import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

from ..sheets.models import CellKind, Grid, cell_text

logger = logging.getLogger(__name__)

ID_NOT_FOUND = "ID not found"
# Identifier table: name in column A, id in column D
NAME_COLUMN = 0
ID_COLUMN = 3


@dataclass
class EntityIndex:
    """Everything the reports need to know about the entities in a grid"""

    names: list[str] = field(default_factory=list)
    categories: dict[str, set[str]] = field(default_factory=dict)
    dates: dict[str, set[date]] = field(default_factory=dict)
    category_hits: dict[str, Counter] = field(default_factory=dict)

    def sorted_categories(self) -> list[str]:
        return sorted(self.category_hits)


def build_identifier_map(rows: Iterable[list[Any]]) -> dict[str, str]:
    """Map names to identifiers; later rows win over earlier ones"""
    id_map = {}
    for row in rows:
        if len(row) <= ID_COLUMN:
            continue
        name = cell_text(row[NAME_COLUMN])
        identifier = cell_text(row[ID_COLUMN])
        if name and identifier:
            id_map[name] = identifier
    return id_map


def resolve_identifier(id_map: dict[str, str], name: str) -> str:
    return id_map.get(name, ID_NOT_FOUND)


def index_entities(grid: Grid) -> EntityIndex:
    """Scan every cell once, recording categories, dates and per-category hits"""
    index = EntityIndex()
    for row in grid.rows:
        for column, cell in enumerate(row.cells):
            if cell.is_empty:
                continue
            if cell.kind is not CellKind.TEXT:
                logger.warning(f"Ignoring non-text cell in row {row.category!r}, column {column}")
                continue

            name = cell.text
            index.categories.setdefault(name, set()).add(row.category)
            index.dates.setdefault(name, set()).add(grid.date_at(column))
            index.category_hits.setdefault(row.category, Counter())[name] += 1

    index.names = sorted(index.categories)
    logger.info(f"Indexed {len(index.names)} unique names across {len(index.category_hits)} categories")
    return index
