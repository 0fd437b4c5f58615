import logging
from datetime import date
from typing import Iterable

from ..sheets.client import GoogleSheetsClient, a1_range
from ..sheets.models import Grid, OutputTable
from .category_report import DEFAULT_TRACKED_CATEGORIES, build_category_rows, report_header
from .counter import build_counter_rows, counter_header
from .indexer import EntityIndex, build_identifier_map, index_entities, resolve_identifier
from .runs import format_runs
from .transitions import track_transitions

logger = logging.getLogger(__name__)

GANTT_SHEET = "Gantt chart"
GANTT_RANGE = "A3:AT100"
ID_SHEET = "ID"
ID_RANGE = "A:D"
SUMMARY_SHEET = "Summary"
KISHUR_SHEET = "Kishur"
REPORT_SHEET = "Report1"
COUNTER_SHEET = "Counter"
OUTPUT_SHEETS = [SUMMARY_SHEET, KISHUR_SHEET, REPORT_SHEET, COUNTER_SHEET]


class ReportGenerator:
    """Builds every report from the Gantt chart and writes them back"""

    def __init__(
        self,
        sheets_client: GoogleSheetsClient,
        tracked_categories: Iterable[str] = DEFAULT_TRACKED_CATEGORIES,
        repeat_category_columns: bool = False,
    ):
        self.sheets_client = sheets_client
        self.tracked_categories = tuple(tracked_categories)
        self.repeat_category_columns = repeat_category_columns

    def run(self, today: date) -> list[OutputTable]:
        """Read the source sheets, build all reports, then replace the output sheets"""
        logger.info("Report run started")
        self.sheets_client.ensure_sheets([GANTT_SHEET, ID_SHEET] + OUTPUT_SHEETS)

        logger.info(f"Fetching data from the {GANTT_SHEET} sheet")
        grid = self.sheets_client.read_grid(GANTT_SHEET, GANTT_RANGE)

        logger.info(f"Fetching data from the {ID_SHEET} sheet")
        id_map = build_identifier_map(self.sheets_client.get_values(a1_range(ID_SHEET, ID_RANGE)))

        tables = self.build_tables(grid, id_map, today)
        self.sheets_client.write_tables(tables)

        logger.info("Report run completed successfully")
        return tables

    def build_tables(self, grid: Grid, id_map: dict[str, str], today: date) -> list[OutputTable]:
        """Build every output table in memory without touching any sheet"""
        index = index_entities(grid)
        return [
            self.build_summary(index, id_map),
            self.build_kishur(grid, id_map),
            self.build_report(grid, id_map, today),
            self.build_counter(index, id_map),
        ]

    def build_summary(self, index: EntityIndex, id_map: dict[str, str]) -> OutputTable:
        table = OutputTable(SUMMARY_SHEET, ["Name", "ID", "Dates"])
        for name in index.names:
            identifier = resolve_identifier(id_map, name)
            dates = format_runs(index.dates[name])
            logger.debug(f"Name: {name}, ID: {identifier}, Dates: {dates}")
            table.rows.append([name, identifier, dates])
        return table

    def build_kishur(self, grid: Grid, id_map: dict[str, str]) -> OutputTable:
        table = OutputTable(KISHUR_SHEET, ["Dates", "Start Date", "End Date"])
        table.rows = [transition.as_row() for transition in track_transitions(grid, id_map)]
        return table

    def build_report(self, grid: Grid, id_map: dict[str, str], today: date) -> OutputTable:
        table = OutputTable(REPORT_SHEET, report_header(today))
        table.rows = build_category_rows(
            grid,
            id_map,
            today,
            tracked_categories=self.tracked_categories,
            repeat_category_columns=self.repeat_category_columns,
        )
        return table

    def build_counter(self, index: EntityIndex, id_map: dict[str, str]) -> OutputTable:
        table = OutputTable(COUNTER_SHEET, counter_header(index))
        table.rows = build_counter_rows(index, id_map)
        return table
