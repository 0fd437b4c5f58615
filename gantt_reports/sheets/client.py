import logging
from typing import Any, Iterable, List, Optional

from google.api_core import retry
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .models import Grid, GridRow, OutputTable, cell_text, parse_header_date, to_cell

logger = logging.getLogger(__name__)

# Columns A and B of the grid hold the category and sub-category
LABEL_COLUMNS = 2
TOO_MANY_REQUESTS = 429


class SheetError(Exception):
    """Custom exception for sheet-related errors"""

    pass


def is_transient_error(exc: Exception) -> bool:
    """Rate limits, server errors and dropped connections are worth retrying"""
    if isinstance(exc, HttpError):
        return exc.resp.status == TOO_MANY_REQUESTS or exc.resp.status >= 500
    return isinstance(exc, (ConnectionError, TimeoutError))


DEFAULT_RETRY = retry.Retry(predicate=is_transient_error, initial=1.0, maximum=30.0, timeout=120.0)


def a1_range(sheet_name: str, cells: str = "") -> str:
    """Build an A1 range with the sheet name quoted"""
    quoted = "'" + sheet_name.replace("'", "''") + "'"
    return f"{quoted}!{cells}" if cells else quoted


class GoogleSheetsClient:
    """Handles all Google Sheets operations"""

    SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_path: str,
        retry_policy: Optional[retry.Retry] = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.credentials_path = credentials_path
        self.retry_policy = retry_policy or DEFAULT_RETRY
        self.service = self._build_sheets_service()

    def _build_sheets_service(self):
        """Create and return an authorized Sheets API service object"""
        try:
            creds = service_account.Credentials.from_service_account_file(
                self.credentials_path, scopes=self.SCOPES
            )
            return build("sheets", "v4", credentials=creds)
        except Exception as e:
            logger.error(f"Failed to build sheets service: {e}")
            raise SheetError(f"Could not initialize sheets service: {str(e)}")

    def _execute(self, request) -> Any:
        """Execute an API request, retrying transient failures"""
        return self.retry_policy(request.execute)()

    def get_sheet_titles(self) -> List[str]:
        """Get the titles of every sheet in the spreadsheet"""
        try:
            result = self._execute(
                self.service.spreadsheets().get(
                    spreadsheetId=self.spreadsheet_id, fields="sheets.properties.title"
                )
            )
            return [sheet["properties"]["title"] for sheet in result.get("sheets", [])]
        except Exception as e:
            logger.error(f"Error reading spreadsheet metadata: {e}")
            raise SheetError(f"Failed to read sheet titles: {str(e)}")

    def ensure_sheets(self, sheet_names: Iterable[str]) -> None:
        """Fail early if any of the named sheets is missing"""
        existing = set(self.get_sheet_titles())
        missing = [name for name in sheet_names if name not in existing]
        if missing:
            raise SheetError(f"Missing sheets: {', '.join(missing)}")

    def get_values(self, range_name: str) -> List[List[Any]]:
        """Get the raw values of a range with retry logic"""
        try:
            result = self._execute(
                self.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=range_name,
                    valueRenderOption="UNFORMATTED_VALUE",
                    dateTimeRenderOption="SERIAL_NUMBER",
                )
            )
            return result.get("values", [])
        except Exception as e:
            logger.error(f"Error reading range {range_name}: {e}")
            raise SheetError(f"Failed to read {range_name}: {str(e)}")

    def read_grid(self, sheet_name: str, cells: str) -> Grid:
        """Read the schedule grid: a header row of dates, then categorized rows"""
        values = self.get_values(a1_range(sheet_name, cells))
        if not values:
            logger.warning(f"Grid range {cells} on {sheet_name} is empty")
            return Grid(dates=[], rows=[])

        header, body = values[0], values[1:]
        width = max(len(row) for row in values) - LABEL_COLUMNS
        width = max(width, 0)
        headers = list(header[LABEL_COLUMNS:]) + [None] * width
        dates = [parse_header_date(value) for value in headers[:width]]

        rows = []
        for raw in body:
            padded = list(raw) + [None] * (width + LABEL_COLUMNS - len(raw))
            rows.append(
                GridRow(
                    category=cell_text(padded[0]),
                    sub_category=cell_text(padded[1]),
                    cells=[to_cell(value) for value in padded[LABEL_COLUMNS:]],
                )
            )

        logger.info(f"Read grid from {sheet_name}: {len(rows)} rows x {width} date columns")
        return Grid(dates=dates, rows=rows)

    def clear_sheets(self, sheet_names: List[str]) -> None:
        """Clear all content from the given sheets in one request"""
        try:
            self._execute(
                self.service.spreadsheets().values().batchClear(
                    spreadsheetId=self.spreadsheet_id,
                    body={"ranges": [a1_range(name) for name in sheet_names]},
                )
            )
        except Exception as e:
            logger.error(f"Error clearing sheets: {e}")
            raise SheetError(f"Failed to clear sheets: {str(e)}")

    def update_tables(self, tables: List[OutputTable]) -> None:
        """Write every table starting at A1 of its sheet in one request"""
        data = [
            {"range": a1_range(table.sheet_name, "A1"), "values": table.values}
            for table in tables
        ]
        try:
            self._execute(
                self.service.spreadsheets().values().batchUpdate(
                    spreadsheetId=self.spreadsheet_id,
                    body={"valueInputOption": "RAW", "data": data},
                )
            )
        except Exception as e:
            logger.error(f"Error writing tables: {e}")
            raise SheetError(f"Failed to write tables: {str(e)}")

    def write_tables(self, tables: List[OutputTable]) -> None:
        """Replace the contents of each table's sheet with the table"""
        if not tables:
            return
        sheet_names = [table.sheet_name for table in tables]
        logger.info(f"Writing sheets: {', '.join(sheet_names)}")
        self.clear_sheets(sheet_names)
        self.update_tables(tables)
