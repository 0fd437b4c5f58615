import logging
import os
import sys
from datetime import date, datetime
from typing import Optional, TypedDict
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from gantt_reports.logging_config.logging_config import setup_logging
from gantt_reports.reports.category_report import DEFAULT_TRACKED_CATEGORIES
from gantt_reports.reports.generator import ReportGenerator
from gantt_reports.sheets.client import GoogleSheetsClient

DEFAULT_TIMEZONE = "Asia/Jerusalem"


class AppConfig(TypedDict):
    """Configuration for the application"""

    SPREADSHEET_ID: str
    GOOGLE_CREDENTIALS: str
    TIMEZONE: str
    TRACKED_CATEGORIES: list[str]
    REPEAT_CATEGORY_COLUMNS: bool


def _parse_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_config() -> AppConfig:
    """Load configuration from environment variables"""
    load_dotenv()

    required_vars = {
        "SPREADSHEET_ID": os.getenv("SPREADSHEET_ID"),
        "GOOGLE_CREDENTIALS": os.getenv("GOOGLE_CREDENTIALS"),
    }

    missing = [k for k, v in required_vars.items() if not v]
    if missing:
        raise OSError(f"Missing required environment variables: {', '.join(missing)}")

    tracked = os.getenv("TRACKED_CATEGORIES")
    return {
        **required_vars,
        "TIMEZONE": os.getenv("TIMEZONE") or DEFAULT_TIMEZONE,
        "TRACKED_CATEGORIES": (
            [category.strip() for category in tracked.split(",") if category.strip()]
            if tracked
            else list(DEFAULT_TRACKED_CATEGORIES)
        ),
        "REPEAT_CATEGORY_COLUMNS": _parse_flag(os.getenv("REPEAT_CATEGORY_COLUMNS")),
    }


def today_in(timezone: str) -> date:
    return datetime.now(ZoneInfo(timezone)).date()


# ruff: noqa: D103
def main() -> int:
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        config = load_config()

        sheets_client = GoogleSheetsClient(
            spreadsheet_id=config["SPREADSHEET_ID"],
            credentials_path=config["GOOGLE_CREDENTIALS"],
        )
        generator = ReportGenerator(
            sheets_client=sheets_client,
            tracked_categories=config["TRACKED_CATEGORIES"],
            repeat_category_columns=config["REPEAT_CATEGORY_COLUMNS"],
        )
        generator.run(today=today_in(config["TIMEZONE"]))
    except Exception as e:
        logger.exception(f"An error occurred: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
