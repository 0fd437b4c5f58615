"""Gantt Reports - schedule reports built from a Google Sheets Gantt chart.

This package reads an entity-by-date schedule grid from Google Sheets and
writes back summary, join/leave, daily category and counter reports.
"""

__version__ = "0.1.0"

from .reports.generator import ReportGenerator
from .sheets.client import GoogleSheetsClient


__all__ = [
    "GoogleSheetsClient",
    "ReportGenerator",
]
