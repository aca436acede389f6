"""Rich terminal report printed after the dashboard exits."""

from kss.report.reporter import MISSING_API_KEY_TEXT, ReportOptions, Reporter

__all__ = ["MISSING_API_KEY_TEXT", "ReportOptions", "Reporter"]
