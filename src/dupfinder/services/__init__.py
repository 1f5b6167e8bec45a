from .report_service import ReportService, DEFAULT_REPORT_FILENAME

__all__ = ["ReportService", "DEFAULT_REPORT_FILENAME"]
