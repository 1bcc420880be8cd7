from .base import BaseService
from .report_service import ExportResult, ReportService

__all__ = ["BaseService", "ExportResult", "ReportService"]
