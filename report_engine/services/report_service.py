"""
Report service: builds report tables and exports them through sinks.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from report_engine.core.enums import ExportFormat
from report_engine.core.exceptions import BadRequestError
from report_engine.core.logging import log_execution_time
from report_engine.reports import get_report, get_supported_reports
from report_engine.reports.table_builder import ReportTable
from report_engine.services.base import BaseService
from report_engine.sinks import get_sink
from report_engine.utils.date_utils import format_datetime, get_current_timestamp
from report_engine.utils.logger import get_logger

logger = get_logger(__name__)

WORKBOOK_FILENAME_PREFIX = "report_workbook"


@dataclass
class ExportResult:
    """Rendered export artifact."""

    content: bytes
    filename: str
    media_type: str
    tables: List[ReportTable] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.content)


class ReportService(BaseService):
    """Service for building and exporting reports."""

    def get_service_name(self) -> str:
        return "ReportService"

    def list_reports(self) -> List[Dict[str, Any]]:
        """Describe every registered report."""
        return [get_report(report_type, self.settings).describe() for report_type in get_supported_reports()]

    @log_execution_time(logger, logging.DEBUG)
    def build_report(
        self,
        report_type: str,
        data: Any,
        generated_at: Optional[datetime] = None,
    ) -> ReportTable:
        """
        Build one report table.

        Args:
            report_type: Registry key
            data: Named raw collections, or the primary collection
            generated_at: Timestamp for the metadata row

        Returns:
            Rendered ReportTable

        Raises:
            UnknownReportError: If report type is not registered
            ReportConfigurationError: On column or row arity defects
        """
        self.log_operation("build_report", report_type=report_type)
        report = get_report(report_type, self.settings)
        with self.guard("build_report"):
            return report.render(data, generated_at)

    def export_report(
        self,
        report_type: str,
        data: Any,
        export_format: Union[str, ExportFormat, None] = None,
        generated_at: Optional[datetime] = None,
        **sink_options,
    ) -> ExportResult:
        """Build one report and render it to a downloadable artifact."""
        return self.export_workbook([report_type], data, export_format, generated_at, **sink_options)

    def export_workbook(
        self,
        report_types: Sequence[str],
        data: Any,
        export_format: Union[str, ExportFormat, None] = None,
        generated_at: Optional[datetime] = None,
        **sink_options,
    ) -> ExportResult:
        """
        Build several reports into one artifact, one sheet per report.

        Args:
            report_types: Registry keys in sheet order
            data: Named raw collections shared by all reports
            export_format: xlsx or csv, defaults to configuration
            generated_at: Timestamp shared by all metadata rows
            **sink_options: Passed to the sink (e.g. formatted=True for csv)

        Returns:
            ExportResult with content, filename and media type
        """
        report_types = list(report_types or [])
        if not report_types:
            raise BadRequestError("At least one report type is required")

        sink = get_sink(export_format or self.settings.export.default_format, settings=self.settings, **sink_options)
        generated_at = generated_at or get_current_timestamp(self.settings.report.timezone)

        tables = [self.build_report(report_type, data, generated_at) for report_type in report_types]

        self.log_operation("export", reports=report_types, format=sink.format_name)
        with self.guard("export"):
            content = sink.render(tables)

        prefix = report_types[0] if len(report_types) == 1 else WORKBOOK_FILENAME_PREFIX
        return ExportResult(
            content=content,
            filename=self._build_filename(prefix, generated_at, sink.file_extension),
            media_type=sink.media_type,
            tables=tables,
        )

    def save_export(self, result: ExportResult, directory: Union[str, Path, None] = None) -> Path:
        """Write an export to disk and return its path."""
        output_dir = Path(directory or self.settings.export.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        path = output_dir / result.filename
        path.write_bytes(result.content)
        self.log_operation("save_export", path=str(path), bytes=result.size)
        return path

    def _build_filename(self, prefix: str, generated_at: datetime, extension: str) -> str:
        stamp = format_datetime(generated_at, self.settings.export.filename_timestamp_format)
        return f"{prefix}_{stamp}.{extension}"
