# ==============================================
# report_engine/sinks/__init__.py
# ==============================================
from enum import Enum

from .base_sink import BaseSink
from .csv_sink import CsvSink
from .excel_sink import ExcelSink

from report_engine.core.exceptions import BadRequestError

# Sink registry for dynamic instantiation
SINK_REGISTRY = {
    'xlsx': ExcelSink,
    'excel': ExcelSink,
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet': ExcelSink,

    'csv': CsvSink,
    'text/csv': CsvSink,
}


def get_sink(export_format: str, **kwargs) -> BaseSink:
    """
    Factory function to get appropriate sink based on export format

    Args:
        export_format: Format name or MIME type
        **kwargs: Additional arguments to pass to sink

    Returns:
        Sink instance

    Raises:
        BadRequestError: If format is not supported
    """
    if isinstance(export_format, Enum):
        export_format = export_format.value
    sink_class = SINK_REGISTRY.get(str(export_format or "").lower())

    if not sink_class:
        raise BadRequestError(
            f"Unsupported export format: {export_format}",
            details={"supported_formats": get_supported_formats()},
        )

    return sink_class(**kwargs)


def get_supported_formats() -> list:
    """Get list of supported export formats"""
    return sorted({sink.format_name for sink in SINK_REGISTRY.values()})


__all__ = [
    'BaseSink',
    'CsvSink',
    'ExcelSink',
    'SINK_REGISTRY',
    'get_sink',
    'get_supported_formats',
]
