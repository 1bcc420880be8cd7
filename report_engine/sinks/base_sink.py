# ==============================================
# report_engine/sinks/base_sink.py
# ==============================================
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Union

from report_engine.core.config import Settings, get_settings
from report_engine.core.exceptions import AppException, SinkRenderError
from report_engine.reports.table_builder import ReportTable
from report_engine.utils.logger import get_logger

logger = get_logger(__name__)

TablesInput = Union[ReportTable, Iterable[ReportTable]]


class BaseSink(ABC):
    """
    Abstract base class for report sinks.
    A sink turns one or more finished ReportTables into file content.
    """

    format_name: str = ""
    media_type: str = "application/octet-stream"
    file_extension: str = ""

    def __init__(self, settings: Optional[Settings] = None, **kwargs):
        """
        Initialize base sink

        Args:
            settings: Optional settings override
            **kwargs: Sink specific options
        """
        self.settings = settings or get_settings()
        self.logger = logger
        self.config = kwargs

    @abstractmethod
    def write(self, tables: List[ReportTable]) -> bytes:
        """
        Render tables into file content

        Args:
            tables: Tables in output order

        Returns:
            File content
        """
        pass

    def render(self, tables: TablesInput) -> bytes:
        """Render a table or a sequence of tables, wrapping unexpected failures."""
        tables = self._as_list(tables)
        if not tables:
            raise SinkRenderError("No tables to render", sink=self.format_name)

        try:
            content = self.write(tables)
        except AppException:
            raise
        except Exception as e:
            self.logger.error(f"{self.__class__.__name__} failed: {str(e)}")
            raise SinkRenderError(
                f"Failed to render {self.format_name} output: {str(e)}",
                sink=self.format_name,
            ) from e

        self.logger.info(
            f"Rendered {len(tables)} table(s) to {self.format_name} ({len(content)} bytes)"
        )
        return content

    @staticmethod
    def _as_list(tables: TablesInput) -> List[ReportTable]:
        if isinstance(tables, ReportTable):
            return [tables]
        return list(tables or [])
