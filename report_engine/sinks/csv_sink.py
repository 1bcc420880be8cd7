# ==============================================
# report_engine/sinks/csv_sink.py
# ==============================================
from enum import Enum
from io import StringIO
from typing import Any, List, Optional

import pandas as pd

from report_engine.core.constants import MEDIA_TYPES
from report_engine.reports.table_builder import ReportTable
from report_engine.utils.logger import get_logger
from .base_sink import BaseSink

logger = get_logger(__name__)


class CsvSink(BaseSink):
    """
    CSV sink built on pandas.

    Each table is written as its metadata rows, the header and the data rows.
    Multiple tables are separated by one blank line. With ``formatted=True``
    data cells are rendered through each column's FormatRule.
    """

    format_name = "csv"
    media_type = MEDIA_TYPES["csv"]
    file_extension = "csv"

    def __init__(self, settings=None, formatted: bool = False, **kwargs):
        super().__init__(settings, **kwargs)
        self.formatted = formatted
        self.delimiter = kwargs.get("delimiter", ",")
        self.encoding = kwargs.get("encoding", "utf-8")

    def write(self, tables: List[ReportTable]) -> bytes:
        buffer = StringIO()
        for index, table in enumerate(tables):
            if index > 0:
                buffer.write("\n")
            self.to_dataframe(table).to_csv(
                buffer,
                index=False,
                header=False,
                sep=self.delimiter,
                lineterminator="\n",
            )
        return buffer.getvalue().encode(self.encoding)

    def to_dataframe(self, table: ReportTable) -> pd.DataFrame:
        """All lines of one table as an object-typed frame."""
        width = table.column_count
        lines = [self._pad([text], width) for text in table.metadata_rows]
        lines.append(list(table.headers))
        lines.extend(self._data_line(table, row) for row in table.rows)
        return pd.DataFrame(lines, dtype=object)

    def _data_line(self, table: ReportTable, row: tuple) -> List[Any]:
        if not self.formatted:
            return [self._plain(value) for value in row]
        return [column.format_rule.render(self._plain(value)) for column, value in zip(table.columns, row)]

    @staticmethod
    def _plain(value: Any) -> Optional[Any]:
        if isinstance(value, Enum):
            return value.value
        return value

    @staticmethod
    def _pad(cells: List[Any], width: int) -> List[Any]:
        return cells + [""] * (width - len(cells))
