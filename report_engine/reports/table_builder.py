"""
Table assembly for reports.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from report_engine.core.constants import EMPTY_CELL
from report_engine.core.exceptions import ReportConfigurationError
from report_engine.core.logging import log_execution_time
from report_engine.reports.column_spec import ColumnSpec
from report_engine.utils.logger import get_logger

logger = get_logger(__name__)

RowMapper = Callable[[Dict[str, Any]], Sequence[Any]]


@dataclass(frozen=True)
class ReportTable:
    """
    Finished report content handed to sinks.

    ``metadata_rows`` are free text lines shown above the header; ``rows``
    are column-aligned data rows. Every data row has exactly
    ``len(columns)`` cells.
    """

    columns: Tuple[ColumnSpec, ...]
    rows: Tuple[Tuple[Any, ...], ...]
    is_placeholder: bool = False
    title: str = ""
    sheet_name: str = ""
    metadata_rows: Tuple[str, ...] = ()
    report_type: Optional[str] = None

    @property
    def headers(self) -> List[str]:
        return [column.label for column in self.columns]

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def with_metadata(
        self,
        title: str,
        sheet_name: str,
        metadata_rows: Iterable[str],
        report_type: Optional[str] = None,
    ) -> "ReportTable":
        """Return a copy carrying title, sheet name and metadata rows."""
        return replace(
            self,
            title=title,
            sheet_name=sheet_name,
            metadata_rows=tuple(metadata_rows),
            report_type=report_type,
        )

    def records(self) -> List[Dict[str, Any]]:
        """Data rows as dicts keyed by column key (or label)."""
        keys = [column.key or column.label for column in self.columns]
        return [dict(zip(keys, row)) for row in self.rows]


class TableBuilder:
    """
    Builds header and data rows from unified rows and a row mapper.

    Metadata rows are not added here; see BaseReport.render.
    """

    def __init__(self, report_name: Optional[str] = None):
        self.report_name = report_name

    @log_execution_time(logger, logging.DEBUG)
    def build(
        self,
        unified_rows: Any,
        column_specs: Sequence[ColumnSpec],
        row_mapper: RowMapper,
        placeholder: Optional[Sequence[Any]] = None,
    ) -> ReportTable:
        """
        Map unified rows to column-aligned data rows.

        Args:
            unified_rows: Mapping of key to row (values are used) or an
                iterable of rows
            column_specs: Declared columns
            row_mapper: Produces one data row per unified row
            placeholder: Row used when there is no data, defaults to empty
                cells

        Returns:
            ReportTable without metadata

        Raises:
            ReportConfigurationError: On duplicate or empty column labels and
                on any row whose length differs from the column count
        """
        columns = tuple(column_specs)
        self._validate_columns(columns)
        expected = len(columns)

        if isinstance(unified_rows, Mapping):
            source_rows = list(unified_rows.values())
        else:
            source_rows = list(unified_rows or ())

        rows = []
        for index, unified_row in enumerate(source_rows):
            rows.append(self._check_arity(row_mapper(unified_row), expected, index))

        is_placeholder = not rows
        if is_placeholder:
            cells = placeholder if placeholder is not None else (EMPTY_CELL,) * expected
            rows.append(self._check_arity(cells, expected, 0))

        return ReportTable(columns=columns, rows=tuple(rows), is_placeholder=is_placeholder)

    def _validate_columns(self, columns: Tuple[ColumnSpec, ...]):
        if not columns:
            raise ReportConfigurationError("Report declares no columns", report=self.report_name)

        seen = set()
        for index, column in enumerate(columns):
            label = (column.label or "").strip()
            if not label:
                raise ReportConfigurationError(
                    f"Column {index} has an empty label",
                    report=self.report_name,
                    details={"column_index": index},
                )
            if label in seen:
                raise ReportConfigurationError(
                    f"Duplicate column label '{label}'",
                    report=self.report_name,
                    details={"column_index": index},
                )
            seen.add(label)

    def _check_arity(self, cells: Any, expected: int, row_index: int) -> Tuple[Any, ...]:
        if isinstance(cells, (str, bytes)) or not isinstance(cells, Iterable):
            raise ReportConfigurationError(
                f"Row {row_index} is not a sequence of cells",
                report=self.report_name,
                expected=expected,
                row_index=row_index,
            )

        row = tuple(cells)
        if len(row) != expected:
            logger.error(
                f"Row arity mismatch in {self.report_name or 'report'}: "
                f"row {row_index} has {len(row)} cells, expected {expected}"
            )
            raise ReportConfigurationError(
                f"Row {row_index} has {len(row)} cells but {expected} columns are declared",
                report=self.report_name,
                expected=expected,
                actual=len(row),
                row_index=row_index,
            )
        return row
