"""
Template for declarative report definitions.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from report_engine.core.config import Settings, get_settings
from report_engine.core.exceptions import ValidationException
from report_engine.reports.column_spec import ColumnSpec
from report_engine.reports.table_builder import ReportTable, TableBuilder
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.row_normalizer import RowNormalizer, SourceSpec
from report_engine.utils.date_utils import format_datetime, get_current_timestamp
from report_engine.utils.logger import get_logger

logger = get_logger(__name__)

_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")
_SCALAR_TYPES = (str, bytes, int, float, bool)


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


def get_collection(data: Any, key: Optional[str], primary: bool = True) -> Any:
    """
    Fetch a named collection from report input.

    ``data`` is normally a mapping of collection name to records; the
    camelCase spelling of ``key`` is accepted as well. A bare sequence is
    treated as the primary collection itself. Missing collections yield an
    empty list.
    """
    if data is None:
        return []

    if isinstance(data, Mapping):
        if key is None:
            return data
        value = data.get(key)
        if value is None:
            value = data.get(_camel_case(key))
        return [] if value is None else value

    if isinstance(data, (list, tuple)):
        return data if primary else []

    return []


def as_records(value: Any, name: Optional[str] = None) -> List[Any]:
    """
    Turn a collection into a list of records.

    Lists and other iterables are taken as-is. A mapping whose values are all
    records (a JSON object keyed by id) contributes its values in order.
    Scalars and mappings holding scalar values are rejected rather than
    read as empty records.

    Raises:
        ValidationException: If the value is not a collection of records
    """
    if value is None:
        return []

    if isinstance(value, Mapping):
        records = list(value.values())
        scalars = [record for record in records if record is None or isinstance(record, _SCALAR_TYPES)]
        if scalars:
            raise ValidationException(
                f"Collection '{name}' must be a list of records or an object of records keyed by id",
                field=name,
            )
        return records

    if isinstance(value, _SCALAR_TYPES):
        raise ValidationException(f"Collection '{name}' must be a list of records", field=name)

    try:
        return list(value)
    except TypeError:
        raise ValidationException(f"Collection '{name}' must be a list of records", field=name)


class BaseReport(ABC):
    """
    Base class for all reports.

    Subclasses declare their columns and a row mapper; the template handles
    normalization, table building and the metadata rows shown above the
    header:

    1. the upper-cased title
    2. ``"<description> | Generated: <timestamp>"``
    3. an empty spacer row
    """

    report_type: str = ""
    title: str = "Report"
    description: str = ""
    sheet_title: Optional[str] = None

    # Collection in the input data and the key used to merge its records.
    # key_field None means records are used as-is in input order.
    data_key: Optional[str] = None
    key_field: Optional[str] = None
    # Keep only entities present in the first source; later sources enrich them
    primary_keys_only: bool = False

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.normalizer = RowNormalizer(report=self.report_type)
        self.builder = TableBuilder(report_name=self.report_type or self.__class__.__name__)
        self.generated_at: Optional[datetime] = None

    @abstractmethod
    def columns(self) -> List[ColumnSpec]:
        """Ordered column declarations."""

    @abstractmethod
    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        """Produce one data row, aligned to columns(), from a unified row."""

    @property
    def sheet_name(self) -> str:
        name = _INVALID_SHEET_CHARS.sub("", self.sheet_title or self.title)
        return name.strip()[: self.settings.report.max_sheet_title_length].strip() or "Report"

    @property
    def decimals(self) -> int:
        return self.settings.report.default_decimals

    def sources(self, data: Any) -> List[SourceSpec]:
        """Keyed sources to merge, in override order."""
        return [
            SourceSpec(
                key_field=self.key_field,
                records=self.records(data, self.data_key),
                name=self.data_key,
            )
        ]

    def unified_rows(self, data: Any) -> List[Dict[str, Any]]:
        if not self.key_field:
            return self.normalizer.collect(self.records(data, self.data_key))

        sources = self.sources(data)
        merged = self.normalizer.normalize(sources)
        if not self.primary_keys_only:
            return list(merged.values())

        primary = sources[0]
        keys = {resolve(record, primary.key_field) for record in primary.records or ()}
        return [row for key, row in merged.items() if key in keys]

    def collection(self, data: Any, key: Optional[str]) -> Any:
        """Named collection; a bare sequence only feeds the primary data_key."""
        return get_collection(data, key, primary=(key == self.data_key))

    def records(self, data: Any, key: Optional[str]) -> List[Any]:
        """Named collection as a list of records."""
        return as_records(self.collection(data, key), key)

    def placeholder_row(self) -> Optional[Sequence[Any]]:
        """Row shown when there is no data; None means all empty cells."""
        return None

    def build_table(self, data: Any) -> ReportTable:
        """Header and data rows, without metadata."""
        rows = self.unified_rows(data)
        return self.builder.build(rows, self.columns(), self.map_row, self.placeholder_row())

    def metadata_rows(self, generated_at: Optional[datetime] = None) -> List[str]:
        generated_at = generated_at or get_current_timestamp(self.settings.report.timezone)
        timestamp = format_datetime(generated_at, self.settings.report.timestamp_format)

        if self.description:
            info = f"{self.description} | Generated: {timestamp}"
        else:
            info = f"Generated: {timestamp} | System Report"

        return [self.title.upper(), info, ""]

    def render(self, data: Any, generated_at: Optional[datetime] = None) -> ReportTable:
        """
        Build the complete table including metadata rows.

        Args:
            data: Mapping of named collections, or the primary collection
            generated_at: Timestamp shown in the metadata row, defaults to now

        Returns:
            Immutable ReportTable ready for a sink
        """
        self.generated_at = generated_at or get_current_timestamp(self.settings.report.timezone)
        table = self.build_table(data)
        logger.info(
            f"Built report '{self.report_type}' with {table.row_count} row(s)"
            f"{' (placeholder)' if table.is_placeholder else ''}"
        )
        return table.with_metadata(
            title=self.title,
            sheet_name=self.sheet_name,
            metadata_rows=self.metadata_rows(self.generated_at),
            report_type=self.report_type,
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "report_type": self.report_type,
            "title": self.title,
            "description": self.description,
            "sheet_name": self.sheet_name,
            "columns": [column.label for column in self.columns()],
        }
