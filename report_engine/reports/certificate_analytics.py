from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from report_engine.reports.base_report import BaseReport, as_records
from report_engine.reports.column_spec import ColumnSpec, FormatRule
from report_engine.transformers.field_resolver import resolve, resolve_first
from report_engine.transformers.metric_calculator import percentage_rate, safe_number

COUNT_FIELDS = ["count", "total_issued"]


class CertificateAnalyticsReport(BaseReport):
    """
    Certificate distribution per program.

    Input is either a list of per-program records or a mapping with
    ``by_program`` and an optional ``total_issued``. Without ``total_issued``
    the share is computed against the sum of program counts.
    """

    report_type = "certificate_analytics"
    title = "Certificates"
    description = "Certificate distribution per program"
    data_key = "certificate_stats"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Program Name", key="name", width=28),
            ColumnSpec("Total Issued", key="count", format=FormatRule.grouped_integer(), width=14),
            ColumnSpec("Share %", key="share", format=FormatRule.percentage(2), width=12),
            ColumnSpec("Active", key="active", format=FormatRule.integer(), width=10),
            ColumnSpec("Expired", key="expired", format=FormatRule.integer(), width=10),
            ColumnSpec("Revoked", key="revoked", format=FormatRule.integer(), width=10),
        ]

    def unified_rows(self, data: Any) -> List[Dict[str, Any]]:
        stats = self.collection(data, self.data_key)
        total = None
        if isinstance(stats, Mapping):
            total = resolve(stats, "total_issued")
            stats = resolve(stats, "by_program", [])

        rows = self.normalizer.collect(as_records(stats, self.data_key))
        if total is None:
            total = sum(safe_number(resolve_first(row, COUNT_FIELDS, 0)) for row in rows)

        for row in rows:
            row["issued_total"] = total
        return rows

    def placeholder_row(self) -> Optional[Sequence[Any]]:
        return ["No certificate data available", "", "", "", "", ""]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        count = resolve_first(row, COUNT_FIELDS, 0)
        return [
            resolve(row, "name", ""),
            count,
            percentage_rate(count, row["issued_total"], self.decimals),
            resolve(row, "active", 0),
            resolve(row, "expired", 0),
            resolve(row, "revoked", 0),
        ]
