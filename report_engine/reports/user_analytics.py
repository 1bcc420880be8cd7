from typing import Any, Dict, List, Sequence

from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.metric_calculator import round_metric

NO_PERCENTAGE = "-"


class UserAnalyticsReport(BaseReport):
    """Pre-aggregated user counts by category and status, passed through in input order."""

    report_type = "user_analytics"
    title = "User Analytics"
    description = "User and training statistics by category and status"
    data_key = "users_by_department"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Category", key="category", width=22),
            ColumnSpec("Status / Type", key="status", width=20),
            ColumnSpec("Count", key="count", format=FormatRule.grouped_integer(), width=15),
            ColumnSpec("Percentage", key="percentage", format=FormatRule.percentage(2), width=16),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        percentage = resolve(row, "percentage")
        return [
            resolve(row, "category", ""),
            resolve(row, "status", ""),
            resolve(row, "count", 0),
            NO_PERCENTAGE if percentage is None else round_metric(percentage, self.decimals),
        ]
