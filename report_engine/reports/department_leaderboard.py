from typing import Any, Dict, List, Optional, Sequence

from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule
from report_engine.transformers.field_resolver import resolve, resolve_first
from report_engine.transformers.metric_calculator import rank_badge, round_metric


class DepartmentLeaderboardReport(BaseReport):
    """
    Departments ranked by performance.

    Input is expected in ranking order; rank is the 1-based position.
    """

    report_type = "department_leaderboard"
    title = "Department Leaderboard"
    description = "Department ranking by performance"
    data_key = "department_leaderboard"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Rank", key="rank", format=FormatRule.integer(), width=8),
            ColumnSpec("Department", key="department", width=24),
            ColumnSpec("Total Users", key="total_users", format=FormatRule.grouped_integer(), width=12),
            ColumnSpec("Completed", key="completed", format=FormatRule.grouped_integer(), width=12),
            ColumnSpec("Completion %", key="completion_rate", format=FormatRule.percentage(2), width=14),
            ColumnSpec("Engagement Score", key="engagement_score", format=FormatRule.decimal(2), width=16),
            ColumnSpec("Badge", key="badge", width=10),
        ]

    def unified_rows(self, data: Any) -> List[Dict[str, Any]]:
        rows = super().unified_rows(data)
        for position, row in enumerate(rows, start=1):
            row["rank"] = position
        return rows

    def placeholder_row(self) -> Optional[Sequence[Any]]:
        return ["", "No department data available", "", "", "", "", ""]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        rank = row["rank"]
        return [
            rank,
            resolve_first(row, ["name", "department"], ""),
            resolve(row, "total_users", 0),
            resolve_first(row, ["completed_modules", "total_completed"], 0),
            round_metric(resolve(row, "completion_rate", 0), self.decimals),
            round_metric(resolve(row, "engagement_score", 0), self.decimals),
            rank_badge(rank),
        ]
