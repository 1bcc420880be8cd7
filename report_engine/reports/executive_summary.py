from collections.abc import Mapping
from typing import Any, Dict, List, Sequence

from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule
from report_engine.transformers.field_resolver import resolve, resolve_first, to_mapping
from report_engine.transformers.metric_calculator import round_metric

ENGAGEMENT_FIELDS = ["engagement_score", "engagementScore"]

# (label, stats field, note, decimals or None for raw counts)
SUMMARY_METRICS = [
    ("Total Learners", "total_users", "Registered learners", None),
    ("Active Users", "active_users", "Users with active status", None),
    ("Total Modules", "total_modules", "Available learning programs", None),
    ("Active Modules", "active_modules", "Modules currently running", None),
    ("Total Assignments", "total_assignments", "All training assignments", None),
    ("Completed", "completed_assignments", "Assignments finished", None),
    ("In Progress", "in_progress_assignments", "Assignments in progress", None),
    ("Avg Completion Rate", "compliance_rate", "Average completion percentage", 2),
    ("Avg Exam Score", "avg_exam_score", "Average exam score (0-100)", 2),
]


class ExecutiveSummaryReport(BaseReport):
    """Headline KPIs as metric / value / note rows."""

    report_type = "executive_summary"
    title = "Executive Summary"
    description = "Key statistics and KPIs"
    data_key = "stats"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Metric", key="metric", width=24),
            ColumnSpec("Value", key="value", format=FormatRule.decimal(2), width=14),
            ColumnSpec("Notes", key="note", width=40),
        ]

    def unified_rows(self, data: Any) -> List[Dict[str, Any]]:
        stats = self.collection(data, self.data_key)
        if isinstance(data, Mapping) and not stats:
            # Stats given at the top level
            stats = data
        stats = to_mapping(stats) if not isinstance(stats, list) else {}

        rows = [
            {
                "metric": label,
                "value": resolve(stats, field, 0) if decimals is None
                else round_metric(resolve(stats, field, 0), decimals),
                "note": note,
            }
            for label, field, note, decimals in SUMMARY_METRICS
        ]

        # Engagement is reported next to stats rather than inside it
        engagement = resolve_first(stats, ENGAGEMENT_FIELDS)
        if engagement is None and isinstance(data, Mapping):
            engagement = resolve_first(data, ENGAGEMENT_FIELDS)
        rows.append({
            "metric": "Engagement Score",
            "value": round_metric(engagement, 1),
            "note": "Share of actively engaged users (%)",
        })
        return rows

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        return [row["metric"], row["value"], row["note"]]
