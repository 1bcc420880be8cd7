from typing import Any, Dict, List, Sequence

from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule
from report_engine.transformers.field_resolver import resolve, resolve_first
from report_engine.transformers.metric_calculator import percentage_rate


class ModulePerformanceReport(BaseReport):
    report_type = "module_performance"
    title = "Module Performance"
    description = "Enrollment and completion per module / training program"
    data_key = "module_stats"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Module ID", key="id", width=12),
            ColumnSpec("Module Name", key="title", width=28),
            ColumnSpec("Total Enrolled", key="total_enrolled", format=FormatRule.grouped_integer(), width=16),
            ColumnSpec("Completed", key="completed", format=FormatRule.grouped_integer(), width=14),
            ColumnSpec("In Progress", key="in_progress", format=FormatRule.grouped_integer(), width=18),
            ColumnSpec("Pending", key="pending", format=FormatRule.grouped_integer(), width=12),
            ColumnSpec("Completion Rate", key="completion_rate", format=FormatRule.percentage(2), width=16),
            ColumnSpec("In Progress %", key="in_progress_rate", format=FormatRule.percentage(2), width=14),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        total = resolve(row, "total_enrolled", 0)
        in_progress = resolve(row, "in_progress", 0)
        completed = resolve(row, "completed", 0)

        return [
            resolve(row, "id", ""),
            resolve_first(row, ["title", "name"], ""),
            total,
            completed,
            in_progress,
            resolve(row, "pending", 0),
            percentage_rate(completed, total, self.decimals),
            percentage_rate(in_progress, total, self.decimals),
        ]
