from typing import Any, Dict, List, Sequence

from report_engine.core.enums import StyleTag
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule, styles
from report_engine.transformers.conditions import eq, gte, lt
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.metric_calculator import (
    classify_progress_status,
    percentage_rate,
    round_metric,
)


class LearnerProgressReport(BaseReport):
    """Module completion per learner."""

    report_type = "learner_progress"
    title = "Learner Progress"
    description = "Learning progress detail for every learner"
    data_key = "learner_progress"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Learner ID", key="id", width=12),
            ColumnSpec("Name", key="name", width=22),
            ColumnSpec("Department", key="department", width=18),
            ColumnSpec("Modules Enrolled", key="modules_enrolled", format=FormatRule.integer(), width=15),
            ColumnSpec("Modules Completed", key="modules_completed", format=FormatRule.integer(), width=16),
            ColumnSpec(
                "Completion %",
                key="completion_pct",
                format=FormatRule.percentage(2),
                styles=styles(
                    (gte(80), StyleTag.GOOD),
                    (gte(50), StyleTag.NEUTRAL),
                    (lt(50), StyleTag.BAD),
                ),
                width=14,
            ),
            ColumnSpec("Avg Score", key="avg_module_score", format=FormatRule.decimal(2), width=12),
            ColumnSpec(
                "Status",
                key="status",
                styles=styles(
                    (eq("On Track"), StyleTag.GOOD),
                    (eq("At Risk"), StyleTag.BAD),
                ),
                width=14,
            ),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        enrolled = resolve(row, "modules_enrolled", 0)
        completed = resolve(row, "modules_completed", 0)
        completion_pct = percentage_rate(completed, enrolled, self.decimals)

        return [
            resolve(row, "id", ""),
            resolve(row, "name", ""),
            resolve(row, "department", "N/A"),
            enrolled,
            completed,
            completion_pct,
            round_metric(resolve(row, "avg_module_score", 0), self.decimals),
            classify_progress_status(completion_pct),
        ]
