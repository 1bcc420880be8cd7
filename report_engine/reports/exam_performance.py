from typing import Any, Dict, List, Sequence

from report_engine.core.enums import StyleTag
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule, styles
from report_engine.transformers.conditions import gte, lt
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.metric_calculator import round_metric


class ExamPerformanceReport(BaseReport):
    """Exam attempts and scores per learner."""

    report_type = "exam_performance"
    title = "Exam Performance"
    description = "Exam / assessment performance per learner"
    data_key = "learner_exam_performance"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("User ID", key="id", width=12),
            ColumnSpec("Learner Name", key="name", width=22),
            ColumnSpec("Total Attempts", key="total_attempts", format=FormatRule.integer(), width=16),
            ColumnSpec(
                "Average Score",
                key="avg_score",
                format=FormatRule.decimal(2),
                styles=styles(
                    (gte(80), StyleTag.GOOD),
                    (lt(60), StyleTag.BAD),
                ),
                width=16,
            ),
            ColumnSpec("Highest Score", key="highest_score", format=FormatRule.decimal(2), width=16),
            ColumnSpec("Lowest Score", key="lowest_score", format=FormatRule.decimal(2), width=16),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        return [
            resolve(row, "id", ""),
            resolve(row, "name", ""),
            resolve(row, "total_attempts", 0),
            round_metric(resolve(row, "avg_score", 0), self.decimals),
            round_metric(resolve(row, "highest_score", 0), self.decimals),
            round_metric(resolve(row, "lowest_score", 0), self.decimals),
        ]
