from typing import Any, Dict, List, Sequence

from report_engine.core.enums import StyleTag
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule, styles
from report_engine.transformers.conditions import eq
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.metric_calculator import (
    classify_improvement,
    delta,
    growth_rate,
    improvement_percentage,
    round_metric,
)


class LearningImpactReport(BaseReport):
    """Pre-test versus post-test averages per module."""

    report_type = "learning_impact"
    title = "Learning Impact"
    description = "Learning impact analysis: pre-test vs post-test"
    data_key = "pre_post_analysis"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Module ID", key="id", width=12),
            ColumnSpec("Module Name", key="name", width=28),
            ColumnSpec("Pre-Test Avg", key="avg_pretest", format=FormatRule.decimal(2), width=14),
            ColumnSpec("Post-Test Avg", key="avg_posttest", format=FormatRule.decimal(2), width=14),
            ColumnSpec("Improvement", key="improvement", format=FormatRule.decimal(2), width=14),
            ColumnSpec("Improvement %", key="improvement_pct", format=FormatRule.percentage(2), width=15),
            ColumnSpec(
                "Status",
                key="status",
                styles=styles(
                    (eq("Excellent"), StyleTag.GOOD),
                    (eq("Good"), StyleTag.NEUTRAL),
                    (eq("Minimal"), StyleTag.WARNING),
                ),
                width=12,
            ),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        pre_test = resolve(row, "avg_pretest", 0)
        post_test = resolve(row, "avg_posttest", 0)

        return [
            resolve(row, "id", ""),
            resolve(row, "name", ""),
            round_metric(pre_test, self.decimals),
            round_metric(post_test, self.decimals),
            round_metric(delta(post_test, pre_test), self.decimals),
            improvement_percentage(post_test, pre_test, self.decimals),
            classify_improvement(growth_rate(post_test, pre_test) * 100),
        ]
