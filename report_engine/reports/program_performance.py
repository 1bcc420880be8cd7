from typing import Any, Dict, List, Sequence

from report_engine.core.enums import StyleTag
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule, styles
from report_engine.transformers.conditions import gt, lt
from report_engine.transformers.field_resolver import resolve, resolve_first
from report_engine.transformers.metric_calculator import (
    improvement_percentage,
    percentage_rate,
    round_metric,
)
from report_engine.transformers.row_normalizer import SourceSpec

COMPLETED_FIELDS = ["modules_completed", "completed", "total_completed"]
TITLE_FIELDS = ["title", "module_name", "name"]


class ProgramPerformanceReport(BaseReport):
    """
    Per-program enrollment, completion and learning impact.

    Module statistics are the primary source. Enrollment counts (keyed by
    ``module_id``) override the enrolled and completed figures, and the
    pre/post analysis adds test averages. Programs that only appear in the
    secondary sources are left out.
    """

    report_type = "program_performance"
    title = "Program Performance"
    description = "Training program performance: enrollment, completion and learning impact (pre vs post)"
    data_key = "module_stats"
    key_field = "id"
    primary_keys_only = True
    enrollment_data_key = "program_enrollment"
    impact_data_key = "pre_post_analysis"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Program Title", key="title", width=25),
            ColumnSpec("Category", key="category", width=15),
            ColumnSpec("Total Enrolled", key="total_enrolled", format=FormatRule.grouped_integer(), width=14),
            ColumnSpec("Completed", key="completed", format=FormatRule.grouped_integer(), width=12),
            ColumnSpec("Completion Rate %", key="completion_rate", format=FormatRule.percentage(2), width=15),
            ColumnSpec("Avg Score", key="avg_score", format=FormatRule.decimal(2), width=12),
            ColumnSpec("Pass Rate %", key="pass_rate", format=FormatRule.percentage(2), width=13),
            ColumnSpec("Pre-Test Avg", key="avg_pretest", format=FormatRule.decimal(2), width=14),
            ColumnSpec("Post-Test Avg", key="avg_posttest", format=FormatRule.decimal(2), width=14),
            ColumnSpec(
                "Improvement %",
                key="improvement_pct",
                format=FormatRule.percentage(2),
                styles=styles(
                    (gt(20), StyleTag.GOOD),
                    (gt(10), StyleTag.NEUTRAL),
                    (lt(0), StyleTag.BAD),
                ),
                width=13,
            ),
            ColumnSpec("Avg Duration (min)", key="avg_duration", format=FormatRule.grouped_integer(), width=16),
            ColumnSpec("Rating", key="avg_rating", format=FormatRule.decimal(1), width=10),
        ]

    def sources(self, data: Any) -> List[SourceSpec]:
        return [
            SourceSpec(
                key_field=self.key_field,
                records=self.records(data, self.data_key),
                name=self.data_key,
            ),
            SourceSpec(
                key_field="module_id",
                records=self.records(data, self.enrollment_data_key),
                field_map={"completed_count": "modules_completed"},
                name=self.enrollment_data_key,
            ),
            SourceSpec(
                key_field="id",
                records=self.records(data, self.impact_data_key),
                field_map={
                    "pre_test_avg": "avg_pretest",
                    "post_test_avg": "avg_posttest",
                    "name": "impact_module_name",
                },
                name=self.impact_data_key,
            ),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        enrolled = resolve(row, "total_enrolled", 0)
        completed = resolve_first(row, COMPLETED_FIELDS, 0)
        pre_test = resolve(row, "avg_pretest", 0)
        post_test = resolve(row, "avg_posttest", 0)

        return [
            resolve_first(row, TITLE_FIELDS, ""),
            resolve(row, "category", "General"),
            enrolled,
            completed,
            percentage_rate(completed, enrolled, self.decimals),
            round_metric(resolve(row, "avg_score", 0), self.decimals),
            percentage_rate(resolve(row, "pass_count", 0), enrolled, self.decimals),
            round_metric(pre_test, self.decimals),
            round_metric(post_test, self.decimals),
            improvement_percentage(post_test, pre_test, self.decimals),
            round_metric(resolve(row, "avg_duration", 0), 0),
            round_metric(resolve(row, "avg_rating", 0), 1),
        ]
