from typing import Any, Dict, List, Sequence

from report_engine.core.constants import MISSING_TEXT
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule
from report_engine.transformers.field_resolver import resolve, resolve_first
from report_engine.transformers.metric_calculator import percentage_rate, round_metric
from report_engine.utils.date_utils import format_date

SCORE_FIELDS = ["avg_module_score", "avg_score"]


class LearnerDetailReport(BaseReport):
    """
    Learner roster with identity fields and last activity.

    Reads the same ``learner_progress`` collection as the progress report.
    """

    report_type = "learner_detail"
    title = "Learner Detail"
    description = "Training participant progress detail"
    data_key = "learner_progress"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Learner ID", key="id", width=12),
            ColumnSpec("Full Name", key="name", width=22),
            ColumnSpec("NIP", key="nip", width=14),
            ColumnSpec("Department", key="department", width=16),
            ColumnSpec("Modules Enrolled", key="modules_enrolled", format=FormatRule.integer(), width=16),
            ColumnSpec("Modules Completed", key="modules_completed", format=FormatRule.integer(), width=16),
            ColumnSpec("Completion %", key="completion_pct", format=FormatRule.percentage(2), width=13),
            ColumnSpec("Avg Score", key="avg_score", format=FormatRule.decimal(2), width=15),
            ColumnSpec("Last Active", key="last_active", width=20),
            ColumnSpec("Status", key="status", width=12),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        enrolled = resolve(row, "modules_enrolled", 0)
        completed = resolve(row, "modules_completed", 0)

        return [
            resolve(row, "id", ""),
            resolve(row, "name", ""),
            resolve(row, "nip", ""),
            resolve(row, "department", MISSING_TEXT),
            enrolled,
            completed,
            percentage_rate(completed, enrolled, self.decimals),
            round_metric(resolve_first(row, SCORE_FIELDS, 0), self.decimals),
            format_date(resolve(row, "last_active"), "%Y-%m-%d %H:%M", default=MISSING_TEXT),
            resolve(row, "status", "Active"),
        ]
