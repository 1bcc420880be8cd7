from typing import Any, Dict, List, Sequence

from report_engine.core.constants import MISSING_TEXT
from report_engine.core.enums import Alignment, ComplianceStatus, StyleTag
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule, styles
from report_engine.transformers.conditions import eq
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.metric_calculator import classify_compliance, percentage_rate
from report_engine.utils.date_utils import format_date


class ComplianceDetailReport(BaseReport):
    """Training compliance per user."""

    report_type = "compliance_detail"
    title = "Compliance Detail"
    sheet_title = "Compliance Data"
    description = "Training compliance per user"
    data_key = "compliance"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("ID", key="id", width=6, alignment=Alignment.CENTER),
            ColumnSpec("Full Name", key="name", width=18),
            ColumnSpec("NIP", key="nip", width=13),
            ColumnSpec("Email", key="email", width=20),
            ColumnSpec("Department", key="department", width=15),
            ColumnSpec("User Status", key="status", width=12, alignment=Alignment.CENTER),
            ColumnSpec("Role", key="role", width=10),
            ColumnSpec(
                "Total Trainings", key="total_trainings", format=FormatRule.integer(),
                width=14, alignment=Alignment.CENTER,
            ),
            ColumnSpec(
                "Completed Trainings", key="completed_trainings", format=FormatRule.integer(),
                width=15, alignment=Alignment.CENTER,
            ),
            ColumnSpec(
                "Completion %", key="completion_pct", format=FormatRule.percentage(2),
                width=12, alignment=Alignment.CENTER,
            ),
            ColumnSpec(
                "Compliance Status",
                key="compliance_status",
                styles=styles(
                    (eq(ComplianceStatus.COMPLIANT.value), StyleTag.GOOD),
                    (eq(ComplianceStatus.NON_COMPLIANT.value), StyleTag.BAD),
                ),
                width=16,
                alignment=Alignment.CENTER,
            ),
            ColumnSpec("Registered", key="created_at", width=15),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        total = resolve(row, "total_trainings", 0)
        completed = resolve(row, "completed_trainings", 0)
        completion_pct = percentage_rate(completed, total, self.decimals)

        return [
            resolve(row, "id", MISSING_TEXT),
            resolve(row, "name", MISSING_TEXT),
            resolve(row, "nip", MISSING_TEXT),
            resolve(row, "email", MISSING_TEXT),
            resolve(row, "department", MISSING_TEXT),
            str(resolve(row, "status", "unknown")).upper(),
            resolve(row, "role", MISSING_TEXT),
            total,
            completed,
            completion_pct,
            classify_compliance(completion_pct),
            format_date(resolve(row, "created_at"), "%d-%m-%Y"),
        ]
