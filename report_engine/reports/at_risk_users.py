from typing import Any, Dict, List, Sequence

from report_engine.core.enums import RiskLevel, StyleTag
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule, styles
from report_engine.transformers.conditions import eq
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.metric_calculator import classify_risk_level

REMINDER_ACTION = "Send Reminder"


class AtRiskUsersReport(BaseReport):
    """Learners likely to drop out, ranked by inactivity."""

    report_type = "at_risk_users"
    title = "At-Risk Users"
    description = "Learners at risk of dropping out"
    data_key = "at_risk_users"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Learner ID", key="id", width=12),
            ColumnSpec("Name", key="name", width=22),
            ColumnSpec("Email", key="email", width=26),
            ColumnSpec("Department", key="department", width=18),
            ColumnSpec("Days Inactive", key="days_inactive", format=FormatRule.integer(), width=14),
            ColumnSpec("Account Age (days)", key="account_age", format=FormatRule.integer(), width=16),
            ColumnSpec(
                "Risk Level",
                key="risk_level",
                styles=styles(
                    (eq(RiskLevel.CRITICAL.value), StyleTag.BAD),
                    (eq(RiskLevel.HIGH.value), StyleTag.WARNING),
                    (eq(RiskLevel.MEDIUM.value), StyleTag.NEUTRAL),
                ),
                width=12,
            ),
            ColumnSpec("Action", key="action", width=16),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        days_inactive = resolve(row, "days_inactive", 0)
        return [
            resolve(row, "id", ""),
            resolve(row, "name", ""),
            resolve(row, "email", ""),
            resolve(row, "department", ""),
            days_inactive,
            resolve(row, "account_age", 0),
            classify_risk_level(days_inactive),
            REMINDER_ACTION,
        ]
