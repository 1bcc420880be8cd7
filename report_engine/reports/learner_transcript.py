from typing import Any, Dict, List, Sequence

from report_engine.core.constants import MISSING_TEXT
from report_engine.core.enums import CertificateStatus, LearningQuality, StyleTag, TrainingStatus
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule, styles
from report_engine.transformers.conditions import eq
from report_engine.transformers.field_resolver import resolve, resolve_first
from report_engine.transformers.metric_calculator import (
    classify_learning_quality,
    format_duration,
    round_metric,
)
from report_engine.utils.date_utils import days_between, format_date, get_current_timestamp

STATUS_LABELS = {
    TrainingStatus.COMPLETED.value: "PASSED",
    TrainingStatus.IN_PROGRESS.value: "IN PROGRESS",
    TrainingStatus.PENDING.value: "NOT STARTED",
    TrainingStatus.FAILED.value: "FAILED",
    TrainingStatus.CANCELLED.value: "CANCELLED",
}

CERTIFICATE_LABELS = {
    CertificateStatus.ACTIVE.value: "Active",
    CertificateStatus.EXPIRED.value: "Expired",
    CertificateStatus.REVOKED.value: "Revoked",
}

DATE_FORMAT = "%d-%m-%Y"


def status_label(status: Any) -> str:
    if status in STATUS_LABELS:
        return STATUS_LABELS[status]
    return str(status if status is not None else "unknown").upper()


def certificate_label(certificate_number: Any, certificate_status: Any) -> str:
    if not certificate_number:
        return "None"
    return CERTIFICATE_LABELS.get(certificate_status, "Issued")


class LearnerTranscriptReport(BaseReport):
    """
    Master transcript: one row per learner per module.

    Used for HR audits, compliance verification and individual development
    plans. Learning quality compares time spent against the final score.
    """

    report_type = "learner_transcript"
    title = "Master Transcript"
    description = "One row per learner per module with full training history"
    data_key = "transcripts"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Employee ID (NIP)", key="nip", width=15),
            ColumnSpec("Full Name", key="name", width=20),
            ColumnSpec("Department", key="department", width=18),
            ColumnSpec("Training Title", key="module_name", width=25),
            ColumnSpec("Category", key="category", width=15),
            ColumnSpec("Status", key="status", width=18),
            ColumnSpec("Final Score", key="final_score", format=FormatRule.decimal(2), width=12),
            ColumnSpec("Progress (%)", key="progress", format=FormatRule.percentage(2), width=12),
            ColumnSpec("Learning Duration", key="duration", width=15),
            ColumnSpec("Start Date", key="enrolled_at", width=15),
            ColumnSpec("Completion Date", key="completed_at", width=15),
            ColumnSpec("Training Days", key="training_days", format=FormatRule.integer(), width=12),
            ColumnSpec("Certificate Status", key="certificate_status", width=15),
            ColumnSpec("Certificate Number", key="certificate_number", width=18),
            ColumnSpec(
                "Learning Quality",
                key="learning_quality",
                styles=styles(
                    (eq(LearningQuality.EXCELLENT.value), StyleTag.GOOD),
                    (eq(LearningQuality.GOOD.value), StyleTag.GOOD),
                    (eq(LearningQuality.PASSING.value), StyleTag.NEUTRAL),
                    (eq(LearningQuality.CONCERN.value), StyleTag.WARNING),
                    (eq(LearningQuality.SUSPECT.value), StyleTag.BAD),
                ),
                width=18,
            ),
        ]

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        status = resolve(row, "status")
        is_completed = status == TrainingStatus.COMPLETED.value
        final_score = round_metric(resolve_first(row, ["exam_score", "final_score"], 0), self.decimals)
        progress = resolve(row, "progress_percentage", 0)
        duration_minutes = resolve(row, "duration_minutes", 0)

        enrolled_at = resolve(row, "enrolled_at")
        completed_at = resolve(row, "completed_at") if is_completed else None
        training_days = days_between(
            enrolled_at,
            completed_at,
            reference=self.generated_at or get_current_timestamp(self.settings.report.timezone),
        )

        certificate_number = resolve(row, "certificate_number")

        return [
            resolve(row, "nip", MISSING_TEXT),
            resolve(row, "name", MISSING_TEXT),
            resolve(row, "department", "Unknown"),
            resolve(row, "module_name", MISSING_TEXT),
            resolve(row, "category", "General"),
            status_label(status),
            final_score,
            round_metric(progress, self.decimals),
            format_duration(duration_minutes),
            format_date(enrolled_at, DATE_FORMAT),
            format_date(completed_at, DATE_FORMAT),
            MISSING_TEXT if training_days is None else training_days,
            certificate_label(certificate_number, resolve(row, "certificate_status")),
            certificate_number if certificate_number is not None else MISSING_TEXT,
            classify_learning_quality(duration_minutes, final_score, progress),
        ]
