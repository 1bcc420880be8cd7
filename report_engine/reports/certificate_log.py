from datetime import datetime
from typing import Any, Dict, List, Sequence

from report_engine.core.enums import StyleTag
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, styles
from report_engine.transformers.conditions import eq, ne
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.row_normalizer import SourceSpec
from report_engine.utils.date_utils import format_date, get_current_timestamp, parse_datetime

COMPLIANT = "Compliant"
EXPIRED = "Expired"
EXPIRED_NOTE = "Certificate expired"
DISTRIBUTION_LABELS = {"issued": "Issued", "pending": "Pending"}
FALSE_TEXT = {"", "0", "false", "no"}


def document_validity(value: Any) -> str:
    """'Valid' unless the flag is explicitly false; a missing flag counts as valid."""
    if value is None:
        return "Valid"
    if isinstance(value, str):
        return "Invalid" if value.strip().lower() in FALSE_TEXT else "Valid"
    return "Valid" if value else "Invalid"


def distribution_label(value: Any) -> str:
    if value is None:
        return "Pending"
    return DISTRIBUTION_LABELS.get(str(value).strip().lower(), "Failed")


class CertificateLogReport(BaseReport):
    """
    Certificate audit trail.

    One row per issued certificate, enriched with the compliance audit and the
    distribution record for the same ``certificate_id``. A certificate whose
    expiry date lies before the report date is shown as expired.
    """

    report_type = "certificate_log"
    title = "Certificate Log & Compliance"
    sheet_title = "Certificate Log"
    description = "Certificate audit trail: distribution, compliance status and document validation"
    data_key = "certificates"
    key_field = "id"
    primary_keys_only = True
    compliance_data_key = "compliance_audit"
    distribution_data_key = "certificate_distribution"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Employee ID", key="learner_id", width=12),
            ColumnSpec("Full Name", key="learner_name", width=20),
            ColumnSpec("Department", key="department", width=14),
            ColumnSpec("Program Title", key="program_title", width=20),
            ColumnSpec("Certificate Number", key="certificate_number", width=16),
            ColumnSpec("Issued Date", key="issued_date", width=13),
            ColumnSpec("Expiry Date", key="expiry_date", width=14),
            ColumnSpec(
                "Compliance Status",
                key="compliance_status",
                styles=styles(
                    (eq(COMPLIANT), StyleTag.GOOD),
                    (eq(EXPIRED), StyleTag.BAD),
                    (ne(""), StyleTag.WARNING),
                ),
                width=16,
            ),
            ColumnSpec("Document Valid", key="document_valid", width=13),
            ColumnSpec("Issued By", key="issued_by", width=13),
            ColumnSpec("Distribution Status", key="distribution_status", width=16),
            ColumnSpec("Audit Notes", key="audit_notes", width=20),
        ]

    def sources(self, data: Any) -> List[SourceSpec]:
        # Audit and distribution rows carry their own ids; keep them apart from the certificate id
        return [
            SourceSpec(
                key_field=self.key_field,
                records=self.records(data, self.data_key),
                name=self.data_key,
            ),
            SourceSpec(
                key_field="certificate_id",
                records=self.records(data, self.compliance_data_key),
                field_map={"id": "audit_id"},
                name=self.compliance_data_key,
            ),
            SourceSpec(
                key_field="certificate_id",
                records=self.records(data, self.distribution_data_key),
                field_map={"id": "distribution_id"},
                name=self.distribution_data_key,
            ),
        ]

    def is_expired(self, expiry_date: Any) -> bool:
        expiry = parse_datetime(expiry_date, self.settings.report.timezone)
        if expiry is None:
            return False
        today: datetime = self.generated_at or get_current_timestamp(self.settings.report.timezone)
        return expiry.date() < today.date()

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        expiry_date = resolve(row, "expiry_date")
        compliance_status = resolve(row, "compliance_status", COMPLIANT)
        audit_notes = resolve(row, "audit_notes", "")

        if self.is_expired(expiry_date):
            compliance_status = EXPIRED
            if audit_notes == "":
                audit_notes = EXPIRED_NOTE

        return [
            resolve(row, "learner_id", ""),
            resolve(row, "learner_name", ""),
            resolve(row, "department", "N/A"),
            resolve(row, "program_title", ""),
            resolve(row, "certificate_number", ""),
            format_date(resolve(row, "issued_date"), default=""),
            format_date(expiry_date, default=""),
            compliance_status,
            document_validity(resolve(row, "document_valid")),
            resolve(row, "issued_by", "System"),
            distribution_label(resolve(row, "distribution_status")),
            audit_notes,
        ]
