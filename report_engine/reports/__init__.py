"""
Report definitions and the report registry.
"""

from typing import Dict, List, Optional, Type

from report_engine.core.config import Settings
from report_engine.core.exceptions import UnknownReportError

from .base_report import BaseReport, as_records
from .column_spec import ColumnSpec, FormatRule, StyleRule, assign_styles, format_map, style_map
from .table_builder import ReportTable, TableBuilder
from .assessment_quality import AssessmentQualityReport
from .at_risk_users import AtRiskUsersReport
from .certificate_analytics import CertificateAnalyticsReport
from .certificate_log import CertificateLogReport
from .compliance_detail import ComplianceDetailReport
from .department_leaderboard import DepartmentLeaderboardReport
from .exam_performance import ExamPerformanceReport
from .executive_summary import ExecutiveSummaryReport
from .learner_detail import LearnerDetailReport
from .learner_progress import LearnerProgressReport
from .learner_transcript import LearnerTranscriptReport
from .learning_habits import LearningHabitsReport
from .learning_impact import LearningImpactReport
from .module_performance import ModulePerformanceReport
from .program_performance import ProgramPerformanceReport
from .user_analytics import UserAnalyticsReport

# Report registry, in workbook sheet order
REPORT_REGISTRY: Dict[str, Type[BaseReport]] = {
    'executive_summary': ExecutiveSummaryReport,
    'learner_progress': LearnerProgressReport,
    'module_performance': ModulePerformanceReport,
    'exam_performance': ExamPerformanceReport,
    'department_leaderboard': DepartmentLeaderboardReport,
    'certificate_analytics': CertificateAnalyticsReport,
    'at_risk_users': AtRiskUsersReport,
    'learning_impact': LearningImpactReport,
    'assessment_quality': AssessmentQualityReport,
    'learning_habits': LearningHabitsReport,
    'learner_transcript': LearnerTranscriptReport,
    'compliance_detail': ComplianceDetailReport,
    'program_performance': ProgramPerformanceReport,
    'certificate_log': CertificateLogReport,
    'user_analytics': UserAnalyticsReport,
    'learner_detail': LearnerDetailReport,
}


def get_report(report_type: str, settings: Optional[Settings] = None) -> BaseReport:
    """
    Factory function to get a report definition by type

    Args:
        report_type: Registry key of the report
        settings: Optional settings override

    Returns:
        Report instance

    Raises:
        UnknownReportError: If report type is not supported
    """
    report_class = REPORT_REGISTRY.get((report_type or "").lower())

    if not report_class:
        raise UnknownReportError(report_type, get_supported_reports())

    return report_class(settings=settings)


def get_supported_reports() -> List[str]:
    """Get list of supported report types"""
    return list(REPORT_REGISTRY.keys())


def is_supported_report(report_type: str) -> bool:
    """Check if report type is supported"""
    return (report_type or "").lower() in REPORT_REGISTRY


__all__ = [
    'BaseReport',
    'as_records',
    'ColumnSpec',
    'FormatRule',
    'StyleRule',
    'ReportTable',
    'TableBuilder',
    'assign_styles',
    'format_map',
    'style_map',
    'REPORT_REGISTRY',
    'get_report',
    'get_supported_reports',
    'is_supported_report',
]
