from enum import Enum


class ExportFormat(str, Enum):
    """Supported export artifact formats"""
    XLSX = "xlsx"
    CSV = "csv"


class FormatKind(str, Enum):
    """Display format for a report column"""
    PERCENTAGE = "PERCENTAGE"
    DECIMAL = "DECIMAL"
    INTEGER = "INTEGER"
    GROUPED_INTEGER = "GROUPED_INTEGER"
    RAW = "RAW"


class StyleTag(str, Enum):
    """Conditional style buckets applied to individual cells"""
    GOOD = "good"
    NEUTRAL = "neutral"
    WARNING = "warning"
    BAD = "bad"


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class RiskLevel(str, Enum):
    """Learner dropout risk derived from inactivity"""
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


class LearningQuality(str, Enum):
    """Learning quality inferred from duration and score signals"""
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    PASSING = "PASSING"
    SUSPECT = "SUSPECT"
    CONCERN = "CONCERN"
    STANDARD = "STANDARD"


class DifficultyLevel(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    VERY_HARD = "Very Hard"


class ComplianceStatus(str, Enum):
    COMPLIANT = "COMPLIANT"
    NON_COMPLIANT = "NON-COMPLIANT"


class TrainingStatus(str, Enum):
    """Enrollment status as stored upstream"""
    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    PENDING = "pending"
    FAILED = "failed"
    CANCELLED = "cancelled"


class CertificateStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"
