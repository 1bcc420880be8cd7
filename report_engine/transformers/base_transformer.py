# ==============================================
# report_engine/transformers/base_transformer.py
# ==============================================
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from report_engine.utils.logger import get_logger

logger = get_logger(__name__)


class BaseTransformer(ABC):
    """
    Base class for record transformers.

    Each call to a transforming method runs inside ``tracked_run()``, which
    clears the counters of the previous run and stamps start and end times.
    """

    def __init__(self, **kwargs):
        self.logger = logger
        self.options = kwargs
        self.started_at: Optional[datetime] = None
        self.finished_at: Optional[datetime] = None
        self._clear_counters()

    @abstractmethod
    def transform(self, *args, **kwargs) -> Any:
        """Run the transformation."""

    @contextmanager
    def tracked_run(self) -> Iterator[None]:
        self._clear_counters()
        self.started_at = datetime.now(timezone.utc)
        self.finished_at = None
        try:
            yield
        finally:
            self.finished_at = datetime.now(timezone.utc)

    def _clear_counters(self):
        self.records_processed = 0
        self.records_transformed = 0
        self.records_skipped = 0
        self.transformation_warnings: List[str] = []

    def add_warning(self, warning: str):
        self.transformation_warnings.append(warning)

    @property
    def elapsed_seconds(self) -> float:
        if self.started_at is None or self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def _generate_statistics(self) -> Dict[str, Any]:
        processed = self.records_processed
        return {
            "transformer_type": type(self).__name__,
            "records_processed": processed,
            "records_transformed": self.records_transformed,
            "records_skipped": self.records_skipped,
            "skip_rate": round(self.records_skipped * 100 / processed, 2) if processed else 0.0,
            "total_warnings": len(self.transformation_warnings),
            "processing_time_seconds": self.elapsed_seconds,
            "start_time": self.started_at.isoformat() if self.started_at else None,
            "end_time": self.finished_at.isoformat() if self.finished_at else None,
        }

    @property
    def statistics(self) -> Dict[str, Any]:
        """Counters and timing of the most recent run."""
        return self._generate_statistics()

    def get_summary(self, recent: int = 10) -> Dict[str, Any]:
        """Statistics plus the last ``recent`` warnings and the options the transformer was built with."""
        return {
            "statistics": self.statistics,
            "recent_warnings": self.transformation_warnings[-recent:] if recent > 0 else [],
            "options": self.options,
        }
