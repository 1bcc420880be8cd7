import json
import logging

import pytest

from report_engine.core.logging import JSONFormatter, StructuredLogger, log_execution_time
from report_engine.transformers import RowNormalizer


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("report_engine.test", logging.WARNING, __file__, 10, "skipped %s", (3,), None)
    record.extra_fields = {"source": "exams", "skipped": 3}

    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "skipped 3"
    assert entry["level"] == "WARNING"
    assert entry["source"] == "exams"
    assert entry["skipped"] == 3


def test_structured_logger_attaches_fields(caplog):
    caplog.set_level(logging.INFO, logger="report_engine.test")
    StructuredLogger("report_engine.test", report="demo").info("built", rows=2)
    assert caplog.records[-1].extra_fields == {"report": "demo", "rows": 2}


def test_normalizer_logs_skipped_records(caplog):
    caplog.set_level(logging.WARNING)
    RowNormalizer().normalize([("id", [{"name": "no id"}])])
    record = next(r for r in caplog.records if "Skipped 1 record" in r.getMessage())
    assert record.extra_fields["key_field"] == "id"
    assert record.extra_fields["skipped"] == 1


def test_log_execution_time_reraises(caplog):
    logger = logging.getLogger("report_engine.timing")

    @log_execution_time(logger)
    def fail():
        raise ValueError("nope")

    caplog.set_level(logging.ERROR, logger="report_engine.timing")
    with pytest.raises(ValueError):
        fail()
    assert "fail failed after" in caplog.records[-1].getMessage()


def test_bind_adds_fields_without_touching_parent(caplog):
    caplog.set_level(logging.INFO, logger="report_engine.test")
    parent = StructuredLogger("report_engine.test", report="demo")
    parent.bind(source="quiz_difficulty").info("merged")
    assert caplog.records[-1].extra_fields == {"report": "demo", "source": "quiz_difficulty"}
    assert parent.default_fields == {"report": "demo"}
