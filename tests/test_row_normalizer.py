from collections import namedtuple
from dataclasses import dataclass

import pytest

from report_engine.transformers import RowNormalizer, SourceSpec, get_transformer


@dataclass
class QuizRecord:
    id: int
    x: int = None
    y: int = None


ExamRow = namedtuple("ExamRow", ["id", "title", "total_taken", "pass_count", "avg_score"])


class SlottedRecord:
    __slots__ = ("id", "x")

    def __init__(self, id, x):
        self.id = id
        self.x = x


class PropertyRecord:
    def __init__(self, id, name):
        self._id = id
        self._name = name

    @property
    def id(self):
        return self._id

    @property
    def name(self):
        return self._name


@pytest.fixture
def normalizer():
    return RowNormalizer(report="test")


def test_later_source_overrides_and_preserves(normalizer):
    rows = normalizer.normalize([
        ("id", [{"id": 7, "x": 1, "z": 9}]),
        ("id", [{"id": 7, "x": 2, "y": 5}]),
    ])
    assert rows == {7: {"id": 7, "x": 2, "y": 5, "z": 9}}
    assert normalizer.records_merged == 1


def test_none_does_not_erase_existing_value(normalizer):
    rows = normalizer.normalize([
        ("id", [{"id": 1, "title": "Safety", "score": 80}]),
        ("id", [{"id": 1, "title": None, "score": 0}]),
    ])
    assert rows[1]["title"] == "Safety"
    assert rows[1]["score"] == 0


def test_missing_keys_are_skipped_and_counted(normalizer):
    rows = normalizer.normalize([
        SourceSpec(key_field="id", records=[{"id": 1}, {"name": "no key"}, {"id": None}, {"id": ""}], name="exams"),
    ])
    assert list(rows) == [1]
    assert normalizer.records_skipped == 3
    assert normalizer.records_processed == 4
    assert normalizer.transformation_warnings == ["Skipped 3 record(s) without 'id' in exams"]

    stats = normalizer.statistics
    assert stats["sources"] == [{"name": "exams", "processed": 4, "merged": 0, "skipped": 3}]


def test_zero_is_a_valid_key(normalizer):
    rows = normalizer.normalize([("id", [{"id": 0, "v": "zero"}])])
    assert rows == {0: {"id": 0, "v": "zero"}}


def test_mixed_record_shapes_and_first_seen_order(normalizer):
    rows = normalizer.normalize([
        ("id", [{"id": 2, "x": 1}, {"id": 1, "x": 1}]),
        ("id", [QuizRecord(id=1, y=3), QuizRecord(id=3, x=4)]),
    ])
    assert list(rows) == [2, 1, 3]
    assert rows[1] == {"id": 1, "x": 1, "y": 3}
    assert rows[3] == {"id": 3, "x": 4, "y": None}


def test_field_map_and_constants_are_source_scoped(normalizer):
    rows = normalizer.normalize([
        SourceSpec(key_field="id", records=[{"id": 1, "total": 10}], constants={"type": "Exam"}),
        SourceSpec(
            key_field="id",
            records=[{"id": 2, "total_attempts": 4}],
            field_map={"total_attempts": "total"},
            constants={"type": "Quiz"},
        ),
    ])
    assert rows[1] == {"id": 1, "total": 10, "type": "Exam"}
    assert rows[2] == {"id": 2, "total": 4, "type": "Quiz"}


def test_statistics_reset_between_runs(normalizer):
    normalizer.normalize([("id", [{"name": "x"}])])
    normalizer.normalize([("id", [{"id": 1}])])
    assert normalizer.records_skipped == 0
    assert normalizer.transformation_warnings == []


def test_collect_keeps_duplicates_and_order(normalizer):
    rows = normalizer.collect([{"a": 1}, {"a": 1}, QuizRecord(id=5)])
    assert rows == [{"a": 1}, {"a": 1}, {"id": 5, "x": None, "y": None}]
    assert normalizer.collect(None) == []


def test_registry_factory():
    assert isinstance(get_transformer("row_normalizer"), RowNormalizer)
    with pytest.raises(ValueError):
        get_transformer("pivot")


def test_run_is_timed_and_rates_reported(normalizer):
    normalizer.normalize([("id", [{"id": 1}, {"name": "x"}])])
    stats = normalizer.statistics
    assert stats["transformer_type"] == "RowNormalizer"
    assert stats["skip_rate"] == 50.0
    assert stats["records_merged"] == 0
    assert stats["start_time"] is not None
    assert stats["processing_time_seconds"] >= 0


def test_summary_lists_recent_warnings(normalizer):
    normalizer.normalize([
        SourceSpec(key_field="id", records=[{"x": 1}], name="first"),
        SourceSpec(key_field="id", records=[{"x": 2}], name="second"),
    ])
    summary = normalizer.get_summary(recent=1)
    assert summary["recent_warnings"] == ["Skipped 1 record(s) without 'id' in second"]
    assert summary["options"] == {"report": "test"}
    assert summary["statistics"]["records_skipped"] == 2


def test_namedtuple_records_are_keyed_and_merged(normalizer):
    rows = normalizer.normalize([
        ("id", [ExamRow(1, "Final", 10, 8, 80)]),
        ("id", [{"id": 1, "avg_score": 85}]),
    ])
    assert rows == {1: {"id": 1, "title": "Final", "total_taken": 10, "pass_count": 8, "avg_score": 85}}
    assert normalizer.records_skipped == 0


def test_slots_and_property_records_keep_their_fields(normalizer):
    rows = normalizer.normalize([
        ("id", [SlottedRecord(2, "slot")]),
        ("id", [PropertyRecord(5, "Citra")]),
    ])
    assert rows == {2: {"id": 2, "x": "slot"}, 5: {"id": 5, "name": "Citra"}}
    assert normalizer.transformation_warnings == []


def test_collect_reads_object_shapes(normalizer):
    rows = normalizer.collect([ExamRow(1, "Final", 10, 8, 80), PropertyRecord(5, "Citra")])
    assert rows[0]["title"] == "Final"
    assert rows[1] == {"id": 5, "name": "Citra"}
