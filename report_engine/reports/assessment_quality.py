from typing import Any, Dict, List, Sequence

from report_engine.core.enums import DifficultyLevel, StyleTag
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule, styles
from report_engine.transformers.conditions import gte, lt
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.metric_calculator import (
    generate_recommendation,
    infer_difficulty,
    percentage_rate,
    round_metric,
)
from report_engine.transformers.row_normalizer import SourceSpec

DEFAULT_PASSMARK = 70
EXAM_TYPE = "Exam"
QUIZ_TYPE = "Quiz"


class AssessmentQualityReport(BaseReport):
    """
    Exam and quiz quality in one table.

    Exam statistics and quiz difficulty analysis are merged by assessment id;
    quiz fields override exam fields for the same id.
    """

    report_type = "assessment_quality"
    title = "Assessment Quality"
    description = "Exam & quiz quality: learner performance, difficulty and item reliability"
    data_key = "exam_performance"
    key_field = "id"
    quiz_data_key = "quiz_difficulty"

    def columns(self) -> List[ColumnSpec]:
        return [
            ColumnSpec("Assessment Title", key="title", width=25),
            ColumnSpec("Type", key="type", width=10),
            ColumnSpec("Total Taken", key="total_taken", format=FormatRule.integer(), width=12),
            ColumnSpec("Avg Score", key="avg_score", format=FormatRule.decimal(2), width=12),
            ColumnSpec(
                "Pass Rate %",
                key="pass_rate",
                format=FormatRule.percentage(2),
                styles=styles(
                    (gte(80), StyleTag.GOOD),
                    (gte(60), StyleTag.NEUTRAL),
                    (lt(40), StyleTag.BAD),
                ),
                width=12,
            ),
            ColumnSpec("Avg Duration (min)", key="avg_duration", format=FormatRule.grouped_integer(), width=15),
            ColumnSpec("Difficulty Level", key="difficulty", width=14),
            ColumnSpec("Discrimination Index", key="discrimination", format=FormatRule.decimal(2), width=16),
            ColumnSpec("Question Count", key="question_count", format=FormatRule.integer(), width=13),
            ColumnSpec("Reliability Score", key="reliability", format=FormatRule.decimal(2), width=14),
            ColumnSpec("Pass Mark", key="passmark", width=10),
            ColumnSpec("Recommendation", key="recommendation", width=25),
        ]

    def sources(self, data: Any) -> List[SourceSpec]:
        return [
            SourceSpec(
                key_field="id",
                records=self.records(data, self.data_key),
                field_map={"reliability_index": "reliability"},
                constants={"type": EXAM_TYPE},
                name=self.data_key,
            ),
            SourceSpec(
                key_field="id",
                records=self.records(data, self.quiz_data_key),
                field_map={
                    "total_attempts": "total_taken",
                    "reliability_index": "reliability",
                    "difficulty_level": "difficulty",
                    "discrimination_index": "discrimination",
                },
                constants={"type": QUIZ_TYPE},
                name=self.quiz_data_key,
            ),
        ]

    def difficulty(self, row: Dict[str, Any], avg_score: Any) -> str:
        """Reported difficulty; quizzes default to Medium, exams are inferred from the average score."""
        if resolve(row, "type") == QUIZ_TYPE:
            return resolve(row, "difficulty", DifficultyLevel.MEDIUM.value)
        return resolve(row, "difficulty", infer_difficulty(avg_score))

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        total_taken = resolve(row, "total_taken", 0)
        avg_score = resolve(row, "avg_score", 0)
        pass_rate = percentage_rate(resolve(row, "pass_count", 0), total_taken, self.decimals)
        discrimination = resolve(row, "discrimination", 0)
        reliability = resolve(row, "reliability", 0)

        return [
            resolve(row, "title", ""),
            resolve(row, "type", ""),
            total_taken,
            round_metric(avg_score, self.decimals),
            pass_rate,
            round_metric(resolve(row, "avg_duration", 0), 0),
            self.difficulty(row, avg_score),
            round_metric(discrimination, 2),
            resolve(row, "question_count", 0),
            round_metric(reliability, 2),
            resolve(row, "passmark", DEFAULT_PASSMARK),
            generate_recommendation(avg_score, pass_rate, discrimination, reliability),
        ]
