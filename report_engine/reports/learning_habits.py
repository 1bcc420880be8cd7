from typing import Any, Dict, List, Sequence

from report_engine.core.enums import StyleTag
from report_engine.reports.base_report import BaseReport
from report_engine.reports.column_spec import ColumnSpec, FormatRule, styles
from report_engine.transformers.conditions import gt, gte
from report_engine.transformers.field_resolver import resolve
from report_engine.transformers.metric_calculator import round_metric, safe_number
from report_engine.transformers.row_normalizer import SourceSpec

# Index matches day_of_week as delivered upstream (0 = Sunday)
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

# Heatmap columns run Monday..Sunday
HEATMAP_ORDER = [1, 2, 3, 4, 5, 6, 0]

HEATMAP_STYLES = styles(
    (gte(75), StyleTag.GOOD),
    (gte(50), StyleTag.NEUTRAL),
    (gt(0), StyleTag.WARNING),
)


def day_name(day_of_week: Any) -> str:
    index = safe_number(day_of_week, default=-1)
    if index in range(len(DAY_NAMES)):
        return DAY_NAMES[int(index)]
    return "Unknown"


class LearningHabitsReport(BaseReport):
    """
    Daily learning trend combined with weekday engagement averages.

    Each trend row carries the same seven weekday averages taken from the
    performance heatmap, keyed by ``day_of_week``.
    """

    report_type = "learning_habits"
    title = "Learning Habits Analytics"
    description = "Daily learning trend & optimal study time patterns (heatmap analytics)"
    data_key = "trend_data"
    heatmap_data_key = "performance_heatmap"

    def columns(self) -> List[ColumnSpec]:
        heatmap_columns = [
            ColumnSpec(
                f"{DAY_NAMES[day]} Avg",
                key=f"{DAY_NAMES[day].lower()}_avg",
                format=FormatRule.decimal(1),
                styles=HEATMAP_STYLES,
                width=12,
            )
            for day in HEATMAP_ORDER
        ]
        return [
            ColumnSpec("Date", key="date", width=14),
            ColumnSpec("Day", key="day", width=12),
            ColumnSpec("Total Active Users", key="active_users", format=FormatRule.integer(), width=14),
            ColumnSpec("Modules Started", key="modules_started", format=FormatRule.integer(), width=14),
            ColumnSpec("Modules Completed", key="modules_completed", format=FormatRule.integer(), width=14),
            ColumnSpec("Avg Time Spent (min)", key="avg_time_spent", format=FormatRule.decimal(2), width=15),
            ColumnSpec("Peak Hour (0-23)", key="peak_hour", width=12),
        ] + heatmap_columns

    def weekday_averages(self, data: Any) -> Dict[int, Any]:
        heatmap = self.normalizer.normalize([
            SourceSpec(
                key_field="day_of_week",
                records=self.records(data, self.heatmap_data_key),
                name=self.heatmap_data_key,
            )
        ])
        averages = {day: 0 for day in range(len(DAY_NAMES))}
        for day, item in heatmap.items():
            index = safe_number(day, default=-1)
            if index in averages:
                averages[index] = resolve(item, "avg_engagement", 0)
        return averages

    def unified_rows(self, data: Any) -> List[Dict[str, Any]]:
        averages = self.weekday_averages(data)
        rows = self.normalizer.collect(self.records(data, self.data_key))
        for row in rows:
            row["weekday_averages"] = averages
        return rows

    def map_row(self, row: Dict[str, Any]) -> Sequence[Any]:
        averages = row["weekday_averages"]
        return [
            resolve(row, "date", ""),
            day_name(resolve(row, "day_of_week", 0)),
            resolve(row, "active_users", 0),
            resolve(row, "modules_started", 0),
            resolve(row, "modules_completed", 0),
            round_metric(resolve(row, "avg_time_spent", 0), self.decimals),
            f"{resolve(row, 'peak_hour', 0)}:00",
        ] + [round_metric(averages[day], 1) for day in HEATMAP_ORDER]
