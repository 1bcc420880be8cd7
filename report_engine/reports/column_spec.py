"""
Column declarations for report tables.

A ColumnSpec carries everything a sink needs to know about one column: its
header label, how numbers are displayed and which conditional style buckets
apply. Columns are always addressed by zero-based position in the declared
column list.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

from report_engine.core.enums import Alignment, FormatKind, StyleTag
from report_engine.core.exceptions import ReportConfigurationError
from report_engine.transformers.conditions import Condition
from report_engine.transformers.metric_calculator import round_metric, safe_number

Predicate = Union[Condition, Callable[[Any], bool]]

_NOT_NUMERIC = object()


def _numeric(value: Any) -> Any:
    if value is None or isinstance(value, bool) or value == "":
        return _NOT_NUMERIC
    number = safe_number(value, default=None)
    return _NOT_NUMERIC if number is None else number


@dataclass(frozen=True)
class FormatRule:
    """Display format for the values of one column."""

    kind: FormatKind = FormatKind.RAW
    decimals: int = 0

    @classmethod
    def percentage(cls, decimals: int = 2) -> "FormatRule":
        """Values already on the 0-100 scale."""
        return cls(FormatKind.PERCENTAGE, decimals)

    @classmethod
    def decimal(cls, decimals: int = 2) -> "FormatRule":
        return cls(FormatKind.DECIMAL, decimals)

    @classmethod
    def integer(cls) -> "FormatRule":
        return cls(FormatKind.INTEGER, 0)

    @classmethod
    def grouped_integer(cls) -> "FormatRule":
        return cls(FormatKind.GROUPED_INTEGER, 0)

    @classmethod
    def raw(cls) -> "FormatRule":
        return cls(FormatKind.RAW, 0)

    @property
    def _decimal_pattern(self) -> str:
        return "0." + "0" * self.decimals if self.decimals > 0 else "0"

    @property
    def number_format(self) -> str:
        """Excel number format code."""
        if self.kind == FormatKind.PERCENTAGE:
            # Literal percent sign: values are 0-100, not fractions
            return f'{self._decimal_pattern}"%"'
        if self.kind == FormatKind.DECIMAL:
            return self._decimal_pattern
        if self.kind == FormatKind.INTEGER:
            return "0"
        if self.kind == FormatKind.GROUPED_INTEGER:
            return "#,##0"
        return "General"

    def render(self, value: Any) -> str:
        """Render a cell value as display text."""
        if value is None:
            return ""
        if self.kind == FormatKind.RAW:
            return str(value)

        number = _numeric(value)
        if number is _NOT_NUMERIC:
            return str(value)

        if self.kind == FormatKind.PERCENTAGE:
            return f"{round_metric(number, self.decimals):.{self.decimals}f}%"
        if self.kind == FormatKind.DECIMAL:
            return f"{round_metric(number, self.decimals):.{self.decimals}f}"
        if self.kind == FormatKind.INTEGER:
            return str(round_metric(number, 0))
        return f"{round_metric(number, 0):,}"


@dataclass(frozen=True)
class StyleRule:
    """Maps values satisfying a predicate to a style bucket."""

    condition: Predicate
    tag: StyleTag

    def matches(self, value: Any) -> bool:
        return bool(self.condition(value))


@dataclass(frozen=True)
class ColumnSpec:
    """
    Static metadata for one report column.

    Attributes:
        label: Header text, unique within a report
        key: Optional machine name used for lookups and JSON output
        format: Display format, None means raw
        styles: Ordered style rules, first match wins
        width: Fixed column width in Excel units, None derives it from content
        alignment: Horizontal alignment for data cells
    """

    label: str
    key: Optional[str] = None
    format: Optional[FormatRule] = None
    styles: Tuple[StyleRule, ...] = ()
    width: Optional[float] = None
    alignment: Optional[Alignment] = None

    def __post_init__(self):
        # Styles may be given as a list; stored as a tuple
        if not isinstance(self.styles, tuple):
            object.__setattr__(self, "styles", tuple(self.styles))

    @property
    def format_rule(self) -> FormatRule:
        return self.format or FormatRule.raw()

    def style_for(self, value: Any) -> Optional[StyleTag]:
        """First matching style tag for value, or None."""
        for rule in self.styles:
            if rule.matches(value):
                return rule.tag
        return None


def resolve_column_index(columns: Sequence[ColumnSpec], label_or_key: str) -> int:
    """
    Zero-based position of a column by label or key.

    Raises:
        ReportConfigurationError: If no column matches
    """
    for index, column in enumerate(columns):
        if column.label == label_or_key or (column.key and column.key == label_or_key):
            return index
    raise ReportConfigurationError(
        f"Unknown column '{label_or_key}'",
        details={"columns": [column.label for column in columns]},
    )


def format_map(columns: Sequence[ColumnSpec]) -> Dict[int, FormatRule]:
    """Column index to FormatRule for every column declaring a format."""
    return {index: column.format for index, column in enumerate(columns) if column.format}


def style_map(columns: Sequence[ColumnSpec]) -> Dict[int, Tuple[StyleRule, ...]]:
    """Column index to ordered style rules for every styled column."""
    return {index: column.styles for index, column in enumerate(columns) if column.styles}


def assign_styles(table) -> Dict[Tuple[int, int], StyleTag]:
    """
    Evaluate style rules against a table's data cells.

    Returns:
        Mapping of (data row index, column index) to StyleTag. Placeholder
        tables get no assignments.
    """
    if table.is_placeholder:
        return {}

    assignments: Dict[Tuple[int, int], StyleTag] = {}
    styled_columns = style_map(table.columns)
    for row_index, row in enumerate(table.rows):
        for column_index, rules in styled_columns.items():
            value = row[column_index]
            for rule in rules:
                if rule.matches(value):
                    assignments[(row_index, column_index)] = rule.tag
                    break
    return assignments


def styles(*pairs: Tuple[Predicate, StyleTag]) -> Tuple[StyleRule, ...]:
    """Shorthand: ``styles((gte(80), StyleTag.GOOD), (lt(40), StyleTag.BAD))``."""
    return tuple(StyleRule(condition, tag) for condition, tag in pairs)
