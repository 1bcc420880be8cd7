from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from report_engine.core.enums import FormatKind, StyleTag
from report_engine.reports.column_spec import assign_styles
from report_engine.reports.table_builder import ReportTable
from .base import BaseResponse


class ReportRequest(BaseModel):
    """Input for a single report: named raw collections."""
    data: Dict[str, Any] = Field(default_factory=dict, description="Named raw data collections")
    generated_at: Optional[datetime] = Field(default=None, description="Timestamp for the metadata row")


class WorkbookRequest(ReportRequest):
    """Input for a multi-sheet export."""
    report_types: List[str] = Field(..., min_length=1, description="Reports in sheet order")


class ColumnSchema(BaseModel):
    index: int
    label: str
    key: Optional[str] = None
    format: FormatKind = FormatKind.RAW
    decimals: int = 0
    number_format: str = "General"


class StyledCellSchema(BaseModel):
    row: int
    column: int
    tag: StyleTag


class ReportTableSchema(BaseModel):
    """JSON view of a rendered report table."""
    report_type: Optional[str] = None
    title: str
    sheet_name: str
    metadata_rows: List[str]
    columns: List[ColumnSchema]
    rows: List[List[Any]]
    is_placeholder: bool = False
    styles: List[StyledCellSchema] = Field(default_factory=list)

    @classmethod
    def from_table(cls, table: ReportTable) -> "ReportTableSchema":
        return cls(
            report_type=table.report_type,
            title=table.title,
            sheet_name=table.sheet_name,
            metadata_rows=list(table.metadata_rows),
            columns=[
                ColumnSchema(
                    index=index,
                    label=column.label,
                    key=column.key,
                    format=column.format_rule.kind,
                    decimals=column.format_rule.decimals,
                    number_format=column.format_rule.number_format,
                )
                for index, column in enumerate(table.columns)
            ],
            rows=[list(row) for row in table.rows],
            is_placeholder=table.is_placeholder,
            styles=[
                StyledCellSchema(row=row, column=column, tag=tag)
                for (row, column), tag in sorted(assign_styles(table).items())
            ],
        )


class ReportTypeSchema(BaseModel):
    report_type: str
    title: str
    description: str
    sheet_name: str
    columns: List[str]


class ReportListResponse(BaseResponse):
    reports: List[ReportTypeSchema]
    formats: List[str]


class ReportPreviewResponse(BaseResponse):
    table: ReportTableSchema
