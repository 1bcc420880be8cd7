from .base import BaseResponse, ErrorDetail, ErrorResponse, HealthCheckSchema
from .report_schemas import (
    ColumnSchema,
    ReportListResponse,
    ReportPreviewResponse,
    ReportRequest,
    ReportTableSchema,
    ReportTypeSchema,
    StyledCellSchema,
    WorkbookRequest,
)
