from fastapi import APIRouter, Depends, Query, Response
from typing import Optional

from report_engine.core.config import Settings, get_settings
from report_engine.schemas.base import ErrorResponse
from report_engine.schemas.report_schemas import (
    ReportListResponse,
    ReportPreviewResponse,
    ReportRequest,
    ReportTableSchema,
    ReportTypeSchema,
    WorkbookRequest,
)
from report_engine.services.report_service import ExportResult, ReportService
from report_engine.sinks import get_supported_formats

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_report_service(settings: Settings = Depends(get_settings)) -> ReportService:
    """Report service dependency"""
    return ReportService(settings)


def _download(result: ExportResult) -> Response:
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Report-Sheets": str(len(result.tables)),
        },
    )


@router.get("/", response_model=ReportListResponse)
async def list_reports(
    report_service: ReportService = Depends(get_report_service),
) -> ReportListResponse:
    """List available report types and export formats"""
    reports = [ReportTypeSchema(**report) for report in report_service.list_reports()]
    return ReportListResponse(
        message=f"{len(reports)} report types available",
        reports=reports,
        formats=get_supported_formats(),
    )


@router.post("/workbook", responses=ERROR_RESPONSES)
async def export_workbook(
    request: WorkbookRequest,
    export_format: Optional[str] = Query(None, alias="format", description="xlsx or csv"),
    formatted: bool = Query(False, description="CSV only: render display strings"),
    report_service: ReportService = Depends(get_report_service),
) -> Response:
    """Export several reports into one file, one sheet per report"""
    options = {"formatted": True} if formatted else {}
    result = report_service.export_workbook(
        request.report_types,
        request.data,
        export_format,
        request.generated_at,
        **options,
    )
    return _download(result)


@router.post("/{report_type}/preview", response_model=ReportPreviewResponse, responses=ERROR_RESPONSES)
async def preview_report(
    report_type: str,
    request: ReportRequest,
    report_service: ReportService = Depends(get_report_service),
) -> ReportPreviewResponse:
    """Build a report and return the table as JSON"""
    table = report_service.build_report(report_type, request.data, request.generated_at)
    return ReportPreviewResponse(
        message=f"Report '{report_type}' built with {table.row_count} row(s)",
        table=ReportTableSchema.from_table(table),
    )


@router.post("/{report_type}/export", responses=ERROR_RESPONSES)
async def export_report(
    report_type: str,
    request: ReportRequest,
    export_format: Optional[str] = Query(None, alias="format", description="xlsx or csv"),
    formatted: bool = Query(False, description="CSV only: render display strings"),
    report_service: ReportService = Depends(get_report_service),
) -> Response:
    """Build a report and download it as a file"""
    options = {"formatted": True} if formatted else {}
    result = report_service.export_report(
        report_type,
        request.data,
        export_format,
        request.generated_at,
        **options,
    )
    return _download(result)
