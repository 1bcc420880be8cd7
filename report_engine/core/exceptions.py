from typing import Any, Dict, Iterable, Optional, Union

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status


def _collect_details(details: Optional[Dict[str, Any]] = None, **fields) -> Dict[str, Any]:
    """Merge explicit details with keyword fields, dropping fields that are None."""
    merged = dict(details or {})
    merged.update({key: value for key, value in fields.items() if value is not None})
    return merged


class AppException(Exception):
    """
    Base class for errors surfaced to API and CLI callers.

    Subclasses set ``error_code`` and ``status_code`` as class attributes.
    """

    error_code: str = "APP_ERROR"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.error_code, "message": self.message, "details": self.details}

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, status_code={self.status_code})"


class ValidationException(AppException):
    error_code = "VALIDATION_ERROR"
    status_code = 422

    def __init__(self, message: str = "Validation failed", field: Optional[str] = None,
                 value: Any = None, details: Optional[Dict[str, Any]] = None):
        self.field = field
        self.value = value
        super().__init__(message, details=_collect_details(details, field=field, value=value))


class NotFoundError(AppException):
    """A requested resource does not exist."""

    error_code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource", resource_id: Optional[Union[str, int]] = None,
                 message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.resource = resource
        self.resource_id = resource_id
        if message is None:
            message = f"{resource} '{resource_id}' not found" if resource_id else f"{resource} not found"
        super().__init__(message, details=_collect_details(details, resource=resource, resource_id=resource_id))


class UnknownReportError(NotFoundError):
    """The requested report type is not registered."""

    def __init__(self, report_type: str, supported: Optional[Iterable[str]] = None):
        self.report_type = report_type
        super().__init__(
            resource="Report type",
            resource_id=report_type,
            message=f"Unsupported report type: {report_type}",
            details={"supported_types": list(supported or [])},
        )


class BadRequestError(AppException):
    error_code = "BAD_REQUEST"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Bad request", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


class InternalServerError(AppException):
    error_code = "INTERNAL_SERVER_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


class ServiceError(AppException):
    """A service operation failed for an unexpected reason."""

    error_code = "SERVICE_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Service operation failed", operation: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.operation = operation
        super().__init__(message, details=_collect_details(details, operation=operation))


class ReportConfigurationError(AppException):
    """
    A report definition is internally inconsistent: no columns, empty or
    duplicate labels, or a row whose cell count differs from the column count.
    """

    error_code = "REPORT_CONFIGURATION_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str = "Report configuration error",
        report: Optional[str] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        row_index: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.report = report
        self.expected = expected
        self.actual = actual
        self.row_index = row_index
        super().__init__(
            message,
            details=_collect_details(
                details,
                report=report,
                expected_columns=expected,
                actual_columns=actual,
                row_index=row_index,
            ),
        )


class SinkRenderError(AppException):
    """A sink could not produce its artifact."""

    error_code = "SINK_RENDER_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Report rendering failed", sink: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.sink = sink
        super().__init__(message, details=_collect_details(details, sink=sink))


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})
