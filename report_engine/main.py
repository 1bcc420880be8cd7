from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from report_engine.core.config import get_settings
from report_engine.core.exceptions import AppException, InternalServerError, app_exception_handler
from report_engine.core.logging import setup_logging
from report_engine.interfaces.http.routes import api_router
from report_engine.reports import get_supported_reports
from report_engine.schemas.base import HealthCheckSchema
from report_engine.utils.logger import get_logger

logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info(f"Starting {settings.project_name} v{settings.version} ({len(get_supported_reports())} reports)")
    yield
    logger.info("Shutting down")


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Tabular report generation engine",
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_exception_handler(AppException, app_exception_handler)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        error = InternalServerError(str(exc) if settings.debug else "Internal server error occurred")
        return JSONResponse(status_code=error.status_code, content={"error": error.to_dict()})

    @app.get("/health", response_model=HealthCheckSchema)
    async def health_check() -> HealthCheckSchema:
        """Health check endpoint."""
        return HealthCheckSchema(status="healthy", version=settings.version)

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_application()


def main():
    uvicorn.run(
        "report_engine.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
