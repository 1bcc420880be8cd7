from fastapi import APIRouter

from .reports import router as reports_router

api_router = APIRouter()
api_router.include_router(reports_router, prefix="/reports", tags=["Reports"])
