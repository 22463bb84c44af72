# backend/app/api/v1/router.py
from fastapi import APIRouter

from backend.app.api.v1.endpoints import filters, tasks

api_router = APIRouter()

api_router.include_router(filters.router, prefix="", tags=["Filter Values"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
