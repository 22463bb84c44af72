# backend/app/api/v1/endpoints/tasks.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from backend.app.schemas.task import TaskStatusResponse
from backend.app.services.task_status_service import (
    TaskStatusService,
    get_task_status_service,
)
from filtervalues.core.config import settings

logger = logging.getLogger(__name__)
logger.setLevel(settings.LOG_LEVEL.upper())

router = APIRouter()


@router.get(
    "/{task_id}",
    response_model=TaskStatusResponse,
    summary="Get task status and result",
    description="Poll this endpoint to check the status of a background task.",
    responses={500: {"description": "Internal server error retrieving status"}},
)
async def get_task_status(
    task_id: str,
    service: TaskStatusService = Depends(get_task_status_service),
):
    try:
        return service.get_status(task_id)
    except Exception as e:
        logger.error(
            f"Error getting status for task {task_id} via service: {e}", exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve task status.",
        )
