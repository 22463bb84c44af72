# backend/app/services/task_status_service.py
import logging
from typing import Any, Optional

from celery import Celery
from celery.result import AsyncResult

from backend.app.schemas.task import TaskStatusEnum, TaskStatusResponse
from filtervalues.core.config import settings

logger = logging.getLogger(__name__)
logger.setLevel(settings.LOG_LEVEL.upper())


class TaskStatusService:
    """
    Reads and interprets the state of filter value jobs.
    Acts as an Adapter over Celery's AsyncResult.
    """

    def __init__(self, celery_app_instance: Celery):
        if celery_app_instance is None:
            raise ValueError("Celery app instance is required for TaskStatusService.")
        self.celery_app = celery_app_instance
        logger.debug("TaskStatusService initialized.")

    def _failure_details(self, task_info: Any) -> str:
        if isinstance(task_info, Exception):
            return f"Exception: {str(task_info)}"
        if isinstance(task_info, dict):
            exc_type = task_info.get("exc_type", "UnknownType")
            exc_message = repr(task_info.get("exc_message", "No message"))
            details = f"Type: {exc_type}, Message: {exc_message}"
            failed_step = task_info.get("failed_step")
            if failed_step:
                details += f", Step: {failed_step}"
            return details
        if task_info is not None:
            return f"Failure Info: {str(task_info)[:500]}"
        return "Task failed with unknown error details."

    def get_status(self, task_id: str) -> TaskStatusResponse:
        """
        Retrieves the status of a Celery task.

        Args:
            task_id: The ID of the Celery task.

        Returns:
            A TaskStatusResponse object.
        """
        logger.debug(f"Getting status for task ID: {task_id}")
        async_result = AsyncResult(task_id, app=self.celery_app)
        task_state_str = async_result.state

        final_result: Any | None = None
        error_details: str | None = None
        progress: Optional[int] = None
        status_message: Optional[str] = None

        if task_state_str == TaskStatusEnum.SUCCESS.value:
            final_result = async_result.result
            progress = 100
            if isinstance(final_result, dict):
                status_message = final_result.get("status")

        elif task_state_str == TaskStatusEnum.FAILURE.value:
            error_details = self._failure_details(async_result.info)

        elif task_state_str in (
            TaskStatusEnum.STARTED.value,
            TaskStatusEnum.RECEIVED.value,
            TaskStatusEnum.RETRY.value,
        ):
            task_info = async_result.info
            if isinstance(task_info, dict):
                progress = task_info.get("progress")
                status_message = task_info.get("status")
            else:
                logger.warning(
                    f"Task {task_id} in state {task_state_str} has non-dict info: {type(task_info)}"
                )

        elif task_state_str == TaskStatusEnum.REVOKED.value:
            status_message = "Task was revoked."

        try:
            status_enum = TaskStatusEnum(task_state_str)
        except ValueError:
            logger.warning(
                f"Unknown Celery task state '{task_state_str}' for task {task_id}. Defaulting to PENDING."
            )
            status_enum = TaskStatusEnum.PENDING

        return TaskStatusResponse(
            task_id=task_id,
            status=status_enum,
            progress=progress,
            status_message=status_message,
            result=final_result,
            error=error_details,
        )


def get_task_status_service() -> TaskStatusService:
    from backend.app.core.celery_app import backend_celery_app

    return TaskStatusService(backend_celery_app)
