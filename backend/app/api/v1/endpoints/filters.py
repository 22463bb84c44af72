# backend/app/api/v1/endpoints/filters.py
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from backend.app.core.celery_app import backend_celery_app
from backend.app.schemas.task import TaskResponse
from filtervalues.core.config import settings
from filtervalues.schemas.enums import TaskTypeEnum
from filtervalues.schemas.filter_method import FilterMethodDefinition
from filtervalues.schemas.filter_values import (
    FilterReportRead,
    FilterReportRequest,
    FilterValuesJobRequest,
    FilterValuesRead,
    FilterValuesRequest,
)
from filtervalues.services.filter_values import (
    compute_filter_values,
    get_default_registry,
)
from filtervalues.services.report import render_filter_report

logger = logging.getLogger(__name__)
logger.setLevel(settings.LOG_LEVEL.upper())

router = APIRouter()


def _compute(request: FilterValuesRequest):
    task = request.dataset.to_task()
    return compute_filter_values(
        task,
        methods=request.methods,
        n_select=request.n_select,
        args=request.args,
        more_args=request.more_args,
    )


@router.get(
    "/filters",
    response_model=List[FilterMethodDefinition],
    summary="Get Available Filter Methods",
)
async def list_filter_methods(
    task_type: Optional[TaskTypeEnum] = Query(
        None, description="Only list methods supporting this task type."
    ),
):
    """Lists the registered filter methods and what they support."""
    definitions = get_default_registry().list_definitions()
    if task_type is not None:
        definitions = [d for d in definitions if task_type in d.supported_tasks]
    logger.info(f"Returning {len(definitions)} available filter methods.")
    return definitions


# Scoring is CPU bound, so these run in the threadpool
@router.post(
    "/filter-values",
    response_model=FilterValuesRead,
    summary="Compute Filter Values",
    responses={400: {"description": "Incompatible methods or invalid parameters"}},
)
def create_filter_values(request: FilterValuesRequest):
    logger.info(
        f"Computing filter values for task '{request.dataset.task_id}' "
        f"with methods {request.methods or 'default'}"
    )
    result = _compute(request)
    return FilterValuesRead.from_result(result)


@router.post(
    "/filter-values/report",
    response_model=FilterReportRead,
    summary="Compute Filter Values and Build a Report",
    responses={400: {"description": "Incompatible methods or invalid parameters"}},
)
def create_filter_report(request: FilterReportRequest):
    result = _compute(request)
    report = render_filter_report(
        result,
        sort=request.report.sort,
        n_show=request.report.n_show,
        color_by_type=request.report.color_by_type,
    )
    return FilterReportRead.from_report(report)


@router.post(
    "/filter-values/jobs",
    response_model=TaskResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Queue a Filter Values Job",
)
async def submit_filter_values_job(request: FilterValuesJobRequest):
    """Queues the computation on the worker; poll /tasks/{task_id} for the result."""
    task_name = "tasks.compute_filter_values"
    try:
        task = backend_celery_app.send_task(
            task_name,
            args=[request.model_dump(mode="json")],
            queue=settings.FILTER_VALUES_QUEUE,
        )
    except Exception as e:
        logger.error(f"Failed to submit Celery task '{task_name}': {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to queue filter values job.",
        )
    logger.info(
        f"Dispatched task '{task_name}' for task '{request.dataset.task_id}', task ID: {task.id}"
    )
    return TaskResponse(task_id=task.id, message="Filter values job submitted.")
