# worker/app/tasks.py
import logging
from typing import Any, Dict

from celery import Task, shared_task, states
from celery.exceptions import Reject

from filtervalues.core.config import settings
from filtervalues.exceptions import build_failure_meta
from filtervalues.schemas.enums import JobStatusEnum
from filtervalues.schemas.filter_values import (
    FilterReportRead,
    FilterValuesJobRequest,
    FilterValuesRead,
)
from filtervalues.services.filter_values import compute_filter_values
from filtervalues.services.report import render_filter_report

logger = logging.getLogger(__name__)
logger.setLevel(settings.LOG_LEVEL.upper())


def run_filter_values_job(self: Task, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Scores the dataset of a job request and, when asked, builds the report rows.
    Returns a JSON-serialisable payload.
    """
    task_id = self.request.id
    step = "Validating request"
    self.update_state(state=states.STARTED, meta={"status": step, "progress": 0})

    try:
        request = FilterValuesJobRequest.model_validate(payload)

        step = "Building task"
        task = request.dataset.to_task()
        logger.info(f"Task {task_id}: Computing filter values for {task!r}")

        step = "Computing filter values"
        self.update_state(state=states.STARTED, meta={"status": step, "progress": 30})
        result = compute_filter_values(
            task,
            methods=request.methods,
            n_select=request.n_select,
            args=request.args,
            more_args=request.more_args,
        )
        response: Dict[str, Any] = {
            "status": JobStatusEnum.SUCCESS.value,
            "filter_values": FilterValuesRead.from_result(result).model_dump(mode="json"),
        }

        if request.report is not None:
            step = "Building report"
            report = render_filter_report(
                result,
                sort=request.report.sort,
                n_show=request.report.n_show,
                color_by_type=request.report.color_by_type,
            )
            response["report"] = FilterReportRead.from_report(report).model_dump(mode="json")

        logger.info(
            f"Task {task_id}: Final State: SUCCESS. Scored {len(result)} features "
            f"with {', '.join(result.methods)}."
        )
        return response

    except Exception as e:
        error_msg_detail = (
            f"Filter values job failed at step [{step}]: {type(e).__name__}: {str(e)}"
        )
        logger.error(f"Task {task_id}: {error_msg_detail}", exc_info=True)
        self.update_state(
            state=states.FAILURE,
            meta=build_failure_meta(e, {"failed_step": step}),
        )
        raise Reject(error_msg_detail, requeue=False) from e


@shared_task(bind=True, name="tasks.compute_filter_values", acks_late=True)
def compute_filter_values_task(self: Task, payload: Dict[str, Any]):
    return run_filter_values_job(self, payload)
