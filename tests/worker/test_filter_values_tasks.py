from unittest.mock import MagicMock, patch

import pytest
from celery import states
from celery.exceptions import Reject

from filtervalues.exceptions import FeatureKindMismatchError
from worker.app.tasks import compute_filter_values_task, run_filter_values_job


# Mock logger for all tests in this module
@pytest.fixture(autouse=True)
def mock_task_logging():
    with patch("worker.app.tasks.logger", MagicMock()):
        yield


@pytest.fixture
def task_self():
    task = MagicMock()
    task.request.id = "job-1"
    return task


@pytest.fixture
def patched_registry(fake_registry):
    with patch(
        "filtervalues.services.filter_values.get_default_registry", return_value=fake_registry
    ):
        yield fake_registry


def test_job_success_with_report(task_self, patched_registry, dataset_payload):
    payload = {
        "dataset": dataset_payload,
        "methods": ["M2"],
        "report": {"sort": "dec", "n_show": 2},
    }
    response = run_filter_values_job(task_self, payload)

    assert response["status"] == "success"
    rows = response["filter_values"]["rows"]
    assert [r["scores"]["M2"] for r in rows] == [0.9, 0.5, 0.1]
    assert [r["name"] for r in response["report"]["rows"]] == ["a", "b"]
    first_state = task_self.update_state.call_args_list[0]
    assert first_state.kwargs["state"] == states.STARTED


def test_job_without_report(task_self, patched_registry, dataset_payload):
    response = run_filter_values_job(task_self, {"dataset": dataset_payload, "methods": ["M2"]})
    assert "report" not in response


def test_job_failure_rejects_with_meta(task_self, patched_registry, dataset_payload):
    with pytest.raises(Reject) as exc_info:
        run_filter_values_job(task_self, {"dataset": dataset_payload, "methods": ["M1"]})

    assert isinstance(exc_info.value.__cause__, FeatureKindMismatchError)
    failure_call = task_self.update_state.call_args_list[-1]
    assert failure_call.kwargs["state"] == states.FAILURE
    meta = failure_call.kwargs["meta"]
    assert meta["exc_type"] == "FeatureKindMismatchError"
    assert meta["failed_step"] == "Computing filter values"
    assert "categorical" in meta["exc_message"]


def test_invalid_payload_fails_at_validation(task_self):
    with pytest.raises(Reject):
        run_filter_values_job(task_self, {"methods": ["M2"]})
    meta = task_self.update_state.call_args_list[-1].kwargs["meta"]
    assert meta["failed_step"] == "Validating request"


def test_task_is_registered_under_stable_name():
    assert compute_filter_values_task.name == "tasks.compute_filter_values"
