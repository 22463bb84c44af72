import os

# Headless backend for report rendering tests; must be set before pyplot is imported
os.environ.setdefault("MPLBACKEND", "Agg")

from typing import AsyncGenerator, Dict
from unittest.mock import MagicMock, patch

import numpy as np
import pandas as pd
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backend.app.main import app
from filtervalues.filters.base import FilterRegistry
from filtervalues.learning_task import SupervisedTask
from filtervalues.schemas.enums import FeatureKindEnum, TaskTypeEnum

NUMERIC = FeatureKindEnum.NUMERIC
CATEGORICAL = FeatureKindEnum.CATEGORICAL
CLASSIFICATION = TaskTypeEnum.CLASSIFICATION
REGRESSION = TaskTypeEnum.REGRESSION


def fixed_scores(scores: Dict[str, float]):
    """Score function returning the same scores on every call."""

    def score_fn(task, n_select, **params):
        return dict(scores)

    return score_fn


# --- Tasks ---


@pytest.fixture
def mixed_task() -> SupervisedTask:
    """Features a (numeric), b (categorical), c (numeric); binary target."""
    data = pd.DataFrame(
        {
            "a": [0.1, 0.4, 0.35, 0.8, 0.9, 0.2],
            "b": pd.Categorical(["x", "y", "x", "y", "y", "x"]),
            "c": [1.0, 2.0, 1.5, 3.0, 2.5, 1.2],
            "y": [0, 1, 0, 1, 1, 0],
        }
    )
    return SupervisedTask("mixed", data, target="y", task_type=CLASSIFICATION)


@pytest.fixture
def numeric_task() -> SupervisedTask:
    """Ten numeric features f0..f9 on a regression target."""
    rng = np.random.default_rng(0)
    data = pd.DataFrame(rng.normal(size=(40, 10)), columns=[f"f{i}" for i in range(10)])
    data["y"] = 3 * data["f2"] - 2 * data["f7"] + rng.normal(scale=0.1, size=40)
    return SupervisedTask("numeric", data, target="y", task_type=REGRESSION)


# --- Registries ---


@pytest.fixture
def fake_registry() -> FilterRegistry:
    """
    M1: numeric features only. M2: numeric and categorical.
    R1: regression only. Scores are fixed so tests are deterministic.
    """
    registry = FilterRegistry()
    registry.register_function(
        "M1", [CLASSIFICATION, REGRESSION], [NUMERIC], [], fixed_scores({"a": 0.9, "c": 0.1})
    )
    registry.register_function(
        "M2",
        [CLASSIFICATION, REGRESSION],
        [NUMERIC, CATEGORICAL],
        [],
        fixed_scores({"a": 0.9, "b": 0.5, "c": 0.1}),
    )
    registry.register_function(
        "R1", [REGRESSION], [NUMERIC, CATEGORICAL], [], fixed_scores({"a": 1.0})
    )
    registry.register_function(
        "R2", [REGRESSION], [NUMERIC, CATEGORICAL], [], fixed_scores({"a": 2.0})
    )
    registry.lock()
    return registry


# --- API ---


@pytest_asyncio.fixture(scope="function")
async def test_client() -> AsyncGenerator[AsyncClient, None]:
    """Asynchronous test client bound to the FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        yield client


@pytest.fixture(scope="function")
def mock_celery_send_task():
    """Mocks the backend sender's send_task method."""
    with patch("backend.app.core.celery_app.backend_celery_app.send_task") as mock_send:
        mock_task = MagicMock()
        mock_task.id = "mock_task_id_12345"
        mock_send.return_value = mock_task
        yield mock_send


@pytest.fixture
def dataset_payload() -> dict:
    """JSON dataset equivalent to the mixed task."""
    return {
        "task_id": "mixed",
        "task_type": "classification",
        "target": "y",
        "records": [
            {"a": 0.1, "b": "x", "c": 1.0, "y": 0},
            {"a": 0.4, "b": "y", "c": 2.0, "y": 1},
            {"a": 0.35, "b": "x", "c": 1.5, "y": 0},
            {"a": 0.8, "b": "y", "c": 3.0, "y": 1},
            {"a": 0.9, "b": "y", "c": 2.5, "y": 1},
            {"a": 0.2, "b": "x", "c": 1.2, "y": 0},
        ],
        "categorical_columns": ["b"],
    }
