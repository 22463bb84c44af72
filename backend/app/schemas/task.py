# backend/app/schemas/task.py
import enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class TaskResponse(BaseModel):
    """Response model when a background task is successfully initiated."""
    task_id: str = Field(..., description="The unique ID of the background task.")
    message: str = Field("Task successfully submitted.", description="Informational message.")


class TaskStatusEnum(str, enum.Enum):
    PENDING = "PENDING"
    RECEIVED = "RECEIVED"
    STARTED = "STARTED"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    RETRY = "RETRY"
    REVOKED = "REVOKED"


class TaskStatusResponse(BaseModel):
    """Response model for checking the status of a background task."""
    task_id: str = Field(..., description="The unique ID of the background task.")
    status: TaskStatusEnum = Field(..., description="Current high-level status of the task.")
    progress: Optional[int] = Field(None, description="Percentage progress of the task (if available).")
    status_message: Optional[str] = Field(None, description="Current step reported by the worker (if available).")
    result: Any | None = Field(None, description="Final result of the task if completed successfully.")
    error: str | None = Field(None, description="Error message if the task failed.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "task_id": "d3c1e0f0...",
                    "status": "STARTED",
                    "progress": 30,
                    "status_message": "Computing filter values",
                    "result": None,
                    "error": None,
                },
                {
                    "task_id": "e4d2f1a1...",
                    "status": "FAILURE",
                    "progress": None,
                    "status_message": None,
                    "result": None,
                    "error": "Type: FeatureKindMismatchError, Message: \"Filter(s) 'anova_f_test' not compatible with features of type 'categorical' respectively\"",
                },
            ]
        }
    }
