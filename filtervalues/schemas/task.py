# filtervalues/schemas/task.py
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from filtervalues.schemas.enums import FeatureKindEnum, TaskTypeEnum


class TaskDescription(BaseModel):
    """Metadata snapshot of a supervised learning task."""

    id: str = Field(..., description="Task identifier.")
    type: TaskTypeEnum = Field(..., description="Kind of supervised task.")
    target: List[str] = Field(..., description="Target column name(s).")
    size: int = Field(..., description="Number of observations.")
    n_feat: Dict[FeatureKindEnum, int] = Field(
        ..., description="Number of features per feature kind (zero counts included)."
    )

    model_config = ConfigDict(frozen=True)

    @property
    def n_features(self) -> int:
        return sum(self.n_feat.values())
