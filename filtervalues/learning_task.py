# filtervalues/learning_task.py
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd
from pandas.api import types as ptypes

from filtervalues.exceptions import InvalidParameterError
from filtervalues.schemas.enums import (
    FEATURE_TYPE_TO_KIND,
    FeatureKindEnum,
    FeatureTypeEnum,
    TaskTypeEnum,
)
from filtervalues.schemas.task import TaskDescription

logger = logging.getLogger(__name__)


def get_column_type(column: pd.Series) -> FeatureTypeEnum:
    """Maps a pandas column dtype to its feature type label."""
    if ptypes.is_bool_dtype(column):
        return FeatureTypeEnum.LOGICAL
    if isinstance(column.dtype, pd.CategoricalDtype):
        return FeatureTypeEnum.ORDERED if column.dtype.ordered else FeatureTypeEnum.FACTOR
    if ptypes.is_integer_dtype(column):
        return FeatureTypeEnum.INTEGER
    if ptypes.is_float_dtype(column):
        return FeatureTypeEnum.NUMERIC
    if ptypes.is_object_dtype(column) or ptypes.is_string_dtype(column):
        return FeatureTypeEnum.FACTOR
    raise InvalidParameterError(
        f"Column '{column.name}' has unsupported dtype '{column.dtype}'."
    )


class SupervisedTask:
    """
    A supervised learning task backed by a pandas DataFrame.

    The column order of ``data`` (minus the target columns) is the
    authoritative feature order used by every downstream table.
    """

    def __init__(
        self,
        task_id: str,
        data: pd.DataFrame,
        target: Union[str, Sequence[str]],
        task_type: Union[TaskTypeEnum, str],
    ):
        self.task_id = task_id
        self.task_type = TaskTypeEnum(task_type)
        if isinstance(target, str) or not isinstance(target, Sequence):
            target = [target]
        self.target: List = list(target)

        missing = [t for t in self.target if t not in data.columns]
        if missing:
            raise InvalidParameterError(
                f"Target column(s) {missing} not found in data for task '{task_id}'."
            )
        expected_targets = 2 if self.task_type == TaskTypeEnum.SURVIVAL else 1
        if len(self.target) != expected_targets:
            raise InvalidParameterError(
                f"Task type '{self.task_type.value}' needs {expected_targets} target "
                f"column(s), got {len(self.target)}."
            )

        # Column labels are strings from here on, so feature names index the data
        self._data = data.copy()
        self._data.columns = [str(c) for c in self._data.columns]
        self.target = [str(t) for t in self.target]
        self.feature_names: List[str] = [
            c for c in self._data.columns if c not in self.target
        ]
        if not self.feature_names:
            raise InvalidParameterError(f"Task '{task_id}' has no feature columns.")
        self._feature_types: Dict[str, FeatureTypeEnum] = {
            name: get_column_type(self._data[name]) for name in self.feature_names
        }
        logger.debug(
            f"Created {self.task_type.value} task '{task_id}' with "
            f"{len(self.feature_names)} features and {len(self._data)} rows."
        )

    @classmethod
    def from_records(
        cls,
        task_id: str,
        records: Sequence[Mapping[str, Any]],
        target: Union[str, Sequence[str]],
        task_type: Union[TaskTypeEnum, str],
        categorical_columns: Optional[Sequence[str]] = None,
        ordered_levels: Optional[Mapping[str, Sequence[Any]]] = None,
    ) -> "SupervisedTask":
        """Builds a task from JSON-like records, as received by the API and worker."""
        data = pd.DataFrame.from_records(list(records))
        for column in categorical_columns or []:
            if column not in data.columns:
                raise InvalidParameterError(f"Categorical column '{column}' not found.")
            data[column] = data[column].astype("category")
        for column, levels in (ordered_levels or {}).items():
            if column not in data.columns:
                raise InvalidParameterError(f"Ordered column '{column}' not found.")
            data[column] = pd.Categorical(data[column], categories=list(levels), ordered=True)
        return cls(task_id=task_id, data=data, target=target, task_type=task_type)

    @property
    def n_features(self) -> int:
        return len(self.feature_names)

    def get_feature_types(self) -> Dict[str, FeatureTypeEnum]:
        return dict(self._feature_types)

    def get_feature_kinds(self) -> Dict[str, FeatureKindEnum]:
        return {name: FEATURE_TYPE_TO_KIND[t] for name, t in self._feature_types.items()}

    def feature_counts(self) -> Dict[FeatureKindEnum, int]:
        """Number of features per kind; kinds absent from the task are reported as 0."""
        counts = {kind: 0 for kind in FeatureKindEnum}
        for kind in self.get_feature_kinds().values():
            counts[kind] += 1
        return counts

    def get_data(
        self, target_extra: bool = False
    ) -> Union[pd.DataFrame, Tuple[pd.DataFrame, Union[pd.Series, pd.DataFrame]]]:
        """
        Returns a copy of the task data.

        With ``target_extra=True`` the features and the target are returned
        separately; the target is a Series, or a DataFrame for survival tasks.
        """
        if not target_extra:
            return self._data.copy()
        features = self._data[self.feature_names].copy()
        if len(self.target) == 1:
            return features, self._data[self.target[0]].copy()
        return features, self._data[self.target].copy()

    def get_description(self) -> TaskDescription:
        return TaskDescription(
            id=self.task_id,
            type=self.task_type,
            target=list(self.target),
            size=len(self._data),
            n_feat=self.feature_counts(),
        )

    def __repr__(self) -> str:
        return (
            f"SupervisedTask(id={self.task_id!r}, type={self.task_type.value!r}, "
            f"features={self.n_features}, size={len(self._data)})"
        )
