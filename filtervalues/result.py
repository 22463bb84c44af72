# filtervalues/result.py
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from filtervalues.exceptions import InvalidParameterError
from filtervalues.schemas.task import TaskDescription

# Score assigned to features a filter method did not score. Zero is a valid score.
MISSING_SCORE = np.nan

ID_COLUMNS = ("name", "type")


class FilterResult:
    """
    Filter values computed for a task: the task description captured at call
    time and a wide table with one row per feature (in task feature order) and
    one score column per filter method.

    The snapshot is read-only; ``data`` returns a copy on every access.
    """

    def __init__(
        self,
        task_desc: TaskDescription,
        data: pd.DataFrame,
        method: Optional[str] = None,
    ):
        self._task_desc = task_desc.model_copy(deep=True)
        self._data = data.reset_index(drop=True).copy()
        # Only set by the deprecated single-method API
        self._method = method

    @property
    def task_desc(self) -> TaskDescription:
        return self._task_desc

    @property
    def data(self) -> pd.DataFrame:
        return self._data.copy()

    @property
    def method(self) -> Optional[str]:
        return self._method

    @property
    def methods(self) -> List[str]:
        return [c for c in self._data.columns if c not in ID_COLUMNS]

    def select_methods(self, methods: Sequence[str]) -> "FilterResult":
        """Returns a new result restricted to the given score columns, in the given order."""
        unknown = [m for m in methods if m not in self.methods]
        if unknown:
            raise InvalidParameterError(
                f"Method(s) {unknown} not present in filter values {self.methods}."
            )
        return FilterResult(
            self._task_desc, self._data[list(ID_COLUMNS) + list(methods)], self._method
        )

    def to_records(self) -> List[Dict[str, Any]]:
        """Rows as dicts; missing scores become None."""
        frame = self._data.astype(object).where(self._data.notna(), None)
        return frame.to_dict(orient="records")

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        return f"FilterValues:\nTask: {self._task_desc.id}\n{self._data.head().to_string()}"

    def __repr__(self) -> str:
        return (
            f"FilterResult(task={self._task_desc.id!r}, methods={self.methods!r}, "
            f"features={len(self._data)})"
        )
