# filtervalues/services/aggregation.py
import logging
from typing import Any, Dict, List, Mapping, Sequence

import numpy as np
import pandas as pd

from filtervalues.filters.base import FilterRegistry
from filtervalues.result import MISSING_SCORE, FilterResult
from filtervalues.utils.pipeline_logging import StepLogger

logger = logging.getLogger(__name__)


def normalize_scores(scores: Mapping[str, Any], feature_names: Sequence[str]) -> pd.Series:
    """
    Aligns one method's scores to the task feature order.

    Features the method did not score get the missing sentinel; scores for
    names the task does not know are dropped.
    """
    values = {
        str(name): MISSING_SCORE if value is None else float(value)
        for name, value in dict(scores).items()
    }
    series = pd.Series(values, dtype=float)
    return series.reindex(list(feature_names))


def aggregate_filter_values(
    registry: FilterRegistry,
    task,
    methods: Sequence[str],
    n_select: int,
    args_by_method: Mapping[str, Mapping[str, Any]],
) -> FilterResult:
    """
    Runs each requested method against the task and merges the scores into one
    wide table: ``name``, ``type`` and one column per method in request order.

    Exceptions raised by a filter method propagate unchanged; no partial result
    is returned.
    """
    step_logger = StepLogger.for_task(logger, task.task_id)
    # Captured before any method runs so later task changes do not leak in
    task_desc = task.get_description()
    feature_names: List[str] = list(task.feature_names)
    feature_types = task.get_feature_types()

    columns: Dict[str, np.ndarray] = {}
    for name in methods:
        method = registry.get(name)
        extra = dict(args_by_method.get(name, {}))
        step_logger.info(f"Scoring {len(feature_names)} features with '{name}' (n_select={n_select}).")
        raw_scores = method.score_features(task, n_select, **extra)

        aligned = normalize_scores(raw_scores, feature_names)
        n_missing = int(aligned.isna().sum())
        dropped = set(map(str, dict(raw_scores))) - set(feature_names)
        if dropped:
            step_logger.warning(
                f"'{name}' returned scores for unknown features {sorted(dropped)}; dropped."
            )
        step_logger.info(
            f"'{name}' scored {len(feature_names) - n_missing} features; {n_missing} set to missing."
        )
        columns[name] = aligned.to_numpy()

    data = pd.DataFrame(
        {
            "name": feature_names,
            "type": [feature_types[f].value for f in feature_names],
        }
    )
    for name in methods:
        data[name] = columns[name]

    step_logger.info(f"Computed filter values for methods {list(methods)}.")
    return FilterResult(task_desc=task_desc, data=data)
