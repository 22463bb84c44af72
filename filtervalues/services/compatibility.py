# filtervalues/services/compatibility.py
import logging
from typing import Dict, List, Sequence

from filtervalues.exceptions import (
    FeatureKindMismatchError,
    TaskKindMismatchError,
    UnknownMethodError,
)
from filtervalues.filters.base import FilterMethod, FilterRegistry
from filtervalues.utils.package_utils import require_packages

logger = logging.getLogger(__name__)


def validate_methods(
    registry: FilterRegistry, task, methods: Sequence[str]
) -> List[FilterMethod]:
    """
    Checks that every requested method is registered, supports the task type
    and supports every feature kind present in the task.

    All offending methods are reported together in a single error. Only feature
    kinds with a nonzero count in the task are checked.

    Returns:
        List[FilterMethod]: The resolved methods, in request order.
    """
    unknown = [name for name in methods if name not in registry]
    if unknown:
        quoted = ", ".join(f"'{name}'" for name in unknown)
        logger.error(f"Unknown filter method(s) requested: {quoted}")
        raise UnknownMethodError(
            f"Filter method(s) {quoted} not registered. "
            f"Available methods: {', '.join(sorted(registry.names()))}",
            unknown,
        )
    filters = [registry.get(name) for name in methods]

    task_type = task.task_type
    mismatched = [f.name for f in filters if task_type not in f.supported_tasks]
    if mismatched:
        error = TaskKindMismatchError(mismatched, task_type.value)
        logger.error(str(error))
        raise error

    present = [kind for kind, count in task.feature_counts().items() if count > 0]
    offending: Dict[str, List[str]] = {}
    for f in filters:
        unsupported = [kind.value for kind in present if kind not in f.supported_features]
        if unsupported:
            offending[f.name] = unsupported
    if offending:
        error = FeatureKindMismatchError(offending)
        logger.error(str(error))
        raise error

    for f in filters:
        if f.required_packages:
            require_packages(f.required_packages, why=f"filter '{f.name}'")

    logger.debug(f"Filter methods {list(methods)} compatible with task '{task.task_id}'.")
    return filters
