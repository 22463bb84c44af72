# filtervalues/services/filter_values.py
import functools
import logging
import numbers
import warnings
from typing import Any, List, Mapping, Optional, Sequence, Union

from filtervalues.core.config import settings
from filtervalues.exceptions import InvalidParameterError
from filtervalues.filters.base import FilterRegistry
from filtervalues.filters.factory import create_default_registry
from filtervalues.result import ID_COLUMNS, FilterResult
from filtervalues.services.aggregation import aggregate_filter_values
from filtervalues.services.argument_routing import PerMethodArguments, route_arguments
from filtervalues.services.compatibility import validate_methods

logger = logging.getLogger(__name__)

RESERVED_COLUMNS = set(ID_COLUMNS) | {"method", "value"}


@functools.lru_cache(maxsize=None)
def get_default_registry() -> FilterRegistry:
    """Process-wide registry of the built-in methods, locked on first use."""
    return create_default_registry(lock=True)


def _normalize_methods(methods: Union[str, Sequence[str], None]) -> List[str]:
    if methods is None:
        methods = [settings.DEFAULT_FILTER_METHOD]
    elif isinstance(methods, str):
        methods = [methods]
    else:
        methods = list(methods)
    if not methods:
        raise InvalidParameterError("At least one filter method must be requested.")
    duplicates = sorted({m for m in methods if methods.count(m) > 1})
    if duplicates:
        raise InvalidParameterError(f"Filter methods requested more than once: {duplicates}")
    reserved = [m for m in methods if m in RESERVED_COLUMNS]
    if reserved:
        raise InvalidParameterError(f"Filter method names {reserved} clash with table columns.")
    return methods


def _check_n_select(n_select: Optional[int], n_features: int) -> int:
    if n_select is None:
        return n_features
    if (
        isinstance(n_select, bool)
        or not isinstance(n_select, numbers.Integral)
        or not 1 <= n_select <= n_features
    ):
        raise InvalidParameterError(
            f"'n_select' must be an integer between 1 and {n_features}, got {n_select!r}."
        )
    return int(n_select)


def compute_filter_values(
    task,
    methods: Union[str, Sequence[str], None] = None,
    n_select: Optional[int] = None,
    args: Optional[Mapping[str, Any]] = None,
    more_args: Optional[PerMethodArguments] = None,
    registry: Optional[FilterRegistry] = None,
) -> FilterResult:
    """
    Calculates filter values for the features of a task.

    Args:
        task: The task to score.
        methods: Filter method name(s). Defaults to the configured default method.
        n_select: Number of scores to request from each method. All features by default.
        args: Extra arguments for the method; only allowed when exactly one
            method is requested.
        more_args: Extra arguments per method, keyed by method name.
        registry: Registry to resolve methods from. Defaults to the built-in one.

    Returns:
        FilterResult: The task description and a table with columns ``name``,
        ``type`` and one score column per method.
    """
    registry = registry or get_default_registry()
    methods = _normalize_methods(methods)

    validate_methods(registry, task, methods)
    n_select = _check_n_select(n_select, task.n_features)
    args_by_method = route_arguments(methods, args, more_args)

    return aggregate_filter_values(registry, task, methods, n_select, args_by_method)


def get_filter_values(
    task,
    method: Optional[str] = None,
    n_select: Optional[int] = None,
    args: Optional[Mapping[str, Any]] = None,
    registry: Optional[FilterRegistry] = None,
) -> FilterResult:
    """
    Calculates filter values for a single method.

    Deprecated in favour of :func:`compute_filter_values`. The score column is
    named ``value`` and the columns are ordered ``name``, ``value``, ``type``.
    Results cannot be passed to ``render_filter_report``.
    """
    warnings.warn(
        "get_filter_values is deprecated, use compute_filter_values instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    method = method or settings.DEFAULT_FILTER_METHOD
    if not isinstance(method, str):
        raise InvalidParameterError("get_filter_values accepts exactly one filter method.")

    result = compute_filter_values(
        task, [method], n_select=n_select, args=args, registry=registry
    )
    data = result.data.rename(columns={method: "value"})[["name", "value", "type"]]
    return FilterResult(result.task_desc, data, method=method)
