# filtervalues/exceptions.py
import traceback
from typing import Dict, Iterable, List, Optional


class FilterValuesError(Exception):
    """Base class for all errors raised while computing or reporting filter values."""


# --- Method / task compatibility ---


class IncompatibleMethodError(FilterValuesError):
    """Raised when requested filter methods cannot be applied to a task."""

    def __init__(self, message: str, methods: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.methods: List[str] = list(methods or [])


class UnknownMethodError(IncompatibleMethodError):
    """Raised when a requested filter method is not registered."""


class TaskKindMismatchError(IncompatibleMethodError):
    """Raised when filter methods do not support the task type."""

    def __init__(self, methods: Iterable[str], task_type: str):
        methods = list(methods)
        self.task_type = task_type
        quoted = ", ".join(f"'{m}'" for m in methods)
        super().__init__(
            f"Filter(s) {quoted} not compatible with task of type '{task_type}'",
            methods,
        )


class FeatureKindMismatchError(IncompatibleMethodError):
    """Raised when filter methods cannot score feature kinds present in the task."""

    def __init__(self, offending: Dict[str, List[str]]):
        self.offending = {method: list(kinds) for method, kinds in offending.items()}
        quoted_methods = ", ".join(f"'{m}'" for m in self.offending)
        quoted_kinds = ", and ".join(
            ", ".join(f"'{k}'" for k in kinds) for kinds in self.offending.values()
        )
        super().__init__(
            f"Filter(s) {quoted_methods} not compatible with features of type "
            f"{quoted_kinds} respectively",
            self.offending.keys(),
        )


# --- Argument routing ---


class ArgumentRoutingError(FilterValuesError):
    """Raised when extra arguments cannot be routed to filter methods."""


class AmbiguousArgumentsError(ArgumentRoutingError):
    """Raised when shared and per-method arguments are mixed, or shared ones are ambiguous."""


class UnknownArgumentTargetError(ArgumentRoutingError):
    """Raised when per-method arguments name a method that was not requested."""


class DuplicateArgumentTargetError(ArgumentRoutingError):
    """Raised when per-method arguments contain more than one entry for a method."""


# --- Parameters ---


class InvalidParameterError(FilterValuesError, ValueError):
    """Raised for out-of-range or malformed parameters."""


class DeprecatedResultError(InvalidParameterError):
    """Raised when a result from the deprecated single-method API is reported."""


def build_failure_meta(exc: Exception, extra: dict | None = None) -> dict:
    meta = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
        "exc_module": exc.__class__.__module__,
        "traceback": traceback.format_exc(),
    }
    if extra:
        meta.update(extra)
    return meta
