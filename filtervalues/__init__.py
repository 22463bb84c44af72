# filtervalues/__init__.py
from .exceptions import (
    AmbiguousArgumentsError,
    ArgumentRoutingError,
    DeprecatedResultError,
    DuplicateArgumentTargetError,
    FeatureKindMismatchError,
    FilterValuesError,
    IncompatibleMethodError,
    InvalidParameterError,
    TaskKindMismatchError,
    UnknownArgumentTargetError,
    UnknownMethodError,
)
from .filters.base import FilterMethod, FilterRegistry
from .filters.factory import create_default_registry
from .learning_task import SupervisedTask
from .result import MISSING_SCORE, FilterResult
from .schemas.enums import (
    FeatureKindEnum,
    FeatureTypeEnum,
    SortOrderEnum,
    TaskTypeEnum,
)
from .services.filter_values import (
    compute_filter_values,
    get_default_registry,
    get_filter_values,
)
from .services.report import (
    InteractiveReportState,
    RenderableReport,
    render_filter_report,
    render_interactive_view,
)

__all__ = [
    "AmbiguousArgumentsError",
    "ArgumentRoutingError",
    "DeprecatedResultError",
    "DuplicateArgumentTargetError",
    "FeatureKindEnum",
    "FeatureKindMismatchError",
    "FeatureTypeEnum",
    "FilterMethod",
    "FilterRegistry",
    "FilterResult",
    "FilterValuesError",
    "IncompatibleMethodError",
    "InteractiveReportState",
    "InvalidParameterError",
    "MISSING_SCORE",
    "RenderableReport",
    "SortOrderEnum",
    "SupervisedTask",
    "TaskKindMismatchError",
    "TaskTypeEnum",
    "UnknownArgumentTargetError",
    "UnknownMethodError",
    "compute_filter_values",
    "create_default_registry",
    "get_default_registry",
    "get_filter_values",
    "render_filter_report",
    "render_interactive_view",
]
