# filtervalues/schemas/__init__.py
from .enums import (
    FeatureKindEnum,
    FeatureTypeEnum,
    JobStatusEnum,
    SortOrderEnum,
    TaskTypeEnum,
)
from .filter_method import FilterMethodDefinition, FilterParamDefinition
from .filter_values import (
    DatasetPayload,
    FilterReportRead,
    FilterReportRequest,
    FilterReportRow,
    FilterValueRow,
    FilterValuesJobRequest,
    FilterValuesRead,
    FilterValuesRequest,
    ReportOptions,
)
from .task import TaskDescription
