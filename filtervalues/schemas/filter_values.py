# filtervalues/schemas/filter_values.py
import math
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from filtervalues.schemas.enums import SortOrderEnum, TaskTypeEnum
from filtervalues.schemas.task import TaskDescription


def _score_or_none(value: Any) -> Optional[float]:
    """Missing scores (NaN) are serialised as null."""
    if value is None:
        return None
    value = float(value)
    return None if math.isnan(value) else value


# --- Request Schemas ---


class DatasetPayload(BaseModel):
    """A supervised learning dataset sent inline as JSON records."""

    task_id: str = Field(..., description="Identifier of the task.")
    task_type: TaskTypeEnum = Field(..., description="Kind of supervised task.")
    target: Union[str, List[str]] = Field(
        ..., description="Target column (two columns, time and event, for survival)."
    )
    records: List[Dict[str, Any]] = Field(
        ..., min_length=1, description="Rows of the dataset, features and target."
    )
    categorical_columns: List[str] = Field(
        default_factory=list, description="Columns to treat as unordered factors."
    )
    ordered_levels: Dict[str, List[Any]] = Field(
        default_factory=dict, description="Ordered factor columns and their levels, lowest first."
    )

    def to_task(self):
        from filtervalues.learning_task import SupervisedTask

        return SupervisedTask.from_records(
            task_id=self.task_id,
            records=self.records,
            target=self.target,
            task_type=self.task_type,
            categorical_columns=self.categorical_columns,
            ordered_levels=self.ordered_levels,
        )


class FilterValuesRequest(BaseModel):
    dataset: DatasetPayload
    methods: Optional[List[str]] = Field(
        None, description="Filter methods to apply (default method if not set)."
    )
    n_select: Optional[int] = Field(
        None, description="Number of scores to request (all features if not set)."
    )
    args: Optional[Dict[str, Any]] = Field(
        None, description="Extra arguments when a single method is requested."
    )
    more_args: Optional[Dict[str, Dict[str, Any]]] = Field(
        None, description="Extra arguments per filter method."
    )


class ReportOptions(BaseModel):
    sort: SortOrderEnum = Field(SortOrderEnum.DESCENDING, description="Sort order per method.")
    n_show: int = Field(20, ge=1, description="Maximum number of features shown per method.")
    color_by_type: bool = Field(False, description="Group bars by feature type.")

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value):
        return SortOrderEnum.parse(value)


class FilterReportRequest(FilterValuesRequest):
    report: ReportOptions = Field(default_factory=ReportOptions)


class FilterValuesJobRequest(FilterValuesRequest):
    """Payload of the background filter value job."""

    report: Optional[ReportOptions] = Field(
        None, description="Also build report rows when set."
    )


# --- Response Schemas ---


class FilterValueRow(BaseModel):
    name: str
    type: str
    scores: Dict[str, Optional[float]] = Field(
        ..., description="Score per method; null when the method did not score the feature."
    )


class FilterValuesRead(BaseModel):
    task_desc: TaskDescription
    methods: List[str]
    rows: List[FilterValueRow]

    @classmethod
    def from_result(cls, result) -> "FilterValuesRead":
        methods = result.methods
        rows = [
            FilterValueRow(
                name=record["name"],
                type=record["type"],
                scores={m: _score_or_none(record[m]) for m in methods},
            )
            for record in result.to_records()
        ]
        return cls(task_desc=result.task_desc, methods=methods, rows=rows)


class FilterReportRow(BaseModel):
    name: str
    type: str
    method: str
    value: Optional[float] = None


class FilterReportRead(BaseModel):
    title: str
    facet_by: Optional[str] = None
    fill_by: Optional[str] = None
    rows: List[FilterReportRow]

    @classmethod
    def from_report(cls, report) -> "FilterReportRead":
        rows = [
            FilterReportRow(
                name=str(row["name"]),
                type=row["type"],
                method=row["method"],
                value=_score_or_none(row["value"]),
            )
            for row in report.data.to_dict(orient="records")
        ]
        return cls(
            title=report.title,
            facet_by=report.facet_by,
            fill_by=report.fill_by,
            rows=rows,
        )
