# filtervalues/services/report.py
import logging
import numbers
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import pandas as pd
from matplotlib.figure import Figure
from pydantic import BaseModel, Field, field_validator

from filtervalues.core.config import settings
from filtervalues.exceptions import DeprecatedResultError, InvalidParameterError
from filtervalues.result import ID_COLUMNS, FilterResult
from filtervalues.schemas.enums import SortOrderEnum
from filtervalues.services.rendering import draw_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderableReport:
    """Long-form filter values plus the directives a rendering backend needs."""

    data: pd.DataFrame
    title: str
    facet_by: Optional[str] = None
    fill_by: Optional[str] = None
    facet_nrow: Optional[int] = None
    facet_ncol: Optional[int] = None

    @property
    def methods(self):
        return list(pd.unique(self.data["method"]))

    def plot(self, figsize: Optional[Tuple[float, float]] = None) -> Figure:
        return draw_report(self, figsize=figsize)


def parse_sort(sort: Union[SortOrderEnum, str]) -> SortOrderEnum:
    try:
        return SortOrderEnum.parse(sort)
    except ValueError:
        raise InvalidParameterError(
            f"Invalid sort '{sort}'. Use one of: "
            f"{', '.join(s.value for s in SortOrderEnum)} (or 'dec'/'inc')."
        ) from None


def check_count(value, name: str) -> int:
    """Validates a positive integer parameter."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise InvalidParameterError(f"'{name}' must be a positive integer, got {value!r}.")
    return int(value)


def _ensure_reportable(result: FilterResult) -> None:
    if not isinstance(result, FilterResult):
        raise InvalidParameterError(
            f"Expected FilterResult, got {type(result).__name__}."
        )
    if result.method is not None:
        raise DeprecatedResultError(
            "Filter values must be generated by compute_filter_values, not "
            "get_filter_values, which is deprecated."
        )


def to_long_form(result: FilterResult) -> pd.DataFrame:
    """One row per feature and method: name, type, method, value."""
    return result.data.melt(
        id_vars=list(ID_COLUMNS),
        value_vars=result.methods,
        var_name="method",
        value_name="value",
    )


def build_report_data(
    result: FilterResult,
    sort: Union[SortOrderEnum, str] = SortOrderEnum.DESCENDING,
    n_show: int = 20,
) -> pd.DataFrame:
    """
    Reshapes filter values to long form for plotting.

    Unless ``sort`` is ``none``, each method's rows are sorted by its score
    (missing scores last) and cut to the first ``n_show`` rows. ``n_show`` is
    capped at the largest number of non-missing scores of any method. The
    ``name`` column is categorical with categories in first-appearance order
    over the whole table. With several methods that order follows the first
    method's slice, so later slices rely on row order, not category order.
    """
    _ensure_reportable(result)
    sort = parse_sort(sort)
    n_show = check_count(n_show, "n_show")

    wide = result.data
    methods = result.methods
    available = max(int(wide[m].notna().sum()) for m in methods)
    n_show = min(n_show, available)

    data = to_long_form(result)
    if sort != SortOrderEnum.NONE:
        ascending = sort == SortOrderEnum.ASCENDING
        slices = [
            data[data["method"] == m]
            .sort_values("value", ascending=ascending, na_position="last", kind="mergesort")
            .head(n_show)
            for m in methods
        ]
        data = pd.concat(slices, ignore_index=True)

    data = data.reset_index(drop=True)
    data["name"] = pd.Categorical(data["name"], categories=pd.unique(data["name"]))
    return data


def render_filter_report(
    result: FilterResult,
    sort: Union[SortOrderEnum, str] = SortOrderEnum.DESCENDING,
    n_show: Optional[int] = None,
    color_by_type: bool = False,
    facet_nrow: Optional[int] = None,
    facet_ncol: Optional[int] = None,
) -> RenderableReport:
    """
    Builds a renderable bar-chart report from filter values.

    Several methods are shown as one facet per method with independent y
    scales; a single method is shown as one chart whose title names it.
    """
    if n_show is None:
        n_show = settings.DEFAULT_REPORT_N_SHOW
    data = build_report_data(result, sort=sort, n_show=n_show)

    methods = result.methods
    task_desc = result.task_desc
    title = f"{task_desc.id} ({task_desc.n_features} features)"
    if len(methods) > 1:
        facet_by = "method"
    else:
        facet_by = None
        title = f"{title}, filter = {methods[0]}"

    logger.info(f"Built filter report '{title}' with {len(data)} rows.")
    return RenderableReport(
        data=data,
        title=title,
        facet_by=facet_by,
        fill_by="type" if color_by_type else None,
        facet_nrow=facet_nrow,
        facet_ncol=facet_ncol,
    )


class InteractiveReportState(BaseModel):
    """User selections of the interactive filter value viewer."""

    method: str = Field(..., description="Filter method to display.")
    sort: SortOrderEnum = Field(SortOrderEnum.DESCENDING, description="Sort order.")
    n_show: Optional[int] = Field(
        None, ge=1, description="Number of features to show (all features if not set)."
    )
    color_by_type: bool = Field(False, description="Colour bars by feature type.")

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value):
        return SortOrderEnum.parse(value)


def render_interactive_view(
    result: FilterResult, state: InteractiveReportState
) -> RenderableReport:
    """
    Renders the view for one state of the interactive viewer.
    Called on every input change; the event loop belongs to the caller.
    """
    _ensure_reportable(result)
    single = result.select_methods([state.method])
    n_show = state.n_show or result.task_desc.n_features
    return render_filter_report(
        single, sort=state.sort, n_show=n_show, color_by_type=state.color_by_type
    )
