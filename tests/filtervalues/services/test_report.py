import numpy as np
import pandas as pd
import pytest
from pydantic import ValidationError

from filtervalues.exceptions import InvalidParameterError
from filtervalues.filters.base import FilterRegistry
from filtervalues.services.filter_values import compute_filter_values
from filtervalues.services.report import (
    InteractiveReportState,
    RenderableReport,
    build_report_data,
    render_filter_report,
    render_interactive_view,
    to_long_form,
)

PARTIAL_SCORES = {
    "f0": 0.3, "f1": 0.9, "f2": 0.1, "f3": 0.7,
    "f4": 0.5, "f5": 0.2, "f6": 0.8, "f7": 0.4,
}


@pytest.fixture
def report_registry():
    """'partial' scores f0..f7 only; 'full' scores every feature with its index."""
    registry = FilterRegistry()
    registry.register_function(
        "partial", ["regression"], ["numeric"], [],
        lambda task, n_select, **params: dict(PARTIAL_SCORES),
    )
    registry.register_function(
        "full", ["regression"], ["numeric"], [],
        lambda task, n_select, **params: {f"f{i}": float(i) for i in range(10)},
    )
    return registry


@pytest.fixture
def single_result(report_registry, numeric_task):
    return compute_filter_values(numeric_task, ["partial"], registry=report_registry)


@pytest.fixture
def multi_result(report_registry, numeric_task):
    return compute_filter_values(numeric_task, ["partial", "full"], registry=report_registry)


def test_to_long_form(multi_result):
    long = to_long_form(multi_result)
    assert list(long.columns) == ["name", "type", "method", "value"]
    assert len(long) == 20
    assert long["method"].tolist() == ["partial"] * 10 + ["full"] * 10


def test_descending_top_three(single_result):
    report = render_filter_report(single_result, sort="descending", n_show=3)
    assert isinstance(report, RenderableReport)
    assert report.data["name"].astype(str).tolist() == ["f1", "f6", "f3"]
    assert report.data["value"].tolist() == [0.9, 0.8, 0.7]


def test_ascending_top_three(single_result):
    report = render_filter_report(single_result, sort="ascending", n_show=3)
    assert report.data["name"].astype(str).tolist() == ["f2", "f5", "f0"]


def test_sort_aliases(single_result):
    dec = build_report_data(single_result, sort="dec", n_show=2)
    inc = build_report_data(single_result, sort="inc", n_show=2)
    assert dec["name"].astype(str).tolist() == ["f1", "f6"]
    assert inc["name"].astype(str).tolist() == ["f2", "f5"]


def test_n_show_clamped_to_available_scores(single_result):
    report = render_filter_report(single_result, sort="descending", n_show=20)
    # f8 and f9 have no score
    assert len(report.data) == 8
    assert report.data["value"].notna().all()


def test_none_sort_preserves_task_order(single_result, numeric_task):
    report = render_filter_report(single_result, sort="none", n_show=3)
    assert report.data["name"].astype(str).tolist() == numeric_task.feature_names
    assert np.isnan(report.data["value"].iloc[-1])


def test_name_categories_follow_display_order(single_result):
    data = build_report_data(single_result, sort="descending", n_show=4)
    assert isinstance(data["name"].dtype, pd.CategoricalDtype)
    assert list(data["name"].cat.categories) == ["f1", "f6", "f3", "f4"]


def test_per_method_slices(multi_result):
    report = render_filter_report(multi_result, sort="descending", n_show=2)
    data = report.data
    assert data["method"].tolist() == ["partial", "partial", "full", "full"]
    assert data["name"].astype(str).tolist() == ["f1", "f6", "f9", "f8"]
    assert report.methods == ["partial", "full"]


def test_multi_method_presentation(multi_result):
    report = render_filter_report(multi_result)
    assert report.facet_by == "method"
    assert report.title == "numeric (10 features)"
    assert report.fill_by is None


def test_single_method_presentation(single_result):
    report = render_filter_report(single_result, color_by_type=True)
    assert report.facet_by is None
    assert report.title == "numeric (10 features), filter = partial"
    assert report.fill_by == "type"


def test_color_by_type_does_not_change_rows(single_result):
    plain = render_filter_report(single_result, n_show=5)
    coloured = render_filter_report(single_result, n_show=5, color_by_type=True)
    pd.testing.assert_frame_equal(plain.data, coloured.data)


@pytest.mark.parametrize("sort", ["sideways", "", None])
def test_invalid_sort(single_result, sort):
    with pytest.raises(InvalidParameterError, match="Invalid sort"):
        render_filter_report(single_result, sort=sort)


@pytest.mark.parametrize("n_show", [0, -3, 2.5, True])
def test_invalid_n_show(single_result, n_show):
    with pytest.raises(InvalidParameterError, match="n_show"):
        render_filter_report(single_result, n_show=n_show)


def test_report_rejects_other_objects():
    with pytest.raises(InvalidParameterError, match="Expected FilterResult"):
        render_filter_report(pd.DataFrame())


# --- Interactive viewer ---


def test_interactive_view(multi_result):
    state = InteractiveReportState(method="full", sort="inc", n_show=2, color_by_type=True)
    report = render_interactive_view(multi_result, state)
    assert report.title == "numeric (10 features), filter = full"
    assert report.data["name"].astype(str).tolist() == ["f0", "f1"]
    assert report.fill_by == "type"


def test_interactive_view_defaults_show_all_features(multi_result):
    report = render_interactive_view(multi_result, InteractiveReportState(method="full"))
    assert len(report.data) == 10
    assert report.data["name"].astype(str).iloc[0] == "f9"


def test_interactive_view_unknown_method(multi_result):
    with pytest.raises(InvalidParameterError):
        render_interactive_view(multi_result, InteractiveReportState(method="nope"))


def test_interactive_state_validation():
    with pytest.raises(ValidationError):
        InteractiveReportState(method="full", n_show=0)
    with pytest.raises(ValidationError):
        InteractiveReportState(method="full", sort="sideways")


@pytest.mark.parametrize("sort", ["ascending", "descending"])
def test_missing_scores_sort_last_in_both_directions(multi_result, sort):
    # 'full' scores all ten features, so the partial method's missing rows are shown
    data = build_report_data(multi_result, sort=sort, n_show=10)
    partial = data[data["method"] == "partial"]

    assert len(partial) == 10
    assert partial["value"].isna().tolist() == [False] * 8 + [True] * 2
    assert partial["name"].astype(str).tolist()[-2:] == ["f8", "f9"]
    scored = partial["value"].iloc[:8].tolist()
    assert scored == sorted(scored, reverse=sort == "descending")


def test_name_categories_are_global_across_methods(multi_result):
    data = build_report_data(multi_result, sort="descending", n_show=2)
    assert list(data["name"].cat.categories) == ["f1", "f6", "f9", "f8"]
    full = data[data["method"] == "full"]
    # Row order carries the ranking within each slice
    assert full["name"].astype(str).tolist() == ["f9", "f8"]
