import numpy as np
import pandas as pd
import pytest

from filtervalues.exceptions import InvalidParameterError
from filtervalues.learning_task import SupervisedTask, get_column_type
from filtervalues.schemas.enums import FeatureKindEnum, FeatureTypeEnum, TaskTypeEnum


@pytest.mark.parametrize(
    "series, expected",
    [
        (pd.Series([1.5, 2.0]), FeatureTypeEnum.NUMERIC),
        (pd.Series([1, 2]), FeatureTypeEnum.INTEGER),
        (pd.Series([True, False]), FeatureTypeEnum.LOGICAL),
        (pd.Series(pd.Categorical(["a", "b"])), FeatureTypeEnum.FACTOR),
        (pd.Series(pd.Categorical(["lo", "hi"], categories=["lo", "hi"], ordered=True)), FeatureTypeEnum.ORDERED),
        (pd.Series(["a", "b"]), FeatureTypeEnum.FACTOR),
    ],
)
def test_get_column_type(series, expected):
    assert get_column_type(series) == expected


def test_feature_names_keep_column_order_and_skip_target(mixed_task):
    assert mixed_task.feature_names == ["a", "b", "c"]
    assert mixed_task.n_features == 3


def test_feature_counts_include_absent_kinds(mixed_task):
    counts = mixed_task.feature_counts()
    assert counts == {
        FeatureKindEnum.NUMERIC: 2,
        FeatureKindEnum.CATEGORICAL: 1,
        FeatureKindEnum.ORDERED: 0,
    }


def test_get_data_with_target_extra(mixed_task):
    features, target = mixed_task.get_data(target_extra=True)
    assert list(features.columns) == ["a", "b", "c"]
    assert target.name == "y"
    assert "y" in mixed_task.get_data().columns


def test_get_data_returns_copy(mixed_task):
    data = mixed_task.get_data()
    data["a"] = 0.0
    assert mixed_task.get_data()["a"].iloc[0] == 0.1


def test_description_snapshot(mixed_task):
    desc = mixed_task.get_description()
    assert desc.id == "mixed"
    assert desc.type == TaskTypeEnum.CLASSIFICATION
    assert desc.target == ["y"]
    assert desc.size == 6
    assert desc.n_features == 3


def test_missing_target_rejected():
    data = pd.DataFrame({"a": [1.0, 2.0]})
    with pytest.raises(InvalidParameterError, match="not found"):
        SupervisedTask("t", data, target="y", task_type="regression")


def test_survival_needs_two_targets():
    data = pd.DataFrame({"a": [1.0, 2.0], "time": [3.0, 4.0], "event": [True, False]})
    with pytest.raises(InvalidParameterError, match="needs 2 target"):
        SupervisedTask("t", data, target="time", task_type="survival")

    task = SupervisedTask("t", data, target=["time", "event"], task_type="survival")
    features, target = task.get_data(target_extra=True)
    assert list(target.columns) == ["time", "event"]
    assert task.feature_names == ["a"]


def test_task_without_features_rejected():
    data = pd.DataFrame({"y": [1.0, 2.0]})
    with pytest.raises(InvalidParameterError, match="no feature columns"):
        SupervisedTask("t", data, target="y", task_type="regression")


def test_from_records_applies_categorical_and_ordered_columns():
    records = [
        {"size": "small", "colour": "red", "y": 1.0},
        {"size": "large", "colour": "blue", "y": 2.0},
    ]
    task = SupervisedTask.from_records(
        "records",
        records,
        target="y",
        task_type="regression",
        categorical_columns=["colour"],
        ordered_levels={"size": ["small", "large"]},
    )
    assert task.get_feature_types() == {
        "size": FeatureTypeEnum.ORDERED,
        "colour": FeatureTypeEnum.FACTOR,
    }
    assert task.get_feature_kinds()["size"] == FeatureKindEnum.ORDERED


def test_from_records_unknown_categorical_column():
    with pytest.raises(InvalidParameterError, match="Categorical column 'z'"):
        SupervisedTask.from_records(
            "r", [{"a": 1.0, "y": 0}], target="y", task_type="classification",
            categorical_columns=["z"],
        )


def test_non_string_column_labels_become_strings():
    rng = np.random.default_rng(3)
    data = pd.DataFrame(rng.normal(size=(20, 3)))
    data["y"] = data[0] + rng.normal(scale=0.1, size=20)
    task = SupervisedTask("t", data, target="y", task_type="regression")

    assert task.feature_names == ["0", "1", "2"]
    assert task.get_feature_types() == {
        "0": FeatureTypeEnum.NUMERIC,
        "1": FeatureTypeEnum.NUMERIC,
        "2": FeatureTypeEnum.NUMERIC,
    }
    features, target = task.get_data(target_extra=True)
    assert list(features.columns) == ["0", "1", "2"]
    assert target.name == "y"


def test_integer_target_label():
    data = pd.DataFrame({0: [1.0, 2.0, 3.0], 1: [0.5, 0.1, 0.9]})
    task = SupervisedTask("t", data, target=1, task_type="regression")
    assert task.target == ["1"]
    assert task.feature_names == ["0"]
