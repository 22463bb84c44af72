# filtervalues/filters/implementations.py
import logging
from typing import Any, Dict, List

import pandas as pd
from sklearn.ensemble import RandomForestClassifier, RandomForestRegressor
from sklearn.feature_selection import (
    f_classif,
    mutual_info_classif,
    mutual_info_regression,
)

from filtervalues.core.config import settings
from filtervalues.filters.base import FilterMethod
from filtervalues.schemas.enums import FeatureKindEnum, TaskTypeEnum
from filtervalues.schemas.filter_method import FilterParamDefinition

logger = logging.getLogger(__name__)

ALL_TASKS = frozenset(TaskTypeEnum)
ALL_FEATURES = frozenset(FeatureKindEnum)


def _encode_features(features: pd.DataFrame) -> pd.DataFrame:
    """Integer-codes factor, ordered and logical columns; numeric columns pass through."""
    encoded = {}
    for column in features.columns:
        series = features[column]
        if isinstance(series.dtype, pd.CategoricalDtype):
            codes = series.cat.codes
            encoded[column] = codes.astype(float).where(codes >= 0)
        elif pd.api.types.is_bool_dtype(series):
            encoded[column] = series.astype(float)
        elif pd.api.types.is_numeric_dtype(series):
            encoded[column] = series.astype(float)
        else:
            codes, _ = pd.factorize(series)
            codes = pd.Series(codes, index=series.index)
            encoded[column] = codes.astype(float).where(codes >= 0)
    return pd.DataFrame(encoded, index=features.index)


def _discrete_mask(task) -> List[bool]:
    kinds = task.get_feature_kinds()
    return [kinds[name] != FeatureKindEnum.NUMERIC for name in task.feature_names]


def _impute(matrix: pd.DataFrame) -> pd.DataFrame:
    # Column means, then 0 for columns that are entirely missing
    return matrix.fillna(matrix.mean()).fillna(0.0)


class VarianceFilter(FilterMethod):
    """Sample variance of each numeric feature; ignores the target."""

    name = "variance"
    display_name = "Variance"
    description = "Sample variance of each numeric feature, independent of the target."
    supported_tasks = ALL_TASKS
    supported_features = frozenset({FeatureKindEnum.NUMERIC})
    required_packages = ()
    parameters = [
        FilterParamDefinition(
            name="ddof", type="integer", description="Delta degrees of freedom.", default=1
        )
    ]

    def score_features(self, task, n_select: int, **params: Any) -> Dict[str, float]:
        ddof = params.get("ddof", 1)
        features, _ = task.get_data(target_extra=True)
        return features.astype(float).var(ddof=ddof).to_dict()


class _CorrelationFilter(FilterMethod):
    correlation_method = "pearson"
    supported_tasks = frozenset({TaskTypeEnum.REGRESSION})
    supported_features = frozenset({FeatureKindEnum.NUMERIC})

    def score_features(self, task, n_select: int, **params: Any) -> Dict[str, float]:
        features, target = task.get_data(target_extra=True)
        correlations = features.astype(float).corrwith(
            target.astype(float), method=self.correlation_method
        )
        return correlations.abs().to_dict()


class LinearCorrelationFilter(_CorrelationFilter):
    """Absolute Pearson correlation between each feature and the target."""

    name = "linear_correlation"
    display_name = "Linear Correlation"
    description = "Absolute Pearson correlation between each numeric feature and the target."
    correlation_method = "pearson"


class RankCorrelationFilter(_CorrelationFilter):
    """Absolute Spearman correlation between each feature and the target."""

    name = "rank_correlation"
    display_name = "Rank Correlation"
    description = "Absolute Spearman rank correlation between each numeric feature and the target."
    correlation_method = "spearman"


class AnovaFTestFilter(FilterMethod):
    name = "anova_f_test"
    display_name = "ANOVA F-Test"
    description = "ANOVA F statistic of each numeric feature across the target classes."
    supported_tasks = frozenset({TaskTypeEnum.CLASSIFICATION})
    supported_features = frozenset({FeatureKindEnum.NUMERIC})
    required_packages = ("sklearn",)

    def score_features(self, task, n_select: int, **params: Any) -> Dict[str, float]:
        features, target = task.get_data(target_extra=True)
        matrix = _impute(features.astype(float))
        f_values, _ = f_classif(matrix.to_numpy(), target.to_numpy())
        return dict(zip(task.feature_names, (float(v) for v in f_values)))


class MutualInformationFilter(FilterMethod):
    name = "mutual_information"
    display_name = "Mutual Information"
    description = (
        "Estimated mutual information between each feature and the target "
        "(nearest-neighbour estimator for numeric features)."
    )
    supported_tasks = frozenset({TaskTypeEnum.CLASSIFICATION, TaskTypeEnum.REGRESSION})
    supported_features = ALL_FEATURES
    required_packages = ("sklearn",)
    parameters = [
        FilterParamDefinition(
            name="n_neighbors",
            type="integer",
            description="Number of neighbours used by the estimator.",
            default=3,
            range={"min": 1, "max": None},
        )
    ]

    def score_features(self, task, n_select: int, **params: Any) -> Dict[str, float]:
        n_neighbors = params.get("n_neighbors", 3)
        features, target = task.get_data(target_extra=True)
        matrix = _impute(_encode_features(features))
        estimator = (
            mutual_info_classif
            if task.task_type == TaskTypeEnum.CLASSIFICATION
            else mutual_info_regression
        )
        scores = estimator(
            matrix.to_numpy(),
            target.to_numpy(),
            discrete_features=_discrete_mask(task),
            n_neighbors=n_neighbors,
            random_state=settings.RANDOM_STATE,
        )
        return dict(zip(task.feature_names, (float(v) for v in scores)))


class RandomForestImportanceFilter(FilterMethod):
    """
    Impurity-based importance from a random forest fitted on all features.
    Only the ``n_select`` most important features are returned.
    """

    name = "random_forest_importance"
    display_name = "Random Forest Importance"
    description = "Mean decrease in impurity of a random forest fitted to the target."
    supported_tasks = frozenset({TaskTypeEnum.CLASSIFICATION, TaskTypeEnum.REGRESSION})
    supported_features = ALL_FEATURES
    required_packages = ("sklearn",)
    parameters = [
        FilterParamDefinition(
            name="n_estimators",
            type="integer",
            description="Number of trees in the forest.",
            default=100,
            range={"min": 1, "max": None},
        ),
        FilterParamDefinition(
            name="max_depth",
            type="integer",
            description="Maximum depth of each tree (unlimited if not set).",
            default=None,
        ),
    ]

    def score_features(self, task, n_select: int, **params: Any) -> Dict[str, float]:
        n_estimators = params.get("n_estimators", 100)
        max_depth = params.get("max_depth")
        logger.info(
            f"Fitting random forest with {n_estimators} trees on task '{task.task_id}'."
        )

        features, target = task.get_data(target_extra=True)
        matrix = _impute(_encode_features(features))
        model_cls = (
            RandomForestClassifier
            if task.task_type == TaskTypeEnum.CLASSIFICATION
            else RandomForestRegressor
        )
        model = model_cls(
            n_estimators=n_estimators,
            max_depth=max_depth,
            random_state=settings.RANDOM_STATE,
            n_jobs=1,
        )
        model.fit(matrix.to_numpy(), target.to_numpy())

        importances = pd.Series(model.feature_importances_, index=task.feature_names)
        top = importances.sort_values(ascending=False, kind="mergesort").head(n_select)
        return {name: float(value) for name, value in top.items()}
