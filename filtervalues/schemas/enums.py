# filtervalues/schemas/enums.py
import enum


class TaskTypeEnum(str, enum.Enum):
    CLASSIFICATION = "classification"
    REGRESSION = "regression"
    SURVIVAL = "survival"


class FeatureKindEnum(str, enum.Enum):
    """Feature kinds used for method compatibility checks."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    ORDERED = "ordered"


class FeatureTypeEnum(str, enum.Enum):
    """Per-column type labels shown in the filter value table."""

    NUMERIC = "numeric"
    INTEGER = "integer"
    FACTOR = "factor"
    ORDERED = "ordered"
    LOGICAL = "logical"


FEATURE_TYPE_TO_KIND = {
    FeatureTypeEnum.NUMERIC: FeatureKindEnum.NUMERIC,
    FeatureTypeEnum.INTEGER: FeatureKindEnum.NUMERIC,
    FeatureTypeEnum.FACTOR: FeatureKindEnum.CATEGORICAL,
    FeatureTypeEnum.LOGICAL: FeatureKindEnum.CATEGORICAL,
    FeatureTypeEnum.ORDERED: FeatureKindEnum.ORDERED,
}


class SortOrderEnum(str, enum.Enum):
    DESCENDING = "descending"
    ASCENDING = "ascending"
    NONE = "none"

    @classmethod
    def parse(cls, value) -> "SortOrderEnum":
        """Accepts enum members, their values and the short aliases 'dec'/'inc'."""
        if isinstance(value, cls):
            return value
        aliases = {"dec": cls.DESCENDING, "inc": cls.ASCENDING}
        if isinstance(value, str) and value in aliases:
            return aliases[value]
        return cls(value)


class JobStatusEnum(str, enum.Enum):
    STARTED = "started"
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    REVOKED = "revoked"
