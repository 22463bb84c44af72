# filtervalues/filters/factory.py
import logging

from filtervalues.filters.base import FilterRegistry
from filtervalues.filters.implementations import (
    AnovaFTestFilter,
    LinearCorrelationFilter,
    MutualInformationFilter,
    RandomForestImportanceFilter,
    RankCorrelationFilter,
    VarianceFilter,
)

logger = logging.getLogger(__name__)


def create_default_registry(lock: bool = True) -> FilterRegistry:
    """
    Builds a registry holding the built-in filter methods.
    This is the single place to add new built-in methods.
    """
    registry = FilterRegistry()
    registry.register(VarianceFilter())
    registry.register(LinearCorrelationFilter())
    registry.register(RankCorrelationFilter())
    registry.register(AnovaFTestFilter())
    registry.register(MutualInformationFilter())
    registry.register(RandomForestImportanceFilter())
    logger.info(f"Registered filter methods: {registry.names()}")
    if lock:
        registry.lock()
    return registry
