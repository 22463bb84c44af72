# filtervalues/filters/__init__.py
from .base import FilterMethod, FilterRegistry, FunctionFilterMethod, RegistryLockedError
from .factory import create_default_registry

__all__ = [
    "FilterMethod",
    "FilterRegistry",
    "FunctionFilterMethod",
    "RegistryLockedError",
    "create_default_registry",
]
