# filtervalues/utils/__init__.py
from .package_utils import require_packages
from .pipeline_logging import StepLogger

__all__ = [
    "require_packages",
    "StepLogger",
]
