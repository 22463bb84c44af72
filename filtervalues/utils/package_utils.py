# filtervalues/utils/package_utils.py
import importlib
import logging
import sys
from typing import Iterable, List

logger = logging.getLogger(__name__)


def require_packages(packages: Iterable[str], why: str = "") -> List[str]:
    """
    Imports each package that is not loaded yet.

    Loading is best-effort: failures are logged and returned, never raised,
    so the scoring call that needs the package surfaces the real error.

    Returns:
        List[str]: Names of the packages that could not be loaded.
    """
    failed: List[str] = []
    for package in packages:
        if package in sys.modules:
            continue
        try:
            importlib.import_module(package)
            logger.debug(f"Loaded package '{package}' for {why or 'filter method'}.")
        except ImportError as e:
            logger.warning(
                f"Could not load package '{package}' required by {why or 'filter method'}: {e}"
            )
            failed.append(package)
    return failed
