"""Data layer: JSON definitions and the repositories that read them."""

from .errors import DataError, DataLoadError, DataValidationError
from .paths import get_definitions_path

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "get_definitions_path",
]
