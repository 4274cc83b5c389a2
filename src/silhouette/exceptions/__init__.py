"""Exception hierarchy for Silhouette."""

from .base import SilhouetteError
from .config import ConfigurationError, InvalidOptionError, InvalidPathError
from .input import InputDecodeError, InputError, UnsupportedFormatError

__all__ = [
    "SilhouetteError",
    "ConfigurationError",
    "InvalidOptionError",
    "InvalidPathError",
    "InputError",
    "InputDecodeError",
    "UnsupportedFormatError",
]
