"""Configuration exceptions: shape options, config files."""

from pathlib import Path
from typing import Any

from .base import SilhouetteError


class ConfigurationError(SilhouetteError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when a provided config path is invalid."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidOptionError(ConfigurationError):
    """Raised when a shape option has an unusable value."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid option {key}: {value!r}",
            details={"key": key, "value": repr(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
