"""Input exceptions raised while loading data for inspection."""

from pathlib import Path

from .base import SilhouetteError


class InputError(SilhouetteError):
    """Base class for input loading errors."""

    pass


class UnsupportedFormatError(InputError):
    """Raised when no loader handles the file extension."""

    def __init__(self, path: Path):
        super().__init__(
            f"Unsupported input format: {path}",
            details={"path": str(path), "suffix": path.suffix or "(none)"},
        )
        self.path = path


class InputDecodeError(InputError):
    """Raised when a file exists but cannot be decoded."""

    def __init__(self, path: Path, fmt: str, reason: str):
        super().__init__(
            f"Failed to decode {fmt} input: {path}",
            details={"path": str(path), "format": fmt, "reason": reason},
        )
        self.path = path
        self.fmt = fmt
        self.reason = reason
