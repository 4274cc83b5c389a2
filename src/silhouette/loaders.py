"""Input loaders for the command line.

Each loader decodes one file format into a Python value that can then be
shaped. ``-`` reads JSON from stdin.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import numpy as np

from .exceptions import InputDecodeError, UnsupportedFormatError
from .logging_config import get_logger

logger = get_logger(__name__)

STDIN = Path("-")


def _load_json(path: Path) -> Any:
    if path == STDIN:
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _load_npy(path: Path) -> Any:
    return np.load(path, allow_pickle=False)


def _load_npz(path: Path) -> Any:
    with np.load(path, allow_pickle=False) as archive:
        return {name: archive[name] for name in archive.files}


LOADERS: Dict[str, Callable[[Path], Any]] = {
    ".json": _load_json,
    ".npy": _load_npy,
    ".npz": _load_npz,
}


def load_input(path: Path) -> Any:
    """Decode a JSON, .npy or .npz file.

    Raises:
        UnsupportedFormatError: If the extension has no loader
        InputDecodeError: If the file cannot be read or decoded
    """
    suffix = ".json" if path == STDIN else path.suffix.lower()
    loader = LOADERS.get(suffix)
    if loader is None:
        raise UnsupportedFormatError(path)

    fmt = suffix.lstrip(".")
    try:
        value = loader(path)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError and numpy format errors are ValueErrors
        raise InputDecodeError(path, fmt, str(e))

    logger.debug("Loaded %s input from %s", fmt, "stdin" if path == STDIN else path)
    return value
