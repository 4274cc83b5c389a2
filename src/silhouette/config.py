"""Shape options loading and validation.

Options sources are merged in priority order:
    1. Defaults (defined in ShapeOptions)
    2. Global config (~/.silhouette.toml)
    3. Project config (./silhouette.toml)
    4. Explicit config file
    5. Environment variables (SILHOUETTE_* prefix)
    6. Keyword overrides (CLI flags or API arguments)

Example:
    >>> options = load_options(max_depth=8)
    >>> options.max_depth
    8
    >>> options.array_limit
    20
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Literal, Mapping, Optional

from .exceptions import InvalidOptionError, InvalidPathError, SilhouetteError
from .logging_config import get_logger

logger = get_logger(__name__)

CycleScope = Literal["global", "path"]

DEFAULT_MAX_DEPTH = 5
DEFAULT_ARRAY_LIMIT = 20

_CYCLE_SCOPES = ("global", "path")

# camelCase spellings accepted from mappings (e.g. options decoded from JSON)
_ALIASES = {
    "maxDepth": "max_depth",
    "arrayLimit": "array_limit",
    "cycleScope": "cycle_scope",
}


@dataclass(frozen=True)
class ShapeOptions:
    """Bounds for a single shape computation.

    Attributes:
        max_depth: Nesting level at which composites collapse to "[Max Depth]"
        array_limit: Longest sequence that is expanded element by element;
            longer ones are summarized as "Array<...> [Length: N]"
        cycle_scope: "global" marks every composite as seen for the whole
            call, so a shared object reached twice reports "[Circular]" the
            second time. "path" only tracks the ancestors of the current
            value, so only true cycles report "[Circular]".
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    array_limit: int = DEFAULT_ARRAY_LIMIT
    cycle_scope: CycleScope = "global"

    def __post_init__(self) -> None:
        """Validate option values."""
        _require_count("max_depth", self.max_depth)
        _require_count("array_limit", self.array_limit)
        if self.cycle_scope not in _CYCLE_SCOPES:
            raise InvalidOptionError(
                "cycle_scope", self.cycle_scope, f"must be one of {', '.join(_CYCLE_SCOPES)}"
            )

    @property
    def path_scoped(self) -> bool:
        return self.cycle_scope == "path"

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> ShapeOptions:
        """Build options from a mapping, accepting camelCase keys.

        Raises:
            InvalidOptionError: On unknown keys or invalid values
        """
        return cls(**_normalize(values))

    def merge(self, **overrides: Any) -> ShapeOptions:
        """Return a copy with non-None overrides applied."""
        normalized = _normalize({k: v for k, v in overrides.items() if v is not None})
        if not normalized:
            return self
        return replace(self, **normalized)


def _require_count(name: str, value: Any) -> None:
    # bool is an int subclass but True/False as a depth is always a mistake
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOptionError(name, value, "must be an integer")
    if value < 0:
        raise InvalidOptionError(name, value, "must be non-negative")


def _normalize(values: Mapping[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(ShapeOptions)}
    result: dict[str, Any] = {}
    for key, value in values.items():
        name = _ALIASES.get(key, key)
        if name not in known:
            raise InvalidOptionError(key, value, "unknown option")
        result[name] = value
    return result


DEFAULT_OPTIONS = ShapeOptions()


def load_options(config_file: Optional[Path] = None, **overrides: Any) -> ShapeOptions:
    """Load options with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides; None values are ignored

    Returns:
        Validated ShapeOptions instance

    Raises:
        SilhouetteError: If a config file is invalid or missing

    Example:
        >>> load_options(config_file=Path("shapes.toml"), array_limit=50)
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".silhouette.toml"
    if global_config.exists():
        merged.update(_read_config(global_config))

    project_config = Path.cwd() / "silhouette.toml"
    if project_config.exists():
        merged.update(_read_config(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise InvalidPathError(config_file, "config file not found")
        merged.update(_read_config(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    options = ShapeOptions.from_mapping(merged)
    logger.debug(
        "Options resolved: max_depth=%d array_limit=%d cycle_scope=%s",
        options.max_depth,
        options.array_limit,
        options.cycle_scope,
    )
    return options


def _read_config(path: Path) -> dict[str, Any]:
    """Read options from a TOML file.

    Options live at the top level, or under a ``[silhouette]`` table so the
    same file can carry settings for other tools.
    """
    try:
        data = _load_toml_file(path)
    except SilhouetteError:
        raise
    except Exception as e:
        raise SilhouetteError(f"Invalid config file '{path}': {e}")

    section = data.get("silhouette", data)
    if not isinstance(section, dict):
        raise SilhouetteError(f"Invalid config file '{path}': [silhouette] must be a table")
    logger.debug("Loaded config from %s", path)
    return dict(section)


def _load_env_vars() -> dict[str, Any]:
    """Load options from SILHOUETTE_* environment variables.

    Supported environment variables:
        SILHOUETTE_MAX_DEPTH: int
        SILHOUETTE_ARRAY_LIMIT: int
        SILHOUETTE_CYCLE_SCOPE: global/path
    """
    result: dict[str, Any] = {}

    for field_name in ("max_depth", "array_limit"):
        env_key = f"SILHOUETTE_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            result[field_name] = int(env_value)
        except ValueError:
            raise InvalidOptionError(env_key, env_value, "expected an integer")

    scope = os.environ.get("SILHOUETTE_CYCLE_SCOPE")
    if scope is not None:
        result["cycle_scope"] = scope.strip().lower()

    return result


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        SilhouetteError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise SilhouetteError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
