"""Public API for Silhouette.

Example:
    >>> from silhouette import get_shape
    >>>
    >>> get_shape({"scores": [0.5, 0.7], "label": "cat"})
    {'scores': ['number', 'number'], 'label': 'string'}
    >>>
    >>> get_shape(list(range(1000)))
    'Array<number> [Length: 1000]'
    >>>
    >>> get_shape(deeply_nested, max_depth=2)
"""

from __future__ import annotations

from typing import Any, Mapping, Union

from .analyzer import ShapeResult, VisitedSet, analyze
from .config import DEFAULT_OPTIONS, ShapeOptions
from .logging_config import get_logger

logger = get_logger(__name__)

OptionsLike = Union[ShapeOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsLike = None, **overrides: Any) -> ShapeOptions:
    """Turn the accepted option spellings into a validated ShapeOptions.

    Raises:
        InvalidOptionError: If a value is negative, not an integer, or unknown
    """
    if options is None:
        base = DEFAULT_OPTIONS
    elif isinstance(options, ShapeOptions):
        base = options
    else:
        base = ShapeOptions.from_mapping(options)
    return base.merge(**overrides)


def get_shape(value: Any, options: OptionsLike = None, **overrides: Any) -> ShapeResult:
    """Compute the bounded structural summary of ``value``.

    Args:
        value: Anything. The value is only read, never modified.
        options: ShapeOptions, a mapping of option names (snake_case or
            camelCase), or None for defaults (max_depth=5, array_limit=20)
        **overrides: Individual options applied on top of ``options``

    Returns:
        A label string, a list of shapes, or a dict of key -> shape.

    Raises:
        InvalidOptionError: Only for invalid options; every value has a shape.

    Example:
        >>> node = {"name": "root"}
        >>> node["parent"] = node
        >>> get_shape(node)
        {'name': 'string', 'parent': '[Circular]'}
    """
    resolved = resolve_options(options, **overrides)
    visited = VisitedSet()
    shape = analyze(
        value,
        0,
        resolved.max_depth,
        resolved.array_limit,
        visited,
        path_scoped=resolved.path_scoped,
    )
    logger.debug(
        "Shaped %s (max_depth=%d, array_limit=%d, cycle_scope=%s)",
        type(value).__name__,
        resolved.max_depth,
        resolved.array_limit,
        resolved.cycle_scope,
    )
    return shape
