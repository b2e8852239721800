"""
DynamoDB Lookup Utilities

- Projection handling (expression building, command-line parsing)
- Timing decorator for wrapping a lookup call
- Rendering of deserialized attribute values for display
"""

import base64
import functools
import json
import logging
import time
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

from boto3.dynamodb.types import Binary

logger = logging.getLogger(__name__)


# =============================================================================
# Projection Utilities
# =============================================================================

def build_projection_expression(fields: Optional[List[str]]) -> Tuple[Optional[str], Optional[Dict[str, str]]]:
    """Build ProjectionExpression with ExpressionAttributeNames for GetItem.

    Every name goes through an expression attribute name placeholder so that
    DynamoDB reserved words (``name``, ``status``, ``data`` ...) are safe.
    Placeholders are numbered in the order the fields are given.

    Args:
        fields: List of field names to project, None for all fields

    Returns:
        Tuple of (ProjectionExpression, ExpressionAttributeNames) or (None, None)

    Example:
        >>> build_projection_expression(['default', 'bold'])
        ('#f0, #f1', {'#f0': 'default', '#f1': 'bold'})
    """
    if not fields:
        return None, None

    expression_names = {}
    projection_parts = []

    for i, field in enumerate(fields):
        attr_name = f"#f{i}"
        expression_names[attr_name] = field
        projection_parts.append(attr_name)

    projection_expression = ', '.join(projection_parts)
    return projection_expression, expression_names


def parse_projection(raw: Optional[str]) -> Optional[List[str]]:
    """Parse a comma-separated attribute list such as ``"default, bold"``.

    Surrounding whitespace is stripped and empty segments are dropped.

    Returns:
        List of names in the order given, or None when nothing was named
    """
    if raw is None:
        return None
    names = [part.strip() for part in raw.split(',')]
    names = [name for name in names if name]
    return names or None


# =============================================================================
# Timing
# =============================================================================

def timed(func: Callable, on_elapsed: Optional[Callable[[str, int], None]] = None) -> Callable:
    """Wrap ``func`` so each call's wall-clock duration is reported.

    The duration in microseconds is logged at debug level and, when given,
    passed to ``on_elapsed(name, elapsed_us)``. It is reported whether the
    call returns or raises.

    Example:
        fetch = timed(fetcher.fetch, on_elapsed=lambda name, us: print(f"{name} = {us}[µs]"))
        fetch("HelloTable", {"Name": "World"})
    """
    name = getattr(func, '__qualname__', repr(func))

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter_ns()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_us = (time.perf_counter_ns() - start) // 1000
            logger.debug(f"{name} took {elapsed_us}[µs]")
            if on_elapsed is not None:
                on_elapsed(name, elapsed_us)

    return wrapper


# =============================================================================
# Value Rendering
# =============================================================================

def _json_default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    if isinstance(obj, Binary):
        obj = obj.value
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(obj).decode('ascii')
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def format_value(value: Any) -> str:
    """Render a deserialized DynamoDB attribute value as a single line.

    Strings and numbers print as-is, binary as base64, everything else
    (booleans, null, lists, maps, sets) as compact JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (Binary, bytes, bytearray)):
        return _json_default(value)
    return json.dumps(value, default=_json_default)


def render_item(item: Dict[str, Any]) -> List[str]:
    """Render an item as ``name: value`` lines in the item's own order."""
    return [f"{name}: {format_value(value)}" for name, value in item.items()]
