"""Utility functions for jdiff."""

from __future__ import annotations

import math
import re
import json
from typing import Any

from .models import JsonKind


def is_numeric(value: Any) -> bool:
    """Check if a value is numeric (int or float)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_kind(value: Any) -> JsonKind:
    """
    Classify a JSON value.

    bool is checked before numbers since it subclasses int.

    Raises:
        TypeError: if the value is not part of the JSON model
    """
    if value is None:
        return JsonKind.NULL
    elif isinstance(value, bool):
        return JsonKind.BOOLEAN
    elif is_numeric(value):
        return JsonKind.NUMBER
    elif isinstance(value, str):
        return JsonKind.STRING
    elif isinstance(value, list):
        return JsonKind.ARRAY
    elif isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def get_type_name(value: Any) -> str:
    """Get a friendly type name for a value."""
    try:
        return get_kind(value).value
    except TypeError:
        return type(value).__name__


def build_path(parent_path: str, key: str | int) -> str:
    """Build a JSONPath from parent path and key."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    else:
        # Handle special characters in key names
        if re.match(r'^[a-zA-Z_][a-zA-Z0-9_]*$', key):
            return f"{parent_path}.{key}"
        else:
            escaped = key.replace("\\", "\\\\").replace("'", "\\'")
            return f"{parent_path}['{escaped}']"


def get_json_size_mb(obj: Any) -> float:
    """
    Get the size of a JSON object in megabytes, as json.dumps renders it.

    Containers are walked with a work stack and only scalars and keys are
    serialized, so arbitrarily deep documents can be measured.
    """
    size = 0
    stack = [obj]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            # braces, ": " per member and ", " between members
            size += 2 + 2 * len(current) + 2 * max(len(current) - 1, 0)
            for key, child in current.items():
                size += _encoded_length(key)
                stack.append(child)
        elif isinstance(current, list):
            size += 2 + 2 * max(len(current) - 1, 0)
            stack.extend(current)
        else:
            size += _encoded_length(current)
    return size / (1024 * 1024)


def _encoded_length(value: Any) -> int:
    return len(json.dumps(value, ensure_ascii=False).encode('utf-8'))


def copy_value(value: Any) -> Any:
    """
    Deep copy a JSON value without recursion.

    Scalars are immutable and returned as is; every dict and list is rebuilt
    with the same key order.
    """
    if not isinstance(value, (dict, list)):
        return value

    root = {} if isinstance(value, dict) else []
    stack = [(value, root)]
    while stack:
        source, target = stack.pop()
        items = source.items() if isinstance(source, dict) else enumerate(source)
        for key, child in items:
            if isinstance(child, dict):
                copied = {}
                stack.append((child, copied))
            elif isinstance(child, list):
                copied = []
                stack.append((child, copied))
            else:
                copied = child
            if isinstance(target, dict):
                target[key] = copied
            else:
                target.append(copied)
    return root


def find_invalid_value(value: Any, path: str = "$") -> tuple[str, Any] | None:
    """
    Find the first value outside the JSON model.

    Returns:
        (path, value) of the offending node, or None if the tree is valid
    """
    stack = [(path, value)]
    while stack:
        current_path, current = stack.pop()
        if isinstance(current, dict):
            children = []
            for key, child in current.items():
                if not isinstance(key, str):
                    return current_path, key
                children.append((build_path(current_path, key), child))
            stack.extend(reversed(children))
        elif isinstance(current, list):
            stack.extend(
                (build_path(current_path, i), child)
                for i, child in reversed(list(enumerate(current)))
            )
        elif isinstance(current, float) and not math.isfinite(current):
            # NaN never equals itself; neither is valid JSON
            return current_path, current
        else:
            try:
                get_kind(current)
            except TypeError:
                return current_path, current
    return None


def measure_depth(value: Any, limit: int) -> tuple[int, str]:
    """
    Measure the nesting depth of a JSON value.

    Scalars have depth 0 and each enclosing container adds one. The walk
    stops at the first node deeper than ``limit``.

    Returns:
        (depth, path) of the deepest node seen
    """
    deepest, deepest_path = 0, "$"
    stack = [(value, 0, "$")]
    while stack:
        current, depth, path = stack.pop()
        if isinstance(current, dict):
            items = current.items()
        elif isinstance(current, list):
            items = enumerate(current)
        else:
            continue
        depth += 1
        if depth > deepest:
            deepest, deepest_path = depth, path
            if deepest > limit:
                break
        for key, child in items:
            stack.append((child, depth, build_path(path, key)))
    return deepest, deepest_path
