"""
Small structural helpers shared by the generator.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, TypeVar

K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")

__all__ = ["map_values", "is_not_empty", "has_key", "is_object"]


def map_values(obj: Mapping, fn: Callable[[V, K], R]) -> Dict[K, R]:
    """Apply ``fn(value, key)`` to every entry, keeping key order."""
    return {key: fn(value, key) for key, value in obj.items()}


def is_not_empty(obj: Mapping) -> bool:
    return len(obj) > 0


def has_key(obj: Mapping, key: Any) -> bool:
    return key in obj


def is_object(value: Any) -> bool:
    # lists count as objects, the way JSON documents are walked
    return isinstance(value, (Mapping, list))
