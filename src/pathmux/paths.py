"""Helpers for preparing paths and rewriting captured params."""

import re
from collections.abc import Callable, Mapping

from .types import FrozenDict

_REPEATED_SLASHES = re.compile(r"/{2,}")


def sanitize_path(path: str) -> str:
    """Strip leading and trailing `/` and collapse repeated `/` into one.

    ``Router.match`` expects its input in this form:

        >>> sanitize_path("//settings//account/")
        'settings/account'
    """
    return _REPEATED_SLASHES.sub("/", path.strip("/"))


def map_values[K, V, R](
    mapping: Mapping[K, V], fn: Callable[[K, V], R]
) -> FrozenDict[K, R]:
    """Rewrite each value of mapping with fn(key, value), keeping key order."""
    return FrozenDict({key: fn(key, value) for key, value in mapping.items()})
