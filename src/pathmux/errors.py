"""Exceptions raised while compiling route patterns.

Matching never raises: an unmatched path is reported as ``None``.
"""


class PathmuxError(Exception):
    """Base for all pathmux errors."""


class InvalidPattern(PathmuxError, ValueError):  # noqa: N818
    """A route pattern is syntactically malformed."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route '{pattern}': {reason}")


class DuplicateRoute(PathmuxError, ValueError):  # noqa: N818
    """Two route patterns are equally specific for the same paths."""

    def __init__(self, first: str, second: str) -> None:
        self.first = first
        self.second = second
        super().__init__(f"Routes '{first}' and '{second}' match the same path.")
