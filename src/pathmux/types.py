"""Immutable value types shared by the trie builder and matcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Never

SUB_PATH_KEY = "*"


class FrozenDict[K, V](dict[K, V]):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._hash: int | None = None

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self.items()))
        return self._hash

    def _immutable(self, *args, **kwargs) -> Never:
        msg = "FrozenDict is immutable"
        raise TypeError(msg)

    __setitem__ = __delitem__ = clear = pop = popitem = setdefault = update = _immutable
    __ior__ = _immutable


@dataclass(slots=True, frozen=True)
class LiteralSegment:
    """Route segment that only matches its own text."""

    text: str


@dataclass(slots=True, frozen=True)
class ParamSegment:
    """Route segment that matches any single path segment and captures it."""

    name: str


type Segment = LiteralSegment | ParamSegment


@dataclass(slots=True, frozen=True)
class Route:
    """Parsed form of a single route pattern.

    ``segments`` excludes a trailing ``*``, which is recorded as
    ``matches_sub_paths`` instead. ``params`` maps each param name to the
    index of the path segment it captures.
    """

    pattern: str
    segments: tuple[Segment, ...] = field(default=())
    params: FrozenDict[str, int] = field(default_factory=FrozenDict)
    matches_sub_paths: bool = False


@dataclass(slots=True, frozen=True)
class Match:
    """What a trie node stores about the route that wins there."""

    route: str
    params: FrozenDict[str, int] = field(default_factory=FrozenDict)
    sub_path_start: int | None = None  # only set for routes ending in "*"

    @classmethod
    def from_route(cls, route: Route | None) -> Match | None:
        if route is None:
            return None
        return cls(
            route=route.pattern,
            params=route.params,
            sub_path_start=len(route.segments) if route.matches_sub_paths else None,
        )


@dataclass(slots=True, frozen=True)
class RouteMatch:
    """Result of a successful match.

    ``route`` is the pattern exactly as it was registered. ``params`` holds one
    entry per ``:param`` segment of that pattern, and for patterns ending in
    ``*`` an extra ``"*"`` entry with the remaining sub-path whenever the input
    path has segments beyond the pattern's own.
    """

    route: str
    params: FrozenDict[str, str] = field(default_factory=FrozenDict)
