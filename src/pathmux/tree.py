"""Zero dependency routing trie with :param and trailing * support.

Patterns are parsed into Routes, compiled breadth-first into an immutable
trie of Nodes, and matched with a single non-backtracking walk. All precedence
decisions are made while the trie is built, so the walk only ever has one
place to go.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field

from .errors import DuplicateRoute, InvalidPattern
from .paths import map_values
from .types import (
    SUB_PATH_KEY,
    FrozenDict,
    LiteralSegment,
    Match,
    ParamSegment,
    Route,
    RouteMatch,
    Segment,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Node:
    """Segment-based trie node

    match is the route that wins for paths ending at this node.
    sub_path_match is the "*" route that wins for paths continuing past this
    node where no child can take the next segment.
    """

    match: Match | None = field(default=None)
    sub_path_match: Match | None = field(default=None)
    children: FrozenDict[str, Node] = field(default_factory=FrozenDict)
    param_child: Node | None = field(default=None)


def parse_route(pattern: str) -> Route:
    """Parse a route pattern like `artist/:artistId/featuring` or `settings/*`."""
    if pattern.startswith("/") or pattern.endswith("/") or "//" in pattern:
        msg = (
            "Routes must not start or end with '/', "
            "or contain empty path segments."
        )
        raise InvalidPattern(pattern, msg)

    parts = pattern.split("/")
    matches_sub_paths = parts[-1] == "*"
    if matches_sub_paths:
        parts.pop()

    segments: list[Segment] = []
    params: dict[str, int] = {}
    for i, part in enumerate(parts):
        if part == "*":
            msg = "A wildcard matcher '*' can only occur as the last route segment."
            raise InvalidPattern(pattern, msg)
        if part.startswith(":"):
            name = part[1:]
            if not name or name == SUB_PATH_KEY:
                msg = f"':{name}' is not a valid param name."
                raise InvalidPattern(pattern, msg)
            if name in params:
                msg = f"Contains duplicate param ':{name}'."
                raise InvalidPattern(pattern, msg)
            params[name] = i
            segments.append(ParamSegment(name))
        else:
            segments.append(LiteralSegment(part))

    return Route(
        pattern=pattern,
        segments=tuple(segments),
        params=FrozenDict(params),
        matches_sub_paths=matches_sub_paths,
    )


def pick_best(routes: Iterable[Route]) -> Route | None:
    """Returns the most specific of routes, or None if routes is empty.

    At the first position where one route has a literal segment and the other
    a param, the literal wins. Failing that, the route with more segments wins
    (a "*" route competing with a longer route). Anything else is a tie and
    raises DuplicateRoute.
    """
    best: Route | None = None
    for route in routes:
        if best is None:
            best = route
        else:
            best = _more_specific(best, route)
    return best


def _more_specific(a: Route, b: Route) -> Route:
    for seg_a, seg_b in zip(a.segments, b.segments, strict=False):
        a_is_param = isinstance(seg_a, ParamSegment)
        b_is_param = isinstance(seg_b, ParamSegment)
        if a_is_param and not b_is_param:
            return b
        if b_is_param and not a_is_param:
            return a
    if len(a.segments) > len(b.segments):
        return a
    if len(b.segments) > len(a.segments):
        return b
    raise DuplicateRoute(a.pattern, b.pattern)


@dataclass(slots=True)
class _WorkItem:
    """A node under construction. Mutable during build_tree only."""

    depth: int
    routes: tuple[Route, ...]
    match: Match | None = None
    sub_path_match: Match | None = None
    children: dict[str, int] = field(default_factory=dict)
    param_child: int | None = None


def build_tree(routes: Iterable[Route]) -> Node:
    """Compile routes into an immutable trie, one depth at a time.

    Work items are processed breadth-first from a queue. Each one resolves the
    routes ending at its depth, then splits the routes continuing past it into
    one child per literal segment plus one param child. A route with a param
    segment at this depth also follows every literal child, and a "*" route
    whose own segments are used up follows every child.

    Children always come after their parent in the work list, so nodes are
    created in reverse order and never modified afterwards.
    """
    routes = tuple(routes)
    items = [_WorkItem(depth=0, routes=routes)]
    queue = deque([0])

    while queue:
        item = items[queue.popleft()]
        depth = item.depth

        terminating = [r for r in item.routes if _terminates_at(r, depth)]
        item.match = Match.from_route(pick_best(terminating))
        sub_paths = [
            r for r in item.routes if r.matches_sub_paths and len(r.segments) <= depth
        ]
        item.sub_path_match = Match.from_route(pick_best(sub_paths))

        next_segments: dict[str, None] = {}  # ordered set of literal texts
        has_param = False
        for route in item.routes:
            if len(route.segments) <= depth:
                continue
            segment = route.segments[depth]
            if isinstance(segment, ParamSegment):
                has_param = True
            else:
                next_segments[segment.text] = None

        for text in next_segments:
            item.children[text] = len(items)
            queue.append(len(items))
            items.append(
                _WorkItem(
                    depth=depth + 1,
                    routes=tuple(
                        r for r in item.routes if _continues_with(r, depth, text)
                    ),
                )
            )
        if has_param:
            item.param_child = len(items)
            queue.append(len(items))
            items.append(
                _WorkItem(
                    depth=depth + 1,
                    routes=tuple(
                        r for r in item.routes if _continues_with(r, depth, None)
                    ),
                )
            )

    nodes: list[Node | None] = [None] * len(items)
    for i in reversed(range(len(items))):
        item = items[i]
        nodes[i] = Node(
            match=item.match,
            sub_path_match=item.sub_path_match,
            children=FrozenDict(
                {text: nodes[child] for text, child in item.children.items()}
            ),
            param_child=nodes[item.param_child]
            if item.param_child is not None
            else None,
        )

    logger.debug("built routing trie: %d routes, %d nodes", len(routes), len(nodes))
    root = nodes[0]
    assert root is not None
    return root


def _terminates_at(route: Route, depth: int) -> bool:
    n = len(route.segments)
    return n == depth or (route.matches_sub_paths and n < depth)


def _continues_with(route: Route, depth: int, text: str | None) -> bool:
    """Whether route can match a path whose segment at depth leads to child text.

    text is None for the param child.
    """
    if len(route.segments) <= depth:
        return route.matches_sub_paths
    segment = route.segments[depth]
    if isinstance(segment, ParamSegment):
        return True
    return segment.text == text


def find_match(path: str, tree: Node) -> RouteMatch | None:
    """Walks the tree to find the route matching path.

    Each path segment priority is: literal child > param child > sub path match.
    Returns None if no route matches. path must already be sanitized: a
    leading, trailing or doubled "/" produces an empty segment.
    """
    segments = path.split("/")

    current = tree
    for seg in segments:
        child = current.children.get(seg)
        if child is not None:  # literal match
            current = child
            continue
        if current.param_child is not None:  # fallback to param match
            current = current.param_child
            continue
        if current.sub_path_match is not None:  # fallback to "*" match
            match = current.sub_path_match
            break
        return None  # no match
    else:
        match = current.match

    if match is None:
        return None

    params = map_values(match.params, lambda _, index: segments[index])
    start = match.sub_path_start
    if start is not None and len(segments) > start:
        params = FrozenDict({**params, SUB_PATH_KEY: "/".join(segments[start:])})
    return RouteMatch(route=match.route, params=params)


def format_tree(root: Node, *, tree: bool = False) -> str:
    """Format the routes of a compiled trie as a human-readable string.

    By default produces a column-aligned flat route list:

        artist/:artistId             artistId
        artist/:artistId/featuring   artistId
        home
        settings/*                   *

    With `tree=True`, produces a visual tree of the trie instead. Routes with
    params show up under every literal sibling they also match:

        /
        ├── artist
        │   └── :
        │       ├── = artist/:artistId
        │       └── featuring
        │           └── = artist/:artistId/featuring
        ├── home
        │   └── = home
        └── settings
            ├── = settings/*
            └── * settings/*
    """
    if tree:
        lines = ["/"]
        _render_tree(root, "", lines=lines)
        return "\n".join(lines)
    return _format_route_list(root)


def _format_route_list(root: Node) -> str:
    """Column-aligned flat route list."""
    found: dict[str, Match] = {}
    _collect_matches(root, found)
    if not found:
        return ""

    route_w = max(len(route) for route in found)
    lines: list[str] = []
    for route, match in sorted(found.items()):
        captures = list(match.params)
        if match.sub_path_start is not None:
            captures.append(SUB_PATH_KEY)
        if captures:
            lines.append(f"{route:<{route_w}}   {', '.join(captures)}")
        else:
            lines.append(route)
    return "\n".join(lines)


def _collect_matches(node: Node, found: dict[str, Match]) -> None:
    for match in (node.match, node.sub_path_match):
        if match is not None:
            found.setdefault(match.route, match)
    for child in node.children.values():
        _collect_matches(child, found)
    if node.param_child is not None:
        _collect_matches(node.param_child, found)


def _render_tree(node: Node, prefix: str, *, lines: list[str]) -> None:
    """Recursively render a node's children with tree-drawing prefixes."""
    items: list[tuple[str, Node | None]] = []
    if node.match is not None:
        items.append((f"= {node.match.route}", None))
    if node.sub_path_match is not None:
        items.append((f"* {node.sub_path_match.route}", None))
    for seg, child in sorted(node.children.items()):
        items.append((seg or '""', child))
    if node.param_child is not None:
        items.append((":", node.param_child))

    for i, (label, child) in enumerate(items):
        is_last = i == len(items) - 1
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{label}")
        if child is not None:
            extension = "    " if is_last else "│   "
            _render_tree(child, prefix + extension, lines=lines)
