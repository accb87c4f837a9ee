"""URL path router built on the routing trie in pathmux.tree."""

import logging
from collections.abc import Iterable

from .tree import Node, build_tree, find_match, format_tree, parse_route
from .types import Route, RouteMatch

logger = logging.getLogger(__name__)


class Router:
    """A URL path router for patterns like `thread/:threadId/page/:index`
    or `settings/*`.

    All patterns are given up front and compiled into an immutable trie, so a
    Router can be shared between threads and matched against concurrently:

        router = Router([
            "",
            "home",
            "artist/:artistId",
            "artist/:artistId/featuring",
            "settings/*",
            "*",
        ])
        match = router.match(sanitize_path("/artist/42/featuring"))
        # match.route == "artist/:artistId/featuring"
        # match.params == {"artistId": "42"}

    Route segments match according to these rules:

    - Segments starting with `:` match any single path segment and capture it
      in `RouteMatch.params` under the name after the colon.
    - A trailing `*` matches all remaining path segments, including none. The
      remaining sub-path is captured under the `"*"` key when there is one:
      `settings/*` matches `settings` with `{}`, `settings/` with
      `{"*": ""}`, and `settings/account/privacy` with
      `{"*": "account/privacy"}`.
    - Anything else matches itself.

    If several routes match the same path, the one with the earliest literal
    segment where the others have a param wins, so
    `Router(["a/:p1/c/d", "a/b/:p2/d"]).match("a/b/c/d")` returns
    `a/b/:p2/d` with `{"p2": "c"}`. Routes that are equally specific raise
    `DuplicateRoute` here in the constructor.
    """

    __slots__ = ("_routes", "_tree")
    _routes: tuple[Route, ...]
    _tree: Node

    def __init__(self, patterns: Iterable[str]) -> None:
        self._routes = tuple(parse_route(pattern) for pattern in patterns)
        self._tree = build_tree(self._routes)
        logger.info("compiled router with %d routes", len(self._routes))

    def __contains__(self, pattern: object) -> bool:
        return any(route.pattern == pattern for route in self._routes)

    def __repr__(self) -> str:
        return f"Router({list(self.routes)!r})"

    @property
    def routes(self) -> tuple[str, ...]:
        """The registered patterns, in registration order."""
        return tuple(route.pattern for route in self._routes)

    def match(self, path: str) -> RouteMatch | None:
        """Returns the best matching route for path, or None.

        This method assumes path doesn't start or end with "/" and contains no
        "//". A leading "/" is read as an empty first segment, so no route
        would match. Use `sanitize_path()` first.
        """
        return find_match(path, self._tree)

    def format(self, *, tree: bool = False) -> str:
        """Human-readable listing of the compiled routes, see `format_tree`."""
        return format_tree(self._tree, tree=tree)
