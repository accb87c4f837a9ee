import logging
import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from pathmux import (
    DuplicateRoute,
    InvalidPattern,
    PathmuxError,
    Router,
    RouteMatch,
    sanitize_path,
)

routes = [
    "",
    "home",
    "artist/:artistId",
    "artist/:artistId/featuring",
    "settings/*",
    "*",
]


@pytest.mark.parametrize(
    "raw_path, expected",
    [
        ("/", RouteMatch(route="")),
        ("/home", RouteMatch(route="home")),
        ("/home/", RouteMatch(route="home")),
        (
            "//artist//42//featuring",
            RouteMatch(
                route="artist/:artistId/featuring", params={"artistId": "42"}
            ),
        ),
        ("/settings", RouteMatch(route="settings/*")),
        (
            "/settings/account/privacy",
            RouteMatch(route="settings/*", params={"*": "account/privacy"}),
        ),
        # 404 page
        ("/artist/42/albums", RouteMatch(route="*", params={"*": "artist/42/albums"})),
    ],
)
def test_match(raw_path: str, expected: RouteMatch) -> None:
    router = Router(routes)
    assert router.match(sanitize_path(raw_path)) == expected


def test_match_literal_over_param() -> None:
    for patterns in (["a/:p1/c/d", "a/b/:p2/d"], ["a/b/:p2/d", "a/:p1/c/d"]):
        match = Router(patterns).match("a/b/c/d")
        assert match == RouteMatch(route="a/b/:p2/d", params={"p2": "c"})


def test_match_params() -> None:
    router = Router(["thread/:threadId/page/:index"])
    match = router.match("thread/abcdef/page/4")
    assert match is not None
    assert match.params == {"threadId": "abcdef", "index": "4"}


def test_match_sub_path_boundaries() -> None:
    router = Router(["settings/*"])
    assert router.match("settings") == RouteMatch(route="settings/*", params={})
    assert router.match("settings/") == RouteMatch(
        route="settings/*", params={"*": ""}
    )
    assert router.match("settings/account/privacy") == RouteMatch(
        route="settings/*", params={"*": "account/privacy"}
    )


def test_match_no_match() -> None:
    router = Router(["home", "artist/:artistId"])
    assert router.match("artists") is None
    assert router.match("artist/42/featuring") is None
    assert router.match("artist") is None
    assert router.match("") is None


def test_match_result_is_immutable() -> None:
    match = Router(["artist/:artistId"]).match("artist/42")
    assert match is not None
    with pytest.raises(TypeError, match="FrozenDict is immutable"):
        match.params["artistId"] = "43"  # type: ignore[index]


def test_match_concurrent_readers() -> None:
    router = Router(routes)
    paths = ["home", "artist/1", "artist/2/featuring", "settings/a/b", "x"] * 50
    expected = [router.match(p) for p in paths]
    with ThreadPoolExecutor(max_workers=8) as pool:
        assert list(pool.map(router.match, paths)) == expected


def test_duplicate_route() -> None:
    with pytest.raises(
        DuplicateRoute,
        match=re.escape("Routes 'a/:x' and 'a/:y' match the same path."),
    ) as exc_info:
        Router(["a/:x", "a/:y"])
    assert exc_info.value.first == "a/:x"
    assert exc_info.value.second == "a/:y"


def test_duplicate_route_same_pattern() -> None:
    with pytest.raises(DuplicateRoute):
        Router(["home", "home"])


def test_prefix_routes_are_not_duplicates() -> None:
    router = Router(["a", "a/b"])
    assert router.match("a") == RouteMatch(route="a")
    assert router.match("a/b") == RouteMatch(route="a/b")


@pytest.mark.parametrize("pattern", ["/a", "a//b", "a/*/b", "a/", "a/:x/:x"])
def test_invalid_pattern(pattern: str) -> None:
    with pytest.raises(InvalidPattern):
        Router(["home", pattern])


def test_errors_are_value_errors() -> None:
    assert issubclass(InvalidPattern, PathmuxError)
    assert issubclass(DuplicateRoute, PathmuxError)
    with pytest.raises(ValueError):
        Router(["a//b"])
    with pytest.raises(ValueError):
        Router(["a/:x", "a/:y"])


def test_routes() -> None:
    router = Router(routes)
    assert router.routes == tuple(routes)
    assert "settings/*" in router
    assert "settings" not in router
    assert repr(Router(["home"])) == "Router(['home'])"


def test_format() -> None:
    router = Router(["settings/*", "home"])
    assert router.format() == "home\nsettings/*   *"
    assert router.format(tree=True) == "\n".join(
        [
            "/",
            "├── home",
            "│   └── = home",
            "└── settings",
            "    ├── = settings/*",
            "    └── * settings/*",
        ]
    )


def test_logs_compilation(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="pathmux"):
        Router(["home", "artist/:artistId"])
    assert "compiled router with 2 routes" in caplog.text
    assert "built routing trie: 2 routes, 4 nodes" in caplog.text
