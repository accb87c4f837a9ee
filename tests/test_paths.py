import pytest

from pathmux.paths import map_values, sanitize_path
from pathmux.types import FrozenDict


@pytest.mark.parametrize(
    "path, expected",
    [
        ("", ""),
        ("/", ""),
        ("///", ""),
        ("home", "home"),
        ("/home/", "home"),
        ("//settings//account/", "settings/account"),
        ("a///b////c", "a/b/c"),
    ],
)
def test_sanitize_path(path: str, expected: str) -> None:
    assert sanitize_path(path) == expected
    # idempotent
    assert sanitize_path(expected) == expected


def test_map_values() -> None:
    segments = ["thread", "abcdef", "page", "4"]
    result = map_values({"threadId": 1, "index": 3}, lambda _, i: segments[i])
    assert result == {"threadId": "abcdef", "index": "4"}
    assert list(result) == ["threadId", "index"]
    assert isinstance(result, FrozenDict)


def test_map_values_passes_key() -> None:
    assert map_values({"a": 1, "b": 2}, lambda k, v: f"{k}{v}") == {
        "a": "a1",
        "b": "b2",
    }


def test_frozen_dict() -> None:
    d = FrozenDict({"a": 1})
    assert hash(d) == hash(FrozenDict({"a": 1}))
    for mutate in (
        lambda: d.__setitem__("b", 2),
        lambda: d.__delitem__("a"),
        lambda: d.update({"b": 2}),
        lambda: d.pop("a"),
        d.clear,
        d.popitem,
    ):
        with pytest.raises(TypeError, match="FrozenDict is immutable"):
            mutate()
    assert d == {"a": 1}
