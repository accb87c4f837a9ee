# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "pathmux @ file:///${PROJECT_ROOT}/../pathmux",
# ]
# ///
import logging
import sys
import time

from pathmux import Router, sanitize_path

router = Router(
    [
        "",
        "home",
        "artist/:artistId",
        "artist/:artistId/featuring",
        "settings/*",
        "*",
    ]
)


def render(raw_path: str) -> str:
    match = router.match(sanitize_path(raw_path))
    assert match is not None  # "*" matches everything
    match match.route:
        case "":
            return "> redirect to home"
        case "home":
            return "> home page"
        case "artist/:artistId" | "artist/:artistId/featuring":
            return f"> artist {match.params['artistId']}"
        case "settings/*":
            # a nested settings router would get the sub-path
            return f"> settings {match.params.get('*', '')!r}"
        case _:
            return f"> 404 {match.params.get('*', '')!r}"


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    print(router.format())
    print()
    print(router.format(tree=True))
    print()

    for raw_path in [
        "/",
        "/home",
        "/artist/42",
        "//artist/42/featuring/",
        "/settings",
        "/settings/account/privacy",
        "/some/nonexistent/route",
    ]:
        start = time.perf_counter()
        result = render(raw_path)
        end = time.perf_counter()
        print(raw_path, result, file=sys.stderr, flush=True, end=" ")
        print(f"(lookup took {end - start:.2E} seconds)", file=sys.stderr, flush=True)


if __name__ == "__main__":
    main()
