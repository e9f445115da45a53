import random
import pytest
import requests
from unittest.mock import MagicMock
from app.services.image_resolver import (
    FALLBACK_IMAGES,
    NON_IMAGE_FILE,
    ImageResolver,
    build_queries,
)

THUMB = "https://upload.wikimedia.org/wikipedia/commons/thumb/a/ab/Apple_pie.jpg/800px-Apple_pie.jpg"


def search_payload(*titles):
    return {"query": {"search": [{"title": t} for t in titles]}}


def imageinfo_payload(thumburl=None, url=None):
    info = {}
    if thumburl:
        info["thumburl"] = thumburl
    if url:
        info["url"] = url
    return {"query": {"pages": {"42": {"imageinfo": [info]}}}}


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def resolver(config, session):
    return ImageResolver(config, session=session, rng=random.Random(7))


def fake_commons(make_response, searches, infos):
    """Route search calls and imageinfo calls to separate canned payloads."""
    searches = list(searches)

    def get(url, params=None, timeout=None):
        if params.get("list") == "search":
            return make_response(searches.pop(0) if searches else search_payload())
        return make_response(infos[params["titles"]])

    return get


def searched_queries(session):
    return [
        c.kwargs["params"]["srsearch"]
        for c in session.get.call_args_list
        if c.kwargs["params"].get("list") == "search"
    ]


def test_returns_first_thumbnail_and_stops(resolver, session, make_response):
    session.get.side_effect = fake_commons(
        make_response,
        [search_payload("File:Apple pie.jpg")],
        {"File:Apple pie.jpg": imageinfo_payload(thumburl=THUMB, url="https://x/Apple_pie.jpg")},
    )

    assert resolver.resolve("Apple Pie") == THUMB
    assert session.get.call_count == 2
    assert searched_queries(session) == ["apple pie dessert"]


def test_search_request_shape(resolver, session, make_response, config):
    session.get.side_effect = fake_commons(
        make_response,
        [search_payload("File:Apple pie.jpg")],
        {"File:Apple pie.jpg": imageinfo_payload(thumburl=THUMB)},
    )
    resolver.resolve("Apple Pie")

    search_call, info_call = session.get.call_args_list
    assert search_call.args[0] == config.commons_api_url
    assert search_call.kwargs["params"]["srnamespace"] == 6
    assert search_call.kwargs["params"]["srlimit"] == 3
    assert search_call.kwargs["timeout"] == config.request_timeout_seconds
    assert info_call.kwargs["params"]["iiurlwidth"] == 800
    assert info_call.kwargs["params"]["prop"] == "imageinfo"


def test_falls_back_to_original_url_without_thumbnail(resolver, session, make_response):
    original = "https://upload.wikimedia.org/wikipedia/commons/a/ab/Trifle.jpg"
    session.get.side_effect = fake_commons(
        make_response,
        [search_payload("File:Trifle.jpg")],
        {"File:Trifle.jpg": imageinfo_payload(url=original)},
    )
    assert resolver.resolve("Trifle") == original


def test_skips_non_photographic_files(resolver, session, make_response):
    session.get.side_effect = fake_commons(
        make_response,
        [search_payload("File:Tart diagram.svg", "File:Tart recipe.pdf", "File:Tart.jpg")],
        {"File:Tart.jpg": imageinfo_payload(thumburl=THUMB)},
    )

    assert resolver.resolve("Tart") == THUMB
    info_titles = [
        c.kwargs["params"]["titles"]
        for c in session.get.call_args_list
        if "titles" in c.kwargs["params"]
    ]
    assert info_titles == ["File:Tart.jpg"]


def test_rejects_svg_urls_and_tries_next_candidate(resolver, session, make_response):
    session.get.side_effect = fake_commons(
        make_response,
        [search_payload("File:Icon.png", "File:Cake.jpg")],
        {
            "File:Icon.png": imageinfo_payload(thumburl="https://x/Icon.svg.png"),
            "File:Cake.jpg": imageinfo_payload(thumburl=THUMB),
        },
    )
    assert resolver.resolve("Cake") == THUMB


def test_tries_query_variants_in_order(resolver, session, make_response):
    session.get.side_effect = fake_commons(
        make_response,
        [search_payload(), search_payload("File:Eton mess.jpg")],
        {"File:Eton mess.jpg": imageinfo_payload(thumburl=THUMB)},
    )

    assert resolver.resolve("Eton Mess") == THUMB
    assert searched_queries(session) == ["eton mess dessert", "eton mess cake"]


def test_no_results_uses_fallback_pool(resolver, session, make_response):
    session.get.side_effect = fake_commons(make_response, [], {})

    url = resolver.resolve("Unknown Pudding")
    assert url in FALLBACK_IMAGES
    assert searched_queries(session) == [
        "unknown pudding dessert",
        "unknown pudding cake",
        "unknown pudding food",
        "unknown pudding",
    ]


@pytest.mark.parametrize("failure", [
    requests.ConnectionError("network down"),
    requests.Timeout("timed out"),
])
def test_network_failure_never_raises(resolver, session, failure):
    session.get.side_effect = failure

    url = resolver.resolve("Bakewell tart")
    assert url in FALLBACK_IMAGES
    assert not NON_IMAGE_FILE.search(url)
    assert session.get.call_count == 1


def test_http_error_uses_fallback(resolver, session, make_response):
    session.get.return_value = make_response({}, status_code=503, reason="Service Unavailable")
    assert resolver.resolve("Pavlova") in FALLBACK_IMAGES


def test_malformed_payload_uses_fallback(resolver, session, make_response):
    session.get.return_value = make_response(["not", "a", "dict"])
    assert resolver.resolve("Pavlova") in FALLBACK_IMAGES


def test_fallback_pick_uses_injected_random(config, session):
    rng = MagicMock()
    rng.choice.side_effect = lambda pool: pool[-1]
    resolver = ImageResolver(config, session=session, rng=rng)
    session.get.side_effect = requests.ConnectionError("offline")

    assert resolver.resolve("Pavlova") == FALLBACK_IMAGES[-1]


def test_fallback_pool_has_enough_images():
    assert len(FALLBACK_IMAGES) >= 4
    assert all(url.startswith("https://") for url in FALLBACK_IMAGES)


def test_build_queries_normalizes_name():
    assert build_queries("Apple & Blackberry  Crumble!") == [
        "apple blackberry crumble dessert",
        "apple blackberry crumble cake",
        "apple blackberry crumble food",
        "apple blackberry crumble",
    ]


def test_build_queries_with_blank_name():
    assert build_queries("  ") == ["dessert", "cake", "food"]
