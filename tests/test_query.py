import json
from datetime import datetime, timezone
from urllib.parse import parse_qs, quote_plus

import pytest

from earendel.mast.query import SEARCH_HEADERS, Coordinate, MastQueryBuilder

EXPECTED_JSON = (
    '{"service":"Mast.Caom.Cone","params":{"ra":64.0,"dec":-54.9,"radius":0.2},'
    '"format":"json","pagesize":25,"page":3,"removenullcolumns":true,"timeout":30}'
)


def test_build_uses_fixed_cone_search_settings(ngc1566):
    request = MastQueryBuilder().build(ngc1566, page=4)

    assert request.service == "Mast.Caom.Cone"
    assert request.params.ra == ngc1566.ra
    assert request.params.dec == ngc1566.dec
    assert request.params.radius == 0.2
    assert request.format == "json"
    assert request.pagesize == 25
    assert request.page == 4
    assert request.removenullcolumns is True
    assert request.timeout == 30
    assert request.cachebreaker is None


def test_json_is_compact_and_ordered():
    request = MastQueryBuilder().build(Coordinate(ra=64.0, dec=-54.9), page=3)

    assert request.to_json() == EXPECTED_JSON


def test_body_is_json_then_percent_encoded_as_single_value():
    body = MastQueryBuilder().build(Coordinate(ra=64.0, dec=-54.9), page=3).encode()

    assert body == "request=" + quote_plus(EXPECTED_JSON)
    assert body.startswith("request=%7B%22service%22%3A%22Mast.Caom.Cone%22%2C")
    assert json.loads(parse_qs(body)["request"][0])["page"] == 3


def test_encoding_is_deterministic(ngc1566):
    builder = MastQueryBuilder()
    request = builder.build(ngc1566, page=1)

    assert request.encode() == request.encode()
    assert builder.build(ngc1566, page=1).encode() == request.encode()


def test_pages_differ_only_in_page_field(ngc1566):
    builder = MastQueryBuilder()
    first = json.loads(builder.build(ngc1566, page=0).to_json())
    second = json.loads(builder.build(ngc1566, page=1).to_json())

    assert {k for k in first if first[k] != second[k]} == {"page"}


@pytest.mark.parametrize("page", [-1, 1.5, "2", True])
def test_rejects_invalid_pages(ngc1566, page):
    with pytest.raises(ValueError):
        MastQueryBuilder().build(ngc1566, page=page)


def test_cache_breaker_adds_timestamp(ngc1566):
    stamp = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)
    request = MastQueryBuilder(cache_breaker=True, clock=lambda: stamp).build(ngc1566, page=0)

    assert request.cachebreaker == "2026-10-19T08:30:00+00:00"
    assert json.loads(request.to_json())["cachebreaker"] == "2026-10-19T08:30:00+00:00"


def test_search_headers():
    assert SEARCH_HEADERS == {
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": "text/plain",
    }
