import asyncio

from bridgequote.integrations import (
    INVALID_ZIP_MESSAGE,
    NOT_FOUND_MESSAGE,
    UNAVAILABLE_MESSAGE,
    AreaClassification,
    AreaType,
    InMemoryAreaCache,
    clean_zip,
    is_valid_zip,
)
from factories import make_lookup


def test_zip_helpers():
    assert clean_zip("10001-1234") == "10001"
    assert clean_zip(" 9021 ") == "9021"
    assert is_valid_zip("10001")
    assert not is_valid_zip("10001-1234")
    assert not is_valid_zip("123")


def test_classifies_urban_and_rural():
    calls = []
    lookup = make_lookup(calls)
    urban = asyncio.run(lookup.classify("10001"))
    assert urban.found
    assert urban.classification.area_type == AreaType.URBAN
    assert urban.classification.source == "census_api"
    assert asyncio.run(lookup.is_rural("59718")) is True
    assert asyncio.run(lookup.is_urban("59718")) is False


def test_invalid_zip_skips_request():
    calls = []
    result = asyncio.run(make_lookup(calls).classify("123"))
    assert not result.found
    assert result.error == INVALID_ZIP_MESSAGE
    assert calls == []


def test_unknown_zip_not_found():
    calls = []
    lookup = make_lookup(calls)
    result = asyncio.run(lookup.classify("00000"))
    assert not result.found
    assert result.error == NOT_FOUND_MESSAGE
    assert asyncio.run(lookup.is_rural("00000")) is None


def test_server_error_reports_unavailable():
    calls = []
    result = asyncio.run(make_lookup(calls, status=503).classify("10001"))
    assert not result.found
    assert result.error == UNAVAILABLE_MESSAGE


def test_results_are_cached():
    calls = []
    lookup = make_lookup(calls)
    asyncio.run(lookup.classify("10001"))
    asyncio.run(lookup.classify("10001"))
    assert len(calls) == 1
    assert lookup.cache_stats() == {"size": 1, "rural": 0, "urban": 1}
    lookup.clear_cache()
    asyncio.run(lookup.classify("10001"))
    assert len(calls) == 2


def test_api_key_and_base_url_from_settings():
    calls = []
    lookup = make_lookup(calls, census_api_key="secret", census_api_base_url="https://census.test/acs5")
    asyncio.run(lookup.classify("10001"))
    url = calls[0].url
    assert url.host == "census.test"
    assert url.params["key"] == "secret"
    assert url.params["get"] == "B01003_001E"


def test_batch_classify_keeps_order():
    calls = []
    results = asyncio.run(make_lookup(calls).batch_classify(["59718", "bad", "10001"], delay=0))
    assert [r.found for r in results] == [True, False, True]
    assert results[0].classification.area_type == AreaType.RURAL


def test_cache_entries_expire():
    now = [0.0]
    cache = InMemoryAreaCache(ttl_seconds=60, clock=lambda: now[0])
    entry = AreaClassification(zip_code="10001", area_type=AreaType.URBAN, population=42204)
    cache.set("10001", entry)
    now[0] = 59
    assert cache.get("10001") == entry
    now[0] = 60
    assert cache.get("10001") is None
    assert cache.values() == []
