from datetime import datetime, timezone
import pytest
import requests
from pydantic import ValidationError
from quakeinsight import usgs
from quakeinsight.errors import UsgsError
from quakeinsight.usgs import (
    build_query_params,
    feature_to_earthquake,
    features_to_earthquakes,
    get_data_from_url,
)


def test_build_query_params_targets_india_bounding_box():
    assert build_query_params("2025-01-01", "2026-12-31", 4.5, 2000) == {
        "format": "geojson",
        "minlatitude": 6.5,
        "maxlatitude": 35.5,
        "minlongitude": 68.0,
        "maxlongitude": 97.5,
        "minmagnitude": 4.5,
        "starttime": "2025-01-01",
        "endtime": "2026-12-31",
        "orderby": "time",
        "limit": 2000,
    }


def test_feature_to_earthquake(feature_factory):
    eq = feature_to_earthquake(feature_factory())

    assert eq.id == "us7000abcd"
    assert eq.magnitude == 4.6
    assert eq.location == "20 km WNW of Naya Bazar, India"
    assert eq.time == datetime(2026, 2, 27, 7, 52, 24, 828000, tzinfo=timezone.utc)
    assert eq.depth == 10.0
    assert (eq.latitude, eq.longitude) == (27.1964, 88.0455)
    assert (eq.state, eq.region) == ("West Bengal", "East India")
    assert eq.is_historical is False
    assert eq.source == "USGS"
    assert eq.to_api() == {
        "id": "us7000abcd",
        "magnitude": 4.6,
        "location": "20 km WNW of Naya Bazar, India",
        "time": "2026-02-27T07:52:24.828Z",
        "depth": 10.0,
        "coordinates": {"lat": 27.1964, "lng": 88.0455},
        "state": "West Bengal",
        "region": "East India",
        "isHistorical": False,
    }


def test_feature_fallbacks(feature_factory):
    feature = feature_factory(mag=None, place=None, depth=None, time=631152000000 - 1)
    eq = feature_to_earthquake(feature)

    assert eq.magnitude == 0.0
    assert eq.location == "West Bengal, India"
    assert eq.depth == 0.0
    # 1989-12-31T23:59:59.999Z
    assert eq.is_historical is True


def test_feature_without_coordinates_is_rejected(feature_factory):
    feature = feature_factory()
    feature["geometry"]["coordinates"] = [88.0]
    with pytest.raises(ValidationError):
        feature_to_earthquake(feature)


def test_features_to_earthquakes_skips_bad_features(feature_factory):
    broken = feature_factory(id="broken")
    broken["geometry"]["coordinates"] = [None, None, 5.0]
    outside = feature_factory(id="outside", lat=40.0, lng=116.4)

    earthquakes = features_to_earthquakes([feature_factory(), broken, outside])

    assert [eq.id for eq in earthquakes] == ["us7000abcd"]


def test_get_data_from_url_returns_json(monkeypatch, fake_response):
    calls = []

    def fake_get(url, params, timeout):
        calls.append((url, params, timeout))
        return fake_response(200, {"features": []})

    monkeypatch.setattr(usgs.requests, "get", fake_get)

    data = get_data_from_url("https://example.org/feed", {"limit": 10}, timeout=5)
    assert data == {"features": []}
    assert calls == [("https://example.org/feed", {"limit": 10}, 5)]


def test_get_data_from_url_raises_on_http_error(monkeypatch, fake_response):
    monkeypatch.setattr(
        usgs.requests, "get", lambda url, params, timeout: fake_response(503, None, "down")
    )
    with pytest.raises(UsgsError, match="USGS API error: 503"):
        get_data_from_url("https://example.org/feed")


def test_get_data_from_url_raises_on_connection_error(monkeypatch):
    def fail(url, params, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(usgs.requests, "get", fail)
    with pytest.raises(UsgsError) as excinfo:
        get_data_from_url("https://example.org/feed")
    assert excinfo.value.status_code == 500


def test_fetch_features_handles_missing_features_key(monkeypatch):
    monkeypatch.setattr(usgs, "get_data_from_url", lambda url, params, timeout: {"type": "x"})
    assert usgs.fetch_features("2026-01-01", "2026-12-31", 0, 10) == []


def test_fetch_features_lets_requests_encode_the_query(monkeypatch, fake_response, feature_factory):
    calls = []

    def fake_get(url, params, timeout):
        calls.append((url, params, timeout))
        return fake_response(200, {"features": [feature_factory()]})

    monkeypatch.setattr(usgs.requests, "get", fake_get)

    features = usgs.fetch_features("2026-01-01", "2026-12-31", 3.0, 20000, timeout=7)

    assert [feature["id"] for feature in features] == ["us7000abcd"]
    url, params, timeout = calls[0]
    assert url == "https://earthquake.usgs.gov/fdsnws/event/1/query"
    assert params["starttime"] == "2026-01-01"
    assert params["minmagnitude"] == 3.0
    assert params["limit"] == 20000
    assert timeout == 7
