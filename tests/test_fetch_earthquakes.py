from datetime import datetime, timezone
import pytest
from pydantic import ValidationError
from quakeinsight import fetch_earthquakes as fetch_module
from quakeinsight.fetch_earthquakes import FetchParams, fetch_earthquakes
from quakeinsight.historical import filter_historical, load_historical
from quakeinsight.usgs import features_to_earthquakes


@pytest.fixture
def usgs_calls(monkeypatch, feature_factory):
    calls = []
    features = [
        feature_factory(id="us-new", mag=4.8, time=1772178744828),
        feature_factory(
            id="us-assam", mag=5.1, time=1771000000000, lat=26.7, lng=92.3
        ),
    ]

    def fake_fetch(start_date, end_date, min_magnitude, limit, timeout):
        calls.append(
            {
                "start_date": start_date,
                "end_date": end_date,
                "min_magnitude": min_magnitude,
                "limit": limit,
            }
        )
        return features_to_earthquakes(features)

    monkeypatch.setattr(fetch_module, "fetch_earthquakes_from_usgs", fake_fetch)
    return calls


def test_params_defaults():
    params = FetchParams()
    assert params.data_type == "recent"
    assert params.start_year == 1900
    assert params.end_year == datetime.now(timezone.utc).year
    assert params.min_magnitude == 0.0
    assert params.limit is None


def test_params_parse_query_strings():
    params = FetchParams.model_validate(
        {"type": "all", "startYear": "1990", "endYear": "2020", "minMagnitude": "5.5"}
    )
    assert (params.data_type, params.start_year, params.end_year) == ("all", 1990, 2020)
    assert params.min_magnitude == 5.5


@pytest.mark.parametrize(
    "query", [{"type": "future"}, {"startYear": "nineteen"}, {"limit": "-1"}]
)
def test_params_reject_invalid_values(query):
    with pytest.raises(ValidationError):
        FetchParams.model_validate(query)


def test_recent_fetches_last_30_days_from_usgs(usgs_calls):
    result = fetch_earthquakes(FetchParams(endYear=2026, minMagnitude=3.0))

    assert len(usgs_calls) == 1
    call = usgs_calls[0]
    assert call["end_date"] == "2026-12-31"
    assert call["min_magnitude"] == 3.0
    assert call["limit"] == 2000
    assert datetime.strptime(call["start_date"], "%Y-%m-%d")

    assert result["dataType"] == "recent"
    assert result["source"] == "USGS"
    assert result["count"] == 2
    assert [eq["id"] for eq in result["earthquakes"]] == ["us-new", "us-assam"]
    assert result["stats"]["total"] == 2
    assert result["dateRange"] == {"startYear": 1900, "endYear": 2026}


def test_all_merges_usgs_and_historical(usgs_calls):
    result = fetch_earthquakes(
        FetchParams(type="all", startYear=1850, endYear=2026, minMagnitude=2.0)
    )

    call = usgs_calls[0]
    assert call["start_date"] == "1900-01-01"
    assert call["min_magnitude"] == 4.5

    historical = filter_historical(load_historical(), 1850, 2026, 2.0)
    assert result["count"] == 2 + len(historical)
    assert result["source"] == "USGS + Historical Archive"

    times = [eq["time"] for eq in result["earthquakes"]]
    assert times == sorted(times, reverse=True)
    assert result["earthquakes"][-1]["id"] == "hist-1863"


def test_historical_does_not_call_usgs(usgs_calls):
    result = fetch_earthquakes(
        FetchParams(type="historical", startYear=1800, endYear=1899, minMagnitude=7.0)
    )

    assert usgs_calls == []
    assert result["source"] == "Historical Archive"
    assert [eq["id"] for eq in result["earthquakes"]] == [
        "hist-1897",
        "hist-1885",
        "hist-1869",
        "hist-1833",
        "hist-1819",
        "hist-1803",
    ]
    assert all(eq["isHistorical"] for eq in result["earthquakes"])


def test_historical_ids_are_not_duplicated(monkeypatch):
    duplicate = [eq for eq in load_historical() if eq.id == "hist-2001"]
    monkeypatch.setattr(
        fetch_module, "fetch_earthquakes_from_usgs", lambda *args: list(duplicate)
    )

    result = fetch_earthquakes(FetchParams(type="all", startYear=2001, endYear=2001))

    assert [eq["id"] for eq in result["earthquakes"]] == ["hist-2001"]


def test_state_region_and_limit_filters(usgs_calls):
    by_state = fetch_earthquakes(FetchParams(state="Assam"))
    assert [eq["id"] for eq in by_state["earthquakes"]] == ["us-assam"]

    by_region = fetch_earthquakes(FetchParams(region="East India"))
    assert [eq["id"] for eq in by_region["earthquakes"]] == ["us-new"]

    limited = fetch_earthquakes(FetchParams(limit=1))
    assert limited["count"] == 1
    assert limited["stats"]["total"] == 1
