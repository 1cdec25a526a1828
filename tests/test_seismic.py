from datetime import datetime, timezone
import pytest
from quakeinsight.configs.earthquake import Earthquake
from quakeinsight.seismic import (
    PREDICTIONS,
    SPECTRAL_PERIODS,
    calculate_pga,
    get_mmi,
    ground_motion,
    hypocentral_distance,
    regional_pga,
)


def quake(id, magnitude, region, is_historical=False, depth=10.0):
    return Earthquake(
        id=id,
        magnitude=magnitude,
        location=region,
        time=datetime(2026, 1, 1, tzinfo=timezone.utc),
        depth=depth,
        latitude=20.0,
        longitude=80.0,
        region=region,
        is_historical=is_historical,
    )


def test_hypocentral_distance():
    assert hypocentral_distance(30, 40) == pytest.approx(50.0)


@pytest.mark.parametrize(
    "pga, value, label",
    [
        (0.1, 1, "I - Not felt"),
        (0.17, 2, "II-III - Weak"),
        (5.0, 5, "V - Moderate"),
        (100, 9, "IX - Violent"),
        (124, 10, "X+ - Extreme"),
    ],
)
def test_get_mmi(pga, value, label):
    assert get_mmi(pga) == {"value": value, "label": label}


def test_pga_decreases_with_distance_and_grows_with_magnitude():
    assert calculate_pga(6.0, 10, 10) > calculate_pga(6.0, 100, 10)
    assert calculate_pga(7.0, 50, 10) > calculate_pga(6.0, 50, 10)


def test_ground_motion():
    result = ground_motion(5.5, 15.0, 80.0)

    assert result["pga"] == pytest.approx(calculate_pga(5.5, 80.0, 15.0))
    assert result["pgv"] > 0
    assert result["mmi"] == get_mmi(result["pga"])

    spectral = result["spectral"]
    assert [point["period"] for point in spectral] == SPECTRAL_PERIODS
    by_period = {point["period"]: point["sa"] for point in spectral}
    assert by_period[0.2] == pytest.approx(2.5 * by_period[0.05])
    assert by_period[2.0] < by_period[1.0]


def test_predictions():
    assert len(PREDICTIONS) == 5
    assert {p["status"] for p in PREDICTIONS} == {"elevated", "moderate", "low"}


def test_spectral_curve_periods():
    periods = [point["period"] for point in ground_motion(6.0, 10.0)["spectral"]]
    assert periods == [0.01, 0.02, 0.05, 0.1, 0.2, 0.3, 0.5, 0.75, 1.0, 1.5, 2.0, 3.0, 4.0]


def test_regional_pga():
    earthquakes = [
        quake("a", 4.0, "South India"),
        quake("b", 5.0, "North India"),
        quake("c", 6.0, "North India", depth=20.0),
        quake("d", 8.0, "West India", is_historical=True),
    ]

    regions = regional_pga(earthquakes)

    assert [r["region"] for r in regions] == ["North India", "South India"]
    north = regions[0]
    assert north["maxPga"] == pytest.approx(calculate_pga(6.0, 30, 20.0))
    assert north["events"] == 2
    assert north["avgMagnitude"] == pytest.approx(5.5)


def test_regional_pga_uses_latest_twenty_events_and_top_five_regions():
    latest = [quake(f"n{i}", 4.0, "North India") for i in range(25)]
    assert regional_pga(latest)[0]["events"] == 20

    spread = [quake(f"r{i}", 3.0 + i / 10, f"Region {i}") for i in range(7)]
    assert [r["region"] for r in regional_pga(spread)] == [
        "Region 6",
        "Region 5",
        "Region 4",
        "Region 3",
        "Region 2",
    ]
    assert regional_pga([]) == []
