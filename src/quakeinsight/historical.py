from typing import List
from quakeinsight.configs.earthquake import Earthquake, HistoricalEntry
from quakeinsight.constants import HISTORICAL_EARTHQUAKES_PATH
from quakeinsight.utils.yaml import load_config_from_yaml


def load_historical(path: str = HISTORICAL_EARTHQUAKES_PATH) -> List[Earthquake]:
    """Loads the bundled catalogue of significant historical Indian earthquakes.

    Args:
        path (str): path to the catalogue yaml

    Returns:
        earthquakes (List[Earthquake]): catalogue entries, flagged historical
    """
    data = load_config_from_yaml(path)
    return [
        HistoricalEntry(**entry).to_earthquake() for entry in data.get("earthquakes", [])
    ]


def filter_historical(
    earthquakes: List[Earthquake],
    start_year: int,
    end_year: int,
    min_magnitude: float = 0.0,
) -> List[Earthquake]:
    return [
        eq
        for eq in earthquakes
        if start_year <= eq.time.year <= end_year and eq.magnitude >= min_magnitude
    ]
