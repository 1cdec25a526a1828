import logging
from typing import Dict, List
import requests
from pydantic import ValidationError
from quakeinsight.configs.earthquake import Earthquake, Feature
from quakeinsight.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    USGS_QUERY_URL,
)
from quakeinsight.errors import UsgsError
from quakeinsight.utils.within_india import check_coords

logging.basicConfig(level=logging.INFO)


def build_query_params(
    start_date: str, end_date: str, min_magnitude: float, limit: int
) -> Dict:
    """Builds FDSN event query parameters for India's bounding box.

    Args:
        start_date (str): 'YYYY-MM-DD'
        end_date (str): 'YYYY-MM-DD'
        min_magnitude (float): minimum magnitude
        limit (int): maximum number of events

    Returns:
        params (dict): GeoJSON query parameters, newest events first
    """
    params = {
        "format": "geojson",
        "minlatitude": MIN_LATITUDE,
        "maxlatitude": MAX_LATITUDE,
        "minlongitude": MIN_LONGITUDE,
        "maxlongitude": MAX_LONGITUDE,
        "minmagnitude": min_magnitude,
        "starttime": start_date,
        "endtime": end_date,
        "orderby": "time",
        "limit": limit,
    }
    return params


def get_data_from_url(url: str, params: Dict = None, timeout: float = 30.0) -> Dict:
    """Read JSON data from a provided url.

    Args:
        url (str): url to read data from
        params (dict): query string parameters
        timeout (float): request timeout in seconds
    Returns:
        data (dict): decoded JSON body
    """
    try:
        response = requests.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise UsgsError(f"USGS API request failed: {e}") from e

    if not response.ok:
        raise UsgsError(f"USGS API error: {response.status_code}")

    try:
        return response.json()
    except ValueError as e:
        raise UsgsError("USGS API returned invalid JSON") from e


def fetch_features(
    start_date: str,
    end_date: str,
    min_magnitude: float,
    limit: int,
    timeout: float = 30.0,
) -> List[Dict]:
    params = build_query_params(start_date, end_date, min_magnitude, limit)
    logging.info(f"Fetching from USGS: {USGS_QUERY_URL} {params}")
    data = get_data_from_url(USGS_QUERY_URL, params, timeout)
    features = data.get("features") or []
    logging.info(f"Fetched {len(features)} earthquakes from USGS for India region")
    return features


def feature_to_earthquake(feature: Dict) -> Earthquake:
    return Earthquake.from_feature(Feature(**feature))


def features_to_earthquakes(features: List[Dict]) -> List[Earthquake]:
    """Transforms GeoJSON features, skipping malformed ones and ones outside India."""
    earthquakes = []
    for feature in features:
        try:
            earthquake = feature_to_earthquake(feature)
        except ValidationError as e:
            logging.info(f"Skipping {feature.get('id')}: invalid feature ({e.error_count()} errors)")
            continue

        if not check_coords(earthquake.latitude, earthquake.longitude):
            logging.info(f"Skipping {earthquake.id}: epicenter not in India bounds")
            continue

        earthquakes.append(earthquake)
    return earthquakes


def fetch_earthquakes_from_usgs(
    start_date: str,
    end_date: str,
    min_magnitude: float,
    limit: int,
    timeout: float = 30.0,
) -> List[Earthquake]:
    features = fetch_features(start_date, end_date, min_magnitude, limit, timeout)
    return features_to_earthquakes(features)
