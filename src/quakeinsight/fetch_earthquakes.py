import logging
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from quakeinsight.configs.earthquake import Earthquake
from quakeinsight.constants import (
    ALL_MIN_MAGNITUDE,
    EARLIEST_YEAR,
    FETCH_LIMIT,
    HISTORICAL_SOURCE,
    RECENT_DAYS,
    USGS_SOURCE,
)
from quakeinsight.historical import filter_historical, load_historical
from quakeinsight.stats import compute_stats
from quakeinsight.usgs import fetch_earthquakes_from_usgs
from quakeinsight.utils.get_date import current_year, days_ago

logging.basicConfig(level=logging.INFO)


class FetchParams(BaseModel):
    """Query parameters of the fetch-earthquakes endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    data_type: Literal["recent", "historical", "all"] = Field(
        default="recent", alias="type"
    )
    start_year: int = Field(default=EARLIEST_YEAR, alias="startYear")
    end_year: int = Field(default_factory=current_year, alias="endYear")
    min_magnitude: float = Field(default=0.0, alias="minMagnitude")
    state: Optional[str] = None
    region: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=0)


def describe_source(data_type: str) -> str:
    if data_type == "recent":
        return USGS_SOURCE
    if data_type == "historical":
        return HISTORICAL_SOURCE
    return f"{USGS_SOURCE} + {HISTORICAL_SOURCE}"


def collect_earthquakes(params: FetchParams, timeout: float = 30.0) -> List[Earthquake]:
    """Gathers USGS and/or historical events for the requested data type.

    Args:
        params (FetchParams): parsed query parameters
        timeout (float): USGS request timeout in seconds

    Returns:
        earthquakes (List[Earthquake]): filtered events, most recent first
    """
    earthquakes = []

    if params.data_type in ("recent", "all"):
        if params.data_type == "recent":
            start_date = days_ago(RECENT_DAYS)
            min_magnitude = params.min_magnitude
        else:
            start_date = f"{max(EARLIEST_YEAR, params.start_year)}-01-01"
            min_magnitude = max(params.min_magnitude, ALL_MIN_MAGNITUDE)
        end_date = f"{params.end_year}-12-31"

        earthquakes.extend(
            fetch_earthquakes_from_usgs(
                start_date, end_date, min_magnitude, FETCH_LIMIT, timeout
            )
        )

    if params.data_type in ("historical", "all"):
        historical = filter_historical(
            load_historical(), params.start_year, params.end_year, params.min_magnitude
        )
        existing_ids = {eq.id for eq in earthquakes}
        new_historical = [eq for eq in historical if eq.id not in existing_ids]
        earthquakes.extend(new_historical)
        logging.info(f"Added {len(new_historical)} historical earthquakes")

    earthquakes.sort(key=lambda eq: eq.time, reverse=True)

    if params.state:
        earthquakes = [eq for eq in earthquakes if eq.state == params.state]
    if params.region:
        earthquakes = [eq for eq in earthquakes if eq.region == params.region]
    if params.limit is not None:
        earthquakes = earthquakes[: params.limit]

    return earthquakes


def fetch_earthquakes(params: FetchParams, timeout: float = 30.0) -> Dict:
    logging.info(
        f"Fetching earthquake data: type={params.data_type}, "
        f"years={params.start_year}-{params.end_year}, minMag={params.min_magnitude}"
    )
    earthquakes = collect_earthquakes(params, timeout)
    logging.info(f"Returning {len(earthquakes)} total earthquakes")

    return {
        "earthquakes": [eq.to_api() for eq in earthquakes],
        "count": len(earthquakes),
        "stats": compute_stats(earthquakes),
        "dataType": params.data_type,
        "dateRange": {"startYear": params.start_year, "endYear": params.end_year},
        "source": describe_source(params.data_type),
    }
