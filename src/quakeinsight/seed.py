import logging
from typing import Dict
import duckdb
from quakeinsight.constants import (
    SEED_LIMIT,
    SEED_MIN_MAGNITUDE,
    SEED_YEARS,
    BATCH_SIZE,
)
from quakeinsight.usgs import features_to_earthquakes, fetch_features
from quakeinsight.utils.duckdb import upsert_earthquakes
from quakeinsight.utils.get_date import current_year

logging.basicConfig(level=logging.INFO)


def seed_earthquakes(
    conn: duckdb.DuckDBPyConnection,
    years: int = SEED_YEARS,
    batch_size: int = BATCH_SIZE,
    timeout: float = 30.0,
) -> Dict:
    """Pulls the last `years` years of M3.0+ USGS events for India into duckdb.

    Args:
        conn (duckdb.DuckDBPyConnection): duckdb connection
        years (int): how many years back to fetch
        batch_size (int): rows per upsert batch
        timeout (float): USGS request timeout in seconds

    Returns:
        summary (dict): fetched and written counts plus the year range
    """
    end_year = current_year()
    start_year = end_year - years

    logging.info(f"Fetching India earthquakes from {start_year} to {end_year}...")
    features = fetch_features(
        f"{start_year}-01-01",
        f"{end_year}-12-31",
        SEED_MIN_MAGNITUDE,
        SEED_LIMIT,
        timeout,
    )
    logging.info(f"Got {len(features)} earthquakes from USGS")

    earthquakes = features_to_earthquakes(features)
    inserted = upsert_earthquakes(conn, earthquakes, batch_size)

    return {
        "success": True,
        "total_fetched": len(features),
        "total_inserted": inserted,
        "year_range": f"{start_year}-{end_year}",
    }
