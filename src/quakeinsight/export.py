import io
import json
from datetime import datetime, timezone
from typing import Dict, List
import pandas as pd
from quakeinsight.configs.earthquake import Earthquake
from quakeinsight.constants import EXPORT_SOURCE
from quakeinsight.stats import compute_stats
from quakeinsight.utils.get_date import to_iso

CSV_COLUMNS = [
    "id",
    "date",
    "time",
    "magnitude",
    "location",
    "state",
    "region",
    "depth_km",
    "latitude",
    "longitude",
    "is_historical",
    "source",
]


def export_record(eq: Earthquake) -> Dict:
    return {
        "id": eq.id,
        "date": eq.time.strftime("%Y-%m-%d"),
        "time": to_iso(eq.time),
        "magnitude": eq.magnitude,
        "location": eq.location,
        "state": eq.state,
        "region": eq.region,
        "depth_km": eq.depth,
        "latitude": eq.latitude,
        "longitude": eq.longitude,
        "is_historical": eq.is_historical,
        "source": eq.source,
    }


def from_export_record(record: Dict) -> Earthquake:
    return Earthquake(
        id=str(record["id"]),
        magnitude=record["magnitude"],
        location=record["location"],
        time=record["time"],
        depth=record["depth_km"],
        latitude=record["latitude"],
        longitude=record["longitude"],
        state=record["state"],
        region=record["region"],
        is_historical=record["is_historical"],
        source=record["source"],
    )


def to_csv(earthquakes: List[Earthquake]) -> str:
    """CSV export; floats are written with full repr precision."""
    df = pd.DataFrame([export_record(eq) for eq in earthquakes], columns=CSV_COLUMNS)
    return df.to_csv(index=False)


def from_csv(text: str) -> List[Earthquake]:
    df = pd.read_csv(
        io.StringIO(text),
        dtype={"id": str, "location": str, "state": str, "region": str, "source": str},
        keep_default_na=False,
        float_precision="round_trip",
    )
    return [from_export_record(record) for record in df.to_dict("records")]


def to_json(earthquakes: List[Earthquake], filters: Dict = None) -> str:
    """JSON export with metadata and statistics for the filtered dataset."""
    filters = filters or {}
    start_year = filters.get("start_year")
    end_year = filters.get("end_year")
    export_data = {
        "metadata": {
            "exportDate": to_iso(datetime.now(timezone.utc)),
            "yearRange": f"{start_year or ''}-{end_year or ''}",
            "minMagnitude": filters.get("min_magnitude"),
            "totalRecords": len(earthquakes),
            "source": EXPORT_SOURCE,
        },
        "statistics": compute_stats(earthquakes),
        "earthquakes": [export_record(eq) for eq in earthquakes],
    }
    return json.dumps(export_data, indent=2, ensure_ascii=False)


def from_json(text: str) -> List[Earthquake]:
    data = json.loads(text)
    return [from_export_record(record) for record in data.get("earthquakes", [])]
