from pydantic import BaseModel, computed_field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from quakeinsight.constants import (
    DEFAULT_LABEL,
    HISTORICAL_CUTOFF_YEAR,
    HISTORICAL_SOURCE,
    USGS_SOURCE,
)
from quakeinsight.regions import classify
from quakeinsight.utils.get_date import as_utc, ms_to_datetime, to_iso


class Properties(BaseModel):
    mag: Optional[float] = None
    place: Optional[str] = None
    time: int
    updated: Optional[int] = None
    url: Optional[str] = None
    detail: Optional[str] = None
    felt: Optional[int] = None
    cdi: Optional[float] = None
    mmi: Optional[float] = None
    alert: Optional[str] = None
    status: Optional[str] = None
    tsunami: Optional[int] = None
    sig: Optional[int] = None
    net: Optional[str] = None
    code: Optional[str] = None
    magType: Optional[str] = None
    type: Optional[str] = None
    title: Optional[str] = None

    @computed_field
    @property
    def occurred_at(self) -> datetime:
        return ms_to_datetime(self.time)


class Geometry(BaseModel):
    type: str = "Point"
    coordinates: List[Optional[float]]  # [longitude, latitude, depth]

    @field_validator("coordinates")
    @classmethod
    def has_lng_lat(cls, value):
        if len(value) < 2 or value[0] is None or value[1] is None:
            raise ValueError("coordinates must contain longitude and latitude")
        return value

    @computed_field
    @property
    def lng(self) -> float:
        return self.coordinates[0]

    @computed_field
    @property
    def lat(self) -> float:
        return self.coordinates[1]

    @computed_field
    @property
    def depth(self) -> float:
        if len(self.coordinates) < 3 or self.coordinates[2] is None:
            return 0.0
        return self.coordinates[2]


class Feature(BaseModel):
    type: str = "Feature"
    properties: Properties
    geometry: Geometry
    id: str


class Earthquake(BaseModel):
    id: str
    magnitude: float
    location: str
    time: datetime
    depth: float = 0.0
    latitude: float
    longitude: float
    state: str = DEFAULT_LABEL
    region: str = DEFAULT_LABEL
    is_historical: bool = False
    source: str = USGS_SOURCE

    @field_validator("time")
    @classmethod
    def utc_time(cls, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def from_feature(cls, feature: Feature) -> "Earthquake":
        lat, lng = feature.geometry.lat, feature.geometry.lng
        state, region = classify(lat, lng)
        occurred_at = feature.properties.occurred_at
        return cls(
            id=feature.id,
            magnitude=feature.properties.mag or 0.0,
            location=feature.properties.place or f"{state}, India",
            time=occurred_at,
            depth=feature.geometry.depth,
            latitude=lat,
            longitude=lng,
            state=state,
            region=region,
            is_historical=occurred_at.year < HISTORICAL_CUTOFF_YEAR,
            source=USGS_SOURCE,
        )

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Earthquake":
        fields = {k: v for k, v in row.items() if k in cls.model_fields}
        return cls(time=row["occurred_at"], **fields)

    def to_row(self) -> Dict[str, Any]:
        """Row for the earthquakes table. occurred_at is a naive UTC timestamp string."""
        row = self.model_dump(exclude={"time"})
        row["occurred_at"] = self.time.replace(tzinfo=None).isoformat(sep=" ")
        return row

    def to_api(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "magnitude": self.magnitude,
            "location": self.location,
            "time": to_iso(self.time),
            "depth": self.depth,
            "coordinates": {"lat": self.latitude, "lng": self.longitude},
            "state": self.state,
            "region": self.region,
            "isHistorical": self.is_historical,
        }


class HistoricalEntry(BaseModel):
    """One entry of the bundled historical catalogue."""

    id: str
    magnitude: float
    location: str
    time: datetime
    depth: float
    lat: float
    lng: float
    state: str
    region: str

    def to_earthquake(self) -> Earthquake:
        return Earthquake(
            id=self.id,
            magnitude=self.magnitude,
            location=self.location,
            time=self.time,
            depth=self.depth,
            latitude=self.lat,
            longitude=self.lng,
            state=self.state,
            region=self.region,
            is_historical=True,
            source=HISTORICAL_SOURCE,
        )
