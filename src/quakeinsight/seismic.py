"""Illustrative ground-motion figures for the dashboard panels.

These follow a simplified Boore-Atkinson style attenuation shape and are not
a real ground-motion prediction model.
"""

from typing import Dict, List
from collections import defaultdict
import numpy as np

# (upper PGA bound, MMI value, label)
MMI_SCALE = [
    (0.17, 1, "I - Not felt"),
    (1.4, 2, "II-III - Weak"),
    (3.9, 4, "IV - Light"),
    (9.2, 5, "V - Moderate"),
    (18, 6, "VI - Strong"),
    (34, 7, "VII - Very Strong"),
    (65, 8, "VIII - Severe"),
    (124, 9, "IX - Violent"),
]
MMI_EXTREME = (10, "X+ - Extreme")

SPECTRAL_PERIODS = [0.01, 0.02, 0.05, 0.1, 0.2, 0.3, 0.5, 0.75, 1.0, 1.5, 2.0, 3.0, 4.0]

# regional table: recent events considered, PGA distance (km), regions kept
REGIONAL_EVENTS = 20
REGIONAL_DISTANCE = 30
REGIONAL_TOP = 5

PREDICTIONS = [
    {
        "region": "Himalayan Seismic Belt (Uttarakhand, Himachal)",
        "probability": 72,
        "magnitude": "5.0-6.5",
        "timeframe": "Next 72 hours",
        "status": "elevated",
    },
    {
        "region": "North-East India (Assam, Manipur, Nagaland)",
        "probability": 58,
        "magnitude": "4.5-5.5",
        "timeframe": "Next 48 hours",
        "status": "moderate",
    },
    {
        "region": "Andaman & Nicobar Islands",
        "probability": 41,
        "magnitude": "4.0-5.0",
        "timeframe": "Next 48 hours",
        "status": "moderate",
    },
    {
        "region": "Kutch Region (Gujarat)",
        "probability": 25,
        "magnitude": "3.5-4.5",
        "timeframe": "Next 24 hours",
        "status": "low",
    },
    {
        "region": "Kashmir & Ladakh",
        "probability": 18,
        "magnitude": "3.0-4.0",
        "timeframe": "Next 24 hours",
        "status": "low",
    },
]


def hypocentral_distance(distance: float, depth: float) -> float:
    return float(np.sqrt(distance**2 + depth**2))


def calculate_pga(magnitude: float, distance: float, depth: float) -> float:
    r = hypocentral_distance(distance, depth)
    log_pga = 0.72 * magnitude - 0.0039 * r - np.log10(r) + 1.0
    return float(np.power(10, log_pga))


def calculate_pgv(magnitude: float, distance: float, depth: float) -> float:
    r = hypocentral_distance(distance, depth)
    log_pgv = 0.68 * magnitude - 0.003 * r - np.log10(r) + 0.5
    return float(np.power(10, log_pgv))


def spectral_acceleration(magnitude: float, depth: float, period: float) -> float:
    base_pga = calculate_pga(magnitude, 50, depth)
    if period < 0.1:
        return base_pga * 1.0
    if period < 0.3:
        return base_pga * 2.5
    if period < 0.5:
        return base_pga * 2.0
    if period < 1.0:
        return base_pga * 1.2
    return base_pga * (1 / period) * 0.8


def get_mmi(pga: float) -> Dict:
    for upper, value, label in MMI_SCALE:
        if pga < upper:
            return {"value": value, "label": label}
    value, label = MMI_EXTREME
    return {"value": value, "label": label}


def ground_motion(magnitude: float, depth: float, distance: float = 50.0) -> Dict:
    pga = calculate_pga(magnitude, distance, depth)
    spectral: List[Dict] = [
        {"period": period, "sa": spectral_acceleration(magnitude, depth, period)}
        for period in SPECTRAL_PERIODS
    ]
    return {
        "pga": pga,
        "pgv": calculate_pgv(magnitude, distance, depth),
        "mmi": get_mmi(pga),
        "spectral": spectral,
    }


def regional_pga(earthquakes) -> List[Dict]:
    """Strongest expected shaking per region among the latest recorded events.

    Args:
        earthquakes (List[Earthquake]): events, most recent first

    Returns:
        regions (List[dict]): region, maxPga at 30 km, events and
            avgMagnitude, strongest region first
    """
    recent = [eq for eq in earthquakes if not eq.is_historical][:REGIONAL_EVENTS]

    by_region = defaultdict(list)
    for eq in recent:
        by_region[eq.region].append(eq)

    regions = []
    for region, quakes in by_region.items():
        regions.append(
            {
                "region": region,
                "maxPga": max(
                    calculate_pga(eq.magnitude, REGIONAL_DISTANCE, eq.depth)
                    for eq in quakes
                ),
                "events": len(quakes),
                "avgMagnitude": float(np.mean([eq.magnitude for eq in quakes])),
            }
        )

    regions.sort(key=lambda r: r["maxPga"], reverse=True)
    return regions[:REGIONAL_TOP]
