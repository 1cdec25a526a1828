from collections import Counter
from typing import Dict, List
from quakeinsight.configs.earthquake import Earthquake
from quakeinsight.utils.get_date import decade_label

# (label, min, max) inclusive on both ends
MAGNITUDE_RANGES = [
    ("3.0-3.9", 3.0, 3.9),
    ("4.0-4.9", 4.0, 4.9),
    ("5.0-5.9", 5.0, 5.9),
    ("6.0-6.9", 6.0, 6.9),
    ("7.0+", 7.0, 10.0),
]


def compute_stats(earthquakes: List[Earthquake]) -> Dict:
    """Summary statistics for a list of earthquakes.

    avgMagnitude is a one-decimal string; every magnitude figure is 0 for an
    empty list.
    """
    magnitudes = [eq.magnitude for eq in earthquakes]
    if magnitudes:
        avg_magnitude = f"{sum(magnitudes) / len(magnitudes):.1f}"
        max_magnitude = max(magnitudes)
        min_magnitude = min(magnitudes)
    else:
        avg_magnitude = 0
        max_magnitude = 0
        min_magnitude = 0

    return {
        "total": len(earthquakes),
        "avgMagnitude": avg_magnitude,
        "maxMagnitude": max_magnitude,
        "minMagnitude": min_magnitude,
        "byRegion": dict(Counter(eq.region for eq in earthquakes)),
        "byDecade": dict(Counter(decade_label(eq.time) for eq in earthquakes)),
        "byState": dict(Counter(eq.state for eq in earthquakes)),
    }


def magnitude_distribution(earthquakes: List[Earthquake]) -> List[Dict]:
    counts = {label: 0 for label, _, _ in MAGNITUDE_RANGES}
    for eq in earthquakes:
        for label, low, high in MAGNITUDE_RANGES:
            if low <= eq.magnitude <= high:
                counts[label] += 1
                break
    return [
        {"range": label, "count": counts[label]}
        for label, _, _ in MAGNITUDE_RANGES
        if counts[label] > 0
    ]
