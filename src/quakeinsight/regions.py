from typing import Tuple
from quakeinsight.constants import DEFAULT_LABEL

# (state, lat_min, lat_max, lng_min, lng_max), checked in order.
# lat bounds are (min, max], lng bounds are [min, max); None is unbounded.
STATE_BOXES = [
    ("Jammu & Kashmir", 32, None, None, 77),
    ("Himachal Pradesh", 30, 32, None, 77),
    ("Uttarakhand", 29, 32, 77, 80),
    ("Rajasthan", 26, 30, 72, 76),
    ("Delhi NCR", 28, 30, 76, 78),
    ("Uttar Pradesh", 27, 31, 78, 85),
    ("Bihar", 24, 27, 80, 88),
    ("West Bengal", 25, 28, 88, 92),
    ("Assam", 26, 28, 92, 95),
    ("Manipur", 25, 27, 93, 95),
    ("Meghalaya", 24, 26, 91, 93),
    ("Tripura", 23, 25, 91, 93),
    ("Mizoram", 21, 24, 91, 93),
    ("Nagaland", 26, 28, 93, 96),
    ("Arunachal Pradesh", 27, 29, 93, 95),
    ("Sikkim", 27, 29, 88, 89),
    ("Jharkhand", 21, 26, 80, 88),
    ("Odisha", 19, 22, 84, 88),
    ("Chhattisgarh", 20, 24, 78, 85),
    ("Madhya Pradesh", 20, 26, 74, 80),
    ("Gujarat", 18, 24, 69, 75),
    ("Maharashtra", 15, 22, 72, 80),
    ("Karnataka", 13, 18, 74, 81),
    ("Kerala", 8, 14, 74, 78),
    ("Tamil Nadu", 8, 13, 77, 80),
    ("Andhra Pradesh", 13, 19, 78, 85),
    ("Telangana", 15, 20, 78, 81),
    ("Goa", 14, 16, 73, 75),
    ("Andaman & Nicobar Islands", 6, 12, 92, 94),
]

REGIONS = {
    "North-East India": [
        "Assam",
        "Manipur",
        "Meghalaya",
        "Tripura",
        "Mizoram",
        "Nagaland",
        "Arunachal Pradesh",
        "Sikkim",
    ],
    "North India": [
        "Jammu & Kashmir",
        "Himachal Pradesh",
        "Uttarakhand",
        "Delhi NCR",
        "Uttar Pradesh",
        "Punjab",
        "Haryana",
    ],
    "Central India": ["Madhya Pradesh", "Chhattisgarh", "Jharkhand"],
    "West India": ["Gujarat", "Maharashtra", "Rajasthan", "Goa"],
    "South India": [
        "Karnataka",
        "Kerala",
        "Tamil Nadu",
        "Andhra Pradesh",
        "Telangana",
    ],
    "East India": ["Bihar", "West Bengal", "Odisha"],
}

STATE_TO_REGION = {state: region for region, states in REGIONS.items() for state in states}


def _in_box(lat, lng, lat_min, lat_max, lng_min, lng_max) -> bool:
    if lat_min is not None and not lat > lat_min:
        return False
    if lat_max is not None and not lat <= lat_max:
        return False
    if lng_min is not None and not lng >= lng_min:
        return False
    if lng_max is not None and not lng < lng_max:
        return False
    return True


def get_indian_state(lat: float, lng: float) -> str:
    """Approximates the Indian state for a coordinate.

    The first matching box wins, so overlapping boxes resolve in table order.
    Coordinates that match no box (including NaN) fall back to "India".

    Args:
        lat (float): latitude
        lng (float): longitude

    Returns:
        state (str): state or union territory name
    """
    for state, *bounds in STATE_BOXES:
        if _in_box(lat, lng, *bounds):
            return state
    return DEFAULT_LABEL


def get_region(state: str) -> str:
    return STATE_TO_REGION.get(state, DEFAULT_LABEL)


def classify(lat: float, lng: float) -> Tuple[str, str]:
    state = get_indian_state(lat, lng)
    return state, get_region(state)
