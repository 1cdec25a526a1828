from quakeinsight.constants import (
    MAX_LATITUDE as top,
    MIN_LONGITUDE as left,
    MAX_LONGITUDE as right,
    MIN_LATITUDE as bottom,
)


def check_coords(lat: float, lng: float) -> bool:
    """Checks a single lat/lng pair against India's bounding box.

    Args:
        lat (float): latitude
        lng (float): longitude

    Returns:
        True if lat, lng is inside the India bounds. False otherwise.
    """
    return bottom <= lat <= top and left <= lng <= right
