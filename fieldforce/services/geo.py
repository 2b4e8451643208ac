"""
Great-circle distance service.
Uses Haversine formula to calculate distance between points.
"""
import math
from typing import Tuple

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371
KM_TO_MILES = 0.621371

Point = Tuple[float, float]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Coordinates are not range-checked; out-of-range values still produce a
    (physically meaningless) number.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2 +
        math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_miles(point_a: Point, point_b: Point) -> float:
    """Distance in miles between two ``(latitude, longitude)`` points given in degrees."""
    return haversine_km(point_a[0], point_a[1], point_b[0], point_b[1]) * KM_TO_MILES
