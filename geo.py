"""Great-circle distance over an itinerary.

Distances are summed leg by leg over ``[origin, *stops, destination]`` using
the haversine formula. A leg whose endpoints lack coordinates contributes
nothing unless ``strict`` is requested.
"""

import logging
from math import asin, cos, floor, radians, sin, sqrt
from typing import Optional, Sequence

from booking_schemas import Location

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


class MissingCoordinatesError(ValueError):
    """Raised in strict mode when a location has no latitude/longitude."""

    def __init__(self, location: Location):
        super().__init__(f"Missing coordinates for {location.address!r}")
        self.location = location


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    d_lat = radians(lat2 - lat1)
    d_lng = radians(lng2 - lng1)

    a = sin(d_lat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lng / 2) ** 2
    return EARTH_RADIUS_KM * 2 * asin(sqrt(a))


def _has_coordinates(location: Optional[Location]) -> bool:
    return location is not None and location.lat is not None and location.lng is not None


def distance(
    origin: Location,
    stops: Sequence[Location],
    destination: Location,
    is_round_trip: bool = False,
    strict: bool = False,
) -> int:
    """Total itinerary distance in whole kilometres.

    A round trip is modelled as the outbound route flown twice. With
    ``strict=True`` any location without coordinates raises
    :class:`MissingCoordinatesError` instead of being skipped.
    """
    points = [origin, *stops, destination]

    if strict:
        for point in points:
            if not _has_coordinates(point):
                raise MissingCoordinatesError(point)

    if not _has_coordinates(origin) or not _has_coordinates(destination):
        logger.warning("Origin or destination has no coordinates; distance is 0")
        return 0

    total = 0.0
    for start, end in zip(points, points[1:]):
        if not _has_coordinates(start) or not _has_coordinates(end):
            logger.warning(f"Skipping leg {start.address!r} -> {end.address!r}: missing coordinates")
            continue
        total += haversine_km(start.lat, start.lng, end.lat, end.lng)

    # rounded before doubling so a round trip is exactly twice the one-way figure
    one_way = floor(total + 0.5)
    return one_way * 2 if is_round_trip else one_way
