"""Geographic calculations - Pure functions.

This module provides great-circle distance and viewport calculations for
event locations. All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass

from event_selector.core.event import Event


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box, e.g. the visible map viewport.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if a point is within this bounding box."""
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )

    @property
    def center(self) -> tuple[float, float]:
        """Return the (latitude, longitude) midpoint of the box."""
        return (
            (self.min_latitude + self.max_latitude) / 2,
            (self.min_longitude + self.max_longitude) / 2,
        )

    @property
    def radius_km(self) -> float:
        """Distance from the center to the north-east corner."""
        center_lat, center_lon = self.center
        return distance_km(
            center_lat,
            center_lon,
            self.max_latitude,
            self.max_longitude,
        )


def distance_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function. NaN inputs propagate to a NaN result.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push a just past 1.0 for near-antipodal points
    if a > 1.0:
        a = 1.0
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_to_event(event: Event, latitude: float, longitude: float) -> float:
    """Distance in kilometers from a reference point to an event.

    Pure function. The reference point is the first argument pair.
    """
    return distance_km(latitude, longitude, event.latitude, event.longitude)


def is_within_radius(
    event: Event,
    center_lat: float,
    center_lon: float,
    radius_km: float,
) -> bool:
    """Check if an event is within a radius of a point.

    Pure function.

    Args:
        event: Event to check
        center_lat: Center point latitude
        center_lon: Center point longitude
        radius_km: Radius in kilometers

    Returns:
        True if the event is within (or exactly on) the radius
    """
    return distance_to_event(event, center_lat, center_lon) <= radius_km
