"""Coordinate helpers for location filters.

The service has no native geo type in the structured grammar used here, so
coordinates are stored as unsigned integers: degrees are shifted by 180 and
scaled to centimetres along the earth's surface. A bounding box then becomes
two `Range` filters.
"""

from __future__ import annotations

import math
from typing import Final

from CloudSearchKit.core.filters import Group, Range

EARTH_RADIUS: Final[int] = 6367444
METERS_PER_DEGREE_OF_LATITUDE: Final[int] = 111133


def _meters_per_degree_of_longitude(latitude: float) -> float:
    return METERS_PER_DEGREE_OF_LATITUDE * math.cos(math.radians(latitude))


def _latitude_to_int(degrees: float) -> float:
    return (degrees + 180) * METERS_PER_DEGREE_OF_LATITUDE * 100


def _longitude_to_int(degrees: float, latitude: float) -> float:
    return (degrees + 180) * _meters_per_degree_of_longitude(latitude) * 100


def degrees_to_int(*, lat: float, lng: float) -> dict[str, int]:
    """Convert a coordinate to the unsigned integer representation.

    Args:
        lat: Latitude in degrees.
        lng: Longitude in degrees.

    Returns:
        ``{"lat": int, "lng": int}``.
    """
    return {"lat": round(_latitude_to_int(lat)), "lng": round(_longitude_to_int(lng, lat))}


def int_to_degrees(*, lat: int, lng: int) -> dict[str, float]:
    """Convert the integer representation back to degrees."""
    latitude = lat / METERS_PER_DEGREE_OF_LATITUDE / 100.0 - 180
    longitude = lng / _meters_per_degree_of_longitude(latitude) / 100.0 - 180
    return {"lat": latitude, "lng": longitude}


def coordinate_box(*, meters: float, lat: float, lng: float) -> dict[str, range]:
    """Return integer ranges covering a square of ``2 * meters`` around a point.

    The result can be passed directly as a filter mapping value, e.g.
    ``{"and": coordinate_box(meters=5000, lat=45.52, lng=122.68)}``.

    Args:
        meters: Half the side length of the box.
        lat: Centre latitude in degrees.
        lng: Centre longitude in degrees.

    Returns:
        ``{"lat": range, "lng": range}`` with inclusive integer bounds.
    """
    earth_radius_at_latitude = EARTH_RADIUS * math.cos(math.radians(lat))
    change_in_latitude = math.degrees(float(meters) / EARTH_RADIUS)
    change_in_longitude = math.degrees(float(meters) / earth_radius_at_latitude)

    bottom = round(_latitude_to_int(lat - change_in_latitude))
    top = round(_latitude_to_int(lat + change_in_latitude))
    # Longitude is scaled at the latitude of the bottom edge.
    left = round(_longitude_to_int(lng - change_in_longitude, lat - change_in_latitude))
    right = round(_longitude_to_int(lng + change_in_longitude, lat - change_in_latitude))

    return {"lat": range(bottom, top + 1), "lng": range(left, right + 1)}


def box_filter(*, meters: float, lat: float, lng: float) -> Group:
    """Return an ``and`` group of lat/lng `Range` filters for a coordinate box."""
    box = coordinate_box(meters=meters, lat=lat, lng=lng)
    return Group(
        "and",
        tuple(Range(name, bounds.start, bounds.stop - 1) for name, bounds in box.items()),
    )
