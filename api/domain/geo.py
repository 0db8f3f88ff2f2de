# SPDX-License-Identifier: Apache-2.0

"""
Great-circle distance between coordinates.
"""

import math

from models.entities import Coordinate

EARTH_RADIUS_KM = 6371.0


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in kilometres between two coordinates."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))
