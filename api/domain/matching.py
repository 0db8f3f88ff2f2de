# SPDX-License-Identifier: Apache-2.0

"""
Nearest-volunteer selection.

Pure functions: candidates are filtered to eligible volunteers (active, with a
known location) and ranked by haversine distance from the rescue location.
"""

from dataclasses import dataclass
from typing import Iterable, List

from domain.errors import NoEligibleVolunteer
from domain.geo import distance_km
from models.entities import Coordinate, Volunteer


@dataclass(frozen=True)
class VolunteerMatch:
    """A volunteer together with its distance from the rescue location."""
    volunteer: Volunteer
    distance_km: float


def eligible_volunteers(candidates: Iterable[Volunteer]) -> List[Volunteer]:
    """Keep active volunteers that have a location, preserving input order."""
    return [v for v in candidates if v.active and v.location is not None]


def rank_by_distance(target: Coordinate, candidates: Iterable[Volunteer]) -> List[VolunteerMatch]:
    """
    Rank eligible volunteers by distance from the target.

    The sort is stable, so volunteers at an equal distance keep their input
    order.
    """
    matches = [
        VolunteerMatch(volunteer=v, distance_km=distance_km(target, v.location))
        for v in eligible_volunteers(candidates)
    ]
    return sorted(matches, key=lambda m: m.distance_km)


def find_nearest(target: Coordinate, candidates: Iterable[Volunteer]) -> VolunteerMatch:
    """
    Find the eligible volunteer closest to the target.

    Raises:
        NoEligibleVolunteer: If no candidate is active with a known location
    """
    ranked = rank_by_distance(target, candidates)
    if not ranked:
        raise NoEligibleVolunteer()
    return ranked[0]


def nearest(target: Coordinate, candidates: Iterable[Volunteer]) -> Volunteer:
    """Return the eligible volunteer closest to the target."""
    return find_nearest(target, candidates).volunteer
