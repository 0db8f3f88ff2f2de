# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for great-circle distance.
"""

import pytest

from domain.geo import distance_km
from models.entities import Coordinate


class TestDistance:
    """Test haversine distance."""

    def test_same_point_is_zero(self):
        point = Coordinate(latitude=19.076, longitude=72.8777)
        assert distance_km(point, point) == 0.0

    def test_symmetric(self):
        mumbai = Coordinate(latitude=19.076, longitude=72.8777)
        pune = Coordinate(latitude=18.5204, longitude=73.8567)

        assert distance_km(mumbai, pune) == pytest.approx(distance_km(pune, mumbai))

    def test_one_degree_of_longitude_at_equator(self):
        a = Coordinate(latitude=0, longitude=0)
        b = Coordinate(latitude=0, longitude=1)

        assert distance_km(a, b) == pytest.approx(111.19, abs=0.5)

    def test_mumbai_to_pune(self):
        mumbai = Coordinate(latitude=19.076, longitude=72.8777)
        pune = Coordinate(latitude=18.5204, longitude=73.8567)

        # Roughly 120 km as the crow flies
        assert 115 < distance_km(mumbai, pune) < 125

