"""
Value types for the three coordinate frames handled by geoenu.

All types are immutable tuples, so they can be unpacked and compared exactly
like the plain ``(a, b, c)`` tuples they replace.
"""

__all__ = ['EcefCoordinate', 'EnuCoordinate', 'GeodeticPoint']

import math
from typing import NamedTuple


class GeodeticPoint(NamedTuple):
    """
    A position relative to the WGS84 ellipsoid.

    Attributes:
        latitude: degrees, nominally within [-90, 90]
        longitude: degrees, nominally within [-180, 180]
        height: meters above the ellipsoid (may be negative)
    """
    latitude: float
    longitude: float
    height: float = 0.0

    def __repr__(self):
        return f'<GeodeticPoint({self.latitude}, {self.longitude}, {self.height})>'


class EcefCoordinate(NamedTuple):
    """Earth-Centered-Earth-Fixed cartesian position, in meters"""
    x: float
    y: float
    z: float

    def __repr__(self):
        return f'<EcefCoordinate({self.x}, {self.y}, {self.z})>'


class EnuCoordinate(NamedTuple):
    """
    East-North-Up offset, in meters, from a reference point's tangent plane.

    Only meaningful alongside the reference that produced it; offsets computed
    against different references are not comparable.
    """
    east: float
    north: float
    up: float

    def __repr__(self):
        return f'<EnuCoordinate({self.east}, {self.north}, {self.up})>'

    @property
    def horizontal_distance(self) -> float:
        """Distance from the reference within the tangent plane, ignoring up"""
        return math.hypot(self.east, self.north)

    @property
    def distance(self) -> float:
        """Straight-line distance from the reference"""
        return math.sqrt(self.east ** 2 + self.north ** 2 + self.up ** 2)
