"""
Constants declarations for geoenu
"""

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_F = 1 / 298.257223563  # Flattening
WGS84_B = (1 - WGS84_F) * WGS84_A  # Minor axis (meters)
WGS84_E2 = WGS84_F * (2 - WGS84_F)  # First eccentricity squared
