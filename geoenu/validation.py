"""
Input checks for the optional validating path of the conversion functions
"""

__all__ = ['validate_finite', 'validate_geodetic']

import math

from geoenu.exceptions import InvalidCoordinateError


def validate_finite(*values: float) -> None:
    """
    Ensure every value is a finite real number.

    Args:
        *values:
            The values to check

    Raises:
        InvalidCoordinateError: if any value is NaN or infinite
    """
    for value in values:
        if not math.isfinite(value):
            raise InvalidCoordinateError(f'Coordinate values must be finite, got {value}')


def validate_geodetic(latitude: float, longitude: float, height: float = 0.0) -> None:
    """
    Ensure a geodetic position is finite and within the valid angular ranges,
    i.e. latitude in [-90, 90] and longitude in [-180, 180]. Height is unconstrained.

    Args:
        latitude:
            The latitude, in degrees

        longitude:
            The longitude, in degrees

        height:
            (Default 0.0) The height above the ellipsoid, in meters

    Raises:
        InvalidCoordinateError: if any check fails
    """
    validate_finite(latitude, longitude, height)

    if not -90 <= latitude <= 90:
        raise InvalidCoordinateError(f'Latitude must be within [-90, 90], got {latitude}')

    if not -180 <= longitude <= 180:
        raise InvalidCoordinateError(f'Longitude must be within [-180, 180], got {longitude}')
