"""Exceptions raised by geoenu"""

__all__ = ['EmptyInputError', 'GeoEnuError', 'InvalidCoordinateError']


class GeoEnuError(ValueError):
    """Base class for all geoenu input errors"""


class EmptyInputError(GeoEnuError):
    """Raised when an operation requires at least one point but received none"""


class InvalidCoordinateError(GeoEnuError):
    """Raised when a coordinate is non-finite or outside its geodetic range"""
