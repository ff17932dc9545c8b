from geoenu._version import __version__  # noqa: F401
from geoenu.utils.logging import LOGGER
from geoenu.coordinates import EcefCoordinate, EnuCoordinate, GeodeticPoint
from geoenu.conversion import (
    ecef_to_enu, ecef_to_geodetic, enu_to_ecef, enu_to_llh, geodetic_to_ecef,
    llh_to_enu, rotation_ecef_to_enu
)
from geoenu.calc import centroid_lat_lon, points_to_enu
from geoenu.exceptions import EmptyInputError, GeoEnuError, InvalidCoordinateError


__all__ = [
    'EcefCoordinate',
    'EmptyInputError',
    'EnuCoordinate',
    'GeoEnuError',
    'GeodeticPoint',
    'InvalidCoordinateError',
    'LOGGER',
    'centroid_lat_lon',
    'ecef_to_enu',
    'ecef_to_geodetic',
    'enu_to_ecef',
    'enu_to_llh',
    'geodetic_to_ecef',
    'llh_to_enu',
    'points_to_enu',
    'rotation_ecef_to_enu',
]
