"""
Conversions between geodetic (lat/lon/height), Earth-Centered-Earth-Fixed (ECEF)
and local East-North-Up (ENU) coordinates on the WGS84 ellipsoid.

Angles are in degrees and distances in meters throughout. The ENU frame is a
flat tangent plane anchored at a reference point, so offsets are only a good
stand-in for surface distances over small areas.

Every function accepts a ``validate`` keyword. When False (the default), NaN and
infinite inputs propagate through the arithmetic as NaN/inf and out-of-range
angles produce a mathematically defined but physically meaningless result.
When True, such inputs raise InvalidCoordinateError instead.
"""

__all__ = [
    'ecef_to_enu', 'ecef_to_geodetic', 'enu_to_ecef', 'enu_to_llh',
    'geodetic_to_ecef', 'llh_to_enu', 'rotation_ecef_to_enu',
]

import math

import numpy as np

from geoenu._const import WGS84_A, WGS84_E2
from geoenu.coordinates import EcefCoordinate, EnuCoordinate, GeodeticPoint
from geoenu.exceptions import InvalidCoordinateError
from geoenu.utils.logging import warn_once
from geoenu.validation import validate_finite, validate_geodetic

# Bowring iteration limits for ecef_to_geodetic
_MAX_ITER = 10
_CONVERGENCE_METERS = 1e-9


def _geodetic_to_ecef_array(lat, lon, height) -> np.ndarray:
    """
    Vectorized geodetic to ECEF conversion. Accepts scalars or equal-length arrays;
    the last axis of the result holds x, y, z.
    """
    with np.errstate(invalid='ignore'):
        r_lat, r_lon = np.deg2rad(lat), np.deg2rad(lon)
        sin_lat, cos_lat = np.sin(r_lat), np.cos(r_lat)

        n = WGS84_A / np.sqrt(1 - WGS84_E2 * sin_lat * sin_lat)

        return np.stack([
            (n + height) * cos_lat * np.cos(r_lon),
            (n + height) * cos_lat * np.sin(r_lon),
            (n * (1 - WGS84_E2) + height) * sin_lat,
        ], axis=-1).astype(np.float64)


def geodetic_to_ecef(
    lat: float,
    lon: float,
    height: float = 0.0,
    validate: bool = False,
) -> EcefCoordinate:
    """
    Convert a geodetic position to ECEF cartesian coordinates, using the
    prime-vertical radius of curvature N = a / sqrt(1 - e² sin²(lat)).

    Args:
        lat:
            The latitude, in degrees

        lon:
            The longitude, in degrees

        height:
            (Default 0.0) The height above the ellipsoid, in meters

        validate:
            (Default False) If True, raise InvalidCoordinateError for
            non-finite or out-of-range input

    Returns:
        EcefCoordinate
    """
    if validate:
        validate_geodetic(lat, lon, height)

    return EcefCoordinate(*map(float, _geodetic_to_ecef_array(lat, lon, height)))


def ecef_to_geodetic(
    x: float,
    y: float,
    z: float,
    validate: bool = False,
) -> GeodeticPoint:
    """
    Convert ECEF cartesian coordinates to a geodetic position using Bowring's
    iterative method.

    The iteration converges to well under a millimeter within a few steps for
    any point near the Earth's surface. If it has not converged after 10 steps
    a warning is logged and the last estimate is returned.

    Args:
        x:
            ECEF x, in meters

        y:
            ECEF y, in meters

        z:
            ECEF z, in meters

        validate:
            (Default False) If True, raise InvalidCoordinateError for
            non-finite input

    Returns:
        GeodeticPoint, all NaN if any input is non-finite and validate is False
    """
    if validate:
        validate_finite(x, y, z)

    if not all(math.isfinite(v) for v in (x, y, z)):
        return GeodeticPoint(math.nan, math.nan, math.nan)

    rho2 = x * x + y * y
    if rho2 == 0 and z == 0:
        raise InvalidCoordinateError(
            'Geodetic position is undefined at the center of the Earth'
        )

    dz = WGS84_E2 * z
    for _ in range(_MAX_ITER):
        zdz = z + dz
        sin_phi = zdz / math.sqrt(rho2 + zdz * zdz)
        n = WGS84_A / math.sqrt(1 - WGS84_E2 * sin_phi * sin_phi)
        dz_prev, dz = dz, n * WGS84_E2 * sin_phi

        if abs(dz - dz_prev) < _CONVERGENCE_METERS:
            break
    else:
        warn_once(
            f'ECEF to geodetic conversion did not converge within {_MAX_ITER} iterations; '
            'result may be imprecise. (this warning will not repeat)'
        )

    zdz = z + dz
    nh = math.sqrt(rho2 + zdz * zdz)
    sin_phi = zdz / nh
    n = WGS84_A / math.sqrt(1 - WGS84_E2 * sin_phi * sin_phi)

    return GeodeticPoint(
        math.degrees(math.atan2(zdz, math.sqrt(rho2))),
        math.degrees(math.atan2(y, x)),
        nh - n,
    )


def rotation_ecef_to_enu(lat0: float, lon0: float) -> np.ndarray:
    """
    Compute the rotation matrix from ECEF to the local ENU frame at a
    reference point. Rows are the East, North and Up basis vectors expressed
    in ECEF; the transpose rotates ENU back into ECEF.

    Args:
        lat0:
            The reference latitude, in degrees

        lon0:
            The reference longitude, in degrees

    Returns:
        A (3, 3) float64 numpy array
    """
    with np.errstate(invalid='ignore'):
        r_lat, r_lon = np.deg2rad(lat0), np.deg2rad(lon0)
        sin_lat, cos_lat = np.sin(r_lat), np.cos(r_lat)
        sin_lon, cos_lon = np.sin(r_lon), np.cos(r_lon)

    return np.array([
        [-sin_lon, cos_lon, 0.0],
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat],
    ], dtype=np.float64)


def ecef_to_enu(
    x: float,
    y: float,
    z: float,
    lat0: float,
    lon0: float,
    height0: float = 0.0,
    validate: bool = False,
) -> EnuCoordinate:
    """
    Express an ECEF position as East/North/Up offsets from a reference point.

    Args:
        x:
            ECEF x of the target, in meters

        y:
            ECEF y of the target, in meters

        z:
            ECEF z of the target, in meters

        lat0:
            The reference latitude, in degrees

        lon0:
            The reference longitude, in degrees

        height0:
            (Default 0.0) The reference height above the ellipsoid, in meters

        validate:
            (Default False) If True, raise InvalidCoordinateError for
            non-finite or out-of-range input

    Returns:
        EnuCoordinate, valid only relative to the given reference
    """
    if validate:
        validate_finite(x, y, z)
        validate_geodetic(lat0, lon0, height0)

    with np.errstate(invalid='ignore'):
        diff = np.array([x, y, z], dtype=np.float64) - _geodetic_to_ecef_array(lat0, lon0, height0)
        enu = rotation_ecef_to_enu(lat0, lon0) @ diff

    return EnuCoordinate(*map(float, enu))


def llh_to_enu(
    lat: float,
    lon: float,
    height: float,
    lat0: float,
    lon0: float,
    height0: float = 0.0,
    validate: bool = False,
) -> EnuCoordinate:
    """
    Express a geodetic position as East/North/Up offsets from a reference point.

    Both points are converted to ECEF, differenced, and the difference is
    rotated into the reference point's tangent plane. A target equal to the
    reference yields (0, 0, 0) up to floating point rounding.

    Args:
        lat:
            The target latitude, in degrees

        lon:
            The target longitude, in degrees

        height:
            The target height above the ellipsoid, in meters

        lat0:
            The reference latitude, in degrees

        lon0:
            The reference longitude, in degrees

        height0:
            (Default 0.0) The reference height above the ellipsoid, in meters

        validate:
            (Default False) If True, raise InvalidCoordinateError for
            non-finite or out-of-range input

    Returns:
        EnuCoordinate, valid only relative to the given reference
    """
    if validate:
        validate_geodetic(lat, lon, height)
        validate_geodetic(lat0, lon0, height0)

    return ecef_to_enu(*geodetic_to_ecef(lat, lon, height), lat0, lon0, height0)


def enu_to_ecef(
    east: float,
    north: float,
    up: float,
    lat0: float,
    lon0: float,
    height0: float = 0.0,
    validate: bool = False,
) -> EcefCoordinate:
    """
    Convert an East/North/Up offset from a reference point back to ECEF.
    Inverse of ecef_to_enu.

    Args:
        east:
            Offset east of the reference, in meters

        north:
            Offset north of the reference, in meters

        up:
            Offset along the reference's ellipsoid normal, in meters

        lat0:
            The reference latitude, in degrees

        lon0:
            The reference longitude, in degrees

        height0:
            (Default 0.0) The reference height above the ellipsoid, in meters

        validate:
            (Default False) If True, raise InvalidCoordinateError for
            non-finite or out-of-range input

    Returns:
        EcefCoordinate
    """
    if validate:
        validate_finite(east, north, up)
        validate_geodetic(lat0, lon0, height0)

    with np.errstate(invalid='ignore'):
        offset = rotation_ecef_to_enu(lat0, lon0).T @ np.array([east, north, up], dtype=np.float64)
        ecef = _geodetic_to_ecef_array(lat0, lon0, height0) + offset

    return EcefCoordinate(*map(float, ecef))


def enu_to_llh(
    east: float,
    north: float,
    up: float,
    lat0: float,
    lon0: float,
    height0: float = 0.0,
    validate: bool = False,
) -> GeodeticPoint:
    """
    Convert an East/North/Up offset from a reference point back to a
    geodetic position. Inverse of llh_to_enu.

    Args:
        east:
            Offset east of the reference, in meters

        north:
            Offset north of the reference, in meters

        up:
            Offset along the reference's ellipsoid normal, in meters

        lat0:
            The reference latitude, in degrees

        lon0:
            The reference longitude, in degrees

        height0:
            (Default 0.0) The reference height above the ellipsoid, in meters

        validate:
            (Default False) If True, raise InvalidCoordinateError for
            non-finite or out-of-range input

    Returns:
        GeodeticPoint
    """
    return ecef_to_geodetic(
        *enu_to_ecef(east, north, up, lat0, lon0, height0, validate=validate)
    )
