""" Calculations over sets of points, for choosing and applying an ENU reference """

__all__ = ['centroid_lat_lon', 'points_to_enu']

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from geoenu.conversion import _geodetic_to_ecef_array, rotation_ecef_to_enu
from geoenu.coordinates import EnuCoordinate
from geoenu.exceptions import EmptyInputError, InvalidCoordinateError
from geoenu.utils.logging import warn_once
from geoenu.validation import validate_geodetic


def _as_llh(point: Sequence[float]) -> Tuple[float, float, float]:
    """Normalizes a (lat, lon) or (lat, lon, height) point to a 3-tuple of floats"""
    if len(point) == 2:
        return float(point[0]), float(point[1]), 0.0

    if len(point) == 3:
        return float(point[0]), float(point[1]), float(point[2])

    raise InvalidCoordinateError(
        f'Expected a (lat, lon) or (lat, lon, height) point, got {point!r}'
    )


def centroid_lat_lon(
    points: Iterable[Sequence[float]],
    validate: bool = False,
) -> Tuple[float, float]:
    """
    Average a set of points to a single (lat, lon), for use as an ENU reference.

    This is a naive planar mean of the latitudes and longitudes, not a geodesic
    centroid, and is only representative for points spread over a small area.
    Point sets straddling the antimeridian produce a meaningless average; a
    warning is logged in that case but the result is not corrected.

    A height on a point, if present, is ignored.

    Args:
        points:
            An ordered collection of (lat, lon) or (lat, lon, height) points,
            in degrees

        validate:
            (Default False) If True, raise InvalidCoordinateError for
            non-finite or out-of-range points

    Returns:
        (lat, lon) in degrees

    Raises:
        EmptyInputError: if no points are given
        InvalidCoordinateError: if a point does not have 2 or 3 elements
    """
    pairs = [_as_llh(point)[:2] for point in points]
    if not pairs:
        raise EmptyInputError('Cannot compute the centroid of an empty point set.')

    if validate:
        for lat, lon in pairs:
            validate_geodetic(lat, lon)

    arr = np.array(pairs, dtype=np.float64)
    if np.ptp(arr[:, 1]) > 180:
        warn_once(
            'Point set spans more than 180 degrees of longitude; the centroid is a naive '
            'average and may be meaningless across the antimeridian. '
            '(this warning will not repeat)'
        )

    lat, lon = np.mean(arr, axis=0)
    return float(lat), float(lon)


def points_to_enu(
    points: Iterable[Sequence[float]],
    reference: Optional[Sequence[float]] = None,
    validate: bool = False,
) -> List[EnuCoordinate]:
    """
    Convert many geodetic points to East/North/Up offsets from one reference.

    Args:
        points:
            An ordered collection of (lat, lon) or (lat, lon, height) points.
            Height defaults to 0 where omitted.

        reference:
            (Optional) The (lat, lon) or (lat, lon, height) reference point. If
            not provided, the centroid of the points at height 0 is used.

        validate:
            (Default False) If True, raise InvalidCoordinateError for
            non-finite or out-of-range points

    Returns:
        List[EnuCoordinate], in the same order as the input points

    Raises:
        EmptyInputError: if no points are given
    """
    llh = [_as_llh(point) for point in points]
    if not llh:
        raise EmptyInputError('Cannot convert an empty point set.')

    if reference is None:
        lat0, lon0, height0 = (*centroid_lat_lon(llh), 0.0)
    else:
        lat0, lon0, height0 = _as_llh(reference)

    if validate:
        for point in llh:
            validate_geodetic(*point)
        validate_geodetic(lat0, lon0, height0)

    arr = np.array(llh, dtype=np.float64)
    with np.errstate(invalid='ignore'):
        diff = (
            _geodetic_to_ecef_array(arr[:, 0], arr[:, 1], arr[:, 2]) -
            _geodetic_to_ecef_array(lat0, lon0, height0)
        )
        enu = diff @ rotation_ecef_to_enu(lat0, lon0).T

    return [EnuCoordinate(*map(float, row)) for row in enu]
