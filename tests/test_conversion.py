import math

import numpy as np
import pytest

from geoenu._const import WGS84_A, WGS84_B
from geoenu.conversion import *
from geoenu.coordinates import EcefCoordinate, EnuCoordinate, GeodeticPoint
from geoenu.exceptions import InvalidCoordinateError
from tests.functions import assert_geodetic_equal, assert_triples_equal


POINTS = [
    (0., 0., 0.),
    (50., 10., 200.),
    (42.680067, 3.034061, 0.),
    (-33.8688, 151.2093, 58.),
    (64.1466, -21.9426, -12.5),
    (-89.5, 45., 2800.),
    (10., 179.9, 400_000.),
]


def test_geodetic_to_ecef():
    # Equator on the prime meridian sits at the semi-major axis
    assert_triples_equal(geodetic_to_ecef(0., 0., 0.), (WGS84_A, 0., 0.))
    assert_triples_equal(geodetic_to_ecef(0., 90., 0.), (0., WGS84_A, 0.))
    assert_triples_equal(geodetic_to_ecef(0., 0., 100.), (WGS84_A + 100., 0., 0.))

    # Poles sit at the semi-minor axis
    assert_triples_equal(geodetic_to_ecef(90., 0., 0.), (0., 0., WGS84_B))
    assert_triples_equal(geodetic_to_ecef(-90., 0., 0.), (0., 0., -WGS84_B))

    assert isinstance(geodetic_to_ecef(0., 0.), EcefCoordinate)


def test_geodetic_to_ecef_magnitude():
    for lat in range(-90, 91, 15):
        for lon in range(-180, 181, 30):
            x, y, z = geodetic_to_ecef(lat, lon, 0.)
            r = math.sqrt(x ** 2 + y ** 2 + z ** 2)
            assert WGS84_B - 1e-6 <= r <= WGS84_A + 1e-6


def test_geodetic_to_ecef_out_of_range():
    # Latitudes past the pole are not clamped; they fold onto the far meridian
    assert_triples_equal(
        geodetic_to_ecef(100., 0., 0.),
        geodetic_to_ecef(80., 180., 0.),
    )

    with pytest.raises(InvalidCoordinateError):
        geodetic_to_ecef(100., 0., 0., validate=True)

    with pytest.raises(InvalidCoordinateError):
        geodetic_to_ecef(0., 200., 0., validate=True)


def test_geodetic_to_ecef_nan():
    assert all(math.isnan(v) for v in geodetic_to_ecef(float('nan'), 0., 0.))

    with pytest.raises(InvalidCoordinateError):
        geodetic_to_ecef(float('nan'), 0., 0., validate=True)


def test_ecef_to_geodetic():
    for point in POINTS:
        assert_geodetic_equal(ecef_to_geodetic(*geodetic_to_ecef(*point)), point)

    assert_geodetic_equal(ecef_to_geodetic(WGS84_A, 0., 0.), (0., 0., 0.))
    assert_geodetic_equal(ecef_to_geodetic(0., 0., WGS84_B), (90., 0., 0.))
    assert_geodetic_equal(ecef_to_geodetic(0., 0., -WGS84_B - 10.), (-90., 0., 10.))

    assert isinstance(ecef_to_geodetic(WGS84_A, 0., 0.), GeodeticPoint)


def test_ecef_to_geodetic_center():
    with pytest.raises(InvalidCoordinateError):
        ecef_to_geodetic(0., 0., 0.)

    with pytest.raises(InvalidCoordinateError):
        ecef_to_geodetic(float('inf'), 0., 0., validate=True)


def test_rotation_ecef_to_enu():
    rot = rotation_ecef_to_enu(0., 0.)
    assert rot.shape == (3, 3)
    assert rot.dtype == np.float64
    np.testing.assert_allclose(
        rot,
        [[0., 1., 0.], [0., 0., 1.], [1., 0., 0.]],
        atol=1e-15
    )

    # Orthonormal for any reference
    for lat, lon, _ in POINTS:
        rot = rotation_ecef_to_enu(lat, lon)
        np.testing.assert_allclose(rot @ rot.T, np.eye(3), atol=1e-12)
        assert np.linalg.det(rot) == pytest.approx(1.)


def test_rotation_matches_ecef_to_enu():
    lat0, lon0, h0 = 50., 10., 200.
    target = geodetic_to_ecef(50.01, 10.02, 150.)
    expected = rotation_ecef_to_enu(lat0, lon0) @ (
        np.array(target) - np.array(geodetic_to_ecef(lat0, lon0, h0))
    )
    assert_triples_equal(ecef_to_enu(*target, lat0, lon0, h0), expected)


def test_llh_to_enu_identity():
    for point in POINTS:
        assert_triples_equal(llh_to_enu(*point, *point), (0., 0., 0.))

    assert isinstance(llh_to_enu(0., 0., 0., 0., 0., 0.), EnuCoordinate)


def test_llh_to_enu_directions():
    # Due east
    east, north, up = llh_to_enu(45., 10.001, 0., 45., 10., 0.)
    assert east > 0
    assert north == pytest.approx(0., abs=1e-2)
    assert up == pytest.approx(0., abs=1e-2)

    # Due north
    east, north, up = llh_to_enu(45.001, 10., 0., 45., 10., 0.)
    assert north > 0
    assert east == pytest.approx(0., abs=1e-6)
    assert up == pytest.approx(0., abs=1e-2)

    # Straight up
    assert_triples_equal(llh_to_enu(45., 10., 100., 45., 10., 0.), (0., 0., 100.))

    # West and south are negative
    assert llh_to_enu(45., 9.999, 0., 45., 10., 0.).east < 0
    assert llh_to_enu(44.999, 10., 0., 45., 10., 0.).north < 0


def test_llh_to_enu_scale():
    # ~1.1km of latitude should be close to the arc length on the semi-major axis
    east, north, _ = llh_to_enu(45.01, 10., 0., 45., 10., 0.)
    assert north == pytest.approx(WGS84_A * math.radians(0.01), abs=5.)
    assert east == pytest.approx(0., abs=1e-6)

    lat0, lon0, h0 = 42.680067, 3.034061, 0.
    lat1, lon1, h1 = 42.680499, 3.035775, 1.
    east, north, _ = llh_to_enu(lat1, lon1, h1, lat0, lon0, h0)
    assert north == pytest.approx(WGS84_A * math.radians(lat1 - lat0), abs=5.)
    assert east > 0


def test_llh_to_enu_validate():
    with pytest.raises(InvalidCoordinateError):
        llh_to_enu(91., 0., 0., 0., 0., 0., validate=True)

    with pytest.raises(InvalidCoordinateError):
        llh_to_enu(0., 0., 0., 0., -181., 0., validate=True)

    # Unvalidated out-of-range reference still yields a number
    assert all(math.isfinite(v) for v in llh_to_enu(0., 0., 0., 0., -181., 0.))


def test_ecef_to_enu():
    lat0, lon0, h0 = 50., 10., 200.
    for point in POINTS:
        assert_triples_equal(
            ecef_to_enu(*geodetic_to_ecef(*point), lat0, lon0, h0),
            llh_to_enu(*point, lat0, lon0, h0),
        )

    with pytest.raises(InvalidCoordinateError):
        ecef_to_enu(float('nan'), 0., 0., lat0, lon0, h0, validate=True)


def test_enu_to_ecef():
    lat0, lon0, h0 = -33.8688, 151.2093, 58.
    for point in POINTS:
        ecef = geodetic_to_ecef(*point)
        enu = ecef_to_enu(*ecef, lat0, lon0, h0)
        assert_triples_equal(enu_to_ecef(*enu, lat0, lon0, h0), ecef)

    assert_triples_equal(
        enu_to_ecef(0., 0., 0., lat0, lon0, h0),
        geodetic_to_ecef(lat0, lon0, h0)
    )


def test_enu_to_llh():
    lat0, lon0, h0 = 42.680067, 3.034061, 0.
    for point in POINTS[:3]:
        enu = llh_to_enu(*point, lat0, lon0, h0)
        assert_geodetic_equal(enu_to_llh(*enu, lat0, lon0, h0), point)

    assert_geodetic_equal(enu_to_llh(0., 0., 25., lat0, lon0, h0), (lat0, lon0, 25.))

    with pytest.raises(InvalidCoordinateError):
        enu_to_llh(0., 0., 0., 95., lon0, h0, validate=True)


def test_non_finite_angles_propagate():
    inf = float('inf')
    assert all(math.isnan(v) for v in geodetic_to_ecef(inf, 0., 0.))
    assert all(math.isnan(v) for v in llh_to_enu(inf, 0., 0., 0., 0., 0.))
    assert all(math.isnan(v) for v in llh_to_enu(0., 0., 0., 0., -inf, 0.))
    assert all(math.isnan(v) for v in enu_to_ecef(0., 0., 0., inf, 0., 0.))

    with pytest.raises(InvalidCoordinateError):
        llh_to_enu(inf, 0., 0., 0., 0., 0., validate=True)


def test_ecef_to_geodetic_non_finite(caplog):
    assert all(math.isnan(v) for v in ecef_to_geodetic(float('nan'), 0., 0.))
    assert all(math.isnan(v) for v in ecef_to_geodetic(0., float('inf'), 0.))
    assert 'did not converge' not in caplog.text


def test_ecef_to_geodetic_no_convergence(monkeypatch, caplog):
    import geoenu.conversion
    monkeypatch.setattr(geoenu.conversion, '_MAX_ITER', 1)

    # Last estimate is still returned, just less precise
    result = ecef_to_geodetic(*geodetic_to_ecef(50., 10., 200.))
    assert 'did not converge within 1 iterations' in caplog.text
    assert_geodetic_equal(result, (50., 10., 200.), deg_tol=1e-3, height_tol=50.)
