import math

import pytest

from geotransform.crs import parse
from geotransform.errors import DefinitionError, DomainError, UnknownProjectionError
from geotransform.projections import PROJECTIONS, get_projection, list_projections
from geotransform.projections import conic, nzmg
from geotransform.projections.conic import LambertConformalConic
from geotransform.projections.tmerc import TransverseMercator
from geotransform.registry import CrsRegistry
from geotransform.utils.mixins import LoggingMixin

from tests.functions import assert_points_equal, radians


@pytest.mark.parametrize('definition, lon, lat', [
    ('+proj=longlat +datum=WGS84', 12.5, -33.2),
    ('+proj=identity +ellps=WGS84', 12.5, -33.2),
    (
        '+proj=tmerc +lat_0=49 +lon_0=-2 +k=0.9996012717 +x_0=400000 +y_0=-100000 +ellps=airy',
        -1.5, 52.
    ),
    ('+proj=tmerc +lat_0=0 +lon_0=9 +k=1 +R=6370997', 11., 45.),
    ('+proj=utm +zone=33 +datum=WGS84', 15.5, 50.),
    ('+proj=utm +zone=56 +south +ellps=GRS80', 151.2, -33.9),
    ('+proj=merc +ellps=WGS84', 10., 60.),
    ('+proj=merc +lat_ts=20 +R=6371000', -40., -35.),
    (
        '+proj=lcc +lat_1=49 +lat_2=44 +lat_0=46.5 +lon_0=3 +x_0=700000 +y_0=6600000 '
        '+ellps=GRS80',
        2.35, 48.85
    ),
    (
        '+proj=lcc +lat_1=18 +lat_0=18 +lon_0=-77 +k_0=1 +x_0=250000 +y_0=150000 +ellps=clrk66',
        -76.8, 18.
    ),
    ('+proj=aea +lat_1=29.5 +lat_2=45.5 +lat_0=37.5 +lon_0=-96 +datum=NAD83', -100., 40.),
    ('+proj=eqdc +lat_1=55 +lat_2=60 +lon_0=-154 +ellps=clrk66', -150., 58.),
    (
        '+proj=laea +lat_0=52 +lon_0=10 +x_0=4321000 +y_0=3210000 +ellps=GRS80',
        5., 50.
    ),
    ('+proj=laea +lat_0=90 +lon_0=0 +ellps=WGS84', 30., 70.),
    ('+proj=laea +lat_0=0 +lon_0=0 +ellps=WGS84', 20., 10.),
    ('+proj=laea +lat_0=45 +lon_0=-100 +R=6370997', -90., 40.),
    ('+proj=gnom +lat_0=90 +lon_0=0 +R=6370997', 30., 60.),
    ('+proj=gnom +lat_0=40 +lon_0=-100 +R=6370997', -95., 45.),
    ('+proj=ortho +lat_0=40 +lon_0=-100 +R=6370997', -90., 45.),
    ('+proj=stere +lat_0=90 +lat_ts=70 +lon_0=-45 +datum=WGS84', -30., 75.),
    ('+proj=stere +lat_0=-90 +lat_ts=-71 +lon_0=0 +datum=WGS84', 40., -75.),
    ('+proj=stere +lat_0=45 +lon_0=10 +k=0.9999 +ellps=WGS84', 12., 47.),
    ('+proj=stere +lat_0=45 +lon_0=10 +R=6371000', 12., 47.),
    (
        '+proj=sterea +lat_0=52.15616055555555 +lon_0=5.38763888888889 +k=0.9999079 '
        '+x_0=155000 +y_0=463000 +ellps=bessel',
        4.9, 52.37
    ),
    ('+proj=gauss +lat_0=52.15616055555555 +lon_0=5.38763888888889 +ellps=bessel', 4.9, 52.37),
    (
        '+proj=omerc +lat_0=4 +lonc=102.25 +alpha=323.0257905 +k=0.99984 +x_0=804670.24 '
        '+y_0=0 +no_uoff +gamma=323.1301023611111 +ellps=evrst69',
        101.7, 3.15
    ),
    (
        '+proj=omerc +lat_0=57 +lonc=-133.6666666666667 +alpha=323.1301023611111 +k=0.9999 '
        '+x_0=5000000 +y_0=-5000000 +ellps=GRS80',
        -134.4, 58.3
    ),
    (
        '+proj=krovak +lat_0=49.5 +lon_0=24.83333333333333 +alpha=30.28813972222222 '
        '+k=0.9999 +ellps=bessel',
        14.42, 50.08
    ),
    (
        '+proj=somerc +lat_0=46.95240555555556 +lon_0=7.439583333333333 +k_0=1 '
        '+x_0=600000 +y_0=200000 +ellps=bessel',
        8.54, 47.37
    ),
    (
        '+proj=gstmerc +lat_0=-21.11666666666667 +lon_0=55.53333333333333 +k_0=1 '
        '+x_0=160000 +y_0=50000 +ellps=intl',
        55.45, -21.
    ),
    (
        '+proj=cass +lat_0=10.44166666666667 +lon_0=-61.33333333333334 +x_0=86501.46392051999 '
        '+y_0=65379.0134283 +a=6378293.645208759 +b=6356617.987679838',
        -61.2, 10.6
    ),
    ('+proj=cass +R=6370997', 0.5, 30.),
    ('+proj=poly +lon_0=-54 +x_0=5000000 +y_0=10000000 +ellps=aust_SA', -50., -10.),
    ('+proj=poly +lon_0=-54 +R=6370997', -50., -10.),
    ('+proj=sinu +lon_0=0 +R=6371000', 45., 30.),
    ('+proj=sinu +lon_0=0 +ellps=WGS84', 45., 30.),
    ('+proj=moll +R=6371000', 60., 45.),
    ('+proj=eqc +lat_ts=0 +ellps=WGS84', 100., -60.),
    ('+proj=equi +lat_0=30 +R=6371000', 100., -60.),
    ('+proj=mill +R=6371000', -100., 60.),
    ('+proj=cea +lat_ts=30 +ellps=WGS84', 20., 40.),
    ('+proj=cea +lat_ts=30 +R=6371000', 20., 40.),
    (
        '+proj=nzmg +lat_0=-41 +lon_0=173 +x_0=2510000 +y_0=6023150 +datum=nzgd49',
        174.76, -41.29
    ),
    ('+proj=vandg +R=6371000', -60., 30.),
])
def test_round_trip(definition, lon, lat):
    crs = parse(definition, CrsRegistry())
    point = radians(lon, lat)

    projected = crs.forward(point)
    assert math.isfinite(projected.x)
    assert math.isfinite(projected.y)
    assert_points_equal(crs.inverse(projected), point, abs_tol=1e-7)


def test_round_trip_keeps_height():
    crs = parse('+proj=utm +zone=33 +datum=WGS84', CrsRegistry())
    point = radians(15.5, 50., 250.)

    projected = crs.forward(point)
    assert projected.z == 250.
    assert_points_equal(crs.inverse(projected), point)


def test_utm_central_meridian():
    crs = parse('+proj=utm +zone=33 +datum=WGS84', CrsRegistry())
    projected = crs.forward(radians(15., 50.))

    assert projected.x == pytest.approx(500000., abs=1e-6)
    assert projected.y == pytest.approx(5538630.70, abs=0.01)
    assert_points_equal(crs.inverse(projected), radians(15., 50.), abs_tol=1e-9)


def test_utm_south_false_northing():
    crs = parse('+proj=utm +zone=56 +south +ellps=GRS80', CrsRegistry())
    assert crs.projection.y0 == 10000000.
    assert crs.forward(radians(153., 0.)).y == pytest.approx(10000000., abs=1e-6)


def test_utm_zone_from_longitude():
    crs = parse('+proj=utm +lon_0=15 +datum=WGS84', CrsRegistry())
    assert crs.projection.zone == 33


def test_utm_zone_out_of_range():
    with pytest.raises(DefinitionError):
        parse('+proj=utm +zone=61 +datum=WGS84', CrsRegistry())


def test_mercator_origin():
    crs = parse('+proj=merc +ellps=WGS84', CrsRegistry())
    assert_points_equal(crs.forward(radians(0., 0.)), radians(0., 0.))


def test_mercator_pole():
    crs = parse('+proj=merc +ellps=WGS84', CrsRegistry())
    with pytest.raises(DomainError):
        crs.forward(radians(0., 90.))


def test_polar_laea_pole():
    crs = parse('+proj=laea +lat_0=90 +lon_0=0 +x_0=100 +y_0=200 +ellps=WGS84', CrsRegistry())
    projected = crs.forward(radians(0., 90.))
    assert projected.x == pytest.approx(100., abs=1e-6)
    assert projected.y == pytest.approx(200., abs=1e-6)


def test_orthographic_far_side():
    crs = parse('+proj=ortho +lat_0=40 +lon_0=-100 +R=6370997', CrsRegistry())
    with pytest.raises(DomainError):
        crs.forward(radians(80., -40.))


def test_gnomonic_horizon():
    crs = parse('+proj=gnom +lat_0=90 +lon_0=0 +R=6370997', CrsRegistry())
    with pytest.raises(DomainError):
        crs.forward(radians(10., -5.))


def test_lcc_opposite_pole():
    crs = parse(
        '+proj=lcc +lat_1=33 +lat_2=45 +lat_0=23 +lon_0=-96 +ellps=GRS80', CrsRegistry()
    )
    with pytest.raises(DomainError):
        crs.forward(radians(0., -90.))

    # The pole under the cone apex projects to the apex
    apex = crs.forward(radians(-96., 90.))
    assert math.isfinite(apex.y)
    assert apex.x == pytest.approx(0., abs=1e-3)


def test_polar_stereographic_opposite_pole():
    for definition in (
        '+proj=stere +lat_0=90 +lat_ts=70 +lon_0=-45 +datum=WGS84',
        '+proj=stere +lat_0=90 +lon_0=0 +R=6371000',
    ):
        crs = parse(definition, CrsRegistry())
        with pytest.raises(DomainError):
            crs.forward(radians(0., -90.))

    south = parse('+proj=stere +lat_0=-90 +lat_ts=-71 +lon_0=0 +datum=WGS84', CrsRegistry())
    with pytest.raises(DomainError):
        south.forward(radians(30., 90.))


def test_lcc_opposite_parallels():
    with pytest.raises(DefinitionError):
        parse('+proj=lcc +lat_1=30 +lat_2=-30 +ellps=WGS84', CrsRegistry())


def test_get_projection():
    assert get_projection('tmerc') is TransverseMercator
    assert get_projection('TRANSVERSE_MERCATOR') is TransverseMercator
    assert get_projection('Transverse Mercator') is TransverseMercator
    assert get_projection('Lambert Conformal Conic') is LambertConformalConic
    assert get_projection('lambert_conformal_conic_2SP') is LambertConformalConic

    with pytest.raises(UnknownProjectionError):
        get_projection('bogus')


def test_unknown_projection_in_definition():
    with pytest.raises(UnknownProjectionError):
        parse('+proj=bogus +ellps=WGS84', CrsRegistry())


def test_list_projections():
    names = list_projections()
    assert len(names) == len(PROJECTIONS)
    assert len(set(names)) == len(names)
    for name in ('longlat', 'tmerc', 'utm', 'merc', 'lcc', 'laea', 'krovak', 'vandg'):
        assert name in names


def test_geocentric_round_trip():
    crs = parse('+proj=geocent +datum=WGS84', CrsRegistry())
    point = radians(10., 45., 100.)

    es = 0.0066943799901413165
    n = 6378137. / math.sqrt(1 - es * math.sin(point.y) ** 2)

    projected = crs.forward(point)
    assert projected.x == pytest.approx((n + 100.) * math.cos(point.y) * math.cos(point.x), abs=1e-6)
    assert projected.z == pytest.approx((n * (1 - es) + 100.) * math.sin(point.y), abs=1e-6)

    back = crs.inverse(projected)
    assert back.x == pytest.approx(point.x, abs=1e-9)
    assert back.y == pytest.approx(point.y, abs=1e-9)
    assert back.z == pytest.approx(100., abs=1e-3)


def test_albers_iteration_cap_warns(caplog, monkeypatch):
    monkeypatch.setattr(LoggingMixin, 'WARNED_ONCE', set())
    monkeypatch.setattr(conic, 'ALBERS_MAX_ITER', 0)

    crs = parse('+proj=aea +lat_1=29.5 +lat_2=45.5 +lat_0=37.5 +lon_0=-96 +datum=NAD83', CrsRegistry())
    point = crs.inverse(crs.forward(radians(-100., 40.)))

    assert 'Albers latitude iteration did not converge' in caplog.text
    assert math.isfinite(point.y)
    assert point.y == pytest.approx(math.radians(40.), abs=1e-2)


def test_nzmg_iteration_cap_warns(caplog, monkeypatch):
    monkeypatch.setattr(LoggingMixin, 'WARNED_ONCE', set())
    monkeypatch.setattr(nzmg, 'NZMG_MAX_ITER', 0)

    crs = parse(
        '+proj=nzmg +lat_0=-41 +lon_0=173 +x_0=2510000 +y_0=6023150 +datum=nzgd49',
        CrsRegistry()
    )
    point = crs.inverse(crs.forward(radians(174.76, -41.29)))

    assert 'NZMG inverse iteration did not converge' in caplog.text
    assert math.isfinite(point.x)
    assert math.isfinite(point.y)
