import pytest

from geotransform._const import SEC_TO_RAD
from geotransform.datum import build_datum
from geotransform.datum_transform import datum_transform
from geotransform.ellipsoid import WGS84_ELLIPSOID, Ellipsoid
from geotransform.errors import GridShiftError
from geotransform.gridshift import GridRef

from tests.functions import assert_points_equal, radians
from tests.test_gridshift import constant_table


WGS84 = Ellipsoid.from_name('WGS84')
CLRK66 = Ellipsoid.from_name('clrk66')
AIRY = Ellipsoid.from_name('airy')
OSGB36 = [446.448, -125.157, 542.06, 0.15, 0.247, 0.842, -20.489]


def _nad27(mandatory=False, params=None):
    return build_datum(
        CLRK66, 'nad27', params, (GridRef('test', mandatory, (constant_table(),)),)
    )


@pytest.mark.parametrize('datum', [
    build_datum(WGS84, 'WGS84'),
    build_datum(WGS84),
    build_datum(AIRY, 'ire65', [482.53, -130.596, 564.557]),
    build_datum(AIRY, 'osgb36', OSGB36),
])
def test_datum_transform_same_datum(datum):
    point = radians(-1.5, 52.3, 20.)
    assert datum_transform(datum, datum, point) is point


def test_datum_transform_same_gridshift_datum():
    point = radians(1., 1.)
    assert datum_transform(_nad27(), _nad27(), point) is point


def test_datum_transform_no_datum():
    point = radians(-1.5, 52.3)
    osgb = build_datum(AIRY, 'osgb36', OSGB36)
    nodatum = build_datum(CLRK66)

    assert datum_transform(osgb, nodatum, point) is point
    assert datum_transform(nodatum, osgb, point) is point


def test_datum_transform_helmert():
    point = radians(-1.5, 52.3, 20.)
    wgs84 = build_datum(WGS84, 'WGS84')
    osgb = build_datum(AIRY, 'osgb36', OSGB36)

    shifted = datum_transform(osgb, wgs84, point)
    # OSGB36 to WGS84 moves points roughly 100 m in southern Britain
    assert abs(shifted.x - point.x) > 1e-6
    assert abs(shifted.y - point.y) > 1e-6

    # The inverse Helmert transposes the rotation, so the height drifts slightly
    back = datum_transform(wgs84, osgb, shifted)
    assert back.x == pytest.approx(point.x, abs=1e-9)
    assert back.y == pytest.approx(point.y, abs=1e-9)
    assert back.z == pytest.approx(point.z, abs=1e-3)


def test_datum_transform_ellipsoid_change():
    # Same WGS84 datum type, different ellipsoid: goes through geocentric
    point = radians(10., 45., 0.)
    other = build_datum(Ellipsoid.from_name('intl'), 'WGS84')
    shifted = datum_transform(build_datum(WGS84, 'WGS84'), other, point)
    assert shifted.x == pytest.approx(point.x, abs=1e-12)
    assert shifted.y != pytest.approx(point.y, abs=1e-9)


def test_datum_transform_gridshift_source():
    point = radians(1., 1.)
    out = datum_transform(_nad27(), build_datum(WGS84, 'WGS84'), point)
    assert out.x == pytest.approx(point.x + 2 * SEC_TO_RAD, abs=1e-12)
    assert out.y == pytest.approx(point.y + SEC_TO_RAD, abs=1e-12)
    assert out.z is None or out.z == pytest.approx(0., abs=1e-6)


def test_datum_transform_gridshift_dest():
    point = radians(1., 1.)
    out = datum_transform(build_datum(WGS84, 'WGS84'), _nad27(), point)
    assert out.x == pytest.approx(point.x - 2 * SEC_TO_RAD, abs=1e-12)
    assert out.y == pytest.approx(point.y - SEC_TO_RAD, abs=1e-12)


def test_datum_transform_gridshift_to_wgs84_ellipsoid():
    # Grids land on the WGS84 ellipsoid, so no geocentric pass follows
    point = radians(1., 1.)
    out = datum_transform(_nad27(), build_datum(WGS84_ELLIPSOID, 'WGS84'), point)
    assert out.x == pytest.approx(point.x + 2 * SEC_TO_RAD, abs=1e-15)
    assert out.y == pytest.approx(point.y + SEC_TO_RAD, abs=1e-15)
    assert out.z is None


def test_datum_transform_gridshift_soft_failure(caplog):
    point = radians(30., 30.)
    out = datum_transform(_nad27(), build_datum(WGS84, 'WGS84'), point)
    assert out is point
    assert 'not shifted' in caplog.text


def test_datum_transform_gridshift_fallback_params():
    point = radians(30., 30., 0.)
    fallback = [-8., 160., 176.]
    out = datum_transform(_nad27(params=fallback), build_datum(WGS84, 'WGS84'), point)

    expected = datum_transform(
        build_datum(CLRK66, 'nad27', fallback), build_datum(WGS84, 'WGS84'), point
    )
    assert_points_equal(out, expected, abs_tol=1e-12)


def test_datum_transform_gridshift_hard_failure():
    with pytest.raises(GridShiftError):
        datum_transform(_nad27(mandatory=True), build_datum(WGS84, 'WGS84'), radians(30., 30.))

    with pytest.raises(GridShiftError):
        datum_transform(
            build_datum(WGS84, 'WGS84'), _nad27(mandatory=True), radians(30., 30.)
        )
