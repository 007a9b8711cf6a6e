import pytest

from geotransform._const import SEC_TO_RAD
from geotransform.datum import *
from geotransform.ellipsoid import Ellipsoid
from geotransform.errors import DefinitionError
from geotransform.gridshift import GridRef


WGS84 = Ellipsoid.from_name('WGS84')
AIRY = Ellipsoid.from_name('airy')


def test_build_datum_types():
    assert build_datum(WGS84).datum_type is DatumType.NODATUM
    assert build_datum(WGS84, 'none').datum_type is DatumType.NODATUM
    assert build_datum(WGS84, 'WGS84').datum_type is DatumType.WGS84

    # All-zero parameters do not make a shifting datum
    assert build_datum(WGS84, 'nad83', ['0', '0', '0']).datum_type is DatumType.WGS84

    datum = build_datum(AIRY, 'ire65', [482.53, -130.596, 564.557])
    assert datum.datum_type is DatumType.PARAM_3
    assert datum.params == (482.53, -130.596, 564.557)
    assert datum.is_parametric
    assert datum.helmert_type is DatumType.PARAM_3

    # Parameters alone imply a datum
    datum = build_datum(AIRY, None, [1, 2, 3])
    assert datum.datum_type is DatumType.PARAM_3


def test_build_datum_7_param():
    datum = build_datum(AIRY, 'osgb36', [446.448, -125.157, 542.06, 0.15, 0.247, 0.842, -20.489])
    assert datum.datum_type is DatumType.PARAM_7
    assert datum.params[:3] == (446.448, -125.157, 542.06)
    assert datum.params[3] == pytest.approx(0.15 * SEC_TO_RAD)
    assert datum.params[6] == pytest.approx(1 - 20.489e-6)

    # Translation-only 7-vectors are 3-param
    datum = build_datum(AIRY, 'test', [1, 2, 3, 0, 0, 0, 0])
    assert datum.datum_type is DatumType.PARAM_3
    assert datum.params == (1., 2., 3.)


def test_build_datum_invalid_params():
    with pytest.raises(DefinitionError):
        build_datum(WGS84, 'test', [1, 2])

    with pytest.raises(DefinitionError):
        build_datum(WGS84, 'test', ['a', 'b', 'c'])


def test_build_datum_gridshift():
    grids = (GridRef('conus', False),)
    datum = build_datum(Ellipsoid.from_name('clrk66'), 'nad27', grids=grids)
    assert datum.datum_type is DatumType.GRIDSHIFT
    assert datum.grids == grids
    assert not datum.is_parametric
    assert datum.helmert_type is None

    # Fallback Helmert parameters are kept
    datum = build_datum(Ellipsoid.from_name('clrk66'), 'nad27', [-8, 160, 176], grids)
    assert datum.datum_type is DatumType.GRIDSHIFT
    assert datum.helmert_type is DatumType.PARAM_3


def test_compare_datums():
    osgb = [446.448, -125.157, 542.06, 0.15, 0.247, 0.842, -20.489]

    assert compare_datums(build_datum(WGS84, 'WGS84'), build_datum(WGS84, 'wgs84'))
    assert compare_datums(build_datum(AIRY, 'a', osgb), build_datum(AIRY, 'b', osgb))
    assert compare_datums(
        build_datum(AIRY, 'a', [1, 2, 3]), build_datum(AIRY, 'b', [1, 2, 3])
    )

    assert not compare_datums(build_datum(WGS84, 'WGS84'), build_datum(WGS84))
    assert not compare_datums(build_datum(WGS84, 'WGS84'), build_datum(AIRY, 'WGS84'))
    assert not compare_datums(
        build_datum(AIRY, 'a', [1, 2, 3]), build_datum(AIRY, 'a', [1, 2, 4])
    )

    clrk66 = Ellipsoid.from_name('clrk66')
    assert compare_datums(
        build_datum(clrk66, 'nad27', grids=(GridRef('conus', False),)),
        build_datum(clrk66, 'nad27', grids=(GridRef('conus', False),)),
    )
    assert not compare_datums(
        build_datum(clrk66, 'nad27', grids=(GridRef('conus', False),)),
        build_datum(clrk66, 'nad27', grids=(GridRef('alaska', False),)),
    )


def test_compare_datums_es_tolerance():
    ellps = Ellipsoid.derive(6378137.0, rf=298.257223563)
    close = Ellipsoid.derive(6378137.0, rf=298.257222101)

    # GRS80 and WGS84 agree within the tolerance
    assert compare_datums(build_datum(ellps, 'WGS84'), build_datum(close, 'WGS84'))

    far = Ellipsoid.derive(6378137.0, rf=300.)
    assert not compare_datums(build_datum(ellps, 'WGS84'), build_datum(far, 'WGS84'))
    assert compare_datums(build_datum(ellps, 'WGS84'), build_datum(ellps, 'WGS84'))
