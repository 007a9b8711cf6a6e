import math

import pytest

from geotransform.errors import DefinitionError
from geotransform.proj_string import parse_proj_string


def test_parse_proj_string_basic():
    params = parse_proj_string(
        '+proj=tmerc +lat_0=49 +lon_0=-2 +k=0.9996012717 +x_0=400000 +y_0=-100000 '
        '+ellps=airy +units=m +no_defs'
    )
    assert params['proj_name'] == 'tmerc'
    assert params['lat0'] == pytest.approx(math.radians(49))
    assert params['long0'] == pytest.approx(math.radians(-2))
    assert params['k0'] == 0.9996012717
    assert params['x0'] == 400000.
    assert params['y0'] == -100000.
    assert params['ellps'] == 'airy'
    assert params['units'] == 'm'
    assert params['to_meter'] == 1.

    # Unrecognized, value-less keys pass through as True
    assert params['no_defs'] is True


def test_parse_proj_string_keys_are_case_insensitive():
    params = parse_proj_string('+PROJ=longlat +R=6370997 +LON_0=10')
    assert params['proj_name'] == 'longlat'
    assert params['a'] == params['b'] == 6370997.
    assert params['long0'] == pytest.approx(math.radians(10))


def test_parse_proj_string_towgs84():
    params = parse_proj_string('+proj=longlat +ellps=airy +towgs84=446.448,-125.157,542.06')
    assert params['datum_params'] == [446.448, -125.157, 542.06]


def test_parse_proj_string_datum():
    assert parse_proj_string('+proj=longlat +datum=WGS84')['datum_code'] == 'WGS84'
    assert parse_proj_string('+proj=longlat +datum=NAD83')['datum_code'] == 'nad83'


def test_parse_proj_string_nadgrids():
    params = parse_proj_string('+proj=longlat +ellps=clrk66 +nadgrids=@conus,ntv2_0.gsb')
    assert params['nadgrids'] == '@conus,ntv2_0.gsb'

    params = parse_proj_string('+proj=merc +a=6378137 +b=6378137 +nadgrids=@null')
    assert params['datum_code'] == 'none'
    assert 'nadgrids' not in params


def test_parse_proj_string_units():
    params = parse_proj_string('+proj=lcc +lat_1=33 +units=us-ft')
    assert params['to_meter'] == pytest.approx(0.3048006096, rel=1e-9)

    # Unknown units keep the name and carry no scale
    params = parse_proj_string('+proj=longlat +units=degrees')
    assert params['units'] == 'degrees'
    assert 'to_meter' not in params

    assert parse_proj_string('+proj=tmerc +to_meter=0.3048')['to_meter'] == 0.3048


def test_parse_proj_string_prime_meridian():
    params = parse_proj_string('+proj=longlat +ellps=clrk80ign +pm=paris')
    assert params['from_greenwich'] == pytest.approx(math.radians(2.337229166667))

    params = parse_proj_string('+proj=longlat +pm=-17.6666666667')
    assert params['from_greenwich'] == pytest.approx(math.radians(-17.6666666667))


def test_parse_proj_string_axis():
    assert parse_proj_string('+proj=longlat +axis=neu')['axis'] == 'neu'

    # Invalid axis codes are dropped
    assert 'axis' not in parse_proj_string('+proj=longlat +axis=nnu')
    assert 'axis' not in parse_proj_string('+proj=longlat +axis=xyz')


def test_parse_proj_string_flags():
    params = parse_proj_string('+proj=utm +zone=33 +south +r_a +approx')
    assert params['zone'] == 33
    assert params['utm_south'] is True
    assert params['r_a'] is True
    assert params['approx'] is True


def test_parse_proj_string_omerc_angles():
    params = parse_proj_string('+proj=omerc +lonc=-86 +alpha=337.25556 +gamma=337.25556')
    assert params['longc'] == pytest.approx(math.radians(-86))
    assert params['alpha'] == pytest.approx(math.radians(337.25556))
    # The rectified grid angle stays in degrees
    assert params['rectified_grid_angle'] == 337.25556


def test_parse_proj_string_title_with_spaces():
    params = parse_proj_string('+title=WGS 84 (long/lat) +proj=longlat')
    assert params['title'] == 'WGS 84 (long/lat)'


def test_parse_proj_string_errors():
    with pytest.raises(DefinitionError):
        parse_proj_string('+proj=tmerc +lat_0=north')

    with pytest.raises(DefinitionError):
        parse_proj_string('+proj=tmerc +k_0')

    with pytest.raises(DefinitionError):
        parse_proj_string('+proj=utm +zone=abc')

    with pytest.raises(DefinitionError):
        parse_proj_string('+ellps=WGS84 +units=m')

    with pytest.raises(DefinitionError):
        parse_proj_string('+proj=longlat +towgs84=1,x,3')
