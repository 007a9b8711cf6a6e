import logging

import pytest

from geotransform.errors import DefinitionError, DomainError
from geotransform.gridshift import GridShiftTable
from geotransform.registry import CrsRegistry, default_registry, normalize_code

from tests.test_gridshift import constant_table, ntv2_buffer
from tests.test_wkt import NAD83_UTM15


@pytest.mark.parametrize('code, expected', [
    ('EPSG:4326', 'EPSG:4326'),
    ('epsg:4326', 'EPSG:4326'),
    (' EPSG : 3857 ', 'EPSG:3857'),
    ('urn:ogc:def:crs:EPSG::4326', 'EPSG:4326'),
    ('urn:ogc:def:crs:EPSG:6.6:4326', 'EPSG:4326'),
    ('http://www.opengis.net/def/crs/EPSG/0/3857', 'EPSG:3857'),
    ('EPSG:9.9:4326', 'EPSG:4326'),
    ('ESRI:102100', 'ESRI:102100'),
    ('IAU2000:49900', 'IAU2000:49900'),
    ('urn:ogc:def:crs:OGC:1.3:CRS84', 'WGS84'),
    ('http://www.opengis.net/def/crs/OGC/1.3/CRS84', 'WGS84'),
    ('CRS:84', 'WGS84'),
    ('GOOGLE', 'GOOGLE'),
])
def test_normalize_code(code, expected):
    assert normalize_code(code) == expected


def test_registry_builtins():
    registry = CrsRegistry()
    for code in (
        'EPSG:4326', 'WGS84', 'EPSG:4269', 'EPSG:3857', 'EPSG:3785', 'GOOGLE',
        'EPSG:900913', 'EPSG:102113', 'EPSG:32601', 'EPSG:32660', 'EPSG:32701', 'EPSG:32760'
    ):
        assert code in registry

    assert registry.lookup('WGS84')['proj_name'] == 'longlat'
    assert registry.lookup('GOOGLE')['proj_name'] == 'merc'
    assert registry.lookup('EPSG:32633')['zone'] == 33
    assert registry.lookup('EPSG:32733')['utm_south'] is True
    assert 'EPSG:32661' not in registry

    assert len(CrsRegistry(include_builtins=False)) == 0


def test_registry_define():
    registry = CrsRegistry(include_builtins=False)
    assert registry.define('EPSG:26915', NAD83_UTM15) is registry
    assert registry.lookup('EPSG:26915')['proj_name'] == 'Transverse_Mercator'
    assert registry.lookup('EPSG:26915')['srs_code'] == 'NAD83 / UTM zone 15N'

    registry.define('LOCAL', {'proj_name': 'identity'})
    assert registry.lookup('LOCAL') == {'proj_name': 'identity', 'srs_code': 'LOCAL'}

    registry.define_many([
        ('EPSG:2154', '+proj=lcc +lat_1=49 +lat_2=44 +lat_0=46.5 +lon_0=3 +ellps=GRS80'),
        ('EPSG:27700', '+proj=tmerc +lat_0=49 +lon_0=-2 +ellps=airy'),
    ])
    assert set(registry.codes()) == {'EPSG:26915', 'LOCAL', 'EPSG:2154', 'EPSG:27700'}

    # Lookups accept other spellings of the code
    assert registry.lookup('urn:ogc:def:crs:EPSG::27700')['proj_name'] == 'tmerc'


def test_registry_define_errors():
    registry = CrsRegistry(include_builtins=False)
    with pytest.raises(DefinitionError):
        registry.define('BAD', 'not a definition')

    with pytest.raises(DefinitionError):
        registry.define('BAD', 42)

    with pytest.raises(DefinitionError):
        registry.alias('NEW', 'MISSING')


def test_registry_lookup_returns_copy():
    registry = CrsRegistry()
    params = registry.lookup('EPSG:4326')
    params['proj_name'] = 'merc'
    assert registry.lookup('EPSG:4326')['proj_name'] == 'longlat'


def test_registry_alias():
    registry = CrsRegistry(include_builtins=False)
    registry.define('EPSG:27700', '+proj=tmerc +lat_0=49 +lon_0=-2 +ellps=airy')
    registry.alias('BNG', 'EPSG:27700')
    assert registry.lookup('BNG') == registry.lookup('EPSG:27700')


def test_registry_grids():
    registry = CrsRegistry(include_builtins=False)
    table = constant_table()

    registry.register_grid('single', table)
    assert registry.get_grid('single') == (table,)

    registry.register_grid('many', [table, table])
    assert len(registry.get_grid('many')) == 2

    registry.register_grid('ntv2', ntv2_buffer())
    tables = registry.get_grid('ntv2')
    assert len(tables) == 1
    assert isinstance(tables[0], GridShiftTable)

    assert registry.get_grid('missing') is None

    with pytest.raises(DefinitionError):
        registry.register_grid('empty', [])


def test_registry_error_handler(caplog):
    registry = CrsRegistry(include_builtins=False)
    error = DomainError('bad point')

    # The default handler logs
    with caplog.at_level(logging.ERROR):
        registry.report_error(error)
    assert 'bad point' in caplog.text

    received = []
    assert registry.set_error_handler(received.append) is registry
    registry.report_error(error)
    assert received == [error]

    registry.set_error_handler(None)
    registry.report_error(DomainError('restored'))
    assert 'restored' in caplog.text
    assert len(received) == 1


def test_registry_copy():
    registry = CrsRegistry(include_builtins=False)
    registry.define('A', '+proj=merc')
    registry.register_grid('grid', constant_table())

    clone = registry.copy()
    clone.define('B', '+proj=merc')
    assert 'B' in clone
    assert 'B' not in registry
    assert clone.get_grid('grid') == registry.get_grid('grid')


def test_default_registry():
    assert default_registry() is default_registry()
    assert 'EPSG:3857' in default_registry()
