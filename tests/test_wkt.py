import math

import pytest

from geotransform.errors import DefinitionError
from geotransform.wkt import is_wkt, parse_wkt, read_wkt


WGS84_GEOGCS = (
    'GEOGCS["WGS 84",DATUM["WGS_1984",SPHEROID["WGS 84",6378137,298.257223563,'
    'AUTHORITY["EPSG","7030"]],AUTHORITY["EPSG","6326"]],PRIMEM["Greenwich",0,'
    'AUTHORITY["EPSG","8901"]],UNIT["degree",0.0174532925199433,AUTHORITY["EPSG","9122"]],'
    'AXIS["Latitude",NORTH],AXIS["Longitude",EAST],AUTHORITY["EPSG","4326"]]'
)

NAD83_UTM15 = (
    'PROJCS["NAD83 / UTM zone 15N",GEOGCS["NAD83",DATUM["North_American_Datum_1983",'
    'SPHEROID["GRS 1980",6378137,298.257222101,AUTHORITY["EPSG","7019"]],'
    'TOWGS84[0,0,0,0,0,0,0],AUTHORITY["EPSG","6269"]],PRIMEM["Greenwich",0,'
    'AUTHORITY["EPSG","8901"]],UNIT["degree",0.0174532925199433,AUTHORITY["EPSG","9122"]],'
    'AUTHORITY["EPSG","4269"]],PROJECTION["Transverse_Mercator"],'
    'PARAMETER["latitude_of_origin",0],PARAMETER["central_meridian",-93],'
    'PARAMETER["scale_factor",0.9996],PARAMETER["false_easting",500000],'
    'PARAMETER["false_northing",0],UNIT["metre",1,AUTHORITY["EPSG","9001"]],'
    'AXIS["Easting",EAST],AXIS["Northing",NORTH],AUTHORITY["EPSG","26915"]]'
)

ESRI_STATE_PLANE = (
    'PROJCS["NAD_1983_StatePlane_Massachusetts_Mainland_FIPS_2001_Feet",'
    'GEOGCS["GCS_North_American_1983",DATUM["D_North_American_1983",'
    'SPHEROID["GRS_1980",6378137.0,298.257222101]],PRIMEM["Greenwich",0.0],'
    'UNIT["Degree",0.0174532925199433]],PROJECTION["Lambert_Conformal_Conic"],'
    'PARAMETER["False_Easting",656166.6666666665],PARAMETER["False_Northing",2460625.0],'
    'PARAMETER["Central_Meridian",-71.5],PARAMETER["Standard_Parallel_1",41.71666666666667],'
    'PARAMETER["Standard_Parallel_2",42.68333333333333],PARAMETER["Latitude_Of_Origin",41.0],'
    'UNIT["Foot_US",0.3048006096012192]]'
)

OSGB_ESRI = (
    'PROJCS["British_National_Grid",GEOGCS["GCS_OSGB_1936",DATUM["D_OSGB_1936",'
    'SPHEROID["Airy_1830",6377563.396,299.3249646]],PRIMEM["Greenwich",0.0],'
    'UNIT["Degree",0.0174532925199433]],PROJECTION["Transverse_Mercator"],'
    'PARAMETER["False_Easting",400000.0],PARAMETER["False_Northing",-100000.0],'
    'PARAMETER["Central_Meridian",-2.0],PARAMETER["Scale_Factor",0.9996012717],'
    'PARAMETER["Latitude_Of_Origin",49.0],UNIT["Meter",1.0]]'
)

GOOGLE_EXTENSION = (
    'PROJCS["Google Maps Global Mercator",GEOGCS["WGS 84",DATUM["WGS_1984",'
    'SPHEROID["WGS 84",6378137,298.257223563]]],PROJECTION["Mercator_2SP"],'
    'PARAMETER["standard_parallel_1",0],PARAMETER["central_meridian",0],'
    'PARAMETER["false_easting",0],PARAMETER["false_northing",0],UNIT["Meter",1],'
    'EXTENSION["PROJ4","+proj=merc +a=6378137 +b=6378137 +lat_ts=0.0 +lon_0=0.0 '
    '+x_0=0.0 +y_0=0 +k=1.0 +units=m +nadgrids=@null +wktext +no_defs"]]'
)

POLAR_STEREO = (
    'PROJCS["WGS 84 / Antarctic Polar Stereographic",GEOGCS["WGS 84",DATUM["WGS_1984",'
    'SPHEROID["WGS 84",6378137,298.257223563]],PRIMEM["Greenwich",0],'
    'UNIT["degree",0.0174532925199433]],PROJECTION["Polar_Stereographic"],'
    'PARAMETER["latitude_of_origin",-71],PARAMETER["central_meridian",0],'
    'PARAMETER["scale_factor",1],PARAMETER["false_easting",0],'
    'PARAMETER["false_northing",0],UNIT["metre",1]]'
)


def test_is_wkt():
    assert is_wkt(WGS84_GEOGCS)
    assert is_wkt(NAD83_UTM15)
    assert is_wkt('LOCAL_CS["engineering"]')
    assert not is_wkt('+proj=longlat')
    assert not is_wkt('EPSG:4326')


def test_read_wkt():
    root = read_wkt(WGS84_GEOGCS)
    assert root.keyword == 'GEOGCS'
    assert root.name == 'WGS 84'

    datum = root.child('DATUM')
    assert datum.name == 'WGS_1984'
    assert datum.child('SPHEROID').number(1) == 6378137.
    assert len(root.children('AXIS')) == 2
    assert root.child('PROJECTION') is None

    with pytest.raises(DefinitionError):
        datum.number(1)

    with pytest.raises(DefinitionError):
        datum.number(5)


def test_read_wkt_escaped_quotes():
    root = read_wkt('LOCAL_CS["a ""quoted"" name"]')
    assert root.name == 'a "quoted" name'


def test_parse_wkt_geogcs():
    params = parse_wkt(WGS84_GEOGCS)
    assert params['proj_name'] == 'longlat'
    assert params['datum_code'] == 'wgs84'
    assert params['a'] == 6378137.
    assert params['rf'] == 298.257223563
    assert params['axis'] == 'neu'
    assert params['from_greenwich'] == 0.
    assert params['srs_code'] == 'WGS 84'
    assert params['authority'] == ('EPSG', '4326')


def test_parse_wkt_projcs():
    params = parse_wkt(NAD83_UTM15)
    assert params['proj_name'] == 'Transverse_Mercator'
    assert params['lat0'] == 0.
    assert params['long0'] == pytest.approx(math.radians(-93))
    assert params['k0'] == 0.9996
    assert params['x0'] == 500000.
    assert params['y0'] == 0.
    assert params['units'] == 'meter'
    assert params['to_meter'] == 1.
    assert params['axis'] == 'enu'
    assert params['datum_params'] == [0., 0., 0., 0., 0., 0., 0.]
    assert params['authority'] == ('EPSG', '26915')


def test_parse_wkt_esri():
    params = parse_wkt(ESRI_STATE_PLANE)
    assert params['proj_name'] == 'Lambert_Conformal_Conic'
    assert params['datum_code'] == 'north_american_1983'
    assert params['ellps'] == 'GRS80'
    assert params['lat0'] == pytest.approx(math.radians(41.))
    assert params['lat1'] == pytest.approx(math.radians(41.71666666666667))
    assert params['lat2'] == pytest.approx(math.radians(42.68333333333333))
    assert params['long0'] == pytest.approx(math.radians(-71.5))
    assert params['to_meter'] == 0.3048006096012192

    # False easting/northing are converted to meters
    assert params['x0'] == pytest.approx(200000., abs=1e-6)
    assert params['y0'] == pytest.approx(750000., abs=1e-6)


def test_parse_wkt_datum_aliases():
    params = parse_wkt(OSGB_ESRI)
    assert params['datum_code'] == 'osgb36'
    assert params['ellps'] == 'Airy_1830'


def test_parse_wkt_polar_stereographic():
    params = parse_wkt(POLAR_STEREO)
    assert params['lat_ts'] == pytest.approx(math.radians(-71))
    assert params['lat0'] == pytest.approx(math.radians(-90))


def test_parse_wkt_prime_meridian_units():
    params = parse_wkt(
        'GEOGCS["NTF (Paris)",DATUM["Nouvelle_Triangulation_Francaise_Paris",'
        'SPHEROID["Clarke 1880 (IGN)",6378249.2,293.4660212936269]],'
        'PRIMEM["Paris",2.5969213],UNIT["grad",0.01570796326794897]]'
    )
    assert params['from_greenwich'] == pytest.approx(2.5969213 * 0.01570796326794897)
    assert params['from_greenwich'] == pytest.approx(math.radians(2.33722917), abs=1e-8)


def test_parse_wkt_extension():
    params = parse_wkt(GOOGLE_EXTENSION)
    assert params['proj4_extension'].startswith('+proj=merc')


def test_parse_wkt_other_roots():
    assert parse_wkt('LOCAL_CS["engineering"]')['proj_name'] == 'identity'

    params = parse_wkt(
        'GEOCCS["WGS 84",DATUM["WGS_1984",SPHEROID["WGS 84",6378137,298.257223563]],'
        'PRIMEM["Greenwich",0],UNIT["metre",1]]'
    )
    assert params['proj_name'] == 'geocent'
    assert params['datum_code'] == 'wgs84'


def test_parse_wkt_mercator_auxiliary_sphere():
    params = parse_wkt(
        'PROJCS["WGS_1984_Web_Mercator_Auxiliary_Sphere",GEOGCS["GCS_WGS_1984",'
        'DATUM["D_WGS_1984",SPHEROID["WGS_1984",6378137.0,298.257223563]],'
        'PRIMEM["Greenwich",0.0],UNIT["Degree",0.0174532925199433]],'
        'PROJECTION["Mercator_Auxiliary_Sphere"],PARAMETER["False_Easting",0.0],'
        'PARAMETER["False_Northing",0.0],PARAMETER["Central_Meridian",0.0],'
        'PARAMETER["Standard_Parallel_1",0.0],PARAMETER["Auxiliary_Sphere_Type",0.0],'
        'UNIT["Meter",1.0]]'
    )
    assert params['force_sphere'] is True
    assert params['datum_code'] == 'wgs84'


@pytest.mark.parametrize('text', [
    'GEOGCS["WGS 84",DATUM["WGS_1984"',
    'GEOGCS["WGS 84]',
    'GEOGCS["WGS 84"]]',
    'GEOGCS["WGS 84" DATUM["x"]]',
    'VERT_CS["height"]',
    'PROJCS["no projection",GEOGCS["x"]]',
    '["missing keyword"]',
])
def test_parse_wkt_malformed(text):
    with pytest.raises(DefinitionError):
        parse_wkt(text)
