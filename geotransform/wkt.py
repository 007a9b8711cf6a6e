"""
Parser for OGC Well-Known Text (WKT1) coordinate reference system
definitions, e.g. 'PROJCS["NAD83 / UTM zone 15N", GEOGCS[...], ...]'
"""

__all__ = ['WktNode', 'WKT_KEYWORDS', 'is_wkt', 'parse_wkt', 'read_wkt']

import re
from typing import Any, Dict, List, NamedTuple, Optional, Union

from geotransform._const import D2R
from geotransform.errors import DefinitionError

WKT_KEYWORDS = ('PROJCS', 'GEOGCS', 'GEOCCS', 'LOCAL_CS')

_TOKEN_RE = re.compile(
    r'\s*(?:'
    r'(?P<string>"(?:[^"]|"")*")|'
    r'(?P<open>[\[(])|'
    r'(?P<close>[\])])|'
    r'(?P<comma>,)|'
    r'(?P<word>[^\s,\[\]()"]+)'
    r')'
)

_PROJ_TYPES = {
    'GEOGCS': 'longlat',
    'LOCAL_CS': 'identity',
    'GEOCCS': 'geocent',
}

# normalized parameter name -> (field, kind); first match wins per field
_PARAMETERS = (
    ('latitude_of_center', 'lat0', 'angle'),
    ('latitude_of_origin', 'lat0', 'angle'),
    ('central_parallel', 'lat0', 'angle'),
    ('latitude_of_natural_origin', 'lat0', 'angle'),
    ('latitude_of_false_origin', 'lat0', 'angle'),
    ('standard_parallel_1', 'lat0', 'angle'),
    ('latitude_of_1st_standard_parallel', 'lat0', 'angle'),
    ('standard_parallel_1', 'lat1', 'angle'),
    ('latitude_of_1st_standard_parallel', 'lat1', 'angle'),
    ('standard_parallel_2', 'lat2', 'angle'),
    ('latitude_of_2nd_standard_parallel', 'lat2', 'angle'),
    ('central_meridian', 'long0', 'angle'),
    ('longitude_of_natural_origin', 'long0', 'angle'),
    ('longitude_of_false_origin', 'long0', 'angle'),
    ('longitude_of_origin', 'long0', 'angle'),
    ('longitude_of_center', 'longc', 'angle'),
    ('azimuth', 'alpha', 'angle'),
    ('rectified_grid_angle', 'rectified_grid_angle', 'number'),
    ('scale_factor', 'k0', 'number'),
    ('scale_factor_at_natural_origin', 'k0', 'number'),
    ('false_easting', 'x0', 'length'),
    ('easting_at_false_origin', 'x0', 'length'),
    ('false_northing', 'y0', 'length'),
    ('northing_at_false_origin', 'y0', 'length'),
)

_DATUM_ALIASES = {
    'new_zealand_1949': 'nzgd49',
    'wgs_1984': 'wgs84',
    'world_geodetic_system_1984': 'wgs84',
    'belge_1972': 'rnb72',
    'ch1903+': 'ch1903',
}

_DATUM_FRAGMENTS = (
    ('osgb_1936', 'osgb36'),
    ('osni_1952', 'osni52'),
    ('tm65', 'ire65'),
    ('geodetic_datum_of_1965', 'ire65'),
)


class WktNode(NamedTuple):
    """A keyword and its bracketed arguments"""
    keyword: str
    args: List[Union[str, float, 'WktNode']]

    def child(self, keyword: str) -> Optional['WktNode']:
        """The first child node with the given keyword"""
        for arg in self.args:
            if isinstance(arg, WktNode) and arg.keyword == keyword:
                return arg
        return None

    def children(self, keyword: str) -> List['WktNode']:
        return [
            arg for arg in self.args
            if isinstance(arg, WktNode) and arg.keyword == keyword
        ]

    @property
    def name(self) -> str:
        """The node's first argument, conventionally its name"""
        if self.args and isinstance(self.args[0], str):
            return self.args[0]
        return ''

    def number(self, index: int) -> float:
        try:
            value = self.args[index]
        except IndexError as exc:
            raise DefinitionError(f'{self.keyword} is missing argument {index + 1}') from exc

        if isinstance(value, WktNode):
            raise DefinitionError(f'{self.keyword} argument {index + 1} must be a number')
        try:
            return float(value)
        except ValueError as exc:
            raise DefinitionError(
                f'{self.keyword} argument {index + 1} is not numeric: {value}'
            ) from exc


class _Reader:
    """Recursive-descent reader over WKT tokens"""

    def __init__(self, text: str):
        self.tokens = []
        pos = 0
        text = text.strip()
        while pos < len(text):
            match = _TOKEN_RE.match(text, pos)
            if match is None or match.end() == pos:
                raise DefinitionError(f'Unexpected character in WKT at position {pos}')
            kind = match.lastgroup
            self.tokens.append((kind, match.group(kind)))
            pos = match.end()
        self.index = 0

    def _next(self):
        if self.index >= len(self.tokens):
            raise DefinitionError('Unexpected end of WKT; unbalanced brackets?')
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _peek(self):
        if self.index >= len(self.tokens):
            return None, None
        return self.tokens[self.index]

    def read(self) -> WktNode:
        node = self._node()
        if self.index != len(self.tokens):
            raise DefinitionError('Unexpected content after the end of the WKT')
        return node

    def _node(self) -> WktNode:
        kind, value = self._next()
        if kind != 'word':
            raise DefinitionError(f'Expected a WKT keyword, found {value!r}')
        kind, _ = self._next()
        if kind != 'open':
            raise DefinitionError(f'Expected an opening bracket after {value}')
        return WktNode(value.upper(), self._args())

    def _args(self) -> List[Any]:
        args: List[Any] = []
        kind, value = self._peek()
        if kind == 'close':
            self._next()
            return args

        while True:
            kind, value = self._peek()
            if kind == 'string':
                self._next()
                args.append(value[1:-1].replace('""', '"'))
            elif kind == 'word':
                following = (
                    self.tokens[self.index + 1][0]
                    if self.index + 1 < len(self.tokens) else None
                )
                if following == 'open':
                    args.append(self._node())
                else:
                    self._next()
                    args.append(_number_or_word(value))
            else:
                raise DefinitionError(f'Unexpected token in WKT: {value!r}')

            kind, value = self._next()
            if kind == 'close':
                return args
            if kind != 'comma':
                raise DefinitionError(f'Expected a comma or closing bracket, found {value!r}')


def _number_or_word(value: str) -> Union[str, float]:
    try:
        return float(value)
    except ValueError:
        return value


def is_wkt(text: str) -> bool:
    """Whether a string looks like a WKT definition"""
    return any(keyword in text for keyword in WKT_KEYWORDS)


def read_wkt(text: str) -> WktNode:
    """Tokenizes and reads a WKT string into its node tree"""
    return _Reader(text).read()


def _normalize_param(name: str) -> str:
    return re.sub(r'[\s\-]+', '_', name.strip().lower())


def _axis_order(axes: List[WktNode]) -> Optional[str]:
    order = ''
    for axis in axes:
        name = axis.name.lower()
        direction = str(axis.args[1]).lower() if len(axis.args) > 1 else ''
        if 'north' in name or (name in ('y', 'lat') and direction == 'north'):
            order += 'n'
        elif 'south' in name or (name in ('y', 'lat') and direction == 'south'):
            order += 's'
        elif 'east' in name or (name in ('x', 'lon') and direction == 'east'):
            order += 'e'
        elif 'west' in name or (name in ('x', 'lon') and direction == 'west'):
            order += 'w'
        elif direction in ('north', 'south', 'east', 'west'):
            order += direction[0]

    if len(order) == 2:
        order += 'u'
    return order if len(order) == 3 else None


def _datum_code(name: str) -> str:
    code = name.lower()
    if code.startswith('d_'):
        code = code[2:]
    code = _DATUM_ALIASES.get(code, code)
    for fragment, alias in _DATUM_FRAGMENTS:
        if fragment in code:
            code = alias
    return code


def _ellipsoid_name(name: str) -> str:
    ellps = re.sub(r'[Cc]larke_18', 'clrk', name.replace('_19', ''))
    if ellps.lower().startswith('international'):
        ellps = 'intl'
    return ellps


def _clean(root: WktNode) -> Dict[str, Any]:
    out: Dict[str, Any] = {'srs_code': root.name, 'title': root.name}

    if root.keyword in _PROJ_TYPES:
        out['proj_name'] = _PROJ_TYPES[root.keyword]
    else:
        projection = root.child('PROJECTION')
        if projection is None or not projection.name:
            raise DefinitionError(f'WKT {root.keyword} has no PROJECTION')
        out['proj_name'] = projection.name
        out['wkt_projection'] = projection.name

    axis = _axis_order(root.children('AXIS'))
    if axis:
        out['axis'] = axis

    geogcs = root if root.keyword in ('GEOGCS', 'GEOCCS') else root.child('GEOGCS')
    datum = geogcs.child('DATUM') if geogcs is not None else None
    spheroid = datum.child('SPHEROID') if datum is not None else None

    unit = root.child('UNIT')
    if unit is not None:
        units = unit.name.lower()
        out['units'] = 'meter' if units == 'metre' else units
        if len(unit.args) > 1:
            if root.keyword == 'GEOGCS':
                if spheroid is not None:
                    out['to_meter'] = unit.number(1) * spheroid.number(1)
            else:
                out['to_meter'] = unit.number(1)

    if geogcs is not None:
        out['datum_code'] = _datum_code(datum.name if datum is not None else geogcs.name)
        if (
            out['datum_code'] == 'wgs84'
            and out.get('wkt_projection') == 'Mercator_Auxiliary_Sphere'
        ):
            out['force_sphere'] = True

        if spheroid is not None:
            out['ellps'] = _ellipsoid_name(spheroid.name)
            out['a'] = spheroid.number(1)
            out['rf'] = spheroid.number(2)

        towgs84 = datum.child('TOWGS84') if datum is not None else None
        if towgs84 is not None:
            out['datum_params'] = [towgs84.number(i) for i in range(len(towgs84.args))]

        primem = geogcs.child('PRIMEM')
        if primem is not None and len(primem.args) > 1:
            geog_unit = geogcs.child('UNIT')
            radians_per_unit = (
                geog_unit.number(1) if geog_unit is not None and len(geog_unit.args) > 1
                else D2R
            )
            out['from_greenwich'] = primem.number(1) * radians_per_unit

    params = {
        _normalize_param(node.name): node.number(1)
        for node in root.children('PARAMETER')
    }
    to_meter = out.get('to_meter') or 1.0
    for param, field, kind in _PARAMETERS:
        if field in out or param not in params:
            continue
        value = params[param]
        if kind == 'angle':
            value *= D2R
        elif kind == 'length':
            value *= to_meter
        out[field] = value

    projection_name = out.get('wkt_projection', '')
    if 'long0' not in out and 'longc' in out and projection_name in (
        'Albers_Conic_Equal_Area', 'Lambert_Azimuthal_Equal_Area'
    ):
        out['long0'] = out['longc']

    if 'lat_ts' not in out and 'lat1' in out and projection_name in (
        'Stereographic_South_Pole', 'Polar Stereographic (variant B)'
    ):
        out['lat0'] = D2R * (90 if out['lat1'] > 0 else -90)
        out['lat_ts'] = out['lat1']
    elif 'lat_ts' not in out and out.get('lat0') and projection_name == 'Polar_Stereographic':
        out['lat_ts'] = out['lat0']
        out['lat0'] = D2R * (90 if out['lat0'] > 0 else -90)

    authority = root.child('AUTHORITY')
    if authority is not None and len(authority.args) > 1:
        out['authority'] = (str(authority.args[0]).upper(), _code_text(authority.args[1]))

    extension = root.child('EXTENSION')
    if extension is not None and extension.name.upper() == 'PROJ4' and len(extension.args) > 1:
        out['proj4_extension'] = str(extension.args[1])

    return out


def _code_text(value: Union[str, float, WktNode]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_wkt(text: str) -> Dict[str, Any]:
    """
    Parses a WKT1 definition into a normalized parameter mapping.

    Angles are converted to radians and false easting/northing to meters.
    Keywords that carry nothing the transformation needs are ignored.

    Args:
        text:
            The WKT string

    Returns:
        The normalized parameters. 'authority' holds the (authority, code)
        pair and 'proj4_extension' an embedded PROJ string, when present.

    Raises:
        DefinitionError: if the text is malformed or is not a supported CRS
    """
    root = read_wkt(text)
    if root.keyword not in WKT_KEYWORDS:
        raise DefinitionError(f'Unsupported WKT root keyword: {root.keyword}')
    return _clean(root)
