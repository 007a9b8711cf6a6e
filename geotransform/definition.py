"""
The normalized CRS definition record and the derivation of its constants
from parsed parameters
"""

__all__ = ['CrsDefinition', 'build_definition', 'parse_definition']

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from geotransform.datum import Datum, build_datum
from geotransform.ellipsoid import Ellipsoid
from geotransform.errors import DefinitionError
from geotransform.gridshift import parse_grid_names
from geotransform.proj_string import parse_proj_string
from geotransform.tables import DATUMS, ELLIPSOIDS, match_key
from geotransform.utils.logging import warn_once
from geotransform.wkt import is_wkt, parse_wkt

if TYPE_CHECKING:
    from geotransform.registry import CrsRegistry

_WEB_MERCATOR_CODES = ('3857', '900913', '3785', '102113')

# Parsed keys consumed into dedicated fields; everything else lands in extras
_KNOWN_KEYS = {
    'proj_name', 'datum_code', 'datum_params', 'nadgrids', 'ellps', 'a', 'b',
    'rf', 'r_a', 'force_sphere', 'x0', 'y0', 'k0', 'lat0', 'lat1', 'lat2',
    'lat_ts', 'long0', 'long1', 'long2', 'longc', 'alpha',
    'rectified_grid_angle', 'from_greenwich', 'to_meter', 'units', 'axis',
    'zone', 'utm_south', 'title', 'srs_code', 'approx',
}


@dataclass(frozen=True)
class CrsDefinition:  # pylint: disable=too-many-instance-attributes
    """
    A CRS definition with every parameter normalized: angles in radians,
    lengths in meters, defaults applied and the ellipsoid and datum
    resolved.
    """
    proj_name: str
    ellipsoid: Ellipsoid
    datum: Datum
    x0: float = 0.
    y0: float = 0.
    k0: float = 1.
    lat0: float = 0.
    lat1: float = 0.
    lat2: Optional[float] = None
    lat_ts: Optional[float] = None
    long0: float = 0.
    long1: Optional[float] = None
    long2: Optional[float] = None
    longc: Optional[float] = None
    alpha: Optional[float] = None
    rectified_grid_angle: Optional[float] = None
    from_greenwich: float = 0.
    to_meter: Optional[float] = None
    units: Optional[str] = None
    axis: str = 'enu'
    zone: Optional[int] = None
    utm_south: bool = False
    datum_code: Optional[str] = None
    datum_name: Optional[str] = None
    ellps: Optional[str] = None
    sphere: bool = False
    approx: bool = False
    title: Optional[str] = None
    srs_code: Optional[str] = None
    extras: Mapping[str, Any] = field(default_factory=dict)

    @property
    def a(self) -> float:
        return self.ellipsoid.a

    @property
    def b(self) -> float:
        return self.ellipsoid.b

    @property
    def es(self) -> float:
        return self.ellipsoid.es

    @property
    def e(self) -> float:
        return self.ellipsoid.e

    @property
    def ep2(self) -> float:
        return self.ellipsoid.ep2

    @property
    def rf(self) -> Optional[float]:
        return self.ellipsoid.rf

    def has(self, key: str) -> bool:
        """Whether a parameter was given, including unrecognized ones"""
        if key in self.extras:
            return True
        return getattr(self, key, None) is not None


def _optional_float(params: Mapping[str, Any], key: str) -> Optional[float]:
    value = params.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise DefinitionError(f"Parameter '{key}' is not numeric: {value}") from exc


def _build_ellipsoid(params: Mapping[str, Any], ellps: str) -> Ellipsoid:
    r_a = bool(params.get('r_a'))
    a = _optional_float(params, 'a')
    if a:
        return Ellipsoid.derive(
            a, _optional_float(params, 'b'), _optional_float(params, 'rf'), r_a=r_a, name=ellps
        )

    if match_key(ELLIPSOIDS, ellps) is None:
        warn_once(f'Unknown ellipsoid {ellps!r}; using WGS84')
        ellps = 'WGS84'
    return Ellipsoid.from_name(ellps, r_a=r_a)


def build_definition(
    params: Mapping[str, Any],
    registry: Optional['CrsRegistry'] = None
) -> CrsDefinition:
    """
    Derives a CrsDefinition from parsed parameters: resolves datum and
    ellipsoid names, computes the eccentricities, applies defaults and
    resolves grid names against the registry.

    Args:
        params:
            Normalized parameters, as produced by parse_proj_string(),
            parse_wkt() or a registry lookup

        registry: (Optional)
            Where to look up grids. Without one, every grid counts as
            unavailable.

    Returns:
        CrsDefinition
    """
    proj_name = params.get('proj_name')
    if not proj_name:
        raise DefinitionError('Definition has no projection name')

    datum_code = params.get('datum_code')
    datum_params = params.get('datum_params')
    nadgrids = params.get('nadgrids')
    ellps = params.get('ellps')
    datum_name = None

    if datum_code and datum_code != 'none':
        datum_def = match_key(DATUMS, datum_code)
        if datum_def is not None:
            if not datum_params and datum_def.get('towgs84'):
                datum_params = datum_def['towgs84'].split(',')
            nadgrids = nadgrids or datum_def.get('nadgrids')
            ellps = datum_def['ellipse']
            datum_name = datum_def.get('name', datum_code)

    ellps = ellps or 'WGS84'
    ellipsoid = _build_ellipsoid(params, ellps)

    grids = ()
    if nadgrids:
        resolve = registry.get_grid if registry is not None else (lambda _name: None)
        grids = parse_grid_names(nadgrids, resolve)

    datum = build_datum(ellipsoid, datum_code, datum_params, grids)

    lat0 = _optional_float(params, 'lat0') or 0.
    zone = params.get('zone')

    return CrsDefinition(
        proj_name=str(proj_name),
        ellipsoid=ellipsoid,
        datum=datum,
        x0=_optional_float(params, 'x0') or 0.,
        y0=_optional_float(params, 'y0') or 0.,
        k0=_optional_float(params, 'k0') or 1.,
        lat0=lat0,
        lat1=_optional_float(params, 'lat1') or lat0,
        lat2=_optional_float(params, 'lat2'),
        lat_ts=_optional_float(params, 'lat_ts'),
        long0=_optional_float(params, 'long0') or 0.,
        long1=_optional_float(params, 'long1'),
        long2=_optional_float(params, 'long2'),
        longc=_optional_float(params, 'longc'),
        alpha=_optional_float(params, 'alpha'),
        rectified_grid_angle=_optional_float(params, 'rectified_grid_angle'),
        from_greenwich=_optional_float(params, 'from_greenwich') or 0.,
        to_meter=_optional_float(params, 'to_meter'),
        units=params.get('units'),
        axis=params.get('axis') or 'enu',
        zone=None if zone is None else int(zone),
        utm_south=bool(params.get('utm_south')),
        datum_code=datum_code,
        datum_name=datum_name,
        ellps=ellps,
        sphere=ellipsoid.sphere or bool(params.get('force_sphere')),
        approx=bool(params.get('approx')),
        title=params.get('title'),
        srs_code=params.get('srs_code'),
        extras={key: val for key, val in params.items() if key not in _KNOWN_KEYS},
    )


def parse_definition(
    code: Union[str, Mapping[str, Any]],
    registry: 'CrsRegistry'
) -> Dict[str, Any]:
    """
    Turns a CRS reference into normalized parameters.

    Accepts a name or authority code known to the registry, a WKT string, a
    PROJ string or an already-normalized parameter mapping.

    Args:
        code:
            The CRS reference

        registry:
            The registry holding named definitions

    Returns:
        The normalized parameters

    Raises:
        DefinitionError: if the reference cannot be interpreted
    """
    if isinstance(code, Mapping):
        return dict(code)

    if not isinstance(code, str):
        raise DefinitionError(f'Cannot interpret {code!r} as a CRS definition')

    text = code.strip()
    known = registry.lookup(text)
    if known is not None:
        return known

    if is_wkt(text):
        params = parse_wkt(text)
        authority = params.get('authority')
        if authority and authority[0] == 'EPSG' and authority[1] in _WEB_MERCATOR_CODES:
            web_mercator = registry.lookup('EPSG:3857')
            if web_mercator is not None:
                return web_mercator

        if params.get('proj4_extension'):
            return parse_proj_string(params['proj4_extension'])

        return params

    if text.startswith('+'):
        return parse_proj_string(text)

    raise DefinitionError(f'Unknown CRS definition: {code!r}')
