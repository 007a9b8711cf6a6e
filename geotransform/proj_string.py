"""
Parser for PROJ strings, e.g. '+proj=utm +zone=33 +datum=WGS84 +units=m'
"""

__all__ = ['parse_proj_string']

from typing import Any, Callable, Dict, Union

from geotransform._const import D2R
from geotransform.axis import is_valid_axis
from geotransform.conversion import unit_to_meter
from geotransform.errors import DefinitionError
from geotransform.tables import PRIME_MERIDIANS, match_key

_Value = Union[str, bool]
_Setter = Callable[[Dict[str, Any], _Value], None]


def _float(key: str, value: _Value) -> float:
    if isinstance(value, bool):
        raise DefinitionError(f"PROJ parameter '+{key}' requires a value")
    try:
        return float(value)
    except ValueError as exc:
        raise DefinitionError(f"PROJ parameter '+{key}' is not numeric: {value}") from exc


def _text(key: str, value: _Value) -> str:
    if isinstance(value, bool):
        raise DefinitionError(f"PROJ parameter '+{key}' requires a value")
    return value


def _as_float(key: str, name: str) -> _Setter:
    def setter(out: Dict[str, Any], value: _Value):
        out[name] = _float(key, value)
    return setter


def _as_radians(key: str, name: str) -> _Setter:
    def setter(out: Dict[str, Any], value: _Value):
        out[name] = _float(key, value) * D2R
    return setter


def _as_text(key: str, name: str) -> _Setter:
    def setter(out: Dict[str, Any], value: _Value):
        out[name] = _text(key, value)
    return setter


def _as_flag(name: str) -> _Setter:
    def setter(out: Dict[str, Any], _value: _Value):
        out[name] = True
    return setter


def _set_radius(out: Dict[str, Any], value: _Value):
    out['a'] = out['b'] = _float('R', value)


def _set_zone(out: Dict[str, Any], value: _Value):
    try:
        out['zone'] = int(_text('zone', value))
    except ValueError as exc:
        raise DefinitionError(f'UTM zone is not an integer: {value}') from exc


def _set_towgs84(out: Dict[str, Any], value: _Value):
    out['datum_params'] = [_float('towgs84', val) for val in _text('towgs84', value).split(',')]


def _set_units(out: Dict[str, Any], value: _Value):
    units = _text('units', value)
    out['units'] = units
    to_meter = unit_to_meter(units)
    if to_meter is not None:
        out['to_meter'] = to_meter


def _set_prime_meridian(out: Dict[str, Any], value: _Value):
    text = _text('pm', value)
    offset = match_key(PRIME_MERIDIANS, text)
    out['from_greenwich'] = (_float('pm', text) if offset is None else offset) * D2R


def _set_nadgrids(out: Dict[str, Any], value: _Value):
    grids = _text('nadgrids', value)
    if grids == '@null':
        out['datum_code'] = 'none'
    else:
        out['nadgrids'] = grids


def _set_axis(out: Dict[str, Any], value: _Value):
    axis = _text('axis', value)
    if is_valid_axis(axis):
        out['axis'] = axis


_PARAMETERS: Dict[str, _Setter] = {
    'proj': _as_text('proj', 'proj_name'),
    'datum': _as_text('datum', 'datum_code'),
    'ellps': _as_text('ellps', 'ellps'),
    'title': _as_text('title', 'title'),
    'rf': _as_float('rf', 'rf'),
    'lat_0': _as_radians('lat_0', 'lat0'),
    'lat_1': _as_radians('lat_1', 'lat1'),
    'lat_2': _as_radians('lat_2', 'lat2'),
    'lat_ts': _as_radians('lat_ts', 'lat_ts'),
    'lon_0': _as_radians('lon_0', 'long0'),
    'lon_1': _as_radians('lon_1', 'long1'),
    'lon_2': _as_radians('lon_2', 'long2'),
    'lonc': _as_radians('lonc', 'longc'),
    'alpha': _as_radians('alpha', 'alpha'),
    'gamma': _as_float('gamma', 'rectified_grid_angle'),
    'x_0': _as_float('x_0', 'x0'),
    'y_0': _as_float('y_0', 'y0'),
    'k_0': _as_float('k_0', 'k0'),
    'k': _as_float('k', 'k0'),
    'a': _as_float('a', 'a'),
    'b': _as_float('b', 'b'),
    'r': _set_radius,
    'r_a': _as_flag('r_a'),
    'zone': _set_zone,
    'south': _as_flag('utm_south'),
    'towgs84': _set_towgs84,
    'to_meter': _as_float('to_meter', 'to_meter'),
    'units': _set_units,
    'from_greenwich': _as_radians('from_greenwich', 'from_greenwich'),
    'pm': _set_prime_meridian,
    'nadgrids': _set_nadgrids,
    'axis': _set_axis,
    'approx': _as_flag('approx'),
}


def parse_proj_string(text: str) -> Dict[str, Any]:
    """
    Parses a PROJ string into a normalized parameter mapping.

    Angles are converted from degrees to radians. Unrecognized parameters
    are kept verbatim under their lower-cased name; parameters given without
    a value become True.

    Args:
        text:
            The PROJ string

    Returns:
        The normalized parameters

    Raises:
        DefinitionError: if a numeric parameter has no or a non-numeric value
    """
    raw: Dict[str, _Value] = {}
    for token in text.split('+'):
        token = token.strip()
        if not token:
            continue

        key, sep, value = token.partition('=')
        raw[key.strip().lower()] = value.strip() if sep else True

    out: Dict[str, Any] = {}
    for key, value in raw.items():
        setter = _PARAMETERS.get(key)
        if setter is None:
            out[key] = value
        else:
            setter(out, value)

    datum_code = out.get('datum_code')
    if isinstance(datum_code, str) and datum_code != 'WGS84':
        out['datum_code'] = datum_code.lower()

    if 'proj_name' not in out:
        raise DefinitionError(f"PROJ string has no '+proj' parameter: {text}")

    return out
