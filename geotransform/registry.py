"""
Named CRS definitions, registered grids and the error hook.

A registry is an explicit object; `default_registry()` returns a shared one,
created on first use, that the module-level helpers fall back on.
"""

__all__ = ['CrsRegistry', 'default_registry', 'normalize_code']

import copy
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from typing_extensions import Self

from geotransform.errors import DefinitionError, GeoTransformError
from geotransform.gridshift import GridShiftTable, decode_ntv2
from geotransform.proj_string import parse_proj_string
from geotransform.utils.logging import LOGGER
from geotransform.utils.mixins import LoggingMixin
from geotransform.wkt import is_wkt, parse_wkt

ErrorHandler = Callable[[GeoTransformError], None]

_URN_RE = re.compile(
    r'^urn:ogc:def:crs:(?P<auth>[a-z0-9]+):(?P<version>[^:]*):(?P<code>[^:]+)$',
    re.IGNORECASE
)
_URL_RE = re.compile(
    r'^https?://www\.opengis\.net/def/crs/(?P<auth>[^/]+)/(?P<version>[^/]+)/(?P<code>[^/]+)/?$',
    re.IGNORECASE
)
_AUTH_RE = re.compile(
    r'^(?P<auth>epsg|esri|iau2000|ogc|crs)\s*:\s*(?P<code>[^:\s]+)$',
    re.IGNORECASE
)
_EPSG_VERSIONED_RE = re.compile(r'^epsg:[^:]*:(?P<code>\d+)$', re.IGNORECASE)

_CRS84_CODES = ('CRS84', '84')

_BUILTIN_DEFINITIONS = {
    'EPSG:4326': '+title=WGS 84 (long/lat) +proj=longlat +ellps=WGS84 +datum=WGS84 +units=degrees',
    'EPSG:4269': (
        '+title=NAD83 (long/lat) +proj=longlat +a=6378137.0 +b=6356752.31414036 '
        '+ellps=GRS80 +datum=NAD83 +units=degrees'
    ),
    'EPSG:3857': (
        '+title=WGS 84 / Pseudo-Mercator +proj=merc +a=6378137 +b=6378137 +lat_ts=0.0 '
        '+lon_0=0.0 +x_0=0.0 +y_0=0 +k=1.0 +units=m +nadgrids=@null +no_defs'
    ),
}

_BUILTIN_ALIASES = {
    'WGS84': 'EPSG:4326',
    'EPSG:3785': 'EPSG:3857',
    'GOOGLE': 'EPSG:3857',
    'EPSG:900913': 'EPSG:3857',
    'EPSG:102113': 'EPSG:3857',
}


def normalize_code(code: str) -> str:
    """
    Rewrites the accepted spellings of an authority code to 'AUTH:code'.

    'EPSG:4326', 'urn:ogc:def:crs:EPSG::4326',
    'http://www.opengis.net/def/crs/EPSG/0/4326' and 'EPSG:9.9:4326' all
    become 'EPSG:4326'. OGC CRS84 becomes 'WGS84'. Anything else is
    returned stripped.

    Args:
        code:
            The code

    Returns:
        The normalized code
    """
    code = code.strip()
    versioned = _EPSG_VERSIONED_RE.match(code)
    if versioned:
        return f"EPSG:{versioned.group('code')}"

    for regex in (_URN_RE, _URL_RE, _AUTH_RE):
        match = regex.match(code)
        if not match:
            continue

        auth = match.group('auth').upper()
        number = match.group('code')
        if auth in ('OGC', 'CRS') and number.upper() in _CRS84_CODES:
            return 'WGS84'
        return f'{auth}:{number}'

    return code


def _log_error(error: GeoTransformError):
    LOGGER.error(str(error))


def _parse_text(text: str) -> Dict[str, Any]:
    text = text.strip()
    if is_wkt(text):
        params = parse_wkt(text)
        if params.get('proj4_extension'):
            return parse_proj_string(params['proj4_extension'])
        return params

    if text.startswith('+'):
        return parse_proj_string(text)

    raise DefinitionError(f'Definition is neither a PROJ string nor WKT: {text!r}')


class CrsRegistry(LoggingMixin):
    """
    Holds named CRS definitions and grid shift tables.

    Definitions are stored as normalized parameter mappings under the code
    they were defined with; lookups also try the normalized form of the
    code, so 'urn:ogc:def:crs:EPSG::4326' finds 'EPSG:4326'.

    Args:
        include_builtins: (Default True)
            Whether to start with the built-in definitions (EPSG:4326,
            EPSG:4269, EPSG:3857 and their aliases, and the WGS84 UTM zones
            EPSG:32601-32660 and EPSG:32701-32760)
    """

    def __init__(self, include_builtins: bool = True):
        super().__init__()
        self._definitions: Dict[str, Dict[str, Any]] = {}
        self._grids: Dict[str, Tuple[GridShiftTable, ...]] = {}
        self._error_handler: ErrorHandler = _log_error

        if include_builtins:
            self._install_builtins()

    def _install_builtins(self):
        for code, text in _BUILTIN_DEFINITIONS.items():
            self.define(code, text)

        for alias, code in _BUILTIN_ALIASES.items():
            self.alias(alias, code)

        for zone in range(1, 61):
            self.define(f'EPSG:{32600 + zone}', f'+proj=utm +zone={zone} +datum=WGS84 +units=m')
            self.define(
                f'EPSG:{32700 + zone}', f'+proj=utm +zone={zone} +south +datum=WGS84 +units=m'
            )

    def __contains__(self, code: str) -> bool:
        return self.lookup(code) is not None

    def __len__(self) -> int:
        return len(self._definitions)

    def codes(self) -> List[str]:
        """The codes of every stored definition"""
        return list(self._definitions)

    def define(self, code: str, definition: Union[str, Mapping[str, Any]]) -> Self:
        """
        Stores a definition under a code, replacing any previous one.

        Args:
            code:
                The name to store the definition under, e.g. 'EPSG:26915'

            definition:
                A PROJ string, a WKT string or a parameter mapping

        Returns:
            The registry itself
        """
        if isinstance(definition, str):
            params = _parse_text(definition)
        elif isinstance(definition, Mapping):
            params = dict(definition)
        else:
            raise DefinitionError(f'Cannot define {code!r} from {type(definition).__name__}')

        params.setdefault('srs_code', code)
        if code in self._definitions:
            self.logger.debug('Redefining %s', code)

        self._definitions[code] = params
        return self

    def define_many(self, entries: Iterable[Tuple[str, Union[str, Mapping[str, Any]]]]) -> Self:
        """Stores several (code, definition) pairs"""
        for code, definition in entries:
            self.define(code, definition)
        return self

    def alias(self, code: str, existing: str) -> Self:
        """
        Makes `code` refer to the same definition as `existing`.

        Raises:
            DefinitionError: if `existing` is not defined
        """
        params = self.lookup(existing)
        if params is None:
            raise DefinitionError(f'Cannot alias {code!r}: {existing!r} is not defined')

        self._definitions[code] = params
        return self

    def lookup(self, code: str) -> Optional[Dict[str, Any]]:
        """
        Returns a copy of the parameters stored under a code or under its
        normalized form, or None.
        """
        params = self._definitions.get(code)
        if params is None:
            params = self._definitions.get(normalize_code(code))
        if params is None:
            return None
        return dict(params)

    def register_grid(
        self,
        name: str,
        grid: Union[bytes, GridShiftTable, Sequence[GridShiftTable]]
    ) -> Self:
        """
        Registers grid shift tables under a name, for use by '+nadgrids'.

        Args:
            name:
                The grid name, as it appears in '+nadgrids'

            grid:
                An NTv2 file's contents, a table, or a sequence of tables
                (subgrids), searched in order

        Returns:
            The registry itself
        """
        if isinstance(grid, (bytes, bytearray, memoryview)):
            tables = tuple(decode_ntv2(bytes(grid)))
        elif isinstance(grid, GridShiftTable):
            tables = (grid,)
        else:
            tables = tuple(grid)

        if not tables:
            raise DefinitionError(f'Grid {name!r} has no tables')

        self._grids[name] = tables
        self.logger.debug('Registered grid %s with %d table(s)', name, len(tables))
        return self

    def get_grid(self, name: str) -> Optional[Tuple[GridShiftTable, ...]]:
        """The tables registered under a name, or None"""
        return self._grids.get(name)

    def set_error_handler(self, handler: Optional[ErrorHandler]) -> Self:
        """
        Sets the function called with every error raised while transforming.
        The error is still raised afterwards. None restores the default,
        which logs the error.
        """
        self._error_handler = handler or _log_error
        return self

    def report_error(self, error: GeoTransformError):
        """Passes an error to the error handler"""
        self._error_handler(error)

    def copy(self) -> Self:
        """An independent registry with the same definitions, grids and handler"""
        new = self.__class__(include_builtins=False)
        new._definitions = copy.deepcopy(self._definitions)
        new._grids = dict(self._grids)
        new._error_handler = self._error_handler
        return new


_DEFAULT_REGISTRY: Optional[CrsRegistry] = None


def default_registry() -> CrsRegistry:
    """The shared registry, created with the built-in definitions on first use"""
    global _DEFAULT_REGISTRY  # pylint: disable=global-statement
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = CrsRegistry()
    return _DEFAULT_REGISTRY
