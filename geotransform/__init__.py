
from geotransform._version import __version__  # noqa: F401
from geotransform.utils.logging import LOGGER
from geotransform.errors import (
    AxisError, ConvergenceError, DefinitionError, DomainError, GeoTransformError,
    GridShiftError, UnknownProjectionError
)
from geotransform.point import Point
from geotransform.gridshift import GridShiftTable, decode_ntv2
from geotransform.registry import CrsRegistry, default_registry
from geotransform.crs import Crs, parse
from geotransform.transform import Transformer, transform


__all__ = [
    'AxisError',
    'ConvergenceError',
    'Crs',
    'CrsRegistry',
    'DefinitionError',
    'DomainError',
    'GeoTransformError',
    'GridShiftError',
    'GridShiftTable',
    'Point',
    'Transformer',
    'UnknownProjectionError',
    'decode_ntv2',
    'default_registry',
    'parse',
    'transform',
    'LOGGER',
]
