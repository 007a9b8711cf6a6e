"""
Exceptions raised by geotransform.

Every exception derives from GeoTransformError, which itself derives from
ValueError so that callers catching ValueError keep working.
"""

__all__ = [
    'AxisError', 'ConvergenceError', 'DefinitionError', 'DomainError',
    'GeoTransformError', 'GridShiftError', 'UnknownProjectionError'
]

from typing import Optional


class GeoTransformError(ValueError):
    """Base class for all geotransform errors"""

    error_code = 'GEOTRANSFORM_ERROR'

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        return self.message


class DefinitionError(GeoTransformError):
    """A CRS definition could not be parsed or resolved"""

    error_code = 'DEFINITION_ERROR'


class UnknownProjectionError(DefinitionError):
    """No projection is registered under the requested name"""

    error_code = 'UNKNOWN_PROJECTION'


class AxisError(DefinitionError):
    """An axis order code is not valid"""

    error_code = 'AXIS_ERROR'


class DomainError(GeoTransformError):
    """A coordinate is outside the domain of an operation"""

    error_code = 'DOMAIN_ERROR'


class ConvergenceError(GeoTransformError):
    """An iterative solver failed to converge"""

    error_code = 'CONVERGENCE_ERROR'


class GridShiftError(GeoTransformError):
    """A required grid is unavailable or does not cover the point"""

    error_code = 'GRID_SHIFT_ERROR'
