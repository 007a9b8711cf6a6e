"""
Pass-through projections: geographic coordinates and local (engineering)
coordinate systems
"""

__all__ = ['Identity', 'LongLat']

from typing import Tuple

from geotransform.projections.base import Projection


class LongLat(Projection):
    """Geographic longitude/latitude; coordinates pass through unchanged"""
    names = ('longlat', 'latlong', 'lonlat', 'latlon')

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        return lon, lat

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        return x, y


class Identity(Projection):
    """A local coordinate system with no relation to the earth"""
    names = ('identity',)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        return lon, lat

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        return x, y
