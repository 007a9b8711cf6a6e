"""
Earth-centered, earth-fixed Cartesian coordinates
"""

__all__ = ['Geocentric']

from typing import Tuple

from geotransform.geocentric import geocentric_to_geodetic, geodetic_to_geocentric
from geotransform.point import Point
from geotransform.projections.base import Projection


class Geocentric(Projection):
    """
    Geocentric X/Y/Z on the definition's ellipsoid. Unlike the map
    projections, the height takes part in both directions.
    """
    names = ('geocent', 'geocentric')

    def forward(self, point: Point) -> Point:
        return geodetic_to_geocentric(point, self.es, self.a)

    def inverse(self, point: Point) -> Point:
        return geocentric_to_geodetic(point, self.es, self.a, self.b)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        out = geodetic_to_geocentric(Point(lon, lat), self.es, self.a)
        return out.x, out.y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        out = geocentric_to_geodetic(Point(x, y), self.es, self.a, self.b)
        return out.x, out.y
