"""
Mercator projection, including the spherical Web Mercator variant
"""

__all__ = ['Mercator']

import math
from typing import Tuple

from geotransform._const import EPSLN, FORTPI, HALF_PI
from geotransform._math import adjust_lon, msfnz, phi2z, tsfnz
from geotransform.errors import DomainError
from geotransform.projections.base import Projection


class Mercator(Projection):
    """
    Normal aspect Mercator. A latitude of true scale (lat_ts) overrides
    the scale factor.
    """
    names = (
        'merc', 'mercator', 'Mercator_1SP', 'Mercator_2SP', 'Mercator_Auxiliary_Sphere',
        'Mercator_Variant_A', 'Mercator_Variant_B', 'Popular Visualisation Pseudo Mercator',
        'Pseudo-Mercator',
    )

    def init(self):
        if self.lat_ts:
            if self.sphere:
                self.k0 = math.cos(self.lat_ts)
            else:
                self.k0 = msfnz(self.e, math.sin(self.lat_ts), math.cos(self.lat_ts))

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        if abs(abs(lat) - HALF_PI) <= EPSLN:
            raise DomainError('Mercator is undefined at the poles')

        x = self.x0 + self.a * self.k0 * adjust_lon(lon - self.long0)
        if self.sphere:
            y = self.y0 + self.a * self.k0 * math.log(math.tan(FORTPI + 0.5 * lat))
        else:
            ts = tsfnz(self.e, lat, math.sin(lat))
            y = self.y0 - self.a * self.k0 * math.log(ts)

        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y -= self.y0

        if self.sphere:
            lat = HALF_PI - 2 * math.atan(math.exp(-y / (self.a * self.k0)))
        else:
            ts = math.exp(-y / (self.a * self.k0))
            lat = phi2z(self.e, ts)

        lon = adjust_lon(self.long0 + x / (self.a * self.k0))
        return lon, lat
