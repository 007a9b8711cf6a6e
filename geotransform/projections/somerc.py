"""
Swiss oblique Mercator (the "Swiss grid")
"""

__all__ = ['SwissObliqueMercator']

import math
from typing import Tuple

from geotransform._const import SWISS_MAX_ITER
from geotransform.errors import ConvergenceError
from geotransform.projections.base import Projection


class SwissObliqueMercator(Projection):
    """
    Oblique Mercator through a Gauss sphere, as defined by swisstopo for
    the CH1903 and CH1903+ grids.
    """
    names = ('somerc', 'Swiss_Oblique_Mercator', 'Hotine_Oblique_Mercator_Azimuth_Center_Swiss')

    def init(self):
        phy0 = self.lat0
        self.lambda0 = self.long0
        sin_phy0 = math.sin(phy0)
        e2 = self.es

        self.r = self.k0 * self.a * math.sqrt(1 - e2) / (1 - e2 * math.pow(sin_phy0, 2))
        self.sphere_alpha = math.sqrt(1 + e2 / (1 - e2) * math.pow(math.cos(phy0), 4))
        self.b0 = math.asin(sin_phy0 / self.sphere_alpha)

        k1 = math.log(math.tan(math.pi / 4 + self.b0 / 2))
        k2 = math.log(math.tan(math.pi / 4 + phy0 / 2))
        k3 = math.log((1 + self.e * sin_phy0) / (1 - self.e * sin_phy0))
        self.k = k1 - self.sphere_alpha * k2 + self.sphere_alpha * self.e / 2 * k3

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        sa1 = math.log(math.tan(math.pi / 4 - lat / 2))
        sa2 = self.e / 2 * math.log((1 + self.e * math.sin(lat)) / (1 - self.e * math.sin(lat)))
        s = -self.sphere_alpha * (sa1 + sa2) + self.k

        # sphere latitude and longitude
        b = 2 * (math.atan(math.exp(s)) - math.pi / 4)
        i = self.sphere_alpha * (lon - self.lambda0)

        # pseudo-equatorial rotation
        rot_i = math.atan(math.sin(i) / (
            math.sin(self.b0) * math.tan(b) + math.cos(self.b0) * math.cos(i)
        ))
        rot_b = math.asin(
            math.cos(self.b0) * math.sin(b) - math.sin(self.b0) * math.cos(b) * math.cos(i)
        )

        x = self.r * rot_i + self.x0
        y = self.r / 2 * math.log((1 + math.sin(rot_b)) / (1 - math.sin(rot_b))) + self.y0
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        rot_i = (x - self.x0) / self.r
        rot_b = 2 * (math.atan(math.exp((y - self.y0) / self.r)) - math.pi / 4)

        b = math.asin(
            math.cos(self.b0) * math.sin(rot_b)
            + math.sin(self.b0) * math.cos(rot_b) * math.cos(rot_i)
        )
        i = math.atan(math.sin(rot_i) / (
            math.cos(self.b0) * math.cos(rot_i) - math.sin(self.b0) * math.tan(rot_b)
        ))
        lon = self.lambda0 + i / self.sphere_alpha

        phy = b
        prev_phy = -1000.
        for _ in range(SWISS_MAX_ITER + 1):
            if abs(phy - prev_phy) <= 1.0e-7:
                return lon, phy
            s = 1 / self.sphere_alpha * (
                math.log(math.tan(math.pi / 4 + b / 2)) - self.k
            ) + self.e * math.log(math.tan(math.pi / 4 + math.asin(self.e * math.sin(phy)) / 2))
            prev_phy = phy
            phy = 2 * math.atan(math.exp(s)) - math.pi / 2

        raise ConvergenceError('Swiss oblique Mercator latitude iteration did not converge')
