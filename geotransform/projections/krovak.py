"""
Krovak oblique conformal conic, the national projection of Czechia and
Slovakia
"""

__all__ = ['Krovak']

import math
from typing import Tuple

from geotransform._const import KROVAK_MAX_ITER
from geotransform._math import adjust_lon
from geotransform.errors import ConvergenceError
from geotransform.projections.base import Projection

# Bessel 1841, which the projection is defined on regardless of the CRS
_BESSEL_A = 6377397.155
_BESSEL_ES = 0.006674372230614

_DEFAULT_LAT0 = 0.863937979737193
# 42d30' east of Ferro, expressed east of Greenwich
_DEFAULT_LONG0 = 0.7417649320975901 - 0.308341501185665

_S0 = 1.37008346281555  # latitude of the pseudo standard parallel, 78d30'
_UQ = 1.04216856380474  # colatitude of the cone axis pole, 59d42'42.6969"
_S45 = 0.785398163397448


class Krovak(Projection):  # pylint: disable=too-many-instance-attributes
    """
    Krovak on the Bessel ellipsoid. Output axes point south and west as in
    the projection's definition, unless 'czech' is given, which keeps the
    traditional positive S-JTSK coordinates.
    """
    names = ('krovak', 'Krovak')

    def init(self):
        self.a = _BESSEL_A
        self.es = _BESSEL_ES
        self.e = math.sqrt(self.es)
        self.czech = 'czech' in self.definition.extras

        if not self.lat0:
            self.lat0 = _DEFAULT_LAT0
        if not self.long0:
            self.long0 = _DEFAULT_LONG0

        s90 = 2 * _S45
        fi0 = self.lat0
        self.alfa = math.sqrt(1 + (self.es * math.pow(math.cos(fi0), 4)) / (1 - self.es))
        u0 = math.asin(math.sin(fi0) / self.alfa)
        g = math.pow(
            (1 + self.e * math.sin(fi0)) / (1 - self.e * math.sin(fi0)), self.alfa * self.e / 2
        )
        self.k = math.tan(u0 / 2 + _S45) / math.pow(math.tan(fi0 / 2 + _S45), self.alfa) * g
        n0 = self.a * math.sqrt(1 - self.es) / (1 - self.es * math.pow(math.sin(fi0), 2))
        self.n = math.sin(_S0)
        self.ro0 = self.k0 * n0 / math.tan(_S0)
        self.ad = s90 - _UQ

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        delta_lon = adjust_lon(lon - self.long0)
        gfi = math.pow(
            (1 + self.e * math.sin(lat)) / (1 - self.e * math.sin(lat)), self.alfa * self.e / 2
        )
        u = 2 * (math.atan(self.k * math.pow(math.tan(lat / 2 + _S45), self.alfa) / gfi) - _S45)
        deltav = -delta_lon * self.alfa
        s = math.asin(
            math.cos(self.ad) * math.sin(u) + math.sin(self.ad) * math.cos(u) * math.cos(deltav)
        )
        d = math.asin(math.cos(u) * math.sin(deltav) / math.cos(s))
        eps = self.n * d
        ro = self.ro0 * math.pow(math.tan(_S0 / 2 + _S45), self.n) / math.pow(
            math.tan(s / 2 + _S45), self.n
        )

        x = ro * math.sin(eps)
        y = ro * math.cos(eps)
        if not self.czech:
            x, y = -x, -y
        return x + self.x0, y + self.y0

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x, y = y - self.y0, x - self.x0
        if not self.czech:
            x, y = -x, -y

        ro = math.sqrt(x * x + y * y)
        eps = math.atan2(y, x)
        d = eps / math.sin(_S0)
        s = 2 * (math.atan(math.pow(self.ro0 / ro, 1 / self.n) * math.tan(_S0 / 2 + _S45)) - _S45)
        u = math.asin(
            math.cos(self.ad) * math.sin(s) - math.sin(self.ad) * math.cos(s) * math.cos(d)
        )
        deltav = math.asin(math.cos(s) * math.sin(d) / math.cos(u))
        lon = self.long0 - deltav / self.alfa

        fi1 = u
        for _ in range(KROVAK_MAX_ITER):
            lat = 2 * (math.atan(
                math.pow(self.k, -1 / self.alfa)
                * math.pow(math.tan(u / 2 + _S45), 1 / self.alfa)
                * math.pow((1 + self.e * math.sin(fi1)) / (1 - self.e * math.sin(fi1)), self.e / 2)
            ) - _S45)
            if abs(fi1 - lat) < 1.0e-10:
                return lon, lat
            fi1 = lat

        raise ConvergenceError('Krovak latitude iteration did not converge')
