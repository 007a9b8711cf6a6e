"""
Van der Grinten I
"""

__all__ = ['VanDerGrinten']

import math
from typing import Tuple

from geotransform._const import EPSLN, HALF_PI
from geotransform._math import adjust_lon, asinz
from geotransform.projections.base import Projection


class VanDerGrinten(Projection):
    """Van der Grinten I (spherical, Snyder eq. 29-1 to 29-16)"""
    names = ('vandg', 'Van_der_Grinten_I', 'VanDerGrinten')

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        r = self.a
        dlon = adjust_lon(lon - self.long0)

        if abs(lat) <= EPSLN:
            return self.x0 + r * dlon, self.y0

        theta = asinz(2 * abs(lat / math.pi))
        if abs(dlon) <= EPSLN or abs(abs(lat) - HALF_PI) <= EPSLN:
            y = math.pi * r * math.tan(0.5 * theta)
            return self.x0, self.y0 + (y if lat >= 0 else -y)

        al = 0.5 * abs(math.pi / dlon - dlon / math.pi)
        asq = al * al
        sinth = math.sin(theta)
        costh = math.cos(theta)
        g = costh / (sinth + costh - 1)
        gsq = g * g
        m = g * (2 / sinth - 1)
        msq = m * m

        con = math.pi * r * (
            al * (g - msq) + math.sqrt(asq * (g - msq) * (g - msq) - (msq + asq) * (gsq - msq))
        ) / (msq + asq)
        if dlon < 0:
            con = -con
        x = self.x0 + con

        q = asq + g
        con = math.pi * r * (m * q - al * math.sqrt((msq + asq) * (asq + 1) - q * q)) / (msq + asq)
        y = self.y0 + con if lat >= 0 else self.y0 - con
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y -= self.y0
        con = math.pi * self.a
        xx = x / con
        yy = y / con
        xys = xx * xx + yy * yy
        c1 = -abs(yy) * (1 + xys)
        c2 = c1 - 2 * yy * yy + xx * xx
        c3 = -2 * c1 + 1 + 2 * yy * yy + xys * xys
        d = yy * yy / c3 + (2 * c2 * c2 * c2 / c3 / c3 / c3 - 9 * c1 * c2 / c3 / c3) / 27
        a1 = (c1 - c2 * c2 / 3 / c3) / c3
        m1 = 2 * math.sqrt(-a1 / 3)
        con = ((3 * d) / a1) / m1
        if abs(con) > 1:
            con = math.copysign(1, con)
        th1 = math.acos(con) / 3

        lat = (-m1 * math.cos(th1 + math.pi / 3) - c2 / 3 / c3) * math.pi
        if y < 0:
            lat = -lat

        if abs(xx) < EPSLN:
            lon = self.long0
        else:
            lon = adjust_lon(
                self.long0 + math.pi * (
                    xys - 1 + math.sqrt(1 + 2 * (xx * xx - yy * yy) + xys * xys)
                ) / 2 / xx
            )
        return lon, lat
