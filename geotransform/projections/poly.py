"""
American polyconic
"""

__all__ = ['Polyconic']

import math
from typing import Tuple

from geotransform._const import EPSLN, POLYCONIC_MAX_ITER
from geotransform._math import adjust_lat, adjust_lon, e0fn, e1fn, e2fn, e3fn, gN, mlfn
from geotransform.errors import ConvergenceError
from geotransform.projections.base import Projection


class Polyconic(Projection):
    """American polyconic (Snyder eq. 18-1 to 18-24)"""
    names = ('poly', 'Polyconic', 'American_Polyconic')

    def init(self):
        self.e0 = e0fn(self.es)
        self.e1 = e1fn(self.es)
        self.e2 = e2fn(self.es)
        self.e3 = e3fn(self.es)
        self.ml0 = self.a * mlfn(self.e0, self.e1, self.e2, self.e3, self.lat0)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        dlon = adjust_lon(lon - self.long0)
        el = dlon * math.sin(lat)

        if self.sphere:
            if abs(lat) <= EPSLN:
                x = self.a * dlon
                y = -1 * self.a * self.lat0
            else:
                x = self.a * math.sin(el) / math.tan(lat)
                y = self.a * (adjust_lat(lat - self.lat0) + (1 - math.cos(el)) / math.tan(lat))
        elif abs(lat) <= EPSLN:
            x = self.a * dlon
            y = -1 * self.ml0
        else:
            nl = gN(self.a, self.e, math.sin(lat)) / math.tan(lat)
            x = nl * math.sin(el)
            y = self.a * mlfn(self.e0, self.e1, self.e2, self.e3, lat) - self.ml0 + nl * (
                1 - math.cos(el)
            )

        return x + self.x0, y + self.y0

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y -= self.y0

        if self.sphere:
            if abs(y + self.a * self.lat0) <= EPSLN:
                return adjust_lon(x / self.a + self.long0), 0.

            al = self.lat0 + y / self.a
            bl = x * x / self.a / self.a + al * al
            phi = al
            for _ in range(POLYCONIC_MAX_ITER):
                tanphi = math.tan(phi)
                dphi = -1 * (al * (phi * tanphi + 1) - phi - 0.5 * (phi * phi + bl) * tanphi) / (
                    (phi - al) / tanphi - 1
                )
                phi += dphi
                if abs(dphi) <= EPSLN:
                    break
            else:
                raise ConvergenceError('Polyconic latitude iteration did not converge')

            lon = adjust_lon(self.long0 + math.asin(x * math.tan(phi) / self.a) / math.sin(phi))
            return lon, phi

        if abs(y + self.ml0) <= EPSLN:
            return adjust_lon(self.long0 + x / self.a), 0.

        al = (self.ml0 + y) / self.a
        bl = x * x / self.a / self.a + al * al
        phi = al
        for _ in range(POLYCONIC_MAX_ITER):
            con = self.e * math.sin(phi)
            cl = math.sqrt(1 - con * con) * math.tan(phi)
            mln = self.a * mlfn(self.e0, self.e1, self.e2, self.e3, phi)
            mlnp = (
                self.e0 - 2 * self.e1 * math.cos(2 * phi) + 4 * self.e2 * math.cos(4 * phi)
                - 6 * self.e3 * math.cos(6 * phi)
            )
            ma = mln / self.a
            dphi = (al * (cl * ma + 1) - ma - 0.5 * cl * (ma * ma + bl)) / (
                self.es * math.sin(2 * phi) * (ma * ma + bl - 2 * al * ma) / (4 * cl)
                + (al - ma) * (cl * mlnp - 2 / math.sin(2 * phi)) - mlnp
            )
            phi -= dphi
            if abs(dphi) <= EPSLN:
                break
        else:
            raise ConvergenceError('Polyconic latitude iteration did not converge')

        cl = math.sqrt(1 - self.es * math.pow(math.sin(phi), 2)) * math.tan(phi)
        lon = adjust_lon(self.long0 + math.asin(x * cl / self.a) / math.sin(phi))
        return lon, phi
