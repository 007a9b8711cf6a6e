"""
Gauss-Schreiber transverse Mercator
"""

__all__ = ['GaussSchreiberTransverseMercator']

import math
from typing import Tuple

from geotransform._const import HALF_PI, ISOMETRIC_LAT_MAX_ITER
from geotransform.projections.base import Projection
from geotransform.utils.logging import warn_once


def latiso(eccent: float, phi: float, sinphi: float) -> float:
    """Isometric latitude"""
    if abs(phi) > HALF_PI:
        return math.nan
    if phi == HALF_PI:
        return math.inf
    if phi == -HALF_PI:
        return -math.inf

    con = eccent * sinphi
    return math.log(math.tan((HALF_PI + phi) / 2)) + eccent * math.log((1 - con) / (1 + con)) / 2


def _f_l(x: float, ell: float) -> float:
    return 2 * math.atan(x * math.exp(ell)) - HALF_PI


def invlatiso(eccent: float, ts: float) -> float:
    """Latitude from an isometric latitude, by fixed-point iteration"""
    phi = _f_l(1, ts)
    for _ in range(ISOMETRIC_LAT_MAX_ITER):
        prev = phi
        con = eccent * math.sin(prev)
        phi = _f_l(math.exp(eccent * math.log((1 + con) / (1 - con)) / 2), ts)
        if abs(phi - prev) <= 1.0e-12:
            return phi

    warn_once('Isometric latitude iteration did not converge; using the last estimate')
    return phi


class GaussSchreiberTransverseMercator(Projection):
    """
    Gauss-Schreiber transverse Mercator: the ellipsoid is mapped
    conformally to a sphere, which is then projected with a spherical
    transverse Mercator. Used on La Reunion.
    """
    names = ('gstmerc', 'Gauss_Schreiber_Transverse_Mercator')

    def init(self):
        self.lc = self.long0
        self.rs = math.sqrt(
            1 + self.es * math.pow(math.cos(self.lat0), 4) / (1 - self.es)
        )
        sinz = math.sin(self.lat0)
        pc = math.asin(sinz / self.rs)
        self.cp = latiso(0, pc, math.sin(pc)) - self.rs * latiso(self.e, self.lat0, sinz)
        self.n2 = self.k0 * self.a * math.sqrt(1 - self.es) / (1 - self.es * sinz * sinz)
        self.xs = self.x0
        self.ys = self.y0 - self.n2 * pc

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        ell = self.rs * (lon - self.lc)
        ls = self.cp + self.rs * latiso(self.e, lat, math.sin(lat))
        lat1 = math.asin(math.sin(ell) / math.cosh(ls))
        ls1 = latiso(0, lat1, math.sin(lat1))
        x = self.xs + self.n2 * ls1
        y = self.ys + self.n2 * math.atan(math.sinh(ls) / math.cos(ell))
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        ell = math.atan(math.sinh((x - self.xs) / self.n2) / math.cos((y - self.ys) / self.n2))
        lat1 = math.asin(math.sin((y - self.ys) / self.n2) / math.cosh((x - self.xs) / self.n2))
        lc = latiso(0, lat1, math.sin(lat1))
        lon = self.lc + ell / self.rs
        lat = invlatiso(self.e, (lc - self.cp) / self.rs)
        return lon, lat
