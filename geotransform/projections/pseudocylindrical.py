"""
Pseudocylindrical world projections: sinusoidal and Mollweide
"""

__all__ = ['Mollweide', 'Sinusoidal']

import math
from typing import Tuple

from geotransform._const import EPSLN, HALF_PI, MOLLWEIDE_MAX_ITER
from geotransform._math import adjust_lat, adjust_lon, pj_enfn, pj_inv_mlfn, pj_mlfn
from geotransform.errors import ConvergenceError, DomainError
from geotransform.projections.base import Projection

_MOLL_CX = 0.900316316158
_MOLL_CY = 1.4142135623731


class Sinusoidal(Projection):
    """Sinusoidal (Sanson-Flamsteed), spherical or ellipsoidal"""
    names = ('sinu', 'Sinusoidal')

    def init(self):
        if not self.sphere:
            self.en = pj_enfn(self.es)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        lon = adjust_lon(lon - self.long0)

        if self.sphere:
            x = self.a * lon * math.cos(lat)
            y = self.a * lat
        else:
            s = math.sin(lat)
            c = math.cos(lat)
            y = self.a * pj_mlfn(lat, s, c, self.en)
            x = self.a * lon * c / math.sqrt(1 - self.es * s * s)

        return x + self.x0, y + self.y0

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y -= self.y0

        if self.sphere:
            lat = adjust_lat(y / self.a)
            cos_lat = math.cos(lat)
            lon = self.long0 if abs(cos_lat) < EPSLN else adjust_lon(
                self.long0 + x / (self.a * cos_lat)
            )
            return lon, lat

        lat = pj_inv_mlfn(y / self.a, self.es, self.en)
        s = abs(lat)
        if s < HALF_PI:
            s = math.sin(lat)
            lon = adjust_lon(
                self.long0 + x * math.sqrt(1 - self.es * s * s) / (self.a * math.cos(lat))
            )
        elif s - EPSLN < HALF_PI:
            lon = self.long0
        else:
            raise DomainError('Northing is beyond the poles')

        return lon, lat


class Mollweide(Projection):
    """Mollweide equal-area (spherical)"""
    names = ('moll', 'Mollweide')

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        delta_lon = adjust_lon(lon - self.long0)

        if HALF_PI - abs(lat) < EPSLN:
            theta = math.copysign(math.pi, lat)
            delta_lon = 0.
        else:
            theta = lat
            con = math.pi * math.sin(lat)
            for _ in range(MOLLWEIDE_MAX_ITER):
                delta_theta = -(theta + math.sin(theta) - con) / (1 + math.cos(theta))
                theta += delta_theta
                if abs(delta_theta) < EPSLN:
                    break
            else:
                raise ConvergenceError('Mollweide auxiliary angle iteration did not converge')

        theta /= 2
        x = _MOLL_CX * self.a * delta_lon * math.cos(theta) + self.x0
        y = _MOLL_CY * self.a * math.sin(theta) + self.y0
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y -= self.y0

        arg = y / (_MOLL_CY * self.a)
        if abs(arg) > 0.999999999999:
            arg = math.copysign(0.999999999999, arg)
        theta = math.asin(arg)

        lon = adjust_lon(self.long0 + x / (_MOLL_CX * self.a * math.cos(theta)))
        lon = min(max(lon, -math.pi), math.pi)

        arg = (2 * theta + math.sin(2 * theta)) / math.pi
        if abs(arg) > 1:
            arg = math.copysign(1, arg)
        return lon, math.asin(arg)
