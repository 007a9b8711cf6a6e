"""
Cylindrical projections: equirectangular, equidistant, Miller, cylindrical
equal-area and Cassini
"""

__all__ = [
    'Cassini', 'CylindricalEqualArea', 'EquidistantCylindrical',
    'Equirectangular', 'MillerCylindrical'
]

import math
from typing import Tuple

from geotransform._const import EPSLN, HALF_PI
from geotransform._math import (
    adjust_lat, adjust_lon, e0fn, e1fn, e2fn, e3fn, gN, imlfn, iqsfnz, mlfn, msfnz, qsfnz
)
from geotransform.errors import DomainError
from geotransform.projections.base import Projection


class Equirectangular(Projection):
    """Equidistant cylindrical (plate carree when lat_ts is 0)"""
    names = ('eqc', 'Equirectangular', 'Equidistant_Cylindrical', 'Plate_Carree')

    def init(self):
        self.rc = math.cos(self.lat_ts or 0.)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        dlon = adjust_lon(lon - self.long0)
        dlat = adjust_lat(lat - self.lat0)
        return self.x0 + self.a * dlon * self.rc, self.y0 + self.a * dlat

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        lon = adjust_lon(self.long0 + (x - self.x0) / (self.a * self.rc))
        lat = adjust_lat(self.lat0 + (y - self.y0) / self.a)
        return lon, lat


class EquidistantCylindrical(Projection):
    """Equidistant cylindrical scaled by the cosine of the origin latitude"""
    names = ('equi', 'Equidistant_Cylindrical_Spherical')

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        dlon = adjust_lon(lon - self.long0)
        return self.x0 + self.a * dlon * math.cos(self.lat0), self.y0 + self.a * lat

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        lat = (y - self.y0) / self.a
        if abs(lat) > HALF_PI:
            raise DomainError('Northing is beyond the poles')
        lon = adjust_lon(self.long0 + (x - self.x0) / (self.a * math.cos(self.lat0)))
        return lon, lat


class MillerCylindrical(Projection):
    """Miller cylindrical (spherical)"""
    names = ('mill', 'Miller_Cylindrical')

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        dlon = adjust_lon(lon - self.long0)
        x = self.x0 + self.a * dlon
        y = self.y0 + self.a * math.log(math.tan(math.pi / 4 + lat / 2.5)) * 1.25
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y -= self.y0
        lon = adjust_lon(self.long0 + x / self.a)
        lat = 2.5 * (math.atan(math.exp(0.8 * y / self.a)) - math.pi / 4)
        return lon, lat


class CylindricalEqualArea(Projection):
    """Lambert cylindrical equal-area, true scale at lat_ts"""
    names = ('cea', 'Cylindrical_Equal_Area', 'Lambert_Cylindrical_Equal_Area')

    def init(self):
        self.lat_ts = self.lat_ts or 0.
        if not self.sphere:
            self.k0 = msfnz(self.e, math.sin(self.lat_ts), math.cos(self.lat_ts))

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        dlon = adjust_lon(lon - self.long0)
        if self.sphere:
            x = self.x0 + self.a * dlon * math.cos(self.lat_ts)
            y = self.y0 + self.a * math.sin(lat) / math.cos(self.lat_ts)
        else:
            qs = qsfnz(self.e, math.sin(lat))
            x = self.x0 + self.a * self.k0 * dlon
            y = self.y0 + self.a * qs * 0.5 / self.k0
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y -= self.y0
        if self.sphere:
            lon = adjust_lon(self.long0 + (x / self.a) / math.cos(self.lat_ts))
            lat = math.asin((y / self.a) * math.cos(self.lat_ts))
        else:
            lat = iqsfnz(self.e, 2 * y * self.k0 / self.a)
            lon = adjust_lon(self.long0 + x / (self.a * self.k0))
        return lon, lat


class Cassini(Projection):
    """Cassini-Soldner (Snyder eq. 13-1 to 13-11)"""
    names = ('cass', 'Cassini', 'Cassini_Soldner', 'Cassini-Soldner')

    def init(self):
        if not self.sphere:
            self.e0 = e0fn(self.es)
            self.e1 = e1fn(self.es)
            self.e2 = e2fn(self.es)
            self.e3 = e3fn(self.es)
            self.ml0 = self.a * mlfn(self.e0, self.e1, self.e2, self.e3, self.lat0)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        lam = adjust_lon(lon - self.long0)

        if self.sphere:
            x = self.a * math.asin(math.cos(lat) * math.sin(lam))
            y = self.a * (math.atan2(math.tan(lat), math.cos(lam)) - self.lat0)
            return x + self.x0, y + self.y0

        sinphi = math.sin(lat)
        cosphi = math.cos(lat)
        nl = gN(self.a, self.e, sinphi)
        tl = math.tan(lat) * math.tan(lat)
        al = lam * cosphi
        asq = al * al
        cl = self.es * cosphi * cosphi / (1 - self.es)
        ml = self.a * mlfn(self.e0, self.e1, self.e2, self.e3, lat)

        x = nl * al * (1 - asq * tl * (1 / 6 - (8 - tl + 8 * cl) * asq / 120))
        y = ml - self.ml0 + nl * sinphi / cosphi * asq * (0.5 + (5 - tl + 6 * cl) * asq / 24)
        return x + self.x0, y + self.y0

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x = (x - self.x0) / self.a
        y = (y - self.y0) / self.a

        if self.sphere:
            dd = y + self.lat0
            phi = math.asin(math.sin(dd) * math.cos(x))
            lam = math.atan2(math.tan(x), math.cos(dd))
            return adjust_lon(lam + self.long0), adjust_lat(phi)

        ml1 = self.ml0 / self.a + y
        phi1 = imlfn(ml1, self.e0, self.e1, self.e2, self.e3)
        if abs(abs(phi1) - HALF_PI) <= EPSLN:
            return self.long0, -HALF_PI if y < 0 else HALF_PI

        nl1 = gN(self.a, self.e, math.sin(phi1))
        rl1 = nl1 * nl1 * nl1 / self.a / self.a * (1 - self.es)
        tl1 = math.pow(math.tan(phi1), 2)
        dl = x * self.a / nl1
        dsq = dl * dl
        phi = phi1 - nl1 * math.tan(phi1) / rl1 * dl * dl * (0.5 - (1 + 3 * tl1) * dl * dl / 24)
        lam = dl * (1 - dsq * (tl1 / 3 + (1 + 3 * tl1) * tl1 * dsq / 15)) / math.cos(phi1)
        return adjust_lon(lam + self.long0), adjust_lat(phi)
