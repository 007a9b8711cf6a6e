"""
Conic projections: Lambert conformal, Albers equal-area and equidistant
"""

__all__ = ['AlbersEqualArea', 'EquidistantConic', 'LambertConformalConic']

import math
from typing import Tuple

from geotransform._const import ALBERS_MAX_ITER, EPSLN, HALF_PI
from geotransform._math import (
    adjust_lat, adjust_lon, asinz, e0fn, e1fn, e2fn, e3fn, imlfn, mlfn, msfnz,
    phi2z, qsfnz, sign, tsfnz
)
from geotransform.errors import DefinitionError, DomainError
from geotransform.projections.base import Projection


def _check_parallels(lat1: float, lat2: float):
    if abs(lat1 + lat2) < EPSLN:
        raise DefinitionError('Standard parallels must not be opposite each other')


def _polar(x: float, y: float, ns: float) -> Tuple[float, float]:
    """Radius and angle of a point relative to the cone apex"""
    if ns >= 0:
        rh = math.sqrt(x * x + y * y)
        con = 1.
    else:
        rh = -math.sqrt(x * x + y * y)
        con = -1.

    theta = 0.
    if rh != 0:
        theta = math.atan2(con * x, con * y)
    return rh, theta


class LambertConformalConic(Projection):
    """Lambert conformal conic with one or two standard parallels"""
    names = (
        'lcc', 'Lambert_Conformal_Conic', 'Lambert_Conformal_Conic_1SP',
        'Lambert_Conformal_Conic_2SP', 'Lambert Conic Conformal (1SP)',
        'Lambert Conic Conformal (2SP)',
    )

    def init(self):
        if self.lat2 is None:
            self.lat2 = self.lat1
        _check_parallels(self.lat1, self.lat2)

        sin1 = math.sin(self.lat1)
        ms1 = msfnz(self.e, sin1, math.cos(self.lat1))
        ts1 = tsfnz(self.e, self.lat1, sin1)
        sin2 = math.sin(self.lat2)
        ms2 = msfnz(self.e, sin2, math.cos(self.lat2))
        ts2 = tsfnz(self.e, self.lat2, sin2)
        ts0 = tsfnz(self.e, self.lat0, math.sin(self.lat0))

        self.ns = sin1
        if abs(self.lat1 - self.lat2) > EPSLN:
            ns = math.log(ms1 / ms2) / math.log(ts1 / ts2)
            if not math.isnan(ns):
                self.ns = ns

        if abs(self.ns) < EPSLN:
            raise DefinitionError('Lambert conformal conic needs a parallel off the equator')

        self.f0 = ms1 / (self.ns * math.pow(ts1, self.ns))
        self.rh = self.a * self.f0 * math.pow(ts0, self.ns)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        if abs(2 * abs(lat) - math.pi) <= EPSLN:
            if lat * self.ns <= 0:
                raise DomainError('Point is at the pole opposite the cone apex')
            lat = sign(lat) * (HALF_PI - 2 * EPSLN)

        ts = tsfnz(self.e, lat, math.sin(lat))
        rh1 = self.a * self.f0 * math.pow(ts, self.ns)

        theta = self.ns * adjust_lon(lon - self.long0)
        x = self.k0 * (rh1 * math.sin(theta)) + self.x0
        y = self.k0 * (self.rh - rh1 * math.cos(theta)) + self.y0
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x = (x - self.x0) / self.k0
        y = self.rh - (y - self.y0) / self.k0
        rh1, theta = _polar(x, y, self.ns)

        if rh1 != 0 or self.ns > 0:
            ts = math.pow(rh1 / (self.a * self.f0), 1 / self.ns)
            lat = phi2z(self.e, ts)
        else:
            lat = -HALF_PI

        lon = adjust_lon(theta / self.ns + self.long0)
        return lon, lat


class AlbersEqualArea(Projection):
    """Albers conic equal-area (Snyder eq. 14-1 to 14-21)"""
    names = ('aea', 'Albers', 'Albers_Conic_Equal_Area', 'Albers Equal Area')

    def init(self):
        if self.lat2 is None:
            self.lat2 = self.lat1
        _check_parallels(self.lat1, self.lat2)

        sin_po = math.sin(self.lat1)
        ms1 = msfnz(self.e, sin_po, math.cos(self.lat1))
        qs1 = qsfnz(self.e, sin_po)

        sin_po2 = math.sin(self.lat2)
        ms2 = msfnz(self.e, sin_po2, math.cos(self.lat2))
        qs2 = qsfnz(self.e, sin_po2)

        qs0 = qsfnz(self.e, math.sin(self.lat0))

        if abs(self.lat1 - self.lat2) > EPSLN:
            self.ns0 = (ms1 * ms1 - ms2 * ms2) / (qs2 - qs1)
        else:
            self.ns0 = sin_po

        self.c = ms1 * ms1 + self.ns0 * qs1
        self.rh = self.a * math.sqrt(self.c - self.ns0 * qs0) / self.ns0

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        qs = qsfnz(self.e, math.sin(lat))
        rh1 = self.a * math.sqrt(self.c - self.ns0 * qs) / self.ns0
        theta = self.ns0 * adjust_lon(lon - self.long0)
        x = rh1 * math.sin(theta) + self.x0
        y = self.rh - rh1 * math.cos(theta) + self.y0
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y = self.rh - y + self.y0
        rh1, theta = _polar(x, y, self.ns0)

        con = rh1 * self.ns0 / self.a
        if self.sphere:
            lat = math.asin((self.c - con * con) / (2 * self.ns0))
        else:
            qs = (self.c - con * con) / self.ns0
            lat = self._phi1z(self.e, qs)

        lon = adjust_lon(theta / self.ns0 + self.long0)
        return lon, lat

    def _phi1z(self, eccent: float, qs: float) -> float:
        """Latitude from Snyder's q, by iteration (eq. 3-16)"""
        phi = asinz(0.5 * qs)
        if eccent < EPSLN:
            return phi

        eccnts = eccent * eccent
        for _ in range(ALBERS_MAX_ITER):
            sinphi = math.sin(phi)
            cosphi = math.cos(phi)
            con = eccent * sinphi
            com = 1 - con * con
            dphi = 0.5 * com * com / cosphi * (
                qs / (1 - eccnts) - sinphi / com + 0.5 / eccent * math.log((1 - con) / (1 + con))
            )
            phi += dphi
            if abs(dphi) <= 1e-7:
                return phi

        self.warn_once('Albers latitude iteration did not converge; using the last estimate')
        return phi


class EquidistantConic(Projection):
    """Equidistant conic with one or two standard parallels"""
    names = ('eqdc', 'Equidistant_Conic')

    def init(self):
        if self.lat2 is None:
            self.lat2 = self.lat1
        _check_parallels(self.lat1, self.lat2)

        self.e0 = e0fn(self.es)
        self.e1 = e1fn(self.es)
        self.e2 = e2fn(self.es)
        self.e3 = e3fn(self.es)

        sinphi = math.sin(self.lat1)
        ms1 = msfnz(self.e, sinphi, math.cos(self.lat1))
        ml1 = mlfn(self.e0, self.e1, self.e2, self.e3, self.lat1)

        if abs(self.lat1 - self.lat2) < EPSLN:
            self.ns = sinphi
        else:
            ms2 = msfnz(self.e, math.sin(self.lat2), math.cos(self.lat2))
            ml2 = mlfn(self.e0, self.e1, self.e2, self.e3, self.lat2)
            self.ns = (ms1 - ms2) / (ml2 - ml1)

        self.g = ml1 + ms1 / self.ns
        self.ml0 = mlfn(self.e0, self.e1, self.e2, self.e3, self.lat0)
        self.rh = self.a * (self.g - self.ml0)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        if self.sphere:
            rh1 = self.a * (self.g - lat)
        else:
            rh1 = self.a * (self.g - mlfn(self.e0, self.e1, self.e2, self.e3, lat))

        theta = self.ns * adjust_lon(lon - self.long0)
        x = self.x0 + rh1 * math.sin(theta)
        y = self.y0 + self.rh - rh1 * math.cos(theta)
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y = self.rh - y + self.y0
        rh1, theta = _polar(x, y, self.ns)

        lon = adjust_lon(self.long0 + theta / self.ns)
        if self.sphere:
            lat = adjust_lat(self.g - rh1 / self.a)
        else:
            lat = imlfn(self.g - rh1 / self.a, self.e0, self.e1, self.e2, self.e3)
        return lon, lat
