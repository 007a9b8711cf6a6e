"""
Azimuthal projections: Lambert equal-area, gnomonic and orthographic
"""

__all__ = ['Gnomonic', 'LambertAzimuthalEqualArea', 'Orthographic']

import math
from enum import Enum
from typing import List, Tuple

from geotransform._const import EPSLN, FORTPI, HALF_PI
from geotransform._math import adjust_lon, asinz, qsfnz
from geotransform.errors import DomainError
from geotransform.projections.base import Projection

# Authalic latitude series coefficients
_P00 = 0.33333333333333333333
_P01 = 0.17222222222222222222
_P02 = 0.10257936507936507936
_P10 = 0.06388888888888888888
_P11 = 0.06640211640211640211
_P20 = 0.01641501294219154443


class Aspect(Enum):
    """Where an azimuthal projection is centered"""
    SOUTH_POLE = 1
    NORTH_POLE = 2
    EQUATORIAL = 3
    OBLIQUE = 4


def _aspect(lat0: float) -> Aspect:
    t = abs(lat0)
    if abs(t - HALF_PI) < EPSLN:
        return Aspect.SOUTH_POLE if lat0 < 0 else Aspect.NORTH_POLE
    if t < EPSLN:
        return Aspect.EQUATORIAL
    return Aspect.OBLIQUE


def _authset(es: float) -> List[float]:
    t = es * es
    apa = [es * _P00 + t * _P01, t * _P10, 0.]
    t *= es
    apa[0] += t * _P02
    apa[1] += t * _P11
    apa[2] = t * _P20
    return apa


def _authlat(beta: float, apa: List[float]) -> float:
    t = beta + beta
    return beta + apa[0] * math.sin(t) + apa[1] * math.sin(t + t) + apa[2] * math.sin(t + t + t)


class LambertAzimuthalEqualArea(Projection):  # pylint: disable=too-many-instance-attributes
    """Lambert azimuthal equal-area, polar, equatorial or oblique"""
    names = ('laea', 'Lambert Azimuthal Equal Area', 'Lambert_Azimuthal_Equal_Area')

    def init(self):
        self.aspect = _aspect(self.lat0)
        self.sinph0 = math.sin(self.lat0)
        self.cosph0 = math.cos(self.lat0)

        if self.es <= 0:
            return

        self.qp = qsfnz(self.e, 1)
        self.mmf = 0.5 / (1 - self.es)
        self.apa = _authset(self.es)
        self.dd = 1.
        self.rq = 1.
        self.xmf = 1.
        self.ymf = 1.
        self.sinb1 = 0.
        self.cosb1 = 1.

        if self.aspect is Aspect.EQUATORIAL:
            self.rq = math.sqrt(0.5 * self.qp)
            self.dd = 1 / self.rq
            self.ymf = 0.5 * self.qp
        elif self.aspect is Aspect.OBLIQUE:
            self.rq = math.sqrt(0.5 * self.qp)
            self.sinb1 = qsfnz(self.e, self.sinph0) / self.qp
            self.cosb1 = math.sqrt(1 - self.sinb1 * self.sinb1)
            self.dd = self.cosph0 / (
                math.sqrt(1 - self.es * self.sinph0 * self.sinph0) * self.rq * self.cosb1
            )
            self.xmf = self.rq * self.dd
            self.ymf = self.rq / self.dd

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        lam = adjust_lon(lon - self.long0)
        if self.es <= 0 or self.sphere:
            x, y = self._forward_sphere(lam, lat)
        else:
            x, y = self._forward_ellipsoid(lam, lat)
        return self.a * x + self.x0, self.a * y + self.y0

    def _forward_sphere(self, lam: float, phi: float) -> Tuple[float, float]:
        sinphi = math.sin(phi)
        cosphi = math.cos(phi)
        coslam = math.cos(lam)

        if self.aspect in (Aspect.EQUATORIAL, Aspect.OBLIQUE):
            if self.aspect is Aspect.EQUATORIAL:
                y = 1 + cosphi * coslam
            else:
                y = 1 + self.sinph0 * sinphi + self.cosph0 * cosphi * coslam
            if y <= EPSLN:
                raise DomainError('Point is antipodal to the projection center')

            y = math.sqrt(2 / y)
            x = y * cosphi * math.sin(lam)
            if self.aspect is Aspect.EQUATORIAL:
                y *= sinphi
            else:
                y *= self.cosph0 * sinphi - self.sinph0 * cosphi * coslam
            return x, y

        if self.aspect is Aspect.NORTH_POLE:
            coslam = -coslam
        if abs(phi + self.lat0) < EPSLN:
            raise DomainError('Point is antipodal to the projection center')

        y = FORTPI - phi * 0.5
        y = 2 * (math.cos(y) if self.aspect is Aspect.SOUTH_POLE else math.sin(y))
        return y * math.sin(lam), y * coslam

    def _forward_ellipsoid(self, lam: float, phi: float) -> Tuple[float, float]:
        coslam = math.cos(lam)
        sinlam = math.sin(lam)
        q = qsfnz(self.e, math.sin(phi))
        sinb = cosb = 0.

        if self.aspect in (Aspect.EQUATORIAL, Aspect.OBLIQUE):
            sinb = q / self.qp
            cosb = math.sqrt(1 - sinb * sinb)

        if self.aspect is Aspect.OBLIQUE:
            b = 1 + self.sinb1 * sinb + self.cosb1 * cosb * coslam
        elif self.aspect is Aspect.EQUATORIAL:
            b = 1 + cosb * coslam
        elif self.aspect is Aspect.NORTH_POLE:
            b = HALF_PI + phi
            q = self.qp - q
        else:
            b = phi - HALF_PI
            q = self.qp + q

        if abs(b) < EPSLN:
            raise DomainError('Point is antipodal to the projection center')

        if self.aspect is Aspect.OBLIQUE:
            b = math.sqrt(2 / b)
            y = self.ymf * b * (self.cosb1 * sinb - self.sinb1 * cosb * coslam)
            return self.xmf * b * cosb * sinlam, y

        if self.aspect is Aspect.EQUATORIAL:
            b = math.sqrt(2 / (1 + cosb * coslam))
            return self.xmf * b * cosb * sinlam, b * sinb * self.ymf

        if q < 0:
            return 0., 0.
        b = math.sqrt(q)
        return b * sinlam, coslam * (b if self.aspect is Aspect.SOUTH_POLE else -b)

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x = (x - self.x0) / self.a
        y = (y - self.y0) / self.a
        if self.es <= 0 or self.sphere:
            lam, phi = self._inverse_sphere(x, y)
        else:
            found = self._inverse_ellipsoid(x, y)
            if found is None:
                return self.long0, self.lat0
            lam, phi = found
        return adjust_lon(self.long0 + lam), phi

    def _inverse_sphere(self, x: float, y: float) -> Tuple[float, float]:
        rh = math.sqrt(x * x + y * y)
        phi = rh * 0.5
        if phi > 1:
            raise DomainError('Point is outside the projected disc')
        phi = 2 * math.asin(phi)

        sinz = cosz = 0.
        if self.aspect in (Aspect.EQUATORIAL, Aspect.OBLIQUE):
            sinz = math.sin(phi)
            cosz = math.cos(phi)

        if self.aspect is Aspect.EQUATORIAL:
            phi = 0. if abs(rh) <= EPSLN else math.asin(y * sinz / rh)
            x *= sinz
            y = cosz * rh
        elif self.aspect is Aspect.OBLIQUE:
            if abs(rh) <= EPSLN:
                phi = self.lat0
            else:
                phi = math.asin(cosz * self.sinph0 + y * sinz * self.cosph0 / rh)
            x *= sinz * self.cosph0
            y = (cosz - math.sin(phi) * self.sinph0) * rh
        elif self.aspect is Aspect.NORTH_POLE:
            y = -y
            phi = HALF_PI - phi
        else:
            phi -= HALF_PI

        if y == 0 and self.aspect in (Aspect.EQUATORIAL, Aspect.OBLIQUE):
            lam = 0.
        else:
            lam = math.atan2(x, y)
        return lam, phi

    def _inverse_ellipsoid(self, x: float, y: float):
        if self.aspect in (Aspect.EQUATORIAL, Aspect.OBLIQUE):
            x /= self.dd
            y *= self.dd
            rho = math.sqrt(x * x + y * y)
            if rho < EPSLN:
                return None

            s_ce = 2 * math.asin(0.5 * rho / self.rq)
            c_ce = math.cos(s_ce)
            s_ce = math.sin(s_ce)
            x *= s_ce
            if self.aspect is Aspect.OBLIQUE:
                ab = c_ce * self.sinb1 + y * s_ce * self.cosb1 / rho
                y = rho * self.cosb1 * c_ce - y * self.sinb1 * s_ce
            else:
                ab = y * s_ce / rho
                y = rho * c_ce
        else:
            if self.aspect is Aspect.NORTH_POLE:
                y = -y
            q = x * x + y * y
            if not q:
                return None
            ab = 1 - q / self.qp
            if self.aspect is Aspect.SOUTH_POLE:
                ab = -ab

        return math.atan2(x, y), _authlat(math.asin(ab), self.apa)


class Gnomonic(Projection):
    """Gnomonic (spherical); great circles map to straight lines"""
    names = ('gnom', 'Gnomonic')

    def init(self):
        self.sin_p14 = math.sin(self.lat0)
        self.cos_p14 = math.cos(self.lat0)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        dlon = adjust_lon(lon - self.long0)
        sinphi = math.sin(lat)
        cosphi = math.cos(lat)
        coslon = math.cos(dlon)

        g = self.sin_p14 * sinphi + self.cos_p14 * cosphi * coslon
        if g <= EPSLN:
            raise DomainError('Point is 90 degrees or more from the projection center')

        scale = self.a * self.k0 / g
        x = self.x0 + scale * cosphi * math.sin(dlon)
        y = self.y0 + scale * (self.cos_p14 * sinphi - self.sin_p14 * cosphi * coslon)
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x = (x - self.x0) / (self.a * self.k0)
        y = (y - self.y0) / (self.a * self.k0)

        rh = math.sqrt(x * x + y * y)
        if not rh:
            return self.long0, self.lat0

        c = math.atan(rh)
        sinc = math.sin(c)
        cosc = math.cos(c)
        lat = asinz(cosc * self.sin_p14 + (y * sinc * self.cos_p14) / rh)
        lon = math.atan2(x * sinc, rh * self.cos_p14 * cosc - y * self.sin_p14 * sinc)
        return adjust_lon(self.long0 + lon), lat


class Orthographic(Projection):
    """Orthographic (spherical); the earth as seen from infinitely far away"""
    names = ('ortho', 'Orthographic')

    def init(self):
        self.sin_p14 = math.sin(self.lat0)
        self.cos_p14 = math.cos(self.lat0)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        dlon = adjust_lon(lon - self.long0)
        sinphi = math.sin(lat)
        cosphi = math.cos(lat)
        coslon = math.cos(dlon)

        g = self.sin_p14 * sinphi + self.cos_p14 * cosphi * coslon
        if g < 0 and abs(g) > EPSLN:
            raise DomainError('Point is on the far side of the globe')

        x = self.x0 + self.a * cosphi * math.sin(dlon)
        y = self.y0 + self.a * (self.cos_p14 * sinphi - self.sin_p14 * cosphi * coslon)
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y -= self.y0

        rh = math.sqrt(x * x + y * y)
        if abs(rh) <= EPSLN:
            return self.long0, self.lat0

        z = asinz(rh / self.a)
        sinz = math.sin(z)
        cosz = math.cos(z)
        lat = asinz(cosz * self.sin_p14 + (y * sinz * self.cos_p14) / rh)

        if abs(abs(self.lat0) - HALF_PI) <= EPSLN:
            if self.lat0 >= 0:
                lon = adjust_lon(self.long0 + math.atan2(x, -y))
            else:
                lon = adjust_lon(self.long0 - math.atan2(-x, y))
            return lon, lat

        lon = adjust_lon(
            self.long0 + math.atan2(x * sinz, rh * self.cos_p14 * cosz - y * self.sin_p14 * sinz)
        )
        return lon, lat
