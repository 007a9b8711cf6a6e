"""
Stereographic projections and the Gauss conformal sphere used by the
oblique (double) stereographic
"""

__all__ = ['GaussConformal', 'GaussSphere', 'ObliqueStereographic', 'Stereographic']

import math
from typing import Tuple

from geotransform._const import EPSLN, FORTPI, GAUSS_MAX_ITER, HALF_PI
from geotransform._math import adjust_lon, msfnz, phi2z, sign, srat, tsfnz
from geotransform.errors import ConvergenceError, DomainError
from geotransform.projections.base import Projection


class GaussSphere:
    """
    Conformal mapping of the ellipsoid onto a sphere tangent at a
    latitude of origin (Gauss's method, as used by the double
    stereographic).
    """

    def __init__(self, lat0: float, es: float):
        self.e = math.sqrt(es)
        sphi = math.sin(lat0)
        cphi = math.cos(lat0)
        cphi *= cphi

        self.rc = math.sqrt(1 - es) / (1 - es * sphi * sphi)
        self.c = math.sqrt(1 + es * cphi * cphi / (1 - es))
        self.phic0 = math.asin(sphi / self.c)
        self.ratexp = 0.5 * self.c * self.e
        self.k = math.tan(0.5 * self.phic0 + FORTPI) / (
            math.pow(math.tan(0.5 * lat0 + FORTPI), self.c) * srat(self.e * sphi, self.ratexp)
        )

    def to_sphere(self, lon: float, lat: float) -> Tuple[float, float]:
        lat = 2 * math.atan(
            self.k * math.pow(math.tan(0.5 * lat + FORTPI), self.c)
            * srat(self.e * math.sin(lat), self.ratexp)
        ) - HALF_PI
        return self.c * lon, lat

    def from_sphere(self, lon: float, lat: float) -> Tuple[float, float]:
        """
        Raises:
            ConvergenceError: if the latitude iteration does not settle
        """
        lon = lon / self.c
        num = math.pow(math.tan(0.5 * lat + FORTPI) / self.k, 1 / self.c)
        prev = lat
        for _ in range(GAUSS_MAX_ITER):
            lat = 2 * math.atan(num * srat(self.e * math.sin(prev), -0.5 * self.e)) - HALF_PI
            if abs(lat - prev) < 1.0e-14:
                return lon, lat
            prev = lat

        raise ConvergenceError('Gauss sphere latitude iteration did not converge')


class GaussConformal(Projection):
    """
    The Gauss conformal sphere on its own. Output is spherical longitude
    and latitude in radians rather than meters.
    """
    names = ('gauss',)

    def init(self):
        self.gauss = GaussSphere(self.lat0, self.es)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        return self.gauss.to_sphere(lon, lat)

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        return self.gauss.from_sphere(x, y)


class ObliqueStereographic(Projection):
    """Oblique (double) stereographic: Gauss sphere, then a stereographic"""
    names = (
        'sterea', 'Oblique_Stereographic', 'Oblique Stereographic',
        'Double_Stereographic',
    )

    def init(self):
        self.gauss = GaussSphere(self.lat0, self.es)
        self.sinc0 = math.sin(self.gauss.phic0)
        self.cosc0 = math.cos(self.gauss.phic0)
        self.r2 = 2 * self.gauss.rc

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        lon, lat = self.gauss.to_sphere(adjust_lon(lon - self.long0), lat)
        sinc = math.sin(lat)
        cosc = math.cos(lat)
        cosl = math.cos(lon)

        denom = 1 + self.sinc0 * sinc + self.cosc0 * cosc * cosl
        if abs(denom) < EPSLN:
            raise DomainError('Point is antipodal to the projection center')

        k = self.k0 * self.r2 / denom
        x = k * cosc * math.sin(lon)
        y = k * (self.cosc0 * sinc - self.sinc0 * cosc * cosl)
        return self.a * x + self.x0, self.a * y + self.y0

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x = (x - self.x0) / self.a / self.k0
        y = (y - self.y0) / self.a / self.k0

        rho = math.sqrt(x * x + y * y)
        if rho:
            c = 2 * math.atan2(rho, self.r2)
            sinc = math.sin(c)
            cosc = math.cos(c)
            lat = math.asin(cosc * self.sinc0 + y * sinc * self.cosc0 / rho)
            lon = math.atan2(x * sinc, rho * self.cosc0 * cosc - y * self.sinc0 * sinc)
        else:
            lat = self.gauss.phic0
            lon = 0.

        lon, lat = self.gauss.from_sphere(lon, lat)
        return adjust_lon(lon + self.long0), lat


class Stereographic(Projection):  # pylint: disable=too-many-instance-attributes
    """
    Stereographic: polar, equatorial or oblique, on the sphere or the
    ellipsoid (Snyder ch. 21). For polar aspects a latitude of true scale
    (lat_ts) sets the scale factor when none is given.
    """
    names = ('stere', 'Stereographic', 'Polar_Stereographic', 'Stereographic_North_Pole',
             'Stereographic_South_Pole', 'Polar Stereographic (variant A)',
             'Polar Stereographic (variant B)')

    def init(self):
        self.coslat0 = math.cos(self.lat0)
        self.sinlat0 = math.sin(self.lat0)
        self.polar = abs(self.coslat0) <= EPSLN

        if self.sphere:
            if self.k0 == 1 and self.lat_ts is not None and self.polar:
                self.k0 = 0.5 * (1 + sign(self.lat0) * math.sin(self.lat_ts))
            return

        self.con = 1. if self.lat0 > 0 else -1.
        self.cons = math.sqrt(
            math.pow(1 + self.e, 1 + self.e) * math.pow(1 - self.e, 1 - self.e)
        )
        if (
            self.k0 == 1 and self.lat_ts is not None and self.polar
            and abs(math.cos(self.lat_ts)) > EPSLN
        ):
            # Snyder eq. 21-35
            self.k0 = 0.5 * self.cons * msfnz(
                self.e, math.sin(self.lat_ts), math.cos(self.lat_ts)
            ) / tsfnz(self.e, self.con * self.lat_ts, self.con * math.sin(self.lat_ts))

        self.ms1 = msfnz(self.e, self.sinlat0, self.coslat0)
        self.x0_conf = 2 * math.atan(self._ssfn(self.lat0, self.sinlat0)) - HALF_PI
        self.cos_x0 = math.cos(self.x0_conf)
        self.sin_x0 = math.sin(self.x0_conf)

    def _ssfn(self, phit: float, sinphi: float) -> float:
        sinphi *= self.e
        return math.tan(0.5 * (HALF_PI + phit)) * math.pow(
            (1 - sinphi) / (1 + sinphi), 0.5 * self.e
        )

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        sinlat = math.sin(lat)
        coslat = math.cos(lat)
        dlon = adjust_lon(lon - self.long0)

        if abs(lat + self.lat0) <= EPSLN and (
            self.polar or abs(abs(lon - self.long0) - math.pi) <= EPSLN
        ):
            raise DomainError('Point is antipodal to the projection center')

        if self.sphere:
            a = 2 * self.k0 / (1 + self.sinlat0 * sinlat + self.coslat0 * coslat * math.cos(dlon))
            x = self.a * a * coslat * math.sin(dlon) + self.x0
            y = self.a * a * (self.coslat0 * sinlat - self.sinlat0 * coslat * math.cos(dlon)) + self.y0
            return x, y

        if self.polar:
            ts = tsfnz(self.e, lat * self.con, self.con * sinlat)
            rh = 2 * self.a * self.k0 * ts / self.cons
            x = self.x0 + rh * math.sin(lon - self.long0)
            y = self.y0 - self.con * rh * math.cos(lon - self.long0)
            return x, y

        chi = 2 * math.atan(self._ssfn(lat, sinlat)) - HALF_PI
        cos_chi = math.cos(chi)
        sin_chi = math.sin(chi)

        if abs(self.sinlat0) < EPSLN:
            a = 2 * self.a * self.k0 / (1 + cos_chi * math.cos(dlon))
            y = a * sin_chi + self.y0
        else:
            a = 2 * self.a * self.k0 * self.ms1 / (
                self.cos_x0 * (1 + self.sin_x0 * sin_chi + self.cos_x0 * cos_chi * math.cos(dlon))
            )
            y = a * (self.cos_x0 * sin_chi - self.sin_x0 * cos_chi * math.cos(dlon)) + self.y0

        x = a * cos_chi * math.sin(dlon) + self.x0
        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x -= self.x0
        y -= self.y0
        rh = math.sqrt(x * x + y * y)

        if self.sphere:
            if rh <= EPSLN:
                return self.long0, self.lat0

            c = 2 * math.atan(rh / (2 * self.a * self.k0))
            lat = math.asin(math.cos(c) * self.sinlat0 + y * math.sin(c) * self.coslat0 / rh)
            if abs(self.coslat0) < EPSLN:
                if self.lat0 > 0:
                    lon = adjust_lon(self.long0 + math.atan2(x, -y))
                else:
                    lon = adjust_lon(self.long0 + math.atan2(x, y))
            else:
                lon = adjust_lon(self.long0 + math.atan2(
                    x * math.sin(c),
                    rh * self.coslat0 * math.cos(c) - y * self.sinlat0 * math.sin(c)
                ))
            return lon, lat

        if self.polar:
            if rh <= EPSLN:
                return self.long0, self.lat0

            x *= self.con
            y *= self.con
            ts = rh * self.cons / (2 * self.a * self.k0)
            lat = self.con * phi2z(self.e, ts)
            lon = self.con * adjust_lon(self.con * self.long0 + math.atan2(x, -y))
            return lon, lat

        ce = 2 * math.atan(rh * self.cos_x0 / (2 * self.a * self.k0 * self.ms1))
        lon = self.long0
        if rh <= EPSLN:
            chi = self.x0_conf
        else:
            chi = math.asin(math.cos(ce) * self.sin_x0 + y * math.sin(ce) * self.cos_x0 / rh)
            lon = adjust_lon(self.long0 + math.atan2(
                x * math.sin(ce),
                rh * self.cos_x0 * math.cos(ce) - y * self.sin_x0 * math.sin(ce)
            ))

        lat = -1 * phi2z(self.e, math.tan(0.5 * (HALF_PI + chi)))
        return lon, lat
