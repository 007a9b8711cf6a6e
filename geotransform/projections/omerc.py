"""
Hotine oblique Mercator
"""

__all__ = ['HotineObliqueMercator']

import math
from typing import Tuple

from geotransform._const import D2R, EPSLN, FORTPI, HALF_PI, TWO_PI
from geotransform._math import adjust_lon, phi2z, tsfnz
from geotransform.errors import DefinitionError, DomainError
from geotransform.projections.base import Projection

_TOL = 1.0e-7

# WKT names of the variant whose false origin is the natural origin
_TYPE_A_NAMES = (
    'hotine_oblique_mercator', 'hotine_oblique_mercator_variant_a',
    'hotine_oblique_mercator_azimuth_natural_origin',
)


class HotineObliqueMercator(Projection):  # pylint: disable=too-many-instance-attributes
    """
    Hotine oblique Mercator (Snyder ch. 9), defined either by a central
    point (lonc, lat_0) and an azimuth (alpha) or rectified grid angle
    (gamma), or by two points on the central line (lon_1/lat_1,
    lon_2/lat_2).

    'no_off' or 'no_uoff' (or a WKT variant A name) puts the false origin
    at the natural origin; 'no_rot' skips rotating to the rectified grid.
    """
    names = (
        'omerc', 'Hotine_Oblique_Mercator', 'Hotine Oblique Mercator',
        'Hotine_Oblique_Mercator_variant_A', 'Hotine_Oblique_Mercator_Variant_B',
        'Hotine_Oblique_Mercator_Azimuth_Natural_Origin',
        'Hotine_Oblique_Mercator_Two_Point_Natural_Origin',
        'Hotine_Oblique_Mercator_Azimuth_Center', 'Oblique_Mercator',
    )

    def _is_type_a(self) -> bool:
        extras = self.definition.extras
        if 'no_uoff' in extras or 'no_off' in extras:
            return True
        wkt_name = str(extras.get('wkt_projection', '')).lower()
        return wkt_name in _TYPE_A_NAMES

    def init(self):  # pylint: disable=too-many-locals,too-many-statements
        self.no_off = self._is_type_a()
        self.no_rot = 'no_rot' in self.definition.extras

        has_alpha = self.alpha is not None
        has_gamma = self.rectified_grid_angle is not None
        alpha_c = self.alpha if has_alpha else 0.
        gamma = self.rectified_grid_angle * D2R if has_gamma else 0.

        lamc = lam1 = lam2 = phi1 = phi2 = 0.
        if has_alpha or has_gamma:
            lamc = self.longc if self.longc is not None else self.long0
        else:
            if None in (self.long1, self.long2, self.lat2):
                raise DefinitionError(
                    'Oblique Mercator needs alpha, gamma, or lon_1/lat_1/lon_2/lat_2'
                )
            lam1, phi1, lam2, phi2 = self.long1, self.lat1, self.long2, self.lat2
            con = abs(phi1)
            if (
                abs(phi1 - phi2) <= _TOL or con <= _TOL or abs(con - HALF_PI) <= _TOL
                or abs(abs(self.lat0) - HALF_PI) <= _TOL or abs(abs(phi2) - HALF_PI) <= _TOL
            ):
                raise DefinitionError('Oblique Mercator central line points are degenerate')

        one_es = 1. - self.es
        com = math.sqrt(one_es)

        if abs(self.lat0) > EPSLN:
            sinph0 = math.sin(self.lat0)
            cosph0 = math.cos(self.lat0)
            con = 1 - self.es * sinph0 * sinph0
            self.b_ = cosph0 * cosph0
            self.b_ = math.sqrt(1 + self.es * self.b_ * self.b_ / one_es)
            self.a_ = self.b_ * self.k0 * com / con
            d = self.b_ * com / (cosph0 * math.sqrt(con))
            f = d * d - 1
            if f <= 0:
                f = 0.
            else:
                f = math.sqrt(f)
                if self.lat0 < 0:
                    f = -f
            f += d
            self.e_ = f * math.pow(tsfnz(self.e, self.lat0, sinph0), self.b_)
        else:
            self.b_ = 1 / com
            self.a_ = self.k0
            self.e_ = d = f = 1.

        if has_alpha or has_gamma:
            if has_alpha:
                gamma0 = math.asin(math.sin(alpha_c) / d)
                if not has_gamma:
                    gamma = alpha_c
            else:
                gamma0 = gamma
                alpha_c = math.asin(d * math.sin(gamma0))
            self.lam0 = lamc - math.asin(0.5 * (f - 1 / f) * math.tan(gamma0)) / self.b_
        else:
            h = math.pow(tsfnz(self.e, phi1, math.sin(phi1)), self.b_)
            ell = math.pow(tsfnz(self.e, phi2, math.sin(phi2)), self.b_)
            f = self.e_ / h
            p = (ell - h) / (ell + h)
            j = self.e_ * self.e_
            j = (j - ell * h) / (j + ell * h)
            con = lam1 - lam2
            if con < -math.pi:
                lam2 -= TWO_PI
            elif con > math.pi:
                lam2 += TWO_PI
            self.lam0 = adjust_lon(
                0.5 * (lam1 + lam2) - math.atan(j * math.tan(0.5 * self.b_ * (lam1 - lam2)) / p)
                / self.b_
            )
            gamma0 = math.atan(2 * math.sin(self.b_ * adjust_lon(lam1 - self.lam0)) / (f - 1 / f))
            gamma = alpha_c = math.asin(d * math.sin(gamma0))

        self.singam = math.sin(gamma0)
        self.cosgam = math.cos(gamma0)
        self.sinrot = math.sin(gamma)
        self.cosrot = math.cos(gamma)

        self.r_b = 1 / self.b_
        self.ar_b = self.a_ * self.r_b
        self.br_a = 1 / self.ar_b

        if self.no_off:
            self.u_0 = 0.
        else:
            self.u_0 = abs(self.ar_b * math.atan(math.sqrt(max(d * d - 1, 0.)) / math.cos(alpha_c)))
            if self.lat0 < 0:
                self.u_0 = -self.u_0

        f = 0.5 * gamma0
        self.v_pole_n = self.ar_b * math.log(math.tan(FORTPI - f))
        self.v_pole_s = self.ar_b * math.log(math.tan(FORTPI + f))

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        lon = lon - self.lam0

        if abs(abs(lat) - HALF_PI) > EPSLN:
            w = self.e_ / math.pow(tsfnz(self.e, lat, math.sin(lat)), self.b_)
            temp = 1 / w
            s = 0.5 * (w - temp)
            t = 0.5 * (w + temp)
            v = math.sin(self.b_ * lon)
            u_ = (s * self.singam - v * self.cosgam) / t
            if abs(abs(u_) - 1.0) < EPSLN:
                raise DomainError('Point maps to infinity in oblique Mercator')

            v_out = 0.5 * self.ar_b * math.log((1 - u_) / (1 + u_))
            temp = math.cos(self.b_ * lon)
            if abs(temp) < _TOL:
                u_out = self.a_ * lon
            else:
                u_out = self.ar_b * math.atan2(s * self.cosgam + v * self.singam, temp)
        else:
            v_out = self.v_pole_n if lat > 0 else self.v_pole_s
            u_out = self.ar_b * lat

        if self.no_rot:
            x, y = u_out, v_out
        else:
            u_out -= self.u_0
            x = v_out * self.cosrot + u_out * self.sinrot
            y = u_out * self.cosrot - v_out * self.sinrot

        return self.a * x + self.x0, self.a * y + self.y0

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x = (x - self.x0) / self.a
        y = (y - self.y0) / self.a

        if self.no_rot:
            v, u = y, x
        else:
            v = x * self.cosrot - y * self.sinrot
            u = y * self.cosrot + x * self.sinrot + self.u_0

        qp = math.exp(-self.br_a * v)
        sp = 0.5 * (qp - 1 / qp)
        tp = 0.5 * (qp + 1 / qp)
        vp = math.sin(self.br_a * u)
        up = (vp * self.cosgam + sp * self.singam) / tp

        if abs(abs(up) - 1) < EPSLN:
            return adjust_lon(self.lam0), -HALF_PI if up < 0 else HALF_PI

        lat = self.e_ / math.sqrt((1 + up) / (1 - up))
        lat = phi2z(self.e, math.pow(lat, 1 / self.b_))
        lon = -self.r_b * math.atan2(sp * self.cosgam - vp * self.singam, math.cos(self.br_a * u))
        return adjust_lon(lon + self.lam0), lat
