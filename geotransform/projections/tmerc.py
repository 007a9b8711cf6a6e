"""
Transverse Mercator and its Universal Transverse Mercator (UTM) zoning
"""

__all__ = ['TransverseMercator', 'UniversalTransverseMercator']

import math
from typing import Tuple

from geotransform._const import D2R, EPSLN, HALF_PI
from geotransform._math import adjust_lon, pj_enfn, pj_inv_mlfn, pj_mlfn, sign
from geotransform.errors import DefinitionError, DomainError
from geotransform.projections.base import Projection


class TransverseMercator(Projection):
    """
    Transverse Mercator using the meridional distance series of Snyder
    (eq. 8-9 to 8-25). Accurate to well below a millimeter within a few
    degrees of the central meridian.
    """
    names = (
        'tmerc', 'Transverse_Mercator', 'Transverse Mercator', 'Gauss Kruger',
        'Gauss_Kruger', 'Transverse_Mercator_Complex',
    )

    def init(self):
        self.en = None
        self.ml0 = 0.
        if self.es:
            self.en = pj_enfn(self.es)
            self.ml0 = pj_mlfn(self.lat0, math.sin(self.lat0), math.cos(self.lat0), self.en)

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        delta_lon = adjust_lon(lon - self.long0)
        sin_phi = math.sin(lat)
        cos_phi = math.cos(lat)

        if not self.es:
            b = cos_phi * math.sin(delta_lon)
            if abs(abs(b) - 1) < EPSLN:
                raise DomainError('Point is 90 degrees from the central meridian')

            x = 0.5 * self.a * self.k0 * math.log((1 + b) / (1 - b)) + self.x0
            y = cos_phi * math.cos(delta_lon) / math.sqrt(1 - b * b)
            b = abs(y)
            if b >= 1:
                if b - 1 > EPSLN:
                    raise DomainError('Point cannot be projected')
                y = 0.
            else:
                y = math.acos(y)

            if lat < 0:
                y = -y

            y = self.a * self.k0 * (y - self.lat0) + self.y0
            return x, y

        al = cos_phi * delta_lon
        als = al * al
        c = self.ep2 * cos_phi * cos_phi
        cs = c * c
        tq = math.tan(lat) if abs(cos_phi) > EPSLN else 0.
        t = tq * tq
        ts = t * t
        con = 1 - self.es * sin_phi * sin_phi
        al = al / math.sqrt(con)
        ml = pj_mlfn(lat, sin_phi, cos_phi, self.en)

        x = self.a * (self.k0 * al * (
            1 + als / 6 * (
                1 - t + c + als / 20 * (
                    5 - 18 * t + ts + 14 * c - 58 * t * c + als / 42 * (
                        61 + 179 * ts - ts * t - 479 * t
                    )
                )
            )
        )) + self.x0

        y = self.a * (self.k0 * (
            ml - self.ml0 + sin_phi * delta_lon * al / 2 * (
                1 + als / 12 * (
                    5 - t + 9 * c + 4 * cs + als / 30 * (
                        61 + ts - 58 * t + 270 * c - 330 * t * c + als / 56 * (
                            1385 + 543 * ts - ts * t - 3111 * t
                        )
                    )
                )
            )
        )) + self.y0

        return x, y

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        x = (x - self.x0) / self.a
        y = (y - self.y0) / self.a

        if not self.es:
            f = math.exp(x / self.k0)
            g = 0.5 * (f - 1 / f)
            temp = self.lat0 + y / self.k0
            h = math.cos(temp)
            con = math.sqrt((1 - h * h) / (1 + g * g))
            lat = math.asin(con)
            if temp < 0:
                lat = -lat

            if g == 0 and h == 0:
                lon = self.long0
            else:
                lon = adjust_lon(math.atan2(g, h) + self.long0)
            return lon, lat

        con = self.ml0 + y / self.k0
        phi = pj_inv_mlfn(con, self.es, self.en)

        if abs(phi) >= HALF_PI:
            return self.long0, HALF_PI * sign(y)

        sin_phi = math.sin(phi)
        cos_phi = math.cos(phi)
        tan_phi = math.tan(phi) if abs(cos_phi) > EPSLN else 0.
        c = self.ep2 * cos_phi * cos_phi
        cs = c * c
        t = tan_phi * tan_phi
        ts = t * t
        con = 1 - self.es * sin_phi * sin_phi
        d = x * math.sqrt(con) / self.k0
        ds = d * d
        con = con * tan_phi

        lat = phi - (con * ds / (1 - self.es)) * 0.5 * (
            1 - ds / 12 * (
                5 + 3 * t - 9 * c * t + c - 4 * cs - ds / 30 * (
                    61 + 90 * t - 252 * c * t + 45 * ts + 46 * c - ds / 56 * (
                        1385 + 3633 * t + 4095 * ts + 1574 * ts * t
                    )
                )
            )
        )
        lon = adjust_lon(self.long0 + (d * (
            1 - ds / 6 * (
                1 + 2 * t + c - ds / 20 * (
                    5 + 28 * t + 24 * ts + 8 * c * t + 6 * c - ds / 42 * (
                        61 + 662 * t + 1320 * ts + 720 * ts * t
                    )
                )
            )
        )) / cos_phi)

        return lon, lat


class UniversalTransverseMercator(TransverseMercator):
    """
    Transverse Mercator with the UTM zone conventions: central meridian
    from the zone (or the zone from lon_0), scale 0.9996, false easting
    500 km and false northing 10 000 km in the southern hemisphere.
    """
    names = ('utm',)

    def init(self):
        zone = self.zone
        if zone is None:
            zone = int(math.floor((adjust_lon(self.long0) + math.pi) * 30 / math.pi)) + 1
            zone = min(max(zone, 1), 60)

        if not 1 <= abs(zone) <= 60:
            raise DefinitionError(f'UTM zone must be between 1 and 60, received {zone}')

        self.zone = abs(zone)
        self.lat0 = 0.
        self.long0 = (6 * self.zone - 183) * D2R
        self.x0 = 500000.
        self.y0 = 10000000. if self.utm_south else 0.
        self.k0 = 0.9996

        super().init()
