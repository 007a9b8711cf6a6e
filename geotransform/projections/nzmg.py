"""
New Zealand Map Grid
"""

__all__ = ['NewZealandMapGrid']

from typing import Tuple

from geotransform._const import NZMG_MAX_ITER, SEC_TO_RAD
from geotransform.projections.base import Projection

# Latitude (in units of 1e5 arc-seconds) to isometric latitude
_A = (
    0.6399175073, -0.1358797613, 0.063294409, -0.02526853, 0.0117879,
    -0.0055161, 0.0026906, -0.001333, 0.00067, -0.00034,
)

# Conformal mapping from the isometric plane to the grid
_B = (
    complex(0.7557853228, 0.),
    complex(0.249204646, 0.003371507),
    complex(-0.001541739, 0.041058560),
    complex(-0.10162907, 0.01727609),
    complex(-0.26623489, -0.36249218),
    complex(-0.6870983, -1.1651967),
)

# Approximate inverse of _B
_C = (
    complex(1.3231270439, 0.),
    complex(-0.577245789, -0.007809598),
    complex(0.508307513, -0.112208952),
    complex(-0.15094762, 0.18200602),
    complex(1.01418179, 1.64497696),
    complex(1.9660549, 2.5127645),
)

# Isometric latitude back to latitude
_D = (
    1.5627014243, 0.5185406398, -0.03333098, -0.1052906, -0.0368594,
    0.007317, 0.01220, 0.00394, -0.0013,
)

_TOL = 1.0e-14


def _power_series(coefficients, value):
    """sum(coefficients[n - 1] * value ** n) for n from 1"""
    total = 0
    power = 1
    for coefficient in coefficients:
        power *= value
        total += coefficient * power
    return total


class NewZealandMapGrid(Projection):
    """
    New Zealand Map Grid: a complex polynomial conformal mapping on the
    International 1924 ellipsoid. The inverse refines the series
    approximation with Newton's method.
    """
    names = ('nzmg', 'New_Zealand_Map_Grid', 'New Zealand Map Grid')

    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        d_phi = (lat - self.lat0) / SEC_TO_RAD * 1e-5
        d_psi = _power_series(_A, d_phi)

        theta = complex(d_psi, lon - self.long0)
        z = _power_series(_B, theta)

        return z.imag * self.a + self.x0, z.real * self.a + self.y0

    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        z = complex((y - self.y0) / self.a, (x - self.x0) / self.a)
        theta = _power_series(_C, z)

        for _ in range(NZMG_MAX_ITER):
            num = z
            den = _B[0]
            power = 1
            for n, coefficient in enumerate(_B[1:], start=2):
                power *= theta
                num += (n - 1) * coefficient * power * theta
                den += n * coefficient * power
            step = num / den - theta
            theta += step
            if abs(step) < _TOL:
                break
        else:
            self.warn_once('NZMG inverse iteration did not converge; using the last estimate')

        d_phi = _power_series(_D, theta.real)
        lat = self.lat0 + d_phi * SEC_TO_RAD * 1e5
        lon = self.long0 + theta.imag
        return lon, lat
