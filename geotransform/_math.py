"""
Series and iterative helpers shared by the projection algorithms.

Latitudes and longitudes are in radians throughout. Names follow the
conventions of Snyder's "Map Projections: A Working Manual" (USGS PP 1395).
"""

__all__ = [
    'adjust_lat', 'adjust_lon', 'asinz', 'e0fn', 'e1fn', 'e2fn', 'e3fn',
    'gN', 'imlfn', 'iqsfnz', 'mlfn', 'msfnz', 'phi2z', 'pj_enfn',
    'pj_inv_mlfn', 'pj_mlfn', 'qsfnz', 'sign', 'srat', 'tsfnz'
]

import math
from typing import List

from geotransform._const import (
    EPSLN, HALF_PI, IMLFN_MAX_ITER, INV_MLFN_MAX_ITER, IQSFNZ_MAX_ITER,
    PHI2Z_MAX_ITER, SPI, TWO_PI
)
from geotransform.errors import ConvergenceError

# Meridional distance series coefficients
_C00 = 1.0
_C02 = 0.25
_C04 = 0.046875
_C06 = 0.01953125
_C08 = 0.01068115234375
_C22 = 0.75
_C44 = 0.46875
_C46 = 0.01302083333333333333
_C48 = 0.00712076822916666666
_C66 = 0.36458333333333333333
_C68 = 0.00569661458333333333
_C88 = 0.3076171875


def sign(x: float) -> int:
    return -1 if x < 0 else 1


def adjust_lon(x: float) -> float:
    """Wraps a longitude into [-pi, pi]"""
    return x if abs(x) <= SPI else x - sign(x) * TWO_PI


def adjust_lat(x: float) -> float:
    """Folds a latitude overshooting a pole back into [-pi/2, pi/2]"""
    return x if abs(x) < HALF_PI else x - sign(x) * math.pi


def asinz(x: float) -> float:
    """arcsin, clamping arguments that drift outside [-1, 1]"""
    if abs(x) > 1:
        x = 1 if x > 1 else -1
    return math.asin(x)


def msfnz(eccent: float, sinphi: float, cosphi: float) -> float:
    """Snyder's m, the scaled radius of a parallel"""
    con = eccent * sinphi
    return cosphi / math.sqrt(1 - con * con)


def tsfnz(eccent: float, phi: float, sinphi: float) -> float:
    """Snyder's t, used by the conformal projections"""
    con = eccent * sinphi
    com = 0.5 * eccent
    con = math.pow((1 - con) / (1 + con), com)
    return math.tan(0.5 * (HALF_PI - phi)) / con


def phi2z(eccent: float, ts: float) -> float:
    """
    Inverts tsfnz: computes the latitude whose Snyder t equals ts.

    Raises:
        ConvergenceError: if the iteration does not settle
    """
    eccnth = 0.5 * eccent
    phi = HALF_PI - 2 * math.atan(ts)
    for _ in range(PHI2Z_MAX_ITER + 1):
        con = eccent * math.sin(phi)
        dphi = HALF_PI - 2 * math.atan(ts * math.pow((1 - con) / (1 + con), eccnth)) - phi
        phi += dphi
        if abs(dphi) <= 1.0e-10:
            return phi

    raise ConvergenceError('Latitude (phi2z) iteration did not converge')


def qsfnz(eccent: float, sinphi: float) -> float:
    """Snyder's q, used by the equal-area projections"""
    if eccent > 1.0e-7:
        con = eccent * sinphi
        return (1 - eccent * eccent) * (
            sinphi / (1 - con * con) - (0.5 / eccent) * math.log((1 - con) / (1 + con))
        )
    return 2 * sinphi


def iqsfnz(eccent: float, q: float) -> float:
    """
    Inverts qsfnz.

    Raises:
        ConvergenceError: if the iteration does not settle
    """
    temp = 1 - (1 - eccent * eccent) / (2 * eccent) * math.log((1 - eccent) / (1 + eccent))
    if abs(abs(q) - temp) < 1.0e-6:
        return -HALF_PI if q < 0 else HALF_PI

    phi = math.asin(0.5 * q)
    for _ in range(IQSFNZ_MAX_ITER):
        sin_phi = math.sin(phi)
        cos_phi = math.cos(phi)
        con = eccent * sin_phi
        dphi = math.pow(1 - con * con, 2) / (2 * cos_phi) * (
            q / (1 - eccent * eccent) - sin_phi / (1 - con * con)
            + 0.5 / eccent * math.log((1 - con) / (1 + con))
        )
        phi += dphi
        if abs(dphi) <= 1.0e-10:
            return phi

    raise ConvergenceError('Authalic latitude (iqsfnz) iteration did not converge')


def e0fn(x: float) -> float:
    return 1 - 0.25 * x * (1 + x / 16 * (3 + 1.25 * x))


def e1fn(x: float) -> float:
    return 0.375 * x * (1 + 0.25 * x * (1 + 0.46875 * x))


def e2fn(x: float) -> float:
    return 0.05859375 * x * x * (1 + 0.75 * x)


def e3fn(x: float) -> float:
    return x * x * x * (35 / 3072)


def mlfn(e0: float, e1: float, e2: float, e3: float, phi: float) -> float:
    """Meridional distance from the equator, in units of the semi-major axis"""
    return e0 * phi - e1 * math.sin(2 * phi) + e2 * math.sin(4 * phi) - e3 * math.sin(6 * phi)


def imlfn(ml: float, e0: float, e1: float, e2: float, e3: float) -> float:
    """
    Inverts mlfn by Newton iteration.

    Raises:
        ConvergenceError: if the iteration does not settle
    """
    phi = ml / e0
    for _ in range(IMLFN_MAX_ITER):
        dphi = (ml - mlfn(e0, e1, e2, e3, phi)) / (
            e0 - 2 * e1 * math.cos(2 * phi) + 4 * e2 * math.cos(4 * phi)
            - 6 * e3 * math.cos(6 * phi)
        )
        phi += dphi
        if abs(dphi) <= 1.0e-10:
            return phi

    raise ConvergenceError('Meridional distance (imlfn) iteration did not converge')


def gN(a: float, e: float, sinphi: float) -> float:  # pylint: disable=invalid-name
    """Radius of curvature in the prime vertical"""
    temp = e * sinphi
    return a / math.sqrt(1 - temp * temp)


def pj_enfn(es: float) -> List[float]:
    """Coefficients of the meridional distance series for pj_mlfn"""
    en = [0.] * 5
    en[0] = _C00 - es * (_C02 + es * (_C04 + es * (_C06 + es * _C08)))
    en[1] = es * (_C22 - es * (_C04 + es * (_C06 + es * _C08)))
    t = es * es
    en[2] = t * (_C44 - es * (_C46 + es * _C48))
    t *= es
    en[3] = t * (_C66 - es * _C68)
    en[4] = t * es * _C88
    return en


def pj_mlfn(phi: float, sphi: float, cphi: float, en: List[float]) -> float:
    cphi *= sphi
    sphi *= sphi
    return en[0] * phi - cphi * (en[1] + sphi * (en[2] + sphi * (en[3] + sphi * en[4])))


def pj_inv_mlfn(arg: float, es: float, en: List[float]) -> float:
    """Inverts pj_mlfn. Returns the last estimate if the iteration cap is hit."""
    k = 1 / (1 - es)
    phi = arg
    for _ in range(INV_MLFN_MAX_ITER):
        s = math.sin(phi)
        t = 1 - es * s * s
        t = (pj_mlfn(phi, s, math.cos(phi), en) - arg) * (t * math.sqrt(t)) * k
        phi -= t
        if abs(t) < EPSLN:
            break

    return phi


def srat(esinp: float, exp: float) -> float:
    return math.pow((1 - esinp) / (1 + esinp), exp)
