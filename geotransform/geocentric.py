"""
Conversions between geodetic (lon, lat, height) and geocentric (X, Y, Z)
coordinates, and the Helmert transforms applied in geocentric space.
"""

__all__ = [
    'geocentric_from_wgs84', 'geocentric_to_geodetic', 'geocentric_to_wgs84',
    'geodetic_to_geocentric', 'helmert_matrix'
]

import math
from typing import Sequence

import numpy as np

from geotransform._const import (
    GEOCENTRIC_GENAU, GEOCENTRIC_GENAU2, GEOCENTRIC_MAX_ITER, HALF_PI, LATITUDE_CLAMP
)
from geotransform.datum import DatumType
from geotransform.errors import DomainError
from geotransform.point import Point
from geotransform.utils.logging import LOGGER


def geodetic_to_geocentric(point: Point, es: float, a: float) -> Point:
    """
    Converts geodetic coordinates to geocentric coordinates.

    Args:
        point:
            Longitude and latitude in radians, height in meters (a missing
            height is treated as 0)

        es:
            The ellipsoid's eccentricity squared

        a:
            The ellipsoid's semi-major axis

    Returns:
        The geocentric X, Y, Z in meters
    """
    lon, lat = point.x, point.y
    height = point.z or 0.0

    if abs(lat) > HALF_PI:
        if abs(lat) >= LATITUDE_CLAMP:
            raise DomainError(f'Latitude {lat} rad is outside [-pi/2, pi/2]')
        # Rounding noise just past a pole
        lat = math.copysign(HALF_PI, lat)

    if lon > math.pi:
        lon -= 2 * math.pi

    sin_lat = math.sin(lat)
    cos_lat = math.cos(lat)
    rn = a / math.sqrt(1.0 - es * sin_lat * sin_lat)

    return Point(
        (rn + height) * cos_lat * math.cos(lon),
        (rn + height) * cos_lat * math.sin(lon),
        (rn * (1 - es) + height) * sin_lat,
    )


def geocentric_to_geodetic(point: Point, es: float, a: float, b: float) -> Point:
    """
    Converts geocentric coordinates to geodetic coordinates, iterating on the
    latitude from a Bowring-style starting estimate.

    Points within 1e-12 * a of the polar axis get longitude 0. A point at the
    center of the earth has no defined geodetic position and is returned
    unchanged.

    Args:
        point:
            The geocentric X, Y, Z in meters

        es:
            The ellipsoid's eccentricity squared

        a:
            The ellipsoid's semi-major axis

        b:
            The ellipsoid's semi-minor axis

    Returns:
        Longitude and latitude in radians, height in meters
    """
    x, y = point.x, point.y
    z = point.z or 0.0

    p_dist = math.sqrt(x * x + y * y)
    r_dist = math.sqrt(x * x + y * y + z * z)

    if p_dist / a < GEOCENTRIC_GENAU:
        lon = 0.0
        if r_dist / a < GEOCENTRIC_GENAU:
            return point
    else:
        lon = math.atan2(y, x)

    ct = z / r_dist
    st = p_dist / r_dist
    rx = 1.0 / math.sqrt(1.0 - es * (2.0 - es) * st * st)
    cphi0 = st * (1.0 - es) * rx
    sphi0 = ct * rx

    height = 0.0
    cphi, sphi = cphi0, sphi0
    for _ in range(GEOCENTRIC_MAX_ITER):
        rn = a / math.sqrt(1.0 - es * sphi0 * sphi0)
        height = p_dist * cphi0 + z * sphi0 - rn * (1.0 - es * sphi0 * sphi0)
        rk = es * rn / (rn + height)
        rx = 1.0 / math.sqrt(1.0 - rk * (2.0 - rk) * st * st)
        cphi = st * (1.0 - rk) * rx
        sphi = ct * rx
        sdphi = sphi * cphi0 - cphi * sphi0
        cphi0 = cphi
        sphi0 = sphi
        if sdphi * sdphi <= GEOCENTRIC_GENAU2:
            break
    else:
        LOGGER.debug('Geocentric latitude iteration hit its cap; using the last estimate')

    lat = math.atan2(sphi, abs(cphi))
    return Point(lon, lat, height)


def helmert_matrix(params: Sequence[float]) -> np.ndarray:
    """
    The small-angle rotation matrix (I + R) of a 7-parameter Helmert
    transform, with rotations in radians.
    """
    r_x, r_y, r_z = params[3:6]
    return np.array([
        [1.0, -r_z, r_y],
        [r_z, 1.0, -r_x],
        [-r_y, r_x, 1.0],
    ])


def geocentric_to_wgs84(point: Point, datum_type: DatumType, params: Sequence[float]) -> Point:
    """
    Applies a datum's Helmert parameters, shifting geocentric coordinates
    from that datum to WGS84.

    Args:
        point:
            The geocentric point

        datum_type:
            PARAM_3 or PARAM_7; other types leave the point unchanged

        params:
            The Helmert parameters (translation, rotation in radians, scale
            multiplier)

    Returns:
        The geocentric point in WGS84
    """
    if datum_type is DatumType.PARAM_3:
        return Point(point.x + params[0], point.y + params[1], (point.z or 0.0) + params[2])

    if datum_type is DatumType.PARAM_7:
        xyz = np.array([point.x, point.y, point.z or 0.0])
        out = params[6] * (helmert_matrix(params) @ xyz) + np.asarray(params[:3])
        return Point(*out.tolist())

    return point


def geocentric_from_wgs84(point: Point, datum_type: DatumType, params: Sequence[float]) -> Point:
    """
    The inverse of geocentric_to_wgs84: shifts geocentric WGS84 coordinates
    to the datum described by the parameters.
    """
    if datum_type is DatumType.PARAM_3:
        return Point(point.x - params[0], point.y - params[1], (point.z or 0.0) - params[2])

    if datum_type is DatumType.PARAM_7:
        xyz = (np.array([point.x, point.y, point.z or 0.0]) - np.asarray(params[:3])) / params[6]
        out = helmert_matrix(params).T @ xyz
        return Point(*out.tolist())

    return point
