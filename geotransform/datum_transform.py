"""
Shifting geodetic coordinates between datums
"""

__all__ = ['datum_transform']

from typing import NamedTuple, Optional, Tuple

from geotransform.datum import Datum, DatumType, compare_datums
from geotransform.ellipsoid import WGS84_ELLIPSOID
from geotransform.geocentric import (
    geocentric_from_wgs84, geocentric_to_geodetic, geocentric_to_wgs84,
    geodetic_to_geocentric
)
from geotransform.gridshift import apply_gridshift
from geotransform.point import Point
from geotransform.utils.logging import warn_once


class _Frame(NamedTuple):
    """The ellipsoid and Helmert parameters one side of a shift works in"""
    a: float
    b: float
    es: float
    helmert: Optional[DatumType] = None
    params: Tuple[float, ...] = ()


_WGS84_FRAME = _Frame(WGS84_ELLIPSOID.a, WGS84_ELLIPSOID.b, WGS84_ELLIPSOID.es)


def _datum_frame(datum: Datum) -> _Frame:
    return _Frame(datum.a, datum.b, datum.es, datum.helmert_type, datum.params)


def _shift(point: Point, source: _Frame, dest: _Frame) -> Point:
    if (
        source.a == dest.a and source.es == dest.es
        and source.helmert is None and dest.helmert is None
    ):
        return point

    geocentric = geodetic_to_geocentric(point, source.es, source.a)
    if source.helmert is not None:
        geocentric = geocentric_to_wgs84(geocentric, source.helmert, source.params)
    if dest.helmert is not None:
        geocentric = geocentric_from_wgs84(geocentric, dest.helmert, dest.params)

    return geocentric_to_geodetic(geocentric, dest.es, dest.a, dest.b)


def datum_transform(source: Datum, dest: Datum, point: Point) -> Point:
    """
    Shifts a geodetic point from one datum to another.

    Grid-shift datums first try their grids, which move the point to WGS84.
    If every grid is optional and none covers the point, a grid-shift datum
    falls back to its Helmert parameters, or leaves the point unshifted if
    it has none.

    Args:
        source:
            The datum of the input point

        dest:
            The datum to shift to

        point:
            Longitude and latitude in radians, optional height in meters

    Returns:
        The shifted point. The input object itself is returned when no shift
        is needed.

    Raises:
        GridShiftError: a mandatory grid is missing or does not cover the
            point
    """
    if compare_datums(source, dest):
        return point

    if DatumType.NODATUM in (source.datum_type, dest.datum_type):
        return point

    source_frame = _datum_frame(source)
    if source.datum_type is DatumType.GRIDSHIFT:
        shifted = apply_gridshift(source.grids, False, point)
        if shifted is not None:
            point = shifted
            source_frame = _WGS84_FRAME
        elif source.helmert_type is None:
            warn_once(
                f'No grid for datum {source.code or "(unnamed)"} covers the point and '
                f'the datum has no Helmert parameters; the point is not shifted'
            )
            return point

    dest_frame = _WGS84_FRAME if dest.datum_type is DatumType.GRIDSHIFT else _datum_frame(dest)

    point = _shift(point, source_frame, dest_frame)

    if dest.datum_type is DatumType.GRIDSHIFT:
        shifted = apply_gridshift(dest.grids, True, point)
        if shifted is not None:
            return shifted

        if dest.helmert_type is None:
            warn_once(
                f'No grid for datum {dest.code or "(unnamed)"} covers the point and '
                f'the datum has no Helmert parameters; the point is not shifted'
            )
            return point

        return _shift(point, _WGS84_FRAME, _datum_frame(dest))

    return point
