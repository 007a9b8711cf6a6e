"""
The transformation pipeline between two coordinate reference systems
"""

__all__ = ['CrsLike', 'PointLike', 'Transformer', 'transform']

from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import ConfigDict, validate_call

from geotransform._const import D2R, R2D
from geotransform.axis import adjust_axis
from geotransform.crs import Crs, parse
from geotransform.datum import DatumType
from geotransform.datum_transform import datum_transform
from geotransform.errors import DomainError, GeoTransformError
from geotransform.point import Point
from geotransform.registry import CrsRegistry, default_registry

CrsLike = Union[Crs, str, Mapping[str, Any]]
PointLike = Union[Point, Sequence[float], Mapping[str, float]]

_SHIFTING_DATUMS = (DatumType.PARAM_3, DatumType.PARAM_7, DatumType.GRIDSHIFT)
_WGS84_LONGLAT = '+proj=longlat +ellps=WGS84 +datum=WGS84 +units=degrees'


def _needs_wgs84_pivot(source: Crs, dest: Crs) -> bool:
    """Whether a shifting source datum must pass through WGS84 to reach dest"""
    code = dest.definition.datum_code
    return (
        source.datum.datum_type in _SHIFTING_DATUMS
        and (code is None or code.lower() != 'wgs84')
    )


def _scale(point: Point, factor: float, with_z: bool) -> Point:
    return point.replace(
        x=point.x * factor,
        y=point.y * factor,
        z=point.z * factor if with_z and point.z is not None else point.z,
    )


def _run(
    source: Crs,
    dest: Crs,
    point: Point,
    enforce_axis: bool,
    registry: CrsRegistry
) -> Point:
    had_z = point.has_z
    point.check_finite()

    if _needs_wgs84_pivot(source, dest) or _needs_wgs84_pivot(dest, source):
        wgs84 = parse('WGS84' if 'WGS84' in registry else _WGS84_LONGLAT, registry)
        point = _run(source, wgs84, point, enforce_axis, registry)
        source = wgs84

    if enforce_axis and source.axis != 'enu':
        point = adjust_axis(source.axis, False, point)

    if source.is_longlat:
        point = _scale(point, D2R, False)
    else:
        if source.to_meter:
            point = _scale(point, source.to_meter, source.proj_name == 'geocent')
        point = source.inverse(point)

    if source.from_greenwich:
        point = point.replace(x=point.x + source.from_greenwich)

    point = datum_transform(source.datum, dest.datum, point)

    if dest.from_greenwich:
        point = point.replace(x=point.x - dest.from_greenwich)

    if dest.is_longlat:
        point = _scale(point, R2D, False)
    else:
        point = dest.forward(point)
        if dest.to_meter:
            point = _scale(point, 1 / dest.to_meter, dest.proj_name == 'geocent')

    if enforce_axis and dest.axis != 'enu':
        point = adjust_axis(dest.axis, True, point)

    if not had_z and point.has_z:
        point = point.replace(z=None)

    if not point.is_finite():
        raise DomainError(f'Transformation produced a non-finite result: {point!r}')

    return point


def transform(
    source: CrsLike,
    dest: CrsLike,
    point: PointLike,
    enforce_axis: bool = True,
    registry: Optional[CrsRegistry] = None
) -> Point:
    """
    Transforms a point from one CRS to another.

    Geographic coordinates are in degrees, projected coordinates in the
    CRS's units. When either side has a datum that shifts through WGS84
    and the other side is not WGS84, the point is routed through WGS84.

    Errors are passed to the registry's error handler, then raised.

    Args:
        source:
            The CRS of the input point: a Crs, code, PROJ string, WKT or
            parameter mapping

        dest:
            The CRS to transform to

        point:
            A Point, an (x, y[, z]) sequence or a mapping with 'x', 'y'
            and optionally 'z'

        enforce_axis: (Default True)
            Whether to honor the axis order of either CRS. When False,
            coordinates are always read and written as east, north, up.

        registry: (Optional)
            Where to look up codes and grids. Defaults to the shared
            registry.

    Returns:
        The transformed Point. It has a height only if the input did.

    Raises:
        GeoTransformError: on any failure, after reporting it
    """
    if registry is None:
        registry = default_registry()

    try:
        try:
            return _run(
                parse(source, registry),
                parse(dest, registry),
                Point.from_any(point),
                enforce_axis,
                registry,
            )
        except GeoTransformError:
            raise
        except (ArithmeticError, ValueError) as exc:
            raise DomainError(f'Point cannot be transformed: {exc}') from exc
    except GeoTransformError as exc:
        registry.report_error(exc)
        raise


def _restore_type(template: PointLike, point: Point) -> PointLike:
    """Returns a point in the same container type it was supplied in"""
    if isinstance(template, Point):
        return point

    if isinstance(template, Mapping):
        out = {key: val for key, val in template.items() if key not in ('x', 'y', 'z')}
        out.update(point.to_dict())
        return out

    if isinstance(template, tuple):
        return tuple(point)

    return list(point)


class Transformer:
    """
    Transforms points between a fixed pair of CRSs.

    With a single CRS, points are transformed between WGS84 and that CRS.

    Args:
        source:
            The source CRS, or the destination if `dest` is omitted

        dest: (Optional)
            The destination CRS

        registry: (Optional)
            Where to look up codes and grids. Defaults to the shared
            registry.

    Example:
        >>> Transformer('EPSG:3857').forward((-122.4194, 37.7749))
        (-13627665.27..., 4547675.35...)
    """

    @validate_call(config=ConfigDict(arbitrary_types_allowed=True))
    def __init__(
        self,
        source: Union[Crs, str, Mapping[str, Any]],
        dest: Optional[Union[Crs, str, Mapping[str, Any]]] = None,
        registry: Optional[CrsRegistry] = None
    ):
        self.registry = registry if registry is not None else default_registry()
        if dest is None:
            source, dest = 'WGS84' if 'WGS84' in self.registry else _WGS84_LONGLAT, source

        self.source = self._parse(source)
        self.dest = self._parse(dest)

    def __repr__(self):
        return f'<Transformer {self.source!r} -> {self.dest!r}>'

    def _parse(self, definition: CrsLike) -> Crs:
        try:
            return parse(definition, self.registry)
        except GeoTransformError as exc:
            self.registry.report_error(exc)
            raise

    def forward(self, point: PointLike, enforce_axis: bool = True) -> PointLike:
        """
        Transforms a point from the source CRS to the destination CRS.

        Args:
            point:
                A Point, an (x, y[, z]) sequence or a mapping with 'x', 'y'
                and optionally 'z'

            enforce_axis: (Default True)
                Whether to honor the CRSs' axis orders

        Returns:
            The transformed point, in the same container type as the input
        """
        result = transform(self.source, self.dest, point, enforce_axis, self.registry)
        return _restore_type(point, result)

    def inverse(self, point: PointLike, enforce_axis: bool = True) -> PointLike:
        """Transforms a point from the destination CRS back to the source CRS"""
        result = transform(self.dest, self.source, point, enforce_axis, self.registry)
        return _restore_type(point, result)
