"""
Base class for map projections
"""

__all__ = ['Projection']

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Optional, Tuple

from geotransform.point import Point
from geotransform.utils.mixins import LoggingMixin

if TYPE_CHECKING:
    from geotransform.definition import CrsDefinition


class Projection(LoggingMixin, ABC):  # pylint: disable=too-many-instance-attributes
    """
    A map projection bound to one CRS definition.

    Subclasses list the names they answer to in `names` (the first is the
    canonical PROJ name), precompute their constants in `init()`, and
    implement `_forward()` and `_inverse()`.

    Forward takes longitude and latitude in radians, relative to Greenwich,
    and returns easting and northing in meters. Inverse is the reverse.
    Heights pass through untouched.
    """
    names: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, definition: 'CrsDefinition'):
        super().__init__()
        self.definition = definition

        self.a = definition.a
        self.b = definition.b
        self.es = definition.es
        self.e = definition.e
        self.ep2 = definition.ep2
        self.rf = definition.rf
        self.sphere = definition.sphere

        self.k0 = definition.k0
        self.x0 = definition.x0
        self.y0 = definition.y0
        self.lat0 = definition.lat0
        self.lat1 = definition.lat1
        self.lat2: Optional[float] = definition.lat2
        self.lat_ts: Optional[float] = definition.lat_ts
        self.long0 = definition.long0
        self.long1: Optional[float] = definition.long1
        self.long2: Optional[float] = definition.long2
        self.longc: Optional[float] = definition.longc
        self.alpha: Optional[float] = definition.alpha
        self.rectified_grid_angle: Optional[float] = definition.rectified_grid_angle
        self.zone: Optional[int] = definition.zone
        self.utm_south = definition.utm_south

        self.init()

    def __repr__(self):
        return f'<{self.__class__.__name__} ({self.names[0]})>'

    @property
    def name(self) -> str:
        return self.names[0]

    def init(self):
        """Precomputes constants; called once at construction"""

    def forward(self, point: Point) -> Point:
        """Projects a geodetic point (radians) to planar coordinates"""
        x, y = self._forward(point.x, point.y)
        return point.replace(x=x, y=y)

    def inverse(self, point: Point) -> Point:
        """Unprojects planar coordinates to a geodetic point (radians)"""
        lon, lat = self._inverse(point.x, point.y)
        return point.replace(x=lon, y=lat)

    @abstractmethod
    def _forward(self, lon: float, lat: float) -> Tuple[float, float]:
        """Projects longitude/latitude in radians to x/y"""

    @abstractmethod
    def _inverse(self, x: float, y: float) -> Tuple[float, float]:
        """Unprojects x/y to longitude/latitude in radians"""
