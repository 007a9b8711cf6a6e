"""
Representation of a point flowing through the transformation pipeline
"""

__all__ = ['Point']

import math
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from geotransform.errors import DomainError


class Point:
    """
    An immutable (x, y[, z]) triple.

    Depending on the pipeline stage, x/y hold longitude/latitude in radians or
    degrees, projected easting/northing, or geocentric X/Y. z is the height
    (or geocentric Z) and stays None when the caller never supplied one.
    """

    __slots__ = ('_x', '_y', '_z')

    def __init__(
        self,
        x: Union[float, int, str],
        y: Union[float, int, str],
        z: Optional[Union[float, int, str]] = None,
    ):
        self._x = float(x)
        self._y = float(y)
        self._z = None if z is None else float(z)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> Optional[float]:
        return self._z

    @property
    def has_z(self) -> bool:
        return self._z is not None

    def __eq__(self, other):
        if not isinstance(other, Point):
            return False

        return (
            self.x == other.x and
            self.y == other.y and
            self.z == other.z
        )

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __iter__(self):
        yield self.x
        yield self.y
        if self.z is not None:
            yield self.z

    def __repr__(self):
        parts = filter(lambda x: x is not None, (self.x, self.y, self.z))
        return f'<Point({", ".join(map(str, parts))})>'

    def replace(self, **kwargs) -> 'Point':
        """
        Returns a copy of this point with the given components replaced.

        Keyword Args:
            x, y, z: the new component values. Pass z=None to drop the height.
        """
        return Point(
            kwargs.get('x', self.x),
            kwargs.get('y', self.y),
            kwargs.get('z', self.z),
        )

    def is_finite(self) -> bool:
        """True if every present component is a finite number"""
        return all(math.isfinite(val) for val in self)

    def check_finite(self) -> 'Point':
        """Raises a DomainError unless every present component is finite"""
        if not self.is_finite():
            raise DomainError(
                f'Coordinates must be finite numbers, received {self!r}'
            )
        return self

    def to_dict(self) -> Dict[str, float]:
        out = {'x': self.x, 'y': self.y}
        if self.z is not None:
            out['z'] = self.z
        return out

    @classmethod
    def from_any(cls, obj: Any) -> 'Point':
        """
        Creates a Point from a Point, a 2- or 3-element sequence, or a mapping
        with 'x', 'y' and optionally 'z' keys.

        Args:
            obj:
                The point-like object

        Returns:
            Point
        """
        if isinstance(obj, Point):
            return obj

        if isinstance(obj, Mapping):
            try:
                return cls(obj['x'], obj['y'], obj.get('z'))
            except KeyError as exc:
                raise DomainError(f'Point mapping is missing key {exc}') from exc

        if isinstance(obj, Sequence) and not isinstance(obj, str):
            if len(obj) not in (2, 3):
                raise DomainError(
                    f'Point sequences must have 2 or 3 elements, received {len(obj)}'
                )
            return cls(*obj)

        raise DomainError(f'Cannot interpret {obj!r} as a point')
