"""
Reference ellipsoid model
"""

__all__ = ['Ellipsoid', 'WGS84_ELLIPSOID']

from dataclasses import dataclass
import math
from typing import Optional

from geotransform._const import EPSLN, RA4, RA6, SIXTH, WGS84_A, WGS84_B, WGS84_ES
from geotransform.errors import DefinitionError
from geotransform.tables import ELLIPSOIDS, match_key


@dataclass(frozen=True)
class Ellipsoid:
    """
    A reference ellipsoid. Use Ellipsoid.derive() (or from_name) rather than
    the raw constructor, which does not check the derived constants against
    the axes.

    Attributes:
        a: semi-major axis (meters)
        b: semi-minor axis (meters)
        es: eccentricity squared, (a²-b²)/a²
        e: eccentricity
        ep2: second eccentricity squared, (a²-b²)/b²
        rf: reciprocal flattening, when it was part of the definition
        sphere: whether the figure is treated as a sphere
        name: descriptive name
    """
    a: float
    b: float
    es: float
    e: float
    ep2: float
    rf: Optional[float] = None
    sphere: bool = False
    name: Optional[str] = None

    @property
    def a2(self) -> float:
        return self.a * self.a

    @property
    def b2(self) -> float:
        return self.b * self.b

    @classmethod
    def derive(
        cls,
        a: float,
        b: Optional[float] = None,
        rf: Optional[float] = None,
        r_a: bool = False,
        name: Optional[str] = None,
    ) -> 'Ellipsoid':
        """
        Derives the eccentricities of an ellipsoid from its axes.

        Args:
            a:
                The semi-major axis

            b: (Optional)
                The semi-minor axis. Computed from rf when absent.

            rf: (Optional)
                The reciprocal flattening. A value of 0 denotes a sphere.

            r_a: (Default False)
                Replace the ellipsoid with the sphere of equal surface area

            name: (Optional)
                A descriptive name

        Returns:
            Ellipsoid
        """
        if a is None or a <= 0:
            raise DefinitionError(f'Semi-major axis must be positive, received {a}')

        if rf and not b:
            b = (1.0 - 1.0 / rf) * a

        sphere = False
        if b is None or rf == 0 or abs(a - b) < EPSLN:
            sphere = True
            b = a

        a2, b2 = a * a, b * b
        es = (a2 - b2) / a2

        if r_a:
            a *= 1 - es * (SIXTH + es * (RA4 + es * RA6))
            return cls(a=a, b=a, es=0., e=0., ep2=0., rf=rf, sphere=True, name=name)

        return cls(
            a=a,
            b=b,
            es=es,
            e=math.sqrt(es),
            ep2=(a2 - b2) / b2,
            rf=rf,
            sphere=sphere,
            name=name,
        )

    @classmethod
    def from_name(cls, ellps: str, r_a: bool = False) -> 'Ellipsoid':
        """
        Looks up a named ellipsoid, e.g. 'WGS84', 'clrk66', 'bessel'.

        Raises:
            DefinitionError: if the name is unknown
        """
        entry = match_key(ELLIPSOIDS, ellps)
        if entry is None:
            raise DefinitionError(f'Unknown ellipsoid: {ellps}')

        return cls.derive(
            entry['a'], entry.get('b'), entry.get('rf'), r_a=r_a, name=entry.get('name')
        )


# The WGS84 figure the datum pivot works in. Built from the pivot constants
# rather than the table entry, as the two differ below the millimeter.
WGS84_ELLIPSOID = Ellipsoid(
    a=WGS84_A,
    b=WGS84_B,
    es=WGS84_ES,
    e=math.sqrt(WGS84_ES),
    ep2=(WGS84_A ** 2 - WGS84_B ** 2) / WGS84_B ** 2,
    rf=298.257223563,
    name='WGS 84',
)
