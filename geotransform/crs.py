"""
A parsed coordinate reference system bound to its projection
"""

__all__ = ['Crs', 'parse']

from typing import Any, Mapping, Optional, Union

from geotransform.datum import Datum
from geotransform.definition import CrsDefinition, build_definition, parse_definition
from geotransform.point import Point
from geotransform.projections import Projection, get_projection
from geotransform.projections.longlat import LongLat
from geotransform.registry import CrsRegistry, default_registry


class Crs:
    """
    A coordinate reference system: a normalized definition and the
    projection it selects.

    Args:
        definition:
            The normalized definition

    Raises:
        UnknownProjectionError: if the definition names no known projection
    """

    def __init__(self, definition: CrsDefinition):
        self.definition = definition
        self.projection: Projection = get_projection(definition.proj_name)(definition)

    def __repr__(self):
        code = self.definition.srs_code or self.definition.title or self.proj_name
        return f'<Crs {code} ({self.proj_name})>'

    @property
    def proj_name(self) -> str:
        return self.projection.name

    @property
    def datum(self) -> Datum:
        return self.definition.datum

    @property
    def axis(self) -> str:
        return self.definition.axis

    @property
    def to_meter(self) -> Optional[float]:
        return self.definition.to_meter

    @property
    def from_greenwich(self) -> float:
        return self.definition.from_greenwich

    @property
    def is_longlat(self) -> bool:
        """Whether coordinates are geographic degrees rather than projected units"""
        return isinstance(self.projection, LongLat)

    def forward(self, point: Point) -> Point:
        """Projects longitude/latitude in radians to this CRS's meters"""
        return self.projection.forward(point)

    def inverse(self, point: Point) -> Point:
        """Unprojects meters in this CRS to longitude/latitude in radians"""
        return self.projection.inverse(point)


def parse(
    definition: Union[Crs, str, Mapping[str, Any]],
    registry: Optional[CrsRegistry] = None
) -> Crs:
    """
    Parses a CRS from a registered code, a PROJ string, a WKT string or a
    mapping of normalized parameters. A Crs is returned as-is.

    Args:
        definition:
            The CRS reference, e.g. 'EPSG:3857',
            '+proj=utm +zone=33 +datum=WGS84' or a WKT PROJCS

        registry: (Optional)
            Where to look up codes and grids. Defaults to the shared
            registry.

    Returns:
        Crs

    Raises:
        DefinitionError: if the definition cannot be interpreted
    """
    if isinstance(definition, Crs):
        return definition

    if registry is None:
        registry = default_registry()
    return Crs(build_definition(parse_definition(definition, registry), registry))
