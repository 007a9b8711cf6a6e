"""
Geodetic datum model
"""

__all__ = ['Datum', 'DatumType', 'build_datum', 'compare_datums']

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from geotransform._const import ES_TOLERANCE, SEC_TO_RAD
from geotransform.ellipsoid import Ellipsoid
from geotransform.errors import DefinitionError
from geotransform.gridshift import GridRef


class DatumType(Enum):
    """How a datum relates to WGS84"""
    PARAM_3 = 1
    PARAM_7 = 2
    GRIDSHIFT = 3
    WGS84 = 4
    NODATUM = 5


@dataclass(frozen=True)
class Datum:
    """
    A datum: a reference ellipsoid plus its relation to WGS84.

    Attributes:
        datum_type: the kind of relation to WGS84
        ellipsoid: the reference ellipsoid
        params: Helmert parameters, translation in meters, rotations in
            radians and scale as a multiplier (1 + ppm / 1e6). Empty if none.
        grids: the ordered grid references of a grid-shift datum
        code: the datum code the datum was built from, if any
    """
    datum_type: DatumType
    ellipsoid: Ellipsoid
    params: Tuple[float, ...] = ()
    grids: Tuple[GridRef, ...] = ()
    code: Optional[str] = None

    @property
    def a(self) -> float:
        return self.ellipsoid.a

    @property
    def b(self) -> float:
        return self.ellipsoid.b

    @property
    def es(self) -> float:
        return self.ellipsoid.es

    @property
    def ep2(self) -> float:
        return self.ellipsoid.ep2

    @property
    def is_parametric(self) -> bool:
        """Whether the datum shifts to WGS84 through a Helmert transform"""
        return self.datum_type in (DatumType.PARAM_3, DatumType.PARAM_7)

    @property
    def helmert_type(self) -> Optional[DatumType]:
        """
        The Helmert variant usable by this datum: its own type if parametric,
        the type implied by its fallback parameters if it is a grid-shift
        datum, else None
        """
        if self.is_parametric:
            return self.datum_type

        if self.datum_type is DatumType.GRIDSHIFT and self.params:
            return _params_type(self.params)

        return None


def _params_type(params: Sequence[float]) -> Optional[DatumType]:
    if len(params) > 3 and any(val != 0 for val in params[3:7]):
        return DatumType.PARAM_7
    if any(val != 0 for val in params[:3]):
        return DatumType.PARAM_3
    return None


def build_datum(
    ellipsoid: Ellipsoid,
    datum_code: Optional[str] = None,
    datum_params: Optional[Sequence[Union[float, str]]] = None,
    grids: Sequence[GridRef] = (),
) -> Datum:
    """
    Builds a Datum and classifies its type.

    A datum without a code (or with code 'none') has no datum; otherwise it
    is WGS84 unless non-zero Helmert parameters make it 3- or 7-parameter.
    A grid list always makes it a grid-shift datum, keeping any Helmert
    parameters as a fallback.

    Args:
        ellipsoid:
            The reference ellipsoid

        datum_code: (Optional)
            The datum code, e.g. 'wgs84', 'osgb36'

        datum_params: (Optional)
            3 or 7 Helmert parameters to WGS84 as found in a definition:
            meters, arc-seconds and parts per million

        grids: (Optional)
            Grid references, from parse_grid_names()

    Returns:
        Datum
    """
    datum_type = DatumType.NODATUM
    if datum_code is not None and datum_code.lower() != 'none':
        datum_type = DatumType.WGS84

    params: Tuple[float, ...] = ()
    if datum_params:
        try:
            values = [float(val) for val in datum_params]
        except (TypeError, ValueError) as exc:
            raise DefinitionError(f'Invalid datum parameters: {datum_params}') from exc

        if len(values) not in (3, 7):
            raise DefinitionError(
                f'Datum parameters must have 3 or 7 values, received {len(values)}'
            )

        implied = _params_type(values)
        if implied is DatumType.PARAM_7:
            values[3:6] = [val * SEC_TO_RAD for val in values[3:6]]
            values[6] = values[6] / 1000000.0 + 1.0
            params = tuple(values)
        else:
            params = tuple(values[:3])

        if implied is not None:
            datum_type = implied

    if grids:
        datum_type = DatumType.GRIDSHIFT

    return Datum(
        datum_type=datum_type,
        ellipsoid=ellipsoid,
        params=params,
        grids=tuple(grids),
        code=datum_code,
    )


def compare_datums(source: Datum, dest: Datum) -> bool:
    """
    Whether two datums are equivalent, in which case no datum shift is
    needed between them.
    """
    if source.datum_type != dest.datum_type:
        return False

    if source.a != dest.a or abs(source.es - dest.es) > ES_TOLERANCE:
        return False

    if source.datum_type is DatumType.PARAM_3:
        return source.params[:3] == dest.params[:3]

    if source.datum_type is DatumType.PARAM_7:
        return source.params == dest.params

    if source.datum_type is DatumType.GRIDSHIFT:
        return (
            [grid.name for grid in source.grids] == [grid.name for grid in dest.grids]
            and source.params == dest.params
        )

    return True
