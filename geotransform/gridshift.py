"""
Grid-based datum shifts (NTv2 style correction grids).

Tables are stored east-positive: `ll` is the south-west node, longitude
increases eastward along a row and rows run south to north. Corrections are
(Δlon, Δlat) in radians, also east-positive.
"""

__all__ = [
    'GridRef', 'GridShiftTable', 'apply_gridshift', 'decode_ntv2',
    'nad_cvt', 'nad_intr', 'parse_grid_names'
]

from dataclasses import dataclass
import math
from typing import Any, Callable, List, Optional, Sequence, Tuple

import numpy as np
from pydantic import ConfigDict, validate_call

from geotransform._const import (
    GRID_INVERSE_MAX_ITER, GRID_INVERSE_TOL, NULL_GRID, SEC_TO_RAD
)
from geotransform._math import adjust_lon
from geotransform.errors import GridShiftError
from geotransform.point import Point
from geotransform.utils.logging import LOGGER

_NAN_PAIR = (math.nan, math.nan)

# Tolerance, in cells, for positions inside the padded bounding box
_EDGE = 1.0e-3


class GridShiftTable:
    """
    A single correction grid.

    Args:
        ll:
            The (longitude, latitude) of the south-west node, in radians

        del_:
            The (longitude, latitude) node spacing, in radians

        lim:
            The number of (columns, rows)

        cvs:
            The correction vectors, shaped (columns * rows, 2), row-major
            starting at the south-west node

    Keyword Args:
        name: (str) (Optional)
            A descriptive name, e.g. the NTv2 sub-grid name
    """

    @validate_call(config=ConfigDict(arbitrary_types_allowed=True))
    def __init__(
        self,
        ll: Tuple[float, float],
        del_: Tuple[float, float],
        lim: Tuple[int, int],
        cvs: Any,
        name: Optional[str] = None,
    ):
        if lim[0] < 2 or lim[1] < 2:
            raise GridShiftError(f'Grids require at least 2x2 nodes, received {lim}')

        if del_[0] <= 0 or del_[1] <= 0:
            raise GridShiftError(f'Grid node spacing must be positive, received {del_}')

        values = np.asarray(cvs, dtype=np.float64).reshape(-1, 2)
        if values.shape[0] != lim[0] * lim[1]:
            raise GridShiftError(
                f'Grid has {values.shape[0]} correction vectors but '
                f'{lim[0]}x{lim[1]} nodes'
            )
        values.setflags(write=False)

        self.ll = ll
        self.del_ = del_
        self.lim = lim
        self.cvs = values
        self.name = name

    def __repr__(self):
        return f'<GridShiftTable {self.name or ""} {self.lim[0]}x{self.lim[1]}>'

    @property
    def epsilon(self) -> float:
        """Padding applied to the bounding box"""
        return (abs(self.del_[0]) + abs(self.del_[1])) / 10000.0

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """The padded (min lon, min lat, max lon, max lat), in radians"""
        eps = self.epsilon
        return (
            self.ll[0] - eps,
            self.ll[1] - eps,
            self.ll[0] + (self.lim[0] - 1) * self.del_[0] + eps,
            self.ll[1] + (self.lim[1] - 1) * self.del_[1] + eps,
        )

    def covers(self, lon: float, lat: float) -> bool:
        """Whether a point falls within the padded bounding box"""
        min_x, min_y, max_x, max_y = self.bounds
        return min_x <= lon <= max_x and min_y <= lat <= max_y


@dataclass(frozen=True)
class GridRef:
    """
    A named grid referenced by a datum.

    Attributes:
        name: the grid name, without the optional marker
        mandatory: whether a missing grid is an error
        tables: the resolved tables, or None if the grid was not registered
    """
    name: str
    mandatory: bool
    tables: Optional[Tuple[GridShiftTable, ...]] = None

    @property
    def is_null(self) -> bool:
        return self.name == NULL_GRID


def parse_grid_names(
    nadgrids: str,
    resolve: Callable[[str], Optional[Sequence[GridShiftTable]]]
) -> Tuple[GridRef, ...]:
    """
    Parses a comma separated grid list, e.g. '@conus,@alaska,ntv2_0.gsb'.
    A leading '@' marks a grid as optional.

    Args:
        nadgrids:
            The grid list

        resolve:
            Returns the tables registered under a name, or None

    Returns:
        The grid references, in order
    """
    refs = []
    for raw in nadgrids.split(','):
        raw = raw.strip()
        if not raw:
            continue

        optional = raw.startswith('@')
        name = raw[1:] if optional else raw
        if name == NULL_GRID:
            refs.append(GridRef(name, not optional, ()))
            continue

        tables = resolve(name)
        refs.append(
            GridRef(name, not optional, None if tables is None else tuple(tables))
        )

    return tuple(refs)


def nad_intr(lon: float, lat: float, table: GridShiftTable) -> Tuple[float, float]:
    """
    Bilinearly interpolates the correction at a position relative to the
    table's south-west node.

    Args:
        lon, lat:
            The offset from the south-west node, in radians

        table:
            The grid

    Returns:
        The (Δlon, Δlat) correction, or a NaN pair outside the grid
    """
    t_x = lon / table.del_[0]
    t_y = lat / table.del_[1]
    cols, rows = table.lim

    if not (-_EDGE <= t_x <= cols - 1 + _EDGE and -_EDGE <= t_y <= rows - 1 + _EDGE):
        return _NAN_PAIR

    t_x = min(max(t_x, 0.0), cols - 1.0)
    t_y = min(max(t_y, 0.0), rows - 1.0)

    # Points on the east or north edge use the last cell
    idx_x = min(int(math.floor(t_x)), cols - 2)
    idx_y = min(int(math.floor(t_y)), rows - 2)
    frct_x = t_x - idx_x
    frct_y = t_y - idx_y

    inx = idx_y * cols + idx_x
    f00 = table.cvs[inx]
    f10 = table.cvs[inx + 1]
    f11 = table.cvs[inx + 1 + cols]
    f01 = table.cvs[inx + cols]

    m11 = frct_x * frct_y
    m10 = frct_x * (1.0 - frct_y)
    m00 = (1.0 - frct_x) * (1.0 - frct_y)
    m01 = (1.0 - frct_x) * frct_y

    return (
        float(m00 * f00[0] + m10 * f10[0] + m01 * f01[0] + m11 * f11[0]),
        float(m00 * f00[1] + m10 * f10[1] + m01 * f01[1] + m11 * f11[1]),
    )


def nad_cvt(
    lon: float,
    lat: float,
    inverse: bool,
    table: GridShiftTable
) -> Tuple[float, float]:
    """
    Applies a grid's correction to a geodetic position.

    The forward direction adds the interpolated correction. The inverse
    direction starts from the position minus its correction and refines it
    until re-applying the forward correction reproduces the input.

    Args:
        lon, lat:
            The position, in radians

        inverse:
            Remove rather than apply the correction

        table:
            The grid

    Returns:
        The shifted (lon, lat), or a NaN pair if the grid does not cover the
        position
    """
    if math.isnan(lon):
        return _NAN_PAIR

    tb_x = lon - table.ll[0]
    if tb_x < -table.epsilon:
        # Grids crossing the antimeridian
        tb_x = adjust_lon(tb_x - math.pi) + math.pi
    tb_y = lat - table.ll[1]

    shift = nad_intr(tb_x, tb_y, table)
    if math.isnan(shift[0]):
        return _NAN_PAIR

    if not inverse:
        return lon + shift[0], lat + shift[1]

    t_x, t_y = tb_x - shift[0], tb_y - shift[1]
    for _ in range(GRID_INVERSE_MAX_ITER):
        delta = nad_intr(t_x, t_y, table)
        if math.isnan(delta[0]):
            LOGGER.warning(
                'Inverse grid shift iteration left the grid; using the first approximation'
            )
            break

        dif_x = tb_x - (delta[0] + t_x)
        dif_y = tb_y - (delta[1] + t_y)
        t_x += dif_x
        t_y += dif_y
        if abs(dif_x) <= GRID_INVERSE_TOL and abs(dif_y) <= GRID_INVERSE_TOL:
            break
    else:
        LOGGER.warning(
            'Inverse grid shift did not converge after %s iterations; '
            'using the best estimate', GRID_INVERSE_MAX_ITER
        )

    return adjust_lon(t_x + table.ll[0]), t_y + table.ll[1]


def apply_gridshift(
    grids: Sequence[GridRef],
    inverse: bool,
    point: Point
) -> Optional[Point]:
    """
    Shifts a geodetic point (radians) using the first grid covering it.

    Args:
        grids:
            The ordered grid references of a datum

        inverse:
            Remove rather than apply the correction

        point:
            The point

    Returns:
        The shifted point, or None if no grid covers the point and every
        grid that was tried is optional

    Raises:
        GridShiftError: a mandatory grid is not registered, or no grid covers
            the point and at least one mandatory grid was tried
    """
    lon, lat = point.x, point.y
    tried = []
    tried_mandatory = False

    for grid in grids:
        if grid.is_null:
            return point

        if grid.tables is None:
            if grid.mandatory:
                raise GridShiftError(f"Unable to find mandatory grid '{grid.name}'")
            continue

        tried.append(grid.name)
        tried_mandatory = tried_mandatory or grid.mandatory
        for table in grid.tables:
            if not table.covers(lon, lat):
                continue

            shifted = nad_cvt(lon, lat, inverse, table)
            if not math.isnan(shifted[0]):
                return point.replace(x=shifted[0], y=shifted[1])

    if tried_mandatory:
        raise GridShiftError(
            f'Failed to find a grid shift table for location '
            f'({math.degrees(lon)}, {math.degrees(lat)}); tried {tried}'
        )

    return None


def _read(data: bytes, fmt: str, offset: int):
    return np.frombuffer(data, dtype=np.dtype(fmt), count=1, offset=offset)[0]


def _read_label(data: bytes, offset: int) -> str:
    return data[offset:offset + 8].decode('ascii', errors='replace').strip().strip('\x00')


def decode_ntv2(data: bytes) -> List[GridShiftTable]:
    """
    Decodes an in-memory NTv2 grid file into its sub-grids.

    NTv2 stores longitudes positive westward and corrections in seconds of
    arc; the returned tables are converted to east-positive radians.

    Args:
        data:
            The raw file contents

    Returns:
        One GridShiftTable per sub-grid, in file order
    """
    if len(data) < 176:
        raise GridShiftError('NTv2 buffer is too short to hold a header')

    if int(_read(data, '<i4', 8)) == 11:
        endian = '<'
    elif int(_read(data, '>i4', 8)) == 11:
        endian = '>'
    else:
        raise GridShiftError('Buffer is not an NTv2 grid (bad overview header)')

    num_subgrids = int(_read(data, f'{endian}i4', 40))
    tables = []
    offset = 176
    for _ in range(num_subgrids):
        if offset + 176 > len(data):
            raise GridShiftError('NTv2 buffer ends inside a sub-grid header')

        name = _read_label(data, offset + 8)
        lower_lat = float(_read(data, f'{endian}f8', offset + 72))
        upper_lat = float(_read(data, f'{endian}f8', offset + 88))
        lower_lon = float(_read(data, f'{endian}f8', offset + 104))
        upper_lon = float(_read(data, f'{endian}f8', offset + 120))
        lat_inc = float(_read(data, f'{endian}f8', offset + 136))
        lon_inc = float(_read(data, f'{endian}f8', offset + 152))
        count = int(_read(data, f'{endian}i4', offset + 168))

        cols = int(round((upper_lon - lower_lon) / lon_inc)) + 1
        rows = int(round((upper_lat - lower_lat) / lat_inc)) + 1
        if cols * rows != count:
            raise GridShiftError(
                f"NTv2 sub-grid '{name}' declares {count} nodes but spans {cols}x{rows}"
            )

        offset += 176
        if offset + count * 16 > len(data):
            raise GridShiftError(f"NTv2 buffer ends inside sub-grid '{name}'")

        # Each node: latitude shift, longitude shift, two accuracies
        nodes = np.frombuffer(
            data, dtype=np.dtype(f'{endian}f4'), count=count * 4, offset=offset
        ).astype(np.float64).reshape(rows, cols, 4)
        offset += count * 16

        # Rows run east to west in the file; flip to west to east
        nodes = nodes[:, ::-1, :]
        cvs = np.stack(
            (-nodes[:, :, 1].ravel(), nodes[:, :, 0].ravel()), axis=1
        ) * SEC_TO_RAD

        tables.append(
            GridShiftTable(
                (-upper_lon * SEC_TO_RAD, lower_lat * SEC_TO_RAD),
                (lon_inc * SEC_TO_RAD, lat_inc * SEC_TO_RAD),
                (cols, rows),
                cvs,
                name=name,
            )
        )

    return tables
