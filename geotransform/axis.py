"""
Axis order handling.

An axis code is three letters naming what each of a point's x, y and z
components holds: e/w for easting/westing, n/s for northing/southing and
u/d for up/down. The pipeline works in 'enu'.
"""

__all__ = ['AXIS_LETTERS', 'adjust_axis', 'is_valid_axis']

from typing import Dict, Optional

from geotransform.errors import AxisError
from geotransform.point import Point

AXIS_LETTERS = 'ewnsud'

# letter -> (canonical component, sign)
_AXIS_MAP = {
    'e': ('x', 1.0),
    'w': ('x', -1.0),
    'n': ('y', 1.0),
    's': ('y', -1.0),
    'u': ('z', 1.0),
    'd': ('z', -1.0),
}


def is_valid_axis(axis: str) -> bool:
    """Whether a code is three distinct letters from 'ewnsud'"""
    return (
        len(axis) == 3
        and all(letter in AXIS_LETTERS for letter in axis)
        and len(set(axis)) == 3
    )


def _check_axis(axis: str):
    if any(letter not in _AXIS_MAP for letter in axis) or len(axis) != 3:
        raise AxisError(f"Axis '{axis}' must be three letters from '{AXIS_LETTERS}'")

    components = sorted(_AXIS_MAP[letter][0] for letter in axis)
    if components != ['x', 'y', 'z']:
        raise AxisError(
            f"Axis '{axis}' must name one east/west, one north/south and one up/down axis"
        )


def adjust_axis(axis: str, denormalize: bool, point: Point) -> Point:
    """
    Reorders and re-signs a point's components between an axis order and the
    canonical 'enu' order.

    Normalizing and then denormalizing with the same code returns the
    original point. A missing height stays missing.

    Args:
        axis:
            The axis code of the non-canonical side, e.g. 'neu', 'wsu'

        denormalize:
            False to convert from `axis` to 'enu', True to convert from 'enu'
            to `axis`

        point:
            The point

    Returns:
        The reordered point
    """
    axis = axis.lower()
    _check_axis(axis)
    if axis == 'enu':
        return point

    slots = ('x', 'y', 'z')
    values: Dict[str, Optional[float]] = {'x': point.x, 'y': point.y, 'z': point.z}
    out: Dict[str, Optional[float]] = {}

    for slot, letter in zip(slots, axis):
        canonical, direction = _AXIS_MAP[letter]
        src, dst = (canonical, slot) if denormalize else (slot, canonical)
        value = values[src]
        if value is None:
            if dst != 'z':
                raise AxisError(
                    f"Axis '{axis}' mixes the vertical axis with a horizontal "
                    f"component but the point has no z value"
                )
            out[dst] = None
            continue
        out[dst] = direction * value

    return Point(out['x'], out['y'], out['z'])
