import pytest

from geotransform.axis import adjust_axis, is_valid_axis
from geotransform.errors import AxisError
from geotransform.point import Point


def test_is_valid_axis():
    assert is_valid_axis('enu')
    assert is_valid_axis('neu')
    assert is_valid_axis('wsu')
    assert not is_valid_axis('en')
    assert not is_valid_axis('eeu')
    assert not is_valid_axis('abc')


def test_adjust_axis_enu_is_identity():
    point = Point(1, 2, 3)
    assert adjust_axis('enu', False, point) is point
    assert adjust_axis('ENU', True, point) is point


def test_adjust_axis_normalize():
    assert adjust_axis('neu', False, Point(2, 1, 3)) == Point(1, 2, 3)
    assert adjust_axis('wsu', False, Point(1, 2, 3)) == Point(-1, -2, 3)
    assert adjust_axis('end', False, Point(1, 2, 3)) == Point(1, 2, -3)
    assert adjust_axis('une', False, Point(3, 2, 1)) == Point(1, 2, 3)


def test_adjust_axis_denormalize():
    assert adjust_axis('neu', True, Point(1, 2, 3)) == Point(2, 1, 3)
    assert adjust_axis('wsu', True, Point(1, 2, 3)) == Point(-1, -2, 3)
    assert adjust_axis('une', True, Point(1, 2, 3)) == Point(3, 2, 1)


@pytest.mark.parametrize('axis', ['neu', 'wsu', 'esd', 'une', 'dws', 'nwu', 'seu'])
def test_adjust_axis_round_trip(axis):
    point = Point(1.5, -2.25, 3.125)
    assert adjust_axis(axis, True, adjust_axis(axis, False, point)) == point
    assert adjust_axis(axis, False, adjust_axis(axis, True, point)) == point


def test_adjust_axis_missing_height():
    out = adjust_axis('nwu', False, Point(1, 2))
    assert out == Point(-2, 1)
    assert out.z is None

    assert adjust_axis('nwu', True, out) == Point(1, 2)

    # The vertical axis in a horizontal slot needs a height
    with pytest.raises(AxisError):
        adjust_axis('une', False, Point(1, 2))


def test_adjust_axis_invalid():
    with pytest.raises(AxisError):
        adjust_axis('abc', False, Point(1, 2))

    with pytest.raises(AxisError):
        adjust_axis('en', False, Point(1, 2))

    with pytest.raises(AxisError):
        adjust_axis('nnu', False, Point(1, 2))

    # Two horizontal axes in the same direction family
    with pytest.raises(AxisError):
        adjust_axis('ewu', False, Point(1, 2))
