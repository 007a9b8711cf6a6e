import math

import pytest

from geotransform.errors import DomainError
from geotransform.point import Point


def test_point_init():
    point = Point(1, '2.5')
    assert point.x == 1.
    assert point.y == 2.5
    assert point.z is None
    assert not point.has_z

    point = Point(1, 2, 3)
    assert point.z == 3.
    assert point.has_z


def test_point_eq():
    assert Point(1, 2) == Point(1., 2.)
    assert Point(1, 2) != Point(1, 2, 0)
    assert Point(1, 2) != (1, 2)

    assert len({Point(1, 2), Point(1, 2)}) == 1


def test_point_iter():
    assert list(Point(1, 2)) == [1., 2.]
    assert tuple(Point(1, 2, 3)) == (1., 2., 3.)


def test_point_repr():
    assert repr(Point(1, 2)) == '<Point(1.0, 2.0)>'
    assert repr(Point(1, 2, 3)) == '<Point(1.0, 2.0, 3.0)>'


def test_point_replace():
    point = Point(1, 2, 3)
    new = point.replace(x=5)
    assert new == Point(5, 2, 3)
    assert point == Point(1, 2, 3)

    assert point.replace(z=None) == Point(1, 2)


def test_point_is_finite():
    assert Point(1, 2).is_finite()
    assert not Point(math.nan, 2).is_finite()
    assert not Point(1, 2, math.inf).is_finite()

    point = Point(1, 2)
    assert point.check_finite() is point

    with pytest.raises(DomainError):
        Point(1, math.inf).check_finite()


def test_point_to_dict():
    assert Point(1, 2).to_dict() == {'x': 1., 'y': 2.}
    assert Point(1, 2, 3).to_dict() == {'x': 1., 'y': 2., 'z': 3.}


def test_point_from_any():
    point = Point(1, 2)
    assert Point.from_any(point) is point
    assert Point.from_any((1, 2)) == point
    assert Point.from_any([1, 2, 3]) == Point(1, 2, 3)
    assert Point.from_any({'x': 1, 'y': 2}) == point
    assert Point.from_any({'x': 1, 'y': 2, 'z': 3}) == Point(1, 2, 3)

    with pytest.raises(DomainError):
        Point.from_any({'x': 1})

    with pytest.raises(DomainError):
        Point.from_any((1, 2, 3, 4))

    with pytest.raises(DomainError):
        Point.from_any('1,2')

    with pytest.raises(DomainError):
        Point.from_any(1.)
