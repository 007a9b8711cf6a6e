
import math

from pytest import approx

from geotransform.point import Point


def assert_points_equal(p1: Point, p2: Point, abs_tol=1e-7):
    """
    Asserts that two points are equal within a specified absolute tolerance.

    Args:
        p1: The first Point
        p2: The second Point
        abs_tol: The absolute tolerance for floating point comparison.
                 Default is 1e-7.
    """
    try:
        assert p1.x == approx(p2.x, abs=abs_tol)
        assert p1.y == approx(p2.y, abs=abs_tol)

        # Heights must both be present or both be missing
        if p2.z is None:
            assert p1.z is None
        else:
            assert p1.z == approx(p2.z, abs=abs_tol)
    except AssertionError as e:
        print(p1)
        print(p2)
        raise e


def radians(lon: float, lat: float, z=None) -> Point:
    """A Point from longitude/latitude in degrees, in radians"""
    return Point(math.radians(lon), math.radians(lat), z)
