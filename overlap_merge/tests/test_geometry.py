"""
Tests for geometry primitives of the overlap_merge package.
"""

import pytest
import numpy as np

from overlap_merge.core.geometry import Point, mean_point


class TestPoint:
    """Test the Point type."""

    def test_arithmetic(self):
        a = Point(1.0, 2.0, 3.0)
        b = Point(0.5, -1.0, 2.0)
        assert a + b == Point(1.5, 1.0, 5.0)
        assert a - b == Point(0.5, 3.0, 1.0)
        assert a.scale(2.0) == Point(2.0, 4.0, 6.0)

    def test_dot_and_norm(self):
        a = Point(1.0, 2.0, 2.0)
        assert a.dot(Point(1.0, 0.0, 1.0)) == 3.0
        assert a.norm() == 3.0

    def test_as_array(self):
        assert np.allclose(Point(1.0, 2.0, 3.0).as_array(), [1.0, 2.0, 3.0])


def test_mean_point():
    """The mean does not depend on the order of the points."""
    points = [Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0), Point(0.0, 3.0, 0.0)]
    expected = Point(1.0 / 3.0, 1.0, 0.0)
    for ordering in (points, points[::-1], [points[1], points[2], points[0]]):
        result = mean_point(ordering)
        assert result.x == pytest.approx(expected.x)
        assert result.y == pytest.approx(expected.y)
        assert result.z == pytest.approx(expected.z)


def test_mean_point_empty():
    assert mean_point([]) == Point()
