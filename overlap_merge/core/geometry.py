"""
Geometry primitives for overlap_merge package.
"""

import math
from typing import Iterable, NamedTuple

import numpy as np


class Point(NamedTuple):
    """Cartesian point in 3D space."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other):
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


def mean_point(points: Iterable[Point]) -> Point:
    """
    Arithmetic mean of a collection of points.
    
    Parameters:
        points (iterable): Points to average
        
    Returns:
        Point: The mean, or the origin for an empty collection
    """
    points = list(points)
    if not points:
        return Point()
    coords = np.array([p.as_array() for p in points])
    return Point(*(float(c) for c in np.mean(coords, axis=0)))
