"""
Geometry filters applied while reading.

A filter is consulted for every point and member as it is parsed; a rejected
candidate is dropped before it is attached to its parent.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Union

from .geometry import Geometry, GeometryType, Point


class GeometryFilter(Protocol):
    def filter(
        self, containing_type: GeometryType | None, geometry: Geometry
    ) -> bool: ...


FilterCallable = Callable[[Union[GeometryType, None], Geometry], bool]


class FiniteFilterType(Enum):
    """Which non-finite ordinate values a PointFiniteFilter lets through"""

    FINITE = "finite"
    FINITE_AND_NAN = "finite-and-nan"
    FINITE_AND_INFINITE = "finite-and-infinite"


@dataclass(frozen=True)
class PointFiniteFilter:
    """
    Reject points with non-finite ordinates.

    X and Y are always checked. Z and M are checked when enabled and present
    on the point. Non-point geometries pass, since their points have already
    been through the filter by the time they are complete.

    Attributes:
        type: Which non-finite values are tolerated
        filter_z: Also check the Z ordinate
        filter_m: Also check the M ordinate
    """

    type: FiniteFilterType = FiniteFilterType.FINITE
    filter_z: bool = False
    filter_m: bool = False

    def filter(self, containing_type: GeometryType | None, geometry: Geometry) -> bool:
        if geometry.geometry_type != GeometryType.POINT:
            return True
        assert isinstance(geometry, Point)
        return self.filter_point(geometry)

    def filter_point(self, point: Point) -> bool:
        return (
            self._accepts(point.x)
            and self._accepts(point.y)
            and (not self.filter_z or point.z is None or self._accepts(point.z))
            and (not self.filter_m or point.m is None or self._accepts(point.m))
        )

    def _accepts(self, value: float) -> bool:
        if math.isfinite(value):
            return True
        if self.type == FiniteFilterType.FINITE_AND_NAN:
            return math.isnan(value)
        if self.type == FiniteFilterType.FINITE_AND_INFINITE:
            return math.isinf(value)
        return False

    def __call__(self, containing_type: GeometryType | None, geometry: Geometry) -> bool:
        return self.filter(containing_type, geometry)
