"""
Envelope (bounding box) computation over the geometry hierarchy.
"""

import logging
import math

from .errors import SFException
from .geometry import (
    CompoundCurve,
    CurvePolygon,
    Geometry,
    GeometryCollection,
    GeometryEnvelope,
    LineString,
    Point,
    PolyhedralSurface,
)

logger = logging.getLogger(__name__)


class _Range:
    """Running min/max of one ordinate; NaN values are skipped"""

    def __init__(self):
        self.seen = False
        self.low: float | None = None
        self.high: float | None = None

    def add(self, value: float) -> None:
        self.seen = True
        if math.isnan(value):
            return
        if self.low is None or value < self.low:
            self.low = value
        if self.high is None or value > self.high:
            self.high = value

    def bounds(self) -> tuple[float | None, float | None]:
        if not self.seen:
            return None, None
        if self.low is None:
            # Only NaN values were seen
            return math.nan, math.nan
        return self.low, self.high


class GeometryEnvelopeBuilder:
    """
    Folds the points of one or more geometries into an envelope.

    Example:
        >>> builder = GeometryEnvelopeBuilder()
        >>> builder.add_geometry(LineString([Point(0, 0), Point(2, 1)]))
        >>> builder.build()
        GeometryEnvelope(min_x=0, min_y=0, max_x=2, max_y=1, ...)
    """

    def __init__(self):
        self._x = _Range()
        self._y = _Range()
        self._z = _Range()
        self._m = _Range()

    def add_point(self, point: Point) -> None:
        self._x.add(point.x)
        self._y.add(point.y)
        if point.z is not None:
            self._z.add(point.z)
        if point.m is not None:
            self._m.add(point.m)

    def add_geometry(self, geometry: Geometry) -> None:
        """Add every point reachable from ``geometry``"""
        if isinstance(geometry, Point):
            self.add_point(geometry)

        elif isinstance(geometry, LineString):
            for point in geometry.points:
                self.add_point(point)

        elif isinstance(geometry, CompoundCurve):
            for line in geometry.line_strings:
                self.add_geometry(line)

        elif isinstance(geometry, CurvePolygon):
            for ring in geometry.rings:
                self.add_geometry(ring)

        elif isinstance(geometry, PolyhedralSurface):
            for polygon in geometry.polygons:
                self.add_geometry(polygon)

        elif isinstance(geometry, GeometryCollection):
            for member in geometry.geometries:
                self.add_geometry(member)

        else:
            raise SFException(
                f"Geometry type not supported: {type(geometry).__name__}"
            )

    def build(self) -> GeometryEnvelope | None:
        """The envelope so far, or None if no point was added"""
        if not self._x.seen:
            return None
        min_x, max_x = self._x.bounds()
        min_y, max_y = self._y.bounds()
        min_z, max_z = self._z.bounds()
        min_m, max_m = self._m.bounds()
        assert min_x is not None and max_x is not None
        assert min_y is not None and max_y is not None
        return GeometryEnvelope(
            min_x=min_x,
            min_y=min_y,
            max_x=max_x,
            max_y=max_y,
            min_z=min_z,
            max_z=max_z,
            min_m=min_m,
            max_m=max_m,
        )


def build_envelope(geometry: Geometry) -> GeometryEnvelope | None:
    """
    Compute the envelope of a geometry.

    Args:
        geometry: Any geometry, including collections

    Returns:
        The envelope, or None when the geometry has no points. Z and M ranges
        are set only when at least one point has that ordinate.

    Example:
        >>> build_envelope(read_geometry("LINESTRING EMPTY")) is None
        True
    """
    builder = GeometryEnvelopeBuilder()
    builder.add_geometry(geometry)
    envelope = builder.build()
    if envelope is None:
        logger.debug("No points in %s, envelope undefined", geometry.geometry_type.name)
    return envelope
