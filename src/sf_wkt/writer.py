"""
Well-Known Text geometry writer.

The structural inverse of the reader: ``read_geometry(write_geometry(g))``
equals ``g`` and writing the result again gives identical text.
"""

import logging
import math

from .errors import SFException
from .geometry import (
    CompoundCurve,
    CurvePolygon,
    Geometry,
    GeometryCollection,
    GeometryType,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    PolyhedralSurface,
)

logger = logging.getLogger(__name__)


def format_number(value: float) -> str:
    """
    Format an ordinate so it reads back to the same float.

    Non-finite values are written as ``NaN``, ``Infinity`` and ``-Infinity``.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


class GeometryWriter:
    """
    Writes geometries as WKT.

    The type name and dimension suffix come from the geometry's own type and
    Z/M flags, never from the ordinate values.

    Example:
        >>> GeometryWriter().write(Point(1.5, -2.5))
        'POINT (1.5 -2.5)'
    """

    def write(self, geometry: Geometry) -> str:
        if not isinstance(geometry, Geometry):
            raise SFException(f"Not a geometry: {type(geometry).__name__}")
        header = self.write_header(geometry)
        if geometry.is_empty:
            return f"{header} EMPTY"
        return f"{header} {self.write_body(geometry)}"

    def write_header(self, geometry: Geometry) -> str:
        """Type name with an optional `` Z``, `` M`` or `` ZM`` suffix"""
        name = geometry.geometry_type.name
        has_z = geometry.has_z
        has_m = geometry.has_m
        if has_z and has_m:
            return f"{name} ZM"
        if has_z:
            return f"{name} Z"
        if has_m:
            return f"{name} M"
        return name

    def write_body(self, geometry: Geometry) -> str:
        """The parenthesized body of a non-empty geometry"""
        if isinstance(geometry, Point):
            return f"({self.write_point(geometry)})"

        elif isinstance(geometry, LineString):
            return self.write_point_sequence(geometry)

        elif isinstance(geometry, Polygon):
            return self.write_rings(geometry)

        elif isinstance(geometry, MultiPoint):
            points = ", ".join(self.write_point_text(p) for p in geometry.points)
            return f"({points})"

        elif isinstance(geometry, MultiLineString):
            lines = ", ".join(
                self.write_point_sequence(line) for line in geometry.line_strings
            )
            return f"({lines})"

        elif isinstance(geometry, MultiPolygon):
            polygons = ", ".join(self.write_rings(poly) for poly in geometry.polygons)
            return f"({polygons})"

        elif isinstance(geometry, PolyhedralSurface):
            polygons = ", ".join(self.write_rings(poly) for poly in geometry.polygons)
            return f"({polygons})"

        elif isinstance(geometry, CompoundCurve):
            return self._write_tagged(geometry.line_strings)

        elif isinstance(geometry, CurvePolygon):
            return self._write_tagged(geometry.rings)

        elif isinstance(geometry, GeometryCollection):
            return self._write_tagged(geometry.geometries)

        raise SFException(
            f"Geometry type not supported: {geometry.geometry_type.name}"
        )

    def write_point(self, point: Point) -> str:
        return " ".join(format_number(v) for v in point.coordinates)

    def write_point_text(self, point: Point) -> str:
        return f"({self.write_point(point)})"

    def write_point_sequence(self, line: LineString) -> str:
        if line.is_empty:
            return "EMPTY"
        coords = ", ".join(self.write_point(p) for p in line.points)
        return f"({coords})"

    def write_rings(self, polygon: Polygon) -> str:
        if polygon.is_empty:
            return "EMPTY"
        rings = ", ".join(self.write_point_sequence(ring) for ring in polygon.rings)
        return f"({rings})"

    def _write_tagged(self, geometries: list) -> str:
        members = ", ".join(self.write(g) for g in geometries)
        return f"({members})"


def write_geometry(geometry: Geometry) -> str:
    """
    Convert a geometry to Well-Known Text.

    Args:
        geometry: Geometry object, including ExtendedGeometryCollection

    Returns:
        WKT string

    Example:
        >>> write_geometry(LineString([Point(0, 0), Point(1, 1)]))
        'LINESTRING (0.0 0.0, 1.0 1.0)'
    """
    text = GeometryWriter().write(geometry)
    logger.debug("Wrote %s", geometry.geometry_type.name)
    return text
