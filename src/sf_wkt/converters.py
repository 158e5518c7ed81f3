"""
Conversions between this library's geometries and other representations.

This module provides:
- WKT (Well-Known Text) convenience functions
- Shapely geometry conversion, both directions
"""

from typing import TextIO

from shapely.geometry import (
    GeometryCollection as ShapelyGeometryCollection,
)
from shapely.geometry import (
    LineString as ShapelyLineString,
)
from shapely.geometry import (
    MultiLineString as ShapelyMultiLineString,
)
from shapely.geometry import (
    MultiPoint as ShapelyMultiPoint,
)
from shapely.geometry import (
    MultiPolygon as ShapelyMultiPolygon,
)
from shapely.geometry import (
    Point as ShapelyPoint,
)
from shapely.geometry import (
    Polygon as ShapelyPolygon,
)
from shapely.geometry.base import BaseGeometry

from .errors import SFException
from .filters import FilterCallable, GeometryFilter
from .geometry import (
    Geometry,
    GeometryCollection,
    GeometryType,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from .reader import read_geometry
from .writer import write_geometry


def to_wkt(geom: Geometry) -> str:
    """
    Convert geometry to Well-Known Text (WKT) format.

    Args:
        geom: Geometry object

    Returns:
        WKT string representation

    Example:
        >>> pt = Point(x=-122.0, y=47.0)
        >>> to_wkt(pt)
        'POINT (-122.0 47.0)'
    """
    return write_geometry(geom)


def from_wkt(
    text: str | TextIO, filter: GeometryFilter | FilterCallable | None = None
) -> Geometry | None:
    """
    Parse Well-Known Text (WKT) into a geometry.

    Args:
        text: WKT string or text stream
        filter: Optional filter applied to points and members while reading

    Returns:
        Geometry object, or None for POINT EMPTY
    """
    return read_geometry(text, filter=filter)


def _coords(points: list[Point], has_z: bool) -> list[tuple[float, ...]]:
    if has_z:
        return [(p.x, p.y, p.z if p.z is not None else 0.0) for p in points]
    return [(p.x, p.y) for p in points]


def _point_to_shapely(pt: Point) -> ShapelyPoint:
    """Convert a Point to a Shapely Point."""
    if pt.z is not None:
        return ShapelyPoint(pt.x, pt.y, pt.z)
    return ShapelyPoint(pt.x, pt.y)


def _linestring_to_shapely(line: LineString) -> ShapelyLineString:
    """Convert a LineString to a Shapely LineString."""
    if line.is_empty:
        return ShapelyLineString()
    return ShapelyLineString(_coords(line.points, line.has_z))


def _polygon_to_shapely(poly: Polygon) -> ShapelyPolygon:
    """Convert a Polygon to a Shapely Polygon."""
    if poly.is_empty:
        return ShapelyPolygon()
    shell = _coords(poly.rings[0].points, poly.has_z)
    holes = [_coords(ring.points, poly.has_z) for ring in poly.rings[1:]]
    return ShapelyPolygon(shell, holes if holes else None)


def geometry_to_shapely(geom: Geometry) -> BaseGeometry:
    """
    Convert a library geometry to a Shapely geometry.

    M values are dropped. Curve, curve polygon, polyhedral surface, TIN and
    triangle geometries have no Shapely counterpart.

    Args:
        geom: Geometry object from this library

    Returns:
        Corresponding Shapely geometry object

    Raises:
        SFException: If the geometry type has no Shapely counterpart
    """
    geometry_type = geom.geometry_type

    if geometry_type == GeometryType.POINT:
        assert isinstance(geom, Point)
        return _point_to_shapely(geom)

    if geometry_type == GeometryType.LINESTRING:
        assert isinstance(geom, LineString)
        return _linestring_to_shapely(geom)

    if geometry_type == GeometryType.POLYGON:
        assert isinstance(geom, Polygon)
        return _polygon_to_shapely(geom)

    if geometry_type == GeometryType.MULTIPOINT:
        assert isinstance(geom, MultiPoint)
        return ShapelyMultiPoint([_point_to_shapely(pt) for pt in geom.points])

    if geometry_type == GeometryType.MULTILINESTRING:
        assert isinstance(geom, MultiLineString)
        return ShapelyMultiLineString(
            [_linestring_to_shapely(line) for line in geom.line_strings]
        )

    if geometry_type == GeometryType.MULTIPOLYGON:
        assert isinstance(geom, MultiPolygon)
        return ShapelyMultiPolygon([_polygon_to_shapely(poly) for poly in geom.polygons])

    if isinstance(geom, GeometryCollection):
        return ShapelyGeometryCollection(
            [geometry_to_shapely(member) for member in geom.geometries]
        )

    raise SFException(f"No Shapely equivalent for {geometry_type.name}")


def _points_from_shapely(coords) -> list[Point]:
    return [Point(*coord) for coord in coords]


def _polygon_from_shapely(shape: ShapelyPolygon) -> Polygon:
    polygon = Polygon(has_z=shape.has_z)
    if shape.is_empty:
        return polygon
    for ring in [shape.exterior, *shape.interiors]:
        polygon.add_ring(
            LineString(_points_from_shapely(ring.coords), has_z=shape.has_z)
        )
    return polygon


def shapely_to_geometry(shape: BaseGeometry) -> Geometry | None:
    """
    Convert a Shapely geometry to a library geometry.

    Args:
        shape: Shapely geometry

    Returns:
        Corresponding geometry, or None for an empty Shapely point

    Raises:
        SFException: If the Shapely geometry type is not supported
    """
    geom_type = shape.geom_type
    has_z = shape.has_z

    if geom_type == "Point":
        if shape.is_empty:
            return None
        return Point(*shape.coords[0])

    if geom_type in ("LineString", "LinearRing"):
        return LineString(_points_from_shapely(shape.coords), has_z=has_z)

    if geom_type == "Polygon":
        return _polygon_from_shapely(shape)

    if geom_type == "MultiPoint":
        return MultiPoint(
            [Point(*pt.coords[0]) for pt in shape.geoms if not pt.is_empty],
            has_z=has_z,
        )

    if geom_type == "MultiLineString":
        return MultiLineString(
            [
                LineString(_points_from_shapely(line.coords), has_z=has_z)
                for line in shape.geoms
            ],
            has_z=has_z,
        )

    if geom_type == "MultiPolygon":
        return MultiPolygon(
            [_polygon_from_shapely(poly) for poly in shape.geoms], has_z=has_z
        )

    if geom_type == "GeometryCollection":
        collection: GeometryCollection[Geometry] = GeometryCollection(has_z=has_z)
        for member in shape.geoms:
            geometry = shapely_to_geometry(member)
            if geometry is not None:
                collection.add_geometry(geometry)
        return collection

    raise SFException(f"Unsupported Shapely geometry type: {geom_type}")
