"""
Geometry classes for the OGC simple features model.

The hierarchy mirrors the OGC one: abstract Geometry, Curve and Surface bases
with concrete leaves. Containers own their members, dimensional flags are
fixed when a container is built, and points carry Z/M only when the ordinate
is present.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Generic, TypeVar

from .errors import WKTParseError


class GeometryType(IntEnum):
    """OGC geometry type codes"""

    GEOMETRY = 0
    POINT = 1
    LINESTRING = 2
    POLYGON = 3
    MULTIPOINT = 4
    MULTILINESTRING = 5
    MULTIPOLYGON = 6
    GEOMETRYCOLLECTION = 7
    CIRCULARSTRING = 8
    COMPOUNDCURVE = 9
    CURVEPOLYGON = 10
    MULTICURVE = 11
    MULTISURFACE = 12
    CURVE = 13
    SURFACE = 14
    POLYHEDRALSURFACE = 15
    TIN = 16
    TRIANGLE = 17

    @classmethod
    def from_name(cls, name: str) -> "GeometryType":
        """
        Look up a geometry type by its WKT name.

        Args:
            name: Type name, matched case-insensitively

        Raises:
            WKTParseError: If the name is not a known geometry type
        """
        try:
            return cls[name.upper()]
        except KeyError:
            raise WKTParseError(
                f"Unknown geometry type: '{name}'", token=name
            ) from None

    @property
    def is_abstract(self) -> bool:
        return self in ABSTRACT_TYPES

    def accepts(self, other: "GeometryType") -> bool:
        """Whether a geometry of type ``other`` satisfies this expected type"""
        return other in _ACCEPTED_TYPES.get(self, frozenset((self,)))


ABSTRACT_TYPES = frozenset(
    (GeometryType.GEOMETRY, GeometryType.CURVE, GeometryType.SURFACE)
)

CURVE_TYPES = frozenset(
    (
        GeometryType.LINESTRING,
        GeometryType.CIRCULARSTRING,
        GeometryType.COMPOUNDCURVE,
    )
)

SURFACE_TYPES = frozenset(
    (
        GeometryType.POLYGON,
        GeometryType.POLYHEDRALSURFACE,
        GeometryType.TIN,
        GeometryType.TRIANGLE,
        GeometryType.CURVEPOLYGON,
    )
)

COLLECTION_TYPES = frozenset(
    (
        GeometryType.GEOMETRYCOLLECTION,
        GeometryType.MULTIPOINT,
        GeometryType.MULTILINESTRING,
        GeometryType.MULTIPOLYGON,
        GeometryType.MULTICURVE,
        GeometryType.MULTISURFACE,
    )
)

_ACCEPTED_TYPES: dict[GeometryType, frozenset[GeometryType]] = {
    GeometryType.GEOMETRY: frozenset(GeometryType) - ABSTRACT_TYPES,
    GeometryType.CURVE: CURVE_TYPES,
    GeometryType.SURFACE: SURFACE_TYPES,
    GeometryType.LINESTRING: frozenset(
        (GeometryType.LINESTRING, GeometryType.CIRCULARSTRING)
    ),
    GeometryType.POLYGON: frozenset((GeometryType.POLYGON, GeometryType.TRIANGLE)),
    GeometryType.CURVEPOLYGON: frozenset(
        (GeometryType.CURVEPOLYGON, GeometryType.POLYGON, GeometryType.TRIANGLE)
    ),
    GeometryType.POLYHEDRALSURFACE: frozenset(
        (GeometryType.POLYHEDRALSURFACE, GeometryType.TIN)
    ),
    GeometryType.GEOMETRYCOLLECTION: COLLECTION_TYPES,
    GeometryType.MULTICURVE: frozenset(
        (GeometryType.MULTICURVE, GeometryType.MULTILINESTRING)
    ),
    GeometryType.MULTISURFACE: frozenset(
        (GeometryType.MULTISURFACE, GeometryType.MULTIPOLYGON)
    ),
}


@dataclass
class GeometryEnvelope:
    """
    Axis-aligned bounds of a geometry.

    Z and M ranges are None unless a point of the source geometry carries
    that ordinate.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float
    min_z: float | None = None
    max_z: float | None = None
    min_m: float | None = None
    max_m: float | None = None

    @property
    def has_z(self) -> bool:
        return self.min_z is not None

    @property
    def has_m(self) -> bool:
        return self.min_m is not None

    def __iter__(self) -> Iterator[float]:
        return iter((self.min_x, self.min_y, self.max_x, self.max_y))


class Geometry:
    """Abstract root of the geometry hierarchy"""

    geometry_type: ClassVar[GeometryType] = GeometryType.GEOMETRY
    has_z: bool
    has_m: bool

    @property
    def is_empty(self) -> bool:
        raise NotImplementedError

    def iter_points(self) -> Iterator["Point"]:
        """Every point reachable from this geometry, in stored order"""
        raise NotImplementedError

    @property
    def wkt(self) -> str:
        from .writer import write_geometry

        return write_geometry(self)

    @property
    def envelope(self) -> GeometryEnvelope | None:
        from .envelope import build_envelope

        return build_envelope(self)


class Curve(Geometry):
    """Abstract one-dimensional geometry"""

    geometry_type: ClassVar[GeometryType] = GeometryType.CURVE

    @property
    def start_point(self) -> "Point | None":
        raise NotImplementedError

    @property
    def end_point(self) -> "Point | None":
        raise NotImplementedError

    @property
    def is_closed(self) -> bool:
        return not self.is_empty and self.start_point == self.end_point


class Surface(Geometry):
    """Abstract two-dimensional geometry"""

    geometry_type: ClassVar[GeometryType] = GeometryType.SURFACE


G = TypeVar("G", bound=Geometry)
C = TypeVar("C", bound=Curve)


def _same_ordinate(a: float | None, b: float | None) -> bool:
    if a is None or b is None:
        return a is b
    return a == b or (math.isnan(a) and math.isnan(b))


@dataclass(eq=False)
class Point(Geometry):
    """A point with optional Z and M ordinates"""

    geometry_type: ClassVar[GeometryType] = GeometryType.POINT

    x: float
    y: float
    z: float | None = None
    m: float | None = None

    @property
    def has_z(self) -> bool:
        return self.z is not None

    @property
    def has_m(self) -> bool:
        return self.m is not None

    @property
    def is_empty(self) -> bool:
        return False

    @property
    def coordinates(self) -> tuple[float, ...]:
        coords = [self.x, self.y]
        if self.z is not None:
            coords.append(self.z)
        if self.m is not None:
            coords.append(self.m)
        return tuple(coords)

    def iter_points(self) -> Iterator["Point"]:
        yield self

    def __eq__(self, other: object) -> bool:
        # Exact comparison, NaN matches NaN
        if other.__class__ is not self.__class__:
            return NotImplemented
        assert isinstance(other, Point)
        return (
            _same_ordinate(self.x, other.x)
            and _same_ordinate(self.y, other.y)
            and _same_ordinate(self.z, other.z)
            and _same_ordinate(self.m, other.m)
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass
class LineString(Curve):
    """A line string (polyline)"""

    geometry_type: ClassVar[GeometryType] = GeometryType.LINESTRING

    points: list[Point] = field(default_factory=list)
    has_z: bool = False
    has_m: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def num_points(self) -> int:
        return len(self.points)

    def get_point(self, index: int) -> Point:
        return self.points[index]

    def add_point(self, point: Point) -> None:
        self.points.append(point)

    @property
    def start_point(self) -> Point | None:
        return self.points[0] if self.points else None

    @property
    def end_point(self) -> Point | None:
        return self.points[-1] if self.points else None

    @property
    def coordinates(self) -> list[tuple[float, ...]]:
        return [p.coordinates for p in self.points]

    def iter_points(self) -> Iterator[Point]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class CircularString(LineString):
    """A curve of circular arcs through consecutive point triples"""

    geometry_type: ClassVar[GeometryType] = GeometryType.CIRCULARSTRING


@dataclass
class CompoundCurve(Curve):
    """
    A curve built from consecutive LineString or CircularString segments.

    Segment endpoints are expected to connect; this is not validated.
    """

    geometry_type: ClassVar[GeometryType] = GeometryType.COMPOUNDCURVE

    line_strings: list[LineString] = field(default_factory=list)
    has_z: bool = False
    has_m: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.line_strings

    @property
    def num_line_strings(self) -> int:
        return len(self.line_strings)

    def get_line_string(self, index: int) -> LineString:
        return self.line_strings[index]

    def add_line_string(self, line_string: LineString) -> None:
        self.line_strings.append(line_string)

    @property
    def num_points(self) -> int:
        return sum(line.num_points for line in self.line_strings)

    @property
    def start_point(self) -> Point | None:
        return self.line_strings[0].start_point if self.line_strings else None

    @property
    def end_point(self) -> Point | None:
        return self.line_strings[-1].end_point if self.line_strings else None

    def iter_points(self) -> Iterator[Point]:
        for line in self.line_strings:
            yield from line.iter_points()


@dataclass
class CurvePolygon(Surface, Generic[C]):
    """A surface bounded by curve rings; the first ring is the exterior"""

    geometry_type: ClassVar[GeometryType] = GeometryType.CURVEPOLYGON

    rings: list[C] = field(default_factory=list)
    has_z: bool = False
    has_m: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.rings

    @property
    def num_rings(self) -> int:
        return len(self.rings)

    def get_ring(self, index: int) -> C:
        return self.rings[index]

    def add_ring(self, ring: C) -> None:
        self.rings.append(ring)

    @property
    def exterior_ring(self) -> C | None:
        return self.rings[0] if self.rings else None

    @property
    def interior_rings(self) -> list[C]:
        return self.rings[1:]

    def iter_points(self) -> Iterator[Point]:
        for ring in self.rings:
            yield from ring.iter_points()


@dataclass
class Polygon(CurvePolygon[LineString]):
    """A polygon with optional holes"""

    geometry_type: ClassVar[GeometryType] = GeometryType.POLYGON

    @property
    def coordinates(self) -> list[list[tuple[float, ...]]]:
        return [ring.coordinates for ring in self.rings]


@dataclass
class Triangle(Polygon):
    """A polygon with a single closed ring of four points"""

    geometry_type: ClassVar[GeometryType] = GeometryType.TRIANGLE

    @property
    def is_well_formed(self) -> bool:
        if len(self.rings) != 1:
            return False
        ring = self.rings[0]
        return ring.num_points == 4 and ring.is_closed


@dataclass
class PolyhedralSurface(Surface):
    """Polygon patches sharing edges"""

    geometry_type: ClassVar[GeometryType] = GeometryType.POLYHEDRALSURFACE

    polygons: list[Polygon] = field(default_factory=list)
    has_z: bool = False
    has_m: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.polygons

    @property
    def num_polygons(self) -> int:
        return len(self.polygons)

    def get_polygon(self, index: int) -> Polygon:
        return self.polygons[index]

    def add_polygon(self, polygon: Polygon) -> None:
        self.polygons.append(polygon)

    def iter_points(self) -> Iterator[Point]:
        for polygon in self.polygons:
            yield from polygon.iter_points()

    def __len__(self) -> int:
        return len(self.polygons)


@dataclass
class TIN(PolyhedralSurface):
    """Triangulated irregular network"""

    geometry_type: ClassVar[GeometryType] = GeometryType.TIN


@dataclass
class GeometryCollection(Geometry, Generic[G]):
    """
    Heterogeneous collection of geometries.

    Also the structural form of MULTICURVE and MULTISURFACE documents; the
    abstract label is recovered with ``collection_type()`` or
    ``ExtendedGeometryCollection``.
    """

    geometry_type: ClassVar[GeometryType] = GeometryType.GEOMETRYCOLLECTION

    geometries: list[G] = field(default_factory=list)
    has_z: bool = False
    has_m: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.geometries

    @property
    def num_geometries(self) -> int:
        return len(self.geometries)

    def get_geometry(self, index: int) -> G:
        return self.geometries[index]

    def add_geometry(self, geometry: G) -> None:
        self.geometries.append(geometry)

    def iter_points(self) -> Iterator[Point]:
        for geometry in self.geometries:
            yield from geometry.iter_points()

    def _all_members_in(self, types: frozenset[GeometryType]) -> bool:
        return all(g.geometry_type in types for g in self.geometries)

    def is_multi_point(self) -> bool:
        return self._all_members_in(frozenset((GeometryType.POINT,)))

    def is_multi_line_string(self) -> bool:
        return self._all_members_in(frozenset((GeometryType.LINESTRING,)))

    def is_multi_polygon(self) -> bool:
        return self._all_members_in(frozenset((GeometryType.POLYGON,)))

    def is_multi_curve(self) -> bool:
        return self._all_members_in(CURVE_TYPES)

    def is_multi_surface(self) -> bool:
        return self._all_members_in(SURFACE_TYPES)

    def collection_type(self) -> GeometryType:
        """
        The most specific collection type consistent with the members.

        Typed collections report their own type. A generic collection is
        checked in order: points, line strings, polygons, curves, surfaces.
        An empty collection reports MULTIPOINT.
        """
        if self.geometry_type != GeometryType.GEOMETRYCOLLECTION:
            return self.geometry_type
        if self.is_multi_point():
            return GeometryType.MULTIPOINT
        if self.is_multi_line_string():
            return GeometryType.MULTILINESTRING
        if self.is_multi_polygon():
            return GeometryType.MULTIPOLYGON
        if self.is_multi_curve():
            return GeometryType.MULTICURVE
        if self.is_multi_surface():
            return GeometryType.MULTISURFACE
        return GeometryType.GEOMETRYCOLLECTION

    def __len__(self) -> int:
        return len(self.geometries)

    def __iter__(self) -> Iterator[G]:
        return iter(self.geometries)


@dataclass
class MultiPoint(GeometryCollection[Point]):
    """Multiple points"""

    geometry_type: ClassVar[GeometryType] = GeometryType.MULTIPOINT

    @property
    def points(self) -> list[Point]:
        return self.geometries

    @property
    def coordinates(self) -> list[tuple[float, ...]]:
        return [p.coordinates for p in self.geometries]


@dataclass
class MultiLineString(GeometryCollection[LineString]):
    """Multiple line strings"""

    geometry_type: ClassVar[GeometryType] = GeometryType.MULTILINESTRING

    @property
    def line_strings(self) -> list[LineString]:
        return self.geometries

    @property
    def coordinates(self) -> list[list[tuple[float, ...]]]:
        return [line.coordinates for line in self.geometries]


@dataclass
class MultiPolygon(GeometryCollection[Polygon]):
    """Multiple polygons"""

    geometry_type: ClassVar[GeometryType] = GeometryType.MULTIPOLYGON

    @property
    def polygons(self) -> list[Polygon]:
        return self.geometries

    @property
    def coordinates(self) -> list[list[list[tuple[float, ...]]]]:
        return [poly.coordinates for poly in self.geometries]


def geometry_type_name(geom: Geometry) -> str:
    """Get the geometry type name"""
    return geom.geometry_type.name
