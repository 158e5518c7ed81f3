"""
Well-Known Text geometry reader.

A recursive-descent parser over the tokens of a TextReader. Every body
reader shares the reader's filter, which is consulted for each point or
member as soon as it is parsed, so rejected candidates never reach the
geometry being built.

Grammar, per geometry::

    TYPENAME [Z | M | ZM] ( "(" body ")" | "EMPTY" )
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TextIO

from .errors import WKTParseError
from .filters import FilterCallable, GeometryFilter
from .geometry import (
    TIN,
    CircularString,
    CompoundCurve,
    Curve,
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
    Triangle,
)
from .text import TextReader

logger = logging.getLogger(__name__)

# Nesting levels of tagged geometries allowed before parsing is aborted
DEFAULT_MAX_DEPTH = 100

_DIMENSION_FLAGS = {
    "Z": (True, False),
    "M": (False, True),
    "ZM": (True, True),
}


@dataclass
class GeometryTypeInfo:
    """Geometry type and dimensions read from a WKT header"""

    geometry_type: GeometryType
    has_z: bool = False
    has_m: bool = False


class GeometryReader:
    """
    Reads geometries from a TextReader.

    Example:
        >>> with TextReader("LINESTRING (0 0, 1 1)") as text:
        ...     line = GeometryReader(text).read_geometry()
        >>> line.num_points
        2

    Attributes:
        reader: Token source
        filter: Optional filter, either a GeometryFilter or a callable taking
            (containing type, candidate geometry)
        max_depth: Maximum nesting of tagged geometries
    """

    def __init__(
        self,
        reader: TextReader,
        filter: GeometryFilter | FilterCallable | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.reader = reader
        self.filter = filter
        self.max_depth = max_depth
        self._depth = 0
        self._check: FilterCallable | None = None
        if filter is not None:
            self._check = getattr(filter, "filter", filter)

    def read_geometry(
        self,
        containing_type: GeometryType | None = None,
        expected_type: GeometryType | None = None,
    ) -> Geometry | None:
        """
        Read one tagged geometry.

        Args:
            containing_type: Type of the geometry being built around this one,
                passed to the filter
            expected_type: Type the result must satisfy, e.g. CURVE

        Returns:
            The geometry, or None for POINT EMPTY or a filtered geometry

        Raises:
            WKTParseError: On malformed text or an unexpected geometry type
        """
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise WKTParseError(
                    f"Geometry nesting exceeds maximum depth of {self.max_depth}"
                )
            info = self.read_geometry_type()
            if expected_type is not None and not expected_type.accepts(
                info.geometry_type
            ):
                raise WKTParseError(
                    f"Unexpected geometry type. Expected: {expected_type.name}, "
                    f"Actual: {info.geometry_type.name}",
                    token=info.geometry_type.name,
                    expected=(expected_type.name,),
                )
            geometry = self._read_body(info)
        finally:
            self._depth -= 1

        if not self._filter(containing_type, geometry):
            geometry = None

        return geometry

    def _read_body(self, info: GeometryTypeInfo) -> Geometry | None:
        geometry_type = info.geometry_type
        has_z = info.has_z
        has_m = info.has_m

        if geometry_type.is_abstract:
            raise WKTParseError(
                f"Unexpected geometry type of {geometry_type.name} which is abstract",
                token=geometry_type.name,
            )
        elif geometry_type == GeometryType.POINT:
            return self.read_point_text(has_z, has_m)
        elif geometry_type == GeometryType.LINESTRING:
            return self.read_line_string(has_z, has_m)
        elif geometry_type == GeometryType.POLYGON:
            return self.read_polygon(has_z, has_m)
        elif geometry_type == GeometryType.MULTIPOINT:
            return self.read_multi_point(has_z, has_m)
        elif geometry_type == GeometryType.MULTILINESTRING:
            return self.read_multi_line_string(has_z, has_m)
        elif geometry_type == GeometryType.MULTIPOLYGON:
            return self.read_multi_polygon(has_z, has_m)
        elif geometry_type in (
            GeometryType.GEOMETRYCOLLECTION,
            GeometryType.MULTICURVE,
            GeometryType.MULTISURFACE,
        ):
            return self.read_geometry_collection(has_z, has_m, geometry_type)
        elif geometry_type == GeometryType.CIRCULARSTRING:
            return self.read_circular_string(has_z, has_m)
        elif geometry_type == GeometryType.COMPOUNDCURVE:
            return self.read_compound_curve(has_z, has_m)
        elif geometry_type == GeometryType.CURVEPOLYGON:
            return self.read_curve_polygon(has_z, has_m)
        elif geometry_type == GeometryType.POLYHEDRALSURFACE:
            return self.read_polyhedral_surface(has_z, has_m)
        elif geometry_type == GeometryType.TIN:
            return self.read_tin(has_z, has_m)

        # TRIANGLE is the only remaining case
        assert geometry_type == GeometryType.TRIANGLE
        return self.read_triangle(has_z, has_m)

    def read_geometry_type(self) -> GeometryTypeInfo:
        """
        Read a geometry type name and its optional Z, M or ZM suffix.

        The token following the type name must be a dimension suffix, ``(``
        or ``EMPTY``; the latter two are left for the body reader.
        """
        type_name = self.reader.read_token()
        geometry_type = GeometryType.from_name(type_name)

        next_token = self.reader.peek_token()
        suffix = next_token.upper() if next_token is not None else None

        has_z = has_m = False
        if suffix in _DIMENSION_FLAGS:
            has_z, has_m = _DIMENSION_FLAGS[suffix]
            self.reader.read_token()
        elif suffix not in ("(", "EMPTY"):
            raise WKTParseError(
                f"Invalid value following geometry type: '{type_name}', "
                f"value: '{next_token}'",
                token=next_token,
                expected=("Z", "M", "ZM", "(", "EMPTY"),
            )

        logger.debug(
            "Read geometry header %s (z=%s, m=%s)", geometry_type.name, has_z, has_m
        )
        return GeometryTypeInfo(geometry_type, has_z, has_m)

    def read_point_text(self, has_z: bool, has_m: bool) -> Point | None:
        """Read ``(x y ...)`` or ``EMPTY``; EMPTY yields None"""
        point = None
        if self._left_parenthesis_or_empty():
            point = self.read_point(has_z, has_m)
            self._right_parenthesis()
        return point

    def read_point(self, has_z: bool, has_m: bool) -> Point:
        """Read the bare ordinates of one point"""
        x = self.reader.read_double()
        y = self.reader.read_double()
        z = self.reader.read_double() if has_z else None
        m = self.reader.read_double() if has_m else None
        return Point(x, y, z, m)

    def read_line_string(self, has_z: bool, has_m: bool) -> LineString:
        return self._read_point_sequence(LineString(has_z=has_z, has_m=has_m))

    def read_circular_string(self, has_z: bool, has_m: bool) -> CircularString:
        circular_string = CircularString(has_z=has_z, has_m=has_m)
        self._read_point_sequence(circular_string)
        return circular_string

    def _read_point_sequence(self, line: LineString) -> LineString:
        for _ in self._members():
            point = self.read_point(line.has_z, line.has_m)
            if self._filter(line.geometry_type, point):
                line.add_point(point)
        return line

    def read_polygon(self, has_z: bool, has_m: bool) -> Polygon:
        polygon = Polygon(has_z=has_z, has_m=has_m)
        self._read_rings(polygon)
        return polygon

    def read_triangle(self, has_z: bool, has_m: bool) -> Triangle:
        triangle = Triangle(has_z=has_z, has_m=has_m)
        self._read_rings(triangle)
        return triangle

    def _read_rings(self, polygon: Polygon) -> None:
        for _ in self._members():
            ring = self.read_line_string(polygon.has_z, polygon.has_m)
            if self._filter(polygon.geometry_type, ring):
                polygon.add_ring(ring)

    def read_multi_point(self, has_z: bool, has_m: bool) -> MultiPoint:
        """
        Read a MULTIPOINT body.

        Members may be parenthesized, ``((1 2), (3 4))``, or bare,
        ``(1 2, 3 4)``.
        """
        multi_point = MultiPoint(has_z=has_z, has_m=has_m)
        for _ in self._members():
            token = self.reader.peek_token()
            if token is not None and token.upper() in ("(", "EMPTY"):
                point = self.read_point_text(has_z, has_m)
            else:
                point = self.read_point(has_z, has_m)
            if point is not None and self._filter(GeometryType.MULTIPOINT, point):
                multi_point.add_geometry(point)
        return multi_point

    def read_multi_line_string(self, has_z: bool, has_m: bool) -> MultiLineString:
        multi_line_string = MultiLineString(has_z=has_z, has_m=has_m)
        for _ in self._members():
            line_string = self.read_line_string(has_z, has_m)
            if self._filter(GeometryType.MULTILINESTRING, line_string):
                multi_line_string.add_geometry(line_string)
        return multi_line_string

    def read_multi_polygon(self, has_z: bool, has_m: bool) -> MultiPolygon:
        multi_polygon = MultiPolygon(has_z=has_z, has_m=has_m)
        for _ in self._members():
            polygon = self.read_polygon(has_z, has_m)
            if self._filter(GeometryType.MULTIPOLYGON, polygon):
                multi_polygon.add_geometry(polygon)
        return multi_polygon

    def read_geometry_collection(
        self,
        has_z: bool,
        has_m: bool,
        label: GeometryType = GeometryType.GEOMETRYCOLLECTION,
    ) -> GeometryCollection[Geometry]:
        """
        Read a GEOMETRYCOLLECTION, MULTICURVE or MULTISURFACE body.

        All three build a plain GeometryCollection. Under MULTICURVE an
        untagged member is a LineString, under MULTISURFACE a Polygon.
        """
        collection: GeometryCollection[Geometry] = GeometryCollection(
            has_z=has_z, has_m=has_m
        )
        containing_type = GeometryType.GEOMETRYCOLLECTION
        for _ in self._members():
            geometry: Geometry | None
            if label == GeometryType.MULTICURVE and self._untagged():
                geometry = self.read_line_string(has_z, has_m)
                if not self._filter(containing_type, geometry):
                    geometry = None
            elif label == GeometryType.MULTISURFACE and self._untagged():
                geometry = self.read_polygon(has_z, has_m)
                if not self._filter(containing_type, geometry):
                    geometry = None
            else:
                geometry = self.read_geometry(containing_type, GeometryType.GEOMETRY)
            if geometry is not None:
                collection.add_geometry(geometry)
        return collection

    def read_compound_curve(self, has_z: bool, has_m: bool) -> CompoundCurve:
        """Read a COMPOUNDCURVE body of LineString or CircularString segments"""
        compound_curve = CompoundCurve(has_z=has_z, has_m=has_m)
        containing_type = GeometryType.COMPOUNDCURVE
        for _ in self._members():
            line_string: Geometry | None
            if self._untagged():
                line_string = self.read_line_string(has_z, has_m)
                if not self._filter(containing_type, line_string):
                    line_string = None
            else:
                line_string = self.read_geometry(
                    containing_type, GeometryType.LINESTRING
                )
            if line_string is not None:
                assert isinstance(line_string, LineString)
                compound_curve.add_line_string(line_string)
        return compound_curve

    def read_curve_polygon(self, has_z: bool, has_m: bool) -> CurvePolygon[Curve]:
        """Read a CURVEPOLYGON body; each ring may be any curve type"""
        curve_polygon: CurvePolygon[Curve] = CurvePolygon(has_z=has_z, has_m=has_m)
        containing_type = GeometryType.CURVEPOLYGON
        for _ in self._members():
            ring: Geometry | None
            if self._untagged():
                ring = self.read_line_string(has_z, has_m)
                if not self._filter(containing_type, ring):
                    ring = None
            else:
                ring = self.read_geometry(containing_type, GeometryType.CURVE)
            if ring is not None:
                assert isinstance(ring, Curve)
                curve_polygon.add_ring(ring)
        return curve_polygon

    def read_polyhedral_surface(self, has_z: bool, has_m: bool) -> PolyhedralSurface:
        polyhedral_surface = PolyhedralSurface(has_z=has_z, has_m=has_m)
        self._read_patches(polyhedral_surface)
        return polyhedral_surface

    def read_tin(self, has_z: bool, has_m: bool) -> TIN:
        tin = TIN(has_z=has_z, has_m=has_m)
        self._read_patches(tin)
        return tin

    def _read_patches(self, surface: PolyhedralSurface) -> None:
        for _ in self._members():
            polygon = self.read_polygon(surface.has_z, surface.has_m)
            if self._filter(surface.geometry_type, polygon):
                surface.add_polygon(polygon)

    def _members(self) -> Iterator[None]:
        """
        Walk a parenthesized member list.

        Yields once per member, before the member is read by the caller, and
        consumes the separator after it. Yields nothing for EMPTY.
        """
        if not self._left_parenthesis_or_empty():
            return
        yield
        while self._comma_or_right_parenthesis():
            yield

    def _untagged(self) -> bool:
        return self.reader.peek_token() == "("

    def _left_parenthesis_or_empty(self) -> bool:
        token = self.reader.read_token()
        upper = token.upper()
        if upper == "EMPTY":
            return False
        if upper == "(":
            return True
        raise WKTParseError(
            f"Invalid token, expected 'EMPTY' or '('. found: '{token}'",
            token=token,
            expected=("EMPTY", "("),
        )

    def _comma_or_right_parenthesis(self) -> bool:
        token = self.reader.read_token()
        if token == ",":
            return True
        if token == ")":
            return False
        raise WKTParseError(
            f"Invalid token, expected ',' or ')'. found: '{token}'",
            token=token,
            expected=(",", ")"),
        )

    def _right_parenthesis(self) -> None:
        token = self.reader.read_token()
        if token != ")":
            raise WKTParseError(
                f"Invalid token, expected ')'. found: '{token}'",
                token=token,
                expected=(")",),
            )

    def _filter(
        self, containing_type: GeometryType | None, geometry: Geometry | None
    ) -> bool:
        if self._check is None or geometry is None:
            return True
        if self._check(containing_type, geometry):
            return True
        logger.debug(
            "Filtered %s from %s",
            geometry.geometry_type.name,
            containing_type.name if containing_type is not None else "document",
        )
        return False


def read_geometry(
    text: str | TextIO,
    filter: GeometryFilter | FilterCallable | None = None,
    expected_type: GeometryType | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Geometry | None:
    """
    Parse a WKT document.

    Args:
        text: WKT string or text stream
        filter: Optional point/member filter
        expected_type: Type the geometry must satisfy
        max_depth: Maximum nesting of tagged geometries

    Returns:
        The geometry, or None for POINT EMPTY or when the filter rejected
        the whole geometry

    Raises:
        WKTParseError: If the text is malformed or has trailing content

    Example:
        >>> read_geometry("POINT (1.5 -2.5)")
        Point(x=1.5, y=-2.5, z=None, m=None)
    """
    with TextReader(text) as reader:
        geometry = GeometryReader(reader, filter, max_depth).read_geometry(
            expected_type=expected_type
        )
        trailing = reader.peek_token()
        if trailing is not None:
            raise WKTParseError(
                f"Unexpected content after geometry: '{trailing}'", token=trailing
            )
    return geometry


def read_geometry_type(text: str | TextIO) -> GeometryTypeInfo:
    """Read only the geometry type and dimension suffix of a WKT document"""
    with TextReader(text) as reader:
        return GeometryReader(reader).read_geometry_type()
