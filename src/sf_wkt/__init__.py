"""
Simple Features WKT Library

Read and write OGC simple features geometries as Well-Known Text (WKT),
including the curve and surface extension types (CIRCULARSTRING,
COMPOUNDCURVE, CURVEPOLYGON, POLYHEDRALSURFACE, TIN, TRIANGLE) and the
abstract MULTICURVE and MULTISURFACE collections.

Example:
    >>> from sf_wkt import read_geometry, write_geometry, build_envelope
    >>>
    >>> line = read_geometry("LINESTRING Z (0 0 1, 2 3 4)")
    >>> line.has_z, line.num_points
    (True, 2)
    >>> write_geometry(line)
    'LINESTRING Z (0.0 0.0 1.0, 2.0 3.0 4.0)'
    >>> build_envelope(line).max_z
    4.0

CLI Example:
    $ sf-wkt normalize "multicurve ((0 0, 1 1))" --extended
    $ sf-wkt envelope "POLYGON ((0 0, 4 0, 4 4, 0 0))"
"""

__version__ = "0.1.0"

from .errors import (
    SFException,
    WKTParseError,
)

from .geometry import (
    Geometry,
    GeometryType,
    Curve,
    Surface,
    Point,
    LineString,
    CircularString,
    CompoundCurve,
    CurvePolygon,
    Polygon,
    Triangle,
    PolyhedralSurface,
    TIN,
    GeometryCollection,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryEnvelope,
)

from .filters import (
    GeometryFilter,
    FiniteFilterType,
    PointFiniteFilter,
)

from .text import TextReader

from .reader import (
    GeometryReader,
    GeometryTypeInfo,
    read_geometry,
    read_geometry_type,
)

from .writer import (
    GeometryWriter,
    write_geometry,
)

from .envelope import (
    GeometryEnvelopeBuilder,
    build_envelope,
)

from .extended import ExtendedGeometryCollection

from .converters import (
    to_wkt,
    from_wkt,
    geometry_to_shapely,
    shapely_to_geometry,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "SFException",
    "WKTParseError",
    # Geometry types
    "Geometry",
    "GeometryType",
    "Curve",
    "Surface",
    "Point",
    "LineString",
    "CircularString",
    "CompoundCurve",
    "CurvePolygon",
    "Polygon",
    "Triangle",
    "PolyhedralSurface",
    "TIN",
    "GeometryCollection",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    "GeometryEnvelope",
    # Filters
    "GeometryFilter",
    "FiniteFilterType",
    "PointFiniteFilter",
    # Reading
    "TextReader",
    "GeometryReader",
    "GeometryTypeInfo",
    "read_geometry",
    "read_geometry_type",
    # Writing
    "GeometryWriter",
    "write_geometry",
    # Envelopes
    "GeometryEnvelopeBuilder",
    "build_envelope",
    # Extended collections
    "ExtendedGeometryCollection",
    # Converters
    "to_wkt",
    "from_wkt",
    "geometry_to_shapely",
    "shapely_to_geometry",
]
