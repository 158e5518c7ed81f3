"""Tests for the WKT reader."""

import io
import math

import pytest
from sf_wkt import (
    TIN,
    CircularString,
    CompoundCurve,
    CurvePolygon,
    GeometryCollection,
    GeometryReader,
    GeometryType,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    PolyhedralSurface,
    SFException,
    TextReader,
    Triangle,
    WKTParseError,
    read_geometry,
    read_geometry_type,
)


class TestReadPoint:
    def test_point(self):
        point = read_geometry("POINT (1.5 -2.5)")
        assert isinstance(point, Point)
        assert point.x == 1.5
        assert point.y == -2.5
        assert not point.has_z
        assert not point.has_m

    def test_point_z(self):
        point = read_geometry("POINT Z (1 2 3)")
        assert point == Point(1.0, 2.0, 3.0)

    def test_point_m(self):
        point = read_geometry("POINT M (1 2 4)")
        assert point == Point(1.0, 2.0, m=4.0)
        assert not point.has_z

    def test_point_zm(self):
        assert read_geometry("POINT ZM (1 2 3 4)") == Point(1.0, 2.0, 3.0, 4.0)

    def test_point_empty(self):
        assert read_geometry("POINT EMPTY") is None

    def test_case_insensitive(self):
        assert read_geometry("point z(1 2 3)") == Point(1.0, 2.0, 3.0)
        assert read_geometry("Point Empty") is None

    def test_non_finite_values(self):
        point = read_geometry("POINT (NaN -Infinity)")
        assert math.isnan(point.x)
        assert point.y == -math.inf

    def test_stream_input(self):
        assert read_geometry(io.StringIO("POINT (1 2)")) == Point(1.0, 2.0)


class TestReadCurves:
    def test_line_string(self):
        line = read_geometry("LINESTRING (0 0, 1 1, 2 0)")
        assert isinstance(line, LineString)
        assert line.points == [Point(0, 0), Point(1, 1), Point(2, 0)]

    def test_line_string_empty(self):
        line = read_geometry("LINESTRING EMPTY")
        assert type(line) is LineString
        assert line.num_points == 0
        assert not line.has_z
        assert not line.has_m

    def test_line_string_empty_keeps_dimensions(self):
        line = read_geometry("LINESTRING ZM EMPTY")
        assert line.is_empty
        assert line.has_z
        assert line.has_m

    def test_circular_string(self):
        curve = read_geometry("CIRCULARSTRING (0 0, 1 1, 2 0)")
        assert type(curve) is CircularString
        assert curve.num_points == 3

    def test_compound_curve(self):
        curve = read_geometry(
            "COMPOUNDCURVE (CIRCULARSTRING (0 0, 1 1, 1 0), (1 0, 0 1))"
        )
        assert isinstance(curve, CompoundCurve)
        assert curve.num_line_strings == 2
        assert type(curve.get_line_string(0)) is CircularString
        assert type(curve.get_line_string(1)) is LineString
        assert curve.end_point == Point(0, 1)

    def test_compound_curve_rejects_polygon(self):
        with pytest.raises(
            WKTParseError, match="Expected: LINESTRING, Actual: POLYGON"
        ):
            read_geometry("COMPOUNDCURVE (POLYGON ((0 0, 1 0, 0 1, 0 0)))")

    def test_compound_curve_rejects_nested_compound(self):
        with pytest.raises(WKTParseError, match="Actual: COMPOUNDCURVE"):
            read_geometry("COMPOUNDCURVE (COMPOUNDCURVE ((0 0, 1 1)))")


class TestReadSurfaces:
    def test_polygon(self):
        polygon = read_geometry(
            "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), (2 2, 8 2, 8 8, 2 2))"
        )
        assert isinstance(polygon, Polygon)
        assert polygon.num_rings == 2
        assert polygon.exterior_ring.num_points == 5
        assert polygon.interior_rings[0].num_points == 4

    def test_polygon_with_empty_ring(self):
        polygon = read_geometry("POLYGON (EMPTY, (0 0, 1 0, 0 1, 0 0))")
        assert polygon.num_rings == 2
        assert polygon.exterior_ring.is_empty

    def test_triangle(self):
        triangle = read_geometry("TRIANGLE ((0 0, 1 0, 0 1, 0 0))")
        assert type(triangle) is Triangle
        assert triangle.is_well_formed

    def test_triangle_shape_not_enforced(self):
        triangle = read_geometry("TRIANGLE ((0 0, 1 0, 1 1, 0 1, 0 0))")
        assert not triangle.is_well_formed

    def test_curve_polygon(self):
        polygon = read_geometry(
            "CURVEPOLYGON ("
            "COMPOUNDCURVE (CIRCULARSTRING (0 0, 2 0, 2 1, 2 3, 4 3), (4 3, 4 5, 1 4, 0 0)), "
            "CIRCULARSTRING (1.7 1, 1.4 0.4, 1.6 0.4, 1.6 0.5, 1.7 1), "
            "(1 1, 2 1, 1 2, 1 1))"
        )
        assert type(polygon) is CurvePolygon
        assert polygon.num_rings == 3
        assert type(polygon.get_ring(0)) is CompoundCurve
        assert type(polygon.get_ring(1)) is CircularString
        assert type(polygon.get_ring(2)) is LineString

    def test_curve_polygon_rejects_point(self):
        with pytest.raises(WKTParseError, match="Expected: CURVE, Actual: POINT"):
            read_geometry("CURVEPOLYGON (POINT (1 2))")

    def test_polyhedral_surface(self):
        surface = read_geometry(
            "POLYHEDRALSURFACE Z ("
            "((0 0 0, 0 1 0, 1 1 0, 0 0 0)), "
            "((0 0 0, 0 1 0, 0 1 1, 0 0 0)))"
        )
        assert type(surface) is PolyhedralSurface
        assert surface.has_z
        assert surface.num_polygons == 2
        assert surface.get_polygon(1).exterior_ring.get_point(2) == Point(0, 1, 1)

    def test_tin(self):
        tin = read_geometry("TIN (((0 0, 1 0, 0 1, 0 0)), ((1 0, 1 1, 0 1, 1 0)))")
        assert type(tin) is TIN
        assert tin.num_polygons == 2


class TestReadCollections:
    def test_multi_point_parenthesized(self):
        multi_point = read_geometry("MULTIPOINT ((1 2), (3 4))")
        assert isinstance(multi_point, MultiPoint)
        assert multi_point.points == [Point(1, 2), Point(3, 4)]

    def test_multi_point_bare(self):
        multi_point = read_geometry("MULTIPOINT (1 2, 3 4)")
        assert multi_point.points == [Point(1, 2), Point(3, 4)]

    def test_multi_point_skips_empty_member(self):
        multi_point = read_geometry("MULTIPOINT ((1 2), EMPTY, (3 4))")
        assert multi_point.num_geometries == 2

    def test_multi_line_string(self):
        multi = read_geometry("MULTILINESTRING ((0 0, 1 1), EMPTY, (2 2, 3 3))")
        assert isinstance(multi, MultiLineString)
        assert multi.num_geometries == 3
        assert multi.line_strings[1].is_empty

    def test_multi_polygon_z(self):
        multi = read_geometry("MULTIPOLYGON Z(((0 0 0,1 0 0,1 1 0,0 0 0)))")
        assert isinstance(multi, MultiPolygon)
        assert multi.has_z
        assert multi.num_geometries == 1
        ring = multi.polygons[0].exterior_ring
        assert ring.num_points == 4
        assert all(point.z == 0.0 for point in ring.points)

    def test_geometry_collection(self):
        collection = read_geometry(
            "GEOMETRYCOLLECTION (POINT (1 2), LINESTRING (0 0, 1 1), "
            "GEOMETRYCOLLECTION (POINT EMPTY, POLYGON EMPTY))"
        )
        assert type(collection) is GeometryCollection
        assert collection.num_geometries == 3
        nested = collection.get_geometry(2)
        assert type(nested) is GeometryCollection
        assert nested.num_geometries == 1
        assert type(nested.get_geometry(0)) is Polygon

    def test_geometry_collection_empty(self):
        collection = read_geometry("GEOMETRYCOLLECTION EMPTY")
        assert type(collection) is GeometryCollection
        assert collection.is_empty

    def test_multi_curve_is_generic_collection(self):
        collection = read_geometry(
            "MULTICURVE (LINESTRING (0 0, 1 1), CIRCULARSTRING (0 0, 1 1, 2 0))"
        )
        assert type(collection) is GeometryCollection
        assert collection.num_geometries == 2
        assert type(collection.get_geometry(0)) is LineString
        assert type(collection.get_geometry(1)) is CircularString

    def test_multi_curve_untagged_members(self):
        collection = read_geometry(
            "MULTICURVE ((0 0, 1 1), COMPOUNDCURVE ((1 1, 2 2), (2 2, 3 1)))"
        )
        assert type(collection.get_geometry(0)) is LineString
        assert type(collection.get_geometry(1)) is CompoundCurve

    def test_multi_surface_untagged_members(self):
        collection = read_geometry(
            "MULTISURFACE (((0 0, 1 0, 1 1, 0 0)), "
            "CURVEPOLYGON (CIRCULARSTRING (0 0, 1 1, 2 0, 1 -1, 0 0)))"
        )
        assert type(collection) is GeometryCollection
        assert type(collection.get_geometry(0)) is Polygon
        assert type(collection.get_geometry(1)) is CurvePolygon


class TestExpectedType:
    def test_matching_type(self):
        point = read_geometry("POINT (1 2)", expected_type=GeometryType.POINT)
        assert point == Point(1, 2)

    def test_abstract_expected_type(self):
        curve = read_geometry(
            "CIRCULARSTRING (0 0, 1 1, 2 0)", expected_type=GeometryType.CURVE
        )
        assert type(curve) is CircularString

    def test_mismatch(self):
        with pytest.raises(WKTParseError, match="Expected: LINESTRING, Actual: POINT"):
            read_geometry("POINT (1 2)", expected_type=GeometryType.LINESTRING)

    def test_mismatch_checked_before_body(self):
        # The malformed body is never reached
        with pytest.raises(WKTParseError, match="Expected: POLYGON"):
            read_geometry("POINT (x y)", expected_type=GeometryType.POLYGON)


class TestReadErrors:
    def test_unknown_type(self):
        with pytest.raises(WKTParseError, match="Unknown geometry type"):
            read_geometry("HEXAGON (1 2)")

    @pytest.mark.parametrize("text", ["GEOMETRY (1 2)", "CURVE EMPTY", "SURFACE EMPTY"])
    def test_abstract_type(self, text):
        with pytest.raises(WKTParseError, match="abstract"):
            read_geometry(text)

    def test_invalid_dimension_suffix(self):
        with pytest.raises(
            WKTParseError, match="Invalid value following geometry type"
        ):
            read_geometry("POINT X (1 2)")

    def test_missing_parenthesis(self):
        with pytest.raises(WKTParseError, match="expected 'EMPTY' or '\\('"):
            read_geometry("LINESTRING Z 1 2 3")

    def test_missing_separator(self):
        with pytest.raises(WKTParseError) as exc_info:
            read_geometry("LINESTRING (0 0 1 1)")
        assert exc_info.value.token == "1"
        assert exc_info.value.expected == (",", ")")

    def test_too_many_ordinates(self):
        with pytest.raises(WKTParseError, match="expected '\\)'"):
            read_geometry("POINT (1 2 3)")

    def test_too_few_ordinates(self):
        with pytest.raises(WKTParseError, match="Invalid number"):
            read_geometry("POINT Z (1 2)")

    def test_invalid_number(self):
        with pytest.raises(WKTParseError, match="Invalid number: 'a'"):
            read_geometry("POINT (a b)")

    def test_truncated(self):
        with pytest.raises(WKTParseError, match="Unexpected end of text"):
            read_geometry("POLYGON ((0 0, 1 0, 0 1")

    def test_empty_input(self):
        with pytest.raises(WKTParseError, match="Unexpected end of text"):
            read_geometry("   ")

    def test_trailing_content(self):
        with pytest.raises(WKTParseError, match="Unexpected content after geometry"):
            read_geometry("POINT (1 2) POINT (3 4)")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            read_geometry("POINT (1)")

    def test_parse_error_is_sf_exception(self):
        with pytest.raises(SFException):
            read_geometry("POINT")

    def test_max_depth(self):
        text = "GEOMETRYCOLLECTION (" * 5 + "POINT (1 2)" + ")" * 5
        with pytest.raises(WKTParseError, match="maximum depth of 3"):
            read_geometry(text, max_depth=3)

    def test_within_max_depth(self):
        text = "GEOMETRYCOLLECTION (" * 5 + "POINT (1 2)" + ")" * 5
        collection = read_geometry(text, max_depth=6)
        assert collection.num_geometries == 1


class TestReadGeometryType:
    def test_header_only(self):
        info = read_geometry_type("MULTIPOLYGON ZM EMPTY")
        assert info.geometry_type == GeometryType.MULTIPOLYGON
        assert info.has_z
        assert info.has_m

    def test_plain_header(self):
        info = read_geometry_type("tin ((...))")
        assert info.geometry_type == GeometryType.TIN
        assert not info.has_z
        assert not info.has_m

    def test_reader_leaves_body(self):
        with TextReader("LINESTRING M (0 0 1, 1 1 2)") as text:
            reader = GeometryReader(text)
            info = reader.read_geometry_type()
            assert info.has_m
            assert text.peek_token() == "("
            line = reader.read_line_string(info.has_z, info.has_m)
        assert line.points[1] == Point(1, 1, m=2)
