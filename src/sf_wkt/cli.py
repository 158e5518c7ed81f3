"""
Command-line interface for sf-wkt.

Usage:
    sf-wkt info <wkt>
    sf-wkt normalize <wkt> [--extended] [--filter MODE] [--filter-z] [--filter-m]
    sf-wkt envelope <wkt> [--json]

Pass ``-`` as <wkt> to read the geometry from standard input.
"""

import json
import logging
import sys

import click

from . import __version__
from .envelope import build_envelope
from .errors import SFException
from .extended import ExtendedGeometryCollection
from .filters import FiniteFilterType, PointFiniteFilter
from .geometry import (
    CompoundCurve,
    CurvePolygon,
    Geometry,
    GeometryCollection,
    GeometryType,
    LineString,
    PolyhedralSurface,
    geometry_type_name,
)
from .reader import read_geometry
from .writer import write_geometry


def _read_input(wkt: str) -> str:
    if wkt == "-":
        return click.get_text_stream("stdin").read()
    return wkt


def _parse(wkt: str, point_filter: PointFiniteFilter | None = None) -> Geometry | None:
    try:
        return read_geometry(_read_input(wkt), filter=point_filter)
    except SFException as e:
        click.echo(f"Error parsing geometry: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """
    Read, normalize and inspect Well-Known Text geometries.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@main.command()
@click.argument("wkt")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(wkt: str, output_json: bool):
    """
    Display the type, dimensions and size of a geometry.
    """
    geometry = _parse(wkt)
    if geometry is None:
        click.echo("Empty point")
        return

    data: dict[str, str | int | bool] = {
        "type": geometry_type_name(geometry),
        "has_z": geometry.has_z,
        "has_m": geometry.has_m,
        "empty": geometry.is_empty,
        "points": sum(1 for _ in geometry.iter_points()),
    }
    if isinstance(geometry, LineString):
        data["closed"] = geometry.is_closed
    elif isinstance(geometry, CompoundCurve):
        data["segments"] = geometry.num_line_strings
    elif isinstance(geometry, CurvePolygon):
        data["rings"] = geometry.num_rings
    elif isinstance(geometry, PolyhedralSurface):
        data["polygons"] = geometry.num_polygons
    elif isinstance(geometry, GeometryCollection):
        data["geometries"] = geometry.num_geometries
        data["collection_type"] = geometry.collection_type().name

    if output_json:
        click.echo(json.dumps(data, indent=2))
    else:
        for key, value in data.items():
            click.echo(f"{key}: {value}")


@main.command()
@click.argument("wkt")
@click.option(
    "--extended",
    is_flag=True,
    help="Label collections with their abstract type (MULTICURVE, MULTISURFACE)",
)
@click.option(
    "--filter",
    "filter_mode",
    type=click.Choice([t.value for t in FiniteFilterType]),
    help="Drop points with non-finite ordinates",
)
@click.option("--filter-z", is_flag=True, help="Also filter on the Z ordinate")
@click.option("--filter-m", is_flag=True, help="Also filter on the M ordinate")
def normalize(
    wkt: str,
    extended: bool,
    filter_mode: str | None,
    filter_z: bool,
    filter_m: bool,
):
    """
    Rewrite a geometry in canonical WKT form.

    Examples:
        sf-wkt normalize "point(1 2)"
        sf-wkt normalize --extended "MULTICURVE ((0 0, 1 1))"
        sf-wkt normalize --filter finite "LINESTRING (0 0, NaN 1, 2 2)"
    """
    point_filter = None
    if filter_mode:
        point_filter = PointFiniteFilter(FiniteFilterType(filter_mode), filter_z, filter_m)

    geometry = _parse(wkt, point_filter)
    if geometry is None:
        click.echo("POINT EMPTY")
        return

    if extended and geometry.geometry_type == GeometryType.GEOMETRYCOLLECTION:
        assert isinstance(geometry, GeometryCollection)
        geometry = ExtendedGeometryCollection(geometry)

    click.echo(write_geometry(geometry))


@main.command()
@click.argument("wkt")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def envelope(wkt: str, output_json: bool):
    """
    Print the bounding envelope of a geometry.
    """
    geometry = _parse(wkt)
    env = build_envelope(geometry) if geometry is not None else None
    if env is None:
        click.echo("Envelope undefined: geometry has no points", err=True)
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(vars(env), indent=2))
        return

    click.echo(f"X: {env.min_x} .. {env.max_x}")
    click.echo(f"Y: {env.min_y} .. {env.max_y}")
    if env.has_z:
        click.echo(f"Z: {env.min_z} .. {env.max_z}")
    if env.has_m:
        click.echo(f"M: {env.min_m} .. {env.max_m}")


if __name__ == "__main__":
    main()
