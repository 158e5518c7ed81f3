"""
Geometry collections labelled with an abstract OGC collection type.

The reader builds MULTICURVE and MULTISURFACE documents as plain
GeometryCollections. Wrapping one in ExtendedGeometryCollection restores the
abstract label so the writer emits it again.
"""

import logging

from .geometry import G, GeometryCollection, GeometryType

logger = logging.getLogger(__name__)

# Narrowest abstract label for each collection type. MULTIPOINT has no
# abstract counterpart and stays a GEOMETRYCOLLECTION.
_ABSTRACT_LABELS = {
    GeometryType.MULTIPOINT: GeometryType.GEOMETRYCOLLECTION,
    GeometryType.MULTILINESTRING: GeometryType.MULTICURVE,
    GeometryType.MULTIPOLYGON: GeometryType.MULTISURFACE,
    GeometryType.MULTICURVE: GeometryType.MULTICURVE,
    GeometryType.MULTISURFACE: GeometryType.MULTISURFACE,
    GeometryType.GEOMETRYCOLLECTION: GeometryType.GEOMETRYCOLLECTION,
}


class ExtendedGeometryCollection(GeometryCollection[G]):
    """
    A view of a geometry collection that reports its abstract type.

    Members are shared with the wrapped collection, not copied. The label is
    computed on construction; call ``update_geometry_type()`` after changing
    the members.

    Example:
        >>> collection = read_geometry("MULTICURVE (LINESTRING (0 0, 1 1))")
        >>> ExtendedGeometryCollection(collection).geometry_type
        <GeometryType.MULTICURVE: 11>
    """

    def __init__(self, collection: GeometryCollection[G]):
        self._collection = collection
        self.geometries = collection.geometries
        self.has_z = collection.has_z
        self.has_m = collection.has_m
        self._geometry_type = GeometryType.GEOMETRYCOLLECTION
        self.update_geometry_type()

    @property
    def geometry_type(self) -> GeometryType:  # type: ignore[override]
        return self._geometry_type

    @property
    def collection(self) -> GeometryCollection[G]:
        """The wrapped collection"""
        return self._collection

    def collection_type(self) -> GeometryType:
        return self._collection.collection_type()

    def update_geometry_type(self) -> None:
        """Recompute the abstract label from the current members"""
        self._geometry_type = _ABSTRACT_LABELS[self.collection_type()]
        logger.debug(
            "Resolved collection of %d members as %s",
            len(self.geometries),
            self._geometry_type.name,
        )
