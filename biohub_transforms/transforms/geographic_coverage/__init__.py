"""Geographic coverage transforms: EML study areas to GeoJSON.

Reads the ``geographicCoverage`` polygons of a decoded EML document and
emits them as GeoJSON for map search.

The transform is split into focused stages:
- **_validation**: coordinate bounds, ring closure, shapely validity
- **_normalization**: coverage lookup, ring points → ``(lon, lat)`` rings
- **_boundaries**: one ``Boundary`` polygon feature per coverage
- **_centroid**: one ``Boundary Centroid`` point for all coverages

Supported EML structures:
- ``project`` and ``relatedProject`` study areas at any depth
- repeated ``geographicCoverage`` and ``datasetGPolygon`` elements
- single ``gRingPoint`` elements (decoded as an object, not a list)
- unclosed rings (closed automatically)

Graceful degradation: a malformed polygon skips only its own feature and
is counted in the result; a coverage with no points is ignored.
"""

from __future__ import annotations

from biohub_transforms.transforms.geographic_coverage._boundaries import extract_boundaries
from biohub_transforms.transforms.geographic_coverage._centroid import (
    compute_centroid,
    extract_boundary_centroid,
    get_utm_crs,
    select_projected_crs,
)
from biohub_transforms.transforms.geographic_coverage._constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_RING_VERTICES,
)
from biohub_transforms.transforms.geographic_coverage._normalization import (
    build_ring,
    find_coverages,
    ring_point_lists,
    ring_points_to_coords,
)
from biohub_transforms.transforms.geographic_coverage._validation import (
    CoverageError,
    CoverageValidationError,
    InvalidCoordinateError,
    validate_coordinates,
    validate_ring,
    validate_shapely_ring,
)

__all__ = [
    "MAX_LATITUDE",
    "MAX_LONGITUDE",
    "MIN_LATITUDE",
    "MIN_LONGITUDE",
    "MIN_RING_VERTICES",
    "CoverageError",
    "CoverageValidationError",
    "InvalidCoordinateError",
    "build_ring",
    "compute_centroid",
    "extract_boundaries",
    "extract_boundary_centroid",
    "find_coverages",
    "get_utm_crs",
    "ring_point_lists",
    "ring_points_to_coords",
    "select_projected_crs",
    "validate_coordinates",
    "validate_ring",
    "validate_shapely_ring",
]
