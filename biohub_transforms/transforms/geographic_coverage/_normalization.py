"""Coverage lookup and coordinate normalization.

Responsibilities:
- Locate ``geographicCoverage`` nodes for a project scope
- Collect the raw ``gRingPoint`` lists of each coverage
- Convert ring points to validated, closed ``(lon, lat)`` rings
"""

from __future__ import annotations

from typing import Any

from biohub_transforms.transforms.geographic_coverage._constants import (
    LATITUDE_KEY,
    LONGITUDE_KEY,
    RING_POINTS_PATH,
)
from biohub_transforms.transforms.geographic_coverage._validation import (
    CoverageValidationError,
    validate_coordinates,
    validate_ring,
    validate_shapely_ring,
)
from biohub_transforms.utils.json_path import as_list, query


def find_coverages(eml_json: Any, path: str) -> list[dict[str, Any]]:
    """Return every coverage object matched by ``path``.

    A ``geographicCoverage`` element repeated in EML decodes to a list;
    each entry is returned as its own coverage.
    """
    coverages: list[dict[str, Any]] = []
    for match in query(eml_json, path):
        coverages.extend(c for c in as_list(match) if isinstance(c, dict))
    return coverages


def ring_point_lists(coverage: dict[str, Any]) -> list[list[Any]]:
    """Return the raw ``gRingPoint`` list of every polygon in a coverage."""
    return [as_list(points) for points in query(coverage, RING_POINTS_PATH)]


def ring_points_to_coords(points: list[Any]) -> list[tuple[float, float]]:
    """Convert EML ring points to ``(lon, lat)`` tuples.

    Raises:
        CoverageValidationError: If a point is not an object or a
            coordinate is missing or not numeric.
    """
    coords: list[tuple[float, float]] = []
    for idx, point in enumerate(points):
        if not isinstance(point, dict):
            msg = f"Malformed ring point at index {idx}: expected object, got {type(point).__name__}"
            raise CoverageValidationError(msg)
        raw_lon = point.get(LONGITUDE_KEY)
        raw_lat = point.get(LATITUDE_KEY)
        try:
            lon = float(raw_lon)  # type: ignore[arg-type]
            lat = float(raw_lat)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            msg = (
                f"Malformed ring point at index {idx}: cannot convert to float "
                f"(lon={raw_lon!r}, lat={raw_lat!r})"
            )
            raise CoverageValidationError(msg) from exc
        coords.append((lon, lat))
    return coords


def build_ring(points: list[Any], context: str) -> list[tuple[float, float]]:
    """Normalise and validate one polygon's ring points.

    Returns:
        A closed ring of ``(lon, lat)`` tuples.

    Raises:
        CoverageValidationError: If the ring is malformed in any way.
    """
    coords = ring_points_to_coords(points)
    validate_coordinates(coords, context)
    ring = validate_ring(coords, context)
    validate_shapely_ring(ring, context)
    return ring
