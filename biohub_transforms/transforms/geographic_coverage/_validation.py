"""Validation helpers for geographic coverage extraction.

Responsibilities:
- Coordinate bounds checking (WGS 84)
- Ring structure validation (closure, vertex count)
- Shapely geometry validity checks and repair
"""

from __future__ import annotations

import logging

from biohub_transforms.core.exceptions import ValidationError
from biohub_transforms.transforms.geographic_coverage._constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_RING_VERTICES,
)

logger = logging.getLogger("biohub_transforms.transforms.geographic_coverage")


# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class CoverageError(ValidationError):
    """Raised when geographic coverage cannot be extracted."""

    default_stage = "geographic_coverage"
    default_code = "COVERAGE_EXTRACT_FAILED"


class CoverageValidationError(CoverageError):
    """Raised when a coverage polygon is present but malformed."""

    default_code = "COVERAGE_VALIDATION_FAILED"


class InvalidCoordinateError(CoverageValidationError):
    """Raised when coordinates are outside valid WGS 84 bounds."""

    default_code = "COVERAGE_COORDINATE_INVALID"


# ---------------------------------------------------------------------------
# Coordinate validation
# ---------------------------------------------------------------------------


def validate_coordinates(coords: list[tuple[float, float]], context: str) -> None:
    """Validate that all coordinates are within WGS 84 bounds.

    Raises:
        InvalidCoordinateError: If any coordinate is out of bounds.
    """
    for lon, lat in coords:
        if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE):
            msg = (
                f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}] "
                f"in {context}"
            )
            raise InvalidCoordinateError(msg)
        if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
            msg = (
                f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}] "
                f"in {context}"
            )
            raise InvalidCoordinateError(msg)


# ---------------------------------------------------------------------------
# Ring validation
# ---------------------------------------------------------------------------


def validate_ring(coords: list[tuple[float, float]], context: str) -> list[tuple[float, float]]:
    """Validate a ring has enough vertices and is closed.

    Returns the (possibly auto-closed) coordinate list.

    Raises:
        CoverageValidationError: If the ring has fewer than 3 distinct points.
    """
    if len(coords) < 3:
        msg = f"Ring has only {len(coords)} point(s), need at least 3 in {context}"
        raise CoverageValidationError(msg)

    # EML gRingPoint lists usually omit the closing point
    if coords[0] != coords[-1]:
        logger.debug("Closing ring in %s", context)
        coords = [*coords, coords[0]]

    if len(coords) < MIN_RING_VERTICES:
        msg = f"Ring has fewer than {MIN_RING_VERTICES} vertices (including closure) in {context}"
        raise CoverageValidationError(msg)

    if len(set(coords)) < 3:
        msg = f"Ring has fewer than 3 distinct points in {context}"
        raise CoverageValidationError(msg)

    return coords


# ---------------------------------------------------------------------------
# Shapely geometry validation
# ---------------------------------------------------------------------------


def validate_shapely_ring(ring: list[tuple[float, float]], context: str) -> None:
    """Validate a closed ring as a polygon using shapely.

    Self-intersecting rings are logged and accepted when ``make_valid()``
    can repair them into a non-empty polygonal geometry.

    Raises:
        CoverageValidationError: If the polygon cannot be built, cannot be
            repaired, or has zero area.
    """
    from shapely.geometry import Polygon
    from shapely.validation import make_valid

    try:
        poly = Polygon(ring)
    except (ValueError, TypeError) as exc:
        msg = f"Cannot create polygon for {context}: {exc}"
        raise CoverageValidationError(msg) from exc

    if not poly.is_valid:
        logger.warning("Invalid geometry in %s, attempting make_valid()", context)
        repaired = make_valid(poly)
        if repaired.is_empty or repaired.geom_type not in ("Polygon", "MultiPolygon"):
            msg = f"Geometry became {repaired.geom_type} after make_valid() for {context}"
            raise CoverageValidationError(msg)
        poly = repaired

    if poly.area == 0:
        msg = f"Zero-area polygon in {context}"
        raise CoverageValidationError(msg)
