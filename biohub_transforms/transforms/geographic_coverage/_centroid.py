"""Boundary centroid extraction.

Computes the centroid of every coverage polygon in an EML document and
emits it as a single ``Boundary Centroid`` point feature.

The centroid is computed in a projected CRS (the local UTM zone for
narrow extents, an equal-area projection for wide ones, unless configured
otherwise) and projected back to WGS 84, so it is not skewed by the
shrinking length of a degree of longitude at high latitudes.
"""

from __future__ import annotations

import logging
from typing import Any

from biohub_transforms.core.constants import BOUNDARY_CENTROID_TYPE, WGS84
from biohub_transforms.models.geojson import Feature, FeatureCollection, Point, SpatialResult
from biohub_transforms.transforms.geographic_coverage._constants import (
    ANY_COVERAGE_PATH,
    EQUAL_AREA_CRS,
    MAX_SEGMENT_DEGREES,
    UTM_ZONE_WIDTH_DEGREES,
)
from biohub_transforms.transforms.geographic_coverage._normalization import (
    build_ring,
    find_coverages,
    ring_point_lists,
)
from biohub_transforms.transforms.geographic_coverage._validation import (
    CoverageError,
    CoverageValidationError,
)
from biohub_transforms.utils.json_path import query_first

logger = logging.getLogger("biohub_transforms.transforms.geographic_coverage")


def extract_boundary_centroid(
    eml_json: dict[str, Any],
    *,
    dataset_id: str | None = None,
    crs: str = "auto",
) -> SpatialResult:
    """Extract the centroid of all EML coverage polygons.

    Args:
        eml_json: Decoded EML tree.
        dataset_id: Identifier written to ``properties.datasetID``.
            Defaults to the EML ``dataset.@_id``.
        crs: Projected CRS for the centroid computation, or ``"auto"``
            for the UTM zone containing the polygons' bounding-box centre.

    Returns:
        A ``SpatialResult`` with at most one ``Point`` feature.  Malformed
        polygons are skipped and counted; with no usable polygon the
        collection is empty.
    """
    rings: list[list[tuple[float, float]]] = []
    skip_reasons: list[str] = []

    for cov_idx, coverage in enumerate(find_coverages(eml_json, ANY_COVERAGE_PATH)):
        for poly_idx, points in enumerate(ring_point_lists(coverage)):
            if not points:
                continue
            context = f"coverage {cov_idx} polygon {poly_idx}"
            try:
                rings.append(build_ring(points, context))
            except CoverageValidationError as exc:
                logger.warning("Skipping invalid polygon in %s: %s", context, exc)
                skip_reasons.append(str(exc))

    features: list[Feature] = []
    if rings:
        lon, lat = compute_centroid(rings, crs=crs)
        if dataset_id is None:
            dataset_id = query_first(eml_json, '$..dataset."@_id"')
        features.append(
            Feature(
                geometry=Point(coordinates=[lon, lat]),
                properties={
                    "type": BOUNDARY_CENTROID_TYPE,
                    "datasetID": dataset_id,
                    "datasetTitle": query_first(eml_json, "$..dataset.title"),
                },
            )
        )
        logger.info(
            "Boundary centroid extracted | polygons=%d | centroid=(%.5f, %.5f) | skipped=%d",
            len(rings),
            lon,
            lat,
            len(skip_reasons),
        )
    else:
        logger.info("No coverage polygons for centroid | skipped=%d", len(skip_reasons))

    return SpatialResult(
        collection=FeatureCollection(features=features),
        skipped=len(skip_reasons),
        skip_reasons=skip_reasons,
    )


def compute_centroid(
    rings: list[list[tuple[float, float]]],
    *,
    crs: str = "auto",
) -> tuple[float, float]:
    """Compute the centroid of the union of ``rings`` in a projected CRS.

    Ring edges are straight lines in longitude/latitude, so the union is
    densified before projection and the projected outline follows them.

    Args:
        rings: Closed ``(lon, lat)`` rings, each treated as its own polygon.
        crs: Projected CRS, or ``"auto"`` (see ``select_projected_crs``).

    Returns:
        Centroid as ``(lon, lat)``.

    Raises:
        CoverageError: If ``rings`` is empty or their union is empty.
    """
    if not rings:
        msg = "Cannot compute centroid without polygons"
        raise CoverageError(msg)

    import shapely
    from pyproj import Transformer
    from shapely.geometry import Polygon
    from shapely.validation import make_valid

    merged = shapely.unary_union([make_valid(Polygon(ring)) for ring in rings])
    if merged.is_empty:
        msg = "Cannot compute centroid of an empty geometry"
        raise CoverageError(msg)

    if crs == "auto":
        crs = select_projected_crs(merged.bounds)

    to_projected = Transformer.from_crs(WGS84, crs, always_xy=True)
    to_wgs = Transformer.from_crs(crs, WGS84, always_xy=True)

    dense = shapely.segmentize(merged, max_segment_length=MAX_SEGMENT_DEGREES)
    projected = shapely.transform(dense, to_projected.transform, interleaved=False)
    projected_centroid = projected.centroid
    lon, lat = to_wgs.transform(projected_centroid.x, projected_centroid.y)
    return (float(lon), float(lat))


def select_projected_crs(bounds: tuple[float, float, float, float]) -> str:
    """Pick the projected CRS for a ``(min_lon, min_lat, max_lon, max_lat)`` extent.

    An extent no wider than one UTM zone uses the UTM zone of its centre.
    Wider extents use a world cylindrical equal-area projection, which
    keeps longitude linear across the full -180..180 range.
    """
    min_lon, min_lat, max_lon, max_lat = bounds
    if max_lon - min_lon <= UTM_ZONE_WIDTH_DEGREES:
        return get_utm_crs((min_lon + max_lon) / 2, (min_lat + max_lat) / 2)
    return EQUAL_AREA_CRS


def get_utm_crs(lon: float, lat: float) -> str:
    """Determine the UTM CRS for a given WGS 84 coordinate.

    Returns an EPSG code like ``"EPSG:32610"`` (UTM zone 10N) or
    ``"EPSG:32710"`` (UTM zone 10S).
    """
    # UTM zone number: 1-based, 6° wide, starting at -180°
    zone_number = int((lon + 180) / 6) + 1
    zone_number = max(1, min(60, zone_number))

    if lat >= 0:
        return f"EPSG:{32600 + zone_number}"
    return f"EPSG:{32700 + zone_number}"
