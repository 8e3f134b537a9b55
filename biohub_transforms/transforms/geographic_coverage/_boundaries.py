"""Project boundary extraction.

Builds one ``Boundary`` feature per EML ``geographicCoverage`` found in a
project or related-project study area.  Each ``datasetGPolygon`` of the
coverage contributes one ring to the feature's polygon.
"""

from __future__ import annotations

import logging
from typing import Any

from biohub_transforms.core.constants import (
    BOUNDARY_TYPE,
    PROJECT_SCOPE,
    RELATED_PROJECT_SCOPE,
)
from biohub_transforms.models.geojson import Feature, FeatureCollection, Polygon, SpatialResult
from biohub_transforms.transforms.geographic_coverage._constants import (
    PROJECT_COVERAGE_PATH,
    RELATED_PROJECT_COVERAGE_PATH,
)
from biohub_transforms.transforms.geographic_coverage._normalization import (
    build_ring,
    find_coverages,
    ring_point_lists,
)
from biohub_transforms.transforms.geographic_coverage._validation import (
    CoverageValidationError,
)

logger = logging.getLogger("biohub_transforms.transforms.geographic_coverage")

_SCOPES: tuple[tuple[str, str], ...] = (
    (PROJECT_SCOPE, PROJECT_COVERAGE_PATH),
    (RELATED_PROJECT_SCOPE, RELATED_PROJECT_COVERAGE_PATH),
)


def extract_boundaries(eml_json: dict[str, Any]) -> SpatialResult:
    """Extract project and related-project boundaries as GeoJSON.

    Coverages without any ring points are ignored.  A coverage with a
    malformed polygon is skipped as a whole and counted in
    ``SpatialResult.skipped``; the remaining coverages are still emitted.

    Args:
        eml_json: Decoded EML tree.

    Returns:
        A ``SpatialResult`` whose collection holds one ``Polygon`` feature
        per usable coverage.  The collection is empty, never ``None``,
        when the document has no coverage.
    """
    features: list[Feature] = []
    skip_reasons: list[str] = []

    for project_type, path in _SCOPES:
        for cov_idx, coverage in enumerate(find_coverages(eml_json, path)):
            context = f"{project_type} coverage {cov_idx}"
            point_lists = [points for points in ring_point_lists(coverage) if points]
            if not point_lists:
                logger.debug("No ring points in %s, skipping", context)
                continue

            try:
                rings = [
                    build_ring(points, f"{context} polygon {poly_idx}")
                    for poly_idx, points in enumerate(point_lists)
                ]
            except CoverageValidationError as exc:
                logger.warning("Skipping invalid boundary in %s: %s", context, exc)
                skip_reasons.append(str(exc))
                continue

            features.append(
                Feature(
                    geometry=Polygon(coordinates=[[list(c) for c in ring] for ring in rings]),
                    properties={
                        "type": BOUNDARY_TYPE,
                        "description": coverage.get("geographicDescription"),
                        "project type": project_type,
                    },
                )
            )

    logger.info(
        "Boundaries extracted | features=%d | skipped=%d",
        len(features),
        len(skip_reasons),
    )
    return SpatialResult(
        collection=FeatureCollection(features=features),
        skipped=len(skip_reasons),
        skip_reasons=skip_reasons,
    )
