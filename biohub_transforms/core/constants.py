"""Shared transform constants.

Centralises the feature property types, EML decoding options, transform
kinds and the default persecution/harm denylist that the transforms and
the submission pipeline share.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Persecution / harm denylist
# ---------------------------------------------------------------------------

DEFAULT_SECURITY_DENYLIST: tuple[str, ...] = (
    "mountain goat",
    "bighorn sheep",
    "thinhorn sheep",
    "spotted owl",
    "m-oram",
    "m-ovca",
    "m-ovca-ca",
    "m-ovda",
    "m-ovda-da",
    "m-ovda-st",
    "b-spow",
    "b-spow-ca",
)
"""Taxon codes and common names whose occurrence locations are withheld."""

# ---------------------------------------------------------------------------
# GeoJSON
# ---------------------------------------------------------------------------

# Feature ``properties.type`` values
BOUNDARY_TYPE = "Boundary"
BOUNDARY_CENTROID_TYPE = "Boundary Centroid"
OCCURRENCE_TYPE = "Occurrence"

# ``properties["project type"]`` values
PROJECT_SCOPE = "project"
RELATED_PROJECT_SCOPE = "relatedProject"

WGS84 = "EPSG:4326"

# ---------------------------------------------------------------------------
# EML decoding
# ---------------------------------------------------------------------------

EML_ATTRIBUTE_PREFIX = "@_"
EML_TEXT_KEY = "#text"

EML_ARRAY_TAGS: frozenset[str] = frozenset(
    {"relatedProject", "section", "taxonomicCoverage", "metadataProvider"}
)
"""Tags that always decode to a list, even when they occur once."""

# ---------------------------------------------------------------------------
# Transform kinds (TransformRecord.kind)
# ---------------------------------------------------------------------------

KIND_EML_METADATA = "eml_metadata"
KIND_BOUNDARIES = "eml_boundaries"
KIND_BOUNDARY_CENTROID = "eml_boundary_centroid"
KIND_OCCURRENCES = "dwc_occurrences"
KIND_SECURITY = "dwc_security"
