"""Data models and schemas.

Defines the data structures produced and consumed by the transforms:
- geojson: Point / Polygon / Feature / FeatureCollection
- eml_metadata: Flat search-index summary of an EML dataset
- security: Outcome of the persecution/harm classifier
- transform_record: Versioned transform output with supersede lifecycle
"""

from biohub_transforms.models.eml_metadata import (
    AdditionalMetadata,
    DatasetMetadata,
    FundingSource,
    ProjectSummary,
)
from biohub_transforms.models.geojson import (
    Feature,
    FeatureCollection,
    Point,
    Polygon,
    SpatialResult,
)
from biohub_transforms.models.security import Restricted, SecurityMask, Unrestricted
from biohub_transforms.models.transform_record import TransformRecord, current, supersede

__all__ = [
    "AdditionalMetadata",
    "DatasetMetadata",
    "Feature",
    "FeatureCollection",
    "FundingSource",
    "Point",
    "Polygon",
    "ProjectSummary",
    "Restricted",
    "SecurityMask",
    "SpatialResult",
    "TransformRecord",
    "Unrestricted",
    "current",
    "supersede",
]
