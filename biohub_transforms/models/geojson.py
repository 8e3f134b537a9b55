"""Pydantic GeoJSON models for transform output.

Only the subset BioHub writes is modelled: ``Point`` and ``Polygon``
geometries wrapped in ``Feature`` objects inside a ``FeatureCollection``.
Coordinates are always ``[longitude, latitude]`` (WGS 84).

Validation guarantees the output invariants downstream consumers
(map search, spatial search endpoint) rely on:
- every polygon ring is closed (first position equals last)
- every position lies within WGS 84 bounds
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0


def _check_position(position: list[float]) -> list[float]:
    if len(position) != 2:
        msg = f"Position must be [lon, lat], got {len(position)} value(s)"
        raise ValueError(msg)
    lon, lat = position
    if not MIN_LONGITUDE <= lon <= MAX_LONGITUDE:
        msg = f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
        raise ValueError(msg)
    if not MIN_LATITUDE <= lat <= MAX_LATITUDE:
        msg = f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
        raise ValueError(msg)
    return position


class Point(BaseModel):
    """GeoJSON ``Point`` geometry."""

    type: Literal["Point"] = "Point"
    coordinates: list[float]

    @field_validator("coordinates")
    @classmethod
    def _valid_position(cls, value: list[float]) -> list[float]:
        return _check_position(value)


class Polygon(BaseModel):
    """GeoJSON ``Polygon`` geometry.

    ``coordinates`` is a list of linear rings.  BioHub boundaries put one
    ring per EML ``datasetGPolygon`` in the same polygon.
    """

    type: Literal["Polygon"] = "Polygon"
    coordinates: list[list[list[float]]]

    @field_validator("coordinates")
    @classmethod
    def _closed_rings(cls, rings: list[list[list[float]]]) -> list[list[list[float]]]:
        for idx, ring in enumerate(rings):
            if len(ring) < 4:
                msg = f"Ring {idx} has {len(ring)} position(s), need at least 4"
                raise ValueError(msg)
            if ring[0] != ring[-1]:
                msg = f"Ring {idx} is not closed: first {ring[0]} != last {ring[-1]}"
                raise ValueError(msg)
            for position in ring:
                _check_position(position)
        return rings


class Feature(BaseModel):
    """GeoJSON ``Feature`` with free-form properties."""

    type: Literal["Feature"] = "Feature"
    geometry: Point | Polygon
    properties: dict[str, Any] = Field(default_factory=dict)


class FeatureCollection(BaseModel):
    """GeoJSON ``FeatureCollection``.  ``features`` is never null."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain GeoJSON dict."""
        return self.model_dump(mode="json")


@dataclass(frozen=True, slots=True)
class SpatialResult:
    """Output of a spatial transform.

    Attributes:
        collection: The GeoJSON output (empty ``features`` when nothing matched).
        skipped: Number of source features dropped as malformed.
        skip_reasons: One message per skipped feature.
    """

    collection: FeatureCollection = field(default_factory=FeatureCollection)
    skipped: int = 0
    skip_reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.collection.to_dict()
