"""Darwin Core occurrence extraction.

Joins the ``occurrence``, ``event`` and ``location`` tables of a Darwin
Core archive (rendered as JSON) on ``eventID`` and emits one
``Occurrence`` point feature per occurrence record.

Rules:
- Occurrences without a matching event or location still produce a
  feature; the joined fields are ``None``.
- A blank or missing ``decimalLongitude``/``decimalLatitude`` becomes
  ``0``.  A non-numeric or out-of-range value skips that occurrence only.
"""

from __future__ import annotations

import logging
from typing import Any

from biohub_transforms.core.constants import OCCURRENCE_TYPE
from biohub_transforms.core.exceptions import ValidationError
from biohub_transforms.models.geojson import Feature, FeatureCollection, Point, SpatialResult
from biohub_transforms.utils.json_path import as_list

logger = logging.getLogger("biohub_transforms.transforms.dwc_occurrences")

# DwC terms copied from each source table into ``properties.dwc``
OCCURRENCE_TERMS: tuple[str, ...] = (
    "occurrenceID",
    "sex",
    "lifeStage",
    "taxonID",
    "vernacularName",
    "scientificName",
    "occurrenceRemarks",
    "individualCount",
)
EVENT_TERMS: tuple[str, ...] = ("eventDate",)
LOCATION_TERMS: tuple[str, ...] = ("verbatimSRS", "verbatimCoordinates")


class DwcOccurrenceError(ValidationError):
    """Raised when the Darwin Core source is not a JSON object."""

    default_stage = "dwc_occurrences"
    default_code = "DWC_SOURCE_INVALID"


def extract_occurrences(dwc_json: dict[str, Any], *, dataset_id: Any = None) -> SpatialResult:
    """Extract occurrence point features from a Darwin Core JSON source.

    Args:
        dwc_json: ``{"occurrence": [...], "event": [...], "location": [...]}``.
        dataset_id: Value written to ``properties.dwc.datasetID``.

    Returns:
        A ``SpatialResult`` with one ``Point`` feature per usable occurrence.

    Raises:
        DwcOccurrenceError: If ``dwc_json`` is not a dict.
    """
    if not isinstance(dwc_json, dict):
        msg = f"Darwin Core source must be a JSON object, got {type(dwc_json).__name__}"
        raise DwcOccurrenceError(msg)

    events = _index_by_event_id(dwc_json.get("event"))
    locations = _index_by_event_id(dwc_json.get("location"))

    features: list[Feature] = []
    skip_reasons: list[str] = []

    for idx, occurrence in enumerate(as_list(dwc_json.get("occurrence"))):
        if not isinstance(occurrence, dict):
            skip_reasons.append(f"Occurrence {idx} is not an object")
            continue

        event_id = occurrence.get("eventID")
        event = events.get(event_id, {})
        location = locations.get(event_id, {})

        try:
            lon = _coordinate(location.get("decimalLongitude"), -180.0, 180.0)
            lat = _coordinate(location.get("decimalLatitude"), -90.0, 90.0)
        except ValueError as exc:
            reason = f"Occurrence {occurrence.get('occurrenceID', idx)!r}: {exc}"
            logger.warning("Skipping occurrence | %s", reason)
            skip_reasons.append(reason)
            continue

        dwc: dict[str, Any] = {
            "type": "PhysicalObject",
            "basisOfRecord": "Occurrence",
            "datasetID": dataset_id,
        }
        dwc.update({term: occurrence.get(term) for term in OCCURRENCE_TERMS})
        dwc.update({term: event.get(term) for term in EVENT_TERMS})
        dwc.update({term: location.get(term) for term in LOCATION_TERMS})

        features.append(
            Feature(
                geometry=Point(coordinates=[lon, lat]),
                properties={"type": OCCURRENCE_TYPE, "dwc": dwc},
            )
        )

    logger.info(
        "Occurrences extracted | dataset_id=%s | features=%d | skipped=%d",
        dataset_id,
        len(features),
        len(skip_reasons),
    )
    return SpatialResult(
        collection=FeatureCollection(features=features),
        skipped=len(skip_reasons),
        skip_reasons=skip_reasons,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _index_by_event_id(rows: Any) -> dict[Any, dict[str, Any]]:
    """Index rows by ``eventID``; the first row for an id wins."""
    index: dict[Any, dict[str, Any]] = {}
    for row in as_list(rows):
        if isinstance(row, dict) and "eventID" in row:
            index.setdefault(row["eventID"], row)
    return index


def _coordinate(raw: Any, lower: float, upper: float) -> float:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        msg = f"non-numeric coordinate {raw!r}"
        raise ValueError(msg) from exc
    if not lower <= value <= upper:
        msg = f"coordinate {value} outside [{lower}, {upper}]"
        raise ValueError(msg)
    return value
