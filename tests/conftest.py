"""Shared pytest fixtures for the BioHub transforms test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def moose_eml_xml(data_dir: Path) -> bytes:
    """Raw EML for a moose inventory: one project, one related survey."""
    return (data_dir / "moose_survey_eml.xml").read_bytes()


# ---------------------------------------------------------------------------
# EML JSON builders
# ---------------------------------------------------------------------------


def _ring_points(coords: list[tuple[float, float]]) -> list[dict[str, str]]:
    """Build EML ``gRingPoint`` entries (string values) from ``(lon, lat)`` pairs."""
    return [{"gRingLatitude": str(lat), "gRingLongitude": str(lon)} for lon, lat in coords]


def _coverage(description: str, *polygons: list[tuple[float, float]]) -> dict[str, Any]:
    """Build a ``geographicCoverage`` node with one ``datasetGPolygon`` per polygon."""
    return {
        "geographicDescription": description,
        "datasetGPolygon": [
            {"datasetGPolygonOuterGRing": {"gRingPoint": _ring_points(poly)}} for poly in polygons
        ],
    }


def _eml_document(
    project_coverage: Any = None,
    related_coverages: list[Any] | None = None,
    *,
    dataset_id: str = "dataset-uuid",
    title: str = "Test Dataset",
) -> dict[str, Any]:
    """Build a decoded EML tree with optional project / related-project coverage."""
    project: dict[str, Any] = {"@_id": "project-uuid", "title": "Test Project"}
    if project_coverage is not None:
        project["studyAreaDescription"] = {"coverage": {"geographicCoverage": project_coverage}}
    if related_coverages:
        project["relatedProject"] = [
            {
                "@_id": f"related-{idx}",
                "title": f"Related {idx}",
                "studyAreaDescription": {"coverage": {"geographicCoverage": cov}},
            }
            for idx, cov in enumerate(related_coverages)
        ]
    return {
        "eml:eml": {
            "dataset": {
                "@_id": dataset_id,
                "title": title,
                "project": project,
            }
        }
    }


@pytest.fixture()
def make_coverage():
    """Factory for decoded ``geographicCoverage`` nodes."""
    return _coverage


@pytest.fixture()
def make_eml():
    """Factory for decoded EML trees with project / related-project coverage."""
    return _eml_document


@pytest.fixture()
def smithers_block() -> list[tuple[float, float]]:
    """Open ring, roughly 13 km x 11 km, near Smithers, BC."""
    return [
        (-127.20, 54.75),
        (-127.00, 54.75),
        (-127.00, 54.85),
        (-127.20, 54.85),
    ]


@pytest.fixture()
def kamloops_block() -> list[tuple[float, float]]:
    """Open ring near Kamloops, BC."""
    return [
        (-120.40, 50.65),
        (-120.30, 50.65),
        (-120.30, 50.70),
        (-120.40, 50.70),
    ]


@pytest.fixture()
def dwc_source() -> dict[str, Any]:
    """Darwin Core source with one sensitive and one unrestricted occurrence."""
    return {
        "event": [
            {"eventID": "evt-1", "eventDate": "2021-02-01"},
            {"eventID": "evt-2", "eventDate": "2021-02-02"},
        ],
        "location": [
            {
                "eventID": "evt-1",
                "decimalLatitude": "54.55",
                "decimalLongitude": "-128.50",
                "verbatimSRS": "EPSG:4326",
                "verbatimCoordinates": "54.55 -128.50",
            },
            {"eventID": "evt-2", "decimalLatitude": "54.56", "decimalLongitude": "-128.48"},
        ],
        "occurrence": [
            {
                "occurrenceID": "occ-1",
                "eventID": "evt-1",
                "taxonID": "B-SPOW",
                "vernacularName": "Spotted Owl",
                "sex": "female",
                "lifeStage": "adult",
                "individualCount": "1",
            },
            {
                "occurrenceID": "occ-2",
                "eventID": "evt-2",
                "taxonID": "M-DEER",
                "vernacularName": "Mule Deer",
                "individualCount": "3",
            },
        ],
    }
