"""EML metadata extraction.

Flattens a decoded EML document into the ``DatasetMetadata`` summary
used for dataset search.  Only fields that support searching are
extracted; everything else stays in the source EML.

Lookup rules:
- The dataset is the first ``dataset`` found anywhere under ``eml:eml``.
- Projects are the first ``project`` node under the dataset; related
  projects are every ``relatedProject`` entry under the dataset.
- Funding sections are read from inside the project that contains them,
  so each project only ever carries its own funding.
- Any missing path produces ``None``, which is stripped on serialisation.
"""

from __future__ import annotations

import logging
from typing import Any

from biohub_transforms.core.exceptions import ValidationError
from biohub_transforms.models.eml_metadata import (
    AdditionalMetadata,
    DatasetMetadata,
    FundingSource,
    ProjectSummary,
)
from biohub_transforms.utils.json_path import as_list, query, query_first

logger = logging.getLogger("biohub_transforms.transforms.eml_metadata")

FUNDING_START_TITLE = "Funding Start Date"
FUNDING_END_TITLE = "Funding End Date"

# additionalMetadata block -> (path under ``metadata``)
_ADDITIONAL_METADATA_PATHS: dict[str, str] = {
    "project_iucn_conservation_actions": "IUCNConservationActions.IUCNConservationAction",
    "project_stakeholder_partnerships": "stakeholderPartnerships.stakeholderPartnership",
    "project_activities": "projectActivities.projectActivity",
    "project_first_nations": "firstNationPartnerships.firstNationPartnership",
    "project_survey_proprietors": "projectSurveyProprietors.projectSurveyProprietor",
}


class EmlMetadataError(ValidationError):
    """Raised when the EML input is not a JSON object."""

    default_stage = "eml_metadata"
    default_code = "EML_METADATA_INVALID"


def extract_eml_metadata(
    eml_json: dict[str, Any], *, submitter_system: str = "sims"
) -> DatasetMetadata:
    """Build the search summary for a decoded EML document.

    Args:
        eml_json: Decoded EML tree (``{"eml:eml": {...}}``).  A tree that
            is already unwrapped from ``eml:eml`` is accepted as is.
        submitter_system: Value for ``submitterSystem``.

    Returns:
        A ``DatasetMetadata`` model.  Absent EML paths leave fields ``None``.

    Raises:
        EmlMetadataError: If ``eml_json`` is not a dict.
    """
    if not isinstance(eml_json, dict):
        msg = f"EML source must be a JSON object, got {type(eml_json).__name__}"
        raise EmlMetadataError(msg)

    eml = query_first(eml_json, '$."eml:eml"')
    if eml is None:
        eml = eml_json

    dataset = query_first(eml, "$..dataset")
    if isinstance(dataset, list):
        dataset = dataset[0] if dataset else None

    projects = [
        _summarise_project(p) for p in as_list(query_first(dataset, "$..project"))
    ]
    related_projects = [
        _summarise_project(p) for p in query(dataset, "$..relatedProject[*]")
    ]

    metadata = DatasetMetadata(
        dataset_title=query_first(dataset, "title"),
        dataset_id=query_first(dataset, '"@_id"'),
        source_system=query_first(dataset, '"@_system"'),
        publish_date=query_first(dataset, "pubDate"),
        project=projects or None,
        related_project=related_projects or None,
        submitter_system=submitter_system,
        additional_metadata=_additional_metadata(eml),
    )

    logger.info(
        "EML metadata extracted | dataset_id=%s | projects=%d | related_projects=%d",
        metadata.dataset_id,
        len(projects),
        len(related_projects),
    )
    return metadata


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _summarise_project(project: Any) -> ProjectSummary:
    if not isinstance(project, dict):
        return ProjectSummary()

    funding = [_funding_source(section) for section in query(project, "funding.section[*]")]

    return ProjectSummary(
        project_id=project.get("@_id"),
        project_title=project.get("title"),
        project_organization_name=query_first(project, "personnel[*].organizationName"),
        project_abstract=query_first(project, "abstract.section"),
        taxonomic_coverage=query_first(
            project, "studyAreaDescription.coverage.taxonomicCoverage"
        ),
        funding_source=funding or None,
    )


def _funding_source(section: Any) -> FundingSource:
    if not isinstance(section, dict):
        return FundingSource(agency_name=section)
    return FundingSource(
        agency_name=section.get("para"),
        funding_start_date=_titled_para(section, FUNDING_START_TITLE),
        funding_end_date=_titled_para(section, FUNDING_END_TITLE),
    )


def _titled_para(section: dict[str, Any], title: str) -> Any:
    """Return ``para`` of the first nested section whose ``title`` matches."""
    for nested in query(section, "section[*]"):
        if isinstance(nested, dict) and nested.get("title") == title:
            return nested.get("para")
    return None


def _additional_metadata(eml: Any) -> AdditionalMetadata:
    blocks = query(eml, "additionalMetadata[*].metadata")
    values: dict[str, Any] = {}
    for field_name, path in _ADDITIONAL_METADATA_PATHS.items():
        values[field_name] = next(
            (match for block in blocks if (match := query_first(block, path)) is not None),
            None,
        )
    return AdditionalMetadata(**values)
