"""Pydantic model for the EML search-index summary.

The summary is the flat document BioHub indexes for dataset search.
It deliberately carries only fields used for searching; everything else
stays in the source EML.

Field names follow the camelCase keys of the indexed JSON document and
are exposed as snake_case attributes through aliases.  Values copied
verbatim from the EML tree (abstract sections, taxonomic coverage,
additional-metadata blocks) stay as arbitrary JSON.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _SummaryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class FundingSource(_SummaryModel):
    """One funding section of a project.

    Attributes:
        agency_name: Text of the funding section's ``para``.
        funding_start_date: ``para`` of the nested "Funding Start Date" section.
        funding_end_date: ``para`` of the nested "Funding End Date" section.
    """

    agency_name: Any = Field(default=None, alias="agencyName")
    funding_start_date: Any = Field(default=None, alias="fundingStartDate")
    funding_end_date: Any = Field(default=None, alias="fundingEndDate")


class ProjectSummary(_SummaryModel):
    """Search summary of one EML ``project`` or ``relatedProject``."""

    project_id: Any = Field(default=None, alias="projectId")
    project_title: Any = Field(default=None, alias="projectTitle")
    project_organization_name: Any = Field(default=None, alias="projectOrganizationName")
    project_abstract: Any = Field(default=None, alias="projectAbstract")
    taxonomic_coverage: Any = Field(default=None, alias="taxonomicCoverage")
    funding_source: list[FundingSource] | None = Field(default=None, alias="fundingSource")


class AdditionalMetadata(_SummaryModel):
    """Blocks lifted from ``eml:eml.additionalMetadata[*].metadata``."""

    project_iucn_conservation_actions: Any = Field(
        default=None, alias="projectIUCNConservationActions"
    )
    project_stakeholder_partnerships: Any = Field(
        default=None, alias="projectStakeholderPartnerships"
    )
    project_activities: Any = Field(default=None, alias="projectActivities")
    project_first_nations: Any = Field(default=None, alias="projectFirstNations")
    project_survey_proprietors: Any = Field(default=None, alias="projectSurveyProprietors")


class DatasetMetadata(_SummaryModel):
    """Top-level EML search-index summary.

    Attributes:
        dataset_title: ``dataset.title``.
        dataset_id: ``dataset.@_id`` (the submission UUID).
        source_system: ``dataset.@_system``.
        publish_date: ``dataset.pubDate``.
        project: Summaries of the dataset's ``project`` node(s).
        related_project: Summaries of ``relatedProject`` nodes.
        submitter_system: System that submitted the dataset.
        primary_keywords: Reserved; always an empty string.
        additional_metadata: IUCN actions, partnerships, activities, etc.
    """

    dataset_title: Any = Field(default=None, alias="datasetTitle")
    dataset_id: Any = Field(default=None, alias="datasetId")
    source_system: Any = Field(default=None, alias="sourceSystem")
    publish_date: Any = Field(default=None, alias="publishDate")
    project: list[ProjectSummary] | None = None
    related_project: list[ProjectSummary] | None = Field(default=None, alias="relatedProject")
    submitter_system: str = Field(default="sims", alias="submitterSystem")
    primary_keywords: str = Field(default="", alias="primaryKeywords")
    additional_metadata: AdditionalMetadata = Field(
        default_factory=AdditionalMetadata, alias="additionalMetadata"
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys and null fields stripped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
