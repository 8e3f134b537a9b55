"""Submission transform pipeline.

Runs every transform that has input for one submission and records each
output as a new ``TransformRecord``:

1. Decode EML XML (when only XML is supplied)
2. EML metadata summary
3. Project boundaries + boundary centroid
4. Darwin Core occurrences
5. Security classification of each occurrence

Graceful degradation: a stage that raises a ``TransformError`` is logged
and recorded in ``errors``; the remaining stages still run.  Stages that
depend on a failed stage's output are not attempted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from biohub_transforms.core.config import TransformConfig
from biohub_transforms.core.constants import (
    KIND_BOUNDARIES,
    KIND_BOUNDARY_CENTROID,
    KIND_EML_METADATA,
    KIND_OCCURRENCES,
    KIND_SECURITY,
)
from biohub_transforms.core.exceptions import TransformError
from biohub_transforms.models.transform_record import TransformRecord, supersede
from biohub_transforms.transforms.dwc_occurrences import extract_occurrences
from biohub_transforms.transforms.eml_metadata import extract_eml_metadata
from biohub_transforms.transforms.eml_xml import decode_eml
from biohub_transforms.transforms.geographic_coverage import (
    extract_boundaries,
    extract_boundary_centroid,
)
from biohub_transforms.transforms.security import SecurityContractError, classify_feature

logger = logging.getLogger("biohub_transforms.orchestrators.submission_pipeline")

T = TypeVar("T")


@dataclass(slots=True)
class SubmissionTransformResult:
    """Summary of one pipeline run.

    Attributes:
        submission_id: Submission the transforms ran over.
        records: Full transform history after this run (previous current
            records of the same kinds are end-dated).
        produced: Records created by this run, keyed by transform kind.
        skipped: Malformed source features skipped, keyed by transform kind.
        errors: Structured error dicts of failed stages.
    """

    submission_id: str
    records: list[TransformRecord] = field(default_factory=list)
    produced: dict[str, TransformRecord] = field(default_factory=dict)
    skipped: dict[str, int] = field(default_factory=dict)
    errors: list[dict[str, object]] = field(default_factory=list)

    @property
    def status(self) -> str:
        if not self.errors:
            return "success"
        return "partial" if self.produced else "failed"


def run_submission_transforms(
    submission_id: str,
    *,
    eml_json: dict[str, Any] | None = None,
    eml_xml: bytes | str | None = None,
    dwc_json: dict[str, Any] | None = None,
    config: TransformConfig | None = None,
    history: list[TransformRecord] | None = None,
) -> SubmissionTransformResult:
    """Run all applicable transforms for one submission.

    Args:
        submission_id: Identifier of the submission.
        eml_json: Decoded EML tree.  Takes precedence over ``eml_xml``.
        eml_xml: Raw EML document, decoded when ``eml_json`` is absent.
        dwc_json: Darwin Core JSON source (occurrence/event/location).
        config: Transform configuration (defaults to ``TransformConfig()``).
        history: Existing transform records for supersession.

    Returns:
        A ``SubmissionTransformResult``.
    """
    config = config or TransformConfig()
    result = SubmissionTransformResult(submission_id=submission_id, records=list(history or []))

    logger.info(
        "Submission transforms started | submission_id=%s | eml=%s | dwc=%s",
        submission_id,
        eml_json is not None or eml_xml is not None,
        dwc_json is not None,
    )

    if eml_json is None and eml_xml is not None:
        eml_json = _run_stage(result, "eml_xml", lambda: decode_eml(eml_xml))

    if eml_json is not None:
        metadata = _run_stage(
            result,
            KIND_EML_METADATA,
            lambda: extract_eml_metadata(eml_json, submitter_system=config.source_system),
        )
        if metadata is not None:
            _record(result, KIND_EML_METADATA, metadata.to_dict())

        boundaries = _run_stage(result, KIND_BOUNDARIES, lambda: extract_boundaries(eml_json))
        if boundaries is not None:
            _record(result, KIND_BOUNDARIES, boundaries.to_dict(), skipped=boundaries.skipped)

        dataset_id = metadata.dataset_id if metadata is not None else None
        centroid = _run_stage(
            result,
            KIND_BOUNDARY_CENTROID,
            lambda: extract_boundary_centroid(
                eml_json, dataset_id=dataset_id, crs=config.centroid_crs
            ),
        )
        if centroid is not None:
            _record(result, KIND_BOUNDARY_CENTROID, centroid.to_dict(), skipped=centroid.skipped)

    if dwc_json is not None:
        occurrences = _run_stage(
            result,
            KIND_OCCURRENCES,
            lambda: extract_occurrences(dwc_json, dataset_id=submission_id),
        )
        if occurrences is not None:
            collection = occurrences.to_dict()
            _record(result, KIND_OCCURRENCES, collection, skipped=occurrences.skipped)
            secured = _run_stage(
                result, KIND_SECURITY, lambda: _secure_occurrences(collection, config)
            )
            if secured is not None:
                _record(result, KIND_SECURITY, secured)

    logger.info(
        "Submission transforms finished | submission_id=%s | status=%s | produced=%d | errors=%d",
        submission_id,
        result.status,
        len(result.produced),
        len(result.errors),
    )
    return result


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _run_stage(result: SubmissionTransformResult, stage: str, fn: Callable[[], T]) -> T | None:
    try:
        return fn()
    except TransformError as exc:
        exc.submission_id = exc.submission_id or result.submission_id
        logger.error(
            "Transform stage failed | submission_id=%s | stage=%s | code=%s | error=%s",
            result.submission_id,
            exc.stage or stage,
            exc.code,
            exc.message,
        )
        result.errors.append(exc.to_error_dict())
        return None


def _record(
    result: SubmissionTransformResult,
    kind: str,
    result_data: dict[str, Any],
    *,
    skipped: int = 0,
) -> None:
    record = TransformRecord(
        submission_id=result.submission_id, kind=kind, result_data=result_data
    )
    result.records = supersede(result.records, record)
    result.produced[kind] = record
    result.skipped[kind] = skipped


def _secure_occurrences(collection: dict[str, Any], config: TransformConfig) -> dict[str, Any]:
    """Classify every occurrence feature; restricted payloads become ``{}``."""
    features = collection.get("features")
    if not isinstance(features, list):
        msg = "Occurrence collection has no features list"
        raise SecurityContractError(msg)
    components: list[dict[str, Any]] = []
    for idx, feature in enumerate(features):
        if not isinstance(feature, dict):
            msg = f"Occurrence feature {idx} is not an object"
            raise SecurityContractError(msg)
        mask = classify_feature(
            feature,
            denylist=config.security_denylist,
            fail_closed=config.security_fail_closed,
        )
        components.append(
            {
                "feature_index": idx,
                "restricted": mask.restricted,
                "reason": getattr(mask, "reason", ""),
                "spatial_data": mask.payload,
            }
        )
    restricted = sum(1 for c in components if c["restricted"])
    logger.info(
        "Occurrences secured | total=%d | restricted=%d",
        len(components),
        restricted,
    )
    return {"components": components}
