"""Persecution/harm security classification.

Decides whether the spatial payload of an occurrence may be published.
A taxon code that matches the denylist (case-insensitive, surrounding
whitespace ignored, whole code only) masks the payload to ``{}``;
every other code passes the payload through unchanged.

Posture: unknown codes are unrestricted (fail-open).  With
``fail_closed=True`` an occurrence that carries no taxon code at all is
restricted instead; codes that are present but not denylisted still
pass through.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from biohub_transforms.core.constants import DEFAULT_SECURITY_DENYLIST, OCCURRENCE_TYPE
from biohub_transforms.core.exceptions import ContractError
from biohub_transforms.models.security import Restricted, SecurityMask, Unrestricted

logger = logging.getLogger("biohub_transforms.transforms.security")

REASON_DENYLISTED = "persecution_or_harm"
REASON_MISSING_TAXON = "missing_taxon_code"


class SecurityContractError(ContractError):
    """Raised when the security stage receives a malformed feature collection."""

    default_stage = "security"
    default_code = "SECURITY_INPUT_INVALID"


def normalise_taxon_code(code: object) -> str:
    """Lower-case and trim a taxon code.

    Numeric codes (e.g. an ITIS TSN decoded as a number) compare as their
    text form; an integral float drops its ``.0``.  Booleans and other
    non-string values normalise to ``""``.
    """
    if isinstance(code, bool):
        return ""
    if isinstance(code, int):
        return str(code)
    if isinstance(code, float):
        return str(int(code)) if code.is_integer() else str(code)
    if not isinstance(code, str):
        return ""
    return code.strip().lower()


def classify(
    spatial_payload: dict[str, Any],
    taxon_code: object,
    *,
    denylist: Iterable[str] = DEFAULT_SECURITY_DENYLIST,
    fail_closed: bool = False,
) -> SecurityMask:
    """Classify one spatial payload by its taxon code.

    Args:
        spatial_payload: The payload to publish when unrestricted.  It is
            returned as is, never copied or modified.
        taxon_code: Taxon identifier of the occurrence.
        denylist: Sensitive taxon codes.
        fail_closed: Restrict payloads that have no taxon code.

    Returns:
        ``Restricted()`` or ``Unrestricted(spatial_payload)``.
    """
    code = normalise_taxon_code(taxon_code)
    blocked = {normalise_taxon_code(entry) for entry in denylist}

    if code and code in blocked:
        logger.info("Occurrence restricted | taxon=%s | reason=%s", code, REASON_DENYLISTED)
        return Restricted(reason=REASON_DENYLISTED)
    if not code and fail_closed:
        logger.info("Occurrence restricted | taxon=<none> | reason=%s", REASON_MISSING_TAXON)
        return Restricted(reason=REASON_MISSING_TAXON)
    return Unrestricted(payload=spatial_payload)


def taxon_code_of(feature: dict[str, Any]) -> object:
    """Read the taxon code of an occurrence feature.

    Uses ``properties.dwc.taxonID`` and falls back to
    ``properties.dwc.associatedTaxa`` for older submissions.
    """
    properties = feature.get("properties") if isinstance(feature, dict) else None
    dwc = properties.get("dwc") if isinstance(properties, dict) else None
    if not isinstance(dwc, dict):
        return None
    code = dwc.get("taxonID")
    if normalise_taxon_code(code):
        return code
    return dwc.get("associatedTaxa")


def classify_feature(
    feature: dict[str, Any],
    *,
    denylist: Iterable[str] = DEFAULT_SECURITY_DENYLIST,
    fail_closed: bool = False,
) -> SecurityMask:
    """Classify a GeoJSON occurrence feature dict by its own taxon code."""
    return classify(
        feature, taxon_code_of(feature), denylist=denylist, fail_closed=fail_closed
    )


def classify_collection(
    collection: dict[str, Any],
    *,
    denylist: Iterable[str] = DEFAULT_SECURITY_DENYLIST,
    fail_closed: bool = False,
) -> SecurityMask | None:
    """Classify a spatial component holding a single occurrence.

    The component's first feature carries the occurrence being classified.

    Returns:
        The classification of the whole component, or ``None`` when the
        component contains no ``Occurrence`` feature.

    Raises:
        SecurityContractError: If ``collection`` is not a dict with a
            ``features`` list.
    """
    if not isinstance(collection, dict):
        msg = f"Expected a feature collection, got {type(collection).__name__}"
        raise SecurityContractError(msg)
    features = collection.get("features")
    if not isinstance(features, list):
        msg = "Feature collection has no features list"
        raise SecurityContractError(msg)
    if not any(_is_occurrence(feature) for feature in features):
        return None
    return classify(
        collection, taxon_code_of(features[0]), denylist=denylist, fail_closed=fail_closed
    )


def _is_occurrence(feature: Any) -> bool:
    if not isinstance(feature, dict):
        return False
    properties = feature.get("properties")
    return isinstance(properties, dict) and properties.get("type") == OCCURRENCE_TYPE
