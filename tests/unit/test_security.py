"""Tests for the persecution/harm security classifier.

Covers:
- Denylisted codes mask the payload to ``{}``
- Other codes pass the payload through unchanged (same object)
- Case-insensitive, whole-code matching
- Fail-open default and the fail-closed option for missing codes
- Feature and collection helpers
- Malformed collections raise a contract error
"""

from __future__ import annotations

from typing import Any

import pytest

from biohub_transforms.models.security import Restricted, Unrestricted
from biohub_transforms.transforms.dwc_occurrences import extract_occurrences
from biohub_transforms.transforms.security import (
    SecurityContractError,
    classify,
    classify_collection,
    classify_feature,
    normalise_taxon_code,
    taxon_code_of,
)


def _occurrence(taxon_id: Any = None, **dwc: Any) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [-123.0, 49.0]},
        "properties": {"type": "Occurrence", "dwc": {"taxonID": taxon_id, **dwc}},
    }


class TestClassify:
    def test_denylisted_code_restricted(self) -> None:
        mask = classify({"a": 1}, "b-spow")
        assert isinstance(mask, Restricted)
        assert mask.restricted is True
        assert mask.payload == {}
        assert mask.reason == "persecution_or_harm"

    def test_other_code_passes_through_same_object(self) -> None:
        payload = {"type": "Feature", "properties": {"dwc": {"taxonID": "M-DEER"}}}
        mask = classify(payload, "m-deer")
        assert isinstance(mask, Unrestricted)
        assert mask.restricted is False
        assert mask.payload is payload
        assert payload == {"type": "Feature", "properties": {"dwc": {"taxonID": "M-DEER"}}}

    @pytest.mark.parametrize("code", ["B-SPOW", "b-Spow", "  b-spow  ", "Spotted Owl"])
    def test_case_and_whitespace_insensitive(self, code: str) -> None:
        assert classify({"a": 1}, code).restricted is True

    @pytest.mark.parametrize("code", ["b-spo", "b-spow-x", "owl", "m-ovca-ca-2"])
    def test_no_partial_match(self, code: str) -> None:
        assert classify({"a": 1}, code).restricted is False

    def test_custom_denylist(self) -> None:
        assert classify({}, "M-DEER", denylist=("m-deer",)).restricted is True
        assert classify({}, "B-SPOW", denylist=("m-deer",)).restricted is False

    def test_denylist_entries_normalised(self) -> None:
        assert classify({}, "m-deer", denylist=(" M-DEER ",)).restricted is True

    @pytest.mark.parametrize("code", [None, "", "   ", True])
    def test_missing_code_fail_open(self, code: object) -> None:
        payload = {"a": 1}
        mask = classify(payload, code)
        assert mask.restricted is False
        assert mask.payload is payload

    @pytest.mark.parametrize("code", [None, "", "   "])
    def test_missing_code_fail_closed(self, code: object) -> None:
        mask = classify({"a": 1}, code, fail_closed=True)
        assert isinstance(mask, Restricted)
        assert mask.reason == "missing_taxon_code"
        assert mask.payload == {}

    def test_fail_closed_keeps_unknown_codes_open(self) -> None:
        assert classify({"a": 1}, "m-deer", fail_closed=True).restricted is False

    @pytest.mark.parametrize("code", [180703, 180703.0, "180703"])
    def test_numeric_code_matches_text_entry(self, code: object) -> None:
        mask = classify({"a": 1}, code, denylist=("180703",))
        assert isinstance(mask, Restricted)
        assert mask.reason == "persecution_or_harm"

    def test_numeric_code_is_present_when_fail_closed(self) -> None:
        payload = {"a": 1}
        mask = classify(payload, 180703, fail_closed=True)
        assert isinstance(mask, Unrestricted)
        assert mask.payload is payload


class TestNormaliseTaxonCode:
    def test_strips_and_lowers(self) -> None:
        assert normalise_taxon_code("  B-SPOW ") == "b-spow"

    def test_non_string(self) -> None:
        assert normalise_taxon_code(None) == ""
        assert normalise_taxon_code(False) == ""
        assert normalise_taxon_code(["b-spow"]) == ""

    def test_numbers_become_text(self) -> None:
        assert normalise_taxon_code(123) == "123"
        assert normalise_taxon_code(123.0) == "123"
        assert normalise_taxon_code(1.5) == "1.5"


class TestFeatureHelpers:
    def test_taxon_code_of(self) -> None:
        assert taxon_code_of(_occurrence("B-SPOW")) == "B-SPOW"

    def test_taxon_code_falls_back_to_associated_taxa(self) -> None:
        assert taxon_code_of(_occurrence(None, associatedTaxa="M-ORAM")) == "M-ORAM"

    def test_numeric_taxon_id_kept(self) -> None:
        feature = _occurrence(180703, associatedTaxa="M-ORAM")
        assert taxon_code_of(feature) == 180703
        mask = classify_feature(feature, denylist=("180703",))
        assert mask.payload == {}

    def test_taxon_code_of_non_occurrence(self) -> None:
        assert taxon_code_of({"properties": {"type": "Boundary"}}) is None
        assert taxon_code_of({}) is None

    def test_classify_feature(self) -> None:
        feature = _occurrence("M-OVCA")
        assert classify_feature(feature).payload == {}
        deer = _occurrence("M-DEER")
        assert classify_feature(deer).payload is deer

    def test_classify_extracted_occurrences(self, dwc_source: dict[str, Any]) -> None:
        features = extract_occurrences(dwc_source).to_dict()["features"]
        masks = [classify_feature(f) for f in features]
        assert [m.restricted for m in masks] == [True, False]


class TestClassifyCollection:
    def test_collection_without_occurrence(self) -> None:
        collection = {
            "type": "FeatureCollection",
            "features": [{"type": "Feature", "properties": {"type": "Boundary"}}],
        }
        assert classify_collection(collection) is None

    def test_empty_collection(self) -> None:
        assert classify_collection({"type": "FeatureCollection", "features": []}) is None

    def test_sensitive_collection_masked(self) -> None:
        collection = {"type": "FeatureCollection", "features": [_occurrence("B-SPOW-CA")]}
        mask = classify_collection(collection)
        assert mask is not None
        assert mask.payload == {}

    def test_unrestricted_collection_unchanged(self) -> None:
        collection = {"type": "FeatureCollection", "features": [_occurrence("M-DEER")]}
        mask = classify_collection(collection)
        assert mask is not None
        assert mask.payload is collection

    @pytest.mark.parametrize(
        "collection",
        [None, ["not", "a", "collection"], {"type": "FeatureCollection"}, {"features": "x"}],
    )
    def test_malformed_collection_raises(self, collection: Any) -> None:
        with pytest.raises(SecurityContractError) as exc_info:
            classify_collection(collection)
        assert exc_info.value.category == "contract"
        assert exc_info.value.code == "SECURITY_INPUT_INVALID"
