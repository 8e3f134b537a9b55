"""Tests for the JSONPath query helpers."""

from __future__ import annotations

from biohub_transforms.utils.json_path import as_list, compile_path, query, query_first

DOC = {
    "eml:eml": {
        "dataset": {
            "@_id": "ds-1",
            "title": "Dataset",
            "project": {
                "title": "P",
                "relatedProject": [{"title": "R1"}, {"title": "R2"}],
            },
        },
        "additionalMetadata": [
            {"metadata": {"a": 1}},
            {"metadata": {"b": 2}},
        ],
    }
}


class TestQuery:
    def test_member_access(self) -> None:
        assert query(DOC, '$."eml:eml".dataset.title') == ["Dataset"]

    def test_missing_key_yields_nothing(self) -> None:
        assert query(DOC, "$.nope.title") == []

    def test_scalar_mid_path_yields_nothing(self) -> None:
        assert query(DOC, '$."eml:eml".dataset.title.deeper') == []

    def test_none_document(self) -> None:
        assert query(None, "$..title") == []

    def test_null_values_dropped(self) -> None:
        assert query({"a": None, "b": {"a": 1}}, "$..a") == [1]

    def test_recursive_descent_in_document_order(self) -> None:
        assert query(DOC, "$..title") == ["Dataset", "P", "R1", "R2"]

    def test_recursive_descent_then_path(self) -> None:
        assert query(DOC, "$..project.title") == ["P"]

    def test_fan_out(self) -> None:
        assert query(DOC, "$..relatedProject[*].title") == ["R1", "R2"]

    def test_fan_out_on_object_yields_object(self) -> None:
        assert query({"a": {"b": 1}}, "a[*].b") == [1]

    def test_fan_out_then_member(self) -> None:
        assert query(DOC, '$."eml:eml".additionalMetadata[*].metadata') == [{"a": 1}, {"b": 2}]

    def test_member_access_does_not_unwrap_lists(self) -> None:
        assert query(DOC, '$."eml:eml".additionalMetadata.metadata') == []

    def test_attribute_keys(self) -> None:
        assert query(DOC, '$..dataset."@_id"') == ["ds-1"]

    def test_recursive_descent_does_not_duplicate_list_members(self) -> None:
        doc = {"a": [{"project": 1}, {"project": 2}]}
        assert query(doc, "$..project") == [1, 2]


class TestCompilePath:
    def test_expressions_cached(self) -> None:
        assert compile_path("$..title") is compile_path("$..title")


class TestQueryFirst:
    def test_returns_first_match(self) -> None:
        assert query_first(DOC, "$..relatedProject[*].title") == "R1"

    def test_returns_none_when_missing(self) -> None:
        assert query_first(DOC, "$..funding") is None


class TestAsList:
    def test_none(self) -> None:
        assert as_list(None) == []

    def test_single_value(self) -> None:
        assert as_list({"a": 1}) == [{"a": 1}]

    def test_list_returned_as_is(self) -> None:
        value = [1, 2]
        assert as_list(value) is value
