"""JSONPath queries over decoded JSON documents.

EML documents are schema-flexible: the same element can sit at different
depths, and an element that occurs once decodes to an object while a
repeated one decodes to a list.  Queries go through ``jsonpath-ng``::

    $..project.studyAreaDescription..geographicCoverage
    $."eml:eml".additionalMetadata[*].metadata
    $..datasetGPolygon[*].datasetGPolygonOuterGRing.gRingPoint

``[*]`` applied to an object yields the object itself, so it is used
wherever an element may occur once or many times.  Missing keys and
type mismatches yield no matches.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jsonpath_ng import JSONPath, parse


@lru_cache(maxsize=128)
def compile_path(path: str) -> JSONPath:
    """Parse ``path`` once and reuse the expression."""
    return parse(path)


def query(doc: Any, path: str) -> list[Any]:
    """Return the value of every match of ``path`` in document order.

    ``None`` documents and ``null`` values yield no matches.
    """
    if doc is None:
        return []
    return [match.value for match in compile_path(path).find(doc) if match.value is not None]


def query_first(doc: Any, path: str) -> Any:
    """Return the first value matching ``path``, or ``None``."""
    matches = query(doc, path)
    return matches[0] if matches else None


def as_list(value: Any) -> list[Any]:
    """Normalise a decoded EML value that may be a single item or a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
