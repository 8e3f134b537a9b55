"""Outcome of the persecution/harm security classifier.

A classification is one of exactly two values:

- ``Unrestricted(payload)``: the spatial payload may be published as is.
- ``Restricted()``: the payload is withheld; consumers see ``{}``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Unrestricted:
    """Pass-through outcome carrying the unchanged payload."""

    payload: dict[str, Any]
    restricted: bool = field(default=False, init=False)


@dataclass(frozen=True, slots=True)
class Restricted:
    """Masked outcome.  ``payload`` is always an empty dict."""

    reason: str = ""
    restricted: bool = field(default=True, init=False)

    @property
    def payload(self) -> dict[str, Any]:
        return {}


SecurityMask = Unrestricted | Restricted
