"""Transform configuration loaded from environment variables.

All values have defaults matching the behaviour of the BioHub database
transforms, so an empty environment reproduces them exactly.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a value cannot be
    used, so bad configuration surfaces at startup rather than halfway
    through a submission.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from biohub_transforms.core.constants import DEFAULT_SECURITY_DENYLIST
from biohub_transforms.core.exceptions import TransformError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class ConfigValidationError(TransformError):
    """Raised when configuration values are invalid.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class TransformConfig:
    """Immutable transform configuration.

    Attributes:
        security_denylist: Lower-cased taxon codes whose locations are masked.
        security_fail_closed: Mask occurrences that carry no taxon code.
        centroid_crs: Projected CRS used for centroid computation, or
            ``"auto"`` for the local UTM zone.
        source_system: Value written to ``submitterSystem`` in EML metadata.
    """

    security_denylist: tuple[str, ...] = DEFAULT_SECURITY_DENYLIST
    security_fail_closed: bool = False
    centroid_crs: str = "auto"
    source_system: str = "sims"

    @classmethod
    def from_env(cls) -> TransformConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is empty, not a boolean, or
                names a CRS pyproj cannot resolve.
        """
        raw_denylist = os.getenv("SECURITY_TAXON_DENYLIST")
        if raw_denylist is None:
            denylist = DEFAULT_SECURITY_DENYLIST
        else:
            denylist = tuple(
                code.strip().lower() for code in raw_denylist.split(",") if code.strip()
            )
            if not denylist:
                raise ConfigValidationError(
                    "SECURITY_TAXON_DENYLIST", raw_denylist, "must list at least one taxon code"
                )

        config = cls(
            security_denylist=denylist,
            security_fail_closed=_parse_bool(
                "SECURITY_FAIL_CLOSED", os.getenv("SECURITY_FAIL_CLOSED", "false")
            ),
            centroid_crs=os.getenv("CENTROID_CRS", "auto").strip() or "auto",
            source_system=os.getenv("SUBMITTER_SYSTEM", "sims"),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false)")


def _validate(config: TransformConfig) -> None:
    """Validate configuration values.  Raises ``ConfigValidationError``."""
    if not config.source_system.strip():
        raise ConfigValidationError("SUBMITTER_SYSTEM", config.source_system, "must not be empty")

    if config.centroid_crs != "auto":
        from pyproj import CRS
        from pyproj.exceptions import CRSError

        try:
            crs = CRS.from_user_input(config.centroid_crs)
        except CRSError as exc:
            raise ConfigValidationError(
                "CENTROID_CRS", config.centroid_crs, f"not a recognised CRS ({exc})"
            ) from exc
        if not crs.is_projected:
            raise ConfigValidationError(
                "CENTROID_CRS", config.centroid_crs, "must be a projected CRS"
            )
