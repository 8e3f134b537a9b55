"""Unified transform exception taxonomy.

Every domain exception raised by a transform inherits from
``TransformError`` and carries structured context fields so the
submission pipeline can record failures per stage without losing the
cause.

Taxonomy categories
-------------------
- ``ValidationError``: malformed input (bad XML, wrong JSON shape), never retryable.
- ``ContractError``: payload/schema drift between stages, never retryable.

Any other ``TransformError`` reports ``transient`` when retryable and
``permanent`` otherwise.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and transform history.
"""

from __future__ import annotations


class TransformError(Exception):
    """Base exception for all transform-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Transform stage where the error occurred
            (e.g. ``"eml_metadata"``, ``"security"``).
        code: Machine-readable error code (e.g. ``"EML_DECODE_FAILED"``).
        retryable: Whether re-running the transform may succeed.
        submission_id: Identifier of the submission being transformed.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        submission_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.submission_id = submission_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "submission_id": self.submission_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(TransformError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(TransformError):
    """Payload or schema drift between transform stages. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]
