"""Versioned transform output.

Each transform run over a submission produces a new ``TransformRecord``.
Records are never mutated: a later run supersedes the current record of
the same kind by end-dating it, and the "current" record is the one
whose ``record_end_timestamp`` is ``None``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class TransformRecord:
    """A derived row produced by one transform run.

    Attributes:
        submission_id: Submission the transform ran over.
        kind: Transform kind (see ``core.constants.KIND_*``).
        result_data: JSON output of the transform.
        record_effective_date: When this record became current.
        record_end_timestamp: When a later run superseded it, or ``None``.
    """

    submission_id: str
    kind: str
    result_data: dict[str, Any] = field(default_factory=dict)
    record_effective_date: datetime = field(default_factory=lambda: datetime.now(UTC))
    record_end_timestamp: datetime | None = None

    @property
    def is_current(self) -> bool:
        return self.record_end_timestamp is None

    def to_dict(self) -> dict[str, object]:
        return {
            "submission_id": self.submission_id,
            "kind": self.kind,
            "result_data": self.result_data,
            "record_effective_date": self.record_effective_date.isoformat(),
            "record_end_timestamp": (
                self.record_end_timestamp.isoformat() if self.record_end_timestamp else None
            ),
        }


def supersede(records: list[TransformRecord], new: TransformRecord) -> list[TransformRecord]:
    """Return a new history with ``new`` appended as the current record.

    Any current record for the same submission and kind is replaced by a
    copy end-dated at ``new.record_effective_date``.  The input list and
    its records are left untouched.
    """
    history: list[TransformRecord] = []
    for record in records:
        if record.is_current and (record.submission_id, record.kind) == (
            new.submission_id,
            new.kind,
        ):
            record = dataclasses.replace(record, record_end_timestamp=new.record_effective_date)
        history.append(record)
    history.append(new)
    return history


def current(
    records: list[TransformRecord], kind: str, submission_id: str | None = None
) -> TransformRecord | None:
    """Return the current record of ``kind`` (optionally for one submission)."""
    for record in reversed(records):
        if record.kind != kind or not record.is_current:
            continue
        if submission_id is not None and record.submission_id != submission_id:
            continue
        return record
    return None
