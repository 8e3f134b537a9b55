"""Tests for transform record supersession."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from biohub_transforms.models.transform_record import TransformRecord, current, supersede

T0 = datetime(2024, 1, 1, tzinfo=UTC)
T1 = datetime(2024, 2, 1, tzinfo=UTC)
T2 = datetime(2024, 3, 1, tzinfo=UTC)


def _record(kind: str = "eml_metadata", at: datetime = T0, sub: str = "sub-1") -> TransformRecord:
    return TransformRecord(
        submission_id=sub, kind=kind, result_data={"at": at.isoformat()}, record_effective_date=at
    )


class TestTransformRecord:
    def test_new_record_is_current(self) -> None:
        assert _record().is_current is True

    def test_default_effective_date_is_utc(self) -> None:
        record = TransformRecord(submission_id="s", kind="k")
        assert record.record_effective_date.tzinfo is UTC

    def test_frozen(self) -> None:
        record = _record()
        with pytest.raises(AttributeError):
            record.record_end_timestamp = T1  # type: ignore[misc]

    def test_to_dict(self) -> None:
        assert _record().to_dict() == {
            "submission_id": "sub-1",
            "kind": "eml_metadata",
            "result_data": {"at": T0.isoformat()},
            "record_effective_date": T0.isoformat(),
            "record_end_timestamp": None,
        }


class TestSupersede:
    def test_append_to_empty_history(self) -> None:
        new = _record()
        assert supersede([], new) == [new]

    def test_previous_record_end_dated(self) -> None:
        first = _record(at=T0)
        second = _record(at=T1)
        history = supersede([first], second)

        assert len(history) == 2
        assert history[0].record_end_timestamp == T1
        assert history[0].result_data == first.result_data
        assert history[1] is second
        assert history[1].is_current

    def test_input_not_mutated(self) -> None:
        first = _record(at=T0)
        records = [first]
        supersede(records, _record(at=T1))
        assert records == [first]
        assert first.is_current

    def test_other_kinds_untouched(self) -> None:
        metadata = _record("eml_metadata", T0)
        boundaries = _record("eml_boundaries", T0)
        history = supersede([metadata, boundaries], _record("eml_metadata", T1))
        assert history[1] is boundaries
        assert history[1].is_current

    def test_other_submissions_untouched(self) -> None:
        other = _record(sub="sub-2")
        history = supersede([other], _record(at=T1))
        assert history[0] is other

    def test_already_ended_records_keep_their_end_date(self) -> None:
        history = supersede(supersede([_record(at=T0)], _record(at=T1)), _record(at=T2))
        assert [r.record_end_timestamp for r in history] == [T1, T2, None]


class TestCurrent:
    def test_latest_current_record(self) -> None:
        history = supersede(supersede([], _record(at=T0)), _record(at=T1))
        found = current(history, "eml_metadata")
        assert found is not None
        assert found.record_effective_date == T1

    def test_missing_kind(self) -> None:
        assert current([_record()], "dwc_security") is None

    def test_filtered_by_submission(self) -> None:
        history = [_record(sub="sub-1"), _record(sub="sub-2")]
        found = current(history, "eml_metadata", submission_id="sub-1")
        assert found is not None
        assert found.submission_id == "sub-1"
