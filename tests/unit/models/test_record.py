"""Tests for ResultRecord."""

import pytest

from isotest.models.record import ResultRecord, TestAborted
from isotest.testing.factories import ResultRecordFactory


def test_fresh_record_is_clean() -> None:
    """New records have no outcome and no timestamps."""
    record = ResultRecord(name="test_fresh")

    assert record.failed is False
    assert record.fail_message is None
    assert record.error_messages == []
    assert record.error_count == 0
    assert record.passed is True
    assert record.start_time is None
    assert record.end_time is None
    assert record.elapsed_ns is None


def test_fail_sets_message_and_timestamp() -> None:
    """fail() marks the record failed with a message and time."""
    record = ResultRecordFactory.build()

    record.fail("badness")

    assert record.failed is True
    assert record.fail_message == "badness"
    assert record.failed_at is not None
    assert record.passed is False


def test_fail_overwrites_previous_message() -> None:
    """A second fail() replaces the message; the record stays failed."""
    record = ResultRecordFactory.build()

    record.fail("first")
    record.fail("second")

    assert record.failed is True
    assert record.fail_message == "second"


def test_errors_accumulate_in_order() -> None:
    """error() appends messages and keeps the count in sync."""
    record = ResultRecordFactory.build()

    record.error("one")
    record.error("two")
    record.error("three")

    assert record.error_messages == ["one", "two", "three"]
    assert record.error_count == 3
    assert record.error_at is not None
    assert record.failed is False
    assert record.passed is False


def test_fail_and_errors_are_both_kept() -> None:
    """Failing after errors preserves every message."""
    record = ResultRecordFactory.build()

    record.error("non-critical")
    record.fail("critical")

    assert record.failed is True
    assert record.fail_message == "critical"
    assert record.error_messages == ["non-critical"]


def test_timer_measures_interval() -> None:
    """begin() and mark_done() bound the elapsed interval."""
    record = ResultRecordFactory.build()

    record.begin()
    record.mark_done()

    assert record.start_time is not None
    assert record.end_time is not None
    assert record.elapsed_ns is not None
    assert record.elapsed_ns >= 0


def test_mark_done_last_call_wins() -> None:
    """Calling mark_done() again moves the end timestamp forward."""
    record = ResultRecordFactory.build()
    record.begin()
    record.mark_done()
    first_end = record.end_time

    record.mark_done()

    assert first_end is not None
    assert record.end_time is not None
    assert record.end_time >= first_end


def test_fatal_fails_and_raises() -> None:
    """fatal() fails the record and stops the caller."""
    record = ResultRecordFactory.build()

    with pytest.raises(TestAborted, match="stop here"):
        record.fatal("stop here")

    assert record.failed is True
    assert record.fail_message == "stop here"
