"""Functional tests for the duplicate-request guard and request-id logging."""

from __future__ import annotations

import logging

import pytest

from feedback_forms.logging_setup import RequestIdFilter
from feedback_forms.logic.errors import RequestInFlightError
from feedback_forms.logic.inflight import InFlightGuard, summary_key, topic_key


def test_second_hold_on_same_key_is_refused():
    guard = InFlightGuard()
    with guard.hold("k"):
        assert guard.is_held("k")
        with pytest.raises(RequestInFlightError) as excinfo:
            with guard.hold("k"):
                pass
        assert excinfo.value.key == "k"
    assert not guard.is_held("k")


def test_different_keys_do_not_block_each_other():
    guard = InFlightGuard()
    with guard.hold(summary_key("f1")), guard.hold(summary_key("f2")):
        assert guard.is_held("summarize:f1") and guard.is_held("summarize:f2")


def test_key_is_released_when_the_call_fails():
    guard = InFlightGuard()
    with pytest.raises(ValueError):
        with guard.hold("k"):
            raise ValueError("AI down")
    with guard.hold("k"):
        pass


def test_topic_key_ignores_case_and_spacing():
    assert topic_key("  Python   Meetup ") == topic_key("python meetup") == "generate:python meetup"


def test_log_records_outside_a_request_get_placeholder_id():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    assert RequestIdFilter().filter(record)
    assert record.request_id == "-"
