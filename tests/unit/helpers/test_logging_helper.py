"""Tests for logging helpers."""

import logging

import pytest

from confeti.helpers.logging_helper import configure_logging, describe_request


class TestDescribeRequest:
    """Test request descriptions."""

    @pytest.mark.unit
    def test_only_bound_params_listed(self):
        line = describe_request("/report/stat/tag", {"conference_name": "jpoint", "year": None})

        assert line == "GET /report/stat/tag with params: conference_name=jpoint"

    @pytest.mark.unit
    def test_nothing_bound(self):
        assert describe_request("/speaker/stat/all", {}) == "GET /speaker/stat/all with params: <none>"


@pytest.mark.unit
def test_configure_logging_accepts_level_names(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("debug")
    configure_logging("not-a-level")

    assert [c["level"] for c in calls] == [logging.DEBUG, logging.INFO]
