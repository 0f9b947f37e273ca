"""Unit tests for request-scoped log context and log formatting."""

import json
import logging

import pytest
from starlette.requests import Request

from src.api.middleware.request_id import levels_from_request
from src.logging_config import (
    ConsoleFormatter,
    JourneyContextFilter,
    JsonFormatter,
    bind_journey_context,
    journey_context_var,
    request_id_var,
)


def _record(msg: str = "Composed level", **extra) -> logging.LogRecord:
    record = logging.LogRecord("src.api.v1.journey", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def _request(path: str, query: bytes = b"") -> Request:
    return Request({
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": query,
        "headers": [],
    })


@pytest.fixture
def bound_context():
    """Request id and levels bound as the middleware would bind them."""
    id_token = request_id_var.set("req-1")
    level_token = bind_journey_context(journey_level=180, current_level=42)
    yield
    journey_context_var.reset(level_token)
    request_id_var.reset(id_token)


class TestJourneyContextFilter:
    """Bound request context is copied onto records."""

    def test_copies_bound_levels(self, bound_context):
        """Request id and both levels land on the record."""
        record = _record()
        assert JourneyContextFilter().filter(record) is True
        assert record.request_id == "req-1"
        assert record.journey_level == 180
        assert record.current_level == 42

    def test_explicit_extra_wins(self, bound_context):
        """A level passed via extra= is not overwritten."""
        record = _record(journey_level=7)
        JourneyContextFilter().filter(record)
        assert record.journey_level == 7
        assert record.current_level == 42

    def test_nothing_bound(self):
        """Outside a request only the placeholder id is set."""
        record = _record()
        JourneyContextFilter().filter(record)
        assert record.request_id == "-"
        assert not hasattr(record, "journey_level")

    def test_partial_binding(self):
        """Unset levels are left out of the context."""
        token = bind_journey_context(journey_level=12)
        try:
            record = _record()
            JourneyContextFilter().filter(record)
            assert record.journey_level == 12
            assert not hasattr(record, "current_level")
        finally:
            journey_context_var.reset(token)


class TestFormatters:
    """JSON lines for production, one-liners for development."""

    def test_json_carries_levels(self, bound_context):
        """Journey context appears as top-level JSON keys."""
        record = _record()
        JourneyContextFilter().filter(record)
        data = json.loads(JsonFormatter().format(record))
        assert data["severity"] == "INFO"
        assert data["message"] == "Composed level"
        assert data["request_id"] == "req-1"
        assert data["journey_level"] == 180
        assert data["current_level"] == 42

    def test_json_stringifies_unserializable_extras(self):
        """Extras that json cannot encode are logged as strings."""
        data = json.loads(JsonFormatter().format(_record(levels=range(3))))
        assert data["levels"] == "range(0, 3)"
        assert "request_id" not in data

    def test_console_shows_levels(self, bound_context):
        """lvl= and cur= follow the request id."""
        record = _record()
        JourneyContextFilter().filter(record)
        assert ConsoleFormatter().format(record).endswith("req=req-1 lvl=180 cur=42 Composed level")

    def test_console_without_levels(self):
        """No level markers when nothing is bound."""
        line = ConsoleFormatter().format(_record())
        assert line.endswith("req=- Composed level")
        assert "lvl=" not in line


class TestLevelsFromRequest:
    """Levels are read from the path and the current_level query parameter."""

    @pytest.mark.parametrize(
        "path,query,expected",
        [
            ("/api/v1/journey/levels/180", b"current_level=42", {"journey_level": 180, "current_level": 42}),
            ("/api/v1/journey/levels/30/activities", b"", {"journey_level": 30}),
            ("/api/v1/journey/levels/10/test/evaluate", b"", {"journey_level": 10}),
            ("/api/v1/journey/xp/7", b"", {"journey_level": 7}),
            ("/api/v1/journey/realms/for-level/26", b"", {"journey_level": 26}),
            ("/api/v1/journey/window", b"current_level=5", {"current_level": 5}),
            ("/api/v1/journey/levels/abc", b"current_level=-1", {}),
            ("/health", b"", {}),
        ],
    )
    def test_levels(self, path, query, expected):
        """Only well-formed non-negative integers are bound."""
        assert levels_from_request(_request(path, query)) == expected
