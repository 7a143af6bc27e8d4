"""Tests for the ideation exception hierarchy."""

import pytest

from ideation.core.exceptions import (
    IdeaNotFoundError,
    IdeationException,
    ModelResolutionError,
    PersistenceError,
    ProviderError,
    SessionAlreadyRunningError,
    SessionNotFoundError,
    TurnCancelledError,
    ValidationError,
)


class TestIdeationException:
    def test_str_without_details(self) -> None:
        assert str(IdeationException("boom")) == "boom"

    def test_str_with_details(self) -> None:
        exc = IdeationException("boom", {"key": "value"})
        assert str(exc) == "boom | Details: {'key': 'value'}"
        assert exc.message == "boom"


class TestSubclasses:
    @pytest.mark.parametrize(
        "exc",
        [
            ValidationError("bad", field="project_path"),
            ModelResolutionError("foo:bar"),
            SessionNotFoundError("s1"),
            SessionAlreadyRunningError("s1"),
            ProviderError("down", model="bedrock:x"),
            TurnCancelledError("s1", reason="stopped"),
            PersistenceError("disk full", path="/tmp/x.json"),
            IdeaNotFoundError("i1"),
        ],
    )
    def test_all_derive_from_base(self, exc: IdeationException) -> None:
        assert isinstance(exc, IdeationException)

    def test_session_not_found_message(self) -> None:
        exc = SessionNotFoundError("abc")
        assert exc.message == "Session abc not found"
        assert exc.session_id == "abc"
        assert exc.details == {"session_id": "abc"}

    def test_already_running_message(self) -> None:
        exc = SessionAlreadyRunningError("abc")
        assert exc.message == "Session is already processing a message"

    def test_model_resolution_is_validation_error(self) -> None:
        exc = ModelResolutionError("foo:bar")
        assert isinstance(exc, ValidationError)
        assert exc.details == {"model": "foo:bar", "field": "model"}

    def test_cancelled_details(self) -> None:
        exc = TurnCancelledError("abc", reason="timeout")
        assert exc.details == {"session_id": "abc", "reason": "timeout"}

    def test_persistence_error_path(self) -> None:
        exc = PersistenceError("disk full", path="/p/s.json")
        assert exc.details["path"] == "/p/s.json"
