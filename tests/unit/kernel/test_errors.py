"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from httpdeadline.kernel.errors import (
    BaseError,
    CancellationError,
    ContextCancelledError,
    DeadlineExceededError,
    InvalidDeadlineError,
    ValidationError,
)


class TestBaseError:
    def test_default_code(self) -> None:
        err = BaseError("boom")
        assert err.code == "base_error"
        assert err.message == "boom"
        assert str(err) == "boom"

    def test_explicit_code_and_detail(self) -> None:
        err = BaseError("boom", code="custom", detail={"k": 1})
        assert err.to_dict() == {"code": "custom", "message": "boom", "detail": {"k": 1}}

    def test_repr(self) -> None:
        assert repr(BaseError("boom")) == "BaseError(code='base_error', message='boom')"

    def test_json_body_has_code_and_message_only(self) -> None:
        err = BaseError("boom", detail={"secret": "x"})
        assert json.loads(err.to_json_body()) == {"code": "base_error", "message": "boom"}


class TestInvalidDeadlineError:
    def test_hierarchy(self) -> None:
        err = InvalidDeadlineError("garbage")
        assert isinstance(err, ValidationError)
        assert isinstance(err, BaseError)
        assert err.code == "invalid_deadline"

    def test_message_for_empty_value(self) -> None:
        assert InvalidDeadlineError("").message == "Deadline value is empty"

    def test_message_for_unparsable_value(self) -> None:
        err = InvalidDeadlineError("garbage")
        assert "'garbage'" in err.message
        assert err.value == "garbage"

    def test_message_clips_long_value(self) -> None:
        raw = "x" * 1000
        err = InvalidDeadlineError(raw)
        assert "x" * (InvalidDeadlineError.ECHO_LIMIT + 1) not in err.message
        assert "x" * InvalidDeadlineError.ECHO_LIMIT + "..." in err.message
        assert err.value == raw

    def test_message_keeps_short_value_whole(self) -> None:
        raw = "y" * InvalidDeadlineError.ECHO_LIMIT
        assert f"'{raw}'" in InvalidDeadlineError(raw).message

    def test_explicit_message(self) -> None:
        assert InvalidDeadlineError("x", "custom").message == "custom"


class TestCancellationErrors:
    @pytest.mark.parametrize(
        ("cls", "code"),
        [(ContextCancelledError, "context_cancelled"), (DeadlineExceededError, "deadline_exceeded")],
    )
    def test_codes_and_hierarchy(self, cls: type[CancellationError], code: str) -> None:
        err = cls()
        assert err.code == code
        assert isinstance(err, CancellationError)
        assert err.message

    def test_raisable(self) -> None:
        with pytest.raises(CancellationError):
            raise DeadlineExceededError()
