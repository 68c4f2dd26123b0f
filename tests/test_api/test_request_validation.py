import pytest

from tutor_proxy.api.validation import validate_ask_payload
from tutor_proxy.core.constants import Mode
from tutor_proxy.core.exceptions import (
    InvalidModeError,
    MissingFieldError,
    QuestionTooLongError,
    RequestValidationFailed,
)


def test_valid_payload_is_trimmed():
    result = validate_ask_payload({"question": "  What is VAT?\n", "mode": "exam"})

    assert result.question == "What is VAT?"
    assert result.mode is Mode.EXAM


@pytest.mark.parametrize(
    "body",
    [
        {"question": "", "mode": "exam"},
        {"question": "   \t", "mode": "exam"},
        {"question": None, "mode": "exam"},
        {"question": ["x"], "mode": "exam"},
        {"prompt": "legacy field", "mode": "exam"},
        {},
        None,
        ["question", "mode"],
    ],
)
def test_missing_question(body):
    with pytest.raises(MissingFieldError):
        validate_ask_payload(body)


@pytest.mark.parametrize("mode", ["bogus", "Exam", "TLDR", "", 1, None])
def test_invalid_mode(mode):
    with pytest.raises(InvalidModeError):
        validate_ask_payload({"question": "x", "mode": mode})


def test_absent_mode_is_rejected():
    with pytest.raises(InvalidModeError):
        validate_ask_payload({"question": "x"})


def test_too_long_question():
    with pytest.raises(QuestionTooLongError) as exc:
        validate_ask_payload({"question": "x" * 4001, "mode": "exam"})

    assert exc.value.length == 4001
    assert exc.value.max_length == 4000


def test_length_is_measured_after_trimming():
    result = validate_ask_payload({"question": " " + "x" * 4000 + " ", "mode": "tldr"})

    assert len(result.question) == 4000


def test_configured_max_length():
    with pytest.raises(QuestionTooLongError):
        validate_ask_payload({"question": "abcdef", "mode": "exam"}, max_length=5)


def test_errors_share_base_class():
    for error in (MissingFieldError(), InvalidModeError("x"), QuestionTooLongError(2, 1)):
        assert isinstance(error, RequestValidationFailed)
        assert error.field in {"question", "mode"}
