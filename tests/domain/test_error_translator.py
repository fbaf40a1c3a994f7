"""Tests for the error translator."""

import pytest

from shellrelay.domain import (
    Credentials,
    ErrorCategory,
    FailureStage,
    ShellFailure,
    categorize,
    translate_failure,
)


@pytest.fixture
def target():
    return Credentials(host="db.internal", port=2200, username="ops", password="x")


class TestCategorize:
    """Tests for failure categorization."""

    @pytest.mark.parametrize(
        ("failure", "expected"),
        [
            (ShellFailure("Permission denied", code="AUTH"), ErrorCategory.AUTHENTICATION_FAILED),
            (ShellFailure("All configured authentication methods failed"), ErrorCategory.AUTHENTICATION_FAILED),
            (ShellFailure("[Errno 111] Connect call failed", code="ECONNREFUSED"), ErrorCategory.CONNECTION_REFUSED),
            (ShellFailure("connect ECONNREFUSED 10.0.0.1:22"), ErrorCategory.CONNECTION_REFUSED),
            (ShellFailure("TimeoutError", code="ETIMEDOUT"), ErrorCategory.TIMED_OUT),
            (ShellFailure("Timed out while waiting for handshake"), ErrorCategory.TIMED_OUT),
            (ShellFailure("Name or service not known", code="ENOTFOUND"), ErrorCategory.HOST_UNREACHABLE),
            (ShellFailure("getaddrinfo ENOTFOUND nowhere"), ErrorCategory.HOST_UNREACHABLE),
            (ShellFailure("No route to host", code="EHOSTUNREACH"), ErrorCategory.HOST_UNREACHABLE),
            (ShellFailure("PTY request failed", stage=FailureStage.SHELL), ErrorCategory.SHELL_ERROR),
            (ShellFailure("something odd"), ErrorCategory.UNKNOWN),
        ],
    )
    def test_categories(self, failure, expected):
        assert categorize(failure) is expected

    def test_code_wins_over_text(self):
        """Test a machine code beats misleading message text."""
        failure = ShellFailure("timed out", code="ECONNREFUSED")
        assert categorize(failure) is ErrorCategory.CONNECTION_REFUSED

    def test_auth_failure_during_shell_stage_is_auth(self):
        failure = ShellFailure("Permission denied", stage=FailureStage.SHELL, code="AUTH")
        assert categorize(failure) is ErrorCategory.AUTHENTICATION_FAILED


class TestTranslateFailure:
    """Tests for user-facing messages."""

    def test_authentication_message(self, target):
        result = translate_failure(ShellFailure("Permission denied", code="AUTH"), target)
        assert result.category is ErrorCategory.AUTHENTICATION_FAILED
        assert result.message == "Authentication failed. Check your credentials."

    def test_refused_interpolates_host_and_port(self, target):
        result = translate_failure(ShellFailure("refused", code="ECONNREFUSED"), target)
        assert result.message == "Connection refused by db.internal:2200."

    def test_timeout_message(self, target):
        result = translate_failure(ShellFailure("", code="ETIMEDOUT"), target)
        assert result.message == "Connection to db.internal timed out."

    def test_not_found_message(self, target):
        result = translate_failure(ShellFailure("nodename nor servname", code="ENOTFOUND"), target)
        assert result.message == "Host not found: db.internal"

    def test_unreachable_message(self, target):
        result = translate_failure(ShellFailure("No route to host", code="EHOSTUNREACH"), target)
        assert result.message == "Host unreachable: db.internal"

    def test_shell_message(self, target):
        failure = ShellFailure("PTY request failed", stage=FailureStage.SHELL, code="CHANNEL")
        result = translate_failure(failure, target)
        assert result.category is ErrorCategory.SHELL_ERROR
        assert result.message == "Shell error: PTY request failed"

    def test_unknown_keeps_raw_message(self, target):
        result = translate_failure(ShellFailure("Protocol error"), target)
        assert result.category is ErrorCategory.UNKNOWN
        assert result.message == "Protocol error"

    def test_unknown_empty_message(self, target):
        result = translate_failure(ShellFailure(""), target)
        assert result.message == "Connection failed."

    def test_pure_function(self, target):
        """Test identical inputs give identical outputs."""
        failure = ShellFailure("refused", code="ECONNREFUSED")
        assert translate_failure(failure, target) == translate_failure(failure, target)
