"""
Unit Tests for Utilities
========================

Tests for request validation and provider error formatting.
"""

from ai_query.utils import format_api_error, validate_natural_language_query


class TestValidation:
    """Tests for natural language request validation."""

    def test_valid(self) -> None:
        """Test that a normal request passes."""
        assert validate_natural_language_query("Show customers", 4000) is None

    def test_empty(self) -> None:
        """Test that blank requests are rejected."""
        assert validate_natural_language_query("", 4000) == "Query cannot be empty."
        assert validate_natural_language_query("  \n\t", 4000) == "Query cannot be empty."

    def test_too_long(self) -> None:
        """Test that the length limit reports both sizes."""
        assert validate_natural_language_query("x" * 11, 10) == (
            "Query too long. Maximum 10 characters allowed. Your query: 11 characters."
        )

    def test_exact_limit(self) -> None:
        """Test that a request at the limit is accepted."""
        assert validate_natural_language_query("x" * 10, 10) is None


class TestFormatApiError:
    """Tests for provider error reduction."""

    def test_invalid_model(self) -> None:
        """Test that a model-not-found error names the model."""
        raw = '{"type":"error","error":{"type":"not_found_error","message":"model: claude-x"}}'
        message = format_api_error(raw)
        assert message.startswith("Invalid model 'claude-x'.")
        assert "'gpt-4o' (OpenAI)" in message

    def test_not_found_without_model(self) -> None:
        """Test that other not-found errors get a generic message."""
        raw = '{"error":{"type":"not_found_error","message":"resource missing"}}'
        assert format_api_error(raw).startswith("Model not found.")

    def test_message_extracted(self) -> None:
        """Test that other JSON errors yield their message."""
        raw = 'HTTP 401 {"error":{"type":"authentication_error","message":"invalid x-api-key"}}'
        assert format_api_error(raw) == "invalid x-api-key"

    def test_plain_text_unchanged(self) -> None:
        """Test that non-JSON errors pass through."""
        assert format_api_error("Connection refused") == "Connection refused"

    def test_json_without_error_object(self) -> None:
        """Test that JSON lacking an error object passes through."""
        assert format_api_error('{"detail": "bad"}') == '{"detail": "bad"}'
