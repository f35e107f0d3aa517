"""
Unit Tests for Verifiers
========================

Tests for the restricted catalog and error indicator checks.
"""

import pytest

from ai_query.models import VerificationStatus
from ai_query.verifiers import (
    ErrorIndicatorVerifier,
    RestrictedCatalogVerifier,
    accesses_restricted_catalogs,
    has_error_indicators,
)
from ai_query.verifiers.rules import RESTRICTED_CATALOG_MESSAGE
from conftest import assert_verification_failed, assert_verification_passed


@pytest.fixture
def catalog_verifier() -> RestrictedCatalogVerifier:
    """Create a RestrictedCatalogVerifier instance."""
    return RestrictedCatalogVerifier()


@pytest.fixture
def indicator_verifier() -> ErrorIndicatorVerifier:
    """Create an ErrorIndicatorVerifier instance."""
    return ErrorIndicatorVerifier()


class TestAccessesRestrictedCatalogs:
    """Tests for the catalog token scan."""

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT * FROM information_schema.columns",
            "select * from INFORMATION_SCHEMA.TABLES",
            "SELECT relname FROM pg_catalog.pg_class",
            "SELECT 'Information_Schema' AS label",
            "SELECT 1 -- pg_catalog",
        ],
    )
    def test_detected(self, sql: str) -> None:
        """Test that restricted tokens are found anywhere, in any case."""
        assert accesses_restricted_catalogs(sql)

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT * FROM customers",
            "SELECT * FROM pg_tables",
            "SELECT schema_name FROM my_schema",
            "",
        ],
    )
    def test_not_detected(self, sql: str) -> None:
        """Test that ordinary queries are not flagged."""
        assert not accesses_restricted_catalogs(sql)


class TestRestrictedCatalogVerifier:
    """Tests for the RestrictedCatalogVerifier."""

    def test_passes_user_tables(self, catalog_verifier: RestrictedCatalogVerifier) -> None:
        """Test that user table queries pass."""
        result = catalog_verifier.verify("SELECT * FROM orders", {})
        assert_verification_passed(result)
        assert result.verifier_name == "RestrictedCatalogVerifier"

    def test_fails_system_catalog(self, catalog_verifier: RestrictedCatalogVerifier) -> None:
        """Test that catalog access fails with the policy message."""
        result = catalog_verifier.verify(
            "SELECT * FROM information_schema.tables JOIN pg_catalog.pg_class ON true", {}
        )
        assert_verification_failed(result)
        assert result.message == RESTRICTED_CATALOG_MESSAGE
        assert result.details["catalogs"] == ["INFORMATION_SCHEMA", "PG_CATALOG"]

    def test_skipped_when_allowed(self, catalog_verifier: RestrictedCatalogVerifier) -> None:
        """Test that the check is skipped when access is allowed."""
        result = catalog_verifier.verify(
            "SELECT * FROM pg_catalog.pg_class",
            {"allow_restricted_catalog_access": True},
        )
        assert result.status == VerificationStatus.SKIPPED
        assert result.passed


class TestErrorIndicators:
    """Tests for error phrase detection."""

    @pytest.mark.parametrize(
        "explanation",
        [
            "I cannot generate query for that request",
            "Unable to generate SQL",
            "Table 'invoices' does not exist",
            "Columns foo and bar do not exist",
            "Table not found: invoices",
            "Column not found: price",
            "no such table: invoices",
            "No such column: price",
            "Cannot create query without a date column",
        ],
    )
    def test_explanation_phrases(self, explanation: str) -> None:
        """Test that each failure phrase in the explanation is detected."""
        assert has_error_indicators(explanation, [])

    def test_warning_phrases(self) -> None:
        """Test that warnings are checked against the narrower phrase set."""
        assert has_error_indicators("", ["ERROR: ambiguous column"])
        assert has_error_indicators("", ["Column price does not exist"])
        assert not has_error_indicators("", ["Unable to generate an index hint"])

    def test_clean_response(self) -> None:
        """Test that normal explanations and warnings pass."""
        assert not has_error_indicators(
            "Returns all premium customers", ["Results may be large"]
        )

    def test_verifier_reports_phrase(self, indicator_verifier: ErrorIndicatorVerifier) -> None:
        """Test that the verifier fails with the explanation as message."""
        result = indicator_verifier.verify(
            "", {"explanation": "Table Foo does not exist", "warnings": []}
        )
        assert_verification_failed(result)
        assert result.message == "Table Foo does not exist"
        assert result.details == {"indicator": "does not exist"}

    def test_verifier_passes(self, indicator_verifier: ErrorIndicatorVerifier) -> None:
        """Test that a clean context passes."""
        result = indicator_verifier.verify("SELECT 1", {"explanation": "fine", "warnings": []})
        assert_verification_passed(result)
