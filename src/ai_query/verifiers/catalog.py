"""
Restricted Catalog Verifier
===========================

Blocks generated queries that reach into system catalogs.
"""

from ai_query.models import VerificationResult, VerificationStatus
from ai_query.verifiers.base import Verifier
from ai_query.verifiers.rules import RESTRICTED_CATALOG_MESSAGE, RESTRICTED_CATALOGS


def accesses_restricted_catalogs(sql: str) -> bool:
    """
    Check whether SQL mentions a restricted catalog namespace.

    Plain substring search, no SQL parsing: a token inside a string literal
    or comment also counts.
    """
    upper_sql = sql.upper()
    return any(token in upper_sql for token in RESTRICTED_CATALOGS)


class RestrictedCatalogVerifier(Verifier):
    """Fails queries touching information_schema or pg_catalog."""

    @property
    def name(self) -> str:
        return "RestrictedCatalogVerifier"

    def verify(self, sql: str, context: dict) -> VerificationResult:
        """
        Verify SQL stays out of the system catalogs.

        Args:
            sql: SQL query to check
            context: May set 'allow_restricted_catalog_access' to skip the check

        Returns:
            VerificationResult with PASSED, FAILED or SKIPPED status
        """
        if context.get("allow_restricted_catalog_access", False):
            return VerificationResult(
                verifier_name=self.name,
                status=VerificationStatus.SKIPPED,
                message="Restricted catalog access allowed by configuration",
            )

        if accesses_restricted_catalogs(sql):
            matched = [token for token in RESTRICTED_CATALOGS if token in sql.upper()]
            return VerificationResult(
                verifier_name=self.name,
                status=VerificationStatus.FAILED,
                message=RESTRICTED_CATALOG_MESSAGE,
                details={"catalogs": matched},
            )

        return VerificationResult(
            verifier_name=self.name,
            status=VerificationStatus.PASSED,
            message="No restricted catalog access detected",
        )
