"""
Base Verifier Class
===================

Abstract base class for checks applied to model output.
"""

from abc import ABC, abstractmethod

from ai_query.models import VerificationResult


class Verifier(ABC):
    """Base class for all verifiers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this verifier."""
        pass

    @abstractmethod
    def verify(self, sql: str, context: dict) -> VerificationResult:
        """
        Verify generated output against this verifier's rules.

        Args:
            sql: The generated SQL query (may be empty)
            context: Additional context (explanation, warnings, policy flags)

        Returns:
            VerificationResult indicating pass/fail with details
        """
        pass
