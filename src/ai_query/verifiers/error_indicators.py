"""
Error Indicator Verifier
========================

Detects model responses that admit they could not produce a query.
"""

from ai_query.models import VerificationResult, VerificationStatus
from ai_query.verifiers.base import Verifier
from ai_query.verifiers.rules import EXPLANATION_ERROR_PHRASES, WARNING_ERROR_PHRASES


def find_error_indicator(explanation: str, warnings: list[str]) -> str | None:
    """Return the first failure phrase found, checking the explanation first."""
    lower_explanation = explanation.lower()
    for phrase in EXPLANATION_ERROR_PHRASES:
        if phrase in lower_explanation:
            return phrase

    for warning in warnings:
        lower_warning = warning.lower()
        for phrase in WARNING_ERROR_PHRASES:
            if phrase in lower_warning:
                return phrase

    return None


def has_error_indicators(explanation: str, warnings: list[str]) -> bool:
    """Check whether the explanation or warnings signal a failed generation."""
    return find_error_indicator(explanation, warnings) is not None


class ErrorIndicatorVerifier(Verifier):
    """Fails responses whose explanation or warnings declare an error."""

    @property
    def name(self) -> str:
        return "ErrorIndicatorVerifier"

    def verify(self, sql: str, context: dict) -> VerificationResult:
        """
        Verify the model did not report a failure.

        Args:
            sql: SQL query from the response (not inspected)
            context: Must contain 'explanation' and 'warnings' keys

        Returns:
            VerificationResult with PASSED or FAILED status
        """
        explanation = context.get("explanation", "")
        phrase = find_error_indicator(explanation, context.get("warnings", []))

        if phrase is not None:
            return VerificationResult(
                verifier_name=self.name,
                status=VerificationStatus.FAILED,
                message=explanation,
                details={"indicator": phrase},
            )

        return VerificationResult(
            verifier_name=self.name,
            status=VerificationStatus.PASSED,
            message="No error indicators found",
        )
