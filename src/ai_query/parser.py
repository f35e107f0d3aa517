"""
Response Parser
===============

Turns raw model output into a validated ``QueryResult``.

Model output arrives in no fixed shape: a JSON payload in a markdown fence,
bare JSON, or plain SQL text. Extraction runs an ordered chain of pure stages
and always produces a payload; the verifiers then decide whether the result
can be trusted.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import structlog

from ai_query.models import QueryResult, VerificationStatus
from ai_query.verifiers.catalog import RestrictedCatalogVerifier
from ai_query.verifiers.error_indicators import ErrorIndicatorVerifier

logger = structlog.get_logger(__name__)

RAW_FALLBACK_EXPLANATION = "Raw output (no structured payload detected)"

FENCED_PAYLOAD_PATTERN = re.compile(
    r"```(?:json)?\s*(\{[\s\S]*?\})\s*```",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class StructuredPayload:
    """A JSON object recovered from model output."""

    data: dict

    @property
    def payload(self) -> dict:
        return self.data


@dataclass(frozen=True)
class RawFallback:
    """Model output with no recoverable JSON object, kept as raw SQL text."""

    text: str

    @property
    def payload(self) -> dict:
        return {"sql": self.text, "explanation": RAW_FALLBACK_EXPLANATION}


ExtractionResult = Union[StructuredPayload, RawFallback]


def _load_object(text: str) -> Optional[dict]:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.debug("JSON parse failed", error=str(e))
        return None
    return data if isinstance(data, dict) else None


def extract_fenced_payload(text: str) -> Optional[StructuredPayload]:
    """Parse the first fenced ``{...}`` block, optionally tagged ``json``."""
    match = FENCED_PAYLOAD_PATTERN.search(text)
    if not match:
        return None
    data = _load_object(match.group(1))
    return StructuredPayload(data) if data is not None else None


def extract_direct_payload(text: str) -> Optional[StructuredPayload]:
    """Parse the whole text as a JSON object."""
    data = _load_object(text)
    return StructuredPayload(data) if data is not None else None


EXTRACTION_STAGES: tuple[Callable[[str], Optional[StructuredPayload]], ...] = (
    extract_fenced_payload,
    extract_direct_payload,
)


def extract_payload(text: str) -> ExtractionResult:
    """
    Run the extraction chain over raw model output.

    Args:
        text: Raw provider output

    Returns:
        The first StructuredPayload a stage recovers, else RawFallback
    """
    for stage in EXTRACTION_STAGES:
        result = stage(text)
        if result is not None:
            return result
    return RawFallback(text)


def extract_structured_payload(text: str) -> dict:
    """Return the payload dict for raw model output. Never raises."""
    return extract_payload(text).payload


def normalize_warnings(value: Any) -> list[str]:
    """
    Coerce a payload's ``warnings`` field into a list of strings.

    Accepts a list (non-string items dropped) or a single string. Anything
    else yields an empty list.
    """
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def _text_field(payload: dict, key: str) -> str:
    value = payload.get(key, "")
    return value if isinstance(value, str) else ""


_error_verifier = ErrorIndicatorVerifier()
_catalog_verifier = RestrictedCatalogVerifier()


def parse_query_response(
    text: str, allow_restricted_catalog_access: bool = False
) -> QueryResult:
    """
    Parse raw model output into a QueryResult.

    Rules, first match wins:
    1. Explanation or warnings report an error: failure, explanation as error.
    2. Empty SQL: success with no query.
    3. SQL touches a restricted catalog (unless allowed): failure with a
       fixed policy message; the model's explanation is dropped.
    4. Otherwise success.

    Args:
        text: Raw provider output
        allow_restricted_catalog_access: Skip the restricted catalog check

    Returns:
        QueryResult describing success or failure
    """
    payload = extract_structured_payload(text)
    sql = _text_field(payload, "sql")
    explanation = _text_field(payload, "explanation")
    warnings = normalize_warnings(payload.get("warnings"))

    context = {
        "explanation": explanation,
        "warnings": warnings,
        "allow_restricted_catalog_access": allow_restricted_catalog_access,
    }

    indicator = _error_verifier.verify(sql, context)
    if indicator.status == VerificationStatus.FAILED:
        logger.info("Model reported a generation failure", indicator=indicator.details["indicator"])
        return QueryResult(
            generated_query="",
            explanation=explanation,
            warnings=tuple(warnings),
            row_limit_applied=False,
            suggested_visualization="",
            success=False,
            error_message=explanation,
        )

    if not sql:
        return QueryResult(
            generated_query="",
            explanation=explanation,
            warnings=tuple(warnings),
            row_limit_applied=False,
            suggested_visualization="",
            success=True,
        )

    catalog_check = _catalog_verifier.verify(sql, context)
    if catalog_check.status == VerificationStatus.FAILED:
        logger.warning("Blocked query touching restricted catalogs", **catalog_check.details)
        return QueryResult(
            generated_query="",
            explanation="",
            warnings=(),
            row_limit_applied=False,
            suggested_visualization="",
            success=False,
            error_message=catalog_check.message,
        )

    visualization = payload.get("suggested_visualization", "table")
    return QueryResult(
        generated_query=sql,
        explanation=explanation,
        warnings=tuple(warnings),
        row_limit_applied=payload.get("row_limit_applied") is True,
        suggested_visualization=visualization if isinstance(visualization, str) else "table",
        success=True,
    )
