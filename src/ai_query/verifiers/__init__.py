"""
Verifiers Module
================

Trust checks applied to model output before it reaches the caller.
"""

from ai_query.verifiers.base import Verifier
from ai_query.verifiers.catalog import RestrictedCatalogVerifier, accesses_restricted_catalogs
from ai_query.verifiers.error_indicators import ErrorIndicatorVerifier, has_error_indicators
from ai_query.verifiers.rules import (
    EXPLANATION_ERROR_PHRASES,
    RESTRICTED_CATALOG_MESSAGE,
    RESTRICTED_CATALOGS,
    WARNING_ERROR_PHRASES,
)

__all__ = [
    "Verifier",
    "RestrictedCatalogVerifier",
    "ErrorIndicatorVerifier",
    "accesses_restricted_catalogs",
    "has_error_indicators",
    "RESTRICTED_CATALOGS",
    "RESTRICTED_CATALOG_MESSAGE",
    "EXPLANATION_ERROR_PHRASES",
    "WARNING_ERROR_PHRASES",
]
