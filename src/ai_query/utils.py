"""
Utilities
=========

Input validation and provider error formatting.
"""

import json
from typing import Optional

KNOWN_GOOD_MODELS = "'claude-sonnet-4-5-20250929' (Anthropic), 'gpt-4o' (OpenAI)"


def validate_natural_language_query(query: str, max_query_length: int) -> Optional[str]:
    """
    Validate a natural language request before any provider call.

    Args:
        query: The user's request
        max_query_length: Maximum allowed characters

    Returns:
        None if valid, otherwise an error message
    """
    if len(query) > max_query_length:
        return (
            f"Query too long. Maximum {max_query_length} characters allowed. "
            f"Your query: {len(query)} characters."
        )
    if not query.strip():
        return "Query cannot be empty."
    return None


def format_api_error(raw_error: str) -> str:
    """
    Reduce a provider error body to one user-facing line.

    Model-not-found errors name the model and suggest known-good ones;
    other JSON errors yield their ``error.message``; anything else is
    returned unchanged.
    """
    json_start = raw_error.find("{")
    candidate = raw_error[json_start:] if json_start != -1 else raw_error

    try:
        data = json.loads(candidate)
    except ValueError:
        return raw_error

    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        return raw_error

    message = error.get("message")
    if error.get("type") == "not_found_error":
        if isinstance(message, str) and "model:" in message:
            model_name = message.split("model:", 1)[1].strip()
            return (
                f"Invalid model '{model_name}'. Please check your configuration and use "
                f"a valid model name. Common models: {KNOWN_GOOD_MODELS}."
            )
        return (
            "Model not found. Please check your model configuration and ensure "
            "you're using a valid model name."
        )

    if isinstance(message, str):
        return message
    return raw_error
