"""
Safety Rules
============

Keyword and token lists used to vet model output. Kept together so the
security posture can be reviewed in one place.
"""

# Reserved catalog namespaces generated queries must not touch (matched
# case-insensitively anywhere in the SQL text, comments and literals included)
RESTRICTED_CATALOGS = (
    "INFORMATION_SCHEMA",
    "PG_CATALOG",
)

RESTRICTED_CATALOG_MESSAGE = (
    "Generated query accesses restricted system catalogs "
    "(information_schema, pg_catalog). Please query user tables only."
)

# Phrases in the model's explanation that signal it failed to produce a query
EXPLANATION_ERROR_PHRASES = (
    # Explicit failure statements
    "cannot generate query",
    "cannot create query",
    "unable to generate",
    # Missing schema elements
    "does not exist",
    "do not exist",
    # Database-style errors
    "table not found",
    "column not found",
    "no such table",
    "no such column",
)

# Narrower set checked against each warning
WARNING_ERROR_PHRASES = (
    "error:",
    "does not exist",
    "do not exist",
)
