"""
HTTP API
========

FastAPI surface for query generation, plan explanation and catalog lookups.
"""

from ai_query import __version__

__all__ = ["__version__"]
