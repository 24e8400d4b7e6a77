"""Request dependencies.

The application builds one HybridSelector per process in its lifespan and
keeps it on app.state; this accessor hands it to route handlers and is the
override point for tests.
"""

from fastapi import Request

from hybrid_selector.services.hybrid import HybridSelector


def get_selector(request: Request) -> HybridSelector:
    """Process-wide hybrid selector (owns the intelligent cache)."""
    return request.app.state.selector
