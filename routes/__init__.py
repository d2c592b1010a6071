"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.cards import router as cards_router
from routes.imports import router as imports_router
from routes.stats import router as stats_router

__all__ = [
    "cards_router",
    "imports_router",
    "stats_router",
]
