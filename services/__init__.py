"""
Business logic services.

Each service handles one domain area.
"""

from services.card_service import CardService, get_card_service
from services.analytics_service import AnalyticsService, get_analytics_service
from services.import_service import ImportService, get_import_service

__all__ = [
    "CardService",
    "get_card_service",
    "AnalyticsService",
    "get_analytics_service",
    "ImportService",
    "get_import_service",
]
