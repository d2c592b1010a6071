"""
Analytics service for collection reporting.

Handles aggregation of card values:
- Headline collection stats
- Value share by sport
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import structlog

from models.stats import CollectionStats, SportValue
from services.card_service import CardService, get_card_service

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")


class AnalyticsService:
    """
    Analytics business logic.

    Read-only views over the card store.
    """

    def __init__(self, card_service: Optional[CardService] = None):
        self.cards = card_service or get_card_service()

    # ===================
    # COLLECTION STATS
    # ===================

    def get_collection_stats(self) -> CollectionStats:
        """
        Totals for the dashboard header.

        Returns:
            CollectionStats; an empty collection reports zeros and no
            most valuable card
        """
        cards = self.cards.get_all()
        total_value = sum((c.current_value for c in cards), Decimal("0"))

        most_valuable = None
        if cards:
            # First card wins ties
            most_valuable = max(cards, key=lambda c: c.current_value)

        average = (total_value / len(cards)).quantize(CENTS, ROUND_HALF_UP) if cards else Decimal("0")

        logger.info(
            "collection_stats_calculated",
            total_cards=len(cards),
            total_value=str(total_value)
        )

        return CollectionStats(
            total_cards=len(cards),
            total_value=total_value,
            most_valuable_card=most_valuable,
            average_value=average,
        )

    # ===================
    # VALUE BY SPORT
    # ===================

    def get_value_by_sport(self) -> list[SportValue]:
        """
        Collection value grouped by sport, largest share first.

        Percentages are of the total collection value, rounded to one
        decimal. When the collection is worth nothing every share is 0.
        """
        cards = self.cards.get_all()

        totals: dict[str, Decimal] = {}
        for card in cards:
            sport = card.sport.value
            totals[sport] = totals.get(sport, Decimal("0")) + card.current_value

        grand_total = sum(totals.values(), Decimal("0"))

        result = [
            SportValue(
                sport=sport,
                total_value=value,
                percentage=round(float(value / grand_total * 100), 1) if grand_total else 0.0,
            )
            for sport, value in totals.items()
        ]
        result.sort(key=lambda s: s.total_value, reverse=True)

        logger.debug("value_by_sport_calculated", sports=len(result))
        return result


# Singleton instance for convenience
_analytics_service: Optional[AnalyticsService] = None

def get_analytics_service() -> AnalyticsService:
    """Get or create AnalyticsService instance."""
    global _analytics_service
    if _analytics_service is None:
        _analytics_service = AnalyticsService()
    return _analytics_service
