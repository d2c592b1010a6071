"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from unittest.mock import patch
from typing import Generator

from services.card_service import CardService
from services.analytics_service import AnalyticsService
from services.import_service import ImportService


# ===================
# SERVICES
# ===================

@pytest.fixture
def card_service() -> CardService:
    """Empty in-memory card store."""
    return CardService()


@pytest.fixture
def seeded_card_service() -> CardService:
    """Card store holding the four demo cards."""
    return CardService(seed=True)


@pytest.fixture
def import_service(card_service) -> ImportService:
    """Importer writing to the empty store, with a small thread pool."""
    return ImportService(card_service, max_workers=4)


@pytest.fixture
def analytics_service(card_service) -> AnalyticsService:
    return AnalyticsService(card_service)


@pytest.fixture
def sample_rows() -> list:
    """Rows in the default spreadsheet export layout."""
    return [
        {
            "Player Name": "Lionel Messi",
            "Card Name": "2022 Topps Chrome Lionel Messi #10",
            "Sport": "Soccer",
            "Season": "2022-2023",
            "Brand": "Topps",
            "Card Set": "Chrome",
            "Card Number": "10",
            "Condition": "Near Mint",
            "Team": "Inter Miami",
            "Features": "Refractor",
            "IMAGE URL": "http://img.example.com/messi-front.jpg | http://img.example.com/messi-back.jpg",
        },
        {
            "Player Name": "Connor McDavid",
            "Card Name": None,
            "Sport": "hockey",
            "Season": 2015.0,
            "Brand": "Upper Deck",
            "Card Set": "Young Guns",
            "Card Number": "#201",
            "Condition": "PSA 10",
            "Team": "Edmonton Oilers",
            "Features": None,
            "IMAGE URL": "http://img.example.com/mcdavid.jpg",
        },
        {
            "Player Name": None,
            "Card Name": None,
            "Sport": None,
            "Season": None,
            "Brand": None,
            "Card Set": None,
            "Card Number": None,
            "Condition": None,
            "Team": None,
            "Features": None,
            "IMAGE URL": None,
        },
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(card_service) -> Generator:
    """
    Create FastAPI test client backed by an empty store.

    Usage:
        def test_endpoint(test_client, card_service):
            response = test_client.get("/api/cards")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    importer = ImportService(card_service, max_workers=4)
    analytics = AnalyticsService(card_service)

    with patch("main.get_card_service", return_value=card_service):
        with patch("routes.cards.get_card_service", return_value=card_service):
            with patch("routes.imports.get_import_service", return_value=importer):
                with patch("routes.stats.get_analytics_service", return_value=analytics):
                    yield TestClient(app)
