"""Unit tests for the web layer.

Tests verify:
- Upload handling and MIME resolution for POST /api/analyze
- Error responses carry the user-facing message and status code
- Result cards (stars, warning notes)
- Startup model listing is optional and best-effort
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.presentation import RecommendationCard, build_cards, render_stars
from src.models.models import AnalysisResult, Recommendation
from src.services.errors import AuthError, ParseError, RateLimitExceededError, UnknownError
from src.utils.config import config

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"

RESULT = AnalysisResult(
    recommendations=[
        Recommendation(dish="Spicy Tofu", price="14.00", reasoning="vegetarian and spicy", warnings="", valueScore=8),
        Recommendation(dish="Pad Thai", price="13.50", reasoning="classic", warnings="Contains peanuts", valueScore=7),
    ]
)


@pytest.fixture
def analyzer():
    fake = Mock()
    fake.analyze_menu = AsyncMock(return_value=RESULT)
    return fake


@pytest.fixture
def client(analyzer):
    return TestClient(create_app(analyzer=analyzer, list_models_on_startup=False))


class TestRenderStars:
    @pytest.mark.parametrize(
        "score, stars",
        [(10, 5), (9, 5), (8, 4), (7, 4), (1, 1), (0, 0), (-3, 0)],
    )
    def test_star_count(self, score, stars):
        assert render_stars(score) == "⭐" * stars


class TestBuildCards:
    def test_cards_follow_result_order(self):
        cards = build_cards(RESULT)
        assert [card.dish for card in cards] == ["Spicy Tofu", "Pad Thai"]

    def test_blank_warning_hidden(self):
        rec = Recommendation(dish="Soup", price="6", reasoning="light", warnings="  ", valueScore=5)
        assert RecommendationCard.from_recommendation(rec).warning is None

    def test_warning_and_stars_shown(self):
        card = build_cards(RESULT)[1]
        assert card.warning == "Contains peanuts"
        assert card.stars == "⭐⭐⭐⭐"
        assert card.value_score == 7


class TestPages:
    def test_index_serves_ui(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "/api/analyze" in response.text

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["model"] == config.GEMINI_MODEL
        assert body["api_key_configured"] == config.has_api_key


class TestAnalyzeEndpoint:
    """Tests for POST /api/analyze."""

    def test_success(self, client, analyzer):
        response = client.post(
            "/api/analyze",
            files={"image": ("menu.jpg", b"\xff\xd8\xff\xe0menu", "image/jpeg")},
            data={"dietary": "vegetarian", "budget": "20", "mood": "spicy"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["result"]["recommendations"][0]["valueScore"] == 8
        assert body["cards"][0]["stars"] == "⭐⭐⭐⭐"
        assert body["cards"][0]["warning"] is None
        assert body["cards"][1]["warning"] == "Contains peanuts"

        image_bytes, mime_type, prefs = analyzer.analyze_menu.await_args.args
        assert image_bytes == b"\xff\xd8\xff\xe0menu"
        assert mime_type == "image/jpeg"
        assert (prefs.dietary, prefs.budget, prefs.mood) == ("vegetarian", "20", "spicy")

    def test_missing_image(self, client, analyzer):
        response = client.post("/api/analyze", data={"dietary": "vegan"})

        assert response.status_code == 400
        assert response.json() == {"error": "Please upload a menu image first!"}
        analyzer.analyze_menu.assert_not_awaited()

    def test_empty_file_is_missing_image(self, client, analyzer):
        response = client.post("/api/analyze", files={"image": ("menu.png", b"", "image/png")})

        assert response.status_code == 400
        assert response.json()["error"] == "Please upload a menu image first!"
        analyzer.analyze_menu.assert_not_awaited()

    def test_mime_sniffed_when_not_declared(self, client, analyzer):
        response = client.post(
            "/api/analyze", files={"image": ("menu", PNG_BYTES, "application/octet-stream")}
        )

        assert response.status_code == 200
        assert analyzer.analyze_menu.await_args.args[1] == "image/png"

    def test_non_image_rejected(self, client, analyzer):
        response = client.post("/api/analyze", files={"image": ("notes.txt", b"plain text", "text/plain")})

        assert response.status_code == 400
        assert "image file" in response.json()["error"]
        analyzer.analyze_menu.assert_not_awaited()

    def test_oversized_image_rejected(self, client, analyzer, monkeypatch):
        monkeypatch.setattr(config, "MAX_IMAGE_SIZE_MB", 1)
        response = client.post(
            "/api/analyze", files={"image": ("menu.png", b"x" * (1024 * 1024 + 1), "image/png")}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Image too large. Maximum size is 1MB"

    def test_overlong_preferences_rejected(self, client, analyzer):
        response = client.post(
            "/api/analyze",
            files={"image": ("menu.png", PNG_BYTES, "image/png")},
            data={"budget": "9" * 100},
        )

        assert response.status_code == 422
        analyzer.analyze_menu.assert_not_awaited()

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (AuthError(), 401),
            (RateLimitExceededError(), 429),
            (ParseError(), 502),
            (UnknownError("model overloaded"), 500),
        ],
    )
    def test_analysis_errors(self, client, analyzer, error, status_code):
        analyzer.analyze_menu.side_effect = error
        response = client.post("/api/analyze", files={"image": ("menu.png", PNG_BYTES, "image/png")})

        assert response.status_code == status_code
        assert response.json() == {"error": error.message}


class TestStartup:
    def test_models_listed_when_enabled(self, analyzer):
        with patch("src.api.app.list_available_models", new_callable=AsyncMock) as list_models:
            with TestClient(create_app(analyzer=analyzer, list_models_on_startup=True)):
                pass
        list_models.assert_awaited_once()

    def test_models_not_listed_when_disabled(self, analyzer):
        with patch("src.api.app.list_available_models", new_callable=AsyncMock) as list_models:
            with TestClient(create_app(analyzer=analyzer, list_models_on_startup=False)):
                pass
        list_models.assert_not_awaited()
