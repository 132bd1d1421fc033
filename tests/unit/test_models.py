"""Unit tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from src.models.models import AnalysisResult, EncodedImage, Preferences, Recommendation


class TestPreferences:
    """Test Preferences model."""

    def test_defaults_are_empty(self):
        prefs = Preferences()
        assert prefs.dietary == ""
        assert prefs.budget == ""
        assert prefs.mood == ""

    def test_whitespace_stripped(self):
        prefs = Preferences(dietary="  vegan ", budget=" 15 ", mood="\tcozy\n")
        assert prefs == Preferences(dietary="vegan", budget="15", mood="cozy")

    def test_frozen(self):
        prefs = Preferences(dietary="vegan")
        with pytest.raises(ValidationError):
            prefs.dietary = "keto"

    def test_overlong_field_rejected(self):
        with pytest.raises(ValidationError):
            Preferences(budget="9" * 51)


class TestRecommendation:
    """Test Recommendation parsing from the model's JSON shape."""

    def test_parses_wire_names(self):
        rec = Recommendation.model_validate(
            {"dish": "Pad Thai", "price": "13.50", "reasoning": "fits", "warnings": "peanuts", "valueScore": 7}
        )
        assert rec.value_score == 7
        assert rec.warnings == "peanuts"

    def test_warnings_optional(self):
        rec = Recommendation.model_validate({"dish": "Soup", "price": "6", "reasoning": "light", "valueScore": 5})
        assert rec.warnings is None
        assert rec.has_warning is False

    def test_blank_warning_is_no_warning(self):
        rec = Recommendation(dish="Soup", price="6", reasoning="light", warnings="   ", valueScore=5)
        assert rec.has_warning is False

    def test_numeric_price_kept_as_text(self):
        rec = Recommendation.model_validate({"dish": "Soup", "price": 6.5, "reasoning": "x", "valueScore": 5})
        assert rec.price == "6.5"

    def test_value_score_not_range_checked(self):
        rec = Recommendation.model_validate({"dish": "Soup", "price": "6", "reasoning": "x", "valueScore": 42})
        assert rec.value_score == 42

    def test_missing_required_field_rejected(self):
        with pytest.raises(ValidationError):
            Recommendation.model_validate({"dish": "Soup", "price": "6", "valueScore": 5})

    def test_dump_by_alias_round_trips_wire_name(self):
        rec = Recommendation(dish="Soup", price="6", reasoning="x", valueScore=5)
        assert rec.model_dump(by_alias=True)["valueScore"] == 5


class TestAnalysisResult:
    def test_order_preserved(self):
        result = AnalysisResult.model_validate(
            {
                "recommendations": [
                    {"dish": "B", "price": "2", "reasoning": "", "valueScore": 3},
                    {"dish": "A", "price": "1", "reasoning": "", "valueScore": 9},
                    {"dish": "B", "price": "2", "reasoning": "", "valueScore": 3},
                ]
            }
        )
        assert [r.dish for r in result.recommendations] == ["B", "A", "B"]

    def test_requires_recommendations(self):
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate({"dishes": []})


def test_encoded_image_fields():
    image = EncodedImage(data="aGVsbG8=", mime_type="image/png")
    assert image.data == "aGVsbG8="
    assert image.mime_type == "image/png"
