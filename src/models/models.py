"""Data models for menu analysis.

Defines Pydantic models for the user's dining preferences, the encoded image
payload sent to Gemini, and the recommendations parsed from Gemini's reply.
All models use Pydantic v2.
"""

from typing import List, Optional, Annotated
from pydantic import BaseModel, Field, ConfigDict


class Preferences(BaseModel):
    """Dining preferences entered on the form.

    Every field is free text and optional in effect: an empty string means
    "unspecified" and is rendered with a default phrase by the prompt builder.
    Frozen so a request cannot be changed while an analysis is in flight.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    dietary: Annotated[str, Field("", max_length=500, description="Dietary restrictions, e.g. 'vegetarian'")]
    budget: Annotated[str, Field("", max_length=50, description="Budget in dollars, numeric-as-text")]
    mood: Annotated[str, Field("", max_length=500, description="Craving or mood, e.g. 'something spicy'")]


class EncodedImage(BaseModel):
    """Base64 image payload paired with its MIME type."""

    model_config = ConfigDict(frozen=True)

    data: Annotated[str, Field(description="Base64-encoded image bytes")]
    mime_type: Annotated[str, Field(description="MIME type declared for the image, e.g. image/jpeg")]


class Recommendation(BaseModel):
    """One dish suggested by the model.

    Field names follow the JSON the model is asked to produce, with
    valueScore exposed as value_score. Price stays text (it is shown, never
    computed with) and value_score is not range checked.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    dish: str
    price: str
    reasoning: str
    warnings: Optional[str] = None
    value_score: Annotated[int, Field(alias="valueScore", description="1-10 value rating supplied by the model")]

    @property
    def has_warning(self) -> bool:
        return bool(self.warnings and self.warnings.strip())


class AnalysisResult(BaseModel):
    """Ordered recommendations, kept in the model's presentation order."""

    model_config = ConfigDict(populate_by_name=True)

    recommendations: List[Recommendation]
