"""View models for rendering recommendations."""

import math
from typing import List, Optional, Annotated

from pydantic import BaseModel, Field

from src.models.models import AnalysisResult, Recommendation

STAR = "⭐"


def render_stars(score: int) -> str:
    """Star rating for a 1-10 value score: one star per two points.

    Halves round up (7 -> 4 stars), negative scores render no stars.
    """
    star_count = math.floor(score / 2 + 0.5)
    return STAR * max(star_count, 0)


class RecommendationCard(BaseModel):
    """One recommendation as displayed on a results card."""

    dish: str
    price: str
    reasoning: str
    warning: Annotated[Optional[str], Field(None, description="Shown as a note only when non-blank")]
    value_score: int
    stars: str

    @classmethod
    def from_recommendation(cls, rec: Recommendation) -> "RecommendationCard":
        return cls(
            dish=rec.dish,
            price=rec.price,
            reasoning=rec.reasoning,
            warning=rec.warnings.strip() if rec.has_warning else None,
            value_score=rec.value_score,
            stars=render_stars(rec.value_score),
        )


def build_cards(result: AnalysisResult) -> List[RecommendationCard]:
    return [RecommendationCard.from_recommendation(rec) for rec in result.recommendations]


class AnalyzeResponse(BaseModel):
    """Body of a successful POST /api/analyze."""

    result: AnalysisResult
    cards: List[RecommendationCard]


class ErrorResponse(BaseModel):
    error: str
