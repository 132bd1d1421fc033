"""Prompt for the menu analysis request.

The prompt is the only contract with the model about the reply format: it
asks for 2-3 recommendations as raw JSON with no markdown wrapping. Replies
that ignore this are still fence-stripped before parsing.
"""

from src.models.models import Preferences

DEFAULT_DIETARY = "none"
DEFAULT_BUDGET = "no limit"
DEFAULT_MOOD = "anything good"

MENU_ANALYSIS_TEMPLATE = """You are a helpful restaurant menu analyzer.

Analyze this menu image and recommend dishes based on these preferences:
- Dietary restrictions: {dietary}
- Budget: ${budget}
- Craving/mood: {mood}

Provide 2-3 recommendations with:
1. Dish name and price
2. Why it fits their preferences
3. Any warnings (allergens, spice level, etc.)
4. Value assessment (1-10)

Respond ONLY with valid JSON in this exact structure (no markdown, no code blocks):
{{
  "recommendations": [
    {{
      "dish": "dish name",
      "price": "12.99",
      "reasoning": "explanation",
      "warnings": "any concerns or leave empty",
      "valueScore": 8
    }}
  ]
}}"""


def build_prompt(preferences: Preferences) -> str:
    """Render the analysis instructions for one set of preferences.

    Empty fields are replaced with a default phrase ("none", "no limit",
    "anything good"). Output depends only on the input.

    Args:
        preferences: Dietary, budget and mood values from the form.

    Returns:
        Prompt text sent alongside the menu image.
    """
    return MENU_ANALYSIS_TEMPLATE.format(
        dietary=preferences.dietary or DEFAULT_DIETARY,
        budget=preferences.budget or DEFAULT_BUDGET,
        mood=preferences.mood or DEFAULT_MOOD,
    )
