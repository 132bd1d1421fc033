"""Pytest configuration and fixtures for integration tests.

Loads .env and skips the whole suite when no GEMINI_API_KEY is configured,
since these tests call the real Gemini API.
"""

import os
from io import BytesIO
from pathlib import Path

import pytest
from dotenv import load_dotenv
from PIL import Image, ImageDraw

MENU_LINES = [
    "TODAY'S MENU",
    "Spicy Tofu Stir-Fry ........ $14.00",
    "Vegetable Green Curry ...... $13.50",
    "Grilled Ribeye Steak ....... $32.00",
    "Shrimp Pad Thai ............ $15.00",
    "Garden Salad ............... $9.00",
]


def pytest_configure(config):
    """Load .env from the project root before collection."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    print("\n" + "=" * 70)
    print("Note: These tests require a valid GEMINI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_key():
    """Skip integration tests when GEMINI_API_KEY is not configured."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing API key: GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )


@pytest.fixture(scope="session")
def menu_image() -> bytes:
    """A rendered text menu, PNG encoded."""
    img = Image.new("RGB", (640, 320), "white")
    draw = ImageDraw.Draw(img)
    for i, line in enumerate(MENU_LINES):
        draw.text((30, 20 + i * 45), line, fill="black")
    output = BytesIO()
    img.save(output, "PNG")
    return output.getvalue()
