"""LLM backend for FitCoach using Gemini via the google-genai SDK."""

import os

from google import genai

MODEL = os.environ.get("FITCOACH_MODEL", "gemini-2.5-flash")


def has_credentials() -> bool:
    """True when a Gemini API key is configured (otherwise demo mode)."""
    return bool(os.environ.get("GEMINI_API_KEY"))


def get_client() -> genai.Client:
    """Create a Gemini client using the API key from environment."""
    api_key = os.environ.get("GEMINI_API_KEY")
    if not api_key:
        raise ValueError("GEMINI_API_KEY not set in environment")
    return genai.Client(api_key=api_key)


def text_config(system_instruction: str, temperature: float = 0.7) -> genai.types.GenerateContentConfig:
    return genai.types.GenerateContentConfig(
        system_instruction=system_instruction,
        temperature=temperature,
    )


def json_config(system_instruction: str, temperature: float = 0.7) -> genai.types.GenerateContentConfig:
    """Generation config that asks the model for a raw JSON object."""
    return genai.types.GenerateContentConfig(
        system_instruction=system_instruction,
        temperature=temperature,
        response_mime_type="application/json",
    )


def user_content(prompt: str) -> list[genai.types.Content]:
    return [
        genai.types.Content(
            role="user",
            parts=[genai.types.Part(text=prompt)],
        ),
    ]


def test_connection() -> str:
    """Send a test prompt to Gemini and return the response text."""
    client = get_client()
    response = client.models.generate_content(
        model=MODEL,
        contents="Say 'FitCoach connected successfully' and nothing else.",
    )
    return response.text
