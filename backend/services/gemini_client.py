"""Google Gemini API wrapper with error handling."""

import json
import logging

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - AI enhancement disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def is_configured() -> bool:
    return bool(settings.ai_enhance_enabled and settings.gemini_api_key)


def extract_json_object(text: str) -> dict | None:
    """Parse the object between the first '{' and the last '}'."""
    text = (text or "").strip()
    # Strip markdown code fences if present
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()

    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        return None
    parsed = json.loads(text[start:end + 1])
    return parsed if isinstance(parsed, dict) else None


async def generate_json(prompt: str, temperature: float | None = None) -> dict | None:
    """Send a prompt to Gemini and parse the JSON response."""
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model=settings.ai_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=settings.ai_temperature if temperature is None else temperature,
                max_output_tokens=4096,
            ),
        )
        return extract_json_object(response.text or "")

    except json.JSONDecodeError as e:
        logger.error("Failed to parse Gemini response as JSON: %s", e)
        return None
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None
