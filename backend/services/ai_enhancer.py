"""Optional AI enhancement: one attempt, advisory output, None on any failure."""

import asyncio
import logging

from pydantic import ValidationError

from config import settings
from models.schemas.ai_enhancement import AIEnhancement
from services import gemini_client, prompt_builder

logger = logging.getLogger(__name__)


async def enhance_with_ai(jd: str, resume: str) -> AIEnhancement | None:
    if not gemini_client.is_configured():
        return None

    prompt = prompt_builder.build_enhancement_prompt(jd, resume)
    try:
        data = await asyncio.wait_for(
            gemini_client.generate_json(prompt), timeout=settings.ai_timeout_seconds
        )
    except asyncio.TimeoutError:
        logger.warning("AI enhancement timed out after %.1fs", settings.ai_timeout_seconds)
        return None
    except Exception as e:
        logger.warning("AI enhancement failed: %s", e)
        return None

    if not data:
        logger.warning("AI enhancement unavailable, using rule-based signals only")
        return None

    try:
        return AIEnhancement.model_validate(data)
    except ValidationError as e:
        logger.warning("AI enhancement returned malformed data: %s", e.error_count())
        return None
