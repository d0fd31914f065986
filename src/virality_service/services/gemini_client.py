"""Video analysis using Gemini structured output."""

import base64
import binascii
import json
import logging
from functools import lru_cache
from typing import Any

from google import genai
from google.genai import errors, types
from pydantic import ValidationError

from ..config import settings
from ..models.analysis import AnalysisResult

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Raised when a video could not be analyzed."""


RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "transcriptSummary": {
            "type": "STRING",
            "description": "A summary of the spoken content and visual actions in the video.",
        },
        "keywords": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "High-traffic keywords relevant to the video content.",
        },
        "audienceAnalysis": {
            "type": "STRING",
            "description": "A brief analysis of the target audience for this content.",
        },
        "captions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "platform": {
                        "type": "STRING",
                        "description": "The social platform (e.g., TikTok, Instagram, Facebook).",
                    },
                    "title": {
                        "type": "STRING",
                        "description": "A short SEO-optimized title (required for Facebook/YouTube, optional for others).",
                    },
                    "caption": {"type": "STRING", "description": "The optimized caption text."},
                    "hashtags": {
                        "type": "ARRAY",
                        "items": {"type": "STRING"},
                        "description": "5-10 relevant hashtags.",
                    },
                    "strategy": {
                        "type": "STRING",
                        "description": "The strategy used (e.g., Viral/Hook, Educational, Community).",
                    },
                    "maxLength": {
                        "type": "INTEGER",
                        "description": "The maximum character length constraint used, if applicable.",
                    },
                },
                "required": ["platform", "caption", "hashtags", "strategy"],
            },
        },
    },
    "required": ["transcriptSummary", "keywords", "captions", "audienceAnalysis"],
}

PROMPT = """Analyze this video's audio (transcript) and visual content.
1. Summarize the transcript and key visual moments.
2. Identify high-traffic keywords suitable for social media SEO.
3. Analyze who the ideal audience is.
4. Generate 3 distinct social media captions:
   - One for Facebook/YouTube Description (Engaging/Community based, moderate length).
     * IMPORTANT: For Facebook/YouTube, also generate a distinct "title" field containing a short, SEO-optimized headline for the video (5-10 words).
   - One for TikTok/Reels (Viral/Hook based, short, punchy).
   - One for Instagram Main Feed (Storytelling/Engagement based).

STRICT FORMATTING RULES:
- Do NOT use emojis in the captions or titles.
- Do NOT use em dashes. Use standard periods (.), commas (,), or hyphens (-) if necessary.
- Write in a natural, casual, human-like tone. Avoid robotic or overly enthusiastic "marketing" language.
- Use standard ASCII punctuation only."""


def build_prompt(max_length: int | None = None) -> str:
    """Build the analysis prompt, adding the length constraint when set."""
    prompt = PROMPT
    if max_length:
        prompt += f"\nIMPORTANT: Ensure each generated caption is approximately {max_length} characters or less."
    return prompt + "\nReturn the result in JSON format."


@lru_cache(maxsize=1)
def _get_client(api_key: str) -> genai.Client:
    """Get a Gemini client for the key (cached, shared across calls)."""
    return genai.Client(api_key=api_key)


async def analyze_video(
    encoded: str,
    mime_type: str,
    max_length: int | None = None,
    api_key: str | None = None,
) -> AnalysisResult:
    """
    Ask Gemini for a structured analysis of one video.

    Args:
        encoded: Base64-encoded video bytes
        mime_type: Video content type, e.g. "video/mp4"
        max_length: Optional target caption length in characters
        api_key: Gemini API key (defaults to VIRALITY_GEMINI_API_KEY)

    Returns:
        AnalysisResult parsed from the schema-validated response

    Raises:
        AnalysisError: Missing credential, provider failure or unparseable response
    """
    key = api_key or settings.gemini_api_key
    if not key:
        raise AnalysisError("API key is missing. Set VIRALITY_GEMINI_API_KEY.")

    try:
        video_bytes = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise AnalysisError(f"Video payload is not valid base64: {e}") from e

    client = _get_client(key)

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=[
                types.Part.from_bytes(data=video_bytes, mime_type=mime_type),
                build_prompt(max_length),
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
                temperature=settings.gemini_temperature,
            ),
        )
    except errors.APIError as e:
        logger.error(f"Gemini API error: {e}")
        raise AnalysisError(f"Gemini request failed: {e}") from e
    except Exception as e:
        # Transport failures (timeouts, connection resets) surface from the HTTP client
        logger.error(f"Gemini request error: {e}")
        raise AnalysisError(f"Gemini request failed: {e}") from e

    if not response.text:
        raise AnalysisError("No response text received from Gemini.")

    return parse_analysis(response.text)


def parse_analysis(text: str) -> AnalysisResult:
    """Parse a JSON response body into an AnalysisResult."""
    try:
        return AnalysisResult.model_validate(json.loads(text))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse AI response: {e}")
        raise AnalysisError(f"Malformed response: {e}") from e
    except ValidationError as e:
        logger.error(f"AI response does not match schema: {e}")
        raise AnalysisError(f"Unexpected response shape: {e.error_count()} errors") from e
