"""
Fortune text generation via Gemini.

The fortune is decoration on top of the seat lookup, so every failure ends in
a canned greeting rather than an error page.
"""

import logging
from typing import Any, Optional

from app.core.config import settings
from app.core.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "新年快乐！愿你2025年好运连连！"
MISSING_PARAMS_TEXT = "缺少必要参数"

PROMPT_TEMPLATE = """
You are the host of a lively corporate annual meeting in China.
Generate a short, witty, and encouraging "2025 Annual Fortune" (新年签) for an attendee named "{name}" who is sitting at the "{table_name}".

Requirements:
- Language: Chinese (Simplified).
- Tone: Festive, professional yet fun, slightly humorous.
- Length: Under 50 words.
- Include a lucky number or lucky color based on their table name randomly.
- Do not output markdown, just plain text.
"""


class FortuneService:
    """Generates a personal fortune for an attendee"""

    def __init__(self, client: Any = None, api_key: Optional[str] = None, model: Optional[str] = None):
        self._client = client
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL

    def _get_client(self) -> Any:
        """Gemini client (lazy init)"""
        if self._client is None:
            if not self.api_key:
                raise UpstreamError("API key is not configured")
            try:
                from google import genai
                self._client = genai.Client(api_key=self.api_key)
            except Exception as e:
                raise UpstreamError(f"Gemini client unavailable: {e}") from e
        return self._client

    @staticmethod
    def build_prompt(name: str, table_name: str) -> str:
        return PROMPT_TEMPLATE.format(name=name, table_name=table_name)

    async def generate(self, name: Optional[str], table_name: Optional[str]) -> str:
        """Ask the model for a fortune; raises UpstreamError on any failure"""
        if not name or not table_name:
            raise ValidationError(MISSING_PARAMS_TEXT)

        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=self.build_prompt(name, table_name),
            )
        except Exception as e:
            raise UpstreamError(f"Gemini request failed: {e}") from e

        text = (getattr(response, "text", None) or "").strip()
        if not text:
            raise UpstreamError("Gemini returned no text")
        return text

    async def generate_or_fallback(self, name: Optional[str], table_name: Optional[str]) -> str:
        """Like ``generate`` but masks upstream failures behind the canned greeting"""
        try:
            return await self.generate(name, table_name)
        except UpstreamError as e:
            logger.error(f"Gemini API Error: {e.message}")
            return FALLBACK_TEXT
