"""
Career AI Completion Client

Thin wrapper around an OpenAI-compatible chat-completions endpoint
(Together.ai by default). Serves the three call sites of the app:

- chat replies from the career advisor
- structured career information lookups
- analysis of a completed quiz

Every call returns text. Network, configuration and API failures are logged
and replaced by a fixed apology string, so callers never see an exception.
"""

import logging
from typing import Optional, Sequence

from openai import AsyncOpenAI

from career_advisor.config import AdvisorSettings
from career_advisor import prompts

logger = logging.getLogger(__name__)

CHAT_MAX_TOKENS = 500
CAREER_INFO_MAX_TOKENS = 1000
ANALYSIS_MAX_TOKENS = 1500


class CompletionNotConfigured(RuntimeError):
    """Raised internally when no API key is available."""


class CareerAI:
    """Completion client shared by every workspace."""

    def __init__(self, settings: AdvisorSettings, llm_client: Optional[AsyncOpenAI] = None):
        self.model = settings.model
        self.temperature = settings.temperature

        if llm_client is not None:
            self.llm_client = llm_client
        elif settings.together_api_key:
            self.llm_client = AsyncOpenAI(
                api_key=settings.together_api_key,
                base_url=settings.together_base_url,
            )
        else:
            logger.warning("⚠️ [CareerAI] TOGETHER_API_KEY not set, replies will use the fallback text")
            self.llm_client = None

    async def _complete(self, system: str, user: str, max_tokens: int) -> Optional[str]:
        if self.llm_client is None:
            raise CompletionNotConfigured("Together.ai API key not configured")

        response = await self.llm_client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=self.temperature,
            max_tokens=max_tokens,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def get_ai_response(self, message: str) -> str:
        """Reply to a single chat message."""
        try:
            content = await self._complete(prompts.SYSTEM_PROMPT, message, CHAT_MAX_TOKENS)
            return content or prompts.EMPTY_CHAT_REPLY
        except Exception as e:
            logger.error(f"❌ [CareerAI] Chat completion failed: {e}")
            return prompts.CONNECTION_FALLBACK

    async def get_career_info(self, career: str) -> str:
        """Describe a career: role, duties, skills, pay, growth and outlook."""
        try:
            content = await self._complete(
                prompts.SYSTEM_PROMPT,
                prompts.career_info_prompt(career),
                CAREER_INFO_MAX_TOKENS,
            )
            return content or prompts.EMPTY_CAREER_INFO
        except Exception as e:
            logger.error(f"❌ [CareerAI] Career lookup failed for {career!r}: {e}")
            return prompts.CONNECTION_FALLBACK

    async def analyze_quiz_responses(self, responses: Sequence) -> str:
        """Turn the ordered quiz answers into career recommendations."""
        try:
            content = await self._complete(
                prompts.CAREER_ANALYSIS_PROMPT,
                prompts.format_quiz_responses(responses),
                ANALYSIS_MAX_TOKENS,
            )
            return content or prompts.EMPTY_ANALYSIS
        except Exception as e:
            logger.error(f"❌ [CareerAI] Quiz analysis failed: {e}")
            return prompts.ANALYSIS_FALLBACK
