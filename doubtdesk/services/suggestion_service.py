"""AI answer suggestions for instructors.

Talks to any OpenAI-compatible chat completion endpoint. The text it returns
is advisory: it is never stored, and instructors edit it before posting an
answer.
"""
import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from doubtdesk.core.config import settings
from doubtdesk.core.exceptions import DependencyUnavailable

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful and knowledgeable instructor. Provide clear, "
    "comprehensive, and educational answers to student questions."
)


class SuggestionService:
    """Service for drafting answers with an LLM."""

    def __init__(self, client: Optional[OpenAI] = None):
        """Initialize the client from settings unless one is supplied.

        With no API key configured the service stays unconfigured and every
        ``suggest`` call raises :class:`DependencyUnavailable`.
        """
        self.model = settings.OPENAI_MODEL
        self.temperature = settings.AI_TEMPERATURE
        self.max_tokens = settings.AI_MAX_TOKENS
        if client is None and settings.OPENAI_API_KEY:
            client = OpenAI(
                api_key=settings.OPENAI_API_KEY,
                base_url=settings.OPENAI_BASE_URL,
                timeout=settings.AI_TIMEOUT_SECONDS,
                max_retries=0,
            )
        self.client = client

    @property
    def configured(self) -> bool:
        return self.client is not None

    def suggest(self, title: str, content: str) -> str:
        """
        Draft an answer to a student's doubt.

        Args:
            title: Doubt title
            content: Doubt body

        Returns:
            Suggested answer text

        Raises:
            DependencyUnavailable: Service unconfigured, unreachable, or it
                returned an error or an empty completion
        """
        if not self.configured:
            raise DependencyUnavailable("AI service is not configured. Please contact administrator.")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": self._build_user_prompt(title, content)},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.warning("AI suggestion request failed: %s", e)
            raise DependencyUnavailable("AI service returned an error") from e

        if not response.choices or not response.choices[0].message.content:
            logger.warning("AI suggestion response had no content")
            raise DependencyUnavailable("AI service returned an empty suggestion")

        return response.choices[0].message.content.strip()

    def _build_user_prompt(self, title: str, content: str) -> str:
        """Build the user prompt with the student's question."""
        return f"""A student has asked the following question:

Title: {title}

Question: {content}

Please provide a clear, comprehensive, and educational answer that:
1. Directly addresses the student's question
2. Explains the concept in simple terms
3. Provides examples if relevant
4. Is encouraging and supportive

Keep your answer concise but thorough (aim for 2-4 paragraphs)."""
