"""
Gemini-backed question set generator.

Asks the model for a JSON question set, retries transient failures, and
validates the response at the boundary. Every failure reaches the caller as
ContentUnavailable so lesson entry can be retried or abandoned.
"""

import logging
import time
from typing import Optional

from google import genai
from google.genai import types as genai_types

from mathmaster.config import (
    CONTRACT_PART_A_ITEMS,
    CONTRACT_PART_B_ITEMS,
    CONTRACT_PART_B_STATEMENTS,
    CONTRACT_PART_C_ITEMS,
    DEFAULT_MODEL,
    SUBJECT_LABEL,
    get_gemini_api_key,
)
from mathmaster.errors import ContentUnavailable
from mathmaster.schemas import QuestionSet
from mathmaster.utils.prompt_loader import format_prompt, load_prompt

from .validation import validate_question_set

logger = logging.getLogger(__name__)

DEFAULT_API_SLEEP = 1.0


class GeminiQuizGenerator:
    """QuestionSetGenerator using the Gemini API, with retries."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        max_retries: int = 3,
        sleep_seconds: float = DEFAULT_API_SLEEP,
        strict: bool = False,
        client=None,
    ):
        """
        Args:
            api_key: Gemini API key (default: from environment)
            model: Model name
            max_retries: Attempts per question set
            sleep_seconds: Base backoff between attempts
            strict: Reject sets that break the 12 / 4x4 / 6 content contract
            client: Pre-built genai client (tests)
        """
        self.model_name = model
        self.max_retries = max(1, max_retries)
        self.sleep_seconds = sleep_seconds
        self.strict = strict
        self.prompt = load_prompt("quiz_generation")
        self._api_key = api_key or get_gemini_api_key()
        self._client = client

    def _get_client(self):
        if self._client is None:
            if not self._api_key:
                raise ContentUnavailable("GEMINI_API_KEY not set. Check your .env file.")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def build_prompt(self, topic: str, subject: str) -> str:
        return format_prompt(
            self.prompt["user_template"],
            topic=topic,
            subject=subject,
            part_a_items=CONTRACT_PART_A_ITEMS,
            part_b_items=CONTRACT_PART_B_ITEMS,
            part_b_statements=CONTRACT_PART_B_STATEMENTS,
            part_c_items=CONTRACT_PART_C_ITEMS,
        )

    def _request(self, client, user_prompt: str) -> str:
        meta = self.prompt.get("meta", {})
        response = client.models.generate_content(
            model=self.model_name,
            contents=user_prompt,
            config=genai_types.GenerateContentConfig(
                system_instruction=self.prompt["system"],
                temperature=meta.get("temperature", 0.4),
                response_mime_type=meta.get("response_mime_type", "application/json"),
            ),
        )
        if not response.text:
            raise ValueError("Empty response from API")
        return response.text

    def generate_question_set(self, topic: str, subject: str = SUBJECT_LABEL) -> QuestionSet:
        """
        Generate and validate a question set for a lesson title.

        Raises:
            ContentUnavailable: If the API keeps failing or returns malformed data
        """
        client = self._get_client()
        user_prompt = self.build_prompt(topic, subject)
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                text = self._request(client, user_prompt)
                question_set = validate_question_set(text, strict=self.strict)
                if not question_set.topic:
                    question_set = question_set.model_copy(update={"topic": topic})
                return question_set
            except Exception as e:
                last_error = e
                logger.warning(
                    f"Question generation failed for '{topic}' "
                    f"(attempt {attempt + 1}/{self.max_retries}): {e}"
                )
                if attempt < self.max_retries - 1:
                    time.sleep(self.sleep_seconds * (attempt + 1))

        raise ContentUnavailable(f"Could not generate a question set for '{topic}'") from last_error
