"""
Text Cleanup module for Bill Splitter
Asks a chat model to turn raw OCR text into a name/quantity/price table
"""

import os
from typing import Union

from openai import OpenAI, OpenAIError, APIStatusError

from config import LLM_MODEL, LLM_TEMPERATURE, LLM_API_KEY_ENV, LLM_TIMEOUT_SECONDS
from constants import CLEANUP_SYSTEM_PROMPT
from data_models import CleanupResult, CleanupError


class TextCleanupClient:
    """Chat-completion cleanup; returns CleanupResult or CleanupError, never raises"""

    def __init__(self, client=None, model: str = LLM_MODEL, temperature: float = LLM_TEMPERATURE):
        self._client = client
        self.model = model
        self.temperature = temperature

    def _get_client(self):
        if self._client is None:
            self._client = OpenAI(api_key=os.getenv(LLM_API_KEY_ENV), timeout=LLM_TIMEOUT_SECONDS)
        return self._client

    def build_messages(self, ocr_text: str) -> list:
        return [
            {"role": "system", "content": CLEANUP_SYSTEM_PROMPT},
            {"role": "user", "content": ocr_text},
        ]

    def clean(self, ocr_text: str) -> Union[CleanupResult, CleanupError]:
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=self.build_messages(ocr_text),
                temperature=self.temperature
            )
        except APIStatusError as e:
            return CleanupError(message=f"OpenAI error: {e.message}")
        except OpenAIError as e:
            return CleanupError(message=f"Failed to call OpenAI: {e}")

        choices = getattr(response, 'choices', None) or []
        message = getattr(choices[0], 'message', None) if choices else None
        content = getattr(message, 'content', None) if message else None
        if content:
            return CleanupResult(text=content)

        return CleanupError(message=f"No response from LLM. Raw response: {response}")
