# book_summary/services/llm.py
from __future__ import annotations
import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from book_summary.errors import GenerationError

log = logging.getLogger("book-summary.llm")


class TextGenerator:
    """
    Deterministic (temperature 0) completion over the OpenAI chat API.
    Any SDK failure surfaces as GenerationError.
    """

    def __init__(self, *, model: str = "gpt-4o-mini", timeout: float = 60.0, client: Optional[OpenAI] = None):
        self.model = model
        self.client = client or OpenAI(timeout=timeout)

    def generate(self, prompt: str, *, max_output_tokens: int = 1200) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.0,
                max_tokens=max_output_tokens,
            )
        except OpenAIError as e:
            log.warning("Chat completion failed: %s", e)
            raise GenerationError(str(e)) from e
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""
