"""Blog post generation via a hosted chat model."""
from __future__ import annotations

import logging
from typing import Literal

from anthropic import AsyncAnthropic
from groq import AsyncGroq

from app.core.exceptions import IntegrationError
from app.prompts.blog_templates import BLOG_SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)

UNTITLED_POST = "Untitled Blog Post"
TEMPERATURE = 0.7
MAX_TOKENS = 4096


def extract_title(markdown: str) -> str:
    """Title from a leading ``# Heading`` block, else the placeholder."""
    title_line = markdown.split("\n\n", 1)[0]
    if title_line.startswith("# "):
        return title_line[2:].strip()
    return UNTITLED_POST


class BlogGenerator:
    def __init__(
        self,
        provider: Literal["groq", "anthropic"],
        client: AsyncGroq | AsyncAnthropic,
        model: str,
    ):
        self.provider = provider
        self.client = client
        self.model = model

    @classmethod
    def for_groq(cls, client: AsyncGroq, model: str = "llama-3.3-70b-versatile") -> "BlogGenerator":
        return cls("groq", client, model)

    @classmethod
    def for_anthropic(cls, client: AsyncAnthropic, model: str) -> "BlogGenerator":
        return cls("anthropic", client, model)

    async def generate(self, transcription_text: str, user_posts: str) -> str | None:
        """Return the generated markdown, or None when the model produced nothing."""
        prompt = build_user_prompt(transcription_text, user_posts)
        try:
            if self.provider == "anthropic":
                content = await self._complete_anthropic(prompt)
            else:
                content = await self._complete_groq(prompt)
        except Exception as exc:
            logger.error(f"Blog generation via {self.provider} failed: {exc}")
            raise IntegrationError(str(exc)) from exc
        return content or None

    async def _complete_groq(self, prompt: str) -> str | None:
        completion = await self.client.chat.completions.create(
            messages=[
                {"role": "system", "content": BLOG_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            model=self.model,
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
        if not completion.choices:
            return None
        message = completion.choices[0].message
        return message.content if message else None

    async def _complete_anthropic(self, prompt: str) -> str | None:
        message = await self.client.messages.create(
            model=self.model,
            system=BLOG_SYSTEM_PROMPT,
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
            messages=[{"role": "user", "content": prompt}],
        )
        for block in message.content:
            if getattr(block, "type", None) == "text":
                return block.text
        return None
