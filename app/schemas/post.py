from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class GeneratePostRequest(BaseModel):
    transcription_text: str
    user_id: str


class GenerationResult(BaseModel):
    """Outcome of the generation flow; the caller decides where to navigate."""

    success: bool
    message: str
    post_id: str | None = None


class PostSummary(BaseModel):
    id: str
    title: str
    created_at: datetime | None = None


class PostOut(PostSummary):
    user_id: str
    content: str
