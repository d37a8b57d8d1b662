from __future__ import annotations

import logging
from typing import Sequence

import httpx
from groq import APIStatusError, AsyncGroq

from app.core.exceptions import IntegrationError
from app.schemas.upload import TranscriptionData, TranscriptionResult, UploadResult

logger = logging.getLogger(__name__)

UPLOAD_FAILED_MESSAGE = "File upload failed"
FILE_TOO_LARGE_MESSAGE = "File size exceeds the max limit (likely 25MB)."
# Groq does not expose an error code for oversized audio beyond HTTP 413, so
# message text is the fallback signal. Keep these in sync with the tests.
FILE_TOO_LARGE_MARKERS = ("too large", "exceeds")


def is_file_too_large_error(exc: Exception) -> bool:
    """Classify a provider failure as a size-limit rejection."""
    if isinstance(exc, APIStatusError) and exc.status_code == 413:
        return True
    message = str(exc)
    return any(marker in message for marker in FILE_TOO_LARGE_MARKERS)


class TranscriptionService:
    """Fetches an uploaded recording and transcribes it via Groq Whisper."""

    def __init__(self, http: httpx.AsyncClient, groq: AsyncGroq, model: str = "whisper-large-v3"):
        self.http = http
        self.groq = groq
        self.model = model

    async def transcribe_uploaded_file(
        self, upload_response: Sequence[UploadResult] | None
    ) -> TranscriptionResult:
        if not upload_response:
            return TranscriptionResult(success=False, message=UPLOAD_FAILED_MESSAGE)

        server_data = upload_response[0].server_data
        file = server_data.file if server_data else None
        if file is None or not file.url or not file.name:
            return TranscriptionResult(success=False, message=UPLOAD_FAILED_MESSAGE)

        try:
            audio = await self._fetch_file(file.url)
            text = await self._transcribe(file.name, audio)
            return TranscriptionResult(
                success=True,
                message="File uploaded successfully!",
                data=TranscriptionData(transcription_text=text, user_id=server_data.user_id),
            )
        except Exception as exc:
            logger.error(f"Error processing file {file.name!r} with Groq: {exc}")
            if is_file_too_large_error(exc):
                return TranscriptionResult(success=False, message=FILE_TOO_LARGE_MESSAGE)
            return TranscriptionResult(success=False, message=str(exc) or "Error processing file")

    async def _fetch_file(self, url: str) -> bytes:
        response = await self.http.get(url)
        response.raise_for_status()
        return response.content

    async def _transcribe(self, file_name: str, audio: bytes) -> str:
        result = await self.groq.audio.transcriptions.create(
            model=self.model,
            file=(file_name, audio),
        )
        text = getattr(result, "text", None)
        if not isinstance(text, str):
            raise IntegrationError("Transcription failed or returned invalid format")
        logger.info(f"Transcribed {file_name!r} ({len(text)} chars)")
        return text
