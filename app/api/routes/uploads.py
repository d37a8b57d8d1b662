"""
Upload API Routes
Receives the upload provider's callback payload and transcribes the file.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user, get_transcription_service
from app.core.security import ensure_same_user
from app.integrations.transcription import TranscriptionService
from app.schemas.upload import TranscriptionResult, UploadResult

router = APIRouter()


@router.post("/transcribe", response_model=TranscriptionResult)
async def transcribe_upload(
    payload: List[UploadResult],
    service: TranscriptionService = Depends(get_transcription_service),
    user: Dict[str, Any] = Depends(get_current_user),
) -> TranscriptionResult:
    if payload and payload[0].server_data:
        ensure_same_user(user, payload[0].server_data.user_id)
    result = await service.transcribe_uploaded_file(payload)
    # Uploads without a userId belong to the signed-in user.
    if result.data is not None and not result.data.user_id:
        result.data.user_id = user["id"]
    return result
