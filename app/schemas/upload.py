from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UploadedFile(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str | None = None
    name: str | None = None


class UploadServerData(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    file: UploadedFile | None = None


class UploadResult(BaseModel):
    """One entry of the upload provider's client callback payload."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    server_data: UploadServerData | None = Field(default=None, alias="serverData")


class TranscriptionData(BaseModel):
    transcription_text: str
    user_id: str | None = None


class TranscriptionResult(BaseModel):
    success: bool
    message: str
    data: TranscriptionData | None = None
