from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    url: str
    analysis: str


class AnalyzeResumeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_url: str | None = Field(default=None, alias="fileUrl")


class AnalyzeResumeResponse(BaseModel):
    analysis: str


class ResumeResponse(BaseModel):
    """The owner's current resume, keyed the way the web client reads it."""

    model_config = ConfigDict(populate_by_name=True)

    resume_url: str = Field(alias="resumeUrl")
    resume_file_name: str = Field(alias="resumeFileName")
    resume_updated_at: datetime | None = Field(default=None, alias="resumeUpdatedAt")


class ErrorResponse(BaseModel):
    error: str
