"""Pydantic response models for the rezum API.

Fields are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadResponse(CamelModel):
    """Returned by POST /api/v1/upload."""
    message: str = "File uploaded successfully"
    file_id: str
    filename: str
    size: int
    mimetype: str


class FileSummary(CamelModel):
    file_id: str
    size: int


class FileListResponse(CamelModel):
    files: list[FileSummary] = Field(default_factory=list)


class TextResponse(CamelModel):
    text: str


class MessageResponse(CamelModel):
    message: str


class ResumeAnalysis(CamelModel):
    """LLM feedback for one stored resume. Computed per request, never stored."""
    analysis: str = Field(..., description="Full Markdown text returned by the model")
    file_id: str
    extracted_text: str = Field(..., description="Text extracted from the uploaded PDF")
    ats_score: int | None = Field(
        default=None,
        description="Score parsed from the 'ATS Score' line of the analysis, 0-100",
    )
