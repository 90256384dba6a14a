"""Content Schemas — markdown rendering and blog authoring helpers.

Invariants:
    - BlogPreviewRequest.title: 1-300 chars, stripped, non-empty
    - Image checks carry metadata only (content type, byte size), never file bytes
"""

from pydantic import BaseModel, Field, field_validator


class MarkdownRenderRequest(BaseModel):
    content: str


class MarkdownRenderResponse(BaseModel):
    html: str


class BlogPreviewRequest(BaseModel):
    """Admin editor preview — resolves the final slug and renders the body."""
    title: str = Field(min_length=1, max_length=300)
    slug: str | None = Field(None, max_length=300)
    content: str

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class BlogPreviewResponse(BaseModel):
    slug: str
    html: str


class ImageUploadCheck(BaseModel):
    content_type: str
    size_bytes: int = Field(ge=0)


class ValidationResponse(BaseModel):
    valid: bool
    message: str | None = None
    extension: str | None = None
