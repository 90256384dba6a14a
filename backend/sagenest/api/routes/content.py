"""Content Routes — safe markdown rendering and blog editor helpers.

Invariants:
    - Every HTML string returned here comes from core.markdown_sanitizer
    - Bodies longer than settings.max_markdown_chars are rejected (413) before rendering
    - Render handlers are sync so the CPU-bound sanitizer runs in the threadpool
    - Storage and authentication for blog posts live outside this service
"""

import logging

from fastapi import APIRouter

from sagenest.config import get_settings
from sagenest.core.blog_rules import (
    image_extension,
    resolve_slug,
    validate_blog_image_upload,
)
from sagenest.core.errors import ContentTooLargeError, ErrorContext
from sagenest.core.markdown_sanitizer import render_markdown
from sagenest.schemas.content import (
    BlogPreviewRequest,
    BlogPreviewResponse,
    ImageUploadCheck,
    MarkdownRenderRequest,
    MarkdownRenderResponse,
    ValidationResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["content"])


def _render_bounded(content: str) -> str:
    limit = get_settings().max_markdown_chars
    if len(content) > limit:
        raise ContentTooLargeError(
            len(content), limit, ErrorContext(field_name="content"),
        )
    return render_markdown(content)


@router.post("/markdown/render", response_model=MarkdownRenderResponse)
def render_markdown_body(body: MarkdownRenderRequest):
    """Render a stored post body to embeddable HTML."""
    return MarkdownRenderResponse(html=_render_bounded(body.content))


@router.post("/blog/preview", response_model=BlogPreviewResponse)
def preview_blog_post(body: BlogPreviewRequest):
    """Editor preview: final slug plus rendered body."""
    return BlogPreviewResponse(
        slug=resolve_slug(body.slug, body.title),
        html=_render_bounded(body.content),
    )


@router.post("/blog/images/validate", response_model=ValidationResponse)
async def validate_blog_image(body: ImageUploadCheck):
    """Pre-upload check for a cover image (type and size only)."""
    result = validate_blog_image_upload(body.content_type, body.size_bytes)
    if not result.valid:
        logger.info(f"Blog image rejected: {result.message}")
        return ValidationResponse(valid=False, message=result.message)
    return ValidationResponse(valid=True, extension=image_extension(body.content_type))
