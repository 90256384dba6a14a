"""Blog Rules — pure authoring rules for blog posts (slugs, image uploads).

Invariants:
    - slugify output only contains [a-z0-9-]
    - An explicit non-blank slug always wins over the title-derived one
    - Image uploads: jpeg/png/webp only, at most 2 MiB

Design Decisions:
    - Upload checks take (content_type, size) rather than a file object: the
      storage client stays outside the core
"""

import re

from sagenest.core.domain_types import ValidationResult

MAX_UPLOAD_SIZE_BYTES = 2 * 1024 * 1024

ALLOWED_IMAGE_MIME_TO_EXTENSION: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

_DISALLOWED_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def slugify(value: str) -> str:
    slug = _DISALLOWED_SLUG_CHARS.sub("", value.lower().strip())
    slug = _WHITESPACE_RUN.sub("-", slug)
    return _HYPHEN_RUN.sub("-", slug)


def resolve_slug(slug: str | None, title: str) -> str:
    if slug and slug.strip():
        return slugify(slug)
    return slugify(title)


def validate_blog_image_upload(content_type: str, size_bytes: int) -> ValidationResult:
    if content_type not in ALLOWED_IMAGE_MIME_TO_EXTENSION:
        allowed = ", ".join(ALLOWED_IMAGE_MIME_TO_EXTENSION)
        return ValidationResult.fail(
            f"Unsupported image type. Please upload one of: {allowed}.",
        )
    if size_bytes > MAX_UPLOAD_SIZE_BYTES:
        return ValidationResult.fail("Image is too large. Maximum allowed size is 2MB.")
    return ValidationResult.ok()


def image_extension(content_type: str) -> str | None:
    return ALLOWED_IMAGE_MIME_TO_EXTENSION.get(content_type)
