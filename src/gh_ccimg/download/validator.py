# ABOUTME: Pure content-type validation for downloaded images
# ABOUTME: Maps accepted image MIME types to canonical file extensions

from gh_ccimg.download.errors import InvalidContentTypeError

UNKNOWN_EXTENSION = ".bin"

CONTENT_TYPE_EXTENSIONS: dict[str, str] = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
    "image/bmp": ".bmp",
    "image/tiff": ".tiff",
    "image/x-icon": ".ico",
    "image/vnd.microsoft.icon": ".ico",
}


def normalize_content_type(content_type: str) -> str:
    """Lowercase a Content-Type value and strip ``;``-delimited parameters."""
    return content_type.lower().split(";", 1)[0].strip()


def validate_content_type(content_type: str) -> None:
    """Check that ``content_type`` names an accepted image type.

    Raises:
        InvalidContentTypeError: If the header is missing or not an image type we accept
    """
    if not content_type:
        raise InvalidContentTypeError("content-type header is missing")

    if normalize_content_type(content_type) not in CONTENT_TYPE_EXTENSIONS:
        raise InvalidContentTypeError(f"invalid content type for image: {content_type} (expected image/*)")


def get_extension_from_content_type(content_type: str) -> str:
    """Return the canonical extension for ``content_type``, or ``.bin`` when unknown."""
    if not content_type:
        return UNKNOWN_EXTENSION
    return CONTENT_TYPE_EXTENSIONS.get(normalize_content_type(content_type), UNKNOWN_EXTENSION)
