# ABOUTME: Deterministic filenames and extension resolution for stored images
# ABOUTME: Content type wins, then a recognised URL extension, then .bin

import posixpath
from urllib.parse import urlsplit

from gh_ccimg.download.validator import UNKNOWN_EXTENSION, get_extension_from_content_type

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".bmp", ".tiff", ".ico"})


def generate_filename(index: int, extension: str = "") -> str:
    """Sequential 1-indexed name: index 0 with ``.png`` gives ``img-01.png``."""
    if extension and not extension.startswith("."):
        extension = f".{extension}"
    if not extension:
        extension = UNKNOWN_EXTENSION
    return f"img-{index + 1:02d}{extension}"


def extract_extension_from_url(url: str) -> str:
    """Recognised image extension of the URL path, lowercased, or ``""``."""
    if not url:
        return ""

    path = urlsplit(url).path
    ext = posixpath.splitext(path)[1].lower()
    return ext if ext in IMAGE_EXTENSIONS else ""


def determine_extension(content_type: str, url: str) -> str:
    """Pick the storage extension for a downloaded image."""
    if content_type:
        ext = get_extension_from_content_type(content_type)
        if ext != UNKNOWN_EXTENSION:
            return ext

    if url:
        ext = extract_extension_from_url(url)
        if ext:
            return ext

    return UNKNOWN_EXTENSION
