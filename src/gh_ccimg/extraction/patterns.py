# ABOUTME: Tolerant regex fallbacks for image URLs in malformed markdown
# ABOUTME: Covers inline images, HTML img tags, GitHub attachment shapes and reference definitions

import re
from collections.abc import Callable

from gh_ccimg.extraction.urls import is_valid_image_url

# Inline image syntax, matched up to the first closing parenthesis
MARKDOWN_IMAGE_PATTERN = re.compile(r"!\[[^\]]*\]\(([^)]+)\)")

HTML_IMG_PATTERN = re.compile(r"""<img[^>]+src=["']([^"']+)["'][^>]*>""", re.IGNORECASE)

GITHUB_ASSET_PATTERN = re.compile(r"""https://github\.com/[^/\s]+/[^/\s]+/assets/[^\s)"'<>]+""")

GITHUB_ATTACHMENT_PATTERN = re.compile(r"""https://github\.com/user-attachments/assets/[^\s)"'<>]+""")

GITHUB_USER_CONTENT_PATTERN = re.compile(r"""https://[^/\s]*githubusercontent\.com/[^\s)"'<>]+""")

# Bare URLs that carry an image extension or an image-ish path segment
HTTP_IMAGE_PATTERN = re.compile(
    r"""https?://[^\s)"'<>]+(?:\.(?:png|jpg|jpeg|gif|webp|svg|bmp|tiff)|/(?:images?|img|assets|uploads)/[^\s)"'<>]+)"""
)

REFERENCE_DEFINITION_PATTERN = re.compile(r"^\s*\[([^\]]+)\]:\s*(\S+)")

REFERENCE_USAGE_PATTERN = re.compile(r"!\[[^\]]*\]\[([^\]]+)\]")

CAPTURING_PATTERNS = (MARKDOWN_IMAGE_PATTERN, HTML_IMG_PATTERN)

WHOLE_MATCH_PATTERNS = (
    GITHUB_ASSET_PATTERN,
    GITHUB_ATTACHMENT_PATTERN,
    GITHUB_USER_CONTENT_PATTERN,
    HTTP_IMAGE_PATTERN,
)


def _strip_destination(raw: str) -> str:
    """Reduce an inline destination like ``<url> "title"`` to the bare URL."""
    parts = raw.strip().split()
    if not parts:
        return ""
    return parts[0].strip("<>")


def extract_references(content: str) -> dict[str, str]:
    """Collect ``[key]: url "title"`` definitions keyed by lowercased label."""
    references: dict[str, str] = {}

    for line in content.splitlines():
        match = REFERENCE_DEFINITION_PATTERN.match(line)
        if not match:
            continue
        key = match.group(1).strip().lower()
        url = match.group(2).strip("\"'<>")
        if url:
            references[key] = url

    return references


def extract_with_patterns(content: str, accept: Callable[[str], bool] = is_valid_image_url) -> list[str]:
    """Scan raw text with every fallback pattern, then resolve reference-style usages.

    Args:
        content: Raw markdown text
        accept: Predicate deciding whether a candidate URL is kept
    """
    urls: list[str] = []

    for pattern in CAPTURING_PATTERNS:
        for match in pattern.finditer(content):
            url = _strip_destination(match.group(1))
            if url and accept(url):
                urls.append(url)

    for pattern in WHOLE_MATCH_PATTERNS:
        for match in pattern.finditer(content):
            url = match.group(0).strip()
            if url and accept(url):
                urls.append(url)

    references = extract_references(content)
    for match in REFERENCE_USAGE_PATTERN.finditer(content):
        url = references.get(match.group(1).strip().lower())
        if url and accept(url):
            urls.append(url)

    return urls
