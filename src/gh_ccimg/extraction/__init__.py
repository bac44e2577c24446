# ABOUTME: Image URL discovery in issue and comment markdown
# ABOUTME: Pipeline Stage 1: raw markdown → ordered, deduplicated image URLs

"""
Extraction Layer: Find image references in untrusted markdown

This layer handles:
- Structural markdown parsing for image nodes
- Regex fallbacks for malformed markdown and HTML img tags
- Reference-style definitions and URL deduplication

Data Flow: GitHub markdown → Image URL list → download/
"""

from .markdown import extract_image_urls
from .patterns import extract_references, extract_with_patterns
from .urls import deduplicate_urls, is_valid_image_url

__all__ = [
    "deduplicate_urls",
    "extract_image_urls",
    "extract_references",
    "extract_with_patterns",
    "is_valid_image_url",
]
