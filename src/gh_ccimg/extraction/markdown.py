# ABOUTME: Image URL extraction from GitHub issue and comment markdown
# ABOUTME: Combines a markdown-it token walk with regex fallbacks and order-preserving dedup

from collections.abc import Iterable

from markdown_it import MarkdownIt
from markdown_it.token import Token

from gh_ccimg.extraction.patterns import extract_with_patterns
from gh_ccimg.extraction.urls import deduplicate_urls, is_valid_image_url


def _build_parser() -> MarkdownIt:
    parser = MarkdownIt("commonmark")
    # Keep destinations exactly as written so they dedupe against the regex fallbacks
    parser.normalizeLink = lambda url: url  # type: ignore[method-assign]
    return parser


_parser = _build_parser()


def _walk_images(tokens: list[Token]) -> Iterable[str]:
    for token in tokens:
        if token.type == "image":
            src = token.attrGet("src")
            if isinstance(src, str):
                yield src
        if token.children:
            yield from _walk_images(token.children)


def extract_image_urls(content: str) -> list[str]:
    """Return the unique image URLs referenced in ``content``, in first-seen order.

    Never raises; empty input yields an empty list.
    """
    if not content:
        return []

    urls = [url for url in _walk_images(_parser.parse(content)) if is_valid_image_url(url)]

    # The fallbacks do not know about code spans or fenced blocks, so URLs shown
    # as code are picked up here even though the token walk skips them.
    urls.extend(extract_with_patterns(content))

    return deduplicate_urls(urls)
