# ABOUTME: URL predicates shared by the structural and regex extraction passes
# ABOUTME: Permissive scheme check and order-preserving deduplication

from collections.abc import Iterable

ACCEPTED_PREFIXES = ("http://", "https://", "data:image/")


def is_valid_image_url(url: str) -> bool:
    """Whether ``url`` is worth handing to the downloader.

    Only the scheme is checked. URLs without a recognised extension or host are
    still accepted; the downloader's content-type check makes the final call.
    """
    if not url:
        return False
    return url.lower().startswith(ACCEPTED_PREFIXES)


def deduplicate_urls(urls: Iterable[str]) -> list[str]:
    """Trim, drop empties and keep the first occurrence of each URL."""
    seen: set[str] = set()
    result: list[str] = []

    for url in urls:
        normalized = url.strip()
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        result.append(normalized)

    return result
