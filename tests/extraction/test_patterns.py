# ABOUTME: Tests for the regex fallback battery and reference-definition resolution
# ABOUTME: Exercises malformed markdown that a structural parser would skip

from gh_ccimg.extraction import extract_references, extract_with_patterns


class TestExtractReferences:
    """Test line-oriented reference definitions."""

    def test_keys_are_lowercased_and_titles_dropped(self):
        content = '[Logo]: https://example.com/logo.png "Company logo"\n  [banner]: <https://example.com/b.gif>'

        references = extract_references(content)

        assert references == {
            "logo": "https://example.com/logo.png",
            "banner": "https://example.com/b.gif",
        }

    def test_ignores_non_definition_lines(self):
        assert extract_references("just [text] here\n![img](x.png)") == {}


class TestExtractWithPatterns:
    """Test the tolerant regex pass on its own."""

    def test_unclosed_bracket_inline_image(self):
        """An inline image after broken markup is still matched."""
        content = "[broken link ![shot](https://example.com/shot.webp)"

        assert "https://example.com/shot.webp" in extract_with_patterns(content)

    def test_reference_usage_resolved_case_insensitively(self):
        content = "![diagram][ARCH]\n[arch]: https://example.com/arch.png"

        assert "https://example.com/arch.png" in extract_with_patterns(content)

    def test_unresolved_reference_is_ignored(self):
        assert extract_with_patterns("![diagram][missing]") == []

    def test_html_src_is_case_insensitive(self):
        content = '<IMG SRC="https://example.com/upper.gif">'

        assert "https://example.com/upper.gif" in extract_with_patterns(content)

    def test_bare_url_stops_at_quotes(self):
        """Bare-URL patterns do not swallow the closing quote of an attribute."""
        content = '<img src="https://github.com/octo/repo/assets/123/abc.png">'

        urls = extract_with_patterns(content)

        assert all('"' not in url and ">" not in url for url in urls)
        assert "https://github.com/octo/repo/assets/123/abc.png" in urls

    def test_custom_predicate(self):
        content = "![a](https://example.com/a.png) ![b](http://example.com/b.png)"

        urls = extract_with_patterns(content, accept=lambda url: url.startswith("https://"))

        assert urls and all(url.startswith("https://") for url in urls)
