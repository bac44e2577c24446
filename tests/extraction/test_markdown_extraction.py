# ABOUTME: Tests for image URL extraction from issue and comment markdown
# ABOUTME: Covers inline, reference, HTML and bare GitHub URLs plus ordering and dedup

from gh_ccimg.extraction import deduplicate_urls, extract_image_urls, is_valid_image_url


class TestExtractImageURLs:
    """Test the combined structural and regex extraction."""

    def test_empty_content(self):
        """Empty input yields no URLs."""
        assert extract_image_urls("") == []

    def test_inline_image(self):
        """A single inline image is found once."""
        content = "Screenshot: ![broken layout](https://example.com/shot.png)"

        assert extract_image_urls(content) == ["https://example.com/shot.png"]

    def test_inline_image_with_title(self):
        """Titles after the destination are not part of the URL."""
        content = '![chart](https://example.com/chart.png "Quarterly chart")'

        assert extract_image_urls(content) == ["https://example.com/chart.png"]

    def test_order_follows_first_occurrence(self):
        """URLs come back in the order they first appear."""
        content = (
            "![first](https://example.com/1.png)\n\n"
            "Some text\n\n"
            "![second](https://example.com/2.jpg)\n\n"
            "![first again](https://example.com/1.png)"
        )

        assert extract_image_urls(content) == ["https://example.com/1.png", "https://example.com/2.jpg"]

    def test_html_img_tag(self):
        """HTML img tags embedded in markdown are picked up."""
        content = 'Look: <img width="300" src="https://example.com/photo.jpeg" alt="photo">'

        assert extract_image_urls(content) == ["https://example.com/photo.jpeg"]

    def test_reference_style_image(self):
        """Reference definitions resolve to their URL."""
        content = "![logo][brand]\n\n[brand]: https://example.com/logo.svg"

        assert extract_image_urls(content) == ["https://example.com/logo.svg"]

    def test_github_attachment_url(self):
        """Bare user-attachment URLs pasted into an issue are found."""
        url = "https://github.com/user-attachments/assets/0c6b8b4e-1f2a-4e5b-9c1d-2a3b4c5d6e7f"
        content = f"Here is the recording\n\n{url}\n"

        assert extract_image_urls(content) == [url]

    def test_githubusercontent_url(self):
        """Bare githubusercontent URLs are found."""
        url = "https://user-images.githubusercontent.com/12345/abcdef.png"

        assert extract_image_urls(f"see {url} for details") == [url]

    def test_data_uri(self):
        """Inline data URIs for images are accepted."""
        content = "![pixel](data:image/png;base64,iVBORw0KGgo=)"

        assert extract_image_urls(content) == ["data:image/png;base64,iVBORw0KGgo="]

    def test_rejects_relative_and_foreign_schemes(self):
        """Relative paths and non-HTTP schemes are dropped."""
        content = "![local](/images/local.png)\n![ftp](ftp://example.com/a.png)\n![js](javascript:alert(1))"

        assert extract_image_urls(content) == []

    def test_code_block_urls_are_still_reported(self):
        """The regex fallback does not know about fenced code, so URLs inside it leak through."""
        content = "```\n![example](https://example.com/in-code.png)\n```"

        assert extract_image_urls(content) == ["https://example.com/in-code.png"]

    def test_url_without_image_extension_is_kept(self):
        """Inline images without a recognisable extension still reach the downloader."""
        content = "![avatar](https://avatars.example.com/u/42?v=4)"

        assert "https://avatars.example.com/u/42?v=4" in extract_image_urls(content)

    def test_no_duplicates(self):
        """Every URL appears at most once even when several passes match it."""
        content = (
            "![a](https://example.com/uploads/a.png)\n"
            '<img src="https://example.com/uploads/a.png">\n'
            "https://example.com/uploads/a.png"
        )

        urls = extract_image_urls(content)

        assert urls == ["https://example.com/uploads/a.png"]


class TestIsValidImageURL:
    """Test the permissive URL predicate."""

    def test_accepts_http_https_and_data_images(self):
        assert is_valid_image_url("http://example.com/a.png")
        assert is_valid_image_url("HTTPS://EXAMPLE.COM/anything")
        assert is_valid_image_url("data:image/gif;base64,R0lGOD")

    def test_rejects_everything_else(self):
        assert not is_valid_image_url("")
        assert not is_valid_image_url("ftp://example.com/a.png")
        assert not is_valid_image_url("data:text/plain,hello")
        assert not is_valid_image_url("./a.png")


class TestDeduplicateURLs:
    """Test order-preserving deduplication."""

    def test_trims_and_drops_empty(self):
        urls = [" https://a.example/1.png ", "", "   ", "https://a.example/1.png", "https://a.example/2.png"]

        assert deduplicate_urls(urls) == ["https://a.example/1.png", "https://a.example/2.png"]
