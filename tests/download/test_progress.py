# ABOUTME: Tests for download progress reporters
# ABOUTME: Checks verbose per-URL lines and the completion message

import io

from rich.console import Console

from gh_ccimg.download import ConsoleReporter, NoOpReporter


def make_console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, force_terminal=False, width=200), buffer


class TestConsoleReporter:
    """Test the rich console reporter."""

    def test_verbose_lines(self):
        console, buffer = make_console()
        reporter = ConsoleReporter(console, verbose=True)

        reporter.start(2)
        reporter.update(1, "https://example.com/a.png", True, None)
        reporter.update(2, "https://example.com/[b].png", False, ValueError("HTTP 404: Not Found"))
        reporter.finish()

        output = buffer.getvalue()
        assert "Starting download of 2 images" in output
        assert "[1/2] Downloaded: https://example.com/a.png" in output
        assert "[2/2] Failed: https://example.com/[b].png - HTTP 404: Not Found" in output
        assert "Download completed in" in output

    def test_quiet_single_download(self):
        """A single non-verbose download prints no per-URL lines or timing."""
        console, buffer = make_console()
        reporter = ConsoleReporter(console)

        reporter.start(1)
        reporter.update(1, "https://example.com/a.png", True, None)
        reporter.finish()

        output = buffer.getvalue()
        assert "Downloaded:" not in output
        assert "Download completed" not in output


class TestNoOpReporter:
    def test_accepts_all_events(self):
        reporter = NoOpReporter()
        reporter.start(3)
        reporter.update(1, "https://example.com/a.png", False, RuntimeError("x"))
        reporter.finish()
