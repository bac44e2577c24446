# ABOUTME: Tests for the application error taxonomy
# ABOUTME: Validates exit codes, categories and suggestion selection from wrapped errors

from gh_ccimg.utils.errors import (
    AppError,
    AppTimeoutError,
    AuthError,
    ClaudeError,
    ErrorCategory,
    FileSystemError,
    NetworkError,
    OperationCancelledError,
    SecurityError,
    ValidationError,
    get_exit_code,
)


class TestExitCodes:
    """Each error family maps to a distinct exit code."""

    def test_exit_codes(self):
        assert ValidationError("x").exit_code == 1
        assert NetworkError("x").exit_code == 2
        assert FileSystemError("x").exit_code == 3
        assert AuthError("x").exit_code == 4
        assert AppTimeoutError("x").exit_code == 5
        assert SecurityError("x").exit_code == 6
        assert ClaudeError("x").exit_code == 7
        assert OperationCancelledError("x").exit_code == 130

    def test_get_exit_code(self):
        assert get_exit_code(FileSystemError("disk")) == 3
        assert get_exit_code(RuntimeError("boom")) == 1

    def test_categories(self):
        assert NetworkError("x").category is ErrorCategory.NETWORK
        assert AppError("x").category is ErrorCategory.GENERIC


class TestMessages:
    """Test message and suggestion rendering."""

    def test_wrapped_error_in_message(self):
        error = NetworkError("Failed to fetch comments", original=RuntimeError("connection reset"))

        assert str(error) == "Failed to fetch comments: connection reset"

    def test_render_includes_suggestion(self):
        error = ValidationError("No images could be downloaded", "Check the URLs")

        assert error.render() == "No images could be downloaded\nSuggestion: Check the URLs"

    def test_render_without_suggestion(self):
        assert AppError("plain").render() == "plain"

    def test_default_suggestion(self):
        assert "internet connection" in NetworkError("offline").suggestion


class TestSpecificSuggestions:
    """Suggestions are chosen from the wrapped error's text."""

    def test_network_rate_limit(self):
        error = NetworkError("Failed", original=RuntimeError("API rate limit exceeded"))
        assert "rate limit" in error.suggestion

    def test_network_not_found(self):
        error = NetworkError("Failed", original=RuntimeError("issue/PR 1 not found in a/b"))
        assert "Resource not found" in error.suggestion

    def test_network_authentication(self):
        error = NetworkError("Failed", original=RuntimeError("authentication failed. Please run 'gh auth login'"))
        assert "gh auth login" in error.suggestion

    def test_filesystem_permission(self):
        error = FileSystemError("Failed", original=PermissionError("[Errno 13] Permission denied: '/root'"))
        assert "write access" in error.suggestion

    def test_filesystem_exists(self):
        error = FileSystemError("Failed", original=RuntimeError("file img-01.png already exists"))
        assert "--force" in error.suggestion

    def test_claude_not_found(self):
        error = ClaudeError("Failed", original=RuntimeError("claude CLI not found"))
        assert "--send" in error.suggestion

    def test_unmatched_falls_back_to_default(self):
        error = FileSystemError("Failed", original=RuntimeError("weird"))
        assert error.suggestion == FileSystemError.default_suggestion

    def test_explicit_suggestion_wins(self):
        error = NetworkError("Failed", "Try later", original=RuntimeError("rate limit"))
        assert error.suggestion == "Try later"
