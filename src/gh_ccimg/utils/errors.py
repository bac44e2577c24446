# ABOUTME: Application-level error taxonomy with user-facing suggestions and exit codes
# ABOUTME: Wraps lower-level failures so the CLI can render a message plus a remedy

from enum import Enum


class ErrorCategory(Enum):
    """Broad classes of failure surfaced to the user."""

    GENERIC = "generic"
    VALIDATION = "validation"
    NETWORK = "network"
    FILESYSTEM = "filesystem"
    AUTH = "auth"
    TIMEOUT = "timeout"
    SECURITY = "security"
    CLAUDE = "claude"
    CANCELLED = "cancelled"


class AppError(Exception):
    """Structured application error carrying a suggestion and an exit code."""

    category = ErrorCategory.GENERIC
    exit_code = 1
    default_suggestion = ""

    def __init__(self, message: str, suggestion: str | None = None, original: BaseException | None = None):
        self.message = message
        self.original = original
        self.suggestion = suggestion if suggestion is not None else self._suggest(original)
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.original is not None:
            return f"{self.message}: {self.original}"
        return self.message

    def render(self) -> str:
        """Return the error message followed by its suggestion, if any."""
        text = str(self)
        if self.suggestion:
            text += f"\nSuggestion: {self.suggestion}"
        return text

    @classmethod
    def _suggest(cls, original: BaseException | None) -> str:
        if original is None:
            return cls.default_suggestion
        error_str = str(original).lower()
        for needles, suggestion in cls._specific_suggestions():
            if any(needle in error_str for needle in needles):
                return suggestion
        return cls.default_suggestion

    @classmethod
    def _specific_suggestions(cls) -> list[tuple[tuple[str, ...], str]]:
        return []


class ValidationError(AppError):
    """Raised for bad input or content that will never succeed on retry."""

    category = ErrorCategory.VALIDATION
    exit_code = 1


class NetworkError(AppError):
    """Raised when talking to GitHub or an image host fails."""

    category = ErrorCategory.NETWORK
    exit_code = 2
    default_suggestion = "Check your internet connection and try again"

    @classmethod
    def _specific_suggestions(cls) -> list[tuple[tuple[str, ...], str]]:
        return [
            (
                ("rate limit",),
                "GitHub API rate limit exceeded. Wait a few minutes before retrying, "
                "or use a GitHub token with higher limits",
            ),
            (
                ("timeout", "timed out"),
                "Request timed out. Try increasing the timeout with --timeout or check your network connection",
            ),
            (
                ("authentication", "401"),
                "Authentication failed. Please run 'gh auth login' to authenticate with GitHub",
            ),
            (
                ("not found", "404"),
                "Resource not found. Check that the repository and issue/PR number are correct and accessible",
            ),
            (
                ("forbidden", "403"),
                "Access forbidden. You may not have permission to access this repository or resource",
            ),
        ]


class FileSystemError(AppError):
    """Raised when the output directory or image files cannot be written."""

    category = ErrorCategory.FILESYSTEM
    exit_code = 3
    default_suggestion = "Check file permissions and available disk space"

    @classmethod
    def _specific_suggestions(cls) -> list[tuple[tuple[str, ...], str]]:
        return [
            (
                ("permission denied",),
                "Permission denied. Check that you have write access to the target directory",
            ),
            (
                ("no space left",),
                "Insufficient disk space. Free up some space or choose a different output directory",
            ),
            (
                ("file exists", "already exists"),
                "File already exists. Use --force to overwrite existing files",
            ),
            (
                ("no such file or directory",),
                "Directory does not exist. Create the directory first or use a valid output path",
            ),
            (
                ("is a directory",),
                "Target is a directory. Specify a file path or use a different name",
            ),
        ]


class AuthError(AppError):
    """Raised when the GitHub CLI is missing or unauthenticated."""

    category = ErrorCategory.AUTH
    exit_code = 4
    default_suggestion = "Please run 'gh auth login' to authenticate with GitHub"


class AppTimeoutError(AppError):
    """Raised when an operation runs past its timeout."""

    category = ErrorCategory.TIMEOUT
    exit_code = 5
    default_suggestion = (
        "Try increasing the timeout with --timeout (default: 15s) or check your network connection. "
        "For large images, consider using --max-size to limit file sizes"
    )


class SecurityError(AppError):
    """Raised when an operation is blocked for safety reasons."""

    category = ErrorCategory.SECURITY
    exit_code = 6
    default_suggestion = (
        "This operation was blocked for security reasons. "
        "Review the security warnings and ensure you trust the data being processed"
    )


class ClaudeError(AppError):
    """Raised when handing images to the claude CLI fails."""

    category = ErrorCategory.CLAUDE
    exit_code = 7
    default_suggestion = "Check that Claude CLI is installed and accessible. Run 'claude --version' to verify"

    @classmethod
    def _specific_suggestions(cls) -> list[tuple[tuple[str, ...], str]]:
        return [
            (
                ("not found", "command not found"),
                "Claude CLI not found. Install it or remove the --send flag",
            ),
            (
                ("permission denied",),
                "Permission denied accessing Claude CLI. Check that the claude command is executable",
            ),
            (
                ("authentication", "unauthorized"),
                "Claude authentication failed. Check your Claude CLI credentials",
            ),
            (
                ("timeout",),
                "Claude request timed out. The images may be too large or the service may be unavailable",
            ),
            (
                ("rate limit",),
                "Claude rate limit exceeded. Wait a few minutes before retrying",
            ),
        ]


class OperationCancelledError(AppError):
    """Raised when the user interrupts a run before it finishes."""

    category = ErrorCategory.CANCELLED
    exit_code = 130
    default_suggestion = "The operation was interrupted. Run the command again to start over"


def get_exit_code(error: BaseException) -> int:
    """Map an exception to the process exit code."""
    if isinstance(error, AppError):
        return error.exit_code
    return 1
