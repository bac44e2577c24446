"""GitHub access through the gh CLI: target parsing plus issue and comment retrieval."""

from .client import (
    Comment,
    GitHubAuthError,
    GitHubCLIUnavailableError,
    GitHubClient,
    GitHubError,
    GitHubNotFoundError,
    GitHubTransientError,
    Issue,
    ensure_gh_available,
)
from .parser import GitHubTarget, TargetParseError, parse_target

__all__ = [
    "Comment",
    "GitHubAuthError",
    "GitHubCLIUnavailableError",
    "GitHubClient",
    "GitHubError",
    "GitHubNotFoundError",
    "GitHubTarget",
    "GitHubTransientError",
    "Issue",
    "TargetParseError",
    "ensure_gh_available",
    "parse_target",
]
