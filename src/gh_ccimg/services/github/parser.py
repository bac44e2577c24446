# ABOUTME: Parses issue/PR targets given as OWNER/REPO#NUM or github.com URLs
# ABOUTME: Produces a validated GitHubTarget for the gh API calls

import re

from pydantic import BaseModel, ConfigDict

_OWNER = r"([a-zA-Z0-9][a-zA-Z0-9\-]{0,38})"
_REPO = r"([a-zA-Z0-9._\-]+)"

SHORT_FORM_PATTERN = re.compile(rf"^{_OWNER}/{_REPO}#(\d+)$")
ISSUE_URL_PATTERN = re.compile(rf"^https://github\.com/{_OWNER}/{_REPO}/issues/(\d+)(?:[/?#].*)?$")
PULL_URL_PATTERN = re.compile(rf"^https://github\.com/{_OWNER}/{_REPO}/pull/(\d+)(?:[/?#].*)?$")

MAX_OWNER_LENGTH = 39
MAX_REPO_LENGTH = 100

TARGET_FORMATS = (
    "OWNER/REPO#NUM",
    "https://github.com/OWNER/REPO/issues/NUM",
    "https://github.com/OWNER/REPO/pull/NUM",
)


class TargetParseError(ValueError):
    """Raised when a target string is not a recognised issue/PR reference."""


class GitHubTarget(BaseModel):
    """An issue or pull request in a repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    number: int

    @property
    def api_path(self) -> str:
        return f"repos/{self.owner}/{self.repo}/issues/{self.number}"

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


def _validate_components(owner: str, repo: str, number: str) -> int:
    if not owner:
        raise TargetParseError("owner cannot be empty")
    if not repo:
        raise TargetParseError("repository name cannot be empty")

    value = int(number)
    if value <= 0:
        raise TargetParseError(f"issue/PR number must be positive, got: {value}")
    if len(owner) > MAX_OWNER_LENGTH:
        raise TargetParseError(f"owner name too long (max {MAX_OWNER_LENGTH} characters): {owner}")
    if len(repo) > MAX_REPO_LENGTH:
        raise TargetParseError(f"repository name too long (max {MAX_REPO_LENGTH} characters): {repo}")
    return value


def parse_target(text: str) -> GitHubTarget:
    """Parse ``text`` into a GitHubTarget.

    Raises:
        TargetParseError: If the text matches none of the accepted formats
    """
    if not text or not text.strip():
        raise TargetParseError("target cannot be empty")

    candidate = text.strip()
    for pattern in (SHORT_FORM_PATTERN, ISSUE_URL_PATTERN, PULL_URL_PATTERN):
        match = pattern.match(candidate)
        if match:
            owner, repo, number = match.groups()
            return GitHubTarget(owner=owner, repo=repo, number=_validate_components(owner, repo, number))

    expected = "\n".join(f"  - {fmt}" for fmt in TARGET_FORMATS)
    raise TargetParseError(f"invalid target format. Expected:\n{expected}\nGot: {candidate}")
