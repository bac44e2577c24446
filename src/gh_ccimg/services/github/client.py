# ABOUTME: GitHub issue and comment retrieval through the gh CLI
# ABOUTME: Classifies gh failures and retries transient ones with exponential backoff

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator
from tenacity import RetryCallState

from gh_ccimg.services.github.parser import GitHubTarget
from gh_ccimg.utils.process import CommandRunner, run_command
from gh_ccimg.utils.retry import backoff_retrying

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 30.0

RETRYABLE_GITHUB_SIGNATURES = (
    "rate limit",
    "server error",
    "bad gateway",
    "service unavailable",
    "gateway timeout",
    "timeout",
    "temporary failure",
)

GH_INSTALL_URL = "https://cli.github.com/"


class GitHubError(Exception):
    """Base class for failures talking to GitHub through gh."""


class GitHubNotFoundError(GitHubError):
    """The repository or issue/PR does not exist or is not visible."""


class GitHubAuthError(GitHubError):
    """gh is not authenticated or its credentials were rejected."""


class GitHubTransientError(GitHubError):
    """A failure worth retrying: rate limits, server errors, timeouts."""


class GitHubCLIUnavailableError(GitHubError):
    """The gh executable is missing."""


class Issue(BaseModel):
    number: int
    title: str = ""
    body: str = ""
    state: str = ""

    @field_validator("body", "title", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Comment(BaseModel):
    id: int
    body: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("body", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


_comments_adapter = TypeAdapter(list[Comment])


def is_retryable_github_error(stderr: str) -> bool:
    error_str = stderr.lower()
    return any(signature in error_str for signature in RETRYABLE_GITHUB_SIGNATURES)


def _decode_json_documents(payload: str) -> list[Any]:
    """Decode one or more concatenated JSON documents (``gh api --paginate`` output)."""
    decoder = json.JSONDecoder()
    documents: list[Any] = []
    index = 0
    payload = payload.strip()
    while index < len(payload):
        document, index = decoder.raw_decode(payload, index)
        documents.append(document)
        while index < len(payload) and payload[index].isspace():
            index += 1
    return documents


class GitHubClient:
    """Reads issues and their comments via ``gh api``."""

    def __init__(
        self,
        timeout: float,
        runner: CommandRunner = run_command,
        logger=None,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
    ):
        self.timeout = timeout
        self.runner = runner
        self.logger = logger
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay

    async def fetch_issue(self, target: GitHubTarget) -> Issue:
        output = await self._api(target, target.api_path)
        try:
            return Issue.model_validate_json(output)
        except ValidationError as e:
            raise GitHubError(f"failed to parse GitHub API response: {e}") from e

    async def fetch_comments(self, target: GitHubTarget) -> list[Comment]:
        output = await self._api(target, f"{target.api_path}/comments", paginate=True)
        try:
            pages = _decode_json_documents(output.decode("utf-8"))
            items = [item for page in pages for item in (page if isinstance(page, list) else [page])]
            return _comments_adapter.validate_python(items)
        except (ValueError, ValidationError) as e:
            raise GitHubError(f"failed to parse GitHub API response: {e}") from e

    def _log_retry(self, retry_state: RetryCallState) -> None:
        if self.logger is None:
            return
        self.logger.warning(
            "Retrying GitHub API call",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _api(self, target: GitHubTarget, path: str, paginate: bool = False) -> bytes:
        argv = ["gh", "api", "--paginate", path] if paginate else ["gh", "api", path]
        retrying = backoff_retrying(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            max_delay=self.max_delay,
            retry_on=GitHubTransientError,
            before_sleep=self._log_retry,
        )
        async for attempt in retrying:
            with attempt:
                return await self._run_once(target, argv, attempt.retry_state.attempt_number)
        raise GitHubError("unexpected error in retry loop")

    async def _run_once(self, target: GitHubTarget, argv: list[str], attempt_number: int) -> bytes:
        try:
            result = await self.runner(*argv, timeout=self.timeout)
        except FileNotFoundError as e:
            raise GitHubCLIUnavailableError(f"gh CLI not found. Please install GitHub CLI: {GH_INSTALL_URL}") from e
        except TimeoutError as e:
            raise GitHubTransientError(f"gh command timeout after {attempt_number} attempts") from e

        if result.ok:
            return result.stdout

        stderr = result.stderr_text.strip()
        if "Not Found" in stderr or "404" in stderr:
            raise GitHubNotFoundError(f"issue/PR {target.number} not found in {target.owner}/{target.repo}")
        if "Bad credentials" in stderr or "401" in stderr:
            raise GitHubAuthError("authentication failed. Please run 'gh auth login'")

        message = f"GitHub API error after {attempt_number} attempts: {stderr}"
        if is_retryable_github_error(stderr):
            raise GitHubTransientError(message)
        raise GitHubError(message)


async def ensure_gh_available(runner: CommandRunner = run_command) -> None:
    """Check that gh is installed and authenticated.

    Raises:
        GitHubCLIUnavailableError: If ``gh --version`` cannot run
        GitHubAuthError: If ``gh auth status`` fails
    """
    try:
        version = await runner("gh", "--version")
    except FileNotFoundError as e:
        raise GitHubCLIUnavailableError(f"gh CLI not found. Please install GitHub CLI: {GH_INSTALL_URL}") from e
    if not version.ok:
        raise GitHubCLIUnavailableError(f"gh CLI not found. Please install GitHub CLI: {GH_INSTALL_URL}")

    status = await runner("gh", "auth", "status")
    if not status.ok:
        raise GitHubAuthError("gh CLI not authenticated. Please run 'gh auth login'")
