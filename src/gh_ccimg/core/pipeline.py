# ABOUTME: Orchestrates issue retrieval, URL extraction, downloading, storage and Claude hand-off
# ABOUTME: Translates component failures into AppErrors carrying user-facing suggestions

import asyncio
import contextlib
from collections.abc import Awaitable, Callable

from gh_ccimg.core.models import DownloadFailure, PipelineOptions, PipelineResult
from gh_ccimg.download import Fetcher, FetchResult, ProgressReporter
from gh_ccimg.extraction import deduplicate_urls, extract_image_urls
from gh_ccimg.services.claude import (
    ClaudeExecutionError,
    ClaudeInputError,
    ensure_claude_available,
    execute_claude,
    sanitize_prompt,
    validate_claude_input,
)
from gh_ccimg.services.github import (
    GitHubClient,
    GitHubError,
    GitHubTarget,
    TargetParseError,
    ensure_gh_available,
    parse_target,
)
from gh_ccimg.storage import DiskStorage, ImageStorage, MemoryStorage, StorageError
from gh_ccimg.utils.errors import (
    AuthError,
    ClaudeError,
    FileSystemError,
    NetworkError,
    OperationCancelledError,
    SecurityError,
    ValidationError,
)
from gh_ccimg.utils.pathguard import PathTraversalError, validate_output_path
from gh_ccimg.utils.process import CommandRunner, run_command

FetcherFactory = Callable[[PipelineOptions], Fetcher]

SENSITIVE_DATA_NOTICES = (
    "API keys, tokens, or passwords",
    "Internal system details or configurations",
    "Personal or confidential information",
    "Proprietary code or business logic",
)


def default_fetcher_factory(options: PipelineOptions) -> Fetcher:
    return Fetcher(
        max_size=options.max_size_bytes,
        timeout=options.timeout_seconds,
        concurrency=options.concurrency,
        max_retries=options.max_retries,
        base_delay=options.base_delay_seconds,
    )


class ImagePipeline:
    """Runs one target end to end.

    Stages:
    1. Parse the target and check that gh (and claude, when sending) are usable
    2. Fetch the issue body and comments → extract image URLs, deduplicated across documents
    3. Download concurrently → keep successes, record failures
    4. Store in memory (base64) or on disk (img-NN files)
    5. Optionally hand the stored images to claude

    ``on_stored`` is called with the result after storage and before the
    Claude hand-off, so callers can print what was stored first.
    """

    def __init__(
        self,
        logger,
        github: GitHubClient | None = None,
        fetcher_factory: FetcherFactory | None = None,
        runner: CommandRunner = run_command,
        reporter: ProgressReporter | None = None,
        on_stored: Callable[[PipelineResult], None] | None = None,
    ):
        self.logger = logger
        self.github = github
        self.fetcher_factory = fetcher_factory or default_fetcher_factory
        self.runner = runner
        self.reporter = reporter
        self.on_stored = on_stored

    async def run(
        self, target: str, options: PipelineOptions, cancel_event: asyncio.Event | None = None
    ) -> PipelineResult:
        self.logger.info("Processing target", target=target)

        parsed = self._parse(target)
        await self._check_prerequisites(options)

        github = self.github or GitHubClient(options.timeout_seconds, self.runner, self.logger)
        self._check_cancelled(cancel_event)
        urls = await self._until_cancelled(self._collect_urls(github, parsed), cancel_event)

        result = PipelineResult(target=parsed, mode=options.mode, urls=urls)
        if not urls:
            self.logger.warning("No images found", target=str(parsed))
            return result

        self.logger.info("Found image URLs", count=len(urls))
        successes = await self._download(urls, options, result, cancel_event)

        if options.out_dir:
            result.stored = self._store_on_disk(successes, options.out_dir, options.force)
            self.logger.info("Saved images", count=len(result.stored), out_dir=options.out_dir)
        else:
            result.stored = self._store(MemoryStorage(), successes)
            self.logger.info("Encoded images to base64", count=len(result.stored))

        if self.on_stored is not None:
            self.on_stored(result)

        if options.send_prompt:
            self._check_cancelled(cancel_event)
            await self._send_to_claude(parsed, result, options)
            result.sent_to_claude = True

        self.logger.info("Operation completed successfully", target=str(parsed))
        return result

    def _parse(self, target: str) -> GitHubTarget:
        try:
            parsed = parse_target(target)
        except TargetParseError as e:
            self.logger.debug("Target parse failed", error=str(e))
            raise ValidationError(
                f"Invalid target format: {target}",
                "Use format: OWNER/REPO#NUM or https://github.com/OWNER/REPO/issues/NUM",
            ) from e
        self.logger.debug("Parsed target", owner=parsed.owner, repo=parsed.repo, number=parsed.number)
        return parsed

    def _check_cancelled(self, cancel_event: asyncio.Event | None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            self.logger.warning("Operation cancelled")
            raise OperationCancelledError("Operation cancelled")

    async def _until_cancelled(self, work: Awaitable[list[str]], cancel_event: asyncio.Event | None) -> list[str]:
        """Await ``work`` unless ``cancel_event`` fires first, in which case it is abandoned."""
        if cancel_event is None:
            return await work

        work_task = asyncio.ensure_future(work)
        cancel_task = asyncio.create_task(cancel_event.wait())
        try:
            await asyncio.wait({work_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            work_task.cancel()
            raise
        finally:
            cancel_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await cancel_task

        if work_task.done():
            return work_task.result()

        work_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await work_task
        self.logger.warning("Operation cancelled while fetching issue data")
        raise OperationCancelledError("Operation cancelled while fetching issue data")

    async def _check_prerequisites(self, options: PipelineOptions) -> None:
        try:
            await ensure_gh_available(self.runner)
        except GitHubError as e:
            raise AuthError(f"GitHub CLI not available: {e}") from e

        if options.send_prompt:
            try:
                await ensure_claude_available(self.runner)
            except ClaudeExecutionError as e:
                raise ValidationError("Claude CLI not available", "Install Claude CLI or remove --send flag") from e

    async def _collect_urls(self, github: GitHubClient, target: GitHubTarget) -> list[str]:
        try:
            issue = await github.fetch_issue(target)
        except GitHubError as e:
            raise NetworkError("Failed to fetch issue/PR data", original=e) from e

        try:
            comments = await github.fetch_comments(target)
        except GitHubError as e:
            raise NetworkError("Failed to fetch comments", original=e) from e

        self.logger.info("Fetched issue and comments", comments=len(comments))

        urls = extract_image_urls(issue.body)
        self.logger.debug("Extracted URLs from issue body", count=len(urls))
        for index, comment in enumerate(comments, start=1):
            found = extract_image_urls(comment.body)
            self.logger.debug("Extracted URLs from comment", comment=index, count=len(found))
            urls.extend(found)

        return deduplicate_urls(urls)

    async def _download(
        self,
        urls: list[str],
        options: PipelineOptions,
        result: PipelineResult,
        cancel_event: asyncio.Event | None,
    ) -> list[FetchResult]:
        fetcher = self.fetcher_factory(options)
        if self.reporter is not None:
            fetcher.set_reporter(self.reporter)

        self.logger.debug(
            "Starting downloads",
            urls=len(urls),
            max_size_mb=options.max_size_mb,
            timeout=options.timeout_seconds,
            concurrency=options.concurrency,
        )
        fetched = await fetcher.fetch_concurrent(urls, cancel_event)

        successes: list[FetchResult] = []
        for item in fetched:
            if item.ok:
                successes.append(item)
                self.logger.debug("Downloaded image", url=item.url, size=item.size, content_type=item.content_type)
            else:
                result.failures.append(DownloadFailure(url=item.url, error=str(item.error)))
                self.logger.info("Download failed", url=item.url, error=str(item.error))
        result.succeeded = len(successes)

        if not successes:
            self._check_cancelled(cancel_event)
            suggestion = (
                "Check that the URLs are accessible and contain valid images. "
                "Use --debug for detailed error information. "
                "Common issues: network connectivity, rate limiting, invalid URLs, "
                f"or files too large (current limit: {options.max_size_mb}MB)"
            )
            raise ValidationError("No images could be downloaded", suggestion)

        self.logger.info("Downloaded images", succeeded=len(successes), total=len(urls))
        return successes

    def _store_on_disk(self, successes: list[FetchResult], out_dir: str, force: bool) -> list[str]:
        try:
            validate_output_path(".", out_dir)
        except PathTraversalError as e:
            raise SecurityError(f"Invalid output directory: {e}") from e

        try:
            storage = DiskStorage(out_dir, force)
        except StorageError as e:
            raise FileSystemError("Failed to initialize disk storage", original=e) from e

        return self._store(storage, successes)

    def _store(self, storage: ImageStorage, successes: list[FetchResult]) -> list[str]:
        stored: list[str] = []
        for item in successes:
            try:
                handle = storage.store(item.data or b"", item.content_type, item.url)
            except StorageError as e:
                self.logger.warning("Failed to store image", url=item.url, error=str(e))
                continue
            stored.append(handle)
        return stored

    def _warn_sensitive_data(self, target: GitHubTarget, image_count: int) -> None:
        self.logger.warning(
            "SECURITY WARNING: image data is about to be sent to Claude",
            repository=str(target),
            image_count=image_count,
        )
        for notice in SENSITIVE_DATA_NOTICES:
            self.logger.warning("Images may contain sensitive information", kind=notice)
        self.logger.warning("Data will be sent to Anthropic's Claude service; review all images before proceeding")

    async def _send_to_claude(self, target: GitHubTarget, result: PipelineResult, options: PipelineOptions) -> None:
        prompt = options.send_prompt or ""
        self._warn_sensitive_data(target, result.succeeded)

        try:
            validate_claude_input(prompt, result.stored)
        except ClaudeInputError as e:
            raise ValidationError(
                f"Invalid Claude input: {e}", "Check your prompt and ensure images were downloaded"
            ) from e

        sanitized = sanitize_prompt(prompt)
        self.logger.debug("Executing Claude", prompt_length=len(sanitized), images=len(result.stored))
        try:
            await execute_claude(sanitized, result.stored, options.continue_session, runner=self.runner)
        except (ClaudeExecutionError, ClaudeInputError) as e:
            raise ClaudeError("Claude execution failed", original=e) from e

        self.logger.info("Claude analysis complete")
