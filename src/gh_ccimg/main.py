# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides the extract command for GitHub issue images and a logging-status command

import asyncio
import contextlib
import signal

import asyncclick as click
from rich.console import Console
from rich.markup import escape

from gh_ccimg.config import get_config
from gh_ccimg.core import ImagePipeline, PipelineOptions, PipelineResult
from gh_ccimg.download import ConsoleReporter
from gh_ccimg.utils.errors import AppError
from gh_ccimg.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
    with_pipeline_context,
)
from gh_ccimg.utils.rich_tables import (
    create_download_summary_table,
    create_logging_status_table,
    print_rich_table,
)

# stdout is reserved for base64 image output
console = Console(stderr=True)


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    if json_output:
        mode = LoggingMode.PRODUCTION
    else:
        mode = config.log_mode or LoggingMode.INTERACTIVE

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


def _effective_log_level(quiet: bool, verbose: bool, debug: bool) -> str | None:
    if quiet:
        return "ERROR"
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return None


def _print_stored(result: PipelineResult, verbose: bool) -> None:
    if result.mode == "memory":
        for index, encoded in enumerate(result.stored, start=1):
            click.echo(f"Image {index} (base64): {encoded}")
    elif verbose:
        for path in result.stored:
            console.print(f"💾 Saved {escape(path)}")


@click.command()
@click.argument("target")
@click.option("--out", "-o", "out_dir", help="Output directory for images (default: memory mode)")
@click.option("--send", "send_prompt", help="Send images to Claude with this prompt")
@click.option("--continue", "continue_session", is_flag=True, help="Continue previous Claude session")
@click.option("--max-size", "max_size_mb", type=int, help="Maximum image size in MB")
@click.option("--timeout", "timeout_seconds", type=float, help="Download timeout in seconds")
@click.option("--concurrency", type=int, help="Number of concurrent downloads")
@click.option("--force", is_flag=True, help="Overwrite existing files")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Quiet mode (errors only)")
@click.option("--debug", is_flag=True, help="Debug mode (detailed troubleshooting info)")
@click.pass_context
async def extract(
    ctx,
    target: str,
    out_dir: str | None,
    send_prompt: str | None,
    continue_session: bool,
    max_size_mb: int | None,
    timeout_seconds: float | None,
    concurrency: int | None,
    force: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
):
    """
    🖼️ Extract images from a GitHub issue or pull request.

    TARGET is OWNER/REPO#NUM or a github.com issue/pull URL. Without --out the
    images are printed to stdout as base64; with --send they are handed to Claude.
    """
    json_output = ctx.obj["json_output"]
    level = _effective_log_level(quiet, verbose, debug)
    if level:
        _initialize_logging(json_output, level, ctx.obj["log_file"])

    config = get_config()
    options = PipelineOptions(
        out_dir=out_dir,
        send_prompt=send_prompt,
        continue_session=continue_session,
        max_size_mb=max_size_mb or config.max_size_mb,
        timeout_seconds=timeout_seconds or config.timeout_seconds,
        concurrency=concurrency or config.concurrency,
        force=force,
        max_retries=config.max_retries,
        base_delay_seconds=config.base_delay_seconds,
    )

    show_ui = not (json_output or quiet)
    reporter = ConsoleReporter(console, verbose=verbose or debug) if show_ui else None

    with with_pipeline_context("extract", target=target, mode=options.mode) as logger:
        pipeline = ImagePipeline(
            logger,
            reporter=reporter,
            on_stored=lambda result: _print_stored(result, verbose or debug),
        )

        cancel_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(signal.SIGINT, cancel_event.set)

        failure: AppError | None = None
        try:
            result = await pipeline.run(target, options, cancel_event)
        except AppError as e:
            logger.error("Extraction failed", error=str(e), exit_code=e.exit_code)
            failure = e
        finally:
            with contextlib.suppress(NotImplementedError):
                loop.remove_signal_handler(signal.SIGINT)

    if failure is not None:
        console.print(f"[red]❌ {escape(failure.render())}[/red]")
        ctx.exit(failure.exit_code)

    if show_ui and result.urls:
        print_rich_table(console, create_download_summary_table(result))


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(Console(), logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🖼️ gh-ccimg - Extract images from GitHub issues and pull requests

    Finds every image referenced in an issue or PR and its comments, downloads
    them concurrently, and keeps them in memory, on disk, or sends them to Claude.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json
    ctx.obj["log_file"] = log_file

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Add commands to the main group
app.add_command(extract)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
