# ABOUTME: Hands stored images and a prompt to the claude CLI
# ABOUTME: Builds argv without a shell, screens prompts and surfaces the child's exit code

from collections.abc import Sequence

from gh_ccimg.utils.process import CommandRunner, run_command

SUSPICIOUS_PROMPT_FRAGMENTS = (
    "rm -rf",
    "sudo ",
    "eval(",
    "exec(",
    "$(",
    "`",
)


class ClaudeInputError(ValueError):
    """Raised when the prompt or image list is unusable or unsafe."""


class ClaudeExecutionError(Exception):
    """Raised when the claude CLI is missing or exits unsuccessfully."""

    def __init__(self, message: str, returncode: int | None = None):
        self.returncode = returncode
        super().__init__(message)


def build_claude_args(prompt: str, images: Sequence[str], continue_session: bool = False) -> list[str]:
    """Arguments for ``claude``: optional ``--continue``, the prompt, then each non-empty image."""
    args: list[str] = []
    if continue_session:
        args.append("--continue")
    if prompt:
        args.append(prompt)
    args.extend(image for image in images if image)
    return args


def sanitize_prompt(prompt: str) -> str:
    return prompt.replace("\x00", "").strip()


def validate_claude_input(prompt: str, images: Sequence[str]) -> None:
    """Reject empty prompts, image lists with nothing usable, and shell-like prompt content.

    Raises:
        ClaudeInputError: Describing the first problem found
    """
    if not prompt:
        raise ClaudeInputError("prompt cannot be empty")
    if not any(images):
        raise ClaudeInputError("at least one image is required")

    lowered = prompt.lower()
    for fragment in SUSPICIOUS_PROMPT_FRAGMENTS:
        if fragment in lowered:
            raise ClaudeInputError(f"prompt contains potentially dangerous content: {fragment}")


async def ensure_claude_available(runner: CommandRunner = run_command) -> None:
    not_found = "claude CLI not found. Please install Claude CLI or check that it's in your PATH"
    try:
        result = await runner("claude", "--version")
    except FileNotFoundError as e:
        raise ClaudeExecutionError(not_found) from e
    if not result.ok:
        raise ClaudeExecutionError(not_found, result.returncode)


async def execute_claude(
    prompt: str,
    images: Sequence[str],
    continue_session: bool = False,
    runner: CommandRunner = run_command,
) -> None:
    """Run ``claude`` attached to this terminal and wait for it to exit.

    Raises:
        ClaudeInputError: If the prompt is empty
        ClaudeExecutionError: If claude cannot start or exits non-zero
    """
    if not prompt:
        raise ClaudeInputError("prompt cannot be empty")

    argv = ["claude", *build_claude_args(prompt, images, continue_session)]
    try:
        result = await runner(*argv, capture=False)
    except OSError as e:
        raise ClaudeExecutionError(f"failed to execute claude command: {e}") from e

    if not result.ok:
        raise ClaudeExecutionError(f"claude command failed with exit code {result.returncode}", result.returncode)
