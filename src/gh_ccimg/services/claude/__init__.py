"""Claude CLI hand-off for downloaded images."""

from .executor import (
    ClaudeExecutionError,
    ClaudeInputError,
    build_claude_args,
    ensure_claude_available,
    execute_claude,
    sanitize_prompt,
    validate_claude_input,
)

__all__ = [
    "ClaudeExecutionError",
    "ClaudeInputError",
    "build_claude_args",
    "ensure_claude_available",
    "execute_claude",
    "sanitize_prompt",
    "validate_claude_input",
]
