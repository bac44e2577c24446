# ABOUTME: Tests for the claude CLI hand-off helpers
# ABOUTME: Covers argv construction, prompt screening and exit-code propagation

import pytest

from gh_ccimg.services.claude import (
    ClaudeExecutionError,
    ClaudeInputError,
    build_claude_args,
    ensure_claude_available,
    execute_claude,
    sanitize_prompt,
    validate_claude_input,
)
from gh_ccimg.utils.process import CommandResult


class RecordingRunner:
    def __init__(self, result=None, error=None):
        self.result = result or CommandResult(0)
        self.error = error
        self.calls = []

    async def __call__(self, *argv, **kwargs):
        self.calls.append((argv, kwargs))
        if self.error is not None:
            raise self.error
        return self.result


class TestBuildClaudeArgs:
    def test_prompt_then_images(self):
        assert build_claude_args("describe", ["a.png", "", "b.png"]) == ["describe", "a.png", "b.png"]

    def test_continue_flag_first(self):
        assert build_claude_args("more", ["a.png"], continue_session=True) == ["--continue", "more", "a.png"]

    def test_empty_prompt_is_omitted(self):
        assert build_claude_args("", ["a.png"]) == ["a.png"]


class TestValidateClaudeInput:
    def test_valid(self):
        validate_claude_input("What is wrong in these screenshots?", ["aGVsbG8="])

    def test_empty_prompt(self):
        with pytest.raises(ClaudeInputError, match="prompt cannot be empty"):
            validate_claude_input("", ["img"])

    def test_no_usable_images(self):
        with pytest.raises(ClaudeInputError, match="at least one image"):
            validate_claude_input("look", [])
        with pytest.raises(ClaudeInputError, match="at least one image"):
            validate_claude_input("look", ["", ""])

    @pytest.mark.parametrize("prompt", ["please rm -rf /", "SUDO make it work", "run $(whoami)", "use `ls`"])
    def test_suspicious_prompts(self, prompt):
        with pytest.raises(ClaudeInputError, match="potentially dangerous"):
            validate_claude_input(prompt, ["img"])


class TestSanitizePrompt:
    def test_strips_nul_and_whitespace(self):
        assert sanitize_prompt("  hel\x00lo \n") == "hello"

    def test_empty(self):
        assert sanitize_prompt("") == ""


class TestExecuteClaude:
    @pytest.mark.asyncio
    async def test_runs_attached_to_terminal(self):
        runner = RecordingRunner()

        await execute_claude("describe", ["img-01.png"], continue_session=True, runner=runner)

        argv, kwargs = runner.calls[0]
        assert argv == ("claude", "--continue", "describe", "img-01.png")
        assert kwargs == {"capture": False}

    @pytest.mark.asyncio
    async def test_nonzero_exit(self):
        runner = RecordingRunner(CommandResult(3))

        with pytest.raises(ClaudeExecutionError, match="exit code 3") as exc_info:
            await execute_claude("describe", ["img"], runner=runner)

        assert exc_info.value.returncode == 3

    @pytest.mark.asyncio
    async def test_missing_binary(self):
        runner = RecordingRunner(error=FileNotFoundError("claude"))

        with pytest.raises(ClaudeExecutionError, match="failed to execute"):
            await execute_claude("describe", ["img"], runner=runner)

    @pytest.mark.asyncio
    async def test_empty_prompt(self):
        with pytest.raises(ClaudeInputError):
            await execute_claude("", ["img"], runner=RecordingRunner())


class TestEnsureClaudeAvailable:
    @pytest.mark.asyncio
    async def test_available(self):
        runner = RecordingRunner()

        await ensure_claude_available(runner)

        assert runner.calls[0][0] == ("claude", "--version")

    @pytest.mark.asyncio
    async def test_missing(self):
        with pytest.raises(ClaudeExecutionError, match="claude CLI not found"):
            await ensure_claude_available(RecordingRunner(error=FileNotFoundError("claude")))

    @pytest.mark.asyncio
    async def test_failing_version_check(self):
        with pytest.raises(ClaudeExecutionError):
            await ensure_claude_available(RecordingRunner(CommandResult(127)))
