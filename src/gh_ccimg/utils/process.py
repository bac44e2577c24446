# ABOUTME: Thin async wrapper around subprocess execution without a shell
# ABOUTME: Injected into the gh/claude collaborators so tests can fake command output

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """Outcome of running an external command."""

    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


CommandRunner = Callable[..., Awaitable[CommandResult]]


async def run_command(*argv: str, capture: bool = True, timeout: float | None = None) -> CommandResult:
    """Run ``argv`` and wait for it to exit.

    With ``capture`` false the child inherits this process's stdio.

    Raises:
        FileNotFoundError: If the executable does not exist
        TimeoutError: If the command does not finish within ``timeout`` seconds
    """
    pipe = asyncio.subprocess.PIPE if capture else None
    process = await asyncio.create_subprocess_exec(*argv, stdout=pipe, stderr=pipe)
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except TimeoutError:
        process.kill()
        await process.wait()
        raise
    return CommandResult(returncode=process.returncode or 0, stdout=stdout or b"", stderr=stderr or b"")
