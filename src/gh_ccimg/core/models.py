# ABOUTME: Pydantic models describing a pipeline run's inputs and outcome
# ABOUTME: Shared by the orchestrator, the CLI and the summary tables

from typing import Literal

from pydantic import BaseModel, Field

from gh_ccimg.services.github import GitHubTarget

MEGABYTE = 1024 * 1024


class PipelineOptions(BaseModel):
    """Knobs for one extraction run. ``out_dir`` switches from memory to disk mode."""

    out_dir: str | None = None
    send_prompt: str | None = None
    continue_session: bool = False
    max_size_mb: int = Field(default=20, gt=0)
    timeout_seconds: float = Field(default=15.0, gt=0)
    concurrency: int = Field(default=5, ge=1)
    force: bool = False
    max_retries: int = Field(default=3, ge=0)
    base_delay_seconds: float = Field(default=0.5, ge=0)

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * MEGABYTE

    @property
    def mode(self) -> Literal["memory", "disk"]:
        return "disk" if self.out_dir else "memory"


class DownloadFailure(BaseModel):
    url: str
    error: str


class PipelineResult(BaseModel):
    """What a run found, downloaded and stored."""

    target: GitHubTarget
    mode: Literal["memory", "disk"]
    urls: list[str] = Field(default_factory=list)
    succeeded: int = 0
    failures: list[DownloadFailure] = Field(default_factory=list)
    stored: list[str] = Field(default_factory=list)
    sent_to_claude: bool = False

    @property
    def attempted(self) -> int:
        return len(self.urls)
