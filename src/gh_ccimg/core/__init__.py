# ABOUTME: Orchestration layer tying extraction, download and storage together
# ABOUTME: Pipeline Stage 4: issue target → stored images → optional Claude hand-off

"""
Core Layer: Workflow orchestration

This layer handles:
- Target parsing and prerequisite checks
- Stage sequencing from GitHub markdown to stored images
- Mapping component failures to user-facing AppErrors

Data Flow: services/github → extraction/ → download/ → storage/ → services/claude
"""

from .models import DownloadFailure, PipelineOptions, PipelineResult
from .pipeline import ImagePipeline, default_fetcher_factory

__all__ = [
    "DownloadFailure",
    "ImagePipeline",
    "PipelineOptions",
    "PipelineResult",
    "default_fetcher_factory",
]
