# ABOUTME: Rich table helpers for run summaries and logging status
# ABOUTME: Keeps table styling consistent across CLI commands

from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gh_ccimg.core.models import PipelineResult


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column Field/Value table.

    Args:
        title: Table title
        data: Ordered key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, escape(str(value)))

    return table


def create_download_summary_table(result: PipelineResult) -> Table:
    """Summarise a pipeline run: counts, storage mode and any failures."""
    data = {
        "🎯 Target": str(result.target),
        "🔗 Image URLs": str(result.attempted),
        "✅ Downloaded": str(result.succeeded),
        "❌ Failed": str(len(result.failures)),
        "💾 Stored": f"{len(result.stored)} ({result.mode})",
    }
    if result.sent_to_claude:
        data["🤖 Claude"] = "sent"

    table = create_key_value_table(title="📥 Download Summary", data=data)

    for failure in result.failures:
        table.add_row(f"[red]{escape(failure.url)}[/red]", escape(failure.error))

    return table


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table."""
    logging_data = {
        "🔧 Mode": str(status["mode"]).title(),
        "⚙️ Configured": "yes" if status["configured"] else "no",
        "📶 Level": status["log_level"],
        "🖥️ Stderr Sink": status["sinks"]["stderr"],
        "📝 Log File": status["sinks"]["file"] or "N/A",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing and style.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()  # Add spacing before
    console.print(table)
    console.print()  # Add spacing after
