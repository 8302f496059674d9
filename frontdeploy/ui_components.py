"""
frontdeploy - UI Components
Standardized headers and summary tables
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from frontdeploy.models.results import DeployReport, StageStatus

LOGO = "frontdeploy"

# Color scheme
BRAND_COLOR = "color(214)"
SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
INFO_COLOR = "cyan"

STATUS_STYLES = {
    StageStatus.SUCCESS: f"[{SUCCESS_COLOR}]✓ success[/{SUCCESS_COLOR}]",
    StageStatus.WARNING: f"[{WARNING_COLOR}]⚠ warning[/{WARNING_COLOR}]",
    StageStatus.SKIPPED: "[dim]- skipped[/dim]",
    StageStatus.DRY_RUN: f"[{INFO_COLOR}]◌ dry-run[/{INFO_COLOR}]",
}


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized frontdeploy command header.

    Args:
        title: Main title (e.g., "Deploy")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Deploy",
            details={"Host": "deploy@example.com", "Mode": "dry-run"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold {BRAND_COLOR}]{LOGO}[/bold {BRAND_COLOR}] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{escape(title)}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{escape(subtitle)}[/dim]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {escape(key)}: [cyan]{escape(str(value))}[/cyan]")

    console.print()


def build_report_table(report: DeployReport) -> Table:
    """Summary table with one row per stage."""
    title = "Deploy Summary (dry run)" if report.dry_run else "Deploy Summary"
    table = Table(title=title, title_justify="left", padding=(0, 1))
    table.add_column("Stage", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for stage in report.stages:
        table.add_row(escape(stage.stage), STATUS_STYLES[stage.status], escape(stage.message))

    return table
