"""
Cowboy Deploy - UI Components & Branding
Standardized headers and UI elements
"""

from rich.console import Console

LOGO = "cowboy"

# Color scheme
SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
ERROR_COLOR = "red"

# Deployment kind colors used by the history views
KIND_COLORS = {
    "full": ERROR_COLOR,
    "incremental": SUCCESS_COLOR,
}


def kind_color(kind: str) -> str:
    return KIND_COLORS.get(kind, WARNING_COLOR)


def show_header(
    title: str,
    subtitle: str = None,
    project: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized Cowboy Deploy command header.

    Args:
        title: Main title (e.g., "Push", "Rollback")
        subtitle: Optional subtitle line
        project: Project name (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Pushing to production",
            project="my-site",
            details={"Host": "ftp.example.com"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]🤠 {LOGO}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{subtitle}[/dim]")

    if project:
        console.print(f"{prefix} Project: [cyan]{project}[/cyan]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [cyan]{value}[/cyan]")

    console.print()
