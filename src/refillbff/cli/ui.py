"""Rich console UI helpers."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from refillbff.models import ParsedSubject, ServiceConfig, VehicleRecord

console = Console()


def success_panel(message: str) -> Panel:
    """Create a success message panel."""
    return Panel(
        f"[green]✓[/green] {message}",
        border_style="green",
        padding=(0, 1),
    )


def error_panel(message: str, details: str | None = None) -> Panel:
    """Create an error message panel."""
    content = f"[red]✗[/red] {message}"
    if details:
        content += f"\n\n[dim]{details}[/dim]"
    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(0, 1),
    )


def warning_panel(message: str) -> Panel:
    """Create a warning message panel."""
    return Panel(
        f"[yellow]⚠[/yellow] {message}",
        border_style="yellow",
        padding=(0, 1),
    )


def masked_value(value: str, visible_chars: int = 4) -> str:
    """Mask a value, showing only last N characters."""
    if len(value) <= visible_chars:
        return "*" * len(value)
    return "*" * (len(value) - visible_chars) + value[-visible_chars:]


def create_vehicle_table(vehicles: list[VehicleRecord]) -> Table:
    """Create a table of decoded vehicles."""
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name")
    table.add_column("Make")
    table.add_column("Model")
    table.add_column("Year")
    table.add_column("Color")
    table.add_column("Plate")

    for i, v in enumerate(vehicles, 1):
        table.add_row(str(i), v.name, v.make, v.model, v.year, v.color, v.license_plate)

    return table


def create_subject_table(parsed: ParsedSubject, is_refill: bool) -> Table:
    """Create a table describing a parsed task subject."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Code", parsed.code)
    table.add_row("Status", parsed.status.value)
    table.add_row("Subject", parsed.clean_subject or "[dim](empty)[/dim]")
    table.add_row("Refill", "yes" if is_refill else "no")

    return table


def create_config_table(config: ServiceConfig) -> Table:
    """Create a table displaying effective settings."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    token = config.hubspot_token.get_secret_value() if config.hubspot_token else ""
    stripe_key = config.stripe_secret_key.get_secret_value() if config.stripe_secret_key else ""

    table.add_row("HubSpot", config.crm_base_url)
    table.add_row("HubSpot token", masked_value(token) if token else "[red]missing[/red]")
    table.add_row("Stripe key", masked_value(stripe_key) if stripe_key else "[dim]not set[/dim]")
    table.add_row("Listen", f"{config.host}:{config.port}")
    table.add_row("CORS origin", config.allowed_origin)

    return table
