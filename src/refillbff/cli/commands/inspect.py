"""Decode and subject commands: offline views of stored CRM text."""

from rich.console import Console

from refillbff.cli.ui import create_subject_table, create_vehicle_table, warning_panel
from refillbff.codec import decode_vehicles, looks_like_refill, parse_status

console = Console()


def run_decode(text: str) -> None:
    """Print the vehicles a note body decodes to."""
    vehicles = decode_vehicles(text)
    if not vehicles:
        console.print(warning_panel("No vehicle record found in this note."))
        return

    noun = "vehicle" if len(vehicles) == 1 else "vehicles"
    console.print(f"[bold]{len(vehicles)} {noun}[/bold]")
    console.print(create_vehicle_table(vehicles))


def run_subject(text: str) -> None:
    """Print the status parsed from a task subject."""
    parsed = parse_status(text)
    console.print(create_subject_table(parsed, looks_like_refill(parsed.clean_subject, text)))
