"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Annotated, Tuple

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.doctor_directory import ConfigDoctorDirectory, SampleDoctorDirectory
from ..config import ClinicConfig, DoctorConfig, get_default_config_path
from ..domain.exceptions import BookingError, InvalidIndex
from ..domain.models import AvailabilityWindow, DaySlots, Slot
from ..services.booking import BookingService, BookingSession

app = typer.Typer(
    name="clinicbooking",
    help="Browse doctors and bookable appointment slots",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
SampleOption = Annotated[bool, typer.Option("--sample", help="Use the bundled sample doctors instead of the configured ones.")]
AtOption = Annotated[Optional[str], typer.Option("--at", help="Reference time (ISO 8601). Defaults to now in the clinic timezone.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Clinic appointment booking.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def _load_service(config_file: Optional[Path], sample: bool) -> Tuple[ClinicConfig, BookingService]:
    """
    Load the configuration and build the booking service on the chosen directory.
    """
    config_path = config_file or get_default_config_path()

    if sample:
        # The sample directory works without a config file
        config = ClinicConfig.load_from_yaml(config_path) if config_path.exists() else ClinicConfig()
        directory = SampleDoctorDirectory(default_working_hours=config.working_hours)
    else:
        config = ClinicConfig.load_from_yaml(config_path)
        directory = ConfigDoctorDirectory(config)

    service = BookingService(
        directory,
        default_working_hours=config.working_hours,
        label_format=config.label_format,
        window_days=config.window_days
    )
    return config, service


def _resolve_reference(config: ClinicConfig, at: Optional[str]) -> DateTime:
    """Resolve the reference instant from --at or the clock."""
    if not at:
        return pendulum.now(config.timezone)

    try:
        reference = pendulum.parse(at, tz=config.timezone)
    except Exception as e:
        raise ValueError(f"Could not parse reference time '{at}': {e}") from e

    if not isinstance(reference, DateTime):
        raise ValueError(f"Reference time must be a date and time, got '{at}'")

    return reference


def _format_fee(config: ClinicConfig, doctor: DoctorConfig) -> str:
    fee = int(doctor.fees) if float(doctor.fees).is_integer() else doctor.fees
    return f"{config.currency_symbol}{fee}"


def _print_doctor(config: ClinicConfig, doctor: DoctorConfig, policy_text: str) -> None:
    """Render the doctor profile card."""
    lines = [f"[bold]{doctor.name}[/bold]"]
    if doctor.degree or doctor.speciality:
        lines.append(f"{doctor.degree} - {doctor.speciality}   [dim]{doctor.experience}[/dim]")
    if doctor.about:
        lines.append(f"\n[bold]About[/bold]\n{doctor.about}")
    lines.append(f"\n[bold]Appointment Fee:[/bold] {_format_fee(config, doctor)}")
    lines.append(f"[bold]Working hours:[/bold] {policy_text}")

    console.print(Panel.fit("\n".join(lines), title=doctor.id))


def _print_empty_state(config: ClinicConfig) -> None:
    console.print(
        f"[yellow]⚠ No bookable slots in the next {config.window_days} day(s).[/yellow]\n"
        "Please check again later or choose another doctor."
    )


def _print_window(window: AvailabilityWindow) -> None:
    """Render day headers with their slot chips."""
    table = Table(
        title="Booking Slots",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Day", style="bold yellow")
    table.add_column("Slots")

    for index, day in enumerate(window, 1):
        table.add_row(
            str(index),
            day.header(),
            "  ".join(slot.label.lower() for slot in day)
        )

    console.print()
    console.print(table)
    console.print()


def _print_day_choices(window: AvailabilityWindow, selected_index: int) -> None:
    headers = []
    for index, day in enumerate(window, 1):
        header = f"{index}. {day.header()}"
        headers.append(f"[bold reverse]{header}[/bold reverse]" if index - 1 == selected_index else header)
    console.print("   ".join(headers))


def _print_slot_choices(day: DaySlots, selected: Optional[Slot]) -> None:
    chips = []
    for index, slot in enumerate(day, 1):
        chip = f"{index}. {slot.label.lower()}"
        chips.append(f"[bold reverse]{chip}[/bold reverse]" if slot == selected else chip)
    console.print("   ".join(chips))


def _slot_by_number(day: DaySlots, number: int) -> Slot:
    if not 1 <= number <= len(day):
        raise InvalidIndex(f"Slot number {number} is out of range (1-{len(day)})")
    return day.slots[number - 1]


@app.command()
def doctors(
    config_file: ConfigOption = None,
    sample: SampleOption = False,
):
    """
    List all doctors.
    """
    try:
        config, service = _load_service(config_file, sample)
        doctor_list = service.list_doctors()

        if not doctor_list:
            console.print("[yellow]No doctors defined in the config file.[/yellow]")
            return

        table = Table(
            title=f"Doctors - {config.name}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("ID", style="dim")
        table.add_column("Name", style="bold yellow")
        table.add_column("Speciality")
        table.add_column("Experience")
        table.add_column("Fee", justify="right")
        table.add_column("Working hours")

        for doctor in doctor_list:
            table.add_row(
                doctor.id,
                doctor.name,
                doctor.speciality,
                doctor.experience,
                _format_fee(config, doctor),
                str(service.policy_for(doctor))
            )

        console.print()
        console.print(table)
        console.print()

    except (BookingError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def slots(
    doctor_id: Annotated[str, typer.Argument(help="Doctor id, e.g. doc1")],
    config_file: ConfigOption = None,
    sample: SampleOption = False,
    at: AtOption = None,
):
    """
    Show a doctor's profile and bookable slots.

    Examples:

        clinicbooking slots doc1

        clinicbooking slots doc1 --at "2024-11-25 14:05"

        clinicbooking slots doc4 --sample
    """
    try:
        config, service = _load_service(config_file, sample)
        reference = _resolve_reference(config, at)
        session = asyncio.run(service.open_booking(doctor_id, reference))

        _print_doctor(config, session.doctor, str(service.policy_for(session.doctor)))

        if session.window.is_empty:
            _print_empty_state(config)
            return

        _print_window(session.window)

    except (BookingError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def book(
    doctor_id: Annotated[str, typer.Argument(help="Doctor id, e.g. doc1")],
    config_file: ConfigOption = None,
    sample: SampleOption = False,
    at: AtOption = None,
    day: Annotated[Optional[int], typer.Option("--day", "-d", help="Day number (1 = first offered day). Prompted if omitted.")] = None,
    slot: Annotated[Optional[int], typer.Option("--slot", "-s", help="Slot number within the day. Prompted if omitted.")] = None,
):
    """
    Pick a day and a slot for a doctor.

    The choice is only displayed, nothing is stored.
    """
    try:
        config, service = _load_service(config_file, sample)
        reference = _resolve_reference(config, at)
        session: BookingSession = asyncio.run(service.open_booking(doctor_id, reference))
        selection = session.selection

        console.print(f"\n[bold cyan]🗓️  Book an appointment with {session.doctor.name}[/bold cyan]\n")

        if session.window.is_empty:
            _print_empty_state(config)
            return

        # 1. DAY
        _print_day_choices(session.window, selection.selected_day_index)
        if day is None:
            day = typer.prompt("\n→ Day", default=1, type=int)
        chosen_day = selection.select_day(day - 1)

        # 2. SLOT
        console.print()
        _print_slot_choices(chosen_day, selection.selected_slot)
        if slot is None:
            slot = typer.prompt("\n→ Slot", default=1, type=int)
        selection.select_slot(_slot_by_number(chosen_day, slot))

        chosen = selection.selected_slot
        console.print(Panel.fit(
            f"[bold green]✓ Slot selected[/bold green]\n\n"
            f"[bold]Doctor:[/bold] {session.doctor.name}\n"
            f"[bold]Date:[/bold] {chosen.start.format('dddd, DD.MM.YYYY', locale='en')}\n"
            f"[bold]Time:[/bold] {chosen.label}\n"
            f"[bold]Fee:[/bold] {_format_fee(config, session.doctor)}",
            title="Appointment"
        ))
        console.print()

    except (BookingError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]clinicbooking[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
