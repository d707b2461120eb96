"""
Main CLI application using Typer.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional, Tuple

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.yaml_shop_store import YamlShopStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BarberSlotsError
from ..domain.formatting import format_long_date, format_time
from ..domain.models import Barber, Weekday
from ..services.booking import BookingService

app = typer.Typer(
    name="barberslots",
    help="Find bookable appointment slots for barbers",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
DataOption = Annotated[
    Optional[Path],
    typer.Option("--data", help="Path to shop data file. Overrides the config setting."),
]
ServiceOption = Annotated[
    Optional[str],
    typer.Option("--service", "-s", help="Service id. Defaults to the configured service."),
]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(config_file: Optional[Path], data_file: Optional[Path]) -> Tuple[AppConfig, YamlShopStore]:
    """
    Load configuration and shop data.

    A missing config file is only tolerated when --data points at the data.
    """
    config_path = config_file or get_default_config_path()

    if config_path.exists() or data_file is None:
        config = AppConfig.load_from_yaml(config_path)
        data_path = data_file or config.resolve_data_file(config_path)
    else:
        config = AppConfig()
        data_path = data_file

    _setup_logging(config.log_level)
    return config, YamlShopStore.from_path(data_path)


def _resolve_barber(store: YamlShopStore, identifier: str) -> Barber:
    """Resolve a barber by id or, failing that, by name."""
    barber = store.find_barber_by_name(identifier)
    if barber:
        return barber
    return store.get_barber(identifier)


def _resolve_service_id(config: AppConfig, store: YamlShopStore, service: Optional[str]) -> str:
    if service:
        return service
    if config.defaults.service_id:
        return config.defaults.service_id

    services = store.services()
    if not services:
        raise BarberSlotsError("No services defined in the shop data.")
    return services[0].id


def _parse_date(value: Optional[str], service: BookingService) -> date:
    if not value:
        return service.today()
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except ValueError as e:
        raise BarberSlotsError(f"Invalid date '{value}', expected YYYY-MM-DD: {e}") from e


def _title(store: YamlShopStore, label: str) -> str:
    return f"{store.shop_name} · {label}" if store.shop_name else label


def _fail(message: object) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(1)


@app.command()
def slots(
    barber: Annotated[str, typer.Argument(help="Barber id or name")],
    day: Annotated[Optional[str], typer.Option("--date", "-d", help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    service: ServiceOption = None,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    Show bookable start times for a barber on one date.

    Examples:

        barberslots slots "James Rivera" --date 2024-06-10

        barberslots slots barber-1 --service service-3
    """
    try:
        config, store = _load(config_file, data_file)
        booking = BookingService(store, timezone=config.timezone)

        selected = _resolve_barber(store, barber)
        service_id = _resolve_service_id(config, store, service)
        selected_service = store.get_service(service_id)
        target = _parse_date(day, booking)

        times = booking.available_slots(barber_id=selected.id, service_id=service_id, day=target)

        console.print(
            f"\n[bold cyan]{selected.name}[/bold cyan] · {selected_service.name} "
            f"({selected_service.duration} min) · {format_long_date(target)}\n"
        )

        if not times:
            console.print("[yellow]No available slots.[/yellow] Try another date.\n")
            return

        console.print(f"[bold green]{len(times)} slots available:[/bold green]")
        console.print("  " + "  ".join(format_time(t) for t in times))
        console.print()

    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def week(
    barber: Annotated[str, typer.Argument(help="Barber id or name")],
    start: Annotated[Optional[str], typer.Option("--start", help="First date (YYYY-MM-DD). Defaults to today.")] = None,
    days: Annotated[Optional[int], typer.Option("--days", help="Number of days to show")] = None,
    service: ServiceOption = None,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    Show slot counts for a barber over the coming days.
    """
    try:
        config, store = _load(config_file, data_file)
        booking = BookingService(store, timezone=config.timezone)

        selected = _resolve_barber(store, barber)
        service_id = _resolve_service_id(config, store, service)
        first = _parse_date(start, booking)

        overview = booking.upcoming_availability(
            barber_id=selected.id,
            service_id=service_id,
            start=first,
            days=days or config.defaults.days_ahead,
        )

        table = Table(
            title=_title(store, f"Availability for {selected.name}"),
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Date", style="bold yellow")
        table.add_column("Status")
        table.add_column("Slots", justify="right")
        table.add_column("First / Last", style="dim")

        for entry in overview:
            span = f"{format_time(entry.slots[0])} - {format_time(entry.slots[-1])}" if entry.slots else ""
            table.add_row(format_long_date(entry.day), entry.status, str(len(entry.slots)), span)

        console.print()
        console.print(table)
        console.print()

    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def barbers(
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    List the shop's barbers and their weekly hours.
    """
    try:
        _, store = _load(config_file, data_file)

        if not store.barbers():
            console.print("[yellow]No barbers defined in the shop data.[/yellow]")
            return

        table = Table(title=_title(store, "Barbers"), show_header=True, header_style="bold cyan")
        table.add_column("Id", style="dim")
        table.add_column("Name", style="bold yellow")
        for weekday in Weekday:
            table.add_column(weekday.day_name[:3].capitalize())

        for barber in store.barbers():
            hours = [
                ", ".join(str(slot) for slot in barber.availability.get(weekday, ())) or "off"
                for weekday in Weekday
            ]
            table.add_row(barber.id, barber.name, *hours)

        console.print()
        console.print(table)
        console.print()

    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def services(
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    List the services offered by the shop.
    """
    try:
        _, store = _load(config_file, data_file)

        table = Table(title=_title(store, "Services"), show_header=True, header_style="bold cyan")
        table.add_column("Id", style="dim")
        table.add_column("Name", style="bold yellow")
        table.add_column("Duration", justify="right")
        table.add_column("Price", justify="right")

        for item in store.services():
            table.add_row(item.id, item.name, f"{item.duration} min", f"${item.price:.2f}")

        console.print()
        console.print(table)
        console.print()

    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]barberslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
