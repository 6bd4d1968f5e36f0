"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.json_booking_store import JsonBookingStore
from ..config import AppConfig, get_default_config_path
from ..domain import time_grid
from ..domain.exceptions import SchedulingError
from ..domain.models import BookingRequest
from ..services.scheduling import SchedulingService

app = typer.Typer(
    name="barberslots",
    help="Compute bookable appointment slots for a barbershop",
    add_completion=False
)

console = Console()

REASON_LABELS = {
    "lunch_break": "Intervalo de almoço",
    "conflict": "Horário ocupado",
    "insufficient_room_before_close": "Termina após o fechamento",
    "already_passed": "Horário já passou",
    "closed_day": "Estabelecimento fechado neste dia",
    "invalid_duration": "Duração inválida",
    "outside_business_hours": "Fora do horário de funcionamento",
    "outside_horizon": "Data fora do período de agendamento",
}

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
TodayOption = Annotated[
    Optional[str],
    typer.Option("--today", help="Reference date (YYYY-MM-DD). Defaults to today in the business timezone."),
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


def _build_service(config: AppConfig) -> SchedulingService:
    return SchedulingService(
        booking_store=JsonBookingStore(config.bookings_file),
        rules=config.business_hours.to_rules(),
        horizon_days=config.horizon_days,
    )


def _parse_date(value: str, tz: str):
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz).date()
    except ValueError as e:
        console.print(f"[red]Erro ao interpretar a data '{value}': {e}[/red]")
        raise typer.Exit(1)


def _resolve_clock(config: AppConfig, today_option: Optional[str]):
    """
    Return (today, now). With an explicit --today there is no "now", so
    no slot is treated as already passed.
    """
    if today_option:
        return _parse_date(today_option, config.timezone), None

    now = pendulum.now(config.timezone)
    return now.date(), now


def _resolve_professional(config: AppConfig, identifier: str) -> str:
    if not config.professionals:
        return identifier
    try:
        return config.resolve_professional(identifier)
    except ValueError as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Barbershop appointment availability.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def dates(
    config_file: ConfigOption = None,
    today: TodayOption = None,
    all_dates: Annotated[bool, typer.Option("--all", help="Also list closed days.")] = False,
):
    """
    List the dates clients can book within the configured horizon.
    """
    try:
        config = _load_config(config_file)
        service = _build_service(config)
        reference_day, _ = _resolve_clock(config, today)

        candidates = service.available_dates(reference_day)

        table = Table(
            title=f"Datas disponíveis ({config.horizon_days} dias)",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Data", style="bold yellow")
        table.add_column("Dia")
        table.add_column("Status")

        for candidate in candidates:
            if not candidate.selectable and not all_dates:
                continue
            status = "[green]aberto[/green]" if candidate.selectable else "[dim]fechado[/dim]"
            table.add_row(
                candidate.date.isoformat(),
                candidate.format_display(config.date_format, config.locale),
                status,
            )

        console.print()
        console.print(table)
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)

    except (SchedulingError, ValueError) as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def slots(
    professional: Annotated[str, typer.Argument(help="Professional id or name")],
    date: Annotated[str, typer.Option("--date", help="Date (YYYY-MM-DD)")],
    duration: Annotated[int, typer.Option("--duration", "-d", help="Service duration in minutes")],
    config_file: ConfigOption = None,
    today: TodayOption = None,
    only_available: Annotated[bool, typer.Option("--available", help="Show only bookable times.")] = False,
):
    """
    Show every slot of a day with its availability.

    Examples:

        barberslots slots joao --date 2025-01-06 --duration 30

        barberslots slots joao --date 2025-01-06 -d 60 --available
    """
    try:
        config = _load_config(config_file)
        service = _build_service(config)
        professional_id = _resolve_professional(config, professional)
        day = _parse_date(date, config.timezone)
        _, now = _resolve_clock(config, today)

        day_slots = asyncio.run(
            service.slots_for(professional_id, day, duration, now=now)
        )

        console.print()
        if not day_slots:
            console.print(f"[yellow]⚠ Fechado em {day.isoformat()}.[/yellow]\n")
            return

        if not any(slot.available for slot in day_slots):
            console.print(f"[yellow]⚠ Nenhum horário disponível em {day.isoformat()}.[/yellow]\n")

        table = Table(
            title=f"Horários de {professional_id} em {day.isoformat()} ({duration} min)",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Horário", style="bold yellow")
        table.add_column("Término", style="dim")
        table.add_column("Status")

        for slot in day_slots:
            if only_available and not slot.available:
                continue
            if slot.available:
                status = "[green]disponível[/green]"
            else:
                status = f"[red]{REASON_LABELS[slot.reason.value]}[/red]"
            table.add_row(slot.time.format(), slot.end_time.format(), status)

        console.print(table)
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)

    except (SchedulingError, ValueError) as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def book(
    professional: Annotated[str, typer.Argument(help="Professional id or name")],
    date: Annotated[str, typer.Option("--date", help="Date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Option("--time", "-t", help="Start time (HH:MM)")],
    duration: Annotated[int, typer.Option("--duration", "-d", help="Service duration in minutes")],
    config_file: ConfigOption = None,
    today: TodayOption = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Validate without saving.")] = False,
):
    """
    Validate a booking against current bookings and save it.
    """
    try:
        config = _load_config(config_file)
        service = _build_service(config)
        professional_id = _resolve_professional(config, professional)
        reference_day, now = _resolve_clock(config, today)

        request = BookingRequest(
            professional_id=professional_id,
            date=_parse_date(date, config.timezone),
            start_time=time_grid.parse(time_grid.normalize(time)),
            duration=duration,
        )

        if dry_run:
            decision = asyncio.run(service.validate_booking(request, reference_day, now=now))
        else:
            decision = asyncio.run(service.book(request, reference_day, now=now))

        if not decision.accepted:
            console.print(
                f"\n[bold red]✗ Agendamento recusado:[/bold red] "
                f"{REASON_LABELS[decision.reason.value]}\n"
            )
            raise typer.Exit(2)

        verb = "pode ser agendado" if dry_run else "confirmado"
        console.print(
            f"\n[bold green]✓ Horário {verb}:[/bold green] "
            f"{request.date.isoformat()} {request.start_time} - {request.end_time} "
            f"com {professional_id}\n"
        )

    except FileNotFoundError as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)

    except (SchedulingError, ValueError) as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def professionals(
    config_file: ConfigOption = None,
):
    """
    List all configured professionals.
    """
    try:
        config = _load_config(config_file)

        if not config.professionals:
            console.print("[yellow]Nenhum profissional definido na configuração.[/yellow]")
            return

        table = Table(
            title="Profissionais",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("ID", style="bold yellow")
        table.add_column("Nome")

        for professional in config.professionals:
            table.add_row(professional.id, professional.display_name())

        console.print()
        console.print(table)
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)

    except (SchedulingError, ValueError) as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]barberslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
