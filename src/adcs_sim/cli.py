"""
ADCS Configuration CLI
======================

Inspection tool for simulator configuration documents.
Provides commands for validating documents, showing their contents and
building individual sensors/actuators from them.
"""

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from adcs_sim.config import ConfigurationStore
from adcs_sim.core.exceptions import format_exception_message
from adcs_sim.core.factory import SensorActuatorFactory
from adcs_sim.utils.logging_config import setup_logging

app = typer.Typer(
    help="ADCS Simulation - hardware configuration inspection CLI",
    add_completion=False,
)
console = Console(soft_wrap=True)


def _load(path: Path, verbose: bool) -> ConfigurationStore:
    setup_logging("adcs_sim", level=logging.DEBUG if verbose else logging.WARNING)
    store = ConfigurationStore()
    if not store.load(path):
        console.print(
            f"[bold red]Configuration load failed:[/bold red] "
            f"{escape(format_exception_message(store.last_error))}"
        )
        raise typer.Exit(code=1)
    return store


def _vec(values) -> str:
    return np.array2string(np.asarray(values), precision=4, suppress_small=True)


@app.command()
def validate(
    path: Path = typer.Argument(..., help="Simulator configuration document"),
    exit_file: Optional[Path] = typer.Option(
        None, "--exit-file", "-e", help="Also validate an exit configuration document"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Validate configuration document(s).
    """
    store = _load(path, verbose)
    console.print(f"[bold green]✓ {path} is valid.[/bold green]")

    if exit_file is not None:
        if not store.load_exit_file(exit_file):
            console.print(
                f"[bold red]Exit configuration load failed:[/bold red] "
                f"{escape(format_exception_message(store.exit_error))}"
            )
            raise typer.Exit(code=1)
        console.print(f"[bold green]✓ {exit_file} is valid.[/bold green]")


@app.command()
def show(
    path: Path = typer.Argument(..., help="Simulator configuration document"),
    as_json: bool = typer.Option(False, "--json", help="Dump the parsed document as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Show satellite parameters, sensors and actuators.
    """
    store = _load(path, verbose)

    if as_json:
        console.print_json(data=store.snapshot.to_dict())
        return

    console.print(Panel.fit(f"Satellite configuration: {path}", style="bold blue"))
    if store.get_timestep_decision():
        timestep = f"variable [{store.get_min_timestep()}, {store.get_max_timestep()}] ms"
    else:
        timestep = f"fixed {store.get_timestep_ms()} ms"
    console.print(f"Moment of inertia:\n{_vec(store.get_satellite_moment())}")
    console.print(f"Position: {_vec(store.get_satellite_position())}")
    console.print(f"Velocity: {_vec(store.get_satellite_velocity())}")
    console.print(f"Timestep: {timestep}")
    console.print(f"Timeout: {store.get_timeout()} ms")

    sensors = Table(title="Sensors")
    sensors.add_column("Name", style="cyan")
    sensors.add_column("Type")
    sensors.add_column("Polling [ms]", justify="right")
    sensors.add_column("Position")
    for name, record in store.get_sensor_configs().items():
        sensors.add_row(name, record.type.value, str(record.polling_time), _vec(record.position))
    console.print(sensors)

    actuators = Table(title="Actuators")
    actuators.add_column("Name", style="cyan")
    actuators.add_column("Type")
    actuators.add_column("Inertia", justify="right")
    actuators.add_column("Velocity limits")
    actuators.add_column("Accel limits")
    actuators.add_column("Axis")
    for name, record in store.get_actuator_configs().items():
        actuators.add_row(
            name,
            record.type.value,
            f"{record.moment_of_inertia:g}",
            f"[{record.min_ang_vel:g}, {record.max_ang_vel:g}]",
            f"[{record.min_ang_accel:g}, {record.max_ang_accel:g}]",
            _vec(record.axis_of_rotation),
        )
    console.print(actuators)


@app.command()
def build(
    path: Path = typer.Argument(..., help="Simulator configuration document"),
    name: str = typer.Argument(..., help="Sensor or actuator name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Build a configured sensor or actuator and print it.
    """
    store = _load(path, verbose)
    factory = SensorActuatorFactory(store)

    device = factory.get_sensor(name) or factory.get_actuator(name)
    if device is None:
        console.print(f"[yellow]'{name}' is not configured in {path}[/yellow]")
        raise typer.Exit(code=1)

    console.print(f"[bold]{name}[/bold] -> {type(device).__name__}")
    console.print(device)


if __name__ == "__main__":
    app()
