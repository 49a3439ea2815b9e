from __future__ import annotations

import importlib.metadata as md
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .config import MacShiftConfig, load_config, resolve_config_path
from .core.errors import MacShiftError
from .modules import MacChanger
from .net.hwaddr import HardwareAddress
from .session import InterfaceContext, Session
from .tools.iface_utils import dry_run_command, read_hardware_address, run_command

# Typer application: tests import this
app = typer.Typer(no_args_is_help=True, add_completion=False, help="macshift CLI")
console = Console()


def _load(config: Path | None) -> MacShiftConfig:
    resolved = resolve_config_path(config)
    if not resolved.exists():
        return MacShiftConfig()
    return load_config(resolved)


def _setup_logging(cfg: MacShiftConfig) -> None:
    logging.basicConfig(
        level=cfg.logging.level,
        format=cfg.logging.format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_session(
    cfg: MacShiftConfig,
    iface: str | None = None,
    hw: str | None = None,
    os_identifier: str | None = None,
    dry_run: bool = False,
) -> Session:
    """Session with every built-in module registered, seeded from CFG."""
    name = iface or cfg.interface.name
    if hw:
        address = HardwareAddress.parse(hw)
    elif cfg.interface.hw and iface in (None, cfg.interface.name):
        address = cfg.interface.hardware_address
    else:
        address = read_hardware_address(name)

    session = Session(
        InterfaceContext(name, address),
        runner=dry_run_command if dry_run else run_command,
        os_identifier=os_identifier,
        env={"mac.changer.address": cfg.mac_changer.address},
    )
    session.register(MacChanger(session))
    return session


@app.command()
def version() -> None:
    """Print version information."""
    try:
        console.print(f"macshift {md.version('macshift')}")
    except md.PackageNotFoundError:
        from . import __version__
        console.print(f"macshift {__version__}")


@app.command(name="config-validate")
def config_validate(path: Path = typer.Argument(Path("configs/macshift.yml"))) -> None:
    """Validate and show resolved configuration."""
    resolved = resolve_config_path(path)
    console.print(f"Using config: {resolved}")
    try:
        cfg = load_config(resolved)
    except (OSError, ValueError) as exc:
        console.print(f"Config validation failed: {exc}")
        raise typer.Exit(code=1) from exc
    console.print("Config OK.")
    console.print(f"- interface: {cfg.interface.name} ({cfg.interface.hw or 'read at runtime'})")
    console.print(f"- mac.changer.address: {cfg.mac_changer.address}")
    console.print(f"- logging: {cfg.logging.level}")


@app.command()
def modules(
    config: Path = typer.Option(Path("configs/macshift.yml"), "--config", "-c"),
) -> None:
    """List modules with their commands and parameters."""
    cfg = _load(config)
    session = Session(InterfaceContext(cfg.interface.name), runner=dry_run_command)
    session.register(MacChanger(session))

    for module in session.modules:
        console.print(f"[bold]{module.name}[/bold] - {module.description}")
        table = Table("command / parameter", "default", "description")
        for handler in module.handlers():
            table.add_row(handler.name, "", handler.description)
        for param in module.parameters():
            table.add_row(param.name, session.env.get(param.name, param.default), param.description)
        console.print(table)


@app.command(name="eval")
def eval_(
    commands: str = typer.Option(..., "--eval", "-e", help="Commands to run, separated by ';'"),
    config: Path = typer.Option(Path("configs/macshift.yml"), "--config", "-c"),
    iface: str | None = typer.Option(None, "--iface", "-i"),
    hw: str | None = typer.Option(None, "--hw", help="Current hardware address of the interface"),
    os_identifier: str | None = typer.Option(None, "--os", hidden=True),
    restore: bool = typer.Option(False, "--restore", help="Stop running modules before exiting"),
    dry_run: bool = typer.Option(False, "--dry-run"),
) -> None:
    """Run session commands, e.g. -e "set mac.changer.address random; mac.changer on"."""
    try:
        cfg = _load(config)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    _setup_logging(cfg)

    try:
        session = build_session(cfg, iface, hw, os_identifier, dry_run)
    except MacShiftError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    code = 0
    for line in (c.strip() for c in commands.split(";")):
        if not line:
            continue
        try:
            result = session.run(line)
        except MacShiftError as exc:
            console.print(f"[red]{line}: {exc}[/red]")
            code = 1
            break
        if result is not None:
            console.print(result)

    if restore:
        session.stop_all()
    if session.interface.hw is not None:
        console.print(f"{session.interface.name} hw: [bold]{session.interface.hw}[/bold]")
    raise typer.Exit(code=code)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
