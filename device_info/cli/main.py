# device_info/cli/main.py

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from device_info.core.color_codes import ColorCodeResolver
from device_info.core.config_manager import DEFAULT_PLIST_PATH
from device_info.core.device_info_manager import DeviceInfoManager
from device_info.core.errors import DeviceInfoError
from device_info.utils.logger import setup_logging

console = Console()
logger = logging.getLogger(__name__)


def _fail(message: str, error: Exception):
    """Reports a fatal error and terminates; there is no useful degraded mode."""
    console.print(f"[bold red]❌ {message}: {error}[/bold red]")
    logger.error(message, exc_info=True)
    sys.exit(1)


def _load_manager(ctx: click.Context) -> DeviceInfoManager:
    try:
        return DeviceInfoManager(ctx.obj["plist"])
    except DeviceInfoError as e:
        _fail("Could not load the device database", e)


def _load_resolver() -> ColorCodeResolver:
    try:
        return ColorCodeResolver()
    except DeviceInfoError as e:
        _fail("Could not load the colour names", e)


def _format_color(resolver: ColorCodeResolver, color: str) -> str:
    """Shows a colour code in its own colour where it resolves to one."""
    if color == "":
        return "[dim](empty)[/dim]"
    hex_code = resolver.hex_for_color_code(color)
    if hex_code is None:
        return escape(color)
    return f"[{hex_code}]{escape(color)}[/{hex_code}] ({hex_code})"


@click.group(context_settings=dict(help_option_names=['-h', '--help']))
@click.version_option(version="1.0", prog_name="Apple Device Info")
@click.option('--plist', type=click.Path(dir_okay=False, path_type=Path), default=DEFAULT_PLIST_PATH,
              show_default=True, help="The Launch Services type database to read.")
@click.option('-v', '--verbose', is_flag=True, help="Show progress messages.")
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write a detailed debug log to this file.")
@click.pass_context
def devinfo(ctx: click.Context, plist: Path, verbose: bool, log_file: Path):
    """
    📱 Apple Device Info - names, colours and icons of iOS, watchOS and tvOS devices.

    The information comes from the system's UTI database, so a system older
    than a device won't know about it.
    """
    setup_logging(verbose=verbose, log_file=log_file)
    ctx.ensure_object(dict)
    ctx.obj["plist"] = plist


@devinfo.command()
@click.pass_context
def devices(ctx: click.Context):
    """📋 Lists every known device, followed by the Simulator."""
    manager = _load_manager(ctx)
    resolver = _load_resolver()

    table = Table(title="Known Devices", style="cyan", title_style="bold magenta")
    table.add_column("Name", style="green")
    table.add_column("Identifier", style="blue", no_wrap=True)
    table.add_column("Colors")

    for description in manager.descriptions:
        colors = ", ".join(_format_color(resolver, c) for c in description.colors) or "[dim]Default[/dim]"
        table.add_row(manager.name_for_device(description.identifier), description.identifier, colors)

    console.print(table)
    console.print(f"{len(manager.known_devices)} devices found in [bright_magenta]{manager.plist_path}[/bright_magenta].")


@devinfo.command()
@click.argument('identifier')
@click.option('-c', '--color', default=None, help="A colour code, for picking the matching icon.")
@click.pass_context
def show(ctx: click.Context, identifier: str, color: str | None):
    """🔎 Shows everything known about one device identifier."""
    manager = _load_manager(ctx)
    resolver = _load_resolver()

    name = manager.name_for_device(identifier)
    if name == identifier:
        console.print(f"[yellow]Device '{escape(identifier)}' is not known to this system.[/yellow]")

    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("Name", escape(name))
    table.add_row("Short Name", escape(manager.short_name_for_device(identifier)))
    table.add_row("Identifier", escape(identifier))

    colors = manager.known_colors(identifier)
    table.add_row("Colors", ", ".join(_format_color(resolver, c) for c in colors) or "Default")

    icon_path = manager.icon_path_for_device(identifier, color)
    table.add_row("Icon", escape(str(icon_path)) if icon_path else "[dim]none[/dim]")
    console.print(table)


@devinfo.command()
@click.argument('code')
def color(code: str):
    """🎨 Resolves a device colour code to RGB."""
    resolver = _load_resolver()
    rgb = resolver.rgb_for_color_code(code)
    if rgb is None:
        console.print(f"[yellow]'{escape(code)}' is not a colour code with a known colour.[/yellow]")
        return
    hex_code = resolver.hex_for_color_code(code)
    console.print(f"[{hex_code}]■[/{hex_code}] {escape(code)}: RGB {rgb[0]}, {rgb[1]}, {rgb[2]} ({hex_code})")
