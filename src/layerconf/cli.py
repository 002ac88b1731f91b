"""Layered configuration CLI.

This module provides the command-line interface for reading and editing
local/global configuration files: typed get and set, removal, and
inspection of the merged view.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, NoReturn

import typer
import yaml

from layerconf.common.enums import Destination
from layerconf.errors import ConfigurationError
from layerconf.files import ensure_directory_exists, from_file, to_file
from layerconf.settings import StoreSettings
from layerconf.store import Configuration
from layerconf.types.kinds import BOOLEAN, FLOAT, INTEGER, STRING, Kind

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Layered configuration file tool", add_completion=False)
settings_app = typer.Typer(help="Settings helpers")
app.add_typer(settings_app, name="settings")

logger: Final = logging.getLogger(__name__)  # Will be "layerconf.cli"

KINDS: Final[dict[str, Kind[Any]]] = {
    "string": STRING,
    "int": INTEGER,
    "float": FLOAT,
    "bool": BOOLEAN,
}

# Global options
SETTINGS_OPTION = typer.Option(None, "--settings", "-S", dir_okay=False, help="Settings YAML file")
LOCAL_FILE_OPTION = typer.Option(None, "--local-file", "-l", help="Local configuration file")
GLOBAL_FILE_OPTION = typer.Option(None, "--global-file", "-g", help="Global configuration file")
STRICT_OPTION = typer.Option(False, "--strict", help="Fail on malformed lines and values")
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")

# Command options
TYPE_OPTION = typer.Option("string", "--type", "-t", help="Value type: string, int, float or bool")
BASE_OPTION = typer.Option(10, "--base", "-b", help="Numeric base for integers (0 guesses)")
LIST_OPTION = typer.Option(False, "--list", help="Treat the value as a comma separated list")
GLOBAL_TIER_OPTION = typer.Option(False, "--global", "-G", help="Write to the global tier")
DEFAULT_OPTION = typer.Option(None, "--default", "-d", help="Value printed when the key is unset")
VALUES_ARGUMENT = typer.Argument(..., help="Value, or list elements with --list")


@dataclass
class Session:
    """Files and flags resolved from settings and global options."""

    settings: StoreSettings
    local_file: Path
    global_file: Path | None
    strict: bool

    def load(self) -> Configuration:
        return from_file(self.local_file, self.global_file, strict=self.strict).config

    def save(self, config: Configuration) -> bool:
        ensure_directory_exists(self.local_file.parent)
        if self.global_file is not None:
            ensure_directory_exists(self.global_file.parent)
        return to_file(config, self.local_file, self.global_file)

    def destination(self, global_tier: bool) -> Destination:
        destination = Destination.GLOBAL if global_tier else self.settings.default_destination
        if destination is Destination.GLOBAL and self.global_file is None:
            _fail("No global configuration file configured")
        return destination


def _fail(message: str, code: int = 1) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=code)


def _kind(name: str) -> Kind[Any]:
    try:
        return KINDS[name]
    except KeyError:
        raise typer.BadParameter(f"unknown type {name!r}, expected one of {', '.join(KINDS)}") from None


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@app.callback()
def main(
    ctx: typer.Context,
    settings: Path | None = SETTINGS_OPTION,
    local_file: Path | None = LOCAL_FILE_OPTION,
    global_file: Path | None = GLOBAL_FILE_OPTION,
    strict: bool = STRICT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Read and edit local/global configuration files."""
    try:
        store_settings = StoreSettings.load(settings)
    except (FileNotFoundError, RuntimeError) as exc:
        _fail(str(exc))

    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, store_settings.log_level),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    ctx.obj = Session(
        settings=store_settings,
        local_file=local_file or store_settings.local_file,
        global_file=global_file or store_settings.global_file,
        strict=strict or store_settings.strict,
    )


@app.command()
def get(
    ctx: typer.Context,
    section: str,
    key: str,
    default: str | None = DEFAULT_OPTION,
    type_: str = TYPE_OPTION,
    base: int = BASE_OPTION,
    as_list: bool = LIST_OPTION,
) -> None:
    """Print a value, local tier first."""
    session: Session = ctx.obj
    kind = _kind(type_)
    try:
        config = session.load()
        if not config.has(section, key) and default is None:
            _fail(f"{section}.{key} is not set")
        if as_list:
            for item in config.get_list(section, key, kind, base, strict=session.strict):
                typer.echo(_render(item))
            return
        fallback = kind.parse(default, base) if default is not None else None
        value = config.get(section, key, fallback, kind, base, strict=session.strict)
    except ConfigurationError as exc:
        _fail(str(exc))
    typer.echo(_render(value))


@app.command("set")
def set_value(
    ctx: typer.Context,
    section: str,
    key: str,
    values: list[str] = VALUES_ARGUMENT,
    type_: str = TYPE_OPTION,
    base: int = BASE_OPTION,
    as_list: bool = LIST_OPTION,
    global_tier: bool = GLOBAL_TIER_OPTION,
) -> None:
    """Store a value and save the files."""
    session: Session = ctx.obj
    kind = _kind(type_)
    destination = session.destination(global_tier)
    if not as_list and len(values) != 1:
        _fail("Expected exactly one value (use --list for several)", code=2)

    try:
        config = session.load()
        parsed = [kind.parse(value, base) for value in values]
    except ConfigurationError as exc:
        _fail(str(exc))

    try:
        if as_list:
            stored = config.set_list(section, key, parsed, destination, kind, base)
        else:
            stored = config.set(section, key, parsed[0], destination, kind, base)
    except ValueError as exc:
        _fail(str(exc))

    if not session.save(config):
        _fail("Unable to save configuration")
    logger.info("Set %s.%s in %s tier", section, key, destination.value)
    typer.echo(stored)


@app.command()
def unset(
    ctx: typer.Context,
    section: str,
    key: str,
    global_tier: bool = GLOBAL_TIER_OPTION,
) -> None:
    """Remove a value from one tier and save the files."""
    session: Session = ctx.obj
    destination = session.destination(global_tier)
    try:
        config = session.load()
    except ConfigurationError as exc:
        _fail(str(exc))

    if not config.remove(section, key, destination):
        _fail(f"{section}.{key} is not set in the {destination.value} tier")
    if not session.save(config):
        _fail("Unable to save configuration")


@app.command()
def sections(ctx: typer.Context) -> None:
    """List section names of both tiers."""
    session: Session = ctx.obj
    try:
        config = session.load()
    except ConfigurationError as exc:
        _fail(str(exc))
    for name in config.names():
        typer.echo(name)


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the merged view of both tiers."""
    session: Session = ctx.obj
    try:
        config = session.load()
    except ConfigurationError as exc:
        _fail(str(exc))
    typer.echo(str(config), nl=False)


# ───────────────────────── settings sub-commands ─────────────────────────────
@settings_app.command("validate")
def validate_settings(file: Path) -> None:
    """Validate a settings YAML file against the schema."""
    try:
        StoreSettings.load(file)
        typer.echo("✅ Settings valid")
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@settings_app.command("show")
def show_settings(ctx: typer.Context) -> None:
    """Print the effective settings as YAML."""
    session: Session = ctx.obj
    typer.echo(yaml.safe_dump(session.settings.model_dump(mode="json"), sort_keys=False), nl=False)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
