# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from keystash.cache.base import CacheInterface
from keystash.core.config import Settings, get_settings
from keystash.core.exceptions import KeystashError
from keystash.core.logging import redact_sensitive, setup_logging

app = typer.Typer(
    name="keystash",
    help="Inspect and manage a keystash cache",
    no_args_is_help=True,
)


class _State:
    settings: Settings | None = None


_state = _State()


@app.callback()
def main(
    backend: Annotated[
        str | None,
        typer.Option("--backend", "-b", help="Cache backend: memory, file, json or redis"),
    ] = None,
    cache_dir: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Directory for the file and json backends"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level"),
    ] = None,
) -> None:
    """Resolve settings once; command-line options win over the environment."""
    overrides: dict[str, object] = {}
    if backend is not None:
        overrides["cache_backend"] = backend
    if cache_dir is not None:
        overrides["cache_dir"] = cache_dir
    if log_level is not None:
        overrides["log_level"] = log_level

    settings = get_settings()
    if overrides:
        settings = Settings.model_validate({**settings.model_dump(), **overrides})
    _state.settings = settings
    setup_logging(settings.log_level, settings.log_format)


def _settings() -> Settings:
    return _state.settings or get_settings()


def _open_cache() -> CacheInterface:
    from keystash.cache.manager import create_cache_from_settings

    try:
        return create_cache_from_settings(_settings())
    except KeystashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc


@app.command()
def get(
    key: Annotated[str, typer.Argument(help="Cache key")],
    default: Annotated[
        str | None,
        typer.Option("--default", help="Printed when the key is missing"),
    ] = None,
) -> None:
    """Print the value stored under KEY."""
    cache = _open_cache()
    try:
        value = cache.get(key, default)
    except KeystashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc
    if value is None:
        typer.echo(f"Key not found: {key}", err=True)
        raise typer.Exit(1)
    typer.echo(value.decode() if isinstance(value, bytes) else str(value))


@app.command(name="set")
def set_value(
    key: Annotated[str, typer.Argument(help="Cache key")],
    value: Annotated[str, typer.Argument(help="Value to store")],
    ttl: Annotated[
        int | None,
        typer.Option("--ttl", help="Time-to-live in seconds"),
    ] = None,
) -> None:
    """Store VALUE under KEY."""
    cache = _open_cache()
    if ttl is None:
        ttl = _settings().default_ttl
    try:
        stored = cache.set(key, value, ttl=ttl)
    except KeystashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc
    if not stored:
        typer.echo(f"Failed to store {key}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Stored {key}.")


@app.command()
def delete(
    keys: Annotated[list[str], typer.Argument(help="Keys to delete")],
) -> None:
    """Delete one or more keys."""
    cache = _open_cache()
    try:
        if len(keys) == 1:
            removed = cache.delete(keys[0])
        else:
            removed = cache.delete_multiple(keys)
    except KeystashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc
    if not removed:
        typer.echo("Nothing deleted.", err=True)
        raise typer.Exit(1)
    typer.echo(f"Deleted {len(keys)} key(s).")


@app.command()
def has(
    key: Annotated[str, typer.Argument(help="Cache key")],
) -> None:
    """Exit 0 if KEY holds a value, 1 otherwise."""
    cache = _open_cache()
    try:
        present = cache.has(key)
    except KeystashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc
    typer.echo("yes" if present else "no")
    if not present:
        raise typer.Exit(1)


@app.command()
def clear() -> None:
    """Remove every entry from the cache."""
    cache = _open_cache()
    cache.clear()
    typer.echo("Cache cleared.")


@app.command()
def info() -> None:
    """Show the effective cache settings."""
    from rich.console import Console
    from rich.table import Table

    settings = _settings()
    console = Console()
    table = Table(title="Cache Settings")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("Backend", settings.cache_backend)
    table.add_row("Directory", str(settings.cache_dir))
    table.add_row("Redis URL", redact_sensitive(settings.redis_url))
    table.add_row("Default TTL", "none" if settings.default_ttl is None else f"{settings.default_ttl}s")
    table.add_row("Log level", settings.log_level)

    console.print(table)
