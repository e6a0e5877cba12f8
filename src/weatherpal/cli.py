"""Weather page CLI application.

This module provides the command-line interface for weatherpal: a one-shot
page render, a live local server with a refresh hook, and configuration
utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final, Optional

import typer
import yaml
from pydantic import ValidationError

from weatherpal.controller import WeatherSession
from weatherpal.display.render import PageRenderer
from weatherpal.server import create_server
from weatherpal.settings.user import UserSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Weather page CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "weatherpal.cli"

# Options for the main commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="HTML file to write")
HOST_OPTION = typer.Option("127.0.0.1", "--host", help="Interface to bind")
PORT_OPTION = typer.Option(8000, "--port", "-p", help="Port to listen on")
ASSETS_OPTION = typer.Option(
    None, "--assets", file_okay=False, help="Directory holding Animations/ (only that subtree is served)"
)
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")


def _load_settings(config: Optional[Path]) -> UserSettings:
    try:
        return UserSettings.load(config)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


@app.command()
def run(
    config: Optional[Path] = CONFIG_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Run one load cycle and write the page."""
    settings = _load_settings(config)
    session = WeatherSession(
        settings,
        renderer=PageRenderer(),
        output_path=output,
        debug=debug,
    )
    try:
        result = session.refresh()
    finally:
        session.close()

    typer.echo(f"Page written to {session.output_path} ({result.value})")
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def serve(
    config: Optional[Path] = CONFIG_OPTION,
    host: str = HOST_OPTION,
    port: int = PORT_OPTION,
    assets: Optional[Path] = ASSETS_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Serve the live page; POST /refresh re-runs the load cycle.

    Press Ctrl+C to exit.
    """
    settings = _load_settings(config)
    renderer = PageRenderer()
    session = WeatherSession(settings, debug=debug)
    session.interactive = True
    session.refresh()

    server = create_server(session, renderer, host=host, port=port, assets_dir=assets)
    typer.echo(f"Serving weather on http://{host}:{server.server_address[1]}/ - press Ctrl+C to quit")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Stopping server")
    finally:
        server.server_close()
        session.close()


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        settings = UserSettings.load(file)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.echo("✅ Config valid")
    if not settings.has_api_key:
        typer.secho("⚠ api_key is not set; the page will show 'Missing API key'", fg=typer.colors.YELLOW)


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "api_key": typer.prompt("OpenWeather API key", hide_input=True),
        }
        if typer.confirm("Use fixed coordinates instead of IP geolocation?", default=False):
            data["lat"] = typer.prompt("Latitude", type=float)
            data["lon"] = typer.prompt("Longitude", type=float)
        data["output_dir"] = typer.prompt("Output directory", default="preview")
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                loc = e["loc"][0] if e["loc"] else "config"
                typer.secho(f"  • {loc} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dumped = cfg.model_dump(mode="json", exclude_none=True)
    dst.write_text(yaml.safe_dump(dumped, sort_keys=False), encoding="utf-8")
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


def main() -> None:
    """Console-script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    main()
