from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from openapi_plugin_config.errors import ConfigError
from openapi_plugin_config.plugin import PluginConfiguration, open_plugin_configuration, plugin_configuration_path
from openapi_plugin_config.schema_file import decode_plugin_config, default_plugin_config, write_plugin_config

app = typer.Typer(help="OpenAPI plugin config: resolve the swagger URL for a terraform provider")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("resolve")
def resolve(
    provider: str = typer.Argument(..., help="Provider name (terraform-provider-<provider_name>)"),
    config_file: Path | None = typer.Option(None, "--config-file", help="Plugin configuration file override"),
) -> None:
    """Resolve the swagger URL and TLS settings for a provider."""
    try:
        if config_file is not None:
            with config_file.open("rb") as handle:
                service_config = PluginConfiguration(provider, handle).get_service_configuration()
        else:
            with open_plugin_configuration(provider) as plugin_config:
                service_config = plugin_config.get_service_configuration()
    except (ConfigError, OSError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    console.print(f"[green]swagger url:[/green] {service_config.get_swagger_url()}", soft_wrap=True)
    console.print(f"insecure skip verify: {service_config.is_insecure_skip_verify_enabled()}")


@app.command("path")
def show_path(provider: str) -> None:
    """Show which plugin configuration file a provider would read."""
    path = plugin_configuration_path(provider)
    state = "[green]present[/green]" if path.exists() else "[yellow]not present[/yellow]"
    console.print(f"{path} ({state})", soft_wrap=True)


@app.command("validate")
def validate(
    file: Path | None = typer.Argument(None, help="Configuration file to check"),
    provider: str | None = typer.Option(None, "--provider", help="Check the file this provider would read"),
) -> None:
    """Check that a plugin configuration file parses and validates."""
    if file is None and provider is None:
        console.print("[red]Pass a configuration FILE or --provider[/red]")
        raise typer.Exit(code=1)

    path = file or plugin_configuration_path(provider)
    try:
        schema = decode_plugin_config(path.read_bytes())
        schema.validate()
    except (ConfigError, OSError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    console.print(f"[green]{path} is valid[/green] ({len(schema.services)} services)", soft_wrap=True)


@app.command("init")
def init_config(
    provider: str,
    swagger_url: str,
    path: Path | None = typer.Option(None, "--path", help="Where to write the configuration file"),
) -> None:
    """Write a starter plugin configuration file if missing."""
    target = path or plugin_configuration_path(provider)
    if target.exists():
        console.print(f"[yellow]Configuration already exists:[/yellow] {target}", soft_wrap=True)
        raise typer.Exit(code=0)

    schema = default_plugin_config(provider, swagger_url)
    try:
        schema.validate()
    except ConfigError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    write_plugin_config(target, schema)
    console.print(f"[green]Configuration created:[/green] {target}", soft_wrap=True)


if __name__ == "__main__":
    app()
