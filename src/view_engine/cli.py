"""Command-line interface for View Engine."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.config import ConfigManager
from .core.engine import ViewEngine
from .core.exceptions import ConfigError, ViewNotFoundError
from .core.models import EngineConfig, RenderOptions
from .core.validator import validate_template
from .preview_server import PreviewServer


console = Console()
err_console = Console(stderr=True)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _engine(ctx: click.Context) -> ViewEngine:
    return ctx.obj['engine']


@click.group()
@click.version_option(package_name='view-engine')
@click.option(
    '--config', 'config_file',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON engine configuration file'
)
@click.option(
    '--views-path',
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    help='Views directory (overrides the config file)'
)
@click.pass_context
def main(ctx: click.Context, config_file: Optional[Path], views_path: Optional[Path]) -> None:
    """View Engine - render directive-based view templates."""
    ctx.ensure_object(dict)
    config_manager = ConfigManager()

    try:
        config = config_manager.load_engine_config(config_file) if config_file else EngineConfig()
    except ConfigError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    if views_path is not None:
        config = config.model_copy(update={'views_path': views_path})

    _setup_logging(config.log_level.value)
    ctx.obj['config_manager'] = config_manager
    ctx.obj['engine'] = ViewEngine(config)


@main.command()
@click.argument('view_name')
@click.option('--data', 'data_file',
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML/JSON file with render data')
@click.option('--input', 'inputs', multiple=True,
              help='Render values in key=value format')
@click.option('--output', 'output_path',
              type=click.Path(dir_okay=False, path_type=Path),
              help='Write the result to a file instead of stdout')
@click.option('--no-cache', is_flag=True, help='Bypass the view cache')
@click.option('--drop-undefined', is_flag=True,
              help='Render undefined variables as empty text')
@click.pass_context
def render(
    ctx: click.Context,
    view_name: str,
    data_file: Optional[Path],
    inputs: tuple,
    output_path: Optional[Path],
    no_cache: bool,
    drop_undefined: bool
) -> None:
    """Render a view."""
    engine = _engine(ctx)
    data = {}

    try:
        if data_file:
            data.update(ctx.obj['config_manager'].load_data(data_file))
    except ConfigError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    for input_arg in inputs:
        if '=' not in input_arg:
            err_console.print(f"[red]Invalid input format: {input_arg}[/red]")
            err_console.print("Use format: --input key=value")
            sys.exit(1)

        key, value = input_arg.split('=', 1)
        # Try to parse as JSON for numbers, booleans and collections
        try:
            data[key] = json.loads(value)
        except json.JSONDecodeError:
            data[key] = value

    options = RenderOptions(
        cache_enabled=False if no_cache else None,
        preserve_undefined=not drop_undefined,
    )

    try:
        result = engine.render(view_name, data, options)
    except ViewNotFoundError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result, encoding='utf-8')
        err_console.print(f"[green]✓ Wrote {output_path}[/green]")
    else:
        click.echo(result, nl=False)


@main.command()
@click.argument('view_name')
@click.pass_context
def validate(ctx: click.Context, view_name: str) -> None:
    """Check a view for unbalanced blocks and malformed directives."""
    engine = _engine(ctx)
    try:
        view_path = engine.get_view_path(view_name)
    except ViewNotFoundError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    if not view_path.is_file():
        console.print(f"[red]✗ View not found: {view_path}[/red]")
        sys.exit(1)

    errors = validate_template(view_path.read_text(encoding='utf-8'))
    if not errors:
        console.print(f"[green]✓ {view_name} is valid[/green]")
        return

    console.print(f"[red]✗ {view_name} has {len(errors)} problem(s):[/red]")
    for error in errors:
        console.print(f"  [yellow]•[/yellow] {error}")
    sys.exit(1)


@main.command('list-views')
@click.pass_context
def list_views(ctx: click.Context) -> None:
    """List all views in the views directory."""
    engine = _engine(ctx)
    names = engine.list_views()

    if not names:
        console.print(f"[yellow]No views found in {engine.views_path}[/yellow]")
        return

    table = Table(title="Views")
    table.add_column("View", style="cyan")
    table.add_column("File", style="blue")
    table.add_column("Valid", style="green")

    for name in names:
        path = engine.get_view_path(name)
        errors = validate_template(path.read_text(encoding='utf-8'))
        table.add_row(
            name,
            str(path.relative_to(engine.views_path)),
            "Yes" if not errors else f"[red]No ({len(errors)})[/red]"
        )

    console.print(table)


@main.command()
@click.option('--host', default='127.0.0.1', help='Preview server host')
@click.option('--port', default=8080, help='Preview server port')
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Serve rendered views over HTTP for previewing."""
    engine = _engine(ctx)
    server = PreviewServer(engine, host, port)

    console.print(f"[green]Serving views from {engine.views_path}[/green]")
    console.print(f"[blue]URL:[/blue] http://{host}:{port}/views/<name>")
    console.print("Press Ctrl+C to stop")

    try:
        asyncio.run(server.serve_forever())
    except KeyboardInterrupt:
        console.print("\n[yellow]Shutting down preview server...[/yellow]")


if __name__ == '__main__':
    main()
