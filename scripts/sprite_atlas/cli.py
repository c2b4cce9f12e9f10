"""
Command-line interface for the atlas packer.
Provides commands for packing, validating and inspecting configuration.
"""

import sys
import os
import logging
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.table import Table
from rich.markup import escape

from . import __version__
from .config import PackerConfig

app = typer.Typer(
    name="sprite-atlas",
    help="Sprite atlas packer - Convert Aseprite sheets and static images into a packaged atlas archive",
    add_completion=False,
    rich_markup_mode="rich",
    epilog="""
[bold]Examples:[/bold]
  [cyan]sprite-atlas pack assets/index.yaml build/atlas.zip[/cyan]   Build an atlas archive
  [cyan]sprite-atlas validate assets/index.yaml[/cyan]              Check models without writing
  [cyan]sprite-atlas config --env-vars[/cyan]                       List environment overrides
    """
)
console = Console()


@app.command()
def pack(
    index_file: Path = typer.Argument(..., help="Index file (YAML or JSON) listing the models"),
    output_file: Path = typer.Argument(..., help="Output archive path"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
):
    """Pack the models listed in an index file into an atlas archive."""
    _configure_logging(verbose)
    config = _load_config(config_file)

    from .pipeline import AtlasPipeline, PipelineError

    pipeline = AtlasPipeline(config)
    try:
        pipeline.run(index_file, output_file)
    except PipelineError as e:
        console.print(f"[red]Error packing atlas:[/red] {escape(str(e))}")
        if verbose and e.cause is not None:
            console.print(f"[dim]Caused by {type(e.cause).__name__}[/dim]")
        raise typer.Exit(1)

    _display_run_summary(pipeline.summary)


@app.command()
def validate(
    index_file: Path = typer.Argument(..., help="Index file (YAML or JSON) listing the models"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
):
    """Read and normalize every model without writing an archive."""
    _configure_logging(verbose)
    config = _load_config(config_file)

    from .pipeline import AtlasPipeline, PipelineError

    try:
        atlas = AtlasPipeline(config).build(index_file)
    except PipelineError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(title=f"Models in {index_file}")
    table.add_column("Model", style="cyan")
    table.add_column("Frames", style="green")
    table.add_column("Animations", style="green")
    table.add_column("Anchor", style="yellow")
    table.add_column("Image", style="dim")

    for entry in atlas.entries:
        model = entry.model
        table.add_row(
            model.model_id,
            str(model.frame_count),
            ", ".join(model.animation_ids),
            f"{model.anchor_point.x},{model.anchor_point.y}",
            str(entry.image_path),
        )

    console.print(table)
    console.print(f"[green]✓[/green] {len(atlas)} models are valid")


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    validate_config: bool = typer.Option(False, "--validate", help="Validate configuration file"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    env_vars: bool = typer.Option(False, "--env-vars", help="Show available environment variables")
):
    """Manage packer configuration."""
    if env_vars:
        _display_env_vars()
        return

    if show or validate_config:
        packer_config = _load_config(config_file)

        if show:
            _display_config(packer_config)

        if validate_config:
            errors = packer_config.validate()
            if errors:
                console.print("[red]Configuration validation errors:[/red]")
                for error in errors:
                    console.print(f"  • {error}")
                raise typer.Exit(1)
            console.print("[green]✓ Configuration is valid[/green]")
    else:
        console.print("Use --show to display configuration, --validate to check it, or --env-vars to see environment variables.")


@app.command()
def version():
    """Show version information."""
    console.print("[bold]Sprite Atlas Packer[/bold]")
    console.print(f"Version: {__version__}")
    console.print("Python: " + sys.version.split()[0])

    from importlib.metadata import PackageNotFoundError, version as package_version

    table = Table(show_header=False)
    table.add_column("Package", style="cyan")
    table.add_column("Version", style="green")

    for name in ("Pillow", "PyYAML", "toml", "typer", "rich"):
        try:
            table.add_row(name, package_version(name))
        except PackageNotFoundError:
            table.add_row(name, "[red]Not installed[/red]")

    console.print("\n[bold]Dependencies:[/bold]")
    console.print(table)


def _configure_logging(verbose: bool) -> None:
    logging.getLogger("sprite_atlas").setLevel(logging.DEBUG if verbose else logging.INFO)


def _load_config(config_file: Optional[Path]) -> PackerConfig:
    """Load configuration from file or use defaults with environment variable support."""
    config = None

    try:
        if config_file:
            if not config_file.exists():
                console.print(f"[red]Configuration file not found:[/red] {config_file}")
                raise typer.Exit(1)
            config = PackerConfig.from_file(config_file)
            console.print(f"[dim]Using configuration: {config_file}[/dim]")
        else:
            for config_path in (Path("sprite_atlas.toml"), Path("sprite_atlas.json")):
                if config_path.exists():
                    console.print(f"[dim]Using configuration: {config_path}[/dim]")
                    config = PackerConfig.from_file(config_path)
                    break

            if config is None:
                config = PackerConfig()

        config = PackerConfig.apply_env_overrides(config)
    except (ValueError, TypeError, OSError) as e:
        console.print(f"[red]Error loading configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    env_vars_used = [key for key in os.environ if key.startswith('SPRITE_ATLAS_')]
    if env_vars_used:
        console.print(f"[dim]Environment overrides applied: {len(env_vars_used)} variables[/dim]")

    errors = config.validate()
    if errors:
        console.print("[red]Invalid configuration:[/red] " + "; ".join(errors))
        raise typer.Exit(1)

    return config


def _display_run_summary(summary) -> None:
    """Display pack run summary."""
    from .pipeline import RunSummary

    if not isinstance(summary, RunSummary):
        return

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Archive", str(summary.output_path))
    table.add_row("Models packed", str(summary.models_packed))
    table.add_row("Frames", str(summary.frames_packed))
    table.add_row("Animations", str(summary.animations_packed))
    table.add_row("Warnings", str(len(summary.warnings)))
    table.add_row("Total time", f"{summary.duration:.2f}s")

    console.print(table)


def _display_config(config: PackerConfig) -> None:
    """Display configuration in a formatted table."""
    table = Table(title="Sprite Atlas Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Animation Prefix", config.animation_prefix)
    table.add_row("Default Animation", config.default_animation)
    table.add_row("Static Frame Duration", f"{config.static_frame_duration} ms")
    table.add_row("Check Frame Bounds", str(config.check_frame_bounds))
    table.add_row("Require PNG", str(config.require_png))
    table.add_row("Manifest Name", config.manifest_name)
    table.add_row("Image Extension", config.image_extension)
    table.add_row("JSON Indent", str(config.json_indent))
    table.add_row("Compression", config.compression)

    console.print(table)


def _display_env_vars() -> None:
    """Display available environment variables for configuration."""
    table = Table(title="Sprite Atlas Environment Variables")
    table.add_column("Environment Variable", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Example", style="green")

    env_vars = [
        ("SPRITE_ATLAS_ANIMATION_PREFIX", "Tag prefix marking an animation", "a_"),
        ("SPRITE_ATLAS_DEFAULT_ANIMATION", "Animation id for single-frame models", "idle"),
        ("SPRITE_ATLAS_STATIC_FRAME_DURATION", "Frame duration for static images (ms)", "1000"),
        ("SPRITE_ATLAS_CHECK_FRAME_BOUNDS", "Reject tag ranges outside the sheet (true/false)", "false"),
        ("SPRITE_ATLAS_REQUIRE_PNG", "Only accept PNG static images (true/false)", "true"),
        ("SPRITE_ATLAS_MANIFEST_NAME", "Manifest file name inside the archive", "index.json"),
        ("SPRITE_ATLAS_IMAGE_EXTENSION", "Extension of packed image entries", ".png"),
        ("SPRITE_ATLAS_JSON_INDENT", "Manifest JSON indent", "2"),
        ("SPRITE_ATLAS_COMPRESSION", "Archive compression (deflated/stored)", "deflated"),
    ]

    for var_name, description, example in env_vars:
        table.add_row(var_name, description, example)

    console.print(table)
    console.print("\n[dim]Set these environment variables to override configuration file settings.[/dim]")


if __name__ == "__main__":
    app()
