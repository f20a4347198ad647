"""CLI entry point for siteprobe."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from siteprobe import __version__
from siteprobe.cli.analyze_cmd import analyze_cmd
from siteprobe.cli.endpoints_cmd import endpoints_cmd
from siteprobe.cli.robots_cmd import robots_cmd
from siteprobe.core.config import load_config


@click.group()
@click.version_option(version=__version__, prog_name="siteprobe")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to config.yaml (default: $SITEPROBE_HOME/config.yaml).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_file: Path | None) -> None:
    """siteprobe — scraping-feasibility advisor for site analysis snapshots."""
    config = load_config(config_file)
    level_name = "debug" if verbose else (config.get("logging") or {}).get("level", "warning")
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


cli.add_command(analyze_cmd)
cli.add_command(robots_cmd)
cli.add_command(endpoints_cmd)


if __name__ == "__main__":
    cli()
