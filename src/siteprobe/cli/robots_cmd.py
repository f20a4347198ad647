"""CLI robots command: siteprobe robots."""

from __future__ import annotations

from pathlib import Path

import click

from siteprobe.cli._common import echo_json, get_config
from siteprobe.core.report import robots_lines
from siteprobe.core.robots import parse_robots_txt


@click.command("robots")
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text.")
@click.pass_context
def robots_cmd(ctx: click.Context, target: str, as_json: bool) -> None:
    """Summarize the User-agent: * rules of a robots.txt.

    TARGET is a page URL (robots.txt is fetched from its origin) or a local file.
    """
    if target.startswith(("http://", "https://")):
        from siteprobe.client.robots_client import RobotsClient

        config = get_config(ctx)
        analysis = RobotsClient(config.get("robots", {})).fetch(target)
        if analysis is None:
            if as_json:
                echo_json(None)
            else:
                click.echo("robots.txt not available.")
            return
    else:
        try:
            text = Path(target).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise click.ClickException(f"Cannot read {target}: {e}") from e
        analysis = parse_robots_txt(text)

    if as_json:
        echo_json(analysis.to_dict())
        return

    for line in robots_lines(analysis):
        click.echo(line.strip())
