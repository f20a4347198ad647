"""CLI analyze command: siteprobe analyze."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import click

from siteprobe.cli._common import echo_json, get_config
from siteprobe.core.recommend import compose
from siteprobe.core.report import render_report
from siteprobe.core.snapshot import SnapshotError, load_snapshot


@click.command("analyze")
@click.argument("snapshot_file", type=click.Path(path_type=Path))
@click.option(
    "--fetch-robots",
    is_flag=True,
    help="Fetch robots.txt from the site when the snapshot has none.",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a text report.")
@click.pass_context
def analyze_cmd(
    ctx: click.Context,
    snapshot_file: Path,
    fetch_robots: bool,
    as_json: bool,
) -> None:
    """Score a site analysis snapshot and recommend a scraping approach.

    \b
    SNAPSHOT_FILE is the JSON record produced by the page collector:
      antiBotDetections, technologies, dataDelivery, interceptedRequests,
      windowProperties, robotsTxt (optional), url, analyzedAt.
    Missing sections are treated as empty.

    \b
    Usage:
      siteprobe analyze snapshot.json
      siteprobe analyze snapshot.json --fetch-robots
      siteprobe analyze snapshot.json --json
    """
    config = get_config(ctx)

    try:
        snapshot = load_snapshot(snapshot_file)
    except SnapshotError as e:
        raise click.ClickException(str(e)) from e

    if fetch_robots and snapshot.robots_txt is None and snapshot.url:
        from siteprobe.client.robots_client import RobotsClient

        robots = RobotsClient(config.get("robots", {})).fetch(snapshot.url)
        if robots is not None:
            snapshot = dataclasses.replace(snapshot, robots_txt=robots)

    recommendation = compose(snapshot)

    if as_json:
        echo_json({
            "url": snapshot.url,
            "recommendation": recommendation.to_dict(),
            "robotsTxt": snapshot.robots_txt.to_dict() if snapshot.robots_txt else None,
        })
        return

    for line in render_report(snapshot, recommendation, config):
        click.echo(line)
