"""CLI endpoints command: siteprobe endpoints."""

from __future__ import annotations

from pathlib import Path

import click

from siteprobe.cli._common import echo_json, get_config
from siteprobe.core.endpoints import aggregate_requests, direct_api_endpoints, partition_endpoints
from siteprobe.core.models import InterceptedRequests
from siteprobe.core.report import endpoint_line
from siteprobe.core.snapshot import SnapshotError, read_json, snapshot_from_data


def _load_requests(path: Path, origin: str | None) -> InterceptedRequests:
    data = read_json(path)
    if isinstance(data, list):
        return aggregate_requests(data, origin=origin)
    return snapshot_from_data(data).intercepted_requests


@click.command("endpoints")
@click.argument("source", type=click.Path(path_type=Path))
@click.option(
    "--origin",
    default=None,
    help="Base URL for relative URLs in a raw request log.",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text.")
@click.pass_context
def endpoints_cmd(ctx: click.Context, source: Path, origin: str | None, as_json: bool) -> None:
    """Classify intercepted endpoints as API-like or other.

    SOURCE is a snapshot JSON object, or a raw request log: a JSON array of
    {"method": ..., "url": ...} records, which is grouped by origin + path.
    """
    try:
        requests = _load_requests(source, origin)
    except SnapshotError as e:
        raise click.ClickException(str(e)) from e

    split = partition_endpoints(requests.endpoints)
    direct = direct_api_endpoints(requests.endpoints)

    if as_json:
        echo_json({
            "totalRequests": requests.total_requests,
            "apiEndpoints": [ep.to_dict() for ep in split.api],
            "otherEndpoints": [ep.to_dict() for ep in split.other],
            "directApiEndpoints": [ep.endpoint for ep in direct],
        })
        return

    url_width = (get_config(ctx).get("report") or {}).get("url_width", 60)

    click.echo(f"Total requests: {requests.total_requests}")
    click.echo(f"\nAPI Endpoints ({len(split.api)})")
    for ep in split.api:
        click.echo(endpoint_line(ep, url_width))
    click.echo(f"\nOther Requests ({len(split.other)})")
    for ep in split.other:
        click.echo(endpoint_line(ep, url_width, show_count=False))
    if direct:
        click.echo(f"\nDirect API candidates ({len(direct)})")
        for ep in direct:
            click.echo(f"  {ep.endpoint}")
