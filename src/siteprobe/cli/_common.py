"""Shared helpers for CLI commands."""

from __future__ import annotations

import json

import click

from siteprobe.core.config import load_config


def get_config(ctx: click.Context) -> dict:
    """Config loaded by the root group, or the default config when run standalone."""
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and "config" in obj:
        return obj["config"]
    return load_config()


def echo_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))
