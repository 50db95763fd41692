"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands to the
runner.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from dateutil import parser as dt_parser
from dotenv import load_dotenv

from CloudSearchKit.cli.commands import AddCommand, RemoveCommand, SearchCommand, SignCommand
from CloudSearchKit.cli.runner import CommandRunner
from CloudSearchKit.config import AppConfig, load_config
from CloudSearchKit.core.request import SearchRequest


def _parse_pairs(values: tuple[str, ...], option: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {item!r}", param_hint=option)
        pairs.append((name.strip(), value))
    return pairs


def _parse_json_option(value: str | None, option: str) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except ValueError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint=option) from e


def _parse_sort(value: str | None) -> tuple[str, ...] | None:
    if not value:
        return None
    name, _, direction = value.partition(":")
    return (name, direction) if direction else (name,)


@click.group(help="CloudSearchKit: query and update a CloudSearch domain.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables (credentials) from a .env file before
    reading the config.
    """
    load_dotenv()
    ctx.obj = load_config(config_path)


@cli.command("search")
@click.argument("term", required=False, default="")
@click.option("--filter", "filter_json", help='Filter as JSON, e.g. \'{"and": {"type": "donuts"}}\'.')
@click.option("--facet", "facets", multiple=True, help="Facet field (repeatable).")
@click.option("--facet-options", "facet_options_json", help='Facet options as JSON, e.g. \'{"genres": {"size": 5}}\'.')
@click.option("--sort", "sort", help="Sort as FIELD or FIELD:asc|desc.")
@click.option("--page", type=int, help="1-based page number.")
@click.option("--page-size", type=int, help="Results per page (defaults to search.page_size).")
@click.option("--return", "return_fields", multiple=True, help="Field to return with each hit (repeatable).")
@click.option("--print-url", is_flag=True, help="Print the compiled URL and exit without searching.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    term: str,
    filter_json: str | None,
    facets: tuple[str, ...],
    facet_options_json: str | None,
    sort: str | None,
    page: int | None,
    page_size: int | None,
    return_fields: tuple[str, ...],
    print_url: bool,
) -> None:
    """Search the domain for TERM and print matching document ids."""
    cfg: AppConfig = ctx.obj
    filter_value = _parse_json_option(filter_json, "--filter")
    facet_options = _parse_json_option(facet_options_json, "--facet-options")
    if filter_value is not None and not isinstance(filter_value, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--filter")
    if facet_options is not None and not isinstance(facet_options, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--facet-options")

    request = SearchRequest.by_term(
        term,
        filter=filter_value,
        facets=facet_options if facet_options is not None else (facets or None),
        sort=_parse_sort(sort),
        page=page,
        page_size=page_size or cfg.search.page_size,
        return_fields=return_fields or cfg.search.return_fields or None,
    )
    CommandRunner(cfg).run(
        ctx.command.name,
        lambda client: SearchCommand(client=client, request=request, echo=click.echo, print_url=print_url),
    )


@cli.command("add")
@click.argument("doc_id")
@click.option("--field", "fields", multiple=True, help="Text field as NAME=VALUE (repeatable).")
@click.option("--int-field", "int_fields", multiple=True, help="Integer field as NAME=VALUE (repeatable).")
@click.option("--date-field", "date_fields", multiple=True, help="Date field as NAME=DATE, sent as epoch seconds.")
@click.pass_context
def add_cmd(
    ctx: click.Context,
    doc_id: str,
    fields: tuple[str, ...],
    int_fields: tuple[str, ...],
    date_fields: tuple[str, ...],
) -> None:
    """Add or replace the document DOC_ID."""
    values: dict[str, Any] = dict(_parse_pairs(fields, "--field"))
    for name, raw in _parse_pairs(int_fields, "--int-field"):
        try:
            values[name] = int(raw)
        except ValueError as e:
            raise click.BadParameter(f"{name} is not an integer: {raw!r}", param_hint="--int-field") from e
    for name, raw in _parse_pairs(date_fields, "--date-field"):
        try:
            values[name] = dt_parser.parse(raw)
        except (ValueError, OverflowError) as e:
            raise click.BadParameter(f"{name} is not a date: {raw!r}", param_hint="--date-field") from e

    CommandRunner(ctx.obj).run(
        ctx.command.name,
        lambda client: AddCommand(client=client, doc_id=doc_id, fields=values),
    )


@cli.command("remove")
@click.argument("doc_id")
@click.pass_context
def remove_cmd(ctx: click.Context, doc_id: str) -> None:
    """Remove the document DOC_ID."""
    CommandRunner(ctx.obj).run(
        ctx.command.name,
        lambda client: RemoveCommand(client=client, doc_id=doc_id),
    )


@cli.command("sign")
@click.argument("method")
@click.argument("url")
@click.option("--body", default="", help="Request body to sign.")
@click.pass_context
def sign_cmd(ctx: click.Context, method: str, url: str, body: str) -> None:
    """Print SigV4 headers for METHOD URL without sending the request."""
    runner = CommandRunner(ctx.obj)
    runner.run_local(
        ctx.command.name,
        SignCommand(method=method, url=url, body=body, credentials=runner.credentials, echo=click.echo),
    )
