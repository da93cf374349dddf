"""Command line interface for inspecting requests, targets and queries."""
from __future__ import annotations

import json
import os
import typing as t

import click

from httpgrammar import __version__
from httpgrammar.config import Config
from httpgrammar.encoding import encode_request
from httpgrammar.errors import ParseError
from httpgrammar.query import decode_query
from httpgrammar.request import RequestParser
from httpgrammar.uri import parse_uri


def load_config_file(config: Config, filename: str) -> None:
    """Load *filename* into *config*, choosing the loader by extension."""
    ext = os.path.splitext(filename)[1].lower()
    if ext == ".json":
        config.from_file(filename, load=json.load)
    elif ext == ".toml":
        import tomllib

        config.from_file(filename, load=tomllib.load, text=False)
    else:
        raise click.BadParameter(
            f"unsupported configuration file type {ext!r} (use .json or .toml)",
            param_hint="'--config'",
        )


def _echo_json(obj: t.Any) -> None:
    click.echo(json.dumps(obj, indent=2, sort_keys=True))


@click.group(help="Parse HTTP request heads, request targets and query strings.")
@click.version_option(__version__, prog_name="httpgrammar")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Load settings from a .json or .toml file.",
)
@click.option("--charset", default=None, help="Charset used to decode fields.")
@click.option(
    "--continuation/--no-continuation",
    default=None,
    help="Allow a CRLF between a header's colon and its value.",
)
@click.option("--debug/--no-debug", default=None, help="Log parser decisions.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    charset: str | None,
    continuation: bool | None,
    debug: bool | None,
) -> None:
    config = Config()
    config.from_prefixed_env()
    if config_file:
        load_config_file(config, config_file)
    if charset is not None:
        config["CHARSET"] = charset
    if continuation is not None:
        config["HEADER_LINE_CONTINUATION"] = continuation
    if debug is not None:
        config["DEBUG"] = debug
    ctx.obj = config


@cli.command("parse", short_help="Parse a request head.")
@click.argument("source", type=click.File("rb"), default="-")
@click.option(
    "--allow-trailing",
    is_flag=True,
    help="Accept input left over after the blank line.",
)
@click.option(
    "--canonical",
    is_flag=True,
    help="Print the canonical request bytes instead of JSON.",
)
@click.pass_obj
def parse_command(
    config: Config, source: t.BinaryIO, allow_trailing: bool, canonical: bool
) -> None:
    """Parse the request line and headers read from SOURCE (default stdin)."""
    if allow_trailing:
        config["REQUIRE_FULL_CONSUMPTION"] = False
    parser = RequestParser(config)
    try:
        request = parser.parse_request(source.read())
    except ParseError as e:
        raise click.ClickException(str(e)) from e

    if canonical:
        click.echo(encode_request(request, charset=parser.charset), nl=False)
    else:
        _echo_json(request.to_dict())


@cli.command("uri", short_help="Parse a request target.")
@click.argument("target")
@click.pass_obj
def uri_command(config: Config, target: str) -> None:
    """Parse an origin-form TARGET such as /a/b?x=1#top."""
    try:
        uri = parse_uri(target, charset=config["CHARSET"])
    except ParseError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(uri.to_dict())


@cli.command("query", short_help="Decode a query string.")
@click.argument("query")
@click.pass_obj
def query_command(config: Config, query: str) -> None:
    """Percent-decode QUERY into key/value pairs."""
    try:
        data = decode_query(query, charset=config["CHARSET"])
    except ParseError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(data)


def main() -> None:
    cli.main(prog_name="httpgrammar")
