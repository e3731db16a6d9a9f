"""Command line entry point issuing single API calls."""

from collections.abc import Callable
from pathlib import Path

import httpx
import typer

from xero_client._version import __version__
from xero_client.auth import BearerTokenSigner
from xero_client.config.settings import Settings, get_settings
from xero_client.core.logging import setup_logging_from_settings
from xero_client.exceptions import XeroClientError
from xero_client.http import HttpDispatcher, Response

from .helpers import get_console, print_call_event, print_response


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)

console = get_console()
err_console = get_console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"xero-client {__version__}")
        raise typer.Exit()


def create_dispatcher(settings: Settings, client: httpx.Client | None = None) -> HttpDispatcher:
    """Build the dispatcher used by every command."""
    signer = None
    if settings.access_token is not None:
        signer = BearerTokenSigner(settings.access_token.get_secret_value())
    return HttpDispatcher.from_settings(settings, signer=signer, client=client)


@app.callback()
def app_main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    base_url: str | None = typer.Option(
        None, "--base-url", help="Override the API base address."
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        envvar="XERO_CLIENT_ACCESS_TOKEN",
        help="Bearer token used to sign requests.",
    ),
    user_agent: str | None = typer.Option(
        None, "--user-agent", help="Override the User-Agent header."
    ),
    header: list[str] = typer.Option(
        [], "--header", "-H", help="Extra header as 'Name: value' (repeatable)."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print call events and response headers."
    ),
) -> None:
    """Issue signed calls against the Xero accounting API."""
    try:
        settings = get_settings()
    except XeroClientError as e:
        err_console.print(f"[error]{e}[/error]")
        raise typer.Exit(2) from e

    updates: dict[str, object] = {}
    if base_url:
        updates["base_url"] = base_url
    if token:
        updates["access_token"] = token
    if user_agent:
        updates["user_agent"] = user_agent
    if updates:
        settings = Settings.model_validate({**settings.model_dump(), **updates})

    setup_logging_from_settings(settings.logging)

    headers: dict[str, str] = {}
    for raw in header:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise typer.BadParameter(
                f"Expected 'Name: value', got {raw!r}", param_hint="--header"
            )
        headers[name.strip()] = value.strip()

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["headers"] = headers
    ctx.obj["verbose"] = verbose


def _run(ctx: typer.Context, call: Callable[[HttpDispatcher], Response]) -> None:
    settings: Settings = ctx.obj["settings"]
    verbose: bool = ctx.obj["verbose"]

    try:
        with create_dispatcher(settings) as dispatcher:
            for name, value in ctx.obj["headers"].items():
                dispatcher.add_header(name, value)
            if verbose:
                dispatcher.subscribe(lambda event: print_call_event(err_console, event))
            response = call(dispatcher)
    except httpx.TransportError as e:
        err_console.print(f"[error]Transport error: {e}[/error]")
        raise typer.Exit(2) from e
    except XeroClientError as e:
        err_console.print(f"[error]{e}[/error]")
        raise typer.Exit(2) from e

    print_response(console, response, show_headers=verbose)
    if response.status_code >= 400:
        raise typer.Exit(1)


def _read_payload(data: str | None, file: Path | None) -> bytes:
    if file is not None:
        return file.read_bytes()
    if data is not None:
        return data.encode("utf-8")
    raise typer.BadParameter("Provide --data or --file")


@app.command()
def get(
    ctx: typer.Context,
    endpoint: str = typer.Argument(..., help="Endpoint path, e.g. /api.xro/2.0/Invoices"),
    query: str | None = typer.Option(None, "--query", "-q", help="Raw query string."),
) -> None:
    """GET an endpoint as JSON."""
    _run(ctx, lambda d: d.get(endpoint, query))


@app.command("get-raw")
def get_raw(
    ctx: typer.Context,
    endpoint: str = typer.Argument(...),
    mime_type: str = typer.Option(
        "application/pdf", "--accept", "-a", help="Media type to accept."
    ),
    query: str | None = typer.Option(None, "--query", "-q"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the body to this file instead of stdout."
    ),
) -> None:
    """GET an endpoint with an explicit Accept type."""
    if output is None:
        _run(ctx, lambda d: d.get_raw(endpoint, mime_type, query))
        return

    def call(d: HttpDispatcher) -> Response:
        response = d.get_raw(endpoint, mime_type, query)
        output.write_bytes(response.content)
        return response

    _run(ctx, call)


@app.command()
def delete(ctx: typer.Context, endpoint: str = typer.Argument(...)) -> None:
    """DELETE an endpoint."""
    _run(ctx, lambda d: d.delete(endpoint))


@app.command()
def post(
    ctx: typer.Context,
    endpoint: str = typer.Argument(...),
    data: str | None = typer.Option(None, "--data", "-d", help="Request body."),
    file: Path | None = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="Read the body from a file."
    ),
    content_type: str = typer.Option("application/xml", "--content-type", "-t"),
    query: str | None = typer.Option(None, "--query", "-q"),
) -> None:
    """POST a body to an endpoint."""
    payload = _read_payload(data, file)
    _run(ctx, lambda d: d.post(endpoint, payload, content_type, query))


@app.command()
def put(
    ctx: typer.Context,
    endpoint: str = typer.Argument(...),
    data: str | None = typer.Option(None, "--data", "-d", help="Request body."),
    file: Path | None = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="Read the body from a file."
    ),
    content_type: str = typer.Option("application/xml", "--content-type", "-t"),
    query: str | None = typer.Option(None, "--query", "-q"),
) -> None:
    """PUT a body to an endpoint."""
    payload = _read_payload(data, file)
    _run(ctx, lambda d: d.put(endpoint, payload, content_type, query))


@app.command()
def upload(
    ctx: typer.Context,
    endpoint: str = typer.Argument(...),
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    content_type: str = typer.Option(
        "application/octet-stream", "--content-type", "-t", help="Media type of the file."
    ),
    name: str = typer.Option("file", "--name", "-n", help="Form field name."),
    filename: str | None = typer.Option(
        None, "--filename", help="File name sent to the server; defaults to the file's name."
    ),
) -> None:
    """Upload a file as a single-part multipart form."""
    payload = file.read_bytes()
    _run(
        ctx,
        lambda d: d.post_multipart_form(
            endpoint, content_type, name, filename or file.name, payload
        ),
    )


def main() -> None:
    app()
