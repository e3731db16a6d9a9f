"""CLI helper utilities."""

from rich.console import Console
from rich.theme import Theme

from xero_client.hooks import ApiCallEvent
from xero_client.http import Response


CUSTOM_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "yellow",
        "info": "cyan",
        "dim": "dim white",
    }
)


def get_console(stderr: bool = False) -> Console:
    return Console(theme=CUSTOM_THEME, stderr=stderr, highlight=False)


def status_style(status_code: int) -> str:
    if status_code < 300:
        return "success"
    if status_code < 400:
        return "warning"
    return "error"


def print_response(console: Console, response: Response, show_headers: bool = False) -> None:
    style = status_style(response.status_code)
    console.print(
        f"[{style}]{response.status_code} {response.status_name}[/{style}]"
    )
    if show_headers:
        for name, value in response.headers.items():
            console.print(f"[dim]{name}: {value}[/dim]")
    if response.body:
        console.print(response.body, markup=False)


def print_call_event(console: Console, event: ApiCallEvent) -> None:
    console.print(
        f"[info]{event.method} {event.endpoint}[/info] "
        f"-> {event.response_code} in {event.elapsed_ms} ms",
    )
