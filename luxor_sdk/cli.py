"""
luxor_sdk.cli
──────────────
Diagnostic command line for poking at a controller by hand. Requests are
given as JSON text with the controller's field names; responses are
printed as indented JSON.

    luxor methods
    luxor call ThemeGet '{"ThemeIndex": 0}'
    luxor --base-url http://192.168.1.40 illuminate-all

Defaults come from LUXOR_BASE_URL and LUXOR_TIMEOUT.
"""
import asyncio
from dataclasses import dataclass
from typing import NoReturn, Optional

import typer

from luxor_sdk._registry import METHODS, get_method
from luxor_sdk.tier0_core.config import get_config
from luxor_sdk.tier0_core.errors import LuxorError, UnknownMethodError
from luxor_sdk.tier0_core.logging import configure_logging
from luxor_sdk.tier1_runtime.cancel import CancellationToken
from luxor_sdk.tier2_protocol.controller import Controller
from luxor_sdk.tier2_protocol.messages import IlluminateThemeRequest

app = typer.Typer(help="Call Luxor ZD lighting controller methods by name.")


@dataclass(frozen=True)
class _Options:
    base_url: str
    timeout: Optional[float]

    def token(self) -> CancellationToken:
        return CancellationToken.with_timeout(self.timeout)


def _build_controller(base_url: str) -> Controller:
    return Controller(base_url)


def _fail(message: str) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", "-u", help="Controller base URL"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", min=0.001, help="Seconds allowed per call"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ..."),
) -> None:
    config = get_config()
    if log_level:
        configure_logging(log_level)
    ctx.obj = _Options(
        base_url=base_url or config.base_url,
        timeout=timeout if timeout is not None else config.timeout,
    )


@app.command()
def methods() -> None:
    """List the methods the controller understands."""
    width = max(len(spec.name) for spec in METHODS)
    for spec in METHODS:
        typer.echo(f"{spec.name.ljust(width)}  {spec.description}")


@app.command()
def call(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="Method name, e.g. ThemeGet"),
    request: Optional[str] = typer.Argument(None, help="Request as JSON, e.g. '{\"ThemeIndex\": 0}'"),
) -> None:
    """Call METHOD with an optional JSON REQUEST and print the response."""
    options: _Options = ctx.obj
    try:
        spec = get_method(method)
    except UnknownMethodError as exc:
        typer.echo(f"error: {exc}", err=True)
        typer.echo("Valid methods:", err=True)
        for name in (s.name for s in METHODS):
            typer.echo(f"    {name}", err=True)
        raise typer.Exit(code=1)

    try:
        req = spec.decode(request)
        controller = _build_controller(options.base_url)
        response = asyncio.run(spec.invoke(controller, req, options.token()))
    except LuxorError as exc:
        _fail(str(exc))
    typer.echo(spec.encode(response))


@app.command("illuminate-all")
def illuminate_all(ctx: typer.Context) -> None:
    """Turn on every theme, one after another."""
    options: _Options = ctx.obj
    controller = _build_controller(options.base_url)

    async def run() -> int:
        themes = await controller.theme_list_get(token=options.token())
        for theme in themes.theme_list:
            await controller.illuminate_theme(
                IlluminateThemeRequest(theme_index=theme.theme_index, on_off=1),
                options.token(),
            )
            typer.echo(f"illuminated {theme.theme_index}: {theme.name}")
        return len(themes.theme_list)

    try:
        count = asyncio.run(run())
    except LuxorError as exc:
        _fail(str(exc))
    typer.echo(f"{count} themes illuminated")


if __name__ == "__main__":
    app()
