"""CLI for today's APOD and the FITS files around it."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from earendel.errors import EarendelError
from earendel.service import FitsLookupService, build_service

app = typer.Typer(help="Astronomy Picture of the Day and related MAST FITS files")


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")


def _service(ctx: typer.Context) -> FitsLookupService:
    if ctx.obj is None:
        ctx.obj = build_service()
    return ctx.obj


def _fail(exc: EarendelError) -> NoReturn:
    typer.secho(f"{exc.kind.value} error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    configure_logging(verbose)


@app.command()
def apod(ctx: typer.Context, output: Optional[Path] = typer.Option(None, help="Where to save the image")) -> None:
    """Show today's Astronomy Picture of the Day."""
    try:
        record = _service(ctx).get_apod_image()
    except EarendelError as exc:
        _fail(exc)

    typer.echo(record.title)
    if record.copyright:
        typer.echo(f"(c) {record.copyright.strip()}")
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(record.image_bytes)
        typer.secho(f"Image written to {output}", fg=typer.colors.GREEN)


@app.command()
def fits(
    ctx: typer.Context,
    page: int = typer.Option(0, min=0, help="Results page to fetch"),
    output: Optional[Path] = typer.Option(None, help="Optional path to dump the page as JSON"),
) -> None:
    """List FITS files near today's APOD subject."""
    try:
        result = _service(ctx).get_fits_page(page)
    except EarendelError as exc:
        _fail(exc)

    payload = result.model_dump_json(indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload, encoding="utf-8")
        typer.secho(f"Page written to {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(payload)


if __name__ == "__main__":  # pragma: no cover
    app()
