from __future__ import annotations

import pathlib
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Callable, Optional

import typer
import structlog
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import load_config, NormcheckConfig
from .errors import ValidationError
from .isbn_ranges import fetch_range_message, parse_range_message, read_range_file
from .result import ValidResult
from .validate import (
    validate_credit_card,
    validate_currency,
    validate_date,
    validate_double,
    validate_email,
    validate_integer,
    validate_isbn,
    validate_name,
    validate_percentage,
    validate_phone,
    validate_ssn,
)

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="normcheck: validate and normalize typed-in values")

DATE_FORMATS = ["%Y-%m-%d"]


class IsbnKind(str, Enum):
    keep = "keep"
    isbn10 = "10"
    isbn13 = "13"


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"normcheck {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Path to normcheck.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(processors=[structlog.processors.JSONRenderer()])
    ctx.obj = {"config": load_config(config) if config else NormcheckConfig(), "verbose": verbose}
    if verbose:
        log.info("verbose_enabled")


def _decimal(value: Optional[str], name: str) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        raise typer.BadParameter(f"{value!r} is not a number", param_hint=name)


def _as_date(value: Optional[datetime]):
    return value.date() if value else None


def _report(ctx: typer.Context, kind: str, validate: Callable[[], ValidResult]) -> None:
    """Run one validation; print the three forms, or the error and exit 1."""
    verbose = ctx.obj["verbose"]
    try:
        result = validate()
    except ValidationError as e:
        if verbose:
            log.info("rejected", kind=kind, error=e.message)
        console.print(e.message, style="red", markup=False)
        raise typer.Exit(code=1)

    if verbose:
        log.info("validated", kind=kind, machine=str(result.machine))
    table = Table(title=kind)
    table.add_column("Form")
    table.add_column("Value")
    table.add_row("machine", Text(str(result.machine)))
    table.add_row("common", Text(result.common))
    table.add_row("particular", Text(result.particular))
    console.print(table)


@app.command()
def integer(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Value to validate"),
    minimum: Optional[int] = typer.Option(None, "--min"),
    maximum: Optional[int] = typer.Option(None, "--max"),
):
    """Validate a 32-bit integer."""
    _report(ctx, "integer", lambda: validate_integer(text, minimum, maximum))


@app.command()
def double(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Value to validate"),
    minimum: Optional[float] = typer.Option(None, "--min"),
    maximum: Optional[float] = typer.Option(None, "--max"),
    digits: Optional[int] = typer.Option(None, "--digits", min=0, help="Significant digits (0 = as typed)"),
):
    """Validate a floating point value."""
    cfg: NormcheckConfig = ctx.obj["config"]
    digits = cfg.numbers.double_digits if digits is None else digits
    _report(ctx, "double", lambda: validate_double(text, minimum, maximum, digits))


@app.command()
def currency(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Amount to validate"),
    minimum: Optional[str] = typer.Option(None, "--min"),
    maximum: Optional[str] = typer.Option(None, "--max"),
    decimals: Optional[int] = typer.Option(None, "--decimals", min=0, help="Required decimal places"),
):
    """Validate a currency amount."""
    cfg: NormcheckConfig = ctx.obj["config"]
    decimals = cfg.numbers.currency_decimals if decimals is None else decimals
    low, high = _decimal(minimum, "--min"), _decimal(maximum, "--max")
    _report(ctx, "currency", lambda: validate_currency(text, low, high, decimals))


@app.command()
def percentage(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Percentage, e.g. 12.5% or 0.125"),
    minimum: Optional[float] = typer.Option(None, "--min", help="Lower limit as a fraction"),
    maximum: Optional[float] = typer.Option(None, "--max", help="Upper limit as a fraction"),
    digits: Optional[int] = typer.Option(None, "--digits", min=0, help="Significant digits"),
):
    """Validate a percentage."""
    cfg: NormcheckConfig = ctx.obj["config"]
    digits = cfg.numbers.percentage_digits if digits is None else digits
    _report(ctx, "percentage", lambda: validate_percentage(text, minimum, maximum, digits))


@app.command()
def date(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Date to validate"),
    minimum: Optional[datetime] = typer.Option(None, "--min", formats=DATE_FORMATS),
    maximum: Optional[datetime] = typer.Option(None, "--max", formats=DATE_FORMATS),
):
    """Validate a date."""
    _report(ctx, "date", lambda: validate_date(text, _as_date(minimum), _as_date(maximum)))


@app.command()
def name(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Name to validate"),
    abbreviation: bool = typer.Option(True, "--abbreviation/--no-abbreviation", help="Turn single letters into initials"),
):
    """Validate and title-case a name."""
    _report(ctx, "name", lambda: validate_name(text, abbreviation))


@app.command()
def email(ctx: typer.Context, text: str = typer.Argument(..., help="Address to validate")):
    """Validate an email address."""
    _report(ctx, "email", lambda: validate_email(text))


@app.command()
def phone(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Telephone number to validate"),
    country_code: Optional[bool] = typer.Option(None, "--country-code/--no-country-code", help="Always show the country code"),
    locale: Optional[str] = typer.Option(None, "--locale", help="Locale or region, e.g. en_US"),
):
    """Validate a telephone number."""
    cfg: NormcheckConfig = ctx.obj["config"]
    required = cfg.phone.country_code_required if country_code is None else country_code
    region = locale or cfg.phone.locale
    _report(ctx, "phone", lambda: validate_phone(text, required, region))


@app.command()
def ssn(ctx: typer.Context, text: str = typer.Argument(..., help="Social Security number to validate")):
    """Validate a US Social Security number."""
    _report(ctx, "ssn", lambda: validate_ssn(text))


@app.command()
def isbn(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="ISBN-10 or ISBN-13"),
    kind: IsbnKind = typer.Option(IsbnKind.keep, "--kind", help="Output form"),
):
    """Validate an ISBN, optionally converting between 10 and 13 digits."""
    cfg: NormcheckConfig = ctx.obj["config"]
    authority = cfg.ranges.authority()
    size = 0 if kind is IsbnKind.keep else int(kind.value)
    _report(ctx, "isbn", lambda: validate_isbn(text, size, authority))


@app.command()
def card(ctx: typer.Context, text: str = typer.Argument(..., help="Credit card number to validate")):
    """Validate a credit card number (Luhn)."""
    _report(ctx, "card", lambda: validate_credit_card(text))


@app.command()
def ranges(
    ctx: typer.Context,
    save: Optional[pathlib.Path] = typer.Option(None, "--save", help="Write the raw range document here"),
):
    """Load the ISBN range document and summarize it."""
    cfg: NormcheckConfig = ctx.obj["config"]
    try:
        raw = read_range_file(cfg.ranges.file) if cfg.ranges.file else fetch_range_message(cfg.ranges.url, cfg.ranges.timeout)
        message = parse_range_message(raw)
    except ValidationError as e:
        console.print(e.message, style="red", markup=False)
        raise typer.Exit(code=1)

    console.print(f"{len(message.groups)} registration groups (serial {message.serial or '?'}, {message.date or 'undated'})")
    if save:
        save.write_bytes(raw)
        console.print(f"[green]Range document written:[/green] {save}")
