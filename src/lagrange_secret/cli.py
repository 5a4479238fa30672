# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2025 lagrange-secret contributors

"""Command line interface for secret reconstruction."""

from __future__ import annotations

from fractions import Fraction
from pathlib import Path
from typing import Optional

import click

from . import __version__
from . import settings as config
from .decoding import decode_value, load_document
from .errors import DecodingError, ReconstructionError
from .interpolation import LagrangeTerm, reconstruct, round_half_up
from .log import configure_logging, get_logger, remove_handler

_log = get_logger(__name__)


class ReconstructionFailed(click.ClickException):
    exit_code = 1


class DecodingFailed(click.ClickException):
    exit_code = 2


class InconsistentSecret(click.ClickException):
    exit_code = 3


def format_decimal(value: Fraction, digits: int) -> str:
    """Render *value* with *digits* decimal places, rounding half-up."""
    scale = 10**digits
    scaled = round_half_up(Fraction(value) * scale)
    sign = "-" if scaled < 0 else ""
    whole, frac = divmod(abs(scaled), scale)
    if digits == 0:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{frac:0{digits}d}"


class _TermPrinter:
    def __init__(self, digits: int) -> None:
        self.digits = digits

    def __call__(self, term: LagrangeTerm) -> None:
        n = term.index + 1
        click.echo(
            f"Term {n}: y{n} * L{n}(0) = {term.y} * {term.basis} "
            f"({format_decimal(term.basis, self.digits)})"
        )


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug).")
@click.version_option(__version__, prog_name="lagrange-secret")
def main(verbose: int) -> None:
    """Recover Shamir-shared secrets by exact Lagrange interpolation."""
    level = config.settings.log_level
    if verbose == 1:
        level = "INFO"
    elif verbose > 1:
        level = "DEBUG"
    handler = configure_logging(level)
    click.get_current_context().call_on_close(lambda: remove_handler(handler))


@main.command()
@click.argument("path", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail when the points do not give an integer secret.",
)
@click.option("--show-terms", is_flag=True, help="Print decoded points and interpolation terms.")
def recover(path: Optional[Path], strict: Optional[bool], show_terms: bool) -> None:
    """Reconstruct the secret from the share document at PATH."""
    cfg = config.settings
    if path is None:
        path = Path(cfg.input_path)
    if strict is None:
        strict = cfg.strict

    try:
        document = load_document(path)
    except DecodingError as exc:
        raise DecodingFailed(str(exc)) from exc

    observer = None
    if show_terms:
        for share in document.shares:
            click.echo(f"Point {share.x}: {share.encoded} (base {share.base}) = {share.y}")
        click.echo(f"Using first {document.threshold} points to reconstruct the secret...")
        observer = _TermPrinter(cfg.term_digits)

    try:
        secret = reconstruct(document.points, document.threshold, on_term=observer)
    except ReconstructionError as exc:
        raise ReconstructionFailed(str(exc)) from exc

    warning = secret.warning
    if warning is not None:
        _log.warning("Inconsistent shares in %s: %s", path, secret.value)
        if strict:
            raise InconsistentSecret(str(warning))
        click.echo(f"Warning: {warning}", err=True)
    click.echo(f"Secret (constant term): {secret.integer}")


@main.command()
@click.argument("value")
@click.option("-b", "--base", required=True, help="Radix of VALUE (2-36).")
def decode(value: str, base: str) -> None:
    """Decode VALUE written in radix BASE."""
    try:
        click.echo(decode_value(value, base))
    except DecodingError as exc:
        raise DecodingFailed(str(exc)) from exc


if __name__ == "__main__":
    main()
