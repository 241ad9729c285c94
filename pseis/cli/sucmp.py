"""sucmp: compare two seismic data sets.

Returns 0 to the shell if the same, 1 if different, 2 on error.
"""
from typing import List

from pseis.compare import DEFAULT_LIMIT, Comparator
from pseis.errors import ConfigurationError, PseisError
from pseis.su.io import open_trace_file
from pseis.su.segy import byteorder
from pseis.utils.getpars import GetPars
from pseis.utils.log import set_logging

import typer

__all__ = ["app", "main"]


app = typer.Typer(add_completion=False)


@app.command()
def main(
    file_a: str = typer.Argument(..., help="First su file"),
    file_b: str = typer.Argument(..., help="Second su file"),
    pars: List[str] = typer.Argument(
        None,
        help="SU style parameters: limit=1.0e-4 endian=native verbose=0 par=file",
    ),
    limit: float = typer.Option(
        None, help=f"Normalized difference threshold, default {DEFAULT_LIMIT}"
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Print progress, -vv for debug"
    ),
):
    """CoMPare two seismic data sets in CWP/SU format.

    This is the seismic equivalent of cmp(1). However, files which only
    have small numerical differences are considered to be the same.

    sucmp first checks that the number of traces and number of samples are
    the same. It then compares the trace headers bit for bit. Finally it
    checks that the fractional difference of A & B is less than limit.

    It is intended as an aid in regression testing changes to seismic
    processing programs, e.g. in a shell script:

        ./fubar par=tst1.par

        sucmp tst1.su ref/tst1.su || suxwigb <tst1.su
    """
    try:
        getpars = GetPars(pars)
        limit_par = getpars.getparfloat("limit")
        endian = getpars.getparstring("endian") or "native"
        verbose_par = getpars.getparint("verbose") or 0
        getpars.checkpars()

        if limit is None:
            limit = DEFAULT_LIMIT if limit_par is None else limit_par
        if not limit >= 0:
            raise ConfigurationError(f"limit should be non-negative, got {limit}")
        try:
            endian = byteorder(endian)
        except ValueError as e:
            raise ConfigurationError(str(e)) from None
        set_logging(max(verbose, verbose_par))

        comparator = Comparator(limit, endian=endian)
        with open_trace_file(file_a) as fid_a, open_trace_file(file_b) as fid_b:
            result = comparator.run(fid_a, fid_b, name_a=file_a, name_b=file_b)
    except PseisError as e:
        typer.echo(typer.style(f"sucmp: {e}", fg=typer.colors.RED), err=True)
        raise typer.Exit(code=2)

    if not result.matched:
        typer.echo(result.message)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
