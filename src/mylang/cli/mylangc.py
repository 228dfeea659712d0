"""
mylangc - mylang Front-End Command-Line Interface
=================================================

This module implements the command-line driver for the mylang front end.
It scans, parses and checks one source file, prints the AST dump to
standard output and the diagnostics to standard error.

Usage Examples
--------------
Check a file and print its tree:
    $ mylangc hello.ml

Print the token stream instead of the tree:
    $ mylangc --tokens --no-dump hello.ml

Only semantic diagnostics:
    $ mylangc --quiet-syntax hello.ml

Verbose mode (stage logging on stderr):
    $ mylangc -v hello.ml
"""

import logging
from pathlib import Path

import click

from mylang import __version__
from mylang.cli.errors import handle_cli_exception
from mylang.frontend import FrontEnd, FrontEndOptions

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream (TYPE<TAB>lexeme per line)",
)
@click.option(
    "--no-dump",
    is_flag=True,
    help="Do not print the AST dump",
)
@click.option(
    "--no-comments",
    is_flag=True,
    help="Do not treat // as a line comment",
)
@click.option(
    "--quiet-syntax",
    is_flag=True,
    help="Recover from syntax errors without reporting them",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="mylangc")
def main(
    input_file: Path,
    tokens: bool,
    no_dump: bool,
    no_comments: bool,
    quiet_syntax: bool,
    verbose: bool,
) -> None:
    """
    Scan, parse and check a mylang source file.

    INPUT_FILE is the source file to check.

    The AST dump goes to standard output and diagnostics, one per line,
    to standard error. The exit status is 0 when the file has no
    diagnostics and 1 when it has any.

    \b
    Examples:
        mylangc hello.ml                   # Dump the tree
        mylangc --tokens --no-dump hello.ml  # Token stream only
        mylangc --quiet-syntax hello.ml    # Semantic diagnostics only
        mylangc -v hello.ml                # Stage logging
    """
    setup_logging(verbose)

    options = FrontEndOptions(
        line_comments=not no_comments,
        syntax_diagnostics=not quiet_syntax,
    )

    try:
        logger.info("Checking %s", input_file)

        result = FrontEnd(options).compile_file(input_file)

        if tokens:
            for token in result.tokens:
                click.echo(f"{token.type.name}\t{token.lexeme}")

        if not no_dump:
            click.echo(result.dump)

        logger.info(
            "Tokenized: %d tokens, parsed: %d function(s)",
            result.token_count,
            len(result.ast.declarations) if result.ast else 0,
        )

        result.raise_if_errors()

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
