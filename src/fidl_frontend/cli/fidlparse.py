"""
fidlparse - FIDL Parser Command-Line Interface
==============================================

This module implements the command-line interface for the FIDL frontend.
It parses one or more .fidl files and reports the first syntax error in
each, without running any later compiler stage.

Usage Examples
--------------
Check files:
    $ fidlparse foo.fidl bar.fidl

Print the parsed tree:
    $ fidlparse --ast foo.fidl

Print the token stream:
    $ fidlparse --tokens foo.fidl

Parse every file even after a failure:
    $ fidlparse --keep-going *.fidl

Verbose mode:
    $ fidlparse -v foo.fidl
"""

import logging
import sys
from pathlib import Path

import click

from fidl_frontend import __version__
from fidl_frontend.errors import FidlError
from fidl_frontend.syntax.ast import ASTPrinter
from fidl_frontend.syntax.frontend import FidlFrontend, FrontendOptions, ParseResult
from fidl_frontend.syntax.lexer import Lexer

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def print_tokens(path: Path, encoding: str) -> None:
    """Echo every token of a file, one per line."""
    lexer = Lexer(path.read_text(encoding=encoding), str(path))
    for token in lexer.tokenize():
        click.echo(repr(token))


def print_summary(result: ParseResult) -> None:
    """Echo the library name and declaration counts of a parsed file."""
    file = result.ast
    click.echo(f"Parsed {result.filename}: library {file.library_name.name}")
    click.echo(
        f"  {len(file.using_list)} using, "
        f"{len(file.const_declaration_list)} const, "
        f"{len(file.enum_declaration_list)} enum, "
        f"{len(file.interface_declaration_list)} interface, "
        f"{len(file.struct_declaration_list)} struct, "
        f"{len(file.union_declaration_list)} union"
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the AST of each parsed file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream instead of parsing",
)
@click.option(
    "--keep-going", "-k",
    is_flag=True,
    help="Parse every file even after one fails",
)
@click.option(
    "--encoding",
    default="utf-8",
    show_default=True,
    help="Text encoding of the input files",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="fidlparse")
def main(
    files: tuple[Path, ...],
    ast: bool,
    tokens: bool,
    keep_going: bool,
    encoding: str,
    verbose: bool,
) -> None:
    """
    Parse FIDL interface definition files.

    FILES are the .fidl source files to parse. Each file is parsed on its
    own; the first syntax error in a file is reported on stderr.

    \b
    Examples:
        fidlparse foo.fidl             # Check syntax
        fidlparse --ast foo.fidl       # Print the AST
        fidlparse --tokens foo.fidl    # Print tokens
        fidlparse -k a.fidl b.fidl     # Don't stop at the first failure
    """
    setup_logging(verbose)

    options = FrontendOptions(encoding=encoding, fail_fast=not keep_going)

    try:
        if tokens:
            for path in files:
                print_tokens(path, options.encoding)
            return

        frontend = FidlFrontend(options)
        results = frontend.parse_files(str(path) for path in files)

        failed = False
        for result in results:
            if not result.ok:
                failed = True
                for error in result.errors:
                    click.echo(error, err=True)
                continue

            if ast:
                click.echo(ASTPrinter().print(result.ast))
            else:
                print_summary(result)

            logger.debug(f"Tokenized: {result.token_count} tokens")

        if failed:
            sys.exit(1)

    except FidlError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
