"""
C-Minus CLI Entrypoint.

This module provides the `cminusc` command-line driver for the front end.

Features:
    - Read source from `.cm` files or inline strings.
    - Print the token listing, the tree outline, or the tree as JSON.
    - Output to console or file.
    - Optional DEBUG logging of parser progress.

Example usage:
    cminusc program.cm
    cminusc program.cm --tokens
    cminusc -s "int x;" --json
    cminusc program.cm -o program.ast --verbose

Functions:
    run_cminus(source: str, is_string: bool = False, mode: str = "ast", out: str | None = None) -> str:
        Runs the pipeline (scan → parse → render) and prints or writes the result.

    main(argv: list[str] | None = None) -> None:
        Parses CLI arguments, configures logging, and exits with a status code.
"""

import argparse
import json
import logging
import sys

from cminus.cminus_errors import CompileError
from cminus.cminus_lexer import Token, tokenize
from cminus.cminus_parser import Parser
from cminus.cminus_printer import TreePrinter

logger = logging.getLogger(__name__)

MODES = ("ast", "tokens", "json")


def format_tokens(tokens: list[Token]) -> str:
    return "\n".join(f"Line {t.line}: {t.kind} {t.lexeme!r}" for t in tokens)


def run_cminus(
    source: str,
    is_string: bool = False,
    mode: str = "ast",
    out: str | None = None,
) -> str:
    """
    Run the C-Minus front end on a file or string and emit the chosen rendering.

    Args:
        source (str): C-Minus source code or path to a `.cm` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        mode (str): One of 'ast' (tree outline), 'tokens' (token listing), 'json' (tree as JSON).
        out (str | None): Optional path to write the output to. If None, prints to stdout.

    Returns:
        str: The rendered output.

    Raises:
        ValueError: If the file does not end with '.cm' or the mode is unknown.
        ScanError: If the source contains an unterminated comment.
        ParseError: If the source is not a valid program.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown output mode: {mode!r}")
    if not is_string and not source.endswith(".cm"):
        raise ValueError("Only .cm files are supported.")
    if not is_string:
        logger.debug("Reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    tokens = tokenize(source)
    if mode == "tokens":
        output = format_tokens(tokens)
    else:
        program = Parser(tokens).parse()
        if mode == "json":
            output = json.dumps(program.to_dict(), indent=2)
        else:
            output = TreePrinter().render(program)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        logger.debug("Wrote %s", out)
    else:
        print(output)
    return output


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the `cminusc` command.

    Exit status is 0 on success, 1 on a scan or parse error, and 2 when the
    input cannot be read.
    """
    parser = argparse.ArgumentParser(
        prog="cminusc", description="Scan and parse a C-Minus program."
    )
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--ast",
        dest="mode",
        action="store_const",
        const="ast",
        help="Print the syntax tree outline (default)",
    )
    group.add_argument(
        "--tokens",
        dest="mode",
        action="store_const",
        const="tokens",
        help="Print the token listing",
    )
    group.add_argument(
        "--json",
        dest="mode",
        action="store_const",
        const="json",
        help="Print the syntax tree as JSON",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log parser progress to stderr"
    )
    parser.set_defaults(mode="ast")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        run_cminus(
            source=args.source,
            is_string=args.string,
            mode=args.mode,
            out=args.out,
        )
    except CompileError as err:
        print(f"error: {err}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as err:
        print(f"cminusc: {err}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
