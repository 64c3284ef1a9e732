from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, Sequence

from pydantic import ValidationError

from escape_utf8.config import PROGRAM, RunConfig
from escape_utf8.escape import run
from escape_utf8.types import ExitCode


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.exit(
            ExitCode.USAGE_ERROR,
            f"{self.prog}: error: {message}\n"
            "Use the --help option to see usage instructions.\n",
        )


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog=PROGRAM.name,
        description=f"{PROGRAM.summary} {PROGRAM.description}",
        epilog="Exit status: 0 success, 1 file could not be opened, "
        "2 invalid UTF-8, 3 read failure, 4 write failure, 5 invalid usage.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        metavar="INPUTFILE",
        help="Path to the input file. If omitted, input is read from stdin.",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="OUTPUTFILE",
        help="Path to the output file. If omitted, output is written to stdout. "
        "An existing file is overwritten.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=PROGRAM.version_line,
    )
    parser.add_argument(
        "--reject-surrogates",
        action="store_true",
        help="Treat encoded UTF-16 surrogates (U+D800 to U+DFFF) as invalid UTF-8.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debugging information to stderr.",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = RunConfig(
            input_path=args.input,
            output_path=args.output,
            reject_surrogates=args.reject_surrogates,
            verbose=args.verbose,
        )
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        parser.error(errors)

    configure_logging(config.verbose)
    sys.exit(run(config))


if __name__ == "__main__":
    main()
