"""The ``cut`` command.

Usage::

    rangecut -c LIST FILE
    rangecut -d DELIM LIST FILE
    rangecut -help

FILE is read relative to the working directory; ``-`` reads standard input.
Exactly one option may be given. Failures are reported through
``CutCommand.status_code`` rather than exceptions.
"""

import argparse
import logging
import os
import re
import sys
from pathlib import Path
from typing import NoReturn, TextIO

from typing_extensions import override

from rangecut.extract import ExtractionResult, Extractor
from rangecut.util import (
    DEFAULT_DELIMITER,
    LOG_LEVEL_ENV,
    STATUS_IO_ERROR,
    STATUS_OK,
    STATUS_RUNTIME_ERROR,
    STATUS_USAGE_ERROR,
    STDIN_PARAM,
)

logger = logging.getLogger(__name__)

# \n, \r\n and \r only: \f, \v and Unicode separators are line content
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split ``text`` into lines without their terminators.

    A terminator at the very end does not start an extra empty line.
    """
    lines = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


class UsageError(Exception):
    """Raised for option syntax the command does not accept."""


class _ArgumentParser(argparse.ArgumentParser):
    @override
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _build_parser() -> _ArgumentParser:
    parser = _ArgumentParser(
        prog="cut",
        usage="cut [OPTIONS] [FILE]",
        description=(
            "FILE - Name of the file, when no file is present "
            '(denoted by "-") use standard input'
        ),
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-c",
        dest="characters",
        metavar="LIST",
        help="Use LIST as the list of characters to cut out.",
    )
    parser.add_argument(
        "-d",
        dest="delimiter",
        metavar="DELIM",
        help=(
            "Use DELIM as the field-separator character instead of the TAB "
            "character. An empty DELIM means TAB."
        ),
    )
    parser.add_argument(
        "-help",
        "--help",
        dest="help",
        action="store_true",
        help="Brief information about supported options.",
    )
    parser.add_argument("params", nargs="*", help=argparse.SUPPRESS)
    return parser


class CutCommand:
    """One invocation of ``cut`` with a fixed argument vector."""

    def __init__(self, args: list[str]):
        self.args: list[str] = list(args)
        self.status_code: int = STATUS_OK
        self.extractor: Extractor = Extractor()
        self._parser: _ArgumentParser = _build_parser()

    def help(self) -> str:
        return self._parser.format_help()

    def execute(self, working_dir: Path, stdin: str | TextIO | None) -> str:
        """Run the command and return its output.

        ``status_code`` is 0 on success, 9 for usage and range list errors,
        1 for I/O errors and 2 for other runtime errors.
        """
        self.status_code = STATUS_OK

        try:
            options = self._parser.parse_args(self.args)
        except UsageError as e:
            logger.info("Rejected arguments %r: %s", self.args, e)
            self.status_code = STATUS_USAGE_ERROR
            return f"{e}\n{self.help()}"

        given = [
            name
            for name, value in (
                ("c", options.characters),
                ("d", options.delimiter),
                ("help", options.help or None),
            )
            if value is not None
        ]
        if not given:
            self.status_code = STATUS_USAGE_ERROR
            return self.help()
        if len(given) > 1:
            self.status_code = STATUS_USAGE_ERROR
            return f"Error: More than one option.\n{self.help()}"
        if options.help:
            return self.help()

        params: list[str] = options.params
        if options.characters is not None:
            if len(params) != 1:
                self.status_code = STATUS_USAGE_ERROR
                return self.help()
            range_list, source = options.characters, params[0]
        else:
            if len(params) != 2:
                self.status_code = STATUS_USAGE_ERROR
                return self.help()
            range_list, source = params

        parsed = self.extractor.engine.parse(range_list)
        if not parsed.success:
            logger.info("Rejected range list %r: %s", range_list, parsed.error)
            self.status_code = STATUS_USAGE_ERROR
            return f"{parsed.error}\n"

        try:
            text = self._read_input(working_dir, source, stdin)
        except OSError as e:
            logger.error("Cannot read %r: %s", source, e)
            self.status_code = STATUS_IO_ERROR
            return str(e)
        except UnicodeDecodeError as e:
            logger.error("Cannot decode %r: %s", source, e)
            self.status_code = STATUS_RUNTIME_ERROR
            return str(e)

        return self._cut_lines(text, range_list, options.delimiter)

    def _read_input(
        self, working_dir: Path, source: str, stdin: str | TextIO | None
    ) -> str:
        if source == STDIN_PARAM:
            if stdin is None:
                return ""
            if isinstance(stdin, str):
                return stdin
            return stdin.read()
        return (Path(working_dir) / source).read_text(encoding="utf-8")

    def _cut_lines(self, text: str, range_list: str, delimiter: str | None) -> str:
        output: list[str] = []
        for line in split_lines(text):
            result: ExtractionResult
            if delimiter is not None:
                result = self.extractor.cut_fields(
                    range_list, delimiter or DEFAULT_DELIMITER, line
                )
            else:
                result = self.extractor.cut_characters(range_list, line)

            if not result.success:
                self.status_code = STATUS_USAGE_ERROR
                output.append(f"{result.error}\n")
                break
            output.append(f"{result.text}\n")
        return "".join(output)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=_log_level(os.environ.get(LOG_LEVEL_ENV, "WARNING")),
        format="%(levelname)s %(name)s: %(message)s",
    )
    command = CutCommand(sys.argv[1:] if argv is None else argv)
    output = command.execute(Path.cwd(), sys.stdin)
    stream = sys.stdout if command.status_code == STATUS_OK else sys.stderr
    stream.write(output)
    return command.status_code


if __name__ == "__main__":
    sys.exit(main())
