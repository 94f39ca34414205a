"""Command-line entry point, version reporting and interactive prompts."""

from __future__ import annotations

import argparse
import json
import os
import re
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from importlib import metadata
from typing import Any, TextIO

import yaml

_RED = "\u001b[31m"
_YELLOW = "\u001b[33m"
_MAGENTA = "\u001b[35m"
_RESET = "\u001b[0m"
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DISTRIBUTION = "fireflystack"

BUILD_DATE = ""
BUILD_COMMIT = ""
BUILD_VERSION_OVERRIDE = ""


def firefly_ascii_art() -> str:
    """Return the coloured FireFly banner shown in the root help text."""
    lines = [
        (_YELLOW, "    _______           ________     "),
        (_YELLOW, "   / ____(_)_______  / ____/ /_  __"),
        (_RED, "  / /_  / / ___/ _ \\/ /_  / / / / /"),
        (_RED, " / __/ / / /  /  __/ __/ / / /_/ / "),
        (_MAGENTA, "/_/   /_/_/   \\___/_/   /_/\\__, /  "),
        (_MAGENTA, "                          /____/   "),
    ]
    return "".join(f"{colour}{text}{_RESET}\n" for colour, text in lines)


@dataclass
class VersionInfo:
    """Version details of the command-line tool."""

    version: str = ""
    commit: str = ""
    date: str = ""
    license: str = "Apache-2.0"

    def to_dict(self) -> dict[str, Any]:
        """Return the non-empty fields under their output key names."""
        entries = {
            "Version": self.version,
            "Commit": self.commit,
            "Date": self.date,
            "License": self.license,
        }
        return {key: value for key, value in entries.items() if value}


def _installed_version() -> str:
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return ""


def _build_info() -> VersionInfo:
    return VersionInfo(
        version=BUILD_VERSION_OVERRIDE or _installed_version(),
        commit=BUILD_COMMIT,
        date=BUILD_DATE,
    )


def format_version(info: VersionInfo, output: str = "json") -> str:
    """Render version info as ``json`` or ``yaml``; other formats raise ``ValueError``."""
    if output == "json":
        return json.dumps(info.to_dict(), indent=2)
    if output == "yaml":
        return yaml.safe_dump(info.to_dict(), sort_keys=False)
    raise ValueError(f"invalid output '{output}'")


def format_error(error: BaseException | str, fancy: bool = False) -> str:
    """Return the line used to report an error, in red when ``fancy`` is set."""
    if fancy:
        return f"{_RED}Error: {error}{_RESET}"
    return f"Error: {error}"


def _streams(stdin: TextIO | None, stdout: TextIO | None) -> tuple[TextIO, TextIO]:
    return stdin if stdin is not None else sys.stdin, stdout if stdout is not None else sys.stdout


def _read_line(stdin: TextIO) -> str:
    line = stdin.readline()
    if not line.endswith("\n"):
        raise EOFError("unexpected end of input")
    return line.strip()


def prompt(
    prompt_text: str,
    validate: Callable[[str], Any],
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    fancy: bool = False,
) -> str:
    """Ask until ``validate`` accepts the answer, and return the stripped answer.

    ``validate`` rejects an answer by raising ``ValueError``; the error is shown
    and the question asked again. Raises ``EOFError`` when input runs out.
    """
    stdin, stdout = _streams(stdin, stdout)
    while True:
        stdout.write(prompt_text)
        stdout.flush()
        answer = _read_line(stdin)
        try:
            validate(answer)
        except ValueError as exc:
            stdout.write(format_error(exc, fancy) + "\n")
            continue
        return answer


def confirm(prompt_text: str, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Ask a yes/no question; return on "y" or "yes", otherwise raise ``ValueError``."""
    stdin, stdout = _streams(stdin, stdout)
    stdout.write(f"{prompt_text} [y/N] ")
    stdout.flush()
    answer = _read_line(stdin).lower()
    if answer not in ("y", "yes"):
        raise ValueError(f"confirmation declined with response: '{answer}'")


def select_menu(
    prompt_text: str,
    options: Sequence[str],
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    fancy: bool = False,
) -> str:
    """Show numbered options and return the one picked by number.

    Invalid choices are reported and the menu shown again. Raises ``EOFError``
    when input runs out.
    """
    stdin, stdout = _streams(stdin, stdout)
    while True:
        stdout.write("\n")
        for number, option in enumerate(options, start=1):
            stdout.write(f"  {number}) {option}\n")
        stdout.write(f"\n{prompt_text}: ")
        stdout.flush()
        answer = _read_line(stdin)
        if _INTEGER.fullmatch(answer) is None or not 1 <= int(answer) <= len(options):
            stdout.write(format_error(f"'{answer}' is not a valid option", fancy) + "\n")
            continue
        return options[int(answer) - 1]


def _fancy_features(ansi: str) -> bool:
    if ansi == "always":
        return True
    if ansi == "auto":
        try:
            return os.isatty(sys.stdout.fileno())
        except (AttributeError, OSError, ValueError):
            return False
    return False


def _build_parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=(
            firefly_ascii_art()
            + "\nFireFly CLI is a developer tool used to manage local development stacks\n\n"
            "This tool automates creation of stacks with many infrastructure components which\n"
            "would otherwise be a time consuming manual task. It also wraps docker compose\n"
            "commands to manage the lifecycle of stacks.\n\n"
            f"To get started run: {prog} init\n"
            "Optional: Set FIREFLY_HOME env variable for FireFly stack configuration path."
        ),
    )
    parser.add_argument(
        "--ansi",
        default="auto",
        help='control when to print ANSI control characters ("never"|"always"|"auto")',
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose log output")
    commands = parser.add_subparsers(dest="command")
    version = commands.add_parser(
        "version",
        help="Prints the version info",
        description="Prints the version info of the CLI binary",
    )
    version.add_argument("-s", "--short", action="store_true", help="print only the version")
    version.add_argument(
        "-o", "--output", default="json", help='output format ("yaml"|"json")'
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "ff"
    parser = _build_parser(prog)
    args = parser.parse_args(argv)
    _fancy_features(args.ansi)

    if args.command is None:
        parser.print_help()
        return 0

    info = _build_info()
    if args.short:
        print(info.version)
        return 0
    try:
        text = format_version(info, args.output)
    except ValueError as exc:
        print(format_error(exc), file=sys.stderr)
        return 1
    print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())