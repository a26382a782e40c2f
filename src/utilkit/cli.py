#!/usr/bin/env python3
import argparse
import sys

from utilkit import __version__
from utilkit.lib import bitops, filesys, strings
from utilkit.lib.config import Config
from utilkit.lib.errors import ContractError, OutOfRangeError
from utilkit.lib.logger import Logger
from utilkit.lib.traits import ScalarKind


def _word_arg(text: str) -> int:
    """Parse a word given in decimal or with a 0x/0o/0b prefix."""

    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid word '{text}'") from None


def _kind_arg(text: str) -> ScalarKind:
    try:
        return ScalarKind.from_label(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level argparse parser with subcommands."""

    parser = argparse.ArgumentParser(prog="utilkit", description="utilkit CLI")
    parser.add_argument("--config", help="Path to a utilkit.cfg file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_version = sub.add_parser("version", help="Print the package version")
    p_version.set_defaults(handler=cmd_version)

    p_bits = sub.add_parser("bits", help="Describe the bits set in a word")
    p_bits.add_argument("word", type=_word_arg, help="Word value, e.g. 20, 0x14 or 0b10100")
    p_bits.add_argument("--width", type=int, help="Word width in bits (8, 16, 32 or 64)")
    p_bits.set_defaults(handler=cmd_bits)

    p_mask = sub.add_parser("mask", help="Build a word from bit indexes")
    p_mask.add_argument("indexes", type=int, nargs="*", help="Bit indexes to set")
    p_mask.add_argument("--width", type=int, help="Word width in bits (8, 16, 32 or 64)")
    p_mask.set_defaults(handler=cmd_mask)

    p_file = sub.add_parser("file", help="Describe a path on disk")
    p_file.add_argument("path", help="File or directory to inspect")
    p_file.set_defaults(handler=cmd_file)

    p_convert = sub.add_parser("convert", help="Parse text as a scalar kind and print it back")
    p_convert.add_argument("text", help="Text to parse")
    p_convert.add_argument("--kind", type=_kind_arg, default=ScalarKind.INT32, help="Kind label, e.g. int32 or double")
    p_convert.set_defaults(handler=cmd_convert)

    return parser


def _hex(word: int, width: int) -> str:
    return f"0x{word:0{width // 4}x}"


def cmd_version(_: argparse.Namespace) -> int:
    """
    Print the package version.

    Args:
        _ (argparse.Namespace): Unused argparse namespace.

    Returns:
        int: Process exit code (0 on success).
    """

    print(__version__)
    return 0


def cmd_bits(ns: argparse.Namespace) -> int:
    """Print a word along with its popcount, LSB, MSB and set bit indexes."""

    width = ns.width if ns.width is not None else Config.get("bitops", "width", 64)
    indexes = bitops.get_1bits(ns.word, width)

    print(f"word:    {_hex(ns.word, width)}")
    print(f"count:   {bitops.count(ns.word, width)}")
    print(f"lsb:     {bitops.lsb(ns.word, width)}")
    print(f"msb:     {bitops.msb(ns.word, width)}")
    print(f"indexes: {strings.build(' ', map(str, indexes))}")
    return 0


def cmd_mask(ns: argparse.Namespace) -> int:
    """Print the word with the given bits set."""

    width = ns.width if ns.width is not None else Config.get("bitops", "width", 64)
    print(_hex(bitops.build_word(*ns.indexes, width=width), width))
    return 0


def cmd_file(ns: argparse.Namespace) -> int:
    """Print whether a path exists, what it is, and for files its size and line count."""

    if not filesys.exists(ns.path):
        Logger.error(f"No such file or directory: '{ns.path}'")
        return 1

    if filesys.is_dir(ns.path):
        print(f"{ns.path}: directory")
        return 0

    lines = filesys.readlines(ns.path)
    line_count = "unreadable" if lines is None else len(lines)
    print(f"{ns.path}: file, {filesys.fsize(ns.path)} bytes, {line_count} lines")
    return 0


def cmd_convert(ns: argparse.Namespace) -> int:
    """Parse text as the requested kind and print its canonical form."""

    value = strings.from_string(ns.text, ns.kind)
    if value is None:
        Logger.error(f"Cannot convert '{ns.text}' to {ns.kind.label}")
        return 1

    print(strings.to_string(value, ns.kind))
    return 0


def _dispatch(ns: argparse.Namespace) -> int:
    """Run the selected subcommand, turning misuse into an exit code."""

    try:
        return ns.handler(ns)
    except (ContractError, OutOfRangeError) as e:
        if Config.get("dev", "stack_trace_errors", False):
            raise

        Logger.error(str(e))
        return 1
    except Exception as e:
        if Config.get("dev", "stack_trace_errors", False):
            raise

        Logger.error(f"Failed to run '{ns.command}': {e}")
        return 1


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the `utilkit` CLI.

    Initializes logging, loads configuration, and dispatches subcommands.

    Args:
        argv (list[str] | None): Arguments excluding the executable; if None, uses sys.argv[1:].

    Returns:
        int: Process exit code.
    """

    Logger.setup(Logger.INFO)

    parser = _build_parser()
    ns = parser.parse_args(argv)

    Config.load(ns.config)
    Logger.set_level(Config.get("dev", "log_level", Logger.INFO))

    if Config.get("dev", "log_level", Logger.INFO) == Logger.DEBUG:
        Logger.debug("Developer logging enabled.")

    return _dispatch(ns)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        if Config.get("dev", "stack_trace_errors", False):
            raise
        Logger.error(f"Error: {e}")
        sys.exit(1)
