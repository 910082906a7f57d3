"""
Command line entry point for hexview.
"""

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple, TypeVar

from .core.buffer import HexBuffer
from .core.config import Config
from .core.formatter import CancellationToken
from .core.highlight import render_records
from .core.validator import normalize_hex_input
from .utils.hex_utils import abbreviate, hex_to_printable
from .utils.search import HexLineView, PlainLineView, filter_lines

logger = logging.getLogger(__name__)

R = TypeVar('R')

CANCELED_MESSAGE = "Operation canceled"
EXIT_CANCELED = 130
PREVIEW_LENGTH = 40


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        prog="hexview",
        description="hexview - Hex dump viewer with undoable line edits"
    )
    parser.add_argument("file", help="File to dump")
    parser.add_argument("-n", "--length", type=int, help="Only dump the first LENGTH bytes")
    parser.add_argument("--plain", action="store_true", help="Show the plain text view")
    parser.add_argument("-f", "--filter", dest="query", help="Only show lines matching QUERY")
    parser.add_argument("-l", "--line-numbers", action="store_true", help="Prefix lines with their index")
    parser.add_argument(
        "-p", "--patch",
        action="append",
        default=[],
        metavar="LINE:HEX",
        help="Replace line LINE with HEX (repeatable)"
    )
    parser.add_argument(
        "-d", "--delete",
        action="append",
        type=int,
        default=[],
        metavar="LINE",
        help="Delete line LINE (repeatable, applied as one edit after patches)"
    )
    parser.add_argument("-o", "--output", help="Save the edited bytes to OUTPUT")
    parser.add_argument("--chunk-size", type=int, help="Block size used when saving")
    parser.add_argument("--strict", action="store_true", help="Reject patches longer than one line")
    parser.add_argument("--colour", action="store_true", help="Colour the hex dump")
    parser.add_argument("-s", "--size", action="store_true", help="Print the size of the edited data")
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print the dump")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging")
    return parser.parse_args(argv)


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG

    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run_cancellable(func: Callable[..., R], cancel: CancellationToken, *args, **kwargs) -> R:
    """Run func on a worker thread, cancelling the token on Ctrl+C."""

    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(func, *args, cancel=cancel, **kwargs)
        try:
            return future.result()
        except KeyboardInterrupt:
            cancel.cancel()
            return future.result()


def parse_patch(patch: str) -> Tuple[int, str]:
    """Split a LINE:HEX patch argument."""

    line, sep, hex_text = patch.partition(':')
    if not sep:
        raise ValueError(f"Invalid patch {patch!r}, expected LINE:HEX")

    return int(line), hex_text


def apply_edits(buf: HexBuffer, patches: List[str], deletes: List[int]) -> None:
    """Apply --patch and --delete arguments to the buffer."""

    for patch in patches:
        position, hex_text = parse_patch(patch)
        if not buf.update_line(position, hex_text):
            raise ValueError(f"Invalid hex for line {position}: {abbreviate(hex_text, PREVIEW_LENGTH)!r}")
        logger.info("Patched line %d: %s", position, hex_to_printable(normalize_hex_input(hex_text)))

    if deletes:
        buf.delete_lines(deletes)


def render(buf: HexBuffer, args: argparse.Namespace, config: Config) -> str:
    if args.plain:
        kept = filter_lines(buf.plain_lines(), args.query, PlainLineView())
        rendered = [entry.item for entry in kept]
    else:
        kept = filter_lines(buf.lines, args.query, HexLineView())
        text = render_records([entry.item for entry in kept], config.colour)
        rendered = text.split('\n') if text else []

    if args.line_numbers:
        rendered = [f"{entry.origin:>8}  {line}" for entry, line in zip(kept, rendered)]

    return '\n'.join(rendered)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = parse_args(argv)
    setup_logging(args.verbose)
    config = Config.from_args(args)
    buf = HexBuffer(config)

    cancel = CancellationToken()
    try:
        loaded = run_cancellable(buf.load_file, cancel, args.file, length=args.length)
    except OSError as e:
        print(f"Error loading {args.file}: {e}", file=sys.stderr)
        return 1

    if not loaded:
        print(CANCELED_MESSAGE, file=sys.stderr)
        return EXIT_CANCELED

    try:
        apply_edits(buf, args.patch, args.delete)
    except (ValueError, IndexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        output = render(buf, args, config)
        if output:
            print(output)

    if args.size:
        print(f"{buf.get_line_count()} lines, {buf.get_human_size()}", file=sys.stderr)

    if args.output:
        cancel.reset()
        result = run_cancellable(buf.save_file, cancel, args.output)
        if result.cancelled:
            print(CANCELED_MESSAGE, file=sys.stderr)
            return EXIT_CANCELED
        if result.error_message is not None:
            print(f"Error: {result.error_message}", file=sys.stderr)
            return 1
        logger.info("Saved %s", result.destination)

    return 0


if __name__ == "__main__":
    sys.exit(main())
