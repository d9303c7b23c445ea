#!/usr/bin/env python3
"""
JSON Log Viewer - A terminal viewer for line-delimited JSON log files
"""
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import BinaryIO, TextIO

from jlv.models.errors import JlvError, LineReadError
from jlv.models.file_view import FileView
from jlv.models.filter import Filter
from jlv.models.log_file import CACHE_SIZE, LogFile, TagRole, open_file
from jlv.views.app import run

LOG_FILE = Path("jlv.log")

logger = logging.getLogger(__name__)


def _configure_logging(log_file: Path) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s[%(process)d]: %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.FileHandler(log_file, mode="a", encoding="utf-8"),
        ],
    )


def _parse_filter(parser: argparse.ArgumentParser, text: str | None) -> Filter | None:
    if text is None:
        return None
    tag, sep, value = text.partition("=")
    if not sep or not tag.strip():
        parser.error(f"invalid filter format {text!r}, expected TAG=VALUE")
    return Filter(tag.strip(), value.strip())


def dump_lines(log_file: LogFile, out: TextIO) -> None:
    """Print every line of the file with its number, for when the terminal
    cannot be used"""
    for i in range(log_file.lines_count):
        try:
            text = log_file.raw_text(i)
        except LineReadError as e:
            logger.error("Stopped dumping lines: %s", e)
            return
        out.write(f"{i:02d}: {text}\n")


def view_file(
    source: BinaryIO,
    args: argparse.Namespace,
    filter_: Filter | None = None,
) -> None:
    """Open the file and browse it, dumping it to stdout when the terminal
    cannot be used"""
    tag_names = {
        TagRole.TIME: args.time_tag,
        TagRole.LEVEL: args.level_tag,
        TagRole.MESSAGE: args.message_tag,
    }
    log_file, error = open_file(source, tag_names, args.cache_size)
    if error is not None:
        logger.warning(
            "Only %d lines could be indexed: %s", log_file.lines_count, error
        )

    view: FileView = log_file.view()
    if filter_ is not None:
        view = view.filter(filter_)

    try:
        run(view)
    except JlvError as e:
        logger.error("Interactive session failed: %s", e)
        dump_lines(log_file, sys.stdout)


def main() -> None:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="JSON Log Viewer - browse line-delimited JSON log files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:
      %(prog)s app.log
      %(prog)s --filter level=error app.log
      %(prog)s --message-tag message --time-tag ts app.log

    Commands:
      :f/<tag>/<value>[/+|-|!|$]   filter (≥, ≤, ≠, regexp)
      :fu  :fr                     back to the parent / root view
      :s/<tag>/<value>[/$]         search a field
      /<text>  ?<text>             search forward / backward, n and N repeat
      :<line>                      go to a line
      :q  :x                       quit
      Tab                          autocomplete
    """,
    )

    parser.add_argument("log_file", help="Path to the JSON log file to view")
    parser.add_argument(
        "--time-tag", default="time", help="Field holding the timestamp"
    )
    parser.add_argument("--level-tag", default="level", help="Field holding the level")
    parser.add_argument(
        "--message-tag", default="msg", help="Field holding the message"
    )
    parser.add_argument(
        "--cache-size",
        type=int,
        default=CACHE_SIZE,
        help="Number of decoded lines kept in memory",
    )
    parser.add_argument(
        "--filter",
        metavar="TAG=VALUE",
        help="Only show the lines where the field equals the value",
    )
    parser.add_argument(
        "--log-file",
        dest="diagnostics_file",
        type=Path,
        default=LOG_FILE,
        help="Where the viewer writes its own diagnostics",
    )

    args = parser.parse_args()

    if not os.path.exists(args.log_file):
        parser.error(f"File '{args.log_file}' not found")

    if not os.path.isfile(args.log_file):
        parser.error(f"'{args.log_file}' is not a file")

    if args.cache_size < 1:
        parser.error("--cache-size must be at least 1")

    filter_ = _parse_filter(parser, args.filter)

    _configure_logging(args.diagnostics_file)
    logger.info("Opening %s", args.log_file)
    with open(args.log_file, "rb") as source:
        view_file(source, args, filter_)


if __name__ == "__main__":
    main()
