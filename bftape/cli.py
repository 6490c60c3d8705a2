#!/usr/bin/env python3
"""
Command-line entry point.

    bftape hello.bf              run a file
    bftape -f hello.bf -s 64     run a file on a 64-cell tape
    bftape -c                    interactive shell
    bftape -d                    interactive shell with per-instruction trace
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import Config, load_config, parse_step_limit, parse_tape_size
from .debugger import TracePrinter
from .errors import BrainfuckError, UsageError
from .interpreter import BrainfuckInterpreter
from .io import ConsoleIO, TokenReader
from .repl import command_line
from .source import read_source_file

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_USAGE = 2


def _typed(parse):
    """Adapt a config parser for argparse so bad values become usage errors."""
    def convert(value):
        try:
            return parse(value)
        except UsageError as e:
            raise argparse.ArgumentTypeError(str(e)) from None
    convert.__name__ = parse.__name__
    return convert


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="bftape",
        description="Brainfuck interpreter with a fixed-size circular tape",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("source", nargs="?", help="Source file to run")
    ap.add_argument("-s", "--stack", type=_typed(parse_tape_size), default=None,
                    help="Tape size in cells (default 16)")
    ap.add_argument("-f", "--file", help="Source file to run (takes precedence over SOURCE)")
    ap.add_argument("-c", "--cli", action="store_true", help="Use command line mode")
    ap.add_argument("-d", "--debug", action="store_true",
                    help="Command line mode with a tape dump after every instruction")
    ap.add_argument("--step-limit", type=_typed(parse_step_limit), default=None,
                    help="Abort a run after this many instructions")
    ap.add_argument("--config", help="YAML file with default settings")
    ap.add_argument("--verbose", "-v", action="count", default=0,
                    help="Increase log verbosity (-v, -vv)")
    return ap


def setup_logging(config: Config, verbose: int):
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, config.log_level, logging.WARNING)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(name)s: %(message)s'))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def _wants_help(argv: List[str]) -> bool:
    return any(arg in ("-h", "--help") for arg in argv)


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    ap = build_parser()

    # Help wins over everything else, including malformed flags
    if _wants_help(argv):
        ap.print_help()
        return EXIT_OK

    args = ap.parse_args(argv)

    try:
        config = load_config(args.config)
    except UsageError as e:
        print(f"bftape: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.stack is not None:
        config.tape_size = args.stack
    if args.step_limit is not None:
        config.step_limit = args.step_limit
    if args.debug:
        config.debug = True
    setup_logging(config, args.verbose)

    source_file = args.file or args.source
    use_cli = args.cli or config.debug
    if not source_file and not use_cli:
        ap.print_usage()
        return EXIT_OK

    reader = TokenReader()
    # In debug mode output bytes are shown by the trace instead of echoed
    io = ConsoleIO(reader, echo=not config.debug)
    trace = TracePrinter() if config.debug else None
    itp = BrainfuckInterpreter(config.tape_size, io=io, trace=trace,
                               step_limit=config.step_limit)
    logger.debug("Tape size %d, step limit %s, debug %s",
                 config.tape_size, config.step_limit, config.debug)

    if source_file:
        try:
            itp.parse(read_source_file(source_file))
        except BrainfuckError as e:
            logger.error("%s", e)
            sys.stdout.flush()
            print(f"bftape: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        sys.stdout.flush()
        return EXIT_OK

    try:
        command_line(itp, reader, prompt=config.prompt)
    except KeyboardInterrupt:
        print()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
