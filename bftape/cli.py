#!/usr/bin/env python3
"""
Command-line front end.

    bftape [-f] PROGRAM_FILE
    bftape -x PROGRAM_CODE

The program reads standard input and writes standard output as raw bytes.
The process exit code is the run's ExitStatus.
"""

import argparse
import logging
import sys
from typing import List, Optional

from bftape.brainfuck import BrainfuckInterpreter
from bftape.brainfuck_debugger import BrainfuckDebugger
from bftape.config import InterpreterConfig
from bftape.core.bf_runner import load_program, run_program
from bftape.core.streams import stdio_streams
from bftape.errors import BrainfuckError, ExitStatus


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        sys.exit(ExitStatus.INVALID_ARGS)


def build_parser() -> argparse.ArgumentParser:
    ap = _ArgumentParser(prog="bftape", description="Run a Brainfuck program on a fixed-size byte tape")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("file", nargs="?", help="Path to the program source")
    src.add_argument("-f", dest="file_opt", metavar="FILE", help="Path to the program source")
    src.add_argument("-x", dest="code", metavar="CODE", help="Program text given inline")
    ap.add_argument("--tape-size", type=int, default=None, help="Number of tape cells (env BF_TAPE_SIZE)")
    ap.add_argument("--max-loop-depth", type=int, default=None, help="Maximum loop nesting (env BF_MAX_LOOP_DEPTH)")
    ap.add_argument("--step-limit", type=int, default=None, help="Abort after this many steps (env BF_STEP_LIMIT)")
    ap.add_argument("--debug", action="store_true", help="Trace every step to stderr")
    ap.add_argument("--verbose", action="store_true", help="Log interpreter internals to stderr")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(name)s: %(message)s")

    try:
        config = InterpreterConfig.from_env(
            tape_size=args.tape_size,
            max_loop_depth=args.max_loop_depth,
            max_steps=args.step_limit,
        )
    except ValueError as e:
        print(f"{ap.prog}: error: {e}", file=sys.stderr)
        return ExitStatus.INVALID_ARGS

    try:
        if args.code is not None:
            code = args.code
        else:
            code = load_program(args.file if args.file is not None else args.file_opt)
        itp = BrainfuckDebugger(config) if args.debug else BrainfuckInterpreter(config)
    except BrainfuckError as e:
        print(f"{ap.prog}: {e}", file=sys.stderr)
        return e.status

    source, sink = stdio_streams()
    status = run_program(code, source, sink, interpreter=itp)
    if status != ExitStatus.SUCCESS:
        print(f"{ap.prog}: {status.name.lower().replace('_', ' ')} (exit {int(status)})", file=sys.stderr)
    return status


if __name__ == "__main__":
    sys.exit(main())
