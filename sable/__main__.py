import argparse
import logging
import sys

from sable import __version__
from sable.config import get_log_level, get_trace_limit
from sable.errors import SableError, SchemeExit
from sable.interpreter import Interpreter
from sable.repl import ReplSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sable", description="Sable Scheme interpreter")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging for loading and evaluation"
    )
    parser.add_argument("-l", "--load", metavar="FILE", help="Source file to load and run, then exit")
    parser.add_argument(
        "--no-prelude", action="store_true", help="Start without the derived syntax prelude"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("args", nargs="*", help="Strings bound to *argv*")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    interpreter = Interpreter(prelude=None if args.no_prelude else 'auto', argv=args.args)
    try:
        if args.load:
            interpreter.load(args.load)
        else:
            ReplSession(interpreter).run()
    except SchemeExit as exc:
        return exc.code
    except SableError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        if len(interpreter.call_stack):
            print(interpreter.call_stack.format(get_trace_limit()), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
