"""Command line front end: the count, split, merge and sort programs."""

import argparse
import sys

from .errors import UsageError, NotFound, ChildFailure
from .merger import merge_ints
from .orchestrator import sort
from .process import ABORT, CONTINUE
from .splitter import split_ints
from .tokens import count_ints


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(self.format_usage().strip() + "\n" + message)


def build_parser():
    parser = _Parser(prog="extsort", description="External integer sort using one process per step")
    sub = parser.add_subparsers(dest="command", required=True, parser_class=_Parser)

    p = sub.add_parser("count", help="Print how many integers the files hold")
    p.add_argument("files", nargs="+")

    p = sub.add_parser("split", help="Deal integers alternately into two files")
    p.add_argument("source")
    p.add_argument("dest_a")
    p.add_argument("dest_b")

    p = sub.add_parser("merge", help="Merge two sorted integer files")
    p.add_argument("source_a")
    p.add_argument("source_b")
    p.add_argument("destination")

    p = sub.add_parser("sort", help="Sort an integer file, in place if input is output")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("seed", nargs="?", type=int, default=0, help="First temp file ID")
    p.add_argument("--work-dir", help="Directory for temp files")
    p.add_argument("--abort", action="store_true", help="Stop at the first failed step")
    p.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv=None):
    try:
        args = build_parser().parse_args(argv)
        if args.command == "count":
            print(count_ints(*args.files))
        elif args.command == "split":
            split_ints(args.source, args.dest_a, args.dest_b)
        elif args.command == "merge":
            merge_ints(args.source_a, args.source_b, args.destination)
        else:
            if args.seed < 0:
                raise UsageError("seed must not be negative")
            sort(args.input, args.output, args.seed, work_dir=args.work_dir,
                 policy=ABORT if args.abort else CONTINUE, verbose=args.verbose)
    except UsageError as e:
        print(e, file=sys.stderr)
        return 2
    except (NotFound, ChildFailure) as e:
        print("extsort:", e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
