import argparse
import logging


def argparse_add_logging_args(parser: argparse.ArgumentParser):
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--debug",
        action="store_const",
        const=logging.DEBUG,
        dest="loglevel",
        help="Print debug messages",
    )
    group.add_argument(
        "--quiet",
        "-q",
        action="store_const",
        const=logging.ERROR,
        dest="loglevel",
        help="Only print errors",
    )
    parser.set_defaults(loglevel=logging.INFO)


def argparse_parse_logging(args: argparse.Namespace):
    logging.basicConfig(level=args.loglevel, format="[%(levelname)s] %(message)s")
