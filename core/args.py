from argparse import ArgumentParser, Namespace
from typing import Iterable, Optional

from core.constants import DESCRIPTION, PROGRAM_AUTHOR, PROGRAM_NAME


def parse_args(args: Optional[Iterable[str]] = None, namespace: Optional[Namespace] = None) -> Namespace:
    parser = ArgumentParser(
        prog=PROGRAM_NAME,
        epilog=f'Copyright (c) 2025 {PROGRAM_AUTHOR}',
        description=DESCRIPTION,
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '-d', '--dictionary',
        metavar='FILE',
        help='Keyword dictionary used to classify material vector parameters'
    )

    parser.add_argument(
        'paths',
        nargs='*',
        metavar='PATH',
        help='JSON files or folders to load on startup'
    )

    return parser.parse_args(args=args, namespace=namespace)
