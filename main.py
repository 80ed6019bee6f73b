import logging
import sys

from rich.logging import RichHandler
from rich.pretty import pprint

from coreopts import ParseError, report
from coreopts.coreutils import dispatch

__prog__ = "coreutils"


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])

    try:
        utility, settings, trailing = dispatch(sys.argv[1:])
    except ParseError as fault:
        report(fault)
        sys.exit(1)

    __prog__ = utility.name
    pprint(settings)
    if trailing:
        pprint(trailing)
