import sys

from ._main import main
from .utils import enable_udp_logging, listen_to_logs


def cli(argv=None):
    argv = sys.argv if argv is None else argv
    if "--listen" in argv:
        listen_to_logs()
    else:
        enable_udp_logging()
        sys.exit(main(keys="--keys" in argv))
