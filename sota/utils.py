"""
Logging for sota.

The terminal is the editor's screen, so logs cannot go to stdout or
stderr. Instead the records are sent over UDP to localhost, where
``sota --listen`` (running in another terminal) prints them.
"""

import socket
import logging

logger = logging.getLogger("sota")

PORT = 12014
LOG_FORMAT = "%(asctime)s %(levelname)s [%(module)s] %(message)s"

# Keep datagrams well below the usual MTU
CHUNK_SIZE = 2**10


class UDPHandler(logging.Handler):
    """Logging handler that sends each record as one or more datagrams."""

    def __init__(self, address=("127.0.0.1", PORT)):
        super().__init__()
        self.udp_address = address
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.setFormatter(logging.Formatter(LOG_FORMAT))

    def emit(self, record):
        try:
            bb = self.format(record).encode()
            while bb:
                chunk, bb = bb[:CHUNK_SIZE], bb[CHUNK_SIZE:]
                self._socket.sendto(chunk, self.udp_address)
        except Exception:
            self.handleError(record)

    def close(self):
        self._socket.close()
        super().close()


def enable_udp_logging(address=("127.0.0.1", PORT)):
    """Attach a UDPHandler to the sota logger (once)."""
    for handler in logger.handlers:
        if isinstance(handler, UDPHandler):
            return handler
    handler = UDPHandler(address)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return handler


def listen_to_logs(port=PORT):
    """Called from ``sota --listen``

    This way we can see the logs from another process, so it does not
    get mixed up with what the editor draws.
    """

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", port))
    print(f"Listening for sota logs on port {port}")

    try:
        while True:
            data, addr = sock.recvfrom(2**20)
            print(data.decode(errors="replace"))
    except KeyboardInterrupt:
        pass
    finally:
        sock.close()
