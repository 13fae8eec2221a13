"""
sota - a tiny terminal text editor shell.
"""

__version__ = "0.0.1"
version_info = tuple(map(int, __version__.split(".")))

from ._main import main  # noqa: E402
from ._cli import cli  # noqa: E402
