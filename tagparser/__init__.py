# pylint: disable=wrong-import-position

from __future__ import annotations

import platform
import sys


def verify_python_version() -> None:
    if sys.version_info < (3, 9):
        print(
            """tagparser requires Python 3.9 or higher; you are on {}.""".format(
                platform.python_version(),
            ),
        )
        sys.exit(1)


verify_python_version()

from . import messages
from .attributes import AttributeIterator
from .cli import main
from .config import DEFAULT_PARSER_CONFIG, ParserConfig
from .parser import TagParser, parseTags
from .records import ScanWarning, TagRecord

__all__ = [
    "DEFAULT_PARSER_CONFIG",
    "AttributeIterator",
    "ParserConfig",
    "ScanWarning",
    "TagParser",
    "TagRecord",
    "main",
    "messages",
    "parseTags",
]
