from __future__ import annotations

import os
from dataclasses import dataclass

from . import t

if t.TYPE_CHECKING:
    import argparse

TAG_START_CHAR = "<"
TAG_END_CHAR = ">"


@dataclass(frozen=True)
class ParserConfig:
    caseSensitiveTags: bool = False
    caseSensitiveAttributes: bool = False
    tagStartChar: str = TAG_START_CHAR
    tagEndChar: str = TAG_END_CHAR

    def __post_init__(self) -> None:
        for name in ("tagStartChar", "tagEndChar"):
            val = getattr(self, name)
            if not isinstance(val, str) or len(val) != 1:
                msg = f"{name} must be a single character, got {val!r}."
                raise ValueError(msg)
        if self.tagStartChar == self.tagEndChar:
            msg = f"tagStartChar and tagEndChar must differ (both are {self.tagStartChar!r})."
            raise ValueError(msg)

    @staticmethod
    def fromOptions(options: argparse.Namespace) -> ParserConfig:
        return ParserConfig(
            caseSensitiveTags=options.caseSensitiveTags,
            caseSensitiveAttributes=options.caseSensitiveAttributes,
            tagStartChar=options.tagStartChar,
            tagEndChar=options.tagEndChar,
        )

    def foldTagName(self, name: str) -> str:
        if self.caseSensitiveTags:
            return name
        return name.upper()

    def foldAttributeName(self, name: str) -> str:
        if self.caseSensitiveAttributes:
            return name
        return name.upper()


DEFAULT_PARSER_CONFIG = ParserConfig()


def scriptPath(*pathSegs: str) -> str:
    startPath = os.path.dirname(os.path.realpath(__file__))
    return os.path.join(startPath, *pathSegs)
