from __future__ import annotations

from . import t
from .attributes import AttributeIterator
from .config import DEFAULT_PARSER_CONFIG, ParserConfig
from .records import ScanWarning, TagRecord
from .scanner import scanTags
from .stream import Stream


class TagParser:
    """
    Generic tag parser for SGML-family markup (HTML, XML, and looser variants).

    Set `content`, call parse(), then query the recognized tags by their
    index ("tag number"), which stays stable until the next parse().
    It doesn't build a tree, match up start/end tags, or decode entities.

        tp = TagParser("<html><head>Heading</head><body>...</body></html>").parse()
        tp.findTag("BODY")  # 3
        tp.textAfter(1)  # "Heading"

    Queries never raise on bad indexes or missing tags;
    they return -1, 0, "", None, or an empty iterator instead.
    If `content` is changed without re-parsing, queries keep answering
    about the previously parsed content.

    parse() never prints or exits. Tags left unclosed at the end of the
    content are dropped and listed in `warnings`, for the caller to report.
    """

    def __init__(self, content: str = "", config: ParserConfig | None = None, *, context: str | None = None) -> None:
        self.config = config or DEFAULT_PARSER_CONFIG
        # Where the content came from, for locations in messages.
        self.context = context
        self._content = ""
        self._stream = Stream("")
        self._records: list[TagRecord] = []
        self._warnings: list[ScanWarning] = []
        self.content = content

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, val: str) -> None:
        if not isinstance(val, str):
            msg = f"TagParser content must be a str, got {type(val).__name__}."
            raise TypeError(msg)
        self._content = val

    @property
    def caseSensitiveTags(self) -> bool:
        return self.config.caseSensitiveTags

    @property
    def caseSensitiveAttributes(self) -> bool:
        return self.config.caseSensitiveAttributes

    @property
    def tagStartChar(self) -> str:
        return self.config.tagStartChar

    @property
    def tagEndChar(self) -> str:
        return self.config.tagEndChar

    def parse(self) -> TagParser:
        # Throws away the previous results entirely.
        self._stream = Stream(self._content, context=self.context)
        self._warnings = []
        self._records = scanTags(self._stream, self.config, warnings=self._warnings)
        return self

    @property
    def warnings(self) -> tuple[ScanWarning, ...]:
        return tuple(self._warnings)

    @property
    def records(self) -> tuple[TagRecord, ...]:
        return tuple(self._records)

    @property
    def tagCount(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> t.Iterator[TagRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"TagParser(tags={len(self._records)}, content={len(self._content)} chars)"

    def _validIndex(self, tagNum: int) -> bool:
        return 0 <= tagNum < len(self._records)

    def tag(self, tagNum: int) -> str:
        if not self._validIndex(tagNum):
            return ""
        return self._records[tagNum].name

    def tagInfo(self, tagNum: int) -> TagRecord | None:
        if not self._validIndex(tagNum):
            return None
        return self._records[tagNum]

    def findTag(self, tagName: str, start: int = 0, occurrence: int = 1) -> int:
        """
        Index of the `occurrence`-th (1-based) tag named `tagName`,
        searching forward from index `start`.
        -1 if `start` is out of range, `occurrence` isn't positive,
        or there aren't that many matching tags.
        """
        if not self._validIndex(start) or occurrence <= 0:
            return -1
        tagName = self.config.foldTagName(tagName)
        for i in range(start, len(self._records)):
            if self._records[i].name == tagName:
                occurrence -= 1
                if occurrence == 0:
                    return i
        return -1

    def countTag(self, tagName: str, start: int = 0) -> int:
        if not self._validIndex(start):
            return 0
        tagName = self.config.foldTagName(tagName)
        return sum(1 for rec in self._records[start:] if rec.name == tagName)

    def rawAttributeText(self, tagNum: int) -> str:
        if not self._validIndex(tagNum):
            return ""
        rec = self._records[tagNum]
        if rec.attrStart >= rec.attrEnd:
            return ""
        return self._stream.slice(rec.attrStart, rec.attrEnd)

    def parseAttributes(self, tagNum: int) -> AttributeIterator:
        # A fresh iterator each call; nothing is cached.
        return AttributeIterator(self.rawAttributeText(tagNum), self.config)

    def textAfter(self, tagNum: int) -> str:
        # Up to the next start delimiter, or to the end of the content for the last tag.
        if not self._validIndex(tagNum):
            return ""
        start = self._records[tagNum].elementEnd + 1
        if tagNum == len(self._records) - 1:
            return self._stream.slice(start, None)
        end = self._stream.find(start, self.config.tagStartChar)
        return self._stream.slice(start, end)

    def textBefore(self, tagNum: int) -> str:
        # The text preceding the tag, back to the previous end delimiter (or the start).
        if not self._validIndex(tagNum):
            return ""
        end = self._records[tagNum].elementStart
        start = self._stream.rfind(end, self.config.tagEndChar) + 1
        return self._stream.slice(start, end)

    def textBetween(self, startNum: int, endNum: int) -> str:
        """
        The raw content between two tags.

        For adjacent tags that's just textAfter(startNum).
        Otherwise it runs from just after startNum
        through the end of the tag right before endNum,
        so any intervening markup is included verbatim.
        """
        if not (self._validIndex(startNum) and self._validIndex(endNum) and startNum < endNum):
            return ""
        if startNum + 1 == endNum:
            return self.textAfter(startNum)
        start = self._records[startNum].attrEnd + 1
        end = self._records[endNum - 1].attrEnd + 1
        return self._stream.slice(start, end)


def parseTags(content: str, config: ParserConfig | None = None, *, context: str | None = None) -> TagParser:
    return TagParser(content, config, context=context).parse()
