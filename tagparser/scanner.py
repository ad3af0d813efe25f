from __future__ import annotations

from . import t
from .preds import DOUBLE_QUOTE, SINGLE_QUOTE, isWhitespace
from .records import ScanWarning, TagRecord
from .stream import Err, Ok, ResultT, Stream, isOk

if t.TYPE_CHECKING:
    from .config import ParserConfig


def scanTags(s: Stream, config: ParserConfig, warnings: list[ScanWarning] | None = None) -> list[TagRecord]:
    if not len(s):
        return []
    return list(generateTags(s, config, warnings))


def generateTags(
    s: Stream,
    config: ParserConfig,
    warnings: list[ScanWarning] | None = None,
) -> t.Generator[TagRecord, None, None]:
    # Consumes the stream until eof, yielding a TagRecord per recognized tag.
    # Text between tags is skipped over; it's recovered later from the offsets.
    i = 0
    while not s.eof(i):
        start = s.find(i, config.tagStartChar)
        if start == -1:
            return
        res = parseTag(s, start, config, warnings)
        if isOk(res):
            yield res[0]
        i = res[1]


def parseTag(
    s: Stream,
    start: int,
    config: ParserConfig,
    warnings: list[ScanWarning] | None = None,
) -> ResultT[TagRecord]:
    """
    Parses one tag starting at the start delimiter at `start`.

    Fails without a record for an empty tagname (`<>`, `< >`),
    resuming right after whatever whitespace followed the delimiter,
    and for a tag that's never terminated, resuming at eof.
    The latter is noted in `warnings`, when given.
    """
    i = s.skipWhitespace(start + 1)

    tagname, i, _ = parseTagName(s, i, config)
    if tagname is None:
        return Err(i)

    attrStart = s.skipWhitespace(i)

    end, i, _ = parseTagEnd(s, attrStart, config)
    if end is None:
        if warnings is not None:
            text = f"Tag {config.tagStartChar}{tagname} wasn't closed before the end of the content."
            warnings.append(ScanWarning(text=text, lineNum=s.loc(start)))
        return Err(i)

    record = TagRecord(
        name=config.foldTagName(tagname),
        attrStart=attrStart,
        attrEnd=end,
        elementStart=start,
        elementEnd=end,
    )
    return Ok(record, end + 1)


def parseTagName(s: Stream, start: int, config: ParserConfig) -> ResultT[str]:
    # Anything up to whitespace or the end delimiter counts,
    # so `?xml`, `!DOCTYPE`, `!--` and `/p` are all tagnames.
    end = start
    while not s.eof(end) and not isWhitespace(s[end]) and s[end] != config.tagEndChar:
        end += 1
    if end == start:
        return Err(start)
    return Ok(s.slice(start, end), end)


def parseTagEnd(s: Stream, start: int, config: ParserConfig) -> ResultT[int]:
    # Finds the end delimiter, ignoring any that appear inside a quoted span.
    # The two quote kinds toggle independently, each only while outside the other;
    # comments and CDATA get no special treatment.
    outOfDQuote = True
    outOfSQuote = True
    i = start
    while not s.eof(i):
        ch = s[i]
        if ch == config.tagEndChar and outOfDQuote and outOfSQuote:
            return Ok(i, i)
        if ch == DOUBLE_QUOTE and outOfSQuote:
            outOfDQuote = not outOfDQuote
        elif ch == SINGLE_QUOTE and outOfDQuote:
            outOfSQuote = not outOfSQuote
        i += 1
    return Err(i)
