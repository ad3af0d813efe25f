from __future__ import annotations

from . import t
from .preds import ATTRIB_SEP, isAttrNameEnd, isQuote, isWhitespace
from .stream import Err, Ok, OkT, ResultT, Stream, isOk

if t.TYPE_CHECKING:
    from .config import ParserConfig


class AttributeIterator:
    """
    Lazily decomposes raw attribute text into (key, value) pairs.

    Holds the unconsumed text and a scan position,
    and parses one attribute per next() call.
    Stops for good at the end of the text,
    or at the first spot where no key can be read
    (such as a stray `=`).
    """

    def __init__(self, text: str, config: ParserConfig) -> None:
        self._s = Stream(text)
        self._i = self._s.skipWhitespace(0)
        self._config = config
        self._done = False

    def __iter__(self) -> AttributeIterator:
        return self

    def __next__(self) -> t.AttrPairT:
        if self._done or self._s.eof(self._i):
            self._done = True
            raise StopIteration
        res = parseAttribute(self._s, self._i, self._config)
        if not isOk(res):
            self._done = True
            raise StopIteration
        self._i = self._s.skipWhitespace(res[1])
        return res[0]

    def __repr__(self) -> str:
        return f"AttributeIterator({self._s.slice(self._i, None)!r})"


def parseAttribute(s: Stream, start: int, config: ParserConfig) -> ResultT[t.AttrPairT]:
    i = start
    while not s.eof(i) and not isAttrNameEnd(s[i]):
        i += 1
    if i == start:
        return Err(start)

    key = config.foldAttributeName(s.slice(start, i))
    i = s.skipWhitespace(i)
    if s[i] != ATTRIB_SEP:
        # Bare attribute, like `checked`
        return Ok((key, ""), i)

    i = s.skipWhitespace(i + 1)
    if s.eof(i):
        return Ok((key, ""), i)

    if isQuote(s[i]):
        rawValue, i, _ = parseQuotedAttrValue(s, i)
    else:
        rawValue, i, _ = parseUnquotedAttrValue(s, i)
    return Ok((key, unquote(rawValue)), i)


def parseQuotedAttrValue(s: Stream, start: int) -> OkT[str]:
    # No escapes; runs to the matching quote, or to eof if there isn't one.
    # Produces the value with its quotes still on.
    endChar = s[start]
    i = start + 1
    while not s.eof(i) and s[i] != endChar:
        i += 1
    if not s.eof(i):
        i += 1
    return Ok(s.slice(start, i), i)


def parseUnquotedAttrValue(s: Stream, start: int) -> OkT[str]:
    i = start
    while not s.eof(i) and not isWhitespace(s[i]):
        i += 1
    return Ok(s.slice(start, i), i)


def unquote(val: str) -> str:
    if len(val) > 1 and isQuote(val[0]) and val[0] == val[-1]:
        return val[1:-1]
    return val
