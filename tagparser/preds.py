from __future__ import annotations

DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"
ATTRIB_SEP = "="


def isWhitespace(ch: str) -> bool:
    # Any Unicode whitespace. The empty string (out of bounds) never is.
    return ch.isspace()


def isQuote(ch: str) -> bool:
    return ch in (DOUBLE_QUOTE, SINGLE_QUOTE)


def isAttrNameEnd(ch: str) -> bool:
    return ch == ATTRIB_SEP or isWhitespace(ch)
