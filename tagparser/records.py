from __future__ import annotations

import attr

from . import t


@attr.s(frozen=True, slots=True, auto_attribs=True)
class TagRecord:
    """
    One recognized tag occurrence.

    The attribute text is the half-open range [attrStart, attrEnd)
    of the parser's content; the element runs from elementStart
    (the start delimiter) to elementEnd (the end delimiter), inclusive.

    attrEnd always equals elementEnd: both are the index of the end
    delimiter, so `elementStart < attrStart <= attrEnd == elementEnd`.
    """

    name: str = attr.ib(validator=attr.validators.instance_of(str))
    attrStart: int = attr.ib(validator=attr.validators.instance_of(int))
    attrEnd: int = attr.ib(validator=attr.validators.instance_of(int))
    elementStart: int = attr.ib(validator=attr.validators.instance_of(int))
    elementEnd: int = attr.ib(validator=attr.validators.instance_of(int))

    @property
    def attrLength(self) -> int:
        return self.attrEnd - self.attrStart

    @property
    def elementLength(self) -> int:
        return self.elementEnd - self.elementStart + 1

    def __json__(self) -> t.JSONT:
        return {
            "name": self.name,
            "attrStart": self.attrStart,
            "attrEnd": self.attrEnd,
            "elementStart": self.elementStart,
            "elementEnd": self.elementEnd,
        }


@attr.s(frozen=True, slots=True, auto_attribs=True)
class ScanWarning:
    # A tag dropped while scanning; lineNum is a "line:col" location.
    text: str
    lineNum: str
