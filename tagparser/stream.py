from __future__ import annotations

import bisect
from dataclasses import dataclass

from . import t
from .preds import isWhitespace

ResultValT_co = t.TypeVar("ResultValT_co", covariant=True)
ResultValT_contra = t.TypeVar("ResultValT_contra", contravariant=True)
OkT: t.TypeAlias = "tuple[ResultValT_co, int, t.Literal[False]]"
ErrT: t.TypeAlias = "tuple[None, int, t.Literal[True]]"
ResultT: t.TypeAlias = "OkT[ResultValT_co] | ErrT"

# Scanning helpers return (value, index, isErr) triples,
# so callers can unpack them as `val, i, _ = helper(s, i)`.
# On failure the index is where scanning should resume.


def Ok(val: ResultValT_contra, index: int) -> OkT[ResultValT_contra]:
    return (val, index, False)


def Err(index: int) -> ErrT:
    return (None, index, True)


def isOk(res: ResultT[ResultValT_co]) -> t.TypeIs[OkT[ResultValT_co]]:
    return not res[2]


@dataclass
class Stream:
    _chars: str
    _len: int
    _lineBreaks: list[int]
    context: str | None

    def __init__(self, chars: str, context: str | None = None) -> None:
        self._chars = chars
        self._len = len(chars)
        self._lineBreaks = [i for i, char in enumerate(chars) if char == "\n"]
        self.context = context

    def __getitem__(self, key: int) -> str:
        if key < 0 or key >= self._len:
            return ""
        return self._chars[key]

    def __len__(self) -> int:
        return self._len

    def slice(self, start: int | None, stop: int | None) -> str:
        if start is not None and start < 0:
            start = 0
        if stop is not None and stop < 0:
            stop = 0
        return self._chars[start:stop]

    def eof(self, index: int) -> bool:
        return index >= self._len

    def find(self, start: int, char: str) -> int:
        # Index of the next `char` at or after `start`, or -1.
        if start >= self._len:
            return -1
        return self._chars.find(char, max(start, 0))

    def rfind(self, end: int, char: str) -> int:
        # Index of the last `char` strictly before `end`, or -1.
        if end <= 0:
            return -1
        return self._chars.rfind(char, 0, end)

    def skipWhitespace(self, start: int) -> int:
        i = start
        while isWhitespace(self[i]):
            i += 1
        return i

    def line(self, index: int) -> int:
        # One-based line number
        return bisect.bisect_left(self._lineBreaks, index) + 1

    def col(self, index: int) -> int:
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        if lineIndex == 0:
            return index + 1
        startOfCol = self._lineBreaks[lineIndex - 1]
        return index - startOfCol

    def loc(self, index: int) -> str:
        rc = f"{self.line(index)}:{self.col(index)}"
        if self.context is None:
            return rc
        return f"{rc} of {self.context}"
