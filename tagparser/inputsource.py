from __future__ import annotations

import errno
import sys
from abc import abstractmethod

import requests
import tenacity


def inputFromName(sourceName: str) -> InputSource:
    if sourceName == "-":
        return StdinInputSource(sourceName)
    if sourceName.startswith("https:"):
        return UrlInputSource(sourceName)
    return FileInputSource(sourceName)


class InputSource:
    """Represents a thing that can produce markup to be parsed.

    Input can be read from stdin ("-"), an HTTPS URL, or a file.
    The whole input is read at once; there's no incremental reading.
    """

    def __init__(self, sourceName: str) -> None:
        self.sourceName = sourceName

    def __str__(self) -> str:
        return self.sourceName

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.sourceName!r})"

    def __hash__(self) -> int:
        return hash(self.sourceName)

    def __eq__(self, other: object) -> bool:
        return str(self) == str(other)

    @abstractmethod
    def read(self) -> str:
        """Fully reads the source."""


class StdinInputSource(InputSource):
    def read(self) -> str:
        return sys.stdin.read()


class UrlInputSource(InputSource):
    @tenacity.retry(
        reraise=True,
        stop=tenacity.stop_after_attempt(3),
        wait=tenacity.wait_random(1, 2),
        retry=tenacity.retry_if_not_exception_type(FileNotFoundError),
    )
    def read(self) -> str:
        response = requests.get(self.sourceName, timeout=10)
        if response.status_code == 404:
            # A concrete answer from the server; not worth retrying.
            raise FileNotFoundError(errno.ENOENT, response.text, self.sourceName)
        response.raise_for_status()
        return response.text


class FileInputSource(InputSource):
    def read(self) -> str:
        # newline="" keeps \r\n line endings, so offsets match the file as written.
        with open(self.sourceName, encoding="utf-8", newline="") as f:
            return f.read()
