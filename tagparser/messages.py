from __future__ import annotations

import contextlib
import dataclasses
import json
import sys
from collections import Counter

from . import t

MESSAGE_LEVELS = {
    "everything": 0,
    "message": 1,
    "warning": 2,
    "fatal": 3,
    "nothing": 4,
}

DEATH_TIMING = [
    "early",  # exit as soon as a disallowed message is reported
    "late",  # exit once the command has finished
]

PRINT_MODES = [
    "plain",
    "console",
    "markup",
    "json",
]

# Plain-text heading and console color per category.
HEADINGS = {
    "fatal": ("FATAL ERROR", "red"),
    "warning": ("WARNING", "light cyan"),
    "failure": ("STOPPED", "red"),
}

MARKUP_TAGS = {
    "failure": "final-failure",
}

COLORS = {
    "red": 31,
    "green": 32,
    "blue": 34,
    "cyan": 36,
    "light cyan": 96,
    "white": 97,
}

STYLES = {
    "normal": 0,
    "bold": 1,
}


@dataclasses.dataclass()
class MessagesState:
    # Lowest category that makes the command fail
    dieOn: str = "fatal"
    # Whether that failure happens right away, or after the command finishes
    dieWhen: str = "late"
    # Lowest category that gets printed
    printOn: str = "everything"
    # Suppress every category, plus the final failure notice
    silent: bool = False
    printMode: str = "console"
    asciiOnly: bool = False
    fh: t.TextIO = t.cast("t.TextIO", sys.stdout)  # noqa: RUF009
    seenMessages: set[str] = dataclasses.field(default_factory=set)
    categoryCounts: Counter[str] = dataclasses.field(default_factory=Counter)

    def shouldDie(self, category: str, timing: str = "early") -> bool:
        if timing == "early" and self.dieWhen == "late":
            return False
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.dieOn]

    def shouldPrint(self, category: str) -> bool:
        return not self.silent and MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.printOn]

    @staticmethod
    def categoryName(categoryNum: int) -> str:
        # Each -q on the command line raises the print threshold one level.
        levels = list(MESSAGE_LEVELS)
        return levels[min(categoryNum, len(levels) - 1)]


state = MessagesState()


def p(msg: str, end: str | None = None) -> None:
    if state.asciiOnly:
        msg = msg.encode("ascii", "replace").decode()
    try:
        print(msg, end=end, file=state.fh)
    except UnicodeEncodeError:
        print(msg.encode("ascii", "replace").decode(), end=end, file=state.fh)


def die(msg: str, lineNum: str | int | None = None) -> None:
    report("fatal", msg, lineNum)


def warn(msg: str, lineNum: str | int | None = None) -> None:
    report("warning", msg, lineNum)


def report(category: str, text: str, lineNum: str | int | None = None) -> None:
    # An identical message is only counted and printed the first time.
    msg = formatMessage(category, text, lineNum=lineNum)
    if msg not in state.seenMessages:
        state.seenMessages.add(msg)
        state.categoryCounts[category] += 1
        if state.shouldPrint(category):
            p(msg)
    if state.shouldDie(category):
        errorAndExit()


def say(msg: str) -> None:
    if state.shouldPrint("message"):
        p(formatMessage("message", msg))


def retroactivelyCheckErrorLevel(timing: str = "early") -> None:
    for category, count in state.categoryCounts.items():
        if count and state.shouldDie(category, timing):
            errorAndExit()


def printColor(text: str, color: str = "white", *styles: str) -> str:
    if state.printMode != "console":
        return text
    codes = [str(STYLES[style]) for style in styles]
    codes.append(str(COLORS[color]))
    return f"\033[{';'.join(codes)}m{text}\033[0m"


def formatMessage(category: str, text: str, lineNum: str | int | None = None) -> str:
    if state.printMode == "json":
        return json.dumps({"lineNum": lineNum, "messageType": category, "text": text})
    if state.printMode == "markup":
        tagName = MARKUP_TAGS.get(category, category)
        return f"<{tagName}>{text.replace('<', '&lt;')}</{tagName}>"
    if category == "message":
        return text
    heading, color = HEADINGS[category]
    if lineNum is not None:
        heading = f"LINE {lineNum}"
    return printColor(heading + ":", color, "bold") + " " + text


def errorAndExit() -> None:
    if not state.silent:
        p(formatMessage("failure", "Errors exceeded the allowed error level."))
    sys.exit(2)


@contextlib.contextmanager
def withMessageState(fh: t.TextIO, **kwargs: t.Any) -> t.Generator[MessagesState, None, None]:
    # Swaps in a fresh state (no seen messages, no counts) for the duration.
    global state
    oldState = state
    state = dataclasses.replace(oldState, fh=fh, seenMessages=set(), categoryCounts=Counter(), **kwargs)
    try:
        yield state
    finally:
        state = oldState
