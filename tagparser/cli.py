from __future__ import annotations

import argparse
import json
import os

import requests

from . import config, printjson, t
from . import messages as m
from .inputsource import inputFromName
from .parser import TagParser


def main(argv: t.Sequence[str] | None = None) -> None:
    try:
        with open(config.scriptPath("semver.txt"), encoding="utf-8") as fh:
            semver = fh.read().strip()
            semverText = f"tagparser v{semver}: "
    except FileNotFoundError:
        semver = "???"
        semverText = ""

    argparser = argparse.ArgumentParser(description=f"{semverText}Lists and queries the tags in SGML-ish markup.")
    argparser.add_argument("--version", action="version", version=semver)
    argparser.add_argument(
        "-q",
        "--quiet",
        dest="quiet",
        action="count",
        default=0,
        help="Silences one level of message, least-important first.",
    )
    argparser.add_argument(
        "-s",
        "--silent",
        dest="silent",
        action="store_true",
        help="Shorthand for 'as many -q as you need to shut it up'",
    )
    argparser.add_argument(
        "-a",
        "--ascii-only",
        dest="asciiOnly",
        action="store_true",
        help="Force all messages to be ASCII-only.",
    )
    argparser.add_argument(
        "--print",
        dest="printMode",
        choices=m.PRINT_MODES,
        default=None,
        help="How messages are formatted. Options are 'plain' (just text), 'console' (text with console color codes), 'markup' (XML), and 'json' (JSON stream). Defaults to 'console'.",
    )
    argparser.add_argument(
        "--die-on",
        dest="errorLevel",
        choices=list(m.MESSAGE_LEVELS.keys()),
        default=None,
        help="Determines what sorts of messages make the command fail. Default is 'fatal'; use 'warning' to also fail on unclosed tags.",
    )
    argparser.add_argument(
        "--die-when",
        dest="errorTiming",
        choices=m.DEATH_TIMING,
        default="late",
        help="When a disallowed message should stop the command: immediately ('early'), or after it finishes ('late').",
    )
    argparser.add_argument(
        "--case-sensitive-tags",
        dest="caseSensitiveTags",
        action="store_true",
        help="Keep tagnames as written, rather than uppercasing them; searches must then match case.",
    )
    argparser.add_argument(
        "--case-sensitive-attributes",
        dest="caseSensitiveAttributes",
        action="store_true",
        help="Keep attribute names as written, rather than uppercasing them.",
    )
    argparser.add_argument(
        "--tag-start",
        dest="tagStartChar",
        default=config.TAG_START_CHAR,
        metavar="CHAR",
        help="Character that opens a tag. Defaults to '<'.",
    )
    argparser.add_argument(
        "--tag-end",
        dest="tagEndChar",
        default=config.TAG_END_CHAR,
        metavar="CHAR",
        help="Character that closes a tag. Defaults to '>'.",
    )

    subparsers = argparser.add_subparsers(title="Subcommands", dest="subparserName", required=True)

    tagsParser = subparsers.add_parser("tags", help="List every tag, with its index and offsets.")
    tagsParser.add_argument("infile", help='Path to the source: stdin ("-"), an https URL, or a filename.')
    tagsParser.add_argument("--json", dest="json", action="store_true", help="Output a JSON array.")

    findParser = subparsers.add_parser("find", help="Print the index of a tag by name, or -1.")
    findParser.add_argument("infile", help='Path to the source: stdin ("-"), an https URL, or a filename.')
    findParser.add_argument("name", help="Tagname to look for, like 'p' or '/body'.")
    findParser.add_argument("--start", dest="start", type=int, default=0, help="Tag index to start searching from.")
    findParser.add_argument(
        "--occurrence",
        dest="occurrence",
        type=int,
        default=1,
        help="Which match to report, counting from 1.",
    )

    countParser = subparsers.add_parser("count", help="Print how many tags have a given name.")
    countParser.add_argument("infile", help='Path to the source: stdin ("-"), an https URL, or a filename.')
    countParser.add_argument("name", help="Tagname to count.")
    countParser.add_argument("--start", dest="start", type=int, default=0, help="Tag index to start counting from.")

    attrsParser = subparsers.add_parser("attrs", help="List the attributes of one tag.")
    attrsParser.add_argument("infile", help='Path to the source: stdin ("-"), an https URL, or a filename.')
    attrsParser.add_argument("index", type=int, help="Index of the tag, as shown by 'tags'.")
    attrsParser.add_argument("--json", dest="json", action="store_true", help="Output a JSON array of [key, value] pairs.")
    attrsParser.add_argument("--raw", dest="raw", action="store_true", help="Print the undecomposed attribute text.")

    textParser = subparsers.add_parser("text", help="Print the text around a tag.")
    textParser.add_argument("infile", help='Path to the source: stdin ("-"), an https URL, or a filename.')
    textParser.add_argument("index", type=int, help="Index of the tag, as shown by 'tags'.")
    textParser.add_argument(
        "--before",
        dest="before",
        action="store_true",
        help="Print the text before the tag, rather than after it.",
    )
    textParser.add_argument(
        "--until",
        dest="until",
        type=int,
        default=None,
        metavar="INDEX",
        help="Print everything between this tag and the tag at INDEX instead.",
    )

    options = argparser.parse_args(argv)

    if options.silent:
        m.state.printOn = "nothing"
        m.state.silent = True
    else:
        m.state.printOn = m.MessagesState.categoryName(options.quiet)
    if options.errorLevel is not None:
        m.state.dieOn = options.errorLevel
    m.state.dieWhen = options.errorTiming
    m.state.asciiOnly = options.asciiOnly
    if options.printMode is None:
        if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
            m.state.printMode = "plain"
        else:
            m.state.printMode = "console"
    else:
        m.state.printMode = options.printMode

    try:
        parserConfig = config.ParserConfig.fromOptions(options)
    except ValueError as e:
        argparser.error(str(e))

    tp = loadParser(options.infile, parserConfig)
    if tp is not None:
        if options.subparserName == "tags":
            handleTags(options, tp)
        elif options.subparserName == "find":
            handleFind(options, tp)
        elif options.subparserName == "count":
            handleCount(options, tp)
        elif options.subparserName == "attrs":
            handleAttrs(options, tp)
        elif options.subparserName == "text":
            handleText(options, tp)

    m.retroactivelyCheckErrorLevel(timing="late")


def loadParser(infile: str, parserConfig: config.ParserConfig) -> TagParser | None:
    source = inputFromName(infile)
    try:
        content = source.read()
    except (OSError, requests.RequestException) as e:
        m.die(f"Couldn't read {source}:\n{e}")
        return None
    tp = TagParser(content, parserConfig, context=str(source)).parse()
    for warning in tp.warnings:
        m.warn(warning.text, lineNum=warning.lineNum)
    return tp


def handleTags(options: argparse.Namespace, tp: TagParser) -> None:
    tags = [{"index": i, **rec.__json__()} for i, rec in enumerate(tp)]
    if options.json:
        m.p(json.dumps(tags, indent=2))
    elif tags:
        m.p(printjson.printjson(tags))
    else:
        m.say("No tags found.")


def handleFind(options: argparse.Namespace, tp: TagParser) -> None:
    m.p(str(tp.findTag(options.name, options.start, options.occurrence)))


def handleCount(options: argparse.Namespace, tp: TagParser) -> None:
    m.p(str(tp.countTag(options.name, options.start)))


def handleAttrs(options: argparse.Namespace, tp: TagParser) -> None:
    if tp.tagInfo(options.index) is None:
        m.die(f"There's no tag with index {options.index}; the content has {tp.tagCount} tags.")
        return
    if options.raw:
        m.p(tp.rawAttributeText(options.index))
        return
    pairs = list(tp.parseAttributes(options.index))
    if options.json:
        m.p(json.dumps(pairs, indent=2))
    elif pairs:
        # Not a dict; a tag can repeat an attribute.
        keyWidth = max(len(key) for key, _ in pairs) + 2
        for key, val in pairs:
            m.p(printjson.printjsonline(key, val, keyWidth))
    else:
        m.say(f"Tag {options.index} ({tp.tag(options.index)}) has no attributes.")


def handleText(options: argparse.Namespace, tp: TagParser) -> None:
    if tp.tagInfo(options.index) is None:
        m.die(f"There's no tag with index {options.index}; the content has {tp.tagCount} tags.")
        return
    if options.until is not None:
        if tp.tagInfo(options.until) is None or options.until <= options.index:
            m.die(f"--until must be the index of a later tag than {options.index}.")
            return
        m.p(tp.textBetween(options.index, options.until), end="")
    elif options.before:
        m.p(tp.textBefore(options.index), end="")
    else:
        m.p(tp.textAfter(options.index), end="")
