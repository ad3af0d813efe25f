from __future__ import annotations

from . import t
from .messages import printColor

# Console outline of tag records (or anything with a __json__() method):
# one aligned `key: value` line per field, records separated by a rule.

RULE = "=" * 10


def printjson(x: t.Any) -> str:
    x = getjson(x)
    if isinstance(x, dict):
        return printjsonobject(x)
    if isinstance(x, (list, tuple)):
        return printjsonobjectarray(x)
    return printjsonprimitive(x)


def getjson(x: t.Any) -> t.Any:
    try:
        return x.__json__()
    except AttributeError:
        return x


def printjsonobject(x: t.JSONT) -> str:
    keyWidth = max((len(k) for k in x), default=0) + 2
    return "\n".join(printjsonline(k, v, keyWidth) for k, v in x.items())


def printjsonobjectarray(x: t.Sequence[t.Any]) -> str:
    rule = "\n" + printColor(RULE, "blue") + "\n"
    return rule.join(printjsonobject(getjson(v)) for v in x)


def printjsonline(key: str, val: t.Any, keyWidth: int) -> str:
    return printColor((key + ": ").ljust(keyWidth), "cyan") + printjsonprimitive(val)


def printjsonprimitive(x: t.Any) -> str:
    x = getjson(x)
    if isinstance(x, bool):
        return str(x)
    if isinstance(x, int):
        return str(x)
    if isinstance(x, str):
        # Quote values that would otherwise be invisible or ambiguous.
        return repr(x) if x == "" or x != x.strip() else x
    if x is None:
        return "null"
    msg = f"Could not print value: {x}"
    raise ValueError(msg)
