# pylint: skip-file
# Module for holding types, for easy importing into the rest of the codebase
from __future__ import annotations

# The only things that should be available during runtime.
from typing import TYPE_CHECKING, TypeVar, cast

if TYPE_CHECKING:
    from typing import (
        Any,
        Generator,
        Iterator,
        Literal,
        Sequence,
        TextIO,
        TypeAlias,
    )

    from typing_extensions import TypeIs

    # A decomposed attribute, as (key, value)
    AttrPairT: TypeAlias = tuple[str, str]

    # Plain-data form of records, for printjson and the CLI
    JSONT: TypeAlias = dict[str, Any]
