# topmark:header:start
#
#   project      : APISurface
#   file         : comments.py
#   file_relpath : src/apisurface/model/comments.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Block-tag detection in raw documentation comments.

Only the tags that drive visibility and deprecation are interpreted:
``@hide`` and ``@pending`` hide a symbol, ``@deprecated`` deprecates it.
Inline tags such as ``{@link ...}`` are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

_BLOCK_TAG_RE: Final[re.Pattern[str]] = re.compile(r"(?<![{\w@])@([A-Za-z][\w.-]*)")

HIDDEN_TAGS: Final[frozenset[str]] = frozenset({"hide", "pending"})


@dataclass(frozen=True)
class DocComment:
    """A raw documentation comment and the block tags found in it."""

    raw: str = ""
    tags: frozenset[str] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", frozenset(_BLOCK_TAG_RE.findall(self.raw)))

    @property
    def is_hidden(self) -> bool:
        return not HIDDEN_TAGS.isdisjoint(self.tags)

    @property
    def is_deprecated(self) -> bool:
        return "deprecated" in self.tags

    @property
    def is_doc_only(self) -> bool:
        return "doconly" in self.tags


EMPTY_COMMENT: Final[DocComment] = DocComment("")
