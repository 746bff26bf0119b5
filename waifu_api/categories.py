"""
Registry of content categories.

Every random-content endpoint is described by a `Category`: the path segment
it is served under (also its statistics key), the label used in error
messages, the kind of content it stores and whether the primary field must be
unique.  Tables, routes and stats counters are all derived from this list, so
adding an endpoint is a one-line change here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

# Stored fields per content kind, excluding the integer identifier.
KIND_FIELDS: Dict[str, Tuple[str, ...]] = {
    "gif": ("url",),
    "fact": ("fact",),
    "quote": ("quote", "author", "anime"),
    "waifu": ("name", "image", "anime"),
}


@dataclass(frozen=True)
class Category:
    name: str
    label: str
    kind: str = "gif"
    # Whether the primary field (url, fact, ...) must be unique in the table.
    # The legacy collections disagreed on this; every category now defaults
    # to unique and can opt out here.
    unique: bool = True

    @property
    def fields(self) -> Tuple[str, ...]:
        return KIND_FIELDS[self.kind]

    @property
    def primary_field(self) -> str:
        return self.fields[0]

    @property
    def table_name(self) -> str:
        if self.kind == "gif":
            return f"gif_{self.name}"
        return f"{self.name}s"

    @property
    def not_found_message(self) -> str:
        if self.kind == "gif":
            return f"Could not find any {self.label} Gif"
        return f"Could not find any {self.label}"


_GIFS = [
    "angry", "baka", "bite", "blush", "bonk", "bored", "bully", "bye",
    "chase", "cheer", "cringe", "cry", "cuddle", "dab", "dance", "die",
    "disgust", "facepalm", "feed", "glomp", "happy", "hi", "highfive",
    "hold", "hug", "kick", "kill", "kiss", "laugh", "lick", "love", "lurk",
    "midfing", "nervous", "nom", "nope", "nuzzle", "panic", "pat", "peck",
    "poke", "pout", "punch", "run", "sad", "shoot", "shrug", "sip", "slap",
    "sleepy", "smile", "smug", "stab", "stare", "suicide", "tease", "think",
    "thumbsup", "tickle", "triggered", "wag", "wave", "wink", "yes",
]

CATEGORIES: List[Category] = [
    Category("fact", "Fact", kind="fact"),
    Category("quote", "Quote", kind="quote"),
    Category("waifu", "Waifu", kind="waifu"),
] + [Category(name, name.capitalize()) for name in _GIFS]

_BY_NAME: Dict[str, Category] = {c.name: c for c in CATEGORIES}


def get_category(name: str) -> Optional[Category]:
    """Look up a category by its path segment."""
    return _BY_NAME.get(name.lower())


def all_tags() -> List[str]:
    """Return every category name served by the API, sorted."""
    return sorted(_BY_NAME)
