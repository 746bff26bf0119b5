"""Text transforms behind `/owoify`, `/uwuify` and `/uvuify`.

The three levels are cumulative: uwu applies every owo rule first and uvu
applies every uwu rule first.  All rules are deterministic.
"""
from __future__ import annotations

import re
from typing import Callable, List, Tuple, Union

Rule = Tuple["re.Pattern[str]", Union[str, Callable[["re.Match[str]"], str]]]


def _keep_case(replacement: str) -> Callable[["re.Match[str]"], str]:
    def repl(match: "re.Match[str]") -> str:
        text = match.group(0)
        if text.isupper() and len(text) > 1:
            return replacement.upper()
        if text[0].isupper():
            return replacement[0].upper() + replacement[1:]
        return replacement

    return repl


OWO_RULES: List[Rule] = [
    (re.compile(r"ove", re.IGNORECASE), _keep_case("uv")),
    (re.compile(r"[rl]"), "w"),
    (re.compile(r"[RL]"), "W"),
    (re.compile(r"n([aeiou])"), r"ny\1"),
    (re.compile(r"N([aeiou])"), r"Ny\1"),
    (re.compile(r"N([AEIOU])"), r"NY\1"),
]

UWU_RULES: List[Rule] = [
    (re.compile(r"\byou\b", re.IGNORECASE), _keep_case("yuu")),
    (re.compile(r"\bth", re.IGNORECASE), _keep_case("d")),
    (re.compile(r"!+"), "!!"),
]

UVU_RULES: List[Rule] = [
    # "no" has already become "nyo" by this point
    (re.compile(r"\bnyo\b", re.IGNORECASE), _keep_case("nu")),
    (re.compile(r"\bhi\b", re.IGNORECASE), _keep_case("hai")),
    (re.compile(r"\?+"), "?!"),
]


def _apply(text: str, rules: List[Rule]) -> str:
    for pattern, repl in rules:
        text = pattern.sub(repl, text)
    return text


def _stutter(text: str) -> str:
    # "hewwo" -> "h-hewwo" on the first word that starts with a letter
    match = re.search(r"\b([A-Za-z])", text)
    if match is None:
        return text
    start = match.start()
    return f"{text[:start]}{match.group(1)}-{text[start:]}"


def owoify(text: str) -> str:
    return _apply(text, OWO_RULES)


def uwuify(text: str) -> str:
    return _apply(owoify(text), UWU_RULES)


def uvuify(text: str) -> str:
    return _stutter(_apply(uwuify(text), UVU_RULES))
