"""Static Knuth–Liang hyphenation tables for US and UK English.

Patterns use Liang notation: letters interleaved with digit scores, ``.``
anchoring a word edge (``"be1au"`` scores the gap between ``e`` and ``a``).
The generic tables are generated from letter classes at import time and then
frozen; short curated lists cover common affixes and word prefixes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

VOWELS = "aeiouy"
CONSONANTS = "bcdfghjklmnpqrstvwxz"

# Consonant pairs that stay together when hyphenating.
NO_SPLIT_PAIRS: FrozenSet[str] = frozenset(
    {
        "bl", "br", "cl", "cr", "dr", "fl", "fr", "gl", "gr", "pl", "pr", "tr",
        "th", "ch", "sh", "ph", "wh", "gh", "ck", "ng", "kn", "wr", "gn",
    }
)

# Clusters straddling a gap that must never be broken, whatever the score.
FORBIDDEN_CLUSTERS: FrozenSet[str] = frozenset(
    {"th", "ch", "sh", "ph", "wh", "qu", "ng", "ck", "gh", "kn", "wr", "mb", "gn"}
)

# Short function words that are never hyphenated.
EXCEPTION_WORDS: FrozenSet[str] = frozenset(
    """
    the and for are but not you all can had her was one our out day get has
    him his how man new now old see two way who boy did its let put say she
    too use
    """.split()
)

_CURATED_PATTERNS: Tuple[str, ...] = (
    ".un1",
    ".dis1",
    ".mis1",
    ".non1",
    "1tion",
    "1sion",
    "1ful.",
    "1ness.",
    "1less.",
    "1ment.",
    "i2ng.",
    "i2gh",
    "u2gh",
)

# Whole-word prefixes. Level 3 outranks the generated consonant pairs;
# level 4 suppresses a second break inside the same word.
_WORD_PATTERNS: Tuple[str, ...] = (
    "be3au",
    "be4aut",
    "beau3ti",
    "be3gin",
    "be3low",
    "be3side",
    "be3t4ween",
    "be3yond",
    "com3pose",
    "com3pute",
    "de3cide",
    "de3fine",
    "de3s4cribe",
    "de3velop",
    "ex3ample",
    "ex3ercise",
    "ex3plain",
    "in3clude",
    "in3crease",
    "in3form",
    "in3side",
    "in3stead",
    "in3to",
    "pre3pare",
    "pre3sent",
    "re3ceive",
    "re3duce",
    "re3me4mber",
    "re3port",
    "re3quire",
    "re3turn",
    "un3der",
    "un3til",
    "un3u4sual",
)

_UK_PATTERNS: Tuple[str, ...] = (
    "co2l1our",
    "fa2v1our",
    "la2b1our",
    "hu2m1our",
    "va2p1our",
    "ri2g1our",
    "neigh1bour",
    "cen1tre",
    "li1tre",
    "me2t3re",
    "the1a4tre",
)

_VALID_PATTERN = re.compile(r"^[.a-z0-9]+$")


@dataclass(frozen=True)
class HyphenationPattern:
    """A parsed Liang pattern: its letters and one score per gap."""

    letters: str
    scores: Tuple[int, ...]

    @property
    def notation(self) -> str:
        parts: List[str] = []
        for index, score in enumerate(self.scores):
            if score:
                parts.append(str(score))
            if index < len(self.letters):
                parts.append(self.letters[index])
        return "".join(parts)


def parse_pattern(text: str) -> Optional[HyphenationPattern]:
    """Parse Liang notation, returning ``None`` for malformed input."""

    if not isinstance(text, str):
        return None
    text = text.strip().lower()
    if not text or not _VALID_PATTERN.match(text):
        return None

    letters: List[str] = []
    scores: List[int] = [0]
    for char in text:
        if char.isdigit():
            scores[-1] = int(char)
        else:
            letters.append(char)
            scores.append(0)

    if not letters or all(char == "." for char in letters):
        return None
    return HyphenationPattern("".join(letters), tuple(scores))


def _generate_us_patterns() -> List[str]:
    generated: List[str] = []

    for vowel in VOWELS:
        for consonant in CONSONANTS:
            generated.append(f"{vowel}1{consonant}")

    for first in CONSONANTS:
        for second in CONSONANTS:
            if first + second not in NO_SPLIT_PAIRS:
                generated.append(f"2{first}1{second}2")

    for digraph in ("ck", "ng"):
        for vowel in VOWELS:
            generated.append(f"2{digraph}1{vowel}")

    for consonant in CONSONANTS:
        generated.append(f"2{consonant}e.")
        if consonant not in "szxcgh":
            generated.append(f"2{consonant}es.")
        if consonant not in "td":
            generated.append(f"2{consonant}ed.")

    generated.extend(_CURATED_PATTERNS)
    generated.extend(_WORD_PATTERNS)
    return generated


def _parse_all(raw: Iterable[str]) -> Tuple[HyphenationPattern, ...]:
    parsed = (parse_pattern(text) for text in raw)
    return tuple(pattern for pattern in parsed if pattern is not None)


def merge_patterns(
    base: Iterable[HyphenationPattern],
    extra: Iterable[HyphenationPattern],
) -> Tuple[HyphenationPattern, ...]:
    """Combine two tables; an ``extra`` pattern replaces a base one with the same letters."""

    merged: Dict[str, HyphenationPattern] = {pattern.letters: pattern for pattern in base}
    for pattern in extra:
        merged[pattern.letters] = pattern
    return tuple(merged.values())


class PatternTrie:
    """Immutable letter trie mapping pattern letters to their scores."""

    def __init__(self, patterns: Iterable[HyphenationPattern]) -> None:
        self._tree: Dict[Any, Any] = {}
        self._count = 0
        for pattern in patterns:
            node = self._tree
            for char in pattern.letters:
                node = node.setdefault(char, {})
            node[None] = pattern.scores
            self._count += 1

    def __len__(self) -> int:
        return self._count

    def score(self, padded: str) -> List[int]:
        """Return the maximum score at every gap of ``padded``.

        Index ``i`` of the result is the gap before ``padded[i]``.
        """

        points = [0] * (len(padded) + 1)
        for start in range(len(padded)):
            node = self._tree
            for char in padded[start:]:
                node = node.get(char)
                if node is None:
                    break
                scores = node.get(None)
                if scores is not None:
                    for offset, value in enumerate(scores):
                        if value > points[start + offset]:
                            points[start + offset] = value
        return points


US_PATTERNS: Tuple[HyphenationPattern, ...] = _parse_all(_generate_us_patterns())
UK_PATTERNS: Tuple[HyphenationPattern, ...] = merge_patterns(
    US_PATTERNS, _parse_all(_UK_PATTERNS)
)

PATTERNS_BY_DIALECT: Mapping[str, Tuple[HyphenationPattern, ...]] = {
    "us": US_PATTERNS,
    "uk": UK_PATTERNS,
}

TRIES_BY_DIALECT: Mapping[str, PatternTrie] = {
    dialect: PatternTrie(patterns) for dialect, patterns in PATTERNS_BY_DIALECT.items()
}

DEFAULT_DIALECT = "us"


__all__ = [
    "CONSONANTS",
    "DEFAULT_DIALECT",
    "EXCEPTION_WORDS",
    "FORBIDDEN_CLUSTERS",
    "HyphenationPattern",
    "NO_SPLIT_PAIRS",
    "PATTERNS_BY_DIALECT",
    "PatternTrie",
    "TRIES_BY_DIALECT",
    "UK_PATTERNS",
    "US_PATTERNS",
    "VOWELS",
    "merge_patterns",
    "parse_pattern",
]
