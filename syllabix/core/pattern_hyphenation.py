"""Orthographic hyphenation with Knuth–Liang patterns.

Used for words that are missing from the pronouncing dictionary. Scores from
every matching pattern are merged per gap (maximum wins); a gap breaks when
the configured :class:`BreakRule` accepts its final score.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from ..utils.observability import get_logger
from .cmu_hyphenation import split_at_boundaries
from .patterns import (
    DEFAULT_DIALECT,
    EXCEPTION_WORDS,
    FORBIDDEN_CLUSTERS,
    TRIES_BY_DIALECT,
    PatternTrie,
)

MIN_WORD_LENGTH = 3

_TOKEN_PATTERN = re.compile(r"\S+")

_logger = get_logger(__name__).bind(component="pattern_hyphenation")


class BreakRule(str, Enum):
    """Which per-gap scores permit a break."""

    ODD_SCORE = "odd"
    POSITIVE_SCORE = "positive"

    def allows(self, score: int) -> bool:
        if self is BreakRule.POSITIVE_SCORE:
            return score > 0
        return score % 2 == 1


def _resolve_break_rule(rule: Union[BreakRule, str, None]) -> BreakRule:
    if isinstance(rule, BreakRule):
        return rule
    try:
        return BreakRule(str(rule).strip().lower())
    except ValueError:
        _logger.debug("Unknown break rule; using odd scores", context={"rule": rule})
        return BreakRule.ODD_SCORE


def _resolve_dialect(dialect: Optional[str]) -> PatternTrie:
    key = dialect.strip().lower() if isinstance(dialect, str) else DEFAULT_DIALECT
    trie = TRIES_BY_DIALECT.get(key)
    if trie is None:
        _logger.debug("Unknown dialect; using us patterns", context={"dialect": dialect})
        trie = TRIES_BY_DIALECT[DEFAULT_DIALECT]
    return trie


def _lookup_override(custom_patterns: Any, lowered: str) -> Optional[str]:
    if not custom_patterns:
        return None
    if not isinstance(custom_patterns, Mapping):
        _logger.debug(
            "Ignoring custom patterns that are not a mapping",
            context={"type": type(custom_patterns).__name__},
        )
        return None
    value = custom_patterns.get(lowered)
    return value if isinstance(value, str) else None


def _override_boundaries(word: str, override: str) -> List[int]:
    """Recover break offsets from a hyphenated override of ``word``."""

    lowered = word.lower()
    length = len(lowered)
    index = 0
    boundaries: List[int] = []
    for char in override:
        if index < length and char.lower() == lowered[index]:
            index += 1
        elif 0 < index < length and (not boundaries or boundaries[-1] != index):
            boundaries.append(index)
    return boundaries if index == length else []


def _touches_cluster(lowered: str, gap: int) -> bool:
    """True when a forbidden cluster spans ``gap``, ends at it or starts at it."""

    if lowered[gap - 1 : gap + 1] in FORBIDDEN_CLUSTERS:
        return True
    head, tail = lowered[:gap], lowered[gap:]
    return any(
        head.endswith(cluster) or tail.startswith(cluster) for cluster in FORBIDDEN_CLUSTERS
    )


class PatternHyphenator:
    """Hyphenates words with the static US or UK pattern tables.

    ``left_min`` and ``right_min`` keep at least that many letters before the
    first and after the last break.
    """

    def __init__(
        self,
        break_rule: Union[BreakRule, str] = BreakRule.ODD_SCORE,
        *,
        left_min: int = 2,
        right_min: int = 2,
    ) -> None:
        self.break_rule = _resolve_break_rule(break_rule)
        self.left_min = max(1, int(left_min))
        self.right_min = max(1, int(right_min))

    def _is_trivial(self, lowered: str) -> bool:
        return len(lowered) < MIN_WORD_LENGTH or lowered in EXCEPTION_WORDS

    def gap_scores(self, word: str, dialect: Optional[str] = DEFAULT_DIALECT) -> List[int]:
        """Raw merged score for each gap of ``word`` (``len(word) + 1`` values)."""

        lowered = word.lower()
        points = _resolve_dialect(dialect).score(f".{lowered}.")
        return points[1:-1]

    def _word_boundaries(self, word: str, custom_patterns: Any, dialect: Optional[str]) -> List[int]:
        lowered = word.lower()
        if self._is_trivial(lowered):
            return []

        override = _lookup_override(custom_patterns, lowered)
        if override is not None:
            return _override_boundaries(word, override)

        scores = self.gap_scores(lowered, dialect)
        length = len(lowered)
        boundaries: List[int] = []
        for gap in range(self.left_min, length - self.right_min + 1):
            if _touches_cluster(lowered, gap):
                continue
            if self.break_rule.allows(scores[gap]):
                boundaries.append(gap)
        return boundaries

    def _hyphenate_word(
        self,
        word: str,
        custom_patterns: Any,
        delimiter: str,
        dialect: Optional[str],
    ) -> str:
        lowered = word.lower()
        if self._is_trivial(lowered):
            return word

        override = _lookup_override(custom_patterns, lowered)
        if override is not None:
            return override

        boundaries = self._word_boundaries(word, None, dialect)
        if not boundaries:
            return word
        return delimiter.join(split_at_boundaries(word, boundaries))

    def boundaries(
        self,
        text: str,
        *,
        custom_patterns: Optional[Mapping[str, str]] = None,
        dialect: Optional[str] = DEFAULT_DIALECT,
    ) -> List[int]:
        """Return break offsets in ``text``; multi-word text is handled per word."""

        if not text:
            return []
        results: List[int] = []
        for match in _TOKEN_PATTERN.finditer(text):
            offset = match.start()
            results.extend(
                offset + boundary
                for boundary in self._word_boundaries(match.group(), custom_patterns, dialect)
            )
        return results

    def hyphenate(
        self,
        text: str,
        *,
        custom_patterns: Optional[Mapping[str, str]] = None,
        delimiter: str = "-",
        dialect: Optional[str] = DEFAULT_DIALECT,
    ) -> str:
        """Insert ``delimiter`` at every break point, keeping whitespace as-is."""

        if not text:
            return text
        if delimiter is None:
            delimiter = "-"
        return _TOKEN_PATTERN.sub(
            lambda match: self._hyphenate_word(
                match.group(), custom_patterns, delimiter, dialect
            ),
            text,
        )


_HYPHENATORS: Dict[BreakRule, PatternHyphenator] = {
    rule: PatternHyphenator(rule) for rule in BreakRule
}

DEFAULT_PATTERN_HYPHENATOR = _HYPHENATORS[BreakRule.ODD_SCORE]


def pattern_hyphenate(
    word: str,
    *,
    custom_patterns: Optional[Mapping[str, str]] = None,
    delimiter: str = "-",
    dialect: Optional[str] = DEFAULT_DIALECT,
    break_rule: Union[BreakRule, str] = BreakRule.ODD_SCORE,
) -> str:
    hyphenator = _HYPHENATORS[_resolve_break_rule(break_rule)]
    return hyphenator.hyphenate(
        word, custom_patterns=custom_patterns, delimiter=delimiter, dialect=dialect
    )


def pattern_boundaries(
    word: str,
    *,
    custom_patterns: Optional[Mapping[str, str]] = None,
    dialect: Optional[str] = DEFAULT_DIALECT,
    break_rule: Union[BreakRule, str] = BreakRule.ODD_SCORE,
) -> List[int]:
    hyphenator = _HYPHENATORS[_resolve_break_rule(break_rule)]
    return hyphenator.boundaries(word, custom_patterns=custom_patterns, dialect=dialect)


__all__ = [
    "BreakRule",
    "DEFAULT_PATTERN_HYPHENATOR",
    "MIN_WORD_LENGTH",
    "PatternHyphenator",
    "pattern_boundaries",
    "pattern_hyphenate",
]
