"""Phoneme string analysis: syllables, stress and complexity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence, Tuple, Union

from ..utils.cache import BoundedLRUCache
from ..utils.env import get_int
from .cmudict_loader import VOWEL_PHONEMES

PHONEME_CACHE_SIZE_ENV = "SYLLABIX_PHONEME_CACHE_SIZE"
DEFAULT_PHONEME_CACHE_SIZE = 10_000

PhonemeInput = Union[str, Sequence[str]]


class Complexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


@dataclass(frozen=True)
class PhonemeAnalysis:
    """Summary of a single phoneme string."""

    syllables: int
    vowels: int
    consonants: int
    stress_pattern: str
    complexity: Complexity
    unique_phonemes: FrozenSet[str]
    phoneme_diversity: float
    base_phonemes: Tuple[str, ...] = ()

    @property
    def phoneme_count(self) -> int:
        return self.vowels + self.consonants


def base_phoneme(token: str) -> str:
    """Return the stress-free base of an ARPAbet token (``"EY1"`` → ``"EY"``)."""

    return token[:2]


def is_vowel_phoneme(token: str) -> bool:
    return base_phoneme(token) in VOWEL_PHONEMES


def split_phonemes(phonemes: PhonemeInput) -> List[str]:
    if isinstance(phonemes, str):
        return phonemes.split()
    return [token for token in phonemes if isinstance(token, str) and token]


def determine_complexity(vowels: int, total: int) -> Complexity:
    """Grade a pronunciation by vowel count (its syllables) and length."""

    vowel_ratio = vowels / total if total else 0.0
    if vowels <= 2 and total <= 6 and vowel_ratio >= 0.3:
        return Complexity.SIMPLE
    if vowels <= 4 and total <= 10:
        return Complexity.MODERATE
    return Complexity.COMPLEX


def _compute_analysis(phoneme_string: str) -> PhonemeAnalysis:
    vowels = 0
    consonants = 0
    bases: List[str] = []
    stress: List[str] = []

    for token in phoneme_string.split():
        base = base_phoneme(token)
        bases.append(base)
        if base in VOWEL_PHONEMES:
            vowels += 1
            stress.append(token[2:] or "0")
        else:
            consonants += 1

    total = vowels + consonants
    unique = frozenset(bases)
    return PhonemeAnalysis(
        syllables=vowels,
        vowels=vowels,
        consonants=consonants,
        stress_pattern="".join(stress),
        complexity=determine_complexity(vowels, total),
        unique_phonemes=unique,
        phoneme_diversity=len(unique) / total if total else 0.0,
        base_phonemes=tuple(bases),
    )


class PhonemeAnalyzer:
    """Memoizing analyzer for ARPAbet phoneme strings.

    Results are pure functions of the exact input string, so the cache key is
    the string itself. The cache is injectable to let tests and embedding
    applications share or bound it.
    """

    def __init__(self, cache: Optional[BoundedLRUCache[str, PhonemeAnalysis]] = None) -> None:
        if cache is None:
            cache = BoundedLRUCache(
                get_int(PHONEME_CACHE_SIZE_ENV, DEFAULT_PHONEME_CACHE_SIZE, minimum=0)
            )
        self.cache = cache

    def analyze(self, phoneme_string: str) -> PhonemeAnalysis:
        if not isinstance(phoneme_string, str):
            phoneme_string = " ".join(split_phonemes(phoneme_string))
        return self.cache.get_or_compute(
            phoneme_string, lambda: _compute_analysis(phoneme_string)
        )

    def count_syllables(self, phoneme_string: str) -> int:
        return self.analyze(phoneme_string).syllables

    def stress_pattern(self, phoneme_string: str) -> str:
        return self.analyze(phoneme_string).stress_pattern

    def vowel_indices(self, phonemes: PhonemeInput) -> List[int]:
        return [
            index
            for index, token in enumerate(split_phonemes(phonemes))
            if is_vowel_phoneme(token)
        ]

    def clear(self) -> None:
        self.cache.clear()

    def stats(self) -> dict:
        return self.cache.stats()


def phoneme_similarity(first: str, second: str) -> float:
    """Jaccard similarity of the base-phoneme sets of two phoneme strings."""

    left = {base_phoneme(token) for token in first.split()}
    right = {base_phoneme(token) for token in second.split()}
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


def levenshtein_distance(first: Sequence[str], second: Sequence[str]) -> int:
    """Edit distance between two token sequences (or two plain strings)."""

    if len(first) < len(second):
        first, second = second, first
    previous = list(range(len(second) + 1))
    for i, left in enumerate(first, start=1):
        current = [i]
        for j, right in enumerate(second, start=1):
            cost = 0 if left == right else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


DEFAULT_PHONEME_ANALYZER = PhonemeAnalyzer()


def analyze_phonemes(phoneme_string: str) -> PhonemeAnalysis:
    """Analyze ``phoneme_string`` with the shared default analyzer."""

    return DEFAULT_PHONEME_ANALYZER.analyze(phoneme_string)


def count_syllables_from_pronunciation(phoneme_string: str) -> int:
    return DEFAULT_PHONEME_ANALYZER.count_syllables(phoneme_string)


def extract_stress_pattern(phoneme_string: str) -> str:
    return DEFAULT_PHONEME_ANALYZER.stress_pattern(phoneme_string)


__all__ = [
    "Complexity",
    "DEFAULT_PHONEME_ANALYZER",
    "PhonemeAnalysis",
    "PhonemeAnalyzer",
    "analyze_phonemes",
    "base_phoneme",
    "count_syllables_from_pronunciation",
    "determine_complexity",
    "extract_stress_pattern",
    "is_vowel_phoneme",
    "levenshtein_distance",
    "phoneme_similarity",
    "split_phonemes",
]
