"""Word-level syllable counting that routes between dictionary and patterns."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..utils.cache import BoundedLRUCache
from ..utils.env import get_int
from ..utils.observability import WORD_LATENCY, WORDS_ROUTED, get_logger
from ..utils.syllables import estimate_syllable_count
from .cmu_hyphenation import get_cmu_syllable_boundaries, split_at_boundaries
from .cmudict_loader import DEFAULT_CMU_LOADER, CMUDictLoader
from .pattern_hyphenation import DEFAULT_PATTERN_HYPHENATOR, PatternHyphenator
from .patterns import DEFAULT_DIALECT
from .phonemes import DEFAULT_PHONEME_ANALYZER, PhonemeAnalyzer

WORD_CACHE_SIZE_ENV = "SYLLABIX_WORD_CACHE_SIZE"
DEFAULT_WORD_CACHE_SIZE = 1000

SOURCE_CMU = "cmu"
SOURCE_FALLBACK = "fallback"

WORD_PATTERN = re.compile(r"\b[\w']+\b")


@dataclass(frozen=True)
class SyllableInfo:
    """Syllable count and hyphenation for one word."""

    word: str
    syllables: int
    hyphenated: str
    source: str
    pronunciation: Optional[str] = None
    boundaries: Tuple[int, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["boundaries"] = list(self.boundaries)
        return payload


def extract_words(text: str) -> List[str]:
    """Split free text into word tokens (letters, digits and apostrophes)."""

    if not text:
        return []
    return WORD_PATTERN.findall(text)


class SyllableCounter:
    """Count syllables and hyphenate words, preferring dictionary data.

    Dictionary words are counted from their pronunciation and split with the
    phoneme-aligned syllabifier. Everything else goes through the pattern
    hyphenator and the orthographic estimate.
    """

    def __init__(
        self,
        loader: Optional[CMUDictLoader] = None,
        analyzer: Optional[PhonemeAnalyzer] = None,
        *,
        hyphenator: Optional[PatternHyphenator] = None,
        cache_size: Optional[int] = None,
    ) -> None:
        self.loader = loader or DEFAULT_CMU_LOADER
        self.analyzer = analyzer or DEFAULT_PHONEME_ANALYZER
        self.hyphenator = hyphenator or DEFAULT_PATTERN_HYPHENATOR
        if cache_size is None:
            cache_size = get_int(WORD_CACHE_SIZE_ENV, DEFAULT_WORD_CACHE_SIZE, minimum=0)
        self._cache: BoundedLRUCache[Tuple[str, str, str], SyllableInfo] = BoundedLRUCache(
            cache_size
        )
        self._logger = get_logger(__name__).bind(component="syllable_counter")

    def _from_dictionary(
        self,
        word: str,
        pronunciation: str,
        delimiter: str,
        dialect: str,
        custom_patterns: Optional[Mapping[str, str]],
    ) -> SyllableInfo:
        syllables = self.analyzer.count_syllables(pronunciation)
        boundaries = get_cmu_syllable_boundaries(word, pronunciation)
        if not boundaries and syllables > 1:
            boundaries = self.hyphenator.boundaries(
                word, custom_patterns=custom_patterns, dialect=dialect
            )
        hyphenated = delimiter.join(split_at_boundaries(word, boundaries))
        return SyllableInfo(
            word=word,
            syllables=syllables,
            hyphenated=hyphenated,
            source=SOURCE_CMU,
            pronunciation=pronunciation,
            boundaries=tuple(boundaries),
        )

    def _from_patterns(
        self,
        word: str,
        delimiter: str,
        dialect: str,
        custom_patterns: Optional[Mapping[str, str]],
    ) -> SyllableInfo:
        boundaries = self.hyphenator.boundaries(
            word, custom_patterns=custom_patterns, dialect=dialect
        )
        hyphenated = self.hyphenator.hyphenate(
            word, custom_patterns=custom_patterns, delimiter=delimiter, dialect=dialect
        )
        return SyllableInfo(
            word=word,
            syllables=estimate_syllable_count(word),
            hyphenated=hyphenated,
            source=SOURCE_FALLBACK,
            boundaries=tuple(boundaries),
        )

    def get_syllable_info(
        self,
        word: str,
        *,
        delimiter: str = "-",
        dialect: str = DEFAULT_DIALECT,
        custom_patterns: Optional[Mapping[str, str]] = None,
    ) -> SyllableInfo:
        """Return :class:`SyllableInfo` for ``word``.

        Results without ``custom_patterns`` are cached per
        ``(word, delimiter, dialect)``.
        """

        normalized = (word or "").strip()
        if not normalized:
            return SyllableInfo(
                word=normalized, syllables=0, hyphenated=normalized, source=SOURCE_FALLBACK
            )

        cache_key = (normalized, delimiter, dialect)
        if custom_patterns is None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        with WORD_LATENCY.time():
            pronunciation = self.loader.lookup_phonemes(normalized)
            if pronunciation:
                info = self._from_dictionary(
                    normalized, pronunciation, delimiter, dialect, custom_patterns
                )
            else:
                info = self._from_patterns(normalized, delimiter, dialect, custom_patterns)

        WORDS_ROUTED.labels(source=info.source).inc()
        self._logger.debug(
            "Syllable info computed",
            context={"word": normalized, "source": info.source, "syllables": info.syllables},
        )

        if custom_patterns is None:
            self._cache.put(cache_key, info)
        return info

    def get_text_syllable_info(self, text: str, **options: Any) -> List[SyllableInfo]:
        return [self.get_syllable_info(word, **options) for word in extract_words(text)]

    def get_text_summary(self, text: str, **options: Any) -> Dict[str, Any]:
        """Aggregate counts over every word in ``text``."""

        details = self.get_text_syllable_info(text, **options)
        total_syllables = sum(info.syllables for info in details)
        total_words = len(details)
        cmu_words = sum(1 for info in details if info.source == SOURCE_CMU)
        return {
            "total_syllables": total_syllables,
            "total_words": total_words,
            "cmu_words": cmu_words,
            "fallback_words": total_words - cmu_words,
            "average_syllables_per_word": total_syllables / total_words if total_words else 0.0,
            "word_details": details,
        }

    def hyphenate_word(self, word: str, **options: Any) -> Dict[str, Any]:
        info = self.get_syllable_info(word, **options)
        return {
            "word": info.word,
            "hyphenated": info.hyphenated,
            "syllables": info.syllables,
            "source": info.source,
            "boundaries": list(info.boundaries),
        }

    def count(self, word: str) -> int:
        return self.get_syllable_info(word).syllables

    def get_pronunciation(self, word: str) -> Optional[str]:
        return self.loader.lookup_phonemes(word)

    def is_in_dictionary(self, word: str) -> bool:
        return self.loader.has_word(word)

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> Dict[str, int]:
        return self._cache.stats()


DEFAULT_SYLLABLE_COUNTER = SyllableCounter()


def get_syllable_count(
    words_or_text: Union[str, Sequence[str]],
    *,
    include_hyphenation: bool = False,
    delimiter: str = "-",
    include_pronunciation: bool = False,
    include_details: bool = False,
    counter: Optional[SyllableCounter] = None,
) -> Dict[str, Any]:
    """Count syllables across a string or a list of strings.

    Returns ``{"total_syllable_count": n}`` plus, on request, a per-word
    ``"hyphenation"`` list and a ``"details"`` block (word count, average per
    word and non-empty line count).
    """

    counter = counter or DEFAULT_SYLLABLE_COUNTER

    if isinstance(words_or_text, str):
        chunks = [words_or_text]
        lines = len([line for line in words_or_text.split("\n") if line.strip()])
    else:
        chunks = [item for item in words_or_text if isinstance(item, str)]
        lines = len(chunks)

    words = [word for chunk in chunks for word in extract_words(chunk)]

    total = 0
    hyphenation: List[Dict[str, Any]] = []
    for word in words:
        info = counter.get_syllable_info(word, delimiter=delimiter)
        total += info.syllables
        if include_hyphenation:
            entry: Dict[str, Any] = {
                "hyphenated": info.hyphenated,
                "syllables": info.syllables,
                "source": info.source,
            }
            if include_pronunciation and info.pronunciation:
                entry["pronunciation"] = info.pronunciation
            hyphenation.append(entry)

    result: Dict[str, Any] = {"total_syllable_count": total}
    if include_hyphenation:
        result["hyphenation"] = hyphenation
    if include_details:
        result["details"] = {
            "total_words": len(words),
            "average_per_word": total / len(words) if words else 0.0,
            "lines": lines if words else 0,
        }
    return result


__all__ = [
    "DEFAULT_SYLLABLE_COUNTER",
    "SOURCE_CMU",
    "SOURCE_FALLBACK",
    "SyllableCounter",
    "SyllableInfo",
    "extract_words",
    "get_syllable_count",
]
