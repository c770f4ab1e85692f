"""Dictionary queries built on the phoneme analyzer and CMU syllabifier."""

from __future__ import annotations

import csv
import io
import json
import random
import re
import threading
from collections import OrderedDict
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Pattern,
    Sequence,
    Tuple,
    Union,
)

from ..core.cmu_hyphenation import cmu_hyphenate
from ..core.cmudict_loader import DEFAULT_CMU_LOADER, CMUDictLoader
from ..core.phonemes import (
    DEFAULT_PHONEME_ANALYZER,
    Complexity,
    PhonemeAnalysis,
    PhonemeAnalyzer,
    base_phoneme,
    is_vowel_phoneme,
    phoneme_similarity,
)
from ..utils.cache import BoundedLRUCache
from ..utils.observability import SEARCH_REQUESTS, get_logger

WordAnalysis = Dict[str, Any]

DEFAULT_LIMIT = 50
DEFAULT_USED_WORDS_SIZE = 100
UNIQUENESS_KEY_CAPACITY = 50

CLUSTER_TYPES = ("syllable", "length", "complexity", "stress")
EXPORT_FORMATS = ("json", "csv", "tsv")

_EXPORT_ANALYSIS_FIELDS = (
    "phoneme_count",
    "vowel_count",
    "consonant_count",
    "stress_pattern",
    "complexity",
    "length",
)


def wildcard_to_regex(pattern: str, *, upper: bool = False) -> Pattern[str]:
    """Compile a ``*``/``?`` wildcard pattern into an anchored regex."""

    text = pattern.upper() if upper else pattern.lower()
    escaped = re.escape(text).replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(f"^{escaped}$")


def _rhyme_tail(phonemes: Sequence[str]) -> Optional[Tuple[str, ...]]:
    for index in range(len(phonemes) - 1, -1, -1):
        if is_vowel_phoneme(phonemes[index]):
            return tuple(phonemes[index:])
    return None


def _matches_prefix(bases: Sequence[str], wanted: Sequence[str]) -> bool:
    return len(bases) >= len(wanted) and all(
        have == want for have, want in zip(bases, wanted)
    )


class DictionarySearchService:
    """Search and export over a :class:`CMUDictLoader`.

    Every query walks the dictionary in order and stops at ``limit`` results.
    Results are plain dicts (``WordAnalysis``) so they serialise directly.
    """

    def __init__(
        self,
        loader: Optional[CMUDictLoader] = None,
        analyzer: Optional[PhonemeAnalyzer] = None,
    ) -> None:
        self.loader = loader or DEFAULT_CMU_LOADER
        self.analyzer = analyzer or DEFAULT_PHONEME_ANALYZER
        self._logger = get_logger(__name__).bind(component="dictionary_search")
        # Per uniqueness key, words already handed out, oldest first.
        self._used_words: BoundedLRUCache[str, "OrderedDict[str, None]"] = BoundedLRUCache(
            UNIQUENESS_KEY_CAPACITY
        )
        self._used_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Result construction
    # ------------------------------------------------------------------
    def analyze_word(
        self,
        word: str,
        pronunciation: str,
        *,
        include_pronunciation: bool = True,
        include_syllables: bool = True,
        include_hyphenation: bool = True,
        include_analysis: bool = False,
    ) -> WordAnalysis:
        analysis = self.analyzer.analyze(pronunciation)
        result: WordAnalysis = {"word": word}
        if include_pronunciation:
            result["pronunciation"] = pronunciation
        if include_syllables:
            result["syllables"] = analysis.syllables
        if include_hyphenation:
            result["hyphenated"] = cmu_hyphenate(word, pronunciation)
        if include_analysis:
            result.update(self._analysis_fields(word, analysis))
            result["unique_phonemes"] = sorted(analysis.unique_phonemes)
            result["phoneme_diversity"] = analysis.phoneme_diversity
        return result

    @staticmethod
    def _analysis_fields(word: str, analysis: PhonemeAnalysis) -> Dict[str, Any]:
        return {
            "phoneme_count": analysis.phoneme_count,
            "vowel_count": analysis.vowels,
            "consonant_count": analysis.consonants,
            "stress_pattern": analysis.stress_pattern,
            "complexity": analysis.complexity.value,
            "length": len(word),
        }

    def _collect(
        self,
        query: str,
        predicate: Callable[[str, str, PhonemeAnalysis], bool],
        *,
        limit: Optional[int] = DEFAULT_LIMIT,
        extra: Optional[Callable[[str, str, PhonemeAnalysis], Dict[str, Any]]] = None,
        **options: Any,
    ) -> List[WordAnalysis]:
        SEARCH_REQUESTS.labels(query=query).inc()
        if limit is not None and limit <= 0:
            return []

        results: List[WordAnalysis] = []
        for word, pronunciation in self.loader.iter_pronunciations():
            analysis = self.analyzer.analyze(pronunciation)
            if not predicate(word, pronunciation, analysis):
                continue
            result = self.analyze_word(word, pronunciation, **options)
            if extra is not None:
                result.update(extra(word, pronunciation, analysis))
            results.append(result)
            if limit is not None and len(results) >= limit:
                break

        self._logger.debug(
            "Dictionary search completed",
            context={"query": query, "results": len(results)},
        )
        return results

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def advanced_search(
        self,
        *,
        min_syllables: Optional[int] = None,
        max_syllables: Optional[int] = None,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        min_phonemes: Optional[int] = None,
        max_phonemes: Optional[int] = None,
        complexity: Optional[Union[Complexity, str]] = None,
        contains_phonemes: Optional[Iterable[str]] = None,
        starts_with_phonemes: Optional[Sequence[str]] = None,
        ends_with_phonemes: Optional[Sequence[str]] = None,
        word_pattern: Optional[Union[str, Pattern[str]]] = None,
        pronunciation_pattern: Optional[Union[str, Pattern[str]]] = None,
        limit: Optional[int] = DEFAULT_LIMIT,
        **options: Any,
    ) -> List[WordAnalysis]:
        """Return words matching every supplied filter.

        Phoneme filters compare stress-free base phonemes. Regex patterns are
        applied with ``search`` against the word or the pronunciation string.
        """

        wanted_complexity = Complexity(complexity) if complexity is not None else None
        contains = {base_phoneme(token) for token in contains_phonemes or ()}
        starts = [base_phoneme(token) for token in starts_with_phonemes or ()]
        ends = [base_phoneme(token) for token in ends_with_phonemes or ()]
        word_regex = re.compile(word_pattern) if isinstance(word_pattern, str) else word_pattern
        pron_regex = (
            re.compile(pronunciation_pattern)
            if isinstance(pronunciation_pattern, str)
            else pronunciation_pattern
        )

        def predicate(word: str, pronunciation: str, analysis: PhonemeAnalysis) -> bool:
            if min_length is not None and len(word) < min_length:
                return False
            if max_length is not None and len(word) > max_length:
                return False
            if min_phonemes is not None and analysis.phoneme_count < min_phonemes:
                return False
            if max_phonemes is not None and analysis.phoneme_count > max_phonemes:
                return False
            if min_syllables is not None and analysis.syllables < min_syllables:
                return False
            if max_syllables is not None and analysis.syllables > max_syllables:
                return False
            if wanted_complexity is not None and analysis.complexity != wanted_complexity:
                return False
            if contains and not contains <= analysis.unique_phonemes:
                return False
            if starts and not _matches_prefix(analysis.base_phonemes, starts):
                return False
            if ends and not _matches_prefix(analysis.base_phonemes[::-1], ends[::-1]):
                return False
            if word_regex is not None and not word_regex.search(word):
                return False
            if pron_regex is not None and not pron_regex.search(pronunciation):
                return False
            return True

        options.setdefault("include_analysis", True)
        return self._collect("advanced", predicate, limit=limit, **options)

    def search_words(
        self, pattern: str, *, limit: Optional[int] = DEFAULT_LIMIT, **options: Any
    ) -> List[WordAnalysis]:
        """Match words against a wildcard ``pattern`` (``*`` any run, ``?`` one character)."""

        regex = wildcard_to_regex(pattern)
        return self._collect(
            "wildcard", lambda word, _p, _a: bool(regex.match(word)), limit=limit, **options
        )

    def find_words_by_syllable_count(
        self, syllable_count: int, *, limit: Optional[int] = DEFAULT_LIMIT, **options: Any
    ) -> List[WordAnalysis]:
        return self._collect(
            "syllables",
            lambda _w, _p, analysis: analysis.syllables == syllable_count,
            limit=limit,
            **options,
        )

    def find_words_by_stress_pattern(
        self, pattern: str, *, limit: Optional[int] = DEFAULT_LIMIT, **options: Any
    ) -> List[WordAnalysis]:
        return self._collect(
            "stress",
            lambda _w, _p, analysis: analysis.stress_pattern == pattern,
            limit=limit,
            extra=lambda _w, _p, analysis: {"stress_pattern": analysis.stress_pattern},
            **options,
        )

    def find_words_by_phoneme_pattern(
        self, pattern: str, *, limit: Optional[int] = DEFAULT_LIMIT, **options: Any
    ) -> List[WordAnalysis]:
        """Match whole pronunciation strings, e.g. ``"K AE1 *"``."""

        regex = wildcard_to_regex(pattern, upper=True)
        return self._collect(
            "phoneme_pattern",
            lambda _w, pronunciation, _a: bool(regex.match(pronunciation)),
            limit=limit,
            extra=lambda _w, _p, analysis: {"phoneme_count": analysis.phoneme_count},
            **options,
        )

    def find_words_by_complexity(
        self,
        complexity: Union[Complexity, str],
        *,
        limit: Optional[int] = DEFAULT_LIMIT,
        **options: Any,
    ) -> List[WordAnalysis]:
        wanted = Complexity(complexity)
        return self._collect(
            "complexity",
            lambda _w, _p, analysis: analysis.complexity == wanted,
            limit=limit,
            extra=lambda _w, _p, analysis: {
                "complexity": analysis.complexity.value,
                "phoneme_count": analysis.phoneme_count,
            },
            **options,
        )

    def find_words_by_vowel_count(
        self, vowel_count: int, *, limit: Optional[int] = DEFAULT_LIMIT, **options: Any
    ) -> List[WordAnalysis]:
        return self._collect(
            "vowels",
            lambda _w, _p, analysis: analysis.vowels == vowel_count,
            limit=limit,
            extra=lambda _w, _p, analysis: {
                "vowel_count": analysis.vowels,
                "consonant_count": analysis.consonants,
            },
            **options,
        )

    def find_rhyming_words(
        self, target: str, *, limit: Optional[int] = DEFAULT_LIMIT, **options: Any
    ) -> List[WordAnalysis]:
        """Words sharing ``target``'s phonemes from its last vowel onwards."""

        normalized = (target or "").strip().lower()
        pronunciation = self.loader.lookup_phonemes(normalized)
        if not pronunciation:
            return []
        tail = _rhyme_tail(pronunciation.split())
        if tail is None:
            return []

        return self._collect(
            "rhyme",
            lambda word, phones, _a: word != normalized and _rhyme_tail(phones.split()) == tail,
            limit=limit,
            **options,
        )

    def find_similar_words(
        self,
        target: str,
        threshold: float = 0.7,
        *,
        limit: Optional[int] = DEFAULT_LIMIT,
        **options: Any,
    ) -> List[WordAnalysis]:
        """Words whose base-phoneme sets overlap ``target``'s by at least ``threshold``.

        Sorted by descending similarity, then alphabetically.
        """

        SEARCH_REQUESTS.labels(query="similar").inc()
        normalized = (target or "").strip().lower()
        pronunciation = self.loader.lookup_phonemes(normalized)
        if not pronunciation:
            return []

        scored: List[Tuple[float, str, str]] = []
        for word, phones in self.loader.iter_pronunciations():
            if word == normalized:
                continue
            similarity = phoneme_similarity(pronunciation, phones)
            if similarity >= threshold:
                scored.append((similarity, word, phones))

        scored.sort(key=lambda item: (-item[0], item[1]))
        if limit is not None:
            scored = scored[: max(limit, 0)]

        results: List[WordAnalysis] = []
        for similarity, word, phones in scored:
            result = self.analyze_word(word, phones, **options)
            result["similarity"] = similarity
            results.append(result)
        return results

    def get_word_clusters(self, cluster_type: str) -> Dict[str, List[str]]:
        """Group every word by syllable count, length, complexity or stress pattern."""

        if cluster_type not in CLUSTER_TYPES:
            self._logger.debug("Unknown cluster type", context={"cluster_type": cluster_type})
            return {}

        clusters: Dict[str, List[str]] = {}
        for word, pronunciation in self.loader.iter_pronunciations():
            analysis = self.analyzer.analyze(pronunciation)
            if cluster_type == "syllable":
                key = str(analysis.syllables)
            elif cluster_type == "length":
                key = str(len(word))
            elif cluster_type == "complexity":
                key = analysis.complexity.value
            else:
                key = analysis.stress_pattern
            clusters.setdefault(key, []).append(word)
        return clusters

    def get_random_words(
        self,
        count: int = 10,
        *,
        seed: Optional[int] = None,
        uniqueness_key: Optional[str] = None,
        max_cache_size: int = DEFAULT_USED_WORDS_SIZE,
        **options: Any,
    ) -> List[WordAnalysis]:
        """Sample ``count`` dictionary words.

        With ``uniqueness_key`` set, words returned earlier under the same key
        are skipped until fewer than ``count`` remain; the key then starts
        over. At most ``max_cache_size`` of the latest words are remembered.
        """

        words = self.loader.words()
        if count <= 0 or not words:
            return []
        chooser = random.Random(seed)
        if uniqueness_key is None:
            selected = chooser.sample(words, min(count, len(words)))
        else:
            selected = self._sample_unused(
                words, count, chooser, uniqueness_key, max_cache_size
            )
        return [
            self.analyze_word(word, self.loader.lookup_phonemes(word) or "", **options)
            for word in selected
        ]

    def _sample_unused(
        self,
        words: Sequence[str],
        count: int,
        chooser: random.Random,
        uniqueness_key: str,
        max_cache_size: int,
    ) -> List[str]:
        with self._used_lock:
            used = self._used_words.get_or_compute(uniqueness_key, OrderedDict)
            available = [word for word in words if word not in used]
            if len(available) < count:
                self._logger.debug(
                    "Uniqueness key exhausted; starting over",
                    context={"key": uniqueness_key, "available": len(available)},
                )
                used.clear()
                available = list(words)
            selected = chooser.sample(available, min(count, len(available)))
            for word in selected:
                used[word] = None
            while len(used) > max(0, max_cache_size):
                used.popitem(last=False)
        return selected

    def has_word_been_used(self, word: str, uniqueness_key: str) -> bool:
        used = self._used_words.get(uniqueness_key)
        return used is not None and word in used

    def clear_used_words(self, uniqueness_key: Optional[str] = None) -> None:
        """Forget the words handed out under one key, or under every key."""

        with self._used_lock:
            if uniqueness_key is None:
                self._used_words.clear()
                return
            used = self._used_words.get(uniqueness_key)
            if used is not None:
                used.clear()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def _export_rows(
        self,
        words: Optional[Iterable[str]],
        include_pronunciation: bool,
        include_syllables: bool,
        include_hyphenation: bool,
        include_analysis: bool,
    ) -> Iterator[Dict[str, Any]]:
        if words is None:
            pairs: Iterable[Tuple[str, str]] = self.loader.iter_pronunciations()
        else:
            pairs = (
                (entry.word, entry.phonemes) for entry in self.loader.iter_words(words)
            )

        for word, pronunciation in pairs:
            row = self.analyze_word(
                word,
                pronunciation,
                include_pronunciation=include_pronunciation,
                include_syllables=include_syllables,
                include_hyphenation=include_hyphenation,
            )
            if include_analysis:
                row.update(self._analysis_fields(word, self.analyzer.analyze(pronunciation)))
            yield row

    def export_dictionary_data(
        self,
        export_format: str = "json",
        *,
        words: Optional[Iterable[str]] = None,
        include_pronunciation: bool = True,
        include_syllables: bool = True,
        include_hyphenation: bool = True,
        include_analysis: bool = True,
    ) -> str:
        """Serialise dictionary rows as JSON, CSV or TSV.

        ``words`` restricts the export to a subset; unknown formats yield ``""``.
        """

        export_format = (export_format or "").lower()
        if export_format not in EXPORT_FORMATS:
            self._logger.warning("Unsupported export format", context={"format": export_format})
            return ""

        rows = list(
            self._export_rows(
                words,
                include_pronunciation,
                include_syllables,
                include_hyphenation,
                include_analysis,
            )
        )

        if export_format == "json":
            return json.dumps(rows, indent=2)

        headers = ["word"]
        if include_pronunciation:
            headers.append("pronunciation")
        if include_syllables:
            headers.append("syllables")
        if include_hyphenation:
            headers.append("hyphenated")
        if include_analysis:
            headers.extend(_EXPORT_ANALYSIS_FIELDS)

        buffer = io.StringIO()
        writer = csv.DictWriter(
            buffer,
            fieldnames=headers,
            delimiter="," if export_format == "csv" else "\t",
            lineterminator="\n",
        )
        writer.writeheader()
        writer.writerows(rows)
        return buffer.getvalue().rstrip("\n")


__all__ = [
    "CLUSTER_TYPES",
    "DictionarySearchService",
    "EXPORT_FORMATS",
    "WordAnalysis",
    "wildcard_to_regex",
]
