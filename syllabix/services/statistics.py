"""Descriptive statistics over numbers and over the pronouncing dictionary."""

from __future__ import annotations

import math
import statistics
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core.cmudict_loader import DEFAULT_CMU_LOADER, CMUDictLoader
from ..core.phonemes import DEFAULT_PHONEME_ANALYZER, PhonemeAnalyzer
from ..utils.cache import BoundedLRUCache
from ..utils.observability import get_logger

PERCENTILES = (10, 25, 50, 75, 90, 95, 99)
OUTLIER_METRICS = ("length", "syllables", "phonemes")
FREQUENCY_KINDS = ("phonemes", "syllables", "length", "complexity")

_logger = get_logger(__name__).bind(component="statistics")


@dataclass(frozen=True)
class StatisticalSummary:
    mean: float
    median: float
    mode: float
    standard_deviation: float
    variance: float
    minimum: float
    maximum: float
    range: float
    quartiles: Tuple[float, float, float]
    percentiles: Dict[int, float] = field(default_factory=dict)


@dataclass(frozen=True)
class CorrelationAnalysis:
    correlation: float
    strength: str
    significant: bool
    sample_size: int


def calculate_statistics(data: Sequence[float]) -> StatisticalSummary:
    """Summarise ``data``; variance is the population variance.

    Raises:
        ValueError: if ``data`` is empty.
    """

    if not data:
        raise ValueError("Cannot calculate statistics for an empty dataset")

    ordered = sorted(data)
    count = len(ordered)
    frequencies = Counter(ordered)
    top = max(frequencies.values())
    mode = min(value for value, seen in frequencies.items() if seen == top)
    variance = statistics.pvariance(ordered)

    def at(fraction: float) -> float:
        return ordered[min(int(count * fraction), count - 1)]

    return StatisticalSummary(
        mean=statistics.fmean(ordered),
        median=statistics.median(ordered),
        mode=mode,
        standard_deviation=math.sqrt(variance),
        variance=variance,
        minimum=ordered[0],
        maximum=ordered[-1],
        range=ordered[-1] - ordered[0],
        quartiles=(at(0.25), statistics.median(ordered), at(0.75)),
        percentiles={percent: at(percent / 100) for percent in PERCENTILES},
    )


def correlation_strength(coefficient: float) -> str:
    magnitude = abs(coefficient)
    if magnitude >= 0.7:
        return "strong"
    if magnitude >= 0.3:
        return "moderate"
    if magnitude >= 0.1:
        return "weak"
    return "none"


def calculate_correlation(x: Sequence[float], y: Sequence[float]) -> CorrelationAnalysis:
    """Pearson correlation of two equally long series.

    A constant series has no defined correlation and reports ``0.0``.

    Raises:
        ValueError: if the series differ in length or have fewer than two points.
    """

    if len(x) != len(y) or len(x) < 2:
        raise ValueError("Datasets must have the same length and at least 2 points")

    count = len(x)
    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(a * b for a, b in zip(x, y))
    sum_x2 = sum(a * a for a in x)
    sum_y2 = sum(b * b for b in y)

    numerator = count * sum_xy - sum_x * sum_y
    denominator = math.sqrt((count * sum_x2 - sum_x ** 2) * (count * sum_y2 - sum_y ** 2))
    coefficient = numerator / denominator if denominator else 0.0

    return CorrelationAnalysis(
        correlation=coefficient,
        strength=correlation_strength(coefficient),
        significant=abs(coefficient) > 2 / math.sqrt(count),
        sample_size=count,
    )


class DictionaryStatistics:
    """Aggregate statistics over every dictionary entry.

    The full-dictionary pass is memoized per loader, so repeated calls to
    :meth:`get_dictionary_stats` and :meth:`get_words_by_frequency` are cheap.
    """

    def __init__(
        self,
        loader: Optional[CMUDictLoader] = None,
        analyzer: Optional[PhonemeAnalyzer] = None,
        *,
        cache: Optional[BoundedLRUCache[int, Dict[str, Any]]] = None,
    ) -> None:
        self.loader = loader or DEFAULT_CMU_LOADER
        self.analyzer = analyzer or DEFAULT_PHONEME_ANALYZER
        self._cache = cache if cache is not None else BoundedLRUCache(8)

    def _compute_stats(self) -> Dict[str, Any]:
        phoneme_counts: Counter = Counter()
        stress_counts: Counter = Counter()
        syllable_distribution: Counter = Counter()
        length_distribution: Counter = Counter()
        complexity_distribution: Counter = Counter()
        total_words = 0
        total_phonemes = 0
        total_syllables = 0

        for word, pronunciation in self.loader.iter_pronunciations():
            analysis = self.analyzer.analyze(pronunciation)
            total_words += 1
            total_phonemes += analysis.phoneme_count
            total_syllables += analysis.syllables
            phoneme_counts.update(analysis.base_phonemes)
            stress_counts[analysis.stress_pattern] += 1
            syllable_distribution[analysis.syllables] += 1
            length_distribution[len(word)] += 1
            complexity_distribution[analysis.complexity.value] += 1

        _logger.info("Dictionary statistics computed", context={"words": total_words})
        return {
            "total_words": total_words,
            "average_phonemes": total_phonemes / total_words if total_words else 0.0,
            "average_syllables": total_syllables / total_words if total_words else 0.0,
            "most_common_phonemes": phoneme_counts.most_common(20),
            "stress_patterns": stress_counts.most_common(10),
            "syllable_distribution": dict(sorted(syllable_distribution.items())),
            "length_distribution": dict(sorted(length_distribution.items())),
            "complexity_distribution": dict(complexity_distribution),
        }

    def get_dictionary_stats(self) -> Dict[str, Any]:
        return self._cache.get_or_compute(id(self.loader), self._compute_stats)

    def get_words_by_frequency(self, kind: str) -> List[Dict[str, Any]]:
        """Frequency table for phonemes, syllable counts, lengths or complexity.

        Each row is ``{"value", "count", "percentage"}`` where percentage is
        relative to the number of words.
        """

        stats = self.get_dictionary_stats()
        total = stats["total_words"] or 1
        if kind == "phonemes":
            pairs = list(stats["most_common_phonemes"])
        elif kind == "syllables":
            pairs = list(stats["syllable_distribution"].items())
        elif kind == "length":
            pairs = list(stats["length_distribution"].items())
        elif kind == "complexity":
            pairs = list(stats["complexity_distribution"].items())
        else:
            _logger.debug("Unknown frequency kind", context={"kind": kind})
            return []
        return [
            {"value": value, "count": count, "percentage": count / total * 100}
            for value, count in pairs
        ]

    def find_outliers(
        self,
        metric: str,
        threshold: float = 2.0,
        *,
        sample_size: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Words whose ``metric`` lies more than ``threshold`` deviations from the mean."""

        if metric not in OUTLIER_METRICS:
            _logger.debug("Unknown outlier metric", context={"metric": metric})
            return []

        rows: List[Dict[str, Any]] = []
        for index, (word, pronunciation) in enumerate(self.loader.iter_pronunciations()):
            if sample_size is not None and index >= sample_size:
                break
            analysis = self.analyzer.analyze(pronunciation)
            rows.append(
                {
                    "word": word,
                    "pronunciation": pronunciation,
                    "syllables": analysis.syllables,
                    "phonemes": analysis.phoneme_count,
                    "length": len(word),
                }
            )
        if not rows:
            return []

        summary = calculate_statistics([row[metric] for row in rows])
        lower = summary.mean - threshold * summary.standard_deviation
        upper = summary.mean + threshold * summary.standard_deviation
        outliers = [row for row in rows if row[metric] < lower or row[metric] > upper]
        outliers.sort(key=lambda row: (-row[metric], row["word"]))
        return outliers

    def clear_cache(self) -> None:
        self._cache.clear()


# Each entry holds its loader, so an id cannot be reused while cached.
_STATISTICS_BY_LOADER: BoundedLRUCache[int, DictionaryStatistics] = BoundedLRUCache(8)


def _statistics_for(loader: Optional[CMUDictLoader]) -> DictionaryStatistics:
    loader = loader or DEFAULT_CMU_LOADER
    return _STATISTICS_BY_LOADER.get_or_compute(id(loader), lambda: DictionaryStatistics(loader))


def get_dictionary_stats(loader: Optional[CMUDictLoader] = None) -> Dict[str, Any]:
    """Dictionary-wide statistics, computed once per loader."""

    return _statistics_for(loader).get_dictionary_stats()


def find_outliers(
    metric: str,
    threshold: float = 2.0,
    *,
    loader: Optional[CMUDictLoader] = None,
    sample_size: Optional[int] = None,
) -> List[Dict[str, Any]]:
    return _statistics_for(loader).find_outliers(metric, threshold, sample_size=sample_size)


__all__ = [
    "CorrelationAnalysis",
    "DictionaryStatistics",
    "StatisticalSummary",
    "calculate_correlation",
    "calculate_statistics",
    "correlation_strength",
    "find_outliers",
    "get_dictionary_stats",
]
