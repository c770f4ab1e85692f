from __future__ import annotations

import pytest

from syllabix.core.phonemes import (
    Complexity,
    PhonemeAnalyzer,
    analyze_phonemes,
    base_phoneme,
    count_syllables_from_pronunciation,
    determine_complexity,
    extract_stress_pattern,
    is_vowel_phoneme,
    levenshtein_distance,
    phoneme_similarity,
)
from syllabix.utils.cache import BoundedLRUCache

BEAUTIFUL = "B Y UW1 T AH0 F AH0 L"


def test_analyze_beautiful():
    analysis = analyze_phonemes(BEAUTIFUL)

    assert analysis.syllables == 3
    assert analysis.vowels == 3
    assert analysis.consonants == 5
    assert analysis.phoneme_count == 8
    assert analysis.stress_pattern == "100"
    assert analysis.complexity is Complexity.MODERATE
    assert analysis.unique_phonemes == frozenset({"B", "Y", "UW", "T", "AH", "F", "L"})
    assert analysis.phoneme_diversity == pytest.approx(7 / 8)
    assert analysis.base_phonemes == ("B", "Y", "UW", "T", "AH", "F", "AH", "L")


def test_analyze_empty_string_is_all_zero():
    analysis = analyze_phonemes("")

    assert analysis.syllables == 0
    assert analysis.phoneme_count == 0
    assert analysis.stress_pattern == ""
    assert analysis.phoneme_diversity == 0.0
    assert analysis.unique_phonemes == frozenset()
    assert analysis.complexity is Complexity.MODERATE


def test_vowel_without_stress_digit_defaults_to_unstressed():
    assert extract_stress_pattern("K AE T AH1") == "01"
    assert count_syllables_from_pronunciation("K AE T AH1") == 2


def test_complexity_thresholds():
    assert analyze_phonemes("K AE1 T").complexity is Complexity.SIMPLE
    assert determine_complexity(2, 6) is Complexity.SIMPLE
    assert determine_complexity(1, 6) is Complexity.MODERATE
    assert determine_complexity(4, 10) is Complexity.MODERATE
    assert determine_complexity(5, 10) is Complexity.COMPLEX
    assert determine_complexity(3, 11) is Complexity.COMPLEX
    assert determine_complexity(0, 0) is Complexity.MODERATE


def test_base_phoneme_and_vowel_checks():
    assert base_phoneme("EY1") == "EY"
    assert base_phoneme("HH") == "HH"
    assert is_vowel_phoneme("ER0")
    assert not is_vowel_phoneme("NG")


def test_syllables_match_vowel_count_for_sequences():
    analyzer = PhonemeAnalyzer(cache=BoundedLRUCache(10))

    assert analyzer.count_syllables("HH AH0 L OW1") == 2
    assert analyzer.analyze(["HH", "AH0", "L", "OW1"]).stress_pattern == "01"
    assert analyzer.vowel_indices(BEAUTIFUL) == [2, 4, 6]


def test_analyzer_cache_is_bounded_and_reused():
    cache = BoundedLRUCache(2)
    analyzer = PhonemeAnalyzer(cache=cache)

    first = analyzer.analyze("K AE1 T")
    assert analyzer.analyze("K AE1 T") is first
    assert analyzer.stats()["hits"] == 1

    analyzer.analyze("HH AE1 T")
    analyzer.analyze("B AE1 T")

    assert len(cache) == 2
    assert "K AE1 T" not in cache
    assert "B AE1 T" in cache

    analyzer.clear()
    assert analyzer.stats() == {"size": 0, "capacity": 2, "hits": 0, "misses": 0}


def test_phoneme_similarity_uses_base_phonemes():
    assert phoneme_similarity("K AE1 T", "HH AE1 T") == pytest.approx(0.5)
    assert phoneme_similarity("K AE1 T", "K AE0 T") == 1.0
    assert phoneme_similarity("", "") == 0.0


def test_levenshtein_distance():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance(["K", "AE", "T"], ["HH", "AE", "T"]) == 1
    assert levenshtein_distance([], ["T"]) == 1
