"""Core phonetic and orthographic analysis for syllabix."""

from .cmu_hyphenation import cmu_hyphenate, get_cmu_syllable_boundaries
from .cmudict_loader import CMUDictLoader, DEFAULT_CMU_LOADER, DictionaryEntry, VOWEL_PHONEMES
from .grapheme_mapping import MappedOffset, map_phoneme_positions, map_phonemes_to_word
from .pattern_hyphenation import BreakRule, PatternHyphenator, pattern_boundaries, pattern_hyphenate
from .patterns import PATTERNS_BY_DIALECT, HyphenationPattern, parse_pattern
from .phonemes import (
    Complexity,
    DEFAULT_PHONEME_ANALYZER,
    PhonemeAnalysis,
    PhonemeAnalyzer,
    analyze_phonemes,
)
from .syllable_counter import (
    DEFAULT_SYLLABLE_COUNTER,
    SyllableCounter,
    SyllableInfo,
    get_syllable_count,
)

__all__ = [
    "BreakRule",
    "CMUDictLoader",
    "Complexity",
    "DEFAULT_CMU_LOADER",
    "DEFAULT_PHONEME_ANALYZER",
    "DEFAULT_SYLLABLE_COUNTER",
    "DictionaryEntry",
    "HyphenationPattern",
    "MappedOffset",
    "PATTERNS_BY_DIALECT",
    "PatternHyphenator",
    "PhonemeAnalysis",
    "PhonemeAnalyzer",
    "SyllableCounter",
    "SyllableInfo",
    "VOWEL_PHONEMES",
    "analyze_phonemes",
    "cmu_hyphenate",
    "get_cmu_syllable_boundaries",
    "get_syllable_count",
    "map_phoneme_positions",
    "map_phonemes_to_word",
    "parse_pattern",
    "pattern_boundaries",
    "pattern_hyphenate",
]
