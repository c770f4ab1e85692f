"""Syllable counting, syllabification and hyphenation for English words."""

from .core.cmu_hyphenation import cmu_hyphenate, get_cmu_syllable_boundaries
from .core.cmudict_loader import CMUDictLoader, DEFAULT_CMU_LOADER, DictionaryEntry
from .core.grapheme_mapping import MappedOffset, map_phoneme_positions, map_phonemes_to_word
from .core.pattern_hyphenation import BreakRule, PatternHyphenator, pattern_boundaries, pattern_hyphenate
from .core.phonemes import PhonemeAnalysis, PhonemeAnalyzer, analyze_phonemes
from .core.syllable_counter import SyllableCounter, SyllableInfo, get_syllable_count

__version__ = "0.1.0"

__all__ = [
    "BreakRule",
    "CMUDictLoader",
    "DEFAULT_CMU_LOADER",
    "DictionaryEntry",
    "MappedOffset",
    "PatternHyphenator",
    "PhonemeAnalysis",
    "PhonemeAnalyzer",
    "SyllableCounter",
    "SyllableInfo",
    "analyze_phonemes",
    "cmu_hyphenate",
    "get_cmu_syllable_boundaries",
    "get_syllable_count",
    "map_phoneme_positions",
    "map_phonemes_to_word",
    "pattern_boundaries",
    "pattern_hyphenate",
]
