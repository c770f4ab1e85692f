"""Dictionary search, statistics and free-text analysis services."""

from .search_service import DictionarySearchService, wildcard_to_regex
from .statistics import (
    CorrelationAnalysis,
    DictionaryStatistics,
    StatisticalSummary,
    calculate_correlation,
    calculate_statistics,
    find_outliers,
    get_dictionary_stats,
)
from .text_analysis import (
    TextAnalyzer,
    analyze_text,
    batch_count_words,
    get_word_breakdown,
    quick_count_text_syllables,
    validate_text_input,
)

__all__ = [
    "CorrelationAnalysis",
    "DictionarySearchService",
    "DictionaryStatistics",
    "StatisticalSummary",
    "TextAnalyzer",
    "analyze_text",
    "batch_count_words",
    "calculate_correlation",
    "calculate_statistics",
    "find_outliers",
    "get_dictionary_stats",
    "get_word_breakdown",
    "quick_count_text_syllables",
    "validate_text_input",
    "wildcard_to_regex",
]
