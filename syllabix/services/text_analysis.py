"""Syllable analysis of free text with input limits and run telemetry."""

from __future__ import annotations

import re
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..core.syllable_counter import DEFAULT_SYLLABLE_COUNTER, SOURCE_CMU, SyllableCounter
from ..utils.observability import (
    TEXT_WORDS,
    get_logger,
    record_exception,
    set_span_attributes,
    start_span,
)
from ..utils.telemetry import StructuredTelemetry

DEFAULT_MAX_WORDS = 5000
DEFAULT_MAX_CHARACTERS = 50000
DEFAULT_MAX_LINES = 100

LARGE_TEXT_WORDS = 1000
MANY_LINES = 50

_EDGE_PUNCTUATION = re.compile(r"^[^\w']+|[^\w']+$")

WordProcessor = Callable[[str], int]


def _non_empty_lines(text: str) -> List[str]:
    return [line for line in text.strip().split("\n") if line.strip()]


def _clean_token(token: str) -> str:
    return _EDGE_PUNCTUATION.sub("", token)


class TextAnalyzer:
    """Counts syllables line by line for poems, lyrics and other short texts."""

    def __init__(
        self,
        counter: Optional[SyllableCounter] = None,
        *,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.counter = counter or DEFAULT_SYLLABLE_COUNTER
        self.telemetry = telemetry or StructuredTelemetry()
        # One run at a time owns the telemetry trace.
        self._run_lock = threading.Lock()
        self._logger = get_logger(__name__).bind(component="text_analyzer")

    def _word_detail(
        self,
        token: str,
        include_hyphenation: bool,
        processor: Optional[WordProcessor],
    ) -> Optional[Dict[str, Any]]:
        word = _clean_token(token)
        if not word:
            return None

        if processor is not None:
            return {
                "word": token,
                "syllables": int(processor(word)),
                "hyphenated": None,
                "pronunciation": None,
            }

        info = self.counter.get_syllable_info(word)
        self.telemetry.increment(f"words.{info.source}")
        hyphenated = None
        if include_hyphenation and info.source == SOURCE_CMU:
            hyphenated = info.hyphenated
        return {
            "word": token,
            "syllables": info.syllables,
            "hyphenated": hyphenated,
            "pronunciation": info.pronunciation,
        }

    def _collect_words(
        self,
        lines: Sequence[str],
        max_words: int,
        include_hyphenation: bool,
        processor: Optional[WordProcessor],
    ) -> Tuple[List[Dict[str, Any]], int, bool]:
        details: List[Dict[str, Any]] = []
        skipped = 0
        for line in lines:
            for token in line.split():
                if len(details) >= max_words:
                    return details, skipped, True
                detail = self._word_detail(token, include_hyphenation, processor)
                if detail is None:
                    skipped += 1
                    continue
                details.append(detail)
        return details, skipped, False

    def analyze_text(
        self,
        text: str,
        *,
        max_words: int = DEFAULT_MAX_WORDS,
        max_characters: int = DEFAULT_MAX_CHARACTERS,
        max_lines: int = DEFAULT_MAX_LINES,
        include_breakdown: bool = True,
        include_hyphenation: bool = True,
        breakdown_separator: str = "-",
        word_processor: Optional[WordProcessor] = None,
    ) -> Dict[str, Any]:
        """Count syllables in ``text`` within the given limits.

        Only the first ``max_lines`` non-empty lines are read, that text is cut
        to ``max_characters`` and at most ``max_words`` words are counted.
        Tokens made only of punctuation are skipped. Each word's ``display``
        is its hyphenation (dictionary words only) or the word, followed by
        its syllable count.
        """

        text = text or ""
        all_lines = _non_empty_lines(text)
        lines = all_lines[:max_lines]
        full_text = "\n".join(lines)
        truncated = len(full_text) > max_characters
        if truncated:
            full_text = full_text[:max_characters]
            lines = _non_empty_lines(full_text)

        with self._run_lock:
            self.telemetry.start_trace("analyze_text")
            with start_span(
                "syllabix.analyze_text",
                {"text.lines": len(lines), "text.characters": len(full_text)},
            ) as span, self.telemetry.timer("analyze_text"):
                try:
                    details, skipped, word_limit_hit = self._collect_words(
                        lines, max_words, include_hyphenation, word_processor
                    )
                except Exception as error:
                    record_exception(span, error)
                    raise
                set_span_attributes(span, {"text.words": len(details), "text.skipped": skipped})
            timings = self.telemetry.snapshot()["timings"].get("analyze_text", {})
            self.telemetry.annotate("result.words", len(details))
        TEXT_WORDS.observe(len(details))

        for detail in details:
            shown = detail["hyphenated"] or detail["word"]
            detail["display"] = f"{shown}{detail['syllables']}"

        total = sum(detail["syllables"] for detail in details)
        limits_applied = len(all_lines) > max_lines or truncated or word_limit_hit

        self._logger.debug(
            "Text analysed",
            context={"words": len(details), "syllables": total, "limits_applied": limits_applied},
        )

        return {
            "total_syllables": total,
            "syllables_per_word": total / len(details) if details else 0.0,
            "lines": len(lines),
            "word_count": len(details),
            "character_count": len(full_text),
            "syllable_breakdown": (
                breakdown_separator.join(detail["display"] for detail in details)
                if include_breakdown
                else ""
            ),
            "word_details": details,
            "metadata": {
                "processing_time": timings.get("total", 0.0),
                "words_processed": len(details),
                "words_skipped": skipped,
                "limits_applied": limits_applied,
            },
        }

    def quick_count(self, text: str, **limits: Any) -> Dict[str, Any]:
        result = self.analyze_text(
            text, include_breakdown=False, include_hyphenation=False, **limits
        )
        return {
            "total_syllables": result["total_syllables"],
            "word_count": result["word_count"],
            "syllables_per_word": result["syllables_per_word"],
        }

    def get_word_breakdown(self, word: str) -> Dict[str, Any]:
        info = self.counter.get_syllable_info(word)
        return {
            "word": word,
            "syllables": info.syllables,
            "hyphenated": info.hyphenated if info.source == SOURCE_CMU else word,
            "pronunciation": info.pronunciation,
        }

    def batch_count_words(
        self,
        words: Sequence[str],
        *,
        max_batch_size: int = 1000,
        include_breakdown: bool = True,
        word_processor: Optional[WordProcessor] = None,
    ) -> List[Dict[str, Any]]:
        """Count each of the first ``max_batch_size`` words separately."""

        results: List[Dict[str, Any]] = []
        for word in list(words)[:max_batch_size]:
            if word_processor is not None:
                results.append({"word": word, "syllables": int(word_processor(word))})
                continue
            breakdown = self.get_word_breakdown(word)
            if not include_breakdown:
                breakdown.pop("hyphenated")
            results.append(breakdown)
        return results


def validate_text_input(
    text: str,
    *,
    max_words: Optional[int] = None,
    max_characters: Optional[int] = None,
    max_lines: Optional[int] = None,
) -> Dict[str, Any]:
    """Check ``text`` against optional limits without analysing it."""

    text = text or ""
    lines = _non_empty_lines(text)
    words = text.split()
    errors: List[str] = []
    warnings: List[str] = []

    if max_words and len(words) > max_words:
        errors.append(f"Text exceeds maximum word limit of {max_words} words")
    if max_characters and len(text) > max_characters:
        errors.append(f"Text exceeds maximum character limit of {max_characters} characters")
    if max_lines and len(lines) > max_lines:
        errors.append(f"Text exceeds maximum line limit of {max_lines} lines")
    if not text.strip():
        errors.append("Text is empty")
    if len(words) > LARGE_TEXT_WORDS:
        warnings.append("Large text detected - processing may take longer")
    if len(lines) > MANY_LINES:
        warnings.append("Many lines detected - consider processing in smaller chunks")

    return {
        "is_valid": not errors,
        "errors": errors,
        "warnings": warnings,
        "stats": {
            "word_count": len(words),
            "character_count": len(text),
            "line_count": len(lines),
        },
    }


DEFAULT_TEXT_ANALYZER = TextAnalyzer()


def analyze_text(text: str, **options: Any) -> Dict[str, Any]:
    return DEFAULT_TEXT_ANALYZER.analyze_text(text, **options)


def quick_count_text_syllables(text: str, **limits: Any) -> Dict[str, Any]:
    return DEFAULT_TEXT_ANALYZER.quick_count(text, **limits)


def get_word_breakdown(word: str) -> Dict[str, Any]:
    return DEFAULT_TEXT_ANALYZER.get_word_breakdown(word)


def batch_count_words(words: Sequence[str], **options: Any) -> List[Dict[str, Any]]:
    return DEFAULT_TEXT_ANALYZER.batch_count_words(words, **options)


__all__ = [
    "DEFAULT_TEXT_ANALYZER",
    "TextAnalyzer",
    "analyze_text",
    "batch_count_words",
    "get_word_breakdown",
    "quick_count_text_syllables",
    "validate_text_input",
]
