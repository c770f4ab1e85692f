from __future__ import annotations

from syllabix.core.syllable_counter import (
    SOURCE_CMU,
    SOURCE_FALLBACK,
    SyllableCounter,
    extract_words,
    get_syllable_count,
)


def test_dictionary_words_use_the_pronunciation(counter):
    info = counter.get_syllable_info("beautiful")

    assert info.source == SOURCE_CMU
    assert info.syllables == 3
    assert info.hyphenated == "beau-ti-ful"
    assert info.pronunciation == "B Y UW1 T AH0 F AH0 L"
    assert info.boundaries == (4, 6)


def test_unknown_words_use_patterns_and_estimate(counter):
    info = counter.get_syllable_info("hopefulness")

    assert info.source == SOURCE_FALLBACK
    assert info.syllables == 3
    assert info.pronunciation is None
    assert info.hyphenated.replace("-", "") == "hopefulness"


def test_empty_word_counts_zero(counter):
    info = counter.get_syllable_info("  ")

    assert info.syllables == 0
    assert info.source == SOURCE_FALLBACK


def test_results_are_cached_per_word_and_options(counter):
    first = counter.get_syllable_info("table")
    second = counter.get_syllable_info("table")
    dotted = counter.get_syllable_info("table", delimiter=".")

    assert first is second
    assert dotted.hyphenated == "ta.ble"
    assert counter.cache_stats()["hits"] == 1
    assert counter.cache_stats()["size"] == 2

    counter.clear_cache()
    assert counter.cache_stats()["size"] == 0


def test_custom_patterns_bypass_the_cache(counter):
    info = counter.get_syllable_info("zebra", custom_patterns={"zebra": "zeb-ra"})

    assert info.hyphenated == "zeb-ra"
    assert counter.cache_stats()["size"] == 0


def test_text_summary_splits_sources(counter):
    summary = counter.get_text_summary("The beautiful rabbit, happily.")

    assert summary["total_words"] == 4
    assert summary["cmu_words"] == 3
    assert summary["fallback_words"] == 1
    assert summary["total_syllables"] == sum(info.syllables for info in summary["word_details"])


def test_helpers(counter):
    assert counter.count("rabbit") == 2
    assert counter.get_pronunciation("cat") == "K AE1 T"
    assert counter.is_in_dictionary("HAT")
    assert not counter.is_in_dictionary("zebra")
    assert counter.hyphenate_word("table") == {
        "word": "table",
        "hyphenated": "ta-ble",
        "syllables": 2,
        "source": "cmu",
        "boundaries": [2],
    }


def test_info_serialises_to_plain_dict(counter):
    payload = counter.get_syllable_info("rabbit").to_dict()

    assert payload["boundaries"] == [3]
    assert payload["source"] == "cmu"


def test_extract_words_keeps_apostrophes():
    assert extract_words("Don't stop, world!") == ["Don't", "stop", "world"]
    assert extract_words("") == []


def test_get_syllable_count_for_text(counter):
    result = get_syllable_count(
        "beautiful table\n\nthe cat",
        include_hyphenation=True,
        include_details=True,
        counter=counter,
    )

    assert result["total_syllable_count"] == 7
    assert [entry["hyphenated"] for entry in result["hyphenation"]] == [
        "beau-ti-ful",
        "ta-ble",
        "the",
        "cat",
    ]
    assert "pronunciation" not in result["hyphenation"][0]
    assert result["details"] == {"total_words": 4, "average_per_word": 1.75, "lines": 2}


def test_get_syllable_count_for_word_list(counter):
    result = get_syllable_count(
        ["rabbit", "hat"],
        include_hyphenation=True,
        include_pronunciation=True,
        delimiter="·",
        counter=counter,
    )

    assert result["total_syllable_count"] == 3
    assert result["hyphenation"][0] == {
        "hyphenated": "rab·bit",
        "syllables": 2,
        "source": "cmu",
        "pronunciation": "R AE1 B AH0 T",
    }
    assert "details" not in result


def test_get_syllable_count_for_empty_input(counter):
    result = get_syllable_count("", include_details=True, counter=counter)

    assert result == {
        "total_syllable_count": 0,
        "details": {"total_words": 0, "average_per_word": 0.0, "lines": 0},
    }


def test_counter_reads_cache_size_from_environment(monkeypatch, loader, analyzer):
    monkeypatch.setenv("SYLLABIX_WORD_CACHE_SIZE", "7")

    counter = SyllableCounter(loader, analyzer)

    assert counter.cache_stats()["capacity"] == 7
