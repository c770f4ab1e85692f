from __future__ import annotations

import json

import pytest

from syllabix.services.search_service import DictionarySearchService, wildcard_to_regex


@pytest.fixture
def service(loader, analyzer):
    return DictionarySearchService(loader, analyzer)


def _words(results):
    return [result["word"] for result in results]


def test_wildcard_to_regex():
    regex = wildcard_to_regex("c?t*")

    assert regex.match("cat")
    assert regex.match("cutter")
    assert not regex.match("scat")
    assert wildcard_to_regex("k ae1 *", upper=True).match("K AE1 T")


def test_search_words_with_wildcards(service):
    assert _words(service.search_words("*at")) == ["cat", "hat", "bat"]
    assert _words(service.search_words("?a?")) == ["cat", "hat", "bat"]
    assert _words(service.search_words("*at", limit=2)) == ["cat", "hat"]
    assert service.search_words("*at", limit=0) == []


def test_analyze_word_fields(service):
    result = service.analyze_word("beautiful", "B Y UW1 T AH0 F AH0 L", include_analysis=True)

    assert result["hyphenated"] == "beau-ti-ful"
    assert result["syllables"] == 3
    assert result["phoneme_count"] == 8
    assert result["vowel_count"] == 3
    assert result["consonant_count"] == 5
    assert result["stress_pattern"] == "100"
    assert result["complexity"] == "moderate"
    assert result["length"] == 9
    assert result["unique_phonemes"] == sorted({"B", "Y", "UW", "T", "AH", "F", "L"})


def test_analyze_word_respects_include_flags(service):
    result = service.analyze_word(
        "cat",
        "K AE1 T",
        include_pronunciation=False,
        include_syllables=False,
        include_hyphenation=False,
    )

    assert result == {"word": "cat"}


def test_advanced_search_combines_filters(service):
    results = service.advanced_search(min_syllables=2, ends_with_phonemes=["L"])

    assert _words(results) == ["beautiful", "table"]
    assert "complexity" in results[0]

    assert _words(service.advanced_search(contains_phonemes=["AE1"], max_length=3)) == [
        "cat",
        "hat",
        "bat",
    ]
    assert _words(service.advanced_search(starts_with_phonemes=["HH"])) == ["hat", "hello"]
    assert _words(service.advanced_search(word_pattern=r"^t", complexity="simple")) == [
        "table",
        "the",
    ]
    assert _words(service.advanced_search(pronunciation_pattern=r"OW1$")) == ["hello"]


def test_find_words_by_counts_and_patterns(service):
    assert _words(service.find_words_by_syllable_count(3)) == ["beautiful"]
    assert _words(service.find_words_by_stress_pattern("01")) == ["hello"]
    assert _words(service.find_words_by_phoneme_pattern("* AE1 T")) == ["cat", "hat", "bat"]
    assert _words(service.find_words_by_vowel_count(2)) == ["table", "rabbit", "hello"]
    assert "beautiful" in _words(service.find_words_by_complexity("moderate"))


def test_invalid_complexity_raises(service):
    with pytest.raises(ValueError):
        service.find_words_by_complexity("baroque")


def test_find_rhyming_words_excludes_the_target(service):
    assert _words(service.find_rhyming_words("Cat")) == ["hat", "bat"]
    assert service.find_rhyming_words("zebra") == []


def test_find_similar_words_orders_by_similarity(service):
    results = service.find_similar_words("cat", threshold=0.5)

    assert _words(results) == ["bat", "hat"]
    assert all(result["similarity"] == pytest.approx(0.5) for result in results)
    assert service.find_similar_words("zebra") == []


def test_get_word_clusters(service):
    clusters = service.get_word_clusters("syllable")

    assert clusters["3"] == ["beautiful"]
    assert clusters["2"] == ["table", "rabbit", "hello"]
    assert service.get_word_clusters("colour") == {}


def test_get_random_words_is_reproducible(service):
    first = service.get_random_words(3, seed=7)
    second = service.get_random_words(3, seed=7)

    assert len(first) == 3
    assert first == second
    assert len(service.get_random_words(50, seed=1)) == 9
    assert service.get_random_words(0) == []


def test_random_words_with_a_uniqueness_key_do_not_repeat(service, loader):
    drawn = []
    for seed in (1, 2, 3):
        drawn.extend(_words(service.get_random_words(3, seed=seed, uniqueness_key="quiz")))

    assert sorted(drawn) == sorted(loader.words())
    assert all(service.has_word_been_used(word, "quiz") for word in drawn)
    assert not service.has_word_been_used(drawn[0], "other")

    # Nothing left for the key, so it starts over.
    fresh = _words(service.get_random_words(3, seed=4, uniqueness_key="quiz"))
    assert len(fresh) == 3
    assert sorted(word for word in drawn if service.has_word_been_used(word, "quiz")) == sorted(
        fresh
    )


def test_random_words_remember_only_the_latest(service):
    picked = _words(service.get_random_words(3, seed=5, uniqueness_key="short", max_cache_size=2))

    assert not service.has_word_been_used(picked[0], "short")
    assert service.has_word_been_used(picked[1], "short")
    assert service.has_word_been_used(picked[2], "short")


def test_clear_used_words(service):
    picked = _words(service.get_random_words(2, seed=9, uniqueness_key="a"))
    service.get_random_words(2, seed=9, uniqueness_key="b")

    service.clear_used_words("a")
    assert not service.has_word_been_used(picked[0], "a")
    assert len(_words(service.get_random_words(9, uniqueness_key="a"))) == 9

    service.clear_used_words()
    assert not any(service.has_word_been_used(word, "b") for word in service.loader.words())


def test_export_json(service):
    rows = json.loads(service.export_dictionary_data("json", words=["cat", "zebra"]))

    assert rows == [
        {
            "word": "cat",
            "pronunciation": "K AE1 T",
            "syllables": 1,
            "hyphenated": "cat",
            "phoneme_count": 3,
            "vowel_count": 1,
            "consonant_count": 2,
            "stress_pattern": "1",
            "complexity": "simple",
            "length": 3,
        }
    ]


def test_export_csv_and_tsv(service):
    csv_text = service.export_dictionary_data("csv", words=["table"], include_analysis=False)
    assert csv_text.split("\n") == [
        "word,pronunciation,syllables,hyphenated",
        "table,T EY1 B AH0 L,2,ta-ble",
    ]

    tsv_text = service.export_dictionary_data(
        "TSV", include_pronunciation=False, include_analysis=False
    )
    lines = tsv_text.split("\n")
    assert lines[0] == "word\tsyllables\thyphenated"
    assert lines[1] == "beautiful\t3\tbeau-ti-ful"
    assert len(lines) == 10


def test_export_unknown_format_returns_empty_string(service):
    assert service.export_dictionary_data("xml") == ""
