import pytest

from syllabix.core.cmu_hyphenation import (
    cmu_hyphenate,
    get_cmu_syllable_boundaries,
    split_at_boundaries,
)
from syllabix.core.grapheme_mapping import map_phoneme_positions
from syllabix.core.phonemes import analyze_phonemes

BEAUTIFUL = "B Y UW1 T AH0 F AH0 L"


def test_beautiful_boundaries():
    assert get_cmu_syllable_boundaries("beautiful", BEAUTIFUL) == [4, 6]
    assert cmu_hyphenate("beautiful", BEAUTIFUL) == "beau-ti-ful"


@pytest.mark.parametrize(
    "word, phonemes, expected",
    [
        ("rabbit", "R AE1 B AH0 T", "rab-bit"),
        ("table", "T EY1 B AH0 L", "ta-ble"),
        ("letter", "L EH1 T ER0", "let-ter"),
        ("mother", "M AH1 DH ER0", "mo-ther"),
        ("create", "K R IY0 EY1 T", "cre-ate"),
        ("hello", "HH AH0 L OW1", "hel-lo"),
    ],
)
def test_common_words(word, phonemes, expected):
    assert cmu_hyphenate(word, phonemes) == expected


def test_split_pieces_rebuild_the_word():
    for word, phonemes in [
        ("beautiful", BEAUTIFUL),
        ("strengths", "S T R EH1 NG K TH S"),
        ("table", "T EY1 B AH0 L"),
    ]:
        boundaries = get_cmu_syllable_boundaries(word, phonemes)
        assert boundaries == sorted(set(boundaries))
        assert all(0 < boundary < len(word) for boundary in boundaries)
        assert "".join(split_at_boundaries(word, boundaries)) == word


def test_single_vowel_words_have_no_boundaries():
    assert get_cmu_syllable_boundaries("cat", "K AE1 T") == []
    assert get_cmu_syllable_boundaries("strengths", "S T R EH1 NG K TH S") == []
    assert cmu_hyphenate("cat", "K AE1 T") == "cat"


def test_empty_inputs():
    assert get_cmu_syllable_boundaries("", BEAUTIFUL) == []
    assert get_cmu_syllable_boundaries("beautiful", "") == []


def test_original_casing_and_delimiter_are_kept():
    assert cmu_hyphenate("Rabbit", "R AE1 B AH0 T", delimiter="·") == "Rab·bit"


def test_boundaries_accept_phoneme_lists():
    assert get_cmu_syllable_boundaries("beautiful", BEAUTIFUL.split()) == [4, 6]


@pytest.mark.parametrize(
    "word, phonemes, expected",
    [
        ("accelerator", "AE0 K S EH1 L ER0 EY2 T ER0", "ac-ce-ler-a-tor"),
        ("acceptable", "AH0 K S EH1 P T AH0 B AH0 L", "ac-cep-ta-ble"),
        ("accessible", "AE0 K S EH1 S AH0 B AH0 L", "ac-ces-si-ble"),
        ("success", "S AH0 K S EH1 S", "suc-cess"),
        ("occur", "AH0 K ER1", "oc-cur"),
    ],
)
def test_double_c_words(word, phonemes, expected):
    assert cmu_hyphenate(word, phonemes) == expected


SPELLING_VARIETY = [
    ("accelerator", "AE0 K S EH1 L ER0 EY2 T ER0"),
    ("acceptable", "AH0 K S EH1 P T AH0 B AH0 L"),
    ("accessible", "AE0 K S EH1 S AH0 B AH0 L"),
    ("success", "S AH0 K S EH1 S"),
    ("vaccine", "V AE0 K S IY1 N"),
    ("occur", "AH0 K ER1"),
    ("coffee", "K AO1 F IY0"),
    ("taxi", "T AE1 K S IY0"),
    ("exact", "IH0 G Z AE1 K T"),
    ("exercise", "EH1 K S ER0 S AY2 Z"),
    ("singer", "S IH1 NG ER0"),
    ("finger", "F IH1 NG G ER0"),
    ("thinking", "TH IH1 NG K IH0 NG"),
    ("language", "L AE1 NG G W AH0 JH"),
    ("lightning", "L AY1 T N IH0 NG"),
    ("ocean", "OW1 SH AH0 N"),
    ("poem", "P OW1 AH0 M"),
    ("chaos", "K EY1 AA0 S"),
    ("react", "R IY0 AE1 K T"),
    ("quiet", "K W AY1 AH0 T"),
    ("science", "S AY1 AH0 N S"),
    ("museum", "M Y UW0 Z IY1 AH0 M"),
    ("knowledge", "N AA1 L IH0 JH"),
    ("island", "AY1 L AH0 N D"),
    ("subtle", "S AH1 T AH0 L"),
    ("psychology", "S AY0 K AA1 L AH0 JH IY0"),
    ("receive", "R IH0 S IY1 V"),
    ("xylophone", "Z AY1 L AH0 F OW2 N"),
    ("kitchen", "K IH1 CH AH0 N"),
    ("photograph", "F OW1 T AH0 G R AE2 F"),
    ("banana", "B AH0 N AE1 N AH0"),
]


@pytest.mark.parametrize("word, phonemes", SPELLING_VARIETY)
def test_matched_offsets_never_move_backwards(word, phonemes):
    matched = [
        position.offset
        for position in map_phoneme_positions(word, phonemes)
        if not position.estimated
    ]

    assert matched == sorted(matched)
    assert all(0 <= offset < len(word) for offset in matched)


@pytest.mark.parametrize("word, phonemes", SPELLING_VARIETY)
def test_one_boundary_between_each_pair_of_syllables(word, phonemes):
    boundaries = get_cmu_syllable_boundaries(word, phonemes)

    assert len(boundaries) == analyze_phonemes(phonemes).syllables - 1
    assert boundaries == sorted(set(boundaries))
    assert all(0 < boundary < len(word) for boundary in boundaries)


@pytest.mark.parametrize("word, phonemes", SPELLING_VARIETY)
def test_removing_the_delimiter_gives_back_the_word(word, phonemes):
    hyphenated = cmu_hyphenate(word.upper(), phonemes, delimiter="|")

    assert hyphenated.replace("|", "") == word.upper()
    assert hyphenated.count("|") == len(get_cmu_syllable_boundaries(word, phonemes))
