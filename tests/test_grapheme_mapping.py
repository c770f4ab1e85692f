from syllabix.core.grapheme_mapping import (
    ESTIMATED,
    MATCHED,
    map_phoneme_positions,
    map_phonemes_to_word,
)

BEAUTIFUL = "B Y UW1 T AH0 F AH0 L"


def test_beautiful_offsets():
    assert map_phonemes_to_word("beautiful", BEAUTIFUL) == [0, 1, 1, 4, 5, 6, 7, 8]


def test_one_offset_per_phoneme_inside_the_word():
    for word, phonemes in [
        ("beautiful", BEAUTIFUL),
        ("table", "T EY1 B AH0 L"),
        ("strengths", "S T R EH1 NG K TH S"),
        ("hello", "HH AH0 L OW1"),
    ]:
        offsets = map_phonemes_to_word(word, phonemes)
        assert len(offsets) == len(phonemes.split())
        assert all(0 <= offset < len(word) for offset in offsets)


def test_glide_shares_its_letter_with_the_following_vowel():
    mapped = map_phoneme_positions("beautiful", BEAUTIFUL)

    assert mapped[1].offset == mapped[2].offset == 1
    assert mapped[2].length == 3
    assert all(position.kind == MATCHED for position in mapped)


def test_qu_spells_two_phonemes():
    assert map_phonemes_to_word("quick", "K W IH1 K") == [0, 1, 2, 3]


def test_mapping_is_case_insensitive():
    assert map_phonemes_to_word("BEAUTIFUL", BEAUTIFUL) == map_phonemes_to_word(
        "beautiful", BEAUTIFUL
    )


def test_unmatched_phoneme_falls_back_to_estimate():
    mapped = map_phoneme_positions("table", "T EY1 B AH0 L")

    assert mapped[-1].kind == ESTIMATED
    assert mapped[-1].estimated
    assert 0 <= mapped[-1].offset < 5


def test_empty_inputs():
    assert map_phonemes_to_word("cat", "") == []
    mapped = map_phoneme_positions("", "K AE1 T")
    assert [position.offset for position in mapped] == [0, 0, 0]
    assert all(position.estimated for position in mapped)


def test_double_c_before_a_sibilant_spells_two_phonemes():
    assert map_phonemes_to_word("accelerator", "AE0 K S EH1 L ER0 EY2 T ER0") == [
        0, 1, 2, 3, 4, 5, 7, 8, 9,
    ]
    assert map_phonemes_to_word("vaccine", "V AE0 K S IY1 N") == [0, 1, 2, 3, 4, 5]


def test_double_c_alone_is_one_phoneme():
    assert map_phonemes_to_word("occur", "AH0 K ER1") == [0, 1, 3]
