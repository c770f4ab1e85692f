import syllabix
from syllabix import services


def test_top_level_exports():
    for name in syllabix.__all__:
        assert hasattr(syllabix, name), name
    for name in services.__all__:
        assert hasattr(services, name), name


def test_top_level_functions_work_together():
    phonemes = "B Y UW1 T AH0 F AH0 L"

    assert syllabix.analyze_phonemes(phonemes).syllables == 3
    assert syllabix.get_cmu_syllable_boundaries("beautiful", phonemes) == [4, 6]
    assert syllabix.cmu_hyphenate("beautiful", phonemes) == "beau-ti-ful"
    assert syllabix.pattern_hyphenate("beautiful") == "beau-ti-ful"
    assert len(syllabix.map_phonemes_to_word("beautiful", phonemes)) == 8
