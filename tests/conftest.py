import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from syllabix.core.cmudict_loader import CMUDictLoader
from syllabix.core.phonemes import PhonemeAnalyzer
from syllabix.core.syllable_counter import SyllableCounter
from syllabix.utils.cache import BoundedLRUCache

SAMPLE_DICTIONARY = """\
;;; small cmudict sample used by the test-suite
BEAUTIFUL  B Y UW1 T AH0 F AH0 L
TABLE  T EY1 B AH0 L
RABBIT  R AE1 B AH0 T
CAT  K AE1 T
HAT  HH AE1 T
BAT  B AE1 T
TEST  T EH1 S T
THE  DH AH0
THE(1)  DH AH1
HELLO  HH AH0 L OW1 # interjection
"""


@pytest.fixture
def dict_path(tmp_path):
    """Plain-text dictionary file with a handful of entries."""

    path = tmp_path / "cmudict.dict"
    path.write_text(SAMPLE_DICTIONARY, encoding="utf-8")
    return path


@pytest.fixture
def loader(dict_path):
    return CMUDictLoader(dict_path=dict_path)


@pytest.fixture
def analyzer():
    return PhonemeAnalyzer(cache=BoundedLRUCache(100))


@pytest.fixture
def counter(loader, analyzer):
    """Syllable counter wired to the sample dictionary and a private cache."""

    return SyllableCounter(loader, analyzer, cache_size=100)
