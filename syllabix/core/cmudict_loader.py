"""Dictionary store backed by the CMU pronouncing dictionary."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import pronouncing

from ..utils.env import get_str
from ..utils.observability import get_logger

VOWEL_PHONEMES = frozenset(
    {
        "AA",
        "AE",
        "AH",
        "AO",
        "AW",
        "AY",
        "EH",
        "ER",
        "EY",
        "IH",
        "IY",
        "OW",
        "OY",
        "UH",
        "UW",
    }
)

CMUDICT_PATH_ENV = "SYLLABIX_CMUDICT_PATH"

_WORD_VARIANT_PATTERN = re.compile(r"\(\d+\)$")


def _strip_variant(word: str) -> str:
    return _WORD_VARIANT_PATTERN.sub("", word).lower()


def _clean_phones(phones: str) -> str:
    # cmudict.dict annotates a few entries with trailing "# comment" text.
    return " ".join(phones.split("#", 1)[0].split())


def _count_vowels(phones: str) -> int:
    return sum(1 for token in phones.split() if token[:2] in VOWEL_PHONEMES)


@dataclass(frozen=True)
class DictionaryEntry:
    """One dictionary word with its primary pronunciation."""

    word: str
    phonemes: str
    syllables: int
    hyphenation: str
    variants: Tuple[str, ...] = field(default_factory=tuple)


class CMUDictLoader:
    """Lazy, case-insensitive word → phoneme-string store.

    With ``dict_path`` (or ``SYLLABIX_CMUDICT_PATH``) the loader parses a
    plain-text cmudict file; otherwise it reads the copy bundled with the
    ``pronouncing`` package. Parsing happens on first use. A missing or
    unreadable file leaves the loader unloaded so a later call can retry.
    """

    def __init__(self, dict_path: Optional[Path | str] = None) -> None:
        if dict_path is None:
            dict_path = get_str(CMUDICT_PATH_ENV)
        self.dict_path: Optional[Path] = Path(dict_path) if dict_path else None
        self._pronunciations: Dict[str, Tuple[str, ...]] = {}
        self._entries: Dict[str, DictionaryEntry] = {}
        self._loaded: bool = False
        self._lock = threading.RLock()
        self._logger = get_logger(__name__).bind(component="cmudict_loader")

    def _read_records(self) -> Optional[List[Tuple[str, str]]]:
        if self.dict_path is None:
            pronouncing.init_cmu()
            return list(pronouncing.pronunciations)

        if not self.dict_path.exists():
            return None

        records: List[Tuple[str, str]] = []
        try:
            with self.dict_path.open("r", encoding="utf-8") as handle:
                for line in handle:
                    entry = line.strip()
                    if not entry or entry.startswith(";;;"):
                        continue

                    parts = entry.split(None, 1)
                    if len(parts) < 2:
                        continue
                    records.append((parts[0], parts[1]))
        except (OSError, UnicodeDecodeError):
            # Stay unloaded; the next lookup retries the read.
            return None
        return records

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return

        with self._lock:
            if self._loaded:
                return

            records = self._read_records()
            if records is None:
                self._logger.debug(
                    "CMU dictionary unavailable",
                    context={"path": str(self.dict_path)},
                )
                return

            pronunciations: Dict[str, List[str]] = {}
            for raw_word, raw_phones in records:
                word = _strip_variant(raw_word)
                phones = _clean_phones(raw_phones)
                if not word or not phones:
                    continue
                pronunciations.setdefault(word, []).append(phones)

            self._pronunciations = {
                word: tuple(variants) for word, variants in pronunciations.items()
            }
            self._entries = {}
            self._loaded = True
            self._logger.info(
                "CMU dictionary loaded",
                context={
                    "path": str(self.dict_path) if self.dict_path else "pronouncing",
                    "words": len(self._pronunciations),
                },
            )

    def lookup_phonemes(self, word: str) -> Optional[str]:
        """Return the primary phoneme string for ``word`` or ``None``."""

        if not word:
            return None
        self._ensure_loaded()
        variants = self._pronunciations.get(word.strip().lower())
        return variants[0] if variants else None

    def get_pronunciations(self, word: str) -> List[str]:
        """Return every pronunciation recorded for ``word``."""

        if not word:
            return []
        self._ensure_loaded()
        return list(self._pronunciations.get(word.strip().lower(), ()))

    def has_word(self, word: str) -> bool:
        return self.lookup_phonemes(word) is not None

    def get_entry(self, word: str) -> Optional[DictionaryEntry]:
        if not word:
            return None
        self._ensure_loaded()
        key = word.strip().lower()
        variants = self._pronunciations.get(key)
        if not variants:
            return None

        entry = self._entries.get(key)
        if entry is None:
            entry = DictionaryEntry(
                word=key,
                phonemes=variants[0],
                syllables=_count_vowels(variants[0]),
                hyphenation=key,
                variants=variants,
            )
            with self._lock:
                self._entries[key] = entry
        return entry

    def words(self) -> List[str]:
        self._ensure_loaded()
        return list(self._pronunciations)

    def iter_pronunciations(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(word, primary phoneme string)`` in dictionary order."""

        self._ensure_loaded()
        for word, variants in self._pronunciations.items():
            yield word, variants[0]

    def entries(self) -> Iterator[DictionaryEntry]:
        """Iterate over every entry in dictionary order."""

        for word in self.words():
            entry = self.get_entry(word)
            if entry is not None:
                yield entry

    def iter_words(self, words: Iterable[str]) -> Iterator[DictionaryEntry]:
        """Yield entries for the subset of ``words`` present in the store."""

        for word in words:
            entry = self.get_entry(word)
            if entry is not None:
                yield entry

    @property
    def size(self) -> int:
        self._ensure_loaded()
        return len(self._pronunciations)


DEFAULT_CMU_LOADER = CMUDictLoader()

__all__ = [
    "CMUDICT_PATH_ENV",
    "CMUDictLoader",
    "DEFAULT_CMU_LOADER",
    "DictionaryEntry",
    "VOWEL_PHONEMES",
]
