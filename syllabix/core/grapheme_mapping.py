"""Alignment of ARPAbet phonemes to character offsets in a spelled word."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .cmudict_loader import VOWEL_PHONEMES
from .phonemes import PhonemeInput, base_phoneme, split_phonemes

MATCHED = "matched"
ESTIMATED = "estimated"

VOWEL_LETTERS = "aeiouy"
_PURE_VOWEL_LETTERS = "aeiou"

_RAW_GRAPHEMES: Dict[str, Tuple[str, ...]] = {
    # Vowels
    "AA": ("ah", "a", "o"),
    "AE": ("a",),
    "AH": ("ou", "a", "u", "o", "e", "i"),
    "AO": ("augh", "ough", "aw", "au", "o", "a"),
    "AW": ("ough", "ow", "ou"),
    "AY": ("igh", "ie", "i", "y", "ey", "uy"),
    "EH": ("ea", "e", "ai", "a"),
    "ER": ("ear", "er", "ir", "ur", "or", "ar", "our", "r"),
    "EY": ("eigh", "ay", "ai", "ey", "ei", "ea", "a", "e"),
    "IH": ("i", "y", "e", "a", "u", "o"),
    "IY": ("ee", "ea", "ie", "ei", "ey", "e", "i", "y"),
    "OW": ("ough", "oa", "ow", "oe", "ou", "o"),
    "OY": ("oi", "oy"),
    "UH": ("oo", "ou", "u", "o"),
    "UW": ("eau", "oo", "ou", "ew", "ue", "ui", "u", "o"),
    # Consonants
    "B": ("bb", "b"),
    "CH": ("tch", "ch", "t", "c"),
    "D": ("dd", "d"),
    "DH": ("th",),
    "F": ("ff", "ph", "gh", "f"),
    "G": ("gg", "gh", "g", "x"),
    "HH": ("wh", "h"),
    "JH": ("dge", "dg", "j", "g", "d"),
    "K": ("ck", "cc", "ch", "k", "c", "q", "x"),
    "L": ("ll", "l"),
    "M": ("mm", "mb", "m"),
    "N": ("nn", "kn", "gn", "n"),
    "NG": ("ng", "n"),
    "P": ("pp", "p"),
    "R": ("rr", "wr", "rh", "r"),
    "S": ("ss", "sc", "s", "c", "x", "z"),
    "SH": ("sh", "ti", "ci", "si", "ch", "s"),
    "T": ("tt", "t", "d"),
    "TH": ("th",),
    "V": ("v", "f"),
    "W": ("wh", "w", "u", "o"),
    "Y": ("y", "i", "e", "u", "j"),
    "Z": ("zz", "z", "s", "x"),
    "ZH": ("si", "s", "g", "z"),
}

# Longest grapheme first so digraphs win over their leading letter.
GRAPHEME_TABLE: Dict[str, Tuple[str, ...]] = {
    phoneme: tuple(sorted(graphemes, key=len, reverse=True))
    for phoneme, graphemes in _RAW_GRAPHEMES.items()
}


@dataclass(frozen=True)
class MappedOffset:
    """Character offset of one phoneme and how it was obtained."""

    offset: int
    kind: str
    length: int = 1

    @property
    def estimated(self) -> bool:
        return self.kind == ESTIMATED


def _find_grapheme(word: str, start: int, phoneme: str) -> Optional[Tuple[int, str]]:
    graphemes = GRAPHEME_TABLE.get(phoneme)
    if not graphemes:
        return None
    for position in range(start, len(word)):
        for grapheme in graphemes:
            if word.startswith(grapheme, position):
                return position, grapheme
    return None


def _find_class_letter(word: str, start: int, vowel: bool) -> Optional[int]:
    for position in range(start, len(word)):
        if (word[position] in VOWEL_LETTERS) == vowel:
            return position
    return None


def _consumed_length(
    word: str,
    position: int,
    grapheme: str,
    phoneme: str,
    next_phoneme: Optional[str],
) -> int:
    """Number of letters the matched ``grapheme`` uses up for ``phoneme``.

    Zero means the letter is shared with the following phoneme; a length
    shorter than the grapheme leaves its tail for the next phoneme.
    """

    letter = grapheme[0]
    if phoneme == "Y" and letter in _PURE_VOWEL_LETTERS:
        return 0
    if phoneme == "W" and letter in "ou":
        preceding = word[position - 1] if position > 0 else ""
        return 1 if preceding in ("q", "g", "s") else 0
    if phoneme in ("K", "G") and grapheme == "x":
        return 0
    if next_phoneme is None:
        return len(grapheme)
    if phoneme == "NG" and grapheme == "ng" and next_phoneme in ("G", "K"):
        return 1
    if phoneme == "K" and grapheme == "cc" and next_phoneme in ("S", "SH"):
        # accept, vaccine: the second c is the sibilant.
        return 1
    if (
        phoneme in VOWEL_PHONEMES
        and next_phoneme in VOWEL_PHONEMES
        and len(grapheme) > 1
        and all(char in VOWEL_LETTERS for char in grapheme)
    ):
        # Hiatus: two vowel sounds share what looks like one vowel team.
        return 1
    return len(grapheme)


def map_phoneme_positions(word: str, phonemes: PhonemeInput) -> List[MappedOffset]:
    """Align each phoneme with the character where its spelling starts.

    A cursor walks the lower-cased word. Each phoneme takes the earliest
    grapheme from its table at or after the cursor, then any letter of the
    right class (vowel or consonant), and finally a proportional estimate.
    Only estimated offsets may fall behind an earlier offset.
    """

    tokens = [base_phoneme(token) for token in split_phonemes(phonemes)]
    if not tokens:
        return []

    lowered = word.lower()
    length = len(lowered)
    if length == 0:
        return [MappedOffset(0, ESTIMATED, 0) for _ in tokens]

    results: List[MappedOffset] = []
    cursor = 0
    total = len(tokens)

    for index, phoneme in enumerate(tokens):
        next_phoneme = tokens[index + 1] if index + 1 < total else None

        match = _find_grapheme(lowered, cursor, phoneme)
        if match is not None:
            position, grapheme = match
            results.append(MappedOffset(position, MATCHED, len(grapheme)))
            cursor = position + _consumed_length(
                lowered, position, grapheme, phoneme, next_phoneme
            )
            continue

        position = _find_class_letter(lowered, cursor, phoneme in VOWEL_PHONEMES)
        if position is not None:
            results.append(MappedOffset(position, MATCHED, 1))
            cursor = position + 1
            continue

        estimate = int(index / total * length + 0.5)
        estimate = min(max(estimate, 0), length - 1)
        results.append(MappedOffset(estimate, ESTIMATED, 0))
        cursor = max(cursor, estimate + 1)

    return results


def map_phonemes_to_word(word: str, phonemes: PhonemeInput) -> List[int]:
    """Return one character offset per phoneme of ``phonemes`` within ``word``."""

    return [mapped.offset for mapped in map_phoneme_positions(word, phonemes)]


__all__ = [
    "ESTIMATED",
    "GRAPHEME_TABLE",
    "MATCHED",
    "MappedOffset",
    "VOWEL_LETTERS",
    "map_phoneme_positions",
    "map_phonemes_to_word",
]
