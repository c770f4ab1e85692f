"""Syllable boundaries derived from a word's CMU pronunciation."""

from __future__ import annotations

from typing import FrozenSet, List, Optional, Sequence, Tuple

from ..utils.observability import get_logger
from .grapheme_mapping import MappedOffset, map_phoneme_positions
from .phonemes import PhonemeInput, base_phoneme, is_vowel_phoneme, split_phonemes

# Letter pairs that spell a single sound and must not be split.
PROTECTED_DIGRAPHS: FrozenSet[str] = frozenset(
    {"th", "ch", "sh", "ph", "wh", "qu", "ng", "ck", "gh", "kn", "wr", "mb", "gn"}
)

# Two-consonant clusters English allows at the start of a syllable.
LEGAL_ONSETS: FrozenSet[Tuple[str, str]] = frozenset(
    {
        ("P", "R"), ("P", "L"), ("B", "R"), ("B", "L"),
        ("T", "R"), ("D", "R"), ("K", "R"), ("K", "L"),
        ("G", "R"), ("G", "L"), ("F", "R"), ("F", "L"),
        ("TH", "R"), ("SH", "R"),
        ("S", "P"), ("S", "T"), ("S", "K"), ("S", "M"),
        ("S", "N"), ("S", "L"), ("S", "W"), ("S", "F"),
        ("T", "W"), ("D", "W"), ("K", "W"), ("G", "W"), ("TH", "W"),
        ("P", "Y"), ("B", "Y"), ("K", "Y"), ("G", "Y"), ("M", "Y"),
        ("F", "Y"), ("V", "Y"), ("HH", "Y"),
    }
)

_logger = get_logger(__name__).bind(component="cmu_hyphenation")


def _onset_index(bases: Sequence[str], left: int, right: int) -> Optional[int]:
    """Index of the first phoneme of the syllable that starts at vowel ``right``."""

    if right - left <= 1:
        return None
    onset = right - 1
    if right - left > 2 and (bases[right - 2], bases[right - 1]) in LEGAL_ONSETS:
        onset = right - 2
    return onset


def _is_doubled_letter(word: str, mapped: MappedOffset) -> bool:
    position = mapped.offset
    return (
        mapped.length == 2
        and position + 1 < len(word)
        and word[position] == word[position + 1]
    )


def _candidate_boundary(
    word: str,
    bases: Sequence[str],
    positions: Sequence[MappedOffset],
    left: int,
    right: int,
) -> int:
    left_offset = positions[left].offset
    right_offset = positions[right].offset
    onset = _onset_index(bases, left, right)

    if onset is None:
        return right_offset if right_offset > left_offset else left_offset + 1

    onset_position = positions[onset]
    candidate = max(left_offset + 1, onset_position.offset)
    if candidate == onset_position.offset and _is_doubled_letter(word, onset_position):
        candidate += 1
    return min(candidate, max(right_offset, left_offset + 1))


def get_cmu_syllable_boundaries(word: str, phonemes: PhonemeInput) -> List[int]:
    """Return the character offsets where syllables of ``word`` begin.

    Offsets are strictly increasing and strictly inside the word, so splitting
    at each offset and joining the pieces gives back ``word``. Words with at
    most one vowel phoneme have no boundaries.
    """

    tokens = split_phonemes(phonemes)
    vowel_indices = [index for index, token in enumerate(tokens) if is_vowel_phoneme(token)]
    if len(vowel_indices) <= 1 or not word:
        return []

    lowered = word.lower()
    bases = [base_phoneme(token) for token in tokens]
    positions = map_phoneme_positions(lowered, tokens)

    boundaries: List[int] = []
    for left, right in zip(vowel_indices, vowel_indices[1:]):
        boundary = _candidate_boundary(lowered, bases, positions, left, right)
        if lowered[boundary - 1 : boundary + 1] in PROTECTED_DIGRAPHS:
            boundary -= 1

        previous = boundaries[-1] if boundaries else 0
        if 0 < boundary < len(word) and boundary > previous:
            boundaries.append(boundary)

    if any(position.estimated for position in positions):
        _logger.debug(
            "Estimated phoneme offsets used for boundaries",
            context={"word": word, "boundaries": boundaries},
        )
    return boundaries


def split_at_boundaries(word: str, boundaries: Sequence[int]) -> List[str]:
    pieces: List[str] = []
    start = 0
    for boundary in boundaries:
        pieces.append(word[start:boundary])
        start = boundary
    pieces.append(word[start:])
    return pieces


def cmu_hyphenate(word: str, phonemes: PhonemeInput, delimiter: str = "-") -> str:
    """Insert ``delimiter`` at each CMU-derived syllable boundary of ``word``."""

    boundaries = get_cmu_syllable_boundaries(word, phonemes)
    if not boundaries:
        return word
    return delimiter.join(split_at_boundaries(word, boundaries))


__all__ = [
    "LEGAL_ONSETS",
    "PROTECTED_DIGRAPHS",
    "cmu_hyphenate",
    "get_cmu_syllable_boundaries",
    "split_at_boundaries",
]
