"""Room token normalization and input-shape classification."""
import re
from functools import lru_cache
from typing import Dict, NamedTuple, Optional, Tuple

from ..config import NUMBER_WORDS

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_ROOM_SEPARATORS = re.compile(r"[\s-]")
# Optional letter, digits, optionally a wing letter plus more digits, optional letter:
# "208", "A3", "12B", "2A-312".
_ROOM_SHAPE = re.compile(r"[a-z]?[0-9]+(?:[a-z][0-9]+)?[a-z]?", re.IGNORECASE)
_NAME_IN_ROOM = re.compile(r"(.+?)\s+in\s+(\S+)", re.IGNORECASE)


class CombinedInput(NamedTuple):
    name: str
    room: str


@lru_cache(maxsize=32)
def _number_word_pattern(words: Tuple[str, ...]) -> re.Pattern:
    # Longest first so "too" is not shadowed by "to"
    alternatives = sorted(words, key=len, reverse=True)
    return re.compile(r"\b(" + "|".join(re.escape(w) for w in alternatives) + r")\b")


def normalize_room(spoken: Optional[str], number_words: Optional[Dict[str, str]] = None) -> str:
    """
    Normalize a spoken or typed room reference into a comparable token.

    Number words become digits, everything outside ``[a-z0-9]`` is removed and
    the result is uppercased: ``"two A two oh eight"`` -> ``"2A208"``.

    Args:
        spoken: Raw room reference. ``None`` is treated as empty.
        number_words: Word-to-digit vocabulary, defaults to ``config.NUMBER_WORDS``.

    Returns:
        str: The normalized token, empty for empty input.
    """
    if not spoken:
        return ""
    words = NUMBER_WORDS if number_words is None else number_words
    normalized = spoken.lower()
    if words:
        normalized = _number_word_pattern(tuple(sorted(words))).sub(lambda m: words[m.group(1)], normalized)
    return _NON_ALNUM.sub("", normalized).upper()


def looks_like_room(text: Optional[str]) -> bool:
    """Check whether a string is shaped like a room number rather than a name."""
    if not text:
        return False
    cleaned = _ROOM_SEPARATORS.sub("", text.strip())
    return _ROOM_SHAPE.fullmatch(cleaned) is not None


def extract_name_and_room(text: Optional[str]) -> Optional[CombinedInput]:
    """
    Split input such as ``"Sarah in 208"`` into its name and room parts.

    Returns None when the input is not a "<name> in <room>" phrase or when the
    trailing token is not room-shaped.
    """
    if not text:
        return None
    match = _NAME_IN_ROOM.fullmatch(text)
    if not match:
        return None
    name_part = match.group(1).strip()
    room_part = match.group(2).strip()
    if looks_like_room(room_part):
        return CombinedInput(name=name_part, room=room_part)
    return None


def collapse_whitespace(text: Optional[str]) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    if not text:
        return ""
    return " ".join(text.split())
