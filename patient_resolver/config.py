"""Configuration constants and settings for patient_resolver."""
import os
from dataclasses import dataclass, field
from typing import Dict, List

# Application constants
APP_VERSION = "0.1.0"
DEFAULT_ID_FIELD = "id"
DEFAULT_ROOM_FIELD = "room"
DEFAULT_NAME_FIELD = "name"

# Room value the task parser emits when no room was spoken
NO_ROOM_PLACEHOLDER = "000"

# Spoken number words folded into digits during room normalization.
# "to", "too" and "for" are homophones that speech recognition substitutes
# for digits; they are folded too.
NUMBER_WORDS: Dict[str, str] = {
    "zero": "0",
    "oh": "0",
    "one": "1",
    "two": "2",
    "to": "2",
    "too": "2",
    "three": "3",
    "four": "4",
    "for": "4",
    "five": "5",
    "six": "6",
    "seven": "7",
    "eight": "8",
    "nine": "9",
}

# Fuzzy word matching
PREFIX_MIN_LENGTH = 3
SHORT_WORD_MAX_LENGTH = 4
SHORT_WORD_MAX_DISTANCE = 1
LONG_WORD_MAX_DISTANCE = 2

# Logging configuration
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
DEV_LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOGGER_NAME = "patient_resolver.main"
ENV_LOG_LEVEL = "PATIENT_RESOLVER_LOG_LEVEL"
ENV_LOG_FILE = "PATIENT_RESOLVER_LOG_FILE"
ENV_PRODUCTION_LOGGING = "PATIENT_RESOLVER_PRODUCTION_LOGGING"

# File handling
DEFAULT_FILE_ENCODING = 'utf-8'
VALID_OUTPUT_FORMATS = ['json', 'stdout']
ROSTER_EXTENSION_MAP = {
    '.json': 'json',
    '.csv': 'csv',
}
DEFAULT_SUGGESTION_LIMIT = 5


@dataclass
class MatcherSettings:
    """Tunable parameters for room normalization and fuzzy name matching."""

    number_words: Dict[str, str] = field(default_factory=lambda: dict(NUMBER_WORDS))
    prefix_min_length: int = PREFIX_MIN_LENGTH
    short_word_max_length: int = SHORT_WORD_MAX_LENGTH
    short_word_max_distance: int = SHORT_WORD_MAX_DISTANCE
    long_word_max_distance: int = LONG_WORD_MAX_DISTANCE

    def __post_init__(self):
        for word, digit in self.number_words.items():
            if not word or not word.isalpha():
                raise ValueError(f"number word must be a non-empty alphabetic string, got {word!r}")
            if not digit.isdigit():
                raise ValueError(f"number word '{word}' must map to digits, got {digit!r}")
        if self.prefix_min_length < 1:
            raise ValueError("prefix_min_length must be at least 1")
        if self.short_word_max_length < 0:
            raise ValueError("short_word_max_length must not be negative")
        if self.short_word_max_distance < 0 or self.long_word_max_distance < 0:
            raise ValueError("edit distance tolerances must not be negative")


def get_env_or_default(key: str, default: str = "") -> str:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def env_flag(key: str, default: bool = False) -> bool:
    """Interpret an environment variable as a boolean switch."""
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


def supported_roster_formats() -> List[str]:
    return sorted(set(ROSTER_EXTENSION_MAP.values()))
