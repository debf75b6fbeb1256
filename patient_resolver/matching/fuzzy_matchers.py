from typing import Any, Optional
from rapidfuzz.distance import Levenshtein

from ..config import MatcherSettings
from .models import MATCH_EXACT, MATCH_PARTIAL, record_field


class FuzzyNameMatcher:
    """Word-level fuzzy comparison of spoken names against roster names."""

    def __init__(self, settings: Optional[MatcherSettings] = None):
        self.settings = settings or MatcherSettings()

    @staticmethod
    def levenshtein(str1: str, str2: str) -> int:
        # Unit-cost insertions, deletions and substitutions
        return Levenshtein.distance(str1, str2)

    def fuzzy_word_match(self, word1: str, word2: str) -> bool:
        """Two words are equal if identical, prefix-related, or within a length-scaled edit distance."""
        if word1 == word2:
            return True
        min_len = self.settings.prefix_min_length
        if len(word1) >= min_len and len(word2) >= min_len:
            if word1.startswith(word2) or word2.startswith(word1):
                return True
        distance = self.levenshtein(word1, word2)
        if max(len(word1), len(word2)) <= self.settings.short_word_max_length:
            return distance <= self.settings.short_word_max_distance
        return distance <= self.settings.long_word_max_distance

    def match_by_name(self, search_name: Optional[str], patient: Any) -> Optional[str]:
        """
        Grade a search name against a patient's full name.

        Single-word searches are capped at "partial". Multi-word searches earn
        "exact" when their first and last words match the patient's name,
        verbatim or fuzzily.

        Returns:
            "exact", "partial", or None for no match.
        """
        normalized = (search_name or "").strip().lower()
        patient_name = record_field(patient, "name").strip().lower()
        if not normalized or not patient_name:
            return None

        if patient_name == normalized:
            return MATCH_EXACT

        search_parts = normalized.split()
        name_parts = patient_name.split()

        if len(search_parts) == 1:
            if normalized in name_parts:
                return MATCH_PARTIAL
            if any(self.fuzzy_word_match(part, normalized) for part in name_parts):
                return MATCH_PARTIAL
        else:
            first, last = search_parts[0], search_parts[-1]
            patient_first, patient_last = name_parts[0], name_parts[-1]

            if first in name_parts and last in name_parts:
                return MATCH_EXACT

            # Identical words are fuzzy-equal, so this also covers one verbatim plus one fuzzy
            if self.fuzzy_word_match(first, patient_first) and self.fuzzy_word_match(last, patient_last):
                return MATCH_EXACT

            if any(self.fuzzy_word_match(sp, np) for sp in search_parts for np in name_parts):
                return MATCH_PARTIAL

        if normalized in patient_name:
            return MATCH_PARTIAL
        return None


_default_matcher = FuzzyNameMatcher()


def levenshtein_distance(str1: str, str2: str) -> int:
    return FuzzyNameMatcher.levenshtein(str1, str2)


def fuzzy_word_match(word1: str, word2: str) -> bool:
    return _default_matcher.fuzzy_word_match(word1, word2)


def match_by_name(search_name: Optional[str], patient: Any) -> Optional[str]:
    return _default_matcher.match_by_name(search_name, patient)
