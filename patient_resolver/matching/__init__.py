"""Patient identity resolution from noisy spoken or typed references."""

from .assignment import (
    ACTION_AUTO_ASSIGN,
    ACTION_DISAMBIGUATE,
    ACTION_MANUAL_ENTRY,
    AssignmentDecision,
    build_search_input,
    decide_assignment,
    disambiguation_message,
    filter_candidates,
    suggest_patients,
)
from .fuzzy_matchers import FuzzyNameMatcher, fuzzy_word_match, levenshtein_distance, match_by_name
from .models import (
    MATCH_EXACT,
    MATCH_NONE,
    MATCH_PARTIAL,
    MATCHED_BY_NAME,
    MATCHED_BY_NAME_AND_ROOM,
    MATCHED_BY_ROOM,
    MatchResult,
    PatientRecord,
)
from .normalizers import CombinedInput, extract_name_and_room, looks_like_room, normalize_room
from .search_strategy import PatientSearchStrategy, find_matching_patients, find_matching_rooms, match_by_room

__all__ = [
    "PatientRecord",
    "MatchResult",
    "MATCH_EXACT",
    "MATCH_PARTIAL",
    "MATCH_NONE",
    "MATCHED_BY_ROOM",
    "MATCHED_BY_NAME",
    "MATCHED_BY_NAME_AND_ROOM",
    "CombinedInput",
    "normalize_room",
    "looks_like_room",
    "extract_name_and_room",
    "FuzzyNameMatcher",
    "levenshtein_distance",
    "fuzzy_word_match",
    "match_by_name",
    "PatientSearchStrategy",
    "match_by_room",
    "find_matching_patients",
    "find_matching_rooms",
    "AssignmentDecision",
    "ACTION_AUTO_ASSIGN",
    "ACTION_DISAMBIGUATE",
    "ACTION_MANUAL_ENTRY",
    "decide_assignment",
    "disambiguation_message",
    "filter_candidates",
    "build_search_input",
    "suggest_patients",
]
