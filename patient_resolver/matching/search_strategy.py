import logging
import time
from typing import Any, Iterable, List, Optional

from ..config import MatcherSettings
from ..secure_logging import SecureLogger, get_secure_logger
from .fuzzy_matchers import FuzzyNameMatcher
from .models import (
    MATCH_EXACT,
    MATCH_PARTIAL,
    MATCHED_BY_NAME,
    MATCHED_BY_NAME_AND_ROOM,
    MATCHED_BY_ROOM,
    MatchResult,
    record_field,
)
from .normalizers import collapse_whitespace, extract_name_and_room, looks_like_room, normalize_room

logger = logging.getLogger(__name__)


class PatientSearchStrategy:
    """
    Resolves a spoken or typed patient reference against the ward roster.

    The input is routed to one of four scenarios: empty, "<name> in <room>",
    room-shaped, or name-shaped. Resolution never raises; an unmatched input
    is reported as ``match_type == "none"``.
    """

    def __init__(
        self,
        fuzzy_matcher: Optional[FuzzyNameMatcher] = None,
        settings: Optional[MatcherSettings] = None,
        secure_logger: Optional[SecureLogger] = None,
    ):
        if fuzzy_matcher is None:
            fuzzy_matcher = FuzzyNameMatcher(settings)
        self.fuzzy_matcher = fuzzy_matcher
        self.settings = fuzzy_matcher.settings
        self._secure_logger = secure_logger

    @property
    def secure_logger(self) -> SecureLogger:
        if self._secure_logger is not None:
            return self._secure_logger
        return get_secure_logger(__name__)

    def match_by_room(self, spoken_room: Optional[str], patients: Iterable[Any]) -> MatchResult:
        """
        Compare a room reference against every patient's room.

        The first patient whose normalized room equals the normalized search
        wins outright. Otherwise every room that contains the search token
        is collected as a partial match.
        """
        number_words = self.settings.number_words
        normalized_spoken = normalize_room(spoken_room, number_words)
        if not normalized_spoken:
            return MatchResult.no_match(MATCHED_BY_ROOM)

        partial_matches = []
        for patient in patients:
            normalized_room = normalize_room(record_field(patient, "room"), number_words)
            if normalized_room == normalized_spoken:
                return MatchResult.from_candidates(patient, [], MATCHED_BY_ROOM)
            # Suffix matches ("208" in "2A208") are a subset of containment
            if normalized_spoken in normalized_room:
                partial_matches.append(patient)

        return MatchResult.from_candidates(None, partial_matches, MATCHED_BY_ROOM)

    def _grade_by_name(self, search_name: str, patients: Iterable[Any]):
        exact_match = None
        tied_exact: List[Any] = []
        partial_matches: List[Any] = []
        for patient in patients:
            grade = self.fuzzy_matcher.match_by_name(search_name, patient)
            if grade == MATCH_EXACT:
                if exact_match is None:
                    exact_match = patient
                else:
                    tied_exact.append(patient)
            elif grade == MATCH_PARTIAL:
                partial_matches.append(patient)
        return exact_match, tied_exact, partial_matches

    def _match_name_and_room(self, name: str, room: str, patients: List[Any]) -> MatchResult:
        room_result = self.match_by_room(room, patients)
        room_candidates = room_result.candidates
        logger.debug(f"Room side of combined input narrowed roster to {len(room_candidates)} candidates.")

        exact_match, tied_exact, partial_matches = self._grade_by_name(name, room_candidates)
        if exact_match is None and len(partial_matches) == 1:
            # Name and room agree on a single patient
            return MatchResult.from_candidates(partial_matches[0], [], MATCHED_BY_NAME_AND_ROOM)
        return MatchResult.from_candidates(exact_match, partial_matches, MATCHED_BY_NAME_AND_ROOM, tied_exact)

    def _match_name(self, name: str, patients: List[Any]) -> MatchResult:
        exact_match, tied_exact, partial_matches = self._grade_by_name(name, patients)
        if exact_match is not None:
            # An exact name hit makes lower-confidence candidates irrelevant
            return MatchResult.from_candidates(exact_match, [], MATCHED_BY_NAME, tied_exact)
        return MatchResult.from_candidates(None, partial_matches, MATCHED_BY_NAME)

    def find_matching_patients(self, text: Optional[str], patients: Optional[Iterable[Any]]) -> MatchResult:
        """
        Match input that names a room ("208"), a patient ("Sarah Johnson") or both ("Sarah in 208").

        Args:
            text: Raw search text. ``None`` behaves like an empty string.
            patients: Roster of patient records (``PatientRecord`` or mappings
                with ``id``, ``room`` and ``name``). Records are returned as given.

        Returns:
            MatchResult: A fresh result; ``matched_by`` names the scenario used.
        """
        start = time.perf_counter()
        if text is not None and not isinstance(text, str):
            text = str(text)
        roster = list(patients or [])
        trimmed = collapse_whitespace(text)
        secure_logger = self.secure_logger
        secure_logger.debug(f"Resolving {secure_logger.mask_identifier(trimmed)} against {len(roster)} patients.")

        if not trimmed:
            result = MatchResult.no_match(MATCHED_BY_ROOM)
        else:
            combined = extract_name_and_room(trimmed)
            if combined is not None:
                result = self._match_name_and_room(combined.name, combined.room, roster)
            elif looks_like_room(trimmed):
                result = self.match_by_room(trimmed, roster)
            else:
                result = self._match_name(trimmed, roster)

        duration_ms = (time.perf_counter() - start) * 1000
        if result.has_exact_tie:
            secure_logger.log_exact_tie(result.matched_by, len(result.tied_exact_matches))
        secure_logger.log_patient_search(
            result.matched_by, len(roster), result.match_type, len(result.candidates), duration_ms
        )
        return result


_default_strategy = PatientSearchStrategy()


def match_by_room(spoken_room: Optional[str], patients: Iterable[Any]) -> MatchResult:
    return _default_strategy.match_by_room(spoken_room, patients)


def find_matching_patients(text: Optional[str], patients: Optional[Iterable[Any]]) -> MatchResult:
    """Resolve ``text`` against ``patients`` with the default matcher settings."""
    return _default_strategy.find_matching_patients(text, patients)


# Backward-compatible alias
find_matching_rooms = find_matching_patients
