"""Turn a MatchResult into the next step of the voice capture or manual entry flow."""
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from ..config import DEFAULT_SUGGESTION_LIMIT, NO_ROOM_PLACEHOLDER
from .models import (
    MATCH_EXACT,
    MATCH_PARTIAL,
    MATCHED_BY_NAME,
    MATCHED_BY_NAME_AND_ROOM,
    MatchResult,
    record_field,
)
from .search_strategy import find_matching_patients

ACTION_AUTO_ASSIGN = "auto_assign"
ACTION_DISAMBIGUATE = "disambiguate"
ACTION_MANUAL_ENTRY = "manual_entry"


@dataclass
class AssignmentDecision:
    action: str
    patient: Optional[Any] = None
    candidates: List[Any] = field(default_factory=list)


def decide_assignment(result: MatchResult) -> AssignmentDecision:
    """
    Pick the UI branch for a match result.

    Exact matches and single partial candidates are assigned automatically,
    several candidates go to a disambiguation list and no match falls back
    to manual entry. Tied exact matches are never auto-assigned.
    """
    if result.match_type == MATCH_EXACT:
        if result.has_exact_tie:
            return AssignmentDecision(
                ACTION_DISAMBIGUATE,
                candidates=[result.exact_match] + list(result.tied_exact_matches),
            )
        return AssignmentDecision(ACTION_AUTO_ASSIGN, patient=result.exact_match)
    if result.match_type == MATCH_PARTIAL:
        if len(result.partial_matches) == 1:
            return AssignmentDecision(ACTION_AUTO_ASSIGN, patient=result.partial_matches[0])
        return AssignmentDecision(ACTION_DISAMBIGUATE, candidates=list(result.partial_matches))
    return AssignmentDecision(ACTION_MANUAL_ENTRY)


def disambiguation_message(search_text: str, result: MatchResult) -> str:
    if result.matched_by == MATCHED_BY_NAME:
        return f"Multiple patients match '{search_text}'."
    if result.matched_by == MATCHED_BY_NAME_AND_ROOM:
        return "Multiple patients match your description."
    return f"Multiple rooms match '{search_text}'."


def filter_candidates(candidates: Iterable[Any], text: Optional[str]) -> List[Any]:
    """Narrow a disambiguation list to patients whose room or name contains ``text``."""
    needle = (text or "").strip().lower()
    if not needle:
        return list(candidates)
    return [
        patient for patient in candidates
        if needle in record_field(patient, "room").lower() or needle in record_field(patient, "name").lower()
    ]


def build_search_input(patient_name: Optional[str], room: Optional[str]) -> Optional[str]:
    """
    Choose the resolver input from fields parsed out of a transcript.

    The patient name wins; a room is used only when it is not the
    no-room placeholder. Returns None when neither is usable.
    """
    if patient_name and patient_name.strip():
        return patient_name.strip()
    if room and room.strip() and room.strip() != NO_ROOM_PLACEHOLDER:
        return room.strip()
    return None


def suggest_patients(text: Optional[str], patients: Iterable[Any], limit: int = DEFAULT_SUGGESTION_LIMIT) -> List[Any]:
    """Autosuggest entries for the manual search field, best match first."""
    if limit <= 0:
        return []
    return find_matching_patients(text, patients).candidates[:limit]
