from dataclasses import dataclass, field
from typing import Any, Optional, List, Dict, Mapping

from ..exceptions import InvalidPatientRecordError

MATCH_EXACT = "exact"
MATCH_PARTIAL = "partial"
MATCH_NONE = "none"

MATCHED_BY_ROOM = "room"
MATCHED_BY_NAME = "name"
MATCHED_BY_NAME_AND_ROOM = "name+room"


def record_field(patient: Any, field_name: str) -> str:
    """Read ``room`` or ``name`` from a record or mapping, treating absent values as empty."""
    if isinstance(patient, Mapping):
        value = patient.get(field_name)
    else:
        value = getattr(patient, field_name, None)
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class PatientRecord:
    id: Any
    room: str
    name: str

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        record_index: Optional[int] = None,
        id_field: str = "id",
        room_field: str = "room",
        name_field: str = "name",
    ) -> "PatientRecord":
        if not isinstance(data, Mapping):
            raise InvalidPatientRecordError(
                f"expected a mapping, got {type(data).__name__}", record_index
            )
        for key in (id_field, room_field, name_field):
            if key not in data or data[key] is None:
                raise InvalidPatientRecordError(f"missing required field '{key}'", record_index)
        for key in (room_field, name_field):
            if not isinstance(data[key], str):
                raise InvalidPatientRecordError(
                    f"field '{key}' must be a string, got {type(data[key]).__name__}", record_index
                )
        patient_id = data[id_field]
        if isinstance(patient_id, str) and not patient_id.strip():
            raise InvalidPatientRecordError(f"field '{id_field}' must not be blank", record_index)
        return cls(id=patient_id, room=data[room_field], name=data[name_field])

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "room": self.room, "name": self.name}


@dataclass
class MatchResult:
    """Outcome of one resolution call.

    ``exact_match`` is set only for ``match_type == "exact"``; ``partial_matches``
    keeps roster order. ``tied_exact_matches`` lists patients that also scored
    exact after the first one, so callers can offer disambiguation instead of
    trusting the first hit.
    """

    exact_match: Optional[Any] = None
    partial_matches: List[Any] = field(default_factory=list)
    match_type: str = MATCH_NONE
    matched_by: str = MATCHED_BY_ROOM
    tied_exact_matches: List[Any] = field(default_factory=list)

    @classmethod
    def no_match(cls, matched_by: str) -> "MatchResult":
        return cls(matched_by=matched_by)

    @classmethod
    def from_candidates(
        cls,
        exact_match: Optional[Any],
        partial_matches: List[Any],
        matched_by: str,
        tied_exact_matches: Optional[List[Any]] = None,
    ) -> "MatchResult":
        if exact_match is not None:
            return cls(
                exact_match=exact_match,
                partial_matches=list(partial_matches),
                match_type=MATCH_EXACT,
                matched_by=matched_by,
                tied_exact_matches=list(tied_exact_matches or []),
            )
        if partial_matches:
            return cls(partial_matches=list(partial_matches), match_type=MATCH_PARTIAL, matched_by=matched_by)
        return cls.no_match(matched_by)

    @property
    def candidates(self) -> List[Any]:
        """Every patient the result points at, exact match first."""
        head = [self.exact_match] if self.exact_match is not None else []
        return head + list(self.tied_exact_matches) + list(self.partial_matches)

    @property
    def has_exact_tie(self) -> bool:
        return bool(self.tied_exact_matches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exactMatch": _serialize_patient(self.exact_match),
            "partialMatches": [_serialize_patient(p) for p in self.partial_matches],
            "matchType": self.match_type,
            "matchedBy": self.matched_by,
            "tiedExactMatches": [_serialize_patient(p) for p in self.tied_exact_matches],
        }


def _serialize_patient(patient: Any) -> Optional[Dict[str, Any]]:
    if patient is None:
        return None
    if isinstance(patient, PatientRecord):
        return patient.to_dict()
    if isinstance(patient, Mapping):
        return dict(patient)
    return {
        "id": getattr(patient, "id", None),
        "room": record_field(patient, "room"),
        "name": record_field(patient, "name"),
    }
