import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from tabulate import tabulate

from .matching.assignment import AssignmentDecision
from .matching.models import MatchResult, record_field

logger = logging.getLogger(__name__)


class OutputFormatter:
    """Formats match results for display or saving."""

    @staticmethod
    def _result_rows(result: MatchResult) -> List[Dict[str, Any]]:
        rows = []
        if result.exact_match is not None:
            rows.append(OutputFormatter._patient_row(result.exact_match, "exact"))
        for patient in result.tied_exact_matches:
            rows.append(OutputFormatter._patient_row(patient, "exact (tied)"))
        for patient in result.partial_matches:
            rows.append(OutputFormatter._patient_row(patient, "partial"))
        return rows

    @staticmethod
    def _patient_row(patient: Any, confidence: str) -> Dict[str, Any]:
        if isinstance(patient, Mapping):
            patient_id = patient.get("id")
        else:
            patient_id = getattr(patient, "id", None)
        return {
            "Confidence": confidence,
            "ID": patient_id,
            "Room": record_field(patient, "room"),
            "Name": record_field(patient, "name"),
        }

    @staticmethod
    def format_as_json(
        result: MatchResult,
        decision: Optional[AssignmentDecision] = None,
        indent: Optional[int] = 4,
    ) -> str:
        """
        Serialize a match result, and optionally the assignment decision, as JSON.

        The result keeps the camelCase keys consumers expect
        (``exactMatch``, ``partialMatches``, ``matchType``, ``matchedBy``).
        """
        payload: Dict[str, Any] = {"result": result.to_dict()}
        if decision is not None:
            payload["decision"] = {
                "action": decision.action,
                "patient": OutputFormatter._patient_row(decision.patient, "selected")
                if decision.patient is not None else None,
                "candidates": [OutputFormatter._patient_row(p, "candidate") for p in decision.candidates],
            }
        logger.debug(f"Formatting {result.match_type} result with {len(result.candidates)} patients as JSON.")
        return json.dumps(payload, indent=indent, ensure_ascii=False, default=str)

    @staticmethod
    def format_as_table(result: MatchResult) -> str:
        header = f"Match type: {result.match_type} (matched by {result.matched_by})"
        rows = OutputFormatter._result_rows(result)
        logger.debug(f"Formatting {len(rows)} result rows as a table.")
        if not rows:
            return f"{header}\nNo matching patients."
        return f"{header}\n{tabulate(rows, headers='keys', tablefmt='grid')}"

    @staticmethod
    def format_patient_list(patients: List[Any]) -> str:
        if not patients:
            return "No suggestions."
        rows = [OutputFormatter._patient_row(p, "suggestion") for p in patients]
        for row in rows:
            del row["Confidence"]
        return tabulate(rows, headers='keys', tablefmt='simple')
