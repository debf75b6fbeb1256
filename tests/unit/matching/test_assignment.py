"""Unit tests for patient_resolver.matching.assignment module."""

import pytest

from patient_resolver.matching.assignment import (
    ACTION_AUTO_ASSIGN,
    ACTION_DISAMBIGUATE,
    ACTION_MANUAL_ENTRY,
    build_search_input,
    decide_assignment,
    disambiguation_message,
    filter_candidates,
    suggest_patients,
)
from patient_resolver.matching.models import MatchResult, PatientRecord
from patient_resolver.matching.search_strategy import find_matching_patients


class TestDecideAssignment:
    """Test the UI branch chosen for each result tier."""

    def test_exact_auto_assigns(self, sample_roster):
        decision = decide_assignment(find_matching_patients("Maria Santos", sample_roster))
        assert decision.action == ACTION_AUTO_ASSIGN
        assert decision.patient.id == 2

    def test_single_partial_auto_assigns(self, sample_roster):
        decision = decide_assignment(find_matching_patients("Chen", sample_roster))
        assert decision.action == ACTION_AUTO_ASSIGN
        assert decision.patient.id == 4

    def test_several_partials_disambiguate(self, sample_roster, patient_ids):
        decision = decide_assignment(find_matching_patients("312", sample_roster))
        assert decision.action == ACTION_DISAMBIGUATE
        assert decision.patient is None
        assert patient_ids(decision.candidates) == [3, 4]

    def test_no_match_goes_to_manual_entry(self, sample_roster):
        decision = decide_assignment(find_matching_patients("Quinn Baker", sample_roster))
        assert decision.action == ACTION_MANUAL_ENTRY
        assert decision.candidates == []

    def test_tied_exact_matches_disambiguate(self, patient_ids):
        roster = [
            PatientRecord(id=1, room="2A-208", name="Sarah Johnson"),
            PatientRecord(id=2, room="3C-301", name="Sarah Johnson"),
        ]
        decision = decide_assignment(find_matching_patients("Sarah Johnson", roster))
        assert decision.action == ACTION_DISAMBIGUATE
        assert patient_ids(decision.candidates) == [1, 2]


class TestDisambiguationMessage:

    @pytest.mark.parametrize(
        "matched_by, expected",
        [
            ("name", "Multiple patients match 'Johnson'."),
            ("name+room", "Multiple patients match your description."),
            ("room", "Multiple rooms match 'Johnson'."),
        ],
    )
    def test_wording_follows_scenario(self, matched_by, expected):
        result = MatchResult(partial_matches=["a", "b"], match_type="partial", matched_by=matched_by)
        assert disambiguation_message("Johnson", result) == expected


class TestFilterCandidates:

    def test_filter_by_name(self, sample_roster, patient_ids):
        assert patient_ids(filter_candidates(sample_roster, "chen")) == [4]

    def test_filter_by_room(self, sample_roster, patient_ids):
        assert patient_ids(filter_candidates(sample_roster, " 2A ")) == [1, 4]

    def test_blank_filter_keeps_all(self, sample_roster):
        assert filter_candidates(sample_roster, "") == sample_roster
        assert filter_candidates(sample_roster, None) == sample_roster


class TestBuildSearchInput:

    def test_name_preferred(self):
        assert build_search_input("Sarah Johnson", "208") == "Sarah Johnson"

    def test_room_used_without_name(self):
        assert build_search_input(None, " 208 ") == "208"
        assert build_search_input("  ", "208") == "208"

    def test_placeholder_room_ignored(self):
        assert build_search_input(None, "000") is None
        assert build_search_input(None, None) is None


class TestSuggestPatients:

    def test_partial_suggestions(self, sample_roster, patient_ids):
        assert patient_ids(suggest_patients("Johnson", sample_roster)) == [1, 3]

    def test_limit(self, sample_roster, patient_ids):
        assert patient_ids(suggest_patients("Johnson", sample_roster, limit=1)) == [1]
        assert suggest_patients("Johnson", sample_roster, limit=0) == []

    def test_exact_suggestion(self, sample_roster, patient_ids):
        assert patient_ids(suggest_patients("Sarah Johnson", sample_roster)) == [1]

    def test_empty_text(self, sample_roster):
        assert suggest_patients("", sample_roster) == []
