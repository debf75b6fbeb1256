"""patient_resolver package"""
import logging

# Configure a null handler by default
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Expose public interface
from .config import MatcherSettings
from .exceptions import InvalidPatientRecordError, PatientResolverError, RosterFileError
from .matching import (
    MatchResult,
    PatientRecord,
    PatientSearchStrategy,
    decide_assignment,
    find_matching_patients,
    find_matching_rooms,
    normalize_room,
)
from .roster import load_roster, parse_roster

__version__ = "0.1.0"

__all__ = [
    'MatcherSettings',
    'PatientResolverError',
    'InvalidPatientRecordError',
    'RosterFileError',
    'MatchResult',
    'PatientRecord',
    'PatientSearchStrategy',
    'decide_assignment',
    'find_matching_patients',
    'find_matching_rooms',
    'normalize_room',
    'load_roster',
    'parse_roster',
]
