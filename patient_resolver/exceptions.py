"""Custom exceptions for patient_resolver."""


class PatientResolverError(Exception):
    """Base class for errors raised at the package boundary."""
    pass


class InvalidPatientRecordError(PatientResolverError):
    """Raised when a patient record is missing a required field or has the wrong type."""

    def __init__(self, message: str, record_index=None):
        self.record_index = record_index
        if record_index is not None:
            message = f"Record {record_index}: {message}"
        super().__init__(message)


class RosterFileError(PatientResolverError):
    """Raised when a roster file cannot be read or parsed."""
    pass
