"""Roster loading and boundary validation of patient records."""
import csv
import json
import logging
import os
from typing import Any, Dict, Iterable, List, Mapping

from .config import (
    DEFAULT_FILE_ENCODING,
    DEFAULT_ID_FIELD,
    DEFAULT_NAME_FIELD,
    DEFAULT_ROOM_FIELD,
    ROSTER_EXTENSION_MAP,
    supported_roster_formats,
)
from .exceptions import InvalidPatientRecordError, RosterFileError
from .matching.models import PatientRecord
from .secure_logging import get_secure_logger

logger = logging.getLogger(__name__)


def parse_roster(
    rows: Iterable[Mapping[str, Any]],
    id_field: str = DEFAULT_ID_FIELD,
    room_field: str = DEFAULT_ROOM_FIELD,
    name_field: str = DEFAULT_NAME_FIELD,
) -> List[PatientRecord]:
    """
    Validate raw mappings into PatientRecords, keeping their order.

    Raises:
        InvalidPatientRecordError: If a row is missing ``id``, ``room`` or ``name``.
    """
    return [
        PatientRecord.from_mapping(row, index, id_field=id_field, room_field=room_field, name_field=name_field)
        for index, row in enumerate(rows)
    ]


def detect_roster_format(path: str) -> str:
    _, ext = os.path.splitext(path)
    fmt = ROSTER_EXTENSION_MAP.get(ext.lower())
    if fmt is None:
        raise RosterFileError(
            f"Unsupported roster file extension '{ext}' for '{path}'. Supported formats: {', '.join(supported_roster_formats())}"
        )
    return fmt


def _read_json_rows(path: str) -> List[Dict[str, Any]]:
    with open(path, mode='r', encoding=DEFAULT_FILE_ENCODING) as infile:
        data = json.load(infile)
    if isinstance(data, Mapping):
        data = data.get("patients")
    if not isinstance(data, list):
        raise RosterFileError(f"JSON roster '{path}' must be a list of patients or an object with a 'patients' list.")
    return data


def _read_csv_rows(path: str) -> List[Dict[str, Any]]:
    with open(path, mode='r', encoding='utf-8-sig', newline='') as infile:  # utf-8-sig for BOM
        reader = csv.DictReader(infile)
        if not reader.fieldnames:
            raise RosterFileError(f"CSV roster '{path}' appears to be empty or improperly formatted.")
        return [dict(row) for row in reader]


def load_roster(
    path: str,
    id_field: str = DEFAULT_ID_FIELD,
    room_field: str = DEFAULT_ROOM_FIELD,
    name_field: str = DEFAULT_NAME_FIELD,
) -> List[PatientRecord]:
    """
    Read a ward roster from a JSON or CSV file.

    Args:
        path: Roster file, format chosen by extension.
        id_field: Column or key holding the patient identifier.
        room_field: Column or key holding the room.
        name_field: Column or key holding the patient name.

    Returns:
        List[PatientRecord]: Validated records in file order.

    Raises:
        RosterFileError: If the file is missing, unreadable, or malformed.
        InvalidPatientRecordError: If a record fails validation.
    """
    audit = get_secure_logger(__name__)
    fmt = detect_roster_format(path)
    if not os.path.exists(path):
        raise RosterFileError(f"Roster file not found: {path}")

    try:
        rows = _read_json_rows(path) if fmt == 'json' else _read_csv_rows(path)
    except json.JSONDecodeError as e:
        audit.log_roster_load(fmt, 0, success=False)
        raise RosterFileError(f"Invalid JSON in roster '{path}': {e}") from e
    except UnicodeDecodeError as e:
        audit.log_roster_load(fmt, 0, success=False)
        raise RosterFileError(f"Roster '{path}' is not valid UTF-8: {e}") from e
    except csv.Error as e:
        audit.log_roster_load(fmt, 0, success=False)
        raise RosterFileError(f"Error reading CSV roster '{path}': {e}") from e
    except OSError as e:
        audit.log_roster_load(fmt, 0, success=False)
        raise RosterFileError(f"IOError reading roster '{path}': {e}") from e

    try:
        patients = parse_roster(rows, id_field=id_field, room_field=room_field, name_field=name_field)
    except InvalidPatientRecordError:
        audit.log_roster_load(fmt, 0, success=False)
        raise

    if not patients:
        logger.warning(f"Roster file '{path}' contains no patients.")
    audit.log_roster_load(fmt, len(patients))
    return patients
