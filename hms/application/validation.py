import re
import uuid
from datetime import datetime, date
from typing import Optional, Tuple

from fastapi import HTTPException

TIME_PATTERN = re.compile(r"^(0[0-9]|1[0-9]|2[0-3]):[0-5][0-9]$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

REASON_MIN_LENGTH = 10
REASON_MAX_LENGTH = 500
NOTES_MAX_LENGTH = 1000


def is_valid_id(value) -> bool:
    """Record identifiers are canonical UUID strings."""
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value.lower()
    except ValueError:
        return False


def parse_schedule(date_str: str, time_str: str) -> Tuple[date, datetime]:
    """Combine a YYYY-MM-DD date and HH:MM time into a single instant."""
    if not isinstance(date_str, str) or not DATE_PATTERN.match(date_str):
        raise HTTPException(status_code=400, detail="Invalid date or time format.")
    if not isinstance(time_str, str) or not TIME_PATTERN.match(time_str):
        raise HTTPException(status_code=400, detail="Please use HH:MM format for time.")
    try:
        moment = datetime.strptime(f"{date_str} {time_str}", "%Y-%m-%d %H:%M")
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date or time format.")
    return moment.date(), moment


def check_reason(reason: str) -> str:
    if len(reason) < REASON_MIN_LENGTH:
        raise HTTPException(status_code=400, detail=f"Reason must be at least {REASON_MIN_LENGTH} characters long.")
    if len(reason) > REASON_MAX_LENGTH:
        raise HTTPException(status_code=400, detail=f"Reason cannot exceed {REASON_MAX_LENGTH} characters.")
    return reason


def check_notes(notes: Optional[str]) -> Optional[str]:
    # Empty notes are stored as absent
    if not notes:
        return None
    if len(notes) > NOTES_MAX_LENGTH:
        raise HTTPException(status_code=400, detail=f"Notes cannot exceed {NOTES_MAX_LENGTH} characters.")
    return notes
