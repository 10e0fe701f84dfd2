"""Time-of-day logic for the daily drug schedule.

Scheduled times are plain ``HH:MM`` strings. They are read as a moment of the
current day in ``SCHEDULE_TIME_ZONE`` and compared with the current time,
which is taken again on every comparison.

Nothing here mutates a document in place: every operation returns a new list
of people and leaves its input untouched.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import List, Tuple

from errors import DuplicatePersonError, ScheduleParseError
from logging_config import get_logger
from schemas import Document, Drug, Person, find_duplicate_names
from settings import SCHEDULE_TIME_ZONE

logger = get_logger(__name__)

_TIME_PART = re.compile(r"\+?([0-9]+)")


def now() -> datetime:
    """Current time in the schedule time zone."""
    return datetime.now(SCHEDULE_TIME_ZONE)


def parse_time(value: str) -> Tuple[int, int]:
    """Split ``HH:MM`` into hours and minutes.

    Raises ``ScheduleParseError`` unless the value is exactly two
    colon-separated integers within 0-23 and 0-59.
    """
    parts = value.split(":")
    if len(parts) != 2:
        raise ScheduleParseError(f"invalid time {value!r}: expected HH:MM")
    numbers = []
    for part in parts:
        match = _TIME_PART.fullmatch(part)
        if match is None:
            raise ScheduleParseError(f"invalid time {value!r}: {part!r} is not an integer")
        numbers.append(int(match.group(1)))
    hours, minutes = numbers
    if hours > 23 or minutes > 59:
        raise ScheduleParseError(f"invalid time {value!r}: out of range")
    return hours, minutes


def to_time_today(value: str) -> datetime:
    """Return today's moment for ``value`` in the schedule time zone."""
    hours, minutes = parse_time(value)
    current = now()
    return datetime(current.year, current.month, current.day, hours, minutes, tzinfo=SCHEDULE_TIME_ZONE)


def is_past(value: str) -> bool:
    return to_time_today(value) < now()


def should_reset(people: Document) -> bool:
    """Tell whether yesterday's marks are still in the document.

    When even the earliest time of the day lies ahead, the day has turned
    since the last reset and every status is stale.
    """
    times = [to_time_today(drug.time) for person in people for drug in person.drugs]
    return bool(times) and min(times) > now()


def due_drugs(people: Document) -> Document:
    """Keep the drugs that are past their time and not taken yet.

    People left without drugs are dropped; order is preserved.
    """
    due: Document = []
    for person in people:
        drugs = [drug for drug in person.drugs if is_past(drug.time) and not drug.status]
        if drugs:
            due.append(Person(person_name=person.person_name, drugs=drugs))
    return due


def _set_drug_status(drugs: List[Drug], drug_name: str, status: bool) -> List[Drug]:
    return [
        drug.model_copy(update={"status": status}) if drug.name == drug_name else drug
        for drug in drugs
    ]


def set_status(people: Document, person_name: str, drug_name: str, status: bool) -> Document:
    """Set ``status`` on every drug called ``drug_name`` of ``person_name``.

    A person missing from the document is appended with an empty drug list.
    """
    updated: Document = []
    found = False
    for person in people:
        if person.person_name == person_name:
            found = True
            person = person.model_copy(
                update={"drugs": _set_drug_status(person.drugs, drug_name, status)}
            )
        updated.append(person)
    if not found:
        updated.append(Person(person_name=person_name, drugs=[]))
    return updated


def reset_statuses(people: Document) -> Document:
    """Clear the status of every drug of every person."""
    updated = people
    for person in people:
        for drug in person.drugs:
            updated = set_status(updated, person.person_name, drug.name, False)
    logger.info("Daily reset cleared %d drug statuses", sum(len(p.drugs) for p in people))
    return updated


def check_and_reset(people: Document) -> Tuple[Document, bool]:
    """Return the document after the daily reset check and whether it changed."""
    if should_reset(people):
        return reset_statuses(people), True
    return people, False


def validate_document(people: Document) -> None:
    """Reject documents with repeated people or malformed times."""
    duplicates = find_duplicate_names(people)
    if duplicates:
        raise DuplicatePersonError(f"duplicate person names: {', '.join(duplicates)}")
    for person in people:
        for drug in person.drugs:
            parse_time(drug.time)
