"""Errors raised while serving schedule requests.

Each error carries the HTTP status the API reports it with, so handlers never
need to know which layer failed.
"""


class DrugTrackerError(Exception):
    """Base class for request-scoped failures."""

    status_code = 500


class StoreIOError(DrugTrackerError):
    """The settings file is missing, unreadable or unwritable."""


class FormatError(DrugTrackerError):
    """The settings file does not hold a valid list of people."""


class ScheduleParseError(DrugTrackerError, ValueError):
    """A scheduled time is not a valid HH:MM string."""

    status_code = 400


class DuplicatePersonError(DrugTrackerError, ValueError):
    """The same person name appears more than once in a document."""

    status_code = 400


class UnknownPersonError(DrugTrackerError, KeyError):
    """No person with the requested name is stored."""

    status_code = 404

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
