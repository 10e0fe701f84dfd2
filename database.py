"""
JSON file store for the drug schedule.

The whole document lives in one file whose path comes from settings. Every
save replaces the file; there is no partial update. A single process-wide lock
serialises load-modify-save sequences so concurrent requests cannot overwrite
each other's changes.
"""
import json
import os
import stat
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from pydantic import TypeAdapter, ValidationError

from errors import FormatError, StoreIOError
from logging_config import get_logger
from schemas import Document, Person, dump_document, find_duplicate_names
from settings import get_settings

logger = get_logger(__name__)

_document_adapter = TypeAdapter(List[Person])
_lock = threading.RLock()


def settings_file_path() -> Path:
    return get_settings().settings_file_path


@contextmanager
def transaction() -> Iterator[None]:
    """Hold the store lock for a whole read-modify-write sequence."""
    with _lock:
        yield


def get_document() -> Document:
    """Read and validate the stored document.

    A missing file is an error, not an empty document.
    """
    path = settings_file_path()
    with _lock:
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise StoreIOError(f"cannot read settings file {path}: {e.strerror or e}") from e
    try:
        people = _document_adapter.validate_json(raw)
    except ValidationError as e:
        raise FormatError(f"settings file {path} is not a valid document: {e}") from e
    duplicates = find_duplicate_names(people)
    if duplicates:
        raise FormatError(f"settings file {path} repeats person names: {', '.join(duplicates)}")
    logger.debug("Loaded %d people from %s", len(people), path)
    return people


def save_document(people: Document) -> None:
    """Replace the stored document.

    The data goes to a temporary file next to the target which is then moved
    over it, so readers see either the old or the new content.
    """
    path = settings_file_path()
    payload = json.dumps(dump_document(people), ensure_ascii=False, separators=(",", ":"))
    with _lock:
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            if path.exists():
                # mkstemp files are 0600; keep the mode the store already had
                os.chmod(tmp_name, stat.S_IMODE(os.stat(path).st_mode))
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StoreIOError(f"cannot write settings file {path}: {e.strerror or e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
    logger.info("Saved %d people to %s", len(people), path)
