"""
Key-value persistence backends.

The record store keeps each snapshot in a named slot. A backend only has
to read the last payload written to a slot and durably replace it.
"""

import os
import tempfile
from pathlib import Path
from typing import Protocol

from syncboard.core.errors import PersistenceReadError
from syncboard.utils.validation import validate_slot_name


class KeyValueBackend(Protocol):
    """Storage for named text slots."""

    def read(self, slot: str) -> str | None:
        """
        Return the last payload written to slot, or None if it was never written.

        Raises OSError if the slot cannot be read and PersistenceReadError if
        its bytes are not valid text.
        """
        ...

    def write(self, slot: str, payload: str) -> None:
        """Replace the payload of slot. Raises OSError on failure."""
        ...


class InMemoryBackend:
    """
    Backend holding slots in a dict.

    Used by tests and by callers that do not want anything on disk.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self.slots: dict[str, str] = dict(initial or {})

    def read(self, slot: str) -> str | None:
        return self.slots.get(slot)

    def write(self, slot: str, payload: str) -> None:
        self.slots[slot] = payload


class JsonFileBackend:
    """
    Backend storing each slot as <directory>/<slot>.json.

    Writes go to a temporary file in the same directory followed by
    os.replace, so a reader never observes a partially written slot.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, slot: str) -> Path:
        return self.directory / f"{validate_slot_name(slot)}.json"

    def read(self, slot: str) -> str | None:
        path = self.path_for(slot)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise PersistenceReadError(f"Slot '{slot}' is not valid UTF-8: {e}") from e

    def write(self, slot: str, payload: str) -> None:
        path = self.path_for(slot)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file_handle:
                file_handle.write(payload)
                file_handle.flush()
                os.fsync(file_handle.fileno())
            os.replace(temp_path, path)
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
