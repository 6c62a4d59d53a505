"""Sidecar file holding the snapshot taken before the last delete.

Every CLI command runs in its own process, so the state a delete replaced
has to be written down for a later ``farmledger undo`` to find it.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from farmledger.database.local_store import write_json_atomic
from farmledger.database.mappers import state_from_dict, state_to_dict
from farmledger.domain.entities import FarmState
from farmledger.domain.errors import PersistenceError

logger = logging.getLogger(__name__)


class UndoJournal:
    """One-entry journal of the state before the most recent delete."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def record(self, state: FarmState, message: str) -> None:
        """Replace the journal entry.

        Raises:
            PersistenceError: If the file could not be written
        """
        write_json_atomic(self.path, {"message": message, "state": state_to_dict(state)})

    def load(self) -> Optional[tuple[FarmState, str]]:
        """Return the recorded (state, message), or None when there is nothing to undo."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("Ignoring unreadable undo journal %s: %s", self.path, e)
            return None
        if not isinstance(data, dict) or not isinstance(data.get("state"), dict):
            logger.error("Ignoring malformed undo journal %s", self.path)
            return None
        return state_from_dict(data["state"]), str(data.get("message") or "last delete")

    def clear(self) -> None:
        """Forget the recorded entry.

        Raises:
            PersistenceError: If the file could not be removed
        """
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Could not remove {self.path}: {e}") from e
