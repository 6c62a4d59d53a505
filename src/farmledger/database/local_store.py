"""JSON file store ("local mode").

Plays the part browser storage played for the web client: a single JSON
document holding the whole farm state. A corrupt or half-written file never
stops the application; it is logged and treated as empty.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from farmledger.database.base import FarmStore
from farmledger.database.mappers import state_from_dict, state_to_dict
from farmledger.domain.entities import FarmState
from farmledger.domain.errors import PersistenceError

logger = logging.getLogger(__name__)

PENDING_SYNC_KEY = "pending_sync"


class LocalFarmStore(FarmStore):
    """Stores the farm state as JSON at ``path``.

    The document also carries the ``pending_sync`` flag so unsynced changes
    survive a restart.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.pending_sync = False

    def load(self) -> FarmState:
        self.pending_sync = False
        if not self.path.exists():
            return FarmState()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("Ignoring unreadable farm cache %s: %s", self.path, e)
            return FarmState()
        if isinstance(data, dict):
            self.pending_sync = data.get(PENDING_SYNC_KEY) is True
        return state_from_dict(data)

    def save(self, state: FarmState) -> None:
        data = state_to_dict(state)
        data[PENDING_SYNC_KEY] = self.pending_sync
        write_json_atomic(self.path, data)


def write_json_atomic(path: Path, data) -> None:
    """Write ``data`` as JSON to ``path`` without ever leaving a truncated file.

    Raises:
        PersistenceError: If the file could not be written
    """
    payload = json.dumps(data, ensure_ascii=False, indent=2)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".farm-", suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.replace(tmp_path, path)
    except OSError as e:
        raise PersistenceError(f"Could not write {path}: {e}") from e
