"""
JSON file identity store - Implements IdentityStore protocol.

This module keeps the username -> chat id mapping in memory and mirrors
it to a pretty-printed JSON object on disk.

Persistence Design:
------------------
1. **Cache is the source of truth**: after load() every lookup is served
   from memory. The file is a write-through mirror.

2. **Read-merge-write**: record_contact() re-reads the file, merges the whole
   cache over it and writes the table back. Entries written by another
   writer after startup are kept, and a file lost or truncated after load()
   is rebuilt from the cache. The sequence runs under a lock and the
   file is replaced atomically.

3. **Degraded mode**: read/write failures are logged and absorbed. The store
   keeps serving from memory and sets ``degraded`` until a write succeeds.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from src.domain.ports import Destination
from src.domain.usernames import normalize_username

logger = logging.getLogger(__name__)


class JsonFileIdentityStore:
    """
    Implements IdentityStore protocol via a JSON file.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, path: Path) -> None:
        """
        Initialize store with the backing file location.

        Args:
            path: JSON file holding the username -> chat id mapping
        """
        self._path = Path(path)
        self._chat_ids: dict[str, Destination] = {}
        self._lock = threading.Lock()
        self.degraded = False

    def load(self) -> None:
        """
        Populate the cache from disk.

        A missing file is an empty store. Unreadable or malformed files
        leave the cache empty and mark the store degraded.
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Error creating data directory %s: %s", self._path.parent, exc)
            self.degraded = True

        with self._lock:
            chat_ids = self._read_file()
        for username, chat_id in chat_ids.items():
            self._chat_ids[normalize_username(username)] = chat_id

        logger.info("Loaded %d chat IDs", len(chat_ids))

    def record_contact(self, username: str, destination: Destination) -> None:
        """
        Upsert the chat id for a username and persist the whole table.

        Args:
            username: Telegram username (any casing, optional leading "@")
            destination: Chat id to deliver messages to
        """
        key = normalize_username(username)

        with self._lock:
            self._chat_ids[key] = destination
            # Cache wins over the file; the file only adds entries we never saw
            chat_ids = self._read_file()
            chat_ids.update(self._chat_ids)
            if self._write_file(chat_ids):
                self.degraded = False
                logger.info("Saved chat ID for @%s: %s", key, destination)

    def lookup_destination(self, username: str) -> Destination | None:
        """Return the chat id for a username, or None if never recorded."""
        return self._chat_ids.get(normalize_username(username))

    def close(self) -> None:
        """Nothing to release; every write is flushed immediately."""
        logger.info("Identity store closed (%d chat IDs)", len(self._chat_ids))

    def _read_file(self) -> dict[str, Destination]:
        """Read the mapping from disk. Caller holds the lock."""
        try:
            with self._path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            logger.info("No saved chat IDs found at %s", self._path)
            return {}
        except (OSError, ValueError) as exc:
            logger.error("Error reading chat IDs from %s: %s", self._path, exc)
            self.degraded = True
            return {}

        if not isinstance(data, dict):
            logger.error("Chat ID file %s does not hold a JSON object", self._path)
            self.degraded = True
            return {}
        return data

    def _write_file(self, chat_ids: dict[str, Destination]) -> bool:
        """Atomically replace the file contents. Caller holds the lock."""
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(chat_ids, fh, indent=2)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            logger.error("Error saving chat IDs to %s: %s", self._path, exc)
            self.degraded = True
            return False
        return True
