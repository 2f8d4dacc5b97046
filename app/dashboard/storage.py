"""Durable key/value storage for dashboard preferences."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from .state import ClientState, RECENT_SEARCHES_LIMIT


logger = logging.getLogger(__name__)

DARK_MODE_KEY = "darkMode"
RECENT_SEARCHES_KEY = "recentSearches"


class KeyValueStore:
    """String-to-string store kept in a single JSON file.

    Mirrors browser local storage: values are always strings, and a missing
    or unreadable file behaves like an empty store.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning(f"Failed to read storage file {self.path}: {e}")
            return {}

        try:
            data = json.loads(raw.decode("utf-8"))
        except ValueError as e:
            # UnicodeDecodeError is a ValueError too
            logger.warning(f"Ignoring corrupt storage file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: expected a JSON object")
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing the file atomically."""
        data = self._read_all()
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".storage-", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_name, self.path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Stored {key} in {self.path}")


class Preferences(BaseModel):
    """The part of ClientState that survives between sessions."""

    model_config = ConfigDict(frozen=True)

    dark_mode: bool = True
    recent_searches: Tuple[str, ...] = ()


def encode_dark_mode(dark_mode: bool) -> str:
    return "true" if dark_mode else "false"


def decode_dark_mode(raw: Optional[str]) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    if raw is not None:
        logger.warning(f"Ignoring stored {DARK_MODE_KEY} value {raw!r}")
    return Preferences().dark_mode


def encode_recent_searches(recent: Tuple[str, ...]) -> str:
    return json.dumps(list(recent))


def decode_recent_searches(raw: Optional[str]) -> Tuple[str, ...]:
    if raw is None:
        return ()
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning(f"Ignoring corrupt stored {RECENT_SEARCHES_KEY} value")
        return ()
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        logger.warning(f"Ignoring stored {RECENT_SEARCHES_KEY}: expected a list of strings")
        return ()

    # Hand-edited files may break the list invariants
    deduplicated = []
    for item in value:
        if item and item not in deduplicated:
            deduplicated.append(item)
    return tuple(deduplicated[:RECENT_SEARCHES_LIMIT])


def load_preferences(store: KeyValueStore) -> Preferences:
    """Read persisted preferences, falling back to defaults for bad values."""
    return Preferences(
        dark_mode=decode_dark_mode(store.get_item(DARK_MODE_KEY)),
        recent_searches=decode_recent_searches(store.get_item(RECENT_SEARCHES_KEY)),
    )


class PreferencePersister:
    """State observer that writes preferences whenever they change."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def __call__(self, previous: ClientState, current: ClientState) -> None:
        try:
            if previous.dark_mode != current.dark_mode:
                self.store.set_item(DARK_MODE_KEY, encode_dark_mode(current.dark_mode))
            if previous.recent_searches != current.recent_searches:
                self.store.set_item(RECENT_SEARCHES_KEY, encode_recent_searches(current.recent_searches))
        except OSError as e:
            logger.error(f"Failed to persist dashboard preferences: {e}")
