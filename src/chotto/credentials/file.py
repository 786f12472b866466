"""JSON file credential store.

Keeps secrets in a single JSON object keyed by namespaced provider key.
The file is re-read on every lookup so edits by other processes are seen,
and written with owner-only permissions.
"""

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path

from .base import CredentialStore

logger = logging.getLogger(__name__)


class FileCredentialStore(CredentialStore):
    """Credential store persisted to a JSON file."""

    def __init__(self, path: str | Path):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable credential file %s: %s", self._path, type(e).__name__)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring credential file %s: not a JSON object", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _save(self, data: dict[str, str]) -> None:
        # mkstemp creates the file with mode 0600
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise

    def _read(self, key: str) -> str | None:
        return self._load().get(key)

    def _write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def _delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    @property
    def backend_type(self) -> str:
        return "file"
