"""
JSON-file implementation of the Credential Store.

The file plays the role of browser local storage: a flat JSON object where
the token lives under one well-known key. Other keys are left alone.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from turismo.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class FileCredentialStore:
    """Credential store backed by a local JSON file."""

    def __init__(self, path: Optional[str] = None, key: Optional[str] = None):
        self.path = Path(path or settings.CREDENTIAL_FILE)
        self.key = key or settings.CREDENTIAL_KEY

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable local storage file {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get(self) -> Optional[str]:
        token = self._read().get(self.key)
        return token or None

    def set(self, token: str) -> None:
        data = self._read()
        data[self.key] = token
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        if self.key in data:
            del data[self.key]
            self._write(data)
