"""
File Session Store

Persists the session as a small JSON document so a login survives between
CLI invocations:

    {"token": "9944b091...", "user": "{\\"username\\": \\"admin\\"}"}

The user entry is itself a JSON string, mirroring a browser's local storage
where every value is text. A missing, empty or corrupt file reads as "no
session"; it is never an error.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from food_manager.schemas import Session, User
from food_manager.services.session.base import TOKEN_KEY, USER_KEY, BaseSessionStore

logger = logging.getLogger(__name__)


class FileSessionStore(BaseSessionStore):
    """
    JSON-file-backed session store.

    Attributes:
        path: Location of the session file
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    @property
    def backend_name(self) -> str:
        return "file"

    def _read_entries(self) -> dict:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning(f"Could not read session file {self.path}: {e}")
            return {}

        if not raw.strip():
            return {}
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Session file {self.path} is corrupt, ignoring it")
            return {}
        return entries if isinstance(entries, dict) else {}

    def get(self) -> Optional[Session]:
        entries = self._read_entries()
        token = entries.get(TOKEN_KEY)
        if not token:
            return None
        try:
            user = json.loads(entries.get(USER_KEY) or "null") or {}
            return Session(token=token, user=user)
        except (json.JSONDecodeError, TypeError, ValidationError):
            logger.warning("Stored user record is unreadable, ignoring session")
            return None

    def set(self, token: str, user: User) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        entries = {TOKEN_KEY: token, USER_KEY: user.model_dump_json()}
        self.path.write_text(json.dumps(entries), encoding="utf-8")
        # The token is a bearer credential
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            logger.debug(f"Could not restrict permissions on {self.path}")
        logger.debug(f"Session written to {self.path}")

    def clear(self) -> None:
        try:
            self.path.unlink()
            logger.debug(f"Session file {self.path} removed")
        except FileNotFoundError:
            pass
