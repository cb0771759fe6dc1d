# alertbridge/services/options_store.py
"""
Options store (JSON file) holding named option blobs.

The webhook settings live under OPTION_NAME as
{"username": str, "password": str, "authorid": int}.
Blobs are overwritten on save and never deleted.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .sanitize import absint, sanitize_text_field

logger = logging.getLogger(__name__)

OPTION_NAME = "everbridge_opts"
DEFAULT_AUTHOR_ID = 1


@dataclass
class Options:
    username: str = ""
    password: str = ""
    authorid: int = DEFAULT_AUTHOR_ID

    @classmethod
    def from_dict(cls, raw: Any) -> "Options":
        """Build options from a stored blob that may never have been validated."""
        if not isinstance(raw, dict):
            return cls()

        def _text(key: str) -> str:
            value = raw.get(key)
            return "" if value is None else str(value)

        authorid = raw.get("authorid", DEFAULT_AUTHOR_ID)
        try:
            authorid = int(authorid)
        except (TypeError, ValueError):
            authorid = DEFAULT_AUTHOR_ID

        return cls(username=_text("username"), password=_text("password"), authorid=authorid)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def sanitize_options(raw: Dict[str, Any]) -> Options:
    """Coerce submitted settings before they are saved."""
    raw = raw or {}
    return Options(
        username=sanitize_text_field(raw.get("username")),
        password=sanitize_text_field(raw.get("password")),
        authorid=absint(raw.get("authorid")),
    )


class OptionsStore:
    """Named option blobs persisted in a single JSON file."""

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"[OPTIONS] Unreadable options file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = str(self.path) + ".tmp"
        with open(tmp, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, self.path)

    def get_option(self, name: str, default: Optional[Any] = None) -> Any:
        with self._lock:
            return self._read().get(name, default)

    def update_option(self, name: str, value: Any) -> None:
        with self._lock:
            data = self._read()
            data[name] = value
            self._write(data)

    def load(self, name: str = OPTION_NAME) -> Options:
        """Current options; stores the defaults on first access."""
        with self._lock:
            data = self._read()
            if name not in data:
                data[name] = Options().to_dict()
                try:
                    self._write(data)
                except OSError as e:
                    logger.warning(f"[OPTIONS] Could not store default options: {e}")
            return Options.from_dict(data[name])

    def save(self, options: Options, name: str = OPTION_NAME) -> None:
        self.update_option(name, options.to_dict())
        logger.info(f"[OPTIONS] Saved {name} (username={options.username!r}, authorid={options.authorid})")
