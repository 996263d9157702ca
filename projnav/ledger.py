"""JSON ledger files with content-hash change detection."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

from .text import Messages

logger = logging.getLogger(__name__)

LEDGER_INDENT = 4


def content_hash(text: str) -> str:
    """Return a stable hash for ledger text."""

    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def serialize_ledger(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=LEDGER_INDENT)


class JsonLedger:
    """A JSON object stored on disk that remembers the hash it last saw.

    ``read`` reports whether the file changed since the last read or write;
    ``write`` skips the disk when the serialized text matches that hash.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.last_hash: str | None = None

    def ensure_exists(self) -> None:
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("{}", encoding="utf-8")
        logger.debug("Created empty ledger %s", self.path)

    def read(self) -> tuple[dict[str, Any], bool]:
        """Return the parsed ledger and whether it differs from the last known content."""

        self.ensure_exists()
        text = self.path.read_text(encoding="utf-8")
        digest = content_hash(text)
        if digest == self.last_hash:
            return {}, False
        payload = json.loads(text) if text.strip() else {}
        if not isinstance(payload, dict):
            raise ValueError(Messages.ERROR_LEDGER_INVALID.format(path=self.path))
        self.last_hash = digest
        return payload, True

    def write(self, payload: dict[str, Any]) -> bool:
        """Persist *payload* unless it matches the last known content."""

        text = serialize_ledger(payload)
        digest = content_hash(text)
        if digest == self.last_hash:
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")
        self.last_hash = digest
        logger.debug("Wrote ledger %s", self.path)
        return True
