"""Shared file handling for the JSON-backed stores.

Writes go to a sibling temp file that is then renamed over the target,
so a reader never sees a half-written document.  I/O and decode failures
surface as ``PersistenceError``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable

from hpos.domain.exceptions import PersistenceError

logger = logging.getLogger("hpos.persistence")


class JsonFile:

    def __init__(self, path: Path, default: Callable[[], Any] = list) -> None:
        self._path = path
        self._default = default
        self.created = False
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Any:
        try:
            return json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Cannot read %s: %s", self._path, exc)
            raise PersistenceError(f"Cannot read {self._path.name}") from exc

    def persist(self, data: Any) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            logger.error("Cannot write %s: %s", self._path, exc)
            raise PersistenceError(f"Cannot write {self._path.name}") from exc

    def _ensure_file(self) -> None:
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self.persist(self._default())
            self.created = True
