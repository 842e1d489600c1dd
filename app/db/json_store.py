from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List

Record = Dict[str, Any]


class JsonStore:
    """
    Un fichier JSON = un tableau d'objets.
    Un seul écrivain à la fois (verrou par store) et écriture atomique
    (fichier temporaire + os.replace) : pas de fichier à moitié écrit.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self._write([])

    # ---------- public API ----------

    def read_all(self) -> List[Record]:
        with self._lock:
            return self._read()

    def append(self, record: Record) -> Record:
        with self._lock:
            items = self._read()
            items.append(record)
            self._write(items)
        return record

    def update(self, fn: Callable[[List[Record]], List[Record]]) -> List[Record]:
        """
        Read-modify-write sous verrou : fn reçoit la liste et renvoie la nouvelle.
        """
        with self._lock:
            items = fn(self._read())
            self._write(items)
            return items

    # ---------- internals ----------

    def _read(self) -> List[Record]:
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{self.path} ne contient pas un tableau JSON")
        return data

    def _write(self, items: List[Record]) -> None:
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise


class DataStores:
    """Les quatre fichiers du portail, regroupés sous DATA_DIR."""

    def __init__(self, data_dir: str | Path) -> None:
        base = Path(data_dir)
        self.users = JsonStore(base / "users.json")
        self.activities = JsonStore(base / "activities.json")
        self.uploads = JsonStore(base / "uploads.json")
        self.problems = JsonStore(base / "problems.json")
