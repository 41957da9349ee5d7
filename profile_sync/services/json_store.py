"""
JSON File Store

Thread-safe, atomically written JSON mapping used by the local backend in
place of Firestore and Firebase Auth.
"""

import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional


class JsonFileStore:
    """
    Persistent ``key -> record`` mapping kept in a single JSON file.

    Every read and write goes through one lock, and writes replace the file
    atomically so a reader never observes a partial document.
    """

    def __init__(self, data_file: str):
        """
        Initialize the store with path to its JSON data file.

        Args:
            data_file: Path to the JSON file; created empty if missing
        """
        self.data_file = Path(data_file)
        self._lock = threading.Lock()

        self.data_file.parent.mkdir(parents=True, exist_ok=True)

        if not self.data_file.exists():
            self._write_data({})

    def _read_data(self) -> Dict[str, Dict[str, Any]]:
        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return {}

    def _write_data(self, data: Dict[str, Dict[str, Any]]) -> None:
        """
        Write the mapping atomically (temp file, then rename).

        Args:
            data: Full mapping to persist
        """
        temp_file = self.data_file.with_suffix(".tmp")

        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        # Atomic on POSIX
        temp_file.replace(self.data_file)

    def put(self, key: str, record: Dict[str, Any]) -> None:
        """Create or fully replace the record stored under ``key``."""
        with self._lock:
            data = self._read_data()
            data[key] = record
            self._write_data(data)

    def get(self, key: str) -> Any:
        with self._lock:
            return self._read_data().get(key)

    def values(self) -> list:
        with self._lock:
            return list(self._read_data().values())

    def update_field(self, key: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        """
        Set one field of an existing record in a single locked read-modify-write.

        Returns:
            The record as it was before the update, or None if ``key`` is missing
        """
        with self._lock:
            data = self._read_data()
            if key not in data:
                return None
            before = dict(data[key])
            data[key][field] = value
            self._write_data(data)
            return before
