"""
Persisted set of product IDs whose SEO meta has already been written.

File format:

    {"updated_ids": {"12": true, "15": true}}
"""

import os
import json
import logging
import threading
from typing import Iterable, Set

from .errors import DecodeError


class UpdateTracker:
    """Set of committed product IDs, saved after every commit."""

    def __init__(self, updated_ids: Iterable[int] = ()):
        self._ids: Set[int] = set(updated_ids)
        self._lock = threading.Lock()

    @classmethod
    def load(cls, tracker_path: str) -> "UpdateTracker":
        """
        Load the tracker file, or start empty if it does not exist.

        Raises:
            OSError: If the file exists but cannot be read
            DecodeError: If the file content is not a tracker document
        """
        try:
            with open(tracker_path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            logging.info(f"No tracker file at {tracker_path}, starting empty")
            return cls()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Failed to parse tracker file {tracker_path}: {e}") from e

        if not isinstance(data, dict):
            raise DecodeError(f"Tracker file {tracker_path} must contain a JSON object")
        entries = data.get("updated_ids") or {}
        if not isinstance(entries, dict):
            raise DecodeError(f"Tracker file {tracker_path}: updated_ids must be an object")

        ids = set()
        for key, marked in entries.items():
            try:
                product_id = int(key)
            except (TypeError, ValueError) as e:
                raise DecodeError(f"Tracker file {tracker_path}: invalid product id {key!r}") from e
            if marked is True:
                ids.add(product_id)

        logging.info(f"Loaded tracker with {len(ids)} updated products")
        return cls(ids)

    @classmethod
    def reset(cls) -> "UpdateTracker":
        """Fresh empty tracker, ignoring anything on disk."""
        return cls()

    def is_marked(self, product_id: int) -> bool:
        with self._lock:
            return product_id in self._ids

    def mark(self, product_id: int):
        with self._lock:
            self._ids.add(product_id)

    @property
    def ids(self) -> Set[int]:
        with self._lock:
            return set(self._ids)

    def __len__(self):
        with self._lock:
            return len(self._ids)

    def __contains__(self, product_id):
        return self.is_marked(product_id)

    def save(self, tracker_path: str) -> bool:
        """
        Overwrite the tracker file with the full set.

        A failed write is logged; the in-memory state stays authoritative.

        Returns:
            True if the file was written
        """
        with self._lock:
            document = {"updated_ids": {str(pid): True for pid in sorted(self._ids)}}
            try:
                directory = os.path.dirname(tracker_path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                with open(tracker_path, "w", encoding="utf-8") as f:
                    json.dump(document, f)
            except OSError as e:
                logging.warning(f"Could not save SEO tracker file {tracker_path}: {e}")
                return False
        return True
