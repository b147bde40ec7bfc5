"""
persistence.py — JSON-file snapshot store
==========================================
Keeps the graph across server restarts.  Restore is best-effort: a missing,
corrupt or invalid file leaves the store empty and is only logged.  Any
valid document is restored, including an empty graph with its mode.
"""

import json
import logging
import os
from pathlib import Path
from typing import Union

from graph.snapshot import SnapshotError, dump_snapshot, load_snapshot
from graph.store import GraphStore

logger = logging.getLogger(__name__)


class SnapshotFile:

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def restore(self, store: GraphStore) -> bool:
        """Load the saved graph into `store`.  True if anything was restored."""
        if not self.path.exists():
            return False
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable snapshot %s: %s", self.path, exc)
            return False

        try:
            load_snapshot(store, data)
        except SnapshotError as exc:
            logger.warning("Ignoring invalid snapshot %s: %s", self.path, exc)
            return False
        logger.info("Restored graph from %s", self.path)
        return True

    def save(self, store: GraphStore) -> bool:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as fh:
                json.dump(dump_snapshot(store), fh, indent=2)
            os.replace(tmp, self.path)
        except OSError as exc:
            logger.warning("Could not save snapshot to %s: %s", self.path, exc)
            return False
        return True
