"""Persistence of the election document.

The document is small and is always replaced as a whole: every successful
mutation saves the complete registry and election. Stores only implement
load and save, so the domain code never knows how the bytes are kept.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from core.errors import StoreError
from core.models import ElectionDocument

logger = logging.getLogger(__name__)


class StateStore(ABC):
    """Abstract base class for election document stores."""

    @abstractmethod
    def load(self) -> ElectionDocument:
        """Return the stored document, or an empty one if none is usable."""
        pass

    @abstractmethod
    def save(self, document: ElectionDocument) -> None:
        """Replace the stored document.

        Raises:
            StoreError: If the document could not be written. The previously
                stored document must still be loadable afterwards.
        """
        pass


class MemoryStore(StateStore):
    """Keeps the document in memory as JSON-shaped data."""

    def __init__(self, initial: ElectionDocument | None = None):
        self._data = (initial or ElectionDocument()).to_dict()
        self.saves = 0

    def load(self) -> ElectionDocument:
        return ElectionDocument.from_dict(json.loads(json.dumps(self._data)))

    def save(self, document: ElectionDocument) -> None:
        self._data = json.loads(json.dumps(document.to_dict()))
        self.saves += 1


class JsonFileStore(StateStore):
    """Stores the document as a pretty-printed JSON file.

    Writes go to a temporary file beside the target which then replaces it,
    so a crash mid-write leaves the previous document in place. Several
    processes writing the same file can still overwrite each other.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> ElectionDocument:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("No election data at %s, starting with fresh data", self.path)
            return ElectionDocument()
        except OSError as e:
            logger.warning("Could not read %s (%s), starting with fresh data", self.path, e)
            return ElectionDocument()

        try:
            return ElectionDocument.from_dict(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Unusable election data in %s (%s), starting with fresh data",
                           self.path, e)
            return ElectionDocument()

    def save(self, document: ElectionDocument) -> None:
        payload = json.dumps(document.to_dict(), indent=2)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreError(f"Failed to save election data to {self.path}: {e}") from e
