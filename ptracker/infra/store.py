"""
Snapshot Store - JSON file persistence for the whole tracker state.

Architecture Decision: Why a single JSON snapshot?
- Human-readable format for easy inspection and manual edits
- Same layout as the data files written by earlier versions
- Loading and saving the whole state keeps every command a simple
  load -> mutate -> save cycle with nothing held between invocations
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from ptracker.domain.errors import CorruptStateError
from ptracker.domain.models import TrackerData

logger = logging.getLogger(__name__)


class JsonStore:
    """
    Loads and saves a TrackerData snapshot.

    Saves are atomic: the snapshot is written to a temporary file next to the
    target and moved over it, so readers see either the old or the new file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> TrackerData:
        """
        Read the snapshot.

        Returns an empty TrackerData when no file exists yet.

        Raises:
            CorruptStateError: The file exists but does not hold valid tracker data
            OSError: The file could not be read
        """
        if not self.path.exists():
            logger.debug(f"No data file at {self.path}, starting empty")
            return TrackerData()

        raw = self.path.read_bytes()

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Failed to decode {self.path}: {e}")
            raise CorruptStateError(str(self.path), "not valid UTF-8") from e

        try:
            data = TrackerData.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Failed to parse {self.path}: {e.error_count()} error(s)")
            raise CorruptStateError(str(self.path), self._summarize(e)) from e

        logger.debug(f"Loaded {len(data.projects)} project(s) from {self.path}")
        return data

    def save(self, data: TrackerData) -> None:
        """
        Replace the persisted snapshot.

        Raises:
            OSError: The snapshot could not be written; the previous file is left intact
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = data.model_dump(mode="json", by_alias=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug(f"Saved {len(data.projects)} project(s) to {self.path}")

    @staticmethod
    def _summarize(error: ValidationError) -> str:
        first = error.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        if location:
            return f"{location}: {first['msg']}"
        return first["msg"]
