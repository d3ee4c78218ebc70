import json
import logging
import os
from typing import Any, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

Record = TypeVar('Record')


class CorruptRecord(ValueError):
    """ raised by a store's parser when the file content is structurally invalid """


class JsonFileStore(Generic[Record]):
    """
    A single JSON record persisted as a whole-file overwrite.

    A file that exists but cannot be parsed is deleted and reported as absent,
    so a broken file forces the caller back into setup instead of being used.
    """
    description = 'data'

    def __init__(self, path: os.PathLike):
        self.path = path

    def parse(self, payload: Any) -> Record:
        raise NotImplementedError

    def dump(self, record: Record) -> Any:
        raise NotImplementedError

    def load(self) -> Optional[Record]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            return self._discard(e)

        try:
            record = self.parse(payload)
        except (CorruptRecord, KeyError, TypeError, ValueError) as e:
            return self._discard(e)

        logger.info(f"{self.description.capitalize()} loaded from {self.path}.")
        return record

    def save(self, record: Record) -> bool:
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self.dump(record), f, indent=2)
        except OSError as e:
            logger.error(f"Could not save {self.description} to {self.path}: {e}")
            return False
        logger.info(f"{self.description.capitalize()} saved to {self.path}.")
        return True

    def _discard(self, error: Exception) -> None:
        logger.warning(f"Could not load {self.description} from {self.path}: {error}. Discarding file.")
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        return None
