import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Union

from core import constants
from core.exceptions import (
    PersistFailedException,
    StoreCorruptException,
    StoreUnreadableException,
)
from core.logger import get_logger

logger = get_logger(__name__)


@dataclass
class FingerprintSnapshot:
    """
    The two copies of the store a run works with.
    `original` is read-only and never shares state with `working`.
    """

    original: Mapping[str, str]
    working: Dict[str, str]

    def changed_keys(self) -> List[str]:
        return [
            key
            for key, value in self.working.items()
            if self.original.get(key) != value
        ]


class FingerprintRepository:
    """
    Load/persist the {target key: fingerprint} JSON file.
    The file must already exist; creating it is an operator task.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Dict[str, str]:
        """
        Reads the store file.

        Raises:
            StoreUnreadableException: file missing or cannot be opened
            StoreCorruptException: content is not a JSON object of strings
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreUnreadableException(
                "Cannot read fingerprint store", {"path": str(self.path), "error": str(e)}
            ) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreCorruptException(
                "Fingerprint store is not valid JSON", {"path": str(self.path), "error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise StoreCorruptException(
                "Fingerprint store must be a JSON object",
                {"path": str(self.path), "type": type(data).__name__},
            )

        hashes: Dict[str, str] = {}
        for key, value in data.items():
            if value is None:
                value = constants.EMPTY_FINGERPRINT
            if not isinstance(value, str):
                raise StoreCorruptException(
                    "Fingerprint store values must be strings",
                    {"path": str(self.path), "key": key, "type": type(value).__name__},
                )
            hashes[key] = value

        logger.debug(f"[STORE] Loaded {len(hashes)} entries from {self.path}")
        return hashes

    def snapshot(self) -> FingerprintSnapshot:
        hashes = self.load()
        return FingerprintSnapshot(
            original=MappingProxyType(dict(hashes)),
            working=dict(hashes),
        )

    @staticmethod
    def serialize(hashes: Mapping[str, str]) -> str:
        return json.dumps(
            dict(hashes),
            indent=constants.STORE_INDENT,
            sort_keys=True,
            ensure_ascii=False,
        )

    def persist(self, hashes: Mapping[str, str]) -> None:
        """
        Overwrites the store with `hashes`.
        Writes a sibling temp file and renames it into place, so a failed write
        leaves the previous file intact.

        Raises:
            PersistFailedException: on any filesystem error
        """
        payload = self.serialize(hashes)
        directory = self.path.parent
        tmp_path = None

        try:
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())

            if self.path.exists():
                os.chmod(tmp_path, self.path.stat().st_mode & 0o777)
            else:
                os.chmod(tmp_path, 0o644)

            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise PersistFailedException(
                "Failed to persist fingerprint store", {"path": str(self.path), "error": str(e)}
            ) from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

        logger.debug(f"[STORE] Persisted {len(hashes)} entries to {self.path}")
