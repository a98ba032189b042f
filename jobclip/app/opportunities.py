"""
Opportunity store.

Captured job postings are kept as a JSON list on the local filesystem.
Each record is the posting's wire form plus an `id`, a `capturedDate`
(ISO UTC timestamp) and whatever the caller attaches (usually `link`).
"""

import json
import logging
import random
import string
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from jobclip.config import Settings
from jobclip.core.models import JobPosting

logger = logging.getLogger(__name__)

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_SUFFIX_LENGTH = 9

_lock = threading.Lock()


def generate_id() -> str:
    """'<epoch-ms>-<9 base36 chars>', e.g. '1718900000000-k3j9x0q2a'."""
    suffix = "".join(random.choice(ID_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
    return f"{int(time.time() * 1000)}-{suffix}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class OpportunityStore:
    """JSON-file backed list of captured opportunities"""

    def __init__(self, path: Optional[str] = None):
        """
        Args:
            path: JSON file location (defaults to JOBCLIP_STORE_PATH)
        """
        self.path = Path(path or Settings.store_path())
        self._corrupt = False

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"[store] Corrupt opportunity file {self.path}: {e}")
            self._corrupt = True
            return []

        if not isinstance(data, list):
            logger.error(f"[store] Unexpected content in {self.path}: {type(data).__name__}")
            self._corrupt = True
            return []
        return [record for record in data if isinstance(record, dict)]

    def _write(self, records: List[Dict[str, Any]]):
        if self._corrupt and self.path.exists():
            backup = self.path.with_name(self.path.name + ".corrupt")
            self.path.replace(backup)
            logger.warning(f"[store] Moved unreadable file to {backup}")
        self._corrupt = False

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

    def list(self) -> List[Dict[str, Any]]:
        """All records, oldest first."""
        with _lock:
            return self._read()

    def get(self, opportunity_id: str) -> Optional[Dict[str, Any]]:
        with _lock:
            for record in self._read():
                if record.get("id") == opportunity_id:
                    return record
        return None

    def save(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Append a record, or replace the stored record with the same id.

        Records without an id (or capturedDate) get one.

        Returns:
            The stored record
        """
        record = dict(record)
        record.setdefault("id", generate_id())
        record.setdefault("capturedDate", utc_timestamp())

        with _lock:
            records = self._read()
            for index, existing in enumerate(records):
                if existing.get("id") == record["id"]:
                    records[index] = record
                    logger.info(f"[store] Updated opportunity {record['id']}")
                    break
            else:
                records.append(record)
                logger.info(f"[store] Added opportunity {record['id']}")
            self._write(records)

        return record

    def capture(self, posting: JobPosting, **extra: Any) -> Dict[str, Any]:
        """Store a freshly extracted posting with caller fields such as `link`."""
        record = posting.to_dict()
        record.update({key: value for key, value in extra.items() if value is not None})
        record.pop("id", None)
        record.pop("capturedDate", None)
        return self.save(record)

    def delete(self, opportunity_id: str) -> bool:
        """Remove a record; returns False when no record has that id."""
        with _lock:
            records = self._read()
            remaining = [record for record in records if record.get("id") != opportunity_id]
            if len(remaining) == len(records):
                return False
            self._write(remaining)
        logger.info(f"[store] Deleted opportunity {opportunity_id}")
        return True

    def __len__(self):
        return len(self.list())
