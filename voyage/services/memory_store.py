# FILE: voyage/services/memory_store.py
"""
Owner-scoped memory record store

Each owner's memories live in their own JSON document under the memory
directory, so every operation is confined to one owner's file.
"""
import hashlib
import json
import logging
import os
import re
import tempfile
import threading
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from voyage.config import get_settings
from voyage.exceptions import NotFoundError, StoreError, ValidationError
from voyage.services.dates import parse_date, validate_date_range
from voyage.services.query_filter import MemoryFilter

logger = logging.getLogger(__name__)

MEMORY_FIELDS = (
    "title", "description", "placeName", "locationLink",
    "fromDate", "toDate", "photo"
)
REQUIRED_FIELDS = ("title", "placeName", "fromDate", "toDate", "photo")

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _normalize(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Keep known fields only and store dates as ISO calendar dates"""
    normalized = {}
    for key in MEMORY_FIELDS:
        if key not in fields:
            continue
        value = fields[key]
        if key in ("fromDate", "toDate") and value is not None:
            value = parse_date(value, field=key).isoformat()
        elif isinstance(value, (date, datetime)):
            value = value.isoformat()
        elif value is not None and not isinstance(value, str):
            value = str(value)
        normalized[key] = value
    return normalized


class MemoryStore:
    """Persistent store for travel memories"""

    def __init__(self, memory_dir: Optional[str] = None):
        self.memory_dir = Path(memory_dir or get_settings().memory_dir)
        self.memory_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def create(self, owner_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Validate and persist a new memory for owner_id"""
        values = _normalize(fields)

        missing = [f for f in REQUIRED_FIELDS if not values.get(f)]
        if missing:
            raise ValidationError(
                "Missing required fields",
                errors=[{"field": f, "msg": f"{f} is required"} for f in missing]
            )
        validate_date_range(parse_date(values["fromDate"]), parse_date(values["toDate"]))

        now = _now()
        record = {
            "_id": uuid.uuid4().hex,
            "title": values["title"],
            "description": values.get("description"),
            "placeName": values["placeName"],
            "locationLink": values.get("locationLink"),
            "fromDate": values["fromDate"],
            "toDate": values["toDate"],
            "photo": values["photo"],
            "user": owner_id,
            "createdAt": now,
            "updatedAt": now
        }

        with self._lock:
            records = self._load(owner_id)
            records.append(record)
            self._save(owner_id, records)

        logger.info(f"Memory created: {record['_id']}")
        return dict(record)

    def find(self, flt: MemoryFilter) -> List[Dict[str, Any]]:
        """Snapshot of matching records, latest start date first"""
        with self._lock:
            records = self._load(flt.owner_id)

        matched = [dict(r) for r in records if flt.matches(r)]
        matched.sort(key=lambda r: (r["fromDate"], r["createdAt"]), reverse=True)

        logger.debug(f"Memory find: {len(matched)}/{len(records)} matched")
        return matched

    def get_one(self, owner_id: str, memory_id: str) -> Dict[str, Any]:
        """Fetch one record scoped to owner"""
        self._check_id(memory_id)

        with self._lock:
            records = self._load(owner_id)

        for record in records:
            if record["_id"] == memory_id:
                return dict(record)
        raise NotFoundError()

    def update_one(self, owner_id: str, memory_id: str, partial: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a partial update scoped to id and owner"""
        self._check_id(memory_id)
        changes = _normalize(partial)

        cleared = [f for f in REQUIRED_FIELDS if f in changes and not changes[f]]
        if cleared:
            raise ValidationError(
                "Required fields cannot be cleared",
                errors=[{"field": f, "msg": f"{f} is required"} for f in cleared]
            )

        with self._lock:
            records = self._load(owner_id)
            index = self._index_of(records, memory_id)

            updated = dict(records[index])
            updated.update(changes)
            if "fromDate" in changes or "toDate" in changes:
                validate_date_range(parse_date(updated["fromDate"]), parse_date(updated["toDate"]))
            updated["updatedAt"] = _now()

            records[index] = updated
            self._save(owner_id, records)

        logger.info(f"Memory updated: {memory_id} fields={sorted(changes)}")
        return dict(updated)

    def delete_one(self, owner_id: str, memory_id: str) -> int:
        """Delete one record scoped to owner; returns 1"""
        self._check_id(memory_id)

        with self._lock:
            records = self._load(owner_id)
            index = self._index_of(records, memory_id)
            del records[index]
            self._save(owner_id, records)

        logger.info(f"Memory deleted: {memory_id}")
        return 1

    def delete_all(self, owner_id: str) -> int:
        """Delete every record of owner; returns how many were removed"""
        with self._lock:
            records = self._load(owner_id)
            if not records:
                return 0
            self._save(owner_id, [])

        logger.info(f"Deleted all memories for owner: count={len(records)}")
        return len(records)

    def count(self, owner_id: str) -> int:
        with self._lock:
            return len(self._load(owner_id))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _owner_file(self, owner_id: str) -> Path:
        if not owner_id:
            raise ValueError("owner_id is required")
        key = hashlib.sha256(owner_id.encode()).hexdigest()
        return self.memory_dir / f"{key}.json"

    def _load(self, owner_id: str) -> List[Dict[str, Any]]:
        owner_file = self._owner_file(owner_id)
        if not owner_file.exists():
            return []

        try:
            with open(owner_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read memory file {owner_file.name}: {e}", exc_info=True)
            raise StoreError("Failed to read memories") from e

        if data.get("owner") != owner_id:
            logger.error(f"Owner mismatch in memory file {owner_file.name}")
            raise StoreError("Memory file does not belong to owner")

        return data.get("memories", [])

    def _save(self, owner_id: str, records: List[Dict[str, Any]]):
        owner_file = self._owner_file(owner_id)
        data = {"owner": owner_id, "memories": records}

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.memory_dir, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, owner_file)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            logger.error(f"Failed to write memory file {owner_file.name}: {e}", exc_info=True)
            raise StoreError("Failed to write memories") from e

        logger.debug(f"Memory file written: {owner_file.name} ({len(records)} records)")

    @staticmethod
    def _check_id(memory_id: str):
        if not isinstance(memory_id, str) or not _ID_PATTERN.match(memory_id):
            raise NotFoundError()

    @staticmethod
    def _index_of(records: List[Dict[str, Any]], memory_id: str) -> int:
        for i, record in enumerate(records):
            if record["_id"] == memory_id:
                return i
        raise NotFoundError()


_memory_store: Optional[MemoryStore] = None


def get_memory_store() -> MemoryStore:
    """Get or create the process-wide store"""
    global _memory_store
    if _memory_store is None:
        _memory_store = MemoryStore()
    return _memory_store
