import json
import logging
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

import redis

from tasklist.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

FIELDS = ("id", "title", "color", "completed", "deleted")


def _encode(fields: Dict[str, Any]) -> Record:
    encoded = {}
    for key, value in fields.items():
        if isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, Enum):
            value = value.value
        encoded[key] = value
    return encoded


class RedisTaskStore:
    """Task records kept in Redis.

    Each task is a JSON document at ``{namespace}:{id}``. A sorted set at
    ``{namespace}s:index`` holds every id, scored by a counter at
    ``{namespace}s:seq``, so listings come back in creation order.
    """

    def __init__(self, client: redis.Redis, namespace: str = "task"):
        self._client = client
        self._namespace = namespace
        self._index_key = f"{namespace}s:index"
        self._seq_key = f"{namespace}s:seq"

    def _key(self, task_id: str) -> str:
        return f"{self._namespace}:{task_id}"

    @staticmethod
    def _new_record(fields: Dict[str, Any]) -> Record:
        record: Record = {name: None for name in FIELDS}
        record.update(_encode(fields))
        if not record["id"]:
            record["id"] = str(uuid.uuid4())
        return record

    def count(self) -> int:
        return self._client.zcard(self._index_key)

    def find_many(self, **where: Any) -> List[Record]:
        ids = self._client.zrange(self._index_key, 0, -1)
        if not ids:
            return []
        raw = self._client.mget([self._key(task_id) for task_id in ids])
        expected = _encode(where)
        records = []
        for item in raw:
            if item is None:
                continue
            record = json.loads(item)
            if all(record.get(k) == v for k, v in expected.items()):
                records.append(record)
        return records

    def find_unique(self, task_id: str) -> Optional[Record]:
        raw = self._client.get(self._key(task_id))
        if raw is None:
            return None
        return json.loads(raw)

    def create(self, fields: Dict[str, Any]) -> Record:
        record = self._new_record(fields)
        score = self._client.incr(self._seq_key)
        with self._client.pipeline(transaction=True) as p:
            p.set(self._key(record["id"]), json.dumps(record), nx=True)
            p.zadd(self._index_key, {record["id"]: score}, nx=True)
            created, _ = p.execute()
        if not created:
            raise ConflictError(f"Task {record['id']} already exists")
        return record

    def create_many(self, records: Iterable[Dict[str, Any]]) -> int:
        records = list(records)
        if not records:
            return 0
        base = self._client.incrby(self._seq_key, len(records)) - len(records)
        with self._client.pipeline(transaction=True) as p:
            for offset, fields in enumerate(records, start=1):
                record = self._new_record(fields)
                p.set(self._key(record["id"]), json.dumps(record), nx=True)
                p.zadd(self._index_key, {record["id"]: base + offset}, nx=True)
            results = p.execute()
        # results alternate set/zadd replies
        return sum(1 for created in results[::2] if created)

    def update(self, task_id: str, fields: Dict[str, Any],
               where: Optional[Dict[str, Any]] = None) -> Record:
        """Merge ``fields`` into a stored record.

        ``where`` is checked inside the same WATCH transaction; a record that
        is missing or does not match raises NotFoundError.
        """
        key = self._key(task_id)
        expected = _encode(where or {})

        def _apply(pipe):
            raw = pipe.get(key)
            record = json.loads(raw) if raw is not None else None
            if record is None or any(record.get(k) != v for k, v in expected.items()):
                raise NotFoundError("Task not found")
            record.update(_encode(fields))
            record["id"] = task_id
            pipe.multi()
            pipe.set(key, json.dumps(record))
            return record

        return self._client.transaction(_apply, key, value_from_callable=True)

    def upsert(self, task_id: str, update: Dict[str, Any], create: Dict[str, Any]) -> Record:
        key = self._key(task_id)

        def _apply(pipe):
            raw = pipe.get(key)
            score = None
            if raw is None:
                record = self._new_record({**create, "id": task_id})
                score = pipe.incr(self._seq_key)
            else:
                record = json.loads(raw)
                record.update(_encode(update))
                record["id"] = task_id
            pipe.multi()
            pipe.set(key, json.dumps(record))
            if score is not None:
                pipe.zadd(self._index_key, {task_id: score})
            return record

        return self._client.transaction(_apply, key, value_from_callable=True)

    def delete_many(self) -> int:
        ids = self._client.zrange(self._index_key, 0, -1)
        with self._client.pipeline(transaction=True) as p:
            for task_id in ids:
                p.delete(self._key(task_id))
            p.delete(self._index_key, self._seq_key)
            p.execute()
        logger.info("Removed %d task records", len(ids))
        return len(ids)
