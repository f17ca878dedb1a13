"""
Persistence layer for saved label sets and QR sets.

Backends: a local JSON file (default) or MongoDB when MONGODB_URI is set.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from pymongo import DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from .exceptions import LabelStorageError
from .logger import get_logger
from .models import ORIENTATIONS, LabelRecord, QrEntry, SavedLabelSet, SavedQrSet


logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("DUN_LABELS_DATA_DIR", str(BASE_DIR / "data")))
JSON_PATH = DATA_DIR / "label_sets.json"
PERSISTENCE_BACKEND = os.getenv("PERSISTENCE_BACKEND", "")
MONGODB_URI = os.getenv("MONGODB_URI", "")
MONGODB_DB = os.getenv("MONGODB_DB", "DunLabels")

LABEL_SETS_KEY = "label_sets"
QR_SETS_KEY = "qr_sets"

_client: Optional[MongoClient] = None


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _get_client() -> MongoClient:
    global _client
    if _client is None:
        if not MONGODB_URI:
            raise LabelStorageError("MONGODB_URI is required for MongoDB backend.")
        _client = MongoClient(MONGODB_URI)
    return _client


def get_db():
    return _get_client()[MONGODB_DB]


def _backend() -> str:
    if PERSISTENCE_BACKEND:
        return PERSISTENCE_BACKEND.strip().lower()
    if not MONGODB_URI:
        return "json"
    return "mongodb"


def _empty_payload() -> Dict[str, Any]:
    return {LABEL_SETS_KEY: [], QR_SETS_KEY: [], "settings": {}}


def _json_load() -> Dict[str, Any]:
    if not JSON_PATH.exists():
        return _empty_payload()
    try:
        with JSON_PATH.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as exc:
        raise LabelStorageError(f"Label store is corrupt: {JSON_PATH}") from exc
    for key, default in _empty_payload().items():
        payload.setdefault(key, default)
    return payload


def _json_save(payload: Dict[str, Any]) -> None:
    JSON_PATH.parent.mkdir(parents=True, exist_ok=True)
    with JSON_PATH.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def init_db() -> None:
    if _backend() == "json":
        _json_save(_json_load())
        return
    db = get_db()
    db[LABEL_SETS_KEY].create_index("id", unique=True)
    db[LABEL_SETS_KEY].create_index("createdAt")
    db[QR_SETS_KEY].create_index("id", unique=True)
    db[QR_SETS_KEY].create_index("createdAt")
    db.settings.create_index("key", unique=True)


def check_connection() -> bool:
    if _backend() == "json":
        return True
    try:
        _get_client().admin.command("ping")
        return True
    except PyMongoError:
        return False


def set_setting(key: str, value: Any) -> None:
    if _backend() == "json":
        payload = _json_load()
        payload["settings"][key] = value
        _json_save(payload)
        return
    db = get_db()
    db.settings.update_one(
        {"_id": key},
        {"$set": {"key": key, "value": value}},
        upsert=True,
    )


def get_setting(key: str, default: Any = None) -> Any:
    if _backend() == "json":
        payload = _json_load()
        return payload.get("settings", {}).get(key, default)
    db = get_db()
    doc = db.settings.find_one({"_id": key})
    if not doc:
        return default
    return doc.get("value", default)


def _check_set_args(name: str, orientation: str) -> str:
    name = (name or "").strip()
    if not name:
        raise LabelStorageError("A name is required to save a set.")
    if orientation not in ORIENTATIONS:
        raise LabelStorageError(f"Invalid orientation: {orientation!r}")
    return name


def _insert(collection: str, doc: Dict[str, Any]) -> None:
    if _backend() == "json":
        payload = _json_load()
        payload[collection].append(doc)
        _json_save(payload)
        return
    db = get_db()
    db[collection].insert_one({"_id": doc["id"], **doc})


def _list(collection: str) -> List[Dict[str, Any]]:
    if _backend() == "json":
        payload = _json_load()
        docs = sorted(
            payload.get(collection, []),
            key=lambda d: d.get("createdAt", ""),
            reverse=True,
        )
        return [dict(d) for d in docs]
    db = get_db()
    cursor = db[collection].find().sort("createdAt", DESCENDING)
    docs = []
    for doc in cursor:
        doc.pop("_id", None)
        docs.append(doc)
    return docs


def _find(collection: str, set_id: str) -> Optional[Dict[str, Any]]:
    if _backend() == "json":
        payload = _json_load()
        for doc in payload.get(collection, []):
            if doc.get("id") == set_id:
                return dict(doc)
        return None
    db = get_db()
    doc = db[collection].find_one({"_id": set_id})
    if not doc:
        return None
    doc.pop("_id", None)
    return doc


def _delete(collection: str, set_id: str) -> None:
    if _backend() == "json":
        payload = _json_load()
        payload[collection] = [d for d in payload.get(collection, []) if d.get("id") != set_id]
        _json_save(payload)
        return
    db = get_db()
    db[collection].delete_one({"_id": set_id})


def save_label_set(
    name: str,
    labels: Iterable[LabelRecord],
    orientation: str = "portrait",
) -> SavedLabelSet:
    """Persist a named set of labels and return it with its generated id."""
    name = _check_set_args(name, orientation)
    label_set = SavedLabelSet(
        id=str(uuid4()),
        name=name,
        labels=list(labels),
        created_at=_utc_now(),
        orientation=orientation,
    )
    _insert(LABEL_SETS_KEY, label_set.to_dict())
    logger.info("Saved label set %r (%s) with %d labels", name, label_set.id, len(label_set.labels))
    return label_set


def get_saved_label_sets() -> List[SavedLabelSet]:
    """All saved label sets, newest first."""
    return [SavedLabelSet.from_dict(doc) for doc in _list(LABEL_SETS_KEY)]


def load_label_set(set_id: str) -> Optional[SavedLabelSet]:
    doc = _find(LABEL_SETS_KEY, set_id)
    return SavedLabelSet.from_dict(doc) if doc else None


def delete_label_set(set_id: str) -> None:
    _delete(LABEL_SETS_KEY, set_id)
    logger.info("Deleted label set %s", set_id)


def save_qr_set(
    name: str,
    qr_list: Iterable[QrEntry],
    orientation: str = "portrait",
    settings: Optional[Dict[str, Any]] = None,
) -> SavedQrSet:
    """Persist a named QR list together with the card settings used to print it."""
    name = _check_set_args(name, orientation)
    qr_set = SavedQrSet(
        id=str(uuid4()),
        name=name,
        qr_list=list(qr_list),
        created_at=_utc_now(),
        orientation=orientation,
        settings=dict(settings or {}),
    )
    _insert(QR_SETS_KEY, qr_set.to_dict())
    logger.info("Saved QR set %r (%s) with %d entries", name, qr_set.id, len(qr_set.qr_list))
    return qr_set


def get_saved_qr_sets() -> List[SavedQrSet]:
    return [SavedQrSet.from_dict(doc) for doc in _list(QR_SETS_KEY)]


def load_qr_set(set_id: str) -> Optional[SavedQrSet]:
    doc = _find(QR_SETS_KEY, set_id)
    return SavedQrSet.from_dict(doc) if doc else None


def delete_qr_set(set_id: str) -> None:
    _delete(QR_SETS_KEY, set_id)
    logger.info("Deleted QR set %s", set_id)
