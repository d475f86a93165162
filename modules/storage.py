"""
Persistence layer for trading partners, products and settings.

Backed by MongoDB, or by a local JSON file when no MongoDB URI is configured.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from .config import DATA_DIR, MONGODB_DB, MONGODB_URI, PERSISTENCE_BACKEND


logger = logging.getLogger(__name__)

JSON_PATH = DATA_DIR / "app.json"

PARTNER_ROLES = ("sold_by", "sold_to", "ship_from", "ship_to")

PRODUCT_FIELDS = (
    "gtin",
    "ndc",
    "product_description",
    "proprietary_name",
    "strength",
    "dosage_form",
    "container_size",
    "manufacturer",
)

_client: Optional[MongoClient] = None


def _utc_now() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat(timespec="microseconds") + "Z"


def _get_client() -> MongoClient:
    global _client
    if _client is None:
        if not MONGODB_URI:
            raise ValueError("MONGODB_URI is required for MongoDB backend.")
        _client = MongoClient(MONGODB_URI)
    return _client


def get_db():
    return _get_client()[MONGODB_DB]


def backend_name() -> str:
    if PERSISTENCE_BACKEND:
        return PERSISTENCE_BACKEND.strip().lower()
    if not MONGODB_URI:
        return "json"
    return "mongodb"


def _empty_payload() -> Dict[str, Any]:
    return {"partners": [], "products": [], "settings": {}}


def _json_load() -> Dict[str, Any]:
    JSON_PATH.parent.mkdir(parents=True, exist_ok=True)
    if not JSON_PATH.exists():
        return _empty_payload()
    with JSON_PATH.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    for key, default in _empty_payload().items():
        payload.setdefault(key, default)
    return payload


def _json_save(payload: Dict[str, Any]) -> None:
    JSON_PATH.parent.mkdir(parents=True, exist_ok=True)
    with JSON_PATH.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=True, indent=2)


def _strip_id(doc: Dict[str, Any]) -> Dict[str, Any]:
    doc = dict(doc)
    doc.pop("_id", None)
    return doc


def init_db() -> None:
    if backend_name() == "json":
        _json_save(_json_load())
        return
    db = get_db()
    db.partners.create_index([("role", ASCENDING), ("gln", ASCENDING)], unique=True)
    db.partners.create_index([("role", ASCENDING), ("name", ASCENDING)])
    db.products.create_index("gtin", unique=True)
    db.products.create_index("created_at")
    db.settings.create_index("key", unique=True)


def check_connection() -> bool:
    if backend_name() == "json":
        return True
    try:
        _get_client().admin.command("ping")
        return True
    except PyMongoError:
        return False


def set_setting(key: str, value: Any) -> None:
    if backend_name() == "json":
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
    if backend_name() == "json":
        payload = _json_load()
        return payload.get("settings", {}).get(key, default)
    db = get_db()
    doc = db.settings.find_one({"_id": key})
    if not doc:
        return default
    return doc.get("value", default)


# Partners


def list_partners() -> List[Dict[str, Any]]:
    """All partners, ordered by role then name."""
    if backend_name() == "json":
        payload = _json_load()
        partners = sorted(
            payload["partners"],
            key=lambda p: (p.get("role", ""), p.get("name", "")),
        )
        return [dict(p) for p in partners]
    db = get_db()
    cursor = db.partners.find().sort([("role", ASCENDING), ("name", ASCENDING)])
    return [_strip_id(doc) for doc in cursor]


def upsert_partner(role: str, name: str, gln: str) -> str:
    """
    Add a partner, or rename the existing partner with the same role and GLN.

    Returns:
        The partner id
    """
    if role not in PARTNER_ROLES:
        raise ValueError(f"Unknown partner role: {role}")
    if backend_name() == "json":
        payload = _json_load()
        for partner in payload["partners"]:
            if partner.get("role") == role and partner.get("gln") == gln:
                partner["name"] = name
                _json_save(payload)
                return partner["id"]
        partner_id = str(uuid4())
        payload["partners"].append(
            {"id": partner_id, "role": role, "name": name, "gln": gln, "created_at": _utc_now()}
        )
        _json_save(payload)
        logger.info("Added %s partner %s (%s)", role, name, gln)
        return partner_id
    db = get_db()
    partner_id = str(uuid4())
    db.partners.update_one(
        {"role": role, "gln": gln},
        {
            "$set": {"name": name},
            "$setOnInsert": {"_id": partner_id, "id": partner_id, "created_at": _utc_now()},
        },
        upsert=True,
    )
    doc = db.partners.find_one({"role": role, "gln": gln})
    return doc["id"] if doc else partner_id


def get_partner(partner_id: str) -> Optional[Dict[str, Any]]:
    if backend_name() == "json":
        payload = _json_load()
        for partner in payload["partners"]:
            if partner.get("id") == partner_id:
                return dict(partner)
        return None
    doc = get_db().partners.find_one({"_id": partner_id})
    return _strip_id(doc) if doc else None


def delete_partner(partner_id: str) -> None:
    if backend_name() == "json":
        payload = _json_load()
        payload["partners"] = [p for p in payload["partners"] if p.get("id") != partner_id]
        _json_save(payload)
        return
    get_db().partners.delete_one({"_id": partner_id})


# Products


def list_products() -> List[Dict[str, Any]]:
    """All products, most recently created first."""
    if backend_name() == "json":
        payload = _json_load()
        products = sorted(
            payload["products"],
            key=lambda p: p.get("created_at", ""),
            reverse=True,
        )
        return [dict(p) for p in products]
    db = get_db()
    cursor = db.products.find().sort("created_at", DESCENDING)
    return [_strip_id(doc) for doc in cursor]


def upsert_product(product: Dict[str, Any]) -> str:
    """
    Insert or replace the product with the same GTIN.

    The original creation time is kept on update.
    """
    gtin = str(product.get("gtin") or "").strip()
    if not gtin:
        raise ValueError("Product GTIN is required.")
    fields = {key: product.get(key) or "" for key in PRODUCT_FIELDS}
    fields["gtin"] = gtin
    fields["updated_at"] = _utc_now()
    if backend_name() == "json":
        payload = _json_load()
        for existing in payload["products"]:
            if existing.get("gtin") == gtin:
                existing.update(fields)
                _json_save(payload)
                return gtin
        fields["created_at"] = fields["updated_at"]
        payload["products"].append(fields)
        _json_save(payload)
        logger.info("Added product %s", gtin)
        return gtin
    get_db().products.update_one(
        {"_id": gtin},
        {"$set": fields, "$setOnInsert": {"created_at": fields["updated_at"]}},
        upsert=True,
    )
    return gtin


def get_product(gtin: str) -> Optional[Dict[str, Any]]:
    if not gtin:
        return None
    if backend_name() == "json":
        payload = _json_load()
        for product in payload["products"]:
            if product.get("gtin") == gtin:
                return dict(product)
        return None
    doc = get_db().products.find_one({"_id": gtin})
    return _strip_id(doc) if doc else None


def delete_product(gtin: str) -> None:
    if backend_name() == "json":
        payload = _json_load()
        payload["products"] = [p for p in payload["products"] if p.get("gtin") != gtin]
        _json_save(payload)
        return
    get_db().products.delete_one({"_id": gtin})
