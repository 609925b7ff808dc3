"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db
from app.repositories.note_repo import COLLECTION as NOTE_COLL
from app.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("notegraph.mongo.bootstrap")


USER_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["username", "email", "password_hash", "notes", "created_at", "updated_at"],
    "properties": {
        "username": {"bsonType": "string", "minLength": 1},
        "email": {"bsonType": "string", "minLength": 1, "description": "lowercase"},
        "password_hash": {"bsonType": "string"},
        "notes": {"bsonType": "array", "items": {"bsonType": "objectId"}},
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}

NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["title", "content", "author", "tags", "created_at", "updated_at"],
    "properties": {
        "title": {"bsonType": "string", "minLength": 1},
        "content": {"bsonType": "string", "minLength": 1},
        "author": {"bsonType": "objectId"},
        "tags": {"bsonType": "array", "items": {"bsonType": "string"}},
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if name not in db.list_collection_names():
            if validator:
                db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                db.create_collection(name)
        elif validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        opts = dict(ix)
        keys = opts.pop("keys")
        try:
            coll.create_index(keys, **opts)
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garantiza colecciones, validadores e índices mínimos.
    """
    _collmod_or_create(USER_COLL, USER_VALIDATOR)
    _ensure_indexes(
        USER_COLL,
        [
            {"keys": [("username", 1)], "unique": True, "name": "uniq_username"},
            {"keys": [("email", 1)], "unique": True, "name": "uniq_email"},
        ],
    )

    _collmod_or_create(NOTE_COLL, NOTE_VALIDATOR)
    _ensure_indexes(
        NOTE_COLL,
        [
            {"keys": [("tags", 1)], "name": "ix_tags"},
            {"keys": [("author", 1)], "name": "ix_author"},
        ],
    )
    _log.info("Colecciones e índices verificados")
